from __future__ import annotations

import logging

from flask import Blueprint, current_app, jsonify
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

import db as db_
from app.utils.datetime import iso_utc_now
from marks.bs_date import today_bs

core_bp = Blueprint("core", __name__)


def ping_db() -> bool:
    if db_.engine is None:
        return False
    try:
        with db_.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError:
        logging.getLogger("api").warning("health: database ping failed", exc_info=True)
        return False


@core_bp.get("/health")
def health():
    ok = ping_db()
    cfg = current_app.config["CFG"]
    status = 200 if ok else 503
    return (
        jsonify(
            {
                "status": "ok" if ok else "degraded",
                "time": iso_utc_now(),
                "todayBS": today_bs(cfg.APP_TIMEZONE).format(),
                "version": cfg.APP_VERSION,
                "db": "ok" if ok else "error",
            }
        ),
        status,
    )


@core_bp.get("/version")
def version():
    cfg = current_app.config["CFG"]
    return jsonify({"version": cfg.APP_VERSION, "env": cfg.APP_ENV, "time": iso_utc_now()})
