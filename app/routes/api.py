from __future__ import annotations

import logging
from typing import Any

from flask import Blueprint, current_app, g, jsonify, request

import db as db_
from actions import dispatch
from utils import ApiError, err, ok, parse_json_body

api_bp = Blueprint("api", __name__)

log = logging.getLogger("api")


@api_bp.post("/api")
def api_route():
    cfg = current_app.config["CFG"]
    raw = request.get_data(as_text=True)
    db = None
    action_u = ""
    data: Any = {}

    try:
        body = parse_json_body(raw)
        action_u = str(body.get("action") or "").upper().strip()
        data = body.get("data") or {}
        if not action_u:
            raise ApiError("BAD_REQUEST", "Missing action")
        if not isinstance(data, dict):
            raise ApiError("BAD_REQUEST", "data must be an object")

        db = db_.SessionLocal()
        out = dispatch(action_u, data, db, cfg)
        db.commit()

        log.info("request_id=%s action=%s", getattr(g, "request_id", ""), action_u)
        payload, status = ok(out)
        return jsonify(payload), status
    except ApiError as e:
        if db is not None:
            db.rollback()
        log.info("request_id=%s action=%s error=%s %s", getattr(g, "request_id", ""), action_u, e.code, e.message)
        payload, status = err(e.code, e.message, http_status=e.http_status)
        return jsonify(payload), status
    except Exception:
        if db is not None:
            db.rollback()
        log.exception("request_id=%s action=%s", getattr(g, "request_id", ""), action_u)
        payload, status = err("INTERNAL", "Unexpected error")
        return jsonify(payload), status
    finally:
        if db is not None:
            db.close()
