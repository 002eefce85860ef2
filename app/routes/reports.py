from __future__ import annotations

from io import BytesIO

from flask import Blueprint, current_app, request, send_file

import db as db_
from actions.employee_repo import require_employee
from actions.employees import employee_timeline, seniority_for
from app.reports.excel import build_timeline_workbook_bytes
from utils import ApiError, require_employee_id

reports_bp = Blueprint("reports", __name__)


@reports_bp.get("/timeline.xlsx")
def timeline_xlsx():
    cfg = current_app.config["CFG"]
    args = {k: v for k, v in request.args.items()}

    db = db_.SessionLocal()
    try:
        try:
            emp_id = require_employee_id(args)
            emp = require_employee(db, emp_id)
            timeline = employee_timeline(args, db, cfg)
        except ApiError as e:
            # Downloads signal failure through the HTTP status.
            e.http_status = 404 if e.code == "NOT_FOUND" else 400
            raise
        try:
            seniority = seniority_for(emp, args, db, cfg)
            seniority_error = ""
        except ApiError as e:
            seniority, seniority_error = None, e.message

        xlsx_bytes = build_timeline_workbook_bytes(
            employee=timeline["employee"],
            timeline=timeline,
            seniority=seniority,
            seniority_error=seniority_error,
            timezone_display=cfg.APP_TIMEZONE,
        )
    finally:
        db.close()

    filename = f"timeline_{emp_id}_{timeline['todayBS']}.xlsx"
    return send_file(
        BytesIO(xlsx_bytes),
        as_attachment=True,
        download_name=filename,
        mimetype="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    )
