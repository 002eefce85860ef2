from __future__ import annotations

import logging
from typing import Any, Optional

from sqlalchemy import select

from actions.employee_repo import (
    assignment_rows,
    employee_to_dict,
    load_absences,
    load_assignments,
    load_leaves,
    require_employee,
)
from actions.reference_repo import load_reference_data
from cache_layer import SCORECARD_NAMESPACE, cache_invalidate_prefix, namespace_prefix
from marks.bs_date import BSDate, parse_bs, today_bs
from marks.calculator import backfill_geographical_marks
from marks.records import Assignment, normalize_gender
from marks.seniority import ChronologyError, build_seniority_timeline
from marks.timeline import build_timeline, timeline_summary
from models import Employee
from utils import ApiError, require_employee_id

log = logging.getLogger("api")


def resolve_today(data, cfg) -> BSDate:
    raw = (data or {}).get("todayBS")
    if raw:
        d = parse_bs(raw)
        if d is None:
            raise ApiError("BAD_REQUEST", f"Invalid todayBS: {raw}")
        return d
    return today_bs(cfg.APP_TIMEZONE)


def _optional_bs(data, key: str) -> Optional[BSDate]:
    raw = str((data or {}).get(key) or "").strip()
    if not raw:
        return None
    d = parse_bs(raw)
    if d is None:
        raise ApiError("BAD_REQUEST", f"Invalid {key}: {raw}")
    return d


def _level_range(data) -> Optional[tuple[int, int]]:
    lo = (data or {}).get("levelFrom")
    hi = (data or {}).get("levelTo")
    if lo in (None, "") and hi in (None, ""):
        return None
    try:
        lo_i = int(lo) if lo not in (None, "") else 0
        hi_i = int(hi) if hi not in (None, "") else 99
    except (TypeError, ValueError):
        raise ApiError("BAD_REQUEST", "levelFrom/levelTo must be integers")
    if lo_i > hi_i:
        raise ApiError("BAD_REQUEST", "levelFrom must not exceed levelTo")
    return lo_i, hi_i


def employee_timeline(data, db, cfg):
    emp_id = require_employee_id(data)
    emp = require_employee(db, emp_id)
    today = resolve_today(data, cfg)

    segments = build_timeline(
        load_assignments(db, emp_id),
        load_absences(db, emp_id),
        load_leaves(db, emp_id),
        gender=normalize_gender(emp.sex),
        reference=load_reference_data(db),
        today=today,
        level_range=_level_range(data),
        default_end=_optional_bs(data, "endDateBS"),
    )
    return {
        "employee": employee_to_dict(emp),
        "todayBS": today.format(),
        "segments": [s.to_dict() for s in segments],
        "summary": timeline_summary(segments),
    }


def seniority_for(emp: Employee, data, db, cfg) -> dict[str, Any]:
    seniority_date = str((data or {}).get("seniorityDateBS") or emp.seniorityDateBS or "").strip()
    evaluation_end = _optional_bs(data, "evaluationEndDateBS") or resolve_today(data, cfg)
    try:
        timeline = build_seniority_timeline(
            seniority_date,
            evaluation_end,
            load_absences(db, emp.employeeId),
            load_leaves(db, emp.employeeId),
        )
    except ChronologyError as e:
        raise ApiError("BAD_REQUEST", str(e))
    return timeline.to_dict()


def employee_seniority(data, db, cfg):
    emp_id = require_employee_id(data)
    emp = require_employee(db, emp_id)
    out = seniority_for(emp, data, db, cfg)
    out["employee"] = employee_to_dict(emp)
    return out


def refresh_geographical_marks(db, emp: Employee) -> int:
    rows = assignment_rows(db, emp.employeeId)
    results = backfill_geographical_marks(
        [Assignment.from_source(r) for r in rows],
        normalize_gender(emp.sex),
        load_reference_data(db),
    )
    for row, res in zip(rows, results):
        row.totalGeographicalMarks = res.total_geographical_marks
        row.numDaysOld = res.num_days_old
        row.numDaysNew = res.num_days_new
        row.totalNumDays = res.total_num_days
    return len(rows)


def employee_geo_marks_refresh(data, db, cfg):
    if bool((data or {}).get("all")):
        employees = list(db.execute(select(Employee).order_by(Employee.employeeId.asc())).scalars().all())
    else:
        employees = [require_employee(db, require_employee_id(data))]

    updated = 0
    for emp in employees:
        updated += refresh_geographical_marks(db, emp)
    cache_invalidate_prefix(namespace_prefix(SCORECARD_NAMESPACE))
    log.info("geo marks refreshed employees=%s assignments=%s", len(employees), updated)
    return {"employees": len(employees), "assignments": updated}
