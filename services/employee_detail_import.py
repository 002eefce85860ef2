"""
Import of the HR system's Excel exports.

* Employee detail report: one sheet holding, per employee, an ``Employee No:``
  banner followed by titled sections (``Assignment Details:``,
  ``Absent Details:``, ``Leave Details:``, ...), each with its own header row.
* Service detail report: one row per employee, header on row 5.

Rows that cannot be read are logged and skipped; one bad row never aborts a file.
"""
from __future__ import annotations

import argparse
import logging
import os
import re
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Sequence

from dotenv import load_dotenv
from openpyxl import load_workbook
from sqlalchemy import delete, select

import db as db_
from actions.reference_repo import load_reference_data
from cache_layer import SCORECARD_NAMESPACE, cache_invalidate_prefix, namespace_prefix
from config import Config
from marks.bs_date import parse_bs
from marks.calculator import backfill_geographical_marks
from marks.excel_dates import normalize_excel_date
from marks.records import Absence, Assignment, Leave, latest_assignment, normalize_gender
from marks.synthetic import add_synthetic_assignments
from models import AbsentDetail, AssignmentDetail, Employee, LeaveDetail
from utils import iso_utc_now

log = logging.getLogger("import.employee")

SECTION_ASSIGNMENT = "assignment"
SECTION_ABSENT = "absent"
SECTION_LEAVE = "leave"

_EMPLOYEE_NO_RE = re.compile(r"^\s*employee\s*no\.?\s*:\s*(\d+)", re.IGNORECASE)
_SECTION_TITLES = {
    "assignmentdetails": SECTION_ASSIGNMENT,
    "absentdetails": SECTION_ABSENT,
    "absencedetails": SECTION_ABSENT,
    "leavedetails": SECTION_LEAVE,
}

ASSIGNMENT_COLUMNS = {
    "position": "position",
    "jobs": "jobs",
    "function": "function",
    "empcategory": "emp_category",
    "emptype": "emp_type",
    "workoffice": "work_office",
    "startdatebs": "start_date_bs",
    "startdate": "start_date_bs",
    "enddatebs": "end_date_bs",
    "enddate": "end_date_bs",
    "senioritydatebs": "seniority_date_bs",
    "senioritydate": "seniority_date_bs",
    "level": "level",
    "permleveldatebs": "perm_level_date_bs",
    "permleveldate": "perm_level_date_bs",
    "reason": "reason_for_position",
    "reasonforposition": "reason_for_position",
}

ABSENT_COLUMNS = {
    "fromdatebs": "from_date_bs",
    "fromdate": "from_date_bs",
    "datefrom": "from_date_bs",
    "todatebs": "to_date_bs",
    "todate": "to_date_bs",
    "dateto": "to_date_bs",
    "duration": "duration",
    "remarks": "remarks",
    "remark": "remarks",
}

LEAVE_COLUMNS = {
    **ABSENT_COLUMNS,
    "leavetype": "leave_type",
    "type": "leave_type",
}

_COLUMNS_BY_SECTION = {
    SECTION_ASSIGNMENT: ASSIGNMENT_COLUMNS,
    SECTION_ABSENT: ABSENT_COLUMNS,
    SECTION_LEAVE: LEAVE_COLUMNS,
}

_DATE_FIELDS = {
    "start_date_bs",
    "end_date_bs",
    "seniority_date_bs",
    "perm_level_date_bs",
    "from_date_bs",
    "to_date_bs",
}


def header_key(value: Any) -> str:
    return re.sub(r"[^a-z0-9]", "", str(value or "").lower())


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def _is_blank(row: Sequence[Any]) -> bool:
    return all(_cell_text(v) == "" for v in row)


def _first_text(row: Sequence[Any]) -> str:
    for v in row:
        s = _cell_text(v)
        if s:
            return s
    return ""


def _is_title_row(row: Sequence[Any]) -> bool:
    texts = [_cell_text(v) for v in row if _cell_text(v)]
    return len(texts) == 1 and texts[0].endswith(":")


def _as_int(value: Any, default: int = 0) -> int:
    try:
        return int(float(_cell_text(value)))
    except ValueError:
        return default


def _as_float(value: Any, default: float = 0.0) -> float:
    try:
        return float(_cell_text(value) or default)
    except ValueError:
        return default


@dataclass
class EmployeeDetail:
    employee_id: int
    assignments: list[Assignment] = field(default_factory=list)
    absences: list[Absence] = field(default_factory=list)
    leaves: list[Leave] = field(default_factory=list)


def _map_row(header: dict[int, str], row: Sequence[Any]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for idx, name in header.items():
        raw = row[idx] if idx < len(row) else None
        if name in _DATE_FIELDS:
            out[name] = normalize_excel_date(raw)
        else:
            out[name] = raw
    return out


def _build_assignment(emp_id: int, values: dict[str, Any]) -> Optional[Assignment]:
    start = values.get("start_date_bs") or ""
    if not start:
        return None
    return Assignment(
        employee_id=emp_id,
        start_date_bs=start,
        end_date_bs=values.get("end_date_bs") or None,
        position=_cell_text(values.get("position")),
        jobs=_cell_text(values.get("jobs")),
        function=_cell_text(values.get("function")),
        emp_category=_cell_text(values.get("emp_category")),
        emp_type=_cell_text(values.get("emp_type")),
        work_office=_cell_text(values.get("work_office")),
        level=_as_int(values.get("level")),
        seniority_date_bs=values.get("seniority_date_bs") or None,
        perm_level_date_bs=values.get("perm_level_date_bs") or None,
        reason_for_position=_cell_text(values.get("reason_for_position")) or None,
    )


def _build_absence(emp_id: int, values: dict[str, Any], cls=Absence):
    start = values.get("from_date_bs") or ""
    end = values.get("to_date_bs") or start
    if not start:
        return None
    kwargs: dict[str, Any] = {
        "employee_id": emp_id,
        "from_date_bs": start,
        "to_date_bs": end,
        "duration": _as_float(values.get("duration")),
        "remarks": _cell_text(values.get("remarks")) or None,
    }
    if cls is Leave:
        kwargs["leave_type"] = _cell_text(values.get("leave_type"))
    return cls(**kwargs)


def parse_employee_detail_rows(rows: Iterable[Sequence[Any]]) -> list[EmployeeDetail]:
    """
    Walk the raw sheet rows. Assignments come back in sheet order with the
    synthetic pre-level rows already folded in.
    """
    employees: list[EmployeeDetail] = []
    current: Optional[EmployeeDetail] = None
    section: Optional[str] = None
    header: Optional[dict[int, str]] = None

    for row_no, row in enumerate(rows, start=1):
        row = list(row or [])
        if _is_blank(row):
            continue
        first = _first_text(row)

        m = _EMPLOYEE_NO_RE.match(first)
        if m:
            current = EmployeeDetail(employee_id=int(m.group(1)))
            employees.append(current)
            section, header = None, None
            continue

        if _is_title_row(row):
            section = _SECTION_TITLES.get(header_key(first))
            header = None
            continue

        if current is None or section is None:
            continue

        if header is None:
            columns = _COLUMNS_BY_SECTION[section]
            header = {idx: columns[header_key(v)] for idx, v in enumerate(row) if header_key(v) in columns}
            if not header:
                log.warning("Row %s: no known columns in %s header", row_no, section)
                section = None
            continue

        try:
            values = _map_row(header, row)
            if section == SECTION_ASSIGNMENT:
                item = _build_assignment(current.employee_id, values)
                target: list = current.assignments
            elif section == SECTION_ABSENT:
                item = _build_absence(current.employee_id, values)
                target = current.absences
            else:
                item = _build_absence(current.employee_id, values, Leave)
                target = current.leaves
        except (TypeError, ValueError) as e:
            log.warning("Row %s: skipped unreadable %s row (%s)", row_no, section, e)
            continue
        if item is None:
            log.warning("Row %s: skipped %s row without a start date", row_no, section)
            continue
        target.append(item)

    for emp in employees:
        emp.assignments = add_synthetic_assignments(emp.assignments)
    return employees


def _read_rows(source, *, min_row: int = 1) -> list[tuple]:
    wb = load_workbook(source, read_only=True, data_only=True)
    try:
        ws = wb.worksheets[0]
        return [tuple(r) for r in ws.iter_rows(min_row=min_row, values_only=True)]
    finally:
        wb.close()


def read_employee_detail_workbook(source) -> list[EmployeeDetail]:
    return parse_employee_detail_rows(_read_rows(source))


def save_employee_details(db, details: Sequence[EmployeeDetail]) -> dict[str, int]:
    """Replace each employee's assignment/absence/leave rows and backfill geographical marks."""
    reference = load_reference_data(db)
    now = iso_utc_now()
    counts = {"employees": 0, "assignments": 0, "absences": 0, "leaves": 0}

    for detail in details:
        emp_id = detail.employee_id
        emp = db.execute(select(Employee).where(Employee.employeeId == emp_id)).scalar_one_or_none()
        if not emp:
            latest = latest_assignment(detail.assignments)
            emp = Employee(
                employeeId=emp_id,
                level=latest.level if latest else 0,
                seniorityDateBS=(latest.seniority_date_bs or "") if latest else "",
                workOffice=latest.work_office if latest else "",
                createdAt=now,
            )
            db.add(emp)
        emp.updatedAt = now

        db.execute(delete(AssignmentDetail).where(AssignmentDetail.employeeId == emp_id))
        db.execute(delete(AbsentDetail).where(AbsentDetail.employeeId == emp_id))
        db.execute(delete(LeaveDetail).where(LeaveDetail.employeeId == emp_id))

        geo = backfill_geographical_marks(detail.assignments, normalize_gender(emp.sex), reference)
        for order, (a, g) in enumerate(zip(detail.assignments, geo)):
            db.add(
                AssignmentDetail(
                    employeeId=emp_id,
                    rowOrder=order,
                    startDateBS=a.start_date_bs,
                    endDateBS=a.end_date_bs,
                    position=a.position,
                    jobs=a.jobs,
                    function=a.function,
                    empCategory=a.emp_category,
                    empType=a.emp_type,
                    workOffice=a.work_office,
                    level=a.level,
                    seniorityDateBS=a.seniority_date_bs,
                    permLevelDateBS=a.perm_level_date_bs,
                    reasonForPosition=a.reason_for_position,
                    synthetic=a.synthetic,
                    totalGeographicalMarks=g.total_geographical_marks,
                    numDaysOld=g.num_days_old,
                    numDaysNew=g.num_days_new,
                    totalNumDays=g.total_num_days,
                )
            )
        for ab in detail.absences:
            db.add(
                AbsentDetail(
                    employeeId=emp_id,
                    fromDateBS=ab.from_date_bs,
                    toDateBS=ab.to_date_bs,
                    duration=ab.duration,
                    remarks=ab.remarks,
                )
            )
        for lv in detail.leaves:
            db.add(
                LeaveDetail(
                    employeeId=emp_id,
                    leaveType=lv.leave_type,
                    fromDateBS=lv.from_date_bs,
                    toDateBS=lv.to_date_bs,
                    duration=lv.duration,
                    remarks=lv.remarks,
                )
            )

        counts["employees"] += 1
        counts["assignments"] += len(detail.assignments)
        counts["absences"] += len(detail.absences)
        counts["leaves"] += len(detail.leaves)

    db.flush()
    cache_invalidate_prefix(namespace_prefix(SCORECARD_NAMESPACE))
    log.info("employee detail import %s", counts)
    return counts


SERVICE_DETAIL_HEADER_ROW = 5

SERVICE_COLUMNS = {
    "empno": "employee_id",
    "fullname": "name",
    "dateofbirth": "dob",
    "senioritydate": "seniority_date",
    "levelno": "level",
    "sex": "sex",
    "qualification": "education",
    "workoffice": "work_office",
}


@dataclass(frozen=True)
class ServiceRecord:
    employee_id: int
    name: str
    dob_bs: str
    seniority_date_bs: str
    level: int = 0
    sex: str = ""
    education: str = ""
    work_office: str = ""


def parse_service_detail_rows(rows: Iterable[Sequence[Any]]) -> list[ServiceRecord]:
    """``rows`` starts at the header row."""
    it = iter(rows)
    header_row = next(it, None)
    if header_row is None:
        return []
    header = {idx: SERVICE_COLUMNS[header_key(v)] for idx, v in enumerate(header_row) if header_key(v) in SERVICE_COLUMNS}

    out: list[ServiceRecord] = []
    for row_no, row in enumerate(it, start=SERVICE_DETAIL_HEADER_ROW + 1):
        row = list(row or [])
        if _is_blank(row):
            continue
        values = {name: (row[idx] if idx < len(row) else None) for idx, name in header.items()}
        emp_id = _as_int(values.get("employee_id"))
        name = _cell_text(values.get("name"))
        if not emp_id or not name:
            continue
        dob = normalize_excel_date(values.get("dob"))
        seniority = normalize_excel_date(values.get("seniority_date"))
        if parse_bs(seniority) is None:
            log.warning("Row %s: skipping employee %s due to invalid seniority date %r", row_no, emp_id, seniority)
            continue
        out.append(
            ServiceRecord(
                employee_id=emp_id,
                name=name,
                dob_bs=dob,
                seniority_date_bs=seniority,
                level=_as_int(values.get("level")),
                sex=_cell_text(values.get("sex")),
                education=_cell_text(values.get("education")),
                work_office=_cell_text(values.get("work_office")),
            )
        )
    return out


def read_service_detail_workbook(source) -> list[ServiceRecord]:
    return parse_service_detail_rows(_read_rows(source, min_row=SERVICE_DETAIL_HEADER_ROW))


def save_service_records(db, records: Sequence[ServiceRecord]) -> int:
    now = iso_utc_now()
    for r in records:
        emp = db.execute(select(Employee).where(Employee.employeeId == r.employee_id)).scalar_one_or_none()
        if not emp:
            emp = Employee(employeeId=r.employee_id, createdAt=now)
            db.add(emp)
        emp.name = r.name
        emp.dobBS = r.dob_bs
        emp.seniorityDateBS = r.seniority_date_bs
        emp.level = r.level
        emp.sex = r.sex
        emp.education = r.education
        emp.workOffice = r.work_office
        emp.updatedAt = now
    db.flush()
    cache_invalidate_prefix(namespace_prefix(SCORECARD_NAMESPACE))
    log.info("service detail import employees=%s", len(records))
    return len(records)


def resolve_source_path(path: str, upload_dir: str) -> str:
    if os.path.exists(path):
        return path
    candidate = os.path.join(upload_dir or "", path)
    if os.path.exists(candidate):
        return candidate
    raise SystemExit(f"File not found: {path}")


def main():
    parser = argparse.ArgumentParser(description="Import employee detail / service detail Excel reports.")
    parser.add_argument("file", help="Path to the .xlsx export (relative paths also tried under UPLOAD_DIR).")
    parser.add_argument(
        "--kind",
        choices=["detail", "service"],
        default="detail",
        help="detail: employee detail report (assignments/absences/leaves); service: service detail report.",
    )
    args = parser.parse_args()

    load_dotenv()
    cfg = Config()
    logging.basicConfig(level=cfg.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s %(message)s")
    engine = db_.init_engine(cfg.DATABASE_URL)

    from models import Base  # ensure models are registered

    Base.metadata.create_all(bind=engine)

    path = resolve_source_path(args.file, cfg.UPLOAD_DIR)
    session = db_.SessionLocal()
    try:
        if args.kind == "service":
            total = save_service_records(session, read_service_detail_workbook(path))
            session.commit()
            print(f"Imported/updated employees: {total}")
        else:
            counts = save_employee_details(session, read_employee_detail_workbook(path))
            session.commit()
            print(f"Imported: {counts}")
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


if __name__ == "__main__":
    main()
