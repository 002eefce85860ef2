from __future__ import annotations

from pathlib import Path

from openpyxl import Workbook
from sqlalchemy import select

from db import SessionLocal
from models import AbsentDetail, AssignmentDetail, Employee, LeaveDetail
from services.employee_detail_import import (
    parse_employee_detail_rows,
    parse_service_detail_rows,
    read_employee_detail_workbook,
    read_service_detail_workbook,
    save_employee_details,
    save_service_records,
)

ASSIGNMENT_HEADER = [
    "Position",
    "Jobs",
    "Function",
    "Emp Category",
    "Emp Type",
    "Work Office",
    "Start Date BS",
    "End Date BS",
    "Seniority Date BS",
    "Level",
    "Reason",
]

DETAIL_ROWS = [
    ["Employee No: 101"],
    ["Assignment Details:"],
    ASSIGNMENT_HEADER,
    ["Nayab Subba", "Admin", "General", "Civil", "Permanent", "District Office Humla", "2070/01/01", "2076/08/12", "2070/01/01", 5, "Transfer"],
    ["Section Officer", "Account", "General", "Civil", "Permanent", "District Office Kathmandu", "2078/04/07", None, "2076/08/13", 6, "Promotion"],
    [],
    ["Absent Details:"],
    ["From Date", "To Date", "Duration", "Remarks"],
    ["2078/06/01", "2078/06/10", 10, "Unpaid"],
    ["Leave Details:"],
    ["Leave Type", "From Date", "To Date", "Duration", "Remarks"],
    ["Non Standard", "2079/02/01", "2079/02/03", 3, None],
    ["Casual", "2079/05/01", "2079/05/02", "two", None],
    ["Employee No: 102"],
    ["Training Details:"],
    ["Course", "From Date"],
    ["Excel basics", "2075/01/01"],
    ["Assignment Details:"],
    ASSIGNMENT_HEADER,
    ["Kharidar", "", "", "", "", "District Office Humla", None, None, None, 4, None],
    ["Kharidar", "", "", "", "", "District Office Humla", "2075/01/01", None, "2075/01/01", 4, None],
]

SERVICE_HEADER = ["Emp No", "Full Name", "Date of Birth", "Seniority Date", "Level No", "Sex", "Qualification", "Work Office"]
SERVICE_ROWS = [
    SERVICE_HEADER,
    [101, "Ram Bahadur", "2040/01/01", "2078/01/01", 5, "M", "Bachelor", "District Office Kathmandu"],
    [102, "Sita Kumari", "2045/02/02", "not a date", 4, "F", "Master", "District Office Humla"],
    [None, None, None, None, None, None, None, None],
]


def _write_workbook(path: Path, rows) -> Path:
    wb = Workbook()
    ws = wb.active
    for row in rows:
        ws.append(row)
    wb.save(path)
    return path


def test_parse_detail_rows_groups_sections_per_employee():
    details = parse_employee_detail_rows(DETAIL_ROWS)
    assert [d.employee_id for d in details] == [101, 102]

    first = details[0]
    assert [a.synthetic for a in first.assignments] == [False, True, False]
    synthetic = first.assignments[1]
    assert (synthetic.start_date_bs, synthetic.end_date_bs) == ("2076-08-13", "2078-04-06")
    assert synthetic.work_office == "District Office Humla"
    assert first.assignments[2].end_date_bs is None

    assert [(a.from_date_bs, a.to_date_bs, a.remarks) for a in first.absences] == [("2078-06-01", "2078-06-10", "Unpaid")]
    assert [lv.is_non_standard for lv in first.leaves] == [True, False]
    assert first.leaves[1].duration == 0.0

    second = details[1]
    assert [a.start_date_bs for a in second.assignments] == ["2075-01-01"]
    assert second.absences == []


def test_workbook_import_replaces_rows(app_client, tmp_path):
    _app, _client = app_client
    path = _write_workbook(tmp_path / "detail.xlsx", DETAIL_ROWS)
    details = read_employee_detail_workbook(path)

    db = SessionLocal()
    try:
        counts = save_employee_details(db, details)
        db.commit()
        assert counts == {"employees": 2, "assignments": 4, "absences": 1, "leaves": 2}

        # A second import of the same file must not duplicate anything.
        save_employee_details(db, details)
        db.commit()

        rows = (
            db.execute(select(AssignmentDetail).where(AssignmentDetail.employeeId == 101).order_by(AssignmentDetail.rowOrder))
            .scalars()
            .all()
        )
        assert [r.synthetic for r in rows] == [False, True, False]
        assert rows[0].numDaysNew == 0
        # No reference data loaded, so the neutral rate applies.
        assert rows[0].totalGeographicalMarks == round(rows[0].totalNumDays / 365, 2)

        emp = db.execute(select(Employee).where(Employee.employeeId == 101)).scalar_one()
        assert emp.level == 6
        assert emp.seniorityDateBS == "2076-08-13"

        assert len(db.execute(select(AbsentDetail)).scalars().all()) == 1
        assert len(db.execute(select(LeaveDetail)).scalars().all()) == 2
    finally:
        db.close()


def test_parse_service_rows_skips_invalid_seniority():
    records = parse_service_detail_rows(SERVICE_ROWS)
    assert [r.employee_id for r in records] == [101]
    assert records[0].seniority_date_bs == "2078-01-01"
    assert records[0].dob_bs == "2040-01-01"
    assert records[0].level == 5


def test_service_workbook_updates_employees(app_client, tmp_path):
    _app, _client = app_client
    preamble = [["Service Detail Report"], ["Ministry"], [], ["Printed on 2080-01-01"]]
    path = _write_workbook(tmp_path / "service.xlsx", preamble + SERVICE_ROWS)

    records = read_service_detail_workbook(path)
    assert len(records) == 1

    db = SessionLocal()
    try:
        assert save_service_records(db, records) == 1
        db.commit()
        emp = db.execute(select(Employee).where(Employee.employeeId == 101)).scalar_one()
        assert emp.name == "Ram Bahadur"
        assert emp.sex == "M"
        assert emp.workOffice == "District Office Kathmandu"
    finally:
        db.close()
