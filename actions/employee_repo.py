from __future__ import annotations

from typing import Optional

from sqlalchemy import select

from marks.records import Absence, Assignment, Leave
from models import AbsentDetail, AssignmentDetail, Employee, LeaveDetail
from utils import ApiError


def get_employee(db, employee_id: int) -> Optional[Employee]:
    return db.execute(select(Employee).where(Employee.employeeId == employee_id)).scalar_one_or_none()


def require_employee(db, employee_id: int) -> Employee:
    emp = get_employee(db, employee_id)
    if not emp:
        raise ApiError("NOT_FOUND", f"Employee {employee_id} not found")
    return emp


def assignment_rows(db, employee_id: int) -> list[AssignmentDetail]:
    q = (
        select(AssignmentDetail)
        .where(AssignmentDetail.employeeId == employee_id)
        .order_by(AssignmentDetail.rowOrder.asc(), AssignmentDetail.id.asc())
    )
    return list(db.execute(q).scalars().all())


def load_assignments(db, employee_id: int) -> list[Assignment]:
    return [Assignment.from_source(r) for r in assignment_rows(db, employee_id)]


def load_absences(db, employee_id: int) -> list[Absence]:
    q = select(AbsentDetail).where(AbsentDetail.employeeId == employee_id).order_by(AbsentDetail.id.asc())
    return [Absence.from_source(r) for r in db.execute(q).scalars().all()]


def load_leaves(db, employee_id: int) -> list[Leave]:
    q = select(LeaveDetail).where(LeaveDetail.employeeId == employee_id).order_by(LeaveDetail.id.asc())
    return [Leave.from_source(r) for r in db.execute(q).scalars().all()]


def employee_to_dict(emp: Employee) -> dict:
    return {
        "employeeId": emp.employeeId,
        "name": emp.name or "",
        "dobBS": emp.dobBS or "",
        "seniorityDateBS": emp.seniorityDateBS or "",
        "level": int(emp.level or 0),
        "sex": emp.sex or "",
        "education": emp.education or "",
        "workOffice": emp.workOffice or "",
    }
