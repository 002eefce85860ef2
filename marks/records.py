from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Sequence

from marks.bs_date import parse_bs


def _text(value: Any) -> str:
    return str(value if value is not None else "").strip()


def _opt_text(value: Any) -> Optional[str]:
    s = _text(value)
    return s or None


def _int(value: Any, default: int = 0) -> int:
    try:
        return int(float(str(value).strip()))
    except (TypeError, ValueError):
        return default


def _pick(src: Any, *names: str) -> Any:
    for name in names:
        if isinstance(src, dict):
            if name in src:
                return src[name]
        elif hasattr(src, name):
            return getattr(src, name)
    return None


@dataclass(frozen=True)
class Assignment:
    employee_id: int
    start_date_bs: str
    end_date_bs: Optional[str] = None
    position: str = ""
    jobs: str = ""
    function: str = ""
    emp_category: str = ""
    emp_type: str = ""
    work_office: str = ""
    level: int = 0
    seniority_date_bs: Optional[str] = None
    perm_level_date_bs: Optional[str] = None
    reason_for_position: Optional[str] = None
    synthetic: bool = False

    @classmethod
    def from_source(cls, src: Any) -> "Assignment":
        """Build from a dict (camelCase or snake_case keys) or an ORM row."""
        return cls(
            employee_id=_int(_pick(src, "employeeId", "employee_id")),
            start_date_bs=_text(_pick(src, "startDateBS", "start_date_bs")),
            end_date_bs=_opt_text(_pick(src, "endDateBS", "end_date_bs")),
            position=_text(_pick(src, "position")),
            jobs=_text(_pick(src, "jobs")),
            function=_text(_pick(src, "function")),
            emp_category=_text(_pick(src, "empCategory", "emp_category")),
            emp_type=_text(_pick(src, "empType", "emp_type")),
            work_office=_text(_pick(src, "workOffice", "work_office")),
            level=_int(_pick(src, "level")),
            seniority_date_bs=_opt_text(_pick(src, "seniorityDateBS", "seniority_date_bs")),
            perm_level_date_bs=_opt_text(_pick(src, "permLevelDateBS", "perm_level_date_bs")),
            reason_for_position=_opt_text(_pick(src, "reasonForPosition", "reason_for_position")),
            synthetic=bool(_pick(src, "synthetic") or False),
        )

    def to_dict(self) -> dict:
        return {
            "employeeId": self.employee_id,
            "startDateBS": self.start_date_bs,
            "endDateBS": self.end_date_bs,
            "position": self.position,
            "jobs": self.jobs,
            "function": self.function,
            "empCategory": self.emp_category,
            "empType": self.emp_type,
            "workOffice": self.work_office,
            "level": self.level,
            "seniorityDateBS": self.seniority_date_bs,
            "permLevelDateBS": self.perm_level_date_bs,
            "reasonForPosition": self.reason_for_position,
            "synthetic": self.synthetic,
        }


@dataclass(frozen=True)
class Absence:
    employee_id: int
    from_date_bs: str
    to_date_bs: str
    duration: float = 0
    remarks: Optional[str] = None

    @classmethod
    def from_source(cls, src: Any) -> "Absence":
        try:
            duration = float(_pick(src, "duration") or 0)
        except (TypeError, ValueError):
            duration = 0
        return cls(
            employee_id=_int(_pick(src, "employeeId", "employee_id")),
            from_date_bs=_text(_pick(src, "fromDateBS", "from_date_bs")),
            to_date_bs=_text(_pick(src, "toDateBS", "to_date_bs")),
            duration=duration,
            remarks=_opt_text(_pick(src, "remarks")),
        )

    def to_dict(self) -> dict:
        return {
            "employeeId": self.employee_id,
            "fromDateBS": self.from_date_bs,
            "toDateBS": self.to_date_bs,
            "duration": self.duration,
            "remarks": self.remarks,
        }


@dataclass(frozen=True)
class Leave(Absence):
    leave_type: str = ""

    @classmethod
    def from_source(cls, src: Any) -> "Leave":
        base = Absence.from_source(src)
        return cls(
            employee_id=base.employee_id,
            from_date_bs=base.from_date_bs,
            to_date_bs=base.to_date_bs,
            duration=base.duration,
            remarks=base.remarks,
            leave_type=_text(_pick(src, "leaveType", "leave_type")),
        )

    @property
    def is_non_standard(self) -> bool:
        return " ".join(self.leave_type.split()).upper() == "NON STANDARD"

    def to_dict(self) -> dict:
        out = super().to_dict()
        out["leaveType"] = self.leave_type
        return out


def normalize_gender(value: Any) -> Optional[str]:
    s = _text(value).lower()
    if s in {"m", "male"}:
        return "male"
    if s in {"f", "female"}:
        return "female"
    return None


def latest_assignment(assignments: Sequence[Assignment]) -> Optional[Assignment]:
    """The assignment with the latest valid start date."""
    dated = [(parse_bs(a.start_date_bs), a) for a in assignments]
    dated = [t for t in dated if t[0] is not None]
    if not dated:
        return None
    return max(dated, key=lambda t: t[0])[1]
