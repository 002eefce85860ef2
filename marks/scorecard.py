from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

from marks.records import Absence, Assignment, Leave, latest_assignment
from marks.reference import ReferenceData
from marks.seniority import ChronologyError, build_seniority_timeline
from marks.timeline import build_timeline

log = logging.getLogger("marks.scorecard")


@dataclass(frozen=True)
class ApplicantRecord:
    employee_id: int
    name: str = ""
    gender: Optional[str] = None
    level: int = 0
    seniority_date_bs: Optional[str] = None
    dob_bs: str = ""
    working_office: str = ""
    assignments: Sequence[Assignment] = field(default_factory=tuple)
    absences: Sequence[Absence] = field(default_factory=tuple)
    leaves: Sequence[Leave] = field(default_factory=tuple)


def score_applicant(
    applicant: ApplicantRecord,
    *,
    evaluation_end: Any,
    reference: ReferenceData,
    today: Any,
) -> dict[str, Any]:
    current = latest_assignment(applicant.assignments)
    card: dict[str, Any] = {
        "employeeId": applicant.employee_id,
        "name": applicant.name,
        "level": applicant.level,
        "gender": applicant.gender,
        "currentPosition": current.position if current else "",
        "workingOffice": applicant.working_office,
        "dobBS": applicant.dob_bs,
        "seniorityDateBS": applicant.seniority_date_bs or "",
        "seniority": None,
        "seniorityMarks": 0.0,
        "geographicalMarks": 0.0,
        "assignments": [],
        "error": None,
    }
    try:
        seniority = build_seniority_timeline(
            applicant.seniority_date_bs,
            evaluation_end,
            applicant.absences,
            applicant.leaves,
        )
    except ChronologyError as e:
        log.warning("Seniority not computed for employee %s: %s", applicant.employee_id, e)
        card["error"] = str(e)
    else:
        card["seniority"] = seniority.to_dict()
        card["seniorityMarks"] = seniority.seniority_marks

    segments = build_timeline(
        applicant.assignments,
        applicant.absences,
        applicant.leaves,
        gender=applicant.gender,
        reference=reference,
        today=today,
        level_range=(applicant.level, applicant.level) if applicant.level else None,
        default_end=evaluation_end,
    )
    card["assignments"] = [s.to_dict() for s in segments]
    card["geographicalMarks"] = sum(s.total_marks for s in segments)
    card["totalMarks"] = card["seniorityMarks"] + card["geographicalMarks"]
    return card


def rank_scorecards(cards: list[dict[str, Any]]) -> list[dict[str, Any]]:
    ordered = sorted(cards, key=lambda c: (-float(c.get("totalMarks") or 0), int(c.get("employeeId") or 0)))
    for idx, card in enumerate(ordered, start=1):
        card["rank"] = idx
    return ordered
