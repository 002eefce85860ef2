"""
Marks formulas.

Timeline scoring and the per-assignment backfill disagree on missing
reference data: the timeline scores 0, the backfill uses a neutral 1.
Both behaviours are relied on downstream, so each keeps its own lookup.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Sequence

from marks.bs_date import YMD, span_days
from marks.era import NEW, OLD, split_at_cutoff
from marks.records import Assignment
from marks.reference import ReferenceData

OLD_PRESENCE_THRESHOLD = 90
NEW_PRESENCE_THRESHOLD = 233
NEW_FLAT_RATE = 1.75
SENIORITY_RATE = 3.75
MONTHS_PER_YEAR = 12
DAYS_PER_YEAR = 365

LEGACY_NEUTRAL_MARKS = 1.0


@dataclass(frozen=True)
class SegmentMarks:
    marks_year: float = 0.0
    year_marks: float = 0.0
    month_marks: float = 0.0
    days_marks: float = 0.0
    total_marks: float = 0.0

    def as_dict(self) -> dict[str, float]:
        return {
            "marksYear": self.marks_year,
            "yearMarks": self.year_marks,
            "monthMarks": self.month_marks,
            "daysMarks": self.days_marks,
            "totalMarks": self.total_marks,
        }


ZERO_MARKS = SegmentMarks()


def marks_from_rate(ymd: YMD, rate: float) -> SegmentMarks:
    if not rate:
        return ZERO_MARKS
    year_marks = ymd.years * rate
    month_marks = ymd.months * (rate / MONTHS_PER_YEAR)
    days_marks = ymd.days * (rate / DAYS_PER_YEAR)
    return SegmentMarks(
        marks_year=rate,
        year_marks=year_marks,
        month_marks=month_marks,
        days_marks=days_marks,
        total_marks=year_marks + month_marks + days_marks,
    )


def old_category_marks(category: Optional[str], gender: Optional[str], reference: ReferenceData) -> float:
    """Old-scheme lookup; female falls back to male, unknown gender scores nothing."""
    if gender is None or not category:
        return 0.0
    value = reference.marks_for(category, OLD, gender)
    if value is None and gender == "female":
        value = reference.marks_for(category, OLD, "male")
    return float(value or 0.0)


def old_era_rate(
    category: Optional[str],
    prior_category: Optional[str],
    present_days: int,
    gender: Optional[str],
    reference: ReferenceData,
) -> float:
    if present_days < OLD_PRESENCE_THRESHOLD:
        # Too short a stay to earn its own category: carry back the previous one.
        return old_category_marks(prior_category, gender, reference)
    return old_category_marks(category, gender, reference)


def new_era_rate(category: Optional[str], present_days: int, reference: ReferenceData) -> float:
    if present_days < NEW_PRESENCE_THRESHOLD:
        return NEW_FLAT_RATE
    if not category:
        return 0.0
    return float(reference.marks_for(category, NEW, None) or 0.0)


def score_segment(
    ymd: YMD,
    era: str,
    present_days: int,
    category: Optional[str],
    prior_category: Optional[str],
    gender: Optional[str],
    reference: ReferenceData,
    is_break: bool = False,
) -> SegmentMarks:
    if is_break:
        return ZERO_MARKS
    if era == OLD:
        rate = old_era_rate(category, prior_category, present_days, gender, reference)
    else:
        rate = new_era_rate(category, present_days, reference)
    return marks_from_rate(ymd, rate)


def seniority_marks(ymd: YMD, is_break: bool = False) -> SegmentMarks:
    if is_break:
        return ZERO_MARKS
    return marks_from_rate(ymd, SENIORITY_RATE)


def geographical_marks(office: Any, era_type: str, gender: Optional[str], reference: ReferenceData) -> float:
    """Per-year rate for an office on the backfill path; unresolved lookups give 1."""
    district, category = reference.resolve(office)
    if district is None or category is None:
        return LEGACY_NEUTRAL_MARKS
    if era_type == OLD:
        value = reference.marks_for(category, OLD, gender)
        if value is None and gender == "female":
            value = reference.marks_for(category, OLD, "male")
    else:
        value = reference.marks_for(category, NEW, None)
    return LEGACY_NEUTRAL_MARKS if value is None else float(value)


def marks_acc_old(
    days: int,
    present_days: int,
    office: Any,
    gender: Optional[str],
    reference: ReferenceData,
    previous_office: Any = None,
) -> float:
    lookup_office = previous_office if present_days < OLD_PRESENCE_THRESHOLD and previous_office else office
    return geographical_marks(lookup_office, OLD, gender, reference) * days / DAYS_PER_YEAR


def marks_acc_new(days: int, present_days: int, office: Any, reference: ReferenceData) -> float:
    if present_days < NEW_PRESENCE_THRESHOLD:
        rate = NEW_FLAT_RATE
    else:
        rate = geographical_marks(office, NEW, None, reference)
    return rate * days / DAYS_PER_YEAR


@dataclass(frozen=True)
class AssignmentGeoMarks:
    total_geographical_marks: float = 0.0
    num_days_old: int = 0
    num_days_new: int = 0
    total_num_days: int = 0

    def as_dict(self) -> dict[str, Any]:
        return {
            "totalGeographicalMarks": self.total_geographical_marks,
            "numDaysOld": self.num_days_old,
            "numDaysNew": self.num_days_new,
            "totalNumDays": self.total_num_days,
        }


def assignment_geographical_marks(
    start: Any,
    end: Any,
    office: Any,
    gender: Optional[str],
    reference: ReferenceData,
    previous_office: Any = None,
) -> AssignmentGeoMarks:
    """
    Backfill figures for one assignment row. Presence is the assignment's own
    inclusive length; each era side is scored on its day count.
    """
    split = split_at_cutoff(start, end)
    if split is None:
        return AssignmentGeoMarks()

    total_days = span_days(start, end)
    num_old = span_days(*split.old_part) if split.old_part else 0
    num_new = span_days(*split.new_part) if split.new_part else 0

    total = 0.0
    if num_old:
        total += marks_acc_old(num_old, total_days, office, gender, reference, previous_office)
    if num_new:
        total += marks_acc_new(num_new, total_days, office, reference)

    return AssignmentGeoMarks(
        total_geographical_marks=round(total, 2),
        num_days_old=num_old,
        num_days_new=num_new,
        total_num_days=total_days,
    )


def backfill_geographical_marks(
    assignments: Sequence[Assignment],
    gender: Optional[str],
    reference: ReferenceData,
) -> list[AssignmentGeoMarks]:
    """Per-row backfill in sheet order; rows without both dates stay at zero."""
    out: list[AssignmentGeoMarks] = []
    previous_office = None
    for a in assignments:
        out.append(
            assignment_geographical_marks(
                a.start_date_bs,
                a.end_date_bs,
                a.work_office,
                gender,
                reference,
                previous_office=previous_office or a.work_office,
            )
        )
        previous_office = a.work_office
    return out
