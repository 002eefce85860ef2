"""
Assignment timeline: every assignment split at the policy cutoff, cut around
absences and non-standard leaves, then scored segment by segment.

Presence days are folded in order, since a segment's carry-back category
depends on the segment before it.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Sequence

from marks.bs_date import BSDate, parse_bs, span_days, span_ymd
from marks.calculator import SegmentMarks, score_segment
from marks.era import OLD, split_at_cutoff
from marks.partition import collect_breaks, partition_interval
from marks.records import Absence, Assignment, Leave
from marks.reference import ReferenceData, normalize_key

log = logging.getLogger("marks.timeline")


@dataclass(frozen=True)
class Segment:
    start_date_bs: str
    end_date_bs: str
    era: str
    years: int = 0
    months: int = 0
    days: int = 0
    total_num_days: int = 0
    is_break: bool = False
    remarks: Optional[str] = None
    work_office: str = ""
    district: Optional[str] = None
    category: Optional[str] = None
    level: int = 0
    position: str = ""
    synthetic: bool = False
    present_days: int = 0
    marks: SegmentMarks = field(default_factory=SegmentMarks)

    @property
    def before_break(self) -> bool:
        return self.era == OLD

    @property
    def total_marks(self) -> float:
        return self.marks.total_marks

    def to_dict(self) -> dict[str, Any]:
        out = {
            "startDateBS": self.start_date_bs,
            "endDateBS": self.end_date_bs,
            "years": self.years,
            "months": self.months,
            "days": self.days,
            "totalNumDays": self.total_num_days,
            "beforeBreak": self.before_break,
            "isBreak": self.is_break,
            "remarks": self.remarks,
            "workOffice": self.work_office,
            "district": self.district,
            "category": self.category,
            "level": self.level,
            "position": self.position,
            "synthetic": self.synthetic,
            "presentDays": self.present_days,
        }
        out.update(self.marks.as_dict())
        return out


@dataclass(frozen=True)
class _Resolved:
    assignment: Assignment
    start: BSDate
    end: BSDate


def resolve_end_dates(
    assignments: Sequence[Assignment],
    *,
    today: BSDate,
    default_end: Optional[BSDate] = None,
) -> list[_Resolved]:
    """
    Chronological assignments with concrete end dates.

    An open end on the last assignment runs to ``default_end`` (or today); an
    open end on an earlier one stops the day before the next start.
    """
    dated = []
    for a in assignments:
        start = parse_bs(a.start_date_bs)
        if start is None:
            log.warning("Skipping assignment with invalid start date %r (employee %s)", a.start_date_bs, a.employee_id)
            continue
        dated.append((start, a))
    dated.sort(key=lambda t: t[0])

    out: list[_Resolved] = []
    for idx, (start, a) in enumerate(dated):
        end = parse_bs(a.end_date_bs)
        if end is None:
            if idx + 1 < len(dated):
                end = dated[idx + 1][0].day_before()
            else:
                end = default_end or today
        if end < start:
            log.warning(
                "Skipping assignment %s..%s ending before it starts (employee %s)",
                start,
                end,
                a.employee_id,
            )
            continue
        out.append(_Resolved(a, start, end))
    return out


def _in_level_range(level: int, level_range: Optional[tuple[int, int]]) -> bool:
    if not level_range:
        return True
    lo, hi = level_range
    return lo <= level <= hi


def build_timeline(
    assignments: Iterable[Assignment],
    absences: Iterable[Absence] = (),
    leaves: Iterable[Leave] = (),
    *,
    gender: Optional[str],
    reference: ReferenceData,
    today: Any,
    level_range: Optional[tuple[int, int]] = None,
    default_end: Any = None,
) -> list[Segment]:
    today_d = parse_bs(today)
    if today_d is None:
        raise ValueError(f"Invalid BS date for today: {today!r}")
    resolved = resolve_end_dates(list(assignments), today=today_d, default_end=parse_bs(default_end))
    breaks = collect_breaks(absences, leaves)

    segments: list[Segment] = []
    prior_category: Optional[str] = None
    streak_key: Optional[str] = None
    streak_days = 0

    for r in resolved:
        a = r.assignment
        if not _in_level_range(a.level, level_range):
            continue
        district, category = reference.resolve(a.work_office)
        split = split_at_cutoff(r.start, r.end)
        if split is None:
            continue
        for era, part_start, part_end in split.parts():
            for span in partition_interval(part_start, part_end, breaks):
                ymd = span_ymd(span.start, span.end)
                days = span_days(span.start, span.end)

                if span.is_break:
                    present = 0
                    streak_key = None
                    streak_days = 0
                else:
                    key = normalize_key(category)
                    if streak_key is not None and key == streak_key:
                        streak_days += days
                    else:
                        streak_key = key
                        streak_days = days
                    present = streak_days

                marks = score_segment(
                    ymd,
                    era,
                    present,
                    category,
                    prior_category,
                    gender,
                    reference,
                    is_break=span.is_break,
                )
                segments.append(
                    Segment(
                        start_date_bs=span.start,
                        end_date_bs=span.end,
                        era=era,
                        years=ymd.years,
                        months=ymd.months,
                        days=ymd.days,
                        total_num_days=days,
                        is_break=span.is_break,
                        remarks=span.remarks,
                        work_office=a.work_office,
                        district=district,
                        category=category,
                        level=a.level,
                        position=a.position,
                        synthetic=a.synthetic,
                        present_days=present,
                        marks=marks,
                    )
                )
                prior_category = category
    return segments


def timeline_summary(segments: Sequence[Segment]) -> dict[str, Any]:
    counted = [s for s in segments if not s.is_break]
    return {
        "segments": len(segments),
        "countedDays": sum(s.total_num_days for s in counted),
        "breakDays": sum(s.total_num_days for s in segments if s.is_break),
        "totalMarks": sum(s.total_marks for s in segments),
    }
