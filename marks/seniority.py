from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable

from marks.bs_date import YMD, fixed_ymd, parse_bs, span_days
from marks.calculator import SENIORITY_RATE, SegmentMarks, marks_from_rate, seniority_marks
from marks.partition import collect_breaks, partition_interval
from marks.records import Absence, Leave


class ChronologyError(ValueError):
    pass


@dataclass(frozen=True)
class SenioritySegment:
    start_date_bs: str
    end_date_bs: str
    total_num_days: int
    ymd: YMD
    is_break: bool = False
    remarks: Any = None
    marks: SegmentMarks = field(default_factory=SegmentMarks)

    def to_dict(self) -> dict[str, Any]:
        out = {
            "startDateBS": self.start_date_bs,
            "endDateBS": self.end_date_bs,
            "totalNumDays": self.total_num_days,
            "years": self.ymd.years,
            "months": self.ymd.months,
            "days": self.ymd.days,
            "isBreak": self.is_break,
            "remarks": self.remarks,
        }
        out.update(self.marks.as_dict())
        return out


@dataclass(frozen=True)
class SeniorityTimeline:
    seniority_date_bs: str
    evaluation_end_bs: str
    segments: list[SenioritySegment]
    counted_days: int
    elapsed: YMD
    summary: SegmentMarks

    @property
    def seniority_marks(self) -> float:
        return self.summary.total_marks

    def to_dict(self) -> dict[str, Any]:
        return {
            "seniorityDateBS": self.seniority_date_bs,
            "evaluationEndDateBS": self.evaluation_end_bs,
            "countedDays": self.counted_days,
            "yearsElapsed": self.elapsed.years,
            "monthsElapsed": self.elapsed.months,
            "daysElapsed": self.elapsed.days,
            "seniorityMarks": self.summary.total_marks,
            "yearMarks": self.summary.year_marks,
            "monthMarks": self.summary.month_marks,
            "daysMarks": self.summary.days_marks,
            "segments": [s.to_dict() for s in self.segments],
        }


def build_seniority_timeline(
    seniority_date: Any,
    evaluation_end: Any,
    absences: Iterable[Absence] = (),
    leaves: Iterable[Leave] = (),
) -> SeniorityTimeline:
    """
    Whole-career seniority from ``seniority_date`` to ``evaluation_end``.

    No era split here; counted time is broken down with 365-day years and
    30.44-day months and scored at the fixed seniority rate.
    """
    start = parse_bs(seniority_date)
    end = parse_bs(evaluation_end)
    if start is None:
        raise ChronologyError(f"Invalid seniority date: {seniority_date!r}")
    if end is None:
        raise ChronologyError(f"Invalid evaluation end date: {evaluation_end!r}")
    if end < start:
        raise ChronologyError(f"Seniority date {start} is after evaluation end {end}")

    segments: list[SenioritySegment] = []
    for span in partition_interval(start, end, collect_breaks(absences, leaves)):
        days = span_days(span.start, span.end)
        ymd = fixed_ymd(days)
        segments.append(
            SenioritySegment(
                start_date_bs=span.start,
                end_date_bs=span.end,
                total_num_days=days,
                ymd=ymd,
                is_break=span.is_break,
                remarks=span.remarks,
                marks=seniority_marks(ymd, span.is_break),
            )
        )

    counted = sum(s.total_num_days for s in segments if not s.is_break)
    elapsed = fixed_ymd(counted)
    return SeniorityTimeline(
        seniority_date_bs=start.format(),
        evaluation_end_bs=end.format(),
        segments=segments,
        counted_days=counted,
        elapsed=elapsed,
        summary=marks_from_rate(elapsed, SENIORITY_RATE),
    )
