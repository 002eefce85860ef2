"""
Split a base date interval around break intervals.

Callers pass inclusive ``[start, end]`` BS ranges; the walk itself runs on
half-open ordinal ranges so touching boundaries never yield empty spans.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Optional, Sequence

from marks.bs_date import BSDate, parse_bs
from marks.records import Absence, Leave

DEFAULT_ABSENCE_REMARK = "Absent"
DEFAULT_LEAVE_REMARK = "Non Standard Leave"


@dataclass(frozen=True)
class Break:
    start: Any
    end: Any
    remarks: Optional[str] = None


@dataclass(frozen=True)
class Span:
    start: str
    end: str
    is_break: bool = False
    remarks: Optional[str] = None

    @property
    def start_date(self) -> Optional[BSDate]:
        return parse_bs(self.start)

    @property
    def end_date(self) -> Optional[BSDate]:
        return parse_bs(self.end)


def collect_breaks(absences: Iterable[Absence], leaves: Iterable[Leave]) -> list[Break]:
    """Every absence plus the NON STANDARD leaves; other leave types keep counting."""
    out: list[Break] = []
    for a in absences or []:
        out.append(Break(a.from_date_bs, a.to_date_bs, a.remarks or DEFAULT_ABSENCE_REMARK))
    for lv in leaves or []:
        if lv.is_non_standard:
            out.append(Break(lv.from_date_bs, lv.to_date_bs, lv.remarks or DEFAULT_LEAVE_REMARK))
    return out


def _span(start_ord: int, stop_ord: int, is_break: bool = False, remarks: Optional[str] = None) -> Span:
    return Span(
        start=BSDate.from_ordinal(start_ord).format(),
        end=BSDate.from_ordinal(stop_ord - 1).format(),
        is_break=is_break,
        remarks=remarks,
    )


def partition_interval(start: Any, end: Any, breaks: Sequence[Break] = ()) -> list[Span]:
    base_start = parse_bs(start)
    base_end = parse_bs(end)
    if base_start is None or base_end is None or base_end < base_start:
        return [Span(str(start or ""), str(end or ""))]

    lo = base_start.to_ordinal()
    hi = base_end.to_ordinal() + 1

    clipped: list[tuple[int, int, Optional[str]]] = []
    for b in breaks or []:
        b_start = parse_bs(b.start)
        b_end = parse_bs(b.end)
        if b_start is None or b_end is None:
            return [Span(base_start.format(), base_end.format())]
        s = max(b_start.to_ordinal(), lo)
        e = min(b_end.to_ordinal() + 1, hi)
        if s < e:
            clipped.append((s, e, b.remarks))
    clipped.sort(key=lambda t: (t[0], t[1]))

    spans: list[Span] = []
    cursor = lo
    for s, e, remarks in clipped:
        if e <= cursor:
            continue
        if s > cursor:
            spans.append(_span(cursor, s))
        spans.append(_span(max(cursor, s), e, True, remarks))
        cursor = e
    if cursor < hi:
        spans.append(_span(cursor, hi))

    if not spans:
        spans.append(Span(base_start.format(), base_end.format()))
    return spans
