from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Iterable, Optional

from marks.bs_date import parse_bs
from marks.records import Assignment


@dataclass
class _FoldState:
    previous: Optional[Assignment] = None
    seen_levels: set[int] = field(default_factory=set)
    out: list[Assignment] = field(default_factory=list)


def synthetic_for(row: Assignment, previous: Optional[Assignment]) -> Optional[Assignment]:
    """
    The assignment bridging ``row``'s seniority date and its recorded start.

    Office and job attributes come from ``previous`` (the row itself when it
    is the first one); position and level stay those of ``row``.
    """
    seniority = parse_bs(row.seniority_date_bs)
    start = parse_bs(row.start_date_bs)
    if seniority is None or start is None or not seniority < start:
        return None
    source = previous or row
    return dataclasses.replace(
        row,
        start_date_bs=seniority.format(),
        end_date_bs=start.day_before().format(),
        jobs=source.jobs,
        function=source.function,
        emp_category=source.emp_category,
        emp_type=source.emp_type,
        work_office=source.work_office,
        reason_for_position=source.reason_for_position,
        synthetic=True,
    )


def add_synthetic_assignments(rows: Iterable[Assignment]) -> list[Assignment]:
    """Insert a synthetic row ahead of the first recorded row of each level, in file order."""
    state = _FoldState()
    for row in rows:
        if row.level not in state.seen_levels:
            state.seen_levels.add(row.level)
            extra = synthetic_for(row, state.previous)
            if extra is not None:
                state.out.append(extra)
        state.out.append(row)
        state.previous = row
    return state.out
