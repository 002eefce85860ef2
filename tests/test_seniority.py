from __future__ import annotations

import pytest

from marks.records import Absence, Leave
from marks.seniority import ChronologyError, build_seniority_timeline


def test_uninterrupted_seniority():
    tl = build_seniority_timeline("2078-01-01", "2080-01-01")
    assert len(tl.segments) == 1
    assert tl.counted_days == 731
    assert (tl.elapsed.years, tl.elapsed.months, tl.elapsed.days) == (2, 0, 1)
    assert tl.seniority_marks == pytest.approx(7.510274, abs=1e-6)

    out = tl.to_dict()
    assert out["yearsElapsed"] == 2
    assert out["yearMarks"] == pytest.approx(7.5)
    assert out["segments"][0]["totalNumDays"] == 731


def test_absences_and_non_standard_leave_are_excluded():
    absences = [Absence(101, "2078-06-01", "2078-06-10")]
    leaves = [
        Leave(101, "2079-02-01", "2079-02-03", leave_type="Casual"),
        Leave(101, "2079-05-01", "2079-05-05", leave_type="Non  standard"),
    ]
    tl = build_seniority_timeline("2078-01-01", "2080-01-01", absences, leaves)
    assert [s.is_break for s in tl.segments] == [False, True, False, True, False]
    assert [s.marks.total_marks for s in tl.segments if s.is_break] == [0, 0]
    leave_break = tl.segments[3]
    assert (leave_break.start_date_bs, leave_break.end_date_bs) == ("2079-05-01", "2079-05-05")
    assert leave_break.remarks == "Non Standard Leave"
    assert tl.counted_days == 716
    assert (tl.elapsed.years, tl.elapsed.months, tl.elapsed.days) == (1, 11, 16)
    assert tl.seniority_marks == pytest.approx(7.351884, abs=1e-6)


def test_reversed_dates_raise():
    with pytest.raises(ChronologyError):
        build_seniority_timeline("2080-01-01", "2078-01-01")


@pytest.mark.parametrize("start,end", [("", "2080-01-01"), ("2078-01-01", "2080-13-01")])
def test_invalid_dates_raise(start, end):
    with pytest.raises(ChronologyError):
        build_seniority_timeline(start, end)
