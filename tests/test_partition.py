from __future__ import annotations

from marks.bs_date import span_days
from marks.partition import Break, collect_breaks, partition_interval
from marks.records import Absence, Leave


def _tuples(spans):
    return [(s.start, s.end, s.is_break) for s in spans]


def test_break_inside_interval():
    spans = partition_interval("2078-01-01", "2078-01-31", [Break("2078-01-10", "2078-01-12", "Absent")])
    assert _tuples(spans) == [
        ("2078-01-01", "2078-01-09", False),
        ("2078-01-10", "2078-01-12", True),
        ("2078-01-13", "2078-01-31", False),
    ]
    assert spans[1].remarks == "Absent"


def test_break_touching_start_yields_no_empty_span():
    spans = partition_interval("2078-01-01", "2078-01-31", [Break("2078-01-01", "2078-01-05")])
    assert _tuples(spans) == [
        ("2078-01-01", "2078-01-05", True),
        ("2078-01-06", "2078-01-31", False),
    ]


def test_break_running_past_end_is_clipped():
    spans = partition_interval("2078-01-01", "2078-01-31", [Break("2078-01-25", "2078-02-10")])
    assert _tuples(spans) == [
        ("2078-01-01", "2078-01-24", False),
        ("2078-01-25", "2078-01-31", True),
    ]


def test_overlapping_breaks_do_not_double_count():
    spans = partition_interval(
        "2078-01-01",
        "2078-01-31",
        [Break("2078-01-08", "2078-01-15", "second"), Break("2078-01-05", "2078-01-10", "first")],
    )
    assert _tuples(spans) == [
        ("2078-01-01", "2078-01-04", False),
        ("2078-01-05", "2078-01-10", True),
        ("2078-01-11", "2078-01-15", True),
        ("2078-01-16", "2078-01-31", False),
    ]
    assert sum(span_days(s.start, s.end) for s in spans) == 31


def test_breaks_outside_interval_leave_it_whole():
    spans = partition_interval("2078-01-01", "2078-01-31", [Break("2077-01-01", "2077-12-31")])
    assert _tuples(spans) == [("2078-01-01", "2078-01-31", False)]


def test_break_covering_everything():
    spans = partition_interval("2078-01-10", "2078-01-20", [Break("2078-01-01", "2078-02-01")])
    assert _tuples(spans) == [("2078-01-10", "2078-01-20", True)]


def test_invalid_break_returns_base_interval():
    spans = partition_interval("2078-01-01", "2078-01-31", [Break("2078-01-10", "garbage")])
    assert _tuples(spans) == [("2078-01-01", "2078-01-31", False)]


def test_invalid_or_reversed_base_is_returned_as_given():
    assert _tuples(partition_interval("2078-02-01", "2078-01-01")) == [("2078-02-01", "2078-01-01", False)]
    assert _tuples(partition_interval("bad", "2078-01-01")) == [("bad", "2078-01-01", False)]


def test_collect_breaks_keeps_only_non_standard_leaves():
    absences = [Absence(1, "2078-01-01", "2078-01-02")]
    leaves = [
        Leave(1, "2078-02-01", "2078-02-05", leave_type="Non  standard"),
        Leave(1, "2078-03-01", "2078-03-05", leave_type="Casual"),
    ]
    breaks = collect_breaks(absences, leaves)
    assert [(b.start, b.remarks) for b in breaks] == [
        ("2078-01-01", "Absent"),
        ("2078-02-01", "Non Standard Leave"),
    ]
