from __future__ import annotations

from marks.records import Assignment
from marks.synthetic import add_synthetic_assignments, synthetic_for


def _rows():
    first = Assignment(
        employee_id=101,
        start_date_bs="2070-01-01",
        end_date_bs="2076-08-12",
        position="Nayab Subba",
        jobs="Admin",
        work_office="District Office Humla",
        level=5,
        seniority_date_bs="2070-01-01",
        reason_for_position="Transfer",
    )
    promoted = Assignment(
        employee_id=101,
        start_date_bs="2078-04-07",
        end_date_bs=None,
        position="Section Officer",
        jobs="Account",
        work_office="District Office Kathmandu",
        level=6,
        seniority_date_bs="2076-08-13",
        reason_for_position="Promotion",
    )
    later = Assignment(
        employee_id=101,
        start_date_bs="2079-01-01",
        position="Section Officer",
        work_office="District Office Kathmandu",
        level=6,
        seniority_date_bs="2076-08-13",
    )
    return first, promoted, later


def test_synthetic_row_bridges_seniority_and_start():
    first, promoted, later = _rows()
    out = add_synthetic_assignments([first, promoted, later])

    assert len(out) == 4
    synthetic = out[1]
    assert synthetic.synthetic is True
    assert synthetic.start_date_bs == "2076-08-13"
    assert synthetic.end_date_bs == "2078-04-06"
    assert synthetic.work_office == "District Office Humla"
    assert synthetic.jobs == "Admin"
    assert synthetic.reason_for_position == "Transfer"
    assert synthetic.position == "Section Officer"
    assert synthetic.level == 6
    assert out[2] is promoted
    assert out[3] is later


def test_no_synthetic_row_when_seniority_is_not_earlier():
    first, _promoted, _later = _rows()
    assert synthetic_for(first, None) is None
    assert add_synthetic_assignments([first]) == [first]


def test_first_row_borrows_its_own_attributes():
    _first, promoted, _later = _rows()
    synthetic = synthetic_for(promoted, None)
    assert synthetic.work_office == "District Office Kathmandu"
    assert synthetic.jobs == "Account"
