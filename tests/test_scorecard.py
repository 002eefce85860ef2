from __future__ import annotations

import pytest

from marks.records import Assignment
from marks.scorecard import ApplicantRecord, rank_scorecards, score_applicant


def _applicant(**kwargs):
    base = dict(
        employee_id=101,
        name="Ram",
        gender="male",
        level=5,
        seniority_date_bs="2078-01-01",
        assignments=[
            Assignment(101, "2078-01-01", "2078-12-30", work_office="District Office Humla", level=5),
            Assignment(101, "2079-01-01", None, work_office="District Office Kathmandu", level=5),
            Assignment(101, "2075-01-01", "2077-12-31", work_office="District Office Humla", level=4),
        ],
    )
    base.update(kwargs)
    return ApplicantRecord(**base)


def test_score_applicant_combines_seniority_and_geography(reference):
    card = score_applicant(_applicant(), evaluation_end="2080-01-01", reference=reference, today="2081-01-01")
    assert card["error"] is None
    assert card["seniorityMarks"] == pytest.approx(7.510274, abs=1e-6)
    assert card["geographicalMarks"] == pytest.approx(3.441610, abs=1e-6)
    assert card["totalMarks"] == pytest.approx(card["seniorityMarks"] + card["geographicalMarks"])
    # Only the applicant's current level counts.
    assert {a["level"] for a in card["assignments"]} == {5}
    assert card["assignments"][-1]["endDateBS"] == "2080-01-01"


def test_card_carries_employee_details(reference):
    applicant = _applicant(
        dob_bs="2040-01-01",
        working_office="District Office Kathmandu",
        assignments=[
            Assignment(101, "2075-01-01", "2078-12-30", position="Nayab Subba", level=4),
            Assignment(101, "2079-01-01", None, position="Section Officer", level=5),
        ],
    )
    card = score_applicant(applicant, evaluation_end="2080-01-01", reference=reference, today="2081-01-01")
    assert card["currentPosition"] == "Section Officer"
    assert card["workingOffice"] == "District Office Kathmandu"
    assert card["dobBS"] == "2040-01-01"
    assert card["seniorityDateBS"] == "2078-01-01"

def test_seniority_error_does_not_abort_scoring(reference):
    card = score_applicant(
        _applicant(seniority_date_bs=None), evaluation_end="2080-01-01", reference=reference, today="2081-01-01"
    )
    assert card["error"]
    assert card["seniorityMarks"] == 0.0
    assert card["geographicalMarks"] > 0


def test_rank_scorecards_orders_by_total_then_employee():
    cards = [
        {"employeeId": 3, "totalMarks": 10.0},
        {"employeeId": 1, "totalMarks": 12.5},
        {"employeeId": 2, "totalMarks": 10.0},
    ]
    ranked = rank_scorecards(cards)
    assert [(c["employeeId"], c["rank"]) for c in ranked] == [(1, 1), (2, 2), (3, 3)]
