from __future__ import annotations

from sqlalchemy import select

from actions.employee_repo import get_employee, load_absences, load_assignments, load_leaves
from actions.employees import resolve_today
from actions.reference_repo import load_reference_data
from actions.vacancies import require_bigyapan_no, vacancy_to_dict
from cache_layer import SCORECARD_NAMESPACE, cache_get, cache_set, make_cache_key
from marks.bs_date import parse_bs
from marks.records import normalize_gender
from marks.scorecard import ApplicantRecord, rank_scorecards, score_applicant
from models import Applicant, Vacancy
from utils import ApiError, iso_utc_now


def vacancy_scorecard(data, db, cfg):
    bigyapan_no = require_bigyapan_no(data)

    vacancy = db.execute(select(Vacancy).where(Vacancy.bigyapanNo == bigyapan_no)).scalar_one_or_none()
    if not vacancy:
        raise ApiError("NOT_FOUND", f"Vacancy {bigyapan_no} not found")
    evaluation_end = parse_bs(vacancy.bigyapanEndDateBS)
    if evaluation_end is None:
        raise ApiError("BAD_REQUEST", f"Vacancy {bigyapan_no} has no valid bigyapan end date")

    today = resolve_today(data, cfg)
    key = make_cache_key(SCORECARD_NAMESPACE, scope=[bigyapan_no], params={"today": today.format()})
    cached = cache_get(key)
    if cached is not None:
        return cached

    reference = load_reference_data(db)
    applicants = (
        db.execute(select(Applicant).where(Applicant.bigyapanNo == bigyapan_no).order_by(Applicant.employeeId.asc()))
        .scalars()
        .all()
    )

    now = iso_utc_now()
    cards = []
    missing = []
    for app_row in applicants:
        emp = get_employee(db, app_row.employeeId)
        if not emp:
            missing.append(app_row.employeeId)
            continue
        record = ApplicantRecord(
            employee_id=emp.employeeId,
            name=emp.name or "",
            gender=normalize_gender(emp.sex),
            level=int(emp.level or 0),
            seniority_date_bs=emp.seniorityDateBS or None,
            dob_bs=emp.dobBS or "",
            working_office=emp.workOffice or "",
            assignments=load_assignments(db, emp.employeeId),
            absences=load_absences(db, emp.employeeId),
            leaves=load_leaves(db, emp.employeeId),
        )
        card = score_applicant(record, evaluation_end=evaluation_end, reference=reference, today=today)
        app_row.seniorityMarks = card["seniorityMarks"]
        app_row.geographicalMarks = card["geographicalMarks"]
        app_row.scoredAt = now
        cards.append(card)

    items = rank_scorecards(cards)
    out = {
        "vacancy": vacancy_to_dict(vacancy),
        "items": items,
        "total": len(items),
        "missingEmployees": missing,
    }
    cache_set(key, out)
    return out
