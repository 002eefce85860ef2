from __future__ import annotations

from actions.employees import employee_geo_marks_refresh, employee_seniority, employee_timeline
from actions.reference import district_data_get, today_bs_get
from actions.scorecard import vacancy_scorecard
from actions.vacancies import vacancy_upsert
from utils import ApiError

ACTIONS = {
    "EMPLOYEE_TIMELINE": employee_timeline,
    "EMPLOYEE_SENIORITY": employee_seniority,
    "EMPLOYEE_GEO_MARKS_REFRESH": employee_geo_marks_refresh,
    "VACANCY_SCORECARD": vacancy_scorecard,
    "VACANCY_UPSERT": vacancy_upsert,
    "DISTRICT_DATA_GET": district_data_get,
    "TODAY_BS": today_bs_get,
}


def dispatch(action: str, data, db, cfg):
    fn = ACTIONS.get(str(action or "").upper().strip())
    if fn is None:
        raise ApiError("BAD_REQUEST", f"Unknown action: {action}")
    return fn(data or {}, db, cfg)
