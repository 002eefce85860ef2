from __future__ import annotations

from actions.employees import resolve_today
from actions.reference_repo import load_reference_data


def district_data_get(data, db, cfg):
    ref = load_reference_data(db)
    out = ref.to_dict()
    out["counts"] = {
        "offices": len(ref.office_district),
        "districts": len(ref.district_category),
        "categoryMarks": len(ref.category_marks),
    }
    return out


def today_bs_get(data, db, cfg):
    today = resolve_today(data, cfg)
    return {
        "todayBS": today.format(),
        "todayAD": today.to_ad().isoformat(),
        "timezone": cfg.APP_TIMEZONE,
    }
