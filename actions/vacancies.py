from __future__ import annotations

import logging

from sqlalchemy import select

from cache_layer import SCORECARD_NAMESPACE, cache_invalidate_prefix, namespace_prefix
from marks.bs_date import parse_bs
from models import Vacancy
from utils import ApiError

log = logging.getLogger("api")

LEVEL_MIN = 1
LEVEL_MAX = 12

_TEXT_FIELDS = ("service", "group", "subGroup", "position", "fiscalYear")


def vacancy_to_dict(v: Vacancy) -> dict:
    return {
        "bigyapanNo": v.bigyapanNo,
        "level": int(v.level or 0),
        "numPositions": int(v.numPositions or 0),
        "service": v.service or "",
        "group": v.group or "",
        "subGroup": v.subGroup or "",
        "position": v.position or "",
        "fiscalYear": v.fiscalYear or "",
        "bigyapanEndDateBS": v.bigyapanEndDateBS or "",
    }


def require_bigyapan_no(data) -> str:
    bigyapan_no = str((data or {}).get("bigyapanNo") or "").strip()
    if not bigyapan_no:
        raise ApiError("BAD_REQUEST", "Missing bigyapanNo")
    return bigyapan_no


def _int_field(data, key: str, lo: int, hi: int) -> int:
    raw = (data or {}).get(key)
    try:
        n = int(raw)
    except (TypeError, ValueError):
        raise ApiError("BAD_REQUEST", f"{key} must be an integer")
    if not lo <= n <= hi:
        raise ApiError("BAD_REQUEST", f"{key} must be between {lo} and {hi}")
    return n


def vacancy_upsert(data, db, cfg):
    """Create the vacancy or update the fields present in ``data``."""
    bigyapan_no = require_bigyapan_no(data)
    vacancy = db.execute(select(Vacancy).where(Vacancy.bigyapanNo == bigyapan_no)).scalar_one_or_none()
    created = vacancy is None

    if created and "level" not in data:
        raise ApiError("BAD_REQUEST", "level is required for a new vacancy")
    if created:
        vacancy = Vacancy(bigyapanNo=bigyapan_no)

    if "level" in data:
        vacancy.level = _int_field(data, "level", LEVEL_MIN, LEVEL_MAX)
    if "numPositions" in data:
        vacancy.numPositions = _int_field(data, "numPositions", 1, 10_000)
    elif created:
        vacancy.numPositions = 1
    for key in _TEXT_FIELDS:
        if key in data:
            setattr(vacancy, key, str(data.get(key) or "").strip())
    if "bigyapanEndDateBS" in data:
        raw = str(data.get("bigyapanEndDateBS") or "").strip()
        end = parse_bs(raw) if raw else None
        if raw and end is None:
            raise ApiError("BAD_REQUEST", f"Invalid bigyapanEndDateBS: {raw}")
        vacancy.bigyapanEndDateBS = end.format() if end else ""

    if created:
        db.add(vacancy)
    db.flush()
    cache_invalidate_prefix(namespace_prefix(SCORECARD_NAMESPACE, bigyapan_no))
    log.info("vacancy %s %s", bigyapan_no, "created" if created else "updated")
    return {"created": created, "vacancy": vacancy_to_dict(vacancy)}
