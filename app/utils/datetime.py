from __future__ import annotations

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from marks.bs_date import BSDate


def iso_utc_now() -> str:
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")


def _zone(tz_name: str):
    try:
        return ZoneInfo(tz_name)
    except Exception:
        return timezone.utc


def generated_stamp(tz_name: str) -> str:
    """Local wall-clock time plus the matching BS date, for report headers."""
    local = datetime.now(timezone.utc).astimezone(_zone(tz_name)).replace(microsecond=0)
    return f"{local.isoformat()} (BS {BSDate.from_ad(local.date()).format()})"
