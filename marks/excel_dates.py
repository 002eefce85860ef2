from __future__ import annotations

import re
from datetime import date, datetime, timedelta
from typing import Any, Optional

from dateutil import parser as dt_parser

from marks.bs_date import BSDate, ad_to_bs, parse_bs

HEADER_ECHOES = {"from date", "to date", "date from", "date to"}

SERIAL_MIN = 20000
SERIAL_MAX = 120000

# Serials above 59 sit after Excel's phantom 1900-02-29, hence the 1899-12-30 epoch.
_EXCEL_EPOCH = date(1899, 12, 30)
_EXCEL_EPOCH_PRE_LEAP_BUG = date(1899, 12, 31)

_NUMERIC_RE = re.compile(r"^\d+(\.\d+)?$")
_MONTH_NAME_RE = re.compile(r"[A-Za-z]{3,}")
_ISO_TIMESTAMP_RE = re.compile(r"^\d{4}-\d{2}-\d{2}[T ]\d{1,2}:\d{2}")
_FOUR_DIGIT_YEAR_RE = re.compile(r"\d{4}")
_DISPLAY_BS_RE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")


def excel_serial_to_components(serial: float) -> Optional[tuple[int, int, int]]:
    """Gregorian (Y, M, D) of an Excel 1900-system serial, time fraction dropped."""
    whole = int(serial)
    if whole < 1:
        return None
    base = _EXCEL_EPOCH if whole > 59 else _EXCEL_EPOCH_PRE_LEAP_BUG
    try:
        d = base + timedelta(days=whole)
    except OverflowError:
        return None
    return d.year, d.month, d.day


def is_excel_serial(value: Any) -> bool:
    num = _as_number(value)
    return num is not None and SERIAL_MIN <= num <= SERIAL_MAX


def _as_number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    s = str(value or "").strip()
    if _NUMERIC_RE.match(s):
        return float(s)
    return None


def _components_as_bs(year: int, month: int, day: int) -> str:
    # Stored BS dates typed into a date-formatted cell: the digits are the BS date.
    return f"{year:04d}-{month:02d}-{day:02d}"


def _parse_ad_string(s: str, today: Optional[date] = None) -> Optional[date]:
    if not (_MONTH_NAME_RE.search(s) or _ISO_TIMESTAMP_RE.match(s)):
        return None
    try:
        dt = dt_parser.parse(s, dayfirst=True)
    except (ValueError, OverflowError):
        return None
    parsed = dt.date()
    ref = today or date.today()
    if not _FOUR_DIGIT_YEAR_RE.search(s) and parsed > ref:
        try:
            parsed = parsed.replace(year=parsed.year - 100)
        except ValueError:
            parsed = parsed.replace(year=parsed.year - 100, day=28)
    return parsed


def _parse_bs_literal(s: str) -> Optional[BSDate]:
    d = parse_bs(s)
    if d is not None:
        return d
    m = _DISPLAY_BS_RE.match(s)
    if not m:
        return None
    month, day, year = m.groups()
    return parse_bs(f"{year}-{month}-{day}")


def normalize_excel_date(raw: Any, *, today: Optional[date] = None) -> str:
    """
    Decode a spreadsheet date cell into a canonical ``YYYY-MM-DD`` BS string.

    Unrecognised input comes back as the raw string; this never raises.
    """
    if raw is None:
        return ""
    if isinstance(raw, datetime):
        return _components_as_bs(raw.year, raw.month, raw.day)
    if isinstance(raw, date):
        return _components_as_bs(raw.year, raw.month, raw.day)

    s = str(raw).strip()
    if not s or s.lower() in HEADER_ECHOES:
        return ""

    num = _as_number(raw)
    if num is not None:
        if SERIAL_MIN <= num <= SERIAL_MAX:
            parts = excel_serial_to_components(num)
            if parts:
                return _components_as_bs(*parts)
        return s

    ad = _parse_ad_string(s, today)
    if ad is not None:
        bs = ad_to_bs(ad)
        if bs is not None:
            return bs.format()

    bs = _parse_bs_literal(s)
    if bs is not None:
        return bs.format()
    return s
