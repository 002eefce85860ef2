"""
Bikram Sambat (BS) calendar.

BS month lengths follow no formula; they are published per year, so validity
and arithmetic are driven by the lookup table below. Ordinals are proleptic
Gregorian ordinals (``date.toordinal()``), which keeps BS<->AD conversion and
day arithmetic on one monotonic axis.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Optional
from zoneinfo import ZoneInfo

MONTH_DAYS: dict[int, tuple[int, ...]] = {
    1970: (31, 31, 31, 32, 31, 31, 29, 30, 30, 29, 30, 30),
    1971: (31, 31, 32, 31, 31, 31, 30, 29, 30, 29, 30, 30),
    1972: (31, 32, 31, 32, 31, 30, 30, 29, 30, 29, 30, 30),
    1973: (30, 32, 31, 32, 31, 30, 30, 30, 29, 30, 29, 31),
    1974: (31, 31, 31, 32, 31, 31, 30, 29, 30, 29, 30, 30),
    1975: (31, 31, 32, 31, 31, 31, 30, 29, 30, 29, 30, 30),
    1976: (31, 32, 31, 32, 31, 30, 30, 30, 29, 29, 30, 31),
    1977: (30, 32, 31, 32, 31, 31, 29, 30, 29, 30, 29, 31),
    1978: (31, 31, 32, 31, 31, 31, 30, 29, 30, 29, 30, 30),
    1979: (31, 31, 32, 32, 31, 30, 30, 29, 30, 29, 30, 30),
    1980: (31, 32, 31, 32, 31, 30, 30, 30, 29, 29, 30, 31),
    1981: (31, 31, 31, 32, 31, 31, 29, 30, 30, 29, 30, 30),
    1982: (31, 31, 32, 31, 31, 31, 30, 29, 30, 29, 30, 30),
    1983: (31, 32, 31, 32, 31, 30, 30, 29, 30, 29, 30, 30),
    1984: (31, 32, 31, 32, 31, 30, 30, 30, 29, 29, 30, 31),
    1985: (31, 31, 31, 32, 31, 31, 29, 30, 30, 29, 30, 30),
    1986: (31, 31, 32, 31, 31, 31, 30, 29, 30, 29, 30, 30),
    1987: (31, 32, 31, 32, 31, 30, 30, 29, 30, 29, 30, 30),
    1988: (31, 32, 31, 32, 31, 30, 30, 30, 29, 29, 30, 31),
    1989: (31, 31, 31, 32, 31, 31, 30, 29, 30, 29, 30, 30),
    1990: (31, 31, 32, 31, 31, 31, 30, 29, 30, 29, 30, 30),
    1991: (31, 32, 31, 32, 31, 30, 30, 29, 30, 29, 30, 30),
    1992: (31, 32, 31, 32, 31, 30, 30, 30, 29, 30, 29, 31),
    1993: (31, 31, 31, 32, 31, 31, 30, 29, 30, 29, 30, 30),
    1994: (31, 31, 32, 31, 31, 31, 30, 29, 30, 29, 30, 30),
    1995: (31, 32, 31, 32, 31, 30, 30, 30, 29, 29, 30, 30),
    1996: (31, 32, 31, 32, 31, 30, 30, 30, 29, 30, 29, 31),
    1997: (31, 31, 32, 31, 31, 31, 30, 29, 30, 29, 30, 30),
    1998: (31, 31, 32, 31, 31, 31, 30, 29, 30, 29, 30, 30),
    1999: (31, 32, 31, 32, 31, 30, 30, 30, 29, 29, 30, 31),
    2000: (30, 32, 31, 32, 31, 30, 30, 30, 29, 30, 29, 31),
    2001: (31, 31, 32, 31, 31, 31, 30, 29, 30, 29, 30, 30),
    2002: (31, 31, 32, 32, 31, 30, 30, 29, 30, 29, 30, 30),
    2003: (31, 32, 31, 32, 31, 30, 30, 30, 29, 29, 30, 31),
    2004: (30, 32, 31, 32, 31, 30, 30, 30, 29, 30, 29, 31),
    2005: (31, 31, 32, 31, 31, 31, 30, 29, 30, 29, 30, 30),
    2006: (31, 31, 32, 32, 31, 30, 30, 29, 30, 29, 30, 30),
    2007: (31, 32, 31, 32, 31, 30, 30, 30, 29, 29, 30, 31),
    2008: (31, 31, 31, 32, 31, 31, 29, 30, 30, 29, 29, 31),
    2009: (31, 31, 32, 31, 31, 31, 30, 29, 30, 29, 30, 30),
    2010: (31, 31, 32, 32, 31, 30, 30, 29, 30, 29, 30, 30),
    2011: (31, 32, 31, 32, 31, 30, 30, 30, 29, 29, 30, 31),
    2012: (31, 31, 31, 32, 31, 31, 29, 30, 30, 29, 30, 30),
    2013: (31, 31, 32, 31, 31, 31, 30, 29, 30, 29, 30, 30),
    2014: (31, 31, 32, 32, 31, 30, 30, 29, 30, 29, 30, 30),
    2015: (31, 32, 31, 32, 31, 30, 30, 30, 29, 29, 30, 31),
    2016: (31, 31, 31, 32, 31, 31, 29, 30, 30, 29, 30, 30),
    2017: (31, 31, 32, 31, 31, 31, 30, 29, 30, 29, 30, 30),
    2018: (31, 32, 31, 32, 31, 30, 30, 29, 30, 29, 30, 30),
    2019: (31, 32, 31, 32, 31, 30, 30, 30, 29, 30, 29, 31),
    2020: (31, 31, 31, 32, 31, 31, 30, 29, 30, 29, 30, 30),
    2021: (31, 31, 32, 31, 31, 31, 30, 29, 30, 29, 30, 30),
    2022: (31, 32, 31, 32, 31, 30, 30, 30, 29, 29, 30, 30),
    2023: (31, 32, 31, 32, 31, 30, 30, 30, 29, 30, 29, 31),
    2024: (31, 31, 31, 32, 31, 31, 30, 29, 30, 29, 30, 30),
    2025: (31, 31, 32, 31, 31, 31, 30, 29, 30, 29, 30, 30),
    2026: (31, 32, 31, 32, 31, 30, 30, 30, 29, 29, 30, 31),
    2027: (30, 32, 31, 32, 31, 30, 30, 30, 29, 30, 29, 31),
    2028: (31, 31, 32, 31, 31, 31, 30, 29, 30, 29, 30, 30),
    2029: (31, 31, 32, 31, 32, 30, 30, 29, 30, 29, 30, 30),
    2030: (31, 32, 31, 32, 31, 30, 30, 30, 29, 29, 30, 31),
    2031: (30, 32, 31, 32, 31, 30, 30, 30, 29, 30, 29, 31),
    2032: (31, 31, 32, 31, 31, 31, 30, 29, 30, 29, 30, 30),
    2033: (31, 31, 32, 32, 31, 30, 30, 29, 30, 29, 30, 30),
    2034: (31, 32, 31, 32, 31, 30, 30, 30, 29, 29, 30, 31),
    2035: (30, 32, 31, 32, 31, 31, 29, 30, 30, 29, 29, 31),
    2036: (31, 31, 32, 31, 31, 31, 30, 29, 30, 29, 30, 30),
    2037: (31, 31, 32, 32, 31, 30, 30, 29, 30, 29, 30, 30),
    2038: (31, 32, 31, 32, 31, 30, 30, 30, 29, 29, 30, 31),
    2039: (31, 31, 31, 32, 31, 31, 29, 30, 30, 29, 30, 30),
    2040: (31, 31, 32, 31, 31, 31, 30, 29, 30, 29, 30, 30),
    2041: (31, 31, 32, 32, 31, 30, 30, 29, 30, 29, 30, 30),
    2042: (31, 32, 31, 32, 31, 30, 30, 30, 29, 29, 30, 31),
    2043: (31, 31, 31, 32, 31, 31, 29, 30, 30, 29, 30, 30),
    2044: (31, 31, 32, 31, 31, 31, 30, 29, 30, 29, 30, 30),
    2045: (31, 32, 31, 32, 31, 30, 30, 29, 30, 29, 30, 30),
    2046: (31, 32, 31, 32, 31, 30, 30, 30, 29, 29, 30, 31),
    2047: (31, 31, 31, 32, 31, 31, 30, 29, 30, 29, 30, 30),
    2048: (31, 31, 32, 31, 31, 31, 30, 29, 30, 29, 30, 30),
    2049: (31, 32, 31, 32, 31, 30, 30, 30, 29, 29, 30, 30),
    2050: (31, 32, 31, 32, 31, 30, 30, 30, 29, 30, 29, 31),
    2051: (31, 31, 31, 32, 31, 31, 30, 29, 30, 29, 30, 30),
    2052: (31, 31, 32, 31, 31, 31, 30, 29, 30, 29, 30, 30),
    2053: (31, 32, 31, 32, 31, 30, 30, 30, 29, 29, 30, 30),
    2054: (31, 32, 31, 32, 31, 30, 30, 30, 29, 30, 29, 31),
    2055: (31, 31, 32, 31, 31, 31, 30, 29, 30, 29, 30, 30),
    2056: (31, 31, 32, 31, 32, 30, 30, 29, 30, 29, 30, 30),
    2057: (31, 32, 31, 32, 31, 30, 30, 30, 29, 29, 30, 31),
    2058: (30, 32, 31, 32, 31, 30, 30, 30, 29, 30, 29, 31),
    2059: (31, 31, 32, 31, 31, 31, 30, 29, 30, 29, 30, 30),
    2060: (31, 31, 32, 32, 31, 30, 30, 29, 30, 29, 30, 30),
    2061: (31, 32, 31, 32, 31, 30, 30, 30, 29, 29, 30, 31),
    2062: (30, 32, 31, 32, 31, 31, 29, 30, 29, 30, 29, 31),
    2063: (31, 31, 32, 31, 31, 31, 30, 29, 30, 29, 30, 30),
    2064: (31, 31, 32, 32, 31, 30, 30, 29, 30, 29, 30, 30),
    2065: (31, 32, 31, 32, 31, 30, 30, 30, 29, 29, 30, 31),
    2066: (31, 31, 31, 32, 31, 31, 29, 30, 30, 29, 29, 31),
    2067: (31, 31, 32, 31, 31, 31, 30, 29, 30, 29, 30, 30),
    2068: (31, 31, 32, 32, 31, 30, 30, 29, 30, 29, 30, 30),
    2069: (31, 32, 31, 32, 31, 30, 30, 30, 29, 29, 30, 31),
    2070: (31, 31, 31, 32, 31, 31, 29, 30, 30, 29, 30, 30),
    2071: (31, 31, 32, 31, 31, 31, 30, 29, 30, 29, 30, 30),
    2072: (31, 32, 31, 32, 31, 30, 30, 29, 30, 29, 30, 30),
    2073: (31, 32, 31, 32, 31, 30, 30, 30, 29, 29, 30, 31),
    2074: (31, 31, 31, 32, 31, 31, 30, 29, 30, 29, 30, 30),
    2075: (31, 31, 32, 31, 31, 31, 30, 29, 30, 29, 30, 30),
    2076: (31, 32, 31, 32, 31, 30, 30, 30, 29, 29, 30, 30),
    2077: (31, 32, 31, 32, 31, 30, 30, 30, 29, 30, 29, 31),
    2078: (31, 31, 31, 32, 31, 31, 30, 29, 30, 29, 30, 30),
    2079: (31, 31, 32, 31, 31, 31, 30, 29, 30, 29, 30, 30),
    2080: (31, 32, 31, 32, 31, 30, 30, 30, 29, 29, 30, 30),
    2081: (31, 31, 32, 32, 31, 30, 30, 30, 29, 30, 30, 30),
    2082: (30, 32, 31, 32, 31, 30, 30, 30, 29, 30, 30, 30),
    2083: (31, 31, 32, 31, 31, 30, 30, 30, 29, 30, 30, 30),
    2084: (31, 31, 32, 31, 31, 30, 30, 30, 29, 30, 30, 30),
    2085: (31, 32, 31, 32, 30, 31, 30, 30, 29, 30, 30, 30),
    2086: (30, 32, 31, 32, 31, 30, 30, 30, 29, 30, 30, 30),
    2087: (31, 31, 32, 31, 31, 31, 30, 30, 29, 30, 30, 30),
    2088: (30, 31, 32, 32, 30, 31, 30, 30, 29, 30, 30, 30),
    2089: (30, 32, 31, 32, 31, 30, 30, 30, 29, 30, 30, 30),
    2090: (30, 32, 31, 32, 31, 30, 30, 30, 29, 30, 30, 30),
    2091: (31, 31, 32, 31, 31, 31, 30, 30, 29, 30, 30, 30),
    2092: (30, 31, 32, 32, 31, 30, 30, 30, 29, 30, 30, 30),
    2093: (30, 32, 31, 32, 31, 30, 30, 30, 29, 29, 30, 30),
    2094: (31, 31, 32, 31, 31, 30, 30, 30, 29, 30, 30, 30),
    2095: (31, 31, 32, 31, 31, 31, 30, 29, 30, 30, 30, 30),
    2096: (30, 31, 32, 32, 31, 30, 30, 29, 30, 29, 30, 30),
    2097: (31, 32, 31, 32, 31, 30, 30, 30, 29, 30, 30, 30),
    2098: (31, 31, 32, 31, 31, 31, 29, 30, 29, 30, 30, 31),
    2099: (31, 31, 32, 31, 31, 31, 30, 29, 29, 30, 30, 30),
    2100: (31, 32, 31, 32, 30, 31, 30, 29, 30, 29, 30, 30),
}

MIN_YEAR = min(MONTH_DAYS)
MAX_YEAR = max(MONTH_DAYS)

# BS 2000-01-01 (Baisakh 1) fell on AD 1943-04-14.
_ANCHOR_YEAR = 2000
_ANCHOR_ORDINAL = date(1943, 4, 14).toordinal()

_SPLIT_RE = re.compile(r"[/-]")


def _build_year_starts() -> dict[int, int]:
    starts: dict[int, int] = {}
    ordinal = _ANCHOR_ORDINAL
    for year in range(_ANCHOR_YEAR, MAX_YEAR + 1):
        starts[year] = ordinal
        ordinal += sum(MONTH_DAYS[year])
    ordinal = _ANCHOR_ORDINAL
    for year in range(_ANCHOR_YEAR - 1, MIN_YEAR - 1, -1):
        ordinal -= sum(MONTH_DAYS[year])
        starts[year] = ordinal
    return starts


_YEAR_START = _build_year_starts()
_MIN_ORDINAL = _YEAR_START[MIN_YEAR]
_MAX_ORDINAL = _YEAR_START[MAX_YEAR] + sum(MONTH_DAYS[MAX_YEAR]) - 1


def days_in_month(year: int, month: int) -> Optional[int]:
    months = MONTH_DAYS.get(year)
    if months is None or not 1 <= month <= 12:
        return None
    return months[month - 1]


@dataclass(frozen=True, order=True)
class BSDate:
    year: int
    month: int
    day: int

    def __post_init__(self) -> None:
        limit = days_in_month(self.year, self.month)
        if limit is None or not 1 <= self.day <= limit:
            raise ValueError(f"Invalid BS date: {self.year}-{self.month}-{self.day}")

    def __str__(self) -> str:
        return self.format()

    def format(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"

    def to_ordinal(self) -> int:
        ordinal = _YEAR_START[self.year]
        ordinal += sum(MONTH_DAYS[self.year][: self.month - 1])
        return ordinal + self.day - 1

    @classmethod
    def from_ordinal(cls, ordinal: int) -> "BSDate":
        if not _MIN_ORDINAL <= ordinal <= _MAX_ORDINAL:
            raise ValueError(f"Ordinal {ordinal} is outside the BS table")
        year = MIN_YEAR
        while year < MAX_YEAR and _YEAR_START[year + 1] <= ordinal:
            year += 1
        remaining = ordinal - _YEAR_START[year]
        month = 1
        for length in MONTH_DAYS[year]:
            if remaining < length:
                break
            remaining -= length
            month += 1
        return cls(year, month, remaining + 1)

    def to_ad(self) -> date:
        return date.fromordinal(self.to_ordinal())

    @classmethod
    def from_ad(cls, value: date) -> "BSDate":
        return cls.from_ordinal(value.toordinal())

    def add_days(self, days: int) -> "BSDate":
        return BSDate.from_ordinal(self.to_ordinal() + int(days))

    def day_after(self) -> "BSDate":
        return self.add_days(1)

    def day_before(self) -> "BSDate":
        return self.add_days(-1)

    def is_before(self, other: "BSDate") -> bool:
        return self < other

    def is_after(self, other: "BSDate") -> bool:
        return self > other


@dataclass(frozen=True)
class YMD:
    years: int = 0
    months: int = 0
    days: int = 0

    def as_dict(self) -> dict[str, int]:
        return {"years": self.years, "months": self.months, "days": self.days}


def parse_bs(value: Any) -> Optional[BSDate]:
    """Parse ``YYYY/MM/DD`` or ``YYYY-MM-DD``; ``None`` when the value is not a valid BS date."""
    if isinstance(value, BSDate):
        return value
    s = str(value or "").strip()
    if not s:
        return None
    parts = _SPLIT_RE.split(s)
    if len(parts) != 3 or not all(p.strip().isdecimal() for p in parts):
        return None
    year, month, day = (int(p) for p in parts)
    if days_in_month(year, month) is None:
        return None
    try:
        return BSDate(year, month, day)
    except ValueError:
        return None


def is_valid_bs(value: Any) -> bool:
    return parse_bs(value) is not None


def format_bs(value: Any) -> str:
    d = parse_bs(value)
    return d.format() if d else ""


def ad_to_bs(value: date) -> Optional[BSDate]:
    if isinstance(value, datetime):
        value = value.date()
    try:
        return BSDate.from_ad(value)
    except ValueError:
        return None


def today_bs(tz_name: str = "Asia/Kathmandu") -> BSDate:
    try:
        tz = ZoneInfo(tz_name)
    except Exception:
        tz = timezone.utc
    return BSDate.from_ad(datetime.now(tz).date())


def diff_days(a: Any, b: Any) -> int:
    """Days from ``a`` to ``b`` (``b - a``); 0 when either side is invalid."""
    start = parse_bs(a)
    end = parse_bs(b)
    if start is None or end is None:
        return 0
    return end.to_ordinal() - start.to_ordinal()


def _previous_month(year: int, month: int) -> tuple[int, int]:
    if month == 1:
        return year - 1, 12
    return year, month - 1


def diff_ymd(a: Any, b: Any) -> YMD:
    """
    Whole BS years and months elapsed from ``a`` to ``b`` plus remainder days.

    Negative remainders borrow the real length of the months preceding ``b``,
    walking back further when a single month is not long enough.
    """
    start = parse_bs(a)
    end = parse_bs(b)
    if start is None or end is None or end < start:
        return YMD()

    years = end.year - start.year
    months = end.month - start.month
    days = end.day - start.day

    borrow_year, borrow_month = end.year, end.month
    while days < 0:
        borrow_year, borrow_month = _previous_month(borrow_year, borrow_month)
        months -= 1
        days += days_in_month(borrow_year, borrow_month) or 30
    while months < 0:
        years -= 1
        months += 12
    if years < 0:
        return YMD()
    return YMD(years, months, days)


def span_days(start: Any, end: Any) -> int:
    """Inclusive day count of ``[start, end]``; 0 when invalid or reversed."""
    s = parse_bs(start)
    e = parse_bs(end)
    if s is None or e is None or e < s:
        return 0
    return e.to_ordinal() - s.to_ordinal() + 1


def span_ymd(start: Any, end: Any) -> YMD:
    s = parse_bs(start)
    e = parse_bs(end)
    if s is None or e is None or e < s:
        return YMD()
    try:
        after = e.day_after()
    except ValueError:
        return YMD()
    return diff_ymd(s, after)


def ymd_from_days(total_days: int) -> YMD:
    """Calendar breakdown of a raw day count, measured from BS 2070-01-01."""
    safe = max(0, int(total_days or 0))
    anchor = BSDate(2070, 1, 1)
    try:
        end = anchor.add_days(safe)
    except ValueError:
        return YMD()
    return diff_ymd(anchor, end)


DAYS_PER_YEAR_FIXED = 365
DAYS_PER_MONTH_FIXED = 30.44


def fixed_ymd(total_days: int) -> YMD:
    """365-day years and 30.44-day months; the convention seniority marks are calibrated on."""
    safe = max(0, int(total_days or 0))
    years = safe // DAYS_PER_YEAR_FIXED
    rest = safe - years * DAYS_PER_YEAR_FIXED
    months = int(rest // DAYS_PER_MONTH_FIXED)
    days = int(rest - months * DAYS_PER_MONTH_FIXED)
    return YMD(int(years), months, days)
