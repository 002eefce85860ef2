from __future__ import annotations

from datetime import date

import pytest

from marks.bs_date import (
    YMD,
    BSDate,
    ad_to_bs,
    diff_days,
    diff_ymd,
    fixed_ymd,
    format_bs,
    is_valid_bs,
    parse_bs,
    span_days,
    span_ymd,
    ymd_from_days,
)


def test_anchor_and_cutoff_convert_to_known_ad_dates():
    assert BSDate(2000, 1, 1).to_ad() == date(1943, 4, 14)
    assert BSDate(2079, 1, 1).to_ad() == date(2022, 4, 14)
    assert BSDate(2079, 3, 32).to_ad() == date(2022, 7, 16)
    assert ad_to_bs(date(2022, 7, 17)) == BSDate(2079, 4, 1)


def test_ordinal_round_trip_across_years():
    start = BSDate(2070, 1, 1).to_ordinal()
    for ordinal in range(start, start + 4000, 37):
        d = BSDate.from_ordinal(ordinal)
        assert d.to_ordinal() == ordinal
        assert BSDate.from_ad(d.to_ad()) == d
        assert parse_bs(d.format()) == d
        assert parse_bs(d.format().replace("-", "/")) == d


def test_out_of_table_ordinal_raises():
    with pytest.raises(ValueError):
        BSDate.from_ordinal(BSDate(1970, 1, 1).to_ordinal() - 1)
    assert ad_to_bs(date(1800, 1, 1)) is None


def test_parse_accepts_both_separators():
    assert parse_bs("2078/01/15") == BSDate(2078, 1, 15)
    assert parse_bs("2078-1-5") == BSDate(2078, 1, 5)
    assert parse_bs(" 2079-03-32 ") == BSDate(2079, 3, 32)
    assert format_bs("2078/1/5") == "2078-01-05"


@pytest.mark.parametrize("raw", ["", None, "abc", "2078-02-32", "2078-13-01", "2078-01", "2078-01-01-01", "2200-01-01", "2078-01-\u00b9", "\u00b2078-01-01"])
def test_parse_rejects_invalid_dates(raw):
    assert parse_bs(raw) is None
    assert not is_valid_bs(raw)
    assert format_bs(raw) == ""


def test_constructor_validates_month_length():
    with pytest.raises(ValueError):
        BSDate(2078, 2, 32)


def test_day_stepping_crosses_month_and_year():
    assert BSDate(2079, 3, 32).day_after() == BSDate(2079, 4, 1)
    assert BSDate(2079, 1, 1).day_before() == BSDate(2078, 12, 30)


def test_diff_days_is_antisymmetric():
    assert diff_days("2078-01-01", "2079-01-01") == 365
    assert diff_days("2079-01-01", "2078-01-01") == -365
    assert diff_days("bad", "2079-01-01") == 0


def test_diff_ymd_borrows_previous_month_length():
    # 2078 Jestha has 31 days.
    assert diff_ymd("2078-01-15", "2078-03-10") == YMD(0, 1, 26)
    assert diff_ymd("2078-01-01", "2079-01-01") == YMD(1, 0, 0)
    assert diff_ymd("2079-01-01", "2078-01-01") == YMD()


def test_inclusive_spans():
    assert span_days("2078-01-01", "2078-12-30") == 365
    assert span_ymd("2078-01-01", "2078-12-30") == YMD(1, 0, 0)
    assert span_days("2078-01-01", "2078-01-01") == 1
    assert span_days("2078-01-02", "2078-01-01") == 0


def test_fixed_ymd_uses_365_and_30_44():
    assert fixed_ymd(1000) == YMD(2, 8, 26)
    assert fixed_ymd(731) == YMD(2, 0, 1)
    assert fixed_ymd(-5) == YMD()


def test_ymd_from_days():
    assert ymd_from_days(0) == YMD()
    assert ymd_from_days(365) == YMD(1, 0, 0)
