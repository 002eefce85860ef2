from __future__ import annotations

from datetime import date, datetime

import pytest

from marks.excel_dates import excel_serial_to_components, is_excel_serial, normalize_excel_date


@pytest.mark.parametrize("raw", [None, "", "   ", "From Date", "to date", "Date To"])
def test_blank_and_header_echoes_become_empty(raw):
    assert normalize_excel_date(raw) == ""


def test_bs_literals_are_canonicalized():
    assert normalize_excel_date("2078/01/15") == "2078-01-15"
    assert normalize_excel_date("2078-1-5") == "2078-01-05"
    assert normalize_excel_date("1/15/2078") == "2078-01-15"


def test_serials_keep_their_digits_as_bs():
    assert excel_serial_to_components(44927) == (2023, 1, 1)
    assert normalize_excel_date(44927) == "2023-01-01"
    assert normalize_excel_date(44927.75) == "2023-01-01"
    assert normalize_excel_date("44927") == "2023-01-01"


def test_numbers_outside_serial_range_pass_through():
    assert normalize_excel_date(123) == "123"
    assert normalize_excel_date("999999") == "999999"
    assert not is_excel_serial(True)
    assert is_excel_serial(44927)


def test_date_cells_are_read_as_bs_components():
    assert normalize_excel_date(datetime(2078, 1, 15, 0, 0)) == "2078-01-15"
    assert normalize_excel_date(date(2079, 3, 31)) == "2079-03-31"


def test_ad_strings_are_converted():
    assert normalize_excel_date("16-Jul-2022") == "2079-03-32"
    assert normalize_excel_date("2022-07-16T00:00:00") == "2079-03-32"


def test_two_digit_future_year_moves_back_a_century():
    out = normalize_excel_date("16-Jul-30", today=date(2026, 1, 1))
    assert out.startswith("1987-0")


def test_unrecognised_text_is_returned_raw():
    assert normalize_excel_date("  n/a ") == "n/a"
    assert normalize_excel_date("2078-02-32") == "2078-02-32"
    assert normalize_excel_date("2078-01-\u00b9") == "2078-01-\u00b9"
