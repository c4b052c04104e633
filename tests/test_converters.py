from datetime import datetime

import pytest

from core.converters import (
    format_indian_number,
    format_nepali_currency,
    format_transaction_date,
    format_transaction_time,
    parse_date_time,
    parse_number,
)


@pytest.mark.parametrize("raw,expected", [
    ("12", 12.0),
    (" 2.5 ", 2.5),
    (7, 7.0),
    ("", 0.0),
    ("abc", 0.0),
    (None, 0.0),
    ("nan", 0.0),
    ("inf", 0.0),
    (True, 0.0),
])
def test_parse_number_falls_back_to_zero(raw, expected):
    assert parse_number(raw) == expected


def test_parse_date_time():
    assert parse_date_time("2025-06-03T14:44") == datetime(2025, 6, 3, 14, 44)
    assert parse_date_time("2025-06-03T14:44:00Z").utcoffset().total_seconds() == 0
    stamp = datetime(2024, 1, 1)
    assert parse_date_time(stamp) is stamp
    assert isinstance(parse_date_time(""), datetime)
    with pytest.raises(ValueError):
        parse_date_time("3rd of June")


@pytest.mark.parametrize("dt,date,time", [
    (datetime(2025, 6, 3, 14, 44), "3 June 2025", "2:44 PM"),
    (datetime(2025, 12, 25, 0, 5), "25 December 2025", "12:05 AM"),
    (datetime(2025, 1, 9, 12, 0), "9 January 2025", "12:00 PM"),
])
def test_transaction_date_and_time(dt, date, time):
    assert format_transaction_date(dt) == date
    assert format_transaction_time(dt) == time


@pytest.mark.parametrize("amount,expected", [
    (500, "रु 500"),
    (1234.5, "रु 1,234.5"),
    (1000000, "रु 1,000,000"),
    (-2500, "-रु 2,500"),
])
def test_format_nepali_currency(amount, expected):
    assert format_nepali_currency(amount) == expected


@pytest.mark.parametrize("num,expected", [
    (0, "0"),
    (999, "999"),
    (12345, "12,345"),
    (1234.5, "1,234.5"),
    (150000, "1.50 Lakh"),
    (12345678, "1.23 Crore"),
])
def test_format_indian_number(num, expected):
    assert format_indian_number(num) == expected
