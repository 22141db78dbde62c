"""Tests for date parsing and named periods."""

from datetime import date, datetime, timedelta

import pytest
from dateutil.relativedelta import relativedelta

from tokobook.utils.date_parser import get_date_range, parse_date


def test_parse_iso_date():
    assert parse_date("2024-01-15") == date(2024, 1, 15)


def test_parse_browser_timestamp():
    """Date inputs serialized by browsers carry a time and a zone."""
    assert parse_date("2024-01-15T00:00:00.000Z") == date(2024, 1, 15)


def test_parse_date_objects():
    assert parse_date(date(2024, 1, 15)) == date(2024, 1, 15)
    assert parse_date(datetime(2024, 1, 15, 13, 45)) == date(2024, 1, 15)


def test_parse_standard_formats():
    assert parse_date("January 15, 2024") == date(2024, 1, 15)
    assert parse_date("15/01/2024") == date(2024, 1, 15)


@pytest.mark.parametrize(
    "text, offset",
    [("today", 0), ("Yesterday", -1), (" tomorrow ", 1)],
)
def test_parse_fixed_relative_words(text, offset):
    assert parse_date(text) == date.today() + timedelta(days=offset)


def test_parse_relative_periods():
    today = date.today()
    assert parse_date("this month") == today.replace(day=1)
    assert parse_date("last month") == (today - relativedelta(months=1)).replace(day=1)
    assert parse_date("this year") == date(today.year, 1, 1)
    assert parse_date("last year") == date(today.year - 1, 1, 1)

    last_week = parse_date("last week")
    assert last_week.weekday() == 0
    assert last_week == today - timedelta(days=today.weekday() + 7)


def test_parse_last_weekday():
    result = parse_date("last friday")
    assert result.weekday() == 4
    assert 1 <= (date.today() - result).days <= 7


@pytest.mark.parametrize("value", ["", "   ", "not-a-date", "last invalid", None, 20240115])
def test_parse_invalid(value):
    with pytest.raises(ValueError):
        parse_date(value)


def test_get_date_range_this_periods():
    today = date.today()
    assert get_date_range("this-month") == (today.replace(day=1), today)
    assert get_date_range("this-year") == (date(today.year, 1, 1), today)

    start, end = get_date_range("this-week")
    assert start.weekday() == 0
    assert end == today


def test_get_date_range_last_month():
    today = date.today()
    start, end = get_date_range("last-month")
    assert start == (today - relativedelta(months=1)).replace(day=1)
    assert end == today.replace(day=1) - timedelta(days=1)
    assert (start.year, start.month) == (end.year, end.month)


def test_get_date_range_last_year():
    today = date.today()
    assert get_date_range("last-year") == (date(today.year - 1, 1, 1), date(today.year - 1, 12, 31))


def test_get_date_range_last_week():
    start, end = get_date_range("last-week")
    assert start.weekday() == 0
    assert end.weekday() == 6
    assert (end - start).days == 6
    assert end < date.today()


def test_get_date_range_accepts_case_and_spaces():
    assert get_date_range(" This-Month ") == get_date_range("this-month")


def test_get_date_range_invalid_period():
    with pytest.raises(ValueError, match="Unknown period"):
        get_date_range("next-decade")
