"""Date parsing utilities."""

from datetime import date, datetime, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]

PERIODS = ["this-month", "this-year", "this-week", "last-month", "last-year", "last-week"]


def parse_date(value: str | date | datetime) -> date:
    """Parse a submitted date into a date object.

    Accepts date/datetime objects, ISO strings as sent by browsers
    ("2024-01-15", "2024-01-15T00:00:00.000Z"), other formats dateutil
    understands ("January 15, 2024"), and relative words:
    "today", "yesterday", "tomorrow", "last/this/next week|month|year",
    "last monday".

    Args:
        value: Date value or string

    Returns:
        Date object

    Raises:
        ValueError: If the value cannot be parsed
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Could not parse date '{value}'")

    date_str = value.strip().lower()
    today = date.today()

    relative = _parse_relative(date_str, today)
    if relative is not None:
        return relative

    try:
        return date_parser.isoparse(value.strip()).date()
    except ValueError:
        pass

    try:
        return date_parser.parse(date_str).date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{value}': {e}")


def _parse_relative(date_str: str, today: date) -> date | None:
    fixed = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    if date_str in fixed:
        return fixed[date_str]

    prefix, _, period = date_str.partition(" ")
    if prefix not in ("last", "this", "next") or not period:
        return None

    offset = {"last": -1, "this": 0, "next": 1}[prefix]

    if period == "month":
        return (today + relativedelta(months=offset)).replace(day=1)
    if period == "year":
        return today.replace(month=1, day=1) + relativedelta(years=offset)
    if period == "week":
        # Monday of the week
        return today - timedelta(days=today.weekday()) + timedelta(weeks=offset)
    if prefix == "last" and period in WEEKDAYS:
        days_ago = (today.weekday() - WEEKDAYS.index(period)) % 7
        return today - timedelta(days=days_ago or 7)
    return None


def get_date_range(period: str) -> tuple[date, date]:
    """Get start and end dates for a named period.

    Args:
        period: One of this-month, this-year, this-week, last-month, last-year, last-week

    Returns:
        Tuple of (start_date, end_date); "this-*" periods end today

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    today = date.today()

    if period == "this-month":
        return today.replace(day=1), today
    if period == "this-year":
        return today.replace(month=1, day=1), today
    if period == "this-week":
        return today - timedelta(days=today.weekday()), today
    if period == "last-month":
        first_of_month = today.replace(day=1)
        return first_of_month - relativedelta(months=1), first_of_month - timedelta(days=1)
    if period == "last-year":
        first_of_year = today.replace(month=1, day=1)
        return first_of_year - relativedelta(years=1), first_of_year - timedelta(days=1)
    if period == "last-week":
        start_date = today - timedelta(days=today.weekday() + 7)
        return start_date, start_date + timedelta(days=6)

    raise ValueError(f"Unknown period: '{period}'. Supported periods: {', '.join(PERIODS)}")
