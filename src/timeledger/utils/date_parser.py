"""Date parsing utilities for command line input."""

from datetime import UTC, date, datetime, timedelta, tzinfo
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

PERIODS = ("this-week", "this-month", "last-week", "last-month")


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports absolute dates ("2024-01-15", "January 15, 2024") and the
    relative forms "today", "yesterday", "this week", "this month",
    "last week" and "last month". Week forms resolve to Monday, month forms
    to the first day of the month.

    Args:
        date_str: Date string

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()
    monday = today - timedelta(days=today.weekday())

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "this week": monday,
        "last week": monday - timedelta(days=7),
        "this month": today.replace(day=1),
        "last month": (today - relativedelta(months=1)).replace(day=1),
    }
    if date_str in relative_dates:
        return relative_dates[date_str]

    try:
        return date_parser.parse(date_str).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def parse_timestamp(value: str, default_tz: tzinfo = UTC) -> datetime:
    """Parse a date or date-time string into an aware datetime.

    Values without an offset are taken to be in default_tz. "now" is the
    current time.

    Raises:
        ValueError: If the string cannot be parsed
    """
    value = value.strip()
    if value.lower() == "now":
        return datetime.now(default_tz)

    try:
        parsed = date_parser.parse(value)
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse timestamp '{value}': {e}")

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=default_tz)
    return parsed


def get_date_range(period: str) -> tuple[date, date]:
    """Get start and end dates for a named period.

    Current periods end today; past periods end on their last day.

    Args:
        period: One of this-week, this-month, last-week, last-month

    Returns:
        Tuple of (start_date, end_date)

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    today = date.today()
    monday = today - timedelta(days=today.weekday())
    first_of_month = today.replace(day=1)

    if period == "this-week":
        return (monday, today)
    elif period == "this-month":
        return (first_of_month, today)
    elif period == "last-week":
        start_date = monday - timedelta(days=7)
        return (start_date, start_date + timedelta(days=6))
    elif period == "last-month":
        return ((first_of_month - relativedelta(months=1)), first_of_month - timedelta(days=1))

    raise ValueError(f"Unknown period: '{period}'. Supported periods: {', '.join(PERIODS)}")
