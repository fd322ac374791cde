"""Timestamp normalization and timezone helpers."""

from datetime import UTC, date, datetime, time, timedelta, tzinfo
from typing import Optional

from dateutil import tz

from timeledger.domain.errors import ConfigurationError, ValidationError, unknown_timezone

# Abbreviations resolved as fixed offsets. tz.gettz() only knows a few of
# these and would otherwise depend on the host's zoneinfo files.
TIMEZONE_ABBREVIATIONS = {
    "UTC": 0,
    "GMT": 0,
    "EST": -5,
    "EDT": -4,
    "CST": -6,
    "CDT": -5,
    "MST": -7,
    "MDT": -6,
    "PST": -8,
    "PDT": -7,
}

HOUR = timedelta(hours=1)


def resolve_timezone(label: str) -> tzinfo:
    """Resolve a timezone label into a tzinfo.

    Args:
        label: Abbreviation such as "EST" or an IANA name such as
            "America/New_York"

    Returns:
        tzinfo for the label

    Raises:
        ConfigurationError: If the label is unknown
    """
    label = (label or "").strip()
    if not label:
        raise ConfigurationError(unknown_timezone(label))

    offset_hours = TIMEZONE_ABBREVIATIONS.get(label.upper())
    if offset_hours is not None:
        return tz.tzoffset(label.upper(), offset_hours * 3600)

    zone = tz.gettz(label)
    if zone is None:
        raise ConfigurationError(unknown_timezone(label))
    return zone


def to_api_time(value: datetime) -> datetime:
    """Normalize an aware datetime to UTC, rounded to the nearest millisecond.

    Raises:
        ValidationError: If the datetime is naive
    """
    if value.tzinfo is None or value.utcoffset() is None:
        raise ValidationError(f"Datetime {value.isoformat()} has no timezone")

    utc_value = value.astimezone(UTC)
    rounded_ms = (utc_value.microsecond + 500) // 1000
    return utc_value.replace(microsecond=0) + timedelta(milliseconds=rounded_ms)


def elapsed(start: datetime, end: datetime) -> timedelta:
    """Absolute elapsed time between two aware datetimes."""
    return end.astimezone(UTC) - start.astimezone(UTC)


def start_of_day(day: date, zone: tzinfo) -> datetime:
    """Midnight at the start of a calendar day in a timezone."""
    return datetime.combine(day, time.min, tzinfo=zone)


def end_of_day(day: date, zone: tzinfo) -> datetime:
    """Last representable instant of a calendar day in a timezone."""
    return datetime.combine(day, time.max, tzinfo=zone)


def date_range_bounds(
    start_date: Optional[date], end_date: Optional[date], zone: tzinfo = UTC
) -> tuple[Optional[datetime], Optional[datetime]]:
    """Convert an inclusive calendar date range into half-open datetime bounds.

    The end bound is midnight of the day after end_date.
    """
    lower = start_of_day(start_date, zone) if start_date is not None else None
    upper = (
        start_of_day(end_date + timedelta(days=1), zone)
        if end_date is not None
        else None
    )
    return lower, upper


def hours(duration: timedelta) -> float:
    """Duration as fractional hours."""
    return duration / HOUR


def format_duration(duration: timedelta) -> str:
    """Render a duration as H:MM:SS, hours unbounded."""
    total_seconds = int(round(duration.total_seconds()))
    sign = "-" if total_seconds < 0 else ""
    total_seconds = abs(total_seconds)
    h, remainder = divmod(total_seconds, 3600)
    m, s = divmod(remainder, 60)
    return f"{sign}{h}:{m:02d}:{s:02d}"
