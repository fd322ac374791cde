"""Billing period aggregation."""

from datetime import UTC, datetime, timedelta, tzinfo
from enum import Enum
from typing import Sequence

from timeledger.domain.entities import BillingPeriod, TimeEntry
from timeledger.domain.errors import ValidationError


class PeriodLength(Enum):
    """Length of a billing period.

    MONTHLY is two bi-weekly spans, not a calendar month.
    """

    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"

    @property
    def span(self) -> timedelta:
        return PERIOD_SPANS[self]

    @classmethod
    def parse(cls, value: str) -> "PeriodLength":
        """Parse a period name such as "weekly" or "bi-weekly"."""
        normalized = value.strip().lower().replace("-", "").replace("_", "")
        for period in cls:
            if period.value == normalized:
                return period
        choices = ", ".join(period.value for period in cls)
        raise ValidationError(f"Unknown billing period '{value}'. Supported periods: {choices}")


PERIOD_SPANS = {
    PeriodLength.WEEKLY: timedelta(days=7),
    PeriodLength.BIWEEKLY: timedelta(days=14),
    PeriodLength.MONTHLY: timedelta(days=28),
}


def period_anchor(instant: datetime, tz: tzinfo = UTC) -> datetime:
    """Midnight of the first day of the month containing instant, in tz."""
    local = instant.astimezone(tz)
    return local.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def aggregate_billing_periods(
    entries: Sequence[TimeEntry], period_length: PeriodLength, tz: tzinfo = UTC
) -> list[BillingPeriod]:
    """Group entries into consecutive fixed-length billing periods.

    Periods are anchored at the start of the month of the first entry and
    advance by ``period_length`` from there. Each entry lands in the period
    containing its start time; periods that receive no entry are not
    returned.

    Args:
        entries: Entries sorted ascending by start time
        period_length: Length of each period
        tz: Timezone in which the month anchor is taken

    Returns:
        Billing periods in chronological order

    Raises:
        ValidationError: If entries are not sorted by start time
    """
    if not entries:
        return []

    span = period_length.span
    period_start = period_anchor(entries[0].start_time, tz).astimezone(UTC)
    period_end = period_start + span

    periods: list[BillingPeriod] = []
    current: list[TimeEntry] = []
    previous_start = None

    for entry in entries:
        if previous_start is not None and entry.start_time < previous_start:
            raise ValidationError("Time entries must be sorted by start time")
        previous_start = entry.start_time

        if entry.start_time >= period_end:
            if current:
                periods.append(BillingPeriod(period_start, period_end, tuple(current)))
                current = []
            # Skip whole empty periods in one step
            skipped = (entry.start_time - period_start) // span
            period_start += span * skipped
            period_end = period_start + span

        current.append(entry)

    periods.append(BillingPeriod(period_start, period_end, tuple(current)))
    return periods
