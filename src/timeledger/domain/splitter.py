"""Day-boundary splitting of logged intervals."""

import logging
from datetime import UTC, datetime, timedelta, tzinfo
from typing import NamedTuple

from timeledger.domain.errors import ValidationError
from timeledger.utils.time_utils import elapsed, end_of_day, start_of_day

logger = logging.getLogger(__name__)


class Interval(NamedTuple):
    """A logged interval and its comment."""

    start: datetime
    end: datetime
    comment: str

    @property
    def duration(self) -> timedelta:
        return elapsed(self.start, self.end)


def split_interval(
    start: datetime, end: datetime, comment: str, zone: tzinfo = UTC
) -> list[Interval]:
    """Split an interval so that no piece crosses midnight in ``zone``.

    An interval on a single calendar date is returned unchanged. Otherwise the
    first piece runs from ``start`` to the last instant of its day, each whole
    day in between becomes its own piece, and the last piece starts at
    midnight of the end date and runs for whatever duration remains. The
    durations of the pieces always add up to the original duration.

    An ``end`` exactly at midnight belongs to the day before it.

    Args:
        start: Timezone-aware start
        end: Timezone-aware end, after start
        comment: Comment carried by every piece
        zone: Timezone whose calendar days are used

    Returns:
        One or more intervals in chronological order

    Raises:
        ValidationError: If a datetime is naive or end is not after start
    """
    if start.tzinfo is None or end.tzinfo is None:
        raise ValidationError("Interval start and end must be timezone-aware")

    total = elapsed(start, end)
    if total <= timedelta(0):
        raise ValidationError(
            f"Interval must end after it starts ({start.isoformat()} - {end.isoformat()})"
        )

    local_start = start.astimezone(zone)
    local_end = end.astimezone(zone)
    first_day = local_start.date()
    last_day = local_end.date()
    if local_end == start_of_day(last_day, zone):
        last_day -= timedelta(days=1)

    if first_day == last_day:
        return [Interval(start, end, comment)]

    pieces = [Interval(start, end_of_day(first_day, zone), comment)]
    day = first_day + timedelta(days=1)
    while day < last_day:
        pieces.append(Interval(start_of_day(day, zone), end_of_day(day, zone), comment))
        day += timedelta(days=1)

    covered = sum((piece.duration for piece in pieces), timedelta(0))
    last_start = start_of_day(last_day, zone)
    last_end = (last_start.astimezone(UTC) + (total - covered)).astimezone(zone)
    pieces.append(Interval(last_start, last_end, comment))

    logger.debug(
        "Split interval %s - %s into %d pieces", start.isoformat(), end.isoformat(), len(pieces)
    )
    return pieces
