"""Time entry domain service: reconciliation and listing."""

import logging
from datetime import UTC, date, timedelta, tzinfo
from typing import Optional, Sequence

from timeledger.database.base import Database
from timeledger.domain.entities import ReconcileResult, TimeEntry
from timeledger.domain.errors import ValidationError
from timeledger.utils.time_utils import date_range_bounds

logger = logging.getLogger(__name__)


def total_duration(entries: Sequence[TimeEntry]) -> timedelta:
    """Sum of the durations of entries."""
    return sum((entry.duration for entry in entries), timedelta(0))


def unique_by_identity(entries: Sequence[TimeEntry]) -> list[TimeEntry]:
    """Drop entries whose identity hash was already seen, keeping first occurrences."""
    seen: dict[str, TimeEntry] = {}
    for entry in entries:
        seen.setdefault(entry.identity_hash, entry)
    return list(seen.values())


class TimeEntryService:
    """Service for storing and querying time entries."""

    def __init__(self, db: Database):
        """Initialize time entry service.

        Args:
            db: Database instance
        """
        self.db = db

    def reconcile_and_store(
        self, csv_import_id: int, entries: Sequence[TimeEntry]
    ) -> ReconcileResult:
        """Merge candidate entries into the store without creating duplicates.

        Entries already stored are returned as the stored records and are not
        inserted again. The rest are inserted with insert-or-ignore, linked to
        the CSV import. An entry that a concurrent import stored between the
        lookup and the insert comes back attributed to that other import and
        is reported as existing. The CSV import is updated with the IDs of
        every existing entry. All of this is one transaction: on failure
        nothing is stored.

        Args:
            csv_import_id: ID of the CSV import the entries came from
            entries: Candidate entries, duplicates within the batch allowed

        Returns:
            ReconcileResult with existing and new entries, both in candidate order

        Raises:
            NotFoundError: If the CSV import does not exist
            PersistenceError: If the store fails
        """
        result = self.db.reconcile_time_entries(csv_import_id, self.candidates(entries))
        logger.info(
            "CSV import %d: %d new time entries, %d already stored",
            csv_import_id,
            len(result.new_entries),
            len(result.existing_entries),
        )
        return result

    @staticmethod
    def candidates(entries: Sequence[TimeEntry]) -> list[TimeEntry]:
        """Entries with in-batch duplicates collapsed, first occurrence kept."""
        candidates = unique_by_identity(entries)
        if len(candidates) < len(entries):
            logger.debug(
                "Collapsed %d duplicate entries within the batch",
                len(entries) - len(candidates),
            )
        return candidates

    def list_time_entries(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        tz: tzinfo = UTC,
    ) -> tuple[list[TimeEntry], timedelta]:
        """List time entries in a date range along with their total duration.

        Args:
            start_date: Optional first day (inclusive)
            end_date: Optional last day (inclusive)
            tz: Timezone whose calendar days bound the range

        Returns:
            Tuple of (entries ordered by start time, total duration)

        Raises:
            ValidationError: If start_date is after end_date
        """
        if start_date is not None and end_date is not None and start_date > end_date:
            raise ValidationError(f"Start date {start_date} is after end date {end_date}")

        lower, upper = date_range_bounds(start_date, end_date, tz)
        entries = self.db.list_time_entries(start_time=lower, end_time=upper)
        return entries, total_duration(entries)
