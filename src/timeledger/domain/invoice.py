"""Invoice domain service and amount calculation."""

import logging
from datetime import UTC, date, datetime, timedelta, tzinfo
from typing import Optional, Sequence

from timeledger.database.base import Database
from timeledger.domain.entities import Invoice, TimeEntry
from timeledger.domain.errors import (
    NoUpdateRequestedError,
    NotFoundError,
    ValidationError,
    invoice_settings_not_found,
)
from timeledger.domain.invoice_settings import InvoiceSettingsService
from timeledger.domain.time_entry import TimeEntryService, total_duration
from timeledger.utils.time_utils import hours

logger = logging.getLogger(__name__)


def calculate_invoice_totals(
    entries: Sequence[TimeEntry], hourly_rate: float
) -> tuple[timedelta, float]:
    """Compute the total duration of entries and the amount due for it.

    The amount is fractional hours times the rate, without rounding.
    """
    duration = total_duration(entries)
    return duration, hours(duration) * hourly_rate


class InvoiceService:
    """Service for creating and tracking invoices."""

    def __init__(self, db: Database, tz: tzinfo = UTC):
        """Initialize invoice service.

        Args:
            db: Database instance
            tz: Timezone whose calendar days bound invoice date ranges
        """
        self.db = db
        self.tz = tz
        self.settings_service = InvoiceSettingsService(db)
        self.time_entry_service = TimeEntryService(db)

    def create_invoice(self, settings_id: int, start_date: date, end_date: date) -> Invoice:
        """Create an invoice covering every time entry in a date range.

        Args:
            settings_id: ID of the invoice settings to bill with
            start_date: First day of the period of performance (inclusive)
            end_date: Last day of the period of performance (inclusive)

        Returns:
            The stored invoice with its time entry IDs

        Raises:
            NotFoundError: If settings_id is not the stored settings
            ValidationError: If start_date is after end_date
        """
        settings = self.settings_service.get_settings()
        if settings.id is None or settings.id != settings_id:
            raise NotFoundError(invoice_settings_not_found(settings_id))

        entries, _ = self.time_entry_service.list_time_entries(
            start_date=start_date, end_date=end_date, tz=self.tz
        )
        duration, amount_due = calculate_invoice_totals(entries, settings.hourly_rate)

        invoice = self.db.create_invoice(
            invoice_settings_id=settings.id,
            start_date=start_date,
            end_date=end_date,
            duration=duration,
            amount_due=amount_due,
            time_entry_ids=[entry.id for entry in entries],
        )
        logger.info(
            "Created invoice %d for %s - %s: %d entries, amount due %.2f",
            invoice.id,
            start_date,
            end_date,
            len(entries),
            amount_due,
        )
        return invoice

    def get_invoice(self, invoice_id: int) -> Optional[Invoice]:
        """Get invoice by ID."""
        return self.db.get_invoice(invoice_id)

    def list_invoices(
        self, ids: Optional[Sequence[int]] = None, archived: Optional[bool] = None
    ) -> list[Invoice]:
        """List invoices.

        Args:
            ids: Optional invoice IDs to restrict to
            archived: If given, only invoices whose archived flag matches

        Returns:
            Invoices ordered by ID
        """
        return self.db.list_invoices(ids=ids, archived=archived)

    def update_invoice(
        self,
        invoice_id: int,
        sent_to_client: Optional[datetime] = None,
        paid_by_client: Optional[datetime] = None,
    ) -> Invoice:
        """Record when an invoice was sent to or paid by the client.

        Each timestamp can be set once; everything else about an invoice is
        immutable.

        Raises:
            NoUpdateRequestedError: If neither timestamp is given
            NotFoundError: If the invoice doesn't exist
            ConflictError: If a given timestamp is already set
            ValidationError: If a timestamp is naive
        """
        if sent_to_client is None and paid_by_client is None:
            raise NoUpdateRequestedError(
                "Nothing to update: provide sent_to_client and/or paid_by_client"
            )

        for value in (sent_to_client, paid_by_client):
            if value is not None and value.tzinfo is None:
                raise ValidationError(f"Timestamp {value.isoformat()} has no timezone")

        # The store checks "still unset" in the same statement that writes
        invoice = self.db.update_invoice_timestamps(
            invoice_id, sent_to_client=sent_to_client, paid_by_client=paid_by_client
        )
        logger.info("Updated status timestamps of invoice %d", invoice_id)
        return invoice
