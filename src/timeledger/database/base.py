"""Abstract database interface."""

from abc import ABC, abstractmethod
from datetime import date, datetime, timedelta
from typing import Iterable, Optional, Sequence

# Import entities directly to avoid circular import through domain/__init__.py
from timeledger.domain.entities import (
    CSVImport,
    Invoice,
    InvoiceSettings,
    ReconcileResult,
    TimeEntry,
)


class Database(ABC):
    """Abstract database interface for timeledger."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # CSV import operations
    @abstractmethod
    def create_csv_import(self, file_name: str, file_contents: str) -> CSVImport:
        """Record an uploaded CSV file."""
        pass

    @abstractmethod
    def get_csv_import(self, csv_import_id: int) -> Optional[CSVImport]:
        """Get CSV import by ID."""
        pass

    @abstractmethod
    def set_csv_import_duplicates(
        self, csv_import_id: int, duplicate_time_entry_ids: Sequence[int]
    ) -> CSVImport:
        """Record the IDs of stored entries a CSV import repeated."""
        pass

    # Time entry operations
    @abstractmethod
    def find_time_entries_by_identity(
        self, identities: Iterable[tuple[datetime, datetime, str]]
    ) -> list[TimeEntry]:
        """Find stored entries matching any (start_time, end_time, comment) tuple.

        The lookup is batched; it does not issue one query per tuple.
        """
        pass

    @abstractmethod
    def insert_time_entries_ignore_conflicts(
        self, csv_import_id: int, entries: Sequence[TimeEntry]
    ) -> list[TimeEntry]:
        """Insert entries, silently skipping any whose identity hash is already stored.

        All rows are written in one transaction. Returns the stored rows for
        every given entry, whether this call or an earlier one inserted them;
        the csv_import_id of each returned entry tells which.
        """
        pass

    @abstractmethod
    def reconcile_time_entries(
        self, csv_import_id: int, entries: Sequence[TimeEntry]
    ) -> ReconcileResult:
        """Store the entries not stored yet and record the rest on the CSV import.

        Lookup, insert-or-ignore and the duplicate ID update run in one
        transaction; on failure nothing is kept. Entries stored by an earlier
        import, or by a concurrent one, come back as existing.

        Raises:
            NotFoundError: If the CSV import does not exist
        """
        pass

    @abstractmethod
    def import_csv_entries(
        self, file_name: str, file_contents: str, entries: Sequence[TimeEntry]
    ) -> tuple[CSVImport, ReconcileResult]:
        """Create a CSV import and reconcile its entries in one transaction."""
        pass

    @abstractmethod
    def list_time_entries(
        self,
        start_time: Optional[datetime] = None,
        end_time: Optional[datetime] = None,
    ) -> list[TimeEntry]:
        """List time entries ordered by start time.

        Args:
            start_time: Optional inclusive lower bound on entry start time
            end_time: Optional exclusive upper bound on entry start time
        """
        pass

    # Invoice settings operations
    @abstractmethod
    def get_invoice_settings(self) -> Optional[InvoiceSettings]:
        """Get the stored invoice settings, None if never set."""
        pass

    @abstractmethod
    def set_invoice_settings(
        self, hourly_rate: float, recipient: str, sender: str
    ) -> InvoiceSettings:
        """Insert or replace the single invoice settings row."""
        pass

    # Invoice operations
    @abstractmethod
    def create_invoice(
        self,
        invoice_settings_id: int,
        start_date: date,
        end_date: date,
        duration: timedelta,
        amount_due: float,
        time_entry_ids: Sequence[int],
    ) -> Invoice:
        """Create an invoice and its time entry links in one transaction."""
        pass

    @abstractmethod
    def get_invoice(self, invoice_id: int) -> Optional[Invoice]:
        """Get invoice by ID."""
        pass

    @abstractmethod
    def list_invoices(
        self, ids: Optional[Sequence[int]] = None, archived: Optional[bool] = None
    ) -> list[Invoice]:
        """List invoices ordered by ID, optionally filtered by IDs and archived flag."""
        pass

    @abstractmethod
    def update_invoice_timestamps(
        self,
        invoice_id: int,
        sent_to_client: Optional[datetime] = None,
        paid_by_client: Optional[datetime] = None,
    ) -> Invoice:
        """Set whichever of the two status timestamps are given.

        Each timestamp is written only while it is still unset, checked in
        the same statement that writes it.

        Raises:
            NotFoundError: If the invoice doesn't exist
            ConflictError: If a given timestamp is already set
        """
        pass
