"""Domain model entities for timeledger.

These are pure data classes representing business concepts, independent of
database schema. Time entries normalize their timestamps and derive their
duration and identity fingerprint at construction, so every entry in the
system, parsed or loaded, carries the same canonical values.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Optional

from timeledger.domain.errors import ValidationError
from timeledger.domain.identity import compute_identity_hash
from timeledger.utils.time_utils import to_api_time


@dataclass(frozen=True)
class TimeEntry:
    """A period of time when work was completed."""

    start_time: datetime
    end_time: datetime
    comment: str = ""
    id: Optional[int] = field(default=None, compare=False)
    csv_import_id: Optional[int] = field(default=None, compare=False)
    duration: timedelta = field(init=False)
    identity_hash: str = field(init=False, repr=False)

    def __post_init__(self):
        start_time = to_api_time(self.start_time)
        end_time = to_api_time(self.end_time)
        duration = end_time - start_time
        if duration <= timedelta(0):
            raise ValidationError(
                f"Time entry must end after it starts "
                f"({start_time.isoformat()} - {end_time.isoformat()})"
            )

        # Frozen dataclass: derived fields are assigned through object.__setattr__
        object.__setattr__(self, "start_time", start_time)
        object.__setattr__(self, "end_time", end_time)
        object.__setattr__(self, "comment", self.comment or "")
        object.__setattr__(self, "duration", duration)
        object.__setattr__(
            self,
            "identity_hash",
            compute_identity_hash(start_time, end_time, self.comment or ""),
        )

    @property
    def identity(self) -> tuple[datetime, datetime, str]:
        """The (start_time, end_time, comment) tuple that identifies the entry."""
        return (self.start_time, self.end_time, self.comment)


@dataclass(frozen=True)
class CSVImport:
    """Record of one uploaded CSV file."""

    id: int
    file_name: str
    file_contents: str
    duplicate_time_entry_ids: tuple[int, ...]
    created_at: datetime


@dataclass(frozen=True)
class ReconcileResult:
    """Outcome of merging candidate entries into the store."""

    existing_entries: tuple[TimeEntry, ...]
    new_entries: tuple[TimeEntry, ...]


@dataclass(frozen=True)
class CSVImportResult:
    """Outcome of importing one CSV file."""

    csv_import: CSVImport
    existing_entries: tuple[TimeEntry, ...]
    new_entries: tuple[TimeEntry, ...]


@dataclass(frozen=True)
class BillingPeriod:
    """A half-open window [start_time, end_time) and the entries starting in it."""

    start_time: datetime
    end_time: datetime
    entries: tuple[TimeEntry, ...] = ()

    @property
    def total_duration(self) -> timedelta:
        return sum((entry.duration for entry in self.entries), timedelta(0))

    def contains(self, instant: datetime) -> bool:
        return self.start_time <= instant < self.end_time


@dataclass(frozen=True)
class InvoiceSettings:
    """Billing configuration. id is None until the settings are first saved."""

    hourly_rate: float = 0.0
    recipient: str = ""
    sender: str = ""
    id: Optional[int] = None


@dataclass(frozen=True)
class Invoice:
    """Invoice domain entity."""

    id: int
    invoice_settings_id: int
    start_date: date
    end_date: date
    duration: timedelta
    amount_due: float
    sent_to_client: Optional[datetime]
    paid_by_client: Optional[datetime]
    archived: bool
    created_at: datetime
    time_entry_ids: tuple[int, ...] = ()
