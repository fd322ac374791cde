"""Shared domain error messages and error types."""

from typing import Optional


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NoUpdateRequestedError(ValidationError):
    """An update was requested without any field to change."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as overwriting a write-once field."""


class ConfigurationError(DomainError):
    """Import configuration (columns, timezone) is unusable."""


class MissingColumnError(ConfigurationError):
    """A configured CSV column is absent from the header row."""

    def __init__(self, column: str):
        self.column = column
        super().__init__(f"CSV file is missing column '{column}'")


class RowParseError(DomainError):
    """A CSV data row could not be turned into a time entry."""

    def __init__(
        self, row_num: int, column: Optional[str], raw_value: Optional[str], reason: str
    ):
        self.row_num = row_num
        self.column = column
        self.raw_value = raw_value
        self.reason = reason
        if column is None:
            # Record-level failure, no single cell to blame
            message = f"Row {row_num}: {reason}"
        else:
            message = f"Row {row_num}: could not parse column '{column}' value '{raw_value}': {reason}"
        super().__init__(message)


class PersistenceError(Exception):
    """The store failed to execute an operation; the transaction was rolled back."""


def invoice_not_found(invoice_id: int) -> str:
    """Return message for missing invoice."""
    return f"Invoice {invoice_id} not found"


def invoice_settings_not_found(settings_id: Optional[int]) -> str:
    """Return message for missing invoice settings."""
    return f"Invoice settings {settings_id} not found"


def csv_import_not_found(csv_import_id: int) -> str:
    """Return message for missing CSV import."""
    return f"CSV import {csv_import_id} not found"


def invoice_field_already_set(invoice_id: int, field_name: str) -> str:
    """Return message when a write-once invoice timestamp is set again."""
    return f"Invoice {invoice_id} already has {field_name} set"


def unknown_timezone(label: str) -> str:
    """Return message for an unresolvable timezone label."""
    return f"Unknown timezone '{label}'"
