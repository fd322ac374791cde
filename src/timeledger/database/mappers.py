"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the domain entities stay
independent of the table layout.
"""

from timeledger.domain import entities as domain
from timeledger.database.models import (
    CSVImport as ORMCSVImport,
    Invoice as ORMInvoice,
    InvoiceSettings as ORMInvoiceSettings,
    TimeEntry as ORMTimeEntry,
)


def time_entry_to_domain(orm_entry: ORMTimeEntry) -> domain.TimeEntry:
    """Convert SQLAlchemy TimeEntry model to domain TimeEntry entity."""
    return domain.TimeEntry(
        start_time=orm_entry.start_time,
        end_time=orm_entry.end_time,
        comment=orm_entry.comment,
        id=orm_entry.id,
        csv_import_id=orm_entry.csv_import_id,
    )


def time_entry_to_row(entry: domain.TimeEntry, csv_import_id: int) -> dict:
    """Convert a domain TimeEntry into column values for a bulk insert."""
    return {
        "start_time": entry.start_time,
        "end_time": entry.end_time,
        "duration": entry.duration,
        "comment": entry.comment,
        "identity_hash": entry.identity_hash,
        "csv_import_id": csv_import_id,
    }


def csv_import_to_domain(orm_import: ORMCSVImport) -> domain.CSVImport:
    """Convert SQLAlchemy CSVImport model to domain CSVImport entity."""
    return domain.CSVImport(
        id=orm_import.id,
        file_name=orm_import.file_name,
        file_contents=orm_import.file_contents,
        duplicate_time_entry_ids=tuple(orm_import.duplicate_time_entry_ids or ()),
        created_at=orm_import.created_at,
    )


def invoice_settings_to_domain(orm_settings: ORMInvoiceSettings) -> domain.InvoiceSettings:
    """Convert SQLAlchemy InvoiceSettings model to domain InvoiceSettings entity."""
    return domain.InvoiceSettings(
        id=orm_settings.id,
        hourly_rate=orm_settings.hourly_rate,
        recipient=orm_settings.recipient,
        sender=orm_settings.sender,
    )


def invoice_to_domain(orm_invoice: ORMInvoice) -> domain.Invoice:
    """Convert SQLAlchemy Invoice model to domain Invoice entity."""
    return domain.Invoice(
        id=orm_invoice.id,
        invoice_settings_id=orm_invoice.invoice_settings_id,
        start_date=orm_invoice.start_date,
        end_date=orm_invoice.end_date,
        duration=orm_invoice.duration,
        amount_due=orm_invoice.amount_due,
        sent_to_client=orm_invoice.sent_to_client,
        paid_by_client=orm_invoice.paid_by_client,
        archived=orm_invoice.archived,
        created_at=orm_invoice.created_at,
        time_entry_ids=tuple(link.time_entry_id for link in orm_invoice.invoice_time_entries),
    )
