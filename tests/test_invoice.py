"""Tests for invoice creation and status updates."""

import pytest
from datetime import UTC, date, datetime, timedelta

from timeledger.domain.entities import TimeEntry
from timeledger.domain.errors import (
    ConflictError,
    NoUpdateRequestedError,
    NotFoundError,
    ValidationError,
)
from timeledger.domain.invoice import InvoiceService, calculate_invoice_totals
from timeledger.domain.time_entry import TimeEntryService


def _entry(day, start_hour, end_hour):
    return TimeEntry(
        start_time=datetime(2024, 1, day, start_hour, 0, tzinfo=UTC),
        end_time=datetime(2024, 1, day, end_hour, 0, tzinfo=UTC),
        comment=f"day {day}",
    )


@pytest.fixture
def stored_entries(temp_db):
    """Store 10 hours of work between January 15 and 17, plus one entry outside."""
    csv_import = temp_db.create_csv_import(file_name="log.csv", file_contents="")
    result = TimeEntryService(temp_db).reconcile_and_store(
        csv_import.id,
        [_entry(15, 9, 13), _entry(16, 9, 12), _entry(17, 9, 12), _entry(25, 9, 17)],
    )
    return result.new_entries


def test_calculate_invoice_totals():
    entries = [_entry(15, 9, 13), _entry(16, 9, 15)]

    duration, amount_due = calculate_invoice_totals(entries, 25.0)

    assert duration == timedelta(hours=10)
    assert amount_due == 250.0


def test_calculate_invoice_totals_fractional_hours():
    start = datetime(2024, 1, 15, 9, 0, tzinfo=UTC)
    entry = TimeEntry(start_time=start, end_time=start + timedelta(minutes=90), comment="")

    assert calculate_invoice_totals([entry], 30.0) == (timedelta(minutes=90), 45.0)


def test_calculate_invoice_totals_no_entries():
    assert calculate_invoice_totals([], 25.0) == (timedelta(0), 0.0)


def test_create_invoice(invoice_service, saved_settings, stored_entries):
    invoice = invoice_service.create_invoice(
        settings_id=saved_settings.id, start_date=date(2024, 1, 15), end_date=date(2024, 1, 17)
    )

    assert invoice.id is not None
    assert invoice.invoice_settings_id == saved_settings.id
    assert invoice.duration == timedelta(hours=10)
    assert invoice.amount_due == 250.0
    assert invoice.time_entry_ids == tuple(entry.id for entry in stored_entries[:3])
    assert invoice.sent_to_client is None
    assert invoice.paid_by_client is None
    assert invoice.archived is False
    assert invoice_service.get_invoice(invoice.id) == invoice


def test_create_invoice_for_empty_range(invoice_service, saved_settings, stored_entries):
    invoice = invoice_service.create_invoice(
        settings_id=saved_settings.id, start_date=date(2024, 3, 1), end_date=date(2024, 3, 31)
    )

    assert invoice.time_entry_ids == ()
    assert invoice.amount_due == 0.0


def test_create_invoice_unknown_settings(invoice_service, saved_settings):
    with pytest.raises(NotFoundError):
        invoice_service.create_invoice(
            settings_id=saved_settings.id + 1,
            start_date=date(2024, 1, 1),
            end_date=date(2024, 1, 31),
        )


def test_create_invoice_without_saved_settings(invoice_service):
    with pytest.raises(NotFoundError):
        invoice_service.create_invoice(
            settings_id=1, start_date=date(2024, 1, 1), end_date=date(2024, 1, 31)
        )


def test_create_invoice_inverted_range(invoice_service, saved_settings):
    with pytest.raises(ValidationError):
        invoice_service.create_invoice(
            settings_id=saved_settings.id,
            start_date=date(2024, 2, 1),
            end_date=date(2024, 1, 1),
        )


def test_list_invoices(invoice_service, saved_settings, stored_entries):
    first = invoice_service.create_invoice(saved_settings.id, date(2024, 1, 15), date(2024, 1, 16))
    second = invoice_service.create_invoice(saved_settings.id, date(2024, 1, 17), date(2024, 1, 31))

    assert [invoice.id for invoice in invoice_service.list_invoices()] == [first.id, second.id]
    assert [invoice.id for invoice in invoice_service.list_invoices(ids=[second.id])] == [second.id]
    assert len(invoice_service.list_invoices(archived=False)) == 2
    assert invoice_service.list_invoices(archived=True) == []


def test_update_sets_timestamps_once(invoice_service, saved_settings, stored_entries):
    invoice = invoice_service.create_invoice(saved_settings.id, date(2024, 1, 15), date(2024, 1, 17))
    sent_at = datetime(2024, 2, 1, 9, 30, tzinfo=UTC)
    paid_at = datetime(2024, 2, 10, 12, 0, tzinfo=UTC)

    updated = invoice_service.update_invoice(invoice.id, sent_to_client=sent_at)
    assert updated.sent_to_client == sent_at
    assert updated.paid_by_client is None

    updated = invoice_service.update_invoice(invoice.id, paid_by_client=paid_at)
    assert updated.sent_to_client == sent_at
    assert updated.paid_by_client == paid_at
    assert updated.amount_due == invoice.amount_due

    with pytest.raises(ConflictError):
        invoice_service.update_invoice(invoice.id, sent_to_client=paid_at)


def test_update_requires_a_field(invoice_service, saved_settings, stored_entries):
    invoice = invoice_service.create_invoice(saved_settings.id, date(2024, 1, 15), date(2024, 1, 17))

    with pytest.raises(NoUpdateRequestedError):
        invoice_service.update_invoice(invoice.id)


def test_update_unknown_invoice(invoice_service):
    with pytest.raises(NotFoundError):
        invoice_service.update_invoice(42, sent_to_client=datetime.now(UTC))


def test_update_rejects_naive_timestamp(invoice_service, saved_settings, stored_entries):
    invoice = invoice_service.create_invoice(saved_settings.id, date(2024, 1, 15), date(2024, 1, 17))

    with pytest.raises(ValidationError):
        invoice_service.update_invoice(invoice.id, sent_to_client=datetime(2024, 2, 1, 9, 30))


def test_concurrent_update_cannot_overwrite_a_timestamp(
    temp_db, second_db, saved_settings, stored_entries
):
    """Two independent connections race to record when an invoice was sent."""
    first_service = InvoiceService(temp_db)
    second_service = InvoiceService(second_db)
    invoice = first_service.create_invoice(saved_settings.id, date(2024, 1, 15), date(2024, 1, 17))
    first_sent = datetime(2024, 2, 1, tzinfo=UTC)

    # Read while still unset, then let the other connection write first
    assert first_service.get_invoice(invoice.id).sent_to_client is None
    second_service.update_invoice(invoice.id, sent_to_client=first_sent)

    with pytest.raises(ConflictError):
        first_service.update_invoice(invoice.id, sent_to_client=datetime(2024, 3, 1, tzinfo=UTC))

    assert first_service.get_invoice(invoice.id).sent_to_client == first_sent
    assert second_service.get_invoice(invoice.id).sent_to_client == first_sent


def test_conflict_on_one_field_leaves_the_other_unset(
    invoice_service, saved_settings, stored_entries
):
    invoice = invoice_service.create_invoice(saved_settings.id, date(2024, 1, 15), date(2024, 1, 17))
    sent_at = datetime(2024, 2, 1, tzinfo=UTC)
    invoice_service.update_invoice(invoice.id, sent_to_client=sent_at)

    with pytest.raises(ConflictError):
        invoice_service.update_invoice(
            invoice.id,
            sent_to_client=datetime(2024, 2, 2, tzinfo=UTC),
            paid_by_client=datetime(2024, 2, 3, tzinfo=UTC),
        )

    stored = invoice_service.get_invoice(invoice.id)
    assert stored.sent_to_client == sent_at
    assert stored.paid_by_client is None
