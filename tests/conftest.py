"""Shared pytest fixtures for timeledger tests."""

import tempfile
import os
from pathlib import Path
import pytest

from timeledger.database.factories import create_sqlite_database
from timeledger.domain.csv_import import CSVImportService
from timeledger.domain.invoice import InvoiceService
from timeledger.domain.invoice_settings import InvoiceSettingsService
from timeledger.domain.time_entry import TimeEntryService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def second_db(temp_db):
    """Open an independent Database instance on the same file as temp_db."""
    db = create_sqlite_database(database_path=temp_db.database_path)
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()


@pytest.fixture
def time_entry_service(temp_db):
    """Create a TimeEntryService with a temporary database."""
    return TimeEntryService(temp_db)


@pytest.fixture
def csv_import_service(temp_db):
    """Create a CSVImportService with a temporary database."""
    return CSVImportService(temp_db)


@pytest.fixture
def invoice_settings_service(temp_db):
    """Create an InvoiceSettingsService with a temporary database."""
    return InvoiceSettingsService(temp_db)


@pytest.fixture
def invoice_service(temp_db):
    """Create an InvoiceService with a temporary database."""
    return InvoiceService(temp_db)


@pytest.fixture
def saved_settings(invoice_settings_service):
    """Store invoice settings billing 25 per hour."""
    return invoice_settings_service.set_settings(
        hourly_rate=25.0, recipient="Acme Corp", sender="Jane Doe"
    )


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_csv(fixtures_dir):
    """Path to a small time log in EST with one row crossing midnight."""
    return fixtures_dir / "sample_time_log.csv"
