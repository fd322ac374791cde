"""CSV import domain service."""

import logging
from pathlib import Path
from typing import Optional

from timeledger.database.base import Database
from timeledger.domain.csv_parser import CSVTimeEntryParser
from timeledger.domain.entities import CSVImport, CSVImportResult
from timeledger.domain.errors import ValidationError
from timeledger.domain.time_entry import TimeEntryService

logger = logging.getLogger(__name__)


class CSVImportService:
    """Service for importing CSV files of time entries."""

    def __init__(self, db: Database, parser: Optional[CSVTimeEntryParser] = None):
        """Initialize CSV import service.

        Args:
            db: Database instance
            parser: Parser to read files with, defaults to the default
                column names and timezone
        """
        self.db = db
        self.parser = parser or CSVTimeEntryParser()
        self.time_entry_service = TimeEntryService(db)

    def import_csv(self, file_name: str, contents: str) -> CSVImportResult:
        """Import time entries from CSV file contents.

        The file is parsed completely before anything is stored, and the
        import record, its new entries and its duplicate IDs are written in
        one transaction, so a failed import leaves no trace. The raw
        contents are kept on the CSV import record.

        Args:
            file_name: Name of the uploaded file
            contents: Full text of the file

        Returns:
            CSVImportResult with the import record and existing/new entries

        Raises:
            ConfigurationError: If a configured column is missing
            RowParseError: If a row cannot be parsed
            PersistenceError: If the store fails
        """
        entries = self.parser.parse(contents)

        csv_import, result = self.db.import_csv_entries(
            file_name=file_name,
            file_contents=contents,
            entries=self.time_entry_service.candidates(entries),
        )

        logger.info(
            "Imported '%s': %d new, %d duplicates",
            file_name,
            len(result.new_entries),
            len(result.existing_entries),
        )
        return CSVImportResult(
            csv_import=csv_import,
            existing_entries=result.existing_entries,
            new_entries=result.new_entries,
        )

    def import_file(self, csv_file_path: str) -> CSVImportResult:
        """Import time entries from a CSV file on disk.

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValidationError: If the file is not UTF-8 text
        """
        csv_path = Path(csv_file_path)
        if not csv_path.exists():
            raise FileNotFoundError(f"CSV file not found: {csv_file_path}")

        try:
            contents = csv_path.read_text(encoding="utf-8-sig")
        except UnicodeDecodeError as e:
            raise ValidationError(f"CSV file {csv_path.name} is not UTF-8 text: {e}") from e
        return self.import_csv(file_name=csv_path.name, contents=contents)

    def get_csv_import(self, csv_import_id: int) -> Optional[CSVImport]:
        """Get a CSV import record by ID."""
        return self.db.get_csv_import(csv_import_id)
