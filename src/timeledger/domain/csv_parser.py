"""CSV time entry parser.

Reads time logs exported as CSV (one row per worked interval) into time
entries. Parsing is pure: it neither touches the store nor removes
duplicates, that is the reconciler's job.
"""

import csv
import io
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Iterator

from timeledger.domain.entities import TimeEntry
from timeledger.domain.errors import MissingColumnError, RowParseError
from timeledger.domain.splitter import split_interval
from timeledger.utils.time_utils import elapsed, resolve_timezone

logger = logging.getLogger(__name__)

# Cells hold "YYYY-MM-DD HH:MM:SS"; the timezone label is appended before parsing
CSV_INPUT_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"

DEFAULT_START_COLUMN = "time started"
DEFAULT_END_COLUMN = "time ended"
DEFAULT_COMMENT_COLUMN = "comment"
DEFAULT_TIMEZONE = "EST"


@dataclass(frozen=True)
class CSVColumnConfig:
    """Names of the CSV columns holding each time entry field."""

    start_time: str = DEFAULT_START_COLUMN
    end_time: str = DEFAULT_END_COLUMN
    comment: str = DEFAULT_COMMENT_COLUMN

    def required_columns(self) -> tuple[str, str, str]:
        return (self.start_time, self.end_time, self.comment)


class CSVTimeEntryParser:
    """Parses CSV file contents into time entries."""

    def __init__(self, columns: CSVColumnConfig | None = None, timezone: str = DEFAULT_TIMEZONE):
        """Initialize parser.

        Args:
            columns: Column name configuration, defaults to CSVColumnConfig()
            timezone: Label of the timezone the CSV times are in ("EST",
                "America/New_York", ...)

        Raises:
            ConfigurationError: If the timezone label is unknown
        """
        self.columns = columns or CSVColumnConfig()
        self.timezone = timezone.strip()
        self.tzinfo = resolve_timezone(self.timezone)

    def parse(self, raw_text: str) -> list[TimeEntry]:
        """Parse CSV text into time entries.

        Rows crossing midnight are split into one entry per calendar day.
        Output follows row order.

        Args:
            raw_text: Full CSV file contents, header row first

        Returns:
            List of time entries

        Raises:
            MissingColumnError: If a configured column is not in the header
            RowParseError: If any row holds an unparseable or inverted time, or
                the text is not valid CSV
        """
        reader = csv.reader(io.StringIO(raw_text.lstrip("\ufeff")))
        records = self._records(reader)
        _, header = next(records, (1, []))
        header_map: dict[str, int] = {}
        for index, name in enumerate(header):
            header_map.setdefault(name.strip(), index)

        for column in self.columns.required_columns():
            if column not in header_map:
                raise MissingColumnError(column)

        start_index = header_map[self.columns.start_time]
        end_index = header_map[self.columns.end_time]
        comment_index = header_map[self.columns.comment]

        entries: list[TimeEntry] = []
        for row_num, row in records:
            if not any(cell.strip() for cell in row):
                continue

            start_raw = self._cell(row, start_index)
            end_raw = self._cell(row, end_index)
            comment = self._cell(row, comment_index)

            start_time = self._parse_time(row_num, self.columns.start_time, start_raw)
            end_time = self._parse_time(row_num, self.columns.end_time, end_raw)
            if elapsed(start_time, end_time).total_seconds() <= 0:
                raise RowParseError(
                    row_num, self.columns.end_time, end_raw, "end time must be after start time"
                )

            pieces = split_interval(start_time, end_time, comment, self.tzinfo)
            if len(pieces) > 1:
                logger.debug("Row %d crosses midnight, split into %d entries", row_num, len(pieces))
            entries.extend(TimeEntry(piece.start, piece.end, piece.comment) for piece in pieces)

        logger.debug("Parsed %d time entries", len(entries))
        return entries

    @staticmethod
    def _records(reader) -> Iterator[tuple[int, list[str]]]:
        """Yield (line number, cells) per CSV record, numbered by the file line it starts on."""
        while True:
            row_num = reader.line_num + 1
            try:
                row = next(reader)
            except StopIteration:
                return
            except csv.Error as e:
                raise RowParseError(row_num, None, None, f"malformed CSV: {e}") from e
            yield row_num, row

    @staticmethod
    def _cell(row: list[str], index: int) -> str:
        return row[index] if index < len(row) else ""

    def _parse_time(self, row_num: int, column: str, raw_value: str) -> datetime:
        label = self.timezone
        value = f"{raw_value.strip()} {label}"
        try:
            parsed = datetime.strptime(value, f"{CSV_INPUT_TIME_FORMAT} {label.replace('%', '%%')}")
        except ValueError as e:
            raise RowParseError(row_num, column, raw_value, str(e)) from e
        return parsed.replace(tzinfo=self.tzinfo)


def parse_csv(
    text: str, columns: CSVColumnConfig | None = None, timezone: str = DEFAULT_TIMEZONE
) -> list[TimeEntry]:
    """Parse CSV text into time entries with the given column and timezone configuration."""
    return CSVTimeEntryParser(columns=columns, timezone=timezone).parse(text)
