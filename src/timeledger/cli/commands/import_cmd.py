"""CSV import command."""

import click
from timeledger.cli.commands.options import column_options, timezone_option
from timeledger.cli.error_handling import handle_domain_error
from timeledger.domain.csv_import import CSVImportService
from timeledger.domain.csv_parser import CSVColumnConfig, CSVTimeEntryParser
from timeledger.domain.errors import DomainError, PersistenceError


@click.command("import")
@click.argument("csv_files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@timezone_option
@column_options
@click.pass_context
def import_csv(
    ctx,
    csv_files: tuple[str, ...],
    timezone: str,
    start_column: str,
    end_column: str,
    comment_column: str,
):
    """Import time entries from one or more CSV files.

    Entries already stored by an earlier import are reported as duplicates
    and not stored again. Rows crossing midnight are split per day.

    Examples:
        timeledger import hours.csv
        timeledger import week1.csv week2.csv --timezone America/New_York
    """
    db = ctx.obj["db"]
    columns = CSVColumnConfig(start_time=start_column, end_time=end_column, comment=comment_column)

    try:
        service = CSVImportService(db, CSVTimeEntryParser(columns=columns, timezone=timezone))
        for csv_file in csv_files:
            result = service.import_file(csv_file)
            click.echo(f"\nImported '{result.csv_import.file_name}' (import ID: {result.csv_import.id}):")
            click.echo(f"  New: {len(result.new_entries)} time entries")
            click.echo(f"  Duplicates: {len(result.existing_entries)} time entries")
    except (DomainError, PersistenceError, FileNotFoundError) as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_csv)
