"""Main CLI entry point."""

import logging

import click
from timeledger.database.factories import DB_PATH_ENV_VAR, create_sqlite_database

# Import and register all commands at module level
from timeledger.cli.commands import (
    entries,
    import_cmd,
    invoice,
    periods,
    settings,
)


def setup_logging(verbose: bool) -> None:
    """Set up logging configuration.

    Args:
        verbose: Whether to enable debug logging
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help=f"Path to database file (overrides {DB_PATH_ENV_VAR} environment variable)",
    envvar=DB_PATH_ENV_VAR,
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """Timeledger - Time entry import and invoicing.

    Import time logs from CSV files without duplicating entries, roll them
    up into billing periods and create invoices from them.
    """
    ctx.ensure_object(dict)
    setup_logging(verbose)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
import_cmd.register_commands(cli)
entries.register_commands(cli)
periods.register_commands(cli)
settings.register_commands(cli)
invoice.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
