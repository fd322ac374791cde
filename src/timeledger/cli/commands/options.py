"""Shared command options for import configuration."""

import click

from timeledger.domain.csv_parser import (
    DEFAULT_COMMENT_COLUMN,
    DEFAULT_END_COLUMN,
    DEFAULT_START_COLUMN,
    DEFAULT_TIMEZONE,
)

timezone_option = click.option(
    "--timezone",
    default=DEFAULT_TIMEZONE,
    show_default=True,
    envvar="TIMELEDGER_TIMEZONE",
    help="Timezone of the logged times (abbreviation like EST or IANA name)",
)


def column_options(command):
    """Add the CSV column name options to a command."""
    for flag, envvar, default, help_text in reversed(
        (
            ("--start-column", "TIMELEDGER_START_COLUMN", DEFAULT_START_COLUMN, "Start time column name"),
            ("--end-column", "TIMELEDGER_END_COLUMN", DEFAULT_END_COLUMN, "End time column name"),
            ("--comment-column", "TIMELEDGER_COMMENT_COLUMN", DEFAULT_COMMENT_COLUMN, "Comment column name"),
        )
    ):
        command = click.option(
            flag, default=default, show_default=True, envvar=envvar, help=help_text
        )(command)
    return command
