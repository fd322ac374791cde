"""CLI helpers for date range resolution."""

from datetime import date

import click

from timeledger.cli.error_handling import handle_domain_error
from timeledger.utils.date_parser import get_date_range, parse_date


def period_options(command):
    """Add --this-week/--this-month/--last-week/--last-month flags to a command."""
    for flag, help_text in reversed(
        (
            ("--this-week", "Filter to current week"),
            ("--this-month", "Filter to current month"),
            ("--last-week", "Filter to previous week"),
            ("--last-month", "Filter to previous month"),
        )
    ):
        command = click.option(flag, is_flag=True, help=help_text)(command)
    return command


def resolve_cli_date_range(
    ctx,
    *,
    start_date: str | None,
    end_date: str | None,
    period_flags: dict[str, bool],
) -> tuple[date | None, date | None]:
    """Resolve CLI date range from period flags or explicit dates."""
    selected = [period for period, is_set in period_flags.items() if is_set]

    if len(selected) > 1:
        click.echo(
            "Error: Only one period option (--this-week, --this-month, --last-week, --last-month) can be specified at a time.",
            err=True,
        )
        ctx.exit(1)

    if selected and (start_date or end_date):
        click.echo(
            "Error: Period options cannot be combined with --start-date or --end-date.",
            err=True,
        )
        ctx.exit(1)

    if selected:
        return get_date_range(selected[0])

    start = None
    end = None
    try:
        if start_date:
            start = parse_date(start_date)
        if end_date:
            end = parse_date(end_date)
    except ValueError as e:
        handle_domain_error(ctx, e)

    return start, end
