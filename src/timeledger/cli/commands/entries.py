"""Time entry listing command."""

import click
from timeledger.cli.commands.options import timezone_option
from timeledger.cli.date_filters import period_options, resolve_cli_date_range
from timeledger.cli.error_handling import handle_domain_error
from timeledger.domain.errors import DomainError, PersistenceError
from timeledger.domain.time_entry import TimeEntryService
from timeledger.utils.time_utils import format_duration, resolve_timezone

DISPLAY_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


@click.command("entries")
@click.option("--start-date", help="First day to include (YYYY-MM-DD or relative like 'last week')")
@click.option("--end-date", help="Last day to include (YYYY-MM-DD or relative like 'today')")
@period_options
@timezone_option
@click.pass_context
def list_entries(
    ctx,
    start_date: str | None,
    end_date: str | None,
    this_week: bool,
    this_month: bool,
    last_week: bool,
    last_month: bool,
    timezone: str,
):
    """List stored time entries and their total duration.

    Days are calendar days in --timezone, and times are shown in it.
    """
    db = ctx.obj["db"]
    service = TimeEntryService(db)

    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags={
            "this-week": this_week,
            "this-month": this_month,
            "last-week": last_week,
            "last-month": last_month,
        },
    )

    try:
        zone = resolve_timezone(timezone)
        entries, total = service.list_time_entries(start_date=start, end_date=end, tz=zone)
    except (DomainError, PersistenceError) as e:
        handle_domain_error(ctx, e)

    if not entries:
        click.echo("No time entries found.")
        return

    click.echo(f"\nFound {len(entries)} time entr{'y' if len(entries) == 1 else 'ies'}:")
    click.echo("-" * 100)
    click.echo(f"{'ID':<6} {'Start':<20} {'End':<20} {'Duration':>10}  {'Comment':<40}")
    click.echo("-" * 100)

    for entry in entries:
        start_str = entry.start_time.astimezone(zone).strftime(DISPLAY_TIME_FORMAT)
        end_str = entry.end_time.astimezone(zone).strftime(DISPLAY_TIME_FORMAT)
        click.echo(
            f"{entry.id:<6} {start_str:<20} {end_str:<20} "
            f"{format_duration(entry.duration):>10}  {entry.comment[:40]:<40}"
        )

    click.echo("-" * 100)
    click.echo(f"Total: {format_duration(total)}")


def register_commands(cli):
    """Register entries command with main CLI."""
    cli.add_command(list_entries)
