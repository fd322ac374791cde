"""Billing period commands."""

from datetime import timedelta

import click
from timeledger.cli.commands.options import timezone_option
from timeledger.cli.date_filters import period_options, resolve_cli_date_range
from timeledger.cli.error_handling import handle_domain_error
from timeledger.domain.billing import PeriodLength, aggregate_billing_periods
from timeledger.domain.errors import DomainError, PersistenceError
from timeledger.domain.time_entry import TimeEntryService
from timeledger.utils.time_utils import format_duration, hours, resolve_timezone


@click.command("periods")
@click.option(
    "--period",
    default=PeriodLength.BIWEEKLY.value,
    show_default=True,
    envvar="TIMELEDGER_PERIOD",
    help="Billing period length: weekly, biweekly or monthly (28 days)",
)
@click.option("--start-date", help="First day to include (YYYY-MM-DD or relative like 'last month')")
@click.option("--end-date", help="Last day to include (YYYY-MM-DD or relative like 'today')")
@period_options
@timezone_option
@click.pass_context
def list_periods(
    ctx,
    period: str,
    start_date: str | None,
    end_date: str | None,
    this_week: bool,
    this_month: bool,
    last_week: bool,
    last_month: bool,
    timezone: str,
):
    """Group time entries into billing periods.

    Periods start at the beginning of the month of the earliest entry and
    advance by the period length. Periods without entries are not shown.

    Examples:
        timeledger periods --period weekly
        timeledger periods --this-month
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
        period_length = PeriodLength.parse(period)
        zone = resolve_timezone(timezone)
        entries, _ = service.list_time_entries(start_date=start, end_date=end, tz=zone)
        billing_periods = aggregate_billing_periods(entries, period_length, tz=zone)
    except (DomainError, PersistenceError) as e:
        handle_domain_error(ctx, e)

    if not billing_periods:
        click.echo("No time entries found.")
        return

    click.echo(f"\n{period_length.value.capitalize()} billing periods:")
    click.echo("-" * 70)
    click.echo(f"{'Start':<12} {'End':<12} {'Entries':>8} {'Duration':>12} {'Hours':>10}")
    click.echo("-" * 70)
    for billing_period in billing_periods:
        # Period end is exclusive; show the last day it covers
        last_day = (billing_period.end_time.astimezone(zone) - timedelta(microseconds=1)).date()
        duration = billing_period.total_duration
        click.echo(
            f"{str(billing_period.start_time.astimezone(zone).date()):<12} {str(last_day):<12} "
            f"{len(billing_period.entries):>8} {format_duration(duration):>12} {hours(duration):>10.2f}"
        )


def register_commands(cli):
    """Register periods command with main CLI."""
    cli.add_command(list_periods)
