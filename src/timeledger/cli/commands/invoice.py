"""Invoice commands."""

import click
from timeledger.cli.commands.options import timezone_option
from timeledger.cli.error_handling import handle_domain_error
from timeledger.domain.errors import DomainError, PersistenceError, invoice_not_found
from timeledger.domain.invoice import InvoiceService
from timeledger.domain.invoice_settings import InvoiceSettingsService
from timeledger.utils.date_parser import parse_date, parse_timestamp
from timeledger.utils.time_utils import format_duration, resolve_timezone


@click.group("invoice")
def invoice_group():
    """Create and track invoices."""
    pass


def _format_timestamp(value):
    return value.isoformat() if value is not None else "-"


def _echo_invoice(invoice):
    click.echo(f"\nInvoice ID: {invoice.id}")
    click.echo(f"  Period: {invoice.start_date} - {invoice.end_date}")
    click.echo(f"  Duration: {format_duration(invoice.duration)}")
    click.echo(f"  Amount due: {invoice.amount_due:,.2f}")
    click.echo(f"  Time entries: {len(invoice.time_entry_ids)}")
    click.echo(f"  Sent to client: {_format_timestamp(invoice.sent_to_client)}")
    click.echo(f"  Paid by client: {_format_timestamp(invoice.paid_by_client)}")
    if invoice.archived:
        click.echo("  Archived")


@invoice_group.command("create")
@click.option("--start-date", required=True, help="First day of the invoice (YYYY-MM-DD or relative)")
@click.option("--end-date", required=True, help="Last day of the invoice (YYYY-MM-DD or relative)")
@click.option("--settings-id", type=int, help="Invoice settings ID (defaults to the stored settings)")
@timezone_option
@click.pass_context
def create_invoice(ctx, start_date: str, end_date: str, settings_id: int | None, timezone: str):
    """Create an invoice for every time entry between two dates.

    Examples:
        timeledger invoice create --start-date 2024-01-01 --end-date 2024-01-14
        timeledger invoice create --start-date "last month" --end-date today
    """
    db = ctx.obj["db"]

    try:
        start = parse_date(start_date)
        end = parse_date(end_date)
        service = InvoiceService(db, tz=resolve_timezone(timezone))
        if settings_id is None:
            settings_id = InvoiceSettingsService(db).get_settings().id
            if settings_id is None:
                click.echo(
                    "Error: No invoice settings saved. Run 'timeledger settings set' first.",
                    err=True,
                )
                ctx.exit(1)
        invoice = service.create_invoice(settings_id=settings_id, start_date=start, end_date=end)
    except (DomainError, PersistenceError, ValueError) as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created invoice {invoice.id}")
    _echo_invoice(invoice)


@invoice_group.command("list")
@click.option("--id", "ids", type=int, multiple=True, help="Only show this invoice ID (repeatable)")
@click.option("--archived/--active", default=None, help="Only show archived or active invoices")
@click.pass_context
def list_invoices(ctx, ids: tuple[int, ...], archived: bool | None):
    """List invoices."""
    db = ctx.obj["db"]
    service = InvoiceService(db)

    try:
        invoices = service.list_invoices(ids=list(ids) or None, archived=archived)
    except PersistenceError as e:
        handle_domain_error(ctx, e)

    if not invoices:
        click.echo("No invoices found.")
        return

    click.echo("\nInvoices:")
    click.echo("-" * 90)
    click.echo(f"{'ID':<6} {'Start':<12} {'End':<12} {'Duration':>12} {'Amount':>12}  {'Sent':<6} {'Paid':<6}")
    click.echo("-" * 90)
    for invoice in invoices:
        sent = "yes" if invoice.sent_to_client else "no"
        paid = "yes" if invoice.paid_by_client else "no"
        click.echo(
            f"{invoice.id:<6} {str(invoice.start_date):<12} {str(invoice.end_date):<12} "
            f"{format_duration(invoice.duration):>12} {invoice.amount_due:>12,.2f}  {sent:<6} {paid:<6}"
        )


@invoice_group.command("show")
@click.argument("invoice_id", type=int)
@click.pass_context
def show_invoice(ctx, invoice_id: int):
    """Show one invoice."""
    db = ctx.obj["db"]
    service = InvoiceService(db)

    try:
        invoice = service.get_invoice(invoice_id)
    except PersistenceError as e:
        handle_domain_error(ctx, e)

    if invoice is None:
        click.echo(f"Error: {invoice_not_found(invoice_id)}", err=True)
        ctx.exit(1)

    _echo_invoice(invoice)


@invoice_group.command("update")
@click.argument("invoice_id", type=int)
@click.option("--sent-to-client", help="When the invoice was sent (date/time or 'now')")
@click.option("--paid-by-client", help="When the invoice was paid (date/time or 'now')")
@timezone_option
@click.pass_context
def update_invoice(
    ctx,
    invoice_id: int,
    sent_to_client: str | None,
    paid_by_client: str | None,
    timezone: str,
):
    """Record when an invoice was sent or paid.

    Each timestamp can be recorded once. Values without an offset are taken
    to be in --timezone.

    Examples:
        timeledger invoice update 3 --sent-to-client now
        timeledger invoice update 3 --paid-by-client "2024-02-01 09:30"
    """
    db = ctx.obj["db"]
    service = InvoiceService(db)

    try:
        zone = resolve_timezone(timezone)
        sent = parse_timestamp(sent_to_client, zone) if sent_to_client else None
        paid = parse_timestamp(paid_by_client, zone) if paid_by_client else None
        invoice = service.update_invoice(invoice_id, sent_to_client=sent, paid_by_client=paid)
    except (DomainError, PersistenceError, ValueError) as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated invoice {invoice.id}")
    _echo_invoice(invoice)


def register_commands(cli):
    """Register invoice commands with main CLI."""
    cli.add_command(invoice_group)
