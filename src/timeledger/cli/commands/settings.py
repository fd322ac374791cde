"""Invoice settings commands."""

import click
from timeledger.cli.error_handling import handle_domain_error
from timeledger.domain.errors import DomainError, PersistenceError
from timeledger.domain.invoice_settings import InvoiceSettingsService


@click.group("settings")
def settings_group():
    """Manage invoice settings."""
    pass


def _echo_settings(settings):
    click.echo(f"ID: {settings.id if settings.id is not None else '(not saved)'}")
    click.echo(f"Hourly rate: {settings.hourly_rate:,.2f}")
    click.echo(f"Recipient: {settings.recipient}")
    click.echo(f"Sender: {settings.sender}")


@settings_group.command("show")
@click.pass_context
def show_settings(ctx):
    """Show the invoice settings."""
    db = ctx.obj["db"]
    service = InvoiceSettingsService(db)

    try:
        settings = service.get_settings()
    except PersistenceError as e:
        handle_domain_error(ctx, e)

    _echo_settings(settings)


@settings_group.command("set")
@click.option("--hourly-rate", type=float, required=True, help="Amount billed per hour")
@click.option("--recipient", default="", help="Who invoices are addressed to")
@click.option("--sender", default="", help="Who sends invoices")
@click.pass_context
def set_settings(ctx, hourly_rate: float, recipient: str, sender: str):
    """Replace the invoice settings.

    Examples:
        timeledger settings set --hourly-rate 25 --recipient "Acme Corp" --sender "Jane Doe"
    """
    db = ctx.obj["db"]
    service = InvoiceSettingsService(db)

    try:
        settings = service.set_settings(hourly_rate=hourly_rate, recipient=recipient, sender=sender)
    except (DomainError, PersistenceError) as e:
        handle_domain_error(ctx, e)

    click.echo("Saved invoice settings:")
    _echo_settings(settings)


def register_commands(cli):
    """Register settings commands with main CLI."""
    cli.add_command(settings_group)
