"""CLI error handling helpers."""

import logging

import click

from timeledger.domain.errors import DomainError, PersistenceError

logger = logging.getLogger(__name__)


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError | PersistenceError) -> None:
    """Render a domain or store error and exit with failure."""
    logger.debug("Command failed", exc_info=error)
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)
