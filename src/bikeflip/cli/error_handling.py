"""Rendering of domain errors for the command line."""

import logging

import click

from bikeflip.domain.errors import DomainError

logger = logging.getLogger(__name__)


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Print ``Error: <message>`` to stderr and exit with status 1.

    Validation, lookup and conflict errors all surface the same way; the
    error class is only visible in the debug log.
    """
    logger.debug("%s in '%s': %s", type(error).__name__, ctx.command_path, error)
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)
