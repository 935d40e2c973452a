"""CLI helpers for record resolution and input parsing."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Iterable

import click
from bikeflip.domain.bike import BikeService
from bikeflip.utils.amount_parser import parse_amount
from bikeflip.utils.date_parser import parse_date
from bikeflip.utils.resolver import match_id_prefix, resolve_bike


def resolve_bike_or_exit(ctx: click.Context, bike_service: BikeService, reference: str) -> str:
    """Resolve a bike ID, ID prefix or nickname, or exit with a CLI error."""
    try:
        return resolve_bike(bike_service, reference)
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)


def resolve_id_or_exit(
    ctx: click.Context, reference: str, ids: Iterable[str], label: str
) -> str:
    """Resolve a full ID or unique prefix, or exit with a CLI error."""
    try:
        return match_id_prefix(reference, ids, label)
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)


def parse_amount_or_exit(ctx: click.Context, value: str, label: str = "amount") -> Decimal:
    """Parse a money option, or exit with a CLI error."""
    try:
        return parse_amount(value)
    except ValueError as exc:
        click.echo(f"Error: Invalid {label}: {exc}", err=True)
        ctx.exit(1)


def parse_date_or_exit(ctx: click.Context, value: str, label: str = "date") -> date:
    """Parse a date option, or exit with a CLI error."""
    try:
        return parse_date(value)
    except ValueError as exc:
        click.echo(f"Error: Invalid {label}: {exc}", err=True)
        ctx.exit(1)
