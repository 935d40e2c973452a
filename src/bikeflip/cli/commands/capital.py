"""Capital commands."""

import click
from datetime import date as date_type
from bikeflip.domain.capital import CapitalService
from bikeflip.domain.entities import CapitalType
from bikeflip.cli.date_filters import resolve_cli_date_range
from bikeflip.cli.error_handling import handle_domain_error
from bikeflip.cli.formatting import format_money, short_id
from bikeflip.cli.resolution import parse_amount_or_exit, parse_date_or_exit, resolve_id_or_exit


@click.group()
def capital_group():
    """Manage partner capital contributions and withdrawals."""
    pass


def _add_entry(ctx, entry_type: CapitalType, partner: str, amount: str, date: str | None, description: str | None):
    service = CapitalService(ctx.obj["db"])
    entry_date = parse_date_or_exit(ctx, date) if date else date_type.today()
    entry_amount = parse_amount_or_exit(ctx, amount)

    try:
        entry_id = service.add_entry(
            partner_name=partner,
            entry_type=entry_type,
            amount=entry_amount,
            date=entry_date,
            description=description,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(
        f"Recorded {entry_type.value.lower()} of {format_money(entry_amount)} "
        f"for {partner.strip()} ({short_id(entry_id)})"
    )


@capital_group.command("contribute")
@click.argument("partner")
@click.option("--amount", required=True, help="Amount put into the business")
@click.option("--date", help="Date (defaults to today)")
@click.option("--description", help="Optional description")
@click.pass_context
def contribute(ctx, partner: str, amount: str, date: str | None, description: str | None):
    """Record a capital contribution from PARTNER.

    Examples:
        bikeflip capital contribute Alex --amount 1000
    """
    _add_entry(ctx, CapitalType.CONTRIBUTION, partner, amount, date, description)


@capital_group.command("withdraw")
@click.argument("partner")
@click.option("--amount", required=True, help="Amount taken out of the business")
@click.option("--date", help="Date (defaults to today)")
@click.option("--description", help="Optional description")
@click.pass_context
def withdraw(ctx, partner: str, amount: str, date: str | None, description: str | None):
    """Record a capital withdrawal by PARTNER.

    Examples:
        bikeflip capital withdraw Alex --amount 200 --description "Payout"
    """
    _add_entry(ctx, CapitalType.WITHDRAWAL, partner, amount, date, description)


@capital_group.command("list")
@click.option("--partner", help="Only entries for this partner name")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@click.pass_context
def list_entries(ctx, partner: str | None, start_date: str | None, end_date: str | None):
    """List capital entries, newest first."""
    service = CapitalService(ctx.obj["db"])
    start, end = resolve_cli_date_range(ctx, start_date=start_date, end_date=end_date)

    entries = service.list_entries(partner_name=partner, start_date=start, end_date=end)
    if not entries:
        click.echo("No capital entries found.")
        return

    click.echo("\nCapital:")
    click.echo("-" * 90)
    for entry in entries:
        sign = "+" if entry.type == CapitalType.CONTRIBUTION else "-"
        click.echo(
            f"{short_id(entry.id):8s} | {entry.date} | {entry.partner_name[:14]:14s} | "
            f"{entry.type.value:12s} | {sign}{format_money(entry.amount):>11s} | "
            f"{(entry.description or '')[:30]}"
        )


@capital_group.command("delete")
@click.argument("entry")
@click.pass_context
def delete_entry(ctx, entry: str):
    """Delete a capital entry by ID or ID prefix."""
    service = CapitalService(ctx.obj["db"])
    entry_id = resolve_id_or_exit(ctx, entry, (e.id for e in service.list_entries()), "Capital entry")

    try:
        service.delete_entry(entry_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Deleted capital entry {short_id(entry_id)}")


def register_commands(cli):
    """Register capital commands with main CLI."""
    cli.add_command(capital_group, name="capital")
