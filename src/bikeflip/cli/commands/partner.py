"""Partner management commands."""

import click
from bikeflip.domain.partner import PartnerService
from bikeflip.cli.error_handling import handle_domain_error
from bikeflip.cli.formatting import format_money, short_id


def _resolve_partner_or_exit(ctx, service: PartnerService, partner: str):
    try:
        return service.resolve_partner(partner)
    except ValueError as e:
        handle_domain_error(ctx, e)


@click.group()
def partner_group():
    """Manage partners."""
    pass


@partner_group.command("add")
@click.argument("name")
@click.pass_context
def add_partner(ctx, name: str):
    """Add a partner.

    Examples:
        bikeflip partner add "Alex"
    """
    service = PartnerService(ctx.obj["db"])

    try:
        partner_id = service.create_partner(name)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created partner '{name.strip()}' (ID: {short_id(partner_id)})")


@partner_group.command("list")
@click.pass_context
def list_partners(ctx):
    """List all partners."""
    service = PartnerService(ctx.obj["db"])

    partners = service.list_partners()
    if not partners:
        click.echo("No partners found.")
        return

    click.echo("\nPartners:")
    click.echo("-" * 40)
    for partner in partners:
        click.echo(f"{short_id(partner.id):8s} | {partner.name}")


@partner_group.command("rename")
@click.argument("partner", metavar="PARTNER")
@click.argument("new_name", metavar="NEW_NAME")
@click.option(
    "--propagate",
    is_flag=True,
    help="Also rewrite the name on existing capital entries and expenses",
)
@click.pass_context
def rename_partner(ctx, partner: str, new_name: str, propagate: bool):
    """Rename a partner.

    PARTNER can be a partner name or ID. Capital entries and expenses refer
    to partners by name; without --propagate they keep the old name.

    Examples:
        bikeflip partner rename "Alex" "Alexander" --propagate
    """
    service = PartnerService(ctx.obj["db"])
    partner_obj = _resolve_partner_or_exit(ctx, service, partner)

    try:
        rewritten = service.rename_partner(partner_obj.id, new_name, propagate=propagate)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Renamed partner '{partner_obj.name}' to '{new_name.strip()}'")
    if propagate:
        click.echo(f"Updated {rewritten} historical record{'s' if rewritten != 1 else ''}")
    else:
        click.echo("Existing capital entries and expenses keep the old name.")


@partner_group.command("delete")
@click.argument("partner", metavar="PARTNER")
@click.pass_context
def delete_partner(ctx, partner: str):
    """Remove a partner from the roster.

    Capital entries keep the partner's name, so the balance stays visible.
    """
    service = PartnerService(ctx.obj["db"])
    partner_obj = _resolve_partner_or_exit(ctx, service, partner)

    if not click.confirm(f"Are you sure you want to delete partner '{partner_obj.name}'?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_partner(partner_obj.id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Deleted partner '{partner_obj.name}'")


@click.command("balances")
@click.option(
    "--sort",
    "sort_by",
    type=click.Choice(["name", "balance"]),
    default="name",
    show_default=True,
    help="Sort order",
)
@click.pass_context
def balances(ctx, sort_by: str):
    """Show each partner's capital balance."""
    service = PartnerService(ctx.obj["db"])

    rows = service.get_balances(sort_by=sort_by)
    if not rows:
        click.echo("No partners or capital entries found.")
        return

    click.echo("\nPartner balances:")
    click.echo("-" * 40)
    for name, balance in rows:
        click.echo(f"{name:24s} {format_money(balance):>14s}")


def register_commands(cli):
    """Register partner commands with main CLI."""
    cli.add_command(partner_group, name="partner")
    cli.add_command(balances)
