"""Bike management commands."""

import click
from bikeflip.domain.bike import BikeService
from bikeflip.domain.entities import BikeStatus
from bikeflip.cli.error_handling import handle_domain_error
from bikeflip.cli.formatting import format_money, format_profit, short_id
from bikeflip.cli.resolution import (
    parse_amount_or_exit,
    parse_date_or_exit,
    resolve_bike_or_exit,
)

STATUS_CHOICES = ["in-inventory", "sold", "kept"]


@click.group()
def bike_group():
    """Manage bikes."""
    pass


@bike_group.command("add")
@click.argument("model")
@click.option("--buy-price", required=True, help="Purchase price (e.g., 450 or 450.00)")
@click.option("--buy-date", help="Purchase date (YYYY-MM-DD or 'today', 'yesterday'); defaults to today")
@click.option("--other-costs", default="0", show_default=True, help="Incidental costs paid with the purchase")
@click.option("--nickname", help="Short nickname for the bike")
@click.option("--status", type=click.Choice(STATUS_CHOICES), default="in-inventory", show_default=True)
@click.option("--sell-price", help="Sale price (only used with --status sold)")
@click.option("--sell-date", help="Sale date (only used with --status sold)")
@click.option("--notes", help="Notes")
@click.pass_context
def add_bike(
    ctx,
    model: str,
    buy_price: str,
    buy_date: str | None,
    other_costs: str,
    nickname: str | None,
    status: str,
    sell_price: str | None,
    sell_date: str | None,
    notes: str | None,
):
    """Add a bike to the inventory.

    Examples:
        bikeflip bike add "Trek FX 3" --buy-price 450
        bikeflip bike add "Specialized Allez" --buy-price 300 --nickname "Red Rocket"
    """
    service = BikeService(ctx.obj["db"])

    try:
        bike_id = service.create_bike(
            model=model,
            buy_price=parse_amount_or_exit(ctx, buy_price, "buy price"),
            buy_date=parse_date_or_exit(ctx, buy_date, "buy date") if buy_date else None,
            other_costs=parse_amount_or_exit(ctx, other_costs, "other costs"),
            nickname=nickname,
            status=status,
            sell_price=parse_amount_or_exit(ctx, sell_price, "sell price") if sell_price else None,
            sell_date=parse_date_or_exit(ctx, sell_date, "sell date") if sell_date else None,
            notes=notes,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created bike '{nickname or model}' (ID: {bike_id})")


@bike_group.command("list")
@click.option("--status", type=click.Choice(STATUS_CHOICES), help="Only show bikes with this status")
@click.pass_context
def list_bikes(ctx, status: str | None):
    """List bikes with their total cost and profit."""
    service = BikeService(ctx.obj["db"])

    bikes = service.list_bikes(status=status)
    if not bikes:
        click.echo("No bikes found.")
        return

    click.echo("\nBikes:")
    click.echo("-" * 100)
    click.echo(
        f"{'ID':8s} | {'Bike':24s} | {'Status':12s} | {'Bought':10s} | "
        f"{'Total cost':>12s} | {'Sold for':>12s} | {'Profit':>12s}"
    )
    click.echo("-" * 100)
    for bike in bikes:
        financials = service.get_financials(bike.id)
        if bike.status == BikeStatus.KEPT:
            # Kept bikes are booked as sold at cost
            sold_for = format_money(financials.total_cost)
        elif bike.sell_price is not None:
            sold_for = format_money(bike.sell_price)
        else:
            sold_for = "-"
        bought = bike.buy_date.isoformat() if bike.buy_date else "-"
        click.echo(
            f"{short_id(bike.id):8s} | {bike.display_name[:24]:24s} | {bike.status.value:12s} | "
            f"{bought:10s} | {format_money(financials.total_cost):>12s} | "
            f"{sold_for:>12s} | {format_profit(financials.profit):>12s}"
        )


@bike_group.command("show")
@click.argument("bike")
@click.pass_context
def show_bike(ctx, bike: str):
    """Show a bike with its cost breakdown.

    BIKE can be a bike ID, an ID prefix or a nickname.
    """
    service = BikeService(ctx.obj["db"])
    bike_id = resolve_bike_or_exit(ctx, service, bike)
    financials = service.get_financials(bike_id)
    bike_obj = financials.bike

    click.echo(f"\n{bike_obj.display_name}")
    click.echo("-" * 60)
    click.echo(f"  ID:          {bike_obj.id}")
    click.echo(f"  Model:       {bike_obj.model}")
    if bike_obj.nickname:
        click.echo(f"  Nickname:    {bike_obj.nickname}")
    click.echo(f"  Status:      {bike_obj.status.value}")
    click.echo(f"  Bought:      {bike_obj.buy_date or '-'} for {format_money(bike_obj.buy_price)}")
    click.echo(f"  Other costs: {format_money(bike_obj.other_costs)}")
    if bike_obj.status == BikeStatus.SOLD:
        sell_price = format_money(bike_obj.sell_price) if bike_obj.sell_price is not None else "pending"
        click.echo(f"  Sold:        {bike_obj.sell_date or '-'} for {sell_price}")
    if bike_obj.notes:
        click.echo(f"  Notes:       {bike_obj.notes}")

    expenses = service.linked_expenses(bike_id)
    if expenses:
        click.echo("\n  Linked expenses:")
        for expense in expenses:
            click.echo(
                f"    {expense.date}  {expense.description[:30]:30s} {format_money(expense.amount):>12s}"
            )

    click.echo(f"\n  Total cost:  {format_money(financials.total_cost)}")
    click.echo(f"  Profit:      {format_profit(financials.profit)}")


@bike_group.command("edit")
@click.argument("bike")
@click.option("--model", help="New model name")
@click.option("--nickname", help="New nickname (empty string to clear)")
@click.option("--status", type=click.Choice(STATUS_CHOICES), help="New status")
@click.option("--buy-price", help="New purchase price")
@click.option("--buy-date", help="New purchase date")
@click.option("--other-costs", help="New incidental costs")
@click.option("--sell-price", help="New sale price")
@click.option("--sell-date", help="New sale date")
@click.option("--notes", help="New notes (empty string to clear)")
@click.pass_context
def edit_bike(
    ctx,
    bike: str,
    model: str | None,
    nickname: str | None,
    status: str | None,
    buy_price: str | None,
    buy_date: str | None,
    other_costs: str | None,
    sell_price: str | None,
    sell_date: str | None,
    notes: str | None,
):
    """Edit a bike.

    Only the given fields change. Moving a bike out of Sold clears its sale
    price and date.

    Examples:
        bikeflip bike edit "Red Rocket" --other-costs 25
        bikeflip bike edit 3f2a --status in-inventory
    """
    service = BikeService(ctx.obj["db"])
    bike_id = resolve_bike_or_exit(ctx, service, bike)

    try:
        service.update_bike(
            bike_id,
            model=model,
            nickname=nickname,
            status=status,
            buy_price=parse_amount_or_exit(ctx, buy_price, "buy price") if buy_price else None,
            buy_date=parse_date_or_exit(ctx, buy_date, "buy date") if buy_date else None,
            other_costs=parse_amount_or_exit(ctx, other_costs, "other costs") if other_costs else None,
            sell_price=parse_amount_or_exit(ctx, sell_price, "sell price") if sell_price else None,
            sell_date=parse_date_or_exit(ctx, sell_date, "sell date") if sell_date else None,
            notes=notes,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated bike {short_id(bike_id)}")


@bike_group.command("sell")
@click.argument("bike")
@click.option("--price", help="Sale price; leave out while the sale is pending")
@click.option("--date", "sell_date", help="Sale date (defaults to today)")
@click.pass_context
def sell_bike(ctx, bike: str, price: str | None, sell_date: str | None):
    """Mark a bike as sold.

    Examples:
        bikeflip bike sell "Red Rocket" --price 650
    """
    service = BikeService(ctx.obj["db"])
    bike_id = resolve_bike_or_exit(ctx, service, bike)

    try:
        service.mark_sold(
            bike_id,
            sell_price=parse_amount_or_exit(ctx, price, "sale price") if price else None,
            sell_date=parse_date_or_exit(ctx, sell_date, "sale date") if sell_date else None,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    financials = service.get_financials(bike_id)
    click.echo(f"Marked '{financials.bike.display_name}' as sold")
    if financials.profit is None:
        click.echo("  Sale price not recorded yet; profit will show once it is.")
    else:
        click.echo(f"  Profit: {format_profit(financials.profit)}")


@bike_group.command("keep")
@click.argument("bike")
@click.pass_context
def keep_bike(ctx, bike: str):
    """Mark a bike as kept by a partner (booked as sold at cost)."""
    service = BikeService(ctx.obj["db"])
    bike_id = resolve_bike_or_exit(ctx, service, bike)

    try:
        service.mark_kept(bike_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    financials = service.get_financials(bike_id)
    click.echo(
        f"Marked '{financials.bike.display_name}' as kept "
        f"(booked at cost: {format_money(financials.total_cost)})"
    )


@bike_group.command("delete")
@click.argument("bike")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_bike(ctx, bike: str, yes: bool):
    """Delete a bike.

    Expenses linked to the bike are kept and become general expenses.
    """
    service = BikeService(ctx.obj["db"])
    bike_id = resolve_bike_or_exit(ctx, service, bike)
    bike_obj = service.require_bike(bike_id)

    linked = service.linked_expenses(bike_id)
    if linked:
        click.echo(
            f"{len(linked)} linked expense{'s' if len(linked) != 1 else ''} will be kept "
            "as general expenses."
        )

    if not yes and not click.confirm(
        f"Are you sure you want to delete bike '{bike_obj.display_name}'?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        unlinked = service.delete_bike(bike_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Deleted bike '{bike_obj.display_name}'")
    if unlinked:
        click.echo(f"Unlinked {unlinked} expense{'s' if unlinked != 1 else ''}")


def register_commands(cli):
    """Register bike commands with main CLI."""
    cli.add_command(bike_group, name="bike")
