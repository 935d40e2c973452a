"""Expense commands."""

import click
from datetime import date as date_type
from bikeflip.domain.bike import BikeService
from bikeflip.domain.entities import BUSINESS_PAYER, EXPENSE_CATEGORIES
from bikeflip.domain.expense import ExpenseService
from bikeflip.cli.date_filters import resolve_cli_date_range
from bikeflip.cli.error_handling import handle_domain_error
from bikeflip.cli.formatting import format_money, short_id
from bikeflip.cli.resolution import (
    parse_amount_or_exit,
    parse_date_or_exit,
    resolve_bike_or_exit,
    resolve_id_or_exit,
)


def _resolve_expense(ctx, service: ExpenseService, reference: str) -> str:
    ids = (e.id for e in service.list_expenses())
    return resolve_id_or_exit(ctx, reference, ids, "Expense")


@click.group()
def expense_group():
    """Manage expenses."""
    pass


@expense_group.command("add")
@click.argument("description")
@click.option("--amount", required=True, help="Amount spent (e.g., 35.50)")
@click.option("--date", help="Expense date (YYYY-MM-DD or 'today', 'yesterday'); defaults to today")
@click.option(
    "--category",
    help=f"Category label (e.g., {', '.join(EXPENSE_CATEGORIES)}); defaults to General",
)
@click.option(
    "--paid-by",
    default=BUSINESS_PAYER,
    show_default=True,
    help="'Business' or the name of the partner who paid",
)
@click.option("--bike", help="Bike ID, ID prefix or nickname this expense is for")
@click.pass_context
def add_expense(
    ctx,
    description: str,
    amount: str,
    date: str | None,
    category: str | None,
    paid_by: str,
    bike: str | None,
):
    """Record an expense.

    An expense paid by a partner is also booked as a capital contribution
    from that partner.

    Examples:
        bikeflip expense add "Chain and cassette" --amount 45 --bike "Red Rocket"
        bikeflip expense add "Marketplace ad" --amount 10 --category Marketing --paid-by Alex
    """
    db = ctx.obj["db"]
    service = ExpenseService(db)

    bike_id = resolve_bike_or_exit(ctx, BikeService(db), bike) if bike else None
    expense_date = parse_date_or_exit(ctx, date) if date else date_type.today()

    try:
        expense_id, contribution_id = service.record_expense(
            date=expense_date,
            description=description,
            amount=parse_amount_or_exit(ctx, amount),
            category=category,
            paid_by=paid_by,
            bike_id=bike_id,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created expense {short_id(expense_id)}")
    if bike_id:
        click.echo(f"  Linked to bike {short_id(bike_id)}")
    if contribution_id:
        click.echo(f"  Booked as capital contribution from {paid_by} ({short_id(contribution_id)})")


@expense_group.command("list")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@click.option("--bike", help="Only expenses linked to this bike")
@click.option("--general", is_flag=True, help="Only general expenses (not linked to a bike)")
@click.pass_context
def list_expenses(ctx, start_date: str | None, end_date: str | None, bike: str | None, general: bool):
    """List expenses, newest first."""
    db = ctx.obj["db"]
    service = ExpenseService(db)
    bike_service = BikeService(db)

    start, end = resolve_cli_date_range(ctx, start_date=start_date, end_date=end_date)
    bike_id = resolve_bike_or_exit(ctx, bike_service, bike) if bike else None

    try:
        expenses = service.list_expenses(
            start_date=start, end_date=end, bike_id=bike_id, general_only=general
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    if not expenses:
        click.echo("No expenses found.")
        return

    bike_names = {b.id: b.display_name for b in bike_service.list_bikes()}

    click.echo("\nExpenses:")
    click.echo("-" * 100)
    for expense in expenses:
        if expense.bike_id:
            target = bike_names.get(expense.bike_id, "Unknown Bike")
        else:
            target = "General"
        click.echo(
            f"{short_id(expense.id):8s} | {expense.date} | {expense.description[:28]:28s} | "
            f"{expense.category[:10]:10s} | {expense.paid_by[:10]:10s} | {target[:14]:14s} | "
            f"{format_money(expense.amount):>10s}"
        )
    total = sum((e.amount or 0) for e in expenses)
    click.echo("-" * 100)
    click.echo(f"Total: {format_money(total)}")


@expense_group.command("link")
@click.argument("expense")
@click.argument("bike")
@click.pass_context
def link_expense(ctx, expense: str, bike: str):
    """Attribute an expense to a bike."""
    db = ctx.obj["db"]
    service = ExpenseService(db)
    expense_id = _resolve_expense(ctx, service, expense)
    bike_id = resolve_bike_or_exit(ctx, BikeService(db), bike)

    try:
        service.link_to_bike(expense_id, bike_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Linked expense {short_id(expense_id)} to bike {short_id(bike_id)}")


@expense_group.command("unlink")
@click.argument("expense")
@click.pass_context
def unlink_expense(ctx, expense: str):
    """Turn a bike expense back into a general expense."""
    service = ExpenseService(ctx.obj["db"])
    expense_id = _resolve_expense(ctx, service, expense)

    try:
        service.unlink_from_bike(expense_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Unlinked expense {short_id(expense_id)}")


@expense_group.command("delete")
@click.argument("expense")
@click.pass_context
def delete_expense(ctx, expense: str):
    """Delete an expense.

    A capital contribution booked for a partner-paid expense is not removed;
    delete it with 'capital delete' if needed.
    """
    service = ExpenseService(ctx.obj["db"])
    expense_id = _resolve_expense(ctx, service, expense)

    try:
        service.delete_expense(expense_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Deleted expense {short_id(expense_id)}")


def register_commands(cli):
    """Register expense commands with main CLI."""
    cli.add_command(expense_group, name="expense")
