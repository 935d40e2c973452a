"""Dashboard and report commands."""

import json

import click
from bikeflip.domain.report import ReportService
from bikeflip.cli.formatting import format_money

LABEL_WIDTH = 28
AMOUNT_WIDTH = 16


def _line(label: str, amount) -> None:
    click.echo(f"  {label:<{LABEL_WIDTH}} {format_money(amount):>{AMOUNT_WIDTH}}")


@click.command("dashboard")
@click.option("--details", is_flag=True, help="Show the accrual and cash-flow breakdown")
@click.pass_context
def dashboard(ctx, details: bool):
    """Show business KPIs: net profit, free cash, inventory value and counts."""
    report = ReportService(ctx.obj["db"]).build_dashboard()
    metrics = report.metrics

    click.echo("\nOverview")
    click.echo("=" * 50)
    _line("Net profit", metrics.net_profit)
    _line("Free cash", metrics.free_cash)
    _line("Inventory value", metrics.inventory_value)
    click.echo(f"  {'Bikes sold':<{LABEL_WIDTH}} {metrics.sold_count:>{AMOUNT_WIDTH}}")
    click.echo(f"  {'Bikes in inventory':<{LABEL_WIDTH}} {metrics.inventory_count:>{AMOUNT_WIDTH}}")
    click.echo(f"  {'Kept by partners':<{LABEL_WIDTH}} {metrics.kept_count:>{AMOUNT_WIDTH}}")

    if details:
        click.echo("\nProfit and loss")
        click.echo("-" * 50)
        _line("Revenue", metrics.total_revenue)
        _line("Cost of goods sold", metrics.total_cogs)
        _line("Gross profit", metrics.gross_profit)
        _line("General expenses", metrics.general_expenses)
        _line("Net profit", metrics.net_profit)

        click.echo("\nCash flow")
        click.echo("-" * 50)
        _line("Net capital", metrics.net_capital)
        _line("Revenue", metrics.total_revenue)
        _line("Bike outflow", metrics.total_bike_outflow)
        _line("General expenses", metrics.general_expenses)
        _line("Free cash", metrics.free_cash)

    if report.flip_profits:
        click.echo("\nProfit per flip")
        click.echo("-" * 50)
        for flip in report.flip_profits:
            _line(flip.label, flip.profit)

    click.echo("\nExpense breakdown")
    click.echo("-" * 50)
    if report.expense_breakdown:
        for category, amount in sorted(
            report.expense_breakdown.items(), key=lambda item: (-item[1], item[0])
        ):
            _line(category, amount)
    else:
        click.echo("  No expenses logged yet.")


@click.command("report")
@click.option(
    "--output",
    type=click.Path(dir_okay=False, writable=True),
    help="Write the payload to a file instead of stdout",
)
@click.pass_context
def report(ctx, output: str | None):
    """Export the report payload as JSON.

    The payload holds the computed metrics and the ledger records, ready to
    hand to a narrative report generator.
    """
    payload = ReportService(ctx.obj["db"]).build_payload()
    text = json.dumps(payload, indent=2)

    if output:
        with open(output, "w", encoding="utf-8") as f:
            f.write(text + "\n")
        click.echo(f"Wrote report payload to {output}")
    else:
        click.echo(text)


def register_commands(cli):
    """Register dashboard commands with main CLI."""
    cli.add_command(dashboard)
    cli.add_command(report)
