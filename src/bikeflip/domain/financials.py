"""Financial derivations over a ledger snapshot.

Every function here is pure: it reads immutable entities and returns fresh
values. Two views are produced and must reconcile:

- Accrual (profit and loss). A kept bike is booked as an internal sale at
  its own cost, so it adds equal amounts to revenue and COGS.
- Cash flow (free cash). Every bike's cost is an outflow regardless of
  status; capital contributions and withdrawals move cash in and out.

Missing numeric fields count as zero so that a dashboard can always be
rendered from incomplete records.
"""

import logging
from collections import defaultdict
from decimal import Decimal
from typing import Iterable, Mapping, Optional, Sequence

from bikeflip.domain.entities import (
    DEFAULT_EXPENSE_CATEGORY,
    Bike,
    BikeFinancials,
    BikeStatus,
    BusinessMetrics,
    CapitalEntry,
    CapitalType,
    DashboardReport,
    Expense,
    FlipProfit,
    LedgerSnapshot,
    Partner,
)

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def _money(value) -> Decimal:
    """Coerce a possibly missing amount to Decimal, treating None as zero."""
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def linked_expense_totals(expenses: Iterable[Expense]) -> dict[str, Decimal]:
    """Sum expense amounts per referenced bike ID.

    Expenses without a bike reference are skipped.
    """
    totals: dict[str, Decimal] = defaultdict(lambda: ZERO)
    for expense in expenses:
        if expense.bike_id:
            totals[expense.bike_id] += _money(expense.amount)
    return dict(totals)


def _cost_from_totals(bike: Bike, linked_totals: Mapping[str, Decimal]) -> Decimal:
    return (
        _money(bike.buy_price)
        + _money(bike.other_costs)
        + linked_totals.get(bike.id, ZERO)
    )


def total_cost(bike: Bike, expenses: Iterable[Expense]) -> Decimal:
    """Fully loaded cost of a bike.

    Purchase price plus the legacy incidental costs plus every expense that
    references the bike. The result is never clamped.

    Args:
        bike: Bike to cost
        expenses: Complete expense collection

    Returns:
        Total cost as Decimal
    """
    return _cost_from_totals(bike, linked_expense_totals(expenses))


def _profit_from_cost(bike: Bike, cost: Decimal) -> Optional[Decimal]:
    if bike.status == BikeStatus.SOLD and bike.sell_price is not None:
        return _money(bike.sell_price) - cost
    if bike.status == BikeStatus.KEPT:
        return ZERO
    return None


def profit(bike: Bike, expenses: Iterable[Expense]) -> Optional[Decimal]:
    """Profit or loss of a single bike.

    Returns:
        ``sell_price - total_cost`` for a sold bike with a sale price,
        exactly zero for a kept bike, and None ("not applicable") for a bike
        in inventory or a sold bike whose sale price is not recorded yet.
    """
    return _profit_from_cost(bike, total_cost(bike, expenses))


def bike_financials(
    bikes: Sequence[Bike], expenses: Iterable[Expense]
) -> list[BikeFinancials]:
    """Compute total cost and profit for every bike."""
    linked_totals = linked_expense_totals(expenses)
    results = []
    for bike in bikes:
        cost = _cost_from_totals(bike, linked_totals)
        results.append(
            BikeFinancials(
                bike=bike, total_cost=cost, profit=_profit_from_cost(bike, cost)
            )
        )
    return results


def general_expenses_total(expenses: Iterable[Expense]) -> Decimal:
    """Sum of expenses not attributed to any bike."""
    return sum(
        (_money(expense.amount) for expense in expenses if expense.is_general),
        ZERO,
    )


def net_capital(capital_entries: Iterable[CapitalEntry]) -> Decimal:
    """Contributions minus withdrawals across all partners."""
    total = ZERO
    for entry in capital_entries:
        if entry.type == CapitalType.CONTRIBUTION:
            total += _money(entry.amount)
        else:
            total -= _money(entry.amount)
    return total


def compute_metrics(
    bikes: Sequence[Bike],
    expenses: Sequence[Expense],
    capital_entries: Sequence[CapitalEntry],
) -> BusinessMetrics:
    """Aggregate the ledger into dashboard KPIs.

    Args:
        bikes: All bikes
        expenses: All expenses, linked and general
        capital_entries: All capital movements

    Returns:
        BusinessMetrics with the accrual figures, the cash-flow figures and
        the per-status bike counts
    """
    linked_totals = linked_expense_totals(expenses)

    revenue = ZERO
    cogs = ZERO
    inventory_value = ZERO
    bike_outflow = ZERO
    sold_count = inventory_count = kept_count = 0

    for bike in bikes:
        cost = _cost_from_totals(bike, linked_totals)
        bike_outflow += cost
        if bike.status == BikeStatus.SOLD:
            sold_count += 1
            revenue += _money(bike.sell_price)
            cogs += cost
        elif bike.status == BikeStatus.KEPT:
            kept_count += 1
            # Internal sale at cost
            revenue += cost
            cogs += cost
        elif bike.status == BikeStatus.IN_INVENTORY:
            inventory_count += 1
            inventory_value += cost

    general = general_expenses_total(expenses)
    capital = net_capital(capital_entries)
    gross_profit = revenue - cogs

    metrics = BusinessMetrics(
        total_revenue=revenue,
        total_cogs=cogs,
        gross_profit=gross_profit,
        general_expenses=general,
        net_profit=gross_profit - general,
        inventory_value=inventory_value,
        net_capital=capital,
        total_bike_outflow=bike_outflow,
        free_cash=capital + revenue - bike_outflow - general,
        sold_count=sold_count,
        inventory_count=inventory_count,
        kept_count=kept_count,
    )
    logger.debug(
        "Computed metrics for %d bikes, %d expenses, %d capital entries",
        len(bikes),
        len(expenses),
        len(capital_entries),
    )
    return metrics


def partner_balances(
    capital_entries: Iterable[CapitalEntry], partners: Iterable[Partner]
) -> dict[str, Decimal]:
    """Running capital balance per partner name.

    Every known partner appears, starting at zero. Entries naming a partner
    that is not on the roster (deleted, or misspelled) are tracked under that
    name as well. Matching is by name string only.
    """
    balances: dict[str, Decimal] = {partner.name: ZERO for partner in partners}
    for entry in capital_entries:
        balance = balances.get(entry.partner_name, ZERO)
        if entry.type == CapitalType.CONTRIBUTION:
            balance += _money(entry.amount)
        else:
            balance -= _money(entry.amount)
        balances[entry.partner_name] = balance
    return balances


def flip_profits(
    bikes: Sequence[Bike], expenses: Iterable[Expense]
) -> list[FlipProfit]:
    """Profit of each sold bike with a recorded sale price."""
    results = []
    for financials in bike_financials(bikes, expenses):
        bike = financials.bike
        if bike.status != BikeStatus.SOLD or financials.profit is None:
            continue
        results.append(
            FlipProfit(
                bike_id=bike.id,
                label=bike.nickname or bike.model[:10],
                profit=financials.profit,
            )
        )
    return results


def expense_breakdown(expenses: Iterable[Expense]) -> dict[str, Decimal]:
    """Sum expense amounts per category.

    Expenses with an empty category are grouped under the default category.
    """
    breakdown: dict[str, Decimal] = defaultdict(lambda: ZERO)
    for expense in expenses:
        breakdown[expense.category or DEFAULT_EXPENSE_CATEGORY] += _money(
            expense.amount
        )
    return dict(breakdown)


def build_dashboard(snapshot: LedgerSnapshot) -> DashboardReport:
    """Derive everything the dashboard shows from one snapshot."""
    return DashboardReport(
        metrics=compute_metrics(
            snapshot.bikes, snapshot.expenses, snapshot.capital_entries
        ),
        bikes=tuple(bike_financials(snapshot.bikes, snapshot.expenses)),
        flip_profits=tuple(flip_profits(snapshot.bikes, snapshot.expenses)),
        expense_breakdown=expense_breakdown(snapshot.expenses),
        partner_balances=partner_balances(
            snapshot.capital_entries, snapshot.partners
        ),
    )
