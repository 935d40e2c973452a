"""Domain model entities for bikeflip.

These are pure data classes representing the ledger, independent of the
database schema. The financial derivations only ever read them.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional


BUSINESS_PAYER = "Business"
DEFAULT_EXPENSE_CATEGORY = "General"
EXPENSE_CATEGORIES = (
    "Marketing",
    "Tools",
    "Rent",
    "Transport",
    "Utilities",
    "Software",
    "Parts",
    "Other",
)


class BikeStatus(str, Enum):
    """Lifecycle status of a bike."""

    IN_INVENTORY = "In Inventory"
    SOLD = "Sold"
    KEPT = "Kept"


class CapitalType(str, Enum):
    """Direction of a capital movement between the business and a partner."""

    CONTRIBUTION = "Contribution"
    WITHDRAWAL = "Withdrawal"


@dataclass(frozen=True)
class Bike:
    """Bike inventory unit."""

    id: str
    model: str
    status: BikeStatus
    buy_date: Optional[date]
    buy_price: Optional[Decimal]
    other_costs: Optional[Decimal] = Decimal("0")
    nickname: Optional[str] = None
    sell_date: Optional[date] = None
    sell_price: Optional[Decimal] = None
    notes: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.nickname or self.model


@dataclass(frozen=True)
class Expense:
    """Cost event, optionally tied to a bike."""

    id: str
    date: date
    description: str
    amount: Optional[Decimal]
    category: str = DEFAULT_EXPENSE_CATEGORY
    paid_by: str = BUSINESS_PAYER
    bike_id: Optional[str] = None

    @property
    def is_general(self) -> bool:
        return not self.bike_id


@dataclass(frozen=True)
class CapitalEntry:
    """Capital movement between the business and a partner."""

    id: str
    partner_name: str
    type: CapitalType
    amount: Optional[Decimal]
    date: date
    description: Optional[str] = None


@dataclass(frozen=True)
class Partner:
    """Partner ("bro") taking part in the business."""

    id: str
    name: str


@dataclass(frozen=True)
class LedgerSnapshot:
    """Point-in-time copy of all four ledger collections."""

    bikes: tuple[Bike, ...] = ()
    expenses: tuple[Expense, ...] = ()
    capital_entries: tuple[CapitalEntry, ...] = ()
    partners: tuple[Partner, ...] = ()


@dataclass(frozen=True)
class BikeFinancials:
    """Derived cost and outcome of one bike.

    ``profit`` is None when the outcome is not applicable (bike still in
    inventory, or sold without a recorded sale price).
    """

    bike: Bike
    total_cost: Decimal
    profit: Optional[Decimal]


@dataclass(frozen=True)
class BusinessMetrics:
    """Dashboard KPIs in both the accrual and the cash-flow view."""

    total_revenue: Decimal
    total_cogs: Decimal
    gross_profit: Decimal
    general_expenses: Decimal
    net_profit: Decimal
    inventory_value: Decimal
    net_capital: Decimal
    total_bike_outflow: Decimal
    free_cash: Decimal
    sold_count: int
    inventory_count: int
    kept_count: int

    def to_dict(self) -> dict:
        return {
            "total_revenue": str(self.total_revenue),
            "total_cogs": str(self.total_cogs),
            "gross_profit": str(self.gross_profit),
            "general_expenses": str(self.general_expenses),
            "net_profit": str(self.net_profit),
            "inventory_value": str(self.inventory_value),
            "net_capital": str(self.net_capital),
            "total_bike_outflow": str(self.total_bike_outflow),
            "free_cash": str(self.free_cash),
            "sold_count": self.sold_count,
            "inventory_count": self.inventory_count,
            "kept_count": self.kept_count,
        }


@dataclass(frozen=True)
class FlipProfit:
    """Profit of a single sold bike, labelled for charting."""

    bike_id: str
    label: str
    profit: Decimal


@dataclass(frozen=True)
class DashboardReport:
    """Everything the dashboard view renders."""

    metrics: BusinessMetrics
    bikes: tuple[BikeFinancials, ...] = ()
    flip_profits: tuple[FlipProfit, ...] = ()
    expense_breakdown: dict[str, Decimal] = field(default_factory=dict)
    partner_balances: dict[str, Decimal] = field(default_factory=dict)
