"""Money and table formatting for CLI output."""

from decimal import Decimal
from typing import Optional


def format_money(amount: Optional[Decimal]) -> str:
    """Format an amount as dollars, e.g. "$1,250.00" or "-$40.00"."""
    if amount is None:
        amount = Decimal("0")
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def format_profit(profit: Optional[Decimal]) -> str:
    """Format a profit, showing "-" when it is not applicable.

    Not applicable (bike unsold, or sale price missing) must stay visually
    distinct from a real zero such as a kept bike.
    """
    if profit is None:
        return "-"
    return format_money(profit)


def short_id(record_id: str) -> str:
    """First eight characters of a generated ID, enough to resolve it."""
    return record_id[:8]
