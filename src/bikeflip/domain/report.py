"""Dashboard and report payload domain service."""

from typing import Any, Optional

from bikeflip.database.base import Database
from bikeflip.domain.entities import (
    BUSINESS_PAYER,
    DashboardReport,
    LedgerSnapshot,
)
from bikeflip.domain.financials import build_dashboard


def _money_str(value) -> Optional[str]:
    return None if value is None else str(value)


class ReportService:
    """Service for building the dashboard and the narrative report payload."""

    def __init__(self, db: Database):
        """Initialize report service.

        Args:
            db: Database instance
        """
        self.db = db

    def build_dashboard(self, snapshot: Optional[LedgerSnapshot] = None) -> DashboardReport:
        """Derive the dashboard from a snapshot (read from the database if omitted)."""
        if snapshot is None:
            snapshot = self.db.get_snapshot()
        return build_dashboard(snapshot)

    def build_payload(self, snapshot: Optional[LedgerSnapshot] = None) -> dict[str, Any]:
        """Build the JSON-ready payload handed to the narrative generator.

        Amounts are rendered as decimal strings. A bike whose profit is not
        applicable carries "N/A" rather than a number.
        """
        if snapshot is None:
            snapshot = self.db.get_snapshot()
        dashboard = build_dashboard(snapshot)
        metrics = dashboard.metrics

        return {
            "summary": {
                "sold_count": metrics.sold_count,
                "inventory_count": metrics.inventory_count,
                "kept_count": metrics.kept_count,
                "gross_profit": str(metrics.gross_profit),
                "general_expenses": str(metrics.general_expenses),
                "net_profit": str(metrics.net_profit),
                "free_cash": str(metrics.free_cash),
                "inventory_value": str(metrics.inventory_value),
            },
            "metrics": metrics.to_dict(),
            "bikes": [
                {
                    "id": item.bike.id,
                    "model": item.bike.model,
                    "nickname": item.bike.nickname,
                    "status": item.bike.status.value,
                    "buy": _money_str(item.bike.buy_price),
                    "sell": _money_str(item.bike.sell_price),
                    "total_cost": str(item.total_cost),
                    "profit": _money_str(item.profit) if item.profit is not None else "N/A",
                }
                for item in dashboard.bikes
            ],
            "expenses": [
                {
                    "id": expense.id,
                    "date": expense.date.isoformat(),
                    "description": expense.description,
                    "category": expense.category,
                    "amount": _money_str(expense.amount),
                    "paid_by": expense.paid_by or BUSINESS_PAYER,
                    "bike_id": expense.bike_id,
                }
                for expense in snapshot.expenses
            ],
            "capital": [
                {
                    "id": entry.id,
                    "partner_name": entry.partner_name,
                    "type": entry.type.value,
                    "amount": _money_str(entry.amount),
                    "date": entry.date.isoformat(),
                    "description": entry.description,
                }
                for entry in snapshot.capital_entries
            ],
            "partners": [{"id": p.id, "name": p.name} for p in snapshot.partners],
            "partner_balances": {
                name: str(balance)
                for name, balance in sorted(dashboard.partner_balances.items())
            },
        }
