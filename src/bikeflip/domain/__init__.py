"""Domain layer for bikeflip application.

Services are imported from their own modules; only the pure financial
derivations are re-exported here so the database layer can import entities
without pulling services in.
"""

from bikeflip.domain.financials import (
    total_cost,
    profit,
    compute_metrics,
    partner_balances,
    build_dashboard,
)

__all__ = [
    "total_cost",
    "profit",
    "compute_metrics",
    "partner_balances",
    "build_dashboard",
]
