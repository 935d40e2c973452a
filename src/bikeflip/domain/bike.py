"""Bike domain service."""

import logging
from typing import Optional, Union
from datetime import date
from decimal import Decimal

from bikeflip.database.base import Database
from bikeflip.domain.entities import Bike, BikeFinancials, BikeStatus, Expense
from bikeflip.domain.errors import (
    NotFoundError,
    ValidationError,
    bike_not_found,
)
from bikeflip.domain.financials import total_cost, profit
from bikeflip.domain.validation import check_amount

logger = logging.getLogger(__name__)


def coerce_status(status: Union[BikeStatus, str]) -> BikeStatus:
    """Turn a status value or a loose spelling into a BikeStatus.

    Accepts the stored value ("In Inventory"), the member name
    ("IN_INVENTORY") and CLI spellings ("in-inventory", "inventory").

    Raises:
        ValidationError: If the status is not recognized
    """
    if isinstance(status, BikeStatus):
        return status
    normalized = status.strip().lower().replace("-", " ").replace("_", " ")
    aliases = {
        "in inventory": BikeStatus.IN_INVENTORY,
        "inventory": BikeStatus.IN_INVENTORY,
        "sold": BikeStatus.SOLD,
        "kept": BikeStatus.KEPT,
    }
    if normalized not in aliases:
        valid = ", ".join(s.value for s in BikeStatus)
        raise ValidationError(f"Unknown bike status '{status}'. Valid statuses: {valid}")
    return aliases[normalized]


class BikeService:
    """Service for managing bikes."""

    def __init__(self, db: Database):
        """Initialize bike service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_bike(
        self,
        model: str,
        buy_price: Decimal,
        buy_date: Optional[date] = None,
        other_costs: Decimal = Decimal("0"),
        nickname: Optional[str] = None,
        status: Union[BikeStatus, str] = BikeStatus.IN_INVENTORY,
        sell_date: Optional[date] = None,
        sell_price: Optional[Decimal] = None,
        notes: Optional[str] = None,
    ) -> str:
        """Create a bike.

        Sale fields are only stored when the status is Sold.

        Args:
            model: Model name
            buy_price: Purchase price
            buy_date: Purchase date (defaults to today)
            other_costs: Legacy incidental costs
            nickname: Optional nickname
            status: Initial status
            sell_date: Sale date, for sold bikes
            sell_price: Sale price, for sold bikes
            notes: Optional notes

        Returns:
            Generated bike ID

        Raises:
            ValidationError: If the model is empty, an amount is negative or
                finer than a cent, or the status is unknown
        """
        if not model or not model.strip():
            raise ValidationError("Bike model is required")
        if buy_price is None:
            raise ValidationError("Buy price is required")
        check_amount("Buy price", buy_price)
        check_amount("Other costs", other_costs)
        check_amount("Sell price", sell_price)

        bike_status = coerce_status(status)
        if bike_status != BikeStatus.SOLD:
            sell_date = None
            sell_price = None

        bike_id = self.db.create_bike(
            model=model.strip(),
            status=bike_status.value,
            buy_date=buy_date or date.today(),
            buy_price=buy_price,
            other_costs=other_costs,
            nickname=nickname or None,
            sell_date=sell_date,
            sell_price=sell_price,
            notes=notes or None,
        )
        logger.debug("Created bike %s (%s)", bike_id, bike_status.value)
        return bike_id

    def get_bike(self, bike_id: str) -> Optional[Bike]:
        """Get bike by ID.

        Args:
            bike_id: Bike ID

        Returns:
            Bike entity or None if not found
        """
        return self.db.get_bike(bike_id)

    def require_bike(self, bike_id: str) -> Bike:
        """Get bike by ID, raising NotFoundError if it does not exist."""
        bike = self.db.get_bike(bike_id)
        if bike is None:
            raise NotFoundError(bike_not_found(bike_id))
        return bike

    def list_bikes(self, status: Union[BikeStatus, str, None] = None) -> list[Bike]:
        """List bikes, optionally filtered by status."""
        status_value = coerce_status(status).value if status is not None else None
        return self.db.list_bikes(status=status_value)

    def update_bike(
        self,
        bike_id: str,
        model: Optional[str] = None,
        nickname: Optional[str] = None,
        status: Union[BikeStatus, str, None] = None,
        buy_date: Optional[date] = None,
        buy_price: Optional[Decimal] = None,
        other_costs: Optional[Decimal] = None,
        sell_date: Optional[date] = None,
        sell_price: Optional[Decimal] = None,
        notes: Optional[str] = None,
    ) -> None:
        """Update bike fields.

        Only provided fields change. When the resulting status is not Sold,
        the sale date and sale price are cleared.

        Raises:
            NotFoundError: If the bike doesn't exist
            ValidationError: If an amount is negative or finer than a cent,
                the model is empty or the status is unknown
        """
        bike = self.require_bike(bike_id)

        if model is not None and not model.strip():
            raise ValidationError("Bike model cannot be empty")
        check_amount("Buy price", buy_price)
        check_amount("Other costs", other_costs)
        check_amount("Sell price", sell_price)

        new_status = coerce_status(status) if status is not None else bike.status
        if new_status != bike.status:
            logger.info(
                "Bike %s status %s -> %s", bike_id, bike.status.value, new_status.value
            )

        self.db.update_bike(
            bike_id=bike_id,
            model=model.strip() if model is not None else None,
            nickname=nickname,
            status=new_status.value if status is not None else None,
            buy_date=buy_date,
            buy_price=buy_price,
            other_costs=other_costs,
            sell_date=sell_date,
            sell_price=sell_price,
            notes=notes,
            clear_sale=new_status != BikeStatus.SOLD,
        )

    def mark_sold(
        self,
        bike_id: str,
        sell_price: Optional[Decimal] = None,
        sell_date: Optional[date] = None,
    ) -> None:
        """Mark a bike as sold.

        The sale price may be left out while a sale is pending confirmation;
        such a bike reports no profit until the price is recorded.
        """
        self.update_bike(
            bike_id,
            status=BikeStatus.SOLD,
            sell_price=sell_price,
            sell_date=sell_date or date.today(),
        )

    def mark_kept(self, bike_id: str) -> None:
        """Mark a bike as kept by the partners (booked as a sale at cost)."""
        self.update_bike(bike_id, status=BikeStatus.KEPT)

    def delete_bike(self, bike_id: str) -> int:
        """Delete a bike.

        Expenses linked to the bike are kept and become general expenses.

        Args:
            bike_id: Bike ID to delete

        Returns:
            Number of expenses that were unlinked

        Raises:
            NotFoundError: If the bike doesn't exist
        """
        self.require_bike(bike_id)
        return self.db.delete_bike(bike_id)

    def linked_expenses(self, bike_id: str) -> list[Expense]:
        """List expenses attributed to a bike."""
        return self.db.list_expenses(bike_id=bike_id)

    def get_financials(self, bike_id: str) -> BikeFinancials:
        """Compute total cost and profit for one bike."""
        bike = self.require_bike(bike_id)
        expenses = self.linked_expenses(bike_id)
        return BikeFinancials(
            bike=bike,
            total_cost=total_cost(bike, expenses),
            profit=profit(bike, expenses),
        )
