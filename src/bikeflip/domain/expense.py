"""Expense domain service."""

import logging
from typing import Optional
from datetime import date
from decimal import Decimal

from bikeflip.database.base import Database
from bikeflip.domain.entities import (
    BUSINESS_PAYER,
    DEFAULT_EXPENSE_CATEGORY,
    Expense,
)
from bikeflip.domain.errors import (
    NotFoundError,
    ValidationError,
    bike_not_found,
    expense_not_found,
    partner_not_found,
)
from bikeflip.domain.validation import check_amount

logger = logging.getLogger(__name__)


def contribution_description(expense_description: str) -> str:
    """Description given to the contribution created for a partner-paid expense."""
    return f"Expense: {expense_description}"


class ExpenseService:
    """Service for managing expenses."""

    def __init__(self, db: Database):
        """Initialize expense service.

        Args:
            db: Database instance
        """
        self.db = db

    def record_expense(
        self,
        date: date,
        description: str,
        amount: Decimal,
        category: Optional[str] = None,
        paid_by: Optional[str] = None,
        bike_id: Optional[str] = None,
    ) -> tuple[str, Optional[str]]:
        """Record an expense.

        When a partner paid out of pocket, a Contribution of the same amount
        and date is booked for that partner in the same transaction, so the
        expense and the capital inflow can never be saved apart.

        Args:
            date: Expense date
            description: What the money was spent on
            amount: Amount spent
            category: Category label (defaults to "General")
            paid_by: "Business" or a partner name (defaults to "Business")
            bike_id: Optional bike the expense is attributed to

        Returns:
            Tuple of (expense ID, contribution ID or None)

        Raises:
            ValidationError: If the description is empty or the amount negative
                or finer than a cent
            NotFoundError: If the bike or the paying partner doesn't exist
        """
        if not description or not description.strip():
            raise ValidationError("Expense description is required")
        if amount is None:
            raise ValidationError("Expense amount is required")
        check_amount("Expense amount", amount)

        payer = (paid_by or "").strip() or BUSINESS_PAYER
        if payer.lower() == BUSINESS_PAYER.lower():
            payer = BUSINESS_PAYER
        contribution_partner = None
        if payer != BUSINESS_PAYER:
            if self.db.get_partner_by_name(payer) is None:
                raise NotFoundError(partner_not_found(payer))
            contribution_partner = payer

        if bike_id:
            if self.db.get_bike(bike_id) is None:
                raise NotFoundError(bike_not_found(bike_id))
        else:
            bike_id = None

        description = description.strip()
        expense_id, entry_id = self.db.record_expense(
            date=date,
            description=description,
            amount=amount,
            category=(category or "").strip() or DEFAULT_EXPENSE_CATEGORY,
            paid_by=payer,
            bike_id=bike_id,
            contribution_partner=contribution_partner,
            contribution_description=(
                contribution_description(description) if contribution_partner else None
            ),
        )
        if entry_id is not None:
            logger.info(
                "Expense %s paid by %s, booked contribution %s", expense_id, payer, entry_id
            )
        return expense_id, entry_id

    def get_expense(self, expense_id: str) -> Optional[Expense]:
        """Get expense by ID."""
        return self.db.get_expense(expense_id)

    def list_expenses(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        bike_id: Optional[str] = None,
        general_only: bool = False,
    ) -> list[Expense]:
        """List expenses with filters.

        Args:
            start_date: Optional start date filter
            end_date: Optional end date filter
            bike_id: Only expenses linked to this bike
            general_only: Only expenses without a bike reference

        Returns:
            List of expense entities, newest first
        """
        if bike_id is not None and general_only:
            raise ValidationError("Cannot filter by bike and general expenses at once")
        return self.db.list_expenses(
            start_date=start_date,
            end_date=end_date,
            bike_id=bike_id,
            general_only=general_only,
        )

    def link_to_bike(self, expense_id: str, bike_id: str) -> None:
        """Attribute an existing expense to a bike.

        Raises:
            NotFoundError: If the expense or the bike doesn't exist
        """
        if self.db.get_expense(expense_id) is None:
            raise NotFoundError(expense_not_found(expense_id))
        if self.db.get_bike(bike_id) is None:
            raise NotFoundError(bike_not_found(bike_id))
        self.db.update_expense_bike(expense_id, bike_id)

    def unlink_from_bike(self, expense_id: str) -> None:
        """Turn an expense back into a general expense."""
        if self.db.get_expense(expense_id) is None:
            raise NotFoundError(expense_not_found(expense_id))
        self.db.update_expense_bike(expense_id, None)

    def delete_expense(self, expense_id: str) -> None:
        """Delete an expense.

        A contribution booked for a partner-paid expense is a separate
        capital entry and is left untouched.

        Raises:
            NotFoundError: If the expense doesn't exist
        """
        if self.db.get_expense(expense_id) is None:
            raise NotFoundError(expense_not_found(expense_id))
        self.db.delete_expense(expense_id)
