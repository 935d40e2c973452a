"""Capital domain service."""

from typing import Optional, Union
from datetime import date
from decimal import Decimal

from bikeflip.database.base import Database
from bikeflip.domain.entities import CapitalEntry, CapitalType
from bikeflip.domain.errors import (
    NotFoundError,
    ValidationError,
    capital_entry_not_found,
)
from bikeflip.domain.validation import check_amount


def coerce_capital_type(entry_type: Union[CapitalType, str]) -> CapitalType:
    """Turn a capital type or its case-insensitive name into a CapitalType."""
    if isinstance(entry_type, CapitalType):
        return entry_type
    for member in CapitalType:
        if entry_type.strip().lower() == member.value.lower():
            return member
    raise ValidationError(
        f"Unknown capital type '{entry_type}'. Valid types: Contribution, Withdrawal"
    )


class CapitalService:
    """Service for managing partner capital entries."""

    def __init__(self, db: Database):
        """Initialize capital service.

        Args:
            db: Database instance
        """
        self.db = db

    def add_entry(
        self,
        partner_name: str,
        entry_type: Union[CapitalType, str],
        amount: Decimal,
        date: date,
        description: Optional[str] = None,
    ) -> str:
        """Record a contribution or a withdrawal.

        The partner is referenced by name. Names that are not on the partner
        roster are accepted; the partner ledger tracks them implicitly.

        Returns:
            Capital entry ID

        Raises:
            ValidationError: If the name is empty, the amount negative or
                finer than a cent, or the type unknown
        """
        if not partner_name or not partner_name.strip():
            raise ValidationError("Partner name is required")
        if amount is None:
            raise ValidationError("Capital amount is required")
        check_amount("Capital amount", amount)

        return self.db.create_capital_entry(
            partner_name=partner_name.strip(),
            entry_type=coerce_capital_type(entry_type).value,
            amount=amount,
            date=date,
            description=description or None,
        )

    def get_entry(self, entry_id: str) -> Optional[CapitalEntry]:
        """Get capital entry by ID."""
        return self.db.get_capital_entry(entry_id)

    def list_entries(
        self,
        partner_name: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[CapitalEntry]:
        """List capital entries, newest first."""
        return self.db.list_capital_entries(
            partner_name=partner_name, start_date=start_date, end_date=end_date
        )

    def delete_entry(self, entry_id: str) -> None:
        """Delete a capital entry.

        Raises:
            NotFoundError: If the entry doesn't exist
        """
        if self.db.get_capital_entry(entry_id) is None:
            raise NotFoundError(capital_entry_not_found(entry_id))
        self.db.delete_capital_entry(entry_id)
