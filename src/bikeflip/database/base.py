"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from bikeflip.domain.entities import (
    Bike,
    Expense,
    CapitalEntry,
    Partner,
    LedgerSnapshot,
)


class Database(ABC):
    """Abstract database interface for bikeflip."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def get_snapshot(self) -> LedgerSnapshot:
        """Read all four ledger collections at one point in time."""
        pass

    # Bike operations
    @abstractmethod
    def create_bike(
        self,
        model: str,
        status: str,
        buy_date: Optional[date],
        buy_price: Optional[Decimal],
        other_costs: Optional[Decimal] = Decimal("0"),
        nickname: Optional[str] = None,
        sell_date: Optional[date] = None,
        sell_price: Optional[Decimal] = None,
        notes: Optional[str] = None,
    ) -> str:
        """Create a bike. Returns the generated bike ID."""
        pass

    @abstractmethod
    def get_bike(self, bike_id: str) -> Optional[Bike]:
        """Get bike by ID."""
        pass

    @abstractmethod
    def list_bikes(self, status: Optional[str] = None) -> list[Bike]:
        """List bikes, optionally filtered by status."""
        pass

    @abstractmethod
    def update_bike(
        self,
        bike_id: str,
        model: Optional[str] = None,
        nickname: Optional[str] = None,
        status: Optional[str] = None,
        buy_date: Optional[date] = None,
        buy_price: Optional[Decimal] = None,
        other_costs: Optional[Decimal] = None,
        sell_date: Optional[date] = None,
        sell_price: Optional[Decimal] = None,
        notes: Optional[str] = None,
        clear_sale: bool = False,
    ) -> None:
        """Update bike fields.

        Fields left as None are not changed. If clear_sale is True, the sale
        date and sale price are cleared regardless of the values passed.
        """
        pass

    @abstractmethod
    def delete_bike(self, bike_id: str) -> int:
        """Delete a bike, unlinking its expenses.

        Returns:
            Number of expenses whose bike reference was cleared
        """
        pass

    # Expense operations
    @abstractmethod
    def record_expense(
        self,
        date: date,
        description: str,
        amount: Decimal,
        category: str,
        paid_by: str,
        bike_id: Optional[str] = None,
        contribution_partner: Optional[str] = None,
        contribution_description: Optional[str] = None,
    ) -> tuple[str, Optional[str]]:
        """Create an expense and, optionally, its matching contribution.

        Both records are written in one transaction.

        Returns:
            Tuple of (expense ID, capital entry ID or None)
        """
        pass

    @abstractmethod
    def get_expense(self, expense_id: str) -> Optional[Expense]:
        """Get expense by ID."""
        pass

    @abstractmethod
    def list_expenses(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        bike_id: Optional[str] = None,
        general_only: bool = False,
    ) -> list[Expense]:
        """List expenses with optional filters."""
        pass

    @abstractmethod
    def update_expense_bike(self, expense_id: str, bike_id: Optional[str]) -> None:
        """Link an expense to a bike, or unlink it with None."""
        pass

    @abstractmethod
    def delete_expense(self, expense_id: str) -> None:
        """Delete an expense."""
        pass

    # Capital operations
    @abstractmethod
    def create_capital_entry(
        self,
        partner_name: str,
        entry_type: str,
        amount: Decimal,
        date: date,
        description: Optional[str] = None,
    ) -> str:
        """Create a capital entry. Returns the generated entry ID."""
        pass

    @abstractmethod
    def get_capital_entry(self, entry_id: str) -> Optional[CapitalEntry]:
        """Get capital entry by ID."""
        pass

    @abstractmethod
    def list_capital_entries(
        self,
        partner_name: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[CapitalEntry]:
        """List capital entries with optional filters."""
        pass

    @abstractmethod
    def delete_capital_entry(self, entry_id: str) -> None:
        """Delete a capital entry."""
        pass

    # Partner operations
    @abstractmethod
    def create_partner(self, name: str) -> str:
        """Create a partner. Returns the generated partner ID."""
        pass

    @abstractmethod
    def get_partner(self, partner_id: str) -> Optional[Partner]:
        """Get partner by ID."""
        pass

    @abstractmethod
    def get_partner_by_name(self, name: str) -> Optional[Partner]:
        """Get partner by exact name."""
        pass

    @abstractmethod
    def list_partners(self) -> list[Partner]:
        """List all partners ordered by name."""
        pass

    @abstractmethod
    def rename_partner(self, partner_id: str, name: str, propagate: bool = False) -> int:
        """Rename a partner.

        Args:
            partner_id: Partner ID
            name: New name
            propagate: If True, also rewrite the partner name on capital
                entries and the payer on expenses

        Returns:
            Number of historical records rewritten
        """
        pass

    @abstractmethod
    def delete_partner(self, partner_id: str) -> None:
        """Delete a partner. Historical entries keep the name."""
        pass
