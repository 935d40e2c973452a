"""Partner domain service."""

import logging
from decimal import Decimal
from typing import Optional

from bikeflip.database.base import Database
from bikeflip.domain.entities import BUSINESS_PAYER, Partner
from bikeflip.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    duplicate_partner_name,
    partner_not_found,
)
from bikeflip.domain.financials import partner_balances

logger = logging.getLogger(__name__)


class PartnerService:
    """Service for managing the partner roster and balances.

    Capital entries and expenses point at partners by name. Renaming a
    partner leaves those records alone unless ``propagate`` is requested.
    """

    def __init__(self, db: Database):
        """Initialize partner service.

        Args:
            db: Database instance
        """
        self.db = db

    def _validate_name(self, name: str) -> str:
        if not name or not name.strip():
            raise ValidationError("Partner name is required")
        name = name.strip()
        if name.lower() == BUSINESS_PAYER.lower():
            raise ValidationError(f"'{BUSINESS_PAYER}' is reserved for the business account")
        return name

    def create_partner(self, name: str) -> str:
        """Add a partner to the roster.

        Returns:
            Partner ID

        Raises:
            ValidationError: If the name is empty or reserved
            ConflictError: If a partner with that name already exists
        """
        name = self._validate_name(name)
        if self.db.get_partner_by_name(name) is not None:
            raise ConflictError(duplicate_partner_name(name))
        return self.db.create_partner(name)

    def get_partner(self, partner_id: str) -> Optional[Partner]:
        """Get partner by ID."""
        return self.db.get_partner(partner_id)

    def list_partners(self) -> list[Partner]:
        """List partners ordered by name."""
        return self.db.list_partners()

    def resolve_partner(self, partner: str) -> Partner:
        """Find a partner by exact name, falling back to ID.

        Raises:
            NotFoundError: If neither matches
        """
        found = self.db.get_partner_by_name(partner) or self.db.get_partner(partner)
        if found is None:
            raise NotFoundError(partner_not_found(partner))
        return found

    def rename_partner(self, partner_id: str, name: str, propagate: bool = False) -> int:
        """Rename a partner.

        Args:
            partner_id: Partner ID
            name: New display name
            propagate: Also rewrite the name on existing capital entries and
                expense payers

        Returns:
            Number of historical records rewritten

        Raises:
            NotFoundError: If the partner doesn't exist
            ConflictError: If another partner already has the name
        """
        name = self._validate_name(name)
        if self.db.get_partner(partner_id) is None:
            raise NotFoundError(partner_not_found(partner_id))
        existing = self.db.get_partner_by_name(name)
        if existing is not None and existing.id != partner_id:
            raise ConflictError(duplicate_partner_name(name))
        return self.db.rename_partner(partner_id, name, propagate=propagate)

    def delete_partner(self, partner_id: str) -> None:
        """Remove a partner from the roster.

        Capital history keeps the name, so the partner's balance stays
        visible in the ledger.
        """
        partner = self.db.get_partner(partner_id)
        if partner is None:
            raise NotFoundError(partner_not_found(partner_id))
        self.db.delete_partner(partner_id)
        logger.debug("Deleted partner %s (%s)", partner_id, partner.name)

    def get_balances(self, sort_by: str = "name") -> list[tuple[str, Decimal]]:
        """Capital balance per partner.

        Args:
            sort_by: "name" (alphabetical) or "balance" (largest first)

        Returns:
            List of (partner name, balance) pairs
        """
        snapshot = self.db.get_snapshot()
        balances = partner_balances(snapshot.capital_entries, snapshot.partners)
        if sort_by == "balance":
            return sorted(balances.items(), key=lambda item: (-item[1], item[0]))
        if sort_by == "name":
            return sorted(balances.items())
        raise ValidationError(f"Unknown sort order '{sort_by}'. Use 'name' or 'balance'")
