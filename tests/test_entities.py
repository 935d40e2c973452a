"""Tests for domain entities."""

from dataclasses import FrozenInstanceError
from datetime import date
from decimal import Decimal

import pytest

from bikeflip.domain.entities import (
    BUSINESS_PAYER,
    Bike,
    BikeStatus,
    CapitalType,
    Expense,
)


def test_bike_creation():
    """Test creating a Bike entity."""
    bike = Bike(
        id="b1",
        model="Trek FX 3 Disc",
        status=BikeStatus.IN_INVENTORY,
        buy_date=date(2024, 3, 1),
        buy_price=Decimal("500"),
    )
    assert bike.other_costs == Decimal("0")
    assert bike.sell_price is None
    assert bike.display_name == "Trek FX 3 Disc"


def test_bike_display_name_prefers_nickname():
    bike = Bike(
        id="b1",
        model="Trek FX 3 Disc",
        nickname="Red Rocket",
        status=BikeStatus.SOLD,
        buy_date=date(2024, 3, 1),
        buy_price=Decimal("500"),
    )
    assert bike.display_name == "Red Rocket"


def test_bike_is_frozen():
    bike = Bike(
        id="b1",
        model="Trek",
        status=BikeStatus.IN_INVENTORY,
        buy_date=None,
        buy_price=Decimal("500"),
    )
    with pytest.raises(FrozenInstanceError):
        bike.status = BikeStatus.SOLD


def test_expense_defaults():
    expense = Expense(
        id="e1", date=date(2024, 3, 1), description="Ads", amount=Decimal("10")
    )
    assert expense.category == "General"
    assert expense.paid_by == BUSINESS_PAYER
    assert expense.is_general


def test_expense_linked_is_not_general():
    expense = Expense(
        id="e1", date=date(2024, 3, 1), description="Tube", amount=Decimal("8"), bike_id="b1"
    )
    assert not expense.is_general


def test_enum_values_match_stored_strings():
    assert BikeStatus("In Inventory") is BikeStatus.IN_INVENTORY
    assert BikeStatus.SOLD == "Sold"
    assert CapitalType("Withdrawal") is CapitalType.WITHDRAWAL
