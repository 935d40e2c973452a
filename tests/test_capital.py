"""Tests for the capital service."""

from datetime import date
from decimal import Decimal

import pytest

from bikeflip.domain.capital import coerce_capital_type
from bikeflip.domain.entities import CapitalType
from bikeflip.domain.errors import NotFoundError, ValidationError


def test_add_contribution(capital_service):
    entry_id = capital_service.add_entry(
        partner_name="Alex",
        entry_type="contribution",
        amount=Decimal("1000"),
        date=date(2024, 1, 1),
        description="Seed money",
    )

    entry = capital_service.get_entry(entry_id)
    assert entry.partner_name == "Alex"
    assert entry.type == CapitalType.CONTRIBUTION
    assert entry.amount == Decimal("1000")
    assert entry.description == "Seed money"


def test_add_entry_for_unknown_partner(capital_service, partner_service):
    """Test that names off the roster are accepted."""
    entry_id = capital_service.add_entry("Alx", CapitalType.WITHDRAWAL, Decimal("20"), date(2024, 1, 2))
    assert capital_service.get_entry(entry_id).partner_name == "Alx"
    assert dict(partner_service.get_balances()) == {"Alx": Decimal("-20")}


def test_add_entry_validation(capital_service):
    with pytest.raises(ValidationError, match="Partner name"):
        capital_service.add_entry("", CapitalType.CONTRIBUTION, Decimal("5"), date(2024, 1, 1))
    with pytest.raises(ValidationError, match="cannot be negative"):
        capital_service.add_entry("Alex", CapitalType.CONTRIBUTION, Decimal("-5"), date(2024, 1, 1))
    with pytest.raises(ValidationError, match="Unknown capital type"):
        capital_service.add_entry("Alex", "loan", Decimal("5"), date(2024, 1, 1))


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("Contribution", CapitalType.CONTRIBUTION),
        ("withdrawal", CapitalType.WITHDRAWAL),
        (" WITHDRAWAL ", CapitalType.WITHDRAWAL),
        (CapitalType.CONTRIBUTION, CapitalType.CONTRIBUTION),
    ],
)
def test_coerce_capital_type(raw, expected):
    assert coerce_capital_type(raw) == expected


def test_list_entries_filters(capital_service):
    first = capital_service.add_entry("Alex", CapitalType.CONTRIBUTION, Decimal("100"), date(2024, 1, 1))
    second = capital_service.add_entry("Sam", CapitalType.CONTRIBUTION, Decimal("200"), date(2024, 2, 1))
    third = capital_service.add_entry("Alex", CapitalType.WITHDRAWAL, Decimal("50"), date(2024, 3, 1))

    assert [e.id for e in capital_service.list_entries()] == [third, second, first]
    assert [e.id for e in capital_service.list_entries(partner_name="Alex")] == [third, first]
    assert [
        e.id
        for e in capital_service.list_entries(
            start_date=date(2024, 1, 15), end_date=date(2024, 2, 15)
        )
    ] == [second]


def test_delete_entry(capital_service):
    entry_id = capital_service.add_entry("Alex", CapitalType.CONTRIBUTION, Decimal("100"), date(2024, 1, 1))
    capital_service.delete_entry(entry_id)
    assert capital_service.get_entry(entry_id) is None

    with pytest.raises(NotFoundError):
        capital_service.delete_entry(entry_id)


def test_add_entry_rejects_sub_cent_amount(capital_service):
    with pytest.raises(ValidationError, match="Capital amount cannot have fractions of a cent"):
        capital_service.add_entry("Alex", CapitalType.CONTRIBUTION, Decimal("99.999"), date(2024, 1, 1))
    assert capital_service.list_entries() == []
