"""Mapper functions to convert SQLAlchemy models into domain entities.

Stored status and capital type strings are turned into enums here, so the
financial derivations never see raw strings.
"""

from bikeflip.domain import entities as domain
from bikeflip.database.models import (
    Bike as ORMBike,
    Expense as ORMExpense,
    CapitalEntry as ORMCapitalEntry,
    Partner as ORMPartner,
)


def bike_to_domain(orm_bike: ORMBike) -> domain.Bike:
    """Convert SQLAlchemy Bike model to domain Bike entity."""
    return domain.Bike(
        id=orm_bike.id,
        model=orm_bike.model,
        nickname=orm_bike.nickname,
        status=domain.BikeStatus(orm_bike.status),
        buy_date=orm_bike.buy_date,
        buy_price=orm_bike.buy_price,
        other_costs=orm_bike.other_costs,
        sell_date=orm_bike.sell_date,
        sell_price=orm_bike.sell_price,
        notes=orm_bike.notes,
    )


def expense_to_domain(orm_expense: ORMExpense) -> domain.Expense:
    """Convert SQLAlchemy Expense model to domain Expense entity."""
    return domain.Expense(
        id=orm_expense.id,
        date=orm_expense.date,
        description=orm_expense.description,
        category=orm_expense.category or domain.DEFAULT_EXPENSE_CATEGORY,
        amount=orm_expense.amount,
        paid_by=orm_expense.paid_by or domain.BUSINESS_PAYER,
        bike_id=orm_expense.bike_id or None,
    )


def capital_entry_to_domain(orm_entry: ORMCapitalEntry) -> domain.CapitalEntry:
    """Convert SQLAlchemy CapitalEntry model to domain CapitalEntry entity."""
    return domain.CapitalEntry(
        id=orm_entry.id,
        partner_name=orm_entry.partner_name,
        type=domain.CapitalType(orm_entry.type),
        amount=orm_entry.amount,
        date=orm_entry.date,
        description=orm_entry.description,
    )


def partner_to_domain(orm_partner: ORMPartner) -> domain.Partner:
    """Convert SQLAlchemy Partner model to domain Partner entity."""
    return domain.Partner(id=orm_partner.id, name=orm_partner.name)
