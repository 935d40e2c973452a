"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for ledger rule violations.

    Deriving from ValueError lets the CLI treat parse failures and domain
    failures with one handler.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested ledger record does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as duplicate partner names."""


def bike_not_found(bike_id: str) -> str:
    """Return message for missing bike."""
    return f"Bike {bike_id} not found"


def expense_not_found(expense_id: str) -> str:
    """Return message for missing expense."""
    return f"Expense {expense_id} not found"


def capital_entry_not_found(entry_id: str) -> str:
    """Return message for missing capital entry."""
    return f"Capital entry {entry_id} not found"


def partner_not_found(partner: str) -> str:
    """Return message for missing partner (by ID or name)."""
    return f"Partner '{partner}' not found"


def duplicate_partner_name(name: str) -> str:
    """Return message for a partner name that is already taken."""
    return f"Partner with name '{name}' already exists"


def negative_amount(field_name: str) -> str:
    return f"{field_name} cannot be negative"


def sub_cent_amount(field_name: str) -> str:
    return f"{field_name} cannot have fractions of a cent"
