"""Amount validation shared by the write-path services."""

from decimal import Decimal
from typing import Optional

from bikeflip.domain.errors import ValidationError, negative_amount, sub_cent_amount

CENT = Decimal("0.01")


def check_amount(field_name: str, value: Optional[Decimal]) -> None:
    """Reject negative amounts and amounts finer than a cent.

    Amounts are stored with two decimal places, so anything finer would be
    rounded on write and the ledger would no longer match what was entered.

    Raises:
        ValidationError: If the amount is negative or has sub-cent digits
    """
    if value is None:
        return
    if value < 0:
        raise ValidationError(negative_amount(field_name))
    if value != value.quantize(CENT):
        raise ValidationError(sub_cent_amount(field_name))
