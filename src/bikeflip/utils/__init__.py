"""Utility functions for bikeflip."""

from bikeflip.utils.date_parser import parse_date
from bikeflip.utils.amount_parser import parse_amount

__all__ = ["parse_date", "parse_amount"]
