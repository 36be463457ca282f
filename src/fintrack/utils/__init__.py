"""Utility functions for fintrack."""

from fintrack.utils.date_parser import normalize_date, parse_date
from fintrack.utils.amount_parser import parse_amount

__all__ = ["normalize_date", "parse_date", "parse_amount"]
