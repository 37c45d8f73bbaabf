"""Utility functions for payday."""

from payday.utils.dates import parse_date, days_between, next_occurrence
from payday.utils.amount_parser import parse_amount
from payday.utils.currency import CurrencyConverter
from payday.utils.resolver import resolve_index

__all__ = [
    "parse_date",
    "days_between",
    "next_occurrence",
    "parse_amount",
    "CurrencyConverter",
    "resolve_index",
]
