"""Text formatting for CLI output."""

from datetime import date
from decimal import Decimal
from typing import Optional

CURRENCY_SYMBOLS = {
    "USD": "$",
    "CAD": "CA$",
    "EUR": "€",
    "GBP": "£",
}


def format_currency(amount: Decimal, currency: str = "USD") -> str:
    """Format an amount like "$1,234.56" or "CA$50.00"."""
    code = (currency or "USD").upper()
    symbol = CURRENCY_SYMBOLS.get(code, f"{code} ")
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"


def format_date(value: Optional[date]) -> str:
    """Format a date like "April 4, 2025"."""
    if value is None:
        return "N/A"
    return f"{value:%B} {value.day}, {value.year}"


def format_days(days: int) -> str:
    """Describe a signed day count relative to today."""
    if days < 0:
        return f"overdue by {abs(days)} day{'s' if abs(days) != 1 else ''}"
    if days == 0:
        return "due today"
    return f"due in {days} day{'s' if days != 1 else ''}"
