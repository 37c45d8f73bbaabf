"""Tests for amount parsing."""

from decimal import Decimal

import pytest

from payday.domain.errors import ValidationError
from payday.utils.amount_parser import parse_amount, parse_optional_amount


@pytest.mark.parametrize(
    "text,expected",
    [
        ("123.45", Decimal("123.45")),
        ("$123.45", Decimal("123.45")),
        ("1,234.56", Decimal("1234.56")),
        ("CA$ 50", Decimal("50")),
        ("USD 20", Decimal("20")),
        ("-15", Decimal("-15")),
    ],
)
def test_parse_amount(text, expected):
    """Test parsing amounts with symbols and separators."""
    assert parse_amount(text) == expected


@pytest.mark.parametrize("text", ["", "   ", "abc1", "twelve", "NaN"])
def test_parse_amount_invalid(text):
    """Test that unparseable amounts raise a validation error."""
    with pytest.raises(ValidationError):
        parse_amount(text)


def test_parse_optional_amount():
    """Test that optional amounts pass None through."""
    assert parse_optional_amount(None) is None
    assert parse_optional_amount("0") == Decimal("0")
