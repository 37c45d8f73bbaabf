"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re

from payday.domain.errors import ValidationError


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "$123.45"
    - "1,234.56"
    - "CA$ 50"

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValidationError: If amount string cannot be parsed
    """
    if amount_str is None or not str(amount_str).strip():
        raise ValidationError("Empty amount string")

    amount_str = str(amount_str).strip()

    # Remove currency symbols and codes
    amount_str = re.sub(r"[$€£¥]|\b[A-Za-z]{2,3}\b", "", amount_str)

    # Remove commas
    amount_str = amount_str.replace(",", "").strip()

    try:
        amount = Decimal(amount_str)
    except InvalidOperation as e:
        raise ValidationError(f"Could not parse amount '{amount_str}'") from e
    if not amount.is_finite():
        raise ValidationError(f"Could not parse amount '{amount_str}'")
    return amount


def parse_optional_amount(amount_str: str | None) -> Decimal | None:
    """Parse an amount, passing None through unchanged."""
    if amount_str is None:
        return None
    return parse_amount(amount_str)
