"""Flat-rate currency conversion."""

import logging
from collections import Counter
from decimal import Decimal
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

DEFAULT_RATES: dict[tuple[str, str], Decimal] = {
    ("USD", "CAD"): Decimal("1.35"),
    ("CAD", "USD"): Decimal("0.74"),
}


class CurrencyConverter:
    """Convert amounts with a static table of multiplicative rates."""

    def __init__(self, rates: Optional[Mapping[tuple[str, str], Decimal]] = None):
        """Initialize converter.

        Args:
            rates: Rate per ordered (from, to) pair. Defaults to DEFAULT_RATES.
        """
        table = DEFAULT_RATES if rates is None else rates
        self.rates = {
            (src.upper(), dst.upper()): Decimal(str(rate)) for (src, dst), rate in table.items()
        }
        self.missing_rate_counts: Counter[tuple[str, str]] = Counter()

    def convert(self, amount: Decimal, from_code: str, to_code: str) -> Decimal:
        """Convert ``amount`` from one currency to another.

        Pairs without a registered rate are returned unchanged. The miss is
        logged and counted in ``missing_rate_counts``.
        """
        src, dst = from_code.upper(), to_code.upper()
        if src == dst:
            return amount

        rate = self.rates.get((src, dst))
        if rate is None:
            self.missing_rate_counts[(src, dst)] += 1
            logger.warning(
                "No exchange rate for %s->%s; amount %s left unconverted", src, dst, amount
            )
            return amount
        return amount * rate

    def total(self, amounts: list[tuple[Decimal, str]], to_code: str) -> Decimal:
        """Sum (amount, currency) pairs in ``to_code``."""
        return sum(
            (self.convert(amount, currency, to_code) for amount, currency in amounts),
            Decimal("0"),
        )
