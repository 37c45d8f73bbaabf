"""Application configuration.

Configuration is built once at startup and passed explicitly to whatever
needs it; nothing here is module-level mutable state.
"""

import os
from dataclasses import dataclass, field, replace
from decimal import Decimal, InvalidOperation
from typing import Mapping, Optional

from payday.domain.errors import ValidationError
from payday.utils.currency import DEFAULT_RATES, CurrencyConverter


@dataclass(frozen=True)
class AppConfig:
    """Settings for one run of the application."""

    database_path: Optional[str] = None
    reporting_currency: str = "USD"
    exchange_rates: dict[tuple[str, str], Decimal] = field(
        default_factory=lambda: dict(DEFAULT_RATES)
    )
    due_soon_days: int = 7
    log_level: str = "WARNING"

    def converter(self) -> CurrencyConverter:
        return CurrencyConverter(self.exchange_rates)


def parse_rates(value: str) -> dict[tuple[str, str], Decimal]:
    """Parse "USD_CAD=1.35,CAD_USD=0.74" into a rate table.

    Raises:
        ValidationError: If a pair or rate is malformed
    """
    rates: dict[tuple[str, str], Decimal] = {}
    for item in value.split(","):
        item = item.strip()
        if not item:
            continue
        try:
            pair, rate = item.split("=", 1)
            src, dst = pair.strip().upper().split("_", 1)
            rates[(src, dst)] = Decimal(rate.strip())
        except (ValueError, InvalidOperation) as e:
            raise ValidationError(f"Invalid exchange rate '{item}', expected FROM_TO=rate") from e
    return rates


def load_config(env: Optional[Mapping[str, str]] = None, **overrides) -> AppConfig:
    """Build configuration from environment variables and explicit overrides.

    Environment variables:
        PAYDAY_DB_PATH: database file path
        PAYDAY_CURRENCY: reporting currency
        PAYDAY_LOG_LEVEL: logging level name
        PAYDAY_RATES: extra exchange rates, e.g. "USD_EUR=0.92"

    Overrides with a value of None are ignored, so CLI options that were not
    given fall through to the environment.
    """
    env = os.environ if env is None else env
    config = AppConfig()

    rates = dict(config.exchange_rates)
    if env.get("PAYDAY_RATES"):
        rates.update(parse_rates(env["PAYDAY_RATES"]))

    config = replace(
        config,
        database_path=env.get("PAYDAY_DB_PATH", config.database_path),
        reporting_currency=env.get("PAYDAY_CURRENCY", config.reporting_currency).upper(),
        log_level=env.get("PAYDAY_LOG_LEVEL", config.log_level).upper(),
        exchange_rates=rates,
    )

    values = {key: value for key, value in overrides.items() if value is not None}
    if "reporting_currency" in values:
        values["reporting_currency"] = values["reporting_currency"].upper()
    if "log_level" in values:
        values["log_level"] = values["log_level"].upper()
    return replace(config, **values)
