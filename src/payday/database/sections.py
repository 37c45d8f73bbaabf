"""Section names, default values and typed accessors.

Services read and write sections through these helpers so that the record
layout lives in one place.
"""

from typing import Any

from payday.database import mappers
from payday.database.base import RecordStore
from payday.domain.entities import (
    Bill,
    CharityState,
    Debt,
    PaydayEvent,
    PaydaySettings,
    SavingsSettings,
    SavingsState,
)

SETTINGS = "settings"
PAYDAYS = "paydays"
BILLS = "bills"
DEBTS = "debts"
CHARITY = "charity"
SAVINGS = "savings"

DEFAULT_SETTINGS: dict[str, Any] = {
    "payday": {"frequency": "biweekly", "next_date": None},
    "savings": {"amount_per_paycheck": "100", "currency": "CAD"},
}

DEFAULT_CHARITY: dict[str, Any] = {
    "base_amount": "100",
    "increment_amount": "100",
    "current_amount": "100",
    "recurring_donations": [
        {
            "amount": "50",
            "currency": "USD",
            "description": "Monthly Donation",
            "schedule": "second-paycheck",
        }
    ],
    "deductions": [],
}

DEFAULT_SAVINGS: dict[str, Any] = {"balance": "0", "history": []}


def load_settings_record(store: RecordStore) -> dict[str, Any]:
    """Load the settings section, filling in missing parts from defaults."""
    record = store.get_section(SETTINGS, DEFAULT_SETTINGS)
    for key, value in DEFAULT_SETTINGS.items():
        record.setdefault(key, dict(value))
    return record


def load_payday_settings(store: RecordStore) -> PaydaySettings:
    return mappers.payday_settings_to_domain(load_settings_record(store)["payday"])


def load_savings_settings(store: RecordStore) -> SavingsSettings:
    return mappers.savings_settings_to_domain(load_settings_record(store)["savings"])


def settings_record(
    store: RecordStore,
    payday: PaydaySettings | None = None,
    savings: SavingsSettings | None = None,
) -> dict[str, Any]:
    """Build a new settings record, replacing only the given parts."""
    record = load_settings_record(store)
    if payday is not None:
        record["payday"] = mappers.payday_settings_to_record(payday)
    if savings is not None:
        record["savings"] = mappers.savings_settings_to_record(savings)
    return record


def load_paydays(store: RecordStore) -> list[PaydayEvent]:
    return [mappers.payday_event_to_domain(r) for r in store.get_section(PAYDAYS, [])]


def load_bills(store: RecordStore) -> list[Bill]:
    return [mappers.bill_to_domain(r) for r in store.get_section(BILLS, [])]


def bills_record(bills: list[Bill]) -> list[dict[str, Any]]:
    return [mappers.bill_to_record(bill) for bill in bills]


def load_debts(store: RecordStore) -> list[Debt]:
    return [mappers.debt_to_domain(r) for r in store.get_section(DEBTS, [])]


def debts_record(debts: list[Debt]) -> list[dict[str, Any]]:
    return [mappers.debt_to_record(debt) for debt in debts]


def load_charity(store: RecordStore) -> CharityState:
    return mappers.charity_to_domain(store.get_section(CHARITY, DEFAULT_CHARITY))


def load_savings(store: RecordStore) -> SavingsState:
    return mappers.savings_to_domain(store.get_section(SAVINGS, DEFAULT_SAVINGS))
