"""Savings domain service."""

import dataclasses
from decimal import Decimal
from typing import Optional

from payday.database import mappers, sections
from payday.database.base import RecordStore
from payday.domain.entities import SavingsHistoryEntry, SavingsSettings, SavingsState
from payday.domain.errors import ValidationError, invalid_amount
from payday.utils.dates import Clock, DateLike, SystemClock, parse_date

PAYDAY_DESCRIPTION = "Payday Savings"


def accrue_on_payday(
    state: SavingsState,
    payday_date: DateLike,
    settings: SavingsSettings,
    clock: Clock,
    override_amount: Optional[Decimal] = None,
) -> SavingsState:
    """Add a payday contribution to savings.

    ``override_amount`` replaces the configured per-paycheck amount whenever it
    is not None, including an explicit zero. Future paydays leave the state
    unchanged.
    """
    day = parse_date(payday_date)
    if day > clock.today():
        return state

    amount = settings.amount_per_paycheck if override_amount is None else override_amount
    balance = state.balance + amount
    entry = SavingsHistoryEntry(
        date=day,
        amount=amount,
        currency=settings.currency,
        description=PAYDAY_DESCRIPTION,
        balance_after=balance,
    )
    return dataclasses.replace(state, balance=balance, history=state.history + (entry,))


class SavingsService:
    """Service for savings accrual."""

    def __init__(self, db: RecordStore, clock: Optional[Clock] = None):
        """Initialize savings service.

        Args:
            db: Record store instance
            clock: Source of today's date
        """
        self.db = db
        self.clock = clock or SystemClock()

    def get_state(self) -> SavingsState:
        return sections.load_savings(self.db)

    def get_settings(self) -> SavingsSettings:
        return sections.load_savings_settings(self.db)

    def on_payday(
        self, payday_date: DateLike, override_amount: Optional[Decimal] = None
    ) -> SavingsState:
        """Apply a payday contribution and persist it."""
        state = self.get_state()
        updated = accrue_on_payday(
            state, payday_date, self.get_settings(), self.clock, override_amount
        )
        if updated is not state:
            self.db.put_section(sections.SAVINGS, mappers.savings_to_record(updated))
        return updated

    def update_settings(
        self, amount_per_paycheck: Optional[Decimal] = None, currency: Optional[str] = None
    ) -> SavingsSettings:
        """Change the default contribution and/or its currency."""
        if amount_per_paycheck is not None and amount_per_paycheck < 0:
            raise ValidationError(
                invalid_amount("Amount per paycheck", amount_per_paycheck, allow_zero=True)
            )
        current = self.get_settings()
        settings = SavingsSettings(
            amount_per_paycheck=(
                current.amount_per_paycheck if amount_per_paycheck is None else amount_per_paycheck
            ),
            currency=current.currency if currency is None else currency.upper(),
        )
        self.db.put_section(sections.SETTINGS, sections.settings_record(self.db, savings=settings))
        return settings

    def history(self) -> list[SavingsHistoryEntry]:
        """History entries, newest first."""
        return sorted(self.get_state().history, key=lambda entry: entry.date, reverse=True)
