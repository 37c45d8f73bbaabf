"""Charity domain service."""

import dataclasses
import logging
from decimal import Decimal
from typing import Optional

from payday.database import mappers, sections
from payday.database.base import RecordStore
from payday.domain.entities import (
    CharityDeduction,
    CharityState,
    DonationSchedule,
    RecurringDonation,
)
from payday.domain.errors import ValidationError, invalid_amount, missing_field
from payday.utils.dates import Clock, DateLike, SystemClock, is_second_occurrence_of_month, parse_date

logger = logging.getLogger(__name__)


def accrue_on_payday(state: CharityState, payday_date: DateLike, clock: Clock) -> CharityState:
    """Add the per-payday increment and take any recurring donations.

    Future paydays leave the state unchanged. Recurring donations scheduled
    for the second paycheck are deducted when the payday looks like the second
    one of its month. The pot never goes below zero.
    """
    day = parse_date(payday_date)
    if day > clock.today():
        return state

    current = state.current_amount + state.increment_amount
    deductions = list(state.deductions)

    if is_second_occurrence_of_month(day):
        for donation in state.recurring_donations:
            if donation.schedule == DonationSchedule.SECOND_PAYCHECK:
                deductions.append(
                    CharityDeduction(
                        date=day,
                        amount=donation.amount,
                        description=f"{donation.description} (Recurring)",
                    )
                )
                current -= donation.amount
                logger.info("Recurring donation %s of %s taken", donation.description, donation.amount)

    return dataclasses.replace(
        state,
        current_amount=max(Decimal("0"), current),
        deductions=tuple(deductions),
    )


class CharityService:
    """Service for the charity pot."""

    def __init__(self, db: RecordStore, clock: Optional[Clock] = None):
        """Initialize charity service.

        Args:
            db: Record store instance
            clock: Source of today's date
        """
        self.db = db
        self.clock = clock or SystemClock()

    def get_state(self) -> CharityState:
        return sections.load_charity(self.db)

    def _save(self, state: CharityState) -> None:
        self.db.put_section(sections.CHARITY, mappers.charity_to_record(state))

    def on_payday(self, payday_date: DateLike) -> CharityState:
        """Apply a payday to the charity pot and persist it."""
        state = self.get_state()
        updated = accrue_on_payday(state, payday_date, self.clock)
        if updated is not state:
            self._save(updated)
        return updated

    def record_donation(self, on: DateLike, amount: Decimal, description: str) -> CharityState:
        """Record a one-off donation out of the charity pot.

        Raises:
            ValidationError: If the amount is not positive, the description is
                empty or the date is invalid
        """
        if amount <= 0:
            raise ValidationError(invalid_amount("Donation amount", amount))
        if not description or not description.strip():
            raise ValidationError(missing_field("Donation description"))
        day = parse_date(on, self.clock)

        state = self.get_state()
        deduction = CharityDeduction(date=day, amount=amount, description=description.strip())
        updated = dataclasses.replace(
            state,
            current_amount=max(Decimal("0"), state.current_amount - amount),
            deductions=state.deductions + (deduction,),
        )
        self._save(updated)
        return updated

    def donation_history(self) -> list[CharityDeduction]:
        """Deductions, newest first."""
        return sorted(self.get_state().deductions, key=lambda d: d.date, reverse=True)

    def set_increment(self, amount: Decimal) -> CharityState:
        """Change how much is added to the pot each payday."""
        if amount < 0:
            raise ValidationError(invalid_amount("Increment amount", amount, allow_zero=True))
        updated = dataclasses.replace(self.get_state(), increment_amount=amount)
        self._save(updated)
        return updated

    def add_recurring_donation(
        self,
        amount: Decimal,
        description: str,
        currency: str = "USD",
        schedule: DonationSchedule = DonationSchedule.SECOND_PAYCHECK,
    ) -> CharityState:
        """Register a donation taken automatically on its scheduled payday."""
        if amount <= 0:
            raise ValidationError(invalid_amount("Donation amount", amount))
        if not description or not description.strip():
            raise ValidationError(missing_field("Donation description"))

        state = self.get_state()
        donation = RecurringDonation(
            amount=amount,
            currency=currency.upper(),
            description=description.strip(),
            schedule=DonationSchedule(schedule),
        )
        updated = dataclasses.replace(
            state, recurring_donations=state.recurring_donations + (donation,)
        )
        self._save(updated)
        return updated

    def reset_balance(self) -> CharityState:
        """Set the pot back to its base amount, keeping donation history."""
        state = self.get_state()
        updated = dataclasses.replace(state, current_amount=state.base_amount)
        self._save(updated)
        logger.info("Charity balance reset from %s to %s", state.current_amount, state.base_amount)
        return updated
