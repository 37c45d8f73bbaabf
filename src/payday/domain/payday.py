"""Payday domain service.

Recording a payday is the entry point of the obligation engine: it appends
the event to history, schedules the next payday and runs charity and savings
accrual for the payday date.
"""

import dataclasses
import logging
from decimal import Decimal
from typing import Optional, Union

from payday.database import mappers, sections
from payday.database.base import RecordStore
from payday.domain.charity import accrue_on_payday as accrue_charity
from payday.domain.savings import accrue_on_payday as accrue_savings
from payday.domain.entities import (
    Allocations,
    IncomeEntry,
    PaydayEvent,
    PaydayFrequency,
    PaydayResult,
    PaydaySettings,
)
from payday.domain.errors import ValidationError, invalid_amount
from payday.utils.dates import Clock, DateLike, SystemClock, days_between, next_occurrence, parse_date

logger = logging.getLogger(__name__)


def build_event(
    on: DateLike,
    amount: Decimal,
    income_type: str = "Paycheck",
    currency: str = "USD",
    bills: Decimal = Decimal("0"),
    credit_cards: Decimal = Decimal("0"),
    charity: Decimal = Decimal("0"),
    savings: Optional[Decimal] = None,
    other: Decimal = Decimal("0"),
    clock: Optional[Clock] = None,
) -> PaydayEvent:
    """Build a single-income payday event from raw values."""
    return PaydayEvent(
        date=parse_date(on, clock),
        income_entries=(IncomeEntry(type=income_type, amount=amount, currency=currency.upper()),),
        allocations=Allocations(
            bills=bills,
            credit_cards=credit_cards,
            charity=charity,
            savings=savings,
            other=other,
        ),
    )


def validate_event(event: PaydayEvent) -> None:
    """Check a payday before anything is written.

    Raises:
        ValidationError: If the date is not a calendar date, no income entry
            is positive, or an allocation is negative
    """
    parse_date(event.date)
    if not any(entry.amount > 0 for entry in event.income_entries):
        raise ValidationError("At least one income amount must be greater than zero")
    for label, amount in event.allocations.as_dict().items():
        if amount < 0:
            raise ValidationError(invalid_amount(f"{label} allocation", amount, allow_zero=True))


class PaydayService:
    """Service for recording paydays."""

    def __init__(self, db: RecordStore, clock: Optional[Clock] = None):
        """Initialize payday service.

        Args:
            db: Record store instance
            clock: Source of today's date
        """
        self.db = db
        self.clock = clock or SystemClock()

    def get_settings(self) -> PaydaySettings:
        return sections.load_payday_settings(self.db)

    def record_payday(self, event: PaydayEvent) -> PaydayResult:
        """Record a payday and apply its effects.

        Steps:
        1. Validate the event (nothing is written on failure)
        2. Append the event to payday history
        3. Schedule the next payday from the event date
        4. Accrue charity for the event date
        5. Accrue savings, using the event's savings allocation

        All affected sections are written together once every new value has
        been computed.

        Args:
            event: Payday to record

        Returns:
            PaydayResult with the new settings, charity and savings state

        Raises:
            ValidationError: If the event is invalid
        """
        validate_event(event)
        event = dataclasses.replace(event, date=parse_date(event.date))

        paydays = self.db.get_section(sections.PAYDAYS, [])
        paydays.append(mappers.payday_event_to_record(event))

        settings = self.get_settings()
        new_settings = dataclasses.replace(
            settings, next_date=next_occurrence(settings.frequency, event.date)
        )

        new_charity = accrue_charity(
            sections.load_charity(self.db), event.date, self.clock
        )
        new_savings = accrue_savings(
            sections.load_savings(self.db),
            event.date,
            sections.load_savings_settings(self.db),
            self.clock,
            event.allocations.savings,
        )

        self.db.put_sections(
            {
                sections.PAYDAYS: paydays,
                sections.SETTINGS: sections.settings_record(self.db, payday=new_settings),
                sections.CHARITY: mappers.charity_to_record(new_charity),
                sections.SAVINGS: mappers.savings_to_record(new_savings),
            }
        )
        logger.info(
            "Recorded payday %s for %s %s; next payday %s",
            event.date,
            event.total_income,
            event.currency,
            new_settings.next_date,
        )
        return PaydayResult(
            event=event, settings=new_settings, charity=new_charity, savings=new_savings
        )

    def set_frequency(self, frequency: Union[PaydayFrequency, str]) -> PaydaySettings:
        """Change the payday frequency.

        Raises:
            ValidationError: If the frequency is not weekly, biweekly or monthly
        """
        try:
            parsed = PaydayFrequency(frequency)
        except ValueError as e:
            choices = ", ".join(f.value for f in PaydayFrequency)
            raise ValidationError(f"Unknown frequency '{frequency}'. Use one of: {choices}") from e
        settings = dataclasses.replace(self.get_settings(), frequency=parsed)
        self.db.put_section(sections.SETTINGS, sections.settings_record(self.db, payday=settings))
        return settings

    def set_next_date(self, on: DateLike) -> PaydaySettings:
        """Set the next expected payday.

        Raises:
            ValidationError: If the date is earlier than the latest recorded payday
        """
        next_date = parse_date(on, self.clock)
        latest = self.latest_payday()
        if latest is not None and next_date < latest.date:
            raise ValidationError(
                f"Next payday {next_date} is before the latest recorded payday {latest.date}"
            )
        settings = dataclasses.replace(self.get_settings(), next_date=next_date)
        self.db.put_section(sections.SETTINGS, sections.settings_record(self.db, payday=settings))
        return settings

    def history(self) -> list[PaydayEvent]:
        """Recorded paydays, newest first."""
        return sorted(sections.load_paydays(self.db), key=lambda event: event.date, reverse=True)

    def latest_payday(self) -> Optional[PaydayEvent]:
        history = self.history()
        return history[0] if history else None

    def is_payday_today(self) -> bool:
        return self.get_settings().next_date == self.clock.today()

    def days_until_next_payday(self) -> Optional[int]:
        next_date = self.get_settings().next_date
        if next_date is None:
            return None
        return days_between(self.clock.today(), next_date)
