"""Bill domain service and billing-cycle rules."""

import dataclasses
import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from payday.database import sections
from payday.database.base import RecordStore
from payday.domain.entities import Bill, BillPayment, BillPaymentLine, BillStatus
from payday.domain.errors import (
    NotFoundError,
    ValidationError,
    bill_not_found,
    invalid_amount,
    missing_field,
)
from payday.utils.currency import CurrencyConverter
from payday.utils.dates import (
    Clock,
    DateLike,
    SystemClock,
    days_between,
    is_past,
    is_within,
    one_month_after,
    one_month_before,
    parse_date,
)

logger = logging.getLogger(__name__)

DUE_SOON_DAYS = 7


def is_satisfied_for_current_cycle(bill: Bill) -> bool:
    """Return True if the latest payment falls in the bill's current cycle.

    The cycle window is the closed interval [due_date - 1 month, due_date].
    Only the most recent payment is considered, so advancing ``due_date`` can
    make a bill unpaid again without touching its payment records.
    """
    if not bill.payment_records:
        return False

    latest = max(bill.payment_records, key=lambda payment: payment.date)
    window_start = one_month_before(bill.due_date)
    return window_start <= latest.date <= bill.due_date


def was_paid_late(bill: Bill) -> bool:
    """Return True if the latest payment came after the bill's due date."""
    if not bill.payment_records:
        return False
    return max(payment.date for payment in bill.payment_records) > bill.due_date


def toggle_payment(bill: Bill, paid: bool, today: date) -> Bill:
    """Mark a bill paid or unpaid for today.

    Marking paid appends a payment dated today for ``amount_per_paycheck``.
    Marking unpaid removes the first payment dated exactly today; a payment
    made on another day is left in place.
    """
    if paid:
        payment = BillPayment(date=today, amount=bill.amount_per_paycheck, status="paid")
        return dataclasses.replace(bill, payment_records=bill.payment_records + (payment,))

    records = list(bill.payment_records)
    for index, payment in enumerate(records):
        if payment.date == today:
            del records[index]
            return dataclasses.replace(bill, payment_records=tuple(records))
    return bill


class BillService:
    """Service for managing bills."""

    def __init__(
        self,
        db: RecordStore,
        clock: Optional[Clock] = None,
        converter: Optional[CurrencyConverter] = None,
        due_soon_days: int = DUE_SOON_DAYS,
    ):
        """Initialize bill service.

        Args:
            db: Record store instance
            clock: Source of today's date
            converter: Currency converter for totals
            due_soon_days: Days ahead that count as "due soon"
        """
        self.db = db
        self.clock = clock or SystemClock()
        self.converter = converter or CurrencyConverter()
        self.due_soon_days = due_soon_days

    def add_bill(
        self,
        name: str,
        total_amount: Decimal,
        amount_per_paycheck: Decimal,
        due_date: DateLike,
        currency: str = "USD",
    ) -> int:
        """Add a bill.

        Args:
            name: Bill name
            total_amount: Full amount of the bill
            amount_per_paycheck: Portion set aside from each paycheck
            due_date: Next due date
            currency: Currency code

        Returns:
            Index of the new bill

        Raises:
            ValidationError: If a field is missing or an amount is not positive
        """
        if not name or not name.strip():
            raise ValidationError(missing_field("Bill name"))
        if total_amount <= 0:
            raise ValidationError(invalid_amount("Total amount", total_amount))
        if amount_per_paycheck <= 0:
            raise ValidationError(invalid_amount("Amount per paycheck", amount_per_paycheck))
        parsed_due = parse_date(due_date, self.clock)

        bill = Bill(
            name=name.strip(),
            total_amount=total_amount,
            amount_per_paycheck=amount_per_paycheck,
            currency=currency.upper(),
            due_date=parsed_due,
        )
        bills = sections.load_bills(self.db)
        bills.append(bill)
        self.db.put_section(sections.BILLS, sections.bills_record(bills))
        return len(bills) - 1

    def list_bills(self) -> list[Bill]:
        """List bills in storage order."""
        return sections.load_bills(self.db)

    def get_bill(self, index: int) -> Bill:
        """Get a bill by index.

        Raises:
            NotFoundError: If the index does not exist
        """
        bills = sections.load_bills(self.db)
        if not 0 <= index < len(bills):
            raise NotFoundError(bill_not_found(index))
        return bills[index]

    def _replace_bill(self, index: int, bill: Bill) -> None:
        bills = sections.load_bills(self.db)
        bills[index] = bill
        self.db.put_section(sections.BILLS, sections.bills_record(bills))

    def set_paid(self, index: int, paid: bool) -> Bill:
        """Mark a bill paid or unpaid as of today.

        Returns:
            The updated bill
        """
        bill = self.get_bill(index)
        updated = toggle_payment(bill, paid, self.clock.today())
        if updated is not bill:
            self._replace_bill(index, updated)
        logger.debug("Bill %s marked %s", bill.name, "paid" if paid else "unpaid")
        return updated

    def is_paid(self, bill: Bill) -> bool:
        return is_satisfied_for_current_cycle(bill)

    def sorted_bills_with_index(self) -> list[tuple[int, Bill]]:
        """(storage index, bill) pairs ordered unpaid first, then by due date."""
        return sorted(
            enumerate(sections.load_bills(self.db)),
            key=lambda pair: (is_satisfied_for_current_cycle(pair[1]), pair[1].due_date),
        )

    def sorted_bills(self) -> list[Bill]:
        """Bills ordered unpaid first, then by due date."""
        return [bill for _, bill in self.sorted_bills_with_index()]

    def upcoming_bills(self, limit: Optional[int] = 3) -> list[Bill]:
        """Unpaid bills ordered by due date."""
        unpaid = [bill for bill in self.sorted_bills() if not is_satisfied_for_current_cycle(bill)]
        if limit is None:
            return unpaid
        return unpaid[:limit]

    def bill_status(self, bill: Bill) -> BillStatus:
        """Describe where a bill stands relative to today."""
        days_until = days_between(self.clock.today(), bill.due_date)
        if is_satisfied_for_current_cycle(bill):
            state = "paid"
        elif is_past(bill.due_date, self.clock):
            state = "overdue"
        elif is_within(bill.due_date, self.due_soon_days, self.clock):
            state = "due-soon"
        else:
            state = "upcoming"
        return BillStatus(state=state, days_until_due=days_until)

    def payment_history(self) -> list[BillPaymentLine]:
        """All bill payments, newest first."""
        lines = [
            BillPaymentLine(
                bill_name=bill.name,
                date=payment.date,
                amount=payment.amount,
                currency=bill.currency,
            )
            for bill in sections.load_bills(self.db)
            for payment in bill.payment_records
        ]
        return sorted(lines, key=lambda line: line.date, reverse=True)

    def advance_cycle(self, index: int) -> Bill:
        """Move a bill's due date forward one calendar month."""
        bill = self.get_bill(index)
        updated = dataclasses.replace(bill, due_date=one_month_after(bill.due_date))
        self._replace_bill(index, updated)
        return updated

    def roll_over_cycles(self) -> int:
        """Advance every past-due bill that was paid for its current cycle.

        A bill counts as paid when its latest payment falls in the cycle
        window or came after the due date (paid late).

        Returns:
            Number of bills moved to their next cycle
        """
        bills = sections.load_bills(self.db)
        rolled = 0
        for index, bill in enumerate(bills):
            if is_past(bill.due_date, self.clock) and (
                is_satisfied_for_current_cycle(bill) or was_paid_late(bill)
            ):
                bills[index] = dataclasses.replace(bill, due_date=one_month_after(bill.due_date))
                rolled += 1
        if rolled:
            self.db.put_section(sections.BILLS, sections.bills_record(bills))
            logger.info("Rolled %d bill(s) over to their next cycle", rolled)
        return rolled

    def total_unpaid(self, currency: str = "USD") -> Decimal:
        """Total amount of bills not yet paid this cycle, in ``currency``."""
        return self.converter.total(
            [
                (bill.total_amount, bill.currency)
                for bill in sections.load_bills(self.db)
                if not is_satisfied_for_current_cycle(bill)
            ],
            currency,
        )

    def remove_bill(self, index: int) -> Bill:
        """Delete a bill and return it."""
        bills = sections.load_bills(self.db)
        if not 0 <= index < len(bills):
            raise NotFoundError(bill_not_found(index))
        removed = bills.pop(index)
        self.db.put_section(sections.BILLS, sections.bills_record(bills))
        return removed
