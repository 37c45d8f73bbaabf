"""Debt domain service: payments, payoff priority and amortization."""

import dataclasses
import logging
import math
from decimal import Decimal
from typing import Iterable, Optional

from payday.database import sections
from payday.database.base import RecordStore
from payday.domain.entities import Debt, DebtPayment, DebtPaymentResult, PayoffPlan, PayoffStep
from payday.domain.errors import (
    NotFoundError,
    ValidationError,
    debt_not_found,
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
    parse_date,
)

logger = logging.getLogger(__name__)

DUE_SOON_DAYS = 7


def apply_payment(debt: Debt, amount: Decimal, on: DateLike) -> DebtPaymentResult:
    """Apply a payment to a debt.

    The balance never drops below zero. ``paid_off`` is True only when this
    payment took the balance from positive to zero.
    """
    payment = DebtPayment(date=parse_date(on), amount=amount)
    new_balance = max(Decimal("0"), debt.balance - amount)
    updated = dataclasses.replace(debt, balance=new_balance, payments=debt.payments + (payment,))
    return DebtPaymentResult(debt=updated, paid_off=debt.balance > 0 and new_balance == 0)


def prioritize(debts: Iterable[Debt], clock: Clock) -> list[Debt]:
    """Order outstanding debts by payoff priority.

    1. Past-due debts, most overdue first.
    2. Debts with an upcoming due date, soonest first.
    3. Debts without a due date, highest interest rate first.

    Paid-off debts are dropped. Ties keep their input order.
    """
    today = clock.today()

    def priority(debt: Debt) -> tuple:
        if debt.due_date is not None and is_past(debt.due_date, clock):
            return (0, -days_between(debt.due_date, today))
        if debt.due_date is not None:
            return (1, debt.due_date.toordinal())
        return (2, -debt.interest_rate_percent)

    return sorted((debt for debt in debts if debt.balance > 0), key=priority)


def months_to_payoff(debt: Debt, monthly_payment: Decimal) -> Optional[int]:
    """Number of monthly payments needed to clear a debt.

    Uses the closed-form amortization formula
    ``ceil(ln(P / (P - B*r)) / ln(1 + r))`` with ``r`` the monthly rate.

    Returns:
        Months to payoff, 0 if there is nothing to pay or no payment, or None
        if the payment does not cover the interest accruing each month
    """
    balance = float(debt.balance)
    payment = float(monthly_payment)
    if balance <= 0 or payment <= 0:
        return 0

    rate = float(debt.interest_rate_percent) / 100 / 12
    if rate == 0:
        return math.ceil(balance / payment)

    # Interest alone meets or exceeds the payment
    if payment <= balance * rate:
        return None

    months = math.log(payment / (payment - balance * rate)) / math.log(1 + rate)
    if not math.isfinite(months):
        return None
    return math.ceil(months)


def payoff_reason(debt: Debt, clock: Clock, due_soon_days: int = DUE_SOON_DAYS) -> str:
    """Explain why a debt sits where it does in the payoff order."""
    if debt.due_date is None:
        return "High interest rate"
    if is_past(debt.due_date, clock):
        return "Overdue payment"
    if is_within(debt.due_date, due_soon_days, clock):
        return "Due soon"
    return "Upcoming due date"


class DebtService:
    """Service for managing debts."""

    def __init__(
        self,
        db: RecordStore,
        clock: Optional[Clock] = None,
        converter: Optional[CurrencyConverter] = None,
        due_soon_days: int = DUE_SOON_DAYS,
    ):
        """Initialize debt service.

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

    def add_debt(
        self,
        name: str,
        balance: Decimal,
        interest_rate_percent: Decimal = Decimal("0"),
        minimum_payment: Decimal = Decimal("0"),
        due_date: Optional[DateLike] = None,
        currency: str = "USD",
    ) -> int:
        """Add a debt.

        Args:
            name: Debt name
            balance: Outstanding balance
            interest_rate_percent: Annual interest rate in percent
            minimum_payment: Minimum monthly payment
            due_date: Optional next payment due date
            currency: Currency code

        Returns:
            Index of the new debt

        Raises:
            ValidationError: If a field is missing or a number is negative
        """
        if not name or not name.strip():
            raise ValidationError(missing_field("Debt name"))
        if balance < 0:
            raise ValidationError(invalid_amount("Balance", balance, allow_zero=True))
        if interest_rate_percent < 0:
            raise ValidationError(
                invalid_amount("Interest rate", interest_rate_percent, allow_zero=True)
            )
        if minimum_payment < 0:
            raise ValidationError(invalid_amount("Minimum payment", minimum_payment, allow_zero=True))
        parsed_due = parse_date(due_date, self.clock) if due_date is not None else None

        debt = Debt(
            name=name.strip(),
            balance=balance,
            currency=currency.upper(),
            interest_rate_percent=interest_rate_percent,
            minimum_payment=minimum_payment,
            due_date=parsed_due,
        )
        debts = sections.load_debts(self.db)
        debts.append(debt)
        self.db.put_section(sections.DEBTS, sections.debts_record(debts))
        return len(debts) - 1

    def list_debts(self) -> list[Debt]:
        """List debts in storage order."""
        return sections.load_debts(self.db)

    def get_debt(self, index: int) -> Debt:
        """Get a debt by index.

        Raises:
            NotFoundError: If the index does not exist
        """
        debts = sections.load_debts(self.db)
        if not 0 <= index < len(debts):
            raise NotFoundError(debt_not_found(index))
        return debts[index]

    def record_payment(
        self, index: int, amount: Decimal, on: Optional[DateLike] = None
    ) -> DebtPaymentResult:
        """Record a payment against a debt.

        Args:
            index: Debt index
            amount: Payment amount
            on: Payment date (defaults to today)

        Returns:
            DebtPaymentResult with the updated debt and the payoff flag

        Raises:
            ValidationError: If the amount is not positive or the date is invalid
            NotFoundError: If the debt does not exist
        """
        if amount <= 0:
            raise ValidationError(invalid_amount("Payment amount", amount))
        payment_date = parse_date(on, self.clock) if on is not None else self.clock.today()

        debts = sections.load_debts(self.db)
        if not 0 <= index < len(debts):
            raise NotFoundError(debt_not_found(index))

        result = apply_payment(debts[index], amount, payment_date)
        debts[index] = result.debt
        self.db.put_section(sections.DEBTS, sections.debts_record(debts))

        if result.paid_off:
            logger.info("Debt %s paid off", result.debt.name)
        return result

    def active_debts(self) -> list[Debt]:
        """Debts with a balance left, in storage order."""
        return [debt for debt in sections.load_debts(self.db) if debt.balance > 0]

    def prioritized_debts(self) -> list[Debt]:
        """Outstanding debts in payoff priority order."""
        return prioritize(sections.load_debts(self.db), self.clock)

    def sorted_debts_with_index(self) -> list[tuple[int, Debt]]:
        """(storage index, debt) pairs: outstanding first, then by due date and rate."""

        def listing_order(pair: tuple[int, Debt]) -> tuple:
            debt = pair[1]
            return (
                debt.is_paid_off,
                debt.due_date is None,
                debt.due_date.toordinal() if debt.due_date else 0,
                -debt.interest_rate_percent,
            )

        return sorted(enumerate(sections.load_debts(self.db)), key=listing_order)

    def sorted_debts(self) -> list[Debt]:
        """All debts for listing: outstanding first, then by due date and rate."""
        return [debt for _, debt in self.sorted_debts_with_index()]

    def total_debt(self, currency: str = "USD") -> Decimal:
        """Total outstanding balance in ``currency``."""
        return self.converter.total(
            [(debt.balance, debt.currency) for debt in sections.load_debts(self.db)], currency
        )

    def payoff_plan(self, currency: str = "USD") -> PayoffPlan:
        """Recommended payoff order with a reason for each debt."""
        ordered = self.prioritized_debts()
        steps = tuple(
            PayoffStep(debt=debt, reason=payoff_reason(debt, self.clock, self.due_soon_days))
            for debt in ordered
        )
        total = self.converter.total([(debt.balance, debt.currency) for debt in ordered], currency)
        return PayoffPlan(steps=steps, total_debt=total, currency=currency)

    def months_to_payoff(self, index: int, monthly_payment: Optional[Decimal] = None) -> Optional[int]:
        """Months to clear a debt, paying its minimum unless told otherwise."""
        debt = self.get_debt(index)
        payment = debt.minimum_payment if monthly_payment is None else monthly_payment
        return months_to_payoff(debt, payment)

    def remove_debt(self, index: int) -> Debt:
        """Delete a debt and return it."""
        debts = sections.load_debts(self.db)
        if not 0 <= index < len(debts):
            raise NotFoundError(debt_not_found(index))
        removed = debts.pop(index)
        self.db.put_section(sections.DEBTS, sections.debts_record(debts))
        return removed
