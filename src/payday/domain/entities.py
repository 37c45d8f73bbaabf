"""Domain model entities for payday.

These are pure data classes representing business concepts, independent of
how the record store lays out its sections. Collections are tuples so that a
fetched entity can be handed around freely; changes produce a new value via
``dataclasses.replace``.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional


class PaydayFrequency(Enum):
    """How often income arrives."""

    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"


class DonationSchedule(Enum):
    """Which payday a recurring donation is taken from."""

    SECOND_PAYCHECK = "second-paycheck"


@dataclass(frozen=True)
class PaydaySettings:
    """Payday frequency and the next expected payday."""

    frequency: PaydayFrequency = PaydayFrequency.BIWEEKLY
    next_date: Optional[date] = None


@dataclass(frozen=True)
class SavingsSettings:
    """Default per-paycheck savings contribution."""

    amount_per_paycheck: Decimal = Decimal("100")
    currency: str = "CAD"


@dataclass(frozen=True)
class IncomeEntry:
    """A single income line on a payday."""

    type: str
    amount: Decimal
    currency: str


@dataclass(frozen=True)
class Allocations:
    """How a paycheck is split across obligations."""

    bills: Decimal = Decimal("0")
    credit_cards: Decimal = Decimal("0")
    charity: Decimal = Decimal("0")
    # None means "use the configured per-paycheck savings amount"
    savings: Optional[Decimal] = None
    other: Decimal = Decimal("0")

    @property
    def total(self) -> Decimal:
        savings = self.savings or Decimal("0")
        return self.bills + self.credit_cards + self.charity + savings + self.other

    def as_dict(self) -> dict[str, Decimal]:
        """Return allocations keyed by display label, in display order."""
        return {
            "Bills": self.bills,
            "Credit Cards": self.credit_cards,
            "Charity": self.charity,
            "Savings": self.savings or Decimal("0"),
            "Other": self.other,
        }


@dataclass(frozen=True)
class PaydayEvent:
    """A recorded payday."""

    date: date
    income_entries: tuple[IncomeEntry, ...]
    allocations: Allocations = field(default_factory=Allocations)

    @property
    def total_income(self) -> Decimal:
        return sum((entry.amount for entry in self.income_entries), Decimal("0"))

    @property
    def currency(self) -> Optional[str]:
        # All income on one payday is assumed to share the first entry's currency
        if not self.income_entries:
            return None
        return self.income_entries[0].currency

    @property
    def unallocated(self) -> Decimal:
        return self.total_income - self.allocations.total


@dataclass(frozen=True)
class BillPayment:
    """Payment record on a bill."""

    date: date
    amount: Decimal
    status: str = "paid"


@dataclass(frozen=True)
class Bill:
    """Bill domain entity. ``due_date`` is the next cycle boundary."""

    name: str
    total_amount: Decimal
    amount_per_paycheck: Decimal
    currency: str
    due_date: date
    payment_records: tuple[BillPayment, ...] = ()


@dataclass(frozen=True)
class DebtPayment:
    """Payment applied to a debt."""

    date: date
    amount: Decimal


@dataclass(frozen=True)
class Debt:
    """Debt domain entity."""

    name: str
    balance: Decimal
    currency: str
    interest_rate_percent: Decimal
    minimum_payment: Decimal
    due_date: Optional[date] = None
    payments: tuple[DebtPayment, ...] = ()

    @property
    def is_paid_off(self) -> bool:
        return self.balance <= 0

    @property
    def total_paid(self) -> Decimal:
        return sum((payment.amount for payment in self.payments), Decimal("0"))


@dataclass(frozen=True)
class RecurringDonation:
    """Fixed donation deducted on a scheduled payday each month."""

    amount: Decimal
    currency: str
    description: str
    schedule: DonationSchedule = DonationSchedule.SECOND_PAYCHECK


@dataclass(frozen=True)
class CharityDeduction:
    """Money taken out of the charity pot."""

    date: date
    amount: Decimal
    description: str


@dataclass(frozen=True)
class CharityState:
    """Charity pot and its deduction log."""

    base_amount: Decimal = Decimal("100")
    increment_amount: Decimal = Decimal("100")
    current_amount: Decimal = Decimal("100")
    recurring_donations: tuple[RecurringDonation, ...] = ()
    deductions: tuple[CharityDeduction, ...] = ()


@dataclass(frozen=True)
class SavingsHistoryEntry:
    """Append-only savings log entry."""

    date: date
    amount: Decimal
    currency: str
    description: str
    balance_after: Decimal


@dataclass(frozen=True)
class SavingsState:
    """Savings balance with its running history."""

    balance: Decimal = Decimal("0")
    history: tuple[SavingsHistoryEntry, ...] = ()


@dataclass(frozen=True)
class PaydayResult:
    """Section values written by recording a payday."""

    event: PaydayEvent
    settings: PaydaySettings
    charity: CharityState
    savings: SavingsState


@dataclass(frozen=True)
class DebtPaymentResult:
    """Debt after a payment, and whether this payment cleared it."""

    debt: Debt
    paid_off: bool


@dataclass(frozen=True)
class BillStatus:
    """Display status for a bill."""

    state: str
    days_until_due: int


@dataclass(frozen=True)
class BillPaymentLine:
    """Flattened bill payment for history views."""

    bill_name: str
    date: date
    amount: Decimal
    currency: str


@dataclass(frozen=True)
class PayoffStep:
    """One debt in the recommended payoff order."""

    debt: Debt
    reason: str


@dataclass(frozen=True)
class PayoffPlan:
    """Recommended payoff order with the total outstanding debt."""

    steps: tuple[PayoffStep, ...]
    total_debt: Decimal
    currency: str


@dataclass(frozen=True)
class AllocationShare:
    """Allocation line of the latest payday."""

    label: str
    amount: Decimal
    percent: int


@dataclass(frozen=True)
class DashboardSummary:
    """Totals shown on the dashboard."""

    currency: str
    next_payday: Optional[date]
    days_until_payday: Optional[int]
    total_unpaid_bills: Decimal
    total_debt: Decimal
    charity_balance: Decimal
    savings_balance: Decimal
    latest_payday: Optional[PaydayEvent]
    allocation_shares: tuple[AllocationShare, ...]
