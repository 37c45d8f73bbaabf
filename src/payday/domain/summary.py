"""Dashboard summary domain service."""

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from payday.database import sections
from payday.database.base import RecordStore
from payday.domain.bills import BillService
from payday.domain.debts import DebtService
from payday.domain.entities import AllocationShare, DashboardSummary, PaydayEvent
from payday.domain.payday import PaydayService
from payday.utils.currency import CurrencyConverter
from payday.utils.dates import Clock, SystemClock


def allocation_shares(event: PaydayEvent) -> tuple[AllocationShare, ...]:
    """Non-zero allocations of a payday with their share of total income."""
    total_income = event.total_income
    shares = []
    for label, amount in event.allocations.as_dict().items():
        if not amount:
            continue
        percent = 0
        if total_income > 0:
            percent = int((amount / total_income * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
        shares.append(AllocationShare(label=label, amount=amount, percent=percent))
    return tuple(shares)


class SummaryService:
    """Service for building the dashboard summary."""

    def __init__(
        self,
        db: RecordStore,
        clock: Optional[Clock] = None,
        converter: Optional[CurrencyConverter] = None,
    ):
        """Initialize summary service.

        Args:
            db: Record store instance
            clock: Source of today's date
            converter: Currency converter for totals
        """
        self.db = db
        self.clock = clock or SystemClock()
        self.converter = converter or CurrencyConverter()

    def build_summary(self, currency: str = "USD") -> DashboardSummary:
        """Collect dashboard totals in the reporting currency."""
        payday_service = PaydayService(self.db, self.clock)
        bill_service = BillService(self.db, self.clock, self.converter)
        debt_service = DebtService(self.db, self.clock, self.converter)

        settings = payday_service.get_settings()
        latest = payday_service.latest_payday()

        return DashboardSummary(
            currency=currency,
            next_payday=settings.next_date,
            days_until_payday=payday_service.days_until_next_payday(),
            total_unpaid_bills=bill_service.total_unpaid(currency),
            total_debt=debt_service.total_debt(currency),
            charity_balance=sections.load_charity(self.db).current_amount,
            savings_balance=sections.load_savings(self.db).balance,
            latest_payday=latest,
            allocation_shares=allocation_shares(latest) if latest is not None else (),
        )
