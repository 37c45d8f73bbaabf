"""Tests for bill cycle rules and BillService."""

from datetime import date
from decimal import Decimal

import pytest

from payday.domain.bills import (
    BillService,
    is_satisfied_for_current_cycle,
    toggle_payment,
    was_paid_late,
)
from payday.domain.entities import Bill, BillPayment
from payday.domain.errors import NotFoundError, ValidationError
from payday.utils.currency import CurrencyConverter
from payday.utils.dates import FixedClock


def _bill(due="2025-05-01", payments=()):
    return Bill(
        name="Rent",
        total_amount=Decimal("1500"),
        amount_per_paycheck=Decimal("750"),
        currency="USD",
        due_date=date.fromisoformat(due),
        payment_records=tuple(
            BillPayment(date=date.fromisoformat(day), amount=Decimal("750")) for day in payments
        ),
    )


def _add(service, name="Rent", due="2025-05-01", total="1500", per_paycheck="750", currency="USD"):
    return service.add_bill(name, Decimal(total), Decimal(per_paycheck), due, currency)


class TestCycleSatisfaction:
    def test_no_records(self):
        """Test that a bill without payments is not satisfied."""
        assert not is_satisfied_for_current_cycle(_bill())

    def test_payment_on_due_date(self):
        """Test that a payment on the due date satisfies the cycle."""
        assert is_satisfied_for_current_cycle(_bill(payments=["2025-05-01"]))

    def test_payment_on_window_start(self):
        """Test that a payment one month before the due date counts."""
        assert is_satisfied_for_current_cycle(_bill(payments=["2025-04-01"]))

    def test_payment_before_window(self):
        """Test that a payment before the cycle window does not count."""
        assert not is_satisfied_for_current_cycle(_bill(payments=["2025-03-31"]))

    def test_only_latest_payment_counts(self):
        """Test that only the latest payment decides the cycle."""
        # Latest payment is after the due date, so the cycle is not satisfied
        bill = _bill(payments=["2025-04-15", "2025-05-02"])
        assert not is_satisfied_for_current_cycle(bill)


class TestPaidLate:
    def test_no_records(self):
        """Test that a bill without payments was not paid late."""
        assert not was_paid_late(_bill())

    def test_payment_after_due_date(self):
        """Test that a payment after the due date counts as late."""
        assert was_paid_late(_bill(due="2025-04-15", payments=["2025-04-20"]))

    def test_payment_on_due_date_is_on_time(self):
        """Test that a payment on the due date is not late."""
        assert not was_paid_late(_bill(due="2025-04-15", payments=["2025-04-15"]))


class TestTogglePayment:
    def test_mark_paid_appends_today(self):
        """Test marking a bill paid adds today's payment."""
        updated = toggle_payment(_bill(), True, date(2025, 4, 20))

        assert len(updated.payment_records) == 1
        assert updated.payment_records[0].date == date(2025, 4, 20)
        assert updated.payment_records[0].amount == Decimal("750")
        assert updated.payment_records[0].status == "paid"

    def test_mark_unpaid_removes_todays_payment(self):
        """Test marking a bill unpaid removes today's payment."""
        bill = _bill(payments=["2025-04-10", "2025-04-20"])

        updated = toggle_payment(bill, False, date(2025, 4, 20))

        assert [p.date for p in updated.payment_records] == [date(2025, 4, 10)]

    def test_mark_unpaid_keeps_other_days(self):
        """Test that payments from other days are kept."""
        bill = _bill(payments=["2025-04-10"])

        updated = toggle_payment(bill, False, date(2025, 4, 20))

        assert updated is bill
        assert is_satisfied_for_current_cycle(updated)


class TestBillService:
    def test_add_and_list(self, bill_service):
        """Test adding a bill and listing it."""
        index = _add(bill_service)

        assert index == 0
        bills = bill_service.list_bills()
        assert len(bills) == 1
        assert bills[0].name == "Rent"
        assert bills[0].due_date == date(2025, 5, 1)
        assert bills[0].total_amount == Decimal("1500")

    def test_add_normalizes_currency(self, bill_service):
        """Test that bill currency codes are upper-cased."""
        _add(bill_service, currency="cad")
        assert bill_service.get_bill(0).currency == "CAD"

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"name": "  "},
            {"total": "0"},
            {"per_paycheck": "-5"},
            {"due": "someday"},
        ],
    )
    def test_add_invalid(self, bill_service, kwargs):
        """Test that invalid bills are rejected without saving."""
        with pytest.raises(ValidationError):
            _add(bill_service, **kwargs)
        assert bill_service.list_bills() == []

    def test_get_missing_bill(self, bill_service):
        """Test getting a bill that does not exist."""
        with pytest.raises(NotFoundError, match="Bill 3 not found"):
            bill_service.get_bill(2)

    def test_set_paid_and_unpaid(self, bill_service):
        """Test toggling a bill paid and back."""
        _add(bill_service)

        bill = bill_service.set_paid(0, True)
        assert bill_service.is_paid(bill)
        assert bill_service.is_paid(bill_service.get_bill(0))

        bill = bill_service.set_paid(0, False)
        assert not bill_service.is_paid(bill)
        assert bill_service.get_bill(0).payment_records == ()

    def test_set_paid_missing_bill(self, bill_service):
        """Test paying a bill that does not exist."""
        with pytest.raises(NotFoundError):
            bill_service.set_paid(0, True)

    def test_sorted_bills_unpaid_first(self, bill_service):
        """Test that unpaid bills sort before paid ones."""
        _add(bill_service, name="Rent", due="2025-05-01")
        _add(bill_service, name="Phone", due="2025-04-25")
        _add(bill_service, name="Internet", due="2025-04-22")
        bill_service.set_paid(2, True)

        names = [bill.name for bill in bill_service.sorted_bills()]

        assert names == ["Phone", "Rent", "Internet"]

    def test_sorted_bills_with_index_keeps_positions(self, bill_service):
        """Test that identical bills sort with their own storage index."""
        _add(bill_service)
        _add(bill_service)
        bill_service.set_paid(0, True)

        assert [index for index, _ in bill_service.sorted_bills_with_index()] == [1, 0]

    def test_upcoming_bills(self, bill_service):
        """Test listing upcoming unpaid bills."""
        for name, due in [("A", "2025-05-01"), ("B", "2025-04-25"), ("C", "2025-04-22"), ("D", "2025-06-01")]:
            _add(bill_service, name=name, due=due)
        bill_service.set_paid(1, True)

        assert [bill.name for bill in bill_service.upcoming_bills()] == ["C", "A", "D"]
        assert [bill.name for bill in bill_service.upcoming_bills(limit=1)] == ["C"]

    def test_bill_status(self, bill_service):
        """Test bill status states and days until due."""
        _add(bill_service, name="Overdue", due="2025-04-18")
        _add(bill_service, name="Soon", due="2025-04-25")
        _add(bill_service, name="Later", due="2025-05-30")
        _add(bill_service, name="Paid", due="2025-05-10")
        bill_service.set_paid(3, True)

        statuses = [bill_service.bill_status(bill) for bill in bill_service.list_bills()]

        assert [s.state for s in statuses] == ["overdue", "due-soon", "upcoming", "paid"]
        assert statuses[0].days_until_due == -2
        assert statuses[1].days_until_due == 5

    def test_payment_history_newest_first(self, temp_db):
        """Test that payment history lists newest first."""
        service = BillService(temp_db, FixedClock(date(2025, 4, 10)))
        _add(service, name="Rent")
        _add(service, name="Phone")
        service.set_paid(0, True)
        BillService(temp_db, FixedClock(date(2025, 4, 15))).set_paid(1, True)

        lines = service.payment_history()

        assert [(line.bill_name, line.date) for line in lines] == [
            ("Phone", date(2025, 4, 15)),
            ("Rent", date(2025, 4, 10)),
        ]

    def test_advance_cycle_makes_bill_unpaid(self, bill_service):
        """Test advancing a cycle moves the due date a month."""
        _add(bill_service, due="2025-04-25")
        bill_service.set_paid(0, True)

        bill = bill_service.advance_cycle(0)

        assert bill.due_date == date(2025, 5, 25)
        # The April 20 payment is before May 25 - 1 month
        assert not bill_service.is_paid(bill)
        assert len(bill.payment_records) == 1

    def test_roll_over_cycles(self, temp_db):
        """Test rolling over only past-due paid bills."""
        early = BillService(temp_db, FixedClock(date(2025, 4, 1)))
        _add(early, name="Paid and past", due="2025-04-10")
        _add(early, name="Unpaid and past", due="2025-04-10")
        _add(early, name="Paid and future", due="2025-04-30")
        early.set_paid(0, True)
        early.set_paid(2, True)

        service = BillService(temp_db, FixedClock(date(2025, 4, 20)))
        rolled = service.roll_over_cycles()

        assert rolled == 1
        due_dates = [bill.due_date for bill in service.list_bills()]
        assert due_dates == [date(2025, 5, 10), date(2025, 4, 10), date(2025, 4, 30)]

    def test_roll_over_bill_paid_after_due_date(self, bill_service):
        """Test that a bill paid late moves to its next cycle and reads as paid."""
        index = _add(bill_service, due="2025-04-15")
        bill_service.set_paid(index, True)
        assert bill_service.bill_status(bill_service.get_bill(index)).state == "overdue"

        rolled = bill_service.roll_over_cycles()

        assert rolled == 1
        bill = bill_service.get_bill(index)
        assert bill.due_date == date(2025, 5, 15)
        assert bill_service.bill_status(bill).state == "paid"
        assert bill_service.total_unpaid("USD") == Decimal("0")

    def test_roll_over_skips_late_bill_without_payment(self, bill_service):
        """Test that an overdue bill with no late payment keeps its due date."""
        _add(bill_service, due="2025-04-15")

        assert bill_service.roll_over_cycles() == 0
        assert bill_service.get_bill(0).due_date == date(2025, 4, 15)

    def test_total_unpaid_converts_currency(self, bill_service):
        """Test unpaid total converts to the reporting currency."""
        _add(bill_service, name="Rent", total="1000")
        _add(bill_service, name="Phone", total="100", currency="CAD")
        _add(bill_service, name="Paid", total="500")
        bill_service.set_paid(2, True)

        assert bill_service.total_unpaid("USD") == Decimal("1074.00")

    def test_total_unpaid_missing_rate_counts(self, temp_db, clock):
        """Test that a missing rate is counted during totals."""
        converter = CurrencyConverter()
        service = BillService(temp_db, clock, converter)
        _add(service, name="Gym", total="40", currency="EUR")

        assert service.total_unpaid("USD") == Decimal("40")
        assert converter.missing_rate_counts[("EUR", "USD")] == 1

    def test_remove_bill(self, bill_service):
        """Test removing a bill."""
        _add(bill_service, name="Rent")
        _add(bill_service, name="Phone")

        removed = bill_service.remove_bill(0)

        assert removed.name == "Rent"
        assert [bill.name for bill in bill_service.list_bills()] == ["Phone"]

    def test_remove_missing_bill(self, bill_service):
        """Test removing a bill that does not exist."""
        with pytest.raises(NotFoundError):
            bill_service.remove_bill(0)
