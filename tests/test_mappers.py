"""Tests for record mappers."""

from datetime import date
from decimal import Decimal

from payday.database import mappers
from payday.domain import entities as domain


def test_bill_to_record():
    """Test mapping a bill to a record."""
    bill = domain.Bill(
        name="Rent",
        total_amount=Decimal("1500.00"),
        amount_per_paycheck=Decimal("750"),
        currency="USD",
        due_date=date(2025, 5, 1),
        payment_records=(domain.BillPayment(date(2025, 4, 20), Decimal("750")),),
    )

    record = mappers.bill_to_record(bill)

    assert record == {
        "name": "Rent",
        "total_amount": "1500.00",
        "amount_per_paycheck": "750",
        "currency": "USD",
        "due_date": "2025-05-01",
        "paid": [{"date": "2025-04-20", "amount": "750", "status": "paid"}],
    }
    assert mappers.bill_to_domain(record) == bill


def test_bill_from_sparse_record():
    """Test mapping a bill from a record with missing keys."""
    bill = mappers.bill_to_domain({"name": "Phone", "due_date": "2025-04-25"})

    assert bill.currency == "USD"
    assert bill.total_amount == Decimal("0")
    assert bill.payment_records == ()


def test_debt_record_keys():
    """Test the keys of a debt record."""
    debt = domain.Debt(
        name="Visa",
        balance=Decimal("1200"),
        currency="CAD",
        interest_rate_percent=Decimal("19.99"),
        minimum_payment=Decimal("50"),
    )

    record = mappers.debt_to_record(debt)

    assert record["interest_rate"] == "19.99"
    assert record["due_date"] is None
    assert mappers.debt_to_domain(record) == debt


def test_payday_event_keeps_missing_savings():
    """Test that a missing savings allocation stays missing."""
    event = domain.PaydayEvent(
        date=date(2025, 4, 18),
        income_entries=(domain.IncomeEntry("Paycheck", Decimal("2500"), "USD"),),
        allocations=domain.Allocations(bills=Decimal("800")),
    )

    record = mappers.payday_event_to_record(event)

    assert record["allocations"]["savings"] is None
    assert record["income"] == [{"type": "Paycheck", "amount": "2500", "currency": "USD"}]
    assert mappers.payday_event_to_domain(record).allocations.savings is None


def test_charity_defaults_from_empty_record():
    """Test charity defaults from an empty record."""
    state = mappers.charity_to_domain({})

    assert state == domain.CharityState()


def test_savings_history_balance_key():
    """Test the balance key in savings history records."""
    record = {
        "balance": "250",
        "history": [
            {
                "date": "2025-04-18",
                "amount": "250",
                "currency": "CAD",
                "description": "Payday Savings",
                "balance": "250",
            }
        ],
    }

    state = mappers.savings_to_domain(record)

    assert state.history[0].balance_after == Decimal("250")
    assert mappers.savings_to_record(state) == record


def test_settings_records():
    """Test mapping payday and savings settings."""
    payday = domain.PaydaySettings(domain.PaydayFrequency.WEEKLY, date(2025, 4, 25))
    savings = domain.SavingsSettings(Decimal("75"), "USD")

    assert mappers.payday_settings_to_record(payday) == {
        "frequency": "weekly",
        "next_date": "2025-04-25",
    }
    assert mappers.payday_settings_to_domain({}) == domain.PaydaySettings()
    assert mappers.savings_settings_to_domain(mappers.savings_settings_to_record(savings)) == savings
