"""Tests for domain entities."""

import dataclasses
from datetime import date
from decimal import Decimal

import pytest

from payday.domain.entities import (
    Allocations,
    Debt,
    DebtPayment,
    IncomeEntry,
    PaydayEvent,
)


def test_allocations_total_treats_missing_savings_as_zero():
    """Test that missing savings count as zero in the total."""
    allocations = Allocations(bills=Decimal("100"), other=Decimal("5"))

    assert allocations.total == Decimal("105")
    assert allocations.as_dict()["Savings"] == Decimal("0")


def test_allocations_labels_in_display_order():
    """Test allocation labels in display order."""
    assert list(Allocations().as_dict()) == ["Bills", "Credit Cards", "Charity", "Savings", "Other"]


def test_payday_event_totals():
    """Test payday event income and allocation totals."""
    event = PaydayEvent(
        date=date(2025, 4, 18),
        income_entries=(
            IncomeEntry("Paycheck", Decimal("2000"), "CAD"),
            IncomeEntry("Bonus", Decimal("500"), "CAD"),
        ),
        allocations=Allocations(bills=Decimal("1000"), savings=Decimal("200")),
    )

    assert event.total_income == Decimal("2500")
    assert event.currency == "CAD"
    assert event.unallocated == Decimal("1300")


def test_payday_event_without_income():
    """Test a payday event with no income."""
    event = PaydayEvent(date=date(2025, 4, 18), income_entries=())

    assert event.currency is None
    assert event.total_income == Decimal("0")


def test_debt_properties():
    """Test derived debt properties."""
    debt = Debt(
        name="Visa",
        balance=Decimal("0"),
        currency="USD",
        interest_rate_percent=Decimal("0"),
        minimum_payment=Decimal("0"),
        payments=(
            DebtPayment(date(2025, 4, 1), Decimal("60")),
            DebtPayment(date(2025, 4, 15), Decimal("40")),
        ),
    )

    assert debt.is_paid_off
    assert debt.total_paid == Decimal("100")


def test_entities_are_frozen():
    """Test that entities cannot be changed in place."""
    allocations = Allocations()

    with pytest.raises(dataclasses.FrozenInstanceError):
        allocations.bills = Decimal("1")
