"""Mapper functions to convert between domain entities and stored records.

Sections are stored as JSON, so amounts are written as strings and dates as
ISO "YYYY-MM-DD" strings. This layer isolates that conversion so domain code
only ever sees Decimal and date values.
"""

from datetime import date
from decimal import Decimal
from typing import Any, Optional

from payday.domain import entities as domain


def _decimal(value: Any, default: str = "0") -> Decimal:
    if value is None:
        return Decimal(default)
    return Decimal(str(value))


def _optional_decimal(value: Any) -> Optional[Decimal]:
    if value is None:
        return None
    return Decimal(str(value))


def _date(value: Optional[str]) -> Optional[date]:
    if value is None:
        return None
    return date.fromisoformat(value)


def _iso(value: Optional[date]) -> Optional[str]:
    if value is None:
        return None
    return value.isoformat()


def payday_settings_to_record(settings: domain.PaydaySettings) -> dict[str, Any]:
    """Convert PaydaySettings to a record."""
    return {"frequency": settings.frequency.value, "next_date": _iso(settings.next_date)}


def payday_settings_to_domain(record: dict[str, Any]) -> domain.PaydaySettings:
    """Convert a record to PaydaySettings."""
    return domain.PaydaySettings(
        frequency=domain.PaydayFrequency(record.get("frequency", "biweekly")),
        next_date=_date(record.get("next_date")),
    )


def savings_settings_to_record(settings: domain.SavingsSettings) -> dict[str, Any]:
    """Convert SavingsSettings to a record."""
    return {
        "amount_per_paycheck": str(settings.amount_per_paycheck),
        "currency": settings.currency,
    }


def savings_settings_to_domain(record: dict[str, Any]) -> domain.SavingsSettings:
    """Convert a record to SavingsSettings."""
    return domain.SavingsSettings(
        amount_per_paycheck=_decimal(record.get("amount_per_paycheck"), "100"),
        currency=record.get("currency", "CAD"),
    )


def payday_event_to_record(event: domain.PaydayEvent) -> dict[str, Any]:
    """Convert PaydayEvent to a record."""
    allocations = event.allocations
    return {
        "date": _iso(event.date),
        "income": [
            {"type": entry.type, "amount": str(entry.amount), "currency": entry.currency}
            for entry in event.income_entries
        ],
        "allocations": {
            "bills": str(allocations.bills),
            "credit_cards": str(allocations.credit_cards),
            "charity": str(allocations.charity),
            "savings": None if allocations.savings is None else str(allocations.savings),
            "other": str(allocations.other),
        },
    }


def payday_event_to_domain(record: dict[str, Any]) -> domain.PaydayEvent:
    """Convert a record to PaydayEvent."""
    allocations = record.get("allocations", {})
    return domain.PaydayEvent(
        date=_date(record["date"]),
        income_entries=tuple(
            domain.IncomeEntry(
                type=entry.get("type", "Paycheck"),
                amount=_decimal(entry.get("amount")),
                currency=entry.get("currency", "USD"),
            )
            for entry in record.get("income", [])
        ),
        allocations=domain.Allocations(
            bills=_decimal(allocations.get("bills")),
            credit_cards=_decimal(allocations.get("credit_cards")),
            charity=_decimal(allocations.get("charity")),
            savings=_optional_decimal(allocations.get("savings")),
            other=_decimal(allocations.get("other")),
        ),
    )


def bill_to_record(bill: domain.Bill) -> dict[str, Any]:
    """Convert Bill to a record."""
    return {
        "name": bill.name,
        "total_amount": str(bill.total_amount),
        "amount_per_paycheck": str(bill.amount_per_paycheck),
        "currency": bill.currency,
        "due_date": _iso(bill.due_date),
        "paid": [
            {"date": _iso(payment.date), "amount": str(payment.amount), "status": payment.status}
            for payment in bill.payment_records
        ],
    }


def bill_to_domain(record: dict[str, Any]) -> domain.Bill:
    """Convert a record to Bill."""
    return domain.Bill(
        name=record["name"],
        total_amount=_decimal(record.get("total_amount")),
        amount_per_paycheck=_decimal(record.get("amount_per_paycheck")),
        currency=record.get("currency", "USD"),
        due_date=_date(record["due_date"]),
        payment_records=tuple(
            domain.BillPayment(
                date=_date(payment["date"]),
                amount=_decimal(payment.get("amount")),
                status=payment.get("status", "paid"),
            )
            for payment in record.get("paid", [])
        ),
    )


def debt_to_record(debt: domain.Debt) -> dict[str, Any]:
    """Convert Debt to a record."""
    return {
        "name": debt.name,
        "balance": str(debt.balance),
        "currency": debt.currency,
        "interest_rate": str(debt.interest_rate_percent),
        "minimum_payment": str(debt.minimum_payment),
        "due_date": _iso(debt.due_date),
        "payments": [
            {"date": _iso(payment.date), "amount": str(payment.amount)}
            for payment in debt.payments
        ],
    }


def debt_to_domain(record: dict[str, Any]) -> domain.Debt:
    """Convert a record to Debt."""
    return domain.Debt(
        name=record["name"],
        balance=_decimal(record.get("balance")),
        currency=record.get("currency", "USD"),
        interest_rate_percent=_decimal(record.get("interest_rate")),
        minimum_payment=_decimal(record.get("minimum_payment")),
        due_date=_date(record.get("due_date")),
        payments=tuple(
            domain.DebtPayment(date=_date(payment["date"]), amount=_decimal(payment.get("amount")))
            for payment in record.get("payments", [])
        ),
    )


def charity_to_record(state: domain.CharityState) -> dict[str, Any]:
    """Convert CharityState to a record."""
    return {
        "base_amount": str(state.base_amount),
        "increment_amount": str(state.increment_amount),
        "current_amount": str(state.current_amount),
        "recurring_donations": [
            {
                "amount": str(donation.amount),
                "currency": donation.currency,
                "description": donation.description,
                "schedule": donation.schedule.value,
            }
            for donation in state.recurring_donations
        ],
        "deductions": [
            {
                "date": _iso(deduction.date),
                "amount": str(deduction.amount),
                "description": deduction.description,
            }
            for deduction in state.deductions
        ],
    }


def charity_to_domain(record: dict[str, Any]) -> domain.CharityState:
    """Convert a record to CharityState."""
    return domain.CharityState(
        base_amount=_decimal(record.get("base_amount"), "100"),
        increment_amount=_decimal(record.get("increment_amount"), "100"),
        current_amount=_decimal(record.get("current_amount"), "100"),
        recurring_donations=tuple(
            domain.RecurringDonation(
                amount=_decimal(donation.get("amount")),
                currency=donation.get("currency", "USD"),
                description=donation.get("description", ""),
                schedule=domain.DonationSchedule(donation.get("schedule", "second-paycheck")),
            )
            for donation in record.get("recurring_donations", [])
        ),
        deductions=tuple(
            domain.CharityDeduction(
                date=_date(deduction["date"]),
                amount=_decimal(deduction.get("amount")),
                description=deduction.get("description", ""),
            )
            for deduction in record.get("deductions", [])
        ),
    )


def savings_to_record(state: domain.SavingsState) -> dict[str, Any]:
    """Convert SavingsState to a record."""
    return {
        "balance": str(state.balance),
        "history": [
            {
                "date": _iso(entry.date),
                "amount": str(entry.amount),
                "currency": entry.currency,
                "description": entry.description,
                "balance": str(entry.balance_after),
            }
            for entry in state.history
        ],
    }


def savings_to_domain(record: dict[str, Any]) -> domain.SavingsState:
    """Convert a record to SavingsState."""
    return domain.SavingsState(
        balance=_decimal(record.get("balance")),
        history=tuple(
            domain.SavingsHistoryEntry(
                date=_date(entry["date"]),
                amount=_decimal(entry.get("amount")),
                currency=entry.get("currency", "CAD"),
                description=entry.get("description", ""),
                balance_after=_decimal(entry.get("balance")),
            )
            for entry in record.get("history", [])
        ),
    )
