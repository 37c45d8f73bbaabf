"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested bill, debt or record does not exist."""


def bill_not_found(index: int) -> str:
    """Return message for missing bill."""
    return f"Bill {index + 1} not found"


def debt_not_found(index: int) -> str:
    """Return message for missing debt."""
    return f"Debt {index + 1} not found"


def invalid_amount(field: str, amount: object, allow_zero: bool = False) -> str:
    """Return message for an amount outside its allowed range."""
    bound = "zero or more" if allow_zero else "greater than zero"
    return f"{field} must be {bound}, got {amount}"


def invalid_date(value: object) -> str:
    """Return message for a value that is not a calendar date."""
    return f"Could not parse date '{value}'"


def missing_field(field: str) -> str:
    """Return message for a required field left empty."""
    return f"{field} is required"
