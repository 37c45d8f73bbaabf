"""Domain layer for payday application."""

# Services are imported lazily so that entities and errors can be imported
# from utils and database modules without pulling in every service.
_SERVICES = {
    "BillService": "payday.domain.bills",
    "DebtService": "payday.domain.debts",
    "CharityService": "payday.domain.charity",
    "SavingsService": "payday.domain.savings",
    "PaydayService": "payday.domain.payday",
    "SummaryService": "payday.domain.summary",
}

__all__ = list(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        import importlib

        return getattr(importlib.import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
