"""Record store layer for payday application."""

from payday.database.base import RecordStore
from payday.database.factories import create_sqlite_database

__all__ = ["RecordStore", "create_sqlite_database"]
