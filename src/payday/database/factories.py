"""Record store factory functions."""

import os
from pathlib import Path
from typing import Optional

from payday.database.sqlalchemy_db import SQLAlchemyRecordStore


def default_database_path() -> str:
    """Return ~/.payday/payday.db, creating the directory if needed."""
    db_dir = Path.home() / ".payday"
    db_dir.mkdir(exist_ok=True)
    return str(db_dir / "payday.db")


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyRecordStore:
    """Create a SQLite-backed record store.

    Args:
        database_path: Path to SQLite database file. If None, checks PAYDAY_DB_PATH
            environment variable, then defaults to ~/.payday/payday.db

    Returns:
        SQLAlchemyRecordStore instance configured for SQLite
    """
    if database_path is None:
        database_path = os.environ.get("PAYDAY_DB_PATH")

    if database_path is None:
        database_path = default_database_path()

    store = SQLAlchemyRecordStore(f"sqlite:///{database_path}")
    store.database_path = database_path
    return store
