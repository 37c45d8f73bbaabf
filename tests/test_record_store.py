"""Tests for the SQLAlchemy record store."""

import pytest
from sqlalchemy.exc import StatementError

from payday.database.base import RecordStore
from payday.database.factories import create_sqlite_database
from payday.database.sqlalchemy_db import SQLAlchemyRecordStore


def test_store_implements_interface(temp_db):
    """Test that the store implements the record store interface."""
    assert isinstance(temp_db, RecordStore)
    assert isinstance(temp_db, SQLAlchemyRecordStore)


def test_get_missing_section_returns_default_copy(temp_db):
    """Test that a missing section returns a copy of the default."""
    default = {"items": []}

    value = temp_db.get_section("missing", default)
    value["items"].append(1)

    assert default == {"items": []}
    assert temp_db.get_section("missing") is None


def test_put_then_get_round_trip(temp_db):
    """Test writing a section and reading it back."""
    value = {
        "name": "Rent",
        "amounts": ["1500", "750"],
        "nested": {"due_date": "2025-05-01", "paid": [{"date": "2025-04-20"}]},
        "flag": True,
    }

    temp_db.put_section("bills", value)

    assert temp_db.get_section("bills") == value


def test_returned_values_are_independent(temp_db):
    """Test that returned values do not share state."""
    temp_db.put_section("debts", [{"name": "Visa"}])

    fetched = temp_db.get_section("debts")
    fetched[0]["name"] = "Changed"

    assert temp_db.get_section("debts") == [{"name": "Visa"}]


def test_version_counts_writes(temp_db):
    """Test that section versions count writes."""
    assert temp_db.get_section_version("settings") == 0

    temp_db.put_section("settings", {"a": 1})
    temp_db.put_section("settings", {"a": 2})

    assert temp_db.get_section_version("settings") == 2
    assert temp_db.get_section("settings") == {"a": 2}


def test_put_sections(temp_db):
    """Test writing several sections at once."""
    temp_db.put_sections({"charity": {"current_amount": "150"}, "savings": {"balance": "100"}})

    assert temp_db.list_sections() == ["charity", "savings"]
    assert temp_db.get_section("savings") == {"balance": "100"}


def test_put_sections_rolls_back_on_failure(temp_db):
    """Test that a failed multi-section write changes nothing."""
    temp_db.put_section("charity", {"current_amount": "100"})

    with pytest.raises((TypeError, StatementError)):
        temp_db.put_sections(
            {"charity": {"current_amount": "200"}, "savings": {"bad": object()}}
        )

    assert temp_db.get_section("charity") == {"current_amount": "100"}
    assert "savings" not in temp_db.list_sections()


def test_append_to_section(temp_db):
    """Test appending to a list section."""
    temp_db.append_to_section("paydays", {"date": "2025-04-04"})
    temp_db.append_to_section("paydays", {"date": "2025-04-18"})

    assert temp_db.get_section("paydays") == [{"date": "2025-04-04"}, {"date": "2025-04-18"}]


def test_append_to_non_list_section(temp_db):
    """Test appending to a section that is not a list."""
    temp_db.put_section("settings", {"a": 1})

    with pytest.raises(TypeError):
        temp_db.append_to_section("settings", {"b": 2})


def test_delete_section(temp_db):
    """Test deleting a section."""
    temp_db.put_section("bills", [])
    temp_db.delete_section("bills")
    temp_db.delete_section("never-written")

    assert temp_db.list_sections() == []


def test_data_survives_reconnect(temp_db):
    """Test that data survives a reconnect."""
    temp_db.put_section("bills", [{"name": "Rent"}])

    other = create_sqlite_database(temp_db.database_path)
    other.connect()
    try:
        assert other.get_section("bills") == [{"name": "Rent"}]
        other.put_section("bills", [{"name": "Phone"}])
    finally:
        other.disconnect()

    assert temp_db.get_section("bills") == [{"name": "Phone"}]


def test_database_path_from_environment(tmp_path, monkeypatch):
    """Test the database path from the environment."""
    db_path = tmp_path / "env.db"
    monkeypatch.setenv("PAYDAY_DB_PATH", str(db_path))

    store = create_sqlite_database()

    assert store.database_path == str(db_path)
    store.disconnect()
