"""Tests for name/number reference resolution."""

from dataclasses import dataclass

import pytest

from payday.domain.errors import NotFoundError
from payday.utils.resolver import resolve_index


@dataclass
class Item:
    name: str


ITEMS = [Item("Rent"), Item("Phone"), Item("rent backup")]


def test_resolve_by_number():
    """Test resolving a record by number."""
    assert resolve_index(ITEMS, "1") == 0
    assert resolve_index(ITEMS, 3) == 2


def test_resolve_by_name():
    """Test resolving a record by name."""
    assert resolve_index(ITEMS, "Phone") == 1


def test_resolve_by_name_case_insensitive():
    """Test that name lookup ignores case."""
    assert resolve_index(ITEMS, "RENT") == 0


def test_resolve_number_out_of_range():
    """Test resolving a number out of range."""
    with pytest.raises(NotFoundError, match="Bill 4 not found"):
        resolve_index(ITEMS, "4", "Bill")


def test_resolve_unknown_name():
    """Test resolving an unknown name."""
    with pytest.raises(NotFoundError, match="Debt 'Visa' not found"):
        resolve_index(ITEMS, "Visa", "Debt")
