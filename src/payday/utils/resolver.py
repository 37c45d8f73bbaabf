"""Utility for resolving bill and debt references to list indexes."""

from typing import Protocol, Sequence

from payday.domain.errors import NotFoundError


class Named(Protocol):
    name: str


def resolve_index(items: Sequence[Named], reference: str | int, kind: str = "Item") -> int:
    """Resolve a name or 1-based number to a 0-based list index.

    Args:
        items: Records to search, in storage order
        reference: Record name (str) or number (int or numeric string, 1-based)
        kind: Label used in error messages ("Bill", "Debt")

    Returns:
        0-based index into ``items``

    Raises:
        NotFoundError: If no record matches
    """
    if isinstance(reference, int):
        number = reference
    else:
        try:
            number = int(reference)
        except (ValueError, TypeError):
            number = None

    if number is not None:
        if 1 <= number <= len(items):
            return number - 1
        raise NotFoundError(f"{kind} {number} not found")

    for index, item in enumerate(items):
        if item.name == reference:
            return index

    # Fall back to a case-insensitive match
    lowered = str(reference).lower()
    for index, item in enumerate(items):
        if item.name.lower() == lowered:
            return index

    raise NotFoundError(f"{kind} '{reference}' not found")
