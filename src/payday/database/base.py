"""Abstract record store interface."""

from abc import ABC, abstractmethod
from typing import Any, Mapping


class RecordStore(ABC):
    """Abstract section-scoped record store for payday.

    Each section holds one JSON-compatible value (a dict or a list) that is
    read and replaced wholesale.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the store."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the store."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize storage schema (create tables)."""
        pass

    @abstractmethod
    def get_section(self, name: str, default: Any = None) -> Any:
        """Get a section value.

        Returns a copy of ``default`` when the section has never been written.
        """
        pass

    @abstractmethod
    def put_section(self, name: str, value: Any) -> None:
        """Replace a section value."""
        pass

    @abstractmethod
    def put_sections(self, values: Mapping[str, Any]) -> None:
        """Replace several sections in a single transaction."""
        pass

    @abstractmethod
    def get_section_version(self, name: str) -> int:
        """Get the write counter of a section (0 if never written)."""
        pass

    @abstractmethod
    def list_sections(self) -> list[str]:
        """List the names of all stored sections."""
        pass

    @abstractmethod
    def delete_section(self, name: str) -> None:
        """Delete a section if it exists."""
        pass

    def append_to_section(self, name: str, item: Any) -> None:
        """Append an item to a list-shaped section."""
        current = self.get_section(name, [])
        if not isinstance(current, list):
            raise TypeError(f"Section '{name}' is not a list")
        self.put_section(name, current + [item])
