"""Abstract interface shared by record store implementations."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from storage.records import QueryCriteria, Record


class Storage(ABC):
    """Keyed record store with tag-based filtering.

    Subclasses must treat every record crossing the public surface as a value
    copy: nothing passed in is retained, and nothing returned aliases
    internal state.
    """

    @abstractmethod
    def add(self, record: Record) -> None:
        """Insert *record*; fail if its id is already present."""

    @abstractmethod
    def query(self, criteria: QueryCriteria | None = None) -> list[Record]:
        """Return every record matching *criteria* (all records if omitted)."""

    @abstractmethod
    def update(self, record: Record) -> None:
        """Replace the stored record with the same id."""

    @abstractmethod
    def remove(self, id: str) -> bool:
        """Delete the record with *id*; return whether one was deleted."""

    @abstractmethod
    def exists(self, id: Any) -> bool:
        """Return ``True`` if a record with *id* is stored."""

    @abstractmethod
    def size(self) -> int:
        """Return the number of stored records."""

    @abstractmethod
    def clear(self) -> None:
        """Remove every record."""

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, id: object) -> bool:
        return self.exists(id)
