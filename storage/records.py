"""Value types handled by the record store."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping


@dataclass
class Record:
    """A single stored record.

    ``tags`` is kept exactly as supplied: case-sensitive, order-preserving,
    duplicates allowed.
    """

    id: str
    tags: list[str] = field(default_factory=list)

    def copy(self) -> "Record":
        """Return a value copy that shares no mutable state with *self*."""
        return Record(id=self.id, tags=list(self.tags))

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "tags": list(self.tags)}


@dataclass
class QueryCriteria:
    """Filter for ``Storage.query``.

    ``None`` (or an empty ``tags`` list) means no constraint on that field.
    """

    id: str | None = None
    tags: list[str] | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "QueryCriteria":
        return cls(id=data.get("id"), tags=data.get("tags"))
