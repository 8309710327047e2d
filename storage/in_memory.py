"""In-memory record store.

Records live in a plain dict keyed by id for the lifetime of the store.
Every record is validated before any mutation happens, and copied on the way
in and on the way out, so callers can never reach the stored tag lists.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from storage.base import Storage
from storage.errors import (
    DuplicateIdError,
    InvalidCriteriaError,
    InvalidCriteriaIdError,
    InvalidCriteriaTagsError,
    InvalidCriteriaTagTypeError,
    InvalidIdError,
    InvalidRecordError,
    InvalidTagsError,
    InvalidTagTypeError,
    RecordNotFoundError,
)
from storage.records import QueryCriteria, Record

logger = logging.getLogger(__name__)


def _is_valid_id(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _is_tag_list(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _first_non_str(tags: list[Any] | tuple[Any, ...]) -> int | None:
    for index, tag in enumerate(tags):
        if not isinstance(tag, str):
            return index
    return None


class InMemoryStorage(Storage):
    """Single-process record store backed by a dict.

    Usage
    -----
    >>> store = InMemoryStorage()
    >>> store.add(Record(id="1", tags=["a", "b"]))
    >>> [r.id for r in store.query(QueryCriteria(tags=["a"]))]
    ['1']
    >>> store.remove("1")
    True
    >>> store.remove("1")   # not found is not an error
    False
    """

    def __init__(self) -> None:
        self._records: dict[str, Record] = {}

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    def add(self, record: Record | Mapping[str, Any]) -> None:
        """Insert a copy of *record*.

        Raises ``DuplicateIdError`` if the id is already stored, or one of the
        validation errors if *record* is malformed.
        """
        stored = self._validated_copy(record)
        if stored.id in self._records:
            raise DuplicateIdError(f"Record with id '{stored.id}' already exists")
        self._records[stored.id] = stored
        logger.debug("Added record %r with %d tag(s)", stored.id, len(stored.tags))

    def update(self, record: Record | Mapping[str, Any]) -> None:
        """Replace the stored record that has the same id.

        Tags are replaced wholesale, never merged.
        """
        stored = self._validated_copy(record)
        if stored.id not in self._records:
            raise RecordNotFoundError(f"Record with id '{stored.id}' not found")
        self._records[stored.id] = stored
        logger.debug("Updated record %r", stored.id)

    def remove(self, id: str) -> bool:
        if not _is_valid_id(id):
            raise InvalidIdError("Invalid id: must be a non-empty string")
        removed = self._records.pop(id, None) is not None
        logger.debug("Remove %r: %s", id, "deleted" if removed else "not found")
        return removed

    def exists(self, id: Any) -> bool:
        """Pure predicate: malformed ids simply do not exist."""
        return isinstance(id, str) and id in self._records

    def query(
        self, criteria: QueryCriteria | Mapping[str, Any] | None = None
    ) -> list[Record]:
        """Return copies of the records matching *criteria*.

        A record matches when its id equals ``criteria.id`` (if given) and its
        tags contain every tag in ``criteria.tags`` (if non-empty). No result
        ordering is guaranteed.
        """
        if criteria is None:
            return [record.copy() for record in self._records.values()]

        criteria = self._validated_criteria(criteria)
        wanted = criteria.tags or []
        results: list[Record] = []
        for record in self._records.values():
            if criteria.id is not None and record.id != criteria.id:
                continue
            if all(tag in record.tags for tag in wanted):
                results.append(record.copy())
        return results

    def size(self) -> int:
        return len(self._records)

    def clear(self) -> None:
        self._records.clear()
        logger.debug("Cleared all records")

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def _validated_copy(self, record: Any) -> Record:
        if isinstance(record, Record):
            record_id, tags = record.id, record.tags
        elif isinstance(record, Mapping):
            record_id, tags = record.get("id"), record.get("tags")
        else:
            raise InvalidRecordError("Invalid record: must be a Record or a mapping")

        if not _is_valid_id(record_id):
            raise InvalidIdError("Invalid record: id must be a non-empty string")
        if not _is_tag_list(tags):
            raise InvalidTagsError("Invalid record: tags must be a list")
        bad = _first_non_str(tags)
        if bad is not None:
            raise InvalidTagTypeError(
                f"Invalid record: tag at index {bad} must be a string", index=bad
            )
        return Record(id=record_id, tags=list(tags))

    def _validated_criteria(self, criteria: Any) -> QueryCriteria:
        if isinstance(criteria, Mapping):
            criteria = QueryCriteria.from_dict(criteria)
        elif not isinstance(criteria, QueryCriteria):
            raise InvalidCriteriaError(
                "Invalid criteria: must be a QueryCriteria or a mapping"
            )

        if criteria.id is not None and not _is_valid_id(criteria.id):
            raise InvalidCriteriaIdError("Invalid criteria: id must be a non-empty string")
        if criteria.tags is not None:
            if not _is_tag_list(criteria.tags):
                raise InvalidCriteriaTagsError("Invalid criteria: tags must be a list")
            bad = _first_non_str(criteria.tags)
            if bad is not None:
                raise InvalidCriteriaTagTypeError(
                    f"Invalid criteria: tag at index {bad} must be a string", index=bad
                )
        return QueryCriteria(
            id=criteria.id,
            tags=list(criteria.tags) if criteria.tags is not None else None,
        )
