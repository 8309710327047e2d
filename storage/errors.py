"""Error types raised by the record store.

Every error carries a stable machine-readable ``code`` so callers can branch
on the kind of failure without parsing messages.
"""

from __future__ import annotations


class StorageError(Exception):
    """Base class for all record store failures."""

    code: str = "STORAGE_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.message} [{self.code}]"


class InvalidRecordError(StorageError):
    code = "INVALID_RECORD"


class InvalidIdError(StorageError):
    code = "INVALID_ID"


class InvalidTagsError(StorageError):
    code = "INVALID_TAGS"


class InvalidTagTypeError(StorageError):
    """A tag element is not a string; ``index`` points at the offender."""

    code = "INVALID_TAG_TYPE"

    def __init__(self, message: str, index: int):
        super().__init__(message)
        self.index = index


class DuplicateIdError(StorageError):
    code = "DUPLICATE_ID"


class RecordNotFoundError(StorageError):
    code = "RECORD_NOT_FOUND"


class InvalidCriteriaError(StorageError):
    code = "INVALID_CRITERIA"


class InvalidCriteriaIdError(StorageError):
    code = "INVALID_CRITERIA_ID"


class InvalidCriteriaTagsError(StorageError):
    code = "INVALID_CRITERIA_TAGS"


class InvalidCriteriaTagTypeError(StorageError):
    code = "INVALID_CRITERIA_TAG_TYPE"

    def __init__(self, message: str, index: int):
        super().__init__(message)
        self.index = index
