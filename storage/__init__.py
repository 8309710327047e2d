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
    StorageError,
)
from storage.in_memory import InMemoryStorage
from storage.records import QueryCriteria, Record

__all__ = [
    "DuplicateIdError",
    "InMemoryStorage",
    "InvalidCriteriaError",
    "InvalidCriteriaIdError",
    "InvalidCriteriaTagsError",
    "InvalidCriteriaTagTypeError",
    "InvalidIdError",
    "InvalidRecordError",
    "InvalidTagsError",
    "InvalidTagTypeError",
    "QueryCriteria",
    "Record",
    "RecordNotFoundError",
    "Storage",
    "StorageError",
]
