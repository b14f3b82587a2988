"""Typed JSON record store with atomic persistence."""

from appcontext.constants import JSONSTORE_VERSION as LIB_VERSION
from appcontext.jsonstore.store import (
    InvalidRecordError,
    InvalidRecordIdError,
    JsonStore,
    JsonStoreError,
    JsonStoreLoadError,
    JsonStorePersistenceError,
    MarshalingMethod,
    RecordExistsError,
    RecordNotFoundError,
)

__all__ = [
    "InvalidRecordError",
    "InvalidRecordIdError",
    "JsonStore",
    "JsonStoreError",
    "JsonStoreLoadError",
    "JsonStorePersistenceError",
    "LIB_VERSION",
    "MarshalingMethod",
    "RecordExistsError",
    "RecordNotFoundError",
]
