"""
appcontext - typed JSON record store.

File: src/appcontext/jsonstore/store.py
Last updated: 2026-10-17

Purpose
- Keep a map of string ids to typed records in one JSON document.

Functional requirements
- Insert/update/delete with optional auto-save; a failed save rolls the
  in-memory map back to its pre-mutation snapshot.
- Compact, indented and hybrid (sorted, one record per line) renderings.
- Constructing over a missing file yields an empty store; ``JsonStore.load``
  requires the file to exist.

Non-functional requirements
- Hybrid output is byte-identical for identical content regardless of insertion order.
- All operations run under one reader/writer lock.
"""

from __future__ import annotations

import copy
import json
import os
from collections.abc import Iterator, Mapping
from enum import IntEnum
from pathlib import Path
from typing import Any, Generic, TypeVar

import structlog
from pydantic_core import PydanticSerializationError

from appcontext.utils.concurrency import ReadWriteLock
from appcontext.utils.fs import PathLike, atomic_write
from appcontext.utils.values import TypedValue, ValueTypeError

T = TypeVar("T")


class MarshalingMethod(IntEnum):
    COMPACT = 0
    INDENT = 1
    HYBRID = 2


class JsonStoreError(Exception):
    """Base class for JSON store failures."""


class InvalidRecordIdError(JsonStoreError, ValueError):
    """Raised for an empty record id."""


class RecordExistsError(JsonStoreError):
    """Raised when inserting an id that is already present."""


class RecordNotFoundError(JsonStoreError, LookupError):
    """Raised when an id is absent."""


class InvalidRecordError(JsonStoreError, TypeError):
    """Raised when a value does not match the store's record type."""


class JsonStoreLoadError(JsonStoreError):
    """Raised when the backing document cannot be read or decoded."""


class JsonStorePersistenceError(JsonStoreError):
    """Raised when the store cannot be serialized or written."""


class JsonStore(Generic[T]):
    """
    Mutex-guarded map of string ids to records of one declared type.

    Records are copied on the way in and on the way out, so callers never share
    mutable state with the store.
    """

    def __init__(
        self,
        path: PathLike,
        value_type: type[T] | Any,
        *,
        auto_save: bool = False,
        marshaling: MarshalingMethod = MarshalingMethod.HYBRID,
        prefix: str = "",
        indent: str = "  ",
        logger: Any | None = None,
    ) -> None:
        self._lock = ReadWriteLock()
        self._logger = logger if logger is not None else structlog.get_logger(__name__)
        self._path = os.fspath(path)
        self._typed: TypedValue[T] = TypedValue(value_type)
        self._auto_save = auto_save
        self._marshaling = MarshalingMethod(marshaling)
        self._prefix = prefix
        self._indent = indent
        self._data: dict[str, T] = {}

        text = self._read()
        if text is not None:
            self._data = self._decode(text)

    @classmethod
    def load(
        cls,
        path: PathLike,
        value_type: type[T] | Any,
        *,
        auto_save: bool = False,
        marshaling: MarshalingMethod = MarshalingMethod.HYBRID,
        prefix: str = "",
        indent: str = "  ",
        logger: Any | None = None,
    ) -> JsonStore[T]:
        """Open a store from an existing file; a missing file is an error."""

        if not Path(path).is_file():
            raise JsonStoreLoadError(f"store file does not exist: {os.fspath(path)}")
        return cls(
            path,
            value_type,
            auto_save=auto_save,
            marshaling=marshaling,
            prefix=prefix,
            indent=indent,
            logger=logger,
        )

    @property
    def path(self) -> str:
        return self._path

    @property
    def auto_save(self) -> bool:
        return self._auto_save

    @property
    def marshaling(self) -> MarshalingMethod:
        return self._marshaling

    def insert(self, record_id: str, value: T) -> None:
        record = self._check(value)
        with self._lock.write_locked():
            _require_id(record_id)
            if record_id in self._data:
                raise RecordExistsError(f"record already exists: {record_id!r}")
            snapshot = dict(self._data)
            self._data[record_id] = record
            self._persist_or_rollback("insert", record_id, snapshot)

    def update(self, record_id: str, value: T) -> None:
        record = self._check(value)
        with self._lock.write_locked():
            _require_id(record_id)
            if record_id not in self._data:
                raise RecordNotFoundError(f"record not found: {record_id!r}")
            snapshot = dict(self._data)
            self._data[record_id] = record
            self._persist_or_rollback("update", record_id, snapshot)

    def delete(self, record_id: str) -> None:
        with self._lock.write_locked():
            if record_id not in self._data:
                raise RecordNotFoundError(f"record not found: {record_id!r}")
            snapshot = dict(self._data)
            del self._data[record_id]
            self._persist_or_rollback("delete", record_id, snapshot)

    def get(self, record_id: str) -> T:
        with self._lock.read_locked():
            try:
                return copy.deepcopy(self._data[record_id])
            except KeyError:
                raise RecordNotFoundError(f"record not found: {record_id!r}") from None

    def contains(self, record_id: str) -> bool:
        with self._lock.read_locked():
            return record_id in self._data

    def count(self) -> int:
        with self._lock.read_locked():
            return len(self._data)

    def get_all(self) -> dict[str, T]:
        """Return a deep copy of every record."""

        with self._lock.read_locked():
            return copy.deepcopy(self._data)

    def ids(self) -> list[str]:
        with self._lock.read_locked():
            return sorted(self._data)

    def save(self) -> None:
        with self._lock.write_locked():
            self._save()

    def marshal(self) -> bytes:
        with self._lock.read_locked():
            return self._marshal()

    def __len__(self) -> int:
        return self.count()

    def __contains__(self, record_id: object) -> bool:
        return isinstance(record_id, str) and self.contains(record_id)

    def __iter__(self) -> Iterator[str]:
        return iter(self.ids())

    def _check(self, value: T) -> T:
        try:
            return self._typed.check(value)
        except ValueTypeError as exc:
            raise InvalidRecordError(str(exc)) from exc

    def _persist_or_rollback(self, operation: str, record_id: str, snapshot: dict[str, T]) -> None:
        if not self._auto_save:
            return
        try:
            self._save()
        except JsonStorePersistenceError as exc:
            self._data = snapshot
            self._logger.warning(
                "jsonstore_rollback",
                operation=operation,
                record_id=record_id,
                path=self._path,
                error=str(exc),
            )
            raise JsonStorePersistenceError(
                f"{operation} {record_id!r}: failed to save store: {exc}"
            ) from exc

    def _save(self) -> None:
        payload = self._marshal()
        try:
            atomic_write(self._path, payload)
        except OSError as exc:
            raise JsonStorePersistenceError(f"failed to write storage {self._path}: {exc}") from exc
        self._logger.debug("jsonstore_saved", path=self._path, records=len(self._data))

    def _marshal(self) -> bytes:
        try:
            encoded = {key: self._typed.encode(self._data[key]) for key in sorted(self._data)}
        except PydanticSerializationError as exc:
            raise JsonStorePersistenceError(f"failed to marshal store: {exc}") from exc

        if self._marshaling is MarshalingMethod.COMPACT:
            text = json.dumps(encoded, separators=(",", ":"), ensure_ascii=False)
        elif self._marshaling is MarshalingMethod.INDENT:
            text = _dumps_indented(encoded, self._prefix, self._indent)
        else:
            text = _dumps_hybrid(encoded)
        return text.encode("utf-8")

    def _read(self) -> str | None:
        try:
            return Path(self._path).read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as exc:
            raise JsonStoreLoadError(f"failed to read store {self._path}: {exc}") from exc

    def _decode(self, text: str) -> dict[str, T]:
        # Layout generation creates empty files; treat them as empty stores.
        if not text.strip():
            return {}
        try:
            parsed = json.loads(text)
        except json.JSONDecodeError as exc:
            raise JsonStoreLoadError(f"invalid JSON in {self._path}: {exc}") from exc
        if not isinstance(parsed, Mapping):
            raise JsonStoreLoadError(f"store root must be an object: {self._path}")

        records: dict[str, T] = {}
        for key, payload in parsed.items():
            try:
                records[key] = self._typed.decode(payload)
            except ValueTypeError as exc:
                raise JsonStoreLoadError(f"record {key!r} in {self._path}: {exc}") from exc
        self._logger.debug("jsonstore_loaded", path=self._path, records=len(records))
        return records


def _require_id(record_id: str) -> None:
    if not isinstance(record_id, str) or not record_id:
        raise InvalidRecordIdError("empty entry id")


def _dumps_indented(payload: Mapping[str, Any], prefix: str, indent: str) -> str:
    # Every line after the first starts with ``prefix``.
    text = json.dumps(payload, indent=indent, ensure_ascii=False)
    if not prefix:
        return text
    first, *rest = text.split("\n")
    return "\n".join([first, *(prefix + line for line in rest)])


def _dumps_hybrid(payload: Mapping[str, Any]) -> str:
    if not payload:
        return "{\n}"
    lines = [
        f"  {json.dumps(key, ensure_ascii=False)}: "
        f"{json.dumps(value, separators=(',', ':'), sort_keys=True, ensure_ascii=False)}"
        for key, value in sorted(payload.items())
    ]
    return "{\n" + ",\n".join(lines) + "\n}"


__all__ = [
    "InvalidRecordError",
    "InvalidRecordIdError",
    "JsonStore",
    "JsonStoreError",
    "JsonStoreLoadError",
    "JsonStorePersistenceError",
    "MarshalingMethod",
    "RecordExistsError",
    "RecordNotFoundError",
]
