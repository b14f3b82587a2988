"""
appcontext - typed configuration manager.

File: src/appcontext/configmanager/manager.py
Last updated: 2026-10-17

Purpose
- Hold one configuration value of a caller-declared type, bound to one file and
  one serialization format, with load/save and an optional validation hook.

Functional requirements
- Format is one of JSON, YAML, TOML; anything else fails at construction.
- Default path is ``<XDG config home>/[group/]<app>/config.<ext>``; a forced path
  must carry the extension of the configured format.
- ``load`` decodes into a scratch value and commits only after decoding and
  validation succeed; the held value is untouched on every failure.
- ``save`` validates first, then writes through the atomic writer.

Non-functional requirements
- Every public operation runs under one reader/writer lock for its full duration.
"""

from __future__ import annotations

import copy
import os
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any, Generic, TypeVar

import structlog
from pydantic_core import PydanticSerializationError

from appcontext import xdg
from appcontext.configmanager.codecs import (
    SerializationFormat,
    decode,
    default_extension,
    encode,
    matches_extension,
    parse_format,
)
from appcontext.configmanager.errors import (
    CodecError,
    ConfigLoadError,
    ConfigPathError,
    ConfigSaveError,
    ConfigValidationError,
)
from appcontext.constants import DEFAULT_CONFIG_STEM
from appcontext.utils.concurrency import ReadWriteLock
from appcontext.utils.fs import PathLike, atomic_write, ensure_directory, file_exists
from appcontext.utils.values import TypedValue, ValidatorFunc, ValueTypeError, resolve_validator

T = TypeVar("T")


class ConfigManager(Generic[T]):
    """
    Mutex-guarded holder of one typed configuration value.

    Parameters
    ----------
    app_name:
        Application name used to resolve the default config path.
    default:
        Initial value; its type becomes the store's type unless ``value_type`` is given.
    value_type:
        Explicit type tag (dataclass, pydantic model, TypedDict, builtin container).
    fmt:
        Serialization format, ``"toml"`` by default.
    force_path:
        Use this file instead of the XDG location. Its extension must match ``fmt``.
    project_group:
        Optional organization directory between the config home and the app name.
    create:
        Write ``default`` to disk immediately when the file does not exist yet.
    validator:
        Callable raising on an invalid value. When omitted, values exposing
        ``validate()`` are checked through it.
    environ:
        Environment used for XDG resolution, ``os.environ`` by default.
    """

    def __init__(
        self,
        app_name: str,
        default: T,
        *,
        value_type: type[T] | Any | None = None,
        fmt: SerializationFormat | str = SerializationFormat.TOML,
        force_path: PathLike | None = None,
        project_group: str | None = None,
        create: bool = False,
        validator: ValidatorFunc | None = None,
        environ: Mapping[str, str] | None = None,
        logger: Any | None = None,
    ) -> None:
        self._lock = ReadWriteLock()
        self._logger = logger if logger is not None else structlog.get_logger(__name__)
        self._format = parse_format(fmt)
        self._typed: TypedValue[T] = TypedValue(value_type if value_type is not None else type(default))
        self._value: T = self._typed.check(default)
        self._validator = validator
        self._app_name = app_name

        if force_path is None:
            resolved = xdg.location(
                xdg.BaseDir.CONFIG,
                app_name,
                project_group=project_group,
                file_name=f"{DEFAULT_CONFIG_STEM}{default_extension(self._format)}",
                environ=environ,
            )
            if not resolved:
                raise ConfigPathError("cannot resolve config path: application name is empty")
            self._path = resolved
        else:
            forced = os.fspath(force_path)
            _check_path_format(forced, self._format)
            _check_forced_path(forced)
            self._path = forced

        if create and not file_exists(self._path):
            self.save()

    @property
    def app_name(self) -> str:
        return self._app_name

    @property
    def format(self) -> SerializationFormat:
        return self._format

    @property
    def value_type(self) -> Any:
        return self._typed.value_type

    @property
    def path(self) -> str:
        with self._lock.read_locked():
            return self._path

    @property
    def config(self) -> T:
        """Return a copy of the held value."""

        with self._lock.read_locked():
            return copy.deepcopy(self._value)

    def set(self, value: T) -> None:
        """Replace the held value after checking it against the declared type."""

        checked = self._typed.check(value)
        with self._lock.write_locked():
            self._value = checked

    def update(self, mutate: Callable[[T], T | None]) -> T:
        """
        Apply ``mutate`` to a copy of the held value and commit the result.

        ``mutate`` may change its argument in place (returning ``None``) or return a
        replacement. Nothing is committed if it raises or yields a mistyped value.
        The write lock is held while ``mutate`` runs, so it must work only on its
        argument and never call back into this manager.
        """

        with self._lock.write_locked():
            scratch = copy.deepcopy(self._value)
            result = mutate(scratch)
            candidate = scratch if result is None else result
            self._value = self._typed.check(candidate)
            return copy.deepcopy(self._value)

    def set_path(self, new_path: PathLike) -> None:
        candidate = os.fspath(new_path)
        _check_path_format(candidate, self._format)
        with self._lock.write_locked():
            self._path = candidate

    def load(self, *candidates: PathLike) -> T:
        """
        Load the config from the first readable candidate (default: current path).

        Unreadable or extension-mismatched candidates are skipped. The first readable
        candidate is decoded and validated; on success it becomes the active path.
        Decode or validation failure aborts without trying later candidates.
        """

        with self._lock.write_locked():
            paths = [os.fspath(item) for item in candidates] or [self._path]
            skipped: list[str] = []
            for candidate in paths:
                if not candidate:
                    skipped.append("<empty>: path is not set")
                    continue
                if not matches_extension(candidate, self._format):
                    skipped.append(
                        f"{candidate}: extension does not match serialization format "
                        f"{self._format.value!r}"
                    )
                    continue
                try:
                    text = Path(candidate).read_text(encoding="utf-8")
                except (OSError, UnicodeDecodeError) as exc:
                    skipped.append(f"{candidate}: {exc}")
                    self._logger.debug("config_candidate_skipped", path=candidate, reason=str(exc))
                    continue

                scratch = self._decode(candidate, text)
                self._value = scratch
                self._path = candidate
                self._logger.info("config_loaded", path=candidate, format=self._format.value)
                return copy.deepcopy(scratch)

            raise ConfigLoadError("failed to load config: " + "; ".join(skipped))

    def save(self) -> None:
        """Validate the held value and write it atomically to the active path."""

        with self._lock.write_locked():
            self._validate(self._value, context="validation failed before save")

            target = Path(self._path)
            try:
                ensure_directory(target.parent)
            except OSError as exc:
                raise ConfigSaveError(
                    f"failed to ensure config directory {target.parent}: {exc}"
                ) from exc

            try:
                payload = self._typed.encode(self._value)
                text = encode(self._format, payload)
            except (CodecError, PydanticSerializationError) as exc:
                raise ConfigSaveError(f"failed to serialize config for {target}: {exc}") from exc

            try:
                atomic_write(target, text)
            except OSError as exc:
                raise ConfigSaveError(f"atomic save to {target} failed: {exc}") from exc

            self._logger.info("config_saved", path=str(target), format=self._format.value)

    def _decode(self, path: str, text: str) -> T:
        try:
            payload = decode(self._format, text)
        except CodecError as exc:
            raise ConfigLoadError(f"failed to decode {path}: {exc}") from exc
        try:
            value = self._typed.decode(payload)
        except ValueTypeError as exc:
            raise ConfigLoadError(f"failed to decode {path}: {exc}") from exc
        self._validate(value, context=f"config validation failed for {path}")
        return value

    def _validate(self, value: T, *, context: str) -> None:
        hook = resolve_validator(value, self._validator)
        if hook is None:
            return
        try:
            hook()
        except Exception as exc:
            raise ConfigValidationError(f"{context}: {exc}") from exc


def _check_path_format(path: str, fmt: SerializationFormat) -> None:
    if not path:
        raise ConfigPathError("path is empty")
    if not matches_extension(path, fmt):
        raise ConfigPathError(f"path {path!r} does not match serialization format {fmt.value!r}")


def _check_forced_path(path: str) -> None:
    candidate = Path(path)
    if not candidate.exists():
        return
    if candidate.is_dir():
        raise ConfigPathError(f"forced path invalid: {path} is a directory")
    if not os.access(candidate, os.R_OK):
        raise ConfigPathError(f"forced path invalid: {path} is not readable")


__all__ = ["ConfigManager"]
