"""
appcontext - application file layout.

File: src/appcontext/pathspec/layout.py
Last updated: 2026-10-17

Purpose
- Group path entries by base directory, materialize them on disk and report drift
  between the declared layout and the real filesystem.

Functional requirements
- ``build`` and manifest import stamp missing app names, validate every entry and
  fail on the first invalid one.
- ``generate`` creates as much of the layout as possible and reports every
  per-entry failure jointly. Existing files and directories are left untouched.
- ``assess`` never stops early: it returns every discrepancy plus a count-based
  companion status.

Non-functional requirements
- ``generate`` and ``assess`` perform unsynchronized filesystem I/O. Callers must
  not run them concurrently on overlapping layouts.
"""

from __future__ import annotations

import dataclasses
import json
import os
import stat
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog

from appcontext.constants import DEFAULT_DIR_MODE
from appcontext.pathspec.errors import (
    LayoutAssessmentError,
    LayoutGenerationError,
    ManifestError,
    PathValidationError,
)
from appcontext.pathspec.paths import filesystem_path, validate
from appcontext.pathspec.types import (
    MANIFEST_SECTIONS,
    BaseDirType,
    PathEntry,
    PathType,
    parse_manifest,
)
from appcontext.utils.fs import PathLike, atomic_write

_LOGGER = structlog.get_logger(__name__)


@dataclass(slots=True)
class Layout:
    """Complete on-disk layout of one application."""

    app_name: str
    app_version: str = ""
    config_paths: list[PathEntry] = field(default_factory=list)
    data_paths: list[PathEntry] = field(default_factory=list)
    cache_paths: list[PathEntry] = field(default_factory=list)
    runtime_paths: list[PathEntry] = field(default_factory=list)
    temp_paths: list[PathEntry] = field(default_factory=list)

    @classmethod
    def build(
        cls,
        app_name: str,
        entries: Iterable[PathEntry],
        *,
        app_version: str = "",
    ) -> Layout:
        """Validate ``entries`` and bucket them by base directory."""

        layout = cls(app_name=app_name, app_version=app_version)
        for index, entry in enumerate(entries):
            if not entry.app_name:
                entry = dataclasses.replace(entry, app_name=app_name)
            try:
                validate(entry)
            except PathValidationError as exc:
                raise PathValidationError(
                    exc.reason, entry_name=entry.name or f"<entry {index}>"
                ) from exc
            layout._bucket(entry.base_dir).append(entry)
        return layout

    @classmethod
    def from_manifest(cls, data: Mapping[str, object]) -> Layout:
        app_name, app_version, entries = parse_manifest(data)
        return cls.build(app_name, entries, app_version=app_version)

    @classmethod
    def loads(cls, text: str) -> Layout:
        try:
            parsed = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ManifestError(f"failed to decode manifest JSON: {exc}") from exc
        return cls.from_manifest(parsed)

    @classmethod
    def import_manifest(cls, path: PathLike) -> Layout:
        """Read and validate a JSON layout manifest from ``path``."""

        try:
            text = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ManifestError(f"failed to open manifest {os.fspath(path)}: {exc}") from exc
        return cls.loads(text)

    def all_entries(self) -> list[PathEntry]:
        """Every entry, config first, in declaration order within each bucket."""

        entries: list[PathEntry] = []
        for kind, _ in MANIFEST_SECTIONS:
            entries.extend(self._bucket(kind))
        return entries

    def to_manifest(self) -> dict[str, Any]:
        manifest: dict[str, Any] = {"app_name": self.app_name}
        if self.app_version:
            manifest["app_version"] = self.app_version
        for kind, section in MANIFEST_SECTIONS:
            bucket = self._bucket(kind)
            if bucket:
                manifest[section] = [entry.to_dict() for entry in bucket]
        return manifest

    def export(self, path: PathLike) -> None:
        """Write the manifest atomically; ``import_manifest`` reads it back."""

        text = json.dumps(self.to_manifest(), indent=2, ensure_ascii=False) + "\n"
        atomic_write(path, text)

    def rendered_paths(self, *, environ: Mapping[str, str] | None = None) -> list[str]:
        return [filesystem_path(entry, environ=environ) for entry in self.all_entries()]

    def generate(self, *, environ: Mapping[str, str] | None = None) -> None:
        """
        Create every directory and missing file of the layout.

        Raises ``LayoutGenerationError`` listing every entry that failed; entries
        that succeeded stay created.
        """

        failures: list[str] = []
        entries = self.all_entries()
        for entry in entries:
            full_path = filesystem_path(entry, environ=environ)
            try:
                validate(entry)
            except PathValidationError as exc:
                failures.append(f"invalid path {entry.name or '<unnamed>'}: {exc.reason}")
                continue

            if entry.path_type == PathType.DIRECTORY:
                try:
                    _ensure_directory(full_path, entry.default_perm)
                except OSError as exc:
                    failures.append(f"directory {full_path}: {exc}")
            elif entry.path_type == PathType.FILE:
                parent = os.path.dirname(full_path)
                try:
                    os.makedirs(parent, mode=DEFAULT_DIR_MODE, exist_ok=True)
                except OSError as exc:
                    failures.append(f"parent directory for {full_path}: {exc}")
                    continue
                try:
                    _ensure_file(full_path, entry.default_perm)
                except OSError as exc:
                    failures.append(f"file {full_path}: {exc}")
            else:
                failures.append(f"symlink {full_path}: symlink creation not supported")

        _LOGGER.info(
            "layout_generated",
            app_name=self.app_name,
            entries=len(entries),
            failures=len(failures),
        )
        if failures:
            raise LayoutGenerationError(failures)

    def assess(
        self, *, environ: Mapping[str, str] | None = None
    ) -> tuple[list[str], LayoutAssessmentError | None]:
        """
        Compare the filesystem against the layout.

        Returns every discrepancy message and a companion status that is ``None``
        only when the list is empty. Severity is flat: a missing mandatory path and
        a permission mismatch count the same.
        """

        messages: list[str] = []
        for entry in self.all_entries():
            messages.extend(_assess_entry(entry, filesystem_path(entry, environ=environ)))

        _LOGGER.info("layout_assessed", app_name=self.app_name, discrepancies=len(messages))
        status = LayoutAssessmentError(messages) if messages else None
        return messages, status

    def _bucket(self, kind: BaseDirType | int) -> list[PathEntry]:
        if kind == BaseDirType.CONFIG:
            return self.config_paths
        if kind == BaseDirType.DATA:
            return self.data_paths
        if kind == BaseDirType.CACHE:
            return self.cache_paths
        if kind == BaseDirType.RUNTIME:
            return self.runtime_paths
        if kind == BaseDirType.TEMP:
            return self.temp_paths
        raise PathValidationError(f"unknown base directory kind: {kind!r}")


def _ensure_directory(path: str, perm: int) -> None:
    if os.path.isdir(path):
        return
    os.makedirs(path, mode=perm, exist_ok=True)
    # makedirs is subject to the umask.
    os.chmod(path, perm)


def _ensure_file(path: str, perm: int) -> None:
    try:
        fd = os.open(path, os.O_CREAT | os.O_EXCL | os.O_WRONLY, perm)
    except FileExistsError:
        return
    os.close(fd)
    os.chmod(path, perm)


def _assess_entry(entry: PathEntry, full_path: str) -> list[str]:
    try:
        info = os.stat(full_path)
    except FileNotFoundError:
        if entry.is_mandatory:
            return [f"mandatory path does not exist: {full_path}"]
        return []
    except OSError as exc:
        return [f"cannot access path {full_path}: {exc}"]

    is_dir = stat.S_ISDIR(info.st_mode)
    if (entry.path_type == PathType.FILE and is_dir) or (
        entry.path_type == PathType.DIRECTORY and not is_dir
    ):
        actual_type = "directory" if is_dir else "file"
        return [
            f"path type mismatch: {full_path} is {actual_type} but expected "
            f"{_expected_type(entry.path_type)}"
        ]

    messages: list[str] = []
    actual_perm = stat.S_IMODE(info.st_mode) & 0o777
    if actual_perm == 0:
        messages.append(
            f"invalid permissions 0000 for {full_path}: file is completely inaccessible"
        )
    if actual_perm != entry.default_perm:
        messages.append(
            f"permissions mismatch for {full_path}: has {actual_perm:04o}, "
            f"expected {entry.default_perm:04o}"
        )

    if entry.path_type == PathType.FILE and entry.max_size > 0 and info.st_size > entry.max_size:
        messages.append(
            f"file size exceeds limit for {full_path}: {info.st_size} > {entry.max_size}"
        )

    if entry.path_type == PathType.DIRECTORY and entry.max_children > 0:
        try:
            children = len(os.listdir(full_path))
        except OSError as exc:
            messages.append(f"cannot read directory {full_path}: {exc}")
        else:
            if children > entry.max_children:
                messages.append(
                    f"directory children count exceeded for {full_path}: "
                    f"{children} > {entry.max_children}"
                )
    return messages


def _expected_type(path_type: PathType | int) -> str:
    if path_type == PathType.FILE:
        return "file"
    if path_type == PathType.DIRECTORY:
        return "directory"
    if path_type == PathType.SYMLINK:
        return "symlink"
    return "unknown"


__all__ = ["Layout"]
