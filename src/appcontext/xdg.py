"""
appcontext - XDG base-directory path resolver.

File: src/appcontext/xdg.py
Last updated: 2026-10-17

Purpose
- Build absolute per-application paths under the XDG base directories.

Functional requirements
- Base directory per kind comes from its override variable, falling back to the
  conventional default under the user's home directory.
- Paths are assembled as base / [group] / app / [subdirs...] / [file]; leading
  separators are stripped from every segment after the base.
- A result without a file name denotes a directory and always ends with
  ``os.sep``; a file result never does.
- Empty app name or unknown kind yields ``""`` instead of raising.

Non-functional requirements
- Pure function of its arguments and the supplied environment; no I/O.
"""

from __future__ import annotations

import os
import tempfile
from collections.abc import Mapping, Sequence
from enum import StrEnum
from pathlib import Path
from typing import Final


class BaseDir(StrEnum):
    CONFIG = "config"
    DATA = "data"
    CACHE = "cache"
    STATE = "state"
    RUNTIME = "runtime"
    TEMP = "temp"


ENV_OVERRIDES: Final[Mapping[BaseDir, str]] = {
    BaseDir.CONFIG: "XDG_CONFIG_HOME",
    BaseDir.DATA: "XDG_DATA_HOME",
    BaseDir.CACHE: "XDG_CACHE_HOME",
    BaseDir.STATE: "XDG_STATE_HOME",
    BaseDir.RUNTIME: "XDG_RUNTIME_DIR",
    BaseDir.TEMP: "TMPDIR",
}

# Defaults relative to the home directory.
_HOME_DEFAULTS: Final[Mapping[BaseDir, tuple[str, ...]]] = {
    BaseDir.CONFIG: (".config",),
    BaseDir.DATA: (".local", "share"),
    BaseDir.CACHE: (".cache",),
    BaseDir.STATE: (".local", "state"),
    BaseDir.RUNTIME: (".local", "run"),
}


def location(
    base_dir: BaseDir | str,
    app_name: str,
    *,
    project_group: str | None = None,
    sub_dirs: Sequence[str] = (),
    file_name: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> str:
    """
    Return the absolute path for ``app_name`` under ``base_dir``.

    Without ``file_name`` the result ends with ``os.sep`` to mark a directory.
    Returns ``""`` when the path cannot be constructed.
    """

    if not app_name:
        return ""
    kind = _parse_kind(base_dir)
    if kind is None:
        return ""

    app = _relative(app_name)
    if not app:
        return ""

    parts: list[str] = [base_dir_path(kind, environ=environ)]
    group = _relative(project_group or "")
    if group:
        parts.append(group)
    parts.append(app)
    parts.extend(segment for segment in map(_relative, sub_dirs) if segment)

    joined = os.path.join(*parts)
    leaf = _relative(file_name or "")
    if leaf:
        return os.path.join(joined, leaf)
    return joined.rstrip(os.sep) + os.sep


def base_dir_path(kind: BaseDir | str, *, environ: Mapping[str, str] | None = None) -> str:
    """Return the base directory for ``kind`` honoring its override variable."""

    resolved = _parse_kind(kind)
    if resolved is None:
        raise ValueError(f"unknown base directory kind: {kind!r}")

    env = os.environ if environ is None else environ
    override = env.get(ENV_OVERRIDES[resolved], "").strip()
    if override and os.path.isabs(override):
        return os.path.normpath(override)

    if resolved is BaseDir.TEMP:
        return os.path.normpath(tempfile.gettempdir())
    return os.path.join(_home(env), *_HOME_DEFAULTS[resolved])


def is_directory_location(path: str) -> bool:
    """Return ``True`` if ``path`` carries the trailing-separator directory marker."""

    return bool(path) and path.endswith(os.sep)


def config_location(app_name: str, **kwargs: object) -> str:
    return location(BaseDir.CONFIG, app_name, **kwargs)  # type: ignore[arg-type]


def data_location(app_name: str, **kwargs: object) -> str:
    return location(BaseDir.DATA, app_name, **kwargs)  # type: ignore[arg-type]


def cache_location(app_name: str, **kwargs: object) -> str:
    return location(BaseDir.CACHE, app_name, **kwargs)  # type: ignore[arg-type]


def state_location(app_name: str, **kwargs: object) -> str:
    return location(BaseDir.STATE, app_name, **kwargs)  # type: ignore[arg-type]


def _relative(segment: str) -> str:
    # Absolute segments would make os.path.join discard the base.
    return segment.lstrip(os.sep + (os.altsep or ""))


def _parse_kind(kind: BaseDir | str) -> BaseDir | None:
    if isinstance(kind, BaseDir):
        return kind
    try:
        return BaseDir(kind)
    except ValueError:
        return None


def _home(environ: Mapping[str, str]) -> str:
    home = environ.get("HOME", "").strip()
    if home:
        return home
    return str(Path.home())


__all__ = [
    "BaseDir",
    "ENV_OVERRIDES",
    "base_dir_path",
    "cache_location",
    "config_location",
    "data_location",
    "is_directory_location",
    "location",
    "state_location",
]
