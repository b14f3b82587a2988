"""
appcontext - path entry validation and rendering.

File: src/appcontext/pathspec/paths.py
Last updated: 2026-10-17

Purpose
- Check a path entry for conflicting fields and turn it into a filesystem path.

Functional requirements
- Validation stops at the first violated rule and names it.
- Rendering goes through the XDG resolver: the group category becomes the project
  group, the subcategory the first subdirectory; files use their name as the file
  name while directories append it as the last subdirectory.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Final

from appcontext import xdg
from appcontext.pathspec.errors import PathValidationError
from appcontext.pathspec.types import (
    VALID_SUBCATEGORIES,
    BaseDirType,
    PathCategory,
    PathEntry,
    PathType,
)

_RESOLVER_KINDS: Final[Mapping[BaseDirType, xdg.BaseDir]] = {
    BaseDirType.CONFIG: xdg.BaseDir.CONFIG,
    BaseDirType.DATA: xdg.BaseDir.DATA,
    BaseDirType.CACHE: xdg.BaseDir.CACHE,
    # Runtime entries live under XDG_STATE_HOME.
    BaseDirType.RUNTIME: xdg.BaseDir.STATE,
    BaseDirType.TEMP: xdg.BaseDir.TEMP,
}


def is_valid_subcategory(category: PathCategory | int, subcategory: str) -> bool:
    try:
        allowed = VALID_SUBCATEGORIES[PathCategory(category)]
    except ValueError:
        return False
    return subcategory in allowed


def validate(entry: PathEntry) -> None:
    """Raise ``PathValidationError`` for the first rule ``entry`` violates."""

    reason = _first_violation(entry)
    if reason is not None:
        raise PathValidationError(reason, entry_name=entry.name or None)


def is_valid(entry: PathEntry) -> bool:
    return _first_violation(entry) is None


def render(entry: PathEntry, *, environ: Mapping[str, str] | None = None) -> str:
    """
    Return the absolute path for ``entry``.

    Directory paths end with ``os.sep``. Returns ``""`` when the entry has no
    application name.
    """

    sub_dirs: list[str] = []
    if entry.subcategory:
        sub_dirs.append(str(entry.subcategory))

    file_name: str | None = None
    if entry.path_type == PathType.DIRECTORY:
        sub_dirs.append(entry.name)
    else:
        file_name = entry.name

    return xdg.location(
        _RESOLVER_KINDS.get(entry.base_dir, xdg.BaseDir.DATA),
        entry.app_name,
        project_group=entry.group_category or None,
        sub_dirs=sub_dirs,
        file_name=file_name,
        environ=environ,
    )


def filesystem_path(entry: PathEntry, *, environ: Mapping[str, str] | None = None) -> str:
    """Rendered path without the directory marker, suitable for ``os`` calls."""

    rendered = render(entry, environ=environ)
    return rendered.rstrip(os.sep) or rendered


def _first_violation(entry: PathEntry) -> str | None:
    if not entry.app_name:
        return "app_name cannot be empty"
    if not entry.name:
        return "name cannot be empty"
    if entry.path_type == PathType.FILE and entry.max_children > 0:
        return "max_children cannot be set for file type"
    if entry.path_type == PathType.FILE and entry.has_subdirs:
        return "has_subdirs cannot be true for file type"
    if entry.path_type == PathType.DIRECTORY and entry.max_size > 0:
        return "max_size cannot be set for directory type"
    if entry.path_type == PathType.DIRECTORY and entry.format:
        return "format cannot be set for directory type"
    if entry.retention_days > 0 and entry.cleanup_age > entry.retention_days:
        return "cleanup_age cannot be greater than retention_days"
    if entry.is_versioned and entry.category != PathCategory.CONFIG:
        return "versioning is only applicable for config files"
    if entry.subcategory and not is_valid_subcategory(entry.category, entry.subcategory):
        return (
            f"subcategory {entry.subcategory!r} is not valid for category "
            f"{_category_name(entry.category)}"
        )
    if entry.default_perm == 0:
        return "permissions 0000 are invalid and make files inaccessible"
    return None


def _category_name(category: PathCategory | int) -> str:
    try:
        return PathCategory(category).name.lower()
    except ValueError:
        return str(int(category))


__all__ = [
    "filesystem_path",
    "is_valid",
    "is_valid_subcategory",
    "render",
    "validate",
]
