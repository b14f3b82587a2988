"""Option mutators for deriving path entries from templates."""

from __future__ import annotations

import dataclasses
from collections.abc import Callable

from appcontext.pathspec.types import (
    BaseDirType,
    PathCategory,
    PathEntry,
    PathPriority,
    PathType,
)

PathOption = Callable[[PathEntry], PathEntry]


def new_custom_path(template: PathEntry, *options: PathOption) -> PathEntry:
    """Copy ``template`` and apply ``options`` in order; the template is never changed."""

    result = template
    for option in options:
        result = option(result)
    return result


def _setting(field_name: str, value: object) -> PathOption:
    def apply(entry: PathEntry) -> PathEntry:
        return dataclasses.replace(entry, **{field_name: value})

    return apply


def with_app_name(app_name: str) -> PathOption:
    return _setting("app_name", app_name)


def with_name(name: str) -> PathOption:
    return _setting("name", name)


def with_base_dir(base_dir: BaseDirType) -> PathOption:
    return _setting("base_dir", BaseDirType(base_dir))


def with_subcategory(subcategory: str) -> PathOption:
    return _setting("subcategory", subcategory)


def with_group_category(group: str) -> PathOption:
    return _setting("group_category", group)


def with_path_type(path_type: PathType) -> PathOption:
    return _setting("path_type", PathType(path_type))


def with_category(category: PathCategory) -> PathOption:
    return _setting("category", PathCategory(category))


def with_priority(priority: PathPriority) -> PathOption:
    return _setting("priority", PathPriority(priority))


def with_description(description: str) -> PathOption:
    return _setting("description", description)


def with_pattern(pattern: str) -> PathOption:
    return _setting("pattern", pattern)


def with_default_perm(perm: int) -> PathOption:
    return _setting("default_perm", perm)


def with_owner_only(owner_only: bool) -> PathOption:
    return _setting("owner_only", owner_only)


def with_is_mandatory(mandatory: bool) -> PathOption:
    return _setting("is_mandatory", mandatory)


def with_is_auto_created(auto_created: bool) -> PathOption:
    return _setting("is_auto_created", auto_created)


def with_is_backed_up(backed_up: bool) -> PathOption:
    return _setting("is_backed_up", backed_up)


def with_is_versioned(versioned: bool) -> PathOption:
    return _setting("is_versioned", versioned)


def with_is_compressible(compressible: bool) -> PathOption:
    return _setting("is_compressible", compressible)


def with_max_size(max_size: int) -> PathOption:
    return _setting("max_size", max_size)


def with_format(fmt: str) -> PathOption:
    return _setting("format", fmt)


def with_max_children(max_children: int) -> PathOption:
    return _setting("max_children", max_children)


def with_has_subdirs(has_subdirs: bool) -> PathOption:
    return _setting("has_subdirs", has_subdirs)


def with_retention_days(days: int) -> PathOption:
    return _setting("retention_days", days)


def with_cleanup_age(days: int) -> PathOption:
    return _setting("cleanup_age", days)


__all__ = [
    "PathOption",
    "new_custom_path",
    "with_app_name",
    "with_base_dir",
    "with_category",
    "with_cleanup_age",
    "with_default_perm",
    "with_description",
    "with_format",
    "with_group_category",
    "with_has_subdirs",
    "with_is_auto_created",
    "with_is_backed_up",
    "with_is_compressible",
    "with_is_mandatory",
    "with_is_versioned",
    "with_max_children",
    "with_max_size",
    "with_name",
    "with_owner_only",
    "with_path_type",
    "with_pattern",
    "with_priority",
    "with_retention_days",
    "with_subcategory",
]
