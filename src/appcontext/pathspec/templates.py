"""Ready-made path entries for common application files and directories."""

from __future__ import annotations

from typing import Final

from appcontext.pathspec.types import (
    BaseDirType,
    PathCategory,
    PathEntry,
    PathPriority,
    PathSubcategory,
    PathType,
)

JSON_STORAGE_TEMPLATE: Final[PathEntry] = PathEntry(
    base_dir=BaseDirType.DATA,
    path_type=PathType.FILE,
    category=PathCategory.DATA,
    priority=PathPriority.HIGH,
    default_perm=0o600,
    owner_only=True,
    is_auto_created=True,
    is_backed_up=True,
    is_compressible=True,
    format="json",
    subcategory=PathSubcategory.STORAGE,
)

LOG_FILE_TEMPLATE: Final[PathEntry] = PathEntry(
    base_dir=BaseDirType.RUNTIME,
    path_type=PathType.FILE,
    category=PathCategory.RUNTIME,
    priority=PathPriority.MEDIUM,
    default_perm=0o644,
    owner_only=True,
    is_auto_created=True,
    format="text",
    max_size=10 * 1024 * 1024,
    retention_days=30,
    subcategory=PathSubcategory.LOGS,
)

CONFIG_FILE_TEMPLATE: Final[PathEntry] = PathEntry(
    base_dir=BaseDirType.CONFIG,
    path_type=PathType.FILE,
    category=PathCategory.CONFIG,
    priority=PathPriority.CRITICAL,
    default_perm=0o644,
    owner_only=True,
    is_mandatory=True,
    is_backed_up=True,
    is_versioned=True,
    format="toml",
    subcategory=PathSubcategory.CONFIG,
)

PROCESS_STATE_TEMPLATE: Final[PathEntry] = PathEntry(
    base_dir=BaseDirType.DATA,
    path_type=PathType.DIRECTORY,
    category=PathCategory.DATA,
    priority=PathPriority.HIGH,
    default_perm=0o755,
    owner_only=True,
    is_auto_created=True,
    is_backed_up=True,
    subcategory=PathSubcategory.PROCESSES,
    has_subdirs=True,
    max_children=1000,
    retention_days=90,
)

# Permanent storage: no retention limit.
PROJECTS_TEMPLATE: Final[PathEntry] = PathEntry(
    base_dir=BaseDirType.DATA,
    path_type=PathType.DIRECTORY,
    category=PathCategory.DATA,
    priority=PathPriority.HIGH,
    default_perm=0o755,
    owner_only=True,
    is_auto_created=True,
    is_backed_up=True,
    subcategory=PathSubcategory.PROJECTS,
    has_subdirs=True,
    max_children=100,
)

STATS_TEMPLATE: Final[PathEntry] = PathEntry(
    base_dir=BaseDirType.RUNTIME,
    path_type=PathType.FILE,
    category=PathCategory.RUNTIME,
    priority=PathPriority.MEDIUM,
    default_perm=0o644,
    owner_only=True,
    is_auto_created=True,
    subcategory=PathSubcategory.STATS,
    format="json",
    max_size=5 * 1024 * 1024,
    retention_days=365,
)

# Backups are never backed up themselves.
BACKUP_STORAGE_TEMPLATE: Final[PathEntry] = PathEntry(
    base_dir=BaseDirType.DATA,
    path_type=PathType.DIRECTORY,
    category=PathCategory.DATA,
    priority=PathPriority.MEDIUM,
    default_perm=0o700,
    owner_only=True,
    is_compressible=True,
    subcategory=PathSubcategory.BACKUPS,
    has_subdirs=True,
    max_children=50,
    retention_days=90,
    cleanup_age=30,
)

UPLOAD_CACHE_TEMPLATE: Final[PathEntry] = PathEntry(
    base_dir=BaseDirType.CACHE,
    path_type=PathType.DIRECTORY,
    category=PathCategory.CACHE,
    priority=PathPriority.LOW,
    default_perm=0o750,
    owner_only=True,
    is_auto_created=True,
    subcategory=PathSubcategory.CACHE_DATA,
    has_subdirs=True,
    max_children=1000,
    retention_days=30,
    cleanup_age=7,
)

EXPORT_TEMPLATE: Final[PathEntry] = PathEntry(
    base_dir=BaseDirType.DATA,
    path_type=PathType.DIRECTORY,
    category=PathCategory.DATA,
    priority=PathPriority.MEDIUM,
    default_perm=0o755,
    is_auto_created=True,
    is_compressible=True,
    subcategory=PathSubcategory.EXPORTS,
    has_subdirs=True,
    max_children=100,
    retention_days=60,
    cleanup_age=14,
)

TEMPLATES: Final[dict[str, PathEntry]] = {
    "json_storage": JSON_STORAGE_TEMPLATE,
    "log_file": LOG_FILE_TEMPLATE,
    "config_file": CONFIG_FILE_TEMPLATE,
    "process_state": PROCESS_STATE_TEMPLATE,
    "projects": PROJECTS_TEMPLATE,
    "stats": STATS_TEMPLATE,
    "backup_storage": BACKUP_STORAGE_TEMPLATE,
    "upload_cache": UPLOAD_CACHE_TEMPLATE,
    "export": EXPORT_TEMPLATE,
}

__all__ = [
    "BACKUP_STORAGE_TEMPLATE",
    "CONFIG_FILE_TEMPLATE",
    "EXPORT_TEMPLATE",
    "JSON_STORAGE_TEMPLATE",
    "LOG_FILE_TEMPLATE",
    "PROCESS_STATE_TEMPLATE",
    "PROJECTS_TEMPLATE",
    "STATS_TEMPLATE",
    "TEMPLATES",
    "UPLOAD_CACHE_TEMPLATE",
]
