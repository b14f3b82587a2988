"""
appcontext pathspec package public API.

File: src/appcontext/pathspec/__init__.py
Last updated: 2026-10-17

Purpose
- Export the path entry model, templates, option mutators, validation/rendering
  helpers and the ``Layout`` aggregate.
"""

from appcontext.constants import PATHSPEC_VERSION as LIB_VERSION
from appcontext.pathspec.errors import (
    LayoutAssessmentError,
    LayoutGenerationError,
    ManifestError,
    PathSpecError,
    PathValidationError,
)
from appcontext.pathspec.layout import Layout
from appcontext.pathspec.options import (
    PathOption,
    new_custom_path,
    with_app_name,
    with_base_dir,
    with_category,
    with_cleanup_age,
    with_default_perm,
    with_description,
    with_format,
    with_group_category,
    with_has_subdirs,
    with_is_auto_created,
    with_is_backed_up,
    with_is_compressible,
    with_is_mandatory,
    with_is_versioned,
    with_max_children,
    with_max_size,
    with_name,
    with_owner_only,
    with_path_type,
    with_pattern,
    with_priority,
    with_retention_days,
    with_subcategory,
)
from appcontext.pathspec.paths import (
    filesystem_path,
    is_valid,
    is_valid_subcategory,
    render,
    validate,
)
from appcontext.pathspec.templates import (
    BACKUP_STORAGE_TEMPLATE,
    CONFIG_FILE_TEMPLATE,
    EXPORT_TEMPLATE,
    JSON_STORAGE_TEMPLATE,
    LOG_FILE_TEMPLATE,
    PROCESS_STATE_TEMPLATE,
    PROJECTS_TEMPLATE,
    STATS_TEMPLATE,
    TEMPLATES,
    UPLOAD_CACHE_TEMPLATE,
)
from appcontext.pathspec.types import (
    MANIFEST_SECTIONS,
    VALID_SUBCATEGORIES,
    BaseDirType,
    PathCategory,
    PathEntry,
    PathPriority,
    PathSubcategory,
    PathType,
    parse_manifest,
)

__all__ = [
    "BACKUP_STORAGE_TEMPLATE",
    "BaseDirType",
    "CONFIG_FILE_TEMPLATE",
    "EXPORT_TEMPLATE",
    "JSON_STORAGE_TEMPLATE",
    "LIB_VERSION",
    "LOG_FILE_TEMPLATE",
    "Layout",
    "LayoutAssessmentError",
    "LayoutGenerationError",
    "MANIFEST_SECTIONS",
    "ManifestError",
    "PROCESS_STATE_TEMPLATE",
    "PROJECTS_TEMPLATE",
    "PathCategory",
    "PathEntry",
    "PathOption",
    "PathPriority",
    "PathSpecError",
    "PathSubcategory",
    "PathType",
    "PathValidationError",
    "STATS_TEMPLATE",
    "TEMPLATES",
    "UPLOAD_CACHE_TEMPLATE",
    "VALID_SUBCATEGORIES",
    "filesystem_path",
    "is_valid",
    "is_valid_subcategory",
    "new_custom_path",
    "parse_manifest",
    "render",
    "validate",
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
