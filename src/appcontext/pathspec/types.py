"""Path entry model, category enums and the closed subcategory table."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from enum import IntEnum, StrEnum
from typing import Any, Final, NoReturn, TypeVar

from appcontext.pathspec.errors import ManifestError

TEnum = TypeVar("TEnum", bound=IntEnum)


class BaseDirType(IntEnum):
    CONFIG = 0
    DATA = 1
    CACHE = 2
    RUNTIME = 3
    TEMP = 4


class PathType(IntEnum):
    FILE = 0
    DIRECTORY = 1
    SYMLINK = 2


class PathCategory(IntEnum):
    CONFIG = 0
    DATA = 1
    CACHE = 2
    RUNTIME = 3
    TEMP = 4


class PathSubcategory(StrEnum):
    CONFIG = ""
    DATABASE = "database"
    STORAGE = "storage"
    LOGS = "logs"
    TEMPLATES = "templates"
    PLUGINS = "plugins"
    STATE = "state"
    RESOURCES = "resources"
    LOCKS = "locks"
    SOCKETS = "sockets"
    PROCESSING = "processing"
    THUMBNAILS = "thumbnails"
    CACHE_DATA = "cache"
    PROCESSES = "processes"
    PROJECTS = "projects"
    STATS = "stats"
    BACKUPS = "backups"
    UPLOADS = "uploads"
    EXPORTS = "exports"


class PathPriority(IntEnum):
    CRITICAL = 0
    HIGH = 1
    MEDIUM = 2
    LOW = 3


VALID_SUBCATEGORIES: Final[Mapping[PathCategory, frozenset[str]]] = {
    PathCategory.CONFIG: frozenset(
        {PathSubcategory.CONFIG, PathSubcategory.TEMPLATES, PathSubcategory.PLUGINS}
    ),
    PathCategory.DATA: frozenset(
        {
            PathSubcategory.DATABASE,
            PathSubcategory.STORAGE,
            PathSubcategory.STATE,
            PathSubcategory.RESOURCES,
            PathSubcategory.PROCESSES,
            PathSubcategory.PROJECTS,
            PathSubcategory.BACKUPS,
            PathSubcategory.UPLOADS,
            PathSubcategory.EXPORTS,
        }
    ),
    PathCategory.CACHE: frozenset({PathSubcategory.CACHE_DATA, PathSubcategory.THUMBNAILS}),
    PathCategory.RUNTIME: frozenset({PathSubcategory.LOGS, PathSubcategory.STATS}),
    PathCategory.TEMP: frozenset(
        {PathSubcategory.LOCKS, PathSubcategory.SOCKETS, PathSubcategory.PROCESSING}
    ),
}

# Manifest keys that differ from the attribute name.
_FIELD_KEYS: Final[Mapping[str, str]] = {"group_category": "groupcategory"}

# Keys dropped from manifests when they hold their zero value.
_OMIT_EMPTY: Final[frozenset[str]] = frozenset(
    {
        "app_name",
        "groupcategory",
        "subcategory",
        "description",
        "pattern",
        "max_size",
        "format",
        "max_children",
        "retention_days",
        "cleanup_age",
    }
)


@dataclass(frozen=True, slots=True)
class PathEntry:
    """One file or directory owned by the application."""

    app_name: str = ""
    name: str = ""
    base_dir: BaseDirType = BaseDirType.CONFIG
    group_category: str = ""
    subcategory: str = ""
    path_type: PathType = PathType.FILE
    category: PathCategory = PathCategory.CONFIG
    priority: PathPriority = PathPriority.CRITICAL
    description: str = ""
    pattern: str = ""
    default_perm: int = 0
    owner_only: bool = False
    is_mandatory: bool = False
    is_auto_created: bool = False
    is_backed_up: bool = False
    is_versioned: bool = False
    is_compressible: bool = False
    max_size: int = 0
    format: str = ""
    max_children: int = 0
    has_subdirs: bool = False
    retention_days: int = 0
    cleanup_age: int = 0

    @property
    def is_file(self) -> bool:
        return self.path_type == PathType.FILE

    @property
    def is_directory(self) -> bool:
        return self.path_type == PathType.DIRECTORY

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {}
        for item in fields(self):
            key = _FIELD_KEYS.get(item.name, item.name)
            value = getattr(self, item.name)
            if key in _OMIT_EMPTY and not value:
                continue
            if isinstance(value, StrEnum):
                value = value.value
            elif isinstance(value, IntEnum):
                value = int(value)
            payload[key] = value
        return payload

    @classmethod
    def from_dict(cls, data: Mapping[str, object], *, path: str = "PathEntry") -> PathEntry:
        allowed = {_FIELD_KEYS.get(item.name, item.name) for item in fields(cls)}
        parsed = _expect_object(data, path, allowed=allowed)

        def _get(key: str, default: object) -> object:
            return parsed.get(key, default)

        return cls(
            app_name=_as_str(_get("app_name", ""), f"{path}.app_name"),
            name=_as_str(_get("name", ""), f"{path}.name"),
            base_dir=_as_enum(BaseDirType, _get("base_dir", 0), f"{path}.base_dir"),
            group_category=_as_str(_get("groupcategory", ""), f"{path}.groupcategory"),
            subcategory=_as_str(_get("subcategory", ""), f"{path}.subcategory"),
            path_type=_as_enum(PathType, _get("path_type", 0), f"{path}.path_type"),
            category=_as_enum(PathCategory, _get("category", 0), f"{path}.category"),
            priority=_as_enum(PathPriority, _get("priority", 0), f"{path}.priority"),
            description=_as_str(_get("description", ""), f"{path}.description"),
            pattern=_as_str(_get("pattern", ""), f"{path}.pattern"),
            default_perm=_as_int(_get("default_perm", 0), f"{path}.default_perm"),
            owner_only=_as_bool(_get("owner_only", False), f"{path}.owner_only"),
            is_mandatory=_as_bool(_get("is_mandatory", False), f"{path}.is_mandatory"),
            is_auto_created=_as_bool(_get("is_auto_created", False), f"{path}.is_auto_created"),
            is_backed_up=_as_bool(_get("is_backed_up", False), f"{path}.is_backed_up"),
            is_versioned=_as_bool(_get("is_versioned", False), f"{path}.is_versioned"),
            is_compressible=_as_bool(_get("is_compressible", False), f"{path}.is_compressible"),
            max_size=_as_int(_get("max_size", 0), f"{path}.max_size"),
            format=_as_str(_get("format", ""), f"{path}.format"),
            max_children=_as_int(_get("max_children", 0), f"{path}.max_children"),
            has_subdirs=_as_bool(_get("has_subdirs", False), f"{path}.has_subdirs"),
            retention_days=_as_int(_get("retention_days", 0), f"{path}.retention_days"),
            cleanup_age=_as_int(_get("cleanup_age", 0), f"{path}.cleanup_age"),
        )


# Manifest array per base directory, in layout order.
MANIFEST_SECTIONS: Final[tuple[tuple[BaseDirType, str], ...]] = (
    (BaseDirType.CONFIG, "config_paths"),
    (BaseDirType.DATA, "data_paths"),
    (BaseDirType.CACHE, "cache_paths"),
    (BaseDirType.RUNTIME, "runtime_paths"),
    (BaseDirType.TEMP, "temp_paths"),
)


def parse_manifest(data: object) -> tuple[str, str, list[PathEntry]]:
    """Decode a layout manifest into (app name, app version, entries in section order)."""

    allowed = {"app_name", "app_version", *(section for _, section in MANIFEST_SECTIONS)}
    parsed = _expect_object(data, "Layout", allowed=allowed)
    app_name = _as_str(parsed.get("app_name", ""), "Layout.app_name")
    app_version = _as_str(parsed.get("app_version", ""), "Layout.app_version")

    entries: list[PathEntry] = []
    for _, section in MANIFEST_SECTIONS:
        raw = parsed.get(section)
        if raw is None:
            continue
        if not isinstance(raw, list):
            _fail(f"Layout.{section}", f"expected array, got {type(raw).__name__}")
        for index, item in enumerate(raw):
            entries.append(PathEntry.from_dict(item, path=f"Layout.{section}[{index}]"))
    return app_name, app_version, entries


def _fail(path: str, message: str) -> NoReturn:
    raise ManifestError(f"{path}: {message}")


def _expect_object(value: object, path: str, *, allowed: set[str]) -> dict[str, object]:
    if not isinstance(value, Mapping):
        _fail(path, f"expected object, got {type(value).__name__}")

    parsed: dict[str, object] = {}
    for key, item in value.items():
        if not isinstance(key, str):
            _fail(path, f"object keys must be strings, got {type(key).__name__}")
        parsed[key] = item

    unknown = sorted(key for key in parsed if key not in allowed)
    if unknown:
        _fail(path, f"unexpected fields: {unknown}")
    return parsed


def _as_str(value: object, path: str) -> str:
    if not isinstance(value, str):
        _fail(path, f"expected string, got {type(value).__name__}")
    return value


def _as_bool(value: object, path: str) -> bool:
    if isinstance(value, bool):
        return value
    _fail(path, f"expected boolean, got {type(value).__name__}")


def _as_int(value: object, path: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        _fail(path, f"expected integer, got {type(value).__name__}")
    if value < 0:
        _fail(path, "must be >= 0")
    return value


def _as_enum(enum_type: type[TEnum], value: object, path: str) -> TEnum:
    if isinstance(value, enum_type):
        return value
    number = _as_int(value, path)
    try:
        return enum_type(number)
    except ValueError:
        allowed = ", ".join(f"{int(item)} ({item.name.lower()})" for item in enum_type)
        _fail(path, f"invalid value {number!r}; expected one of: {allowed}")


__all__ = [
    "BaseDirType",
    "MANIFEST_SECTIONS",
    "PathCategory",
    "PathEntry",
    "PathPriority",
    "PathSubcategory",
    "PathType",
    "VALID_SUBCATEGORIES",
    "parse_manifest",
]
