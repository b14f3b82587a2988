"""Stable constants shared across appcontext subpackages."""

from __future__ import annotations

from typing import Final

# Library versions, bumped independently per subsystem.
XDG_VERSION: Final[str] = "1.0.0"
CONFIGMANAGER_VERSION: Final[str] = "0.2.1"
JSONSTORE_VERSION: Final[str] = "2.0.0"
PATHSPEC_VERSION: Final[str] = "1.0.0"

# Default file names.
DEFAULT_CONFIG_STEM: Final[str] = "config"
DEFAULT_LOG_FILENAME: Final[str] = "appcontext.jsonl"

# Permission bits used when a parent directory has to be created implicitly.
DEFAULT_DIR_MODE: Final[int] = 0o755
DEFAULT_FILE_MODE: Final[int] = 0o644

__all__ = [
    "CONFIGMANAGER_VERSION",
    "DEFAULT_CONFIG_STEM",
    "DEFAULT_DIR_MODE",
    "DEFAULT_FILE_MODE",
    "DEFAULT_LOG_FILENAME",
    "JSONSTORE_VERSION",
    "PATHSPEC_VERSION",
    "XDG_VERSION",
]
