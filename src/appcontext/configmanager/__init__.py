"""
appcontext configmanager package public API.

File: src/appcontext/configmanager/__init__.py
Last updated: 2026-10-17

Purpose
- Export the typed config manager, its format enum and its error types.

Functional requirements
- Support JSON, YAML and TOML config files with atomic saves.
- Fail fast with clear load/save/validation errors.
"""

from appcontext.configmanager.codecs import SerializationFormat
from appcontext.configmanager.errors import (
    CodecError,
    ConfigLoadError,
    ConfigManagerError,
    ConfigPathError,
    ConfigSaveError,
    ConfigValidationError,
    UnsupportedFormatError,
)
from appcontext.configmanager.manager import ConfigManager
from appcontext.constants import CONFIGMANAGER_VERSION as LIB_VERSION
from appcontext.utils.values import Validator

__all__ = [
    "CodecError",
    "ConfigLoadError",
    "ConfigManager",
    "ConfigManagerError",
    "ConfigPathError",
    "ConfigSaveError",
    "ConfigValidationError",
    "LIB_VERSION",
    "SerializationFormat",
    "UnsupportedFormatError",
    "Validator",
]
