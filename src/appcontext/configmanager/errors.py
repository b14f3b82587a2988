"""Exception hierarchy for the typed configuration manager."""

from __future__ import annotations


class ConfigManagerError(Exception):
    """Base class for configuration manager failures."""


class UnsupportedFormatError(ConfigManagerError, ValueError):
    """Raised for a serialization format outside the supported set."""

    def __init__(self, fmt: object) -> None:
        super().__init__(f"unsupported serialization format: {fmt!r}")
        self.format = fmt


class CodecError(ConfigManagerError, ValueError):
    """Raised when a payload cannot be encoded or decoded."""


class ConfigPathError(ConfigManagerError):
    """Raised when the config path is unset, inconsistent with the format, or unusable."""


class ConfigLoadError(ConfigManagerError):
    """Raised when no candidate file could be read and decoded."""


class ConfigSaveError(ConfigManagerError):
    """Raised when the held value cannot be serialized or written."""


class ConfigValidationError(ConfigManagerError, ValueError):
    """Raised when the validation hook rejects a value."""


__all__ = [
    "CodecError",
    "ConfigLoadError",
    "ConfigManagerError",
    "ConfigPathError",
    "ConfigSaveError",
    "ConfigValidationError",
    "UnsupportedFormatError",
]
