"""Serialization codecs for the closed set of config file formats."""

from __future__ import annotations

import json
import tomllib
from enum import StrEnum
from typing import Any, Final

import tomli_w
import yaml

from appcontext.configmanager.errors import CodecError, UnsupportedFormatError


class SerializationFormat(StrEnum):
    JSON = "json"
    YAML = "yaml"
    TOML = "toml"


_EXTENSIONS: Final[dict[SerializationFormat, tuple[str, ...]]] = {
    SerializationFormat.JSON: (".json",),
    SerializationFormat.YAML: (".yaml", ".yml"),
    SerializationFormat.TOML: (".toml",),
}


def parse_format(fmt: SerializationFormat | str) -> SerializationFormat:
    if isinstance(fmt, SerializationFormat):
        return fmt
    if not isinstance(fmt, str):
        raise UnsupportedFormatError(fmt)
    try:
        return SerializationFormat(fmt.strip().lower())
    except ValueError as exc:
        raise UnsupportedFormatError(fmt) from exc


def default_extension(fmt: SerializationFormat) -> str:
    return _EXTENSIONS[fmt][0]


def matches_extension(path: str, fmt: SerializationFormat) -> bool:
    lowered = path.lower()
    return any(lowered.endswith(ext) for ext in _EXTENSIONS[fmt])


def encode(fmt: SerializationFormat, payload: Any) -> str:
    """Render ``payload`` (plain JSON-compatible data) in ``fmt``."""

    if fmt is SerializationFormat.TOML and not isinstance(payload, dict):
        raise CodecError(f"TOML documents must be tables, got {type(payload).__name__}")

    try:
        if fmt is SerializationFormat.JSON:
            return json.dumps(payload, indent=2, ensure_ascii=False) + "\n"
        if fmt is SerializationFormat.YAML:
            return yaml.safe_dump(payload, sort_keys=False, allow_unicode=True)
        return tomli_w.dumps(_drop_none(payload))
    except (TypeError, ValueError, yaml.YAMLError) as exc:
        raise CodecError(f"cannot encode {fmt.value}: {exc}") from exc


def decode(fmt: SerializationFormat, text: str) -> Any:
    # Blank documents (e.g. freshly generated layout files) decode as an empty table.
    if not text.strip():
        return {}
    try:
        if fmt is SerializationFormat.JSON:
            return json.loads(text)
        if fmt is SerializationFormat.YAML:
            return yaml.safe_load(text)
        return tomllib.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError, tomllib.TOMLDecodeError) as exc:
        raise CodecError(f"invalid {fmt.value}: {exc}") from exc


def _drop_none(value: Any) -> Any:
    # TOML has no null; absent keys decode back to the field default.
    if isinstance(value, dict):
        return {key: _drop_none(item) for key, item in value.items() if item is not None}
    if isinstance(value, list):
        return [_drop_none(item) for item in value]
    return value


__all__ = [
    "SerializationFormat",
    "decode",
    "default_extension",
    "encode",
    "matches_extension",
    "parse_format",
]
