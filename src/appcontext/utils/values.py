"""Type-tag adapters and self-validation probing for the typed stores."""

from __future__ import annotations

import copy
from collections.abc import Callable
from typing import Any, Generic, Protocol, TypeVar, runtime_checkable

from pydantic import BaseModel, TypeAdapter, ValidationError

T = TypeVar("T")

ValidatorFunc = Callable[[Any], None]


@runtime_checkable
class Validator(Protocol):
    """A value that can check its own consistency, raising on failure."""

    def validate(self) -> None: ...


class ValueTypeError(TypeError):
    """Raised when a value does not conform to the store's declared type."""


class TypedValue(Generic[T]):
    """Bind one concrete value type to its pydantic adapter."""

    __slots__ = ("_adapter", "value_type")

    def __init__(self, value_type: type[T] | Any) -> None:
        self.value_type = value_type
        self._adapter: TypeAdapter[T] = TypeAdapter(value_type)

    @property
    def type_name(self) -> str:
        return getattr(self.value_type, "__name__", repr(self.value_type))

    def check(self, value: object) -> T:
        """Return ``value`` if it is an instance of the declared type."""

        try:
            checked = self._adapter.validate_python(value, strict=True)
        except ValidationError as exc:
            raise ValueTypeError(
                f"value of type {type(value).__name__} does not match {self.type_name}: {exc}"
            ) from exc
        return copy.deepcopy(checked)

    def decode(self, payload: object) -> T:
        """Build a value from a decoded JSON/YAML/TOML payload."""

        try:
            return self._adapter.validate_python(payload)
        except ValidationError as exc:
            raise ValueTypeError(f"payload does not match {self.type_name}: {exc}") from exc

    def encode(self, value: T) -> Any:
        """Return a JSON-compatible representation of ``value``."""

        return self._adapter.dump_python(value, mode="json")


def resolve_validator(value: object, explicit: ValidatorFunc | None) -> Callable[[], None] | None:
    """
    Pick the validation hook for ``value``.

    An explicit callable wins. Otherwise values implementing ``Validator`` are
    validated through their own method; pydantic models are excluded because
    ``BaseModel.validate`` is an unrelated classmethod.
    """

    if explicit is not None:
        return lambda: explicit(value)
    if isinstance(value, BaseModel):
        return None
    if isinstance(value, type):
        return None
    if isinstance(value, Validator):
        return value.validate
    return None


__all__ = [
    "TypedValue",
    "Validator",
    "ValidatorFunc",
    "ValueTypeError",
    "resolve_validator",
]
