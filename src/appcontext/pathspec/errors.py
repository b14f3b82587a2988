"""Exception hierarchy for path layout validation, generation and assessment."""

from __future__ import annotations

from collections.abc import Sequence


class PathSpecError(Exception):
    """Base class for pathspec failures."""


class PathValidationError(PathSpecError, ValueError):
    """Raised when a path entry violates a field-consistency rule."""

    def __init__(self, reason: str, *, entry_name: str | None = None) -> None:
        self.reason = reason
        self.entry_name = entry_name
        if entry_name is None:
            super().__init__(reason)
        else:
            super().__init__(f"validation failed for path {entry_name!r}: {reason}")


class ManifestError(PathSpecError, ValueError):
    """Raised when a layout manifest cannot be read or decoded."""


class LayoutGenerationError(PathSpecError):
    """Raised after generation when one or more entries could not be materialized."""

    def __init__(self, failures: Sequence[str]) -> None:
        self.failures = tuple(failures)
        super().__init__("generation errors:\n" + "\n".join(self.failures))


class LayoutAssessmentError(PathSpecError):
    """Companion status of a non-empty assessment; returned, not raised."""

    def __init__(self, messages: Sequence[str]) -> None:
        self.messages = tuple(messages)
        super().__init__(f"assessment errors: {len(self.messages)}")

    @property
    def count(self) -> int:
        return len(self.messages)


__all__ = [
    "LayoutAssessmentError",
    "LayoutGenerationError",
    "ManifestError",
    "PathSpecError",
    "PathValidationError",
]
