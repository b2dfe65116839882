"""
shapecheck — failure records and public error types.

File: src/shapecheck/errors.py
Last updated: 2026-10-18

Purpose
- Describe exactly one nonconformity found while checking an object shape.
- Define the exceptions raised for nonconforming values and malformed
  type definitions.

What should be included in this file
- ``ShapeFailure``: immutable record of path, expected type, actual type,
  and actual value.
- ``MalformedObjectError``: raise-style carrier of a ``ShapeFailure``.
- ``MalformedDefinitionError``: construction-time misuse of the type API.

Functional requirements
- Paths read root-to-leaf; prepending produces a new record and never
  mutates the receiver.
- The actual type is inferred only when the caller does not supply it.

Non-functional requirements
- Snapshots are JSON-safe and deterministic.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from shapecheck.constants import DEFAULT_MAX_VALUE_LENGTH, READABLE_PATH_ROOT

if TYPE_CHECKING:
    from shapecheck.types.base import RuntimeType
    from shapecheck.utils.jsonvalues import JSONValue

_ELLIPSIS: Final[str] = "..."


class MalformedDefinitionError(TypeError):
    """Raised when a runtime type or object shape is constructed incorrectly."""


@dataclass(frozen=True, slots=True)
class ShapeFailure:
    """Structured report of a single nonconforming value."""

    path: tuple[str, ...]
    expected_type: RuntimeType
    actual_value: object
    actual_type: RuntimeType = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        object.__setattr__(self, "path", tuple(self.path))
        if self.actual_type is None:
            from shapecheck.inference import infer

            object.__setattr__(self, "actual_type", infer(self.actual_value))

    @property
    def readable_path(self) -> str:
        return join_path(self.path)

    def prepend_path(self, *segments: str) -> ShapeFailure:
        """Return a new failure whose path is ``segments`` followed by this path.

        This failure is left untouched.
        """

        return dataclasses.replace(self, path=(*segments, *self.path))

    def describe(self, *, max_value_length: int = DEFAULT_MAX_VALUE_LENGTH) -> str:
        rendered = _truncate(repr(self.actual_value), max_value_length)
        return (
            f"{self.readable_path}: expected {self.expected_type.name}, "
            f"got {self.actual_type.name} ({rendered})"
        )

    def to_dict(self) -> dict[str, JSONValue]:
        from shapecheck.utils.jsonvalues import normalize_json_value

        return {
            "path": list(self.path),
            "readable_path": self.readable_path,
            "expected_type": self.expected_type.name,
            "actual_type": self.actual_type.name,
            "actual_value": normalize_json_value(self.actual_value),
        }


class MalformedObjectError(ValueError):
    """Raised when a value does not conform to an expected object shape."""

    def __init__(self, failure: ShapeFailure) -> None:
        self.failure = failure
        super().__init__(f"malformed object: {failure.describe()}")

    @property
    def path(self) -> tuple[str, ...]:
        return self.failure.path

    @property
    def readable_path(self) -> str:
        return self.failure.readable_path

    @property
    def expected_type(self) -> RuntimeType:
        return self.failure.expected_type

    @property
    def actual_type(self) -> RuntimeType:
        return self.failure.actual_type

    @property
    def actual_value(self) -> object:
        return self.failure.actual_value

    def prepend_path(self, *segments: str) -> MalformedObjectError:
        return MalformedObjectError(self.failure.prepend_path(*segments))


def _truncate(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[: max(limit - len(_ELLIPSIS), 0)] + _ELLIPSIS


def join_path(segments: Iterable[str]) -> str:
    return READABLE_PATH_ROOT + "".join(f".{segment}" for segment in segments)


__all__ = [
    "MalformedDefinitionError",
    "MalformedObjectError",
    "ShapeFailure",
    "join_path",
]
