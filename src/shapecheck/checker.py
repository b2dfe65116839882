"""
shapecheck — caller-facing shape validation entrypoints.

File: src/shapecheck/checker.py
Last updated: 2026-10-18

Purpose
- Validate one value against an object shape (or any runtime type) and hand
  the first failure back either as a result or as a raised error.

What should be included in this file
- ``validate_shape``: result-style entrypoint returning ``ShapeCheckResult``.
- ``assert_shape``: raise-style entrypoint raising ``MalformedObjectError``.
- Debug logging of each reported failure.

Functional requirements
- Fail fast: report only the first nonconforming property in declaration
  order.
- Never mutate the checked value or the shape.

Non-functional requirements
- No handlers are configured here; records flow to the ``shapecheck`` logger
  hierarchy and the application decides where they go.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TypeAlias, TypeVar

from shapecheck.errors import MalformedObjectError, ShapeFailure
from shapecheck.types.base import RuntimeType
from shapecheck.types.object_type import ObjectShape, ObjectType

logger = logging.getLogger(__name__)

ShapeLike: TypeAlias = ObjectShape | ObjectType | RuntimeType | Mapping[str, object]
TValue = TypeVar("TValue")


@dataclass(frozen=True, slots=True)
class ShapeCheckResult:
    """Outcome of one validation call."""

    value: object
    failure: ShapeFailure | None

    @property
    def is_valid(self) -> bool:
        return self.failure is None


def as_runtime_type(shape: ShapeLike) -> RuntimeType:
    """Return the runtime type described by ``shape``.

    Mappings and ``ObjectShape`` instances become ``ObjectType``; runtime
    types are returned unchanged.
    """

    if isinstance(shape, RuntimeType):
        return shape
    if isinstance(shape, ObjectShape):
        return ObjectType(shape)
    return ObjectType(ObjectShape(shape))


def validate_shape(
    value: object,
    shape: ShapeLike,
    *,
    exhaustive: bool = False,
) -> ShapeCheckResult:
    """Validate ``value`` and return the first failure without raising."""

    expected = as_runtime_type(shape)
    if isinstance(expected, ObjectType):
        failure = expected.check(value, exhaustive=exhaustive)
    else:
        failure = _check_single_type(value, expected, exhaustive=exhaustive)

    if failure is not None:
        logger.debug(
            "value does not conform to %s",
            expected.name,
            extra={
                "path": failure.readable_path,
                "expected_type": failure.expected_type.name,
                "actual_type": failure.actual_type.name,
                "actual_value": failure.actual_value,
            },
        )
    return ShapeCheckResult(value=value, failure=failure)


def assert_shape(
    value: TValue,
    shape: ShapeLike,
    *,
    exhaustive: bool = False,
) -> TValue:
    """Validate ``value`` and raise ``MalformedObjectError`` on failure.

    Returns ``value`` unchanged when it conforms.
    """

    result = validate_shape(value, shape, exhaustive=exhaustive)
    if result.failure is not None:
        raise MalformedObjectError(result.failure)
    return value


def _check_single_type(
    value: object,
    expected: RuntimeType,
    *,
    exhaustive: bool,
) -> ShapeFailure | None:
    if exhaustive:
        conforms = expected.exhaustively_check_conformity(value)
    else:
        conforms = expected.check_conformity(value)
    if conforms:
        return None
    return ShapeFailure(path=(), expected_type=expected, actual_value=value)


__all__ = [
    "ShapeCheckResult",
    "ShapeLike",
    "as_runtime_type",
    "assert_shape",
    "validate_shape",
]
