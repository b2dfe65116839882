"""
shapecheck — object shapes and the recursive shape checker

File: src/shapecheck/types/object_type.py
Last updated: 2026-10-18

Purpose
- Declare the expected shape of an object as a mapping from property name to
  either a runtime type or a nested shape.
- Walk a value against a shape and report the first nonconforming property.

What should be included in this file
- ``ObjectShape``: immutable, ordered shape definition.
- ``check_object_shape``: depth-first, fail-fast checker returning a
  ``ShapeFailure`` or ``None``.
- ``ObjectType``: runtime type facade so a shape composes with unions and
  optional wrappers.

Functional requirements
- Properties are visited in declaration order; the first failure wins.
- Missing properties are accepted only when their type is optional. Nested
  shapes are always required; wrap ``ObjectType(shape)`` in ``OptionalType``
  to make a whole nested object optional.
- Properties present on the value but not declared are ignored.
- Failure paths read root-to-leaf.

Non-functional requirements
- Shapes are never mutated after construction and may be shared freely.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Union

from shapecheck.errors import MalformedDefinitionError, ShapeFailure
from shapecheck.types.base import MISSING, RuntimeType

ShapeEntry = Union[RuntimeType, "ObjectShape"]

# Path, expected type, and actual value of the first nonconforming property.
_Nonconformity = tuple[tuple[str, ...], RuntimeType, object]


class ObjectShape(Mapping[str, ShapeEntry]):
    """Read-only mapping of property names to runtime types or nested shapes."""

    __slots__ = ("_entries", "_index", "_name")

    def __init__(self, definition: Mapping[str, object]) -> None:
        if not isinstance(definition, Mapping):
            raise MalformedDefinitionError(
                f"object shape must be built from a mapping, got {type(definition).__name__}"
            )
        entries: list[tuple[str, ShapeEntry]] = []
        for key, item in definition.items():
            if not isinstance(key, str):
                raise MalformedDefinitionError(
                    f"object shape keys must be strings, got {type(key).__name__}"
                )
            entries.append((key, _as_entry(key, item)))
        self._entries: tuple[tuple[str, ShapeEntry], ...] = tuple(entries)
        self._index: Mapping[str, ShapeEntry] = MappingProxyType(dict(entries))
        self._name = _render_name(self._entries)

    @property
    def name(self) -> str:
        return self._name

    def entries(self) -> tuple[tuple[str, ShapeEntry], ...]:
        """Return ``(property, entry)`` pairs in declaration order."""

        return self._entries

    def __getitem__(self, key: str) -> ShapeEntry:
        return self._index[key]

    def __iter__(self) -> Iterator[str]:
        return (key for key, _ in self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"ObjectShape({self._name})"


class ObjectType(RuntimeType):
    """Runtime type that accepts mappings conforming to an ``ObjectShape``."""

    __slots__ = ("_shape",)

    def __init__(self, shape: ObjectShape | Mapping[str, object]) -> None:
        self._shape = shape if isinstance(shape, ObjectShape) else ObjectShape(shape)

    @property
    def name(self) -> str:
        return self._shape.name

    @property
    def shape(self) -> ObjectShape:
        return self._shape

    def check(self, value: object, *, exhaustive: bool = False) -> ShapeFailure | None:
        """Return the first failure found in ``value``, or ``None`` when it conforms."""

        return check_object_shape(value, self._shape, exhaustive=exhaustive)

    def check_conformity(self, value: object) -> bool:
        return _find_nonconformity(value, self._shape, exhaustive=False) is None

    def exhaustively_check_conformity(self, value: object) -> bool:
        return _find_nonconformity(value, self._shape, exhaustive=True) is None


def check_object_shape(
    value: object,
    shape: ObjectShape,
    *,
    exhaustive: bool = False,
) -> ShapeFailure | None:
    """Check ``value`` against ``shape`` and return the first failure, if any.

    Parameters
    ----------
    value:
        Any value; only mappings can conform.
    shape:
        The expected shape.
    exhaustive:
        Use ``exhaustively_check_conformity`` for property types, so values
        accepted by more than one member of a union or enum are rejected.
    """

    found = _find_nonconformity(value, shape, exhaustive=exhaustive)
    if found is None:
        return None
    path, expected, actual_value = found
    return ShapeFailure(path=path, expected_type=expected, actual_value=actual_value)


def _find_nonconformity(
    value: object,
    shape: ObjectShape,
    *,
    exhaustive: bool,
) -> _Nonconformity | None:
    if not isinstance(value, Mapping):
        return (), ObjectType(shape), value

    for key, expected in shape.entries():
        if isinstance(expected, ObjectShape):
            nested = _find_nonconformity(value.get(key, MISSING), expected, exhaustive=exhaustive)
            if nested is not None:
                nested_path, nested_expected, nested_value = nested
                return (key, *nested_path), nested_expected, nested_value
            continue

        if key not in value:
            if expected.is_optional():
                continue
            return (key,), expected, MISSING

        item = value[key]
        if exhaustive:
            conforms = expected.exhaustively_check_conformity(item)
        else:
            conforms = expected.check_conformity(item)
        if not conforms:
            return (key,), expected, item

    return None


def _as_entry(key: str, item: object) -> ShapeEntry:
    if isinstance(item, (RuntimeType, ObjectShape)):
        return item
    if isinstance(item, Mapping):
        return ObjectShape(item)
    raise MalformedDefinitionError(
        f"object shape property {key!r} must be a runtime type or a nested shape, "
        f"got {type(item).__name__}"
    )


def _render_name(entries: tuple[tuple[str, ShapeEntry], ...]) -> str:
    if not entries:
        return "{}"
    rendered = ", ".join(f"{key}: {entry.name}" for key, entry in entries)
    return f"{{ {rendered} }}"


__all__ = ["ObjectShape", "ObjectType", "ShapeEntry", "check_object_shape"]
