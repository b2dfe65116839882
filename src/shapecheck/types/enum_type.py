"""
shapecheck — enumerated literal type

File: src/shapecheck/types/enum_type.py
Last updated: 2026-10-18

Purpose
- A runtime type with a fixed, ordered set of acceptable literal values.

Functional requirements
- Membership uses strict equality: identity, or equal primitives of the
  exact same class. Equal but distinct containers never match.
- Exhaustive conformity rejects a value listed more than once.
- Unnamed enums are called ``enum``; no name is derived from the values.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Final

from shapecheck.types.base import RuntimeType

DEFAULT_ENUM_NAME: Final[str] = "enum"

_PRIMITIVE_CLASSES: Final[tuple[type, ...]] = (str, int, float, bool, bytes, type(None))


def strictly_equal(left: object, right: object) -> bool:
    """Return True for identical objects or same-class equal primitives."""

    if left is right:
        return True
    if type(left) is not type(right) or not isinstance(left, _PRIMITIVE_CLASSES):
        return False
    return left == right


class EnumType(RuntimeType):
    """A type whose conforming values are exactly the listed literals."""

    __slots__ = ("_name", "_values")

    def __init__(self, values: Iterable[object], type_name: str | None = None) -> None:
        self._values: tuple[object, ...] = tuple(values)
        self._name = DEFAULT_ENUM_NAME if type_name is None else type_name

    @property
    def name(self) -> str:
        return self._name

    @property
    def values(self) -> tuple[object, ...]:
        return self._values

    def check_conformity(self, value: object) -> bool:
        return any(strictly_equal(candidate, value) for candidate in self._values)

    def exhaustively_check_conformity(self, value: object) -> bool:
        matched = False
        for candidate in self._values:
            if strictly_equal(candidate, value):
                if matched:
                    return False
                matched = True
        return matched


__all__ = ["DEFAULT_ENUM_NAME", "EnumType", "strictly_equal"]
