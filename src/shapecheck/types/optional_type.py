"""
shapecheck — optional wrapper type

File: src/shapecheck/types/optional_type.py
Last updated: 2026-10-18

Purpose
- Mark a wrapped type as one whose property may be absent from its object.

Functional requirements
- Optionality is about presence, not value. A present value, ``None``
  included, is checked purely against the wrapped type; only the object
  shape checker consults ``is_optional``.
- Name is the wrapped name followed by ``?``, parenthesized when the wrapped
  name contains a space (``(string | number)?``).
"""

from __future__ import annotations

from shapecheck.errors import MalformedDefinitionError
from shapecheck.types.base import RuntimeType


class OptionalType(RuntimeType):
    """Wraps another type to make its property optional."""

    __slots__ = ("_inner_type", "_name")

    def __init__(self, inner_type: RuntimeType) -> None:
        if not isinstance(inner_type, RuntimeType):
            raise MalformedDefinitionError(
                f"OptionalType expects a runtime type, got {type(inner_type).__name__}"
            )
        self._inner_type = inner_type
        inner_name = inner_type.name
        if " " in inner_name:
            inner_name = f"({inner_name})"
        self._name = f"{inner_name}?"

    @property
    def name(self) -> str:
        return self._name

    @property
    def inner_type(self) -> RuntimeType:
        return self._inner_type

    def is_optional(self) -> bool:
        return True

    def check_conformity(self, value: object) -> bool:
        return self._inner_type.check_conformity(value)

    def exhaustively_check_conformity(self, value: object) -> bool:
        return self._inner_type.exhaustively_check_conformity(value)


__all__ = ["OptionalType"]
