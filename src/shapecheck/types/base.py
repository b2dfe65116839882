"""
shapecheck — runtime type contract

File: src/shapecheck/types/base.py
Last updated: 2026-10-18

Purpose
- Define the capability every runtime type descriptor implements.

What should be included in this file
- Name, conformity, exhaustive conformity, and optionality surface.
- The ``MISSING`` marker used for absent object properties.

Functional requirements
- Conformity checks must never raise for foreign input; they return False.
- Optionality is a container-level flag and is never consulted by a
  descriptor's own conformity checks.

Non-functional requirements
- Descriptors are immutable after construction and safe to share.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Final, final


@final
class _MissingType:
    """Marker for a property that is not present on the checked object."""

    __slots__ = ()
    _instance: _MissingType | None = None

    def __new__(cls) -> _MissingType:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "<missing>"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return "MISSING"


MISSING: Final[_MissingType] = _MissingType()


class RuntimeType(ABC):
    """A composable runtime description of acceptable values."""

    __slots__ = ()

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable, deterministic name of this type."""

    @abstractmethod
    def check_conformity(self, value: object) -> bool:
        """Return True if ``value`` matches at least one acceptable interpretation."""

    def exhaustively_check_conformity(self, value: object) -> bool:
        """Return True if ``value`` matches exactly one interpretation.

        Types without a notion of ambiguity fall back to ``check_conformity``.
        """

        return self.check_conformity(value)

    def is_optional(self) -> bool:
        """Return whether the owning object may omit a property of this type."""

        return False

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


__all__ = ["MISSING", "RuntimeType"]
