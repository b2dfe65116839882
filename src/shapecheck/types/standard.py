"""Leaf runtime types for scalar kinds, arrays, and plain class checks."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Final

from shapecheck.errors import MalformedDefinitionError
from shapecheck.types.base import MISSING, RuntimeType

logger = logging.getLogger(__name__)


class PredicateType(RuntimeType):
    """Leaf type whose conformity is decided by a single predicate."""

    __slots__ = ("_name", "_predicate")

    def __init__(self, name: str, predicate: Callable[[object], bool]) -> None:
        if not isinstance(name, str) or not name.strip():
            raise MalformedDefinitionError("leaf type name must be a non-empty string")
        self._name = name
        self._predicate = predicate

    @property
    def name(self) -> str:
        return self._name

    def check_conformity(self, value: object) -> bool:
        """Return the predicate result; a predicate that raises rejects the value."""

        try:
            return bool(self._predicate(value))
        except Exception:  # noqa: BLE001
            logger.debug("predicate for %s raised; value rejected", self._name, exc_info=True)
            return False


class InstanceOf(RuntimeType):
    """Accepts instances of one Python class (including subclasses)."""

    __slots__ = ("_cls",)

    def __init__(self, cls: type) -> None:
        if not isinstance(cls, type):
            raise MalformedDefinitionError(f"InstanceOf expects a class, got {type(cls).__name__}")
        self._cls = cls

    @property
    def name(self) -> str:
        return self._cls.__name__

    @property
    def instance_class(self) -> type:
        return self._cls

    def check_conformity(self, value: object) -> bool:
        return isinstance(value, self._cls)


class ArrayOf(RuntimeType):
    """Accepts a list or tuple whose every element conforms to ``element_type``."""

    __slots__ = ("_element_type", "_name")

    def __init__(self, element_type: RuntimeType) -> None:
        if not isinstance(element_type, RuntimeType):
            raise MalformedDefinitionError(
                f"ArrayOf expects a runtime type, got {type(element_type).__name__}"
            )
        self._element_type = element_type
        element_name = element_type.name
        if " " in element_name:
            element_name = f"({element_name})"
        self._name = f"{element_name}[]"

    @property
    def name(self) -> str:
        return self._name

    @property
    def element_type(self) -> RuntimeType:
        return self._element_type

    def check_conformity(self, value: object) -> bool:
        if not isinstance(value, (list, tuple)):
            return False
        return all(self._element_type.check_conformity(item) for item in value)

    def exhaustively_check_conformity(self, value: object) -> bool:
        if not isinstance(value, (list, tuple)):
            return False
        return all(self._element_type.exhaustively_check_conformity(item) for item in value)


def _is_array(value: object) -> bool:
    return isinstance(value, (list, tuple))


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_integer(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class StandardTypes:
    """Shared leaf type instances."""

    STRING: Final[RuntimeType] = PredicateType("string", lambda value: isinstance(value, str))
    NUMBER: Final[RuntimeType] = PredicateType("number", _is_number)
    INTEGER: Final[RuntimeType] = PredicateType("integer", _is_integer)
    BOOLEAN: Final[RuntimeType] = PredicateType("boolean", lambda value: isinstance(value, bool))
    NULL: Final[RuntimeType] = PredicateType("null", lambda value: value is None)
    UNDEFINED: Final[RuntimeType] = PredicateType("undefined", lambda value: value is MISSING)
    ANY: Final[RuntimeType] = PredicateType("any", lambda value: True)
    ARRAY: Final[RuntimeType] = PredicateType("array", _is_array)
    OBJECT: Final[RuntimeType] = PredicateType(
        "object", lambda value: isinstance(value, Mapping)
    )


__all__ = ["ArrayOf", "InstanceOf", "PredicateType", "StandardTypes"]
