"""Union of runtime types: a value conforms if any member accepts it."""

from __future__ import annotations

from shapecheck.errors import MalformedDefinitionError
from shapecheck.types.base import RuntimeType

UNION_SEPARATOR = " | "


class UnionType(RuntimeType):
    """A type that can be one of an ordered, non-empty list of types."""

    __slots__ = ("_name", "_types")

    def __init__(self, *types: RuntimeType) -> None:
        if not types:
            raise MalformedDefinitionError("UnionType requires at least one member type")
        for index, member in enumerate(types):
            if not isinstance(member, RuntimeType):
                raise MalformedDefinitionError(
                    f"UnionType member {index} must be a runtime type, "
                    f"got {type(member).__name__}"
                )
        self._types: tuple[RuntimeType, ...] = types
        self._name = UNION_SEPARATOR.join(member.name for member in types)

    @property
    def name(self) -> str:
        return self._name

    @property
    def types(self) -> tuple[RuntimeType, ...]:
        return self._types

    def check_conformity(self, value: object) -> bool:
        """Return True if ``value`` conforms to one or more members.

        Says nothing about whether more than one member accepts the value; see
        ``exhaustively_check_conformity`` for that.
        """

        return any(member.check_conformity(value) for member in self._types)

    def exhaustively_check_conformity(self, value: object) -> bool:
        """Return True if ``value`` conforms to exactly one member."""

        matched = False
        for member in self._types:
            if member.check_conformity(value):
                if matched:
                    return False
                matched = True
        return matched


__all__ = ["UNION_SEPARATOR", "UnionType"]
