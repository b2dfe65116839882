"""Best-guess runtime type for an arbitrary value, used for diagnostics."""

from __future__ import annotations

from collections.abc import Mapping

from shapecheck.constants import MAX_VALUE_DEPTH
from shapecheck.types.base import MISSING, RuntimeType
from shapecheck.types.object_type import ObjectType
from shapecheck.types.standard import ArrayOf, InstanceOf, StandardTypes
from shapecheck.types.union_type import UnionType


def infer(value: object) -> RuntimeType:
    """Return the most specific runtime type describing ``value``.

    Never raises. Arrays infer their element type (a union of the distinct
    element types, by name and in first-seen order), mappings with string
    keys infer an object type of their properties, and unknown objects fall
    back to ``InstanceOf`` their class. A container that contains itself, or
    one nested deeper than ``MAX_VALUE_DEPTH``, is reported as plain
    ``object``/``array`` at that point.
    """

    return _infer(value, frozenset())


def _infer(value: object, active: frozenset[int]) -> RuntimeType:
    if value is MISSING:
        return StandardTypes.UNDEFINED
    if value is None:
        return StandardTypes.NULL
    if isinstance(value, bool):
        return StandardTypes.BOOLEAN
    if isinstance(value, (int, float)):
        return StandardTypes.NUMBER
    if isinstance(value, str):
        return StandardTypes.STRING
    if isinstance(value, Mapping):
        if _stop_descending(value, active) or not all(isinstance(key, str) for key in value):
            return StandardTypes.OBJECT
        nested = active | {id(value)}
        return ObjectType({key: _infer(item, nested) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        if _stop_descending(value, active):
            return StandardTypes.ARRAY
        return _infer_array(value, active | {id(value)})
    return InstanceOf(type(value))


def _stop_descending(container: object, active: frozenset[int]) -> bool:
    return id(container) in active or len(active) >= MAX_VALUE_DEPTH


def _infer_array(items: list[object] | tuple[object, ...], active: frozenset[int]) -> RuntimeType:
    if not items:
        return StandardTypes.ARRAY
    members: dict[str, RuntimeType] = {}
    for item in items:
        member = _infer(item, active)
        members.setdefault(member.name, member)
    if len(members) == 1:
        (element_type,) = members.values()
        return ArrayOf(element_type)
    return ArrayOf(UnionType(*members.values()))


__all__ = ["infer"]
