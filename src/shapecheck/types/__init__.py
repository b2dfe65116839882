"""Runtime type descriptors: leaves, enums, unions, optionals, and object shapes."""

from shapecheck.types.base import MISSING, RuntimeType
from shapecheck.types.enum_type import DEFAULT_ENUM_NAME, EnumType, strictly_equal
from shapecheck.types.object_type import ObjectShape, ObjectType, ShapeEntry, check_object_shape
from shapecheck.types.optional_type import OptionalType
from shapecheck.types.standard import ArrayOf, InstanceOf, PredicateType, StandardTypes
from shapecheck.types.union_type import UNION_SEPARATOR, UnionType

__all__ = [
    "DEFAULT_ENUM_NAME",
    "MISSING",
    "UNION_SEPARATOR",
    "ArrayOf",
    "EnumType",
    "InstanceOf",
    "ObjectShape",
    "ObjectType",
    "OptionalType",
    "PredicateType",
    "RuntimeType",
    "ShapeEntry",
    "StandardTypes",
    "UnionType",
    "check_object_shape",
    "strictly_equal",
]
