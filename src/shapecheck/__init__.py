"""
shapecheck — recursive runtime shape checking for loosely-typed data.

File: src/shapecheck/__init__.py
Last updated: 2026-10-18

Purpose
- Package root. Exposes runtime type descriptors, object shapes, and the
  validation entrypoints.

What should be included in this file
- Version export and the public API surface.

Functional requirements
- Must not have side effects at import time (no config loading, no logging
  handlers).
"""

from shapecheck.checker import ShapeCheckResult, as_runtime_type, assert_shape, validate_shape
from shapecheck.errors import MalformedDefinitionError, MalformedObjectError, ShapeFailure
from shapecheck.inference import infer
from shapecheck.types import (
    MISSING,
    ArrayOf,
    EnumType,
    InstanceOf,
    ObjectShape,
    ObjectType,
    OptionalType,
    PredicateType,
    RuntimeType,
    StandardTypes,
    UnionType,
    check_object_shape,
)

__version__ = "0.1.0"

__all__ = [
    "MISSING",
    "ArrayOf",
    "EnumType",
    "InstanceOf",
    "MalformedDefinitionError",
    "MalformedObjectError",
    "ObjectShape",
    "ObjectType",
    "OptionalType",
    "PredicateType",
    "RuntimeType",
    "ShapeCheckResult",
    "ShapeFailure",
    "StandardTypes",
    "UnionType",
    "__version__",
    "as_runtime_type",
    "assert_shape",
    "check_object_shape",
    "infer",
    "validate_shape",
]
