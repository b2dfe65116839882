"""
shapecheck — unit tests for leaf types

File: tests/unit/types/test_standard_types.py
Last updated: 2026-10-18

Purpose
- Validate the shared leaf types, ``ArrayOf``, ``InstanceOf``, and
  ``PredicateType``.
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from pathlib import Path, PurePosixPath

import pytest

from shapecheck.errors import MalformedDefinitionError
from shapecheck.types import (
    MISSING,
    ArrayOf,
    EnumType,
    InstanceOf,
    PredicateType,
    StandardTypes,
    UnionType,
)


@pytest.mark.parametrize(
    ("leaf", "accepted", "rejected"),
    [
        (StandardTypes.STRING, ["", "x"], [b"x", 1, None]),
        (StandardTypes.NUMBER, [0, 1.5, -3], [True, "1", None]),
        (StandardTypes.INTEGER, [0, -7], [1.0, False, "2"]),
        (StandardTypes.BOOLEAN, [True, False], [0, 1, "true"]),
        (StandardTypes.NULL, [None], [MISSING, 0, ""]),
        (StandardTypes.UNDEFINED, [MISSING], [None, ""]),
        (StandardTypes.ANY, [None, MISSING, object()], []),
        (StandardTypes.ARRAY, [[], (1,)], ["ab", {"a": 1}, {1}]),
        (StandardTypes.OBJECT, [{}, OrderedDict(a=1)], [[], "x", None]),
    ],
)
def test_leaf_types_accept_and_reject(
    leaf: PredicateType,
    accepted: list[object],
    rejected: list[object],
) -> None:
    for value in accepted:
        assert leaf.check_conformity(value), (leaf.name, value)
        assert leaf.exhaustively_check_conformity(value), (leaf.name, value)
    for value in rejected:
        assert not leaf.check_conformity(value), (leaf.name, value)


def test_leaf_names() -> None:
    names = [
        StandardTypes.STRING.name,
        StandardTypes.NUMBER.name,
        StandardTypes.INTEGER.name,
        StandardTypes.BOOLEAN.name,
        StandardTypes.NULL.name,
        StandardTypes.UNDEFINED.name,
        StandardTypes.ANY.name,
        StandardTypes.ARRAY.name,
        StandardTypes.OBJECT.name,
    ]

    assert names == [
        "string",
        "number",
        "integer",
        "boolean",
        "null",
        "undefined",
        "any",
        "array",
        "object",
    ]
    assert repr(StandardTypes.STRING) == "<PredicateType string>"


def test_array_of_checks_every_element() -> None:
    strings = ArrayOf(StandardTypes.STRING)

    assert strings.name == "string[]"
    assert strings.element_type is StandardTypes.STRING
    assert strings.check_conformity([])
    assert strings.check_conformity(("a", "b"))
    assert not strings.check_conformity(["a", 1])
    assert not strings.check_conformity("ab")


def test_array_of_parenthesizes_spaced_element_names() -> None:
    union = UnionType(StandardTypes.STRING, StandardTypes.NULL)

    assert ArrayOf(union).name == "(string | null)[]"
    assert ArrayOf(ArrayOf(StandardTypes.NUMBER)).name == "number[][]"


def test_array_of_exhaustive_mode_checks_elements_exhaustively() -> None:
    ambiguous = ArrayOf(EnumType(["a", "a", "b"]))

    assert ambiguous.check_conformity(["a", "b"])
    assert ambiguous.exhaustively_check_conformity(["b"])
    assert not ambiguous.exhaustively_check_conformity(["b", "a"])


def test_instance_of_uses_isinstance() -> None:
    paths = InstanceOf(PurePosixPath)

    assert paths.name == "PurePosixPath"
    assert paths.instance_class is PurePosixPath
    assert paths.check_conformity(PurePosixPath("a"))
    assert not paths.check_conformity("a")
    assert InstanceOf(object).check_conformity(Path("."))


def test_predicate_type_requires_a_name() -> None:
    with pytest.raises(MalformedDefinitionError):
        PredicateType("  ", lambda value: True)


def test_parametric_leaves_reject_bad_arguments() -> None:
    with pytest.raises(MalformedDefinitionError):
        ArrayOf(str)  # type: ignore[arg-type]
    with pytest.raises(MalformedDefinitionError):
        InstanceOf("str")  # type: ignore[arg-type]


def test_predicate_that_raises_rejects_the_value(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="shapecheck")

    def _starts_with_a(value: object) -> bool:
        return value.startswith("a")  # type: ignore[attr-defined]

    prefixed = PredicateType("a-prefixed", _starts_with_a)

    assert prefixed.check_conformity("abc")
    assert not prefixed.check_conformity(5)
    assert not ArrayOf(prefixed).check_conformity(["abc", None])
    assert any("a-prefixed" in record.getMessage() for record in caplog.records)
