"""
shapecheck — unit tests for object shapes and the shape checker

File: tests/unit/types/test_object_type.py
Last updated: 2026-10-18

Purpose
- Validate declaration-order, fail-fast checking of object shapes with
  root-to-leaf failure paths.

What this test file should cover
- Required vs optional properties, nested shapes, and open shapes.
- The first failure wins in declaration order.
- ``ObjectType`` facade composition with unions and optional wrappers.
- Shape construction validation and name rendering.

Functional requirements
- Checking never mutates the value or the shape.
"""

from __future__ import annotations

import copy

import pytest
from hypothesis import given
from hypothesis import strategies as st

from shapecheck.errors import MalformedDefinitionError
from shapecheck.types import (
    MISSING,
    ArrayOf,
    EnumType,
    ObjectShape,
    ObjectType,
    OptionalType,
    StandardTypes,
    UnionType,
    check_object_shape,
)

PERSON = ObjectShape(
    {
        "name": StandardTypes.STRING,
        "age": OptionalType(StandardTypes.NUMBER),
    }
)


def test_missing_optional_property_passes() -> None:
    assert check_object_shape({"name": "x"}, PERSON) is None


def test_wrong_property_type_fails_at_that_property() -> None:
    failure = check_object_shape({"name": 5}, PERSON)

    assert failure is not None
    assert failure.path == ("name",)
    assert failure.expected_type is StandardTypes.STRING
    assert failure.actual_value == 5
    assert failure.actual_type.name == "number"


def test_first_declared_property_fails_first() -> None:
    failure = check_object_shape({"age": "bad"}, PERSON)

    assert failure is not None
    assert failure.path == ("name",)
    assert failure.actual_value is MISSING
    assert failure.actual_type is StandardTypes.UNDEFINED


def test_present_optional_property_is_still_checked() -> None:
    failure = check_object_shape({"name": "x", "age": "old"}, PERSON)

    assert failure is not None
    assert failure.path == ("age",)
    assert failure.expected_type.name == "number?"


def test_optional_property_does_not_accept_explicit_none() -> None:
    failure = check_object_shape({"name": "x", "age": None}, PERSON)

    assert failure is not None
    assert failure.path == ("age",)
    assert failure.actual_type is StandardTypes.NULL


def test_nested_shape_failure_path_reads_root_to_leaf() -> None:
    shape = ObjectShape({"a": {"b": StandardTypes.STRING}})

    failure = check_object_shape({"a": {"b": 5}}, shape)

    assert failure is not None
    assert failure.path == ("a", "b")
    assert failure.readable_path == "*.a.b"


def test_deeply_nested_failure_path() -> None:
    shape = ObjectShape({"a": {"b": {"c": {"d": StandardTypes.BOOLEAN}}}})

    failure = check_object_shape({"a": {"b": {"c": {"d": "yes"}}}}, shape)

    assert failure is not None
    assert failure.path == ("a", "b", "c", "d")


def test_missing_nested_object_fails_at_nested_key() -> None:
    shape = ObjectShape({"a": {"b": StandardTypes.STRING}})

    failure = check_object_shape({}, shape)

    assert failure is not None
    assert failure.path == ("a",)
    assert failure.actual_value is MISSING
    assert failure.expected_type.name == "{ b: string }"


def test_non_mapping_nested_value_fails_at_nested_key() -> None:
    shape = ObjectShape({"a": {"b": StandardTypes.STRING}})

    failure = check_object_shape({"a": [1]}, shape)

    assert failure is not None
    assert failure.path == ("a",)
    assert failure.actual_type.name == "number[]"


def test_optional_object_type_allows_missing_nested_object() -> None:
    shape = ObjectShape({"meta": OptionalType(ObjectType({"id": StandardTypes.INTEGER}))})

    assert check_object_shape({}, shape) is None
    assert check_object_shape({"meta": {"id": 3}}, shape) is None
    failure = check_object_shape({"meta": {"id": "3"}}, shape)
    assert failure is not None
    assert failure.path == ("meta",)


def test_non_mapping_root_fails_with_empty_path() -> None:
    failure = check_object_shape(["name"], PERSON)

    assert failure is not None
    assert failure.path == ()
    assert failure.readable_path == "*"
    assert failure.expected_type.name == "{ name: string, age: number? }"


def test_extra_properties_are_ignored() -> None:
    assert check_object_shape({"name": "x", "nickname": 1}, PERSON) is None


def test_exhaustive_mode_rejects_ambiguous_property_values() -> None:
    shape = ObjectShape({"id": UnionType(StandardTypes.NUMBER, StandardTypes.INTEGER)})

    assert check_object_shape({"id": 1}, shape) is None
    failure = check_object_shape({"id": 1}, shape, exhaustive=True)
    assert failure is not None
    assert failure.path == ("id",)
    assert check_object_shape({"id": 1.5}, shape, exhaustive=True) is None


def test_exhaustive_mode_reaches_nested_shapes() -> None:
    shape = ObjectShape({"outer": {"mode": EnumType(["a", "a"])}})

    assert check_object_shape({"outer": {"mode": "a"}}, shape) is None
    failure = check_object_shape({"outer": {"mode": "a"}}, shape, exhaustive=True)
    assert failure is not None
    assert failure.path == ("outer", "mode")


def test_checking_does_not_mutate_value() -> None:
    value = {"a": {"b": 5}, "extra": [1, 2]}
    snapshot = copy.deepcopy(value)

    check_object_shape(value, ObjectShape({"a": {"b": StandardTypes.STRING}}))

    assert value == snapshot


@given(
    st.dictionaries(
        st.sampled_from(["name", "age", "other"]),
        st.one_of(st.none(), st.integers(), st.text(max_size=4)),
    )
)
def test_object_type_conformity_matches_checker(value: dict[str, object]) -> None:
    object_type = ObjectType(PERSON)

    assert object_type.check_conformity(value) == (check_object_shape(value, PERSON) is None)
    assert object_type.check(value) == check_object_shape(value, PERSON)


def test_object_type_composes_with_unions_and_arrays() -> None:
    point = ObjectType({"x": StandardTypes.NUMBER, "y": StandardTypes.NUMBER})
    shape = ObjectShape(
        {
            "location": UnionType(point, StandardTypes.STRING),
            "path": ArrayOf(point),
        }
    )

    assert check_object_shape({"location": "home", "path": []}, shape) is None
    located = {"location": {"x": 1, "y": 2}, "path": [{"x": 0, "y": 0}]}
    assert check_object_shape(located, shape) is None
    failure = check_object_shape({"location": {"x": 1}, "path": []}, shape)
    assert failure is not None
    assert failure.path == ("location",)
    assert failure.expected_type.name == "{ x: number, y: number } | string"


def test_shape_name_and_mapping_protocol() -> None:
    shape = ObjectShape({"b": StandardTypes.STRING, "a": {"c": StandardTypes.NULL}})

    assert shape.name == "{ b: string, a: { c: null } }"
    assert list(shape) == ["b", "a"]
    assert len(shape) == 2
    assert isinstance(shape["a"], ObjectShape)
    assert shape.entries()[0] == ("b", StandardTypes.STRING)
    assert ObjectShape({}).name == "{}"
    assert ObjectType({}).check_conformity({"anything": 1})


def test_shape_is_not_affected_by_later_source_mutation() -> None:
    source: dict[str, object] = {"a": StandardTypes.STRING}
    shape = ObjectShape(source)
    source["b"] = StandardTypes.STRING

    assert list(shape) == ["a"]


@pytest.mark.parametrize(
    "definition",
    [
        {1: StandardTypes.STRING},
        {"a": "string"},
        {"a": {"b": str}},
        ["a"],
    ],
)
def test_malformed_shapes_are_rejected(definition: object) -> None:
    with pytest.raises(MalformedDefinitionError):
        ObjectShape(definition)  # type: ignore[arg-type]


def test_object_type_conformity_does_not_build_failure_reports(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    def _fail(value: object) -> object:
        raise AssertionError("conformity checks must not infer actual types")

    monkeypatch.setattr("shapecheck.inference.infer", _fail)
    object_type = ObjectType(PERSON)

    assert not object_type.check_conformity({"name": 5})
    assert not object_type.exhaustively_check_conformity([])
    assert object_type.check_conformity({"name": "x"})
