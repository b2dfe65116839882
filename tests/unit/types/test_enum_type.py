"""
shapecheck — unit tests for enumerated literal types

File: tests/unit/types/test_enum_type.py
Last updated: 2026-10-18

Purpose
- Validate strict-equality membership and duplicate handling of ``EnumType``.

What this test file should cover
- Listed values conform; strictly-unequal values do not.
- Duplicate entries make exhaustive conformity fail.
- Default and explicit names.
"""

from __future__ import annotations

from hypothesis import assume, given
from hypothesis import strategies as st

from shapecheck.types import DEFAULT_ENUM_NAME, EnumType, strictly_equal

_LITERALS = st.one_of(st.text(max_size=6), st.integers(), st.booleans(), st.none())


@given(a=_LITERALS, b=_LITERALS, c=_LITERALS)
def test_enum_accepts_listed_values_and_rejects_others(a: object, b: object, c: object) -> None:
    assume(not strictly_equal(a, b))
    assume(not strictly_equal(c, a) and not strictly_equal(c, b))
    enum = EnumType([a, b])

    assert enum.check_conformity(a)
    assert enum.check_conformity(b)
    assert not enum.check_conformity(c)
    assert enum.exhaustively_check_conformity(a)


@given(_LITERALS)
def test_duplicate_entries_are_ambiguous(value: object) -> None:
    enum = EnumType([value, value])

    assert enum.check_conformity(value)
    assert not enum.exhaustively_check_conformity(value)


def test_strict_equality_does_not_coerce_between_classes() -> None:
    enum = EnumType([1, "a", None])

    assert not enum.check_conformity(True)
    assert not enum.check_conformity(1.0)
    assert not enum.check_conformity("1")
    assert enum.check_conformity(None)
    assert not EnumType([0]).check_conformity(False)


def test_containers_match_by_identity_only() -> None:
    member = {"mode": "fast"}
    enum = EnumType([member])

    assert enum.check_conformity(member)
    assert not enum.check_conformity({"mode": "fast"})


def test_unnamed_enum_uses_default_name() -> None:
    assert EnumType(["red", "green"]).name == DEFAULT_ENUM_NAME == "enum"
    assert EnumType(["red", "green"], "color").name == "color"


def test_enum_values_are_snapshotted_in_order() -> None:
    source = ["b", "a"]
    enum = EnumType(source)
    source.append("c")

    assert enum.values == ("b", "a")
    assert not enum.check_conformity("c")


def test_empty_enum_accepts_nothing() -> None:
    enum = EnumType([])

    assert not enum.check_conformity(None)
    assert not enum.exhaustively_check_conformity("")
