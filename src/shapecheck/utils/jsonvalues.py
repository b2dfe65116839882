"""JSON-safe normalization for arbitrary checked values."""

from __future__ import annotations

import json
import math
from collections.abc import Mapping
from datetime import datetime, timezone
from pathlib import Path
from typing import Final

from shapecheck.constants import MAX_VALUE_DEPTH
from shapecheck.types.base import MISSING

JSONScalar = str | int | float | bool | None
JSONValue = JSONScalar | list["JSONValue"] | dict[str, "JSONValue"]

CYCLE_PLACEHOLDER: Final[str] = "<cycle>"
TRUNCATED_PLACEHOLDER: Final[str] = "<truncated>"

_NON_FINITE_PLACEHOLDER: Final[dict[float, str]] = {
    math.inf: "Infinity",
    -math.inf: "-Infinity",
}


def normalize_json_value(value: object) -> JSONValue:
    """Return a JSON-compatible rendition of ``value``.

    Unknown objects are rendered with ``repr``; the absent-property marker
    becomes ``None``. A container that contains itself renders as
    ``"<cycle>"`` and containers nested deeper than ``MAX_VALUE_DEPTH``
    render as ``"<truncated>"``.
    """

    return _normalize(value, frozenset())


def _normalize(value: object, active: frozenset[int]) -> JSONValue:
    if value is None or value is MISSING:
        return None
    if isinstance(value, (bool, int, str)):
        return value
    if isinstance(value, float):
        if math.isfinite(value):
            return value
        return _NON_FINITE_PLACEHOLDER.get(value, "NaN")
    if isinstance(value, datetime):
        if value.tzinfo is None or value.utcoffset() is None:
            normalized = value.replace(tzinfo=timezone.utc)
        else:
            normalized = value.astimezone(timezone.utc)
        return normalized.isoformat(timespec="microseconds").replace("+00:00", "Z")
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    if not isinstance(value, (Mapping, list, tuple, set, frozenset)):
        return repr(value)

    if id(value) in active:
        return CYCLE_PLACEHOLDER
    if len(active) >= MAX_VALUE_DEPTH:
        return TRUNCATED_PLACEHOLDER
    nested = active | {id(value)}
    if isinstance(value, Mapping):
        return {str(key): _normalize(item, nested) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_normalize(item, nested) for item in value]
    normalized_items = [_normalize(item, nested) for item in value]
    return sorted(normalized_items, key=canonical_json)


def canonical_json(value: JSONValue) -> str:
    return json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


__all__ = [
    "CYCLE_PLACEHOLDER",
    "TRUNCATED_PLACEHOLDER",
    "JSONScalar",
    "JSONValue",
    "canonical_json",
    "normalize_json_value",
]
