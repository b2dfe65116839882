"""
shapecheck — settings schema and validation.

File: src/shapecheck/config/schema.py
Last updated: 2026-10-18

Purpose
- Define settings defaults and validate settings payloads with shapecheck's
  own object shapes.

What should be included in this file
- ``SETTINGS_SHAPE`` and ``DEFAULT_SETTINGS``.
- Deterministic deep-merge helpers used by the loader.
- The frozen ``Settings`` value handed to the CLI and logging setup.

Functional requirements
- Report the first invalid field with its dotted path.
- Reject fields the schema does not declare.

Non-functional requirements
- Keep validation deterministic and easy to audit.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Final

from shapecheck.checker import validate_shape
from shapecheck.constants import DEFAULT_MAX_VALUE_LENGTH, LOG_FORMATS, LOG_LEVELS
from shapecheck.errors import ShapeFailure, join_path
from shapecheck.types import EnumType, ObjectShape, PredicateType, StandardTypes


def _is_positive_integer(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 1


POSITIVE_INTEGER: Final = PredicateType("positive integer", _is_positive_integer)

SETTINGS_SHAPE: Final[ObjectShape] = ObjectShape(
    {
        "logging": {
            "level": EnumType(LOG_LEVELS, "log level"),
            "format": EnumType(LOG_FORMATS, "log format"),
            "redact_values": StandardTypes.BOOLEAN,
        },
        "check": {
            "exhaustive": StandardTypes.BOOLEAN,
        },
        "report": {
            "max_value_length": POSITIVE_INTEGER,
        },
    }
)

DEFAULT_SETTINGS: Final[dict[str, dict[str, object]]] = {
    "logging": {
        "level": "WARNING",
        "format": "text",
        "redact_values": True,
    },
    "check": {
        "exhaustive": False,
    },
    "report": {
        "max_value_length": DEFAULT_MAX_VALUE_LENGTH,
    },
}


class SettingsError(ValueError):
    """Raised when settings cannot be loaded or fail validation."""

    def __init__(self, message: str, *, failure: ShapeFailure | None = None) -> None:
        self.failure = failure
        super().__init__(message)


@dataclass(frozen=True, slots=True)
class Settings:
    """Validated, effective settings."""

    log_level: str = "WARNING"
    log_format: str = "text"
    redact_values: bool = True
    exhaustive: bool = False
    max_value_length: int = DEFAULT_MAX_VALUE_LENGTH
    source: str | None = None

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any], *, source: str | None = None) -> Settings:
        validated = assert_valid_settings(payload)
        return cls(
            log_level=validated["logging"]["level"],
            log_format=validated["logging"]["format"],
            redact_values=validated["logging"]["redact_values"],
            exhaustive=validated["check"]["exhaustive"],
            max_value_length=validated["report"]["max_value_length"],
            source=source,
        )


def default_settings() -> dict[str, Any]:
    """Return a deep copy of the built-in defaults."""

    return copy.deepcopy(DEFAULT_SETTINGS)


def assert_valid_settings(payload: Mapping[str, Any]) -> Mapping[str, Any]:
    """Validate a full settings payload and raise ``SettingsError`` on failure."""

    unknown = _first_unknown_field(payload, SETTINGS_SHAPE, ())
    if unknown is not None:
        raise SettingsError(f"invalid settings: {join_path(unknown)}: unknown field")

    result = validate_shape(payload, SETTINGS_SHAPE)
    if result.failure is not None:
        failure = result.failure
        raise SettingsError(
            f"invalid settings: {failure.readable_path}: expected "
            f"{failure.expected_type.name}, got {failure.actual_type.name}",
            failure=failure,
        )
    return payload


def merge_settings(base: Mapping[str, object], overlay: Mapping[str, object]) -> dict[str, Any]:
    """Deterministically deep-merge ``overlay`` onto ``base``."""

    merged = _deep_copy_mapping(base)
    _merge_into(merged, overlay)
    return merged


def _first_unknown_field(
    payload: object,
    shape: ObjectShape,
    path: tuple[str, ...],
) -> tuple[str, ...] | None:
    if not isinstance(payload, Mapping):
        return None
    for key in sorted(payload, key=str):
        if not isinstance(key, str) or key not in shape:
            return (*path, str(key))
        nested = shape[key]
        if isinstance(nested, ObjectShape):
            found = _first_unknown_field(payload[key], nested, (*path, key))
            if found is not None:
                return found
    return None


def _merge_into(target: dict[str, Any], overlay: Mapping[str, object]) -> None:
    for key in sorted(overlay):
        value = overlay[key]
        if isinstance(value, Mapping):
            existing = target.get(key)
            if isinstance(existing, dict):
                _merge_into(existing, value)
            else:
                nested: dict[str, Any] = {}
                _merge_into(nested, value)
                target[key] = nested
        else:
            target[key] = copy.deepcopy(value)


def _deep_copy_mapping(value: Mapping[str, object]) -> dict[str, Any]:
    return {key: copy.deepcopy(value[key]) for key in sorted(value)}


__all__ = [
    "DEFAULT_SETTINGS",
    "POSITIVE_INTEGER",
    "SETTINGS_SHAPE",
    "Settings",
    "SettingsError",
    "assert_valid_settings",
    "default_settings",
    "merge_settings",
]
