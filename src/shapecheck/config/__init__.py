"""
shapecheck config package public API.

File: src/shapecheck/config/__init__.py
Last updated: 2026-10-18

Purpose
- Export settings loading/validation entrypoints and public error types.

Functional requirements
- Support loading from ``shapecheck.toml`` or ``[tool.shapecheck]`` plus
  ``SHAPECHECK_`` env overrides.
- Fail fast with clear validation/load errors.
"""

from shapecheck.config.loader import load_settings, load_settings_file
from shapecheck.config.schema import (
    DEFAULT_SETTINGS,
    SETTINGS_SHAPE,
    Settings,
    SettingsError,
    assert_valid_settings,
    default_settings,
    merge_settings,
)

__all__ = [
    "DEFAULT_SETTINGS",
    "SETTINGS_SHAPE",
    "Settings",
    "SettingsError",
    "assert_valid_settings",
    "default_settings",
    "load_settings",
    "load_settings_file",
    "merge_settings",
]
