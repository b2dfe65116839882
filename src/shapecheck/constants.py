"""Stable constants shared across shapecheck modules."""

from __future__ import annotations

from typing import Final

# Failure reporting.
READABLE_PATH_ROOT: Final[str] = "*"
DEFAULT_MAX_VALUE_LENGTH: Final[int] = 80
# Containers nested deeper than this are summarized instead of walked.
MAX_VALUE_DEPTH: Final[int] = 64

# Settings discovery.
DEFAULT_SETTINGS_FILE: Final[str] = "shapecheck.toml"
PYPROJECT_FILE: Final[str] = "pyproject.toml"
PYPROJECT_TOOL_TABLE: Final[tuple[str, ...]] = ("tool", "shapecheck")
ENV_PREFIX: Final[str] = "SHAPECHECK_"

# Logging.
DEFAULT_LOGGER_NAME: Final[str] = "shapecheck"
LOG_LEVELS: Final[tuple[str, ...]] = ("DEBUG", "INFO", "WARNING", "ERROR")
LOG_FORMATS: Final[tuple[str, ...]] = ("json", "text")

__all__ = [
    "DEFAULT_LOGGER_NAME",
    "DEFAULT_MAX_VALUE_LENGTH",
    "DEFAULT_SETTINGS_FILE",
    "ENV_PREFIX",
    "LOG_FORMATS",
    "LOG_LEVELS",
    "MAX_VALUE_DEPTH",
    "PYPROJECT_FILE",
    "PYPROJECT_TOOL_TABLE",
    "READABLE_PATH_ROOT",
]
