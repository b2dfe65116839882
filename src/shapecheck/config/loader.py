"""
shapecheck — settings loader.

File: src/shapecheck/config/loader.py
Last updated: 2026-10-18

Purpose
- Load effective settings from defaults, a TOML file, env vars, and CLI
  overrides.

What should be included in this file
- Precedence logic: CLI > env (SHAPECHECK_) > file > defaults.
- File discovery: explicit path, ``shapecheck.toml``, then the
  ``[tool.shapecheck]`` table of ``pyproject.toml``.
- Deterministic environment variable mapping and coercion.

Functional requirements
- An explicitly named file must exist; discovered files are optional.
- Invalid values fail with ``SettingsError`` naming the offending field.
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Final, Literal

from shapecheck.config.schema import (
    Settings,
    SettingsError,
    default_settings,
    merge_settings,
)
from shapecheck.constants import (
    DEFAULT_SETTINGS_FILE,
    ENV_PREFIX,
    PYPROJECT_FILE,
    PYPROJECT_TOOL_TABLE,
)

_BOOLEAN_TRUE: Final[frozenset[str]] = frozenset({"1", "true", "t", "yes", "y", "on"})
_BOOLEAN_FALSE: Final[frozenset[str]] = frozenset({"0", "false", "f", "no", "n", "off"})

ValueKind = Literal["str", "int", "bool"]


@dataclass(frozen=True, slots=True)
class _Binding:
    path: tuple[str, ...]
    value_type: ValueKind


def load_settings(
    config_path: str | Path | None = None,
    *,
    cli_overrides: Mapping[str, object] | None = None,
    environ: Mapping[str, str] | None = None,
    cwd: str | Path | None = None,
) -> Settings:
    """Load effective settings with precedence CLI > env > file > defaults."""

    base_dir = Path.cwd() if cwd is None else Path(cwd)
    env_map = dict(os.environ if environ is None else environ)

    file_payload, source = _discover_file_payload(config_path, base_dir)

    merged = merge_settings(default_settings(), file_payload)
    merged = merge_settings(merged, _collect_env_overrides(env_map))
    merged = merge_settings(merged, _materialize_cli_overrides(cli_overrides or {}))
    return Settings.from_mapping(merged, source=source)


def load_settings_file(path: str | Path) -> Settings:
    """Load settings from a specific TOML file path."""

    return load_settings(path, environ={})


def _discover_file_payload(
    config_path: str | Path | None,
    base_dir: Path,
) -> tuple[dict[str, Any], str | None]:
    if config_path is not None:
        explicit = Path(config_path).expanduser()
        if not explicit.is_absolute():
            explicit = base_dir / explicit
        payload = _load_toml_file(explicit, required=True)
        if explicit.name == PYPROJECT_FILE:
            payload = _tool_table(payload, explicit)
        return payload, explicit.as_posix()

    settings_file = base_dir / DEFAULT_SETTINGS_FILE
    if settings_file.exists():
        return _load_toml_file(settings_file, required=True), settings_file.as_posix()

    pyproject = base_dir / PYPROJECT_FILE
    if pyproject.exists():
        table = _tool_table(_load_toml_file(pyproject, required=True), pyproject)
        if table:
            return table, pyproject.as_posix()

    return {}, None


def _load_toml_file(path: Path, *, required: bool) -> dict[str, Any]:
    if not path.exists():
        if required:
            raise SettingsError(f"settings file not found: {path}")
        return {}

    try:
        with path.open("rb") as handle:
            parsed = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise SettingsError(f"invalid TOML in {path}: {exc}") from exc
    except OSError as exc:
        raise SettingsError(f"unable to read settings file {path}: {exc}") from exc

    return parsed


def _tool_table(payload: Mapping[str, Any], path: Path) -> dict[str, Any]:
    cursor: object = payload
    for part in PYPROJECT_TOOL_TABLE:
        if not isinstance(cursor, Mapping) or part not in cursor:
            return {}
        cursor = cursor[part]
    if not isinstance(cursor, Mapping):
        dotted = ".".join(PYPROJECT_TOOL_TABLE)
        raise SettingsError(f"[{dotted}] in {path} must be a table")
    return dict(cursor)


def _collect_env_overrides(environ: Mapping[str, str]) -> dict[str, Any]:
    bindings = _build_bindings(default_settings())
    overrides: dict[str, Any] = {}
    for env_name in sorted(bindings):
        raw = environ.get(env_name)
        if raw is None:
            continue
        binding = bindings[env_name]
        value = _coerce_env(raw, binding.value_type, env_name, binding.path)
        _set_nested(overrides, binding.path, value)
    return overrides


def _build_bindings(payload: Mapping[str, object]) -> dict[str, _Binding]:
    bindings: dict[str, _Binding] = {}
    for path, value in _iter_scalar_paths(payload):
        kind = _kind_for_value(value)
        if kind is None:
            continue
        bindings[_env_name_for_path(path)] = _Binding(path=path, value_type=kind)
    return bindings


def _iter_scalar_paths(
    payload: Mapping[str, object],
    prefix: tuple[str, ...] = (),
) -> list[tuple[tuple[str, ...], object]]:
    pairs: list[tuple[tuple[str, ...], object]] = []
    for key in sorted(payload):
        value = payload[key]
        path = (*prefix, key)
        if isinstance(value, Mapping):
            pairs.extend(_iter_scalar_paths(value, path))
        else:
            pairs.append((path, value))
    return pairs


def _kind_for_value(value: object) -> ValueKind | None:
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, int):
        return "int"
    if isinstance(value, str):
        return "str"
    return None


def _coerce_env(
    raw: str,
    value_type: ValueKind,
    env_name: str,
    path: tuple[str, ...],
) -> object:
    value = raw.strip()
    if value_type == "str":
        return value
    if value_type == "int":
        try:
            return int(value)
        except ValueError as exc:
            raise SettingsError(f"{env_name} -> {'.'.join(path)} must be an integer") from exc

    lowered = value.lower()
    if lowered in _BOOLEAN_TRUE:
        return True
    if lowered in _BOOLEAN_FALSE:
        return False
    raise SettingsError(
        f"{env_name} -> {'.'.join(path)} must be a boolean (true/false/1/0/yes/no/on/off)"
    )


def _materialize_cli_overrides(cli_overrides: Mapping[str, object]) -> dict[str, Any]:
    payload: dict[str, Any] = {}
    for key in sorted(cli_overrides):
        value = cli_overrides[key]
        if value is None:
            continue
        path = tuple(part for part in key.split(".") if part)
        if not path:
            raise SettingsError(f"invalid CLI override key {key!r}")
        _set_nested(payload, path, value)
    return payload


def _set_nested(target: dict[str, Any], path: tuple[str, ...], value: object) -> None:
    cursor = target
    for part in path[:-1]:
        next_node = cursor.get(part)
        if not isinstance(next_node, dict):
            next_node = {}
            cursor[part] = next_node
        cursor = next_node
    cursor[path[-1]] = value


def _env_name_for_path(path: tuple[str, ...]) -> str:
    return ENV_PREFIX + "_".join(part.upper() for part in path)


__all__ = ["load_settings", "load_settings_file"]
