"""Structured logging setup with JSON-lines or text output and redaction support."""

from __future__ import annotations

import contextvars
import json
import logging
import re
import sys
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import IO, TYPE_CHECKING, Final

from shapecheck.constants import DEFAULT_LOGGER_NAME, LOG_FORMATS
from shapecheck.utils.jsonvalues import JSONValue, normalize_json_value

if TYPE_CHECKING:
    from shapecheck.config.schema import Settings

_REDACTED_VALUE: Final[str] = "***REDACTED***"

# Extra fields carrying raw checked values; hidden when value redaction is on.
_VALUE_FIELDS: Final[frozenset[str]] = frozenset({"actual_value"})

_SENSITIVE_KEY_TERMS: Final[tuple[str, ...]] = (
    "secret",
    "token",
    "password",
    "passphrase",
    "api_key",
    "apikey",
    "authorization",
    "credential",
    "cookie",
    "private_key",
    "client_secret",
)

_SENSITIVE_ASSIGNMENT_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"(?i)\b(api[_-]?key|token|password|secret|client_secret|authorization)\b\s*([:=])\s*([^\s,;]+)"
)
_BEARER_TOKEN_PATTERN: Final[re.Pattern[str]] = re.compile(r"(?i)\bbearer\s+[A-Za-z0-9._~+/-]+=*")

_STANDARD_LOG_RECORD_FIELDS: Final[frozenset[str]] = frozenset(
    {
        "args",
        "asctime",
        "created",
        "exc_info",
        "exc_text",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "message",
        "module",
        "msecs",
        "msg",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "thread",
        "threadName",
        "taskName",
    }
)

_CorrelationState = tuple[tuple[str, str], ...]
_CORRELATION_CONTEXT: contextvars.ContextVar[_CorrelationState] = contextvars.ContextVar(
    "shapecheck_observability_correlation", default=()
)

_ACTIVE_HANDLE_LOCK = threading.Lock()
_ACTIVE_HANDLE: StructuredLoggingHandle | None = None


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    """Configuration for a single stream-backed structured logger."""

    logger_name: str = DEFAULT_LOGGER_NAME
    level: int | str = "WARNING"
    log_format: str = "text"
    redact_values: bool = True
    stream: IO[str] | None = None


def setup_logging(
    settings: Settings,
    *,
    stream: IO[str] | None = None,
) -> StructuredLoggingHandle:
    """Configure the ``shapecheck`` logger from loaded settings."""

    return setup_structured_logging(
        LoggingConfig(
            level=settings.log_level,
            log_format=settings.log_format,
            redact_values=settings.redact_values,
            stream=stream,
        )
    )


class _StructuredFormatter(logging.Formatter):
    """Shared event assembly for the JSON and text formatters."""

    def __init__(self, *, redact_values: bool) -> None:
        super().__init__()
        self._redact_values = redact_values

    def build_event(self, record: logging.LogRecord) -> dict[str, JSONValue]:
        event: dict[str, JSONValue] = {
            "timestamp": _iso8601z_from_epoch(record.created),
            "level": record.levelname,
            "logger": record.name,
            "message": _redact_string(record.getMessage()),
        }
        for key, value in sorted(_merge_correlation_context(record).items()):
            event[key] = value

        extras = _extract_extra_fields(record)
        if extras:
            event["fields"] = self._redact_fields(extras)

        if record.exc_info is not None:
            event["exception"] = _redact_string(self.formatException(record.exc_info))
        return event

    def _redact_fields(self, fields: dict[str, JSONValue]) -> JSONValue:
        redacted: dict[str, JSONValue] = {}
        for key, value in fields.items():
            if self._redact_values and key in _VALUE_FIELDS:
                redacted[key] = _REDACTED_VALUE
            else:
                redacted[key] = _redact_value(value, key_context=key)
        return redacted


class _JsonLineFormatter(_StructuredFormatter):
    """Formatter that emits canonical JSON objects per log line."""

    def format(self, record: logging.LogRecord) -> str:
        event = self.build_event(record)
        return json.dumps(event, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


class _TextFormatter(_StructuredFormatter):
    """Formatter that emits ``LEVEL logger: message key=value ...`` lines."""

    def format(self, record: logging.LogRecord) -> str:
        event = self.build_event(record)
        parts = [f"{event['level']} {event['logger']}: {event['message']}"]
        fields = event.get("fields")
        context = {
            key: value
            for key, value in event.items()
            if key not in {"timestamp", "level", "logger", "message", "fields", "exception"}
        }
        if isinstance(fields, dict):
            context.update(fields)
        for key in sorted(context):
            parts.append(f"{key}={json.dumps(context[key], ensure_ascii=False)}")
        line = " ".join(parts)
        exception = event.get("exception")
        if isinstance(exception, str):
            line = f"{line}\n{exception}"
        return line


class StructuredLoggingHandle:
    """Runtime handle for an active structured logging setup."""

    def __init__(self, *, logger: logging.Logger, handler: logging.Handler) -> None:
        self.logger = logger
        self._handler = handler
        self._shutdown_lock = threading.Lock()
        self._is_shutdown = False

    @property
    def is_shutdown(self) -> bool:
        return self._is_shutdown

    def flush(self) -> None:
        self._handler.flush()

    def shutdown(self) -> None:
        with self._shutdown_lock:
            if self._is_shutdown:
                return
            self._handler.flush()
            self.logger.removeHandler(self._handler)
            self.logger.setLevel(logging.NOTSET)
            self.logger.propagate = True
            self._is_shutdown = True


def setup_structured_logging(config: LoggingConfig) -> StructuredLoggingHandle:
    """Install one stream handler on the configured logger, replacing any previous setup."""

    shutdown_logging()

    logger_name = _validate_logger_name(config.logger_name)
    level = _parse_log_level(config.level)
    formatter = _build_formatter(config.log_format, redact_values=config.redact_values)

    handler = logging.StreamHandler(config.stream if config.stream is not None else sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(formatter)

    logger = logging.getLogger(logger_name)
    logger.setLevel(level)
    logger.propagate = False
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    logger.addHandler(handler)

    handle = StructuredLoggingHandle(logger=logger, handler=handler)
    with _ACTIVE_HANDLE_LOCK:
        global _ACTIVE_HANDLE
        _ACTIVE_HANDLE = handle
    return handle


def shutdown_logging(handle: StructuredLoggingHandle | None = None) -> None:
    """Detach the handler of ``handle`` (or of the active setup)."""

    resolved = handle if handle is not None else get_active_logging_handle()
    if resolved is None:
        return
    resolved.shutdown()
    with _ACTIVE_HANDLE_LOCK:
        global _ACTIVE_HANDLE
        if _ACTIVE_HANDLE is resolved:
            _ACTIVE_HANDLE = None


def get_active_logging_handle() -> StructuredLoggingHandle | None:
    """Return the currently active handle, if one exists."""
    with _ACTIVE_HANDLE_LOCK:
        return _ACTIVE_HANDLE


def get_correlation_context() -> dict[str, str]:
    """Return the current correlation context as a plain dictionary."""
    return dict(_CORRELATION_CONTEXT.get())


@contextmanager
def correlation_scope(**fields: str | None) -> Iterator[None]:
    """Temporarily bind correlation fields (document, shape, ...) for log records in scope."""
    state = get_correlation_context()
    for key, value in fields.items():
        key_name = _validate_correlation_key(key)
        if value is None:
            state.pop(key_name, None)
            continue
        state[key_name] = _validate_correlation_value(value)
    token = _CORRELATION_CONTEXT.set(tuple(state.items()))
    try:
        yield
    finally:
        _CORRELATION_CONTEXT.reset(token)


def _build_formatter(log_format: str, *, redact_values: bool) -> _StructuredFormatter:
    if log_format == "json":
        return _JsonLineFormatter(redact_values=redact_values)
    if log_format == "text":
        return _TextFormatter(redact_values=redact_values)
    expected = ", ".join(LOG_FORMATS)
    raise ValueError(f"unsupported log format {log_format!r}; expected one of: {expected}")


def _validate_logger_name(logger_name: str) -> str:
    if not isinstance(logger_name, str):
        raise ValueError(f"logger_name must be a string, got {type(logger_name).__name__}")
    normalized = logger_name.strip()
    if not normalized:
        raise ValueError("logger_name must not be empty")
    return normalized


def _parse_log_level(value: int | str) -> int:
    if isinstance(value, int):
        return value

    if not isinstance(value, str):
        raise ValueError(f"level must be int or str, got {type(value).__name__}")

    normalized = value.strip().upper()
    parsed = logging.getLevelName(normalized)
    if isinstance(parsed, int):
        return parsed

    raise ValueError(f"unsupported logging level {value!r}")


def _validate_correlation_key(value: str) -> str:
    normalized = value.strip()
    if not normalized:
        raise ValueError("correlation key must not be empty")
    return normalized


def _validate_correlation_value(value: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"correlation value must be a string, got {type(value).__name__}")
    normalized = value.strip()
    if not normalized:
        raise ValueError("correlation value must not be empty")
    return normalized


def _iso8601z_from_epoch(epoch_seconds: float) -> str:
    timestamp = datetime.fromtimestamp(epoch_seconds, tz=timezone.utc)
    return timestamp.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _merge_correlation_context(record: logging.LogRecord) -> dict[str, str]:
    merged = get_correlation_context()
    existing = getattr(record, "correlation", None)
    if isinstance(existing, dict):
        for key, value in existing.items():
            if isinstance(key, str) and isinstance(value, str) and key.strip() and value.strip():
                merged[key.strip()] = value.strip()
    return merged


def _extract_extra_fields(record: logging.LogRecord) -> dict[str, JSONValue]:
    fields: dict[str, JSONValue] = {}
    for key, value in record.__dict__.items():
        if key in _STANDARD_LOG_RECORD_FIELDS or key == "correlation":
            continue
        if key.startswith("_"):
            continue
        fields[key] = normalize_json_value(value)
    return fields


def _redact_value(value: JSONValue, *, key_context: str | None) -> JSONValue:
    if key_context is not None and _requires_redaction_for_key(key_context):
        return _REDACTED_VALUE

    if isinstance(value, str):
        return _redact_string(value)

    if isinstance(value, list):
        return [_redact_value(item, key_context=None) for item in value]

    if isinstance(value, dict):
        output: dict[str, JSONValue] = {}
        for key, item in value.items():
            output[key] = _redact_value(item, key_context=key)
        return output

    return value


def _requires_redaction_for_key(key: str) -> bool:
    key_lower = key.lower()
    return any(term in key_lower for term in _SENSITIVE_KEY_TERMS)


def _redact_string(text: str) -> str:
    redacted = _SENSITIVE_ASSIGNMENT_PATTERN.sub(
        lambda match: f"{match.group(1)}{match.group(2)}{_REDACTED_VALUE}", text
    )
    return _BEARER_TOKEN_PATTERN.sub(f"Bearer {_REDACTED_VALUE}", redacted)


__all__ = [
    "LoggingConfig",
    "StructuredLoggingHandle",
    "correlation_scope",
    "get_active_logging_handle",
    "get_correlation_context",
    "setup_logging",
    "setup_structured_logging",
    "shutdown_logging",
]
