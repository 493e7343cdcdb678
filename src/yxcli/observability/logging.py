"""Logging setup for the ``yx`` CLI with JSON-lines or text output and redaction."""

from __future__ import annotations

import json
import logging
import math
import re
import sys
import threading
from collections.abc import Mapping
from datetime import UTC, datetime
from pathlib import Path
from typing import Final

JSONScalar = str | int | float | bool | None
JSONValue = JSONScalar | list["JSONValue"] | dict[str, "JSONValue"]

_REDACTED_VALUE: Final[str] = "***REDACTED***"
_ROOT_LOGGER_NAME: Final[str] = "yxcli"

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
)

# Flags whose following argv element is a secret, e.g. ``auth login --token abc``.
_SENSITIVE_FLAG_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"(?i)^--?(token|password|secret|api[_-]?key|client[_-]?secret)$"
)
_SENSITIVE_FLAG_INLINE_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"(?i)(--?(?:token|password|secret|api[_-]?key|client[_-]?secret))(=|\s+)([^\s,;]+)"
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

_ACTIVE_HANDLER_LOCK = threading.Lock()
_ACTIVE_HANDLER: logging.Handler | None = None


class _JsonLineFormatter(logging.Formatter):
    """Formatter that emits one canonical JSON object per log line."""

    def __init__(self, *, redact: bool) -> None:
        super().__init__()
        self._redact = redact

    def format(self, record: logging.LogRecord) -> str:
        event: dict[str, JSONValue] = {
            "timestamp": _iso8601z_from_epoch(record.created),
            "level": record.levelname,
            "logger": record.name,
            "message": self._scrub(record.getMessage()),
        }

        extras = _extract_extra_fields(record)
        if extras:
            event["fields"] = self._scrub(extras) if self._redact else extras

        if record.exc_info is not None:
            event["exception"] = self._scrub(self.formatException(record.exc_info))

        return json.dumps(event, sort_keys=True, separators=(",", ":"), ensure_ascii=False)

    def _scrub(self, value: JSONValue) -> JSONValue:
        if not self._redact:
            return value
        return redact_log_value(value)


class _TextFormatter(logging.Formatter):
    """``LEVEL logger: message key=value ...`` lines for humans."""

    def __init__(self, *, redact: bool) -> None:
        super().__init__()
        self._redact = redact

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        extras: JSONValue = _extract_extra_fields(record)
        if self._redact:
            message = _redact_string(message)
            extras = redact_log_value(extras)

        parts = [f"{record.levelname} {record.name}: {message}"]
        if isinstance(extras, dict):
            for key in sorted(extras):
                rendered = json.dumps(extras[key], sort_keys=True, ensure_ascii=False)
                parts.append(f"{key}={rendered}")
        line = " ".join(parts)
        if record.exc_info is not None:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def setup_logging(
    observability_config: Mapping[str, object] | None = None,
    *,
    logger_name: str = _ROOT_LOGGER_NAME,
) -> logging.Logger:
    """Attach a single handler to the package logger per ``[observability]`` settings.

    Calling again replaces the previous handler; library modules never configure
    handlers themselves.
    """

    cfg = dict(observability_config or {})
    level = _parse_log_level(cfg.get("log_level", "WARNING"))
    redact = bool(cfg.get("redact_secrets", True))
    log_format = cfg.get("log_format", "text")
    log_file = cfg.get("log_file", "")

    formatter: logging.Formatter
    if log_format == "json":
        formatter = _JsonLineFormatter(redact=redact)
    else:
        formatter = _TextFormatter(redact=redact)

    handler: logging.Handler
    if isinstance(log_file, str) and log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(formatter)

    logger = logging.getLogger(logger_name)
    shutdown_logging(logger_name=logger_name)
    logger.setLevel(level)
    logger.propagate = False
    logger.addHandler(handler)

    with _ACTIVE_HANDLER_LOCK:
        global _ACTIVE_HANDLER
        _ACTIVE_HANDLER = handler
    return logger


def shutdown_logging(*, logger_name: str = _ROOT_LOGGER_NAME) -> None:
    """Detach and close the handler installed by :func:`setup_logging`."""

    with _ACTIVE_HANDLER_LOCK:
        global _ACTIVE_HANDLER
        handler = _ACTIVE_HANDLER
        _ACTIVE_HANDLER = None
    if handler is None:
        return
    logger = logging.getLogger(logger_name)
    logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    handler.flush()
    handler.close()


def redact_log_value(value: JSONValue) -> JSONValue:
    """Deep redaction of secret-looking keys, flag values, and inline credentials."""

    return _redact_value(value, key_context=None)


def _redact_value(value: JSONValue, *, key_context: str | None) -> JSONValue:
    if key_context is not None and _requires_redaction_for_key(key_context):
        return _REDACTED_VALUE
    if isinstance(value, str):
        return _redact_string(value)
    if isinstance(value, list):
        return _redact_argv_like(value)
    if isinstance(value, dict):
        return {key: _redact_value(item, key_context=key) for key, item in value.items()}
    return value


def _redact_argv_like(items: list[JSONValue]) -> list[JSONValue]:
    output: list[JSONValue] = []
    hide_next = False
    for item in items:
        if hide_next:
            output.append(_REDACTED_VALUE)
            hide_next = False
            continue
        if isinstance(item, str) and _SENSITIVE_FLAG_PATTERN.match(item):
            hide_next = True
            output.append(item)
            continue
        output.append(_redact_value(item, key_context=None))
    return output


def _requires_redaction_for_key(key: str) -> bool:
    key_lower = key.lower()
    return any(term in key_lower for term in _SENSITIVE_KEY_TERMS)


def _redact_string(text: str) -> str:
    redacted = _BEARER_TOKEN_PATTERN.sub(f"Bearer {_REDACTED_VALUE}", text)
    redacted = _SENSITIVE_FLAG_INLINE_PATTERN.sub(
        lambda match: f"{match.group(1)}{match.group(2)}{_REDACTED_VALUE}", redacted
    )
    redacted = _SENSITIVE_ASSIGNMENT_PATTERN.sub(
        lambda match: f"{match.group(1)}{match.group(2)}{_REDACTED_VALUE}", redacted
    )
    return redacted


def _parse_log_level(value: object) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if not isinstance(value, str):
        raise ValueError(f"level must be int or str, got {type(value).__name__}")
    parsed = logging.getLevelName(value.strip().upper())
    if isinstance(parsed, int):
        return parsed
    raise ValueError(f"unsupported logging level {value!r}")


def _iso8601z_from_epoch(epoch_seconds: float) -> str:
    timestamp = datetime.fromtimestamp(epoch_seconds, tz=UTC)
    return timestamp.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _extract_extra_fields(record: logging.LogRecord) -> dict[str, JSONValue]:
    fields: dict[str, JSONValue] = {}
    for key, value in record.__dict__.items():
        if key in _STANDARD_LOG_RECORD_FIELDS or key.startswith("_"):
            continue
        fields[key] = _normalize_json_value(value)
    return fields


def _normalize_json_value(value: object) -> JSONValue:
    if value is None or isinstance(value, (bool, int, str)):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else repr(value)
    if isinstance(value, Path):
        return value.as_posix()
    if isinstance(value, Mapping):
        return {str(key): _normalize_json_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_normalize_json_value(item) for item in value]
    if isinstance(value, (set, frozenset)):
        return sorted((_normalize_json_value(item) for item in value), key=repr)
    return repr(value)


__all__ = [
    "JSONScalar",
    "JSONValue",
    "redact_log_value",
    "setup_logging",
    "shutdown_logging",
]
