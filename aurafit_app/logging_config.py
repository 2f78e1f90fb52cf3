"""Structured JSON logging with correlation ids and shopper-data redaction."""

from __future__ import annotations

import contextlib
import contextvars
import json
import logging
import os
import re
import uuid
from typing import Any, Dict, Iterator, Pattern, Tuple

SERVICE_NAME = "aurafit-recommender"

CORRELATION_ID: contextvars.ContextVar[str | None] = contextvars.ContextVar("correlation_id", default=None)

# Attributes every LogRecord carries; anything else on a record came from ``extra``.
_RESERVED_ATTRS = frozenset(logging.LogRecord("", 0, "", 0, "", (), None).__dict__) | {"message", "asctime"}

# Keys whose values are shopper input or credentials and are never logged.
REDACTED_KEYS = frozenset(
    {
        "prompt",
        "query",
        "images",
        "image_base64",
        "imageBase64",
        "api_key",
        "authorization",
        "email",
    }
)

_STRING_RULES: Tuple[Tuple[Pattern[str], str], ...] = (
    (re.compile(r"AIza[0-9A-Za-z_\-]{20,}"), "[redacted-key]"),
    (re.compile(r"Bearer\s+\S+"), "Bearer [redacted-key]"),
    (re.compile(r"[\w.\-]+@[\w.\-]+"), "[redacted-email]"),
)


class JsonFormatter(logging.Formatter):
    """Render each record as one JSON line with service and correlation metadata."""

    def __init__(self, service: str = SERVICE_NAME) -> None:
        super().__init__()
        self.service = service

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        message = record.getMessage()
        payload: Dict[str, Any] = {
            "timestamp": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S%z"),
            "level": record.levelname,
            "service": self.service,
            "logger": record.name,
            "message": message,
            "event": getattr(record, "event", message),
            "correlation_id": getattr(record, "correlation_id", None) or CORRELATION_ID.get(),
        }
        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRS or key in payload:
                continue
            payload[key] = redact_for_log({key: value})[key]
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def configure_logging(level: int | str | None = None) -> None:
    """Route root logging through a single JSON handler on stderr."""

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    logging.basicConfig(level=level or os.getenv("LOG_LEVEL", "INFO"), handlers=[handler], force=True)


def _redact_string(value: str) -> str:
    if value.startswith("data:image"):
        return "[redacted-image]"
    for pattern, replacement in _STRING_RULES:
        value = pattern.sub(replacement, value)
    return value


def redact_for_log(payload: Any) -> Any:
    """Recursively mask prompts, image payloads, API keys and email addresses."""

    if payload is None or isinstance(payload, (bool, int, float)):
        return payload
    if isinstance(payload, str):
        return _redact_string(payload)
    if isinstance(payload, (bytes, bytearray)):
        return f"[{len(payload)} bytes]"
    if isinstance(payload, dict):
        return {
            key: "[redacted]" if key in REDACTED_KEYS else redact_for_log(value)
            for key, value in payload.items()
        }
    if isinstance(payload, (list, tuple, set)):
        return [redact_for_log(item) for item in payload]
    return _redact_string(str(payload))


def get_logger(name: str) -> logging.Logger:
    """Return a module logger, configuring JSON output on first use."""

    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name)


def ensure_correlation_id(correlation_id: str | None = None) -> str:
    """Adopt ``correlation_id`` or the current one, minting a new id if neither exists."""

    if correlation_id:
        CORRELATION_ID.set(correlation_id)
        return correlation_id
    current = CORRELATION_ID.get()
    if current:
        return current
    current = uuid.uuid4().hex
    CORRELATION_ID.set(current)
    return current


@contextlib.contextmanager
def correlation_context(correlation_id: str | None = None) -> Iterator[str]:
    """Bind a correlation id for the duration of the block."""

    token = CORRELATION_ID.set(correlation_id or uuid.uuid4().hex)
    try:
        yield CORRELATION_ID.get()
    finally:
        CORRELATION_ID.reset(token)


def log_event(logger: logging.Logger, level: int, event: str, **fields: Any) -> None:
    """Log ``event`` with redacted structured ``fields`` attached to the record."""

    correlation_id = ensure_correlation_id(fields.pop("correlation_id", None))
    exc_info = fields.pop("exc_info", None)
    logger.log(
        level,
        event,
        exc_info=exc_info,
        extra={"event": event, "correlation_id": correlation_id, **redact_for_log(fields)},
    )


@contextlib.contextmanager
def operation_context(name: str, correlation_id: str | None = None) -> Iterator[str]:
    """Scope one pipeline operation; nested operations share the outer id."""

    with correlation_context(correlation_id or CORRELATION_ID.get()) as scoped_id:
        logging.getLogger(__name__).debug("operation %s started", name, extra={"operation": name})
        yield scoped_id


__all__ = [
    "JsonFormatter",
    "REDACTED_KEYS",
    "SERVICE_NAME",
    "configure_logging",
    "correlation_context",
    "ensure_correlation_id",
    "get_logger",
    "log_event",
    "operation_context",
    "redact_for_log",
]
