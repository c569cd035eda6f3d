"""Structured JSON logging helpers for release-bump."""

from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timezone
from logging import Logger
from typing import Dict

_LOGGER_NAME = "release_bump"
_CONTEXT_KEYS = ("step", "version", "repo", "duration_ms")


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()
        payload = {
            "ts": ts,
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if hasattr(record, "event"):
            payload["event"] = getattr(record, "event")
        if hasattr(record, "payload"):
            payload["payload"] = getattr(record, "payload")
        for key in _CONTEXT_KEYS:
            if hasattr(record, key):
                payload[key] = getattr(record, key)
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def _level_from_env() -> int:
    level = os.environ.get("LOG_LEVEL", "INFO").upper()
    value = getattr(logging, level, logging.INFO)
    return value if isinstance(value, int) else logging.INFO


def get_logger(name: str | None = None) -> Logger:
    """Return a logger under the ``release_bump`` hierarchy.

    The JSON handler is attached once to the package root logger; child
    loggers propagate to it.
    """

    root = logging.getLogger(_LOGGER_NAME)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(_JsonFormatter())
        root.addHandler(handler)
        root.setLevel(_level_from_env())
    if not name:
        return root
    return logging.getLogger(f"{_LOGGER_NAME}.{name}")


def set_level(level: int | str) -> None:
    """Change the verbosity of every ``release_bump`` logger."""

    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    get_logger().setLevel(level)


def is_debug_enabled() -> bool:
    return get_logger().isEnabledFor(logging.DEBUG)


def log_event(
    logger: Logger, event: str, payload: Dict[str, object] | None = None
) -> None:
    """Log an event payload in a consistent JSON format."""

    payload = payload or {}
    extra = {"event": event, "payload": payload}
    logger.info(f"event={event}", extra=extra)


__all__ = ["get_logger", "is_debug_enabled", "log_event", "set_level"]
