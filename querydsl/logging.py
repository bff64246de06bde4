"""Logging setup shared by the querydsl command-line tools."""

from __future__ import annotations

import json
import logging
import sys
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Literal

LogFormat = Literal["text", "json"]
LogDestination = Literal["auto", "stdout", "stderr"]

TEXT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# Attributes every LogRecord carries; anything else arrived through `extra=`.
_STANDARD_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__
) | {"message", "asctime", "taskName"}


class JsonFormatter(logging.Formatter):
    """Render each record as one JSON object, `extra` fields included."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        payload: dict[str, Any] = {
            "timestamp": datetime.now(tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        if record.stack_info:
            payload["stack"] = self.formatStack(record.stack_info)
        payload.update(
            (key, value)
            for key, value in record.__dict__.items()
            if key not in _STANDARD_ATTRS and not key.startswith("_")
        )
        return json.dumps(payload, default=str)


@dataclass(slots=True)
class _LevelWindow(logging.Filter):
    low: int = logging.NOTSET
    high: int = logging.CRITICAL

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401
        return self.low <= record.levelno <= self.high


def configure_logging(
    *,
    level: str | int = "INFO",
    fmt: LogFormat = "text",
    destination: LogDestination = "auto",
) -> logging.Logger:
    """Reset the root logger and attach handlers for the chosen format and destination.

    ``auto`` routes INFO and below to stdout and WARNING and above to stderr.
    """

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(_resolve_level(level))

    formatter: logging.Formatter = (
        JsonFormatter() if fmt == "json" else logging.Formatter(TEXT_FORMAT)
    )
    for handler in _handlers_for(destination):
        handler.setFormatter(formatter)
        root.addHandler(handler)

    logging.captureWarnings(True)
    return root


def _resolve_level(value: str | int) -> int:
    if isinstance(value, int):
        return value
    resolved = logging.getLevelName(value.upper())
    if not isinstance(resolved, int):  # getLevelName echoes unknown names back
        raise ValueError(f"Unknown log level: {value}")
    return resolved


def _handlers_for(destination: LogDestination) -> list[logging.Handler]:
    if destination in ("stdout", "stderr"):
        return [logging.StreamHandler(getattr(sys, destination))]

    low = logging.StreamHandler(sys.stdout)
    low.addFilter(_LevelWindow(high=logging.INFO))
    high = logging.StreamHandler(sys.stderr)
    high.addFilter(_LevelWindow(low=logging.WARNING))
    return [low, high]


__all__ = ["JsonFormatter", "LogDestination", "LogFormat", "configure_logging"]
