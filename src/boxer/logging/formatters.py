"""
Log formatters for Boxer.

Both formatters render the same fields: the scope a record was emitted in
(request, box, view) and the event fields the registry attaches to a
shipment (resolved chain, result size, error code, timing).
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

# Scope fields, shown in the bracket of text lines
SCOPE_FIELDS = ("request_id", "trace_id", "box", "view")

# Top-level JSON keys, in output order. Other fields go under "extra".
BOXER_FIELDS = (
    *SCOPE_FIELDS,
    "chain",
    "keys",
    "views",
    "boxes",
    "code",
    "error",
    "duration_ms",
)


def record_fields(record: logging.LogRecord) -> dict[str, Any]:
    """
    Fields attached to a record.

    Context fields come from ContextFilter (`record.context`), call-site
    fields from BoxerLogger (`record.fields`). Call-site fields win.
    """
    fields = dict(getattr(record, "context", None) or {})
    fields.update(getattr(record, "fields", None) or {})
    return {key: value for key, value in fields.items() if value is not None}


def _created(record: logging.LogRecord) -> datetime:
    return datetime.fromtimestamp(record.created, timezone.utc)


class JSONFormatter(logging.Formatter):
    """
    One JSON object per line.

        {"timestamp": "...", "level": "DEBUG", "logger": "boxer.registry",
         "message": "Shipped view", "box": "user", "view": "public",
         "chain": ["base", "public"], "keys": 4, "duration_ms": 0.21}
    """

    def format(self, record: logging.LogRecord) -> str:
        fields = record_fields(record)
        entry: dict[str, Any] = {
            "timestamp": _created(record).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in BOXER_FIELDS:
            if name in fields:
                entry[name] = fields.pop(name)
        if fields:
            entry["extra"] = fields

        if record.exc_info and record.exc_info[1] is not None:
            exc = record.exc_info[1]
            entry["exception"] = {
                "type": type(exc).__name__,
                "message": str(exc),
                "traceback": self.formatException(record.exc_info),
            }

        return json.dumps(entry, default=str, ensure_ascii=False)


class TextFormatter(logging.Formatter):
    """
    Human-readable formatter for development.

        2026-01-01 12:00:00 DEBUG    boxer.registry [box=user, view=public]:
            Shipped view chain=base>public keys=4 (0.2ms)

    (one line in the output)
    """

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def __init__(self, use_colors: bool = True) -> None:
        super().__init__()
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        fields = record_fields(record)
        timestamp = _created(record).strftime("%Y-%m-%d %H:%M:%S")

        level = f"{record.levelname:8}"
        if self.use_colors and record.levelname in self.COLORS:
            level = f"{self.COLORS[record.levelname]}{level}{self.RESET}"

        scope = [f"{name}={fields.pop(name)}" for name in SCOPE_FIELDS if name in fields]
        duration = fields.pop("duration_ms", None)

        line = f"{timestamp} {level} {record.name}"
        if scope:
            line += f" [{', '.join(scope)}]"
        line += f": {record.getMessage()}"
        for name, value in fields.items():
            line += f" {name}={_text_value(name, value)}"
        if duration is not None:
            line += f" ({duration:.1f}ms)"

        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def _text_value(name: str, value: Any) -> str:
    if isinstance(value, (list, tuple)):
        # chains read root first
        separator = ">" if name == "chain" else ","
        return separator.join(str(item) for item in value)
    return str(value)
