"""
Logging context management for Boxer.

Fields set here (box, view, request id, ...) are injected into every log
record emitted within the scope, including records from helpers and view
bodies that use the boxer loggers.
"""

from __future__ import annotations

import contextvars
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any

_log_context: contextvars.ContextVar[dict[str, Any] | None] = contextvars.ContextVar(
    "boxer_log_context",
    default=None,
)


@dataclass
class LogContext:
    """Structured logging context for one scope (usually one ship call)."""

    box: str | None = None
    view: str | None = None
    request_id: str | None = None
    trace_id: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a dictionary of non-None values."""
        result = {
            key: value
            for key, value in (
                ("box", self.box),
                ("view", self.view),
                ("request_id", self.request_id),
                ("trace_id", self.trace_id),
            )
            if value is not None
        }
        result.update(self.extra)
        return result


def get_log_context() -> dict[str, Any]:
    """Get a copy of the current log context."""
    ctx = _log_context.get()
    return ctx.copy() if ctx else {}


@contextmanager
def with_log_context(
    context: LogContext | dict[str, Any] | None = None,
    **kwargs: Any,
) -> Iterator[None]:
    """
    Set log context fields for the duration of a block.

    Without an explicit context the current fields are inherited, so nested
    scopes add to what the caller already set:

        with with_log_context(request_id="req-1"):
            registry.ship("user", user, view="public")  # logs request_id, box, view
    """
    previous = _log_context.get()

    if context is not None:
        new_context = (
            context.to_dict() if isinstance(context, LogContext) else dict(context)
        )
    else:
        new_context = previous.copy() if previous else {}

    new_context.update(kwargs)
    _log_context.set(new_context)

    try:
        yield
    finally:
        _log_context.set(previous)


class ContextFilter(logging.Filter):
    """Attaches the current context fields to log records as `record.context`."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.context = get_log_context()
        return True
