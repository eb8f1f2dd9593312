"""
Logging configuration for Boxer.
"""

from __future__ import annotations

import logging
import sys
from enum import Enum
from typing import Any, TextIO

from boxer.logging.context import ContextFilter
from boxer.logging.formatters import JSONFormatter, TextFormatter

ROOT_LOGGER = "boxer"


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    @property
    def number(self) -> int:
        return logging.getLevelName(self.value)


class LogFormat(str, Enum):
    JSON = "json"  # one object per line, for log pipelines
    TEXT = "text"  # colorized, for a terminal


class BoxerLogger:
    """
    Logger that takes event fields as keyword arguments.

    The fields travel on the record as `record.fields` and are rendered by
    the Boxer formatters:

        logger = get_logger(__name__)
        logger.debug("Shipped view", chain=["base", "public"], keys=4, duration_ms=0.4)
    """

    def __init__(self, name: str) -> None:
        self._logger = logging.getLogger(name)

    @property
    def name(self) -> str:
        return self._logger.name

    def _log(self, level: int, msg: str, fields: dict[str, Any]) -> None:
        if self._logger.isEnabledFor(level):
            self._logger.log(level, msg, extra={"fields": fields})

    def debug(self, msg: str, **fields: Any) -> None:
        self._log(logging.DEBUG, msg, fields)

    def info(self, msg: str, **fields: Any) -> None:
        self._log(logging.INFO, msg, fields)

    def warning(self, msg: str, **fields: Any) -> None:
        self._log(logging.WARNING, msg, fields)


def get_logger(name: str) -> BoxerLogger:
    return BoxerLogger(name)


def configure_logging(
    level: LogLevel | str = LogLevel.INFO,
    format: LogFormat | str = LogFormat.JSON,
    output: TextIO | None = None,
    include_context: bool = True,
    use_colors: bool = True,
) -> logging.Handler:
    """
    Route the `boxer` logger hierarchy to a single stream handler.

    Any handler previously installed on `boxer` is replaced and records stop
    propagating to the root logger. Call once at application startup, or
    through `BoxerConfig.configure_logging()`.

    Args:
        level: Log level name or LogLevel
        format: "json" or "text"
        output: Stream to write to (defaults to stderr)
        include_context: Attach the active `with_log_context` fields to records
        use_colors: Colorize text output

    Returns:
        The installed handler
    """
    level = LogLevel(level.upper()) if isinstance(level, str) else level
    format = LogFormat(format.lower()) if isinstance(format, str) else format

    handler = logging.StreamHandler(output if output is not None else sys.stderr)
    handler.setLevel(level.number)
    handler.setFormatter(
        JSONFormatter() if format is LogFormat.JSON else TextFormatter(use_colors=use_colors)
    )
    if include_context:
        handler.addFilter(ContextFilter())

    boxer_logger = logging.getLogger(ROOT_LOGGER)
    boxer_logger.handlers.clear()
    boxer_logger.setLevel(level.number)
    boxer_logger.addHandler(handler)
    boxer_logger.propagate = False
    return handler
