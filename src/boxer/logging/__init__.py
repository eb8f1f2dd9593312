"""
Boxer structured logging.

JSON or text output with box/view context injected into every record.
"""

from boxer.logging.config import (
    BoxerLogger,
    LogFormat,
    LogLevel,
    configure_logging,
    get_logger,
)
from boxer.logging.context import LogContext, get_log_context, with_log_context
from boxer.logging.formatters import JSONFormatter, TextFormatter

__all__ = [
    # Configuration
    "configure_logging",
    "get_logger",
    "BoxerLogger",
    "LogLevel",
    "LogFormat",
    # Formatters
    "JSONFormatter",
    "TextFormatter",
    # Context
    "LogContext",
    "get_log_context",
    "with_log_context",
]
