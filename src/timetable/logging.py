"""Structured logging configuration using structlog.

JSON output for production, human-readable console output for development.
Every module gets its logger from get_logger(); the report script sends logs
to stderr so that stdout stays clean for tables and JSON.
"""

import logging
import sys
from typing import TYPE_CHECKING, TextIO

import structlog

if TYPE_CHECKING:
    from src.timetable.config import TimetableConfig


def setup_logging(
    json_output: bool = False,
    log_level: str = "INFO",
    stream: TextIO | None = None,
) -> None:
    """Configure structlog processors and output format.

    Args:
        json_output: If True, render JSON lines. If False, console format.
        log_level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        stream: Where log lines go. Defaults to stderr.
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)
    stream = stream or sys.stderr

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]

    if json_output:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=stream.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=True,
    )

    # Bridge stdlib logging (pydantic-settings, third-party code) to the same stream
    root = logging.getLogger()
    root.handlers = [logging.StreamHandler(stream)]
    root.setLevel(numeric_level)


def setup_logging_from_config(config: "TimetableConfig") -> None:
    """Configure logging from a TimetableConfig's log_json / log_level."""
    setup_logging(json_output=config.log_json, log_level=config.log_level)


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a logger instance bound with the module name.

    Args:
        name: Logger name (typically __name__ from calling module).
    """
    return structlog.get_logger(name)
