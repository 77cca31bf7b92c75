"""Logging utilities for viewrender.

Loggers are standalone structlog loggers built with ``structlog.wrap_logger``,
so importing or using the library never modifies the host application's
global structlog configuration.
"""

from __future__ import annotations

import logging
import sys
from os import getenv
from typing import TYPE_CHECKING, Literal, TextIO, cast

import structlog

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

LogFormatType = Literal["json", "text"]

_DEFAULT_LEVEL = "warning"

_logger: FilteringBoundLogger | None = None


def _log_level_from_string(level: str, *, respect_env: bool = False) -> int:
    """Convert a log level string to a logging level integer.

    Args:
        level: Log level string (debug, info, warning, error).
        respect_env: If True, VIEWRENDER_DEBUG overrides to DEBUG level.

    Returns:
        The logging level as an integer, WARNING for unknown names.
    """
    if respect_env and getenv("VIEWRENDER_DEBUG", None):
        return logging.DEBUG

    log_levels = logging.getLevelNamesMapping()
    return log_levels.get(level.upper(), logging.WARNING)


def _get_log_level() -> int:
    """Get the log level from environment variables.

    Checks VIEWRENDER_DEBUG first (sets DEBUG if present), then
    VIEWRENDER_LOG_LEVEL. Defaults to WARNING if neither is set.
    """
    return _log_level_from_string(
        getenv("VIEWRENDER_LOG_LEVEL", _DEFAULT_LEVEL), respect_env=True
    )


def create_logger(
    *,
    level: str | None = None,
    log_format: LogFormatType = "text",
    stream: TextIO | None = None,
) -> FilteringBoundLogger:
    """Create a standalone structlog logger.

    The log level is determined by (in order of precedence):
    1. VIEWRENDER_DEBUG environment variable (if set, enables DEBUG level)
    2. The ``level`` parameter (if provided)
    3. VIEWRENDER_LOG_LEVEL environment variable
    4. Default: WARNING

    Args:
        level: Optional log level string (debug, info, warning, error).
        log_format: Output format, either "json" or "text".
        stream: Stream to write to. Defaults to stderr.

    Returns:
        A configured FilteringBoundLogger instance.
    """
    effective_level = (
        _log_level_from_string(level, respect_env=True)
        if level is not None
        else _get_log_level()
    )

    processors: list[structlog.typing.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if log_format == "json":
        processors.append(structlog.processors.dict_tracebacks)
        processors.append(structlog.processors.JSONRenderer())
    else:
        # "timestamp [level] event key=value ..."
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    return cast(
        "FilteringBoundLogger",
        structlog.wrap_logger(
            structlog.PrintLogger(file=stream if stream is not None else sys.stderr),
            processors=processors,
            wrapper_class=structlog.make_filtering_bound_logger(effective_level),
            context_class=dict,
        ),
    )


def get_logger() -> FilteringBoundLogger:
    """Get the shared library logger, creating it on first use."""
    global _logger  # noqa: PLW0603
    if _logger is None:
        _logger = create_logger()
    return _logger
