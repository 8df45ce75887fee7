"""Structured logging configuration for phpcheck.

This module provides structlog-based logging with:
- JSON output for automation (when env var PHPCHECK_LOG_FORMAT=json)
- Pretty console output otherwise (default)

Logs are always written to stderr so the requirements report on stdout stays
clean when piped.

Usage:
    from phpcheck.logging import get_logger, configure_logging

    configure_logging()

    log = get_logger(__name__)
    log.info("runtime_probed", php_version="8.3.4")
"""

from __future__ import annotations

import logging
import os
import sys

import structlog
from structlog.types import Processor

__all__ = [
    "LOG_LEVEL_ENV_VAR",
    "get_logger",
    "configure_logging",
]

# Environment variable for log format
LOG_FORMAT_ENV_VAR = "PHPCHECK_LOG_FORMAT"

# Environment variable for log level
LOG_LEVEL_ENV_VAR = "PHPCHECK_LOG_LEVEL"

DEFAULT_LOG_LEVEL = "WARNING"


def _get_log_level() -> int:
    """Get the log level from environment or default.

    Returns:
        Logging level constant (e.g., logging.WARNING).
    """
    level_name = os.environ.get(LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL).upper()
    return getattr(logging, level_name, logging.WARNING)


def _is_json_output() -> bool:
    """Check if JSON output is enabled.

    Returns:
        True if PHPCHECK_LOG_FORMAT=json, False otherwise.
    """
    return os.environ.get(LOG_FORMAT_ENV_VAR, "").lower() == "json"


def _get_shared_processors() -> list[Processor]:
    """Get processors shared between stdlib and structlog.

    Returns:
        List of common processors for log processing.
    """
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _get_console_processors() -> list[Processor]:
    return [
        *_get_shared_processors(),
        structlog.processors.format_exc_info,
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ]


def _get_json_processors() -> list[Processor]:
    return [
        *_get_shared_processors(),
        structlog.processors.dict_tracebacks,
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ]


def _get_renderer(use_json: bool) -> Processor:
    """Final processor, run by the stderr handler for every record."""
    if use_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=sys.stderr.isatty(),
        exception_formatter=structlog.dev.plain_traceback,
    )


def configure_logging(
    *,
    force_json: bool = False,
    level: int | None = None,
) -> None:
    """Configure structlog for the application.

    This should be called once at startup. Subsequent calls reconfigure
    logging.

    Args:
        force_json: Force JSON output regardless of environment variable.
        level: Override log level. If None, reads PHPCHECK_LOG_LEVEL.

    Example:
        configure_logging()
        configure_logging(level=logging.DEBUG)
    """
    use_json = force_json or _is_json_output()
    log_level = level if level is not None else _get_log_level()

    processors = _get_json_processors() if use_json else _get_console_processors()

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)

    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _get_renderer(use_json),
            ],
            foreign_pre_chain=_get_shared_processors(),
        )
    )

    root_logger.addHandler(handler)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger instance.

    Args:
        name: Logger name. If None, uses the caller's module name.

    Returns:
        A bound structlog logger.

    Example:
        log = get_logger(__name__)
        log.debug("project_loaded", root="/srv/app")
    """
    log: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return log
