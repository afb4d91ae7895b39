"""Structured logging configuration for Rewind.

This module provides structlog-based logging with:
- Pretty console output for interactive use (default)
- JSON output when REWIND_LOG_FORMAT=json
- Context binding across async expansions (repository, commit)

Usage:
    from rewind.logging import get_logger, configure_logging

    # Configure logging once at application startup
    configure_logging()

    log = get_logger(__name__)
    log = log.bind(repository="api")
    log.debug("commit_log_loaded", count=42)
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

import structlog
from structlog.types import Processor

__all__ = [
    "get_logger",
    "configure_logging",
    "bind_context",
]

#: Environment variable selecting the output format ("json" or console)
LOG_FORMAT_ENV_VAR = "REWIND_LOG_FORMAT"

#: Environment variable selecting the log level
LOG_LEVEL_ENV_VAR = "REWIND_LOG_LEVEL"

DEFAULT_LOG_LEVEL = "INFO"


def _get_log_level() -> int:
    """Resolve the log level from the environment, falling back to INFO."""
    level_name = os.environ.get(LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL).upper()
    return getattr(logging, level_name, logging.INFO)


def _is_json_output() -> bool:
    return os.environ.get(LOG_FORMAT_ENV_VAR, "").lower() == "json"


def _get_shared_processors() -> list[Processor]:
    """Processors shared by structlog loggers and foreign stdlib records."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _get_renderer(use_json: bool, colors: bool) -> Processor:
    if use_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=colors,
        exception_formatter=structlog.dev.plain_traceback,
    )


def configure_logging(
    *,
    force_json: bool = False,
    level: int | None = None,
    handler: logging.Handler | None = None,
    colors: bool = True,
) -> None:
    """Configure structlog and the stdlib root logger.

    structlog events stop at ``wrap_for_formatter`` and are rendered once,
    by the handler's formatter, so structlog and foreign stdlib records
    share one renderer.

    Safe to call more than once; each call replaces the previous handler
    so repeated configuration never duplicates output. Logs go to stderr
    unless another handler is given, which keeps ``rewind tree`` output on
    stdout clean.

    Args:
        force_json: Emit JSON regardless of REWIND_LOG_FORMAT.
        level: Explicit log level. If None, reads REWIND_LOG_LEVEL.
        handler: Destination for rendered records. Defaults to stderr.
        colors: Colour console output. Ignored for JSON.
    """
    use_json = force_json or _is_json_output()
    log_level = level if level is not None else _get_log_level()

    structlog.configure(
        processors=[
            *_get_shared_processors(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)

    if handler is None:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)

    formatter_processors: list[Processor] = [
        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
    ]
    if use_json:
        formatter_processors.append(structlog.processors.dict_tracebacks)
    formatter_processors.append(_get_renderer(use_json, colors))

    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=formatter_processors,
            foreign_pre_chain=_get_shared_processors(),
        )
    )

    root_logger.addHandler(handler)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger instance.

    Args:
        name: Logger name, usually ``__name__``.

    Returns:
        A bound structlog logger.
    """
    log: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return log


def bind_context(**context: Any) -> None:
    """Bind context variables included in every subsequent log event.

    Uses structlog's contextvars, so the bindings stay with the current
    asyncio task and are copied into the worker threads git runs in.
    Bind inside a task of its own to keep them out of the caller's context.

    Example:
        bind_context(repository="api")
        log.debug("commit_log_loaded")  # Includes repository="api"
    """
    structlog.contextvars.bind_contextvars(**context)
