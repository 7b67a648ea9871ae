"""Logging utilities for docgen.

This module provides standalone structlog logger factories that write
JSON-formatted or text-formatted logs either to a log file or to stderr.
Each logger is self-contained and does not modify global structlog
configuration, so embedding applications keep control of their own setup.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from os import getenv
from pathlib import Path
from typing import TYPE_CHECKING, Literal, cast

import structlog

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

LogFormatType = Literal["json", "text"]

_default_logger: "FilteringBoundLogger | None" = None


def _get_log_level() -> int:
    """Get the log level from environment variables.

    Checks DOCGEN_DEBUG first (sets DEBUG if present), then DOCGEN_LOG_LEVEL.
    Defaults to INFO if neither is set.

    Returns:
        The logging level as an integer.
    """
    if getenv("DOCGEN_DEBUG", None):
        return logging.DEBUG

    log_levels = logging.getLevelNamesMapping()
    return log_levels.get(getenv("DOCGEN_LOG_LEVEL", "info").upper(), logging.INFO)


def _log_level_from_string(level: str, *, respect_env: bool = False) -> int:
    """Convert a log level string to a logging level integer.

    Args:
        level: Log level string (debug, info, warning, error).
        respect_env: If True, DOCGEN_DEBUG overrides to DEBUG level.

    Returns:
        The logging level as an integer.
    """
    if respect_env and getenv("DOCGEN_DEBUG", None):
        return logging.DEBUG

    log_levels = logging.getLevelNamesMapping()
    return log_levels.get(level.upper(), logging.INFO)


def create_logger(
    *,
    level: str | None = None,
    log_format: LogFormatType = "json",
    log_file: str = "",
    max_bytes: int | None = None,
    backup_count: int | None = None,
) -> "FilteringBoundLogger":
    """Create a standalone structlog logger.

    Logs go to ``log_file`` when one is given and to stderr otherwise. When
    both ``max_bytes`` and ``backup_count`` are set, the file is rotated with
    a stdlib RotatingFileHandler.

    The log level is determined by (in order of precedence):
    1. DOCGEN_DEBUG environment variable (if set, enables DEBUG level)
    2. The `level` parameter (if provided)
    3. DOCGEN_LOG_LEVEL environment variable
    4. Default: INFO

    Args:
        level: Optional log level string (debug, info, warning, error).
        log_format: Output format, either "json" or "text".
        log_file: Path to a log file. Empty writes to stderr.
        max_bytes: Maximum size in bytes before rotation.
        backup_count: Number of rotated log files to keep.

    Returns:
        A configured FilteringBoundLogger instance.
    """
    effective_level = (
        _log_level_from_string(level, respect_env=True)
        if level is not None
        else _get_log_level()
    )

    raw_logger: object
    if log_file and max_bytes is not None and backup_count is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        stdlib_logger = logging.getLogger(f"docgen.{log_path.stem}.{id(log_path)}")
        stdlib_logger.handlers.clear()
        stdlib_logger.propagate = False
        stdlib_logger.setLevel(effective_level)

        handler = RotatingFileHandler(
            log_path,
            maxBytes=max_bytes,
            backupCount=backup_count,
        )
        handler.setLevel(effective_level)
        # structlog renders the line, the handler only writes it
        handler.setFormatter(logging.Formatter("%(message)s"))
        stdlib_logger.addHandler(handler)
        raw_logger = stdlib_logger
    elif log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        raw_logger = structlog.WriteLoggerFactory(file=log_path.open("a"))()
    else:
        raw_logger = structlog.PrintLoggerFactory(file=sys.stderr)()

    processors: list[structlog.typing.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if log_format == "json":
        processors.append(structlog.processors.dict_tracebacks)
        processors.append(structlog.processors.JSONRenderer())
    else:
        # Text format: "timestamp [level] event key=value ..."
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    wrapper_class = structlog.make_filtering_bound_logger(effective_level)

    return cast(
        "FilteringBoundLogger",
        structlog.wrap_logger(
            raw_logger,
            processors=processors,
            wrapper_class=wrapper_class,
            context_class=dict,
        ),
    )


def get_logger(component: str = "") -> "FilteringBoundLogger":
    """Get the shared default logger, optionally bound to a component name.

    The default logger writes JSON to stderr at the level given by the
    DOCGEN_DEBUG / DOCGEN_LOG_LEVEL environment variables. It is created
    lazily on first use.

    Args:
        component: Component name bound to every entry (e.g. "resolver").

    Returns:
        A FilteringBoundLogger instance.
    """
    global _default_logger  # noqa: PLW0603
    if _default_logger is None:
        _default_logger = create_logger()
    if component:
        return _default_logger.bind(component=component)
    return _default_logger


def set_default_logger(logger: "FilteringBoundLogger | None") -> None:
    """Replace the shared default logger.

    Passing None resets it so the next get_logger() call recreates it from
    the environment.
    """
    global _default_logger  # noqa: PLW0603
    _default_logger = logger
