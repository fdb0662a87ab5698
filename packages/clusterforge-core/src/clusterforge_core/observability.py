"""Structured logging setup for clusterforge.

This module provides:
- configure_logging: structlog processor chain for console or JSON output
- get_logger: Module logger accessor

Core modules log through ``structlog.get_logger(__name__)`` with event-style
messages (``asset_generated``) and key/value context; this module only
decides how those events are rendered.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from structlog.stdlib import BoundLogger

# Environment variable for the default log level
LOG_LEVEL_ENV_VAR = "CLUSTERFORGE_LOG_LEVEL"

DEFAULT_LOG_LEVEL = "warning"

LOG_LEVELS = ("debug", "info", "warning", "error")

LOGGER_NAME = "clusterforge"


def get_log_level() -> str:
    """Get the log level from the environment, falling back to the default."""
    return os.environ.get(LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL).lower()


def configure_logging(level: str | None = None, *, json_output: bool = False) -> None:
    """Configure structlog for clusterforge.

    Logs go to stderr so that command output on stdout stays clean.

    Args:
        level: Minimum level to emit (debug, info, warning, error).
            Defaults to CLUSTERFORGE_LOG_LEVEL or "warning".
        json_output: Render events as JSON lines instead of console text.

    Raises:
        ValueError: If the level is unknown.

    Example:
        >>> configure_logging("debug")
        >>> get_logger().debug("asset_generating", asset="Install Config")
    """
    level = (level or get_log_level()).lower()
    if level not in LOG_LEVELS:
        raise ValueError(f"Unknown log level '{level}'. Choose from: {', '.join(LOG_LEVELS)}")

    renderer: Any = (
        structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(level.upper())),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
    logging.basicConfig(level=level.upper(), stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s")


def get_logger() -> BoundLogger:
    """Return the top-level clusterforge logger."""
    return structlog.get_logger(LOGGER_NAME)  # type: ignore[no-any-return]
