"""Structured logging for changeset-py.

Library modules log structured events through structlog and never print.
The CLI calls configure_logging() once at startup to pick the level. Until
structlog is configured by someone, importing this module installs the quiet
default: warnings and above, written to stderr.

Usage:
    from changeset_py.logging import get_logger

    logger = get_logger(__name__)
    logger.debug("changeset_loaded", id="brave-moon-calm", type="minor")
"""

from __future__ import annotations

import logging
import sys
from typing import Protocol

import structlog


class Logger(Protocol):
    """Subset of structlog's BoundLogger used throughout the package."""

    def debug(self, event: str | None = None, **kw: object) -> None: ...

    def info(self, event: str | None = None, **kw: object) -> None: ...

    def warning(self, event: str | None = None, **kw: object) -> None: ...

    def error(self, event: str | None = None, **kw: object) -> None: ...


def get_logger(name: str) -> Logger:
    """Return a structlog logger bound to the given module name."""
    return structlog.get_logger(name)


def configure_logging(verbose: bool = False) -> None:
    """Configure structlog output for the command line.

    Args:
        verbose: Emit debug events instead of warnings and above only
    """
    level = logging.DEBUG if verbose else logging.WARNING
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="%H:%M:%S"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


if not structlog.is_configured():
    configure_logging()
