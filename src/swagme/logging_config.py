"""structlog setup.

Logs go to stderr so they never mix with generated output. Set
``SWAGME_DEBUG=1`` to see extractor decisions.
"""

from __future__ import annotations

import logging
import os
import sys

import structlog

DEBUG_ENV = "SWAGME_DEBUG"

_configured = False


def is_debug() -> bool:
    return os.environ.get(DEBUG_ENV, "").lower() in ("1", "true", "yes")


def configure_logging(debug: bool | None = None, force: bool = False) -> None:
    """Configure structlog once per process (again with ``force=True``)."""
    global _configured
    if _configured and not force:
        return

    if debug is None:
        debug = is_debug()
    level = logging.DEBUG if debug else logging.WARNING

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="%H:%M:%S"),
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
    _configured = True
