"""Structured logging configuration using structlog.

JSON output for services, human-readable console output for development.
Library modules log through get_logger(__name__) and never configure
logging themselves; the host application calls setup_logging() once.

Engine loggers wrap a stdlib logger, so until the host configures anything
the stdlib level (WARNING by default) applies and debug events stay silent.
"""

from __future__ import annotations

import logging
import sys

import structlog


def setup_logging(json_output: bool = False, log_level: str = "INFO") -> None:
    """Configure structlog processors and output format.

    Args:
        json_output: If True, render JSON lines. If False, console format.
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL.
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]

    if json_output:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Rendered events go through the stdlib root logger
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=numeric_level,
    )
    root = logging.getLogger()
    root.handlers = []
    root.addHandler(logging.StreamHandler(sys.stdout))
    root.setLevel(numeric_level)


def get_logger(name: str) -> structlog.BoundLogger:
    """Logger bound to the stdlib logger ``name``.

    Args:
        name: Logger name (typically __name__ from calling module).
    """
    return structlog.wrap_logger(logging.getLogger(name))
