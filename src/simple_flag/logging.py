"""
Structured logging for simple-flag.

The registry logs definition and override activity at ``debug`` level through
structlog bound to stdlib loggers. Until the host configures logging those
events stay below stdlib's default WARNING threshold and print nothing;
``configure_logging`` is a convenience for scripts and tests.

Architecture:
    ::

        configure_logging(level="INFO", json_format=None, service="simple-flag")
              │
              ▼
        structlog processor chain:
          1. TimeStamper(fmt="iso")
          2. add_log_level, add_logger_name
          3. _add_service_metadata
          4. JSONRenderer (not a tty) or ConsoleRenderer (tty)
              │
              ▼
        stdlib logging (root handler on stdout)

Examples:
    >>> from simple_flag.logging import configure_logging, get_logger
    >>> configure_logging(level="DEBUG", json_format=True)
    >>> logger = get_logger(__name__)
    >>> logger.debug("flag_defined", flag="new_parser")

Tags:
    logging, structlog, observability, simple-flag
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

_SERVICE_NAME = "simple-flag"


def _add_service_metadata(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add service-level metadata to all logs."""
    event_dict.setdefault("service", _SERVICE_NAME)
    return event_dict


def configure_logging(
    level: str = "INFO",
    json_format: bool | None = None,
    service: str = "simple-flag",
    add_timestamp: bool = True,
) -> None:
    """Configure structured logging.

    Rendered events are handed to stdlib logging, whose root handlers are
    replaced by a single stdout handler at ``level``.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: True for JSON, False for console, None for auto (JSON if not tty)
        service: Service name to include in logs
        add_timestamp: Include ISO timestamp in logs
    """
    global _SERVICE_NAME
    _SERVICE_NAME = service

    if json_format is None:
        json_format = not sys.stdout.isatty()

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        _add_service_metadata,
    ]

    if add_timestamp:
        shared_processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))

    if json_format:
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper())
        ),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper()),
        force=True,
    )


def get_logger(name: str | None = None) -> Any:
    """Get a structured logger (usually ``get_logger(__name__)``).

    The logger always wraps the stdlib logger of the same name, so a host
    that never configures logging gets stdlib's WARNING threshold and the
    registry's debug events stay silent.
    """
    return structlog.wrap_logger(logging.getLogger(name))


__all__ = [
    "configure_logging",
    "get_logger",
]
