"""Structured JSON logging on structlog.

Every module logs through ``get_logger(__name__)`` with a snake_case event
name as the first argument and context as keyword fields:

    log = get_logger(__name__).bind(message_id=msg.message_id)
    log.info("processing_message", body=msg.body)
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog


def configure_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Configure structlog for the process. Safe to call more than once."""
    level_value = getattr(logging, level.upper(), logging.INFO)
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]
    if level_value <= logging.DEBUG:
        processors.append(
            structlog.processors.CallsiteParameterAdder(
                {
                    structlog.processors.CallsiteParameter.MODULE,
                    structlog.processors.CallsiteParameter.FUNC_NAME,
                    structlog.processors.CallsiteParameter.LINENO,
                }
            )
        )
    if fmt == "console":
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))
    else:
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level_value),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> Any:
    """Return a lazy structured logger carrying the module name.

    Nothing is assembled until the first log call or ``bind``, so module-level
    loggers pick up whatever ``configure_logging`` installed at startup.
    """
    return structlog.get_logger(name, logger_name=name)
