"""
mockverify — Structured Logging

All logging via structlog. Modules bind a ``system`` field so every entry
names the part of the engine that emitted it.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from mockverify.config import LoggingConfig


def setup_logging(config: LoggingConfig) -> None:
    """
    Configure structured logging for the process.

    Installs the stdlib handler and renderer. Call it from a conftest or
    runner to get JSON output; the default gateway then leaves it alone.
    """
    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    renderer: Any
    if config.format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(_level(config))


def apply_log_level(config: LoggingConfig) -> bool:
    """
    Filter structlog output below the configured level.

    Only applies while structlog is unconfigured, so a host that ran
    setup_logging() or its own structlog.configure() keeps its setup.
    Returns whether the level was applied.
    """
    if structlog.is_configured():
        return False
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(_level(config)))
    return True


def _level(config: LoggingConfig) -> int:
    return getattr(logging, config.level.upper(), logging.INFO)
