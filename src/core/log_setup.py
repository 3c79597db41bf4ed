"""Structured logging configuration for the command line tool."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog

from src.core.config_loader import LoggingConfig


def _resolve_log_level(level: str | None) -> int:
    candidate = (level or "info").upper()
    value = logging.getLevelName(candidate)
    return value if isinstance(value, int) else logging.INFO


def configure_logging(config: LoggingConfig, stream: TextIO | None = None) -> None:
    min_level = _resolve_log_level(config.level)

    timestamper = structlog.processors.TimeStamper(fmt="iso", utc=True)

    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(min_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.add_log_level,
            timestamper,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
    )

    if config.stdout_format == "console":
        renderer = structlog.dev.ConsoleRenderer(colors=False)
    else:
        renderer = structlog.processors.JSONRenderer()

    # Diagnostics go to stderr so stdout only carries the rendered config
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(min_level)
    handler.setFormatter(structlog.stdlib.ProcessorFormatter(processor=renderer))

    core_logger = logging.getLogger("sphereview")
    core_logger.setLevel(min_level)
    core_logger.propagate = False
    for existing in core_logger.handlers[:]:
        core_logger.removeHandler(existing)
    core_logger.addHandler(handler)


__all__ = ["configure_logging"]
