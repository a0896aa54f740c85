"""structlog configuration for the command-line entrypoints.

Log lines go to stderr so that stdout carries only the admission report.

Usage:
    >>> from period_gate.logging_config import configure_logging
    >>> configure_logging("INFO")
    >>> structlog.get_logger(__name__).info("folder_admitted", folder="daily", admitted=2)
"""
from __future__ import annotations

import logging
import sys

import structlog
from structlog.types import Processor


def _level(name: str) -> int:
    return getattr(logging, name.upper(), logging.WARNING)


def configure_logging(level: str = "WARNING", json: bool = False) -> None:
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=_level(level), force=True)

    renderer: Processor = structlog.processors.JSONRenderer() if json else structlog.dev.ConsoleRenderer(colors=False)
    processors: list[Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        renderer,
    ]
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )
