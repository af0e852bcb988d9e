"""Structured logging configuration for lazy-result.

Uses structlog's ProcessorFormatter to unify structlog and stdlib logging output,
so log lines from `traced` pipelines and from the caller's own stdlib loggers
share one renderer.

`traced` logs start and success events at debug level under the `lazy_result`
logger. `configure_logging(trace_level=...)` sets that logger's level on its
own, so a service can keep the root logger at INFO and still see its traces.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

__all__ = [
    'LOGGER_NAME',
    'configure_logging',
    'get_logger',
]

LOGGER_NAME = 'lazy_result'


def _level(name: str | None, default: int) -> int:
    if name is None:
        return default
    return getattr(logging, name.upper(), default)


def _shared_processors() -> list[Any]:
    """Processors applied to both structlog events and foreign stdlib records."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt='iso'),
        structlog.stdlib.ExtraAdder(),
    ]


def _formatter(json_output: bool) -> structlog.stdlib.ProcessorFormatter:
    renderer: Any = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    )
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_shared_processors(),
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )


def configure_logging(
    level: str = 'INFO',
    *,
    json_output: bool = True,
    trace_level: str | None = None,
) -> None:
    """Route structlog and stdlib logging through one stderr handler.

    Args:
        level: Root logging level ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL").
            Unknown names fall back to INFO.
        json_output: If True, emit JSON logs. If False, use console output.
        trace_level: Level for the `lazy_result` logger. None lets it inherit
            the root level.
    """
    structlog.configure(
        processors=[
            *_shared_processors(),
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_formatter(json_output))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(_level(level, logging.INFO))

    logging.getLogger(LOGGER_NAME).setLevel(_level(trace_level, logging.NOTSET))


def get_logger(name: str | None = None) -> Any:
    """Get a structlog logger, named `lazy_result` unless `name` is given."""
    return structlog.get_logger(name or LOGGER_NAME)
