"""Configuration: Config dataclass, environment loading, and initialization.

There is no process-wide config object; `init()` returns the Config and the
caller passes it where it is needed.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

from lazy_result._logging import configure_logging
from lazy_result.instrument import traced
from lazy_result.task_result import TaskResult

__all__ = [
    'Config',
    'from_env',
    'init',
]

_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')
_TRUTHY = ('1', 'true', 'yes', 'on')
_FALSY = ('0', 'false', 'no', 'off', '')


@dataclass(frozen=True)
class Config:
    """Configuration for lazy-result.

    Attributes:
        log_level: Logging level (e.g., "DEBUG", "INFO"). None = silent.
        json_logs: Render logs as JSON (True) or colored console output (False).
        trace: Whether `instrument()` wraps pipelines with `traced`.
    """

    log_level: str | None = None
    json_logs: bool = True
    trace: bool = False

    def instrument[T, E](self, t: TaskResult[T, E], name: str) -> TaskResult[T, E]:
        """Apply `traced` to `t` when tracing is enabled, else return `t`."""
        return traced(t, name) if self.trace else t


def _parse_level(raw: str | None) -> str | None:
    if not raw:
        return None
    level = raw.strip().upper()
    if level not in _LEVELS:
        logging.warning("Unknown LAZY_RESULT_LOG_LEVEL value '%s', logging stays off", raw)
        return None
    return level


def _parse_format(raw: str | None) -> bool:
    value = (raw or 'json').strip().lower()
    if value == 'json':
        return True
    if value == 'console':
        return False
    logging.warning("Unknown LAZY_RESULT_LOG_FORMAT value '%s', defaulting to json", raw)
    return True


def _parse_flag(raw: str | None) -> bool:
    value = (raw or '').strip().lower()
    if value in _TRUTHY:
        return True
    if value not in _FALSY:
        logging.warning("Unknown LAZY_RESULT_TRACE value '%s', defaulting to off", raw)
    return False


def from_env(environ: Mapping[str, str] | None = None) -> Config:
    """Build a Config from environment variables.

    Reads:
    - LAZY_RESULT_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR or CRITICAL
    - LAZY_RESULT_LOG_FORMAT: "json" (default) or "console"
    - LAZY_RESULT_TRACE: 1/true/yes/on to enable tracing

    Unknown values log a warning and fall back to the default.

    Args:
        environ: Mapping to read from. Defaults to os.environ.

    Returns:
        The resulting Config.
    """
    env = os.environ if environ is None else environ
    return Config(
        log_level=_parse_level(env.get('LAZY_RESULT_LOG_LEVEL')),
        json_logs=_parse_format(env.get('LAZY_RESULT_LOG_FORMAT')),
        trace=_parse_flag(env.get('LAZY_RESULT_TRACE')),
    )


def init(
    log_level: str | None = None,
    json_logs: bool | None = None,
    trace: bool | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> Config:
    """Resolve configuration and set up logging.

    Explicit arguments override environment variables. With tracing on, the
    `lazy_result` logger is set to DEBUG so `traced` events are emitted even
    when the root level is higher.

    Args:
        log_level: Logging level; None defers to LAZY_RESULT_LOG_LEVEL.
        json_logs: JSON output; None defers to LAZY_RESULT_LOG_FORMAT.
        trace: Tracing; None defers to LAZY_RESULT_TRACE.
        environ: Mapping to read from. Defaults to os.environ.

    Returns:
        The resolved Config.

    Raises:
        ValueError: If log_level is not a known level name.

    Example:
        ```python
        config = init(log_level='DEBUG', trace=True)
        person = config.instrument(fetch_person('123'), 'fetch_person')
        ```
    """
    if log_level is not None and log_level.upper() not in _LEVELS:
        raise ValueError(f'Unknown log level: {log_level!r}')

    base = from_env(environ)
    config = Config(
        log_level=log_level.upper() if log_level is not None else base.log_level,
        json_logs=json_logs if json_logs is not None else base.json_logs,
        trace=trace if trace is not None else base.trace,
    )

    if config.log_level is not None:
        configure_logging(
            config.log_level,
            json_output=config.json_logs,
            trace_level='DEBUG' if config.trace else None,
        )

    return config
