"""Opt-in tracing for TaskResult pipelines.

The combinators never log. A caller that wants visibility wraps a step in
`traced`, which logs each invocation's start and outcome through structlog.
"""

from __future__ import annotations

import time
from typing import Any

from lazy_result._logging import get_logger
from lazy_result.result import Ok, Result
from lazy_result.task_result import TaskResult

__all__ = ['traced']


def traced[T, E](t: TaskResult[T, E], name: str, logger: Any = None) -> TaskResult[T, E]:
    """Log every invocation of `t` without changing its Result.

    Emits `task_result.start` at debug level, then `task_result.ok` (debug) or
    `task_result.err` (warning) with `duration_ms`.

    Args:
        t: The step to trace.
        name: Bound to every log line as `task`.
        logger: structlog logger to use; defaults to `get_logger()`.

    Returns:
        TaskResult resolving to the same Result as `t`.
    """

    async def _traced() -> Result[T, E]:
        log = (logger if logger is not None else get_logger()).bind(task=name)
        log.debug('task_result.start')
        started = time.perf_counter()
        result = await t.invoke()
        duration_ms = round((time.perf_counter() - started) * 1000, 3)
        if isinstance(result, Ok):
            log.debug('task_result.ok', duration_ms=duration_ms)
        else:
            log.warning('task_result.err', duration_ms=duration_ms, error=repr(result.error))
        return result

    return TaskResult(_traced)
