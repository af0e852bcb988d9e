"""Free-function combinators over TaskResult.

Every combinator takes TaskResult values and returns a new TaskResult (or a
Task for the terminal `match`/`get_or_else`) without invoking its input.
They obey the functor and monad laws:

    map(t, identity)            == t
    map(map(t, f), g)           == map(t, compose(g, f))
    chain(t, pure)              == t
    chain(pure(a), f)           == f(a)
    chain(chain(t, f), g)       == chain(t, lambda x: chain(f(x), g))

where `==` means "resolves to an equal Result on invocation".

The concurrency helpers (`zip`, `sequence_concurrent`, `timeout`) run on
anyio, so they work under asyncio and trio alike.

Example:
    ```python
    from lazy_result import combinators as C

    record = C.chain(
        C.chain_result(fetch_person('123'), decoder(Person)),
        lambda person: fetch_record(person.record_id),
    )
    label = await C.get_or_else(C.map(record, str), lambda: 'unavailable')
    ```
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager
from typing import Any

import aiologic
import anyio

from lazy_result.errors import ServiceError
from lazy_result.result import Err, Ok, Result
from lazy_result.task import Task
from lazy_result.task_result import TaskResult

__all__ = [
    'bimap',
    'chain',
    'chain_result',
    'ensure',
    'get_or_else',
    'map',
    'map_err',
    'match',
    'or_else',
    'sequence',
    'sequence_concurrent',
    'tap',
    'tap_err',
    'timeout',
    'traverse',
    'zip',
]


@contextmanager
def _unwrap_single_failure() -> Iterator[None]:
    """Re-raise a task group that failed with one exception as that exception."""
    try:
        yield
    except BaseExceptionGroup as group:
        if len(group.exceptions) == 1:
            raise group.exceptions[0] from None
        raise


def map[T, U, E](t: TaskResult[T, E], f: Callable[[T], U]) -> TaskResult[U, E]:  # noqa: A001
    """Apply `f` to the Ok value once `t` is invoked."""
    return t.map(f)


def map_err[T, E, F](t: TaskResult[T, E], g: Callable[[E], F]) -> TaskResult[T, F]:
    """Apply `g` to the Err value once `t` is invoked."""
    return t.map_err(g)


def bimap[T, U, E, F](t: TaskResult[T, E], g: Callable[[E], F], f: Callable[[T], U]) -> TaskResult[U, F]:
    """Apply exactly one of `g` (on Err) or `f` (on Ok)."""
    return t.bimap(g, f)


def chain[T, U, E](t: TaskResult[T, E], f: Callable[[T], TaskResult[U, E]]) -> TaskResult[U, E]:
    """Sequence a dependent step; short-circuits on Err without calling `f`.

    Args:
        t: First step.
        f: Builds the second step from the first step's Ok value.

    Returns:
        TaskResult running `t`, then `f(value)`, strictly in that order.
    """
    return t.and_then(f)


def chain_result[T, U, E](t: TaskResult[T, E], f: Callable[[T], Result[U, E]]) -> TaskResult[U, E]:
    """Chain a synchronous Result-returning step such as a decoder."""
    return t.and_then_result(f)


def or_else[T, E, F](t: TaskResult[T, E], f: Callable[[E], TaskResult[T, F]]) -> TaskResult[T, F]:
    """Recover from Err with another TaskResult; Ok passes through."""
    return t.or_else(f)


def ensure[T, E](t: TaskResult[T, E], test: Callable[[T], bool], on_fail: Callable[[T], E]) -> TaskResult[T, E]:
    """Lifted `from_predicate`: reject Ok values failing `test`."""
    return t.ensure(test, on_fail)


def tap[T, E](t: TaskResult[T, E], f: Callable[[T], Any]) -> TaskResult[T, E]:
    return t.tap(f)


def tap_err[T, E](t: TaskResult[T, E], g: Callable[[E], Any]) -> TaskResult[T, E]:
    return t.tap_err(g)


def match[T, E, R](t: TaskResult[T, E], on_err: Callable[[E], R], on_ok: Callable[[T], R]) -> Task[R]:
    """Terminal elimination: a Task running `t` and exactly one branch."""
    return t.match(on_err, on_ok)


def get_or_else[T, E](t: TaskResult[T, E], fallback: Callable[[], T]) -> Task[T]:
    """Terminal unwrap: a Task resolving to the Ok value or `fallback()`.

    The fallback is evaluated only at invocation time and only on Err.
    """
    return t.get_or_else(fallback)


# ---------------------------------------------------------------------
# Collections
# ---------------------------------------------------------------------


def sequence[T, E](ts: Iterable[TaskResult[T, E]]) -> TaskResult[list[T], E]:
    """Invoke TaskResults one after another, stopping at the first Err.

    Steps after the first Err are never invoked.

    Args:
        ts: The steps to run. Materialized into a list immediately; no step
            is invoked until the returned TaskResult is.

    Returns:
        TaskResult resolving to Ok(list of values) or the first Err.
    """
    steps = list(ts)

    async def _sequenced() -> Result[list[T], E]:
        values: list[T] = []
        for t in steps:
            result = await t.invoke()
            if isinstance(result, Err):
                return result
            values.append(result.value)
        return Ok(values)

    return TaskResult(_sequenced)


def traverse[A, T, E](items: Iterable[A], f: Callable[[A], TaskResult[T, E]]) -> TaskResult[list[T], E]:
    """Map `f` over `items` and sequence the results.

    `f` is applied lazily: a step is built only after the previous one
    resolved to Ok.

    Args:
        items: Inputs to the step factory.
        f: Builds a step per input.

    Returns:
        TaskResult resolving to Ok(list of values) or the first Err.
    """
    materialized = list(items)

    async def _traversed() -> Result[list[T], E]:
        values: list[T] = []
        for item in materialized:
            result = await f(item).invoke()
            if isinstance(result, Err):
                return result
            values.append(result.value)
        return Ok(values)

    return TaskResult(_traversed)


def sequence_concurrent[T, E](
    ts: Iterable[TaskResult[T, E]],
    *,
    limit: int | None = None,
) -> TaskResult[list[T], E]:
    """Invoke TaskResults concurrently with an optional concurrency limit.

    All steps run to completion; the first Err by position wins. Steps are
    independent, so none of them may depend on another's value.

    Args:
        ts: The steps to run. Materialized into a list immediately.
        limit: Maximum number of concurrent invocations. None means unlimited.

    Returns:
        TaskResult resolving to Ok(list of values) or the first Err by position.

    Raises:
        ValueError: If limit is not positive.
        Exception: On invocation, whatever a step raised. If several steps
            raise, they arrive together as an ExceptionGroup.
    """
    if limit is not None and limit < 1:
        raise ValueError(f'limit must be positive, got {limit}')
    steps = list(ts)

    async def _gathered() -> Result[list[T], E]:
        results: list[Result[T, E] | None] = [None] * len(steps)
        limiter = aiologic.CapacityLimiter(limit) if limit is not None else None

        async def run_one(i: int, t: TaskResult[T, E]) -> None:
            if limiter is None:
                results[i] = await t.invoke()
                return
            async with limiter:
                results[i] = await t.invoke()

        with _unwrap_single_failure():
            async with anyio.create_task_group() as tg:
                for i, t in enumerate(steps):
                    tg.start_soon(run_one, i, t)

        values: list[T] = []
        for result in results:
            assert result is not None
            if isinstance(result, Err):
                return result
            values.append(result.value)
        return Ok(values)

    return TaskResult(_gathered)


def zip[T, U, E](t1: TaskResult[T, E], t2: TaskResult[U, E]) -> TaskResult[tuple[T, U], E]:  # noqa: A001
    """Combine two independent TaskResults into a tuple.

    Invokes both concurrently. If both are Ok, resolves to
    Ok((value1, value2)); otherwise the first Err by position
    (t1 first, then t2).

    Args:
        t1: First step.
        t2: Second step.

    Returns:
        TaskResult containing the tuple or first error.

    Raises:
        Exception: On invocation, whatever a step raised. If both steps
            raise, they arrive together as an ExceptionGroup.
    """

    async def _zipped() -> Result[tuple[T, U], E]:
        result1: Result[T, E] | None = None
        result2: Result[U, E] | None = None

        async def run_first() -> None:
            nonlocal result1
            result1 = await t1.invoke()

        async def run_second() -> None:
            nonlocal result2
            result2 = await t2.invoke()

        with _unwrap_single_failure():
            async with anyio.create_task_group() as tg:
                tg.start_soon(run_first)
                tg.start_soon(run_second)

        assert result1 is not None
        assert result2 is not None

        if isinstance(result1, Err):
            return result1
        if isinstance(result2, Err):
            return result2
        return Ok((result1.value, result2.value))

    return TaskResult(_zipped)


# ---------------------------------------------------------------------
# Time
# ---------------------------------------------------------------------


def timeout[T, E](
    t: TaskResult[T, E],
    seconds: float,
    on_timeout: Callable[[], E] | None = None,
) -> TaskResult[T, E | ServiceError]:
    """Race an invocation against a deadline that resolves to Err.

    If `t` does not settle within `seconds`, its invocation is cancelled and
    the result is Err(on_timeout()), by default
    Err(ServiceError.timeout(seconds)). The timeout never raises.

    Args:
        t: The step to bound.
        seconds: Deadline in seconds.
        on_timeout: Builds the timeout error.

    Returns:
        TaskResult bounded by the deadline.

    Raises:
        ValueError: If seconds is not positive.
    """
    if seconds <= 0:
        raise ValueError(f'seconds must be positive, got {seconds}')

    async def _bounded() -> Result[T, E | ServiceError]:
        result: Result[T, E] | None = None
        with anyio.move_on_after(seconds):
            result = await t.invoke()
        if result is None:
            return Err(on_timeout() if on_timeout is not None else ServiceError.timeout(seconds))
        return result

    return TaskResult(_bounded)
