"""TaskResult: a deferred asynchronous computation producing a Result.

TaskResult wraps a zero-argument callable returning Awaitable[Result[T, E]]
and provides transformation methods that build new, still-deferred values.
Nothing runs until the TaskResult is invoked (`await t`, `await t()` or
`await t.invoke()`), and every invocation runs the whole pipeline again.

`try_catch` is the boundary where raising code enters: a TaskResult built by
it never raises for `Exception` subclasses, so downstream combinators need no
exception handling of their own.

Example:
    ```python
    fetch_user = lambda id: try_catch(lambda: http.get(f'/users/{id}'), on_error(ErrorKind.TRANSPORT))

    pipeline = (
        fetch_user(1)
        .and_then_result(decoder(User))
        .map(lambda user: user.name)
    )

    result = await pipeline   # Ok('ada') or Err(ServiceError(...))
    ```
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable, Coroutine, Generator
from typing import Any

from lazy_result.result import Err, Ok, Result
from lazy_result.task import Task

__all__ = ['TaskResult', 'fail', 'from_throwing', 'pure', 'try_catch']


class TaskResult[T, E]:
    """Lazy, re-invokable wrapper for async Result-producing operations.

    Every method returns a new TaskResult and none of them invoke the
    receiver. Functions passed to the methods are expected to be pure; if
    one raises, the exception propagates out of the invocation.

    Attributes:
        _fn: The zero-argument callable that starts the work.

    Example:
        ```python
        async def main():
            t = TaskResult.from_ok(5).map(lambda x: x * 2)
            assert await t == Ok(10)
            assert await t == Ok(10)   # runs again

        asyncio.run(main())
        ```
    """

    __slots__ = ('_fn',)

    def __init__(self, fn: Callable[[], Awaitable[Result[T, E]]]) -> None:
        """Create a TaskResult from a zero-argument async callable.

        Args:
            fn: Callable returning an awaitable Result. It is not called here.
        """
        self._fn = fn

    # -----------------------------------------------------------------
    # Construction
    # -----------------------------------------------------------------

    @classmethod
    def from_ok(cls, value: T) -> TaskResult[T, E]:
        """Create a TaskResult resolving to Ok(value).

        Args:
            value: The success value.

        Returns:
            TaskResult resolving to Ok(value) on every invocation.
        """

        async def _ok() -> Result[T, E]:
            return Ok(value)

        return cls(_ok)

    @classmethod
    def from_err(cls, error: E) -> TaskResult[T, E]:
        """Create a TaskResult resolving to Err(error).

        Args:
            error: The error value.

        Returns:
            TaskResult resolving to Err(error) on every invocation.
        """

        async def _err() -> Result[T, E]:
            return Err(error)

        return cls(_err)

    @classmethod
    def from_result(cls, result: Result[T, E]) -> TaskResult[T, E]:
        """Create a TaskResult from a synchronous Result.

        Args:
            result: A Result[T, E] value.

        Returns:
            TaskResult resolving to that result.
        """

        async def _result() -> Result[T, E]:
            return result

        return cls(_result)

    @classmethod
    def from_task(cls, task: Task[T]) -> TaskResult[T, E]:
        """Lift a Task that is not expected to fail into the Ok channel.

        Exceptions raised by the task are not caught; use `try_catch` for
        tasks that may fail.

        Args:
            task: The task to lift.

        Returns:
            TaskResult resolving to Ok(await task).
        """

        async def _lifted() -> Result[T, E]:
            return Ok(await task.invoke())

        return cls(_lifted)

    # -----------------------------------------------------------------
    # Invocation
    # -----------------------------------------------------------------

    def invoke(self) -> Coroutine[Any, Any, Result[T, E]]:
        """Start the computation.

        Returns:
            Coroutine resolving to the Result.
        """

        async def _run() -> Result[T, E]:
            return await self._fn()

        return _run()

    def __call__(self) -> Coroutine[Any, Any, Result[T, E]]:
        return self.invoke()

    def __await__(self) -> Generator[Any, Any, Result[T, E]]:
        """Support `await t`; each await is a fresh invocation."""
        return self.invoke().__await__()

    # -----------------------------------------------------------------
    # Transformations
    # -----------------------------------------------------------------

    def map[U](self, f: Callable[[T], U]) -> TaskResult[U, E]:
        """Apply a sync function to the Ok value.

        Args:
            f: Function applied to the Ok value.

        Returns:
            New TaskResult with the transformed value; Err passes through.
        """

        async def _mapped() -> Result[U, E]:
            result = await self._fn()
            if isinstance(result, Ok):
                return Ok(f(result.value))
            return result

        return TaskResult(_mapped)

    def map_err[F](self, g: Callable[[E], F]) -> TaskResult[T, F]:
        """Apply a sync function to the Err value.

        Args:
            g: Function applied to the error.

        Returns:
            New TaskResult with the transformed error; Ok passes through.
        """

        async def _mapped() -> Result[T, F]:
            result = await self._fn()
            if isinstance(result, Err):
                return Err(g(result.error))
            return result

        return TaskResult(_mapped)

    def bimap[U, F](self, g: Callable[[E], F], f: Callable[[T], U]) -> TaskResult[U, F]:
        """Apply `g` to an Err or `f` to an Ok, never both.

        Args:
            g: Function applied to the error.
            f: Function applied to the value.

        Returns:
            New TaskResult with one side transformed.
        """

        async def _mapped() -> Result[U, F]:
            result = await self._fn()
            if isinstance(result, Ok):
                return Ok(f(result.value))
            return Err(g(result.error))

        return TaskResult(_mapped)

    def and_then[U](self, f: Callable[[T], TaskResult[U, E]]) -> TaskResult[U, E]:
        """Sequence a dependent TaskResult-producing step.

        `f` is called only after this TaskResult resolved to Ok, and its
        TaskResult is invoked after that; the two steps never overlap.
        On Err, `f` is never called.

        Args:
            f: Builds the next step from the Ok value.

        Returns:
            New TaskResult running both steps in order.

        Example:
            ```python
            person = fetch_person('123').and_then(lambda p: fetch_record(p.record_id))
            ```
        """

        async def _chained() -> Result[U, E]:
            result = await self._fn()
            if isinstance(result, Ok):
                return await f(result.value).invoke()
            return result

        return TaskResult(_chained)

    def and_then_result[U](self, f: Callable[[T], Result[U, E]]) -> TaskResult[U, E]:
        """Chain a synchronous Result-returning function, such as a decoder.

        Args:
            f: Function taking the Ok value and returning a Result.

        Returns:
            New TaskResult with the chained result.
        """

        async def _chained() -> Result[U, E]:
            result = await self._fn()
            if isinstance(result, Ok):
                return f(result.value)
            return result

        return TaskResult(_chained)

    def or_else[F](self, f: Callable[[E], TaskResult[T, F]]) -> TaskResult[T, F]:
        """Recover from an Err with another TaskResult.

        Args:
            f: Builds the recovery step from the error.

        Returns:
            New TaskResult; Ok passes through and `f` is not called.
        """

        async def _recovered() -> Result[T, F]:
            result = await self._fn()
            if isinstance(result, Err):
                return await f(result.error).invoke()
            return result

        return TaskResult(_recovered)

    def ensure(self, test: Callable[[T], bool], on_fail: Callable[[T], E]) -> TaskResult[T, E]:
        """Turn an Ok that fails a predicate into an Err.

        Args:
            test: Predicate the Ok value must satisfy.
            on_fail: Builds the error from the rejected value.

        Returns:
            New TaskResult applying the check.
        """

        async def _checked() -> Result[T, E]:
            result = await self._fn()
            if isinstance(result, Ok) and not test(result.value):
                return Err(on_fail(result.value))
            return result

        return TaskResult(_checked)

    def tap(self, f: Callable[[T], Any]) -> TaskResult[T, E]:
        """Call `f` with the Ok value for side effects; the Result is unchanged."""

        async def _tapped() -> Result[T, E]:
            result = await self._fn()
            if isinstance(result, Ok):
                f(result.value)
            return result

        return TaskResult(_tapped)

    def tap_err(self, g: Callable[[E], Any]) -> TaskResult[T, E]:
        """Call `g` with the error for side effects; the Result is unchanged."""

        async def _tapped() -> Result[T, E]:
            result = await self._fn()
            if isinstance(result, Err):
                g(result.error)
            return result

        return TaskResult(_tapped)

    # -----------------------------------------------------------------
    # Terminal elimination
    # -----------------------------------------------------------------

    def match[R](self, on_err: Callable[[E], R], on_ok: Callable[[T], R]) -> Task[R]:
        """Eliminate into a plain value once invoked.

        Args:
            on_err: Branch for Err.
            on_ok: Branch for Ok.

        Returns:
            Task[R] that runs this TaskResult and exactly one branch.
        """

        async def _matched() -> R:
            result = await self._fn()
            if isinstance(result, Ok):
                return on_ok(result.value)
            return on_err(result.error)

        return Task(_matched)

    def get_or_else(self, fallback: Callable[[], T]) -> Task[T]:
        """Unwrap with a lazily computed default once invoked.

        `fallback` is called only when the invocation resolves to Err, never
        while building the pipeline.

        Args:
            fallback: Zero-argument callable producing the default.

        Returns:
            Task[T] resolving to the Ok value or fallback().
        """

        async def _unwrapped() -> T:
            result = await self._fn()
            if isinstance(result, Ok):
                return result.value
            return fallback()

        return Task(_unwrapped)

    def __repr__(self) -> str:
        return f'TaskResult({self._fn!r})'


def pure[T, E](value: T) -> TaskResult[T, E]:
    """Lift a value into the Ok channel. Alias of `TaskResult.from_ok`."""
    return TaskResult.from_ok(value)


def fail[T, E](error: E) -> TaskResult[T, E]:
    """Lift an error into the Err channel. Alias of `TaskResult.from_err`."""
    return TaskResult.from_err(error)


def try_catch[T, E](
    op: Callable[[], Awaitable[T] | T],
    on_error: Callable[[Exception], E],
) -> TaskResult[T, E]:
    """Lift an operation that may raise into a TaskResult.

    When invoked, runs `op`. A resolved value `a` gives Ok(a). An exception
    raised synchronously by `op()`, or while awaiting its result, gives
    Err(on_error(exc)). The invocation itself never raises for `Exception`
    subclasses; cancellation and other `BaseException`s propagate so the
    event loop can still cancel the work.

    `op` may return a plain value instead of an awaitable.

    Args:
        op: Zero-argument callable starting the operation. Not called here.
        on_error: Maps the raised exception to an error payload.

    Returns:
        TaskResult[T, E] that never raises on invocation.

    Example:
        ```python
        t = try_catch(lambda: client.get('/person/123'), on_error(ErrorKind.TRANSPORT))
        await t   # Ok(response) or Err(ServiceError(kind=TRANSPORT, ...))
        ```
    """

    async def _caught() -> Result[T, E]:
        try:
            value = op()
            if inspect.isawaitable(value):
                value = await value
            return Ok(value)
        except Exception as e:
            return Err(on_error(e))

    return TaskResult(_caught)


from_throwing = try_catch
