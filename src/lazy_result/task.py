"""Task: a deferred asynchronous computation.

A Task holds a zero-argument callable that returns an awaitable. Building a
Task never starts the work; every invocation starts it again.

Example:
    ```python
    async def load() -> int:
        return 42

    task = defer(load)      # nothing has run yet
    value = await task      # runs load()
    again = await task()    # runs load() a second time
    ```
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Coroutine, Generator
from typing import Any

__all__ = ['Task', 'defer', 'invoke']


class Task[T]:
    """Deferred asynchronous computation producing T.

    Unlike a coroutine object, a Task can be awaited any number of times;
    each await calls the wrapped function anew. No result is cached.

    Failures are not translated: if the wrapped awaitable raises, awaiting
    the Task raises the same exception. Use `try_catch` to fold failures
    into a Result.

    Attributes:
        _fn: The zero-argument callable that starts the work.
    """

    __slots__ = ('_fn',)

    def __init__(self, fn: Callable[[], Awaitable[T]]) -> None:
        """Create a Task from a zero-argument async callable.

        Args:
            fn: Callable returning an awaitable. It is not called here.
        """
        self._fn = fn

    @classmethod
    def of(cls, value: T) -> Task[T]:
        """Create a Task that resolves to `value`.

        Args:
            value: The value to resolve with.

        Returns:
            Task[T]: A task resolving to value on every invocation.
        """

        async def _of() -> T:
            return value

        return cls(_of)

    def invoke(self) -> Coroutine[Any, Any, T]:
        """Start the computation.

        Returns:
            Coroutine resolving to the wrapped function's result.
        """

        async def _run() -> T:
            return await self._fn()

        return _run()

    def __call__(self) -> Coroutine[Any, Any, T]:
        return self.invoke()

    def __await__(self) -> Generator[Any, Any, T]:
        """Support `await task`; each await is a fresh invocation."""
        return self.invoke().__await__()

    def map[U](self, f: Callable[[T], U]) -> Task[U]:
        """Apply a sync function to the resolved value.

        Args:
            f: Function applied after the task resolves.

        Returns:
            Task[U]: A new deferred task.
        """

        async def _mapped() -> U:
            return f(await self._fn())

        return Task(_mapped)

    def and_then[U](self, f: Callable[[T], Task[U]]) -> Task[U]:
        """Sequence another task that depends on this task's value.

        Args:
            f: Builds the next task from the resolved value.

        Returns:
            Task[U]: A new deferred task running both steps in order.
        """

        async def _chained() -> U:
            return await f(await self._fn()).invoke()

        return Task(_chained)

    def __repr__(self) -> str:
        return f'Task({self._fn!r})'


def defer[T](fn: Callable[[], Awaitable[T]]) -> Task[T]:
    """Wrap a zero-argument async callable without calling it.

    Args:
        fn: Callable returning an awaitable.

    Returns:
        Task[T]: The deferred computation.
    """
    return Task(fn)


def invoke[T](task: Task[T]) -> Coroutine[Any, Any, T]:
    """Start a Task.

    Args:
        task: The task to run.

    Returns:
        Coroutine resolving to the task's value.
    """
    return task.invoke()
