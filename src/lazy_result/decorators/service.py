"""@service decorator: lift an async function into a TaskResult factory."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, overload

import wrapt

from lazy_result import errors
from lazy_result.errors import ErrorKind, ServiceError
from lazy_result.task_result import TaskResult, try_catch

__all__ = ['service']


@overload
def service[**P, T](
    func: Callable[P, Awaitable[T]],
) -> Callable[P, TaskResult[T, ServiceError]]: ...


@overload
def service[E](
    func: None = None,
    *,
    on_error: Callable[[Exception], E],
) -> Callable[[Callable[..., Awaitable[Any]]], Callable[..., TaskResult[Any, E]]]: ...


def service(
    func: Callable[..., Awaitable[Any]] | None = None,
    *,
    on_error: Callable[[Exception], Any] | None = None,
) -> Any:
    """Decorator that turns an async function into a deferred service call.

    The decorated function returns a TaskResult instead of a coroutine.
    Calling it performs no work; each invocation of the returned TaskResult
    calls the original function again, and anything it raises becomes Err.

    Can be used with or without arguments:
        @service
        async def fetch_person(id): ...

        @service(on_error=errors.on_error(ErrorKind.AUTH))
        async def fetch_token(): ...

    Args:
        func: The async function to wrap (when used without parentheses).
        on_error: Maps raised exceptions to errors. Defaults to a
            ServiceError of kind TRANSPORT.

    Returns:
        A wrapped function returning TaskResult[T, E].

    Example:
        ```python
        @service
        async def fetch_person(id: str) -> bytes:
            return await client.get(f'/person/{id}')

        t = fetch_person('123')   # nothing sent yet
        await t                   # Ok(b'...') or Err(ServiceError(kind=TRANSPORT))
        ```
    """
    mapper = on_error if on_error is not None else errors.on_error(ErrorKind.TRANSPORT)

    @wrapt.decorator
    def wrapper(
        wrapped: Callable[..., Awaitable[Any]],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> TaskResult[Any, Any]:
        return try_catch(lambda: wrapped(*args, **kwargs), mapper)

    if func is not None:
        return wrapper(func)
    return wrapper
