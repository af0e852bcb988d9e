"""pipe(), flow() and compose() for assembling pipelines from plain functions.

Unlike the Result-aware `pipe` of eager libraries, these helpers only thread
values through functions. Short-circuiting lives in the TaskResult
combinators, so a pipeline built here stays deferred until it is invoked.
"""

from __future__ import annotations

from collections.abc import Callable
from functools import reduce
from typing import Any, TypeVar, overload

__all__ = ['compose', 'flow', 'identity', 'pipe']

T = TypeVar('T')
T1 = TypeVar('T1')
T2 = TypeVar('T2')
T3 = TypeVar('T3')
T4 = TypeVar('T4')
T5 = TypeVar('T5')
T6 = TypeVar('T6')


def identity[T](x: T) -> T:
    """Identity function: returns its argument unchanged."""
    return x


# Overloads for type inference (up to 6 functions)
@overload
def pipe(value: T, /) -> T: ...
@overload
def pipe(value: T, fn1: Callable[[T], T1], /) -> T1: ...
@overload
def pipe(value: T, fn1: Callable[[T], T1], fn2: Callable[[T1], T2], /) -> T2: ...
@overload
def pipe(value: T, fn1: Callable[[T], T1], fn2: Callable[[T1], T2], fn3: Callable[[T2], T3], /) -> T3: ...
@overload
def pipe(
    value: T,
    fn1: Callable[[T], T1],
    fn2: Callable[[T1], T2],
    fn3: Callable[[T2], T3],
    fn4: Callable[[T3], T4],
    /,
) -> T4: ...
@overload
def pipe(
    value: T,
    fn1: Callable[[T], T1],
    fn2: Callable[[T1], T2],
    fn3: Callable[[T2], T3],
    fn4: Callable[[T3], T4],
    fn5: Callable[[T4], T5],
    /,
) -> T5: ...
@overload
def pipe(
    value: T,
    fn1: Callable[[T], T1],
    fn2: Callable[[T1], T2],
    fn3: Callable[[T2], T3],
    fn4: Callable[[T3], T4],
    fn5: Callable[[T4], T5],
    fn6: Callable[[T5], T6],
    /,
) -> T6: ...


def pipe(value: Any, *fns: Callable[..., Any]) -> Any:
    """Thread a value through functions, left to right.

    Args:
        value: The initial value.
        *fns: Functions to apply in sequence.

    Returns:
        The last function's result, or `value` if no functions are given.

    Example:
        ```python
        pipe(fetch_person('123'), op.chain_result(decode), op.map(str))
        # TaskResult(...) - nothing has run yet
        ```
    """
    return reduce(lambda acc, fn: fn(acc), fns, value)


@overload
def flow(fn1: Callable[..., T1], /) -> Callable[..., T1]: ...
@overload
def flow(fn1: Callable[..., T1], fn2: Callable[[T1], T2], /) -> Callable[..., T2]: ...
@overload
def flow(fn1: Callable[..., T1], fn2: Callable[[T1], T2], fn3: Callable[[T2], T3], /) -> Callable[..., T3]: ...
@overload
def flow(
    fn1: Callable[..., T1],
    fn2: Callable[[T1], T2],
    fn3: Callable[[T2], T3],
    fn4: Callable[[T3], T4],
    /,
) -> Callable[..., T4]: ...
@overload
def flow(
    fn1: Callable[..., T1],
    fn2: Callable[[T1], T2],
    fn3: Callable[[T2], T3],
    fn4: Callable[[T3], T4],
    fn5: Callable[[T4], T5],
    /,
) -> Callable[..., T5]: ...
@overload
def flow(*fns: Callable[..., Any]) -> Callable[..., Any]: ...


def flow(*fns: Callable[..., Any]) -> Callable[..., Any]:
    """Compose functions left to right into a named, reusable function.

    The first function receives the call's arguments; each later function
    receives the previous result. This is how a service is named:

        fetch_person_record = flow(fetch_person, op.chain_result(decode))

    Args:
        *fns: At least one function.

    Returns:
        The composed function.

    Raises:
        ValueError: If no functions are given.
    """
    if not fns:
        raise ValueError('flow() requires at least one function')
    first, *rest = fns

    def composed(*args: Any, **kwargs: Any) -> Any:
        return pipe(first(*args, **kwargs), *rest)

    return composed


def compose(*fns: Callable[[Any], Any]) -> Callable[[Any], Any]:
    """Compose single-argument functions right to left.

    `compose(g, f)(x) == g(f(x))`; `compose()` is `identity`.
    """
    if not fns:
        return identity
    return lambda x: reduce(lambda acc, fn: fn(acc), reversed(fns), x)
