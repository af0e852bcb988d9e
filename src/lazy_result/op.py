"""Curried combinators for point-free pipelines.

Each function takes the combinator's arguments and returns a
`TaskResult -> TaskResult` step, ready for `pipe` or `flow`.

Example:
    ```python
    from lazy_result import flow, op

    fetch_person_record = flow(
        fetch_person,
        op.chain_result(decoder(Person)),
        op.chain(lambda person: fetch_record(person.record_id)),
        op.map_err(lambda e: e.message),
    )
    ```
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from lazy_result import combinators
from lazy_result.result import Result
from lazy_result.task_result import TaskResult

__all__ = [
    'bimap',
    'chain',
    'chain_result',
    'ensure',
    'map',
    'map_err',
    'or_else',
    'tap',
    'tap_err',
    'timeout',
]

type Step[T, E, U, F] = Callable[[TaskResult[T, E]], TaskResult[U, F]]


def map[T, U, E](f: Callable[[T], U]) -> Step[T, E, U, E]:  # noqa: A001
    return lambda t: combinators.map(t, f)


def map_err[T, E, F](g: Callable[[E], F]) -> Step[T, E, T, F]:
    return lambda t: combinators.map_err(t, g)


def bimap[T, U, E, F](g: Callable[[E], F], f: Callable[[T], U]) -> Step[T, E, U, F]:
    return lambda t: combinators.bimap(t, g, f)


def chain[T, U, E](f: Callable[[T], TaskResult[U, E]]) -> Step[T, E, U, E]:
    return lambda t: combinators.chain(t, f)


def chain_result[T, U, E](f: Callable[[T], Result[U, E]]) -> Step[T, E, U, E]:
    return lambda t: combinators.chain_result(t, f)


def or_else[T, E, F](f: Callable[[E], TaskResult[T, F]]) -> Step[T, E, T, F]:
    return lambda t: combinators.or_else(t, f)


def ensure[T, E](test: Callable[[T], bool], on_fail: Callable[[T], E]) -> Step[T, E, T, E]:
    return lambda t: combinators.ensure(t, test, on_fail)


def tap[T, E](f: Callable[[T], Any]) -> Step[T, E, T, E]:
    return lambda t: combinators.tap(t, f)


def tap_err[T, E](g: Callable[[E], Any]) -> Step[T, E, T, E]:
    return lambda t: combinators.tap_err(t, g)


def timeout[T, E](seconds: float, on_timeout: Callable[[], E] | None = None) -> Step[T, E, T, Any]:
    """Curried `combinators.timeout`; validates `seconds` eagerly."""
    if seconds <= 0:
        raise ValueError(f'seconds must be positive, got {seconds}')
    return lambda t: combinators.timeout(t, seconds, on_timeout)
