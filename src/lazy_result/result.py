"""Disjoint Result: Ok[T] | Err[E] for modern Python 3.12+.

A Result is a closed two-variant value. Either side can be addressed
(`map`, `map_err`, `bimap`) without deciding which one occurred; `match` and
`get_or_else` are the only ways a Result is unwrapped into a plain value.

Nothing in this module performs I/O or raises. `attempt` is the synchronous
boundary where raising code is folded into `Err`.

Example:
    ```python
    from lazy_result.result import Ok, Err, map, match

    r = map(Ok(20), lambda x: x + 1)
    print(r)  # Ok(21)

    label = match(Err('boom'), lambda e: f'failed: {e}', str)
    print(label)  # failed: boom
    ```
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeGuard

__all__ = [
    'Err',
    'Ok',
    'Result',
    'and_then',
    'attempt',
    'bimap',
    'failure',
    'from_predicate',
    'get_or_else',
    'is_err',
    'is_ok',
    'map',
    'map_err',
    'match',
    'or_else',
    'success',
]


@dataclass(slots=True, frozen=True)
class Ok[T]:
    """Represents a successful computation containing a value of type T.

    Attributes:
        value: The successful result value.
    """

    value: T
    __match_args__ = ('value',)

    def is_ok(self) -> bool:
        """Return True, indicating this is a successful result."""
        return True

    def is_err(self) -> bool:
        """Return False, indicating this is not an error result."""
        return False

    def map[U](self, f: Callable[[T], U]) -> Ok[U]:
        """Transform the value using a function.

        Args:
            f: A callable that takes the value and returns a new value of type U.

        Returns:
            Ok[U]: A new Ok containing the transformed value.
        """
        return Ok(f(self.value))

    def map_err(self, g: Callable[[Any], Any]) -> Ok[T]:
        """Transform the error (no-op for Ok).

        Returns:
            Ok[T]: Returns self unchanged.
        """
        return self

    def bimap[U](self, g: Callable[[Any], Any], f: Callable[[T], U]) -> Ok[U]:
        """Apply `f` to the value; `g` is never called for Ok.

        Args:
            g: Error transformation (unused for Ok).
            f: Value transformation.

        Returns:
            Ok[U]: A new Ok containing the transformed value.
        """
        return Ok(f(self.value))

    def and_then[U, E](self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Chain a computation that may fail.

        Args:
            f: A callable that takes the value and returns a Result.

        Returns:
            Result[U, E]: The result of applying f to the value.
        """
        return f(self.value)

    def or_else(self, f: Callable[[Any], Any]) -> Ok[T]:
        """Handle the error case (no-op for Ok).

        Returns:
            Ok[T]: Returns self unchanged.
        """
        return self

    def match[R](self, on_err: Callable[[Any], R], on_ok: Callable[[T], R]) -> R:
        """Eliminate the Result; only `on_ok` runs for Ok.

        Args:
            on_err: Branch for Err (unused for Ok).
            on_ok: Branch for Ok.

        Returns:
            R: The result of `on_ok(value)`.
        """
        return on_ok(self.value)

    def get_or_else(self, fallback: Callable[[], T]) -> T:
        """Unwrap the value; `fallback` is never evaluated for Ok.

        Args:
            fallback: Zero-argument callable producing a default (unused for Ok).

        Returns:
            T: The contained value.
        """
        return self.value

    def ok(self) -> T | None:
        """Convert to an optional value.

        Returns:
            T | None: The contained value.
        """
        return self.value

    def err(self) -> None:
        """Convert to an optional error.

        Returns:
            None: Always None for Ok instances.
        """
        return None

    def __repr__(self) -> str:
        """Return a string representation of the Ok instance."""
        return f'Ok({self.value!r})'


@dataclass(slots=True, frozen=True)
class Err[E]:
    """Represents a failed computation containing an error of type E.

    The error payload is arbitrary data; it does not have to be an exception.

    Attributes:
        error: The error payload.
    """

    error: E
    __match_args__ = ('error',)

    def is_ok(self) -> bool:
        """Return False, indicating this is not a successful result."""
        return False

    def is_err(self) -> bool:
        """Return True, indicating this is an error result."""
        return True

    def map(self, f: Callable[[Any], Any]) -> Err[E]:
        """Transform the value (no-op for Err).

        Returns:
            Err[E]: Returns self unchanged.
        """
        return self

    def map_err[F](self, g: Callable[[E], F]) -> Err[F]:
        """Transform the error using a function.

        Args:
            g: A callable that takes the error and returns a new error.

        Returns:
            Err[F]: A new Err containing the transformed error.
        """
        return Err(g(self.error))

    def bimap[F](self, g: Callable[[E], F], f: Callable[[Any], Any]) -> Err[F]:
        """Apply `g` to the error; `f` is never called for Err.

        Args:
            g: Error transformation.
            f: Value transformation (unused for Err).

        Returns:
            Err[F]: A new Err containing the transformed error.
        """
        return Err(g(self.error))

    def and_then(self, f: Callable[[Any], Any]) -> Err[E]:
        """Chain a computation (short-circuits for Err).

        Returns:
            Err[E]: Returns self unchanged; `f` is never called.
        """
        return self

    def or_else[T, F](self, f: Callable[[E], Result[T, F]]) -> Result[T, F]:
        """Recover from the error with a computation that may fail.

        Args:
            f: A callable that takes the error and returns a Result.

        Returns:
            Result[T, F]: The result of applying f to the error.
        """
        return f(self.error)

    def match[R](self, on_err: Callable[[E], R], on_ok: Callable[[Any], R]) -> R:
        """Eliminate the Result; only `on_err` runs for Err.

        Args:
            on_err: Branch for Err.
            on_ok: Branch for Ok (unused for Err).

        Returns:
            R: The result of `on_err(error)`.
        """
        return on_err(self.error)

    def get_or_else[T](self, fallback: Callable[[], T]) -> T:
        """Evaluate and return the fallback.

        Args:
            fallback: Zero-argument callable producing a default.

        Returns:
            T: The result of `fallback()`.
        """
        return fallback()

    def ok(self) -> None:
        """Convert to an optional value.

        Returns:
            None: Always None for Err instances.
        """
        return None

    def err(self) -> E | None:
        """Convert to an optional error.

        Returns:
            E | None: The contained error.
        """
        return self.error

    def __repr__(self) -> str:
        """Return a string representation of the Err instance."""
        return f'Err({self.error!r})'


type Result[T, E] = Ok[T] | Err[E]


# ---------------------------------------------------------------------
# Constructors
# ---------------------------------------------------------------------


def success[T, E](a: T) -> Result[T, E]:
    """Build the success variant.

    Args:
        a: The success payload.

    Returns:
        Result[T, E]: Ok(a).
    """
    return Ok(a)


def failure[T, E](e: E) -> Result[T, E]:
    """Build the failure variant.

    Args:
        e: The failure payload.

    Returns:
        Result[T, E]: Err(e).
    """
    return Err(e)


def from_predicate[T, E](a: T, test: Callable[[T], bool], on_fail: Callable[[T], E]) -> Result[T, E]:
    """Build a Result from a predicate check.

    Args:
        a: The candidate value.
        test: Predicate the value must satisfy.
        on_fail: Builds the error from the rejected value.

    Returns:
        Result[T, E]: Ok(a) if test(a) holds, otherwise Err(on_fail(a)).
    """
    return Ok(a) if test(a) else Err(on_fail(a))


def attempt[T, E](fn: Callable[[], T], on_error: Callable[[Exception], E]) -> Result[T, E]:
    """Call a function that may raise and fold the outcome into a Result.

    Only `Exception` subclasses are caught; `KeyboardInterrupt` and friends
    propagate.

    Args:
        fn: Zero-argument callable that may raise.
        on_error: Maps the raised exception to an error payload.

    Returns:
        Result[T, E]: Ok(fn()) or Err(on_error(exc)).

    Example:
        ```python
        attempt(lambda: int('42'), str)   # Ok(42)
        attempt(lambda: int('x'), type)   # Err(<class 'ValueError'>)
        ```
    """
    try:
        return Ok(fn())
    except Exception as e:
        return Err(on_error(e))


# ---------------------------------------------------------------------
# Free-function forms
# ---------------------------------------------------------------------


def is_ok[T, E](r: Result[T, E]) -> TypeGuard[Ok[T]]:
    """Check if a Result is Ok.

    Args:
        r: The Result to check.

    Returns:
        TypeGuard[Ok[T]]: True if r is Ok, narrowing the type.
    """
    return isinstance(r, Ok)


def is_err[T, E](r: Result[T, E]) -> TypeGuard[Err[E]]:
    """Check if a Result is Err.

    Args:
        r: The Result to check.

    Returns:
        TypeGuard[Err[E]]: True if r is Err, narrowing the type.
    """
    return isinstance(r, Err)


def map[T, U, E](r: Result[T, E], f: Callable[[T], U]) -> Result[U, E]:  # noqa: A001
    """Apply a function to the Ok value; Err passes through untouched.

    Args:
        r: The Result to transform.
        f: Function applied to the Ok value.

    Returns:
        Result[U, E]: Ok(f(value)) or the original Err.
    """
    return Ok(f(r.value)) if isinstance(r, Ok) else r


def map_err[T, E, F](r: Result[T, E], g: Callable[[E], F]) -> Result[T, F]:
    """Apply a function to the Err payload; Ok passes through untouched.

    Args:
        r: The Result to transform.
        g: Function applied to the error.

    Returns:
        Result[T, F]: Err(g(error)) or the original Ok.
    """
    return Err(g(r.error)) if isinstance(r, Err) else r


def bimap[T, U, E, F](r: Result[T, E], g: Callable[[E], F], f: Callable[[T], U]) -> Result[U, F]:
    """Apply exactly one of `g` or `f` depending on the variant.

    Args:
        r: The Result to transform.
        g: Function applied on Err.
        f: Function applied on Ok.

    Returns:
        Result[U, F]: The transformed Result.
    """
    return Ok(f(r.value)) if isinstance(r, Ok) else Err(g(r.error))


def and_then[T, U, E](r: Result[T, E], f: Callable[[T], Result[U, E]]) -> Result[U, E]:
    """Chain a Result-returning function onto an Ok value.

    Args:
        r: The Result to chain from.
        f: Function returning the next Result.

    Returns:
        Result[U, E]: f(value) if Ok, otherwise the original Err.
    """
    return f(r.value) if isinstance(r, Ok) else r


def or_else[T, E, F](r: Result[T, E], f: Callable[[E], Result[T, F]]) -> Result[T, F]:
    """Recover from an Err with a Result-returning function.

    Args:
        r: The Result to recover.
        f: Function returning a replacement Result from the error.

    Returns:
        Result[T, F]: f(error) if Err, otherwise the original Ok.
    """
    return f(r.error) if isinstance(r, Err) else r


def match[T, E, R](r: Result[T, E], on_err: Callable[[E], R], on_ok: Callable[[T], R]) -> R:
    """Eliminate a Result into a plain value; exactly one branch runs.

    Args:
        r: The Result to eliminate.
        on_err: Branch for Err.
        on_ok: Branch for Ok.

    Returns:
        R: Whatever the selected branch returns.
    """
    return on_ok(r.value) if isinstance(r, Ok) else on_err(r.error)


def get_or_else[T, E](r: Result[T, E], fallback: Callable[[], T]) -> T:
    """Unwrap an Ok, or lazily compute a default.

    Args:
        r: The Result to unwrap.
        fallback: Zero-argument callable, evaluated only for Err.

    Returns:
        T: The contained value or fallback().
    """
    return r.value if isinstance(r, Ok) else fallback()
