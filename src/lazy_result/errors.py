"""Service error taxonomy: dual struct+exception for Result and raise-based code.

Every library-supplied step (`service`, `decoder`, `timeout`) fails with a
`ServiceError`. Errors coming from foreign steps are reconciled explicitly
with `map_err` before they are chained; nothing unifies error types
implicitly.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import Any

import msgspec

__all__ = [
    'ErrorKind',
    'ServiceError',
    'ServiceException',
    'on_error',
]


class ErrorKind(Enum):
    """Closed set of failure kinds a service pipeline can report."""

    TRANSPORT = 'transport'
    DECODE = 'decode'
    AUTH = 'auth'
    DOMAIN = 'domain'
    TIMEOUT = 'timeout'


class ServiceError(msgspec.Struct, frozen=True, gc=False):
    """Pipeline failure - struct variant for Result[T, ServiceError].

    Every field encodes with msgspec, so errors can be logged or sent over
    the wire as-is. Exceptions passed as `cause` are stored as their repr.

    Attributes:
        kind: Which stage failed.
        message: Human-readable description.
        cause: Text of the original exception or payload, if any.
    """

    kind: ErrorKind
    message: str
    cause: str | None = None

    @classmethod
    def transport(cls, cause: Any = None, *, message: str | None = None) -> ServiceError:
        return cls(ErrorKind.TRANSPORT, message or _describe(cause, 'transport failure'), _cause_text(cause))

    @classmethod
    def decode(cls, cause: Any = None, *, message: str | None = None) -> ServiceError:
        return cls(
            ErrorKind.DECODE,
            message or _describe(cause, 'payload does not match expected shape'),
            _cause_text(cause),
        )

    @classmethod
    def auth(cls, cause: Any = None, *, message: str | None = None) -> ServiceError:
        return cls(ErrorKind.AUTH, message or _describe(cause, 'authentication failed'), _cause_text(cause))

    @classmethod
    def domain(cls, cause: Any = None, *, message: str) -> ServiceError:
        return cls(ErrorKind.DOMAIN, message, _cause_text(cause))

    @classmethod
    def timeout(cls, seconds: float) -> ServiceError:
        return cls(ErrorKind.TIMEOUT, f'Timeout after {seconds}s')

    def to_exception(self) -> ServiceException:
        """Convert to exception for raise-based code."""
        return ServiceException(self)


class ServiceException(Exception):
    """Pipeline failure - exception variant.

    Raising this inside an operation lifted by `try_catch` with an
    `on_error(...)` mapper keeps the carried struct as-is.
    """

    def __init__(self, error: ServiceError) -> None:
        self.error = error
        super().__init__(f'{error.kind.value}: {error.message}')

    def to_struct(self) -> ServiceError:
        """Convert to struct for Result-based code."""
        return self.error


def on_error(kind: ErrorKind) -> Callable[[Exception], ServiceError]:
    """Build an exception-to-ServiceError mapper for `try_catch`.

    Args:
        kind: Kind assigned to foreign exceptions.

    Returns:
        Mapper that unwraps ServiceException and tags everything else.

    Example:
        ```python
        try_catch(lambda: client.get(url), on_error(ErrorKind.TRANSPORT))
        ```
    """

    def _map(exc: Exception) -> ServiceError:
        if isinstance(exc, ServiceException):
            return exc.to_struct()
        return ServiceError(kind, _describe(exc, kind.value), repr(exc))

    return _map


def _describe(cause: Any, default: str) -> str:
    if isinstance(cause, BaseException):
        text = str(cause)
        return f'{type(cause).__name__}: {text}' if text else type(cause).__name__
    return default


def _cause_text(cause: Any) -> str | None:
    if cause is None or isinstance(cause, str):
        return cause
    return repr(cause)
