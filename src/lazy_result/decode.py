"""Decoding step: raw payload -> Result[Model, ServiceError] via msgspec.

Example:
    ```python
    class Person(msgspec.Struct):
        record_id: str

    decode_person = decoder(Person)
    decode_person(b'{"record_id": "9"}')   # Ok(Person(record_id='9'))
    decode_person({'record_id': 9})        # Err(ServiceError(kind=DECODE, ...))
    ```
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import msgspec

from lazy_result.errors import ServiceError
from lazy_result.result import Result, attempt

__all__ = ['decoder']


def decoder[T](type_: type[T], *, strict: bool = True) -> Callable[[Any], Result[T, ServiceError]]:
    """Build a decoding step for `type_`.

    `bytes`, `bytearray` and `str` payloads are parsed as JSON; anything else
    (dicts, lists, already-parsed objects) is converted with
    `msgspec.convert`. Any failure becomes Err with kind DECODE.

    Args:
        type_: Target type understood by msgspec (Struct, dataclass, TypedDict, builtins...).
        strict: Passed to msgspec; False enables lax conversions such as "1" -> 1.

    Returns:
        Function from a raw payload to Result[type_, ServiceError].
    """
    json_decoder = msgspec.json.Decoder(type_, strict=strict)

    def _decode(raw: Any) -> Result[T, ServiceError]:
        if isinstance(raw, (bytes, bytearray, str)):
            return attempt(lambda: json_decoder.decode(raw), ServiceError.decode)
        return attempt(lambda: msgspec.convert(raw, type_, strict=strict), ServiceError.decode)

    return _decode
