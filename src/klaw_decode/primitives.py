"""Primitive decoders: string, number, boolean, equal, fail and succeed."""

from __future__ import annotations

from typing import Any, Never

import msgspec

from klaw_decode._location import quote_json
from klaw_decode.decoder import Decoder
from klaw_decode.errors import DecodeError, DecodeFailure, FailureKind, describe

__all__ = [
    'boolean',
    'equal',
    'fail',
    'number',
    'string',
    'succeed',
]

_json_encoder = msgspec.json.Encoder()


def _decode_string(value: Any, at: str) -> str:
    if not isinstance(value, str):
        raise DecodeError.mismatch(at, 'string', value)
    return value


def _decode_number(value: Any, at: str) -> int | float:
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise DecodeError.mismatch(at, 'number', value)
    return value


def _decode_boolean(value: Any, at: str) -> bool:
    if not isinstance(value, bool):
        raise DecodeError.mismatch(at, 'boolean', value)
    return value


_STRING: Decoder[str] = Decoder(_decode_string, 'string')
_NUMBER: Decoder[int | float] = Decoder(_decode_number, 'number')
_BOOLEAN: Decoder[bool] = Decoder(_decode_boolean, 'boolean')


def string() -> Decoder[str]:
    """Decode a string."""
    return _STRING


def number() -> Decoder[int | float]:
    """Decode a number. Booleans are not numbers here, even though Python says so."""
    return _NUMBER


def boolean() -> Decoder[bool]:
    """Decode a boolean."""
    return _BOOLEAN


def _render_literal(value: Any) -> str:
    if isinstance(value, str):
        return quote_json(value)
    try:
        return _json_encoder.encode(value).decode()
    except TypeError:
        return repr(value)


def _same(actual: Any, expected: Any) -> bool:
    # JSON has no bool/int overlap: true is never 1
    if isinstance(actual, bool) or isinstance(expected, bool):
        return actual is expected
    return actual == expected


def equal[T](expected: T) -> Decoder[T]:
    """Decode a value that equals ``expected``. Useful for checking for null.

    Example:
        ```python
        decoder = object_(('should_be_null', equal(None)))
        decoder.decode_json('{"should_be_null": null}')   # {'should_be_null': None}
        equal(42).decode_json('true')
        # DecodeError: error at root: expected 42, got boolean
        ```

    Args:
        expected: Value the input must equal.

    Returns:
        A Decoder that returns the matched value.
    """
    rendered = _render_literal(expected)

    def decode(value: Any, at: str) -> T:
        if not _same(value, expected):
            raise DecodeError(
                DecodeFailure(FailureKind.LITERAL, at, expected=rendered, got=describe(value))
            )
        return value

    return Decoder(decode, f'equal({rendered})')


def fail(message: str) -> Decoder[Never]:
    """A decoder that always fails with ``error at <location>: <message>``.

    Handy as the terminal branch of ``one_of`` or of an ``and_then`` dispatch.
    """

    def decode(value: Any, at: str) -> Never:
        raise DecodeError(DecodeFailure(FailureKind.EXPLICIT, at, message=message))

    return Decoder(decode, f'fail({message!r})')


def succeed[T](value: T) -> Decoder[T]:
    """A decoder that ignores its input and always returns ``value``.

    As the last alternative of ``one_of`` it supplies a default, and inside
    ``object_`` it makes a field optional:

        ```python
        object_(('name', one_of(string(), succeed(None)))).decode_json('{}')
        # {'name': None}
        ```
    """
    return Decoder(lambda _value, _at: value, f'succeed({value!r})')
