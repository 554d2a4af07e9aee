"""The Decoder capability and the decode entry points.

A Decoder turns an untyped value (parsed JSON, or any tree of dicts, lists and
scalars) into a typed one, or raises a DecodeError naming where in the tree the
mismatch happened. Decoders are pure and immutable: build them once, usually as
module-level constants, and share them freely across threads.

Example:
    ```python
    from klaw_decode import number, object_, string

    user = object_(
        ('id', number()),
        ('name', string()),
        lambda id, name: {'id': id, 'name': name},
    )
    user.decode_json('{"id": 7, "name": "Bob"}')   # {'id': 7, 'name': 'Bob'}
    user.decode_any({'id': '7', 'name': 'Bob'})
    # DecodeError: error at .id: expected number, got string
    ```
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import msgspec

from klaw_decode._config import get_config
from klaw_decode._location import ROOT
from klaw_decode._logging import get_logger
from klaw_decode.errors import DecodeError, MalformedJSONError
from klaw_decode.result import Err, Ok

__all__ = [
    'DecodeFn',
    'Decoder',
    'EntryDecoder',
    'JsonValue',
    'decode_any',
    'decode_json',
]

type JsonValue = None | bool | int | float | str | list[JsonValue] | dict[str, JsonValue]

type DecodeFn[T] = Callable[[Any, str], T]

_logger = get_logger(__name__)


class Decoder[T]:
    """A pure, reusable way to decode an untyped value into a ``T``.

    Calling a decoder as ``decoder(value, at)`` runs it at location ``at`` and is
    how combinators invoke their children. Applications use the entry points
    instead: ``decode_any``, ``decode_json`` and their ``safe_`` variants.

    A custom decoder is any function ``(value, at) -> T`` that raises
    ``DecodeError`` on mismatch:

        ```python
        def even(value, at):
            n = number()(value, at)
            if n % 2:
                raise DecodeError.mismatch(at, 'even number', value)
            return n

        evens = array(Decoder(even, 'even'))
        ```
    """

    __slots__ = ('_fn', '_name')

    def __init__(self, fn: DecodeFn[T], name: str = 'custom') -> None:
        self._fn = fn
        self._name = name

    @property
    def name(self) -> str:
        """Short description of the decoder, e.g. ``array(number)``."""
        return self._name

    def __call__(self, value: Any, at: str = ROOT) -> T:
        return self._fn(value, at)

    def __repr__(self) -> str:
        return f'Decoder({self._name})'

    # --- Entry points ---

    def decode_any(self, value: Any, at: str = ROOT) -> T:
        """Decode an already-parsed value.

        Args:
            value: Any in-memory value, typically the output of a JSON parser.
            at: Location label of ``value``; child locations extend it.

        Returns:
            The decoded value.

        Raises:
            DecodeError: If ``value`` does not match the decoder.
        """
        return decode_any(self, value, at)

    def decode_json(self, text: str | bytes) -> T:
        """Parse JSON text and decode the result.

        Raises:
            MalformedJSONError: If ``text`` is not valid JSON.
            DecodeError: If the parsed value does not match the decoder.
        """
        return decode_json(self, text)

    def safe_decode_any(self, value: Any, at: str = ROOT) -> Ok[T] | Err[DecodeError]:
        """Like ``decode_any``, but return ``Err`` instead of raising."""
        try:
            return Ok(decode_any(self, value, at))
        except DecodeError as e:
            return Err(e)

    def safe_decode_json(self, text: str | bytes) -> Ok[T] | Err[DecodeError | MalformedJSONError]:
        """Like ``decode_json``, but return ``Err`` instead of raising."""
        try:
            return Ok(decode_json(self, text))
        except (DecodeError, MalformedJSONError) as e:
            return Err(e)

    # --- Fluent composition ---

    def map[U](self, transform: Callable[[T], U]) -> Decoder[U]:
        """Same as ``map_(transform, self)``."""
        from klaw_decode.control import map_

        return map_(transform, self)

    def and_then[U](self, callback: Callable[[T], Decoder[U]]) -> Decoder[U]:
        """Same as ``and_then(self, callback)``."""
        from klaw_decode.control import and_then

        return and_then(self, callback)

    def __or__[U](self, other: Decoder[U]) -> Decoder[T | U]:
        """``a | b`` tries ``a`` first, then ``b``; same as ``one_of(a, b)``."""
        from klaw_decode.control import one_of

        if not isinstance(other, Decoder):
            return NotImplemented
        return one_of(self, other)


type EntryDecoder[T] = tuple[str, Decoder[T]]


def decode_any[T](decoder: Decoder[T], value: Any, at: str = ROOT) -> T:
    """Decode an already-parsed value with ``decoder``, starting at location ``at``."""
    try:
        return decoder(value, at)
    except DecodeError as e:
        _report_failure(decoder, e)
        raise


def decode_json[T](decoder: Decoder[T], text: str | bytes) -> T:
    """Parse ``text`` as JSON with msgspec, then decode it from ``root``.

    msgspec is stricter than the JSON grammar in two places, and both surface as
    ``MalformedJSONError``: numbers beyond float range such as ``1e400`` are
    rejected as out of range, and escaped lone surrogates such as ``"\\ud800"``
    are rejected. Parse such input with another parser and use ``decode_any``.
    """
    try:
        value = msgspec.json.decode(text)
    except msgspec.DecodeError as e:
        config = get_config()
        if config.log_level is not None and config.log_failures:
            _logger.debug('malformed_json', error=str(e))
        raise MalformedJSONError(str(e)) from e
    return decode_any(decoder, value)


def _report_failure(decoder: Decoder[Any], error: DecodeError) -> None:
    config = get_config()
    if config.log_level is None or not config.log_failures:
        return
    _logger.debug(
        'decode_failed',
        decoder=decoder.name,
        at=error.at,
        kind=error.kind.value,
        error=str(error),
    )
