"""Structural combinators: array, tuple_, object_, dict_ and at.

Each combinator checks the shape of its input, then runs child decoders with the
location extended by the index or key being descended into. The first failing
child aborts the whole decode; nothing partial is ever returned.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Any, overload

from klaw_decode._location import escape_key, push_location
from klaw_decode._undefined import UNDEFINED
from klaw_decode.decoder import Decoder, EntryDecoder
from klaw_decode.errors import DecodeError, DecodeFailure, FailureKind, describe

__all__ = [
    'array',
    'at',
    'dict_',
    'list_',
    'object_',
    'tuple_',
]


def _is_array(value: Any) -> bool:
    return isinstance(value, list | tuple)


def _is_object(value: Any) -> bool:
    return isinstance(value, Mapping)


# ---------------------------------------------------------------------
# array
# ---------------------------------------------------------------------


def array[T](element: Decoder[T]) -> Decoder[list[T]]:
    """Decode an array whose elements all decode with ``element``.

    For fixed-length arrays of mixed types see ``tuple_``.

    Example:
        ```python
        array(number()).decode_json('[1, 2, 3]')   # [1, 2, 3]
        array(number()).decode_json('["dang"]')
        # DecodeError: error at [0]: expected number, got string
        ```
    """

    def decode(value: Any, at: str) -> list[T]:
        if not _is_array(value):
            raise DecodeError.mismatch(at, 'array', value)
        return [element(item, push_location(at, i)) for i, item in enumerate(value)]

    return Decoder(decode, f'array({element.name})')


list_ = array


# ---------------------------------------------------------------------
# tuple_
# ---------------------------------------------------------------------


@overload
def tuple_[A](a: Decoder[A], /) -> Decoder[tuple[A]]: ...
@overload
def tuple_[A, B](a: Decoder[A], b: Decoder[B], /) -> Decoder[tuple[A, B]]: ...
@overload
def tuple_[A, B, C](a: Decoder[A], b: Decoder[B], c: Decoder[C], /) -> Decoder[tuple[A, B, C]]: ...
@overload
def tuple_[A, B, C, D](
    a: Decoder[A], b: Decoder[B], c: Decoder[C], d: Decoder[D], /
) -> Decoder[tuple[A, B, C, D]]: ...
@overload
def tuple_[A, B, C, D, E](
    a: Decoder[A], b: Decoder[B], c: Decoder[C], d: Decoder[D], e: Decoder[E], /
) -> Decoder[tuple[A, B, C, D, E]]: ...
@overload
def tuple_(*decoders: Decoder[Any]) -> Decoder[tuple[Any, ...]]: ...


def tuple_(*decoders: Decoder[Any]) -> Decoder[tuple[Any, ...]]:
    """Decode a fixed-length array, one decoder per position.

    The input must hold at least as many elements as there are decoders; extra
    trailing elements are ignored. For arrays of unknown length see ``array``.

    Args:
        *decoders: One decoder per position.

    Returns:
        A Decoder that returns a tuple with one decoded value per position.
    """
    if not decoders:
        msg = 'tuple_() requires at least one decoder'
        raise TypeError(msg)
    size = len(decoders)

    def decode(value: Any, at: str) -> tuple[Any, ...]:
        if not _is_array(value):
            raise DecodeError.mismatch(at, 'array', value)
        if len(value) < size:
            raise DecodeError.mismatch(at, f'array with at least {size} elements', value)
        return tuple(decoder(value[i], push_location(at, i)) for i, decoder in enumerate(decoders))

    return Decoder(decode, f'tuple({", ".join(d.name for d in decoders)})')


# ---------------------------------------------------------------------
# object_
# ---------------------------------------------------------------------


@overload
def object_[T, A](a: EntryDecoder[A], cons: Callable[[A], T], /) -> Decoder[T]: ...
@overload
def object_[T, A, B](a: EntryDecoder[A], b: EntryDecoder[B], cons: Callable[[A, B], T], /) -> Decoder[T]: ...
@overload
def object_[T, A, B, C](
    a: EntryDecoder[A], b: EntryDecoder[B], c: EntryDecoder[C], cons: Callable[[A, B, C], T], /
) -> Decoder[T]: ...
@overload
def object_[T, A, B, C, D](
    a: EntryDecoder[A],
    b: EntryDecoder[B],
    c: EntryDecoder[C],
    d: EntryDecoder[D],
    cons: Callable[[A, B, C, D], T],
    /,
) -> Decoder[T]: ...
@overload
def object_(*entries: EntryDecoder[Any]) -> Decoder[dict[str, Any]]: ...
@overload
def object_(*args: Any) -> Decoder[Any]: ...


def object_(*args: Any) -> Decoder[Any]:
    """Decode an object with the given fields.

    Arguments are ``(key, decoder)`` pairs, optionally followed by a constructor
    that receives the decoded values positionally, in declaration order. Without
    a constructor the result is a dict of key to decoded value.

    A field absent from the input is decoded from ``UNDEFINED``; if that fails the
    key is reported as missing. All missing keys are reported together, sorted:

        ```python
        point = object_(('x', number()), ('y', number()), ('?', string()))
        point.decode_json('{"x": 5}')
        # DecodeError: error at root: expected object with keys: "?", y
        ```

    A field decoder that accepts ``UNDEFINED`` makes the field optional:

        ```python
        object_(('name', one_of(string(), succeed(None))), lambda name: name)
        ```

    A present field whose value does not decode fails immediately at that field.

    Exceptions raised by the constructor propagate unchanged, as they do from an
    ``and_then`` callback, and ``one_of`` does not catch them. To turn a
    constructor error into a located decode failure, apply it with ``map_``:
    ``map_(lambda d: Point(**d), object_(('x', number()), ('y', number())))``.

    Args:
        *args: ``(key, decoder)`` entries, then an optional constructor.

    Returns:
        A Decoder that returns whatever the constructor returns.
    """
    if args and not isinstance(args[-1], tuple):
        cons: Callable[..., Any] | None = args[-1]
        entries: Sequence[EntryDecoder[Any]] = args[:-1]
        if not callable(cons):
            msg = f'object_() constructor must be callable, got {cons!r}'
            raise TypeError(msg)
    else:
        cons = None
        entries = args

    for entry in entries:
        if not (
            isinstance(entry, tuple)
            and len(entry) == 2
            and isinstance(entry[0], str)
            and isinstance(entry[1], Decoder)
        ):
            msg = f'object_() entries must be (key, decoder) pairs, got {entry!r}'
            raise TypeError(msg)

    def decode(value: Any, at: str) -> Any:
        if not _is_object(value):
            raise DecodeError.mismatch(at, 'object', value)

        missing: list[str] = []
        values: list[Any] = []
        for key, decoder in entries:
            field_at = push_location(at, key)
            if key in value:
                values.append(decoder(value[key], field_at))
                continue
            try:
                values.append(decoder(UNDEFINED, field_at))
            except DecodeError:
                missing.append(key)
                values.append(UNDEFINED)

        if missing:
            keys = ', '.join(escape_key(key) for key in sorted(missing))
            raise DecodeError(
                DecodeFailure(FailureKind.MISSING_KEYS, at, expected=f'object with keys: {keys}')
            )

        if cons is None:
            return {key: decoded for (key, _), decoded in zip(entries, values, strict=True)}
        return cons(*values)

    return Decoder(decode, f'object({", ".join(escape_key(key) for key, _ in entries)})')


# ---------------------------------------------------------------------
# dict_
# ---------------------------------------------------------------------


def dict_[T](value_decoder: Decoder[T]) -> Decoder[dict[str, T]]:
    """Decode an object with arbitrary keys whose values share one type.

    Example:
        ```python
        dict_(number()).decode_json('{"a": 1, "b": 2}')   # {'a': 1, 'b': 2}
        dict_(number()).decode_json('[]')
        # DecodeError: error at root: expected object, got array
        ```
    """

    def decode(value: Any, at: str) -> dict[str, T]:
        if not _is_object(value):
            raise DecodeError.mismatch(at, 'object', value)
        return {
            key: value_decoder(item, push_location(at, key if isinstance(key, str) else str(key)))
            for key, item in value.items()
        }

    return Decoder(decode, f'dict({value_decoder.name})')


# ---------------------------------------------------------------------
# at
# ---------------------------------------------------------------------


def at[T](path: Sequence[str | int], decoder: Decoder[T]) -> Decoder[T]:
    """Decode the value found by walking ``path`` into nested objects and arrays.

    String segments look up object keys, integer segments index arrays. A failed
    step is reported at the location reached so far.

    Example:
        ```python
        at(['a', 'b', 'c'], number()).decode_json('{"a": {"b": {"c": 123}}}')   # 123
        at([2, 1, 0], string()).decode_json('[1, 2, [3, ["blastoff"]]]')      # 'blastoff'
        at([2], string()).decode_json('[0, 1]')
        # DecodeError: error at root: expected array: index out of range: 2 > 1
        ```

    Args:
        path: Keys and indices to follow, outermost first.
        decoder: Decoder for the value at the end of the path.

    Returns:
        A Decoder for the nested value.
    """
    segments = tuple(path)

    def decode(value: Any, location: str) -> T:
        current = value
        for key in segments:
            if isinstance(key, int) and not isinstance(key, bool):
                if not _is_array(current):
                    raise DecodeError(
                        DecodeFailure(
                            FailureKind.PATH,
                            location,
                            expected=f'array with index {key}',
                            got=describe(current),
                        )
                    )
                if not 0 <= key < len(current):
                    raise DecodeError(
                        DecodeFailure(
                            FailureKind.PATH,
                            location,
                            expected=f'array: index out of range: {key} > {len(current) - 1}',
                        )
                    )
            elif not (_is_object(current) and key in current):
                raise DecodeError(
                    DecodeFailure(
                        FailureKind.PATH,
                        location,
                        expected=f'object with key {escape_key(key)}',
                        got=describe(current),
                    )
                )
            current = current[key]
            location = push_location(location, key)
        return decoder(current, location)

    rendered = ''.join(push_location('', key) for key in segments)
    return Decoder(decode, f'at({rendered}, {decoder.name})')
