"""Control combinators: map_, one_of, union, and_then and lazy.

These take any decoder, structural ones included, so they compose into decoders
for arbitrarily nested and recursive data.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, overload

from klaw_decode.decoder import Decoder
from klaw_decode.errors import DecodeError, DecodeFailure, FailureKind, describe

__all__ = [
    'and_then',
    'lazy',
    'map_',
    'one_of',
    'union',
]


def map_[T, U](transform: Callable[[T], U], decoder: Decoder[T]) -> Decoder[U]:
    """Apply ``transform`` to the value produced by ``decoder``.

    A ``DecodeError`` raised by ``transform`` propagates unchanged. Any other
    exception is re-raised as a ``DecodeError`` at the current location, chained
    to the original:

        ```python
        map_(int, string()).decode_json('"12"')   # 12
        map_(int, string()).decode_json('"xii"')
        # DecodeError: error at root: error performing map: invalid literal for int() with base 10: 'xii'
        ```

    Args:
        transform: Function applied to the decoded value.
        decoder: Decoder producing the input of ``transform``.

    Returns:
        A Decoder producing the transformed value.
    """

    def decode(value: Any, at: str) -> U:
        decoded = decoder(value, at)
        try:
            return transform(decoded)
        except DecodeError:
            raise
        except Exception as e:
            raise DecodeError(
                DecodeFailure(FailureKind.TRANSFORM, at, message=f'error performing map: {e}')
            ) from e

    return Decoder(decode, f'map({_callable_name(transform)}, {decoder.name})')


def _first_success(decoders: tuple[Decoder[Any], ...], value: Any, at: str) -> Any:
    for decoder in decoders:
        try:
            return decoder(value, at)
        except DecodeError:
            continue
    raise DecodeError(DecodeFailure(FailureKind.EXHAUSTED, at, message=f'unexpected {describe(value)}'))


def one_of[T](first: Decoder[T], *rest: Decoder[T]) -> Decoder[T]:
    """Try decoders in order and return the first success.

    Nothing after the first success is tried, so ``one_of`` behaves like a
    short-circuit OR. If every decoder fails, the error names only the kind of
    the input, not why each alternative failed:

        ```python
        one_of(string(), succeed('(nothing)')).decode_json('[]')   # '(nothing)'
        one_of(string(), map_(str, number())).decode_json('[]')
        # DecodeError: error at root: unexpected array
        ```

    Args:
        first: First decoder to try.
        *rest: Fallback decoders, tried in order.

    Returns:
        A Decoder returning the result of the first decoder that succeeds.
    """
    decoders = (first, *rest)

    def decode(value: Any, at: str) -> T:
        return _first_success(decoders, value, at)

    return Decoder(decode, f'one_of({", ".join(d.name for d in decoders)})')


@overload
def union[A](a: Decoder[A], /) -> Decoder[A]: ...
@overload
def union[A, B](a: Decoder[A], b: Decoder[B], /) -> Decoder[A | B]: ...
@overload
def union[A, B, C](a: Decoder[A], b: Decoder[B], c: Decoder[C], /) -> Decoder[A | B | C]: ...
@overload
def union[A, B, C, D](
    a: Decoder[A], b: Decoder[B], c: Decoder[C], d: Decoder[D], /
) -> Decoder[A | B | C | D]: ...
@overload
def union[A, B, C, D, E](
    a: Decoder[A], b: Decoder[B], c: Decoder[C], d: Decoder[D], e: Decoder[E], /
) -> Decoder[A | B | C | D | E]: ...
@overload
def union(*decoders: Decoder[Any]) -> Decoder[Any]: ...


def union(*decoders: Decoder[Any]) -> Decoder[Any]:
    """Decode a union type: like ``one_of``, but members may differ in type.

    Example:
        ```python
        easing = union(equal('ease-in'), equal('ease-out'), equal('ease-in-out'))
        easing.decode_json('"ease-out"')   # 'ease-out'
        easing.decode_json('"heck"')
        # DecodeError: error at root: unexpected string
        ```
    """
    if not decoders:
        msg = 'union() requires at least one decoder'
        raise TypeError(msg)

    def decode(value: Any, at: str) -> Any:
        return _first_success(decoders, value, at)

    return Decoder(decode, f'union({", ".join(d.name for d in decoders)})')


def and_then[A, B](decoder: Decoder[A], callback: Callable[[A], Decoder[B]]) -> Decoder[B]:
    """Pick a decoder based on a value decoded from the same input.

    ``decoder`` runs first; ``callback`` turns its result into a second decoder,
    which then decodes the *original* input at the same location.

        ```python
        def vehicle(kind: str) -> Decoder[str]:
            match kind:
                case 'train':
                    return map_(lambda color: f'{color} line', at(['color'], string()))
                case 'plane':
                    return map_(lambda airline: f'{airline} airlines', at(['airline'], string()))
            return succeed("you're walkin', pal")

        decoder = and_then(at(['type'], string()), vehicle)
        decoder.decode_json('{"type": "train", "color": "blue"}')   # 'blue line'
        ```

    Args:
        decoder: Decoder whose result selects the next decoder.
        callback: Receives that result and returns the decoder to apply.

    Returns:
        A Decoder producing the result of the selected decoder.
    """

    def decode(value: Any, at: str) -> B:
        return callback(decoder(value, at))(value, at)

    return Decoder(decode, f'and_then({decoder.name}, {_callable_name(callback)})')


def lazy[T](thunk: Callable[[], Decoder[T]]) -> Decoder[T]:
    """Defer building a decoder until it is used, for recursive data.

    ``thunk`` is called on every decode and its result is never cached:

        ```python
        comment = object_(
            ('msg', string()),
            ('replies', array(lazy(lambda: comment))),
            lambda msg, replies: {'msg': msg, 'replies': replies},
        )
        ```

    A thunk that recurses without a matching base case in the input never
    terminates; that is the caller's responsibility.
    """

    def decode(value: Any, at: str) -> T:
        return thunk()(value, at)

    return Decoder(decode, 'lazy')


def _callable_name(fn: Callable[..., Any]) -> str:
    return getattr(fn, '__qualname__', None) or type(fn).__name__
