"""Tests for map_, one_of, union, and_then and lazy."""

from __future__ import annotations

from typing import Any

import pytest
from hypothesis import given
from klaw_decode import (
    DecodeError,
    Decoder,
    FailureKind,
    and_then,
    array,
    at,
    equal,
    fail,
    lazy,
    map_,
    number,
    object_,
    one_of,
    string,
    succeed,
    union,
)

from tests.strategies import json_values, numbers, texts


class TestMap:
    """Tests for map_()."""

    @given(numbers)
    def test_identity(self, value: float) -> None:
        assert map_(lambda x: x, number()).decode_any(value) == value

    def test_transforms_value(self) -> None:
        assert map_(lambda x: x * 5, number()).decode_json('10') == 50

    def test_changes_type(self) -> None:
        assert map_(len, string()).decode_json('"hey"') == 3

    def test_inner_error_propagates(self) -> None:
        with pytest.raises(DecodeError, match='^error at root: expected number, got string$'):
            map_(lambda x: x * 5, number()).decode_json('"ten"')

    def test_transform_exception_is_wrapped(self) -> None:
        """Non-decode exceptions become DecodeErrors, chained to the original."""

        def gosh(_value: Any) -> Any:
            msg = 'gosh'
            raise RuntimeError(msg)

        with pytest.raises(DecodeError) as exc_info:
            map_(gosh, number()).decode_json('1')
        assert str(exc_info.value) == 'error at root: error performing map: gosh'
        assert exc_info.value.kind is FailureKind.TRANSFORM
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_transform_exception_is_located(self) -> None:
        decoder = array(map_(int, string()))
        with pytest.raises(DecodeError) as exc_info:
            decoder.decode_json('["1", "xii"]')
        assert str(exc_info.value).startswith('error at [1]: error performing map: invalid literal for int()')

    def test_transform_decode_error_passes_through(self) -> None:
        def strict(_value: Any) -> Any:
            raise DecodeError.mismatch('.inner', 'string', 5)

        with pytest.raises(DecodeError, match=r'^error at \.inner: expected string, got number$'):
            map_(strict, number()).decode_json('1')


class TestOneOf:
    """Tests for one_of()."""

    def test_first_success_wins(self) -> None:
        decoder = one_of(map_(lambda n: f'number {n}', number()), string())
        assert decoder.decode_json('5') == 'number 5'
        assert decoder.decode_json('"five"') == 'five'

    def test_all_fail(self) -> None:
        decoder = one_of(string(), map_(str, number()))
        with pytest.raises(DecodeError) as exc_info:
            decoder.decode_json('[]')
        assert str(exc_info.value) == 'error at root: unexpected array'
        assert exc_info.value.kind is FailureKind.EXHAUSTED

    def test_default_with_succeed(self) -> None:
        assert one_of(string(), succeed('(nothing)')).decode_json('[]') == '(nothing)'

    def test_stops_at_first_success(self) -> None:
        """Alternatives after the first success are never run."""
        calls: list[str] = []

        def spy(value: Any, at: str) -> Any:
            calls.append(at)
            return value

        one_of(number(), Decoder(spy)).decode_json('1')
        assert calls == []

    def test_failure_is_located(self) -> None:
        decoder = array(one_of(string(), number()))
        with pytest.raises(DecodeError, match=r'^error at \[1\]: unexpected null$'):
            decoder.decode_json('["a", null]')

    def test_non_decode_errors_propagate(self) -> None:
        def boom(value: Any, at: str) -> Any:
            msg = 'boom'
            raise KeyError(msg)

        with pytest.raises(KeyError):
            one_of(Decoder(boom), succeed(1)).decode_json('1')

    @given(json_values)
    def test_single_alternative_with_succeed_never_fails(self, value: object) -> None:
        assert one_of(fail('no'), succeed('ok')).decode_any(value) == 'ok'


class TestUnion:
    """Tests for union()."""

    easing = union(equal('ease-in'), equal('ease-out'), equal('ease-in-out'))

    def test_matches_literal(self) -> None:
        assert self.easing.decode_json('"ease-out"') == 'ease-out'

    def test_no_literal_matches(self) -> None:
        with pytest.raises(DecodeError, match='^error at root: unexpected string$'):
            self.easing.decode_json('"heck"')

    def test_reports_input_kind(self) -> None:
        with pytest.raises(DecodeError, match='^error at root: unexpected object$'):
            self.easing.decode_json('{}')

    def test_mixed_member_types(self) -> None:
        decoder = union(number(), string(), equal(None))
        assert decoder.decode_json('1') == 1
        assert decoder.decode_json('"a"') == 'a'
        assert decoder.decode_json('null') is None

    def test_requires_a_decoder(self) -> None:
        with pytest.raises(TypeError):
            union()


def _vehicle(kind: str) -> Decoder[str]:
    match kind:
        case 'train':
            return map_(lambda color: f'{color} line', at(['color'], string()))
        case 'plane':
            return map_(lambda airline: f'{airline} airlines', at(['airline'], string()))
    return succeed("you're walkin', pal")


class TestAndThen:
    """Tests for and_then()."""

    vehicle = and_then(at(['type'], string()), _vehicle)

    def test_train(self) -> None:
        assert self.vehicle.decode_json('{"type": "train", "color": "blue"}') == 'blue line'

    def test_plane(self) -> None:
        assert self.vehicle.decode_json('{"type": "plane", "airline": "lambda"}') == 'lambda airlines'

    def test_default(self) -> None:
        assert self.vehicle.decode_json('{"type": "boat"}') == "you're walkin', pal"

    def test_first_decoder_error(self) -> None:
        with pytest.raises(DecodeError, match=r'^error at \.type: expected string, got number$'):
            self.vehicle.decode_json('{"type": 5}')

    def test_selected_decoder_error(self) -> None:
        """The selected decoder sees the original input."""
        with pytest.raises(DecodeError, match=r'^error at \.color: expected string, got boolean$'):
            self.vehicle.decode_json('{"type": "train", "color": true}')

    def test_missing_discriminator(self) -> None:
        with pytest.raises(DecodeError, match='^error at root: expected object with key type, got object$'):
            self.vehicle.decode_json('{}')

    def test_callback_exception_propagates(self) -> None:
        def broken(_kind: str) -> Decoder[str]:
            msg = 'no decoder'
            raise LookupError(msg)

        with pytest.raises(LookupError, match='no decoder'):
            and_then(string(), broken).decode_json('"x"')

    def test_fail_branch(self) -> None:
        decoder = and_then(number(), lambda n: succeed(n) if n > 0 else fail('expected a positive number'))
        assert decoder.decode_json('3') == 3
        with pytest.raises(DecodeError, match='^error at root: expected a positive number$'):
            decoder.decode_json('-3')


def _comment(msg: str, replies: list[Any]) -> dict[str, Any]:
    return {'msg': msg, 'replies': replies}


comment: Decoder[dict[str, Any]] = object_(
    ('msg', string()),
    ('replies', array(lazy(lambda: comment))),
    _comment,
)


class TestLazy:
    """Tests for lazy()."""

    def test_recursive_structure(self) -> None:
        text = '{"msg": "hey", "replies": [{"msg": "hi", "replies": []}]}'
        assert comment.decode_json(text) == {
            'msg': 'hey',
            'replies': [{'msg': 'hi', 'replies': []}],
        }

    def test_recursive_error_is_located(self) -> None:
        text = '{"msg": "hey", "replies": [{"msg": "hi", "replies": [5]}]}'
        with pytest.raises(DecodeError) as exc_info:
            comment.decode_json(text)
        assert str(exc_info.value) == 'error at .replies[0].replies[0]: expected object, got number'

    def test_thunk_called_on_every_decode(self) -> None:
        """The built decoder is never cached."""
        calls: list[None] = []

        def thunk() -> Decoder[float]:
            calls.append(None)
            return number()

        decoder = lazy(thunk)
        assert calls == []
        decoder.decode_json('1')
        decoder.decode_json('2')
        assert len(calls) == 2

    @given(texts)
    def test_leaf(self, msg: str) -> None:
        assert comment.decode_any({'msg': msg, 'replies': []}) == {'msg': msg, 'replies': []}
