"""Decode error types: dual struct+exception for Result and raise-based code."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any

import msgspec

from klaw_decode._undefined import UndefinedType

__all__ = [
    'DecodeError',
    'DecodeFailure',
    'FailureKind',
    'MalformedJSONError',
    'describe',
]


class FailureKind(Enum):
    """Why a decode step rejected its input."""

    MISMATCH = 'mismatch'
    LITERAL = 'literal'
    MISSING_KEYS = 'missing_keys'
    PATH = 'path'
    EXHAUSTED = 'exhausted'
    EXPLICIT = 'explicit'
    TRANSFORM = 'transform'


def describe(value: Any) -> str:
    """Name the JSON kind of ``value`` as it appears after ``got`` in messages.

    Example:
        ```python
        describe(None)       # 'null'
        describe([1, 2])     # 'array'
        describe({'a': 1})   # 'object'
        describe(True)       # 'boolean'
        ```
    """
    match value:
        case None:
            return 'null'
        case UndefinedType():
            return 'undefined'
        case bool():
            return 'boolean'
        case int() | float():
            return 'number'
        case str():
            return 'string'
        case list() | tuple():
            return 'array'
        case Mapping():
            return 'object'
    return type(value).__name__.lower()


# --- Validation failures ---


class DecodeFailure(msgspec.Struct, frozen=True, gc=False):
    """A rejected decode step - struct variant for Result[T, DecodeFailure].

    Attributes:
        kind: Category of the failure.
        at: Location of the offending value, e.g. ``.replies[0]``.
        expected: What the decoder wanted, e.g. ``number`` or ``object with keys: x``.
        got: Kind of value actually found, when it is worth reporting.
        message: Pre-worded text that replaces the ``expected`` clause entirely.
    """

    kind: FailureKind
    at: str
    expected: str | None = None
    got: str | None = None
    message: str | None = None

    def render(self) -> str:
        """Render the failure as ``error at <at>: expected <expected>[, got <got>]``."""
        if self.message is not None:
            return f'error at {self.at}: {self.message}'
        if self.got is None:
            return f'error at {self.at}: expected {self.expected}'
        return f'error at {self.at}: expected {self.expected}, got {self.got}'

    def to_exception(self) -> DecodeError:
        """Convert to exception for raise-based code."""
        return DecodeError(self)


class DecodeError(ValueError):
    """A rejected decode step - exception variant.

    ``str(error)`` is the rendered message; the structured record stays available
    as ``error.failure``.
    """

    def __init__(self, failure: DecodeFailure) -> None:
        self.failure = failure
        super().__init__(failure.render())

    def __reduce__(self) -> tuple[type[DecodeError], tuple[DecodeFailure]]:
        # args holds the rendered text, not the record
        return type(self), (self.failure,)

    @property
    def at(self) -> str:
        """Location of the offending value."""
        return self.failure.at

    @property
    def kind(self) -> FailureKind:
        """Category of the failure."""
        return self.failure.kind

    def to_struct(self) -> DecodeFailure:
        """Convert to struct for Result-based code."""
        return self.failure

    @classmethod
    def mismatch(cls, at: str, expected: str, value: Any) -> DecodeError:
        """A value of the wrong kind was found at ``at``."""
        return cls(DecodeFailure(FailureKind.MISMATCH, at, expected=expected, got=describe(value)))


# --- Text errors ---


class MalformedJSONError(ValueError):
    """Input text is not valid JSON; raised before any decoder runs."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f'malformed JSON: {reason}')

    def __reduce__(self) -> tuple[type[MalformedJSONError], tuple[str]]:
        return type(self), (self.reason,)
