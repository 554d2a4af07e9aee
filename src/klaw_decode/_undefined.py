"""Sentinel for an object field that is absent from the input."""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ['UNDEFINED', 'UndefinedType']


@dataclass(slots=True, frozen=True)
class UndefinedType:
    """Marks a field that does not exist, as opposed to one holding null.

    ``object_`` hands this value to a field decoder when the key is missing, so a
    decoder that tolerates it (e.g. ``one_of(string(), succeed(None))``) makes the
    field optional.
    """

    def __repr__(self) -> str:
        return 'UNDEFINED'

    def __bool__(self) -> bool:
        return False


UNDEFINED = UndefinedType()
