"""Ok/Err values returned by the non-raising decode entry points.

Example:
    ```python
    from klaw_decode import number

    number().safe_decode_json('5')        # Ok(5)
    number().safe_decode_json('"five"')   # Err(DecodeError('error at root: expected number, got string'))
    ```
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

__all__ = ['Err', 'Ok', 'Result']


@dataclass(slots=True, frozen=True)
class Ok[T]:
    """A decode that succeeded.

    Attributes:
        value: The decoded value.
    """

    value: T
    __match_args__ = ('value',)

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def map[U](self, f: Callable[[T], U]) -> Ok[U]:
        """Transform the decoded value."""
        return Ok(f(self.value))

    def map_err(self, f: Callable[[Any], Any]) -> Ok[T]:
        return self

    def and_then[U, E: BaseException](self, f: Callable[[T], Ok[U] | Err[E]]) -> Ok[U] | Err[E]:
        """Chain a computation that may fail."""
        return f(self.value)

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value

    def unwrap_err(self) -> BaseException:
        """Raise, since an Ok holds no error.

        Raises:
            ValueError: Always.
        """
        msg = f'Called unwrap_err on Ok: {self.value!r}'
        raise ValueError(msg)

    def ok(self) -> T | None:
        return self.value

    def err(self) -> None:
        return None

    def __repr__(self) -> str:
        return f'Ok({self.value!r})'


@dataclass(slots=True, frozen=True)
class Err[E: BaseException]:
    """A decode that failed.

    Attributes:
        error: The exception that the raising entry point would have raised.
    """

    error: E
    __match_args__ = ('error',)

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def map(self, f: Callable[[Any], Any]) -> Err[E]:
        return self

    def map_err[F: BaseException](self, f: Callable[[E], F]) -> Err[F]:
        """Transform the held error."""
        return Err(f(self.error))

    def and_then(self, f: Callable[[Any], Any]) -> Err[E]:
        return self

    def unwrap(self) -> Any:
        """Re-raise the held error.

        Raises:
            E: The held error, as-is.
        """
        raise self.error

    def unwrap_or[T](self, default: T) -> T:
        return default

    def unwrap_err(self) -> E:
        return self.error

    def ok(self) -> None:
        return None

    def err(self) -> E:
        return self.error

    def __repr__(self) -> str:
        return f'Err({self.error!r})'


type Result[T, E: BaseException] = Ok[T] | Err[E]
