"""Location breadcrumbs: ``root``, ``.field``, ``["odd key"]`` and ``[index]``."""

from __future__ import annotations

import re

import msgspec

__all__ = ['ROOT', 'escape_key', 'push_location', 'quote_json']

ROOT = 'root'

_IDENTIFIER = re.compile(r'[$_a-zA-Z][$_a-zA-Z0-9]*')
_SURROGATE = re.compile('[\ud800-\udfff]')
_json_encoder = msgspec.json.Encoder()


def quote_json(text: str) -> str:
    """Render ``text`` as a JSON string literal.

    Lone surrogates, which a lenient parser such as ``json.loads`` can put in a
    key, are written as ``\\uXXXX`` escapes instead of failing to encode.
    """
    try:
        return _json_encoder.encode(text).decode()
    except UnicodeEncodeError:
        parts = (
            f'\\u{ord(ch):04x}' if _SURROGATE.match(ch) else _json_encoder.encode(ch).decode()[1:-1]
            for ch in text
        )
        return f'"{"".join(parts)}"'


def escape_key(key: str) -> str:
    """Return ``key`` unchanged if it is identifier-shaped, else as a JSON string.

    Example:
        ```python
        escape_key('name')     # 'name'
        escape_key('Howdy!')   # '"Howdy!"'
        ```
    """
    if _IDENTIFIER.fullmatch(key):
        return key
    return quote_json(key)


def push_location(at: str, key: str | int) -> str:
    """Extend a location with one step of descent.

    The ``root`` label is dropped once the path has at least one segment, so the
    first element of a root array is ``[0]`` rather than ``root[0]``.

    Args:
        at: The current location.
        key: An object key or a sequence index.

    Returns:
        The location of the child value.
    """
    base = '' if at == ROOT else at
    if isinstance(key, int) and not isinstance(key, bool):
        return f'{base}[{key}]'
    if _IDENTIFIER.fullmatch(key):
        return f'{base}.{key}'
    return f'{base}[{quote_json(key)}]'
