"""Runtime helpers: path lookup, truthiness and output assembly.

Rendering produces a flat list of *pieces*: literal template text (``str``)
and ``Interpolation`` wrappers around evaluated values. ``assemble`` joins
them, choosing each value's formatting from where it sits in the JSON
text:

    inside a string literal    "Hello {{name}}"  → Hello Ada   (escaped text)
    outside a string literal   {"n": {{count}}}  → 3            (JSON value)

Verbatim interpolations (bare ``#set`` references and ``this``) splice a
string value outside a string literal as-is, so a variable holding JSON
text becomes part of the document.

Quote state is tracked across the literal text only, honouring backslash
escapes.
"""

from __future__ import annotations

import json
import math
import re
from collections.abc import Iterable
from typing import Any, NamedTuple

from jsonblade.template.effects import PENDING
from jsonblade.utils.coerce import (
    is_mapping,
    is_sequence,
    normalize_number,
    to_js_string,
    to_json,
)

_INDEX_RE = re.compile(r"0|[1-9][0-9]*")
_QUOTE_SCAN_RE = re.compile(r'\\.|\\$|"', re.DOTALL)


def get_object_path(path: str, obj: Any) -> Any:
    """Resolve a dotted path, returning None as soon as a step is missing.

    Mapping steps need the key to be present. Sequence steps accept an
    integer index or ``length``. Scalars cannot be descended into.

    Example:
        >>> data = {"users": [{"name": "Ada"}]}
        >>> get_object_path("users.0.name", data)
        'Ada'
        >>> get_object_path("users.length", data)
        1
        >>> get_object_path("users.0.email.domain", data) is None
        True
    """
    result = obj
    for key in path.split("."):
        if result is None:
            return None
        if is_mapping(result):
            if key not in result:
                return None
            result = result[key]
        elif is_sequence(result):
            if key == "length":
                result = len(result)
            elif _INDEX_RE.fullmatch(key) and int(key) < len(result):
                result = result[int(key)]
            else:
                return None
        else:
            return None
    return result


def is_truthy(value: Any) -> bool:
    """Condition truthiness for ``#if`` / ``#unless``.

    Booleans as-is, numbers when nonzero, strings and arrays when
    non-empty, anything else when not null. Objects are always truthy,
    even empty ones.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str) or is_sequence(value):
        return len(value) > 0
    return value is not None


class Interpolation(NamedTuple):
    """An evaluated ``{{ expr }}`` awaiting formatting."""

    value: Any
    verbatim: bool = False


def format_in_string(value: Any) -> str:
    """Format a value for embedding inside a JSON string literal."""
    if value is None or value is PENDING:
        return ""
    return json.dumps(to_js_string(value), ensure_ascii=False)[1:-1]


def format_raw(value: Any) -> str:
    """Format a value as a standalone JSON value."""
    if value is None or value is PENDING:
        return "null"
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return "null"
        value = normalize_number(value)
    return to_json(value)


def _scan_quotes(text: str, in_string: bool, escaped: bool) -> tuple[bool, bool]:
    start = 0
    if escaped and text:
        start, escaped = 1, False
    for match in _QUOTE_SCAN_RE.finditer(text, start):
        token = match.group()
        if token == '"':
            in_string = not in_string
        elif token == "\\":
            # Trailing backslash escapes the first character of the next piece
            escaped = True
    return in_string, escaped


def assemble(pieces: Iterable[str | Interpolation]) -> str:
    """Join rendered pieces into the final template text."""
    out: list[str] = []
    in_string = False
    escaped = False
    for piece in pieces:
        if isinstance(piece, Interpolation):
            if in_string:
                out.append(format_in_string(piece.value))
            elif piece.verbatim and isinstance(piece.value, str):
                out.append(piece.value)
            else:
                out.append(format_raw(piece.value))
            escaped = False
        else:
            out.append(piece)
            in_string, escaped = _scan_quotes(piece, in_string, escaped)
    return "".join(out)


__all__ = [
    "Interpolation",
    "assemble",
    "format_in_string",
    "format_raw",
    "get_object_path",
    "is_truthy",
]
