"""Value coercion helpers shared by filters and the renderer.

Template data is JSON-shaped, and filters follow JSON-world coercion rules
rather than Python's: ``"42"`` is a number when a comparison asks for one,
``True`` stringifies as ``"true"``, and integral floats print without a
trailing ``.0``. These helpers centralize those rules so every filter group
agrees on them.

Thread-Safety:
All functions are pure.

"""

from __future__ import annotations

import json
import math
from collections.abc import Mapping, Sequence
from datetime import date, datetime
from typing import Any

NAN = float("nan")


def is_mapping(value: Any) -> bool:
    """True for dict-like values (JSON objects)."""
    return isinstance(value, Mapping)


def is_sequence(value: Any) -> bool:
    """True for list-like values (JSON arrays). Strings are not sequences here."""
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def is_nan(value: Any) -> bool:
    return isinstance(value, float) and math.isnan(value)


def normalize_number(value: float | int) -> float | int:
    """Collapse integral floats to int so ``15.0`` renders as ``15``."""
    if isinstance(value, float) and value.is_integer() and abs(value) < 2**53:
        return int(value)
    return value


def parse_number(text: str) -> float | int:
    """Parse a numeric string, returning NaN when it is not a number.

    Blank strings parse as 0, matching JSON-world numeric coercion.
    """
    stripped = text.strip()
    if not stripped:
        return 0
    lowered = stripped.lower()
    if lowered in ("infinity", "+infinity"):
        return math.inf
    if lowered == "-infinity":
        return -math.inf
    # Python-only spellings are not numbers in template text
    if lowered in ("nan", "inf", "+inf", "-inf") or "_" in lowered:
        return NAN
    try:
        if lowered.startswith(("0x", "0o", "0b")):
            return int(lowered, 0)
        return int(stripped)
    except ValueError:
        pass
    try:
        return float(stripped)
    except ValueError:
        return NAN


def to_number(value: Any) -> float | int:
    """Coerce any template value to a number (NaN when impossible)."""
    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        return parse_number(value)
    if is_sequence(value):
        if len(value) == 0:
            return 0
        if len(value) == 1:
            return to_number(value[0])
    return NAN


def number_arg(args: Sequence[Any], index: int = 0) -> float | int:
    """Numeric filter argument; a missing argument is NaN rather than 0."""
    if index >= len(args):
        return NAN
    return to_number(args[index])


def is_numeric(value: Any) -> bool:
    """True when ``to_number(value)`` yields a real number."""
    return not is_nan(to_number(value))


def to_js_string(value: Any) -> str:
    """Stringify a value the way template output expects.

    Example:
        >>> to_js_string(True)
        'true'
        >>> to_js_string(3.0)
        '3'
        >>> to_js_string(["a", None, 2])
        'a,,2'
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        return str(normalize_number(value))
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if is_sequence(value):
        return ",".join("" if item is None else to_js_string(item) for item in value)
    if is_mapping(value):
        return to_json(value)
    return str(value)


def _json_default(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (set, frozenset)):
        return list(value)
    if is_mapping(value):
        return dict(value)
    if is_sequence(value):
        return list(value)
    return None


def _finite(value: Any) -> Any:
    if isinstance(value, float) and (math.isnan(value) or math.isinf(value)):
        return None
    if isinstance(value, dict):
        return {key: _finite(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_finite(item) for item in value]
    return value


def to_json(value: Any) -> str:
    """Serialize a template value as compact JSON text.

    Dates become ISO strings and sets become lists. Non-finite floats and
    other non-JSON values become ``null``.
    """
    return json.dumps(
        _finite(value), ensure_ascii=False, separators=(",", ":"), default=_json_default
    )


def js_equals(left: Any, right: Any) -> bool:
    """Strict equality that keeps ``True`` distinct from ``1``."""
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left is right
    return left == right


def js_truthy(value: Any) -> bool:
    """Loose truthiness: only None, False, 0, NaN and "" are falsy.

    Empty lists and objects are truthy, unlike Python's ``bool()``.
    """
    if value is None or value is False:
        return False
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value != 0 and not math.isnan(value)
    if isinstance(value, str):
        return value != ""
    return True


__all__ = [
    "NAN",
    "is_mapping",
    "is_nan",
    "is_numeric",
    "is_sequence",
    "js_equals",
    "js_truthy",
    "normalize_number",
    "number_arg",
    "parse_number",
    "to_js_string",
    "to_json",
    "to_number",
]
