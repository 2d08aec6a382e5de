"""Number filters: rounding, arithmetic, currency and percentage formatting.

Inputs are coerced with ``to_number`` so numeric strings work everywhere.
Non-numeric input never raises; each filter returns a neutral fallback
(usually ``0``) instead. Integral float results are returned as ``int``.
"""

from __future__ import annotations

import math
import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from jsonblade.environment.registry import FilterFunction, FilterRegistry, filter_registry
from jsonblade.utils.constants import CURRENCY_SYMBOLS
from jsonblade.utils.coerce import (
    is_nan,
    js_truthy,
    normalize_number,
    number_arg,
    to_js_string,
    to_number,
)

_THOUSANDS_RE = re.compile(r"\B(?=(\d{3})+(?!\d))")


def to_fixed(value: float | int, digits: int) -> str:
    """Fixed-point text with halves rounded away from zero.

    Example:
        >>> to_fixed(1.005, 2), to_fixed(2.5, 0)
        ('1.00', '3')
    """
    if not 0 <= digits <= 100:
        raise ValueError(f"digits argument must be between 0 and 100, got {digits}")
    if is_nan(value) or math.isinf(value):
        return to_js_string(float(value))
    exponent = Decimal(1).scaleb(-digits)
    return f"{Decimal(value).quantize(exponent, rounding=ROUND_HALF_UP):f}"


def _or(value: float | int, fallback: float | int) -> float | int:
    """``value`` unless it is 0 or NaN."""
    return value if js_truthy(value) else fallback


def _round4(value: float | int) -> float | int:
    if is_nan(value) or math.isinf(value):
        return value
    return normalize_number(math.floor(value * 10000 + 0.5) / 10000)


def _round(value: Any, *args: Any) -> float | int:
    digits = int(_or(number_arg(args), 0))
    num = to_number(value)
    if is_nan(num):
        return 0
    return normalize_number(float(to_fixed(num, digits)))


def _ceil(value: Any) -> float | int:
    num = to_number(value)
    if is_nan(num):
        return 0
    return num if math.isinf(num) else math.ceil(num)


def _floor(value: Any) -> float | int:
    num = to_number(value)
    if is_nan(num):
        return 0
    return num if math.isinf(num) else math.floor(num)


def _abs(value: Any) -> float | int:
    num = to_number(value)
    return 0 if is_nan(num) else normalize_number(abs(num))


def _currency(value: Any, *args: Any) -> str:
    """``1234.56`` → ``"1 234,56 €"``; space-grouped, comma decimal.

    Known codes map to symbols (EUR, USD, GBP); others print verbatim.
    """
    code = to_js_string(args[0]) if args and js_truthy(args[0]) else "EUR"
    num = to_number(value)
    if is_nan(num):
        return "0,00 €"
    formatted = _THOUSANDS_RE.sub(" ", to_fixed(num, 2)).replace(".", ",", 1)
    return f"{formatted} {CURRENCY_SYMBOLS.get(code, code)}"


def _percentage(value: Any, *args: Any) -> str:
    digits = int(_or(number_arg(args), 0))
    num = to_number(value)
    if is_nan(num):
        return "0%"
    return f"{to_fixed(num * 100, digits)}%"


def _add(value: Any, *args: Any) -> float | int:
    addend = _or(number_arg(args), 0)
    num = to_number(value)
    if is_nan(num):
        return addend
    return _round4(num + addend)


def _subtract(value: Any, *args: Any) -> float | int:
    subtrahend = _or(number_arg(args), 0)
    num = to_number(value)
    if is_nan(num):
        return -subtrahend
    return normalize_number(num - subtrahend)


def _multiply(value: Any, *args: Any) -> float | int:
    multiplier = _or(number_arg(args), 1)
    num = to_number(value)
    if is_nan(num):
        return 0
    return _round4(num * multiplier)


def _divide(value: Any, *args: Any) -> float | int:
    divisor = _or(number_arg(args), 1)
    num = to_number(value)
    if is_nan(num) or divisor == 0:
        return 0
    return normalize_number(num / divisor)


def _bounded(value: Any, args: tuple[Any, ...], pick: Any) -> float | int:
    other = number_arg(args)
    num = to_number(value)
    if is_nan(num):
        return _or(other, 0)
    if is_nan(other):
        return num
    return pick(num, other)


def _min(value: Any, *args: Any) -> float | int:
    return _bounded(value, args, min)


def _max(value: Any, *args: Any) -> float | int:
    return _bounded(value, args, max)


NUMBER_FILTERS: dict[str, FilterFunction] = {
    "round": _round,
    "ceil": _ceil,
    "floor": _floor,
    "abs": _abs,
    "currency": _currency,
    "percentage": _percentage,
    "add": _add,
    "subtract": _subtract,
    "multiply": _multiply,
    "divide": _divide,
    "min": _min,
    "max": _max,
}


def register_number_filters(registry: FilterRegistry | None = None) -> None:
    target = filter_registry if registry is None else registry
    target.register_many(NUMBER_FILTERS)
