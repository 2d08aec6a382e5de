"""Logic filters: comparisons, membership and emptiness checks.

All return booleans, which makes them the usual tail of a pipeline feeding
an ``{{#if}}`` condition::

    {{#if user.age | gte(18)}}"adult"{{#else}}"minor"{{/if}}
"""

from __future__ import annotations

from typing import Any

from jsonblade.environment.registry import FilterFunction, FilterRegistry, filter_registry
from jsonblade.utils.coerce import (
    is_mapping,
    is_numeric,
    is_sequence,
    js_equals,
    js_truthy,
    number_arg,
    to_js_string,
    to_number,
)


def _equals(value: Any, *args: Any) -> bool:
    """Strict equality; a numeric argument is compared as a number.

    So ``{{age | equals(25)}}`` is true for ``25`` but false for ``"25"``.
    ``true``/``false``/``null`` arguments are compared as themselves, never
    as 1/0.
    """
    expected = args[0] if args else None
    if expected is not None and not isinstance(expected, bool) and is_numeric(expected):
        expected = to_number(expected)
    return js_equals(value, expected)


def _not(value: Any) -> bool:
    return not js_truthy(value)


def _bool(value: Any) -> bool:
    return js_truthy(value)


def _gt(value: Any, *args: Any) -> bool:
    return to_number(value) > number_arg(args)


def _gte(value: Any, *args: Any) -> bool:
    return to_number(value) >= number_arg(args)


def _lt(value: Any, *args: Any) -> bool:
    return to_number(value) < number_arg(args)


def _lte(value: Any, *args: Any) -> bool:
    return to_number(value) <= number_arg(args)


def _contains(value: Any, *args: Any) -> bool:
    needle = args[0] if args else None
    if isinstance(value, str):
        return to_js_string(needle) in value
    if is_sequence(value):
        return any(js_equals(item, needle) for item in value)
    return False


def _starts_with(value: Any, *args: Any) -> bool:
    prefix = args[0] if args else None
    return to_js_string(value).startswith(to_js_string(prefix))


def _ends_with(value: Any, *args: Any) -> bool:
    suffix = args[0] if args else None
    return to_js_string(value).endswith(to_js_string(suffix))


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str) or is_sequence(value) or is_mapping(value):
        return len(value) == 0
    return False


LOGIC_FILTERS: dict[str, FilterFunction] = {
    "equals": _equals,
    "not": _not,
    "bool": _bool,
    "gt": _gt,
    "gte": _gte,
    "lt": _lt,
    "lte": _lte,
    "contains": _contains,
    "startsWith": _starts_with,
    "endsWith": _ends_with,
    "isEmpty": _is_empty,
}


def register_logic_filters(registry: FilterRegistry | None = None) -> None:
    target = filter_registry if registry is None else registry
    target.register_many(LOGIC_FILTERS)
