"""Array filters: join, length, first, last, map, filter, reverse, sort, unique."""

from __future__ import annotations

import functools
from typing import Any

from jsonblade.environment.registry import FilterFunction, FilterRegistry, filter_registry
from jsonblade.utils.coerce import (
    is_mapping,
    is_numeric,
    is_sequence,
    js_equals,
    to_js_string,
    to_number,
)


def _join(value: Any, *args: Any) -> str:
    separator = args[0] if args and args[0] else ","
    if is_sequence(value):
        return to_js_string(separator).join(
            "" if item is None else to_js_string(item) for item in value
        )
    return to_js_string(value)


def _length(value: Any) -> int:
    if is_sequence(value) or isinstance(value, str):
        return len(value)
    if is_mapping(value):
        return len(value)
    return 0


def _first(value: Any) -> Any:
    if is_sequence(value):
        return value[0] if value else None
    if isinstance(value, str):
        return value[:1]
    return None


def _last(value: Any) -> Any:
    if is_sequence(value):
        return value[-1] if value else None
    if isinstance(value, str):
        return value[-1:]
    return None


def _map(value: Any, *args: Any) -> Any:
    """Project each mapping item onto ``prop``; other items pass through."""
    if not is_sequence(value):
        return value
    prop = args[0] if args else None
    return [
        item.get(to_js_string(prop)) if is_mapping(item) and prop else item
        for item in value
    ]


def _matches_value(item_value: Any, expected: Any) -> bool:
    if expected == "true" or expected is True:
        return item_value is True
    if expected == "false" or expected is False:
        return item_value is False
    if is_numeric(expected) and is_numeric(item_value):
        return to_number(item_value) == to_number(expected)
    return js_equals(item_value, expected)


def _filter(value: Any, *args: Any) -> Any:
    """Keep items whose ``prop`` equals ``val``.

    ``"true"``/``"false"`` match booleans, numeric strings match numbers.
    Non-mapping items are compared to ``prop`` itself.

    Example:
        >>> _filter([{"age": 25}, {"age": 30}], "age", "25")
        [{'age': 25}]
    """
    if not is_sequence(value):
        return value
    prop = args[0] if args else None
    expected = args[1] if len(args) > 1 else None
    if not prop:
        return value
    result = []
    for item in value:
        if is_mapping(item):
            if _matches_value(item.get(to_js_string(prop)), expected):
                result.append(item)
        elif js_equals(item, prop):
            result.append(item)
    return result


def _reverse(value: Any) -> Any:
    if is_sequence(value):
        return list(reversed(value))
    if isinstance(value, str):
        return value[::-1]
    return value


def _compare(a: Any, b: Any) -> int:
    try:
        if a > b:
            return 1
        if a < b:
            return -1
    except TypeError:
        pass
    return 0


def _sort(value: Any, *args: Any) -> Any:
    """Stable sort by ``prop`` when given, else lexical by string form."""
    if not is_sequence(value):
        return value
    prop = args[0] if args else None
    if prop:
        key = to_js_string(prop)

        def pick(item: Any) -> Any:
            return item.get(key) if is_mapping(item) else item

        return sorted(value, key=functools.cmp_to_key(lambda a, b: _compare(pick(a), pick(b))))
    # Default ordering compares string forms; None sorts last
    present = [item for item in value if item is not None]
    missing = [item for item in value if item is None]
    return sorted(present, key=to_js_string) + missing


def _unique(value: Any) -> Any:
    """De-duplicate preserving first occurrence; unhashable items compare by identity."""
    if not is_sequence(value):
        return value
    seen_hashable: set[tuple[type, Any]] = set()
    seen_ids: set[int] = set()
    result = []
    for item in value:
        try:
            marker = (type(item), item)
            if marker in seen_hashable:
                continue
            seen_hashable.add(marker)
        except TypeError:
            if id(item) in seen_ids:
                continue
            seen_ids.add(id(item))
        result.append(item)
    return result


ARRAY_FILTERS: dict[str, FilterFunction] = {
    "join": _join,
    "length": _length,
    "first": _first,
    "last": _last,
    "map": _map,
    "filter": _filter,
    "reverse": _reverse,
    "sort": _sort,
    "unique": _unique,
}


def register_array_filters(registry: FilterRegistry | None = None) -> None:
    target = filter_registry if registry is None else registry
    target.register_many(ARRAY_FILTERS)
