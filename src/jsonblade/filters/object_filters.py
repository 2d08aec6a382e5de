"""Object filters: json, keys, values, entries, get, has."""

from __future__ import annotations

from typing import Any

from jsonblade.environment.registry import FilterFunction, FilterRegistry, filter_registry
from jsonblade.utils.coerce import is_mapping, is_sequence, js_truthy, to_js_string, to_json


def _json(value: Any) -> str:
    return to_json(value)


def _keys(value: Any) -> list[Any]:
    if is_mapping(value):
        return list(value.keys())
    return []


def _values(value: Any) -> list[Any]:
    if is_mapping(value):
        return list(value.values())
    return []


def _entries(value: Any) -> list[list[Any]]:
    if is_mapping(value):
        return [[key, item] for key, item in value.items()]
    return []


def _lookup(value: Any, key: str) -> tuple[bool, Any]:
    if is_mapping(value):
        if key in value:
            return True, value[key]
        return False, None
    if key == "length":
        return True, len(value)
    if key.isascii() and key.isdecimal() and int(key) < len(value):
        return True, value[int(key)]
    return False, None


def _get(value: Any, *args: Any) -> Any:
    """Single-step lookup: ``{{user | get(name)}}``, ``{{items | get(0)}}``."""
    key = args[0] if args else None
    if not js_truthy(key) or not (is_mapping(value) or is_sequence(value)):
        return None
    return _lookup(value, to_js_string(key))[1]


def _has(value: Any, *args: Any) -> bool:
    key = args[0] if args else None
    if not js_truthy(key) or not (is_mapping(value) or is_sequence(value)):
        return False
    return _lookup(value, to_js_string(key))[0]


OBJECT_FILTERS: dict[str, FilterFunction] = {
    "json": _json,
    "keys": _keys,
    "values": _values,
    "get": _get,
    "has": _has,
    "entries": _entries,
}


def register_object_filters(registry: FilterRegistry | None = None) -> None:
    target = filter_registry if registry is None else registry
    target.register_many(OBJECT_FILTERS)
