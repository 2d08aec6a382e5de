"""Built-in filter groups.

Seven groups ship with jsonblade, each exposed as a name → function map
and a ``register_*`` helper that installs it into a registry (the global
one by default):

    STRING_FILTERS      upper, lower, capitalize, trim, default, slug
    ARRAY_FILTERS       join, length, first, last, map, filter, reverse, sort, unique
    OBJECT_FILTERS      json, keys, values, get, has, entries
    LOGIC_FILTERS       equals, not, bool, gt, gte, lt, lte, contains,
                        startsWith, endsWith, isEmpty
    DATE_FILTERS        formatDate, fromNow, addDays, isoDate, timestamp
    NUMBER_FILTERS      round, ceil, floor, abs, currency, percentage,
                        add, subtract, multiply, divide, min, max
    VALIDATION_FILTERS  isEmail, isURL, isUUID, isNumber, isInteger,
                        isPhoneNumber, minLength, maxLength, matches,
                        base64Encode, base64Decode, escape, unescape,
                        urlEncode, urlDecode, md5, sha256

Filters have the signature ``(value, *args) -> value``. Arguments arrive
as strings or resolved data values; filters coerce them as needed.
"""

from __future__ import annotations

from jsonblade.environment.registry import (
    FilterFunction,
    FilterRegistry,
    async_filter_registry,
    filter_registry,
)
from jsonblade.filters.array_filters import ARRAY_FILTERS, register_array_filters
from jsonblade.filters.date_filters import DATE_FILTERS, register_date_filters
from jsonblade.filters.logic_filters import LOGIC_FILTERS, register_logic_filters
from jsonblade.filters.number_filters import NUMBER_FILTERS, register_number_filters
from jsonblade.filters.object_filters import OBJECT_FILTERS, register_object_filters
from jsonblade.filters.string_filters import STRING_FILTERS, register_string_filters
from jsonblade.filters.validation_filters import (
    VALIDATION_FILTERS,
    register_validation_filters,
)

FILTER_GROUPS: dict[str, dict[str, FilterFunction]] = {
    "string": STRING_FILTERS,
    "array": ARRAY_FILTERS,
    "object": OBJECT_FILTERS,
    "logic": LOGIC_FILTERS,
    "date": DATE_FILTERS,
    "number": NUMBER_FILTERS,
    "validation": VALIDATION_FILTERS,
}


def builtin_filters() -> dict[str, FilterFunction]:
    """Every built-in filter in one map (later groups win on name clashes)."""
    merged: dict[str, FilterFunction] = {}
    for group in FILTER_GROUPS.values():
        merged.update(group)
    return merged


_initialized = False


def initialize_filters(registry: FilterRegistry | None = None) -> None:
    """Register all seven built-in groups.

    Without an argument this installs the built-ins into the global registry
    once. Names already registered there are left alone, and later calls are
    no-ops, so global overrides are never clobbered. An explicit ``registry``
    is always populated.
    """
    global _initialized
    if registry is not None:
        registry.register_many(builtin_filters())
        return
    if _initialized:
        return
    defaults = builtin_filters()
    filter_registry.register_many(
        {name: func for name, func in defaults.items() if name not in filter_registry}
    )
    _initialized = True


def reset_filters() -> None:
    """Empty both global registries and forget that built-ins were installed."""
    global _initialized
    filter_registry.clear()
    async_filter_registry.clear()
    _initialized = False


__all__ = [
    "ARRAY_FILTERS",
    "DATE_FILTERS",
    "FILTER_GROUPS",
    "LOGIC_FILTERS",
    "NUMBER_FILTERS",
    "OBJECT_FILTERS",
    "STRING_FILTERS",
    "VALIDATION_FILTERS",
    "builtin_filters",
    "initialize_filters",
    "register_array_filters",
    "register_date_filters",
    "register_logic_filters",
    "register_number_filters",
    "register_object_filters",
    "register_string_filters",
    "register_validation_filters",
    "reset_filters",
]
