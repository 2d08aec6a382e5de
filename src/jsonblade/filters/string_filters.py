"""String filters: upper, lower, capitalize, trim, default, slug.

Case and whitespace filters pass ``None`` through unchanged so a missing
value stays missing (and interpolates as an empty string).
"""

from __future__ import annotations

import re
from typing import Any

from jsonblade.environment.registry import FilterFunction, FilterRegistry, filter_registry
from jsonblade.utils.coerce import to_js_string

_SLUG_STRIP_RE = re.compile(r"[^\w\s-]", re.ASCII)
_SLUG_COLLAPSE_RE = re.compile(r"[\s_-]+", re.ASCII)


def _upper(value: Any) -> Any:
    if value is None:
        return value
    return to_js_string(value).upper()


def _lower(value: Any) -> Any:
    if value is None:
        return value
    return to_js_string(value).lower()


def _capitalize(value: Any) -> Any:
    """Uppercase the first character only; the rest is left as-is."""
    if value is None:
        return value
    text = to_js_string(value)
    return text[:1].upper() + text[1:]


def _trim(value: Any) -> Any:
    if value is None:
        return value
    return to_js_string(value).strip()


def _default(value: Any, *args: Any) -> Any:
    """Substitute the fallback for None or empty string (not for 0/False)."""
    if value is None or value == "":
        return args[0] if args else ""
    return value


def _slug(value: Any) -> Any:
    """URL slug: ``"Hello World & More!"`` → ``"hello-world-more"``."""
    if value is None:
        return value
    text = to_js_string(value).lower().strip()
    text = _SLUG_STRIP_RE.sub("", text)
    text = _SLUG_COLLAPSE_RE.sub("-", text)
    return text.strip("-")


STRING_FILTERS: dict[str, FilterFunction] = {
    "upper": _upper,
    "lower": _lower,
    "capitalize": _capitalize,
    "trim": _trim,
    "default": _default,
    "slug": _slug,
}


def register_string_filters(registry: FilterRegistry | None = None) -> None:
    target = filter_registry if registry is None else registry
    target.register_many(STRING_FILTERS)
