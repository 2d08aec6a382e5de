"""Filter registries for jsonblade.

Two namespaces exist because evaluation has two execution modes:

- ``FilterRegistry``: synchronous ``(value, *args) -> value`` transforms
- ``AsyncFilterRegistry``: filters returning awaitables, awaited by
  ``compile_async``; the synchronous path substitutes a pending placeholder

Both provide a dict-like interface plus the named operations used by the
module-level API:
    - registry['name'] = func
    - registry.update({'name': func})
    - func = registry['name']
    - 'name' in registry

Last registration wins. All mutations use copy-on-write so readers holding
the previous dict never observe a partial update.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from typing import Any

FilterFunction = Callable[..., Any]
AsyncFilterFunction = Callable[..., Awaitable[Any]]


class FilterRegistry:
    """Name → filter function map with last-write-wins semantics."""

    __slots__ = ("_filters",)

    def __init__(self, filters: Mapping[str, FilterFunction] | None = None):
        self._filters: dict[str, FilterFunction] = dict(filters or {})

    def register(self, name: str, func: FilterFunction) -> None:
        """Register ``func`` under ``name``, replacing any existing entry."""
        new = self._filters.copy()
        new[name] = func
        self._filters = new

    def register_many(self, filters: Mapping[str, FilterFunction]) -> None:
        """Batch register filters."""
        new = self._filters.copy()
        new.update(filters)
        self._filters = new

    def get(self, name: str, default: FilterFunction | None = None) -> FilterFunction | None:
        return self._filters.get(name, default)

    def has(self, name: str) -> bool:
        return name in self._filters

    def unregister(self, name: str) -> bool:
        """Remove ``name``; returns False when it was not registered."""
        if name not in self._filters:
            return False
        new = self._filters.copy()
        del new[name]
        self._filters = new
        return True

    def all(self) -> dict[str, FilterFunction]:
        """Return a copy of every registered filter."""
        return self._filters.copy()

    def clear(self) -> None:
        self._filters = {}

    # Dict-like interface

    def __getitem__(self, name: str) -> FilterFunction:
        return self._filters[name]

    def __setitem__(self, name: str, func: FilterFunction) -> None:
        self.register(name, func)

    def __delitem__(self, name: str) -> None:
        if not self.unregister(name):
            raise KeyError(name)

    def __contains__(self, name: object) -> bool:
        return name in self._filters

    def __len__(self) -> int:
        return len(self._filters)

    def __iter__(self):
        return iter(self._filters)

    def update(self, mapping: Mapping[str, FilterFunction]) -> None:
        self.register_many(mapping)

    def copy(self) -> dict[str, FilterFunction]:
        return self.all()

    def keys(self):
        return self._filters.keys()

    def values(self):
        return self._filters.values()

    def items(self):
        return self._filters.items()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {len(self._filters)} filters>"


class AsyncFilterRegistry(FilterRegistry):
    """Separate namespace for filters that must await I/O."""

    __slots__ = ()


# Process-wide defaults used by the module-level convenience API
filter_registry = FilterRegistry()
async_filter_registry = AsyncFilterRegistry()


def register_filter(name: str, func: FilterFunction) -> None:
    filter_registry.register(name, func)


def register_filters(filters: Mapping[str, FilterFunction]) -> None:
    filter_registry.register_many(filters)


def get_filter(name: str) -> FilterFunction | None:
    return filter_registry.get(name)


def has_filter(name: str) -> bool:
    return filter_registry.has(name)


def unregister_filter(name: str) -> bool:
    return filter_registry.unregister(name)


def register_async_filter(name: str, func: AsyncFilterFunction) -> None:
    async_filter_registry.register(name, func)


def get_async_filter(name: str) -> AsyncFilterFunction | None:
    return async_filter_registry.get(name)


def has_async_filter(name: str) -> bool:
    return async_filter_registry.has(name)


def unregister_async_filter(name: str) -> bool:
    return async_filter_registry.unregister(name)


__all__ = [
    "AsyncFilterFunction",
    "AsyncFilterRegistry",
    "FilterFunction",
    "FilterRegistry",
    "async_filter_registry",
    "filter_registry",
    "get_async_filter",
    "get_filter",
    "has_async_filter",
    "has_filter",
    "register_async_filter",
    "register_filter",
    "register_filters",
    "unregister_async_filter",
    "unregister_filter",
]
