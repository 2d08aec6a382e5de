"""Per-render state passed explicitly through evaluation.

A ``RenderContext`` bundles everything one compile call needs besides the
data: host functions, filter lookup (resolver → registry → async registry),
the effective configuration, and the template source for diagnostics.
Nothing in the evaluator reads a process-wide singleton; the global
registries and config are wired in only by the convenience layer.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, NamedTuple

from jsonblade.environment.config import TemplateConfig, handle_template_error
from jsonblade.environment.exceptions import TemplateError, TemplateException
from jsonblade.environment.registry import (
    AsyncFilterRegistry,
    FilterFunction,
    FilterRegistry,
    async_filter_registry,
    filter_registry,
)

FilterResolver = Callable[[str], FilterFunction | None]


class TemplateFunction(NamedTuple):
    """A host function callable from templates as ``name(args)``."""

    name: str
    func: Callable[..., Any]


Functions = Mapping[str, Callable[..., Any]] | Iterable[Any] | None


def normalize_functions(functions: Functions) -> dict[str, Callable[..., Any]]:
    """Accept the supported host-function shapes and return a name map.

    Supported:
        - ``{"name": func}`` mappings
        - sequences of ``TemplateFunction`` or ``(name, func)`` tuples
        - sequences of objects with ``name`` and ``func`` attributes
        - sequences of ``{"name": ..., "func": ...}`` dicts

    The first entry wins when a name appears twice.
    """
    if functions is None:
        return {}
    if isinstance(functions, Mapping):
        return dict(functions)

    resolved: dict[str, Callable[..., Any]] = {}
    for entry in functions:
        if isinstance(entry, tuple) and len(entry) == 2:
            name, func = entry
        elif isinstance(entry, Mapping):
            name, func = entry["name"], entry["func"]
        elif hasattr(entry, "name") and hasattr(entry, "func"):
            name, func = entry.name, entry.func
        else:
            raise TypeError(f"Unsupported template function entry: {entry!r}")
        if not callable(func):
            raise TypeError(f"Template function {name!r} is not callable")
        resolved.setdefault(name, func)
    return resolved


@dataclass(slots=True)
class RenderContext:
    """Evaluation environment for one compile call.

    Attributes:
        config: Effective configuration (error policy, delimiters)
        functions: Host functions by name
        filter_resolver: Optional first-chance filter lookup
        registry: Fallback synchronous filter registry
        async_registry: Registry consulted last, for awaitable filters
        source: Template source, attached to raised exceptions
        variables: Evaluated ``#set`` values, filled in before rendering
    """

    config: TemplateConfig
    functions: dict[str, Callable[..., Any]] = field(default_factory=dict)
    filter_resolver: FilterResolver | None = None
    registry: FilterRegistry = field(default_factory=lambda: filter_registry)
    async_registry: AsyncFilterRegistry = field(default_factory=lambda: async_filter_registry)
    source: str | None = None
    variables: dict[str, Any] = field(default_factory=dict)

    def lookup_filter(self, name: str) -> FilterFunction | None:
        if self.filter_resolver is not None:
            func = self.filter_resolver(name)
            if func is not None:
                return func
        func = self.registry.get(name)
        if func is None:
            func = self.async_registry.get(name)
        return func

    def report(self, error: TemplateError, cause: BaseException | None = None) -> None:
        """Route a structured error through the configured policy."""
        try:
            handle_template_error(error, self.config, self.source)
        except TemplateException as exc:
            if cause is not None:
                raise exc from cause
            raise


__all__ = [
    "FilterResolver",
    "Functions",
    "RenderContext",
    "TemplateFunction",
    "normalize_functions",
]
