"""JSONBlade — an isolated template compiler.

Each instance owns a filter map that is consulted before the fallback
registry, so several differently configured compilers can share a process
without stepping on each other:

    >>> blade = JSONBlade(use_builtins=True)
    >>> blade.register_filter("shout", lambda v: f"{v}!".upper())
    >>> blade.compile('{"msg": "{{text | shout}}"}', {"text": "hi"})
    {'msg': 'HI!'}

Filter lookup order:
    1. the instance's own filters
    2. the fallback registry (the global one unless given)
    3. the async registry

Configuration:
    Without ``config`` the instance reads the global configuration on every
    call. Passing ``config`` (or calling ``set_config``) gives the instance a
    private ``TemplateConfig`` that global changes no longer affect.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from jsonblade.compiler import (
    compile_json_template,
    compile_json_template_async,
    render_json_template,
    render_json_template_async,
)
from jsonblade.environment.config import TemplateConfig, get_template_config
from jsonblade.environment.registry import (
    AsyncFilterRegistry,
    FilterFunction,
    FilterRegistry,
    filter_registry,
)
from jsonblade.filters import builtin_filters, initialize_filters
from jsonblade.render_context import Functions


class JSONBlade:
    """Template compiler bound to its own filters and, optionally, its own config.

    Args:
        filters: Initial ``{name: func}`` filters for this instance
        use_builtins: Seed the instance with all built-in filter groups
        config: Private configuration (``TemplateConfig`` or partial mapping)
        registry: Fallback filter registry (global by default)
        async_registry: Async filter registry (global by default)
    """

    __slots__ = ("_async_registry", "_config", "_filters", "_registry")

    def __init__(
        self,
        filters: Mapping[str, FilterFunction] | None = None,
        use_builtins: bool = False,
        config: TemplateConfig | Mapping[str, Any] | None = None,
        registry: FilterRegistry | None = None,
        async_registry: AsyncFilterRegistry | None = None,
    ):
        self._filters: dict[str, FilterFunction] = {}
        self._config: TemplateConfig | None = None
        self._registry = registry
        self._async_registry = async_registry
        if config is not None:
            self.set_config(config)
        if use_builtins:
            self._seed_builtins()
        if filters:
            self._filters.update(filters)

    def _seed_builtins(self) -> None:
        """Copy built-ins in; same-named fallback entries win when overrides are allowed."""
        fallback = self._registry
        if fallback is None:
            initialize_filters()
            fallback = filter_registry
        allow_override = self.get_config().allow_filter_override
        for name, builtin in builtin_filters().items():
            override = fallback.get(name) if allow_override else None
            self._filters[name] = override if override is not None else builtin

    # -- filters ----------------------------------------------------------

    def register_filter(self, name: str, func: FilterFunction) -> None:
        self._filters[name] = func

    def unregister_filter(self, name: str) -> bool:
        return self._filters.pop(name, None) is not None

    def has_filter(self, name: str) -> bool:
        return name in self._filters

    def get_filter(self, name: str) -> FilterFunction | None:
        return self._filters.get(name)

    @property
    def filters(self) -> dict[str, FilterFunction]:
        """Copy of the instance's own filter map."""
        return dict(self._filters)

    # -- configuration ----------------------------------------------------

    def set_config(
        self, config: TemplateConfig | Mapping[str, Any] | None = None, /, **overrides: Any
    ) -> None:
        """Merge settings into this instance's private configuration.

        The first call starts from a copy of the current global configuration.
        """
        base = self._config if self._config is not None else get_template_config()
        if isinstance(config, TemplateConfig):
            base = config.copy()
        elif config is not None:
            overrides = {**config, **overrides}
        self._config = base.merged(overrides) if overrides else base

    def get_config(self) -> TemplateConfig:
        """Effective configuration (private copy, or the current global one)."""
        if self._config is None:
            return get_template_config()
        return self._config.copy()

    # -- compilation ------------------------------------------------------

    def _options(self) -> dict[str, Any]:
        return {
            "registry": self._registry,
            "async_registry": self._async_registry,
            "config": self._config,
        }

    def compile(self, template: str, data: Any, functions: Functions = None) -> Any:
        """Render ``template`` and parse the result as JSON."""
        return compile_json_template(
            template, data, functions, self._filters.get, **self._options()
        )

    async def compile_async(self, template: str, data: Any, functions: Functions = None) -> Any:
        return await compile_json_template_async(
            template, data, functions, self._filters.get, **self._options()
        )

    def render(self, template: str, data: Any, functions: Functions = None) -> str | None:
        """Render ``template`` to text without JSON parsing."""
        return render_json_template(
            template, data, functions, self._filters.get, **self._options()
        )

    async def render_async(
        self, template: str, data: Any, functions: Functions = None
    ) -> str | None:
        return await render_json_template_async(
            template, data, functions, self._filters.get, **self._options()
        )

    def __repr__(self) -> str:
        scope = "private" if self._config is not None else "global"
        return f"<JSONBlade {len(self._filters)} filters, {scope} config>"


__all__ = ["JSONBlade"]
