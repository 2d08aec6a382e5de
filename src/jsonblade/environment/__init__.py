"""Configuration, error policy and filter registries for jsonblade."""

from jsonblade.environment.config import (
    DEFAULT_CONFIG,
    Delimiters,
    TemplateConfig,
    get_template_config,
    handle_template_error,
    reset_template_config,
    resolve_config,
    set_template_config,
)
from jsonblade.environment.exceptions import (
    ErrorType,
    SourceSnippet,
    TemplateError,
    TemplateException,
    build_source_snippet,
    create_template_error,
)
from jsonblade.environment.registry import (
    AsyncFilterFunction,
    AsyncFilterRegistry,
    FilterFunction,
    FilterRegistry,
    async_filter_registry,
    filter_registry,
    get_async_filter,
    get_filter,
    has_async_filter,
    has_filter,
    register_async_filter,
    register_filter,
    register_filters,
    unregister_async_filter,
    unregister_filter,
)

__all__ = [
    "DEFAULT_CONFIG",
    "AsyncFilterFunction",
    "AsyncFilterRegistry",
    "Delimiters",
    "ErrorType",
    "FilterFunction",
    "FilterRegistry",
    "SourceSnippet",
    "TemplateConfig",
    "TemplateError",
    "TemplateException",
    "async_filter_registry",
    "build_source_snippet",
    "create_template_error",
    "filter_registry",
    "get_async_filter",
    "get_filter",
    "get_template_config",
    "handle_template_error",
    "has_async_filter",
    "has_filter",
    "register_async_filter",
    "register_filter",
    "register_filters",
    "reset_template_config",
    "resolve_config",
    "set_template_config",
    "unregister_async_filter",
    "unregister_filter",
]
