"""Module-level convenience API.

These functions wire the process-wide defaults (global filter registries,
global configuration) into a ``RenderContext`` and run one template or
expression. The first call that relies on the global registry installs the
built-in filters into it.

Calling styles:
    compile_json_template        rendered text parsed as JSON
    render_json_template         rendered text, unparsed
    evaluate_expression          a single ``path | filter`` expression

Each has an ``_async`` twin that awaits host functions and async filters.

Error Handling:
    - Empty or whitespace-only templates return ``""`` without parsing
    - Structural errors (unclosed blocks, unknown directives) report
      ``INVALID_SYNTAX`` and return None
    - Output that is not valid JSON reports ``INVALID_SYNTAX`` and returns None
    - Host function exceptions propagate unchanged

Whether a report raises or only logs a warning is decided by
``TemplateConfig.throw_on_error`` / ``strict_mode``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from jsonblade.environment.config import TemplateConfig, resolve_config
from jsonblade.environment.exceptions import ErrorType, create_template_error
from jsonblade.environment.registry import (
    AsyncFilterRegistry,
    FilterRegistry,
    async_filter_registry,
    filter_registry,
)
from jsonblade.filters import initialize_filters
from jsonblade.parser import ParseError, parse_expression
from jsonblade.render_context import (
    FilterResolver,
    Functions,
    RenderContext,
    normalize_functions,
)
from jsonblade.template.core import Template
from jsonblade.template.effects import run_async, run_sync
from jsonblade.template.evaluator import eval_pipeline


def build_context(
    functions: Functions = None,
    filter_resolver: FilterResolver | None = None,
    *,
    registry: FilterRegistry | None = None,
    async_registry: AsyncFilterRegistry | None = None,
    config: TemplateConfig | Mapping[str, Any] | None = None,
    source: str | None = None,
) -> RenderContext:
    """Assemble a ``RenderContext``, defaulting to the global registries and config."""
    if registry is None:
        initialize_filters()
        registry = filter_registry
    return RenderContext(
        config=resolve_config(config),
        functions=normalize_functions(functions),
        filter_resolver=filter_resolver,
        registry=registry,
        async_registry=async_filter_registry if async_registry is None else async_registry,
        source=source,
    )


def load_template(source: str, ctx: RenderContext) -> Template | None:
    """Parse ``source`` with the context's delimiters.

    Structural errors are reported as ``INVALID_SYNTAX``; returns None when
    the policy does not raise.
    """
    try:
        return Template(source, ctx.config.delimiters)
    except ParseError as exc:
        ctx.report(
            create_template_error(
                ErrorType.INVALID_SYNTAX,
                exc.message,
                expression=exc.token.value or None,
                position=exc.position,
            ),
            cause=exc,
        )
        return None


def _is_blank(template: str | None) -> bool:
    return not template or not template.strip()


def compile_json_template(
    template: str,
    data: Any,
    functions: Functions = None,
    filter_resolver: FilterResolver | None = None,
    *,
    registry: FilterRegistry | None = None,
    async_registry: AsyncFilterRegistry | None = None,
    config: TemplateConfig | Mapping[str, Any] | None = None,
) -> Any:
    """Render ``template`` against ``data`` and parse the result as JSON.

    Args:
        template: JSON text with ``{{ }}`` expressions and block directives
        data: Data context (a mapping; other values act as an empty context)
        functions: Host functions callable as ``name(args)``
        filter_resolver: First-chance filter lookup, falling back to ``registry``
        registry: Fallback filter registry (global by default)
        async_registry: Registry for awaitable filters (global by default)
        config: Explicit configuration instead of the global one

    Returns:
        The parsed JSON value, ``""`` for a blank template, or None when the
        template or its output is invalid and the policy does not raise.

    Example:
        >>> compile_json_template('{"name": "{{user.name | upper}}"}', {"user": {"name": "ada"}})
        {'name': 'ADA'}
    """
    if _is_blank(template):
        return ""
    ctx = build_context(
        functions,
        filter_resolver,
        registry=registry,
        async_registry=async_registry,
        config=config,
        source=template,
    )
    tpl = load_template(template, ctx)
    return None if tpl is None else tpl.compile(data, ctx)


async def compile_json_template_async(
    template: str,
    data: Any,
    functions: Functions = None,
    filter_resolver: FilterResolver | None = None,
    *,
    registry: FilterRegistry | None = None,
    async_registry: AsyncFilterRegistry | None = None,
    config: TemplateConfig | Mapping[str, Any] | None = None,
) -> Any:
    """Async variant of ``compile_json_template``.

    Host functions and filters may return awaitables; independent
    expressions and loop iterations are evaluated concurrently.
    """
    if _is_blank(template):
        return ""
    ctx = build_context(
        functions,
        filter_resolver,
        registry=registry,
        async_registry=async_registry,
        config=config,
        source=template,
    )
    tpl = load_template(template, ctx)
    return None if tpl is None else await tpl.compile_async(data, ctx)


def render_json_template(
    template: str,
    data: Any,
    functions: Functions = None,
    filter_resolver: FilterResolver | None = None,
    *,
    registry: FilterRegistry | None = None,
    async_registry: AsyncFilterRegistry | None = None,
    config: TemplateConfig | Mapping[str, Any] | None = None,
) -> str | None:
    """Render ``template`` to text without parsing it as JSON."""
    if _is_blank(template):
        return ""
    ctx = build_context(
        functions,
        filter_resolver,
        registry=registry,
        async_registry=async_registry,
        config=config,
        source=template,
    )
    tpl = load_template(template, ctx)
    return None if tpl is None else tpl.render(data, ctx)


async def render_json_template_async(
    template: str,
    data: Any,
    functions: Functions = None,
    filter_resolver: FilterResolver | None = None,
    *,
    registry: FilterRegistry | None = None,
    async_registry: AsyncFilterRegistry | None = None,
    config: TemplateConfig | Mapping[str, Any] | None = None,
) -> str | None:
    if _is_blank(template):
        return ""
    ctx = build_context(
        functions,
        filter_resolver,
        registry=registry,
        async_registry=async_registry,
        config=config,
        source=template,
    )
    tpl = load_template(template, ctx)
    return None if tpl is None else await tpl.render_async(data, ctx)


def _scope(data: Any) -> Mapping[str, Any]:
    return data if isinstance(data, Mapping) else {}


def evaluate_expression(
    expr: str,
    data: Any,
    functions: Functions = None,
    filter_resolver: FilterResolver | None = None,
    *,
    registry: FilterRegistry | None = None,
    async_registry: AsyncFilterRegistry | None = None,
    config: TemplateConfig | Mapping[str, Any] | None = None,
) -> Any:
    """Evaluate one ``base | filter(args) | ...`` expression.

    Example:
        >>> evaluate_expression("items | length", {"items": [1, 2, 3]})
        3
        >>> evaluate_expression("missing.deep.path", {}) is None
        True
    """
    ctx = build_context(
        functions,
        filter_resolver,
        registry=registry,
        async_registry=async_registry,
        config=config,
    )
    pipeline = parse_expression(expr.strip())
    return run_sync(eval_pipeline(pipeline, _scope(data), ctx))


async def evaluate_expression_async(
    expr: str,
    data: Any,
    functions: Functions = None,
    filter_resolver: FilterResolver | None = None,
    *,
    registry: FilterRegistry | None = None,
    async_registry: AsyncFilterRegistry | None = None,
    config: TemplateConfig | Mapping[str, Any] | None = None,
) -> Any:
    ctx = build_context(
        functions,
        filter_resolver,
        registry=registry,
        async_registry=async_registry,
        config=config,
    )
    pipeline = parse_expression(expr.strip())
    return await run_async(eval_pipeline(pipeline, _scope(data), ctx))


__all__ = [
    "build_context",
    "compile_json_template",
    "compile_json_template_async",
    "evaluate_expression",
    "evaluate_expression_async",
    "load_template",
    "render_json_template",
    "render_json_template_async",
]
