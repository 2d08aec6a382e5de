"""Evaluation core: expressions, blocks and hoisted variables.

Every function here is a generator that yields ``Call``/``Gather`` effects
(see ``jsonblade.template.effects``), so the same code serves both
``compile`` and ``compile_async``.

Bare ``{{name}}`` references to ``#set`` variables take the variable's value
before any loop scope is consulted, and are spliced verbatim, as is
``{{this}}``.

Pipeline evaluation:
    1. Base value: host function call when ``name(args)`` names a supplied
       function, else the base text resolved as a data path.
    2. Filters left to right. Unknown filters report ``UNKNOWN_FILTER``;
       filters that raise report ``FILTER_ERROR``. Either way the value
       passes through unchanged when the policy does not raise.

Host function exceptions are not caught.
"""

from __future__ import annotations

from collections import ChainMap
from collections.abc import Mapping, Sequence
from dataclasses import replace
from typing import Any

from jsonblade.environment.exceptions import ErrorType, create_template_error
from jsonblade.nodes import (
    Comment,
    Const,
    Data,
    Each,
    Expr,
    FuncCall,
    If,
    Node,
    Output,
    Path,
    PathArg,
    Pipeline,
    Set,
    TemplateNode,
    Unless,
)
from jsonblade.render_context import RenderContext
from jsonblade.template.effects import PENDING, Call, Gather, Step
from jsonblade.template.helpers import Interpolation, get_object_path, is_truthy
from jsonblade.template.loop_context import LoopContext
from jsonblade.utils.coerce import is_sequence

Piece = str | Interpolation
Scope = Mapping[str, Any]

_STATIC_NODES = (Data, Comment, Set)


def resolve_arg(arg: Expr, scope: Scope) -> Any:
    """Constant value, or the path's value falling back to the literal token."""
    if isinstance(arg, Const):
        return arg.value
    if isinstance(arg, PathArg):
        value = get_object_path(arg.token, scope)
        return arg.token if value is None else value
    raise TypeError(f"Unsupported argument node: {type(arg).__name__}")


def eval_pipeline(node: Pipeline, scope: Scope, ctx: RenderContext) -> Step[Any]:
    """Evaluate ``base | filter(args) | ...`` against ``scope``."""
    base = node.base
    if isinstance(base, FuncCall) and base.name in ctx.functions:
        args = tuple(resolve_arg(arg, scope) for arg in base.args)
        value = yield Call(ctx.functions[base.name], args)
    else:
        path = base.raw if isinstance(base, FuncCall) else base.path
        value = get_object_path(path, scope)

    for flt in node.filters:
        if value is PENDING:
            break
        func = ctx.lookup_filter(flt.name)
        if func is None:
            ctx.report(
                create_template_error(
                    ErrorType.UNKNOWN_FILTER,
                    f"Unknown filter: {flt.name}",
                    filter=flt.name,
                    expression=node.source,
                    position=node.position,
                )
            )
            continue
        args = tuple(resolve_arg(arg, scope) for arg in flt.args)
        try:
            value = yield Call(func, (value, *args))
        except Exception as exc:
            ctx.report(
                create_template_error(
                    ErrorType.FILTER_ERROR,
                    f"Filter '{flt.name}' failed: {exc}",
                    filter=flt.name,
                    expression=node.source,
                    position=node.position,
                ),
                cause=exc,
            )
    return value


def eval_variables(tree: TemplateNode, root: Scope, ctx: RenderContext) -> Step[dict[str, Any]]:
    """Evaluate hoisted ``#set`` declarations in document order.

    Each right-hand side sees the data plus every variable set before it.
    """
    variables: dict[str, Any] = {}
    for node in tree.iter_sets():
        scope = ChainMap(variables, root)
        variables[node.name] = yield from eval_pipeline(node.value, scope, ctx)
    return variables


def render_nodes(nodes: Sequence[Node], scope: Scope, ctx: RenderContext) -> Step[list[Piece]]:
    """Render a body into pieces; dynamic siblings are gathered."""
    dynamic = [node for node in nodes if not isinstance(node, _STATIC_NODES)]
    if len(dynamic) > 1:
        results = yield Gather(tuple(_render_node(node, scope, ctx) for node in dynamic))
    elif dynamic:
        results = [(yield from _render_node(dynamic[0], scope, ctx))]
    else:
        results = []

    rendered = iter(results)
    pieces: list[Piece] = []
    for node in nodes:
        if isinstance(node, Data):
            pieces.append(node.value)
        elif not isinstance(node, _STATIC_NODES):
            pieces.extend(next(rendered))
    return pieces


def _bare_name(expr: Pipeline) -> str | None:
    if expr.filters or not isinstance(expr.base, Path):
        return None
    return expr.base.path


def _is_this(expr: Pipeline) -> bool:
    return isinstance(expr.base, Path) and expr.base.path == "this"


def _render_node(node: Node, scope: Scope, ctx: RenderContext) -> Step[list[Piece]]:
    if isinstance(node, Output):
        expr = node.expr
        name = _bare_name(expr)
        if name in ctx.variables:
            return [Interpolation(ctx.variables[name], verbatim=True)]
        value = yield from eval_pipeline(expr, scope, ctx)
        return [Interpolation(value, verbatim=_is_this(expr))]

    if isinstance(node, If):
        test = yield from eval_pipeline(node.test, scope, ctx)
        branch = node.body if is_truthy(test) else node.else_
        return (yield from render_nodes(branch, scope, ctx))

    if isinstance(node, Unless):
        test = yield from eval_pipeline(node.test, scope, ctx)
        if is_truthy(test):
            return []
        return (yield from render_nodes(node.body, scope, ctx))

    if isinstance(node, Each):
        return (yield from _render_each(node, scope, ctx))

    raise TypeError(f"Cannot render node type: {type(node).__name__}")


def _render_each(node: Each, scope: Scope, ctx: RenderContext) -> Step[list[Piece]]:
    items = yield from eval_pipeline(node.iter, scope, ctx)
    if not is_sequence(items) or not items:
        return []

    loop = LoopContext(items)
    iterations = tuple(render_nodes(node.body, loop.scope(item, scope), ctx) for item in loop)
    results = yield Gather(iterations)
    return [piece for iteration in results for piece in iteration]


def render_template(tree: TemplateNode, data: Any, ctx: RenderContext) -> Step[list[Piece]]:
    """Evaluate variables, then render the whole tree."""
    root: Scope = data if isinstance(data, Mapping) else {}
    variables = yield from eval_variables(tree, root, ctx)
    ctx = replace(ctx, variables=variables)
    scope = ChainMap(variables, root) if variables else root
    return (yield from render_nodes(tree.body, scope, ctx))


__all__ = [
    "Piece",
    "eval_pipeline",
    "eval_variables",
    "render_nodes",
    "render_template",
    "resolve_arg",
]
