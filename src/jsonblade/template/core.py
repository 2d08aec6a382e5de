"""jsonblade Template — parsed template object ready for rendering.

Architecture:
    ```
    source ──Lexer──▶ tokens ──Parser──▶ TemplateNode (cached, immutable)
                                              │
              data + RenderContext ──▶ render_template() generator
                                              │
                         run_sync / run_async ▼
                                     pieces ──assemble──▶ text ──json──▶ value
    ```

Parsed trees are cached per ``(source, delimiters)`` in an LRU cache. The
cache holds immutable trees only, never rendered output, so sharing is
safe across data, configurations and threads.

"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from typing import Any

from jsonblade.environment.config import Delimiters
from jsonblade.environment.exceptions import ErrorType, create_template_error
from jsonblade.lexer import Lexer
from jsonblade.nodes import TemplateNode
from jsonblade.parser import Parser
from jsonblade.render_context import RenderContext
from jsonblade.template.effects import run_async, run_sync
from jsonblade.template.evaluator import render_template
from jsonblade.template.helpers import assemble
from jsonblade.utils.constants import (
    DEFAULT_END_DELIMITER,
    DEFAULT_START_DELIMITER,
    TEMPLATE_CACHE_SIZE,
)

logger = logging.getLogger(__name__)

_DEFAULT_DELIMITERS = Delimiters(DEFAULT_START_DELIMITER, DEFAULT_END_DELIMITER)


@lru_cache(maxsize=TEMPLATE_CACHE_SIZE)
def parse_template(source: str, delimiters: Delimiters = _DEFAULT_DELIMITERS) -> TemplateNode:
    """Lex and parse ``source``; raises ``ParseError`` on malformed structure."""
    logger.debug("Parsing template (%d chars)", len(source))
    return Parser(Lexer(source, delimiters).tokenize(), source).parse()


def clear_template_cache() -> None:
    """Drop every cached parse tree."""
    parse_template.cache_clear()


def template_cache_info() -> Any:
    """``functools`` cache statistics for the parse cache."""
    return parse_template.cache_info()


def parse_json_output(text: str, ctx: RenderContext) -> Any:
    """Parse rendered text as JSON; invalid JSON reports ``INVALID_SYNTAX`` and yields None."""
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        ctx.report(
            create_template_error(
                ErrorType.INVALID_SYNTAX,
                f"Invalid JSON after interpolation: {exc.msg} "
                f"(line {exc.lineno}, column {exc.colno})",
            ),
            cause=exc,
        )
        return None


class Template:
    """A parsed JSON template, reusable across data and render contexts.

    Templates are immutable after construction; rendering creates only
    local state, so one instance may be rendered concurrently.

    Example:
        >>> from jsonblade import TemplateConfig
        >>> ctx = RenderContext(config=TemplateConfig())
        >>> Template('{"greeting": "Hi {{name}}"}').compile({"name": "Ada"}, ctx)
        {'greeting': 'Hi Ada'}

    """

    __slots__ = ("_delimiters", "_source", "_tree")

    def __init__(self, source: str, delimiters: Delimiters | None = None):
        self._source = source
        self._delimiters = delimiters or _DEFAULT_DELIMITERS
        self._tree = parse_template(source, self._delimiters)

    @property
    def source(self) -> str:
        return self._source

    @property
    def tree(self) -> TemplateNode:
        """The parsed node tree."""
        return self._tree

    def render(self, data: Any, ctx: RenderContext) -> str:
        """Render to interpolated text without JSON parsing."""
        return assemble(run_sync(render_template(self._tree, data, ctx)))

    async def render_async(self, data: Any, ctx: RenderContext) -> str:
        """Async variant of ``render``: awaits host functions and async filters."""
        return assemble(await run_async(render_template(self._tree, data, ctx)))

    def compile(self, data: Any, ctx: RenderContext) -> Any:
        """Render and parse the result as JSON (None when it is not valid JSON)."""
        return parse_json_output(self.render(data, ctx), ctx)

    async def compile_async(self, data: Any, ctx: RenderContext) -> Any:
        return parse_json_output(await self.render_async(data, ctx), ctx)

    def __repr__(self) -> str:
        preview = self._source if len(self._source) <= 40 else self._source[:37] + "..."
        return f"<Template {preview!r}>"


__all__ = [
    "Template",
    "clear_template_cache",
    "parse_json_output",
    "parse_template",
    "template_cache_info",
]
