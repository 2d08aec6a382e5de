"""Structured errors for jsonblade templates.

Error Model:
Problems found while compiling a template are first described as a
``TemplateError`` value, then handed to the configured error policy
(``handle_template_error``). The policy either logs a warning and lets
evaluation continue with a best-effort value, or raises a
``TemplateException`` wrapping the structured error.

Error Types:
    UNKNOWN_FILTER     # Referenced filter name not registered
    INVALID_SYNTAX     # Malformed directives, or output is not valid JSON
    FILTER_ERROR       # A filter raised while being applied
    EVALUATION_ERROR   # Reserved for expression-internal failures

Example:
    ```
    UNKNOWN_FILTER: Unknown filter: shout
      Expression: name | shout
       |
     1 | {"value": "{{name | shout}}"}
       |              ^
    ```

"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any


class ErrorType(Enum):
    """Category of a structured template error."""

    UNKNOWN_FILTER = "UNKNOWN_FILTER"
    INVALID_SYNTAX = "INVALID_SYNTAX"
    FILTER_ERROR = "FILTER_ERROR"
    EVALUATION_ERROR = "EVALUATION_ERROR"


# ---------------------------------------------------------------------------
# Source snippets
# ---------------------------------------------------------------------------


def offset_to_location(source: str, position: int) -> tuple[int, int]:
    """Convert a 0-based character offset to a (1-based line, 0-based column) pair."""
    position = max(0, min(position, len(source)))
    lineno = source.count("\n", 0, position) + 1
    line_start = source.rfind("\n", 0, position) + 1
    return lineno, position - line_start


@dataclass(frozen=True, slots=True)
class SourceSnippet:
    """Template source context around an error line.

    Attributes:
        lines: Tuple of (line_number, line_content) pairs around the error.
        error_line: The 1-based line number where the error occurred.
        column: Optional column offset for caret pointer.
    """

    lines: tuple[tuple[int, str], ...]
    error_line: int
    column: int | None = None

    def format(self) -> str:
        """Format snippet in Rust-inspired diagnostic style."""
        parts: list[str] = ["   |"]
        for lineno, content in self.lines:
            marker = ">" if lineno == self.error_line else " "
            parts.append(f"{marker}{lineno:>2} | {content}")
            if lineno == self.error_line and self.column is not None:
                parts.append(f"   | {' ' * self.column}^")
        parts.append("   |")
        return "\n".join(parts)


def build_source_snippet(
    source: str,
    error_line: int,
    *,
    context_lines: int = 1,
    column: int | None = None,
) -> SourceSnippet:
    """Build a SourceSnippet from template source.

    Args:
        source: Full template source text.
        error_line: 1-based line number of the error.
        context_lines: Number of lines to show before/after the error line.
        column: Optional column offset for caret pointer.
    """
    all_lines = source.splitlines()
    start = max(0, error_line - 1 - context_lines)
    end = min(len(all_lines), error_line + context_lines)
    lines = tuple((i + 1, all_lines[i]) for i in range(start, end))
    return SourceSnippet(lines=lines, error_line=error_line, column=column)


# ---------------------------------------------------------------------------
# Structured error value
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class TemplateError:
    """Structured description of a template problem.

    Attributes:
        type: Error category.
        message: Human-readable description.
        filter: Offending filter name (filter errors only).
        expression: Expression text being evaluated, when known.
        position: 0-based offset into the template source, when known.
    """

    type: ErrorType
    message: str
    filter: str | None = None
    expression: str | None = None
    position: int | None = None

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict form with ``None`` details dropped."""
        data = asdict(self)
        data["type"] = self.type.value
        return {key: value for key, value in data.items() if value is not None}


def create_template_error(
    type: ErrorType | str,
    message: str,
    **details: Any,
) -> TemplateError:
    """Build a TemplateError, accepting the type as enum member or name.

    Example:
        >>> create_template_error("UNKNOWN_FILTER", "Unknown filter: x", filter="x").type
        <ErrorType.UNKNOWN_FILTER: 'UNKNOWN_FILTER'>
    """
    return TemplateError(type=ErrorType(type), message=message, **details)


class TemplateException(Exception):
    """Raised when the error policy converts a TemplateError into a failure.

    Attributes:
        template_error: The structured error that triggered the exception.
        template: The offending template source, when available.

    Example:
            >>> try:
            ...     blade.compile('{"v": "{{name | nope}}"}', {"name": "x"})
            ... except TemplateException as e:
            ...     e.template_error.type
            <ErrorType.UNKNOWN_FILTER: 'UNKNOWN_FILTER'>

    """

    def __init__(self, template_error: TemplateError, template: str | None = None):
        self.template_error = template_error
        self.template = template
        super().__init__(template_error.message)

    @property
    def type(self) -> ErrorType:
        return self.template_error.type

    def format_compact(self) -> str:
        """Format the error as a structured, human-readable summary.

        Format::

            INVALID_SYNTAX: Unclosed '{{#if}}' block
              --> <template>:3:4
               |
            > 3 |     {{#if user}}
               |     ^
               |

        Returns:
            Multi-line string with type, message, expression and, when the
            template and position are known, a source snippet.
        """
        error = self.template_error
        parts = [f"{error.type.value}: {error.message}"]
        if error.filter:
            parts.append(f"  Filter: {error.filter}")
        if error.expression:
            parts.append(f"  Expression: {error.expression}")
        if self.template is not None and error.position is not None:
            lineno, column = offset_to_location(self.template, error.position)
            parts.append(f"  --> <template>:{lineno}:{column}")
            parts.append(build_source_snippet(self.template, lineno, column=column).format())
        return "\n".join(parts)


__all__ = [
    "ErrorType",
    "SourceSnippet",
    "TemplateError",
    "TemplateException",
    "build_source_snippet",
    "create_template_error",
    "offset_to_location",
]
