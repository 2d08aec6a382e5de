"""Parser error handling for jsonblade.

Provides ParseError with source context, raised by both the lexer and the
parser. The compiler converts it into an ``INVALID_SYNTAX`` template error.
"""

from __future__ import annotations

from jsonblade._types import Token


class ParseError(Exception):
    """Lexer/parser error with source context.

    Displays errors with the offending source line and a visual pointer.
    """

    def __init__(
        self,
        message: str,
        token: Token,
        source: str | None = None,
        suggestion: str | None = None,
    ):
        self.message = message
        self.token = token
        self.source = source
        self.suggestion = suggestion
        super().__init__(self._format())

    @property
    def lineno(self) -> int:
        """Line number where the error occurred (1-based)."""
        return self.token.lineno

    @property
    def col_offset(self) -> int:
        """Column offset where the error occurred (0-based)."""
        return self.token.col_offset

    @property
    def position(self) -> int:
        """Character offset into the template source."""
        return self.token.position

    def _format(self) -> str:
        header = (
            f"Parse Error: {self.message}\n"
            f"  --> <template>:{self.token.lineno}:{self.token.col_offset}"
        )

        msg = f"\n{header}"
        if self.source:
            lines = self.source.splitlines()
            if 0 < self.token.lineno <= len(lines):
                error_line = lines[self.token.lineno - 1]
                pointer = " " * self.token.col_offset + "^"
                msg = f"""
{header}
   |
{self.token.lineno:>3} | {error_line}
   | {pointer}"""

        if self.suggestion:
            msg += f"\n\nSuggestion: {self.suggestion}"

        return msg


__all__ = ["ParseError"]
