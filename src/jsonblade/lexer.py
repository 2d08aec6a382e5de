"""Lexer for JSON templates.

Splits template source into DATA runs and tags. Tags are recognized by the
configured delimiters (``{{``/``}}`` by default) and classified by the
marker that follows the start delimiter:

    {{ expr }}              VARIABLE
    {{#if cond}}            BLOCK_BEGIN (also #unless, #each, #set)
    {{#else}}               BLOCK_ELSE
    {{/if}}                 BLOCK_END (also /unless, /each)
    {{!-- text --}}         COMMENT (may span lines and contain the end delimiter)

A start delimiter with no end delimiter before the next start delimiter
(or before the end of the source) is not a tag and stays DATA.

The lexer does not look inside JSON text; whether a VARIABLE sits inside a
string literal is decided when the rendered output is assembled.

Example:
    >>> [t.type.name for t in Lexer('{"a": {{x}}}').tokenize()]
    ['DATA', 'VARIABLE', 'DATA', 'EOF']
"""

from __future__ import annotations

import re
from bisect import bisect_right
from collections.abc import Generator, Iterator

from jsonblade._types import Token, TokenType
from jsonblade.environment.config import Delimiters
from jsonblade.parser.errors import ParseError
from jsonblade.utils.constants import (
    BLOCK_PREFIX,
    CLOSE_PREFIX,
    COMMENT_CLOSE,
    COMMENT_OPEN,
    DEFAULT_END_DELIMITER,
    DEFAULT_START_DELIMITER,
)

BLOCK_KEYWORDS = frozenset({"if", "unless", "each", "set"})
CLOSABLE_KEYWORDS = frozenset({"if", "unless", "each"})

_KEYWORD_RE = re.compile(r"(\w+)(?:\s+(.*))?", re.DOTALL | re.ASCII)


class Lexer:
    """Tokenizer for JSON template source."""

    __slots__ = ("_comment_end", "_end", "_line_starts", "_source", "_start")

    def __init__(self, source: str, delimiters: Delimiters | None = None):
        self._source = source
        if delimiters is None:
            delimiters = Delimiters(DEFAULT_START_DELIMITER, DEFAULT_END_DELIMITER)
        self._start = delimiters.start
        self._end = delimiters.end
        self._comment_end = COMMENT_CLOSE + delimiters.end
        self._line_starts = [0] + [i + 1 for i, ch in enumerate(source) if ch == "\n"]

    def tokenize(self) -> Iterator[Token]:
        """Yield tokens for the whole source, ending with EOF."""
        source = self._source
        pos = 0
        while True:
            tag_start = source.find(self._start, pos)
            if tag_start == -1:
                if pos < len(source):
                    yield self._token(TokenType.DATA, source[pos:], pos)
                break
            if tag_start > pos:
                yield self._token(TokenType.DATA, source[pos:tag_start], pos)

            inner_start = tag_start + len(self._start)
            if source.startswith(COMMENT_OPEN, inner_start):
                pos = yield from self._lex_comment(tag_start, inner_start + len(COMMENT_OPEN))
                continue

            tag_end = source.find(self._end, inner_start)
            reopen = source.find(self._start, inner_start)
            if tag_end == -1 or -1 < reopen < tag_end:
                # Unterminated start delimiter is literal text
                literal_end = len(source) if tag_end == -1 else reopen
                yield self._token(TokenType.DATA, source[tag_start:literal_end], tag_start)
                pos = literal_end
                continue
            yield self._classify(source[inner_start:tag_end], tag_start)
            pos = tag_end + len(self._end)

        yield self._token(TokenType.EOF, "", len(source))

    def _lex_comment(self, tag_start: int, body_start: int) -> Generator[Token, None, int]:
        close = self._source.find(self._comment_end, body_start)
        if close == -1:
            raise ParseError(
                "Unclosed comment",
                self._token(TokenType.COMMENT, "", tag_start),
                self._source,
                suggestion=f"Close comments with '{self._comment_end}'",
            )
        yield self._token(TokenType.COMMENT, self._source[body_start:close], tag_start)
        return close + len(self._comment_end)

    def _classify(self, inner: str, position: int) -> Token:
        content = inner.strip()

        if content.startswith(BLOCK_PREFIX):
            directive = content[len(BLOCK_PREFIX) :].strip()
            match = _KEYWORD_RE.fullmatch(directive)
            keyword = match.group(1) if match else directive
            if keyword == "else" and match and match.group(2) is None:
                return self._token(TokenType.BLOCK_ELSE, "else", position)
            if keyword in BLOCK_KEYWORDS:
                if not match or not (match.group(2) or "").strip():
                    raise ParseError(
                        f"'{BLOCK_PREFIX}{keyword}' requires an expression",
                        self._token(TokenType.BLOCK_BEGIN, directive, position),
                        self._source,
                    )
                return self._token(TokenType.BLOCK_BEGIN, directive, position)
            raise ParseError(
                f"Unknown directive: '{BLOCK_PREFIX}{directive}'",
                self._token(TokenType.BLOCK_BEGIN, directive, position),
                self._source,
                suggestion="Supported directives: #if, #else, #unless, #each, #set",
            )

        if content.startswith(CLOSE_PREFIX):
            name = content[len(CLOSE_PREFIX) :].strip()
            if name not in CLOSABLE_KEYWORDS:
                raise ParseError(
                    f"Unknown closing tag: '{CLOSE_PREFIX}{name}'",
                    self._token(TokenType.BLOCK_END, name, position),
                    self._source,
                )
            return self._token(TokenType.BLOCK_END, name, position)

        return self._token(TokenType.VARIABLE, content, position)

    def _token(self, type: TokenType, value: str, position: int) -> Token:
        lineno, col_offset = self._location(position)
        return Token(type, value, lineno, col_offset, position)

    def _location(self, position: int) -> tuple[int, int]:
        line_index = bisect_right(self._line_starts, position) - 1
        return line_index + 1, position - self._line_starts[line_index]


def tokenize(source: str, delimiters: Delimiters | None = None) -> list[Token]:
    """Tokenize ``source`` into a list (convenience wrapper)."""
    return list(Lexer(source, delimiters).tokenize())


__all__ = ["BLOCK_KEYWORDS", "CLOSABLE_KEYWORDS", "Lexer", "tokenize"]
