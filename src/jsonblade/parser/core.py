"""Recursive descent parser for JSON templates.

Consumes the token stream produced by ``jsonblade.lexer.Lexer`` and builds
an immutable ``TemplateNode`` tree. Block structure is validated here:
every ``#if``/``#unless``/``#each`` must be closed by its matching tag,
``#else`` is only valid directly inside ``#if``, and closing tags without
an open block are rejected.

Example:
    >>> from jsonblade.lexer import tokenize
    >>> tokens = tokenize('{{#if ok}}1{{#else}}2{{/if}}')
    >>> node = Parser(tokens).parse().body[0]
    >>> type(node).__name__, node.test.source
    ('If', 'ok')
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from jsonblade._types import Token, TokenType
from jsonblade.nodes import (
    Comment,
    Data,
    Each,
    If,
    Node,
    Output,
    Pipeline,
    Set,
    TemplateNode,
    Unless,
)
from jsonblade.parser.errors import ParseError
from jsonblade.parser.expressions import parse_expression

_SET_RE = re.compile(r"set\s+(\w+)\s*=\s*(.+)", re.DOTALL | re.ASCII)


class Parser:
    """Builds a node tree from a token sequence."""

    __slots__ = ("_pos", "_source", "_tokens")

    def __init__(self, tokens: Sequence[Token], source: str | None = None):
        self._tokens = list(tokens)
        if not self._tokens or self._tokens[-1].type is not TokenType.EOF:
            end = len(source) if source else 0
            self._tokens.append(Token(TokenType.EOF, "", 1, 0, end))
        self._source = source
        self._pos = 0

    def parse(self) -> TemplateNode:
        """Parse the whole token stream."""
        body = self._parse_body(None)
        self._expect(TokenType.EOF)
        return TemplateNode(1, 0, body=tuple(body))

    # -- token cursor -----------------------------------------------------

    @property
    def _current(self) -> Token:
        return self._tokens[self._pos]

    def _advance(self) -> Token:
        token = self._tokens[self._pos]
        self._pos += 1
        return token

    def _expect(self, type: TokenType) -> Token:
        token = self._current
        if token.type is not type:
            raise self._error(f"Expected {type.name}, got {token.type.name}", token)
        return self._advance()

    def _error(self, message: str, token: Token, suggestion: str | None = None) -> ParseError:
        return ParseError(message, token, self._source, suggestion)

    # -- bodies -----------------------------------------------------------

    def _parse_body(self, opener: Token | None, *, allow_else: bool = False) -> list[Node]:
        """Parse nodes until EOF, ``#else`` or a closing tag (left unconsumed).

        ``opener`` is the block tag that owns this body, or None at top level.
        """
        nodes: list[Node] = []
        while True:
            token = self._current
            match token.type:
                case TokenType.DATA:
                    self._advance()
                    nodes.append(Data(token.lineno, token.col_offset, value=token.value))
                case TokenType.COMMENT:
                    self._advance()
                    nodes.append(Comment(token.lineno, token.col_offset, value=token.value))
                case TokenType.VARIABLE:
                    self._advance()
                    expr = self._expression(token.value, token)
                    nodes.append(Output(token.lineno, token.col_offset, expr=expr))
                case TokenType.BLOCK_BEGIN:
                    nodes.append(self._parse_block(self._advance()))
                case TokenType.BLOCK_ELSE:
                    if allow_else:
                        return nodes
                    raise self._error(
                        "'#else' is only valid inside an '#if' block",
                        token,
                        suggestion="Use '#unless' for inverted conditions",
                    )
                case TokenType.BLOCK_END:
                    if opener is None:
                        raise self._error(f"Unexpected '/{token.value}' with no open block", token)
                    return nodes
                case TokenType.EOF:
                    if opener is not None:
                        raise self._error(
                            f"Unclosed '#{_keyword(opener)}' block",
                            opener,
                            suggestion=f"Add '/{_keyword(opener)}' to close the block",
                        )
                    return nodes

    def _expect_end(self, opener: Token) -> None:
        keyword = _keyword(opener)
        token = self._expect(TokenType.BLOCK_END)
        if token.value != keyword:
            raise self._error(
                f"Mismatched '/{token.value}': expected '/{keyword}'",
                token,
                suggestion=f"'#{keyword}' opened at line {opener.lineno} is still open",
            )

    # -- blocks -----------------------------------------------------------

    def _parse_block(self, token: Token) -> Node:
        keyword = _keyword(token)
        if keyword == "set":
            return self._parse_set(token)
        if keyword == "if":
            return self._parse_if(token)
        if keyword == "unless":
            return self._parse_unless(token)
        if keyword == "each":
            return self._parse_each(token)
        raise self._error(f"Unknown directive: '#{keyword}'", token)

    def _parse_if(self, token: Token) -> If:
        test = self._expression(_argument(token), token)
        body = self._parse_body(token, allow_else=True)
        else_: list[Node] = []
        if self._current.type is TokenType.BLOCK_ELSE:
            self._advance()
            else_ = self._parse_body(token)
        self._expect_end(token)
        return If(token.lineno, token.col_offset, test=test, body=tuple(body), else_=tuple(else_))

    def _parse_unless(self, token: Token) -> Unless:
        test = self._expression(_argument(token), token)
        body = self._parse_body(token)
        self._expect_end(token)
        return Unless(token.lineno, token.col_offset, test=test, body=tuple(body))

    def _parse_each(self, token: Token) -> Each:
        iterable = self._expression(_argument(token), token)
        body = self._parse_body(token)
        self._expect_end(token)
        return Each(token.lineno, token.col_offset, iter=iterable, body=tuple(body))

    def _parse_set(self, token: Token) -> Set:
        match = _SET_RE.fullmatch(token.value)
        if not match:
            raise self._error(
                "Invalid '#set' declaration",
                token,
                suggestion="Use '#set name = expression'",
            )
        name, expression = match.groups()
        value = self._expression(expression, token)
        return Set(token.lineno, token.col_offset, name=name, value=value)

    def _expression(self, source: str, token: Token) -> Pipeline:
        return parse_expression(
            source,
            lineno=token.lineno,
            col_offset=token.col_offset,
            position=token.position,
        )


def _keyword(token: Token) -> str:
    return token.value.split(None, 1)[0]


def _argument(token: Token) -> str:
    parts = token.value.split(None, 1)
    return parts[1].strip() if len(parts) > 1 else ""


__all__ = ["Parser"]
