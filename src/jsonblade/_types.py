"""Token types shared by the lexer and parser."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TokenType(Enum):
    """Lexical categories of a JSON template."""

    DATA = "data"  # literal JSON text between tags
    VARIABLE = "variable"  # {{ expr }}
    BLOCK_BEGIN = "block_begin"  # {{#if ...}}, {{#unless ...}}, {{#each ...}}, {{#set ...}}
    BLOCK_ELSE = "block_else"  # {{#else}}
    BLOCK_END = "block_end"  # {{/if}}, {{/unless}}, {{/each}}
    COMMENT = "comment"  # {{!-- ... --}}
    EOF = "eof"


@dataclass(frozen=True, slots=True)
class Token:
    """A lexed unit with its source location.

    ``value`` holds the tag content without delimiters and markers: the
    expression for VARIABLE, ``"if user.active"`` for BLOCK_BEGIN, the block
    name for BLOCK_END, the raw text for DATA and COMMENT.
    """

    type: TokenType
    value: str
    lineno: int
    col_offset: int
    position: int

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.lineno}:{self.col_offset})"


__all__ = ["Token", "TokenType"]
