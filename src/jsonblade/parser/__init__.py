"""Parser for JSON templates: token stream → immutable node tree."""

from jsonblade.parser.core import Parser
from jsonblade.parser.errors import ParseError
from jsonblade.parser.expressions import parse_arg, parse_expression, split_args

__all__ = ["ParseError", "Parser", "parse_arg", "parse_expression", "split_args"]
