"""Expression parsing for jsonblade.

Expression grammar (pipe-separated, no operator precedence)::

    pipeline  := base ("|" filter)*
    base      := IDENT "(" args ")"      host function call
               | path                    dotted data path
    filter    := IDENT ["(" args ")"]
    args      := arg ("," arg)*          split on every comma

Arguments:
    - ``"text"`` / ``'text'``: string constant (quotes stripped)
    - ``true`` / ``false`` / ``null``: constants
    - numbers: constants in function calls only; filter arguments go
      through the path-or-literal rule so ``multiply(2)`` passes ``"2"``
    - anything else: ``PathArg``, resolved against data at evaluation time

Splitting is not quote-aware: ``|`` and ``,`` always separate, even inside
quotes. Filter segments that are not ``name`` or ``name(args)`` are skipped.
"""

from __future__ import annotations

import logging
import re

from jsonblade.nodes import Const, Expr, FilterCall, FuncCall, Path, PathArg, Pipeline
from jsonblade.utils.coerce import is_nan, parse_number

logger = logging.getLogger(__name__)

_CALL_RE = re.compile(r"(\w+)\((.*)\)", re.DOTALL | re.ASCII)
_FILTER_RE = re.compile(r"(\w+)(?:\((.*)\))?", re.DOTALL | re.ASCII)

_KEYWORD_CONSTANTS: dict[str, bool | None] = {
    "true": True,
    "false": False,
    "null": None,
}


def split_args(text: str) -> list[str]:
    """Split an argument list on commas and trim each piece.

    Example:
        >>> split_args(" age , 25 ")
        ['age', '25']
    """
    return [part.strip() for part in text.split(",")]


def _is_quoted(token: str) -> bool:
    return (token.startswith('"') and token.endswith('"')) or (
        token.startswith("'") and token.endswith("'")
    )


def parse_arg(token: str, *, numeric: bool, lineno: int = 0, col_offset: int = 0) -> Expr:
    """Classify a single trimmed argument token."""
    if _is_quoted(token):
        return Const(lineno, col_offset, token[1:-1])
    if token in _KEYWORD_CONSTANTS:
        return Const(lineno, col_offset, _KEYWORD_CONSTANTS[token])
    if numeric and token:
        number = parse_number(token)
        if not is_nan(number):
            return Const(lineno, col_offset, number)
    return PathArg(lineno, col_offset, token)


def _parse_args(text: str, *, numeric: bool, loc: tuple[int, int]) -> tuple[Expr, ...]:
    lineno, col_offset = loc
    return tuple(
        parse_arg(token, numeric=numeric, lineno=lineno, col_offset=col_offset)
        for token in split_args(text)
    )


def parse_expression(
    source: str,
    *,
    lineno: int = 1,
    col_offset: int = 0,
    position: int = 0,
) -> Pipeline:
    """Parse ``base | filter(args) | ...`` into a ``Pipeline`` node."""
    loc = (lineno, col_offset)
    base_text, *filter_texts = (part.strip() for part in source.split("|"))

    base: Path | FuncCall
    call = _CALL_RE.fullmatch(base_text)
    if call:
        name, args_text = call.groups()
        # Blank argument lists mean no arguments for calls
        args = _parse_args(args_text, numeric=True, loc=loc) if args_text.strip() else ()
        base = FuncCall(*loc, name=name, args=args, raw=base_text)
    else:
        base = Path(*loc, path=base_text)

    filters: list[FilterCall] = []
    for text in filter_texts:
        match = _FILTER_RE.fullmatch(text)
        if not match:
            logger.debug("Skipping malformed filter segment %r in %r", text, source)
            continue
        name, args_text = match.groups()
        args = _parse_args(args_text, numeric=False, loc=loc) if args_text else ()
        filters.append(FilterCall(*loc, name=name, args=args))

    return Pipeline(
        *loc,
        base=base,
        filters=tuple(filters),
        source=source.strip(),
        position=position,
    )


__all__ = ["parse_arg", "parse_expression", "split_args"]
