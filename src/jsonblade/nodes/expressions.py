"""Expression nodes for the jsonblade template tree.

An expression is always a pipeline: a base value followed by zero or more
filters, folded left to right::

    user.name | lower | capitalize
    formatPrice(amount, "EUR") | upper

Arguments stay unresolved until evaluation. ``PathArg`` is looked up in the
data context and falls back to its literal token when nothing is found, so
``filter(age, 25)`` passes ``"age"`` and ``"25"`` unless the data happens
to define those keys.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from jsonblade.nodes.base import Node


@dataclass(frozen=True, slots=True)
class Expr(Node):
    """Base class for expressions."""


@dataclass(frozen=True, slots=True)
class Const(Expr):
    """Literal argument: quoted string, true/false/null, or a number."""

    value: str | int | float | bool | None


@dataclass(frozen=True, slots=True)
class PathArg(Expr):
    """Argument resolved as a data path, or the literal token when unresolved."""

    token: str


@dataclass(frozen=True, slots=True)
class Path(Expr):
    """Dotted data path: user.address.city"""

    path: str


@dataclass(frozen=True, slots=True)
class FuncCall(Expr):
    """Host function call: name(args)

    ``raw`` is the full base text, resolved as a data path when no host
    function named ``name`` is supplied.
    """

    name: str
    args: Sequence[Expr]
    raw: str


@dataclass(frozen=True, slots=True)
class FilterCall(Expr):
    """Filter application inside a pipeline: | name(args)"""

    name: str
    args: Sequence[Expr]


@dataclass(frozen=True, slots=True)
class Pipeline(Expr):
    """Base value threaded through filters: base | f1 | f2(arg)

    ``source`` is the original expression text and ``position`` its tag
    offset in the template, both kept for error reporting.
    """

    base: Path | FuncCall
    filters: Sequence[FilterCall]
    source: str
    position: int
