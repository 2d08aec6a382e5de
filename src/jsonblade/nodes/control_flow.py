"""Control flow nodes for the jsonblade template tree."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from jsonblade.nodes.base import Node
from jsonblade.nodes.expressions import Pipeline


@dataclass(frozen=True, slots=True)
class If(Node):
    """Conditional: {{#if cond}}...{{#else}}...{{/if}}"""

    test: Pipeline
    body: Sequence[Node]
    else_: Sequence[Node] = ()


@dataclass(frozen=True, slots=True)
class Unless(Node):
    """Inverted conditional: {{#unless cond}}...{{/unless}}"""

    test: Pipeline
    body: Sequence[Node]


@dataclass(frozen=True, slots=True)
class Each(Node):
    """Loop over an array: {{#each items}}...{{/each}}"""

    iter: Pipeline
    body: Sequence[Node]
