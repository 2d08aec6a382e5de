"""Variable nodes for the jsonblade template tree."""

from __future__ import annotations

from dataclasses import dataclass

from jsonblade.nodes.base import Node
from jsonblade.nodes.expressions import Pipeline


@dataclass(frozen=True, slots=True)
class Set(Node):
    """Template-wide variable: {{#set name = expr}}

    Declarations are hoisted and evaluated in document order before
    rendering; the node itself renders nothing.
    """

    name: str
    value: Pipeline
