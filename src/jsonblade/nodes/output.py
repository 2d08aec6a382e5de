"""Output nodes for the jsonblade template tree."""

from __future__ import annotations

from dataclasses import dataclass

from jsonblade.nodes.base import Node
from jsonblade.nodes.expressions import Pipeline


@dataclass(frozen=True, slots=True)
class Output(Node):
    """Interpolated expression: {{ expr }}"""

    expr: Pipeline


@dataclass(frozen=True, slots=True)
class Data(Node):
    """Literal JSON text between template tags."""

    value: str


@dataclass(frozen=True, slots=True)
class Comment(Node):
    """Template comment, dropped from output: {{!-- ... --}}"""

    value: str
