"""Root node for the jsonblade template tree."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from jsonblade.nodes.base import Node
from jsonblade.nodes.control_flow import Each, If, Unless
from jsonblade.nodes.variables import Set


@dataclass(frozen=True, slots=True)
class TemplateNode(Node):
    """Root of a parsed template."""

    body: Sequence[Node]

    def iter_sets(self) -> Iterator[Set]:
        """Yield every ``Set`` declaration in document order, including nested ones."""
        yield from _walk_sets(self.body)


def _walk_sets(nodes: Sequence[Node]) -> Iterator[Set]:
    for node in nodes:
        if isinstance(node, Set):
            yield node
        elif isinstance(node, If):
            yield from _walk_sets(node.body)
            yield from _walk_sets(node.else_)
        elif isinstance(node, (Unless, Each)):
            yield from _walk_sets(node.body)
