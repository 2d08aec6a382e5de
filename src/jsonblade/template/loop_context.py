"""Loop iteration metadata for ``{{#each}}`` blocks."""

from __future__ import annotations

from collections import ChainMap
from collections.abc import Iterator, Mapping, Sequence
from typing import Any

from jsonblade.utils.coerce import is_mapping


class LoopContext:
    """Iteration state exposed to ``{{#each}}`` bodies as ``@``-variables.

    Properties:
        index: 0-based iteration count (0, 1, 2, ...)
        first: True on the first iteration
        last: True on the final iteration
        length: Total number of items in the sequence

    Inside the loop body these appear as ``@index``, ``@first``, ``@last``
    and ``@length``, with the current item as ``this``. When the item is
    an object its keys are also visible directly:

    Example:
            ```
            [{{#each users}}
              {"n": {{@index}}, "name": "{{name}}"}{{#unless @last}},{{/unless}}
            {{/each}}]
            ```

    Output:
            ```json
            [{"n": 0, "name": "Ada"}, {"n": 1, "name": "Linus"}]
            ```

    """

    __slots__ = ("_index", "_items", "_length")

    def __init__(self, items: Sequence[Any]) -> None:
        self._items = items
        self._length = len(items)
        self._index = 0

    def __iter__(self) -> Iterator[Any]:
        """Iterate through items, updating index for each."""
        for i, item in enumerate(self._items):
            self._index = i
            yield item

    @property
    def index(self) -> int:
        """0-based iteration count."""
        return self._index

    @property
    def first(self) -> bool:
        """True if this is the first iteration."""
        return self._index == 0

    @property
    def last(self) -> bool:
        """True if this is the last iteration."""
        return self._index == self._length - 1

    @property
    def length(self) -> int:
        """Total number of items in the sequence."""
        return self._length

    def variables(self, item: Any) -> dict[str, Any]:
        """Snapshot of the loop variables for the current iteration."""
        return {
            "@index": self.index,
            "@first": self.first,
            "@last": self.last,
            "@length": self.length,
            "this": item,
        }

    def scope(self, item: Any, outer: Mapping[str, Any]) -> ChainMap[str, Any]:
        """Layer loop variables and the item's own keys over ``outer``."""
        item_keys = item if is_mapping(item) else {}
        return ChainMap(self.variables(item), item_keys, outer)

    def __repr__(self) -> str:
        return f"<LoopContext {self.index + 1}/{self.length}>"


__all__ = ["LoopContext"]
