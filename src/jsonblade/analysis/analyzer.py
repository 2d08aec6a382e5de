"""Data-shape analysis for editor integrations.

Turns sample data into a nested shape description that completion and
validation layers can query without touching the data itself:

    >>> analyze_data_structure({"tags": ["a"], "n": 0})
    {'type': 'object', 'tags': {'type': 'array', 'items': {'type': 'string',
    'value': 'a'}}, 'n': {'type': 'number'}}

Shape rules:
    - Objects map each key to its shape next to ``type: "object"``
    - Arrays describe their elements under ``items``; object elements merge
      the shapes of the first few items, later keys winning
    - Non-empty scalars keep their sample under ``value``
    - Falsy scalars and anything past ``max_depth`` carry ``type`` only
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from jsonblade.utils.coerce import js_truthy
from jsonblade.utils.constants import MAX_ANALYSIS_DEPTH, MAX_ANALYZED_ITEMS

logger = logging.getLogger(__name__)

DataStructure = dict[str, Any]

_RESERVED_KEYS = frozenset({"type", "items", "value"})


def json_type(value: Any) -> str:
    """JSON type name of a Python value ("unknown" for anything else)."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, Mapping):
        return "object"
    if isinstance(value, (list, tuple)):
        return "array"
    return "unknown"


def analyze_data_structure(
    obj: Any, max_depth: int = MAX_ANALYSIS_DEPTH, _depth: int = 0
) -> DataStructure:
    """Describe the shape of ``obj`` down to ``max_depth`` levels."""
    kind = json_type(obj)
    if not js_truthy(obj) or _depth > max_depth:
        return {"type": kind}

    if kind == "array":
        if not obj:
            return {"type": "array", "items": {"type": "unknown"}}
        first = analyze_data_structure(obj[0], max_depth, _depth + 1)
        if first["type"] != "object":
            return {"type": "array", "items": first}
        merged = dict(first)
        for item in obj[1:MAX_ANALYZED_ITEMS]:
            merged.update(analyze_data_structure(item, max_depth, _depth + 1))
        return {"type": "array", "items": merged}

    if kind == "object":
        structure: DataStructure = {"type": "object"}
        for key, value in obj.items():
            structure[str(key)] = analyze_data_structure(value, max_depth, _depth + 1)
        return structure

    return {"type": kind, "value": obj}


def _walk(path: str, schema: DataStructure) -> DataStructure | None:
    current: Any = schema
    for part in path.split("."):
        if not isinstance(current, Mapping) or part not in current:
            logger.debug("Path %r stops at %r", path, part)
            return None
        current = current[part]
        if isinstance(current, Mapping) and current.get("type") == "array":
            items = current.get("items")
            if items:
                current = items
    return current


def validate_path(path: str, schema: DataStructure) -> bool:
    """Whether every segment of dotted ``path`` exists in ``schema``.

    Array shapes are transparent: ``users.name`` is valid when ``users`` is
    an array of objects with a ``name`` key.
    """
    return _walk(path, schema) is not None


def get_properties_for_path(path: str, schema: DataStructure) -> list[str]:
    """Property names available under ``path`` (empty when it does not resolve)."""
    node = _walk(path, schema)
    if not isinstance(node, Mapping):
        return []
    return [key for key in node if key not in _RESERVED_KEYS]


__all__ = [
    "DataStructure",
    "analyze_data_structure",
    "get_properties_for_path",
    "json_type",
    "validate_path",
]
