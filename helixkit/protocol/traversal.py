"""Results of graph traversals and of graph operations in general."""

from __future__ import annotations

import json
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from helixkit.protocol.graph_types import Count, Edge, Node
from helixkit.protocol.value import Value


class TraversalKind(Enum):
    EMPTY = "empty"
    COUNT = "count"
    NODE_ARRAY = "node_array"
    EDGE_ARRAY = "edge_array"
    VALUE_ARRAY = "value_array"
    PATHS = "paths"


def _list_repr(items: Iterable[Any]) -> str:
    return "[" + ", ".join(repr(item) for item in items) + "]"


@dataclass(repr=False)
class TraversalValue:
    """The outcome of a traversal.

    ``data`` is a ``Count`` for COUNT, a list of nodes, edges or
    ``(name, Value)`` pairs for the array kinds, a list of
    ``(nodes, edges)`` pairs for PATHS, and ``None`` for EMPTY.
    """

    kind: TraversalKind
    data: Any = field(default=None)

    @classmethod
    def empty(cls) -> TraversalValue:
        return cls(TraversalKind.EMPTY)

    @classmethod
    def from_item(cls, item: Any) -> TraversalValue:
        """Wrap a single node, edge or ``(name, Value)`` pair."""
        if isinstance(item, Node):
            return cls(TraversalKind.NODE_ARRAY, [item])
        if isinstance(item, Edge):
            return cls(TraversalKind.EDGE_ARRAY, [item])
        if (
            isinstance(item, tuple)
            and len(item) == 2
            and isinstance(item[0], str)
            and isinstance(item[1], Value)
        ):
            return cls(TraversalKind.VALUE_ARRAY, [item])
        raise TypeError(f"cannot make a TraversalValue from {type(item).__name__}")

    @classmethod
    def collect(cls, values: Iterable[TraversalValue]) -> TraversalValue:
        """Merge many results into one.

        The first count met is returned as it is. Otherwise nodes win over
        edges, edges over named values; paths alone give an empty result.
        """
        nodes: list[Node] = []
        edges: list[Edge] = []
        named: list[tuple[str, Value]] = []
        paths: list[tuple[list[Node], list[Edge]]] = []
        buckets = {
            TraversalKind.NODE_ARRAY: nodes,
            TraversalKind.EDGE_ARRAY: edges,
            TraversalKind.VALUE_ARRAY: named,
            TraversalKind.PATHS: paths,
        }
        for value in values:
            if value.kind is TraversalKind.COUNT:
                return cls(TraversalKind.COUNT, value.data)
            if value.kind is TraversalKind.EMPTY:
                continue
            buckets[value.kind].extend(value.data)

        if nodes:
            return cls(TraversalKind.NODE_ARRAY, nodes)
        if edges:
            return cls(TraversalKind.EDGE_ARRAY, edges)
        if named:
            return cls(TraversalKind.VALUE_ARRAY, named)
        return cls.empty()

    def to_json(self) -> Any:
        kind = self.kind
        if kind is TraversalKind.EMPTY:
            return None
        if kind is TraversalKind.COUNT:
            return self.data.to_json()
        if kind in (TraversalKind.NODE_ARRAY, TraversalKind.EDGE_ARRAY):
            return [item.to_json() for item in self.data]
        if kind is TraversalKind.VALUE_ARRAY:
            return [[name, value.to_json()] for name, value in self.data]
        return [
            [[node.to_json() for node in path_nodes], [edge.to_json() for edge in path_edges]]
            for path_nodes, path_edges in self.data
        ]

    def __repr__(self) -> str:
        kind = self.kind
        if kind is TraversalKind.COUNT:
            return f"Count: {self.data.value!r}"
        if kind is TraversalKind.EMPTY:
            return "[]"
        if kind is TraversalKind.VALUE_ARRAY:
            return "[" + ", ".join(
                f"({json.dumps(name, ensure_ascii=False)}, {value!r})" for name, value in self.data
            ) + "]"
        if kind is TraversalKind.PATHS:
            return "[" + ", ".join(
                f"({_list_repr(path_nodes)}, {_list_repr(path_edges)})"
                for path_nodes, path_edges in self.data
            ) + "]"
        return _list_repr(self.data)


class ReturnKind(Enum):
    TRAVERSAL_VALUES = "traversal_values"
    COUNT = "count"
    BOOLEAN = "boolean"
    EMPTY = "empty"


@dataclass
class ReturnValue:
    """The output of a graph operation: a traversal, a count, a flag or nothing."""

    kind: ReturnKind
    data: TraversalValue | Count | bool | None = None

    def to_json(self) -> Any:
        if self.kind is ReturnKind.EMPTY:
            return None
        if self.kind is ReturnKind.BOOLEAN:
            return bool(self.data)
        return self.data.to_json()