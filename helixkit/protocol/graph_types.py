"""Counts, nodes and edges exchanged by graph operations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from helixkit.protocol.value import (
    Value,
    properties_from_json,
    properties_repr,
    properties_to_json,
)


class Count:
    """A non-negative count that compares with plain integers."""

    __slots__ = ("value",)

    def __init__(self, value: int) -> None:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError("count must be an integer")
        if value < 0:
            raise ValueError("count cannot be negative")
        self.value = value

    def gt(self, cmp: int) -> bool:
        return self.value > cmp

    def gte(self, cmp: int) -> bool:
        return self.value >= cmp

    def lt(self, cmp: int) -> bool:
        return self.value < cmp

    def lte(self, cmp: int) -> bool:
        return self.value <= cmp

    def eq(self, cmp: int) -> bool:
        return self.value == cmp

    def neq(self, cmp: int) -> bool:
        return self.value != cmp

    def to_json(self) -> int:
        return self.value

    def __int__(self) -> int:
        return self.value

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Count):
            return self.value == other.value
        if isinstance(other, int) and not isinstance(other, bool):
            return self.value == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.value)

    def __repr__(self) -> str:
        return str(self.value)


def _require(data: Any, name: str) -> Any:
    if not isinstance(data, dict):
        raise ValueError("invalid type: expected a map")
    if name not in data:
        raise ValueError(f"missing field `{name}`")
    return data[name]


@dataclass
class Node:
    """A graph node with an id, a label and properties."""

    id: str
    label: str
    properties: dict[str, Value] = field(default_factory=dict)

    def check_property(self, key: str) -> Value | None:
        return self.properties.get(key)

    def to_json(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "properties": properties_to_json(self.properties),
        }

    @classmethod
    def from_json(cls, data: Any) -> Node:
        return cls(
            id=str(_require(data, "id")),
            label=str(_require(data, "label")),
            properties=properties_from_json(_require(data, "properties")),
        )

    def __str__(self) -> str:
        return (
            f"{{ id: {self.id}, label: {self.label}, "
            f"properties: {properties_repr(self.properties)} }}"
        )

    __repr__ = __str__


@dataclass
class Edge:
    """A graph edge joining two nodes, with an id, a label and properties."""

    id: str
    label: str
    from_node: str
    to_node: str
    properties: dict[str, Value] = field(default_factory=dict)

    def check_property(self, key: str) -> Value | None:
        return self.properties.get(key)

    def to_json(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "from_node": self.from_node,
            "to_node": self.to_node,
            "properties": properties_to_json(self.properties),
        }

    @classmethod
    def from_json(cls, data: Any) -> Edge:
        return cls(
            id=str(_require(data, "id")),
            label=str(_require(data, "label")),
            from_node=str(_require(data, "from_node")),
            to_node=str(_require(data, "to_node")),
            properties=properties_from_json(_require(data, "properties")),
        )

    def __str__(self) -> str:
        return (
            f"{{ id: {self.id}, label: {self.label}, from_node: {self.from_node}, "
            f"to_node: {self.to_node}, properties: {properties_repr(self.properties)} }}"
        )

    __repr__ = __str__