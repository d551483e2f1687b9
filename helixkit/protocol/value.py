"""Property values held by nodes and edges, with JSON and tagged encodings."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1


class ValueKind(Enum):
    """The kinds of value, numbered by their variant index."""

    STRING = 0
    FLOAT = 1
    INTEGER = 2
    BOOLEAN = 3
    ARRAY = 4
    EMPTY = 5


_VARIANT_NAMES = {
    ValueKind.STRING: "String",
    ValueKind.FLOAT: "Float",
    ValueKind.INTEGER: "Integer",
    ValueKind.BOOLEAN: "Boolean",
    ValueKind.ARRAY: "Array",
    ValueKind.EMPTY: "Empty",
}


def _check_i32(number: int) -> int:
    if not _I32_MIN <= number <= _I32_MAX:
        raise ValueError(f"integer {number} does not fit in 32 bits")
    return number


@dataclass(frozen=True)
class Value:
    """A string, float, 32-bit integer, boolean, array of values, or nothing."""

    kind: ValueKind
    data: Any = None

    def __post_init__(self) -> None:
        if self.kind is ValueKind.ARRAY:
            object.__setattr__(self, "data", tuple(self.data))

    @classmethod
    def empty(cls) -> Value:
        return cls(ValueKind.EMPTY)

    @classmethod
    def from_native(cls, obj: Any) -> Value:
        """Build a value from a Python object; surrounding quotes are stripped from strings."""
        if isinstance(obj, Value):
            return obj
        if obj is None:
            return cls.empty()
        if isinstance(obj, bool):
            return cls(ValueKind.BOOLEAN, obj)
        if isinstance(obj, int):
            return cls(ValueKind.INTEGER, _check_i32(obj))
        if isinstance(obj, float):
            return cls(ValueKind.FLOAT, obj)
        if isinstance(obj, str):
            return cls(ValueKind.STRING, obj.strip('"'))
        if isinstance(obj, (list, tuple)):
            return cls(ValueKind.ARRAY, [cls.from_native(item) for item in obj])
        raise TypeError(f"cannot make a Value from {type(obj).__name__}")

    @classmethod
    def from_json(cls, data: Any) -> Value:
        """Build a value from decoded JSON, which carries no variant names."""
        if data is None:
            return cls.empty()
        if isinstance(data, bool):
            return cls(ValueKind.BOOLEAN, data)
        if isinstance(data, int):
            return cls(ValueKind.INTEGER, _check_i32(data))
        if isinstance(data, float):
            return cls(ValueKind.FLOAT, data)
        if isinstance(data, str):
            return cls(ValueKind.STRING, data)
        if isinstance(data, list):
            return cls(ValueKind.ARRAY, [cls.from_json(item) for item in data])
        raise ValueError(
            "invalid type: expected a string, number, boolean, array, null, or Value enum"
        )

    @classmethod
    def from_tagged(cls, data: Any) -> Value:
        """Build a value from a ``(variant index, payload)`` pair."""
        try:
            index, payload = data
        except (TypeError, ValueError):
            raise ValueError("expected a (variant index, payload) pair") from None
        if isinstance(index, bool) or not isinstance(index, int):
            raise ValueError("expected variant index")
        try:
            kind = ValueKind(index)
        except ValueError:
            raise ValueError(
                f"invalid value: integer `{index}`, expected variant index 0 through 5"
            ) from None

        if kind is ValueKind.STRING and isinstance(payload, str):
            return cls(kind, payload)
        if kind is ValueKind.FLOAT and isinstance(payload, (int, float)) and not isinstance(payload, bool):
            return cls(kind, float(payload))
        if kind is ValueKind.INTEGER and isinstance(payload, int) and not isinstance(payload, bool):
            return cls(kind, _check_i32(payload))
        if kind is ValueKind.BOOLEAN and isinstance(payload, bool):
            return cls(kind, payload)
        if kind is ValueKind.ARRAY and isinstance(payload, (list, tuple)):
            return cls(kind, [cls.from_tagged(item) for item in payload])
        if kind is ValueKind.EMPTY and payload is None:
            return cls.empty()
        raise ValueError(f"invalid payload for variant {_VARIANT_NAMES[kind]}")

    def to_json(self) -> Any:
        """The value as plain JSON data, without variant names."""
        if self.kind is ValueKind.ARRAY:
            return [item.to_json() for item in self.data]
        if self.kind is ValueKind.EMPTY:
            return None
        return self.data

    def to_tagged(self) -> tuple[int, Any]:
        """The value as a ``(variant index, payload)`` pair."""
        if self.kind is ValueKind.ARRAY:
            return (self.kind.value, [item.to_tagged() for item in self.data])
        if self.kind is ValueKind.EMPTY:
            return (self.kind.value, None)
        return (self.kind.value, self.data)

    def as_str(self) -> str:
        if self.kind is not ValueKind.STRING:
            raise TypeError("Value is not a string")
        return self.data

    def __repr__(self) -> str:
        name = _VARIANT_NAMES[self.kind]
        if self.kind is ValueKind.EMPTY:
            return name
        if self.kind is ValueKind.STRING:
            inner = json.dumps(self.data, ensure_ascii=False)
        elif self.kind is ValueKind.BOOLEAN:
            inner = "true" if self.data else "false"
        elif self.kind is ValueKind.ARRAY:
            inner = "[" + ", ".join(repr(item) for item in self.data) + "]"
        else:
            inner = repr(self.data)
        return f"{name}({inner})"


def properties_to_json(properties: Mapping[str, Value]) -> dict[str, Any]:
    """Encode a property map as JSON data."""
    return {key: value.to_json() for key, value in properties.items()}


def properties_from_json(data: Any) -> dict[str, Value]:
    """Decode a property map from JSON data."""
    if not isinstance(data, Mapping):
        raise ValueError("invalid type: expected a map of properties")
    return {str(key): Value.from_json(value) for key, value in data.items()}


def properties_repr(properties: Mapping[str, Value]) -> str:
    """A debug rendering of a property map."""
    entries = ", ".join(
        f"{json.dumps(key, ensure_ascii=False)}: {value!r}" for key, value in properties.items()
    )
    return "{" + entries + "}"