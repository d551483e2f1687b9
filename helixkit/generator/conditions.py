"""Filter conditions for generated traversals and the code they render to."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Protocol, Union

_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1

_ROW_INDENT = " " * 24


class StepCode(Protocol):
    """Anything that renders itself as one or more lines of traversal code."""

    def generate_code(self) -> str: ...


def _format_float(number: float) -> str:
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "inf" if number > 0 else "-inf"
    if number.is_integer():
        text = str(int(number))
        if number == 0 and math.copysign(1.0, number) < 0:
            text = "-0"
        return text
    return format(Decimal(repr(number)), "f")


@dataclass(frozen=True)
class Literal:
    """A constant compared against in a filter: integer, float, string or boolean."""

    value: bool | int | float | str

    def __post_init__(self) -> None:
        value = self.value
        if isinstance(value, bool) or isinstance(value, (float, str)):
            return
        if isinstance(value, int):
            if not _I64_MIN <= value <= _I64_MAX:
                raise ValueError(f"integer {value} does not fit in 64 bits")
            return
        raise TypeError(f"cannot make a Literal from {type(value).__name__}")

    @property
    def variant(self) -> str:
        """The name of the property value variant this literal matches."""
        if isinstance(self.value, bool):
            return "Boolean"
        if isinstance(self.value, int):
            return "Integer"
        if isinstance(self.value, float):
            return "Float"
        return "String"

    def __str__(self) -> str:
        value = self.value
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, int):
            return str(value)
        if isinstance(value, float):
            return _format_float(value)
        return f'"{value}"'


class ComparisonOperator(Enum):
    GT = "gt"
    LT = "lt"
    GTE = "gte"
    LTE = "lte"
    EQ = "eq"
    NEQ = "neq"
    CONTAINS = "contains"
    STARTS_WITH = "starts_with"
    ENDS_WITH = "ends_with"


class LogicalOperator(Enum):
    AND = "and"
    OR = "or"
    NOT = "not"


@dataclass
class PropertyComparison:
    """Compare a property of the current element with a literal."""

    property: str
    operator: ComparisonOperator
    value: Literal


@dataclass
class TraversalComparison:
    """Compare the count of a nested traversal with a literal."""

    traversal: list[StepCode]
    operator: ComparisonOperator
    value: Literal


@dataclass
class LogicalCombination:
    """Combine conditions with and, or, or negate the first one."""

    operator: LogicalOperator
    conditions: list[Condition] = field(default_factory=list)


@dataclass
class PropertyExists:
    """Require that the current element has a property."""

    property: str


Condition = Union[PropertyComparison, TraversalComparison, LogicalCombination, PropertyExists]


_DEREF_TEMPLATES = {
    ComparisonOperator.GT: "*{var} > {value}",
    ComparisonOperator.LT: "*{var} < {value}",
    ComparisonOperator.GTE: "*{var} >= {value}",
    ComparisonOperator.LTE: "*{var} <= {value}",
    ComparisonOperator.EQ: "*{var} == {value}",
    ComparisonOperator.NEQ: "*{var} != {value}",
    ComparisonOperator.CONTAINS: "{var}.contains(&{value})",
    ComparisonOperator.STARTS_WITH: "{var}.starts_with(&{value})",
    ComparisonOperator.ENDS_WITH: "{var}.ends_with(&{value})",
}

_NUMERIC_TEMPLATES = {
    ComparisonOperator.GT: "{var} > {value}",
    ComparisonOperator.LT: "{var} < {value}",
    ComparisonOperator.GTE: "{var} >= {value}",
    ComparisonOperator.LTE: "{var} <= {value}",
    ComparisonOperator.EQ: "{var} == {value}",
    ComparisonOperator.NEQ: "{var} != {value}",
}


def comparison_code(var: str, operator: ComparisonOperator, value: Literal) -> str:
    """An expression comparing the borrowed variable ``var`` with ``value``."""
    return _DEREF_TEMPLATES[operator].format(var=var, value=value)


def numeric_comparison(var: str, operator: ComparisonOperator, value: Literal) -> str:
    """An expression comparing the plain variable ``var`` with ``value``.

    Raises ``ValueError`` for the string operators.
    """
    template = _NUMERIC_TEMPLATES.get(operator)
    if template is None:
        raise ValueError("Invalid operator for numeric comparison")
    return template.format(var=var, value=value)


def _value_match_line(operator: ComparisonOperator, value: Literal) -> str:
    return f"{_ROW_INDENT}Value::{value.variant}(val) => {comparison_code('val', operator, value)},\n"


def _first_condition(conditions: list[Condition]) -> Condition:
    if not conditions:
        raise ValueError("a negation needs one condition")
    return conditions[0]


def _steps_code(steps: list[StepCode]) -> str:
    return "".join(step.generate_code() for step in steps)


def condition_expression(condition: Condition) -> str:
    """A single boolean expression over ``val`` that holds when ``condition`` does."""
    match condition:
        case PropertyComparison(property=prop, operator=operator, value=value):
            return (
                f'val.check_property("{prop}").map_or(false, |value| match value {{ '
                f"Value::{value.variant}(val) => {comparison_code('val', operator, value)}, "
                f"_ => false }})"
            )
        case PropertyExists(property=prop):
            return f'val.check_property("{prop}").is_some()'
        case TraversalComparison(traversal=steps, operator=operator, value=value):
            body = " ".join(line.strip() for line in _steps_code(steps).splitlines() if line.strip())
            parts = ["{ let mut sub_traversal = TraversalBuilder::new(vec![val.clone()]);"]
            if body:
                parts.append(body)
            parts.append("let result = sub_traversal.count();")
            parts.append(numeric_comparison("result", operator, value))
            parts.append("}")
            return " ".join(parts)
        case LogicalCombination(operator=LogicalOperator.NOT, conditions=conditions):
            return f"!({condition_expression(_first_condition(conditions))})"
        case LogicalCombination(operator=LogicalOperator.AND, conditions=conditions):
            if not conditions:
                return "true"
            return "(" + " && ".join(condition_expression(c) for c in conditions) + ")"
        case LogicalCombination(operator=LogicalOperator.OR, conditions=conditions):
            if not conditions:
                return "false"
            return "(" + " || ".join(condition_expression(c) for c in conditions) + ")"
    raise TypeError(f"not a filter condition: {type(condition).__name__}")


def filter_nodes_code(condition: Condition) -> str:
    """The ``traversal.filter`` call that keeps the nodes matching ``condition``."""
    lines = ["    traversal.filter(|val| {\n"]
    match condition:
        case PropertyComparison(property=prop, operator=operator, value=value):
            lines.append(f'               if let Some(value) = val.check_property("{prop}") {{\n')
            lines.append("                    match value {\n")
            lines.append(_value_match_line(operator, value))
            lines.append(f"{_ROW_INDENT}_ => false,\n")
            lines.append("                    }\n")
            lines.append("               } else { false }\n")
        case TraversalComparison(traversal=steps, operator=operator, value=value):
            lines.append("        let mut sub_traversal = TraversalBuilder::new(vec![val.clone()]);\n")
            lines.append(_steps_code(steps))
            lines.append("        let result = sub_traversal.count();\n")
            lines.append(f"        {numeric_comparison('result', operator, value)}\n")
            lines.append("    });\n")
        case LogicalCombination(operator=operator, conditions=conditions):
            if operator is LogicalOperator.NOT:
                lines.append("!" + condition_expression(_first_condition(conditions)))
            else:
                joiner = " && " if operator is LogicalOperator.AND else " || "
                lines.append(joiner.join(condition_expression(c) for c in conditions))
            lines.append("    });\n")
        case PropertyExists(property=prop):
            lines.append("        match val {\n")
            lines.append(
                f'            TraversalValue::SingleNode(node) => node.properties.contains_key("{prop}"),\n'
            )
            lines.append(
                f'            TraversalValue::SingleEdge(edge) => edge.properties.contains_key("{prop}"),\n'
            )
            lines.append("            _ => false,\n")
            lines.append("        }\n")
            lines.append("    });\n")
        case _:
            raise TypeError(f"not a filter condition: {type(condition).__name__}")
    return "".join(lines)