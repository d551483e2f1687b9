"""A builder that emits the source of a traversal handler, step by step.

Each step is only allowed from the state the traversal is in: vertex steps
need a vertex traversal, edge steps an edge traversal, and a traversal has
to start with ``v`` or ``e``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from helixkit.generator.conditions import (
    ComparisonOperator,
    Condition,
    Literal,
    LogicalCombination,
    LogicalOperator,
    PropertyComparison,
    StepCode,
    TraversalComparison,
    filter_nodes_code,
)


class TraversalState(Enum):
    """What the traversal currently yields."""

    NONE = "none"
    VERTEX = "vertex"
    EDGE = "edge"


class StepKind(Enum):
    V = "v"
    E = "e"
    ADD_V = "add_v"
    ADD_E = "add_e"
    OUT = "out"
    OUT_E = "out_e"
    IN = "in_"
    IN_E = "in_e"
    BOTH = "both"
    BOTH_E = "both_e"
    IN_V = "in_v"
    OUT_V = "out_v"
    BOTH_V = "both_v"
    COUNT = "count"
    RANGE = "range"
    FILTER_NODE = "filter_node"
    FILTER_EDGE = "filter_edge"


_PLAIN_STEPS = {
    StepKind.V: "v",
    StepKind.E: "e",
    StepKind.IN_V: "in_v",
    StepKind.OUT_V: "out_v",
    StepKind.BOTH_V: "both_v",
    StepKind.COUNT: "count",
}

_LABELLED_STEPS = {
    StepKind.ADD_V: "add_v",
    StepKind.OUT: "out",
    StepKind.OUT_E: "out_e",
    StepKind.IN: "in_",
    StepKind.IN_E: "in_e",
    StepKind.BOTH: "both",
    StepKind.BOTH_E: "both_e",
}


@dataclass(frozen=True)
class TraversalStep:
    """One step of a traversal and the line of code it stands for."""

    kind: StepKind
    label: str | None = None
    from_id: str | None = None
    to_id: str | None = None
    start: int | None = None
    end: int | None = None
    condition: Condition | None = None

    def generate_code(self) -> str:
        kind = self.kind
        if kind in _PLAIN_STEPS:
            return f"    traversal.{_PLAIN_STEPS[kind]}();\n"
        if kind in _LABELLED_STEPS:
            return f'    traversal.{_LABELLED_STEPS[kind]}("{self.label}");\n'
        if kind is StepKind.ADD_E:
            return f'    traversal.add_e("{self.label}", "{self.from_id}", "{self.to_id}");\n'
        if kind is StepKind.RANGE:
            return f"    traversal.range({self.start}, {self.end});\n"
        if kind is StepKind.FILTER_NODE:
            return filter_nodes_code(self.condition)
        # Edge filters emit no code yet.
        return ""


def _literal(value: Any) -> Literal:
    return value if isinstance(value, Literal) else Literal(value)


def _index(number: int, name: str) -> int:
    if isinstance(number, bool) or not isinstance(number, int):
        raise TypeError(f"{name} must be an integer")
    if number < 0:
        raise ValueError(f"{name} cannot be negative")
    return number


@dataclass(frozen=True)
class TraversalGenerator:
    """An immutable traversal under construction; every step returns a new one."""

    function_identifier: str
    steps: tuple[StepCode, ...] = field(default=())
    state: TraversalState = TraversalState.NONE

    def _push(
        self, needs: TraversalState, step: TraversalStep, then: TraversalState | None = None
    ) -> TraversalGenerator:
        if self.state is not needs:
            raise TypeError(
                f"step {step.kind.value} needs a {needs.value} traversal, "
                f"not a {self.state.value} one"
            )
        return TraversalGenerator(
            self.function_identifier,
            self.steps + (step,),
            self.state if then is None else then,
        )

    # Source steps
    def v(self) -> TraversalGenerator:
        return self._push(TraversalState.NONE, TraversalStep(StepKind.V), TraversalState.VERTEX)

    def e(self) -> TraversalGenerator:
        return self._push(TraversalState.NONE, TraversalStep(StepKind.E), TraversalState.EDGE)

    # Vertex steps
    def _vertex(self, kind: StepKind, label: str, then: TraversalState) -> TraversalGenerator:
        return self._push(TraversalState.VERTEX, TraversalStep(kind, label=label), then)

    def out(self, label: str) -> TraversalGenerator:
        return self._vertex(StepKind.OUT, label, TraversalState.VERTEX)

    def out_e(self, label: str) -> TraversalGenerator:
        return self._vertex(StepKind.OUT_E, label, TraversalState.EDGE)

    def in_(self, label: str) -> TraversalGenerator:
        return self._vertex(StepKind.IN, label, TraversalState.VERTEX)

    def in_e(self, label: str) -> TraversalGenerator:
        return self._vertex(StepKind.IN_E, label, TraversalState.EDGE)

    def both(self, label: str) -> TraversalGenerator:
        return self._vertex(StepKind.BOTH, label, TraversalState.VERTEX)

    def both_e(self, label: str) -> TraversalGenerator:
        return self._vertex(StepKind.BOTH_E, label, TraversalState.EDGE)

    def count(self) -> TraversalGenerator:
        return self._push(TraversalState.VERTEX, TraversalStep(StepKind.COUNT))

    def range(self, start: int, end: int) -> TraversalGenerator:
        step = TraversalStep(
            StepKind.RANGE, start=_index(start, "start"), end=_index(end, "end")
        )
        return self._push(TraversalState.VERTEX, step)

    def _filter_node(self, condition: Condition) -> TraversalGenerator:
        return self._push(
            TraversalState.VERTEX, TraversalStep(StepKind.FILTER_NODE, condition=condition)
        )

    def where_prop(
        self, prop: str, value: Any, operator: ComparisonOperator
    ) -> TraversalGenerator:
        return self._filter_node(PropertyComparison(prop, operator, _literal(value)))

    def where_and(self, conditions: list[Condition]) -> TraversalGenerator:
        return self._filter_node(LogicalCombination(LogicalOperator.AND, list(conditions)))

    def where_or(self, conditions: list[Condition]) -> TraversalGenerator:
        return self._filter_node(LogicalCombination(LogicalOperator.OR, list(conditions)))

    def where_not(self, condition: Condition) -> TraversalGenerator:
        return self._filter_node(LogicalCombination(LogicalOperator.NOT, [condition]))

    def where_traversal_gt(
        self, traversal: list[StepCode], value: Any, operator: ComparisonOperator
    ) -> TraversalGenerator:
        return self._filter_node(TraversalComparison(list(traversal), operator, _literal(value)))

    # Edge steps
    def in_v(self) -> TraversalGenerator:
        return self._push(TraversalState.EDGE, TraversalStep(StepKind.IN_V), TraversalState.VERTEX)

    def out_v(self) -> TraversalGenerator:
        return self._push(TraversalState.EDGE, TraversalStep(StepKind.OUT_V), TraversalState.VERTEX)

    def both_v(self) -> TraversalGenerator:
        return self._push(
            TraversalState.EDGE, TraversalStep(StepKind.BOTH_V), TraversalState.VERTEX
        )

    def _filter_edge(
        self, prop: str, value: Any, operator: ComparisonOperator
    ) -> TraversalGenerator:
        condition = PropertyComparison(prop, operator, _literal(value))
        return self._push(
            TraversalState.EDGE, TraversalStep(StepKind.FILTER_EDGE, condition=condition)
        )

    def where_gt(self, prop: str, value: Any) -> TraversalGenerator:
        return self._filter_edge(prop, value, ComparisonOperator.GT)

    def where_lt(self, prop: str, value: Any) -> TraversalGenerator:
        return self._filter_edge(prop, value, ComparisonOperator.LT)

    def where_gte(self, prop: str, value: Any) -> TraversalGenerator:
        return self._filter_edge(prop, value, ComparisonOperator.GTE)

    def where_lte(self, prop: str, value: Any) -> TraversalGenerator:
        return self._filter_edge(prop, value, ComparisonOperator.LTE)

    def where_eq(self, prop: str, value: Any) -> TraversalGenerator:
        return self._filter_edge(prop, value, ComparisonOperator.EQ)

    def where_neq(self, prop: str, value: Any) -> TraversalGenerator:
        return self._filter_edge(prop, value, ComparisonOperator.NEQ)

    def where_contains(self, prop: str, value: Any) -> TraversalGenerator:
        return self._filter_edge(prop, value, ComparisonOperator.CONTAINS)

    def where_starts_with(self, prop: str, value: Any) -> TraversalGenerator:
        return self._filter_edge(prop, value, ComparisonOperator.STARTS_WITH)

    def where_ends_with(self, prop: str, value: Any) -> TraversalGenerator:
        return self._filter_edge(prop, value, ComparisonOperator.ENDS_WITH)

    def generate_code(self) -> str:
        """The source of a handler function running this traversal."""
        parts = [
            f"pub fn {self.function_identifier}(input: &HandlerInput, response: &mut Response)"
            " ->  Result<(), RouterError> {\n",
            "    let storage = &input.graph.storage;\n",
            "    let mut traversal = TraversalBuilder::new(vec![]);\n",
        ]
        parts.extend(step.generate_code() for step in self.steps)
        parts.append("    response.body = input.graph.result_to_json(&traversal);\n")
        parts.append("    Ok(())\n")
        parts.append("}\n")
        return "".join(parts)