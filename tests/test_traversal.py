import pytest

from helixkit.protocol.graph_types import Count, Edge, Node
from helixkit.protocol.traversal import (
    ReturnKind,
    ReturnValue,
    TraversalKind,
    TraversalValue,
)
from helixkit.protocol.value import Value


def _node(i):
    return Node(f"n{i}", "person")


def _edge(i):
    return Edge(f"e{i}", "knows", "n1", "n2")


def test_from_item_node_edge_pair():
    assert TraversalValue.from_item(_node(1)) == TraversalValue(TraversalKind.NODE_ARRAY, [_node(1)])
    assert TraversalValue.from_item(_edge(1)) == TraversalValue(TraversalKind.EDGE_ARRAY, [_edge(1)])
    pair = ("age", Value.from_native(3))
    assert TraversalValue.from_item(pair) == TraversalValue(TraversalKind.VALUE_ARRAY, [pair])


def test_from_item_rejects_other_types():
    with pytest.raises(TypeError):
        TraversalValue.from_item(42)


def test_collect_concatenates_nodes_in_order():
    result = TraversalValue.collect(
        [TraversalValue.from_item(_node(1)), TraversalValue.empty(), TraversalValue.from_item(_node(2))]
    )
    assert result == TraversalValue(TraversalKind.NODE_ARRAY, [_node(1), _node(2)])


def test_collect_returns_first_count():
    first = TraversalValue(TraversalKind.COUNT, Count(2))
    second = TraversalValue(TraversalKind.COUNT, Count(9))
    result = TraversalValue.collect([TraversalValue.from_item(_node(1)), first, second])
    assert result == first


def test_collect_prefers_nodes_over_edges():
    result = TraversalValue.collect([TraversalValue.from_item(_edge(1)), TraversalValue.from_item(_node(1))])
    assert result.kind is TraversalKind.NODE_ARRAY
    assert result.data == [_node(1)]


def test_collect_edges_when_no_nodes():
    result = TraversalValue.collect([TraversalValue.from_item(_edge(1)), TraversalValue.from_item(_edge(2))])
    assert result.data == [_edge(1), _edge(2)]


def test_collect_nothing_is_empty():
    assert TraversalValue.collect([]) == TraversalValue.empty()


def test_collect_paths_only_is_empty():
    paths = TraversalValue(TraversalKind.PATHS, [([_node(1)], [_edge(1)])])
    assert TraversalValue.collect([paths]).kind is TraversalKind.EMPTY


def test_to_json_variants():
    assert TraversalValue.empty().to_json() is None
    assert TraversalValue(TraversalKind.COUNT, Count(4)).to_json() == 4
    assert TraversalValue.from_item(_node(1)).to_json() == [_node(1).to_json()]
    pair = ("age", Value.from_native(3))
    assert TraversalValue.from_item(pair).to_json() == [["age", 3]]


def test_paths_to_json():
    tv = TraversalValue(TraversalKind.PATHS, [([_node(1)], [_edge(1)])])
    assert tv.to_json() == [[[_node(1).to_json()], [_edge(1).to_json()]]]


def test_repr_of_count_and_empty():
    assert repr(TraversalValue(TraversalKind.COUNT, Count(3))) == "Count: 3"
    assert repr(TraversalValue.empty()) == "[]"


def test_repr_of_nodes_lists_each_node():
    tv = TraversalValue(TraversalKind.NODE_ARRAY, [_node(1), _node(2)])
    assert repr(tv) == "[" + str(_node(1)) + ", " + str(_node(2)) + "]"


def test_return_value_to_json():
    tv = TraversalValue.from_item(_node(1))
    assert ReturnValue(ReturnKind.TRAVERSAL_VALUES, tv).to_json() == tv.to_json()
    assert ReturnValue(ReturnKind.COUNT, Count(6)).to_json() == 6
    assert ReturnValue(ReturnKind.BOOLEAN, True).to_json() is True
    assert ReturnValue(ReturnKind.EMPTY).to_json() is None