import pytest

from helixkit.protocol.graph_types import Count, Edge, Node
from helixkit.protocol.value import Value


def test_count_comparisons():
    c = Count(5)
    assert c.gt(4) and not c.gt(5)
    assert c.gte(5) and not c.gte(6)
    assert c.lt(6) and not c.lt(5)
    assert c.lte(5) and not c.lte(4)
    assert c.eq(5) and not c.eq(4)
    assert c.neq(4) and not c.neq(5)


def test_count_equals_int_and_count():
    assert Count(3) == 3
    assert Count(3) == Count(3)
    assert not (Count(3) == 4)


def test_count_converts_to_int_and_json():
    c = Count(7)
    assert int(c) == 7
    assert c.to_json() == 7


def test_count_repr_is_plain_number():
    assert repr(Count(12)) == "12"


def test_count_rejects_negative():
    with pytest.raises(ValueError):
        Count(-1)


def _node():
    return Node("n1", "person", {"name": Value.from_native("ann")})


def test_node_check_property():
    node = _node()
    assert node.check_property("name") == Value.from_native("ann")
    assert node.check_property("missing") is None


def test_node_json_round_trip():
    node = _node()
    assert Node.from_json(node.to_json()) == node


def test_node_json_properties_have_no_variant_names():
    assert _node().to_json()["properties"] == {"name": "ann"}


def test_node_from_json_missing_field():
    with pytest.raises(ValueError, match="label"):
        Node.from_json({"id": "n1", "properties": {}})


def test_node_str_shape():
    text = str(_node())
    assert text.startswith("{ id: n1, label: person, properties: ")
    assert text.endswith(" }")


def test_edge_check_property_and_round_trip():
    edge = Edge("e1", "knows", "n1", "n2", {"since": Value.from_native(2020)})
    assert edge.check_property("since") == Value.from_native(2020)
    assert edge.check_property("other") is None
    assert Edge.from_json(edge.to_json()) == edge


def test_edge_from_json_missing_endpoint():
    with pytest.raises(ValueError, match="to_node"):
        Edge.from_json({"id": "e", "label": "l", "from_node": "a", "properties": {}})


def test_edge_str_contains_endpoints():
    text = str(Edge("e1", "knows", "n1", "n2"))
    assert "from_node: n1" in text
    assert "to_node: n2" in text