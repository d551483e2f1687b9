import pytest

from helixkit.protocol.value import (
    Value,
    ValueKind,
    properties_from_json,
    properties_to_json,
)


@pytest.mark.parametrize(
    "data",
    ["hello", 1.5, 42, True, False, None, [1, "a", [2.5, None]], []],
)
def test_json_round_trip(data):
    assert Value.from_json(data).to_json() == data


@pytest.mark.parametrize(
    "data",
    ["hello", 1.5, -7, True, None, [1, "a", [2.5, False]]],
)
def test_tagged_round_trip(data):
    value = Value.from_json(data)
    assert Value.from_tagged(value.to_tagged()) == value


def test_empty_tagged_uses_index_five():
    assert Value.empty().to_tagged() == (5, None)


@pytest.mark.parametrize(
    "data, index",
    [("s", 0), (1.5, 1), (3, 2), (True, 3), ([], 4), (None, 5)],
)
def test_variant_indices_follow_declaration_order(data, index):
    assert Value.from_json(data).to_tagged()[0] == index


def test_from_tagged_rejects_unknown_index():
    with pytest.raises(ValueError, match="variant index 0 through 5"):
        Value.from_tagged((6, None))


def test_from_tagged_rejects_mismatched_payload():
    with pytest.raises(ValueError):
        Value.from_tagged((ValueKind.INTEGER.value, "nope"))


def test_from_native_strips_quotes():
    assert Value.from_native('"abc"') == Value(ValueKind.STRING, "abc")


def test_from_json_keeps_quotes():
    assert Value.from_json('"abc"').as_str() == '"abc"'


def test_from_native_bool_is_boolean_not_integer():
    assert Value.from_native(True).kind is ValueKind.BOOLEAN


def test_from_native_list_builds_array():
    value = Value.from_native([1, 2.0, "x"])
    assert value == Value(
        ValueKind.ARRAY,
        [Value(ValueKind.INTEGER, 1), Value(ValueKind.FLOAT, 2.0), Value(ValueKind.STRING, "x")],
    )


def test_from_native_rejects_unknown_type():
    with pytest.raises(TypeError):
        Value.from_native({"a": 1})


def test_integer_out_of_i32_range_rejected():
    with pytest.raises(ValueError):
        Value.from_json(2**31)
    with pytest.raises(ValueError):
        Value.from_native(-(2**31) - 1)


def test_from_json_rejects_objects():
    with pytest.raises(ValueError):
        Value.from_json({"k": "v"})


def test_as_str_on_non_string():
    with pytest.raises(TypeError, match="Value is not a string"):
        Value.from_native(3).as_str()


def test_as_str_returns_string():
    assert Value.from_native("name").as_str() == "name"


def test_properties_round_trip():
    props = {"name": Value.from_native("ann"), "age": Value.from_native(30)}
    assert properties_from_json(properties_to_json(props)) == props


def test_properties_from_json_requires_mapping():
    with pytest.raises(ValueError):
        properties_from_json([1, 2])


def test_values_are_hashable_and_equal():
    a = Value.from_native([1, "x"])
    b = Value.from_json([1, "x"])
    assert {a, b} == {a}