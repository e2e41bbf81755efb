import pytest

from pointexplorer.model.errors import ValidationError
from pointexplorer.model.values import (
    LabeledScalarValue, LabeledVectorValue, RangeValue, ScalarValue, ValueKind, ValueVariant, VectorValue
)


@pytest.mark.parametrize("value", [
    ScalarValue(3.25),
    VectorValue([1.0, -2.0, 3.5]),
    RangeValue(-4.0, 8.0),
    LabeledScalarValue("Alpha", 12.5),
    LabeledVectorValue("Beta", [0.5, 1.5]),
])
def test_round_trip_through_dict(value):
    data = value.to_dict()
    assert set(data) == {"type", "value"}
    assert ValueVariant.from_dict(data) == value


def test_wire_tags():
    assert ScalarValue(1).to_dict() == {"type": "double", "value": 1.0}
    assert RangeValue(1, 2).to_dict() == {"type": "range", "value": [1.0, 2.0]}
    assert LabeledScalarValue("A", 2).to_dict() == {"type": "labelNumber", "value": {"label": "A", "number": 2.0}}
    assert LabeledVectorValue("A", [1]).to_dict() == {"type": "labelVector", "value": {"label": "A", "vector": [1.0]}}
    assert VectorValue([]).kind == ValueKind.VECTOR


def test_inverted_range_is_kept():
    value = RangeValue(5.0, -5.0)
    assert value.low == 5.0 and value.high == -5.0
    assert value.midpoint == 0.0


def test_values_are_immutable():
    value = ScalarValue(1.0)
    with pytest.raises(AttributeError):
        value.value = 2.0
    vec = VectorValue([1, 2])
    assert isinstance(vec.components, tuple)


@pytest.mark.parametrize("data, message", [
    ({"type": "double", "value": "7"}, "DOUBLE"),
    ({"type": "double", "value": True}, "DOUBLE"),
    ({"type": "vector", "value": [1, "a"]}, "VECTOR"),
    ({"type": "range", "value": [1, 2, 3]}, "RANGE"),
    ({"type": "range", "value": 4}, "RANGE"),
    ({"type": "labelNumber", "value": {"label": "", "number": 1}}, "LABEL_NUMBER"),
    ({"type": "labelNumber", "value": {"label": "A"}}, "LABEL_NUMBER"),
    ({"type": "labelVector", "value": {"label": "A", "vector": 3}}, "LABEL_VECTOR"),
    ({"type": "complex", "value": 1}, "Unknown value type"),
    ({"value": 1}, "'type' and 'value'"),
])
def test_malformed_payload_raises(data, message):
    with pytest.raises(ValidationError, match=message):
        ValueVariant.from_dict(data)


def test_string_forms():
    assert str(ScalarValue(1.23456)) == "1.2346"
    assert str(VectorValue([1, 2])) == "(1.00, 2.00)"
    assert str(VectorValue([1, 2, 3, 4])) == "[1.00, 2.00, 3.00, 4.00]"
    assert str(RangeValue(-1, 1)) == "[-1.0000, 1.0000]"
    assert str(LabeledScalarValue("Eta", 2)) == "{Eta: 2.0000}"
    assert str(LabeledVectorValue("Eta", [1, 2, 3])) == "{Eta: (1.00, 2.00, 3.00)}"
    assert str(LabeledVectorValue("Eta", [1, 2, 3, 4])) == "{Eta: [1.00, 2.00, 3.00, 4.00]}"


def test_columns():
    assert LabeledVectorValue("Zeta", [1, 2]).to_columns() == ["Zeta", 1.0, 2.0]
    assert RangeValue(0, 3).to_columns() == [0.0, 3.0]
