import math

import pytest

from pointexplorer.controller.generator import (
    DataGenerator, GeneratorConfig, Pattern, PatternConfig
)
from pointexplorer.model.errors import ValidationError
from pointexplorer.model.values import (
    LabeledScalarValue, LabeledVectorValue, RangeValue, ScalarValue, ValueKind, VectorValue
)


def test_random_batch_shares_axes():
    batch = DataGenerator(seed=1).generate_points(GeneratorConfig(dimensions=4, point_count=50))
    assert len(batch) == 50
    assert batch.axes.names == ("X", "Y", "Z", "W")
    assert all(p.axes is batch.axes for p in batch.points)
    for lo, hi, iv in zip(batch.axes.mins, batch.axes.maxs, batch.axes.intervals):
        assert -100 <= lo < hi <= 100
        assert iv == pytest.approx((hi - lo) * 0.1)


def test_random_batch_is_reproducible():
    config = GeneratorConfig(dimensions=3, point_count=20, value_kind=ValueKind.LABELED_VECTOR)
    first = DataGenerator(seed=7).generate_points(config)
    second = DataGenerator(seed=7).generate_points(config)
    assert first == second


def test_most_coordinates_are_grid_aligned():
    batch = DataGenerator(seed=3).generate_points(GeneratorConfig(dimensions=2, point_count=400))
    aligned = 0
    for p in batch.points:
        for c, lo, iv in zip(p.coordinates, batch.axes.mins, batch.axes.intervals):
            steps = (c - lo) / iv
            if abs(steps - round(steps)) < 1e-9:
                aligned += 1
    assert aligned / 800 > 0.5


@pytest.mark.parametrize("kind, cls", [
    (ValueKind.SCALAR, ScalarValue),
    (ValueKind.VECTOR, VectorValue),
    (ValueKind.RANGE, RangeValue),
    (ValueKind.LABELED_SCALAR, LabeledScalarValue),
    (ValueKind.LABELED_VECTOR, LabeledVectorValue),
])
def test_generate_value_kinds(kind, cls):
    gen = DataGenerator(seed=0)
    for _ in range(20):
        value = gen.generate_value(kind, dimensions=3)
        assert isinstance(value, cls)
        if cls is RangeValue:
            assert -100 <= value.low <= 0 <= value.high <= 100
        if cls is VectorValue:
            assert 2 <= len(value.components) <= 4
        if cls is LabeledVectorValue:
            assert 2 <= len(value.components) <= 3


def test_vector_size_is_honoured():
    value = DataGenerator(seed=0).generate_value(ValueKind.VECTOR, dimensions=3, vector_size=6)
    assert len(value.components) == 6


def test_sphere_pattern():
    batch = DataGenerator().generate_patterned_data(PatternConfig(dimensions=2, grid_size=3))
    assert len(batch) == 9
    assert batch.axes.intervals == (50.0, 50.0)
    assert batch.metadata()["pattern"] == "sphere"
    assert batch.metadata()["gridSize"] == 3
    center = next(p for p in batch.points if p.coordinates == (0.0, 0.0))
    assert center.value == ScalarValue(100.0)
    corner = batch.points[0]
    assert corner.coordinates == (-50.0, -50.0)
    assert corner.value.value == pytest.approx(100 * math.exp(-math.hypot(50, 50) / 30))


def test_wave_pattern_values():
    batch = DataGenerator().generate_patterned_data(
        PatternConfig(dimensions=2, grid_size=2, pattern=Pattern.WAVE))
    p = batch.points[-1]
    x, y = p.coordinates
    expected = 50 * (math.sin(x / 10) * math.cos(y / 15) + math.sin(y / 10) * math.cos(x / 15))
    assert p.value.value == pytest.approx(expected)


def test_random_pattern_uses_value_kind():
    batch = DataGenerator(seed=2).generate_patterned_data(
        PatternConfig(dimensions=1, grid_size=4, pattern="random", value_kind=ValueKind.RANGE))
    assert batch.value_kind == ValueKind.RANGE


@pytest.mark.parametrize("config", [
    GeneratorConfig(dimensions=0),
    GeneratorConfig(dimensions=11),
    GeneratorConfig(point_count=-1),
    GeneratorConfig(range_min=5, range_max=5),
    GeneratorConfig(interval_ratio=0),
    GeneratorConfig(vector_size=0),
])
def test_invalid_generator_config(config):
    with pytest.raises(ValidationError):
        DataGenerator().generate_points(config)


def test_invalid_pattern_config():
    with pytest.raises(ValidationError, match="grid_size"):
        DataGenerator().generate_patterned_data(PatternConfig(grid_size=1))
