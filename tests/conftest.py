import matplotlib
matplotlib.use("Agg")

import pytest

from pointexplorer.model.points import AxisMetadata, PointBatch, PointRecord
from pointexplorer.model.values import ScalarValue


@pytest.fixture
def axes_3d():
    # X: 0..10 step 5 -> 3 cells, Y: 0..4 step 1 -> 5 cells, Z: -1..1 step 1 -> 3 cells
    return AxisMetadata(
        names=("X", "Y", "Z"),
        mins=(0.0, 0.0, -1.0),
        maxs=(10.0, 4.0, 1.0),
        intervals=(5.0, 1.0, 1.0),
    )


@pytest.fixture
def make_point(axes_3d):
    def _make(coords, value=1.0, axes=None):
        if not hasattr(value, "kind"):
            value = ScalarValue(value)
        return PointRecord(axes=axes or axes_3d, coordinates=coords, value=value)
    return _make


@pytest.fixture
def batch_3d(axes_3d, make_point):
    points = [
        make_point((0.0, 1.0, -1.0), 10.0),
        make_point((5.0, 2.0, 0.0), 20.0),
        make_point((10.0, 3.0, 1.0), 30.0),
        make_point((7.0, 4.0, 0.5), 40.0),
    ]
    return PointBatch(axes=axes_3d, points=tuple(points))
