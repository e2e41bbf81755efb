import pytest

from pointexplorer.model.errors import OutOfBoundsError, ValidationError
from pointexplorer.model.grid import PointGrid
from pointexplorer.model.points import AxisMetadata, PointRecord
from pointexplorer.model.values import ScalarValue, VectorValue


@pytest.fixture
def axis_x():
    return AxisMetadata(names=("X",), mins=(0.0,), maxs=(10.0,), intervals=(5.0,))


def test_steps_for_single_axis(axis_x):
    grid = PointGrid.create(axis_x)
    assert grid.get_dims() == [3]


def test_off_grid_coordinate_rounds_to_nearest_cell(axis_x):
    grid = PointGrid.create(axis_x)
    grid.add_point(PointRecord(axes=axis_x, coordinates=(7.0,), value=ScalarValue(1.5)))
    assert grid.get_value_at_index((1,)) == ScalarValue(1.5)
    assert grid.get_value_at_coords((5.0,)) == ScalarValue(1.5)
    assert [p.coordinates for p in grid.get_all_points()] == [(5.0,)]


def test_coordinate_at_max_maps_to_last_index(axis_x):
    grid = PointGrid.create(axis_x)
    grid.add_point(PointRecord(axes=axis_x, coordinates=(10.0,), value=ScalarValue(9)))
    assert grid.get_value_at_index((2,)) == ScalarValue(9)


def test_inserted_values_are_returned(axes_3d, make_point):
    grid = PointGrid.create(axes_3d)
    points = [
        make_point((0.0, 0.0, -1.0), 1.0),
        make_point((5.0, 2.0, 0.0), 2.0),
        make_point((10.0, 4.0, 1.0), 3.0),
    ]
    for p in points:
        grid.add_point(p)
    for p in points:
        assert grid.get_value_at_coords(p.coordinates) == p.value
    assert grid.occupied_count() == 3


def test_last_write_wins(axes_3d, make_point):
    grid = PointGrid.create(axes_3d)
    grid.add_point(make_point((4.0, 1.0, 0.0), 1.0))
    grid.add_point(make_point((6.0, 1.2, 0.2), 2.0))
    assert grid.get_value_at_coords((5.0, 1.0, 0.0)) == ScalarValue(2.0)
    assert grid.occupied_count() == 1


def test_lazy_initialization_from_first_point(axes_3d, make_point):
    grid = PointGrid(["X", "Y", "Z"])
    assert not grid.initialized
    assert grid.get_value_at_coords((0.0, 0.0, 0.0)) is None
    grid.add_point(make_point((0.0, 0.0, 0.0), VectorValue([1, 2])))
    assert grid.initialized
    assert grid.get_dims() == [3, 5, 3]
    assert grid.get_dim_number() == 3
    assert grid.get_dim_names() == ["X", "Y", "Z"]


def test_initialize_twice_fails(axes_3d, make_point):
    grid = PointGrid.create(axes_3d)
    with pytest.raises(ValidationError, match="already initialized"):
        grid.initialize(make_point((0.0, 0.0, 0.0)))


def test_mismatched_names_are_rejected(make_point):
    grid = PointGrid(["A", "B", "C"])
    with pytest.raises(ValidationError, match="do not match"):
        grid.add_point(make_point((0.0, 0.0, 0.0)))


def test_mismatched_metadata_is_rejected(axes_3d):
    grid = PointGrid.create(axes_3d)
    other = AxisMetadata(names=("X", "Y", "Z"), mins=(0, 0, -1), maxs=(20, 4, 1), intervals=(5, 1, 1))
    with pytest.raises(ValidationError, match="does not match the grid"):
        grid.add_point(PointRecord(axes=other, coordinates=(15.0, 0.0, 0.0), value=ScalarValue(1)))


def test_coords_lookup_checks_dimension_count(axes_3d):
    grid = PointGrid.create(axes_3d)
    with pytest.raises(ValidationError, match="Expected 3 coordinates"):
        grid.get_value_at_coords((1.0, 2.0))


def test_out_of_range_coords_are_clamped(axes_3d, make_point):
    grid = PointGrid.create(axes_3d)
    grid.add_point(make_point((10.0, 4.0, 1.0), 7.0))
    assert grid.get_value_at_coords((100.0, 50.0, 9.0)) == ScalarValue(7.0)
    assert grid.get_value_at_coords((-100.0, -50.0, -9.0)) is None


@pytest.mark.parametrize("idx", [(3, 0, 0), (0, -1, 0), (0, 0, 3), (0, 0), (0, 0, 0, 0)])
def test_index_lookup_out_of_bounds(axes_3d, idx):
    grid = PointGrid.create(axes_3d)
    with pytest.raises(OutOfBoundsError):
        grid.get_value_at_index(idx)


def test_uninitialized_index_lookup_out_of_bounds():
    with pytest.raises(OutOfBoundsError):
        PointGrid().get_value_at_index(())


def test_all_points_row_major_and_restartable(axes_3d, make_point):
    grid = PointGrid.create(axes_3d)
    grid.add_point(make_point((10.0, 0.0, -1.0), 3.0))
    grid.add_point(make_point((0.0, 0.0, 1.0), 2.0))
    grid.add_point(make_point((0.0, 0.0, -1.0), 1.0))

    cells = grid.get_all_points()
    first = [(p.indices, p.value.value) for p in cells]
    second = [(p.indices, p.value.value) for p in cells]
    assert first == [((0, 0, 0), 1.0), ((0, 0, 2), 2.0), ((2, 0, 0), 3.0)]
    assert first == second


def test_all_points_on_empty_grid():
    assert list(PointGrid(["X"]).get_all_points()) == []


def test_to_array_shape(axes_3d, make_point):
    grid = PointGrid.create(axes_3d)
    grid.add_point(make_point((5.0, 3.0, 0.0), 4.0))
    arr = grid.to_array()
    assert arr.shape == (3, 5, 3)
    assert arr[1, 3, 1] == ScalarValue(4.0)
    assert arr[0, 0, 0] is None
