"""
Point Grid
==========
Dense N-dimensional storage for point values.

Continuous coordinates are snapped to the nearest grid cell and stored in one
flat list addressed by row-major strides, which gives O(1) insert and lookup
for any number of axes.

Classes:
    GridPoint: One occupied cell as returned by PointGrid.get_all_points().
    PointGrid: The grid itself.
"""
from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple, TYPE_CHECKING

import numpy as np

from pointexplorer.model.errors import OutOfBoundsError, ValidationError
from pointexplorer.model.points import AxisMetadata, PointRecord
from pointexplorer.model.values import ValueVariant
from pointexplorer.utils import clamp, round_half_up

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GridPoint:
    coordinates: Tuple[float, ...]
    indices: Tuple[int, ...]
    value: ValueVariant


class _OccupiedCells:
    """Restartable view over the occupied cells of a grid."""

    def __init__(self, grid: PointGrid):
        self._grid = grid

    def __iter__(self) -> Iterator[GridPoint]:
        grid = self._grid
        if not grid.initialized:
            return
        axes = grid.axes
        ranges = [range(s) for s in grid.get_dims()]
        # product() yields the last axis fastest, which matches the flat layout
        for flat, indices in enumerate(itertools.product(*ranges)):
            value = grid._data[flat]
            if value is None:
                continue
            coords = tuple(axes.mins[i] + idx * axes.intervals[i] for i, idx in enumerate(indices))
            yield GridPoint(coordinates=coords, indices=indices, value=value)


class PointGrid:
    """
    Stores one value per grid cell.

    Use PointGrid.create(axes) to allocate up front. A grid constructed with
    only axis names allocates itself from the first inserted record.
    """

    def __init__(self, names: Sequence[str] = ()):
        self._names: List[str] = list(names)
        self._axes: Optional[AxisMetadata] = None
        self._steps: Tuple[int, ...] = ()
        self._strides: Tuple[int, ...] = ()
        self._data: List[Optional[ValueVariant]] = []

    @classmethod
    def create(cls, axes: AxisMetadata) -> PointGrid:
        grid = cls(axes.names)
        grid._allocate(axes)
        return grid

    @property
    def initialized(self) -> bool:
        return self._axes is not None

    @property
    def axes(self) -> Optional[AxisMetadata]:
        return self._axes

    def initialize(self, sample: PointRecord) -> None:
        """Allocate the grid from the axis description of a sample record."""
        if self.initialized:
            raise ValidationError("Grid is already initialized")
        self._allocate(sample.axes)

    def _allocate(self, axes: AxisMetadata) -> None:
        if self._names and list(axes.names) != self._names:
            raise ValidationError(f"Axis names {list(axes.names)} do not match grid axes {self._names}")

        self._axes = axes
        self._names = list(axes.names)
        self._steps = axes.steps
        self._strides = axes.strides
        self._data = [None] * axes.total_cells
        logger.info(f"Grid initialized: {axes.dim_count} axes, dims={list(self._steps)}, "
                    f"{len(self._data)} cells.")

    def _check_record(self, record: PointRecord) -> None:
        if record.axes != self._axes:
            raise ValidationError("Record axis metadata does not match the grid")

    def _cell_index(self, coords: Sequence[float]) -> Tuple[int, ...]:
        """Nearest cell for each axis, clamped into the grid."""
        axes = self._axes
        if len(coords) != axes.dim_count:
            raise ValidationError(f"Expected {axes.dim_count} coordinates, got {len(coords)}")

        idx = []
        for i, coord in enumerate(coords):
            raw = round_half_up((coord - axes.mins[i]) / axes.intervals[i])
            index = int(clamp(raw, 0, self._steps[i] - 1))
            if index != raw:
                logger.debug(f"Coordinate {coord} on axis '{axes.names[i]}' clamped to index {index}.")
            idx.append(index)
        return tuple(idx)

    def _flat_index(self, idx: Sequence[int]) -> int:
        return sum(i * s for i, s in zip(idx, self._strides))

    def add_point(self, record: PointRecord) -> None:
        """Store the record's value in its cell. The last write to a cell wins."""
        if not self.initialized:
            self.initialize(record)
        self._check_record(record)
        self._data[self._flat_index(self._cell_index(record.coordinates))] = record.value

    def get_value_at_coords(self, coords: Sequence[float]) -> Optional[ValueVariant]:
        if not self.initialized:
            return None
        return self.get_value_at_index(self._cell_index(coords))

    def get_value_at_index(self, idx: Sequence[int]) -> Optional[ValueVariant]:
        """
        Get the value stored at an integer cell index.

        Raises:
            OutOfBoundsError: if the index does not address a cell of this grid.
        """
        if len(idx) != len(self._steps):
            raise OutOfBoundsError(f"Index {list(idx)} has {len(idx)} components, grid has {len(self._steps)} axes")
        for i, (component, size) in enumerate(zip(idx, self._steps)):
            if component < 0 or component >= size:
                raise OutOfBoundsError(f"Index out of bounds: axis {i} index {component} not in [0, {size - 1}]")

        flat = self._flat_index(idx)
        if flat < 0 or flat >= len(self._data):
            raise OutOfBoundsError("Index out of bounds")
        return self._data[flat]

    def get_dim_number(self) -> int:
        return len(self._steps)

    def get_dims(self) -> List[int]:
        return list(self._steps)

    def get_dim_names(self) -> List[str]:
        return list(self._names)

    def get_all_points(self) -> _OccupiedCells:
        """Occupied cells in row-major order. Can be iterated more than once."""
        return _OccupiedCells(self)

    def occupied_count(self) -> int:
        return sum(1 for v in self._data if v is not None)

    def to_array(self) -> npt.NDArray[np.object_]:
        """Values as an object array shaped like the grid (None for empty cells)."""
        arr = np.empty(len(self._data), dtype=object)
        if not self.initialized:
            return arr
        for i, value in enumerate(self._data):
            arr[i] = value
        return arr.reshape(self._steps)
