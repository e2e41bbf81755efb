"""
Projection Engine
=================
Filters N-dimensional points and projects them onto a 2D display plane.

Why is this file needed?
------------------------
1. Filtering: Each dimension carries one predicate (any / equal / greater /
   less). A point is shown only if every non-display dimension accepts it.
2. Projection: Two chosen dimensions become the x and y display axes; an
   optional window clips the x axis.
3. Colouring: Point values of any kind are normalised to [0, 1] and handed to
   a colour scheme.

The engine is a pure function of (points, filters). Nothing is cached between
project_2d() calls.
"""
from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Collection, Dict, List, Optional, Tuple

from pointexplorer.config import (
    DEFAULT_COLOR_SCHEME, FIXED_DOMAIN, LABELED_VECTOR_NORM_SCALE, VECTOR_NORM_SCALE
)
from pointexplorer.model.errors import ValidationError
from pointexplorer.model.points import PointBatch, PointRecord
from pointexplorer.model.values import (
    LabeledScalarValue, LabeledVectorValue, RangeValue, ScalarValue, VectorValue
)
from pointexplorer.utils import clamp, euclidean_norm
from pointexplorer.view import colors

logger = logging.getLogger(__name__)


class FilterCondition(StrEnum):
    ANY = "any"
    EQUAL = "equal"
    GREATER = "greater"
    LESS = "less"


@dataclass
class DimensionFilter:
    """Predicate applied to one coordinate of every point."""
    name: str
    min: float
    max: float
    value: float
    condition: FilterCondition = FilterCondition.ANY
    tolerance: float = 0.0

    def accepts(self, coord: float) -> bool:
        if self.condition == FilterCondition.EQUAL:
            return abs(coord - self.value) <= self.tolerance
        elif self.condition == FilterCondition.GREATER:
            return coord > self.value
        elif self.condition == FilterCondition.LESS:
            return coord < self.value
        return True


_UPDATABLE_FIELDS = frozenset({"min", "max", "value", "condition", "tolerance"})


@dataclass(frozen=True)
class WindowConfig:
    """Visible sub-range of the x display axis (inclusive)."""
    x_min: float
    x_max: float


@dataclass(frozen=True)
class ProjectedPoint:
    x: float
    y: float
    record: PointRecord
    label: str = ""


@dataclass(frozen=True)
class WindowStats:
    count: int
    x_min: float
    x_max: float


class ProjectionEngine:
    def __init__(self) -> None:
        self._batch: Optional[PointBatch] = None
        self._filters: Dict[int, DimensionFilter] = {}
        self._scalar_bounds: Optional[Tuple[float, float]] = None

    @property
    def points(self) -> Tuple[PointRecord, ...]:
        return self._batch.points if self._batch is not None else ()

    @property
    def batch(self) -> Optional[PointBatch]:
        return self._batch

    def set_data(self, batch: PointBatch) -> None:
        """Replace the current points and reset every filter to its default."""
        self._batch = batch
        scalars = [p.value.value for p in batch.points if isinstance(p.value, ScalarValue)]
        self._scalar_bounds = (min(scalars), max(scalars)) if scalars else None
        self.reset_filters()
        logger.info(f"Projection data set: {len(batch)} points, {batch.dim_count} dimensions.")

    def reset_filters(self) -> None:
        self._filters.clear()
        if self._batch is None:
            return
        axes = self._batch.axes
        for i in range(axes.dim_count):
            self._filters[i] = DimensionFilter(
                name=axes.names[i],
                min=axes.mins[i],
                max=axes.maxs[i],
                value=(axes.mins[i] + axes.maxs[i]) / 2,
                condition=FilterCondition.ANY,
                tolerance=axes.intervals[i] / 2,
            )

    def get_filter(self, dim_index: int) -> DimensionFilter:
        """Copy of the filter for one dimension."""
        return dataclasses.replace(self._filters[dim_index])

    def get_filters(self) -> Dict[int, DimensionFilter]:
        return {dim: dataclasses.replace(f) for dim, f in self._filters.items()}

    def update_filter(self, dim_index: int, **updates: Any) -> None:
        """
        Merge fields into the filter of one dimension.

        Values are stored as given, also when they lie outside the axis range.

        Raises:
            KeyError: if the dimension has no filter.
            ValidationError: on unknown field names or an unknown condition.
        """
        if dim_index not in self._filters:
            raise KeyError(f"No filter for dimension {dim_index}")
        unknown = set(updates) - _UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(f"Unknown filter fields: {sorted(unknown)}")
        if "condition" in updates:
            try:
                updates["condition"] = FilterCondition(updates["condition"])
            except ValueError:
                raise ValidationError(f"Unknown filter condition: {updates['condition']!r}") from None

        flt = self._filters[dim_index]
        for key, val in updates.items():
            setattr(flt, key, val)

        if flt.value < flt.min or flt.value > flt.max:
            logger.debug(f"Filter value {flt.value} for '{flt.name}' lies outside [{flt.min}, {flt.max}].")
        logger.debug(f"Filter {dim_index} updated: {updates}")

    def passes_filters(self, record: PointRecord, excluded_dims: Collection[int] = ()) -> bool:
        for i, coord in enumerate(record.coordinates):
            if i in excluded_dims:
                continue
            flt = self._filters.get(i)
            if flt is not None and not flt.accepts(coord):
                return False
        return True

    def _check_dim(self, dim: int, role: str) -> None:
        if self._batch is None:
            raise ValidationError("No data set for projection")
        if not isinstance(dim, int) or not 0 <= dim < self._batch.dim_count:
            raise ValidationError(f"{role} dimension {dim} not in [0, {self._batch.dim_count - 1}]")

    def project_2d(
        self,
        x_dim: int,
        y_dim: int,
        window: Optional[WindowConfig] = None,
    ) -> List[ProjectedPoint]:
        """
        Project the filtered points onto (x_dim, y_dim).

        The display dimensions are never filtered. Output keeps batch order.
        """
        self._check_dim(x_dim, "x")
        self._check_dim(y_dim, "y")
        excluded = {x_dim, y_dim}

        projected: List[ProjectedPoint] = []
        for record in self._batch.points:
            if not self.passes_filters(record, excluded):
                continue
            x = record.coordinates[x_dim]
            y = record.coordinates[y_dim]
            if window is not None and (x < window.x_min or x > window.x_max):
                continue
            projected.append(ProjectedPoint(x=x, y=y, record=record, label=self.point_label(record)))

        logger.debug(f"Projected {len(projected)}/{len(self._batch)} points onto ({x_dim}, {y_dim}).")
        return projected

    @staticmethod
    def point_label(record: PointRecord) -> str:
        coords = ", ".join(f"{name}: {c:.2f}" for name, c in zip(record.axis_names, record.coordinates))
        return f"({coords}) → {record.value}"

    def normalize(self, record: PointRecord) -> float:
        """
        Normalise a point value to [0, 1] for colouring.

        Scalars use the min/max of all scalar values in the batch. The other
        kinds use fixed empirical scales (see config), which is an
        approximation that depends on how the data was generated.
        """
        value = record.value
        lo, hi = FIXED_DOMAIN
        if isinstance(value, ScalarValue):
            if self._scalar_bounds is None:
                return 0.5
            vmin, vmax = self._scalar_bounds
            t = 0.5 if vmax == vmin else (value.value - vmin) / (vmax - vmin)
        elif isinstance(value, VectorValue):
            t = euclidean_norm(value.components) / VECTOR_NORM_SCALE
        elif isinstance(value, LabeledVectorValue):
            t = euclidean_norm(value.components) / LABELED_VECTOR_NORM_SCALE
        elif isinstance(value, RangeValue):
            t = (value.midpoint - lo) / (hi - lo)
        elif isinstance(value, LabeledScalarValue):
            t = (value.number - lo) / (hi - lo)
        else:
            raise TypeError(f"Unsupported value type: {type(value).__name__}")
        return clamp(t, 0.0, 1.0)

    def color_for(self, record: PointRecord, scheme: str = DEFAULT_COLOR_SCHEME) -> colors.RGB:
        return colors.get_color(self.normalize(record), scheme)

    def window_stats(self, x_dim: int, window: Optional[WindowConfig] = None) -> WindowStats:
        """Count and x extent of the points inside the window. Filters are ignored."""
        self._check_dim(x_dim, "x")
        count = 0
        x_min, x_max = float("inf"), float("-inf")
        for record in self._batch.points:
            x = record.coordinates[x_dim]
            if window is not None and (x < window.x_min or x > window.x_max):
                continue
            count += 1
            x_min = min(x_min, x)
            x_max = max(x_max, x)
        return WindowStats(count=count, x_min=x_min, x_max=x_max)
