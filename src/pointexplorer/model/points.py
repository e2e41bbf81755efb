"""
Point Records (Data Model)
==========================
Defines the validated records produced by a generator and consumed by the
grid and the projection engine.

Why is this file needed?
------------------------
1. Validation: Every record checks its axis description and coordinates on
   construction, so downstream code never sees malformed points.
2. Sharing: All points of one batch reference the same AxisMetadata. The grid
   and the projection engine rely on this.
3. Serialization: Records and batches round-trip through plain dictionaries
   using the same keys as the JSON export.

Classes:
    AxisMetadata: Per-axis name, range and sampling interval.
    PointRecord: One N-dimensional coordinate plus its value.
    PointBatch: A list of records sharing one AxisMetadata.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

from pointexplorer.model.errors import ValidationError
from pointexplorer.model.values import ValueKind, ValueVariant
from pointexplorer.utils import is_number, is_number_sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AxisMetadata:
    names: Tuple[str, ...]
    mins: Tuple[float, ...]
    maxs: Tuple[float, ...]
    intervals: Tuple[float, ...]

    def __post_init__(self):
        for label, arr in (("dimRangeMin", self.mins), ("dimRangeMax", self.maxs),
                           ("dimInterval", self.intervals)):
            if not is_number_sequence(arr):
                raise ValidationError(f"{label} must be an array of numbers")
            if not all(math.isfinite(v) for v in arr):
                raise ValidationError(f"{label} must contain finite numbers")
        if not isinstance(self.names, (list, tuple)) or not all(isinstance(n, str) for n in self.names):
            raise ValidationError("dimNames must be an array of strings")

        dim_count = len(self.names)
        if dim_count < 1:
            raise ValidationError("At least one axis is required")
        for label, arr in (("dimRangeMin", self.mins), ("dimRangeMax", self.maxs),
                           ("dimInterval", self.intervals)):
            if len(arr) != dim_count:
                raise ValidationError(f"{label} must be an array of length {dim_count}")

        for i in range(dim_count):
            if self.mins[i] >= self.maxs[i]:
                raise ValidationError(f"dimRangeMin[{i}] must be less than dimRangeMax[{i}]")
            if self.intervals[i] <= 0:
                raise ValidationError(f"dimInterval[{i}] must be positive")

        object.__setattr__(self, "names", tuple(self.names))
        object.__setattr__(self, "mins", tuple(float(v) for v in self.mins))
        object.__setattr__(self, "maxs", tuple(float(v) for v in self.maxs))
        object.__setattr__(self, "intervals", tuple(float(v) for v in self.intervals))

    @property
    def dim_count(self) -> int:
        return len(self.names)

    @property
    def steps(self) -> Tuple[int, ...]:
        """Number of grid cells along each axis."""
        return tuple(
            math.floor((mx - mn) / iv) + 1
            for mn, mx, iv in zip(self.mins, self.maxs, self.intervals)
        )

    @property
    def strides(self) -> Tuple[int, ...]:
        """Row-major strides; the last axis varies fastest."""
        steps = self.steps
        strides = [1] * len(steps)
        for i in range(len(steps) - 2, -1, -1):
            strides[i] = strides[i + 1] * steps[i + 1]
        return tuple(strides)

    @property
    def total_cells(self) -> int:
        return math.prod(self.steps)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "dimensions": self.dim_count,
            "dimNames": list(self.names),
            "dimRangeMin": list(self.mins),
            "dimRangeMax": list(self.maxs),
            "dimInterval": list(self.intervals),
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> AxisMetadata:
        try:
            return AxisMetadata(
                names=data["dimNames"],
                mins=data["dimRangeMin"],
                maxs=data["dimRangeMax"],
                intervals=data["dimInterval"],
            )
        except KeyError as e:
            raise ValidationError(f"Missing axis field: {e.args[0]}") from None


@dataclass(frozen=True)
class PointRecord:
    """
    A single point: coordinates inside the axis ranges and a value.
    """
    axes: AxisMetadata
    coordinates: Tuple[float, ...]
    value: ValueVariant

    def __post_init__(self):
        if not isinstance(self.axes, AxisMetadata):
            raise ValidationError("axes must be an AxisMetadata instance")
        if not is_number_sequence(self.coordinates):
            raise ValidationError("coordinateNum must be an array of numbers")
        if not all(math.isfinite(c) for c in self.coordinates):
            raise ValidationError("coordinateNum must contain finite numbers")
        if len(self.coordinates) != self.axes.dim_count:
            raise ValidationError(f"coordinateNum must be an array of length {self.axes.dim_count}")
        for i, coord in enumerate(self.coordinates):
            lo, hi = self.axes.mins[i], self.axes.maxs[i]
            if coord < lo or coord > hi:
                raise ValidationError(f"coordinateNum[{i}] must be within range [{lo}, {hi}]")
        if not isinstance(self.value, ValueVariant):
            raise ValidationError("value must be an instance of ValueVariant")
        object.__setattr__(self, "coordinates", tuple(float(c) for c in self.coordinates))

    @staticmethod
    def create(
        dim_count: int,
        axis_names: Sequence[str],
        axis_min: Sequence[float],
        axis_max: Sequence[float],
        axis_interval: Sequence[float],
        coordinates: Sequence[float],
        value: ValueVariant,
    ) -> PointRecord:
        """
        Build a record from the flat field set.

        Raises:
            ValidationError: if any array length differs from dim_count or an
                invariant of the axis description or coordinates is broken.
        """
        if not isinstance(dim_count, int) or isinstance(dim_count, bool) or dim_count < 1:
            raise ValidationError("dimNumber must be a positive integer")
        for label, arr in (("dimNames", axis_names), ("dimRangeMin", axis_min),
                           ("dimRangeMax", axis_max), ("dimInterval", axis_interval),
                           ("coordinateNum", coordinates)):
            if not isinstance(arr, (list, tuple)) or len(arr) != dim_count:
                raise ValidationError(f"{label} must be an array of length {dim_count}")

        axes = AxisMetadata(names=axis_names, mins=axis_min, maxs=axis_max, intervals=axis_interval)
        return PointRecord(axes=axes, coordinates=coordinates, value=value)

    @property
    def dim_count(self) -> int:
        return self.axes.dim_count

    @property
    def axis_names(self) -> Tuple[str, ...]:
        return self.axes.names

    @property
    def axis_min(self) -> Tuple[float, ...]:
        return self.axes.mins

    @property
    def axis_max(self) -> Tuple[float, ...]:
        return self.axes.maxs

    @property
    def axis_interval(self) -> Tuple[float, ...]:
        return self.axes.intervals

    @property
    def label(self) -> str:
        coords = ", ".join(f"{name}: {c:.4f}" for name, c in zip(self.axes.names, self.coordinates))
        return f"Point({coords}) => {self.value}"

    def __str__(self) -> str:
        return self.label

    def to_dict(self) -> Dict[str, Any]:
        return {
            "dimNumber": self.dim_count,
            "dimNames": list(self.axes.names),
            "dimRangeMin": list(self.axes.mins),
            "dimRangeMax": list(self.axes.maxs),
            "dimInterval": list(self.axes.intervals),
            "coordinateNum": list(self.coordinates),
            "value": self.value.to_dict(),
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> PointRecord:
        try:
            return PointRecord.create(
                dim_count=data["dimNumber"],
                axis_names=data["dimNames"],
                axis_min=data["dimRangeMin"],
                axis_max=data["dimRangeMax"],
                axis_interval=data["dimInterval"],
                coordinates=data["coordinateNum"],
                value=ValueVariant.from_dict(data["value"]),
            )
        except KeyError as e:
            raise ValidationError(f"Missing point field: {e.args[0]}") from None


@dataclass(frozen=True)
class PointBatch:
    """
    A generated data set. Every point shares `axes`.

    `extra` carries generator details that are exported with the metadata
    (e.g. pattern name and grid size).
    """
    axes: AxisMetadata
    points: Tuple[PointRecord, ...] = ()
    vector_size: Optional[int] = None
    extra: Dict[str, Any] = field(default_factory=dict, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "points", tuple(self.points))
        for i, point in enumerate(self.points):
            if point.axes != self.axes:
                raise ValidationError(f"Point {i} does not share the batch axis metadata")

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[PointRecord]:
        return iter(self.points)

    @property
    def dim_count(self) -> int:
        return self.axes.dim_count

    @property
    def value_kind(self) -> Optional[ValueKind]:
        """The single kind of all values, or None for an empty or mixed batch."""
        kinds = {p.value.kind for p in self.points}
        return kinds.pop() if len(kinds) == 1 else None

    def metadata(self) -> Dict[str, Any]:
        kind = self.value_kind
        meta = self.axes.to_dict()
        meta.update({
            "valueType": kind.value if kind else None,
            "vectorSize": self.vector_size,
            "pointCount": len(self.points),
        })
        meta.update(self.extra)
        return meta

    def to_dict(self) -> Dict[str, Any]:
        return {
            "points": [p.to_dict() for p in self.points],
            "metadata": self.metadata(),
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> PointBatch:
        """Inverse of to_dict()."""
        if "metadata" not in data:
            raise ValidationError("Batch data has no 'metadata' section")
        meta = data["metadata"]
        axes = AxisMetadata.from_dict(meta)
        points = [PointRecord.from_dict(p) for p in data.get("points", [])]
        known = {"dimensions", "dimNames", "dimRangeMin", "dimRangeMax", "dimInterval",
                 "valueType", "vectorSize", "pointCount"}
        extra = {k: v for k, v in meta.items() if k not in known}
        return PointBatch(axes=axes, points=tuple(points), vector_size=meta.get("vectorSize"), extra=extra)

    @staticmethod
    def from_descriptor(desc: Dict[str, Any]) -> PointBatch:
        """
        Build a batch from the compact input form:
        {dimCount, axisNames, axisMin, axisMax, axisInterval,
         points: [{coordinates, value}]}
        """
        try:
            dim_count = desc["dimCount"]
            names, mins = desc["axisNames"], desc["axisMin"]
            maxs, intervals = desc["axisMax"], desc["axisInterval"]
            raw_points: List[Dict[str, Any]] = desc["points"]
        except KeyError as e:
            raise ValidationError(f"Missing batch field: {e.args[0]}") from None

        if not isinstance(dim_count, int) or isinstance(dim_count, bool) or dim_count < 1:
            raise ValidationError("dimCount must be a positive integer")
        if len(names) != dim_count:
            raise ValidationError(f"axisNames must be an array of length {dim_count}")

        axes = AxisMetadata(names=names, mins=mins, maxs=maxs, intervals=intervals)
        points = []
        for raw in raw_points:
            try:
                value, coordinates = raw["value"], raw["coordinates"]
            except KeyError as e:
                raise ValidationError(f"Missing point field: {e.args[0]}") from None
            if not isinstance(value, ValueVariant):
                value = ValueVariant.from_dict(value)
            points.append(PointRecord(axes=axes, coordinates=coordinates, value=value))
        logger.debug(f"Built batch of {len(points)} points from descriptor ({dim_count} dims).")
        return PointBatch(axes=axes, points=tuple(points))
