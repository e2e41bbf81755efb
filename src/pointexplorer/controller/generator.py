"""
Synthetic Data Generator
========================
Produces batches of random or patterned N-dimensional points.

Every batch shares one AxisMetadata. Random batches draw per-axis ranges and
place about 70 % of the coordinates exactly on grid steps; patterned batches
cover a full regular grid and compute the value from the coordinates.

Classes:
    GeneratorConfig: Parameters for DataGenerator.generate_points().
    PatternConfig: Parameters for DataGenerator.generate_patterned_data().
    DataGenerator: The generator (seedable through numpy's Generator).
"""
from __future__ import annotations

import itertools
import logging
import math
from dataclasses import dataclass
from enum import StrEnum
from typing import List, Optional

import numpy as np

from pointexplorer.config import (
    DEFAULT_DIM_NAMES, GRID_ALIGNED_PROBABILITY, LABELS, MAX_DIMENSIONS, PATTERN_RANGE
)
from pointexplorer.model.errors import ValidationError
from pointexplorer.model.points import AxisMetadata, PointBatch, PointRecord
from pointexplorer.model.values import (
    LabeledScalarValue, LabeledVectorValue, RangeValue, ScalarValue, ValueKind, ValueVariant, VectorValue
)

logger = logging.getLogger(__name__)


class Pattern(StrEnum):
    SPHERE = "sphere"
    WAVE = "wave"
    RANDOM = "random"


@dataclass
class GeneratorConfig:
    dimensions: int = 3
    point_count: int = 100
    value_kind: ValueKind = ValueKind.SCALAR
    vector_size: Optional[int] = None
    range_min: float = -100.0
    range_max: float = 100.0
    interval_ratio: float = 0.1  # interval as a fraction of each axis span

    def validate(self) -> None:
        _check_dimensions(self.dimensions)
        _check_vector_size(self.vector_size)
        if self.point_count < 0:
            raise ValidationError("point_count must not be negative")
        if self.range_min >= self.range_max:
            raise ValidationError("range_min must be less than range_max")
        if not 0 < self.interval_ratio <= 1:
            raise ValidationError("interval_ratio must be in (0, 1]")


@dataclass
class PatternConfig:
    dimensions: int = 3
    grid_size: int = 5  # grid points per axis
    value_kind: ValueKind = ValueKind.SCALAR
    vector_size: Optional[int] = None
    pattern: Pattern = Pattern.SPHERE

    def validate(self) -> None:
        _check_dimensions(self.dimensions)
        _check_vector_size(self.vector_size)
        if self.grid_size < 2:
            raise ValidationError("grid_size must be at least 2")


def _check_dimensions(dimensions: int) -> None:
    if not 1 <= dimensions <= MAX_DIMENSIONS:
        raise ValidationError(f"dimensions must be between 1 and {MAX_DIMENSIONS}")


def _check_vector_size(vector_size: Optional[int]) -> None:
    if vector_size is not None and vector_size < 1:
        raise ValidationError("vector_size must be positive")


class DataGenerator:
    def __init__(self, seed: Optional[int] = None):
        self.rng = np.random.default_rng(seed)

    def _random_length(self, low: int, high: int) -> int:
        """Integer in [low, high]."""
        return int(self.rng.integers(low, high, endpoint=True))

    def generate_value(
        self,
        kind: ValueKind,
        dimensions: int = 3,
        vector_size: Optional[int] = None,
    ) -> ValueVariant:
        kind = ValueKind(kind)
        if kind == ValueKind.SCALAR:
            return ScalarValue(float(self.rng.normal(50, 20)))
        elif kind == ValueKind.VECTOR:
            size = vector_size or self._random_length(2, dimensions + 1)
            return VectorValue(self.rng.normal(0, 10, size).tolist())
        elif kind == ValueKind.RANGE:
            return RangeValue(float(self.rng.uniform(-100, 0)), float(self.rng.uniform(0, 100)))
        elif kind == ValueKind.LABELED_SCALAR:
            label = LABELS[int(self.rng.integers(len(LABELS)))]
            return LabeledScalarValue(label, float(self.rng.normal(100, 30)))
        else:  # ValueKind.LABELED_VECTOR
            label = LABELS[int(self.rng.integers(len(LABELS)))]
            size = vector_size or self._random_length(2, max(2, dimensions))
            return LabeledVectorValue(label, self.rng.normal(0, 5, size).tolist())

    def _random_axes(self, config: GeneratorConfig) -> AxisMetadata:
        span = config.range_max - config.range_min
        mins = self.rng.uniform(config.range_min, config.range_min + span * 0.3, config.dimensions)
        maxs = np.array([self.rng.uniform(mn + span * 0.4, config.range_max) for mn in mins])
        intervals = (maxs - mins) * config.interval_ratio
        return AxisMetadata(
            names=DEFAULT_DIM_NAMES[:config.dimensions],
            mins=mins.tolist(),
            maxs=maxs.tolist(),
            intervals=intervals.tolist(),
        )

    def _random_coordinate(self, lo: float, hi: float, interval: float) -> float:
        if self.rng.random() < GRID_ALIGNED_PROBABILITY:
            steps = math.floor((hi - lo) / interval)
            step = int(self.rng.integers(steps)) if steps > 0 else 0
            return min(lo + step * interval, hi)
        return float(self.rng.uniform(lo, hi))

    def generate_points(self, config: Optional[GeneratorConfig] = None) -> PointBatch:
        """Random batch: random axis ranges, random coordinates, random values."""
        config = config or GeneratorConfig()
        config.validate()
        axes = self._random_axes(config)

        points: List[PointRecord] = []
        for _ in range(config.point_count):
            coords = [
                self._random_coordinate(axes.mins[i], axes.maxs[i], axes.intervals[i])
                for i in range(axes.dim_count)
            ]
            value = self.generate_value(config.value_kind, config.dimensions, config.vector_size)
            points.append(PointRecord(axes=axes, coordinates=coords, value=value))

        logger.info(f"Generated {len(points)} random points in {config.dimensions} dimensions "
                    f"({ValueKind(config.value_kind).value}).")
        return PointBatch(axes=axes, points=tuple(points), vector_size=config.vector_size)

    def generate_patterned_data(self, config: Optional[PatternConfig] = None) -> PointBatch:
        """Full regular grid on [-50, 50]^d with pattern-derived values."""
        config = config or PatternConfig()
        config.validate()
        pattern = Pattern(config.pattern)
        lo, hi = PATTERN_RANGE
        interval = (hi - lo) / (config.grid_size - 1)
        dims = config.dimensions
        axes = AxisMetadata(
            names=DEFAULT_DIM_NAMES[:dims],
            mins=[lo] * dims,
            maxs=[hi] * dims,
            intervals=[interval] * dims,
        )

        points: List[PointRecord] = []
        for steps in itertools.product(range(config.grid_size), repeat=dims):
            # Clamp guards the last step against float drift past `hi`
            coords = [min(lo + s * interval, hi) for s in steps]
            points.append(PointRecord(axes=axes, coordinates=coords, value=self._pattern_value(pattern, coords, config)))

        logger.info(f"Generated {len(points)} '{pattern.value}' points on a {config.grid_size}^{dims} grid.")
        return PointBatch(
            axes=axes,
            points=tuple(points),
            vector_size=config.vector_size,
            extra={"pattern": pattern.value, "gridSize": config.grid_size},
        )

    def _pattern_value(self, pattern: Pattern, coords: List[float], config: PatternConfig) -> ValueVariant:
        if pattern == Pattern.SPHERE:
            distance = math.sqrt(sum(c * c for c in coords))
            return ScalarValue(100 * math.exp(-distance / 30))
        elif pattern == Pattern.WAVE:
            n = len(coords)
            wave = sum(math.sin(c / 10) * math.cos(coords[(i + 1) % n] / 15) for i, c in enumerate(coords))
            return ScalarValue(wave * 50)
        return self.generate_value(config.value_kind, config.dimensions, config.vector_size)
