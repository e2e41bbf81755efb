from __future__ import annotations

import math
from numbers import Real
from typing import Any, Sequence


def is_number(value: Any) -> bool:
    """True for real numbers, excluding bools."""
    return isinstance(value, Real) and not isinstance(value, bool)


def is_number_sequence(values: Any) -> bool:
    """True for a list/tuple whose items are all real numbers."""
    return isinstance(values, (list, tuple)) and all(is_number(v) for v in values)


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(value, upper))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards +inf."""
    return math.floor(value + 0.5)


def euclidean_norm(values: Sequence[float]) -> float:
    return math.sqrt(sum(v * v for v in values))
