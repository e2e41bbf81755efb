"""
Measurement Values
==================
Defines the payload carried by every data point.

A value is one of five closed kinds. Each kind is its own frozen dataclass so
consumers can match on the concrete class, and every kind serializes to the
same structural form: {"type": <kind>, "value": <payload>}.

Classes:
    ValueKind: Wire tags of the five kinds.
    ValueVariant: Abstract base with the (de)serialization factory.
    ScalarValue, VectorValue, RangeValue, LabeledScalarValue, LabeledVectorValue
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Dict, List, Tuple, Union

from pointexplorer.model.errors import ValidationError
from pointexplorer.utils import is_number, is_number_sequence


class ValueKind(StrEnum):
    SCALAR = "double"
    VECTOR = "vector"
    RANGE = "range"
    LABELED_SCALAR = "labelNumber"
    LABELED_VECTOR = "labelVector"


def _format_components(values: Tuple[float, ...]) -> str:
    return ", ".join(f"{v:.2f}" for v in values)


@dataclass(frozen=True)
class ValueVariant(ABC):
    """
    Abstract base class for point values.
    Instances are immutable; payload shape is checked on construction.
    """

    @property
    @abstractmethod
    def kind(self) -> ValueKind:
        pass

    @property
    @abstractmethod
    def payload(self) -> Any:
        """Payload in its plain (JSON-compatible) form."""
        pass

    @abstractmethod
    def to_columns(self) -> List[Union[str, float]]:
        """Flat column values used for tabular export."""
        pass

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.kind.value, "value": self.payload}

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> ValueVariant:
        """Factory method to deserialize into the correct kind."""
        if not isinstance(data, dict) or "type" not in data or "value" not in data:
            raise ValidationError("Value must be a mapping with 'type' and 'value' keys")
        try:
            kind = ValueKind(data["type"])
        except ValueError:
            raise ValidationError(f"Unknown value type: {data['type']!r}") from None

        payload = data["value"]
        if kind == ValueKind.SCALAR:
            return ScalarValue(payload)
        elif kind == ValueKind.VECTOR:
            return VectorValue(payload)
        elif kind == ValueKind.RANGE:
            if not isinstance(payload, (list, tuple)) or len(payload) != 2:
                raise ValidationError("RANGE type requires an array of two numbers [min, max]")
            return RangeValue(payload[0], payload[1])
        elif kind == ValueKind.LABELED_SCALAR:
            if not isinstance(payload, dict):
                raise ValidationError("LABEL_NUMBER type requires {label: string, number: number}")
            return LabeledScalarValue(payload.get("label"), payload.get("number"))
        else:  # ValueKind.LABELED_VECTOR
            if not isinstance(payload, dict):
                raise ValidationError("LABEL_VECTOR type requires {label: string, vector: number[]}")
            return LabeledVectorValue(payload.get("label"), payload.get("vector"))


@dataclass(frozen=True)
class ScalarValue(ValueVariant):
    value: float

    def __post_init__(self):
        if not is_number(self.value):
            raise ValidationError("DOUBLE type requires a number value")
        object.__setattr__(self, "value", float(self.value))

    @property
    def kind(self) -> ValueKind:
        return ValueKind.SCALAR

    @property
    def payload(self) -> float:
        return self.value

    def to_columns(self) -> List[Union[str, float]]:
        return [self.value]

    def __str__(self) -> str:
        return f"{self.value:.4f}"


@dataclass(frozen=True)
class VectorValue(ValueVariant):
    components: Tuple[float, ...]

    def __post_init__(self):
        if not is_number_sequence(self.components):
            raise ValidationError("VECTOR type requires an array of numbers")
        object.__setattr__(self, "components", tuple(float(v) for v in self.components))

    @property
    def kind(self) -> ValueKind:
        return ValueKind.VECTOR

    @property
    def payload(self) -> List[float]:
        return list(self.components)

    def to_columns(self) -> List[Union[str, float]]:
        return list(self.components)

    def __str__(self) -> str:
        if len(self.components) in (2, 3):
            return f"({_format_components(self.components)})"
        return f"[{_format_components(self.components)}]"


@dataclass(frozen=True)
class RangeValue(ValueVariant):
    """
    Closed interval [low, high].
    Inverted intervals (low > high) are accepted and kept as given.
    """
    low: float
    high: float

    def __post_init__(self):
        if not (is_number(self.low) and is_number(self.high)):
            raise ValidationError("RANGE type requires an array of two numbers [min, max]")
        object.__setattr__(self, "low", float(self.low))
        object.__setattr__(self, "high", float(self.high))

    @property
    def kind(self) -> ValueKind:
        return ValueKind.RANGE

    @property
    def payload(self) -> List[float]:
        return [self.low, self.high]

    @property
    def midpoint(self) -> float:
        return (self.low + self.high) / 2

    def to_columns(self) -> List[Union[str, float]]:
        return [self.low, self.high]

    def __str__(self) -> str:
        return f"[{self.low:.4f}, {self.high:.4f}]"


@dataclass(frozen=True)
class LabeledScalarValue(ValueVariant):
    label: str
    number: float

    def __post_init__(self):
        if not isinstance(self.label, str) or not self.label or not is_number(self.number):
            raise ValidationError("LABEL_NUMBER type requires {label: string, number: number}")
        object.__setattr__(self, "number", float(self.number))

    @property
    def kind(self) -> ValueKind:
        return ValueKind.LABELED_SCALAR

    @property
    def payload(self) -> Dict[str, Any]:
        return {"label": self.label, "number": self.number}

    def to_columns(self) -> List[Union[str, float]]:
        return [self.label, self.number]

    def __str__(self) -> str:
        return f"{{{self.label}: {self.number:.4f}}}"


@dataclass(frozen=True)
class LabeledVectorValue(ValueVariant):
    label: str
    components: Tuple[float, ...]

    def __post_init__(self):
        if (not isinstance(self.label, str) or not self.label
                or not is_number_sequence(self.components)):
            raise ValidationError("LABEL_VECTOR type requires {label: string, vector: number[]}")
        object.__setattr__(self, "components", tuple(float(v) for v in self.components))

    @property
    def kind(self) -> ValueKind:
        return ValueKind.LABELED_VECTOR

    @property
    def payload(self) -> Dict[str, Any]:
        return {"label": self.label, "vector": list(self.components)}

    def to_columns(self) -> List[Union[str, float]]:
        return [self.label, *self.components]

    def __str__(self) -> str:
        if len(self.components) <= 3:
            return f"{{{self.label}: ({_format_components(self.components)})}}"
        return f"{{{self.label}: [{_format_components(self.components)}]}}"
