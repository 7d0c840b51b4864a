"""
Numeric intervals used for variable bounds and constraint bounds.

An interval is closed on finite ends and open on infinite ones:
    Interval(1, 5)                 -> [1, 5]
    Interval.lower_bounded(25)     -> [25, +inf)
    Interval.upper_bounded(0)      -> (-inf, 0]
    Interval.equality(40)          -> [40, 40]
"""

from dataclasses import dataclass
from typing import Tuple
import math

from .errors import InvalidInterval, InvalidScale

INFINITY = float("inf")


@dataclass(frozen=True)
class Interval:
    """Numeric range [lower, upper] with possibly infinite ends."""

    lower: float = -INFINITY
    upper: float = INFINITY

    def __post_init__(self):
        lower = float(self.lower)
        upper = float(self.upper)
        if math.isnan(lower) or math.isnan(upper):
            raise InvalidInterval(f"Interval bounds must not be NaN: [{lower}, {upper}]")
        if lower > upper:
            raise InvalidInterval(f"Invalid interval: lower ({lower}) > upper ({upper})")
        object.__setattr__(self, "lower", lower)
        object.__setattr__(self, "upper", upper)

    @classmethod
    def unbounded(cls) -> "Interval":
        return cls(-INFINITY, INFINITY)

    @classmethod
    def lower_bounded(cls, lower: float) -> "Interval":
        """[lower, +inf)"""
        return cls(lower, INFINITY)

    @classmethod
    def upper_bounded(cls, upper: float) -> "Interval":
        """(-inf, upper]"""
        return cls(-INFINITY, upper)

    @classmethod
    def equality(cls, value: float) -> "Interval":
        return cls(value, value)

    @classmethod
    def between(cls, lower: float, upper: float) -> "Interval":
        return cls(lower, upper)

    @property
    def is_equality(self) -> bool:
        return self.lower == self.upper

    @property
    def is_bounded_below(self) -> bool:
        return self.lower > -INFINITY

    @property
    def is_bounded_above(self) -> bool:
        return self.upper < INFINITY

    @property
    def is_unbounded(self) -> bool:
        return not (self.is_bounded_below or self.is_bounded_above)

    def distance(self, value: float) -> float:
        """How far value lies outside the interval (0 when inside, inf for NaN)."""
        if math.isnan(value):
            return INFINITY
        if value < self.lower:
            return self.lower - value
        if value > self.upper:
            return value - self.upper
        return 0.0

    def contains(self, value: float, tolerance: float = 0.0) -> bool:
        return self.distance(value) <= tolerance

    def project(self, value: float) -> float:
        """Closest point of the interval to value."""
        return min(max(value, self.lower), self.upper)

    def scaled(self, scale: float) -> "Interval":
        """Interval multiplied by a positive scale factor."""
        if not (scale > 0 and math.isfinite(scale)):
            raise InvalidScale(f"Scale must be positive and finite, got {scale}")
        return Interval(self.lower * scale, self.upper * scale)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.lower, self.upper)

    def __str__(self) -> str:
        left = "(" if not self.is_bounded_below else "["
        right = ")" if not self.is_bounded_above else "]"
        return f"{left}{self.lower:g}, {self.upper:g}{right}"
