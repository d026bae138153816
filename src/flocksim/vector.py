from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator

_NORMALIZE_EPSILON = 1e-9


@dataclass(slots=True)
class Vec2:
    """Mutable 2D vector.

    Arithmetic methods update the receiver and return it so calls can be
    chained. ``clone()`` is the only method that allocates.
    """

    x: float = 0.0
    y: float = 0.0

    @staticmethod
    def zero() -> "Vec2":
        return Vec2(0.0, 0.0)

    @staticmethod
    def from_angle(angle: float, length: float = 1.0) -> "Vec2":
        return Vec2(math.cos(angle) * length, math.sin(angle) * length)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def set(self, x: float, y: float) -> "Vec2":
        self.x = x
        self.y = y
        return self

    def add(self, other: "Vec2") -> "Vec2":
        self.x += other.x
        self.y += other.y
        return self

    def subtract(self, other: "Vec2") -> "Vec2":
        self.x -= other.x
        self.y -= other.y
        return self

    def scale(self, scalar: float) -> "Vec2":
        self.x *= scalar
        self.y *= scalar
        return self

    def divide(self, scalar: float) -> "Vec2":
        if scalar == 0:
            raise ZeroDivisionError("cannot divide a vector by zero")
        self.x /= scalar
        self.y /= scalar
        return self

    def magnitude_squared(self) -> float:
        return self.x * self.x + self.y * self.y

    def magnitude(self) -> float:
        return math.sqrt(self.magnitude_squared())

    def normalize(self) -> "Vec2":
        mag = self.magnitude()
        if mag < _NORMALIZE_EPSILON:
            # No direction; collapse to zero rather than produce NaN.
            return self.set(0.0, 0.0)
        return self.divide(mag)

    def clamp_magnitude(self, max_length: float) -> "Vec2":
        if max_length <= 0:
            return self.set(0.0, 0.0)
        if self.magnitude_squared() <= max_length * max_length:
            return self
        return self.normalize().scale(max_length)

    def clone(self) -> "Vec2":
        return Vec2(self.x, self.y)

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)
