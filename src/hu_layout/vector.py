"""
Planar vector arithmetic.

Vector2 is an immutable (x, y) value type. The module-level functions mirror
the methods so force code can be written either way.

normalize() is the single place where near-zero lengths are handled: anything
shorter than EPSILON normalizes to the zero vector instead of dividing by ~0.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

# Single-precision machine epsilon, used as the "too short to have a direction"
# threshold for normalization and repulsion.
EPSILON: float = float(np.finfo(np.float32).eps)


@dataclass(frozen=True)
class Vector2:
    """A 2D vector with value semantics."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vector2) -> Vector2:
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2) -> Vector2:
        return Vector2(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> Vector2:
        return Vector2(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def __neg__(self) -> Vector2:
        return Vector2(-self.x, -self.y)

    def length_sq(self) -> float:
        """Squared Euclidean length."""
        return self.x * self.x + self.y * self.y

    def length(self) -> float:
        """Euclidean length."""
        return math.sqrt(self.length_sq())

    def normalize(self) -> Vector2:
        """
        Unit vector in the same direction.

        Returns:
            The zero vector if this vector is shorter than EPSILON.
        """
        size = self.length()
        if size < EPSILON:
            return ZERO
        return self * (1.0 / size)

    def is_finite(self) -> bool:
        """True if both components are finite."""
        return math.isfinite(self.x) and math.isfinite(self.y)

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


ZERO = Vector2(0.0, 0.0)


def add(a: Vector2, b: Vector2) -> Vector2:
    return a + b


def subtract(a: Vector2, b: Vector2) -> Vector2:
    return a - b


def scale(a: Vector2, factor: float) -> Vector2:
    return a * factor


def length_sq(a: Vector2) -> float:
    return a.length_sq()


def length(a: Vector2) -> float:
    return a.length()


def normalize(a: Vector2) -> Vector2:
    return a.normalize()


__all__ = [
    "EPSILON",
    "ZERO",
    "Vector2",
    "add",
    "subtract",
    "scale",
    "length_sq",
    "length",
    "normalize",
]
