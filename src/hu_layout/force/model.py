"""
Spring-electrical force model.

All functions are pure: they take positions and constants and return a new
Vector2. K is the effective distance from LayoutConfig.effective_distance.

- Attraction along an edge:  (p2 - p1) * weight * |p2 - p1| / K
- Repulsion between a pair: -(p2 - p1) * scale * K / |p2 - p1|^3
- Central pull: attraction toward the origin with weight = central scale
"""

from __future__ import annotations

from ..vector import EPSILON, ZERO, Vector2


def attractive_force(p1: Vector2, p2: Vector2, weight: float, k: float) -> Vector2:
    """
    Spring force on p1 pulling it toward p2.

    Magnitude grows with the square of the separation, scaled by weight.
    A weight of 0 gives the zero vector.
    """
    diff = p2 - p1
    return diff * (weight * diff.length() / k)


def repulsive_force(p1: Vector2, p2: Vector2, scale: float, k: float) -> Vector2:
    """
    Electrical force on p1 pushing it away from p2.

    Coincident points (closer than EPSILON) exert no force.
    """
    diff = p2 - p1
    dist = diff.length()
    if dist < EPSILON:
        return ZERO
    return diff * (-scale * k / (dist * dist * dist))


def central_force(p: Vector2, scale: float, k: float) -> Vector2:
    """Pull toward the origin; scale 0 disables it."""
    if scale == 0:
        return ZERO
    return attractive_force(p, ZERO, scale, k)


__all__ = ["attractive_force", "repulsive_force", "central_force"]
