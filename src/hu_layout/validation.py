"""
Input validation utilities for the layout engine.

The engine itself never validates: edge indices out of range are a caller
precondition. These helpers let callers check inputs before a run, and are
used by LayoutConfig and the object API to reject bad parameters with
descriptive exceptions.
"""

from __future__ import annotations

import math
import numbers
import sys
from typing import Any, Optional, Sequence


class ValidationError(ValueError):
    """Base exception for layout validation errors."""

    pass


class InvalidConfigError(ValidationError):
    """Raised when a layout configuration value is out of range."""

    pass


class InvalidEdgeError(ValidationError):
    """Raised when an edge references invalid nodes."""

    pass


class InvalidCanvasSizeError(ValidationError):
    """Raised when the random-initialization area is invalid."""

    pass


def validate_canvas_size(size: Sequence[float]) -> tuple[float, float]:
    """
    Validate canvas size dimensions.

    Args:
        size: [width, height] sequence

    Returns:
        Validated (width, height) tuple

    Raises:
        InvalidCanvasSizeError: If dimensions are invalid
    """
    if len(size) < 2:
        raise InvalidCanvasSizeError(
            f"Canvas size must have 2 elements [width, height], got {len(size)}"
        )

    width, height = float(size[0]), float(size[1])

    if width <= 0:
        raise InvalidCanvasSizeError(f"Canvas width must be positive, got {width}")
    if height <= 0:
        raise InvalidCanvasSizeError(f"Canvas height must be positive, got {height}")

    return width, height


def validate_positive(name: str, value: float) -> float:
    """
    Validate that a parameter is a finite number > 0.

    Returns:
        The value as a float

    Raises:
        InvalidConfigError: If value <= 0 or not finite
    """
    value = float(value)
    if not math.isfinite(value) or value <= 0:
        raise InvalidConfigError(f"{name} must be positive, got {value}")
    return value


def validate_non_negative(name: str, value: float) -> float:
    """
    Validate that a parameter is a finite number >= 0.

    Raises:
        InvalidConfigError: If value < 0 or not finite
    """
    value = float(value)
    if not math.isfinite(value) or value < 0:
        raise InvalidConfigError(f"{name} must be >= 0, got {value}")
    return value


def validate_step_multiplier(value: float) -> float:
    """
    Validate the step multiplier lies strictly between 0 and 1.

    Raises:
        InvalidConfigError: If value not in (0, 1)
    """
    value = float(value)
    if not 0.0 < value < 1.0:
        raise InvalidConfigError(f"step_multiplier must be in (0, 1), got {value}")
    return value


def validate_iteration_cap(value: Optional[float]) -> int:
    """
    Validate the iteration cap.

    Args:
        value: Positive whole iteration count; None or +inf for unbounded

    Returns:
        The cap as an int (sys.maxsize when unbounded)

    Raises:
        InvalidConfigError: If value is not a whole number >= 1
    """
    if value is None:
        return sys.maxsize
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidConfigError(f"iteration_cap must be an integer, got {value!r}")
    if not isinstance(value, numbers.Integral):
        if value == math.inf:
            return sys.maxsize
        if not math.isfinite(value) or not float(value).is_integer():
            raise InvalidConfigError(f"iteration_cap must be an integer, got {value}")
    if value < 1:
        raise InvalidConfigError(f"iteration_cap must be >= 1, got {value}")
    return min(int(value), sys.maxsize)


def validate_edge_indices(
    edges: Sequence[Any],
    node_count: int,
    strict: bool = True,
) -> list[tuple[int, str]]:
    """
    Validate that all edge endpoints are within bounds.

    Args:
        edges: Sequence of Edge objects or dicts with first/second
        node_count: Number of nodes in the graph
        strict: If True, raises on invalid. If False, returns list of issues.

    Returns:
        List of (edge_index, issue_description) tuples

    Raises:
        InvalidEdgeError: If strict=True and invalid edges found
    """
    issues: list[tuple[int, str]] = []

    for i, edge in enumerate(edges):
        for attr, alias in (("first", "source"), ("second", "target")):
            idx = _get_index(edge, attr, alias)
            if idx is None:
                issues.append((i, f"Edge {i}: {attr} is None"))
            elif idx < 0 or idx >= node_count:
                issues.append(
                    (i, f"Edge {i}: {attr} index {idx} out of bounds [0, {node_count})")
                )

        weight = _get_weight(edge)
        if weight is not None and weight < 0:
            issues.append((i, f"Edge {i}: weight {weight} is negative"))

    if strict and issues:
        msg = "Invalid edges:\n" + "\n".join(issue[1] for issue in issues)
        raise InvalidEdgeError(msg)

    return issues


def _get_index(obj: Any, attr: str, alias: str) -> Optional[int]:
    """Extract an endpoint index from an Edge, dict, or object."""
    if isinstance(obj, dict):
        val = obj.get(attr, obj.get(alias))
    else:
        val = getattr(obj, attr, getattr(obj, alias, None))

    if val is None:
        return None
    if isinstance(val, numbers.Integral) and not isinstance(val, bool):
        return int(val)
    if hasattr(val, "index") and val.index is not None:
        return int(val.index)
    return None


def _get_weight(obj: Any) -> Optional[float]:
    if isinstance(obj, dict):
        return obj.get("weight")
    return getattr(obj, "weight", None)


__all__ = [
    "ValidationError",
    "InvalidConfigError",
    "InvalidEdgeError",
    "InvalidCanvasSizeError",
    "validate_canvas_size",
    "validate_positive",
    "validate_non_negative",
    "validate_step_multiplier",
    "validate_iteration_cap",
    "validate_edge_indices",
]
