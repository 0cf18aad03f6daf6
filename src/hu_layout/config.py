"""
Layout configuration.

LayoutConfig is an immutable value holding every knob of a run. Defaults are
the canonical set:

    repulsive_force_scale = 0.6
    optimal_distance      = 16
    initial_step_length   = 100
    iteration_cap         = sys.maxsize (unbounded)
    min_movement          = 1
    central_force_scale   = 0 (disabled)
    step_multiplier       = 0.9
    min_energy            = 0 (disabled)
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any, Optional

from .validation import (
    validate_iteration_cap,
    validate_non_negative,
    validate_positive,
    validate_step_multiplier,
)


class UnsetType(Enum):
    token = 0


UNSET = UnsetType.token
"""Marks an override that was not given (None is a real value for iteration_cap)."""


@dataclass(frozen=True)
class LayoutConfig:
    """
    Parameters for a layout run.

    Attributes:
        repulsive_force_scale: Strength of pairwise repulsion (> 0)
        optimal_distance: Target spacing between connected nodes (> 0)
        initial_step_length: Displacement per node in the first iteration (> 0)
        iteration_cap: Maximum number of iterations; None means unbounded
        min_movement: Stop once the largest displacement of an iteration
            falls below this (>= 0)
        central_force_scale: Pull toward the origin, 0 disables it (>= 0)
        step_multiplier: Step shrink factor t in (0, 1); the step grows by 1/t
        min_energy: Stop once the iteration energy falls below this (>= 0)

    Raises:
        InvalidConfigError: If any field is out of range
    """

    repulsive_force_scale: float = 0.6
    optimal_distance: float = 16.0
    initial_step_length: float = 100.0
    iteration_cap: Optional[int] = sys.maxsize
    min_movement: float = 1.0
    central_force_scale: float = 0.0
    step_multiplier: float = 0.9
    min_energy: float = 0.0

    def __post_init__(self) -> None:
        # frozen dataclass: normalized values go through object.__setattr__
        normalized = {
            "repulsive_force_scale": validate_positive(
                "repulsive_force_scale", self.repulsive_force_scale
            ),
            "optimal_distance": validate_positive("optimal_distance", self.optimal_distance),
            "initial_step_length": validate_positive(
                "initial_step_length", self.initial_step_length
            ),
            "iteration_cap": validate_iteration_cap(self.iteration_cap),
            "min_movement": validate_non_negative("min_movement", self.min_movement),
            "central_force_scale": validate_non_negative(
                "central_force_scale", self.central_force_scale
            ),
            "step_multiplier": validate_step_multiplier(self.step_multiplier),
            "min_energy": validate_non_negative("min_energy", self.min_energy),
        }
        for name, value in normalized.items():
            object.__setattr__(self, name, value)

    @property
    def effective_distance(self) -> float:
        """
        The constant K fed into both force formulas.

        K = optimal_distance^4 / repulsive_force_scale. It depends only on
        static configuration, so drivers compute it once per run.
        """
        return self.optimal_distance**4 / self.repulsive_force_scale

    @property
    def unbounded(self) -> bool:
        """True if the iteration cap is effectively infinite."""
        return self.iteration_cap == sys.maxsize

    def with_overrides(self, **overrides: Any) -> LayoutConfig:
        """
        Return a copy with the given fields replaced.

        UNSET values are ignored, and so is None except for iteration_cap,
        where None means unbounded.
        """
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise TypeError(f"Unknown LayoutConfig field(s): {', '.join(sorted(unknown))}")
        changes = {
            k: v
            for k, v in overrides.items()
            if v is not UNSET and (v is not None or k in _NULLABLE_FIELDS)
        }
        return replace(self, **changes) if changes else self


_NULLABLE_FIELDS = frozenset({"iteration_cap"})

DEFAULT_CONFIG = LayoutConfig()


__all__ = ["LayoutConfig", "DEFAULT_CONFIG", "UNSET"]
