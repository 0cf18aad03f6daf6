"""
Adaptive step length control.

The step length is the displacement every node takes per iteration. It is
adjusted by a simple feedback rule on the total energy:

- five consecutive improving iterations grow the step by 1 / t
- any non-improving iteration shrinks it by t at once

where t is LayoutConfig.step_multiplier in (0, 1).
"""

from __future__ import annotations

from dataclasses import dataclass

# Consecutive improving iterations needed before the step grows.
PROGRESS_STREAK = 5


def adaptive_step(
    progress: int,
    step: float,
    multiplier: float,
    last_energy: float,
    energy: float,
) -> tuple[int, float]:
    """
    Compute the next (progress, step) pair.

    Args:
        progress: Consecutive improving iterations so far
        step: Current step length
        multiplier: Step multiplier t in (0, 1)
        last_energy: Energy of the previous iteration
        energy: Energy of the iteration just completed

    Returns:
        Tuple of (new_progress, new_step)
    """
    if energy < last_energy:
        progress += 1
        if progress >= PROGRESS_STREAK:
            return 0, step / multiplier
        return progress, step
    return 0, step * multiplier


@dataclass
class LayoutState:
    """
    Mutable state of one layout run, owned by the caller.

    Attributes:
        step: Current displacement magnitude
        energy: Total energy of the last iteration (inf before the first)
        progress: Consecutive energy-improving iterations
        last_max_movement: Largest single-node displacement in the last iteration
        iteration: Number of iterations completed
    """

    step: float
    energy: float = float("inf")
    progress: int = 0
    last_max_movement: float = 0.0
    iteration: int = 0

    def reset(self, initial_step: float) -> None:
        """Return to the initial state of a run."""
        self.step = initial_step
        self.energy = float("inf")
        self.progress = 0
        self.last_max_movement = 0.0
        self.iteration = 0

    def update_step(self, energy: float, multiplier: float) -> None:
        """Feed a freshly computed energy into the controller and store it."""
        self.progress, self.step = adaptive_step(
            self.progress, self.step, multiplier, self.energy, energy
        )
        self.energy = energy


__all__ = ["PROGRESS_STREAK", "adaptive_step", "LayoutState"]
