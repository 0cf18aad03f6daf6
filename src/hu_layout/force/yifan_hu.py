"""
Yifan Hu spring-electrical layout, object API.

Based on the paper:
"Efficient and High Quality Force-Directed Graph Drawing" by Yifan Hu (2005)

This is the single-level variant: the spring-electrical force model with the
adaptive step length control from the paper, but without multilevel
coarsening or Barnes-Hut approximation. Repulsion is computed for every pair
of nodes.
"""

from __future__ import annotations

import warnings
from typing import Any, Callable, Optional, Sequence, Union

from ..base import IterativeLayout, SizeType
from ..config import UNSET, LayoutConfig, UnsetType
from ..types import EdgeLike, Event, EventType, NodeLike
from .engine import begin, is_capped, is_converged, step
from .step_control import LayoutState


class YifanHuLayout(IterativeLayout):
    """
    Yifan Hu force-directed graph layout.

    Example:
        layout = YifanHuLayout(
            nodes=[{'x': 0, 'y': 0}, {'x': 500, 'y': 0}, {'x': 0, 'y': 500}],
            edges=[{'source': 0, 'target': 1}, {'source': 1, 'target': 2}],
            iteration_cap=1000,
        )
        layout.run()

        for node in layout.nodes:
            print(f"Node {node.index}: ({node.x}, {node.y})")
    """

    def __init__(
        self,
        *,
        nodes: Optional[Sequence[NodeLike]] = None,
        edges: Optional[Sequence[EdgeLike]] = None,
        size: SizeType = (1000.0, 1000.0),
        random_seed: Optional[int] = None,
        on_start: Optional[Callable[[Optional[Event]], None]] = None,
        on_tick: Optional[Callable[[Optional[Event]], None]] = None,
        on_end: Optional[Callable[[Optional[Event]], None]] = None,
        config: Optional[LayoutConfig] = None,
        # Overrides applied on top of config
        repulsive_force_scale: Optional[float] = None,
        optimal_distance: Optional[float] = None,
        initial_step_length: Optional[float] = None,
        iteration_cap: Union[int, None, UnsetType] = UNSET,
        min_movement: Optional[float] = None,
        central_force_scale: Optional[float] = None,
        step_multiplier: Optional[float] = None,
        min_energy: Optional[float] = None,
    ) -> None:
        """
        Initialize Yifan Hu layout.

        Args:
            nodes: List of nodes
            edges: List of edges
            size: (width, height) used when run(random_init=True)
            random_seed: Random seed for reproducible initialization
            on_start: Callback for start event
            on_tick: Callback for tick event
            on_end: Callback for end event
            config: Base configuration (defaults to LayoutConfig())
            repulsive_force_scale: Strength of pairwise repulsion
            optimal_distance: Target spacing between connected nodes
            initial_step_length: Displacement per node in the first iteration
            iteration_cap: Maximum number of iterations; None means unbounded
            min_movement: Convergence threshold on the largest displacement
            central_force_scale: Pull toward the origin (0 disables)
            step_multiplier: Step decay/growth ratio t in (0, 1)
            min_energy: Convergence threshold on the iteration energy

        Raises:
            InvalidConfigError: If any parameter is out of range
        """
        super().__init__(
            nodes=nodes,
            edges=edges,
            size=size,
            random_seed=random_seed,
            on_start=on_start,
            on_tick=on_tick,
            on_end=on_end,
        )
        self._config: LayoutConfig = (config or LayoutConfig()).with_overrides(
            repulsive_force_scale=repulsive_force_scale,
            optimal_distance=optimal_distance,
            initial_step_length=initial_step_length,
            iteration_cap=iteration_cap,
            min_movement=min_movement,
            central_force_scale=central_force_scale,
            step_multiplier=step_multiplier,
            min_energy=min_energy,
        )

        # Internal state (initialized in run() or the first tick())
        self._state: Optional[LayoutState] = None
        self._k: float = self._config.effective_distance

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def config(self) -> LayoutConfig:
        """Get the layout configuration."""
        return self._config

    @config.setter
    def config(self, value: LayoutConfig) -> None:
        """Replace the configuration; takes effect on the next run()."""
        self._config = value
        self._k = value.effective_distance

    @property
    def state(self) -> Optional[LayoutState]:
        """Run state (step, energy, progress, last_max_movement, iteration)."""
        return self._state

    @property
    def optimal_distance(self) -> float:
        """Get target spacing between connected nodes."""
        return self._config.optimal_distance

    @optimal_distance.setter
    def optimal_distance(self, value: float) -> None:
        self.config = self._config.with_overrides(optimal_distance=value)

    @property
    def repulsive_force_scale(self) -> float:
        """Get strength of pairwise repulsion."""
        return self._config.repulsive_force_scale

    @repulsive_force_scale.setter
    def repulsive_force_scale(self, value: float) -> None:
        self.config = self._config.with_overrides(repulsive_force_scale=value)

    @property
    def step_multiplier(self) -> float:
        """Get step decay/growth ratio t."""
        return self._config.step_multiplier

    @step_multiplier.setter
    def step_multiplier(self, value: float) -> None:
        self.config = self._config.with_overrides(step_multiplier=value)

    @property
    def central_force_scale(self) -> float:
        """Get pull toward the origin."""
        return self._config.central_force_scale

    @central_force_scale.setter
    def central_force_scale(self, value: float) -> None:
        self.config = self._config.with_overrides(central_force_scale=value)

    @property
    def iteration_cap(self) -> int:
        """Get maximum number of iterations (sys.maxsize when unbounded)."""
        return self._config.iteration_cap  # type: ignore[return-value]

    @iteration_cap.setter
    def iteration_cap(self, value: Optional[int]) -> None:
        self.config = self._config.with_overrides(iteration_cap=value)

    @property
    def min_movement(self) -> float:
        """Get convergence threshold on the largest displacement."""
        return self._config.min_movement

    @min_movement.setter
    def min_movement(self, value: float) -> None:
        self.config = self._config.with_overrides(min_movement=value)

    @property
    def initial_step_length(self) -> float:
        """Get displacement per node in the first iteration."""
        return self._config.initial_step_length

    @initial_step_length.setter
    def initial_step_length(self, value: float) -> None:
        self.config = self._config.with_overrides(initial_step_length=value)

    @property
    def min_energy(self) -> float:
        """Get convergence threshold on the iteration energy."""
        return self._config.min_energy

    @min_energy.setter
    def min_energy(self, value: float) -> None:
        self.config = self._config.with_overrides(min_energy=value)

    # -------------------------------------------------------------------------
    # Layout Implementation
    # -------------------------------------------------------------------------

    def run(self, **kwargs: Any) -> "YifanHuLayout":
        """
        Run the layout to convergence or the iteration cap.

        Keyword Args:
            random_init: Randomize positions inside size first (default: False)
            center_graph: Center the result on the canvas (default: False)

        Returns:
            self for chaining

        Raises:
            InvalidEdgeError: If an edge references an invalid node index
        """
        self._initialize_indices()
        self.validate()

        if kwargs.get("random_init", False):
            self._initialize_positions()

        config = self._config
        if config.unbounded and config.min_movement == 0 and config.min_energy == 0:
            warnings.warn(
                "Unbounded iteration_cap with min_movement=0 and min_energy=0: "
                "the layout only stops once no node moves",
                stacklevel=2,
            )

        self._k = config.effective_distance
        self._state = begin(config, state=self._state)

        self.trigger({"type": EventType.start, "step": self._state.step, "iteration": 0})

        self.kick()

        if kwargs.get("center_graph", False):
            self._center_graph()

        self.trigger(
            {
                "type": EventType.end,
                "step": self._state.step,
                "energy": self._state.energy,
                "iteration": self._state.iteration,
                "max_movement": self._state.last_max_movement,
            }
        )
        return self

    def tick(self) -> bool:
        """
        Perform one iteration of the layout.

        Can be called without run() for manual stepping; the state is
        initialized on the first call.

        Returns:
            True if converged or capped, False otherwise.
        """
        if self._state is None:
            self._initialize_indices()
            self._state = begin(self._config)
        state = self._state

        if self.done:
            return True

        step(state, self.graph, self._config, self._k)

        self.trigger(
            {
                "type": EventType.tick,
                "step": state.step,
                "energy": state.energy,
                "iteration": state.iteration,
                "max_movement": state.last_max_movement,
            }
        )
        return self.done

    @property
    def done(self) -> bool:
        """True once the current run has converged or hit the iteration cap."""
        if self._state is None:
            return False
        return is_converged(self._state, self._config) or is_capped(self._state, self._config)

    def reset(self) -> "YifanHuLayout":
        """Discard run state so the next tick() starts a fresh run."""
        self._state = None
        return self


__all__ = ["YifanHuLayout"]
