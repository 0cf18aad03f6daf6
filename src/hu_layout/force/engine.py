"""
Iteration driver for the spring-electrical layout.

Two entry points share the same per-iteration pass:

- layout_graph(): run to convergence or the iteration cap
- begin() + step(): drive one iteration at a time, inspecting LayoutState
  between calls (e.g. for animation)

Nodes are updated sequentially within a pass: node i sees the positions that
nodes 0..i-1 were moved to earlier in the same pass. Repulsion is evaluated
between every pair of nodes, O(n^2) per iteration.

Example:
    graph = Graph.build(nodes=[(0, 0), (1000, 0)], edges=[(0, 1)])
    state = layout_graph(graph, LayoutConfig(iteration_cap=10_000))
    print(state.iteration, graph.nodes[1].position)
"""

from __future__ import annotations

import logging
from typing import Optional

from ..config import DEFAULT_CONFIG, LayoutConfig
from ..types import Graph
from ..vector import ZERO, Vector2
from .model import attractive_force, central_force, repulsive_force
from .step_control import LayoutState

logger = logging.getLogger(__name__)


def begin(
    config: Optional[LayoutConfig] = None, *, state: Optional[LayoutState] = None
) -> LayoutState:
    """
    Initialize the state of a layout run.

    Args:
        config: Layout configuration (defaults to DEFAULT_CONFIG)
        state: Existing state to reset in place; a new one is created if None

    Returns:
        State with step = initial_step_length, energy = inf, progress = 0
    """
    config = config or DEFAULT_CONFIG
    if state is None:
        return LayoutState(step=config.initial_step_length)
    state.reset(config.initial_step_length)
    return state


def net_force(graph: Graph, index: int, config: LayoutConfig, k: float) -> Vector2:
    """
    Net force on one node at the current positions.

    Sums attraction over incident edges (self-loops skipped), repulsion from
    every other node, and the central pull when enabled.
    """
    nodes = graph.nodes
    position = nodes[index].position
    force = ZERO

    for edge in graph.edges:
        if edge.first == edge.second:
            continue
        other = edge.other(index)
        if other is not None:
            force = force + attractive_force(position, nodes[other].position, edge.weight, k)

    repulsion = config.repulsive_force_scale
    for j, other_node in enumerate(nodes):
        if j == index:
            continue
        force = force + repulsive_force(position, other_node.position, repulsion, k)

    if config.central_force_scale:
        force = force + central_force(position, config.central_force_scale, k)

    return force


def step(
    state: LayoutState,
    graph: Graph,
    config: Optional[LayoutConfig] = None,
    k: Optional[float] = None,
) -> LayoutState:
    """
    Run exactly one iteration: move every node once, then adapt the step.

    Edge endpoints must be valid node indices; they are not checked here
    (see validate_edge_indices).

    Args:
        state: Run state from begin(), mutated in place
        graph: Graph whose node positions are updated in place
        config: Layout configuration (defaults to DEFAULT_CONFIG)
        k: Precomputed config.effective_distance, to avoid recomputing it per call

    Returns:
        The same state object
    """
    config = config or DEFAULT_CONFIG
    if k is None:
        k = config.effective_distance

    displacement_step = state.step
    energy = 0.0
    max_movement = 0.0

    for i, node in enumerate(graph.nodes):
        position = node.position
        force = net_force(graph, i, config, k)

        # Direction from the force, magnitude from the step controller
        displacement = force.normalize() * displacement_step
        node.position = position + displacement

        energy += force.length_sq()
        moved = displacement.length()
        if moved > max_movement:
            max_movement = moved

    state.update_step(energy, config.step_multiplier)
    state.last_max_movement = max_movement
    state.iteration += 1
    return state


def is_converged(state: LayoutState, config: Optional[LayoutConfig] = None) -> bool:
    """
    True if the last iteration met a convergence criterion.

    Converged means the largest displacement fell below min_movement, no node
    moved at all, or the energy fell below min_energy.
    """
    config = config or DEFAULT_CONFIG
    if state.iteration == 0:
        return False
    return (
        state.last_max_movement < config.min_movement
        or state.last_max_movement == 0.0
        or state.energy < config.min_energy
    )


def is_capped(state: LayoutState, config: Optional[LayoutConfig] = None) -> bool:
    """True if the iteration cap has been reached."""
    config = config or DEFAULT_CONFIG
    return state.iteration >= config.iteration_cap


def layout_graph(
    graph: Graph,
    config: Optional[LayoutConfig] = None,
    state: Optional[LayoutState] = None,
) -> LayoutState:
    """
    Lay out a graph in place, iterating until convergence or the cap.

    Args:
        graph: Graph whose node positions are updated in place
        config: Layout configuration (defaults to DEFAULT_CONFIG)
        state: Optional caller-owned state to reuse; it is reset first

    Returns:
        The final state. Compare state.iteration with config.iteration_cap to
        tell convergence from cap exhaustion.
    """
    config = config or DEFAULT_CONFIG
    k = config.effective_distance
    state = begin(config, state=state)

    logger.debug(
        "Starting layout: %d nodes, %d edges, K=%.6g, step=%.6g",
        graph.node_count,
        graph.edge_count,
        k,
        state.step,
    )

    while True:
        step(state, graph, config, k)
        logger.debug(
            "Iteration %d: energy=%.6g step=%.6g max_movement=%.6g",
            state.iteration,
            state.energy,
            state.step,
            state.last_max_movement,
        )

        if is_converged(state, config):
            logger.debug("Layout converged after %d iterations", state.iteration)
            break
        if is_capped(state, config):
            logger.debug("Layout stopped at iteration cap %d", config.iteration_cap)
            break

    return state


__all__ = ["begin", "net_force", "step", "is_converged", "is_capped", "layout_graph"]
