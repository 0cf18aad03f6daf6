"""
Layout quality metrics.

Provides quantitative measures of a finished (or in-progress) layout:
- Energy: Total squared net force at the current positions
- Edge crossings: Number of intersecting edges
- Edge length variance / uniformity: How evenly edges are stretched

None of these move any node.
"""

from __future__ import annotations

import math
from typing import Any, Optional, Tuple

import numpy as np

from .config import DEFAULT_CONFIG, LayoutConfig
from .force.engine import net_force
from .types import Graph


def energy(graph: Graph, config: Optional[LayoutConfig] = None) -> float:
    """
    Sum of squared net-force magnitudes at the current positions.

    Unlike the energy reported by an iteration, every force here is evaluated
    against the same snapshot of positions.

    Args:
        graph: Positioned graph
        config: Layout configuration (defaults to DEFAULT_CONFIG)

    Returns:
        Energy (>= 0)
    """
    config = config or DEFAULT_CONFIG
    k = config.effective_distance
    return sum(net_force(graph, i, config, k).length_sq() for i in range(graph.node_count))


def edge_lengths(graph: Graph) -> np.ndarray:
    """Lengths of all non-loop edges, in edge order."""
    positions = graph.positions()
    pairs = [(e.first, e.second) for e in graph.edges if e.first != e.second]
    if not pairs:
        return np.zeros(0, dtype=np.float64)

    idx = np.asarray(pairs, dtype=np.int64)
    diff = positions[idx[:, 0]] - positions[idx[:, 1]]
    return np.sqrt(np.sum(diff * diff, axis=1))


def edge_length_variance(graph: Graph) -> float:
    """
    Variance of edge lengths.

    Lower variance indicates more uniform edge lengths.
    """
    lengths = edge_lengths(graph)
    if lengths.size == 0:
        return 0.0
    return float(np.var(lengths))


def edge_length_uniformity(graph: Graph) -> float:
    """
    Compute edge length uniformity (0-1, higher is better).

    Returns:
        1 - (std_dev / mean), clamped to [0, 1]
    """
    lengths = edge_lengths(graph)
    if lengths.size == 0:
        return 1.0

    mean = float(np.mean(lengths))
    if mean == 0:
        return 0.0

    return max(0.0, min(1.0, 1.0 - float(np.std(lengths)) / mean))


def edge_crossings(graph: Graph) -> int:
    """
    Count the number of edge crossings in the layout.

    Two edges cross if their line segments intersect (excluding
    shared endpoints). Self-loops never cross.

    Time Complexity: O(m^2) where m = number of edges
    """
    segments = [
        (e.first, e.second) for e in graph.edges if e.first != e.second
    ]
    nodes = graph.nodes
    crossings = 0

    for i in range(len(segments)):
        s1, t1 = segments[i]
        for j in range(i + 1, len(segments)):
            s2, t2 = segments[j]
            # Skip if edges share an endpoint
            if s1 == s2 or s1 == t2 or t1 == s2 or t1 == t2:
                continue
            if _segments_intersect(
                nodes[s1].position.as_tuple(),
                nodes[t1].position.as_tuple(),
                nodes[s2].position.as_tuple(),
                nodes[t2].position.as_tuple(),
            ):
                crossings += 1

    return crossings


def _segments_intersect(
    p1: Tuple[float, float],
    p2: Tuple[float, float],
    p3: Tuple[float, float],
    p4: Tuple[float, float],
) -> bool:
    """Check if line segments (p1,p2) and (p3,p4) intersect."""

    def ccw(a: Tuple[float, float], b: Tuple[float, float], c: Tuple[float, float]) -> bool:
        return (c[1] - a[1]) * (b[0] - a[0]) > (b[1] - a[1]) * (c[0] - a[0])

    return ccw(p1, p3, p4) != ccw(p2, p3, p4) and ccw(p1, p2, p3) != ccw(p1, p2, p4)


def layout_quality_summary(graph: Graph, config: Optional[LayoutConfig] = None) -> dict[str, Any]:
    """
    Compute a summary of layout quality metrics.

    Returns:
        Dictionary with:
        - energy: Total squared net force
        - edge_crossings: Number of edge crossings
        - mean_edge_length: Mean non-loop edge length (nan if none)
        - edge_length_variance: Variance of edge lengths
        - edge_length_uniformity: Uniformity score (0-1)
    """
    lengths = edge_lengths(graph)
    return {
        "energy": energy(graph, config),
        "edge_crossings": edge_crossings(graph),
        "mean_edge_length": float(np.mean(lengths)) if lengths.size else math.nan,
        "edge_length_variance": edge_length_variance(graph),
        "edge_length_uniformity": edge_length_uniformity(graph),
    }


__all__ = [
    "energy",
    "edge_lengths",
    "edge_length_variance",
    "edge_length_uniformity",
    "edge_crossings",
    "layout_quality_summary",
]
