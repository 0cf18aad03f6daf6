"""
Common types for the layout engine.

This module provides the fundamental types used by the engine and the
object API:
- Node: Graph vertex holding a mutable position
- Edge: Weighted connection between two node indices
- Graph: Borrowed view over a node list and an edge list
- EventType: Layout lifecycle events
- Event: Event payload for callbacks
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any, Optional, Sequence, TypedDict, Union

import numpy as np

from .vector import Vector2


class EventType(IntEnum):
    """
    Layout lifecycle events.

    - start: Layout iterations have begun
    - tick: Fired once per iteration (for animation)
    - end: Layout has converged or hit its iteration cap
    """

    start = 0
    tick = 1
    end = 2


class Event(TypedDict, total=False):
    """Event payload passed to event listeners."""

    type: EventType
    iteration: int
    step: float
    energy: float
    max_movement: float


class Node:
    """
    Graph node with a mutable position.

    Attributes:
        position: Current position as a Vector2
        index: Index in the nodes list (set by the object API)
    """

    def __init__(self, **kwargs: Any) -> None:
        """Initialize node from x/y or a position vector."""
        position = kwargs.pop("position", None)
        if position is None:
            position = Vector2(float(kwargs.pop("x", 0.0)), float(kwargs.pop("y", 0.0)))
        elif not isinstance(position, Vector2):
            position = Vector2(float(position[0]), float(position[1]))
        self.position: Vector2 = position
        self.index: Optional[int] = kwargs.pop("index", None)

        # Copy any additional custom properties
        for key, value in kwargs.items():
            if not hasattr(self, key):
                setattr(self, key, value)

    @property
    def x(self) -> float:
        return self.position.x

    @x.setter
    def x(self, value: float) -> None:
        self.position = Vector2(float(value), self.position.y)

    @property
    def y(self) -> float:
        return self.position.y

    @y.setter
    def y(self, value: float) -> None:
        self.position = Vector2(self.position.x, float(value))

    def __repr__(self) -> str:
        return f"Node(index={self.index}, x={self.x:.2f}, y={self.y:.2f})"


class Edge:
    """
    Weighted edge between two node indices.

    Self-loops (first == second) are accepted and contribute no force.
    Parallel edges are not merged: each one adds its own attraction.

    Attributes:
        first: Index of the first endpoint
        second: Index of the second endpoint
        weight: Non-negative attraction multiplier (default 1.0)
    """

    def __init__(self, first: int, second: int, weight: float = 1.0, **kwargs: Any) -> None:
        """
        Initialize edge.

        Raises:
            ValueError: If an endpoint is None or weight is negative
        """
        if first is None:
            raise ValueError("Edge first endpoint cannot be None")
        if second is None:
            raise ValueError("Edge second endpoint cannot be None")
        if weight is None:
            weight = 1.0
        if weight < 0:
            raise ValueError(f"Edge weight must be >= 0, got {weight}")

        self.first = int(first)
        self.second = int(second)
        self.weight = float(weight)

        for key, value in kwargs.items():
            if not hasattr(self, key):
                setattr(self, key, value)

    @property
    def is_loop(self) -> bool:
        return self.first == self.second

    def other(self, index: int) -> Optional[int]:
        """Endpoint opposite to index, or None if the edge is not incident."""
        if self.first == index:
            return self.second
        if self.second == index:
            return self.first
        return None

    def __repr__(self) -> str:
        return f"Edge({self.first} -> {self.second}, weight={self.weight})"


NodeLike = Union[Node, dict[str, Any], Sequence[float], Any]
"""Input type for nodes: Node objects, dicts with x/y, (x, y) pairs, or objects with x/y."""

EdgeLike = Union[Edge, dict[str, Any], Sequence[Any], Any]
"""Input type for edges: Edge objects, dicts, (first, second[, weight]) tuples, or objects."""


def to_node(data: NodeLike) -> Node:
    """Coerce a NodeLike into a Node (Node instances are returned as-is)."""
    if isinstance(data, Node):
        return data
    if isinstance(data, dict):
        return Node(**data)
    if isinstance(data, (tuple, list)):
        return Node(x=data[0], y=data[1])
    # Generic object - copy position attributes
    return Node(x=getattr(data, "x", 0.0), y=getattr(data, "y", 0.0))


def to_edge(data: EdgeLike) -> Edge:
    """Coerce an EdgeLike into an Edge (Edge instances are returned as-is)."""
    if isinstance(data, Edge):
        return data
    if isinstance(data, dict):
        fields = dict(data)
        first = fields.pop("first", fields.pop("source", None))
        second = fields.pop("second", fields.pop("target", None))
        return Edge(_endpoint(first), _endpoint(second), **fields)
    if isinstance(data, (tuple, list)):
        first, second, *rest = data
        return Edge(_endpoint(first), _endpoint(second), *rest)
    first = getattr(data, "first", getattr(data, "source", None))
    second = getattr(data, "second", getattr(data, "target", None))
    weight = getattr(data, "weight", None)
    return Edge(_endpoint(first), _endpoint(second), weight)


def _endpoint(value: Any) -> Any:
    """Resolve a Node endpoint to its index; ints pass through."""
    if isinstance(value, Node):
        return value.index
    return value


class Graph:
    """
    Borrowed view over a node list and an edge list.

    The graph does not copy the sequences it is given; positions are written
    back into the caller's Node objects.

    Example:
        graph = Graph.build(
            nodes=[(0, 0), (100, 0), {"x": 50, "y": 80}],
            edges=[(0, 1), {"source": 1, "target": 2, "weight": 2.0}],
        )
    """

    def __init__(self, nodes: Sequence[Node], edges: Sequence[Edge]) -> None:
        self.nodes = nodes
        self.edges = edges

    @classmethod
    def build(
        cls,
        nodes: Sequence[NodeLike] = (),
        edges: Sequence[EdgeLike] = (),
    ) -> Graph:
        """
        Build a graph, coercing dicts, tuples and objects into Node/Edge.

        Nodes without an index get their position in the list, so edges may
        name Node objects as endpoints.
        """
        node_list = [to_node(n) for n in nodes]
        for i, node in enumerate(node_list):
            if node.index is None:
                node.index = i
        return cls(node_list, [to_edge(e) for e in edges])

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    def positions(self) -> np.ndarray:
        """Snapshot of node positions as an (n, 2) float array."""
        out = np.zeros((len(self.nodes), 2), dtype=np.float64)
        for i, node in enumerate(self.nodes):
            out[i, 0] = node.position.x
            out[i, 1] = node.position.y
        return out

    def set_positions(self, positions: np.ndarray) -> None:
        """Write an (n, 2) array back into the node positions."""
        if positions.shape != (len(self.nodes), 2):
            raise ValueError(
                f"positions must have shape ({len(self.nodes)}, 2), got {positions.shape}"
            )
        for node, (x, y) in zip(self.nodes, positions):
            node.position = Vector2(float(x), float(y))

    def __repr__(self) -> str:
        return f"Graph(nodes={len(self.nodes)}, edges={len(self.edges)})"


__all__ = [
    "EventType",
    "Event",
    "Node",
    "Edge",
    "Graph",
    "NodeLike",
    "EdgeLike",
    "to_node",
    "to_edge",
]
