"""
Base classes for the object-oriented layout API.

- BaseLayout: Event system, node/edge management, position initialization
- IterativeLayout: Tick loop with an externally stoppable run
"""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable, Optional, Sequence

if TYPE_CHECKING:
    from typing_extensions import Self

from .types import (
    Edge,
    EdgeLike,
    Event,
    EventType,
    Graph,
    Node,
    NodeLike,
    to_edge,
    to_node,
)
from .validation import validate_canvas_size, validate_edge_indices
from .vector import Vector2

SizeType = Sequence[float]


class BaseLayout(ABC):
    """
    Abstract base class for layout algorithms.

    Provides shared infrastructure:
    - Event system (start/tick/end events)
    - Node/edge management via properties
    - Optional random position initialization

    Unlike the functional engine, a layout object owns its node and edge
    lists. Node objects passed in are kept as-is, so their positions are
    still updated in place.
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
    ) -> None:
        """
        Initialize layout.

        Args:
            nodes: List of nodes (Node objects, dicts, (x, y) pairs, or objects)
            edges: List of edges (Edge objects, dicts, or tuples)
            size: (width, height) of the area used by random initialization
            random_seed: Random seed for reproducible initialization
            on_start: Callback for start event
            on_tick: Callback for tick event
            on_end: Callback for end event
        """
        self._nodes: list[Node] = []
        self._edges: list[Edge] = []
        self._canvas_size: tuple[float, float] = (1000.0, 1000.0)
        self._events: dict[EventType, Callable[[Optional[Event]], None]] = {}
        self._random_seed: Optional[int] = random_seed

        if nodes is not None:
            self.nodes = nodes
        if edges is not None:
            self.edges = edges
        self.size = size

        if on_start:
            self._events[EventType.start] = on_start
        if on_tick:
            self._events[EventType.tick] = on_tick
        if on_end:
            self._events[EventType.end] = on_end

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def nodes(self) -> list[Node]:
        """Get the list of nodes."""
        return self._nodes

    @nodes.setter
    def nodes(self, value: Sequence[NodeLike]) -> None:
        """Set nodes from a sequence of Node objects, dicts, pairs, or objects."""
        self._nodes = [to_node(n) for n in value]

    @property
    def edges(self) -> list[Edge]:
        """Get the list of edges."""
        return self._edges

    @edges.setter
    def edges(self, value: Sequence[EdgeLike]) -> None:
        """
        Set edges from a sequence of Edge objects, dicts, or tuples.

        Endpoints may be node indices or Node objects from this layout's nodes.
        """
        # Node endpoints resolve through node.index
        self._initialize_indices()
        self._edges = [to_edge(e) for e in value]

    @property
    def graph(self) -> Graph:
        """Graph view over this layout's nodes and edges."""
        return Graph(self._nodes, self._edges)

    @property
    def size(self) -> tuple[float, float]:
        """Get random-initialization area as (width, height)."""
        return self._canvas_size

    @size.setter
    def size(self, value: SizeType) -> None:
        """
        Set random-initialization area.

        Raises:
            InvalidCanvasSizeError: If width or height is not positive.
        """
        self._canvas_size = validate_canvas_size(value)

    @property
    def random_seed(self) -> Optional[int]:
        """Get random seed for reproducible initialization."""
        return self._random_seed

    @random_seed.setter
    def random_seed(self, value: Optional[int]) -> None:
        self._random_seed = value

    # -------------------------------------------------------------------------
    # Event System
    # -------------------------------------------------------------------------

    def on(self, event: EventType | str, callback: Callable[[Optional[Event]], None]) -> Self:
        """
        Subscribe to a layout event.

        Args:
            event: Event type (EventType enum or string name)
            callback: Function to call when event fires

        Returns:
            self (for chaining)
        """
        if isinstance(event, str):
            event = EventType[event]
        self._events[event] = callback
        return self

    def trigger(self, event: Event) -> None:
        """Trigger an event, calling the registered callback."""
        event_type = event.get("type")
        if event_type is not None and event_type in self._events:
            self._events[event_type](event)

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def validate(self) -> Self:
        """
        Check that every edge references a valid node index.

        Called automatically by run() but can be called early for fail-fast
        behavior.

        Raises:
            InvalidEdgeError: If any edge references an invalid node index.
        """
        if self._edges:
            validate_edge_indices(self._edges, len(self._nodes), strict=True)
        return self

    # -------------------------------------------------------------------------
    # Lifecycle Methods
    # -------------------------------------------------------------------------

    @abstractmethod
    def run(self, **kwargs: Any) -> Self:
        """Run the layout algorithm and return self."""
        pass

    def stop(self) -> Self:
        """Stop the layout (for iterative layouts)."""
        return self

    # -------------------------------------------------------------------------
    # Utility Methods
    # -------------------------------------------------------------------------

    def _initialize_indices(self) -> None:
        """Assign indices to nodes that don't have them."""
        for i, node in enumerate(self._nodes):
            if node.index is None:
                node.index = i

    def _initialize_positions(self) -> None:
        """Place every node uniformly at random inside the canvas."""
        rng = random.Random(self._random_seed)
        w, h = self._canvas_size
        for node in self._nodes:
            node.position = Vector2(rng.uniform(0, w), rng.uniform(0, h))

    def _center_graph(self) -> None:
        """Translate the layout so its bounding box is centered on the canvas."""
        if not self._nodes:
            return

        min_x = min(n.x for n in self._nodes)
        max_x = max(n.x for n in self._nodes)
        min_y = min(n.y for n in self._nodes)
        max_y = max(n.y for n in self._nodes)

        offset = Vector2(
            self._canvas_size[0] / 2 - (min_x + max_x) / 2,
            self._canvas_size[1] / 2 - (min_y + max_y) / 2,
        )
        for node in self._nodes:
            node.position = node.position + offset


class IterativeLayout(BaseLayout):
    """
    Base class for iterative/animated layouts.

    Subclasses implement tick(); kick() calls it until it reports completion
    or stop() is called (typically from an on_tick callback).
    """

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._running: bool = False

    @property
    def running(self) -> bool:
        """True while kick() is iterating."""
        return self._running

    @abstractmethod
    def tick(self) -> bool:
        """
        Perform one iteration of the layout.

        Returns:
            True if converged/done, False if more iterations needed.
        """
        pass

    def kick(self) -> None:
        """Run tick() repeatedly until it reports completion or stop() is called."""
        self._running = True
        while self._running:
            if self.tick():
                break
        self._running = False

    def stop(self) -> Self:
        """Stop the layout after the current tick."""
        self._running = False
        return self


__all__ = [
    "BaseLayout",
    "IterativeLayout",
    "SizeType",
]
