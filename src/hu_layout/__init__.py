"""
hu-layout: Spring-electrical graph layout with adaptive step control.

Computes 2D node positions by iteratively minimizing a potential made of
edge attraction and pairwise repulsion, following the single-level form of
Yifan Hu's force-directed algorithm.

Two ways to use it:
- Functional: layout_graph(graph, config) or begin()/step() for one
  iteration at a time
- Object API: YifanHuLayout(nodes=..., edges=...).run()
"""

__version__ = "0.1.0"

# Base classes for the object API
from .base import BaseLayout, IterativeLayout

# Configuration
from .config import DEFAULT_CONFIG, LayoutConfig

# Force-directed engine
from .force import (
    LayoutState,
    YifanHuLayout,
    adaptive_step,
    attractive_force,
    begin,
    central_force,
    is_capped,
    is_converged,
    layout_graph,
    net_force,
    repulsive_force,
    step,
)

# Metrics for layout quality evaluation
from .metrics import (
    edge_crossings,
    edge_length_uniformity,
    edge_length_variance,
    edge_lengths,
    energy,
    layout_quality_summary,
)
from .types import Edge, Event, EventType, Graph, Node

# Validation utilities
from .validation import (
    InvalidCanvasSizeError,
    InvalidConfigError,
    InvalidEdgeError,
    ValidationError,
    validate_edge_indices,
)
from .vector import EPSILON, Vector2

__all__ = [
    # Version
    "__version__",
    # Types
    "Vector2",
    "EPSILON",
    "Node",
    "Edge",
    "Graph",
    "Event",
    "EventType",
    # Configuration
    "LayoutConfig",
    "DEFAULT_CONFIG",
    # Base classes
    "BaseLayout",
    "IterativeLayout",
    # Engine
    "attractive_force",
    "repulsive_force",
    "central_force",
    "adaptive_step",
    "LayoutState",
    "begin",
    "step",
    "net_force",
    "is_converged",
    "is_capped",
    "layout_graph",
    "YifanHuLayout",
    # Metrics
    "energy",
    "edge_lengths",
    "edge_length_variance",
    "edge_length_uniformity",
    "edge_crossings",
    "layout_quality_summary",
    # Validation
    "ValidationError",
    "InvalidConfigError",
    "InvalidEdgeError",
    "InvalidCanvasSizeError",
    "validate_edge_indices",
]
