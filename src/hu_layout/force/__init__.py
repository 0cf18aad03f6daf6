"""
Spring-electrical force-directed layout (Yifan Hu).

- model: Attractive, repulsive and central force functions
- step_control: Adaptive step length controller and run state
- engine: Functional drivers (begin/step for incremental use, layout_graph for batch)
- yifan_hu: Object API with start/tick/end events
"""

from .engine import begin, is_capped, is_converged, layout_graph, net_force, step
from .model import attractive_force, central_force, repulsive_force
from .step_control import PROGRESS_STREAK, LayoutState, adaptive_step
from .yifan_hu import YifanHuLayout

__all__ = [
    "attractive_force",
    "repulsive_force",
    "central_force",
    "PROGRESS_STREAK",
    "LayoutState",
    "adaptive_step",
    "begin",
    "step",
    "net_force",
    "is_converged",
    "is_capped",
    "layout_graph",
    "YifanHuLayout",
]
