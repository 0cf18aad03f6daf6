"""
Tests for the YifanHuLayout object API.
"""

import math

import pytest

from hu_layout import Edge, InvalidConfigError, InvalidEdgeError, LayoutConfig, Node
from hu_layout.force import YifanHuLayout

# =============================================================================
# Test Fixtures
# =============================================================================


def create_simple_graph():
    """Create a simple graph with 3 nodes in a triangle."""
    nodes = [
        {"x": 0, "y": 0},
        {"x": 100, "y": 0},
        {"x": 50, "y": 100},
    ]
    edges = [
        {"source": 0, "target": 1},
        {"source": 1, "target": 2},
        {"source": 2, "target": 0},
    ]
    return nodes, edges


def create_linear_graph(n=5):
    """Create a linear chain of n nodes."""
    nodes = [{"x": i * 10, "y": (i % 2) * 5} for i in range(n)]
    edges = [{"source": i, "target": i + 1} for i in range(n - 1)]
    return nodes, edges


def create_star_graph(n=6):
    """Create a star graph with center node 0 and n-1 peripheral nodes."""
    nodes = [{"x": 0, "y": 0}]  # Center (hub)
    nodes.extend([{"x": i * 10, "y": i * 7} for i in range(1, n)])
    edges = [{"source": 0, "target": i} for i in range(1, n)]
    return nodes, edges


def create_far_pair():
    """Two connected nodes far apart."""
    return [{"x": 0, "y": 0}, {"x": 5000, "y": 0}], [{"source": 0, "target": 1}]


# =============================================================================
# Basic Functionality Tests
# =============================================================================


class TestYifanHuBasic:
    """Basic functionality tests for YifanHu layout."""

    def test_basic_layout(self):
        """Test basic layout runs without error."""
        nodes, edges = create_simple_graph()
        layout = YifanHuLayout(nodes=nodes, edges=edges, iteration_cap=50)
        layout.run()

        assert len(layout.nodes) == 3
        for node in layout.nodes:
            assert math.isfinite(node.x)
            assert math.isfinite(node.y)

    def test_nodes_move(self):
        """Test that nodes actually move during layout."""
        nodes, edges = create_simple_graph()
        initial_positions = [(n["x"], n["y"]) for n in nodes]

        layout = YifanHuLayout(nodes=nodes, edges=edges, iteration_cap=100)
        layout.run()

        moved = any(
            abs(node.x - initial_positions[i][0]) > 1 or abs(node.y - initial_positions[i][1]) > 1
            for i, node in enumerate(layout.nodes)
        )
        assert moved, "Nodes should move during layout"

    def test_empty_graph(self):
        """Test layout with no nodes."""
        layout = YifanHuLayout(nodes=[], edges=[])
        layout.run()
        assert len(layout.nodes) == 0
        assert layout.state.iteration == 1

    def test_single_node(self):
        """A lone node feels no force and stays put."""
        layout = YifanHuLayout(nodes=[{"x": 100, "y": 100}], edges=[])
        layout.run()
        assert layout.nodes[0].x == 100
        assert layout.nodes[0].y == 100
        assert layout.state.iteration == 1

    def test_indices_assigned(self):
        nodes, edges = create_simple_graph()
        layout = YifanHuLayout(nodes=nodes, edges=edges, iteration_cap=1)
        layout.run()
        assert [n.index for n in layout.nodes] == [0, 1, 2]

    def test_run_returns_self(self):
        nodes, edges = create_simple_graph()
        layout = YifanHuLayout(nodes=nodes, edges=edges, iteration_cap=5)
        assert layout.run() is layout

    def test_node_objects_updated_in_place(self):
        """Node objects passed in are the ones that get moved."""
        nodes = [Node(x=0, y=0), Node(x=1000, y=0)]
        layout = YifanHuLayout(nodes=nodes, edges=[Edge(0, 1)], iteration_cap=3)
        layout.run()
        assert layout.nodes[0] is nodes[0]
        assert nodes[0].x != 0


# =============================================================================
# Configuration Tests
# =============================================================================


class TestYifanHuConfiguration:
    """Tests for YifanHu configuration properties."""

    def test_defaults(self):
        layout = YifanHuLayout()
        assert layout.config == LayoutConfig()
        assert layout.optimal_distance == 16.0
        assert layout.repulsive_force_scale == 0.6
        assert layout.step_multiplier == 0.9
        assert layout.central_force_scale == 0.0
        assert layout.min_movement == 1.0

    def test_configuration_overrides(self):
        """Keyword overrides are applied on top of the config."""
        base = LayoutConfig(optimal_distance=20.0, step_multiplier=0.8)
        layout = YifanHuLayout(
            config=base,
            repulsive_force_scale=0.3,
            iteration_cap=200,
            min_movement=0.5,
            central_force_scale=0.1,
        )

        assert layout.optimal_distance == 20.0
        assert layout.step_multiplier == 0.8
        assert layout.repulsive_force_scale == 0.3
        assert layout.iteration_cap == 200
        assert layout.min_movement == 0.5
        assert layout.central_force_scale == 0.1

    def test_property_setters(self):
        """Test property setters work correctly."""
        layout = YifanHuLayout()

        layout.optimal_distance = 75.0
        assert layout.optimal_distance == 75.0

        layout.repulsive_force_scale = 0.5
        assert layout.repulsive_force_scale == 0.5

        layout.step_multiplier = 0.8
        assert layout.step_multiplier == 0.8

        layout.central_force_scale = 2.0
        assert layout.central_force_scale == 2.0

        layout.iteration_cap = 10
        assert layout.iteration_cap == 10

        layout.min_movement = 0.1
        assert layout.min_movement == 0.1

        layout.initial_step_length = 20.0
        assert layout.initial_step_length == 20.0

        layout.min_energy = 1e-3
        assert layout.min_energy == 1e-3

        assert layout.config.effective_distance == pytest.approx(75.0**4 / 0.5)

    def test_iteration_cap_none_makes_unbounded(self):
        layout = YifanHuLayout(nodes=[(0, 0)], iteration_cap=10)
        layout.iteration_cap = None
        assert layout.config.unbounded

        assert YifanHuLayout(config=LayoutConfig(iteration_cap=10), iteration_cap=None).config.unbounded

    def test_omitted_cap_keeps_config_cap(self):
        layout = YifanHuLayout(config=LayoutConfig(iteration_cap=10))
        assert layout.iteration_cap == 10

    def test_invalid_step_multiplier(self):
        with pytest.raises(InvalidConfigError, match="step_multiplier"):
            YifanHuLayout(step_multiplier=1.0)

        layout = YifanHuLayout()
        with pytest.raises(InvalidConfigError):
            layout.step_multiplier = 0.0

    def test_invalid_optimal_distance(self):
        with pytest.raises(InvalidConfigError, match="optimal_distance"):
            YifanHuLayout(optimal_distance=-1.0)

    def test_unbounded_without_thresholds_warns(self):
        layout = YifanHuLayout(nodes=[{"x": 0, "y": 0}], min_movement=0.0)
        with pytest.warns(UserWarning, match="Unbounded"):
            layout.run()


# =============================================================================
# Validation Tests
# =============================================================================


class TestYifanHuValidation:
    """Edge indices are checked by the object API before iterating."""

    def test_out_of_range_edge(self):
        layout = YifanHuLayout(
            nodes=[{"x": 0, "y": 0}, {"x": 1, "y": 1}],
            edges=[{"source": 0, "target": 5}],
        )
        with pytest.raises(InvalidEdgeError, match="out of bounds"):
            layout.run()

    def test_node_object_endpoints(self):
        """Edges may name the layout's own Node objects instead of indices."""
        a, b, c = Node(x=0, y=0), Node(x=100, y=0), Node(x=0, y=100)
        layout = YifanHuLayout(
            nodes=[a, b, c],
            edges=[{"source": a, "target": b}, (b, c)],
            iteration_cap=5,
        )
        assert [(e.first, e.second) for e in layout.edges] == [(0, 1), (1, 2)]

        layout.run()
        assert layout.state.iteration >= 1
        assert (a.x, a.y, b.x, b.y) != (0, 0, 100, 0)

    def test_validate_is_chainable(self):
        nodes, edges = create_simple_graph()
        layout = YifanHuLayout(nodes=nodes, edges=edges)
        assert layout.validate() is layout


# =============================================================================
# Event Tests
# =============================================================================


class TestYifanHuEvents:
    """Tests for event system."""

    def test_events_fired(self):
        """Test that events are fired during layout."""
        nodes, edges = create_simple_graph()
        events = []

        layout = YifanHuLayout(
            nodes=nodes,
            edges=edges,
            iteration_cap=10,
            on_start=lambda e: events.append(("start", e)),
            on_tick=lambda e: events.append(("tick", e)),
            on_end=lambda e: events.append(("end", e)),
        )
        layout.run()

        start_events = [e for e in events if e[0] == "start"]
        tick_events = [e for e in events if e[0] == "tick"]
        end_events = [e for e in events if e[0] == "end"]

        assert len(start_events) == 1
        assert len(tick_events) == layout.state.iteration
        assert len(end_events) == 1
        assert events[0][0] == "start"
        assert events[-1][0] == "end"

    def test_events_via_on_method(self):
        """Test that events work via the on() method."""
        nodes, edges = create_simple_graph()
        events = []

        layout = YifanHuLayout(nodes=nodes, edges=edges, iteration_cap=10)
        layout.on("start", lambda e: events.append(("start", e)))
        layout.on("tick", lambda e: events.append(("tick", e)))
        layout.on("end", lambda e: events.append(("end", e)))

        layout.run()

        assert len([e for e in events if e[0] == "start"]) == 1
        assert len([e for e in events if e[0] == "tick"]) > 0
        assert len([e for e in events if e[0] == "end"]) == 1

    def test_tick_payload(self):
        nodes, edges = create_far_pair()
        ticks = []
        layout = YifanHuLayout(nodes=nodes, edges=edges, iteration_cap=3, on_tick=ticks.append)
        layout.run()

        assert [t["iteration"] for t in ticks] == [1, 2, 3]
        for t in ticks:
            assert t["energy"] >= 0
            assert t["step"] > 0
            assert t["max_movement"] > 0

    def test_stop_from_tick_callback(self):
        """stop() inside on_tick ends the run after the current iteration."""
        nodes, edges = create_far_pair()
        layout = YifanHuLayout(nodes=nodes, edges=edges, iteration_cap=1000)

        def on_tick(event):
            if event["iteration"] == 3:
                layout.stop()

        layout.on("tick", on_tick)
        layout.run()

        assert layout.state.iteration == 3
        assert not layout.running


# =============================================================================
# Incremental Stepping Tests
# =============================================================================


class TestYifanHuTick:
    """Tests for driving the layout one tick at a time."""

    def test_manual_ticks(self):
        nodes, edges = create_far_pair()
        layout = YifanHuLayout(nodes=nodes, edges=edges, iteration_cap=4)

        results = [layout.tick() for _ in range(6)]

        assert results == [False, False, False, True, True, True]
        assert layout.state.iteration == 4
        assert layout.done

    def test_state_between_ticks(self):
        nodes, edges = create_far_pair()
        layout = YifanHuLayout(nodes=nodes, edges=edges, iteration_cap=100)
        layout.tick()
        first = layout.state.energy
        layout.tick()

        assert layout.state.iteration == 2
        assert layout.state.energy < first
        assert layout.state.progress == 2

    def test_reset(self):
        nodes, edges = create_far_pair()
        layout = YifanHuLayout(nodes=nodes, edges=edges, iteration_cap=2)
        layout.tick()
        layout.tick()
        assert layout.done

        layout.reset()
        assert layout.state is None
        assert not layout.done
        assert layout.tick() is False


# =============================================================================
# Reproducibility Tests
# =============================================================================


class TestYifanHuReproducibility:
    """Tests for reproducibility."""

    def test_deterministic_without_random_init(self):
        nodes, edges = create_linear_graph(6)
        layout1 = YifanHuLayout(nodes=[dict(n) for n in nodes], edges=edges, iteration_cap=100)
        layout2 = YifanHuLayout(nodes=[dict(n) for n in nodes], edges=edges, iteration_cap=100)
        layout1.run()
        layout2.run()

        assert [(n.x, n.y) for n in layout1.nodes] == [(n.x, n.y) for n in layout2.nodes]

    def test_random_seed(self):
        """Test that random seed produces deterministic initialization."""
        nodes, edges = create_simple_graph()

        layout1 = YifanHuLayout(
            nodes=[dict(n) for n in nodes],
            edges=edges,
            size=(500, 500),
            random_seed=42,
            iteration_cap=50,
        )
        layout1.run(random_init=True)

        layout2 = YifanHuLayout(
            nodes=[dict(n) for n in nodes],
            edges=edges,
            size=(500, 500),
            random_seed=42,
            iteration_cap=50,
        )
        layout2.run(random_init=True)

        for p1, p2 in zip(layout1.nodes, layout2.nodes):
            assert p1.x == pytest.approx(p2.x)
            assert p1.y == pytest.approx(p2.y)

    def test_center_graph(self):
        nodes, edges = create_star_graph(6)
        layout = YifanHuLayout(nodes=nodes, edges=edges, size=(400, 200), iteration_cap=20)
        layout.run(center_graph=True)

        xs = [n.x for n in layout.nodes]
        ys = [n.y for n in layout.nodes]
        assert (min(xs) + max(xs)) / 2 == pytest.approx(200.0)
        assert (min(ys) + max(ys)) / 2 == pytest.approx(100.0)


# =============================================================================
# Algorithm Tests
# =============================================================================


class TestYifanHuAlgorithm:
    """Tests for algorithm behavior through the object API."""

    def test_pair_settles_near_equilibrium(self):
        layout = YifanHuLayout(
            nodes=[{"x": 0, "y": 0}, {"x": 1000, "y": 0}],
            edges=[{"source": 0, "target": 1}],
            iteration_cap=10_000,
        )
        layout.run()

        d = abs(layout.nodes[1].x - layout.nodes[0].x)
        expected = 16.0**2 / 0.6**0.25
        assert d == pytest.approx(expected, abs=15.0)
        assert layout.state.iteration < 10_000

    def test_star_graph(self):
        nodes, edges = create_star_graph(6)
        layout = YifanHuLayout(nodes=nodes, edges=edges, iteration_cap=200)
        layout.run()

        assert len(layout.nodes) == 6
        for node in layout.nodes:
            assert math.isfinite(node.x)
            assert math.isfinite(node.y)

    def test_weighted_edge_pulls_closer(self):
        """A heavier edge settles at a shorter length than a light one."""

        def settle(weight):
            layout = YifanHuLayout(
                nodes=[{"x": 0, "y": 0}, {"x": 1000, "y": 0}],
                edges=[{"source": 0, "target": 1, "weight": weight}],
                iteration_cap=10_000,
            )
            layout.run()
            return abs(layout.nodes[1].x - layout.nodes[0].x)

        assert settle(16.0) < settle(1.0)
