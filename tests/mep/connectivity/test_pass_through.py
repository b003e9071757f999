# File: tests/mep/connectivity/test_pass_through.py
"""Tests for single-hop resolution across fittings and accessories."""

from src.shared_coord_exporter.core.mep_model import HostCategory
from src.shared_coord_exporter.mep.connectivity.connector_graph import ConnectorGraph
from src.shared_coord_exporter.mep.connectivity.pass_through import resolve_through


class TestResolveThrough:
    """Tests for resolve_through."""

    def test_resolves_far_side(self, pipe_elbow_valve_graph):
        assert resolve_through(pipe_elbow_valve_graph, "elbow-1", "pipe-1") == "valve-1"

    def test_resolves_back_to_source_side_from_far_end(self, pipe_elbow_valve_graph):
        assert resolve_through(pipe_elbow_valve_graph, "elbow-1", "valve-1") == "pipe-1"

    def test_not_a_pass_through_part(self, pump_pipe_tank_graph):
        assert resolve_through(pump_pipe_tank_graph, "pipe-1", "pump-1") is None

    def test_unknown_accessory(self, pipe_elbow_valve_graph):
        assert resolve_through(pipe_elbow_valve_graph, "ghost", "pipe-1") is None

    def test_no_connector_manager(self, make_fitting):
        graph = ConnectorGraph()
        graph.add_element(make_fitting("f"), has_connector_manager=False)
        assert resolve_through(graph, "f", "src") is None

    def test_no_connectors(self, make_fitting):
        graph = ConnectorGraph()
        graph.add_element(make_fitting("f"))
        assert resolve_through(graph, "f", "src") is None

    def test_dead_end(self, make_pipe, make_fitting):
        """A cap connected only to the source resolves to nothing."""
        graph = ConnectorGraph()
        graph.add_element(make_pipe("p"))
        graph.add_element(make_fitting("cap", "Pipe Cap"))
        graph.connect(graph.add_connector("p"), graph.add_connector("cap"))
        assert resolve_through(graph, "cap", "p") is None

    def test_skips_self_references(self, make_pipe, make_fitting):
        graph = ConnectorGraph()
        graph.add_element(make_pipe("p"))
        graph.add_element(make_fitting("tee"))
        graph.add_element(make_pipe("q"))
        tee_a = graph.add_connector("tee")
        tee_b = graph.add_connector("tee")
        graph.add_reference(tee_a, tee_b)
        graph.connect(tee_a, graph.add_connector("p"))
        graph.connect(tee_b, graph.add_connector("q"))
        assert resolve_through(graph, "tee", "p") == "q"

    def test_first_candidate_wins(self, make_pipe, make_fitting):
        """A tee returns the first branch in connector order."""
        graph = ConnectorGraph()
        for uid in ("main", "branch-a", "branch-b"):
            graph.add_element(make_pipe(uid))
        graph.add_element(make_fitting("tee", "Tee", HostCategory.PIPE_FITTING))
        for uid in ("main", "branch-a", "branch-b"):
            graph.connect(graph.add_connector("tee"), graph.add_connector(uid))
        assert resolve_through(graph, "tee", "main") == "branch-a"

    def test_single_hop_returns_next_fitting(self, make_pipe, make_fitting):
        graph = ConnectorGraph()
        graph.add_element(make_pipe("p"))
        graph.add_element(make_fitting("a1"))
        graph.add_element(make_fitting("a2"))
        graph.connect(graph.add_connector("p"), graph.add_connector("a1"))
        graph.connect(graph.add_connector("a1"), graph.add_connector("a2"))
        assert resolve_through(graph, "a1", "p") == "a2"
