"""Unit tests for the graph module."""

import math
import numbers

import pytest

from sankeylayout.graph import (
    CyclicGraphError,
    InvalidReferenceError,
    InvalidValueError,
    SankeyError,
    SankeyGraph,
    build_graph,
    validate_link_values,
)


class FlowLink:
    """Link given as an object with attributes rather than a mapping."""

    def __init__(self, source, target, value):
        self.source = source
        self.target = target
        self.value = value


class WideIndex:
    """Integral that is not a built-in int, like numpy.int64."""

    def __init__(self, value):
        self.value = value

    def __int__(self):
        return self.value

    def __index__(self):
        return self.value


numbers.Integral.register(WideIndex)


class TestBuildGraph:
    """Tests for build_graph()."""

    def test_adjacency_from_indices(self, chain_data):
        """Links are appended to their endpoints' adjacency lists."""
        graph = build_graph(chain_data["nodes"], chain_data["links"])

        assert isinstance(graph, SankeyGraph)
        assert len(graph) == 3
        assert graph.nodes[0].outgoing == [0]
        assert graph.nodes[0].incoming == []
        assert graph.nodes[1].incoming == [0]
        assert graph.nodes[1].outgoing == [1]
        assert graph.nodes[2].incoming == [1]
        assert graph.nodes[2].outgoing == []

    def test_links_hold_indices(self, chain_data):
        """Link endpoints are normalized to integer node indices."""
        graph = build_graph(chain_data["nodes"], chain_data["links"])
        assert graph.edge_list() == [(0, 1), (1, 2)]

    def test_node_reference_endpoints(self):
        """Endpoints may be the caller's node objects themselves."""
        nodes = [{"name": "A"}, {"name": "B"}]
        links = [{"source": nodes[0], "target": nodes[1], "value": 4}]

        graph = build_graph(nodes, links)

        assert graph.links[0].source == 0
        assert graph.links[0].target == 1

    def test_equal_but_distinct_node_is_not_a_reference(self):
        """References are matched by identity, not equality."""
        nodes = [{"name": "A"}, {"name": "B"}]
        links = [{"source": {"name": "A"}, "target": 1, "value": 4}]

        with pytest.raises(InvalidReferenceError):
            build_graph(nodes, links)

    def test_integral_index_endpoints(self):
        """Any integral type counts as an index and is stored as an int."""
        links = [{"source": WideIndex(0), "target": WideIndex(1), "value": 3}]

        graph = build_graph([{}, {}], links)

        assert graph.edge_list() == [(0, 1)]
        assert type(graph.links[0].source) is int
        assert type(graph.links[0].target) is int
        assert graph.nodes[1].incoming == [0]

    def test_object_links(self):
        """Links may expose source/target/value as attributes."""
        graph = build_graph(["a", "b"], [FlowLink(0, 1, 2.5)])
        assert graph.links[0].value == 2.5

    def test_node_values(self, energy_data):
        """Node value is the larger of outgoing and incoming totals."""
        graph = build_graph(energy_data["nodes"], energy_data["links"])
        values = [node.value for node in graph.nodes]
        assert values == [30, 35, 12, 60, 15, 35, 20, 22]

    def test_unbalanced_node_takes_larger_total(self):
        """A node with more inflow than outflow keeps the inflow value."""
        links = [
            {"source": 0, "target": 1, "value": 10},
            {"source": 1, "target": 2, "value": 4},
        ]
        graph = build_graph([{}, {}, {}], links)
        assert graph.nodes[1].value == 10

    def test_isolated_node_has_zero_value(self):
        graph = build_graph([{}, {}, {}], [{"source": 0, "target": 1, "value": 3}])
        assert graph.nodes[2].value == 0

    def test_input_is_deep_copied(self, chain_data):
        """Node and link data are private copies."""
        graph = build_graph(chain_data["nodes"], chain_data["links"])
        graph.nodes[0].data["name"] = "changed"
        graph.links[0].data["value"] = 99

        assert chain_data["nodes"][0]["name"] == "A"
        assert chain_data["links"][0]["value"] == 10

    def test_sources_and_sinks(self, chain_data):
        graph = build_graph(chain_data["nodes"], chain_data["links"])
        assert [n.index for n in graph.get_sources()] == [0]
        assert [n.index for n in graph.get_sinks()] == [2]

    def test_empty_graph(self):
        graph = build_graph([], [])
        assert len(graph) == 0
        assert graph.links == []


class TestInvalidReferences:
    """Tests for unresolvable link endpoints."""

    def test_source_index_out_of_range(self):
        with pytest.raises(InvalidReferenceError, match="source index 5"):
            build_graph([{}, {}], [{"source": 5, "target": 1, "value": 1}])

    def test_negative_target_index(self):
        with pytest.raises(InvalidReferenceError, match="target index -1"):
            build_graph([{}, {}], [{"source": 0, "target": -1, "value": 1}])

    def test_missing_endpoint(self):
        with pytest.raises(InvalidReferenceError, match="missing target"):
            build_graph([{}, {}], [{"source": 0, "value": 1}])

    def test_bool_is_not_an_index(self):
        with pytest.raises(InvalidReferenceError):
            build_graph([{}, {}], [{"source": True, "target": 0, "value": 1}])

    def test_integral_index_out_of_range(self):
        with pytest.raises(InvalidReferenceError, match="target index 2"):
            build_graph([{}, {}], [{"source": 0, "target": WideIndex(2), "value": 1}])

    def test_is_a_sankey_error(self):
        with pytest.raises(SankeyError):
            build_graph([{}], [{"source": 0, "target": 3, "value": 1}])


class TestCyclicGraphError:
    """Tests for the CyclicGraphError payload."""

    def test_cycle_defaults_to_empty(self):
        assert CyclicGraphError("cycle").cycle == []

    def test_cycle_is_kept(self):
        error = CyclicGraphError("cycle", [(0, 1), (1, 0)])
        assert error.cycle == [(0, 1), (1, 0)]
        assert isinstance(error, SankeyError)


class TestInvalidValues:
    """Tests for link value validation."""

    @pytest.mark.parametrize("value", [-1, -0.5, math.nan, math.inf, "10", True])
    def test_rejected_values(self, value):
        with pytest.raises(InvalidValueError):
            build_graph([{}, {}], [{"source": 0, "target": 1, "value": value}])

    def test_missing_value(self):
        with pytest.raises(InvalidValueError, match="missing value"):
            build_graph([{}, {}], [{"source": 0, "target": 1}])

    def test_values_checked_before_references(self):
        """A bad value is reported even when a later link has a bad reference."""
        links = [
            {"source": 0, "target": 1, "value": -3},
            {"source": 0, "target": 9, "value": 1},
        ]
        with pytest.raises(InvalidValueError):
            build_graph([{}, {}], links)

    def test_zero_is_allowed(self):
        assert validate_link_values([{"value": 0}, {"value": 2}]) == [0.0, 2.0]
