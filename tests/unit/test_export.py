"""Unit tests for the export module."""

import json

import networkx as nx
import pytest

from sankeylayout.export import LayoutExporter


@pytest.fixture
def chain_result(layout_engine, chain_data):
    return layout_engine.layout(chain_data["nodes"], chain_data["links"])


class TestLayoutExporter:
    """Tests for LayoutExporter."""

    def test_to_json_round_trips_to_dict(self, chain_result):
        text = LayoutExporter().to_json(chain_result)
        assert json.loads(text) == chain_result.to_dict()

    def test_compact_json(self, chain_result):
        text = LayoutExporter(indent=None).to_json(chain_result)
        assert "\n" not in text

    def test_save_json(self, chain_result, tmp_path):
        path = tmp_path / "layout.json"
        LayoutExporter().save_json(chain_result, str(path))

        data = json.loads(path.read_text(encoding="utf-8"))
        assert [n["name"] for n in data["nodes"]] == ["A", "B", "C"]

    def test_to_networkx(self, chain_result):
        graph = LayoutExporter().to_networkx(chain_result)

        assert isinstance(graph, nx.MultiDiGraph)
        assert graph.number_of_nodes() == 3
        assert graph.nodes[2]["x"] == 290
        assert graph.nodes[0]["data"] == {"name": "A"}
        assert graph.graph["vertical_scale"] == chain_result.vertical_scale
        assert graph.edges[0, 1, 0]["value"] == 10

    def test_parallel_links_survive(self, layout_engine):
        result = layout_engine.layout(
            [{}, {}],
            [
                {"source": 0, "target": 1, "value": 1},
                {"source": 0, "target": 1, "value": 3},
            ],
        )
        graph = LayoutExporter().to_networkx(result)

        assert graph.number_of_edges(0, 1) == 2
        assert graph.edges[0, 1, 1]["sy"] == pytest.approx(result.links[1].sy)
