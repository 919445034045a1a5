"""Unit tests for the models module."""

import pytest

from sankeylayout.models import LayoutConfig, SankeyLink, SankeyNode


class TestSankeyNode:
    """Tests for SankeyNode dataclass."""

    def test_node_defaults(self):
        node = SankeyNode(index=0)
        assert node.value == 0.0
        assert node.column == 0
        assert node.outgoing == []
        assert node.incoming == []
        assert node.is_sink
        assert node.is_source

    def test_center(self):
        node = SankeyNode(index=0, y=10, dy=30)
        assert node.center == 25

    def test_adjacency_lists_not_shared(self):
        a, b = SankeyNode(index=0), SankeyNode(index=1)
        a.outgoing.append(0)
        assert b.outgoing == []


class TestSankeyLink:
    """Tests for SankeyLink dataclass."""

    def test_link_defaults(self):
        link = SankeyLink(index=0, source=0, target=1, value=5)
        assert link.dy == 0.0
        assert link.sy == 0.0
        assert link.ty == 0.0
        assert link.data is None


class TestLayoutConfig:
    """Tests for LayoutConfig.validate()."""

    def test_valid_defaults(self):
        LayoutConfig(width=300, height=100).validate()

    def test_zero_iterations_allowed(self):
        LayoutConfig(width=300, height=100, iterations=0).validate()

    @pytest.mark.parametrize(
        "field, value, message",
        [
            ("width", 0, "positive"),
            ("width", float("nan"), "finite"),
            ("height", float("inf"), "finite"),
            ("node_width", float("nan"), "finite"),
            ("node_padding", float("inf"), "finite"),
            ("node_width", -1, "node_width"),
            ("node_padding", -1, "node_padding"),
            ("iterations", True, "integer"),
            ("link_curvature", -0.1, "link_curvature"),
        ],
    )
    def test_invalid(self, field, value, message):
        config = LayoutConfig(width=300, height=100)
        setattr(config, field, value)
        with pytest.raises(ValueError, match=message):
            config.validate()
