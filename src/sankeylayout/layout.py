"""
Main Sankey layout module.

Runs the layout pipeline:
1. Graph - resolve links, derive node values
2. Breadth - assign columns and x coordinates
3. Depth - choose the vertical scale, seed and legalize positions
4. Relaxation - pull nodes toward their neighbours' weighted centers
5. Routing - order and stack links at every node
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from .breadth import BreadthAssigner
from .depth import DepthInitializer, group_by_column
from .graph import SankeyGraph, build_graph
from .models import LayoutConfig, SankeyLink, SankeyNode
from .relaxation import ForceRelaxer
from .router import LinkPath, LinkRouter
from .tracer import LayoutTrace

logger = logging.getLogger(__name__)


@dataclass
class NodeRect:
    """Rectangle a renderer draws for a node."""

    index: int
    x: float
    y: float
    width: float
    height: float


@dataclass
class LayoutResult:
    """
    Result of a layout call.

    Attributes:
        graph: The laid-out graph (private copy of the input).
        columns: Node indices per column, leftmost first, each ordered top
            to bottom.
        column_count: Number of columns.
        vertical_scale: Pixels per unit of value.
        width: Width of the drawing area.
        height: Height of the drawing area.
        node_padding: Gap kept between nodes of the same column.
        link_curvature: Curvature used by link_paths().
    """

    graph: SankeyGraph = field(default_factory=lambda: SankeyGraph([], []))
    columns: List[List[int]] = field(default_factory=list)
    column_count: int = 0
    vertical_scale: float = 0.0
    width: float = 0.0
    height: float = 0.0
    node_padding: float = 0.0
    link_curvature: float = 0.5

    @property
    def nodes(self) -> List[SankeyNode]:
        return self.graph.nodes

    @property
    def links(self) -> List[SankeyLink]:
        return self.graph.links

    def node_rects(self) -> List[NodeRect]:
        """Rectangles for every node, in node order."""
        return [
            NodeRect(node.index, node.x, node.y, node.dx, node.dy)
            for node in self.nodes
        ]

    def link_paths(self, curvature: Optional[float] = None) -> List[LinkPath]:
        """
        Anchor geometry for every link, in link order.

        Args:
            curvature: Overrides the curvature the layout was configured with.
        """
        if curvature is None:
            curvature = self.link_curvature
        router = LinkRouter()
        return [router.path_for(self.graph, link, curvature) for link in self.links]

    def to_dict(self) -> Dict[str, List[Dict[str, Any]]]:
        """
        Enriched copy of the input in ``{"nodes": [...], "links": [...]}`` form.

        Mapping inputs keep their own keys; layout fields are added on top.
        Link ``source``/``target`` become node indices.
        """
        nodes = []
        for node in self.nodes:
            entry = _passthrough(node.data)
            entry.update(
                value=node.value,
                column=node.column,
                x=node.x,
                y=node.y,
                dx=node.dx,
                dy=node.dy,
            )
            nodes.append(entry)

        links = []
        for link in self.links:
            entry = _passthrough(link.data)
            entry.update(
                source=link.source,
                target=link.target,
                value=link.value,
                dy=link.dy,
                sy=link.sy,
                ty=link.ty,
            )
            links.append(entry)

        return {"nodes": nodes, "links": links}


def _passthrough(data: Any) -> Dict[str, Any]:
    if isinstance(data, Mapping):
        return dict(data)
    if data is None:
        return {}
    return {"data": data}


class SankeyLayout:
    """
    Compute Sankey diagram geometry from nodes and weighted links.

    Example:
        >>> layout = SankeyLayout(width=300, height=100)
        >>> result = layout.layout(
        ...     [{"name": "A"}, {"name": "B"}],
        ...     [{"source": 0, "target": 1, "value": 10}],
        ... )
        >>> result.nodes[1].x
        290.0
    """

    def __init__(
        self,
        width: float,
        height: float,
        node_width: float = 10,
        node_padding: float = 10,
        iterations: int = 32,
        link_curvature: float = 0.5,
    ):
        """
        Initialize the layout engine.

        Args:
            width: Width of the drawing area
            height: Height of the drawing area
            node_width: Width of every node (default: 10)
            node_padding: Vertical gap between nodes in a column (default: 10)
            iterations: Relaxation rounds (default: 32)
            link_curvature: Control point position for link curves (default: 0.5)

        Raises:
            ValueError: If any parameter is out of range.
        """
        self.config = LayoutConfig(
            width=width,
            height=height,
            node_width=node_width,
            node_padding=node_padding,
            iterations=iterations,
            link_curvature=link_curvature,
        )
        self.config.validate()

        self.breadth_assigner = BreadthAssigner(width, node_width)
        self.depth_initializer = DepthInitializer(height, node_padding)
        self.relaxer = ForceRelaxer(height, node_padding, iterations)
        self.link_router = LinkRouter()
        self._trace: Optional[LayoutTrace] = None

    def layout(
        self,
        nodes: Sequence[Any],
        links: Sequence[Any],
        debug: bool = False,
    ) -> LayoutResult:
        """
        Lay out a Sankey diagram.

        The input is deep-copied; caller objects are never modified.

        Args:
            nodes: Caller-defined node objects
            links: Links with ``source``, ``target`` (index or node object)
                and ``value``
            debug: Record a LayoutTrace, available from get_trace()

        Returns:
            LayoutResult with every node and link positioned

        Raises:
            InvalidValueError: If a link value is negative or not a number
            InvalidReferenceError: If a link endpoint does not resolve
            CyclicGraphError: If the links form a cycle
        """
        config = self.config
        trace = None
        if debug:
            trace = LayoutTrace(node_count=len(nodes), link_count=len(links))
        self._trace = trace

        graph = build_graph(nodes, links)
        if trace:
            trace.add_stage(
                "graph",
                {
                    "sources": [n.index for n in graph.get_sources()],
                    "sinks": [n.index for n in graph.get_sinks()],
                    "values": [n.value for n in graph.nodes],
                },
            )

        column_count = self.breadth_assigner.assign(graph)
        columns = group_by_column(graph)
        if trace:
            trace.add_stage(
                "breadth",
                {"column_count": column_count, "columns": [list(c) for c in columns]},
                graph,
            )

        scale = self.depth_initializer.initialize(graph, columns)
        if trace:
            trace.add_stage("depth", {"vertical_scale": scale}, graph)

        callback = trace.add_relaxation_step if trace else None
        alpha = self.relaxer.relax(graph, columns, on_iteration=callback)
        if trace:
            trace.add_stage(
                "relaxation",
                {"iterations": config.iterations, "final_alpha": alpha},
                graph,
            )

        self.link_router.route(graph)
        if trace:
            trace.add_stage(
                "routing",
                {
                    "offsets": [(link.sy, link.ty) for link in graph.links],
                },
                graph,
            )

        logger.debug(
            "Laid out %d nodes, %d links in %d columns",
            len(graph.nodes),
            len(graph.links),
            column_count,
        )

        return LayoutResult(
            graph=graph,
            columns=columns,
            column_count=column_count,
            vertical_scale=scale,
            width=config.width,
            height=config.height,
            node_padding=config.node_padding,
            link_curvature=config.link_curvature,
        )

    def get_trace(self) -> Optional[LayoutTrace]:
        """
        Get the trace from the last debug layout.

        Returns:
            LayoutTrace if the last call used debug=True, otherwise None
        """
        return self._trace


def compute_sankey(
    data: Mapping,
    width: float,
    height: float,
    **options: Any,
) -> Dict[str, List[Dict[str, Any]]]:
    """
    Convenience function to lay out ``{"nodes": [...], "links": [...]}`` data.

    Args:
        data: Mapping with ``nodes`` and ``links`` sequences
        width: Width of the drawing area
        height: Height of the drawing area
        **options: Further SankeyLayout keyword arguments

    Returns:
        Enriched copy of the data (see LayoutResult.to_dict())
    """
    layout = SankeyLayout(width, height, **options)
    result = layout.layout(data.get("nodes", []), data.get("links", []))
    return result.to_dict()
