"""
Link routing for Sankey layout.

Handles the vertical anchoring of flow bands:
- Ordering each node's links by the position of the node at the other end
- Stacking offsets so bands entering or leaving a node do not overlap
- Anchor and control-point geometry for the curve a renderer draws
"""

from dataclasses import dataclass

from .graph import SankeyGraph
from .models import SankeyLink


@dataclass
class LinkPath:
    """
    Anchor geometry of a single flow band.

    The band is a cubic curve from (source_x, source_y) to
    (target_x, target_y) with control points (source_control_x, source_y)
    and (target_control_x, target_y). The y values are band centerlines.
    """

    link: int
    source_x: float
    source_y: float
    target_x: float
    target_y: float
    source_control_x: float
    target_control_x: float
    width: float


def _interpolate(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


class LinkRouter:
    """
    Orders and stacks links at both of their endpoints.
    """

    def route(self, graph: SankeyGraph) -> None:
        """
        Sort every node's links and assign stacking offsets.

        Outgoing links are ordered by target ``y`` and incoming links by
        source ``y``. Sorting is stable, so ties keep input order. Offsets
        start at 0 and grow by each preceding link's thickness.

        Args:
            graph: Graph whose adjacency order and link offsets are updated.
        """
        links = graph.links
        nodes = graph.nodes

        for node in nodes:
            node.outgoing.sort(key=lambda i: nodes[links[i].target].y)
            node.incoming.sort(key=lambda i: nodes[links[i].source].y)

        for node in nodes:
            sy = 0.0
            for i in node.outgoing:
                links[i].sy = sy
                sy += links[i].dy

            ty = 0.0
            for i in node.incoming:
                links[i].ty = ty
                ty += links[i].dy

    def path_for(
        self, graph: SankeyGraph, link: SankeyLink, curvature: float = 0.5
    ) -> LinkPath:
        """
        Compute the anchor points of a routed link.

        Args:
            graph: Routed graph.
            link: Link to compute geometry for.
            curvature: Where the control points sit between the endpoints.

        Returns:
            LinkPath for the link.
        """
        source = graph.source_of(link)
        target = graph.target_of(link)

        source_x = source.x + source.dx
        target_x = target.x

        return LinkPath(
            link=link.index,
            source_x=source_x,
            source_y=source.y + link.sy + link.dy / 2,
            target_x=target_x,
            target_y=target.y + link.ty + link.dy / 2,
            source_control_x=_interpolate(source_x, target_x, curvature),
            target_control_x=_interpolate(source_x, target_x, 1 - curvature),
            width=link.dy,
        )
