"""
Vertical scale, initial placement and collision resolution.

The initial ``y`` of each node is only a seed (its rank within the
column). resolve_collisions() turns any seed into a legal, non-overlapping
column, and the relaxation stage relies on the same pass after every move.
"""

import logging
import math
from typing import Dict, List

from .graph import SankeyGraph

logger = logging.getLogger(__name__)


def group_by_column(graph: SankeyGraph) -> List[List[int]]:
    """
    Group node indices by column, leftmost column first.

    Within a column nodes keep their graph order.
    """
    by_column: Dict[int, List[int]] = {}
    for node in graph.nodes:
        by_column.setdefault(node.column, []).append(node.index)
    return [by_column[column] for column in sorted(by_column)]


def resolve_collisions(
    graph: SankeyGraph,
    columns: List[List[int]],
    height: float,
    node_padding: float,
) -> None:
    """
    Remove vertical overlap between nodes sharing a column.

    Each column list is re-sorted in place by ``y``. Nodes are pushed down
    until they clear the node above; if the last node then runs past the
    bottom it is lifted back inside and the nodes above are pushed up.

    Args:
        graph: Graph whose node positions are updated.
        columns: Node indices per column (reordered in place).
        height: Height of the drawing area.
        node_padding: Gap kept between neighbouring nodes.
    """
    nodes = graph.nodes
    for column in columns:
        if not column:
            continue
        column.sort(key=lambda idx: nodes[idx].y)

        # Push overlapping nodes down
        floor = 0.0
        for idx in column:
            node = nodes[idx]
            if node.y < floor:
                node.y = floor
            floor = node.y + node.dy + node_padding

        # Bottommost node out of bounds: push it back up, then the rest
        overflow = floor - node_padding - height
        if overflow > 0:
            last = nodes[column[-1]]
            last.y -= overflow
            ceiling = last.y
            for idx in reversed(column[:-1]):
                node = nodes[idx]
                overlap = node.y + node.dy + node_padding - ceiling
                if overlap > 0:
                    node.y -= overlap
                ceiling = node.y


class DepthInitializer:
    """
    Computes the vertical scale and the first legal vertical layout.

    Attributes:
        height: Height of the drawing area.
        node_padding: Gap kept between nodes of the same column.
    """

    def __init__(self, height: float, node_padding: float = 10):
        self.height = height
        self.node_padding = node_padding

    def compute_scale(self, graph: SankeyGraph, columns: List[List[int]]) -> float:
        """
        Pixels per unit of value, dictated by the tightest column.

        Columns with zero total value place no bound on the scale. If no
        column bounds it, or padding alone overflows the height, the scale
        is 0.
        """
        scale = math.inf
        for column in columns:
            total = sum(graph.nodes[idx].value for idx in column)
            if total <= 0:
                continue
            available = self.height - (len(column) - 1) * self.node_padding
            scale = min(scale, available / total)

        if math.isinf(scale):
            # Every node has zero value, so any scale gives dy == 0
            return 0.0
        if scale < 0:
            logger.warning(
                "Node padding exceeds the available height (scale %.4g); using 0",
                scale,
            )
            return 0.0
        return scale

    def initialize(self, graph: SankeyGraph, columns: List[List[int]]) -> float:
        """
        Size every node and link, seed positions and resolve collisions.

        Args:
            graph: Graph whose nodes and links are updated.
            columns: Node indices per column, as from group_by_column().

        Returns:
            The vertical scale applied to every node and link.
        """
        scale = self.compute_scale(graph, columns)

        for column in columns:
            for rank, idx in enumerate(column):
                node = graph.nodes[idx]
                node.y = float(rank)
                node.dy = node.value * scale

        for link in graph.links:
            link.dy = link.value * scale

        resolve_collisions(graph, columns, self.height, self.node_padding)
        logger.debug("Initialized %d columns at scale %.6g", len(columns), scale)
        return scale
