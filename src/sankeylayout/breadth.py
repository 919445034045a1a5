"""
Column assignment for Sankey layout.

Nodes are layered by frontier propagation: the first frontier is every
node, each following frontier is the set of targets reached from the
previous one. A node that shows up in a later frontier is simply moved to
that later column, so its final column is the length of the longest path
reaching it. Sinks are then pushed to the rightmost column.
"""

from typing import List

import networkx as nx

from .graph import CyclicGraphError, SankeyGraph


class BreadthAssigner:
    """
    Assigns columns and horizontal pixel positions to nodes.

    Attributes:
        width: Width of the drawing area.
        node_width: Width given to every node.
    """

    def __init__(self, width: float, node_width: float = 10):
        self.width = width
        self.node_width = node_width

    def assign(self, graph: SankeyGraph) -> int:
        """
        Assign a column and x coordinate to every node.

        Args:
            graph: Graph whose nodes are updated in place.

        Returns:
            Number of columns.

        Raises:
            CyclicGraphError: If the frontiers never run out.
        """
        column_count = self._propagate_frontiers(graph)
        self._move_sinks_right(graph, column_count)
        self._scale_breadths(graph, column_count)
        return column_count

    def _propagate_frontiers(self, graph: SankeyGraph) -> int:
        frontier: List[int] = [node.index for node in graph.nodes]
        column = 0

        while frontier:
            # A DAG of n nodes has at most n frontiers
            if column >= len(graph.nodes):
                self._raise_cycle(graph)

            next_frontier: List[int] = []
            seen = set()
            for node_idx in frontier:
                node = graph.nodes[node_idx]
                node.column = column
                node.dx = self.node_width
                for link_idx in node.outgoing:
                    target = graph.links[link_idx].target
                    if target not in seen:
                        seen.add(target)
                        next_frontier.append(target)
            frontier = next_frontier
            column += 1

        return column

    def _move_sinks_right(self, graph: SankeyGraph, column_count: int) -> None:
        for node in graph.get_sinks():
            node.column = column_count - 1

    def _scale_breadths(self, graph: SankeyGraph, column_count: int) -> None:
        if column_count <= 1:
            kx = 0.0
        else:
            kx = (self.width - self.node_width) / (column_count - 1)
        for node in graph.nodes:
            node.x = node.column * kx

    def _raise_cycle(self, graph: SankeyGraph) -> None:
        digraph = nx.DiGraph()
        digraph.add_edges_from(graph.edge_list())
        cycle = [(u, v) for u, v, *_ in nx.find_cycle(digraph)]
        path = " -> ".join(str(u) for u, _ in cycle)
        raise CyclicGraphError(
            f"Graph contains a cycle through nodes {path} -> {cycle[0][0]}",
            cycle=cycle,
        )
