"""
Iterative force relaxation of node depths.

Each round nudges nodes toward the value-weighted center of their
neighbours, first from the right (targets) and then from the left
(sources), with collision resolution after each sweep. The step size
``alpha`` cools by a constant factor every round.
"""

from typing import Callable, List, Optional

from .depth import resolve_collisions
from .graph import SankeyGraph
from .models import SankeyLink, SankeyNode

ALPHA_DECAY = 0.99


class ForceRelaxer:
    """
    Relaxes node positions toward their neighbours' weighted centers.

    Attributes:
        height: Height of the drawing area.
        node_padding: Gap kept between nodes of the same column.
        iterations: Number of relaxation rounds.
        decay: Factor applied to alpha before every round.
    """

    def __init__(
        self,
        height: float,
        node_padding: float = 10,
        iterations: int = 32,
        decay: float = ALPHA_DECAY,
    ):
        self.height = height
        self.node_padding = node_padding
        self.iterations = iterations
        self.decay = decay

    def relax(
        self,
        graph: SankeyGraph,
        columns: List[List[int]],
        on_iteration: Optional[Callable[[int, float, float], None]] = None,
    ) -> float:
        """
        Run all relaxation rounds.

        Args:
            graph: Graph whose node ``y`` values are updated.
            columns: Node indices per column, leftmost first.
            on_iteration: Optional callback receiving the round number, the
                alpha used and the largest displacement in that round.

        Returns:
            The final alpha.
        """
        alpha = 1.0
        for iteration in range(self.iterations):
            alpha *= self.decay
            before = [node.y for node in graph.nodes] if on_iteration else None

            self.relax_right_to_left(graph, columns, alpha)
            resolve_collisions(graph, columns, self.height, self.node_padding)
            self.relax_left_to_right(graph, columns, alpha)
            resolve_collisions(graph, columns, self.height, self.node_padding)

            if on_iteration is not None:
                moved = max(
                    (abs(node.y - y) for node, y in zip(graph.nodes, before)),
                    default=0.0,
                )
                on_iteration(iteration, alpha, moved)
        return alpha

    def relax_right_to_left(
        self, graph: SankeyGraph, columns: List[List[int]], alpha: float
    ) -> None:
        """Move nodes toward the weighted center of their targets."""
        for column in reversed(columns):
            for idx in column:
                node = graph.nodes[idx]
                if node.outgoing:
                    self._nudge(
                        node, graph.outgoing_links(node), graph.target_of, alpha
                    )

    def relax_left_to_right(
        self, graph: SankeyGraph, columns: List[List[int]], alpha: float
    ) -> None:
        """Move nodes toward the weighted center of their sources."""
        for column in columns:
            for idx in column:
                node = graph.nodes[idx]
                if node.incoming:
                    self._nudge(
                        node, graph.incoming_links(node), graph.source_of, alpha
                    )

    @staticmethod
    def _nudge(
        node: SankeyNode,
        links: List[SankeyLink],
        neighbour: Callable[[SankeyLink], SankeyNode],
        alpha: float,
    ) -> None:
        total = sum(link.value for link in links)
        if total <= 0:
            return
        weighted = sum(neighbour(link).center * link.value for link in links)
        node.y += (weighted / total - node.center) * alpha
