"""
Debug tracing infrastructure for sankeylayout.

This module provides data structures for capturing a trace of the layout
pipeline. When debug mode is enabled, SankeyLayout records each stage of
processing together with a snapshot of node geometry, plus one record per
relaxation round.

This is primarily useful for:
1. Understanding why a node ends up where it does
2. Checking that relaxation converges (displacement shrinks every round)
3. Writing targeted tests against intermediate states

Usage:
    >>> layout = SankeyLayout(width=300, height=100)
    >>> result = layout.layout(nodes, links, debug=True)
    >>> trace = layout.get_trace()
    >>> print(trace.summary())
    >>> trace.dump_to_file("layout_trace.txt")

The trace captures:
- Pipeline stages (graph, breadth, depth, relaxation, routing)
- Node geometry snapshots at each stage
- Alpha and largest displacement for every relaxation round
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class NodeSnapshot:
    """
    Geometry of one node at a point in the pipeline.

    Attributes:
        index: Node index
        column: Column at the time of the snapshot
        x: Left edge
        y: Top edge
        dy: Height
    """

    index: int
    column: int
    x: float
    y: float
    dy: float

    def __str__(self) -> str:
        return (
            f"node {self.index}: col={self.column} x={self.x:.2f} "
            f"y={self.y:.2f} dy={self.dy:.2f}"
        )


@dataclass
class RelaxationStep:
    """
    Record of one relaxation round.

    Attributes:
        iteration: Round number (0-based)
        alpha: Step size used in the round
        max_displacement: Largest change in any node's y during the round
    """

    iteration: int
    alpha: float
    max_displacement: float

    def __str__(self) -> str:
        return (
            f"round {self.iteration}: alpha={self.alpha:.4f} "
            f"moved={self.max_displacement:.4f}"
        )


@dataclass
class PipelineStage:
    """
    Snapshot of state at a pipeline stage.

    The layout pipeline has these stages:
    1. graph - Links resolved, node values derived
    2. breadth - Columns and x coordinates assigned
    3. depth - Vertical scale chosen, first legal placement
    4. relaxation - Positions after all relaxation rounds
    5. routing - Link stacking offsets assigned

    Attributes:
        name: Name of this pipeline stage
        data: Dictionary of relevant data at this stage
        snapshot: Optional node geometry at this point
    """

    name: str
    data: Dict[str, Any]
    snapshot: Optional[List[NodeSnapshot]] = None

    def __str__(self) -> str:
        lines = [f"=== Stage: {self.name} ==="]
        for key, value in self.data.items():
            str_val = str(value)
            if len(str_val) > 100:
                str_val = str_val[:100] + "..."
            lines.append(f"  {key}: {str_val}")
        if self.snapshot:
            lines.append("  Nodes (first 15):")
            for node in self.snapshot[:15]:
                lines.append(f"    {node}")
        return "\n".join(lines)


@dataclass
class LayoutTrace:
    """
    Complete trace of a layout call.

    Usage:
        >>> trace = layout.get_trace()
        >>> depth = trace.get_stage("depth")
        >>> print(depth.data["vertical_scale"])
        >>> for step in trace.relaxation_steps:
        ...     print(step)

    Attributes:
        stages: List of pipeline stages with their data
        relaxation_steps: One record per relaxation round
        node_count: Number of nodes in the input
        link_count: Number of links in the input
    """

    stages: List[PipelineStage] = field(default_factory=list)
    relaxation_steps: List[RelaxationStep] = field(default_factory=list)
    node_count: int = 0
    link_count: int = 0

    def add_stage(
        self,
        name: str,
        data: Dict[str, Any],
        graph: Optional[Any] = None,
    ) -> None:
        """
        Add a pipeline stage snapshot.

        Args:
            name: Name of the stage (e.g., "breadth")
            data: Dictionary of relevant data at this stage
            graph: Optional SankeyGraph to snapshot
        """
        snapshot = None
        if graph is not None:
            snapshot = [
                NodeSnapshot(node.index, node.column, node.x, node.y, node.dy)
                for node in graph.nodes
            ]
        self.stages.append(PipelineStage(name, data.copy(), snapshot))

    def add_relaxation_step(
        self, iteration: int, alpha: float, max_displacement: float
    ) -> None:
        """Record one relaxation round."""
        self.relaxation_steps.append(
            RelaxationStep(iteration, alpha, max_displacement)
        )

    def get_stage(self, name: str) -> Optional[PipelineStage]:
        """Get a specific pipeline stage by name."""
        for stage in self.stages:
            if stage.name == name:
                return stage
        return None

    def get_positions_at_stage(self, name: str) -> Optional[List[NodeSnapshot]]:
        """Get the node snapshot at a specific stage."""
        stage = self.get_stage(name)
        if stage and stage.snapshot:
            return stage.snapshot
        return None

    def summary(self) -> str:
        """
        Generate a human-readable summary of the trace.

        Returns a string with:
        - Input size
        - Pipeline stages overview
        - Relaxation convergence
        """
        lines = [
            "=" * 60,
            "LAYOUT TRACE SUMMARY",
            "=" * 60,
            "",
            f"Nodes: {self.node_count}",
            f"Links: {self.link_count}",
            "",
            f"Pipeline stages: {len(self.stages)}",
        ]

        for stage in self.stages:
            has_snapshot = "+" if stage.snapshot else "-"
            lines.append(f"  [{has_snapshot}] {stage.name}")

        lines.extend(["", f"Relaxation rounds: {len(self.relaxation_steps)}"])
        if self.relaxation_steps:
            first = self.relaxation_steps[0]
            last = self.relaxation_steps[-1]
            lines.append(f"  first: {first}")
            lines.append(f"  last:  {last}")

        return "\n".join(lines)

    def dump(self) -> str:
        """
        Generate a complete human-readable dump of the trace.

        Includes every stage with its full node snapshot and every
        relaxation round.
        """
        lines = [self.summary(), "", "=" * 60, "DETAILED TRACE", "=" * 60, ""]

        lines.append("PIPELINE STAGES:")
        lines.append("-" * 40)
        for stage in self.stages:
            lines.append(str(stage))
            lines.append("")

        lines.append("RELAXATION ROUNDS:")
        lines.append("-" * 40)
        for step in self.relaxation_steps:
            lines.append(str(step))

        return "\n".join(lines)

    def dump_to_file(self, filename: str) -> None:
        """Write the complete trace dump to a file."""
        with open(filename, "w", encoding="utf-8") as f:
            f.write(self.dump())

    def dump_position_evolution(self) -> str:
        """
        Show how node positions evolved through each stage.

        One row per node, one column per stage that has a snapshot.
        """
        staged = [stage for stage in self.stages if stage.snapshot]
        lines = [
            "=" * 60,
            "POSITION EVOLUTION (y)",
            "=" * 60,
        ]
        if not staged:
            return "\n".join(lines)

        header = "node  " + "".join(f"{stage.name:>12}" for stage in staged)
        lines.append(header)
        for i in range(len(staged[0].snapshot)):
            row = f"{i:<6}" + "".join(
                f"{stage.snapshot[i].y:>12.2f}" for stage in staged
            )
            lines.append(row)

        return "\n".join(lines)
