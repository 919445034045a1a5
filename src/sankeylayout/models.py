"""
Data models for Sankey layout.

This module contains the dataclasses shared by every stage of the layout
pipeline. Nodes and links live in flat arenas owned by a SankeyGraph and
refer to each other by integer index, so a node never holds a link object
and a link never holds a node object.

Classes:
    SankeyNode: A node and the geometry assigned to it.
    SankeyLink: A weighted flow between two nodes and its stacking offsets.
    LayoutConfig: Size and tuning parameters for one layout call.
"""

import math
from dataclasses import dataclass, field
from typing import Any, List


@dataclass
class SankeyNode:
    """
    A node in the Sankey graph.

    Attributes:
        index: Position of the node in the caller's node list.
        data: Deep copy of the caller-supplied node, passed through untouched.
        value: Flow magnitude, derived from the node's link totals.
        column: Horizontal rank (0 is the leftmost column).
        x: Left edge in pixels.
        dx: Width in pixels (the configured node width).
        y: Top edge in pixels.
        dy: Height in pixels (value times the vertical scale).
        outgoing: Indices of links leaving this node, in stacking order.
        incoming: Indices of links entering this node, in stacking order.
    """

    index: int
    data: Any = None
    value: float = 0.0
    column: int = 0
    x: float = 0.0
    dx: float = 0.0
    y: float = 0.0
    dy: float = 0.0
    outgoing: List[int] = field(default_factory=list)
    incoming: List[int] = field(default_factory=list)

    @property
    def center(self) -> float:
        """Vertical center of the node."""
        return self.y + self.dy / 2

    @property
    def is_sink(self) -> bool:
        return not self.outgoing

    @property
    def is_source(self) -> bool:
        return not self.incoming


@dataclass
class SankeyLink:
    """
    A weighted flow between two nodes.

    Attributes:
        index: Position of the link in the caller's link list.
        source: Index of the source node.
        target: Index of the target node.
        value: Flow magnitude (non-negative).
        data: Deep copy of the caller-supplied link.
        dy: Thickness in pixels (value times the vertical scale).
        sy: Offset of the band within the source node's outgoing stack.
        ty: Offset of the band within the target node's incoming stack.
    """

    index: int
    source: int
    target: int
    value: float
    data: Any = None
    dy: float = 0.0
    sy: float = 0.0
    ty: float = 0.0


@dataclass
class LayoutConfig:
    """
    Parameters for a layout call.

    Attributes:
        width: Width of the drawing area in pixels.
        height: Height of the drawing area in pixels.
        node_width: Width of every node rectangle.
        node_padding: Vertical gap kept between nodes of the same column.
        iterations: Number of relaxation rounds.
        link_curvature: Bezier control point position (0 = straight, 1 = S-bend).
    """

    width: float
    height: float
    node_width: float = 10
    node_padding: float = 10
    iterations: int = 32
    link_curvature: float = 0.5

    def validate(self) -> None:
        """
        Check that the configuration describes a usable drawing area.

        Raises:
            ValueError: If any parameter is out of range.
        """
        for name in ("width", "height", "node_width", "node_padding"):
            if not math.isfinite(getattr(self, name)):
                raise ValueError(f"{name} must be finite, got {getattr(self, name)}")
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"width and height must be positive, got {self.width}x{self.height}"
            )
        if self.node_width < 0:
            raise ValueError(f"node_width must be non-negative, got {self.node_width}")
        if self.node_width > self.width:
            raise ValueError(
                f"node_width ({self.node_width}) cannot exceed width ({self.width})"
            )
        if self.node_padding < 0:
            raise ValueError(
                f"node_padding must be non-negative, got {self.node_padding}"
            )
        if isinstance(self.iterations, bool) or not isinstance(self.iterations, int):
            raise ValueError(f"iterations must be an integer, got {self.iterations!r}")
        if self.iterations < 0:
            raise ValueError(f"iterations must be non-negative, got {self.iterations}")
        if not 0 <= self.link_curvature <= 1:
            raise ValueError(
                f"link_curvature must be between 0 and 1, got {self.link_curvature}"
            )
