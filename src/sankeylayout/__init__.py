"""
sankeylayout - Sankey Diagram Layout

A Python library for computing Sankey diagram geometry: node columns,
value-proportional heights, relaxed vertical positions and stacked link
offsets. Drawing is left to the caller.

Example:
    >>> from sankeylayout import SankeyLayout
    >>> layout = SankeyLayout(width=300, height=100)
    >>> result = layout.layout(
    ...     [{"name": "A"}, {"name": "B"}, {"name": "C"}],
    ...     [
    ...         {"source": 0, "target": 1, "value": 10},
    ...         {"source": 1, "target": 2, "value": 10},
    ...     ],
    ... )
    >>> [node.column for node in result.nodes]
    [0, 1, 2]

Debug Mode Example:
    >>> result = layout.layout(nodes, links, debug=True)
    >>> trace = layout.get_trace()
    >>> print(trace.summary())
"""

from .breadth import BreadthAssigner
from .debug import LayoutInspector, layout_diff
from .depth import DepthInitializer, group_by_column, resolve_collisions
from .export import LayoutExporter
from .graph import (
    CyclicGraphError,
    InvalidReferenceError,
    InvalidValueError,
    SankeyError,
    SankeyGraph,
    build_graph,
)
from .layout import LayoutResult, NodeRect, SankeyLayout, compute_sankey
from .models import LayoutConfig, SankeyLink, SankeyNode
from .parser import ParseError, Parser, ParseResult, parse_flows
from .relaxation import ForceRelaxer
from .router import LinkPath, LinkRouter
from .tracer import LayoutTrace, NodeSnapshot, PipelineStage, RelaxationStep

__version__ = "0.1.0"

__all__ = [
    # Main API
    "SankeyLayout",
    "LayoutResult",
    "NodeRect",
    "compute_sankey",
    # Models
    "SankeyNode",
    "SankeyLink",
    "LayoutConfig",
    # Graph
    "SankeyGraph",
    "build_graph",
    "SankeyError",
    "InvalidReferenceError",
    "InvalidValueError",
    "CyclicGraphError",
    # Pipeline stages
    "BreadthAssigner",
    "DepthInitializer",
    "ForceRelaxer",
    "LinkRouter",
    "LinkPath",
    "group_by_column",
    "resolve_collisions",
    # Parser
    "Parser",
    "ParseError",
    "ParseResult",
    "parse_flows",
    # Export
    "LayoutExporter",
    # Debug
    "LayoutTrace",
    "PipelineStage",
    "NodeSnapshot",
    "RelaxationStep",
    "LayoutInspector",
    "layout_diff",
]
