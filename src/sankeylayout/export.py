"""
Export functionality for Sankey layouts.

This module hands finished layouts to other tools:
- JSON (.json) - the enriched nodes/links dictionary
- networkx - a MultiDiGraph carrying layout attributes, for analysis

The LayoutExporter class provides methods for serializing results and
handles file I/O.
"""

import json
from pathlib import Path
from typing import Optional

import networkx as nx

from .layout import LayoutResult


class LayoutExporter:
    """
    Exports layout results to other formats.

    Attributes:
        indent: JSON indentation (None for compact output).
    """

    def __init__(self, indent: Optional[int] = 2):
        """
        Initialize the layout exporter.

        Args:
            indent: JSON indentation; None writes a single line.
        """
        self.indent = indent

    def to_json(self, result: LayoutResult) -> str:
        """
        Serialize a layout to JSON.

        Passthrough node and link data must be JSON-serializable.
        """
        return json.dumps(result.to_dict(), indent=self.indent)

    def save_json(self, result: LayoutResult, filename: str) -> None:
        """
        Save a layout to a JSON file.

        Args:
            result: The layout to save.
            filename: Output filename (should end in .json).
        """
        output_path = Path(filename)
        output_path.write_text(self.to_json(result), encoding="utf-8")

    def to_networkx(self, result: LayoutResult) -> nx.MultiDiGraph:
        """
        Build a networkx graph from a layout.

        Nodes are keyed by index and carry ``value``, ``column``, ``x``,
        ``y``, ``dx``, ``dy`` and the passthrough ``data``. Edges are keyed
        by link index so parallel links survive, and carry ``value``,
        ``dy``, ``sy`` and ``ty``.

        Example:
            >>> graph = LayoutExporter().to_networkx(result)
            >>> graph.nodes[0]["column"]
            0
        """
        graph = nx.MultiDiGraph(
            width=result.width,
            height=result.height,
            vertical_scale=result.vertical_scale,
        )
        for node in result.nodes:
            graph.add_node(
                node.index,
                value=node.value,
                column=node.column,
                x=node.x,
                y=node.y,
                dx=node.dx,
                dy=node.dy,
                data=node.data,
            )
        for link in result.links:
            graph.add_edge(
                link.source,
                link.target,
                key=link.index,
                value=link.value,
                dy=link.dy,
                sy=link.sy,
                ty=link.ty,
            )
        return graph
