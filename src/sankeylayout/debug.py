"""
Debug utilities for sankeylayout.

This module provides tools for checking and comparing finished layouts.

Key Components:
- LayoutInspector: Checks a LayoutResult for overlaps, out-of-bounds
  nodes, scale mismatches and misplaced sinks
- layout_diff: Compare two layouts node by node

Usage:
    >>> from sankeylayout.debug import LayoutInspector, layout_diff
    >>> inspector = LayoutInspector(result)
    >>> assert not inspector.find_overlaps()
    >>> print(inspector.column_summary())
    >>> print(layout_diff(expected_result, actual_result))
"""

from typing import List, Tuple

from .layout import LayoutResult

DEFAULT_TOLERANCE = 1e-6


class LayoutInspector:
    """
    Utilities for inspecting a finished layout.

    Every check returns a list of offending items; an empty list means the
    layout passes.
    """

    def __init__(self, result: LayoutResult, tolerance: float = DEFAULT_TOLERANCE):
        """
        Initialize the inspector.

        Args:
            result: The layout to inspect
            tolerance: Allowed floating point slack in every comparison
        """
        self._result = result
        self.tolerance = tolerance

    def column_fits(self, column_idx: int) -> bool:
        """Whether a column's nodes and padding fit in the layout height."""
        result = self._result
        column = result.columns[column_idx]
        total = sum(result.nodes[i].dy for i in column)
        needed = total + result.node_padding * (len(column) - 1)
        return needed <= result.height + self.tolerance

    def find_overlaps(self) -> List[Tuple[int, int]]:
        """
        Find pairs of nodes in the same column whose spans overlap.

        Returns:
            List of (upper node index, lower node index) pairs
        """
        nodes = self._result.nodes
        overlaps = []
        for column in self._result.columns:
            ordered = sorted(column, key=lambda i: nodes[i].y)
            for upper, lower in zip(ordered, ordered[1:]):
                if nodes[upper].y + nodes[upper].dy > nodes[lower].y + self.tolerance:
                    overlaps.append((upper, lower))
        return overlaps

    def find_out_of_bounds(self, only_fitting: bool = True) -> List[int]:
        """
        Find nodes that extend above 0 or below the layout height.

        Args:
            only_fitting: Skip columns too full to fit in the height

        Returns:
            List of node indices
        """
        result = self._result
        out = []
        for column_idx, column in enumerate(result.columns):
            if only_fitting and not self.column_fits(column_idx):
                continue
            for i in column:
                node = result.nodes[i]
                if node.y < -self.tolerance:
                    out.append(i)
                elif node.y + node.dy > result.height + self.tolerance:
                    out.append(i)
        return out

    def find_scale_mismatches(self) -> List[str]:
        """
        Find nodes and links whose thickness is not value times the scale.

        Returns:
            List of labels like "node 3" or "link 0"
        """
        scale = self._result.vertical_scale
        mismatches = []
        for node in self._result.nodes:
            if abs(node.dy - node.value * scale) > self.tolerance:
                mismatches.append(f"node {node.index}")
        for link in self._result.links:
            if abs(link.dy - link.value * scale) > self.tolerance:
                mismatches.append(f"link {link.index}")
        return mismatches

    def find_misplaced_sinks(self) -> List[int]:
        """Find nodes without outgoing links that are not in the last column."""
        last = self._result.column_count - 1
        return [
            node.index
            for node in self._result.graph.get_sinks()
            if node.column != last
        ]

    def column_summary(self) -> str:
        """
        Describe every column top to bottom.

        Returns:
            Multi-line string, one block per column
        """
        result = self._result
        lines = [
            f"{result.column_count} column(s), scale {result.vertical_scale:.6g}"
        ]
        for column_idx, column in enumerate(result.columns):
            ordered = sorted(column, key=lambda i: result.nodes[i].y)
            fits = "fits" if self.column_fits(column_idx) else "overfull"
            lines.append(f"column {column_idx} ({len(column)} node(s), {fits}):")
            for i in ordered:
                node = result.nodes[i]
                lines.append(
                    f"  node {i}: y={node.y:.2f}..{node.y + node.dy:.2f} "
                    f"value={node.value:g}"
                )
        return "\n".join(lines)


def layout_diff(
    expected: LayoutResult,
    actual: LayoutResult,
    tolerance: float = DEFAULT_TOLERANCE,
) -> str:
    """
    Compare two layouts node by node and link by link.

    Args:
        expected: The reference layout
        actual: The layout under test
        tolerance: Differences at or below this are ignored

    Returns:
        A formatted string listing every differing field

    Example:
        >>> print(layout_diff(first_run, second_run))
    """
    output: List[str] = ["=" * 60, "LAYOUT DIFF", "=" * 60]

    if len(expected.nodes) != len(actual.nodes) or len(expected.links) != len(
        actual.links
    ):
        output.append(
            f"Size differs: expected {len(expected.nodes)} nodes/"
            f"{len(expected.links)} links, got {len(actual.nodes)} nodes/"
            f"{len(actual.links)} links"
        )
        return "\n".join(output)

    differences: List[str] = []
    if abs(expected.vertical_scale - actual.vertical_scale) > tolerance:
        differences.append(
            f"vertical_scale: {expected.vertical_scale!r} != {actual.vertical_scale!r}"
        )

    for exp, act in zip(expected.nodes, actual.nodes):
        if exp.column != act.column:
            differences.append(f"node {exp.index} column: {exp.column} != {act.column}")
        for name in ("x", "y", "dy"):
            e, a = getattr(exp, name), getattr(act, name)
            if abs(e - a) > tolerance:
                differences.append(f"node {exp.index} {name}: {e:.6f} != {a:.6f}")

    for exp, act in zip(expected.links, actual.links):
        for name in ("dy", "sy", "ty"):
            e, a = getattr(exp, name), getattr(act, name)
            if abs(e - a) > tolerance:
                differences.append(f"link {exp.index} {name}: {e:.6f} != {a:.6f}")

    if not differences:
        output.append("No differences found.")
    else:
        output.append(f"Found {len(differences)} difference(s)")
        output.extend(differences)

    return "\n".join(output)
