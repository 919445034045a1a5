"""
Parser module for Sankey flow definitions.

Handles parsing of input text into nodes and weighted links. Each
non-empty line describes one flow::

    Salary -> Budget : 3000
    Budget -> Rent : 1200
"""

import math
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple


class ParseError(Exception):
    """Raised when input parsing fails."""

    pass


@dataclass
class ParseResult:
    """
    Result of parsing input text.

    Attributes:
        nodes: Node names in order of first appearance.
        links: (source index, target index, value) tuples in input order.
    """

    nodes: List[str] = field(default_factory=list)
    links: List[Tuple[int, int, float]] = field(default_factory=list)

    def to_data(self) -> Dict[str, List[Dict[str, Any]]]:
        """Convert to the ``{"nodes": [...], "links": [...]}`` layout input."""
        return {
            "nodes": [{"name": name} for name in self.nodes],
            "links": [
                {"source": source, "target": target, "value": value}
                for source, target, value in self.links
            ],
        }


class Parser:
    """Parses flow text into nodes and weighted links."""

    # Value after the last colon: "A -> B : 12.5"
    VALUE_PATTERN = re.compile(r"^(.*):\s*([^:]+?)\s*$")

    def parse(self, input_text: str) -> ParseResult:
        """
        Parse input text and return nodes and links.

        Args:
            input_text: Multi-line string with flows in format "A -> B : value"

        Returns:
            ParseResult with nodes and links

        Raises:
            ParseError: If input format is invalid
        """
        lines = input_text.strip().split("\n")
        result = ParseResult()
        node_index: Dict[str, int] = {}

        for line_num, line in enumerate(lines, 1):
            stripped = line.strip()

            # Skip empty lines and comments
            if not stripped or stripped.startswith("#"):
                continue

            source, target, value = self._parse_flow(line_num, stripped)

            for name in (source, target):
                if name not in node_index:
                    node_index[name] = len(result.nodes)
                    result.nodes.append(name)

            result.links.append((node_index[source], node_index[target], value))

        if not result.links:
            raise ParseError("No valid flows found in input")

        return result

    def _parse_flow(self, line_num: int, line: str) -> Tuple[str, str, float]:
        match = self.VALUE_PATTERN.match(line)
        if not match:
            raise ParseError(
                f"Line {line_num}: Expected ': value' after connection: {line}"
            )
        connection, value_text = match.group(1), match.group(2)

        if "->" not in connection:
            raise ParseError(f"Line {line_num}: Expected '->' in flow: {line}")

        parts = connection.split("->")
        if len(parts) != 2:
            raise ParseError(f"Line {line_num}: Invalid flow format: {line}")

        source = parts[0].strip()
        target = parts[1].strip()

        if not source:
            raise ParseError(f"Line {line_num}: Empty source node")
        if not target:
            raise ParseError(f"Line {line_num}: Empty target node")

        try:
            value = float(value_text)
        except ValueError:
            raise ParseError(
                f"Line {line_num}: Invalid flow value '{value_text}'"
            ) from None
        if not math.isfinite(value) or value < 0:
            raise ParseError(
                f"Line {line_num}: Flow value must be a non-negative number, "
                f"got {value_text}"
            )

        return source, target, value


def parse_flows(input_text: str) -> ParseResult:
    """
    Convenience function to parse flow input.

    Args:
        input_text: Multi-line string with flows

    Returns:
        ParseResult with nodes and links
    """
    parser = Parser()
    return parser.parse(input_text)
