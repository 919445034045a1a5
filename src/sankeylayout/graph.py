"""
Graph module for Sankey layout.

Normalizes caller-supplied nodes and links into index-based arenas and
derives per-node adjacency and values.
"""

import copy
import math
from collections.abc import Mapping
from numbers import Integral, Real
from typing import Any, Dict, List, Optional, Sequence

from .models import SankeyLink, SankeyNode


class SankeyError(Exception):
    """Base class for layout failures."""

    pass


class InvalidReferenceError(SankeyError):
    """Raised when a link endpoint does not resolve to a node."""

    pass


class InvalidValueError(SankeyError):
    """Raised when a link value is missing, non-numeric or negative."""

    pass


class CyclicGraphError(SankeyError):
    """Raised when the graph contains a cycle and has no column layout."""

    def __init__(self, message: str, cycle: Optional[List[tuple]] = None):
        super().__init__(message)
        self.cycle = cycle or []


def _link_field(link: Any, name: str) -> Any:
    if isinstance(link, Mapping):
        return link.get(name)
    return getattr(link, name, None)


class SankeyGraph:
    """
    Arena of nodes and links for one layout call.

    Links store integer node indices rather than node objects. The arenas
    are private copies: mutating them never touches caller data.
    """

    def __init__(self, nodes: List[SankeyNode], links: List[SankeyLink]):
        self.nodes = nodes
        self.links = links

    def __len__(self) -> int:
        return len(self.nodes)

    def source_of(self, link: SankeyLink) -> SankeyNode:
        return self.nodes[link.source]

    def target_of(self, link: SankeyLink) -> SankeyNode:
        return self.nodes[link.target]

    def outgoing_links(self, node: SankeyNode) -> List[SankeyLink]:
        """Links leaving a node, in its current stacking order."""
        return [self.links[i] for i in node.outgoing]

    def incoming_links(self, node: SankeyNode) -> List[SankeyLink]:
        """Links entering a node, in its current stacking order."""
        return [self.links[i] for i in node.incoming]

    def get_sinks(self) -> List[SankeyNode]:
        """Get nodes with no outgoing links."""
        return [node for node in self.nodes if node.is_sink]

    def get_sources(self) -> List[SankeyNode]:
        """Get nodes with no incoming links."""
        return [node for node in self.nodes if node.is_source]

    def edge_list(self) -> List[tuple]:
        """Return (source, target) index pairs in link order."""
        return [(link.source, link.target) for link in self.links]

    def compute_node_values(self) -> None:
        """Set each node's value to the larger of its outgoing and incoming totals."""
        for node in self.nodes:
            out_total = sum(self.links[i].value for i in node.outgoing)
            in_total = sum(self.links[i].value for i in node.incoming)
            node.value = max(out_total, in_total)


def validate_link_values(links: Sequence[Any]) -> List[float]:
    """
    Check every link value before any layout work happens.

    Args:
        links: Caller-supplied links.

    Returns:
        The link values as floats, in link order.

    Raises:
        InvalidValueError: If a value is missing, non-numeric, non-finite
            or negative.
    """
    values: List[float] = []
    for i, link in enumerate(links):
        value = _link_field(link, "value")
        if value is None:
            raise InvalidValueError(f"Link {i}: missing value")
        if isinstance(value, bool) or not isinstance(value, Real):
            raise InvalidValueError(f"Link {i}: value must be a number, got {value!r}")
        if not math.isfinite(value):
            raise InvalidValueError(f"Link {i}: value must be finite, got {value}")
        if value < 0:
            raise InvalidValueError(f"Link {i}: value must be non-negative, got {value}")
        values.append(float(value))
    return values


def _resolve_endpoint(
    ref: Any,
    node_count: int,
    identity_index: Dict[int, int],
    link_idx: int,
    role: str,
) -> int:
    if isinstance(ref, Integral) and not isinstance(ref, bool):
        index = int(ref)
        if not 0 <= index < node_count:
            raise InvalidReferenceError(
                f"Link {link_idx}: {role} index {index} is out of range "
                f"(graph has {node_count} nodes)"
            )
        return index
    if ref is None:
        raise InvalidReferenceError(f"Link {link_idx}: missing {role}")
    try:
        return identity_index[id(ref)]
    except KeyError:
        raise InvalidReferenceError(
            f"Link {link_idx}: {role} {ref!r} is not one of the supplied nodes"
        ) from None


def build_graph(nodes: Sequence[Any], links: Sequence[Any]) -> SankeyGraph:
    """
    Build a SankeyGraph from caller-supplied nodes and links.

    Link endpoints may be integer indices into ``nodes`` or the node
    objects themselves (matched by identity). Caller data is deep-copied
    into each node's and link's ``data`` attribute.

    Args:
        nodes: Sequence of caller-defined node objects.
        links: Sequence of mappings or objects with source, target and value.

    Returns:
        SankeyGraph with adjacency lists and node values populated.

    Raises:
        InvalidValueError: If any link value is invalid.
        InvalidReferenceError: If any endpoint does not resolve.
    """
    values = validate_link_values(links)

    identity_index = {id(node): i for i, node in enumerate(nodes)}
    arena_nodes = [
        SankeyNode(index=i, data=copy.deepcopy(node)) for i, node in enumerate(nodes)
    ]
    arena_links: List[SankeyLink] = []

    for i, link in enumerate(links):
        source = _resolve_endpoint(
            _link_field(link, "source"), len(nodes), identity_index, i, "source"
        )
        target = _resolve_endpoint(
            _link_field(link, "target"), len(nodes), identity_index, i, "target"
        )
        arena_links.append(
            SankeyLink(
                index=i,
                source=source,
                target=target,
                value=values[i],
                data=copy.deepcopy(link),
            )
        )
        arena_nodes[source].outgoing.append(i)
        arena_nodes[target].incoming.append(i)

    graph = SankeyGraph(arena_nodes, arena_links)
    graph.compute_node_values()
    return graph
