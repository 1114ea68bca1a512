"""NavGraph - Immutable navigation graph of a ski area.

Holds nodes, edges, and an adjacency index of outgoing edges per node.
Built once by GraphBuilder and never modified: new feature data produces a
new NavGraph, and references to the old one stay valid.

Provides the lookups callers need for UI affordances:
- find_node: node by ID
- get_outgoing_edges: edges leaving a node
- find_closest_node: nearest node to coordinates (linear scan)
"""

from collections import Counter
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional

from skiresort_navigator.model.edge import Edge
from skiresort_navigator.model.node import Node


class NavGraph:
    """Directed, weighted navigation graph.

    Attributes:
        nodes: Read-only mapping node_id -> Node
        edges: All edges in insertion order
        adjacency: Read-only mapping node_id -> outgoing edges

    Example:
        graph = build_graph(pistes=pistes, lifts=lifts)
        node = graph.find_node("piste_top-p1")
        for edge in graph.get_outgoing_edges(node.id):
            ...
    """

    def __init__(self, nodes: Iterable[Node], edges: Iterable[Edge]) -> None:
        """Create graph from complete node and edge lists.

        Raises:
            ValueError: If node IDs collide or an edge references an unknown node.
        """
        node_table: dict[str, Node] = {}
        for node in nodes:
            if node.id in node_table:
                raise ValueError(f"Duplicate node id {node.id}")
            node_table[node.id] = node

        edge_list = tuple(edges)
        grouped: dict[str, list[Edge]] = {}
        for edge in edge_list:
            if edge.from_id not in node_table or edge.to_id not in node_table:
                raise ValueError(f"Edge {edge.id} references unknown node ({edge.from_id} -> {edge.to_id})")
            grouped.setdefault(edge.from_id, []).append(edge)

        self._nodes = MappingProxyType(node_table)
        self._edges = edge_list
        self._adjacency = MappingProxyType({node_id: tuple(out) for node_id, out in grouped.items()})

    @property
    def nodes(self) -> Mapping[str, Node]:
        return self._nodes

    @property
    def edges(self) -> tuple[Edge, ...]:
        return self._edges

    @property
    def adjacency(self) -> Mapping[str, tuple[Edge, ...]]:
        return self._adjacency

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    # =========================================================================
    # Lookups
    # =========================================================================

    def find_node(self, node_id: str) -> Optional[Node]:
        """Node by ID, or None if the graph has no such node."""
        return self._nodes.get(node_id)

    def get_outgoing_edges(self, node_id: str) -> tuple[Edge, ...]:
        """Edges leaving a node. Empty for dead ends and unknown IDs."""
        return self._adjacency.get(node_id, ())

    def find_closest_node(self, lat: float, lon: float) -> Optional[Node]:
        """Find the node nearest to given coordinates.

        Linear scan over all nodes; node counts are in the hundreds.

        Args:
            lat, lon: Target coordinates

        Returns:
            Nearest Node, or None for an empty graph.
        """
        best_dist = float("inf")
        best_node = None

        for node in self._nodes.values():
            dist = node.distance_to(lat=lat, lon=lon)
            if dist < best_dist:
                best_dist = dist
                best_node = node

        return best_node

    # =========================================================================
    # Statistics and serialization
    # =========================================================================

    def get_stats(self) -> dict[str, Any]:
        """Node and edge counts, per kind."""
        node_kinds = Counter(node.kind.value for node in self._nodes.values())
        edge_kinds = Counter(edge.kind.value for edge in self._edges)
        dead_ends = sum(1 for node_id in self._nodes if node_id not in self._adjacency)
        return {
            "total_nodes": len(self._nodes),
            "total_edges": len(self._edges),
            "nodes_by_kind": dict(node_kinds),
            "edges_by_kind": dict(edge_kinds),
            "dead_end_nodes": dead_ends,
        }

    def to_dict(self) -> dict[str, Any]:
        """Serialize entire graph to JSON-compatible dict."""
        return {
            "nodes": {nid: node.to_dict() for nid, node in self._nodes.items()},
            "edges": [edge.to_dict() for edge in self._edges],
        }

    def __repr__(self) -> str:
        return f"NavGraph({len(self._nodes)} nodes, {len(self._edges)} edges)"
