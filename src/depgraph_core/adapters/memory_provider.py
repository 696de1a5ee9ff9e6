"""
In-memory graph data provider.

Holds a full resource inventory and answers neighborhood requests by
walking it breadth-first from the requested root, one frontier per
depth level.
"""

import logging
from dataclasses import replace
from typing import List, Dict, Set, Optional

from ..ports.provider_port import GraphDataProvider, validate_depth
from ..domain.models import GraphNode, GraphEdge, GraphData
from ..domain.errors import GraphFetchError

logger = logging.getLogger(__name__)


class InMemoryGraphProvider(GraphDataProvider):
    """
    Provider backed by an in-memory node/edge inventory.

    Every fetch returns fresh node copies without positions, so callers
    can mutate the result freely.
    """

    def __init__(self, nodes: List[GraphNode], edges: List[GraphEdge]):
        """
        Initialize the provider.

        Args:
            nodes: All known resources (first occurrence of an id wins)
            edges: All known relationships, in discovery order
        """
        self._nodes: Dict[str, GraphNode] = {}
        for node in nodes:
            self._nodes.setdefault(node.id, node)
        self._edges: List[GraphEdge] = list(edges)

    @classmethod
    def from_graph_data(cls, data: GraphData) -> "InMemoryGraphProvider":
        return cls(data.nodes, data.edges)

    @property
    def node_count(self) -> int:
        return len(self._nodes)

    @property
    def edge_count(self) -> int:
        return len(self._edges)

    def has_node(self, node_id: str) -> bool:
        return node_id in self._nodes

    def fetch_graph(self, root_id: str, depth: int) -> GraphData:
        """Return the root's neighborhood up to ``depth`` hops."""
        validate_depth(depth)

        root = self._nodes.get(root_id)
        if root is None:
            raise GraphFetchError(f"Unknown resource: {root_id}")

        out_nodes: List[GraphNode] = [self._fresh(root)]
        out_edges: List[GraphEdge] = []
        visited: Set[str] = {root_id}
        used_edges: Set[int] = set()

        frontier = [root_id]
        for _ in range(depth):
            next_frontier: List[str] = []
            for node_id in frontier:
                for index, edge in enumerate(self._edges):
                    if index in used_edges or not edge.touches(node_id):
                        continue
                    used_edges.add(index)
                    out_edges.append(edge)

                    other_id = edge.other_end(node_id)
                    if other_id in visited:
                        continue
                    other = self._nodes.get(other_id)
                    if other is None:
                        # Edge kept so the layout can report and drop it
                        continue
                    visited.add(other_id)
                    out_nodes.append(self._fresh(other))
                    next_frontier.append(other_id)
            frontier = next_frontier

        logger.debug(
            "Fetched %s at depth %d: %d nodes, %d edges",
            root_id, depth, len(out_nodes), len(out_edges),
        )
        return GraphData(nodes=out_nodes, edges=out_edges)

    @staticmethod
    def _fresh(node: GraphNode) -> GraphNode:
        return replace(node, x=None, y=None)

    def get_node(self, node_id: str) -> Optional[GraphNode]:
        node = self._nodes.get(node_id)
        return self._fresh(node) if node else None
