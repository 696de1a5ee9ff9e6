"""
Graph data provider port interface.

Defines the contract for fetching a resource's neighborhood.
"""

from abc import ABC, abstractmethod

from ..domain.models import GraphData


SUPPORTED_DEPTHS = (1, 2)


def validate_depth(depth: int) -> int:
    """Check that a traversal depth is supported."""
    if depth not in SUPPORTED_DEPTHS:
        raise ValueError(f"Unsupported traversal depth: {depth} (expected 1 or 2)")
    return depth


class GraphDataProvider(ABC):
    """
    Abstract interface for graph data sources.

    Implementations may block (network, disk); callers run them off
    the UI thread.
    """

    @abstractmethod
    def fetch_graph(self, root_id: str, depth: int) -> GraphData:
        """
        Fetch nodes and edges around a resource.

        Args:
            root_id: ID of the focal resource
            depth: 1 = direct neighbors only, 2 = extended/two-hop

        Returns:
            GraphData with the root among its nodes, in discovery order

        Raises:
            GraphFetchError: If the data cannot be supplied
            ValueError: If depth is not 1 or 2
        """
        pass
