"""
Error types for DepGraph.
"""


class DepGraphError(Exception):
    """Base class for all DepGraph errors."""


class LayoutError(DepGraphError):
    """A layout pass could not be completed."""


class MissingRootError(LayoutError):
    """The requested root id is not present in the node list."""

    def __init__(self, root_id: str):
        super().__init__(f"Root node not found in graph: {root_id}")
        self.root_id = root_id


class GraphFetchError(DepGraphError):
    """A graph data provider could not supply nodes/edges for a request."""
