"""
Graph fetch worker thread.

Calls the graph data provider in the background without blocking the UI.
"""

from PyQt6.QtCore import QThread, pyqtSignal

from depgraph_core.ports.provider_port import GraphDataProvider


class GraphFetchWorker(QThread):
    """
    Background thread for fetching a resource's neighborhood.

    Signals:
        loaded(int, object): Emitted with (request_id, GraphData) on success
        failed(int, str): Emitted with (request_id, message) on error
    """

    loaded = pyqtSignal(int, object)  # request_id, GraphData
    failed = pyqtSignal(int, str)  # request_id, message

    def __init__(self, provider: GraphDataProvider, resource_id: str, depth: int, request_id: int):
        """
        Initialize the worker.

        Args:
            provider: The graph data provider to query
            resource_id: ID of the focal resource
            depth: Traversal depth (1 or 2)
            request_id: Session token used to discard superseded results
        """
        super().__init__()
        self.provider = provider
        self.resource_id = resource_id
        self.depth = depth
        self.request_id = request_id

    def run(self):
        """Run the fetch."""
        try:
            data = self.provider.fetch_graph(self.resource_id, self.depth)
            self.loaded.emit(self.request_id, data)
        except Exception as e:
            self.failed.emit(self.request_id, f"Fetch failed: {e}")
