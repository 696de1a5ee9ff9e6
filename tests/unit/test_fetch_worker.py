"""
Tests for the background graph fetch worker.

run() is called directly, so the fetch happens on the test thread and
signals are delivered synchronously.
"""

from depgraph_core.domain.models import GraphNode, GraphEdge, GraphData
from depgraph_core.adapters.memory_provider import InMemoryGraphProvider
from depgraph_app.workers.fetch_worker import GraphFetchWorker


def provider() -> InMemoryGraphProvider:
    nodes = [GraphNode(n, n, "instance", "ec2") for n in ("web", "vpc")]
    return InMemoryGraphProvider(nodes, [GraphEdge("web", "vpc", "member of")])


def run_worker(resource_id: str, request_id: int = 7):
    """Run a worker synchronously, returning (loaded, failed) emissions."""
    worker = GraphFetchWorker(provider(), resource_id, 1, request_id)
    loaded, failed = [], []
    worker.loaded.connect(lambda rid, data: loaded.append((rid, data)))
    worker.failed.connect(lambda rid, msg: failed.append((rid, msg)))
    worker.run()
    return loaded, failed


class TestGraphFetchWorker:
    """Test GraphFetchWorker signal reporting."""

    def test_known_root_emits_loaded(self, qapp):
        """A successful fetch reports the request id and graph data."""
        loaded, failed = run_worker("web")

        assert failed == []
        assert len(loaded) == 1
        request_id, data = loaded[0]
        assert request_id == 7
        assert isinstance(data, GraphData)
        assert data.node_ids == ["web", "vpc"]

    def test_unknown_root_emits_failed(self, qapp):
        """Provider errors are caught and reported with the request id."""
        loaded, failed = run_worker("ghost", request_id=3)

        assert loaded == []
        assert len(failed) == 1
        request_id, message = failed[0]
        assert request_id == 3
        assert message.startswith("Fetch failed: ")
        assert "Unknown resource" in message
