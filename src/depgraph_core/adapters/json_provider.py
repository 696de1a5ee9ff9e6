"""
JSON file graph data provider.

Reads a resource inventory document of the form::

    {
      "nodes": [{"id": ..., "name": ..., "type": ..., "service": ...}],
      "edges": [{"source": ..., "target": ..., "relationship": ...}]
    }

``"links"`` is accepted as an alias for ``"edges"``.
"""

import json
import threading
from pathlib import Path
from typing import Optional, Union

from ..ports.provider_port import GraphDataProvider
from ..domain.models import GraphData
from ..domain.errors import GraphFetchError
from .memory_provider import InMemoryGraphProvider


class JsonGraphProvider(GraphDataProvider):
    """Provider that loads its inventory from a JSON file on first use."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._inventory: Optional[InMemoryGraphProvider] = None
        # Fetches arrive on worker threads; the file is read once per refresh
        self._lock = threading.Lock()

    def _load(self) -> InMemoryGraphProvider:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                document = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise GraphFetchError(f"Cannot read graph file {self.path}: {e}") from e

        if not isinstance(document, dict):
            raise GraphFetchError(f"Graph file {self.path} must contain a JSON object")

        edge_rows = document.get("edges", document.get("links", []))
        try:
            data = GraphData.from_provider(document.get("nodes", []), edge_rows)
        except (ValueError, AttributeError) as e:
            raise GraphFetchError(f"Malformed graph file {self.path}: {e}") from e

        return InMemoryGraphProvider.from_graph_data(data)

    def refresh(self) -> None:
        """Drop the cached inventory so the next fetch re-reads the file."""
        with self._lock:
            self._inventory = None

    def _get_inventory(self) -> InMemoryGraphProvider:
        with self._lock:
            if self._inventory is None:
                self._inventory = self._load()
            return self._inventory

    def fetch_graph(self, root_id: str, depth: int) -> GraphData:
        return self._get_inventory().fetch_graph(root_id, depth)
