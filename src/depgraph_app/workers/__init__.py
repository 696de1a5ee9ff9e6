"""
Background worker threads for DepGraph.

These QThread subclasses run provider fetches without blocking the UI.
"""

from .fetch_worker import GraphFetchWorker

__all__ = [
    "GraphFetchWorker",
]
