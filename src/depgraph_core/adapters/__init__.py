"""
Adapters for DepGraph.

Implementations of the port interfaces.
"""

from .memory_provider import InMemoryGraphProvider
from .json_provider import JsonGraphProvider

__all__ = ["InMemoryGraphProvider", "JsonGraphProvider"]
