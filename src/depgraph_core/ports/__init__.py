"""
Ports (interfaces) for DepGraph.

These define the contracts that adapters must implement.
This enables dependency injection and testing with mocks.
"""

from .provider_port import GraphDataProvider

__all__ = ["GraphDataProvider"]
