"""
DepGraph Core - Headless library for resource dependency graphs.

This module provides the radial layout, viewport math and pointer
interaction state machine used to explore a resource's dependencies.
It has no UI dependencies and can be embedded in other applications.
"""

__version__ = "0.1.0"
__author__ = "DepGraph Team"

# Lazy imports to avoid loading everything at once
def __getattr__(name):
    if name == "compute_layout":
        from .services.layout import compute_layout
        return compute_layout
    elif name == "InteractionController":
        from .services.interaction import InteractionController
        return InteractionController
    elif name == "InMemoryGraphProvider":
        from .adapters.memory_provider import InMemoryGraphProvider
        return InMemoryGraphProvider
    elif name == "JsonGraphProvider":
        from .adapters.json_provider import JsonGraphProvider
        return JsonGraphProvider
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

__all__ = [
    "__version__",
    "compute_layout",
    "InteractionController",
    "InMemoryGraphProvider",
    "JsonGraphProvider",
]
