"""
Domain models for DepGraph.

Contains DTOs, enums, and error types used throughout the application.
"""

from .models import (
    GraphNode,
    GraphEdge,
    GraphData,
    Point,
    ViewportState,
    DragState,
    PanState,
    RenderEdge,
)
from .enums import (
    Ring,
    GestureKind,
    LoadState,
)
from .errors import (
    DepGraphError,
    LayoutError,
    MissingRootError,
    GraphFetchError,
)

__all__ = [
    # Models
    "GraphNode",
    "GraphEdge",
    "GraphData",
    "Point",
    "ViewportState",
    "DragState",
    "PanState",
    "RenderEdge",
    # Enums
    "Ring",
    "GestureKind",
    "LoadState",
    # Errors
    "DepGraphError",
    "LayoutError",
    "MissingRootError",
    "GraphFetchError",
]
