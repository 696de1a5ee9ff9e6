"""
Services for DepGraph.

Layout, viewport math and pointer interaction.
"""

from .layout import (
    LayoutSettings,
    compute_layout,
    compute_rings,
    resolve_edges,
)
from .viewport import (
    ViewportLimits,
    to_screen,
    to_logical,
    clamp_zoom,
)
from .interaction import InteractionController

__all__ = [
    "LayoutSettings",
    "compute_layout",
    "compute_rings",
    "resolve_edges",
    "ViewportLimits",
    "to_screen",
    "to_logical",
    "clamp_zoom",
    "InteractionController",
]
