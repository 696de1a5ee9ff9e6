"""
ViewModels for DepGraph app.

MVVM architecture separating interaction logic from UI:
- ViewModels handle state and orchestration
- Views (Qt widgets) handle rendering and user input
- Core services handle layout, viewport math and gestures
"""

from .base import BaseViewModel
from .graph_session import GraphSession, GraphSettings

__all__ = [
    # Base
    "BaseViewModel",

    # ViewModels
    "GraphSession",

    # Data classes
    "GraphSettings",
]
