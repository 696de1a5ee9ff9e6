"""
Enumerations for DepGraph domain.
"""

from enum import Enum


class Ring(str, Enum):
    """Distance tier of a node from the layout root (derived per layout pass)."""
    ROOT = "root"           # The focal resource
    RING1 = "ring1"         # Shares an edge with the root
    RING2 = "ring2"         # Shares an edge with a ring-1 node
    OVERFLOW = "overflow"   # Orphans and anything the ring walk missed


class GestureKind(str, Enum):
    """Phase of the current pointer gesture."""
    IDLE = "idle"
    PAN = "pan"
    NODE_DRAG_PENDING = "node_drag_pending"  # Pressed on a node, not moved yet
    NODE_DRAGGING = "node_dragging"


class LoadState(str, Enum):
    """Status of the session's most recent graph load."""
    IDLE = "idle"         # Nothing requested yet
    LOADING = "loading"   # A fetch is in flight
    READY = "ready"       # A laid-out graph is available
    ERROR = "error"       # The last request failed; previous graph retained
