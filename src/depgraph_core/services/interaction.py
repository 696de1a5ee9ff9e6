"""
Interaction Controller - pointer gesture state machine.

One gesture is active at a time::

    IDLE --down on node--> NODE_DRAG_PENDING --move--> NODE_DRAGGING --up--> IDLE
    IDLE --down on canvas--> PAN --up--> IDLE

Pan deltas are applied in screen space. Node drags write the pointer's
logical position (under the current viewport) straight into the shared
node objects. A press and release on the same node with no movement is
a click; clicks on the root are never reported.
"""

import logging
from typing import Callable, Dict, List, Optional

from ..domain.models import GraphNode, Point, ViewportState, DragState, PanState
from ..domain.enums import GestureKind
from .viewport import (
    ViewportLimits, DEFAULT_LIMITS, to_logical, zoom_by, zoom_about, pan_by,
)

logger = logging.getLogger(__name__)


class InteractionController:
    """
    Consumes pointer events and mutates node positions / viewport state.

    Never triggers a re-layout; only loading a new graph does that.
    """

    def __init__(
        self,
        on_click: Optional[Callable[[str], None]] = None,
        limits: Optional[ViewportLimits] = None,
    ):
        """
        Initialize the controller.

        Args:
            on_click: Called with the node id when a non-root node is clicked
            limits: Zoom bounds (defaults if None)
        """
        self._on_click = on_click
        self._limits = limits or DEFAULT_LIMITS

        self._nodes: Dict[str, GraphNode] = {}
        self._root_id: Optional[str] = None
        self._viewport = ViewportState()

        self._kind = GestureKind.IDLE
        self._drag = DragState()
        self._pan = PanState()

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def viewport(self) -> ViewportState:
        """Current viewport (a copy; mutate through the zoom/pan operations)."""
        return self._viewport.copy()

    @property
    def gesture(self) -> GestureKind:
        return self._kind

    @property
    def is_active(self) -> bool:
        """True while a pan or node drag gesture is in progress."""
        return self._kind != GestureKind.IDLE

    @property
    def is_dragging_node(self) -> bool:
        return self._kind in (GestureKind.NODE_DRAG_PENDING, GestureKind.NODE_DRAGGING)

    @property
    def drag_state(self) -> DragState:
        return DragState(self._drag.dragged_node_id, self._drag.has_moved)

    @property
    def pan_state(self) -> PanState:
        return PanState(self._pan.is_panning, self._pan.last_pointer)

    @property
    def root_id(self) -> Optional[str]:
        return self._root_id

    @property
    def limits(self) -> ViewportLimits:
        return self._limits

    # -------------------------------------------------------------------------
    # Graph Binding
    # -------------------------------------------------------------------------

    def attach(self, nodes: List[GraphNode], root_id: str) -> None:
        """
        Bind to a freshly laid-out node list.

        Drags write into these node objects. Any gesture in progress
        is dropped.
        """
        self._nodes = {}
        for node in nodes:
            self._nodes.setdefault(node.id, node)
        self._root_id = root_id
        self._clear_gesture()

    def set_on_click(self, callback: Optional[Callable[[str], None]]) -> None:
        self._on_click = callback

    # -------------------------------------------------------------------------
    # Pointer Events
    # -------------------------------------------------------------------------

    def pointer_down(self, position: Point, target_node_id: Optional[str] = None) -> GestureKind:
        """
        Start a gesture.

        Args:
            position: Pointer position in screen space
            target_node_id: Node under the pointer, if any

        Returns:
            The gesture kind that was entered
        """
        self._clear_gesture()

        if target_node_id is not None and target_node_id in self._nodes:
            self._kind = GestureKind.NODE_DRAG_PENDING
            self._drag = DragState(dragged_node_id=target_node_id, has_moved=False)
        else:
            if target_node_id is not None:
                logger.debug("Pointer down on unknown node %s; panning instead", target_node_id)
            self._kind = GestureKind.PAN
            self._pan = PanState(is_panning=True, last_pointer=position)

        return self._kind

    def pointer_move(self, position: Point) -> GestureKind:
        """
        Continue the active gesture.

        Returns:
            The gesture kind that handled the move (IDLE if none was active)
        """
        if self._kind == GestureKind.PAN:
            last = self._pan.last_pointer or position
            self._viewport = pan_by(self._viewport, position.x - last.x, position.y - last.y)
            self._pan.last_pointer = position
        elif self.is_dragging_node:
            self._drag.has_moved = True
            self._kind = GestureKind.NODE_DRAGGING
            node = self._nodes.get(self._drag.dragged_node_id)
            if node is not None:
                logical = to_logical(position, self._viewport)
                node.x, node.y = logical.x, logical.y
        return self._kind

    def pointer_up(self) -> Optional[str]:
        """
        End the active gesture.

        Returns:
            The clicked node id if the gesture was a click on a non-root
            node, otherwise None
        """
        clicked: Optional[str] = None
        if self._kind == GestureKind.NODE_DRAG_PENDING and not self._drag.has_moved:
            node_id = self._drag.dragged_node_id
            if node_id is not None and node_id != self._root_id:
                clicked = node_id

        self._clear_gesture()

        if clicked is not None and self._on_click is not None:
            self._on_click(clicked)
        return clicked

    def cancel_gesture(self) -> None:
        """Abandon the active gesture without reporting a click (pointer left the canvas)."""
        self._clear_gesture()

    def _clear_gesture(self) -> None:
        self._kind = GestureKind.IDLE
        self._drag = DragState()
        self._pan = PanState()

    # -------------------------------------------------------------------------
    # Viewport Commands
    # -------------------------------------------------------------------------

    def zoom_by(self, delta: float) -> float:
        """Adjust zoom additively, clamped to the limits. Returns the new zoom."""
        self._viewport = zoom_by(self._viewport, delta, self._limits)
        return self._viewport.zoom

    def zoom_in(self) -> float:
        return self.zoom_by(self._limits.zoom_step)

    def zoom_out(self) -> float:
        return self.zoom_by(-self._limits.zoom_step)

    def zoom_at(self, anchor: Point, delta: float) -> float:
        """Zoom keeping the graph point under ``anchor`` fixed on screen."""
        self._viewport = zoom_about(self._viewport, anchor, delta, self._limits)
        return self._viewport.zoom

    def reset_viewport(self) -> None:
        self._viewport = ViewportState(pan_x=0.0, pan_y=0.0, zoom=1.0)
