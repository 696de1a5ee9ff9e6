"""
Graph Session ViewModel for the dependency graph view.

Manages:
- The current node/edge arrays and their layout
- Traversal depth and the focal resource
- Viewport state and pointer gestures (via InteractionController)
- Load state, including discarding superseded fetch results

The DependencyGraphCanvas widget receives state from this ViewModel and
focuses purely on rendering.
"""

import logging
from dataclasses import dataclass
from typing import Optional, List, Dict, Callable, Any

from PyQt6.QtCore import pyqtSignal

from .base import BaseViewModel
from depgraph_core.domain.models import (
    GraphNode, GraphEdge, GraphData, Point, ViewportState, RenderEdge,
)
from depgraph_core.domain.enums import Ring, LoadState, GestureKind
from depgraph_core.domain.errors import MissingRootError
from depgraph_core.ports.provider_port import GraphDataProvider, validate_depth
from depgraph_core.services.layout import (
    LayoutSettings, compute_layout, compute_rings, resolve_edges,
)
from depgraph_core.services.viewport import ViewportLimits
from depgraph_core.services.interaction import InteractionController

logger = logging.getLogger(__name__)


@dataclass
class GraphSettings:
    """Graph canvas and display settings."""
    canvas_width: float = 1000.0
    canvas_height: float = 800.0
    default_depth: int = 1

    # Level of detail
    node_label_min_zoom: float = 0.4
    edge_label_min_zoom: float = 0.6
    max_label_chars: int = 15
    truncated_label_chars: int = 12

    # Fonts
    node_font_size: int = 10
    type_font_size: int = 8
    edge_font_size: int = 9


def _default_worker_factory(provider, resource_id, depth, request_id):
    from ..workers.fetch_worker import GraphFetchWorker
    return GraphFetchWorker(provider, resource_id, depth, request_id)


class GraphSession(BaseViewModel):
    """
    ViewModel orchestrating layout, viewport and interaction for one graph.

    Signals:
        graph_changed: Emitted when a new graph has been laid out
        positions_changed: Emitted when a node is dragged
        viewport_changed: Emitted when pan or zoom changes
        load_state_changed(str): Emitted with the new LoadState value
        load_failed(str): Emitted with an error message
        depth_changed(int): Emitted when the traversal depth changes
        node_selected(str): Emitted when a node is selected for navigation

    State:
        nodes: Positioned nodes of the current graph
        edges: Edges of the current graph
        root_id: Focal node of the current graph
        viewport: Current pan/zoom
        load_state: IDLE, LOADING, READY or ERROR
    """

    # Signals
    graph_changed = pyqtSignal()
    positions_changed = pyqtSignal()
    viewport_changed = pyqtSignal()
    load_state_changed = pyqtSignal(str)
    load_failed = pyqtSignal(str)
    depth_changed = pyqtSignal(int)
    node_selected = pyqtSignal(str)

    def __init__(
        self,
        provider: GraphDataProvider,
        settings: Optional[GraphSettings] = None,
        layout_settings: Optional[LayoutSettings] = None,
        limits: Optional[ViewportLimits] = None,
        worker_factory: Optional[Callable[..., Any]] = None,
        on_node_select: Optional[Callable[[str], None]] = None,
    ):
        """
        Initialize the ViewModel.

        Args:
            provider: Source of node/edge lists
            settings: Canvas and display settings
            layout_settings: Radial layout tuning
            limits: Zoom bounds
            worker_factory: Builds a fetch worker from
                (provider, resource_id, depth, request_id); defaults to
                GraphFetchWorker
            on_node_select: Navigation callback for selected nodes
        """
        super().__init__()

        self._provider = provider
        self._settings = settings or GraphSettings()
        self._layout_settings = layout_settings or LayoutSettings()
        self._worker_factory = worker_factory or _default_worker_factory
        self._on_node_select = on_node_select

        self._controller = InteractionController(
            on_click=self.select_node,
            limits=limits,
        )

        # Graph state (replaced wholesale on every successful load)
        self._nodes: List[GraphNode] = []
        self._edges: List[GraphEdge] = []
        self._rings: Dict[str, Ring] = {}
        self._root_id: Optional[str] = None
        self._loaded_depth: Optional[int] = None

        # Request state
        self._requested_resource: Optional[str] = None
        self._depth = validate_depth(self._settings.default_depth)
        self._request_id = 0
        self._workers: Dict[int, Any] = {}

        self._load_state = LoadState.IDLE
        self._error_message: Optional[str] = None

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def settings(self) -> GraphSettings:
        return self._settings

    @property
    def nodes(self) -> List[GraphNode]:
        """Positioned nodes of the current graph."""
        return list(self._nodes)

    @property
    def edges(self) -> List[GraphEdge]:
        return list(self._edges)

    @property
    def render_edges(self) -> List[RenderEdge]:
        """Edges resolved to coordinates; dangling edges are dropped."""
        return resolve_edges(self._nodes, self._edges)

    @property
    def rings(self) -> Dict[str, Ring]:
        """Ring membership of the current graph's nodes."""
        return dict(self._rings)

    @property
    def root_id(self) -> Optional[str]:
        """Focal node of the graph currently displayed."""
        return self._root_id

    @property
    def resource_id(self) -> Optional[str]:
        """Resource of the pending request, or of the displayed graph after a failure."""
        return self._requested_resource

    @property
    def depth(self) -> int:
        """Depth of the pending request, or of the displayed graph after a failure."""
        return self._depth

    @property
    def loaded_depth(self) -> Optional[int]:
        return self._loaded_depth

    @property
    def viewport(self) -> ViewportState:
        return self._controller.viewport

    @property
    def zoom_percent(self) -> int:
        return round(self._controller.viewport.zoom * 100)

    @property
    def gesture(self) -> GestureKind:
        return self._controller.gesture

    @property
    def is_interacting(self) -> bool:
        """Whether a pan or drag is mid-flight (renderer skips transform animation)."""
        return self._controller.is_active

    @property
    def load_state(self) -> LoadState:
        return self._load_state

    @property
    def is_loading(self) -> bool:
        return self._load_state == LoadState.LOADING

    @property
    def error_message(self) -> Optional[str]:
        return self._error_message

    @property
    def has_graph(self) -> bool:
        return self._root_id is not None

    def get_node(self, node_id: str) -> Optional[GraphNode]:
        for node in self._nodes:
            if node.id == node_id:
                return node
        return None

    # -------------------------------------------------------------------------
    # Data Loading Commands
    # -------------------------------------------------------------------------

    def load_graph(self, resource_id: str, depth: Optional[int] = None) -> int:
        """
        Request the graph around a resource.

        Only the most recent request is ever applied; results of earlier
        requests are discarded when they arrive.

        Args:
            resource_id: ID of the focal resource
            depth: 1 = direct neighbors, 2 = extended (current depth if None)

        Returns:
            The request id
        """
        depth = validate_depth(self._depth if depth is None else depth)
        depth_changed = depth != self._depth

        self._request_id += 1
        request_id = self._request_id
        self._requested_resource = resource_id
        self._depth = depth

        logger.info("Loading graph for %s at depth %d (request %d)", resource_id, depth, request_id)
        self._set_load_state(LoadState.LOADING)
        if depth_changed:
            self.depth_changed.emit(depth)

        worker = self._worker_factory(self._provider, resource_id, depth, request_id)
        worker.loaded.connect(self._on_fetch_loaded)
        worker.failed.connect(self._on_fetch_failed)
        worker.finished.connect(lambda rid=request_id: self._workers.pop(rid, None))
        self._workers[request_id] = worker
        worker.start()

        return request_id

    def set_depth(self, depth: int) -> Optional[int]:
        """
        Change traversal depth, reloading the current resource.

        Returns:
            The new request id, or None if no resource has been requested
        """
        validate_depth(depth)
        if self._requested_resource is None:
            self._update("_depth", depth, self.depth_changed, depth)
            return None
        return self.load_graph(self._requested_resource, depth)

    def toggle_depth(self) -> Optional[int]:
        """Switch between direct-only and extended graphs."""
        return self.set_depth(2 if self._depth == 1 else 1)

    def reload(self) -> Optional[int]:
        """Re-request the current resource at the current depth."""
        if self._requested_resource is None:
            return None
        return self.load_graph(self._requested_resource, self._depth)

    def _on_fetch_loaded(self, request_id: int, data: GraphData) -> None:
        """Apply a fetch result if it belongs to the latest request."""
        if request_id != self._request_id:
            logger.debug("Discarding stale graph result (request %d, latest %d)",
                         request_id, self._request_id)
            return

        root_id = self._requested_resource
        try:
            nodes = compute_layout(
                data.nodes,
                data.edges,
                root_id,
                self._settings.canvas_width,
                self._settings.canvas_height,
                self._layout_settings,
            )
        except MissingRootError as e:
            self._fail(str(e))
            return

        self._nodes = nodes
        self._edges = list(data.edges)
        self._rings = compute_rings(nodes, self._edges, root_id)
        self._root_id = root_id
        self._loaded_depth = self._depth
        self._error_message = None

        self._controller.attach(self._nodes, root_id)
        self._controller.reset_viewport()

        self._set_load_state(LoadState.READY)
        self.graph_changed.emit()
        self.viewport_changed.emit()

    def _on_fetch_failed(self, request_id: int, message: str) -> None:
        if request_id != self._request_id:
            logger.debug("Discarding stale fetch failure (request %d): %s", request_id, message)
            return
        self._fail(message)

    def _fail(self, message: str) -> None:
        """
        Enter the error state, keeping the previous graph and viewport.

        Resource and depth fall back to the graph still on screen, so
        depth changes and reloads act on what the user sees.
        """
        logger.warning("Graph load failed for %s: %s", self._requested_resource, message)
        if self._root_id is not None:
            self._requested_resource = self._root_id
            self._update("_depth", self._loaded_depth, self.depth_changed, self._loaded_depth)
        self._error_message = message
        self._set_load_state(LoadState.ERROR)
        self.load_failed.emit(message)

    def _set_load_state(self, state: LoadState) -> None:
        self._update("_load_state", state, self.load_state_changed, state.value)

    # -------------------------------------------------------------------------
    # Selection
    # -------------------------------------------------------------------------

    def select_node(self, node_id: str) -> bool:
        """
        Select a node for navigation.

        Rejected for the root node, for unknown nodes, and while a
        gesture is in progress.

        Returns:
            True if the selection was forwarded
        """
        if node_id == self._root_id:
            logger.debug("Ignoring selection of root node %s", node_id)
            return False
        if self._controller.is_active:
            logger.debug("Ignoring selection of %s during a gesture", node_id)
            return False
        if self.get_node(node_id) is None:
            logger.debug("Ignoring selection of unknown node %s", node_id)
            return False

        self.node_selected.emit(node_id)
        if self._on_node_select is not None:
            self._on_node_select(node_id)
        return True

    # -------------------------------------------------------------------------
    # Pointer Commands
    # -------------------------------------------------------------------------

    def pointer_down(self, x: float, y: float, target_node_id: Optional[str] = None) -> None:
        self._controller.pointer_down(Point(x, y), target_node_id)

    def pointer_move(self, x: float, y: float) -> None:
        kind = self._controller.pointer_move(Point(x, y))
        if kind == GestureKind.PAN:
            self.viewport_changed.emit()
        elif kind == GestureKind.NODE_DRAGGING:
            self.positions_changed.emit()

    def pointer_up(self) -> Optional[str]:
        """End the gesture; returns the clicked node id, if any."""
        return self._controller.pointer_up()

    def cancel_gesture(self) -> None:
        self._controller.cancel_gesture()

    # -------------------------------------------------------------------------
    # Viewport Commands
    # -------------------------------------------------------------------------

    def zoom_by(self, delta: float) -> None:
        before = self._controller.viewport.zoom
        if self._controller.zoom_by(delta) != before:
            self.viewport_changed.emit()

    def zoom_in(self) -> None:
        self.zoom_by(self._controller.limits.zoom_step)

    def zoom_out(self) -> None:
        self.zoom_by(-self._controller.limits.zoom_step)

    def zoom_at(self, x: float, y: float, delta: float) -> None:
        """Zoom toward a screen position (mouse wheel)."""
        before = self._controller.viewport
        self._controller.zoom_at(Point(x, y), delta)
        if self._controller.viewport != before:
            self.viewport_changed.emit()

    def reset_viewport(self) -> None:
        self._controller.reset_viewport()
        self.viewport_changed.emit()
