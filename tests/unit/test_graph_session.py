"""
Tests for the GraphSession ViewModel.

Fetch workers are replaced by FakeWorker so each test decides when (and
in which order) requests complete.
"""

import pytest
from PyQt6.QtCore import QObject, pyqtSignal

from depgraph_core.domain.models import GraphNode, GraphEdge, GraphData, ViewportState
from depgraph_core.domain.enums import LoadState, Ring, GestureKind
from depgraph_core.adapters.memory_provider import InMemoryGraphProvider
from depgraph_app.viewmodels.graph_session import GraphSession, GraphSettings


class FakeWorker(QObject):
    """Stand-in for GraphFetchWorker that runs only when told to."""

    loaded = pyqtSignal(int, object)
    failed = pyqtSignal(int, str)
    finished = pyqtSignal()

    def __init__(self, provider, resource_id, depth, request_id):
        super().__init__()
        self.provider = provider
        self.resource_id = resource_id
        self.depth = depth
        self.request_id = request_id
        self.started = False

    def start(self):
        self.started = True

    def complete(self):
        """Run the fetch and report like the real worker."""
        try:
            data = self.provider.fetch_graph(self.resource_id, self.depth)
            self.loaded.emit(self.request_id, data)
        except Exception as e:
            self.failed.emit(self.request_id, f"Fetch failed: {e}")
        self.finished.emit()

    def deliver(self, data: GraphData):
        """Report arbitrary data as this request's result."""
        self.loaded.emit(self.request_id, data)
        self.finished.emit()


def node(node_id: str) -> GraphNode:
    return GraphNode(id=node_id, display_name=node_id, category="instance", service_tag="ec2")


def provider() -> InMemoryGraphProvider:
    nodes = [node(n) for n in ("web", "vpc", "sg", "igw", "db", "bucket")]
    edges = [
        GraphEdge("web", "vpc", "member of"),
        GraphEdge("web", "sg", "protected by"),
        GraphEdge("vpc", "igw", "attached"),
        GraphEdge("sg", "db", "allows"),
        GraphEdge("bucket", "db", "backs up"),
    ]
    return InMemoryGraphProvider(nodes, edges)


@pytest.fixture
def session(qapp):
    """Session with a fake worker factory; workers are recorded in .workers."""
    workers = []

    def factory(*args):
        worker = FakeWorker(*args)
        workers.append(worker)
        return worker

    selected = []
    s = GraphSession(provider(), worker_factory=factory, on_node_select=selected.append)
    s.workers = workers
    s.selected = selected
    return s


def loaded(session, resource="web", depth=1):
    session.load_graph(resource, depth)
    session.workers[-1].complete()
    return session


class TestLoading:
    """Test graph loading and layout application."""

    def test_load_applies_layout(self, session):
        """A completed load lays out the graph around the resource."""
        events = []
        session.graph_changed.connect(lambda: events.append("graph"))

        loaded(session)

        assert session.load_state == LoadState.READY
        assert session.root_id == "web"
        assert {n.id for n in session.nodes} == {"web", "vpc", "sg"}
        root = session.get_node("web")
        assert (root.x, root.y) == (500.0, 400.0)
        assert session.rings["vpc"] == Ring.RING1
        assert events == ["graph"]

    def test_loading_state_while_in_flight(self, session):
        """The session reports LOADING until the worker answers."""
        states = []
        session.load_state_changed.connect(states.append)

        session.load_graph("web", 1)

        assert session.is_loading
        assert session.workers[0].started
        assert states == ["loading"]

    def test_depth_two_includes_second_ring(self, session):
        """Depth 2 brings in two-hop neighbors."""
        loaded(session, depth=2)

        assert session.rings["igw"] == Ring.RING2
        assert session.rings["db"] == Ring.RING2
        assert session.loaded_depth == 2

    def test_load_resets_viewport_and_gesture(self, session):
        """A new graph starts with the default viewport and no gesture."""
        loaded(session)
        session.zoom_by(0.5)
        session.pointer_down(10, 10)
        session.pointer_move(50, 20)

        loaded(session, "vpc")

        assert session.viewport == ViewportState()
        assert session.gesture == GestureKind.IDLE

    def test_render_edges(self, session):
        """Edges are resolved to coordinates for the renderer."""
        loaded(session)
        labels = {e.label for e in session.render_edges}
        assert labels == {"member of", "protected by"}

    def test_invalid_depth_rejected(self, session):
        """Depth must be 1 or 2."""
        with pytest.raises(ValueError):
            session.load_graph("web", 3)


class TestStaleResults:
    """Test last-requested-wins ordering."""

    def test_second_resolves_first(self, session):
        """The later request wins even when it finishes first."""
        session.load_graph("web", 1)
        session.load_graph("vpc", 1)
        first, second = session.workers

        second.complete()
        first.complete()

        assert session.root_id == "vpc"
        assert {n.id for n in session.nodes} == {"vpc", "web", "igw"}

    def test_first_resolves_first(self, session):
        """An earlier request finishing first is still discarded."""
        session.load_graph("web", 1)
        session.load_graph("vpc", 1)
        first, second = session.workers

        first.complete()
        assert session.is_loading
        assert session.root_id is None

        second.complete()
        assert session.root_id == "vpc"

    def test_stale_failure_ignored(self, session):
        """A superseded request failing does not put the session in error."""
        session.load_graph("missing", 1)
        session.load_graph("web", 1)
        first, second = session.workers

        second.complete()
        first.complete()

        assert session.load_state == LoadState.READY
        assert session.error_message is None


class TestFailures:
    """Test error handling."""

    def test_fetch_failure(self, session):
        """Provider errors surface as ERROR with a message."""
        messages = []
        session.load_failed.connect(messages.append)

        loaded(session, "missing")

        assert session.load_state == LoadState.ERROR
        assert "Unknown resource" in session.error_message
        assert messages == [session.error_message]

    def test_failure_keeps_previous_graph(self, session):
        """A failed reload leaves the last good graph and viewport on screen."""
        loaded(session)
        session.zoom_by(0.3)
        before_nodes = [(n.id, n.x, n.y) for n in session.nodes]
        before_viewport = session.viewport

        loaded(session, "missing")

        assert session.root_id == "web"
        assert [(n.id, n.x, n.y) for n in session.nodes] == before_nodes
        assert session.viewport == before_viewport

    def test_failure_restores_displayed_depth_and_resource(self, session):
        """After a failed load, depth changes act on the graph still shown."""
        loaded(session)
        depths = []
        session.depth_changed.connect(depths.append)

        loaded(session, "missing", 2)

        assert session.root_id == "web"
        assert session.depth == 1
        assert session.resource_id == "web"
        assert depths == [2, 1]

        session.set_depth(2)

        worker = session.workers[-1]
        assert (worker.resource_id, worker.depth) == ("web", 2)

    def test_failure_without_graph_keeps_request(self, session):
        """With nothing displayed yet, the failed request stays current for reload."""
        loaded(session, "missing", 2)

        assert session.resource_id == "missing"
        assert session.depth == 2

    def test_missing_root_keeps_previous_graph(self, session):
        """Provider data without the requested root fails the layout pass."""
        loaded(session)

        session.load_graph("vpc", 1)
        session.workers[-1].deliver(GraphData(nodes=[node("sg")], edges=[]))

        assert session.load_state == LoadState.ERROR
        assert "vpc" in session.error_message
        assert session.root_id == "web"


class TestDepth:
    """Test depth changes."""

    def test_set_depth_reloads_same_resource(self, session):
        """Changing depth re-requests the current resource."""
        loaded(session)
        depths = []
        session.depth_changed.connect(depths.append)

        session.set_depth(2)

        worker = session.workers[-1]
        assert (worker.resource_id, worker.depth) == ("web", 2)
        assert depths == [2]

    def test_toggle_depth(self, session):
        """toggle_depth flips between 1 and 2."""
        loaded(session)
        session.toggle_depth()
        assert session.depth == 2
        session.toggle_depth()
        assert session.depth == 1

    def test_set_depth_without_resource(self, session):
        """With nothing requested yet, depth is just stored."""
        assert session.set_depth(2) is None
        assert session.depth == 2
        assert session.workers == []

    def test_reload(self, session):
        """reload re-issues the current request."""
        loaded(session, depth=2)
        session.reload()
        worker = session.workers[-1]
        assert (worker.resource_id, worker.depth) == ("web", 2)

    def test_default_depth_from_settings(self, qapp):
        """The initial depth comes from GraphSettings."""
        s = GraphSession(provider(), GraphSettings(default_depth=2),
                         worker_factory=FakeWorker)
        assert s.depth == 2


class TestSelection:
    """Test node selection rules."""

    def test_click_selects_node(self, session):
        """Pointer down/up on a node fires the selection."""
        loaded(session)
        emitted = []
        session.node_selected.connect(emitted.append)
        vpc = session.get_node("vpc")

        session.pointer_down(vpc.x, vpc.y, "vpc")
        session.pointer_up()

        assert emitted == ["vpc"]
        assert session.selected == ["vpc"]

    def test_drag_does_not_select(self, session):
        """A moved gesture repositions instead of selecting."""
        loaded(session)
        moves = []
        session.positions_changed.connect(lambda: moves.append(1))

        session.pointer_down(700, 400, "vpc")
        session.pointer_move(650, 350)
        session.pointer_up()

        assert session.selected == []
        assert moves == [1]
        vpc = session.get_node("vpc")
        assert (vpc.x, vpc.y) == (650.0, 350.0)

    def test_root_not_selectable(self, session):
        """select_node refuses the root."""
        loaded(session)
        assert session.select_node("web") is False
        assert session.selected == []

    def test_not_selectable_mid_drag(self, session):
        """select_node refuses while a gesture is active."""
        loaded(session)
        session.pointer_down(700, 400, "vpc")
        assert session.is_interacting
        assert session.select_node("sg") is False

    def test_unknown_node_not_selectable(self, session):
        """Ids outside the graph are ignored."""
        loaded(session)
        assert session.select_node("db") is False

    def test_direct_select(self, session):
        """Selecting a non-root node while idle forwards it."""
        loaded(session)
        assert session.select_node("sg") is True
        assert session.selected == ["sg"]


class TestViewportCommands:
    """Test viewport commands and notifications."""

    def test_pan_emits_viewport_changed(self, session):
        """Panning notifies the view."""
        loaded(session)
        events = []
        session.viewport_changed.connect(lambda: events.append(1))

        session.pointer_down(0, 0)
        session.pointer_move(25, -5)
        session.pointer_up()

        assert events == [1]
        assert (session.viewport.pan_x, session.viewport.pan_y) == (25, -5)

    def test_zoom_percent(self, session):
        """The zoom readout is a whole percentage."""
        session.zoom_in()
        session.zoom_in()
        assert session.zoom_percent == 120

    def test_zoom_at_limit_is_silent(self, session):
        """No notification when zoom is already clamped."""
        session.zoom_by(5.0)
        events = []
        session.viewport_changed.connect(lambda: events.append(1))

        session.zoom_in()

        assert session.viewport.zoom == 2.0
        assert events == []

    def test_reset(self, session):
        """reset_viewport restores the default transform."""
        session.zoom_by(-0.5)
        session.pointer_down(0, 0)
        session.pointer_move(10, 10)
        session.pointer_up()

        session.reset_viewport()

        assert session.viewport == ViewportState(pan_x=0.0, pan_y=0.0, zoom=1.0)
