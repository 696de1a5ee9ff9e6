"""
Main Window for DepGraph.

Thin view layer using MVVM pattern:
- GraphSession holds state and orchestration
- This view handles UI layout and binding
- Selecting a node navigates to that resource's own graph
"""

from typing import List

from PyQt6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QFrame,
    QLabel, QPushButton, QStatusBar,
)

from depgraph_core.ports.provider_port import GraphDataProvider
from depgraph_core.domain.enums import LoadState
from ..viewmodels import GraphSession, GraphSettings
from .graph_canvas import DependencyGraphCanvas


class MainWindow(QMainWindow):
    """Main application window using MVVM pattern."""

    def __init__(self, provider: GraphDataProvider, root_id: str, depth: int = 1):
        super().__init__()

        self.setWindowTitle("DepGraph - Resource Dependencies")
        self.resize(1100, 900)

        self._session = GraphSession(provider, GraphSettings(default_depth=depth))
        self._history: List[str] = []

        # Setup UI
        self._setup_ui()
        self._setup_status_bar()

        # Bind ViewModel to UI
        self._bind_viewmodel()

        # Initial data load
        self._session.load_graph(root_id, depth)

    @property
    def session(self) -> GraphSession:
        return self._session

    # -------------------------------------------------------------------------
    # UI Setup
    # -------------------------------------------------------------------------

    def _setup_ui(self):
        central = QWidget()
        self.setCentralWidget(central)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        layout.addWidget(self._create_header())

        self._canvas = DependencyGraphCanvas(self._session)
        layout.addWidget(self._canvas, stretch=1)

    def _create_header(self) -> QFrame:
        header = QFrame()
        header.setObjectName("headerBar")
        row = QHBoxLayout(header)
        row.setContentsMargins(16, 12, 16, 12)

        self._back_btn = QPushButton("◀ Back")
        self._back_btn.setEnabled(False)
        self._back_btn.clicked.connect(self._on_back_clicked)
        row.addWidget(self._back_btn)

        titles = QVBoxLayout()
        title = QLabel("Resource Dependencies")
        title.setObjectName("titleLabel")
        titles.addWidget(title)
        self._subtitle = QLabel("")
        self._subtitle.setObjectName("subtitleLabel")
        titles.addWidget(self._subtitle)
        row.addLayout(titles)
        row.addStretch()

        self._depth_btn = QPushButton()
        self._depth_btn.setCheckable(True)
        self._depth_btn.clicked.connect(self._session.toggle_depth)
        row.addWidget(self._depth_btn)

        zoom_out = QPushButton("−")
        zoom_out.setToolTip("Zoom out")
        zoom_out.clicked.connect(self._session.zoom_out)
        row.addWidget(zoom_out)

        self._zoom_label = QLabel("100%")
        self._zoom_label.setObjectName("zoomLabel")
        row.addWidget(self._zoom_label)

        zoom_in = QPushButton("+")
        zoom_in.setToolTip("Zoom in")
        zoom_in.clicked.connect(self._session.zoom_in)
        row.addWidget(zoom_in)

        reset = QPushButton("Reset View")
        reset.clicked.connect(self._session.reset_viewport)
        row.addWidget(reset)

        reload_btn = QPushButton("Reload")
        reload_btn.clicked.connect(self._session.reload)
        row.addWidget(reload_btn)

        self._update_depth_button()
        return header

    def _setup_status_bar(self):
        self._status = QStatusBar()
        self.setStatusBar(self._status)

    def _bind_viewmodel(self):
        self._session.graph_changed.connect(self._on_graph_changed)
        self._session.viewport_changed.connect(self._on_viewport_changed)
        self._session.depth_changed.connect(lambda _depth: self._update_depth_button())
        self._session.load_state_changed.connect(self._on_load_state_changed)
        self._session.load_failed.connect(lambda msg: self._status.showMessage(msg, 5000))
        self._session.node_selected.connect(self._on_node_selected)

    # -------------------------------------------------------------------------
    # ViewModel Handlers
    # -------------------------------------------------------------------------

    def _on_graph_changed(self):
        self._subtitle.setText(f"Visualizing relationships for {self._session.root_id}")
        count = len(self._session.nodes)
        self._status.showMessage(f"{count} resources, {len(self._session.render_edges)} relationships")

    def _on_viewport_changed(self):
        self._zoom_label.setText(f"{self._session.zoom_percent}%")

    def _on_load_state_changed(self, state: str):
        if state == LoadState.LOADING.value:
            self._status.showMessage(f"Loading {self._session.resource_id}...")

    def _update_depth_button(self):
        extended = self._session.depth == 2
        self._depth_btn.setChecked(extended)
        self._depth_btn.setText("Extended Graph" if extended else "Direct Only")
        self._depth_btn.setToolTip(
            "Show direct dependencies only" if extended else "Show extended dependencies"
        )

    def _on_node_selected(self, node_id: str):
        """Navigate to the selected resource's own dependency graph."""
        if self._session.root_id is not None:
            self._history.append(self._session.root_id)
        self._back_btn.setEnabled(True)
        self._session.load_graph(node_id)

    def _on_back_clicked(self):
        if not self._history:
            return
        previous = self._history.pop()
        self._back_btn.setEnabled(bool(self._history))
        self._session.load_graph(previous)
