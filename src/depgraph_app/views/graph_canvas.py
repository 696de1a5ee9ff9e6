"""
Dependency Graph Canvas - Interactive resource dependency visualization.

Renders the GraphSession's nodes and edges with QPainter under the
session's pan+zoom transform and forwards mouse input to the session.
"""

from typing import Optional

from PyQt6.QtWidgets import QWidget
from PyQt6.QtCore import Qt, QPointF, QRectF
from PyQt6.QtGui import (
    QColor, QPainter, QPen, QBrush, QFont,
    QMouseEvent, QWheelEvent,
)

from depgraph_core.domain.models import Point
from depgraph_core.domain.enums import LoadState, Ring
from depgraph_core.services.viewport import to_logical
from ..viewmodels.graph_session import GraphSession
from ..resources.styles import COLORS
from .presentation import (
    node_at, node_radius, service_glyph, truncate_label,
    show_node_labels, show_edge_labels, loading_message, legend_entries,
)


class DependencyGraphCanvas(QWidget):
    """Custom widget for drawing the dependency graph using QPainter."""

    WHEEL_ZOOM_STEP = 0.1

    def __init__(self, session: GraphSession, parent=None):
        super().__init__(parent)
        self._session = session
        self._hovered_id: Optional[str] = None

        self.bg_color = QColor(COLORS["bg_primary"])
        self.card_color = QColor(COLORS["bg_secondary"])
        self.edge_color = QColor(COLORS["border"])
        self.accent_color = QColor(COLORS["accent"])
        self.accent_hover = QColor(COLORS["accent_hover"])
        self.text_color = QColor(COLORS["text_primary"])
        self.muted_color = QColor(COLORS["text_secondary"])

        self.setMouseTracking(True)
        self.setMinimumSize(400, 300)

        # Repaint on any session change
        session.graph_changed.connect(self.update)
        session.positions_changed.connect(self.update)
        session.viewport_changed.connect(self.update)
        session.load_state_changed.connect(lambda _state: self.update())

    # -------------------------------------------------------------------------
    # Painting
    # -------------------------------------------------------------------------

    def paintEvent(self, event):
        """Paint the graph."""
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        # Background (drawn without transform)
        painter.fillRect(self.rect(), self.bg_color)

        session = self._session
        if not session.has_graph:
            painter.setPen(QPen(self.muted_color))
            painter.setFont(QFont("Segoe UI", 11))
            painter.drawText(self.rect(), Qt.AlignmentFlag.AlignCenter, self._status_text())
            return

        viewport = session.viewport
        settings = session.settings
        rings = session.rings

        painter.save()
        painter.translate(viewport.pan_x, viewport.pan_y)
        painter.scale(viewport.zoom, viewport.zoom)

        # Edges
        edge_pen = QPen(self.edge_color)
        edge_pen.setWidthF(1.5)
        draw_edge_labels = show_edge_labels(viewport.zoom, settings.edge_label_min_zoom)
        painter.setFont(QFont("Segoe UI", settings.edge_font_size))
        for edge in session.render_edges:
            painter.setPen(edge_pen)
            painter.drawLine(QPointF(edge.x1, edge.y1), QPointF(edge.x2, edge.y2))
            if draw_edge_labels and edge.label:
                mid = edge.midpoint
                painter.setPen(QPen(self.muted_color))
                painter.drawText(
                    QRectF(mid.x - 60, mid.y - 16, 120, 12),
                    Qt.AlignmentFlag.AlignCenter,
                    edge.label,
                )

        # Nodes
        draw_labels = show_node_labels(viewport.zoom, settings.node_label_min_zoom)
        for node in session.nodes:
            if not node.is_placed:
                continue
            ring = rings.get(node.id)
            r = node_radius(ring)
            center = QPointF(node.x, node.y)
            is_root = ring == Ring.ROOT

            if is_root:
                painter.setBrush(QBrush(self.accent_color))
                painter.setPen(QPen(self.accent_hover, 4))
            else:
                painter.setBrush(QBrush(self.card_color))
                outline = self.accent_color if node.id == self._hovered_id else self.edge_color
                painter.setPen(QPen(outline, 2))
            painter.drawEllipse(center, r, r)

            painter.setPen(QPen(self.text_color))
            painter.setFont(QFont("Segoe UI", 8, QFont.Weight.Bold))
            painter.drawText(QRectF(node.x - r, node.y - r, 2 * r, 2 * r),
                             Qt.AlignmentFlag.AlignCenter, service_glyph(node))

            if draw_labels:
                name = truncate_label(node.display_name, settings.max_label_chars,
                                      settings.truncated_label_chars)
                painter.setFont(QFont("Segoe UI", settings.node_font_size, QFont.Weight.Bold))
                painter.drawText(QRectF(node.x - 80, node.y + r + 3, 160, 14),
                                 Qt.AlignmentFlag.AlignCenter, name)
                painter.setPen(QPen(self.muted_color))
                painter.setFont(QFont("Segoe UI", settings.type_font_size))
                painter.drawText(QRectF(node.x - 80, node.y + r + 16, 160, 12),
                                 Qt.AlignmentFlag.AlignCenter, node.category.upper())

        painter.restore()

        # Error banner over a retained graph
        if session.load_state == LoadState.ERROR:
            painter.setPen(QPen(QColor(COLORS["error"])))
            painter.setFont(QFont("Segoe UI", 9))
            painter.drawText(10, 20, session.error_message or "Load failed")

        self._draw_legend(painter, session.loaded_depth or session.depth)

        # Loading overlay while a new graph is fetched over the current one
        if session.is_loading:
            shade = QColor(self.bg_color)
            shade.setAlpha(170)
            painter.fillRect(self.rect(), shade)
            painter.setPen(QPen(self.muted_color))
            painter.setFont(QFont("Segoe UI", 11))
            painter.drawText(self.rect(), Qt.AlignmentFlag.AlignCenter,
                             loading_message(session.depth))

    def _draw_legend(self, painter: QPainter, depth: int):
        """Ring legend in the bottom-left corner, in screen space."""
        entries = legend_entries(depth)
        row_height = 18
        box = QRectF(12, self.height() - 36 - row_height * len(entries), 170,
                     24 + row_height * len(entries))

        painter.setPen(QPen(self.edge_color))
        painter.setBrush(QBrush(self.card_color))
        painter.drawRoundedRect(box, 6, 6)

        painter.setPen(QPen(self.text_color))
        painter.setFont(QFont("Segoe UI", 8, QFont.Weight.Bold))
        painter.drawText(QPointF(box.left() + 10, box.top() + 16), "Legend")

        painter.setFont(QFont("Segoe UI", 8))
        for i, (ring, caption) in enumerate(entries):
            y = box.top() + 30 + i * row_height
            center = QPointF(box.left() + 16, y - 4)
            if ring == Ring.ROOT:
                painter.setPen(QPen(self.accent_hover, 1))
                painter.setBrush(QBrush(self.accent_color))
            else:
                painter.setPen(QPen(self.edge_color, 1))
                painter.setBrush(QBrush(self.card_color))
            size = 6 if ring != Ring.RING2 else 5
            painter.drawEllipse(center, size, size)
            painter.setPen(QPen(self.muted_color))
            painter.drawText(QPointF(box.left() + 30, y), caption)

    def _status_text(self) -> str:
        session = self._session
        if session.load_state == LoadState.LOADING:
            return loading_message(session.depth)
        if session.load_state == LoadState.ERROR:
            return session.error_message or "Load failed"
        return "No resource selected"

    # -------------------------------------------------------------------------
    # Mouse Input
    # -------------------------------------------------------------------------

    def _node_under(self, pos: QPointF) -> Optional[str]:
        if not self._session.has_graph:
            return None
        logical = to_logical(Point(pos.x(), pos.y()), self._session.viewport)
        return node_at(self._session.nodes, logical, self._session.rings)

    def mousePressEvent(self, event: QMouseEvent):
        """Start a pan or node drag."""
        if event.button() == Qt.MouseButton.LeftButton:
            pos = event.position()
            target = self._node_under(pos)
            self._session.pointer_down(pos.x(), pos.y(), target)
            if target is None:
                self.setCursor(Qt.CursorShape.ClosedHandCursor)
            event.accept()
            return
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event: QMouseEvent):
        """Continue the gesture, or update hover."""
        pos = event.position()
        if self._session.is_interacting:
            self._session.pointer_move(pos.x(), pos.y())
            event.accept()
            return

        hovered = self._node_under(pos)
        if hovered != self._hovered_id:
            self._hovered_id = hovered
            node = self._session.get_node(hovered) if hovered else None
            if node is not None and hovered != self._session.root_id:
                self.setCursor(Qt.CursorShape.PointingHandCursor)
                self.setToolTip(f"Click to visualize dependencies for {node.display_name}")
            else:
                self.setCursor(Qt.CursorShape.ArrowCursor)
                self.setToolTip("")
            self.update()
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event: QMouseEvent):
        """End the gesture; a still click selects the node."""
        if event.button() == Qt.MouseButton.LeftButton:
            self._session.pointer_up()
            self.setCursor(Qt.CursorShape.ArrowCursor)
            event.accept()
            return
        super().mouseReleaseEvent(event)

    def leaveEvent(self, event):
        """Abandon any gesture when the pointer leaves the canvas."""
        self._session.cancel_gesture()
        self._hovered_id = None
        self.setCursor(Qt.CursorShape.ArrowCursor)
        self.update()
        super().leaveEvent(event)

    def wheelEvent(self, event: QWheelEvent):
        """Zoom toward the mouse position."""
        delta = event.angleDelta().y()
        if delta == 0:
            return
        step = self.WHEEL_ZOOM_STEP if delta > 0 else -self.WHEEL_ZOOM_STEP
        pos = event.position()
        self._session.zoom_at(pos.x(), pos.y(), step)
        event.accept()
