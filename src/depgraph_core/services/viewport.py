"""
Viewport math - conversions between screen and logical graph space.

Screen space is pixels after the pan+zoom transform; logical space is
where node positions are stored. The transform is::

    screen = logical * zoom + pan
"""

from dataclasses import dataclass

from ..domain.models import Point, ViewportState


@dataclass
class ViewportLimits:
    """Zoom bounds and button step."""
    min_zoom: float = 0.3
    max_zoom: float = 2.0
    zoom_step: float = 0.1


DEFAULT_LIMITS = ViewportLimits()


def to_screen(point: Point, viewport: ViewportState) -> Point:
    """Map a logical point to screen space."""
    return Point(
        point.x * viewport.zoom + viewport.pan_x,
        point.y * viewport.zoom + viewport.pan_y,
    )


def to_logical(point: Point, viewport: ViewportState) -> Point:
    """
    Map a screen point to logical space.

    Exact inverse of to_screen for any zoom > 0.
    """
    if viewport.zoom <= 0:
        raise ValueError(f"Zoom must be positive, got {viewport.zoom}")
    return Point(
        (point.x - viewport.pan_x) / viewport.zoom,
        (point.y - viewport.pan_y) / viewport.zoom,
    )


def clamp_zoom(zoom: float, limits: ViewportLimits = DEFAULT_LIMITS) -> float:
    return max(limits.min_zoom, min(limits.max_zoom, zoom))


def zoom_by(
    viewport: ViewportState,
    delta: float,
    limits: ViewportLimits = DEFAULT_LIMITS,
) -> ViewportState:
    """Return a viewport with zoom adjusted additively and clamped."""
    return ViewportState(
        pan_x=viewport.pan_x,
        pan_y=viewport.pan_y,
        zoom=clamp_zoom(viewport.zoom + delta, limits),
    )


def zoom_about(
    viewport: ViewportState,
    anchor: Point,
    delta: float,
    limits: ViewportLimits = DEFAULT_LIMITS,
) -> ViewportState:
    """
    Zoom while keeping the logical point under ``anchor`` fixed on screen.

    Used for wheel zoom toward the mouse position.
    """
    # Graph coordinates under the anchor before zoom
    logical = to_logical(anchor, viewport)
    new_zoom = clamp_zoom(viewport.zoom + delta, limits)

    # Adjust pan to keep the anchor fixed
    return ViewportState(
        pan_x=anchor.x - logical.x * new_zoom,
        pan_y=anchor.y - logical.y * new_zoom,
        zoom=new_zoom,
    )


def pan_by(viewport: ViewportState, dx: float, dy: float) -> ViewportState:
    """Return a viewport shifted by a screen-space delta (not scaled by zoom)."""
    return ViewportState(
        pan_x=viewport.pan_x + dx,
        pan_y=viewport.pan_y + dy,
        zoom=viewport.zoom,
    )
