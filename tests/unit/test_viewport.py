"""
Tests for screen/logical coordinate conversion and zoom helpers.
"""

import pytest

from depgraph_core.domain.models import Point, ViewportState
from depgraph_core.services.viewport import (
    ViewportLimits, to_screen, to_logical, clamp_zoom, zoom_by, zoom_about, pan_by,
)


class TestTransform:
    """Test to_screen / to_logical."""

    def test_to_screen_applies_zoom_then_pan(self):
        """screen = logical * zoom + pan."""
        v = ViewportState(pan_x=10, pan_y=-20, zoom=2.0)
        assert to_screen(Point(5, 7), v) == Point(20, -6)

    def test_to_logical_removes_pan_then_zoom(self):
        """logical = (screen - pan) / zoom."""
        v = ViewportState(pan_x=10, pan_y=-20, zoom=2.0)
        assert to_logical(Point(20, -6), v) == Point(5, 7)

    @pytest.mark.parametrize("point,viewport", [
        (Point(0, 0), ViewportState()),
        (Point(123.456, -78.9), ViewportState(pan_x=33.3, pan_y=-12.1, zoom=0.3)),
        (Point(-500.25, 1e4), ViewportState(pan_x=-999.9, pan_y=42.0, zoom=1.7)),
        (Point(0.001, 0.002), ViewportState(pan_x=0.5, pan_y=0.5, zoom=2.0)),
    ])
    def test_round_trip(self, point, viewport):
        """to_logical undoes to_screen."""
        back = to_logical(to_screen(point, viewport), viewport)
        assert back.x == pytest.approx(point.x)
        assert back.y == pytest.approx(point.y)

    def test_to_logical_rejects_non_positive_zoom(self):
        """Zoom of zero has no inverse."""
        with pytest.raises(ValueError, match="positive"):
            to_logical(Point(1, 1), ViewportState(zoom=0.0))


class TestZoom:
    """Test zoom clamping and anchored zoom."""

    def test_clamp_zoom_bounds(self):
        """Zoom is clamped into [0.3, 2.0]."""
        assert clamp_zoom(0.1) == 0.3
        assert clamp_zoom(5.0) == 2.0
        assert clamp_zoom(1.2) == 1.2

    def test_custom_limits(self):
        """Limits are configurable."""
        limits = ViewportLimits(min_zoom=0.5, max_zoom=4.0)
        assert clamp_zoom(0.1, limits) == 0.5
        assert clamp_zoom(3.0, limits) == 3.0

    def test_zoom_by_keeps_pan(self):
        """Additive zoom leaves pan untouched."""
        v = zoom_by(ViewportState(pan_x=3, pan_y=4, zoom=1.0), 0.5)
        assert (v.pan_x, v.pan_y, v.zoom) == (3, 4, 1.5)

    def test_zoom_about_keeps_anchor_fixed(self):
        """The logical point under the anchor stays under it after zooming."""
        v = ViewportState(pan_x=40, pan_y=-10, zoom=1.0)
        anchor = Point(300, 200)
        before = to_logical(anchor, v)

        zoomed = zoom_about(v, anchor, 0.5)
        after = to_logical(anchor, zoomed)

        assert zoomed.zoom == pytest.approx(1.5)
        assert after.x == pytest.approx(before.x)
        assert after.y == pytest.approx(before.y)

    def test_pan_by_is_unscaled(self):
        """Pan deltas are screen-space and ignore zoom."""
        v = pan_by(ViewportState(zoom=2.0), 15, -5)
        assert (v.pan_x, v.pan_y, v.zoom) == (15, -5, 2.0)
