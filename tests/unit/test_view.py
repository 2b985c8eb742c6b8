"""Tests for view state and viewport fitting."""

import pytest

from gerberview.core.view import Viewport, ViewState
from gerberview.domain import BoundingBox, Point


@pytest.fixture
def viewport() -> Viewport:
    return Viewport.from_size(1000.0, 1000.0)


class TestViewport:
    """Tests for Viewport."""

    def test_center(self) -> None:
        assert Viewport(Point(100, 50), 200, 100).center() == Point(200, 100)

    def test_contains(self) -> None:
        viewport = Viewport.from_size(10, 10)
        assert viewport.contains(Point(5, 5))
        assert viewport.contains(Point(10, 10))
        assert not viewport.contains(Point(11, 5))


class TestFitView:
    """Tests for ViewState.fit_view."""

    def test_fit_with_margin(self, viewport: Viewport) -> None:
        """Test a 100x100 box at zoom 0.5 fills half of a 1000x1000 viewport, centred."""
        view = ViewState()
        box = BoundingBox(Point(0, 0), Point(100, 100))

        view.fit_view(viewport, box, 0.5)

        assert view.scale == pytest.approx(5.0)
        top_left = view.gerber_to_screen(box.min)
        bottom_right = view.gerber_to_screen(box.max)
        assert bottom_right.x - top_left.x == pytest.approx(500.0)
        assert bottom_right.y - top_left.y == pytest.approx(500.0)
        assert view.gerber_to_screen(box.center()) == Point(500.0, 500.0)

    def test_limited_by_tighter_axis(self, viewport: Viewport) -> None:
        view = ViewState()
        view.fit_view(viewport, BoundingBox(Point(0, 0), Point(200, 50)), 1.0)
        assert view.scale == pytest.approx(5.0)

    def test_off_centre_box(self) -> None:
        view = ViewState()
        box = BoundingBox(Point(-30, 10), Point(-10, 30))
        view.fit_view(Viewport(Point(50, 0), 400, 200), box, 1.0)

        assert view.scale == pytest.approx(10.0)
        assert view.gerber_to_screen(box.center()) == Point(250, 100)

    @pytest.mark.parametrize(
        "box",
        [
            BoundingBox(Point(0, 0), Point(100, 0)),
            BoundingBox(Point(5, 5), Point(5, 5)),
            BoundingBox.empty(),
        ],
    )
    def test_degenerate_box_keeps_unit_scale(self, viewport: Viewport, box: BoundingBox) -> None:
        """Test zero-width, zero-height and empty boxes never divide by zero."""
        view = ViewState()
        view.fit_view(viewport, box, 0.5)

        assert view.scale == 1.0
        assert view.gerber_to_screen(box.center()) == viewport.center()


class TestPanZoom:
    """Tests for pan, zoom and coordinate conversion."""

    def test_gerber_to_screen(self) -> None:
        view = ViewState(Point(10, 20), 2.0)
        assert view.gerber_to_screen(Point(1, -1)) == Point(12, 18)

    def test_screen_to_gerber_inverts(self) -> None:
        view = ViewState(Point(10, 20), 2.0)
        p = Point(3.5, -7.25)
        assert view.screen_to_gerber(view.gerber_to_screen(p)) == p

    def test_screen_to_gerber_zero_scale(self) -> None:
        assert ViewState(Point(10, 20), 0.0).screen_to_gerber(Point(1, 1)) == Point(0, 0)

    def test_pan(self) -> None:
        view = ViewState()
        view.pan(Point(5, -3))
        view.pan(Point(1, 1))
        assert view.translation == Point(6, -2)

    def test_zoom_keeps_anchor_fixed(self) -> None:
        """Test the content under the anchor stays under the anchor."""
        view = ViewState(Point(100, 50), 2.0)
        anchor = Point(300, 200)
        under_anchor = view.screen_to_gerber(anchor)

        view.zoom_at(anchor, 1.5)

        assert view.scale == pytest.approx(3.0)
        after = view.gerber_to_screen(under_anchor)
        assert after.x == pytest.approx(anchor.x)
        assert after.y == pytest.approx(anchor.y)

    def test_zoom_ignores_non_positive_factor(self) -> None:
        view = ViewState(Point(1, 1), 2.0)
        view.zoom_at(Point(0, 0), 0.0)
        assert view == ViewState(Point(1, 1), 2.0)
