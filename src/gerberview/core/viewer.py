"""A single interactive view of one layer.

GerberViewer ties together everything one on-screen view needs: the built
layer, the user placement, pan/zoom state, interaction readouts and the
render options. Several viewers can run side by side (one per document or
per window); they share no mutable state.
"""

import math
import time
from collections.abc import Iterable

import structlog

from gerberview.config import GerberViewSettings
from gerberview.core.builder import build_layer
from gerberview.core.color import (
    GREEN,
    MAGENTA,
    ORANGE,
    PURPLE,
    RED,
    WHITE,
    YELLOW,
    Color,
)
from gerberview.core.interaction import InteractionInput, UiState
from gerberview.core.renderer import GerberRenderer
from gerberview.core.surface import RenderSurface
from gerberview.core.transform import GerberTransform, compose, transform_bounding_box
from gerberview.core.view import Viewport, ViewState
from gerberview.domain import BoundingBox, Command, Layer, Matrix3, Point
from gerberview.exceptions import ParseFailure
from gerberview.utils.logging import RenderLogger, RenderStats

OVERLAY_LINE_WIDTH = 1.0


class GerberViewer:
    """One view of one layer.

    Example:
        viewer = GerberViewer(build_layer(commands, "top"))
        stats = viewer.frame(surface, Viewport.from_size(800, 600))
    """

    def __init__(
        self,
        layer: Layer,
        settings: GerberViewSettings | None = None,
        transform: GerberTransform | None = None,
    ) -> None:
        """Initialize a viewer.

        Args:
            layer: Layer to display
            settings: Application settings (defaults if None)
            transform: Initial placement (built from ``settings.placement`` if None)
        """
        self.settings = settings or GerberViewSettings()
        self.layer = layer
        self.transform = transform or GerberTransform.from_placement(self.settings.placement)
        self.view = ViewState()
        self.ui_state = UiState()
        self.configuration = self.settings.render
        self.needs_view_fitting = True

        self.logger = structlog.get_logger(__name__)
        self.render_logger = RenderLogger(self.logger)

    def matrix(self) -> Matrix3:
        """Composed image and placement matrix for the current state."""
        return compose(self.layer.image_transform, self.transform)

    def reload(self, commands: Iterable[Command]) -> Layer:
        """Rebuild the layer from new commands and swap it in.

        The new layer is built completely before the swap. On failure the
        current layer stays in place and keeps rendering.

        Raises:
            ParseFailure: If the commands are malformed
        """
        try:
            layer = build_layer(commands, self.layer.name, self.settings.geometry)
        except ParseFailure as e:
            self.render_logger.log_reload_failed(self.layer.name, e)
            raise

        self.layer = layer
        self.needs_view_fitting = True
        self.render_logger.log_reload(layer.name, len(layer.primitives))
        return layer

    def fit_view(self, viewport: Viewport) -> None:
        """Frame the transformed layer in ``viewport``."""
        target = transform_bounding_box(self.layer.bounding_box(), self.matrix())
        self.view.fit_view(viewport, target, self.settings.view.zoom_factor)
        self.needs_view_fitting = False
        self.render_logger.log_view_fitted(
            self.layer.name, self.view.scale, self.view.translation.to_tuple()
        )

    def advance(self, frame_delta: float) -> None:
        """Advance the rotation animation by ``frame_delta`` seconds."""
        speed = self.settings.view.rotation_speed_deg_per_sec
        if speed and frame_delta > 0.0:
            self.transform.rotate_by(math.radians(speed) * frame_delta)

    def frame(
        self,
        surface: RenderSurface,
        viewport: Viewport,
        interaction: InteractionInput | None = None,
        frame_delta: float = 0.0,
        base_color: Color = WHITE,
    ) -> RenderStats:
        """Run one frame: animate, fit if needed, apply input, paint, overlay.

        Args:
            surface: Rendering surface for this frame
            viewport: Screen rectangle of the view
            interaction: Input collected since the last frame
            frame_delta: Seconds since the last frame
            base_color: Colour of added exposures

        Returns:
            RenderStats of the layer paint
        """
        start_time = time.perf_counter()

        self.advance(frame_delta)
        if self.needs_view_fitting:
            self.fit_view(viewport)

        matrix = self.matrix()
        self.ui_state.update(
            viewport,
            interaction or InteractionInput(),
            self.view,
            matrix,
            origin=self.transform.origin,
            zoom_step=self.settings.view.zoom_step,
        )

        renderer = GerberRenderer(self.configuration, self.view, self.transform, self.layer)
        stats = renderer.paint_layer(surface, base_color)
        for index, reason in stats.skipped:
            self.render_logger.log_primitive_skipped(self.layer.name, index, reason)

        if self.settings.view.show_layer_bbox:
            self._draw_layer_bbox(surface, renderer)
        if self.settings.view.show_markers:
            self._draw_markers(surface)

        self.render_logger.log_layer_painted(
            self.layer.name, stats, (time.perf_counter() - start_time) * 1000
        )
        return stats

    def _draw_layer_bbox(self, surface: RenderSurface, renderer: GerberRenderer) -> None:
        """Transformed layer outline (green) and its re-bounded box (red)."""
        bbox = self.layer.bounding_box()
        if bbox.is_empty():
            return

        frame_corners = [renderer.cache.to_frame(corner) for corner in bbox.vertices()]
        outline = [self.view.gerber_to_screen(corner) for corner in frame_corners]
        aabb = [
            self.view.gerber_to_screen(corner)
            for corner in BoundingBox.from_points(frame_corners).vertices()
        ]

        surface.polyline(aabb, OVERLAY_LINE_WIDTH, RED, closed=True)
        surface.polyline(outline, OVERLAY_LINE_WIDTH, GREEN, closed=True)

    def _draw_markers(self, surface: RenderSurface) -> None:
        """Offset marker with an arrow to the placement pivot, plus the pivot marker."""
        radius = self.settings.view.marker_radius * self.view.scale
        offset_screen = self.view.gerber_to_screen(self.transform.offset.flip_y())
        origin_screen = self.ui_state.origin_screen_pos

        surface.line_segment(offset_screen, origin_screen, OVERLAY_LINE_WIDTH, ORANGE)
        _draw_marker(surface, offset_screen, ORANGE, YELLOW, radius)
        _draw_marker(surface, origin_screen, PURPLE, MAGENTA, radius)


def _draw_marker(
    surface: RenderSurface, center: Point, outer: Color, inner: Color, radius: float
) -> None:
    surface.circle(center, radius, outer)
    surface.circle(center, radius / 2.0, inner)
