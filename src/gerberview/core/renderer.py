"""Layer renderer.

Turns a layer's primitives into screen-space draw calls on a rendering
surface. For every frame the renderer:

1. Composes the layer's image transform with the user placement
2. Derives scale factors and axis-alignment flags once (TransformCache)
3. Walks the primitives in z-order, dispatching on the primitive kind in a
   single exhaustive match

Debug overlays (shape numbers, vertex numbers, per-shape bounding boxes)
are driven by the RenderConfiguration passed in, never by global state.
"""

import logging
import time
from typing import assert_never

from gerberview.config import RenderConfiguration
from gerberview.core.color import GREEN, RED, WHITE, Color, exposure_color, generate_pastel_color
from gerberview.core.surface import RenderSurface
from gerberview.core.transform import GerberTransform, TransformCache, compose
from gerberview.core.view import ViewState
from gerberview.domain import (
    ArcPrimitive,
    CirclePrimitive,
    Layer,
    LinePrimitive,
    Point,
    PolygonPrimitive,
    Primitive,
    RectanglePrimitive,
)
from gerberview.utils.logging import RenderStats

logger = logging.getLogger(__name__)

SHAPE_NUMBER_SIZE = 16.0
VERTEX_NUMBER_SIZE = 10.0
BBOX_OUTLINE_WIDTH = 1.0


def degenerate_reason(primitive: Primitive) -> str | None:
    """Why a primitive has nothing to draw, or None if it is drawable."""
    if not primitive.is_degenerate():
        return None

    match primitive:
        case CirclePrimitive():
            return "zero diameter"
        case RectanglePrimitive():
            return "zero width or height"
        case LinePrimitive():
            return "zero width"
        case ArcPrimitive():
            return "zero radius or width"
        case PolygonPrimitive():
            if len(primitive.geometry.relative_vertices) < 3:
                return "empty ring"
            return "tessellation failed"
        case _:
            assert_never(primitive)


class GerberRenderer:
    """Renders one layer with one placement into one view.

    Construct a renderer per frame (it snapshots the view and caches the
    transform-derived values), then call ``paint_layer`` for the surface.

    Example:
        renderer = GerberRenderer(RenderConfiguration(), view, transform, layer)
        stats = renderer.paint_layer(surface, WHITE)
    """

    def __init__(
        self,
        configuration: RenderConfiguration,
        view: ViewState,
        transform: GerberTransform,
        layer: Layer,
    ) -> None:
        self.configuration = configuration
        self.view = ViewState(view.translation, view.scale)
        self.layer = layer
        self.cache = TransformCache(compose(layer.image_transform, transform))
        self._clear_color = Color(*configuration.clear_color)

    def gerber_to_screen_coordinates(self, point: Point) -> Point:
        """Map a shape-space point to screen pixels."""
        return self.view.gerber_to_screen(self.cache.to_frame(point))

    def paint_layer(self, surface: RenderSurface, base_color: Color = WHITE) -> RenderStats:
        """Emit draw calls for every primitive, in z-order.

        Degenerate primitives are skipped and counted, never raised.

        Args:
            surface: Rendering surface receiving the draw calls
            base_color: Colour for added exposures (unless unique colours are on)

        Returns:
            RenderStats for this paint
        """
        start_time = time.perf_counter()
        stats = RenderStats()

        for index, primitive in enumerate(self.layer.primitives):
            reason = degenerate_reason(primitive)
            if reason is not None:
                stats.record_skip(index, reason)
                logger.debug("Skipping primitive %d: %s", index, reason)
                continue

            color = (
                generate_pastel_color(index)
                if self.configuration.use_unique_shape_colors
                else base_color
            )
            color = exposure_color(primitive.exposure, color, self._clear_color)
            shape_number = index if self.configuration.use_shape_numbering else None

            match primitive:
                case CirclePrimitive():
                    self._render_circle(surface, primitive, color, shape_number)
                case RectanglePrimitive():
                    self._render_rectangle(surface, primitive, color, shape_number, stats)
                case LinePrimitive():
                    self._render_line(surface, primitive, color, shape_number)
                case ArcPrimitive():
                    self._render_arc(surface, primitive, color, shape_number)
                case PolygonPrimitive():
                    self._render_polygon(surface, primitive, color, shape_number, stats)
                case _:
                    assert_never(primitive)

            if self.configuration.use_shape_bboxes:
                self._draw_bbox(surface, primitive, color)
            stats.drawn_count += 1

        logger.debug(
            "Painted %d primitives (%d skipped) in %.2f ms",
            stats.drawn_count,
            stats.skipped_count,
            (time.perf_counter() - start_time) * 1000,
        )
        return stats

    def _render_circle(
        self,
        surface: RenderSurface,
        circle: CirclePrimitive,
        color: Color,
        shape_number: int | None,
    ) -> None:
        center = self.gerber_to_screen_coordinates(circle.center)
        radius = circle.diameter / 2.0 * self.cache.extent_scale * self.view.scale
        surface.circle(center, radius, color)
        self._draw_shape_number(surface, center, shape_number)

    def _render_rectangle(
        self,
        surface: RenderSurface,
        rect: RectanglePrimitive,
        color: Color,
        shape_number: int | None,
        stats: RenderStats,
    ) -> None:
        center = self.gerber_to_screen_coordinates(rect.center())

        if self.cache.axis_aligned:
            # Mirroring keeps edges on the axes; 90/270 swaps which edge is horizontal.
            sx, sy = self.cache.scaling
            if self.cache.swap_axes:
                width, height = rect.height * sy, rect.width * sx
            else:
                width, height = rect.width * sx, rect.height * sy

            size = Point(width, height) * self.view.scale
            surface.rect(center - size / 2.0, size, color)
            stats.fast_path_rects += 1
        else:
            corners = [
                self.gerber_to_screen_coordinates(corner)
                for corner in rect.bounding_box().vertices()
            ]
            surface.convex_polygon(corners, color)
            stats.rotated_rects += 1

        self._draw_shape_number(surface, center, shape_number)

    def _render_line(
        self,
        surface: RenderSurface,
        line: LinePrimitive,
        color: Color,
        shape_number: int | None,
    ) -> None:
        start = self.gerber_to_screen_coordinates(line.start)
        end = self.gerber_to_screen_coordinates(line.end)
        width = line.width * self.cache.extent_scale * self.view.scale

        surface.line_segment(start, end, width, color)
        # Round caps.
        surface.circle(start, width / 2.0, color)
        surface.circle(end, width / 2.0, color)

        self._draw_shape_number(surface, (start + end) / 2.0, shape_number)

    def _render_arc(
        self,
        surface: RenderSurface,
        arc: ArcPrimitive,
        color: Color,
        shape_number: int | None,
    ) -> None:
        points = [self.gerber_to_screen_coordinates(p) for p in arc.points]
        width = arc.width * self.cache.extent_scale * self.view.scale

        surface.polyline(points, width, color, closed=arc.is_full_circle())

        # Label the middle of the stroke; the centre of a large, shallow arc
        # can be far off screen.
        self._draw_shape_number(surface, points[len(points) // 2], shape_number)

    def _render_polygon(
        self,
        surface: RenderSurface,
        polygon: PolygonPrimitive,
        color: Color,
        shape_number: int | None,
        stats: RenderStats,
    ) -> None:
        geometry = polygon.geometry

        if geometry.is_convex:
            points = [
                self.gerber_to_screen_coordinates(polygon.center + vertex)
                for vertex in geometry.relative_vertices
            ]
            surface.convex_polygon(points, color)
        elif geometry.tessellation is not None:
            tessellation = geometry.tessellation
            vertices = [
                self.gerber_to_screen_coordinates(polygon.center + vertex)
                for vertex in tessellation.vertices
            ]
            surface.mesh(vertices, tessellation.indices, color)
            stats.meshes += 1

        if self.configuration.use_vertex_numbering:
            for i, vertex in enumerate(geometry.relative_vertices):
                position = self.gerber_to_screen_coordinates(polygon.center + vertex)
                surface.text(position, str(i), VERTEX_NUMBER_SIZE, RED)

        self._draw_shape_number(
            surface, self.gerber_to_screen_coordinates(polygon.center), shape_number
        )

    def _draw_bbox(self, surface: RenderSurface, primitive: Primitive, color: Color) -> None:
        """Outline of the primitive's shape-space box, corners transformed individually."""
        corners = [
            self.gerber_to_screen_coordinates(corner)
            for corner in primitive.bounding_box().vertices()
        ]
        if corners:
            surface.polyline(corners, BBOX_OUTLINE_WIDTH, color, closed=True)

    def _draw_shape_number(
        self, surface: RenderSurface, position: Point, shape_number: int | None
    ) -> None:
        if shape_number is None:
            return
        surface.text(position, str(shape_number), SHAPE_NUMBER_SIZE, GREEN)
