"""Layer building from parser commands.

The builder turns the parser's command sequence into an immutable Layer:
apertures are expanded into primitives, arcs are discretized and polygons
are classified and tessellated here, once, so nothing is recomputed per
frame.

build_layer is a pure function of its inputs and safe to call from worker
processes.
"""

import logging
import math
from collections.abc import Iterable

from gerberview.config import GeometryConfig
from gerberview.core.arc import make_arc
from gerberview.core.tessellation import make_polygon, polygon_from_outline
from gerberview.domain import (
    ArcDraw,
    CircleAperture,
    CirclePrimitive,
    Command,
    Draw,
    Exposure,
    Flash,
    ImageTransform,
    Layer,
    LinePrimitive,
    ObroundAperture,
    Point,
    PolygonAperture,
    Primitive,
    RectangleAperture,
    RectanglePrimitive,
    Region,
    SetImageTransform,
)
from gerberview.exceptions import ParseFailure

logger = logging.getLogger(__name__)


class LayerBuilder:
    """Builds primitives from commands for one document.

    Example:
        builder = LayerBuilder("top_copper")
        layer = builder.build(commands)
    """

    def __init__(self, name: str = "", geometry_config: GeometryConfig | None = None) -> None:
        self.name = name
        self.geometry = geometry_config or GeometryConfig()

    def build(self, commands: Iterable[Command]) -> Layer:
        """Build a complete layer.

        The last SetImageTransform command wins; a document without one uses
        the identity image transform.

        Raises:
            ParseFailure: On malformed commands (negative sizes, strokes with
                non-circular apertures, unknown command kinds)
        """
        primitives: list[Primitive] = []
        image_transform = ImageTransform()

        for index, command in enumerate(commands):
            try:
                if isinstance(command, SetImageTransform):
                    image_transform = command.image_transform
                else:
                    primitives.append(self._primitive(command))
            except ValueError as e:
                raise ParseFailure(self.name, f"command {index}: {e}") from e

        logger.debug("Built layer '%s' with %d primitives", self.name, len(primitives))
        return Layer(tuple(primitives), image_transform=image_transform, name=self.name)

    def _primitive(self, command: Command) -> Primitive:
        if isinstance(command, Flash):
            return self._flash(command)
        if isinstance(command, Draw):
            return self._draw(command)
        if isinstance(command, ArcDraw):
            return self._arc(command)
        if isinstance(command, Region):
            return polygon_from_outline(command.vertices, command.exposure)
        raise ValueError(f"unsupported command {type(command).__name__}")

    def _flash(self, flash: Flash) -> Primitive:
        aperture = flash.aperture
        position = flash.position

        if isinstance(aperture, CircleAperture):
            return CirclePrimitive(position, aperture.diameter, flash.exposure)

        if isinstance(aperture, RectangleAperture):
            origin = Point(position.x - aperture.width / 2.0, position.y - aperture.height / 2.0)
            return RectanglePrimitive(origin, aperture.width, aperture.height, flash.exposure)

        if isinstance(aperture, ObroundAperture):
            return _obround(position, aperture, flash.exposure)

        if isinstance(aperture, PolygonAperture):
            return self._regular_polygon(position, aperture, flash.exposure)

        raise ValueError(f"unsupported aperture {type(aperture).__name__}")

    def _draw(self, draw: Draw) -> LinePrimitive:
        aperture = draw.aperture
        if not isinstance(aperture, CircleAperture):
            raise ValueError(
                f"linear draws need a circular aperture, got {type(aperture).__name__}"
            )
        return LinePrimitive(draw.start, draw.end, aperture.diameter, draw.exposure)

    def _arc(self, arc: ArcDraw) -> Primitive:
        aperture = arc.aperture
        if not isinstance(aperture, CircleAperture):
            raise ValueError(
                f"arc draws need a circular aperture, got {type(aperture).__name__}"
            )

        start_offset = arc.start - arc.center
        end_offset = arc.end - arc.center
        return make_arc(
            center=arc.center,
            radius=start_offset.length(),
            start_angle=math.atan2(start_offset.y, start_offset.x),
            end_angle=math.atan2(end_offset.y, end_offset.x),
            direction=arc.direction,
            width=aperture.diameter,
            exposure=arc.exposure,
            segments_per_turn=self.geometry.arc_segments_per_turn,
            min_segments=self.geometry.arc_min_segments,
        )

    def _regular_polygon(
        self, position: Point, aperture: PolygonAperture, exposure: Exposure
    ) -> Primitive:
        if aperture.vertices < 3:
            raise ValueError(f"polygon aperture needs at least 3 vertices, got {aperture.vertices}")
        if aperture.outer_diameter < 0:
            raise ValueError(f"polygon diameter must be >= 0, got {aperture.outer_diameter}")

        radius = aperture.outer_diameter / 2.0
        rotation = math.radians(aperture.rotation_degrees)
        ring = [
            Point(
                radius * math.cos(rotation + 2.0 * math.pi * i / aperture.vertices),
                radius * math.sin(rotation + 2.0 * math.pi * i / aperture.vertices),
            )
            for i in range(aperture.vertices)
        ]
        return make_polygon(position, ring, exposure)


def _obround(position: Point, aperture: ObroundAperture, exposure: Exposure) -> Primitive:
    """A stadium as a capsule along its long axis, or a circle when square."""
    width, height = aperture.width, aperture.height
    if width < 0 or height < 0:
        raise ValueError(f"obround size must be >= 0, got {width}x{height}")

    if width == height:
        return CirclePrimitive(position, width, exposure)

    if width > height:
        half = Point((width - height) / 2.0, 0.0)
        stroke = height
    else:
        half = Point(0.0, (height - width) / 2.0)
        stroke = width
    return LinePrimitive(position - half, position + half, stroke, exposure)


def build_layer(
    commands: Iterable[Command],
    name: str = "",
    geometry_config: GeometryConfig | None = None,
) -> Layer:
    """Build an immutable layer from a command sequence.

    Args:
        commands: Parser commands in document order
        name: Document name used in errors and logs
        geometry_config: Arc discretization settings (defaults if None)

    Returns:
        The built Layer

    Raises:
        ParseFailure: If any command is malformed; nothing is built
    """
    return LayerBuilder(name, geometry_config).build(commands)
