"""Renderable primitive shapes.

A layer is an ordered sequence of primitives. Each primitive carries its
geometry in shape space (Y-up) and an exposure flag. Primitives are
immutable: derived geometry (arc point runs, polygon tessellation) is
generated once, when the primitive is built, and never recomputed per frame.

The set of primitives is closed:
- CirclePrimitive: a filled disc
- RectanglePrimitive: an axis-aligned (pre-transform) filled rectangle
- LinePrimitive: a capsule, i.e. a stroked segment with round caps
- ArcPrimitive: a stroked circular arc
- PolygonPrimitive: a filled polygon, convex or tessellated
"""

from dataclasses import dataclass
from enum import Enum

from gerberview.domain.bbox import BoundingBox
from gerberview.domain.geometry import Point


class Exposure(str, Enum):
    """Paint semantics of a primitive.

    Subtract exposures are painted with the clear colour; no boolean
    geometry subtraction takes place.
    """

    ADD = "add"
    SUBTRACT = "subtract"


class ArcDirection(str, Enum):
    """Winding direction of an arc in Y-up shape space."""

    CLOCKWISE = "cw"
    COUNTER_CLOCKWISE = "ccw"


@dataclass(frozen=True, slots=True)
class Tessellation:
    """Triangulated mesh of a non-convex polygon.

    Attributes:
        vertices: Vertex buffer, relative to the polygon centre
        triangles: Index triples into ``vertices``, counter-clockwise in Y-up space
    """

    vertices: tuple[Point, ...]
    triangles: tuple[tuple[int, int, int], ...]

    @property
    def indices(self) -> list[int]:
        """Flat index buffer (three indices per triangle)."""
        return [index for triangle in self.triangles for index in triangle]

    def triangle_count(self) -> int:
        return len(self.triangles)


@dataclass(frozen=True, slots=True)
class PolygonGeometry:
    """Vertex ring of a polygon plus its convexity classification.

    Attributes:
        relative_vertices: Ordered ring, relative to the polygon centre
        is_convex: True if the ring can be filled as a convex polygon
        tessellation: Mesh for non-convex rings; None for convex rings and
            for rings whose tessellation failed
    """

    relative_vertices: tuple[Point, ...]
    is_convex: bool
    tessellation: Tessellation | None = None

    def is_renderable(self) -> bool:
        """Whether the renderer has something to fill."""
        if self.is_convex:
            return len(self.relative_vertices) >= 3
        return self.tessellation is not None and self.tessellation.triangle_count() > 0


@dataclass(frozen=True, slots=True)
class CirclePrimitive:
    """A filled circle."""

    center: Point
    diameter: float
    exposure: Exposure = Exposure.ADD

    def __post_init__(self) -> None:
        if self.diameter < 0:
            raise ValueError(f"Circle diameter must be >= 0, got {self.diameter}")

    def bounding_box(self) -> BoundingBox:
        radius = self.diameter / 2.0
        return BoundingBox(
            Point(self.center.x - radius, self.center.y - radius),
            Point(self.center.x + radius, self.center.y + radius),
        )

    def is_degenerate(self) -> bool:
        return self.diameter <= 0.0


@dataclass(frozen=True, slots=True)
class RectanglePrimitive:
    """A filled rectangle.

    Attributes:
        origin: Bottom-left corner before any transform
        width: Extent along X
        height: Extent along Y
        exposure: Paint semantics
    """

    origin: Point
    width: float
    height: float
    exposure: Exposure = Exposure.ADD

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(
                f"Rectangle size must be >= 0, got {self.width}x{self.height}"
            )

    def center(self) -> Point:
        return Point(self.origin.x + self.width / 2.0, self.origin.y + self.height / 2.0)

    def bounding_box(self) -> BoundingBox:
        return BoundingBox(
            self.origin, Point(self.origin.x + self.width, self.origin.y + self.height)
        )

    def is_degenerate(self) -> bool:
        return self.width <= 0.0 or self.height <= 0.0


@dataclass(frozen=True, slots=True)
class LinePrimitive:
    """A capsule: segment from start to end stroked with round caps of radius width/2.

    A zero-length line with a non-zero width still renders as a dot.
    """

    start: Point
    end: Point
    width: float
    exposure: Exposure = Exposure.ADD

    def __post_init__(self) -> None:
        if self.width < 0:
            raise ValueError(f"Line width must be >= 0, got {self.width}")

    def bounding_box(self) -> BoundingBox:
        return BoundingBox.from_points([self.start, self.end]).expand(self.width / 2.0)

    def is_degenerate(self) -> bool:
        return self.width <= 0.0


@dataclass(frozen=True, slots=True)
class ArcPrimitive:
    """A stroked circular arc.

    ``points`` is the discretized outline produced by the arc generator when
    the primitive is built (absolute shape-space coordinates); ``full_circle``
    tells the renderer to close the stroke instead of repeating a point.
    Build instances through ``gerberview.core.arc.make_arc``.

    Attributes:
        center: Arc centre
        radius: Arc radius
        start_angle: Start angle in radians
        end_angle: End angle in radians
        direction: Winding direction
        width: Stroke width
        points: Generated outline points
        full_circle: True if the arc closes on itself
        exposure: Paint semantics
    """

    center: Point
    radius: float
    start_angle: float
    end_angle: float
    direction: ArcDirection
    width: float
    points: tuple[Point, ...]
    full_circle: bool
    exposure: Exposure = Exposure.ADD

    def __post_init__(self) -> None:
        if self.radius < 0 or self.width < 0:
            raise ValueError(
                f"Arc radius and width must be >= 0, got r={self.radius} w={self.width}"
            )

    def is_full_circle(self) -> bool:
        return self.full_circle

    def bounding_box(self) -> BoundingBox:
        return BoundingBox.from_points(self.points).expand(self.width / 2.0)

    def is_degenerate(self) -> bool:
        return self.radius <= 0.0 or self.width <= 0.0 or len(self.points) < 2


@dataclass(frozen=True, slots=True)
class PolygonPrimitive:
    """A filled polygon around ``center``.

    Build instances through ``gerberview.core.tessellation.make_polygon`` so
    the geometry is classified and tessellated once.
    """

    center: Point
    geometry: PolygonGeometry
    exposure: Exposure = Exposure.ADD

    def absolute_vertices(self) -> list[Point]:
        return [self.center + vertex for vertex in self.geometry.relative_vertices]

    def bounding_box(self) -> BoundingBox:
        return BoundingBox.from_points(self.absolute_vertices())

    def is_degenerate(self) -> bool:
        return not self.geometry.is_renderable()


Primitive = CirclePrimitive | RectanglePrimitive | LinePrimitive | ArcPrimitive | PolygonPrimitive
