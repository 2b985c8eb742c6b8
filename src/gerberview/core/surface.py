"""Rendering surface interface.

The rasterizer is an external collaborator. The renderer talks to it
through the small ``RenderSurface`` protocol: every call receives final
screen-space coordinates (pixels, Y-down) and a colour.

``RecordingSurface`` implements the protocol by recording each call as an
immutable draw operation, for tests, the CLI and draw-list export.
"""

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Protocol

from gerberview.core.color import Color
from gerberview.domain import Point


class RenderSurface(Protocol):
    """Primitive draw operations offered by a rendering surface."""

    def circle(self, center: Point, radius: float, color: Color) -> None:
        """Filled circle."""
        ...

    def rect(self, min_corner: Point, size: Point, color: Color) -> None:
        """Filled axis-aligned rectangle given its top-left corner and size."""
        ...

    def line_segment(self, start: Point, end: Point, width: float, color: Color) -> None:
        """Stroked straight segment (butt ends)."""
        ...

    def polyline(
        self, points: Sequence[Point], width: float, color: Color, closed: bool
    ) -> None:
        """Stroked path, closed or open."""
        ...

    def convex_polygon(self, points: Sequence[Point], color: Color) -> None:
        """Filled convex polygon."""
        ...

    def mesh(self, vertices: Sequence[Point], indices: Sequence[int], color: Color) -> None:
        """Filled indexed triangle mesh."""
        ...

    def text(self, position: Point, text: str, size: float, color: Color) -> None:
        """Label centred on ``position``."""
        ...


def _points(points: Sequence[Point]) -> list[list[float]]:
    return [[p.x, p.y] for p in points]


@dataclass(frozen=True, slots=True)
class CircleOp:
    center: Point
    radius: float
    color: Color

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": "circle",
            "center": [self.center.x, self.center.y],
            "radius": self.radius,
            "color": self.color.to_hex(),
        }


@dataclass(frozen=True, slots=True)
class RectOp:
    min: Point
    size: Point
    color: Color

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": "rect",
            "min": [self.min.x, self.min.y],
            "size": [self.size.x, self.size.y],
            "color": self.color.to_hex(),
        }


@dataclass(frozen=True, slots=True)
class LineSegmentOp:
    start: Point
    end: Point
    width: float
    color: Color

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": "line_segment",
            "start": [self.start.x, self.start.y],
            "end": [self.end.x, self.end.y],
            "width": self.width,
            "color": self.color.to_hex(),
        }


@dataclass(frozen=True, slots=True)
class PolylineOp:
    points: tuple[Point, ...]
    width: float
    color: Color
    closed: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": "polyline",
            "points": _points(self.points),
            "width": self.width,
            "closed": self.closed,
            "color": self.color.to_hex(),
        }


@dataclass(frozen=True, slots=True)
class ConvexPolygonOp:
    points: tuple[Point, ...]
    color: Color

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": "convex_polygon",
            "points": _points(self.points),
            "color": self.color.to_hex(),
        }


@dataclass(frozen=True, slots=True)
class MeshOp:
    vertices: tuple[Point, ...]
    indices: tuple[int, ...]
    color: Color

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": "mesh",
            "vertices": _points(self.vertices),
            "indices": list(self.indices),
            "color": self.color.to_hex(),
        }


@dataclass(frozen=True, slots=True)
class TextOp:
    position: Point
    text: str
    size: float
    color: Color

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": "text",
            "position": [self.position.x, self.position.y],
            "text": self.text,
            "size": self.size,
            "color": self.color.to_hex(),
        }


DrawOp = CircleOp | RectOp | LineSegmentOp | PolylineOp | ConvexPolygonOp | MeshOp | TextOp

_OP_NAMES: dict[type, str] = {
    CircleOp: "circle",
    RectOp: "rect",
    LineSegmentOp: "line_segment",
    PolylineOp: "polyline",
    ConvexPolygonOp: "convex_polygon",
    MeshOp: "mesh",
    TextOp: "text",
}


class RecordingSurface:
    """Surface that records draw calls instead of rasterizing them.

    Example:
        surface = RecordingSurface()
        GerberRenderer(config, view, transform, layer).paint_layer(surface)
        print(surface.counts())
    """

    def __init__(self) -> None:
        self.ops: list[DrawOp] = []

    def circle(self, center: Point, radius: float, color: Color) -> None:
        self.ops.append(CircleOp(center, radius, color))

    def rect(self, min_corner: Point, size: Point, color: Color) -> None:
        self.ops.append(RectOp(min_corner, size, color))

    def line_segment(self, start: Point, end: Point, width: float, color: Color) -> None:
        self.ops.append(LineSegmentOp(start, end, width, color))

    def polyline(
        self, points: Sequence[Point], width: float, color: Color, closed: bool
    ) -> None:
        self.ops.append(PolylineOp(tuple(points), width, color, closed))

    def convex_polygon(self, points: Sequence[Point], color: Color) -> None:
        self.ops.append(ConvexPolygonOp(tuple(points), color))

    def mesh(self, vertices: Sequence[Point], indices: Sequence[int], color: Color) -> None:
        self.ops.append(MeshOp(tuple(vertices), tuple(indices), color))

    def text(self, position: Point, text: str, size: float, color: Color) -> None:
        self.ops.append(TextOp(position, text, size, color))

    def of_type(self, op_type: type) -> list[Any]:
        """Recorded operations of one type, in drawing order."""
        return [op for op in self.ops if isinstance(op, op_type)]

    def counts(self) -> dict[str, int]:
        """Number of recorded operations per kind."""
        return dict(Counter(_OP_NAMES[type(op)] for op in self.ops))

    def clear(self) -> None:
        self.ops.clear()

    def to_list(self) -> list[dict[str, Any]]:
        return [op.to_dict() for op in self.ops]
