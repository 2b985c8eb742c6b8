"""Polygon convexity classification and tessellation.

This module provides:
- Signed area calculation (shoelace formula)
- Ring cleanup (duplicate and closing vertices)
- Convexity classification
- Ear-clipping triangulation of simple, single-contour rings

Convex rings are filled directly by the rendering surface; every other ring
is triangulated once, when its primitive is built. Holes are not supported:
the parser emits them as separate primitives.

All functions are pure and stateless.
"""

import logging
import math
from collections.abc import Sequence

from gerberview.domain import (
    Exposure,
    Point,
    PolygonGeometry,
    PolygonPrimitive,
    Tessellation,
)
from gerberview.exceptions import TessellationError

logger = logging.getLogger(__name__)

TAU = 2.0 * math.pi

# Relative tolerance for cross products, scaled by the squared ring extent.
CROSS_EPSILON = 1e-12

# Two vertices closer than this (relative to the ring extent) are merged.
DUPLICATE_EPSILON = 1e-12


def signed_area(vertices: Sequence[Point]) -> float:
    """Calculate signed area of a ring using the shoelace formula.

    Positive area means counter-clockwise winding (Y-up), negative clockwise.

    Examples:
        >>> signed_area([Point(0, 0), Point(1, 0), Point(1, 1), Point(0, 1)])
        1.0
        >>> signed_area([Point(0, 0), Point(0, 1), Point(1, 1), Point(1, 0)])
        -1.0
    """
    n = len(vertices)
    if n < 3:
        return 0.0

    area = 0.0
    for i in range(n):
        j = (i + 1) % n
        area += vertices[i].x * vertices[j].y
        area -= vertices[j].x * vertices[i].y

    return area / 2.0


def _extent(vertices: Sequence[Point]) -> float:
    xs = [v.x for v in vertices]
    ys = [v.y for v in vertices]
    return max(max(xs) - min(xs), max(ys) - min(ys), 1e-300)


def _cross(a: Point, b: Point, c: Point) -> float:
    """Z component of (b - a) x (c - b)."""
    return (b.x - a.x) * (c.y - b.y) - (b.y - a.y) * (c.x - b.x)


def clean_ring(vertices: Sequence[Point]) -> list[Point]:
    """Drop consecutive duplicate vertices and a closing duplicate.

    Outlines from the parser usually end on their start point; the ring
    model keeps each vertex once.
    """
    if not vertices:
        return []

    tolerance = DUPLICATE_EPSILON * _extent(vertices)
    ring: list[Point] = []
    for vertex in vertices:
        if ring and vertex.distance_to(ring[-1]) <= tolerance:
            continue
        ring.append(vertex)

    while len(ring) > 1 and ring[-1].distance_to(ring[0]) <= tolerance:
        ring.pop()

    return ring


def is_convex(vertices: Sequence[Point]) -> bool:
    """Classify a ring as convex.

    Walks consecutive vertex triples: the ring is convex iff every turn has
    the same sign (either winding) and the turns add up to exactly one full
    revolution, which rules out self-intersecting star rings. Rings with
    fewer than 3 vertices, collinear triples or zero-length edges are
    reported as non-convex so they go through tessellation instead of an
    invalid convex fill.
    """
    n = len(vertices)
    if n < 3:
        return False

    tolerance = CROSS_EPSILON * _extent(vertices) ** 2
    sign = 0
    turning = 0.0

    for i in range(n):
        a = vertices[i]
        b = vertices[(i + 1) % n]
        c = vertices[(i + 2) % n]

        cross = _cross(a, b, c)
        if abs(cross) <= tolerance:
            return False

        turn_sign = 1 if cross > 0 else -1
        if sign == 0:
            sign = turn_sign
        elif turn_sign != sign:
            return False

        dot = (b.x - a.x) * (c.x - b.x) + (b.y - a.y) * (c.y - b.y)
        turning += math.atan2(cross, dot)

    return abs(abs(turning) - TAU) < 1e-6


def _point_in_triangle(p: Point, a: Point, b: Point, c: Point, tolerance: float) -> bool:
    # Inclusive test against a counter-clockwise triangle.
    return (
        _cross(a, b, p) >= -tolerance
        and _cross(b, c, p) >= -tolerance
        and _cross(c, a, p) >= -tolerance
    )


def _find_ear(
    ring: Sequence[Point], order: list[int], tolerance: float, collinear: bool
) -> int | None:
    """Return the position in ``order`` of a clippable vertex, or None.

    With ``collinear`` set, only zero-area corners qualify; removing them
    never changes the filled area.
    """
    m = len(order)
    for k in range(m):
        a = ring[order[(k - 1) % m]]
        b = ring[order[k]]
        c = ring[order[(k + 1) % m]]
        cross = _cross(a, b, c)

        if collinear:
            if abs(cross) <= tolerance:
                return k
            continue

        if cross <= tolerance:
            continue

        blocked = False
        for other in order:
            p = ring[other]
            if p == a or p == b or p == c:
                continue
            if _point_in_triangle(p, a, b, c, tolerance):
                blocked = True
                break
        if not blocked:
            return k

    return None


def tessellate(vertices: Sequence[Point]) -> Tessellation:
    """Triangulate a simple ring by ear clipping.

    Works for either winding; triangles are always emitted counter-clockwise
    (Y-up). A simple ring of n vertices yields n - 2 triangles.

    Args:
        vertices: Ring vertices, without a closing duplicate

    Returns:
        Tessellation whose vertex buffer is the ring itself

    Raises:
        TessellationError: If the ring has fewer than 3 vertices, no area, or
            no ear can be clipped (self-intersecting ring)
    """
    ring = list(vertices)
    n = len(ring)
    if n < 3:
        raise TessellationError(n, "fewer than 3 vertices")

    tolerance = CROSS_EPSILON * _extent(ring) ** 2
    area = signed_area(ring)
    if abs(area) <= tolerance:
        raise TessellationError(n, "ring encloses no area")

    order = list(range(n)) if area > 0 else list(reversed(range(n)))
    triangles: list[tuple[int, int, int]] = []

    while len(order) > 3:
        ear = _find_ear(ring, order, tolerance, collinear=False)
        if ear is None:
            ear = _find_ear(ring, order, tolerance, collinear=True)
        if ear is None:
            raise TessellationError(n, "no ear found, ring is self-intersecting")

        m = len(order)
        triangles.append((order[(ear - 1) % m], order[ear], order[(ear + 1) % m]))
        del order[ear]

    triangles.append((order[0], order[1], order[2]))
    return Tessellation(vertices=tuple(ring), triangles=tuple(triangles))


def polygon_geometry(relative_vertices: Sequence[Point]) -> PolygonGeometry:
    """Classify a ring and tessellate it if needed.

    Tessellation failures are not fatal: the geometry is returned without a
    mesh and the renderer skips it, so one bad shape does not abort the rest
    of the document.
    """
    ring = clean_ring(relative_vertices)

    if len(ring) < 3:
        logger.debug("Degenerate polygon ring with %d vertices", len(ring))
        return PolygonGeometry(relative_vertices=tuple(ring), is_convex=False)

    if is_convex(ring):
        return PolygonGeometry(relative_vertices=tuple(ring), is_convex=True)

    try:
        tessellation = tessellate(ring)
    except TessellationError as e:
        logger.warning("Polygon will not be rendered: %s", e)
        return PolygonGeometry(relative_vertices=tuple(ring), is_convex=False)

    return PolygonGeometry(
        relative_vertices=tuple(ring), is_convex=False, tessellation=tessellation
    )


def make_polygon(
    center: Point,
    relative_vertices: Sequence[Point],
    exposure: Exposure = Exposure.ADD,
) -> PolygonPrimitive:
    """Build a polygon primitive from a ring relative to ``center``."""
    return PolygonPrimitive(
        center=center, geometry=polygon_geometry(relative_vertices), exposure=exposure
    )


def polygon_from_outline(
    vertices: Sequence[Point], exposure: Exposure = Exposure.ADD
) -> PolygonPrimitive:
    """Build a polygon primitive from absolute outline vertices.

    The centre is the mean of the distinct ring vertices.
    """
    ring = clean_ring(vertices)
    if ring:
        center = Point(
            sum(v.x for v in ring) / len(ring), sum(v.y for v in ring) / len(ring)
        )
    else:
        center = Point(0.0, 0.0)
    return make_polygon(center, [v - center for v in ring], exposure)
