"""Axis-aligned bounding boxes.

Bounding boxes are derived values: they are recomputed whenever the
geometry or the transform feeding them changes and are never used as a
source of truth.
"""

import math
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from gerberview.domain.geometry import ORIGIN, Matrix3, Point


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """Axis-aligned box given by its min and max corners.

    The empty box has an inverted infinite extent (min = +inf, max = -inf) so
    that ``union`` with any other box yields that box unchanged.

    Attributes:
        min: Minimum corner (bottom-left in Y-up space)
        max: Maximum corner (top-right in Y-up space)
    """

    min: Point
    max: Point

    @classmethod
    def empty(cls) -> "BoundingBox":
        """Return the empty box."""
        return cls(Point(math.inf, math.inf), Point(-math.inf, -math.inf))

    @classmethod
    def from_points(cls, points: Iterable[Point]) -> "BoundingBox":
        """Return the minimal box containing all points.

        An empty input yields the empty box rather than an error, so callers
        need not special-case it.
        """
        min_x = min_y = math.inf
        max_x = max_y = -math.inf
        for point in points:
            min_x = min(min_x, point.x)
            min_y = min(min_y, point.y)
            max_x = max(max_x, point.x)
            max_y = max(max_y, point.y)
        return cls(Point(min_x, min_y), Point(max_x, max_y))

    def is_empty(self) -> bool:
        return self.min.x > self.max.x or self.min.y > self.max.y

    def width(self) -> float:
        return 0.0 if self.is_empty() else self.max.x - self.min.x

    def height(self) -> float:
        return 0.0 if self.is_empty() else self.max.y - self.min.y

    def center(self) -> Point:
        """Centre of the box; the origin for the empty box."""
        if self.is_empty():
            return ORIGIN
        return Point((self.min.x + self.max.x) / 2.0, (self.min.y + self.max.y) / 2.0)

    def vertices(self) -> list[Point]:
        """Return the four corners.

        Order is counter-clockwise from the bottom-left corner in Y-up space:
        min, (max.x, min.y), max, (min.x, max.y). Callers zip corners with
        their transformed counterparts, so the order is fixed. The empty box
        has no vertices.
        """
        if self.is_empty():
            return []
        return [
            Point(self.min.x, self.min.y),
            Point(self.max.x, self.min.y),
            Point(self.max.x, self.max.y),
            Point(self.min.x, self.max.y),
        ]

    def apply_transform_matrix(self, matrix: Matrix3) -> "BoundingBox":
        """Return the axis-aligned box enclosing the four transformed corners.

        Transforming only min and max would be wrong for rotations: the tight
        enclosure of a rotated box comes from all four corners.
        """
        return BoundingBox.from_points(matrix.transform_point(v) for v in self.vertices())

    def flip_y(self) -> "BoundingBox":
        """Mirror the box across the X axis (shape space <-> screen orientation)."""
        if self.is_empty():
            return self
        return BoundingBox(Point(self.min.x, -self.max.y), Point(self.max.x, -self.min.y))

    def union(self, other: "BoundingBox") -> "BoundingBox":
        return BoundingBox(
            Point(min(self.min.x, other.min.x), min(self.min.y, other.min.y)),
            Point(max(self.max.x, other.max.x), max(self.max.y, other.max.y)),
        )

    def expand(self, margin: float) -> "BoundingBox":
        """Grow the box by ``margin`` on every side."""
        if self.is_empty():
            return self
        return BoundingBox(
            Point(self.min.x - margin, self.min.y - margin),
            Point(self.max.x + margin, self.max.y + margin),
        )

    def contains(self, point: Point) -> bool:
        return self.min.x <= point.x <= self.max.x and self.min.y <= point.y <= self.max.y

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary; the empty box serializes as None corners."""
        if self.is_empty():
            return {"min": None, "max": None}
        return {"min": self.min.to_dict(), "max": self.max.to_dict()}
