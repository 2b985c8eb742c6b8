"""Core geometric value types.

This module defines the small immutable value types shared by every layer of
the pipeline:
- Point: A 2D point or vector in shape space (Y-up) or screen space (Y-down)
- Matrix3: A 3x3 homogeneous affine matrix

Shape space is Y-up while rendering surfaces are Y-down. Conversion between
the two happens exactly once, via Point.flip_y(), before a point is pushed
through the composed transform matrix.
"""

import math
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Point:
    """A 2D point (or vector) with double precision coordinates.

    Immutable and hashable. Also used for vectors (offsets, deltas, sizes).

    Attributes:
        x: X coordinate
        y: Y coordinate
    """

    x: float
    y: float

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> "Point":
        return Point(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def __truediv__(self, divisor: float) -> "Point":
        return Point(self.x / divisor, self.y / divisor)

    def __neg__(self) -> "Point":
        return Point(-self.x, -self.y)

    def flip_y(self) -> "Point":
        """Negate the Y coordinate (shape space <-> screen orientation)."""
        return Point(self.x, -self.y)

    def length(self) -> float:
        """Euclidean length when used as a vector."""
        return math.hypot(self.x, self.y)

    def distance_to(self, other: "Point") -> float:
        """Euclidean distance to another point."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC.

        Returns:
            Dictionary with x and y fields
        """
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with x and y fields

        Returns:
            Point instance
        """
        return cls(x=float(data["x"]), y=float(data["y"]))


ORIGIN = Point(0.0, 0.0)


@dataclass(frozen=True, slots=True)
class Matrix3:
    """A 3x3 homogeneous matrix, stored row-major.

    Only affine matrices are built by this package, but multiplication and
    inversion are implemented for the general case.

    Attributes:
        m: Nine entries in row-major order
    """

    m: tuple[float, float, float, float, float, float, float, float, float]

    @classmethod
    def identity(cls) -> "Matrix3":
        return cls((1.0, 0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0.0, 1.0))

    @classmethod
    def translation(cls, offset: Point) -> "Matrix3":
        return cls((1.0, 0.0, offset.x, 0.0, 1.0, offset.y, 0.0, 0.0, 1.0))

    @classmethod
    def scaling(cls, sx: float, sy: float | None = None) -> "Matrix3":
        """Non-uniform scaling; ``sy`` defaults to ``sx``."""
        if sy is None:
            sy = sx
        return cls((sx, 0.0, 0.0, 0.0, sy, 0.0, 0.0, 0.0, 1.0))

    @classmethod
    def rotation(cls, angle: float) -> "Matrix3":
        """Rotation by ``angle`` radians (counter-clockwise in a Y-up frame)."""
        c = math.cos(angle)
        s = math.sin(angle)
        return cls((c, -s, 0.0, s, c, 0.0, 0.0, 0.0, 1.0))

    def __getitem__(self, index: tuple[int, int]) -> float:
        row, col = index
        return self.m[row * 3 + col]

    def __matmul__(self, other: "Matrix3") -> "Matrix3":
        a = self.m
        b = other.m
        result = []
        for row in range(3):
            for col in range(3):
                result.append(
                    a[row * 3] * b[col]
                    + a[row * 3 + 1] * b[3 + col]
                    + a[row * 3 + 2] * b[6 + col]
                )
        return Matrix3(tuple(result))  # type: ignore[arg-type]

    def linear_part(self) -> tuple[float, float, float, float]:
        """Return the 2x2 linear part as (m00, m01, m10, m11)."""
        return (self.m[0], self.m[1], self.m[3], self.m[4])

    def transform_point(self, point: Point) -> Point:
        """Apply the matrix to a point (translation included)."""
        m = self.m
        x = m[0] * point.x + m[1] * point.y + m[2]
        y = m[3] * point.x + m[4] * point.y + m[5]
        w = m[6] * point.x + m[7] * point.y + m[8]
        if w != 1.0 and w != 0.0:
            return Point(x / w, y / w)
        return Point(x, y)

    def transform_vector(self, vector: Point) -> Point:
        """Apply only the linear part (translation ignored)."""
        m = self.m
        return Point(m[0] * vector.x + m[1] * vector.y, m[3] * vector.x + m[4] * vector.y)

    def determinant(self) -> float:
        m = self.m
        return (
            m[0] * (m[4] * m[8] - m[5] * m[7])
            - m[1] * (m[3] * m[8] - m[5] * m[6])
            + m[2] * (m[3] * m[7] - m[4] * m[6])
        )

    def inverse(self) -> "Matrix3 | None":
        """Invert the matrix.

        Returns:
            The inverse, or None when the matrix is singular (e.g. zero scale)
        """
        det = self.determinant()
        if abs(det) < 1e-18:
            return None

        m = self.m
        adjugate = (
            m[4] * m[8] - m[5] * m[7],
            m[2] * m[7] - m[1] * m[8],
            m[1] * m[5] - m[2] * m[4],
            m[5] * m[6] - m[3] * m[8],
            m[0] * m[8] - m[2] * m[6],
            m[2] * m[3] - m[0] * m[5],
            m[3] * m[7] - m[4] * m[6],
            m[1] * m[6] - m[0] * m[7],
            m[0] * m[4] - m[1] * m[3],
        )
        return Matrix3(tuple(value / det for value in adjugate))  # type: ignore[arg-type]

    def is_close(self, other: "Matrix3", tolerance: float = 1e-9) -> bool:
        """Entry-wise comparison within ``tolerance``."""
        return all(abs(a - b) <= tolerance for a, b in zip(self.m, other.m))


Y_FLIP = Matrix3.scaling(1.0, -1.0)


def to_screen_frame(matrix: Matrix3) -> Matrix3:
    """Express a Y-up shape-space matrix in the Y-down (flipped) frame.

    For any point p: ``to_screen_frame(m).transform_point(p.flip_y())`` equals
    ``m.transform_point(p).flip_y()``. The point itself is still flipped only
    once; this is a change of basis of the matrix.
    """
    return Y_FLIP @ matrix @ Y_FLIP
