"""Transform composition and derived matrix queries.

Two independent affine transforms are combined into one matrix:
- the image transform, fixed by the document (see ImageTransform)
- the placement transform, adjusted by the user every frame (GerberTransform)

The composed matrix works in the flipped (Y-down) frame: a shape-space point
is flipped once with ``Point.flip_y()`` and then multiplied by the matrix.
``shape_to_frame`` is the only place where that flip happens.

Derived quantities the renderer needs (per-axis scale factors, axis
alignment, 90/270 degree detection) are read from the composed matrix, never
recomputed from the original parameters.
"""

import math
from dataclasses import dataclass, field, replace

from gerberview.config import PlacementConfig
from gerberview.domain import ORIGIN, BoundingBox, ImageTransform, Matrix3, Point, to_screen_frame

# Scale factors are floored here so downstream code never divides by zero.
SCALE_EPSILON = 1e-12

# Relative to the largest scale factor. Repeated sin/cos evaluation and
# per-frame accumulated rotation leave entries around 1e-16..1e-12 where a
# mathematically exact zero is expected; 1e-9 absorbs that noise while any
# visibly rotated angle (well above 1e-9 rad) stays on the rotated path.
AXIS_ALIGNMENT_EPSILON = 1e-9


@dataclass
class GerberTransform:
    """User-controlled placement of a layer.

    Parameters are expressed in Y-up shape space: a positive rotation turns
    the artwork counter-clockwise on screen, ``origin`` is the pivot for
    rotation and mirroring, ``offset`` relocates the result independently.
    Mutable; the matrix is re-derived on every query.

    Attributes:
        rotation: Rotation angle in radians
        mirroring: (mirror X, mirror Y) about the origin
        origin: Pivot for rotation and mirroring
        offset: Translation applied after the pivot operations
        scale: Uniform scale factor, applied last
    """

    rotation: float = 0.0
    mirroring: tuple[bool, bool] = (False, False)
    origin: Point = ORIGIN
    offset: Point = ORIGIN
    scale: float = 1.0

    @classmethod
    def from_placement(cls, placement: PlacementConfig) -> "GerberTransform":
        """Create a placement transform from configuration."""
        return cls(
            rotation=math.radians(placement.rotation_degrees),
            mirroring=(placement.mirror_x, placement.mirror_y),
            origin=Point(*placement.origin),
            offset=Point(*placement.offset),
            scale=placement.scale,
        )

    def to_shape_matrix(self) -> Matrix3:
        """Placement matrix in Y-up shape space.

        Built in this exact order, since the steps do not commute: translate
        by -origin, mirror, rotate, translate by +origin, translate by the
        offset, scale.
        """
        matrix = Matrix3.translation(-self.origin)

        mirror_x, mirror_y = self.mirroring
        if mirror_x or mirror_y:
            matrix = Matrix3.scaling(-1.0 if mirror_x else 1.0, -1.0 if mirror_y else 1.0) @ matrix

        matrix = Matrix3.rotation(self.rotation) @ matrix
        matrix = Matrix3.translation(self.origin) @ matrix
        matrix = Matrix3.translation(self.offset) @ matrix
        return Matrix3.scaling(self.scale) @ matrix

    def to_matrix(self) -> Matrix3:
        """Placement matrix in the flipped frame points are fed through."""
        return to_screen_frame(self.to_shape_matrix())

    def inverse_intent(self) -> "GerberTransform":
        """The same placement with the rotation negated.

        Applying a rotation-only placement and then its inverse intent
        returns the original point.
        """
        return replace(self, rotation=-self.rotation)

    def rotate_by(self, delta: float) -> None:
        """Advance the rotation, keeping it within one turn."""
        self.rotation = math.remainder(self.rotation + delta, 2.0 * math.pi)


def compose(image: ImageTransform, placement: GerberTransform) -> Matrix3:
    """Combine image and placement transforms: placement first, then image."""
    return image.to_matrix() @ placement.to_matrix()


def scaling_factors(matrix: Matrix3) -> tuple[float, float]:
    """Lengths of the transformed unit basis vectors (linear-part columns).

    Independent of rotation; used to scale extents such as diameters, widths
    and rectangle edges. Floored at SCALE_EPSILON.
    """
    a, b, c, d = matrix.linear_part()
    return (max(math.hypot(a, c), SCALE_EPSILON), max(math.hypot(b, d), SCALE_EPSILON))


def _tolerance(matrix: Matrix3, epsilon: float) -> float:
    sx, sy = scaling_factors(matrix)
    return epsilon * max(sx, sy)


def is_axis_aligned(matrix: Matrix3, epsilon: float = AXIS_ALIGNMENT_EPSILON) -> bool:
    """Whether axis-aligned rectangles stay axis-aligned under ``matrix``.

    True when both off-diagonal linear entries are ~0 (0/180 degrees, with
    or without mirroring) or both diagonal entries are ~0 (90/270 degrees).
    """
    a, b, c, d = matrix.linear_part()
    tolerance = _tolerance(matrix, epsilon)
    off_diagonal_zero = abs(b) <= tolerance and abs(c) <= tolerance
    diagonal_zero = abs(a) <= tolerance and abs(d) <= tolerance
    return off_diagonal_zero or diagonal_zero


def is_90_or_270_rotation(matrix: Matrix3, epsilon: float = AXIS_ALIGNMENT_EPSILON) -> bool:
    """Whether ``matrix`` swaps the roles of X and Y.

    The diagonal is ~0 while the off-diagonal is not; rendered width and
    height must then be swapped.
    """
    a, b, c, d = matrix.linear_part()
    tolerance = _tolerance(matrix, epsilon)
    diagonal_zero = abs(a) <= tolerance and abs(d) <= tolerance
    return diagonal_zero and (abs(b) > tolerance or abs(c) > tolerance)


def shape_to_frame(point: Point, matrix: Matrix3) -> Point:
    """Flip a shape-space point and apply the composed matrix."""
    return matrix.transform_point(point.flip_y())


def frame_to_shape(point: Point, inverse: Matrix3) -> Point:
    """Undo ``shape_to_frame`` given the inverse of the composed matrix."""
    return inverse.transform_point(point).flip_y()


def transform_bounding_box(bbox: BoundingBox, matrix: Matrix3) -> BoundingBox:
    """Bounding box of a shape-space box once flipped and transformed."""
    return bbox.flip_y().apply_transform_matrix(matrix)


@dataclass(frozen=True)
class TransformCache:
    """Per-frame values derived from the composed matrix.

    Computed once per frame and handed to every primitive, instead of being
    recomputed per shape.

    Attributes:
        matrix: Composed image and placement matrix
        scaling: Per-axis scale factors
        axis_aligned: Result of is_axis_aligned
        swap_axes: Result of is_90_or_270_rotation
    """

    matrix: Matrix3
    scaling: tuple[float, float] = field(init=False)
    axis_aligned: bool = field(init=False)
    swap_axes: bool = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "scaling", scaling_factors(self.matrix))
        object.__setattr__(self, "axis_aligned", is_axis_aligned(self.matrix))
        object.__setattr__(self, "swap_axes", is_90_or_270_rotation(self.matrix))

    @property
    def extent_scale(self) -> float:
        """Scale for isotropic extents (circle diameters, stroke widths).

        Geometric mean of the axis factors; equal to either factor under a
        uniform scale.
        """
        sx, sy = self.scaling
        return math.sqrt(sx * sy)

    def to_frame(self, point: Point) -> Point:
        return shape_to_frame(point, self.matrix)
