"""Layer representation.

A layer is what one parsed document becomes: an ordered, immutable sequence
of primitives, its cached document bounding box, and the document's image
transform. A document edit builds a new layer; layers are never mutated.
"""

import math
from collections import Counter
from dataclasses import dataclass, field
from typing import Any

from gerberview.domain.bbox import BoundingBox
from gerberview.domain.geometry import ORIGIN, Matrix3, Point, to_screen_frame
from gerberview.domain.primitives import Primitive


@dataclass(frozen=True, slots=True)
class ImageTransform:
    """Fixed affine normalisation intrinsic to a document.

    Mirrors the legacy image parameters of the format: image rotation in
    multiples of 90 degrees (counter-clockwise), per-axis mirroring, an
    offset and per-axis scale factors. Applied in the order scale, mirror,
    rotate, offset.

    Attributes:
        rotation_degrees: 0, 90, 180 or 270
        mirror_a: Mirror along the X axis (negates X)
        mirror_b: Mirror along the Y axis (negates Y)
        offset: Translation in shape units
        scale_a: Scale factor along X
        scale_b: Scale factor along Y
    """

    rotation_degrees: int = 0
    mirror_a: bool = False
    mirror_b: bool = False
    offset: Point = ORIGIN
    scale_a: float = 1.0
    scale_b: float = 1.0

    def __post_init__(self) -> None:
        if self.rotation_degrees not in (0, 90, 180, 270):
            raise ValueError(
                f"Image rotation must be 0, 90, 180 or 270 degrees, got {self.rotation_degrees}"
            )

    def to_shape_matrix(self) -> Matrix3:
        """Matrix in Y-up shape space."""
        mirror = Matrix3.scaling(-1.0 if self.mirror_a else 1.0, -1.0 if self.mirror_b else 1.0)
        return (
            Matrix3.translation(self.offset)
            @ _quarter_turn(self.rotation_degrees)
            @ mirror
            @ Matrix3.scaling(self.scale_a, self.scale_b)
        )

    def to_matrix(self) -> Matrix3:
        """Matrix in the flipped frame the renderer feeds points through."""
        return to_screen_frame(self.to_shape_matrix())

    def is_identity(self) -> bool:
        return self.to_shape_matrix().is_close(Matrix3.identity(), 0.0)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC.

        Returns:
            Dictionary representation of the image transform
        """
        return {
            "rotation": self.rotation_degrees,
            "mirror_a": self.mirror_a,
            "mirror_b": self.mirror_b,
            "offset": self.offset.to_dict(),
            "scale_a": self.scale_a,
            "scale_b": self.scale_b,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ImageTransform":
        """Deserialize from dictionary.

        Args:
            data: Dictionary representation of an image transform

        Returns:
            ImageTransform instance
        """
        offset = data.get("offset")
        return cls(
            rotation_degrees=int(data.get("rotation", 0)),
            mirror_a=bool(data.get("mirror_a", False)),
            mirror_b=bool(data.get("mirror_b", False)),
            offset=Point.from_dict(offset) if offset else ORIGIN,
            scale_a=float(data.get("scale_a", 1.0)),
            scale_b=float(data.get("scale_b", 1.0)),
        )


def _quarter_turn(degrees: int) -> Matrix3:
    # Exact entries: sin/cos of multiples of 90 degrees would leave 6e-17 noise.
    cos_sin = {0: (1.0, 0.0), 90: (0.0, 1.0), 180: (-1.0, 0.0), 270: (0.0, -1.0)}
    c, s = cos_sin[degrees]
    return Matrix3((c, -s, 0.0, s, c, 0.0, 0.0, 0.0, 1.0))


@dataclass(frozen=True)
class Layer:
    """An immutable, ordered sequence of primitives.

    List order is z-order: later primitives are drawn over earlier ones.

    Attributes:
        primitives: Primitives in drawing order
        image_transform: Document-intrinsic transform
        name: Optional document name, used in logs
    """

    primitives: tuple[Primitive, ...]
    image_transform: ImageTransform = field(default_factory=ImageTransform)
    name: str = ""
    _bounding_box: BoundingBox = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        bbox = BoundingBox.empty()
        for primitive in self.primitives:
            if not primitive.is_degenerate():
                bbox = bbox.union(primitive.bounding_box())
        object.__setattr__(self, "_bounding_box", bbox)

    def bounding_box(self) -> BoundingBox:
        """Document bounding box in shape space, computed once at construction."""
        return self._bounding_box

    def is_empty(self) -> bool:
        return len(self.primitives) == 0

    def primitive_counts(self) -> dict[str, int]:
        """Count primitives per kind (e.g. ``{"circle": 3, "line": 12}``)."""
        counts = Counter(
            type(primitive).__name__.removesuffix("Primitive").lower()
            for primitive in self.primitives
        )
        return dict(counts)

    def degenerate_count(self) -> int:
        return sum(1 for primitive in self.primitives if primitive.is_degenerate())

    def extent(self) -> float:
        """Diagonal length of the bounding box, 0.0 for an empty layer."""
        bbox = self._bounding_box
        return math.hypot(bbox.width(), bbox.height())
