"""View state: pan and zoom from the transformed frame to screen pixels.

The view applies a uniform zoom and a screen translation after the composed
transform. It knows nothing about Y orientation; points reaching it were
already flipped once by the transform pipeline.
"""

from dataclasses import dataclass

from gerberview.core.transform import SCALE_EPSILON
from gerberview.domain import ORIGIN, BoundingBox, Point


@dataclass(frozen=True, slots=True)
class Viewport:
    """Screen rectangle the view is drawn into.

    Attributes:
        min: Top-left corner in screen pixels
        width: Width in pixels
        height: Height in pixels
    """

    min: Point
    width: float
    height: float

    @classmethod
    def from_size(cls, width: float, height: float) -> "Viewport":
        return cls(ORIGIN, width, height)

    def center(self) -> Point:
        return Point(self.min.x + self.width / 2.0, self.min.y + self.height / 2.0)

    def contains(self, position: Point) -> bool:
        return (
            self.min.x <= position.x <= self.min.x + self.width
            and self.min.y <= position.y <= self.min.y + self.height
        )


@dataclass
class ViewState:
    """Pan translation and uniform zoom of one view.

    Attributes:
        translation: Screen-space offset in pixels
        scale: Pixels per transformed unit (>= 0)
    """

    translation: Point = ORIGIN
    scale: float = 1.0

    def gerber_to_screen(self, point: Point) -> Point:
        """Map a transformed point to screen pixels: translation + point * scale."""
        return self.translation + point * self.scale

    def screen_to_gerber(self, position: Point) -> Point:
        """Inverse of ``gerber_to_screen``.

        A collapsed view (zero scale) maps every position to the origin
        instead of dividing by zero.
        """
        if self.scale <= SCALE_EPSILON:
            return ORIGIN
        return (position - self.translation) / self.scale

    def fit_view(self, viewport: Viewport, target_box: BoundingBox, zoom_factor: float) -> None:
        """Centre ``target_box`` in ``viewport``, using at most ``zoom_factor`` of it.

        ``target_box`` must already be in the transformed frame. A zoom
        factor below 1 leaves a margin; this is a framing heuristic, not a
        guarantee against clipping. A box with zero width or height (or an
        empty box) keeps a scale of 1 and is only centred.
        """
        box_width = target_box.width()
        box_height = target_box.height()

        if box_width <= 0.0 or box_height <= 0.0:
            scale = 1.0
        else:
            scale = min(viewport.width / box_width, viewport.height / box_height) * zoom_factor

        self.scale = scale
        self.translation = viewport.center() - target_box.center() * scale

    def pan(self, delta: Point) -> None:
        """Move the view by a screen-space delta."""
        self.translation = self.translation + delta

    def zoom_at(self, anchor: Point, factor: float) -> None:
        """Zoom by ``factor`` keeping the screen position ``anchor`` fixed."""
        if factor <= 0.0:
            return
        self.translation = anchor - (anchor - self.translation) * factor
        self.scale *= factor
