"""Pointer interaction and derived UI readouts.

The host window collects raw input (drag delta, scroll notches, pointer
position) into an InteractionInput once per frame. UiState applies it to a
ViewState and derives the readouts shown alongside the artwork: the cursor
position in shape space and the screen positions of the placement origin
and the viewport centre.
"""

from dataclasses import dataclass

from gerberview.core.transform import frame_to_shape, shape_to_frame
from gerberview.core.view import Viewport, ViewState
from gerberview.domain import ORIGIN, Matrix3, Point


@dataclass(frozen=True, slots=True)
class InteractionInput:
    """Raw input collected for one frame.

    Attributes:
        drag_delta: Pointer movement while dragging, in screen pixels
        scroll_delta: Scroll notches; positive zooms in
        pointer: Pointer position in screen pixels, None if outside the window
    """

    drag_delta: Point = ORIGIN
    scroll_delta: float = 0.0
    pointer: Point | None = None


@dataclass
class UiState:
    """Per-view interaction state.

    Attributes:
        cursor_gerber_coords: Pointer position in shape space, None when the
            pointer is outside the viewport or the transform is singular
        origin_screen_pos: Screen position of the placement origin
        center_screen_pos: Screen position of the viewport centre
    """

    cursor_gerber_coords: Point | None = None
    origin_screen_pos: Point = ORIGIN
    center_screen_pos: Point = ORIGIN

    def update(
        self,
        viewport: Viewport,
        interaction: InteractionInput,
        view: ViewState,
        matrix: Matrix3,
        origin: Point = ORIGIN,
        zoom_step: float = 1.1,
    ) -> None:
        """Apply one frame of input to ``view`` and refresh the readouts.

        Args:
            viewport: Screen rectangle of the view
            interaction: Input collected this frame
            view: View state to pan and zoom (mutated)
            matrix: Composed image and placement matrix
            origin: Placement origin in shape space
            zoom_step: Zoom multiplier per scroll notch
        """
        if interaction.drag_delta != ORIGIN:
            view.pan(interaction.drag_delta)

        pointer = interaction.pointer
        if pointer is not None and not viewport.contains(pointer):
            pointer = None

        if interaction.scroll_delta != 0.0:
            anchor = pointer if pointer is not None else viewport.center()
            view.zoom_at(anchor, zoom_step**interaction.scroll_delta)

        self.cursor_gerber_coords = None
        if pointer is not None:
            inverse = matrix.inverse()
            if inverse is not None:
                self.cursor_gerber_coords = frame_to_shape(view.screen_to_gerber(pointer), inverse)

        self.origin_screen_pos = view.gerber_to_screen(shape_to_frame(origin, matrix))
        self.center_screen_pos = viewport.center()
