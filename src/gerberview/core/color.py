"""Colours for rendering.

Colours are plain RGBA values; the rendering surface decides how to use
them.
"""

import colorsys
from typing import NamedTuple

from gerberview.domain import Exposure

# Successive hues are spread by the golden ratio so neighbours differ clearly.
_GOLDEN_RATIO_CONJUGATE = 0.618033988749895


class Color(NamedTuple):
    """An 8-bit RGBA colour."""

    r: int
    g: int
    b: int
    a: int = 255

    def to_hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}{self.a:02x}"


WHITE = Color(255, 255, 255)
BLACK = Color(0, 0, 0)
RED = Color(255, 0, 0)
GREEN = Color(0, 255, 0)
ORANGE = Color(255, 165, 0)
YELLOW = Color(255, 255, 0)
PURPLE = Color(128, 0, 128)
MAGENTA = Color(255, 0, 255)


def generate_pastel_color(index: int) -> Color:
    """Deterministic pastel colour for a shape index.

    The same index always yields the same colour, so colours are stable
    across frames.
    """
    hue = (index * _GOLDEN_RATIO_CONJUGATE) % 1.0
    r, g, b = colorsys.hls_to_rgb(hue, 0.75, 0.6)
    return Color(round(r * 255), round(g * 255), round(b * 255))


def exposure_color(exposure: Exposure, color: Color, clear_color: Color = BLACK) -> Color:
    """Colour a primitive is painted with, given its exposure."""
    if exposure is Exposure.SUBTRACT:
        return clear_color
    return color
