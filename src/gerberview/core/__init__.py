"""Core rendering pipeline for gerberview.

This module contains the algorithms that turn parsed documents into
screen-space draw calls:

- Transform composition and matrix queries (scale factors, axis alignment)
- Arc discretization and polygon classification/tessellation
- Layer building from parser commands
- Pan/zoom view state, view fitting and pointer interaction
- Per-primitive rendering onto a rendering surface

Geometry helpers are designed to be:
- Stateless (safe for use in worker processes)
- Pure (no side effects)

Key classes:
- GerberTransform: User placement (rotation, mirroring, origin, offset, scale)
- ViewState: Pan translation and uniform zoom
- GerberRenderer: Paints one layer onto a RenderSurface
- GerberViewer: One interactive view of one layer
- DocumentProcessor: Builds several documents in parallel
"""

from gerberview.core.arc import generate_arc_points, make_arc, sweep_angle
from gerberview.core.builder import LayerBuilder, build_layer
from gerberview.core.color import Color, exposure_color, generate_pastel_color
from gerberview.core.interaction import InteractionInput, UiState
from gerberview.core.processor import DocumentProcessor, build_document
from gerberview.core.renderer import GerberRenderer
from gerberview.core.surface import RecordingSurface, RenderSurface
from gerberview.core.tessellation import (
    is_convex,
    make_polygon,
    polygon_from_outline,
    signed_area,
    tessellate,
)
from gerberview.core.transform import (
    GerberTransform,
    TransformCache,
    compose,
    is_90_or_270_rotation,
    is_axis_aligned,
    scaling_factors,
    transform_bounding_box,
)
from gerberview.core.view import Viewport, ViewState
from gerberview.core.viewer import GerberViewer

__all__ = [
    # Colours
    "Color",
    "exposure_color",
    "generate_pastel_color",
    # Transform
    "GerberTransform",
    "TransformCache",
    "compose",
    "is_90_or_270_rotation",
    "is_axis_aligned",
    "scaling_factors",
    "transform_bounding_box",
    # Geometry generation
    "generate_arc_points",
    "is_convex",
    "make_arc",
    "make_polygon",
    "polygon_from_outline",
    "signed_area",
    "sweep_angle",
    "tessellate",
    # Building
    "DocumentProcessor",
    "LayerBuilder",
    "build_document",
    "build_layer",
    # View and rendering
    "GerberRenderer",
    "GerberViewer",
    "InteractionInput",
    "RecordingSurface",
    "RenderSurface",
    "UiState",
    "ViewState",
    "Viewport",
]
