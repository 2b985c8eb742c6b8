"""Domain models for gerberview.

This module contains the value types the rendering pipeline works on:
points and matrices, bounding boxes, primitives, parser commands and
layers. All models are designed to be:

- Immutable (frozen dataclasses), so built layers can be shared freely
- Picklable for building documents in worker processes
- Independent of any rendering surface

Key classes:
- Point, Matrix3: Geometric value types
- BoundingBox: Axis-aligned box with transform-and-rebound support
- CirclePrimitive, RectanglePrimitive, LinePrimitive, ArcPrimitive,
  PolygonPrimitive: The closed set of renderable shapes
- Layer, ImageTransform: One parsed document
- Flash, Draw, ArcDraw, Region, SetImageTransform: Parser commands
"""

from gerberview.domain.bbox import BoundingBox
from gerberview.domain.commands import (
    Aperture,
    ArcDraw,
    CircleAperture,
    Command,
    Draw,
    Flash,
    ObroundAperture,
    PolygonAperture,
    RectangleAperture,
    Region,
    SetImageTransform,
    command_from_dict,
    commands_from_dict,
    commands_to_dict,
)
from gerberview.domain.geometry import ORIGIN, Matrix3, Point, to_screen_frame
from gerberview.domain.layer import ImageTransform, Layer
from gerberview.domain.primitives import (
    ArcDirection,
    ArcPrimitive,
    CirclePrimitive,
    Exposure,
    LinePrimitive,
    PolygonGeometry,
    PolygonPrimitive,
    Primitive,
    RectanglePrimitive,
    Tessellation,
)

__all__: list[str] = [
    # Enums
    "ArcDirection",
    "Exposure",
    # Geometry
    "ORIGIN",
    "BoundingBox",
    "Matrix3",
    "Point",
    "to_screen_frame",
    # Primitives
    "ArcPrimitive",
    "CirclePrimitive",
    "LinePrimitive",
    "PolygonGeometry",
    "PolygonPrimitive",
    "Primitive",
    "RectanglePrimitive",
    "Tessellation",
    # Layers
    "ImageTransform",
    "Layer",
    # Commands
    "Aperture",
    "ArcDraw",
    "CircleAperture",
    "Command",
    "Draw",
    "Flash",
    "ObroundAperture",
    "PolygonAperture",
    "RectangleAperture",
    "Region",
    "SetImageTransform",
    "command_from_dict",
    "commands_from_dict",
    "commands_to_dict",
]
