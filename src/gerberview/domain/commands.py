"""Abstract drawing commands handed over by the parser.

The parser (an external collaborator) turns artwork text into this ordered
sequence of commands with absolute shape-space coordinates. The layer
builder consumes them; nothing in this package parses the text format.

Apertures:
- CircleAperture, RectangleAperture, ObroundAperture, PolygonAperture

Commands:
- Flash: an aperture stamped at a position (pads)
- Draw: a linear stroke with a circular aperture (traces)
- ArcDraw: a circular stroke with a circular aperture
- Region: a filled outline
- SetImageTransform: the document's image transform
"""

from dataclasses import dataclass
from typing import Any

from gerberview.domain.geometry import Point
from gerberview.domain.layer import ImageTransform
from gerberview.domain.primitives import ArcDirection, Exposure


@dataclass(frozen=True, slots=True)
class CircleAperture:
    diameter: float

    def to_dict(self) -> dict[str, Any]:
        return {"shape": "circle", "diameter": self.diameter}


@dataclass(frozen=True, slots=True)
class RectangleAperture:
    width: float
    height: float

    def to_dict(self) -> dict[str, Any]:
        return {"shape": "rectangle", "width": self.width, "height": self.height}


@dataclass(frozen=True, slots=True)
class ObroundAperture:
    """A rectangle with fully rounded short ends (a stadium)."""

    width: float
    height: float

    def to_dict(self) -> dict[str, Any]:
        return {"shape": "obround", "width": self.width, "height": self.height}


@dataclass(frozen=True, slots=True)
class PolygonAperture:
    """A regular polygon inscribed in a circle of ``outer_diameter``.

    Attributes:
        outer_diameter: Diameter of the circumscribed circle
        vertices: Number of vertices (3..12)
        rotation_degrees: Rotation of the first vertex from the X axis
    """

    outer_diameter: float
    vertices: int
    rotation_degrees: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "shape": "polygon",
            "diameter": self.outer_diameter,
            "vertices": self.vertices,
            "rotation": self.rotation_degrees,
        }


Aperture = CircleAperture | RectangleAperture | ObroundAperture | PolygonAperture


def aperture_from_dict(data: dict[str, Any]) -> Aperture:
    """Deserialize an aperture from its dictionary form.

    Raises:
        KeyError: If a required field is missing
        ValueError: If the shape is unknown
    """
    shape = data["shape"]
    if shape == "circle":
        return CircleAperture(float(data["diameter"]))
    if shape == "rectangle":
        return RectangleAperture(float(data["width"]), float(data["height"]))
    if shape == "obround":
        return ObroundAperture(float(data["width"]), float(data["height"]))
    if shape == "polygon":
        return PolygonAperture(
            float(data["diameter"]), int(data["vertices"]), float(data.get("rotation", 0.0))
        )
    raise ValueError(f"Unknown aperture shape '{shape}'")


@dataclass(frozen=True, slots=True)
class Flash:
    position: Point
    aperture: Aperture
    exposure: Exposure = Exposure.ADD

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "flash",
            "position": self.position.to_dict(),
            "aperture": self.aperture.to_dict(),
            "exposure": self.exposure.value,
        }


@dataclass(frozen=True, slots=True)
class Draw:
    start: Point
    end: Point
    aperture: Aperture
    exposure: Exposure = Exposure.ADD

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "draw",
            "start": self.start.to_dict(),
            "end": self.end.to_dict(),
            "aperture": self.aperture.to_dict(),
            "exposure": self.exposure.value,
        }


@dataclass(frozen=True, slots=True)
class ArcDraw:
    """Circular stroke from ``start`` to ``end`` around ``center``.

    ``start == end`` describes a full circle.
    """

    start: Point
    end: Point
    center: Point
    direction: ArcDirection
    aperture: Aperture
    exposure: Exposure = Exposure.ADD

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "arc",
            "start": self.start.to_dict(),
            "end": self.end.to_dict(),
            "center": self.center.to_dict(),
            "direction": self.direction.value,
            "aperture": self.aperture.to_dict(),
            "exposure": self.exposure.value,
        }


@dataclass(frozen=True, slots=True)
class Region:
    """Filled outline; the ring may repeat its first vertex at the end."""

    vertices: tuple[Point, ...]
    exposure: Exposure = Exposure.ADD

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "region",
            "vertices": [vertex.to_dict() for vertex in self.vertices],
            "exposure": self.exposure.value,
        }


@dataclass(frozen=True, slots=True)
class SetImageTransform:
    image_transform: ImageTransform

    def to_dict(self) -> dict[str, Any]:
        return {"type": "image_transform", **self.image_transform.to_dict()}


Command = Flash | Draw | ArcDraw | Region | SetImageTransform


def command_from_dict(data: dict[str, Any]) -> Command:
    """Deserialize a single command.

    Args:
        data: Dictionary representation of a command

    Returns:
        Command instance

    Raises:
        KeyError: If a required field is missing
        ValueError: If the command type or an enum value is unknown
    """
    kind = data["type"]
    exposure = Exposure(data.get("exposure", Exposure.ADD.value))

    if kind == "flash":
        return Flash(
            position=Point.from_dict(data["position"]),
            aperture=aperture_from_dict(data["aperture"]),
            exposure=exposure,
        )
    if kind == "draw":
        return Draw(
            start=Point.from_dict(data["start"]),
            end=Point.from_dict(data["end"]),
            aperture=aperture_from_dict(data["aperture"]),
            exposure=exposure,
        )
    if kind == "arc":
        return ArcDraw(
            start=Point.from_dict(data["start"]),
            end=Point.from_dict(data["end"]),
            center=Point.from_dict(data["center"]),
            direction=ArcDirection(data["direction"]),
            aperture=aperture_from_dict(data["aperture"]),
            exposure=exposure,
        )
    if kind == "region":
        return Region(
            vertices=tuple(Point.from_dict(v) for v in data["vertices"]),
            exposure=exposure,
        )
    if kind == "image_transform":
        return SetImageTransform(ImageTransform.from_dict(data))
    raise ValueError(f"Unknown command type '{kind}'")


def commands_to_dict(commands: list[Command]) -> dict[str, Any]:
    """Serialize a command sequence as a document dictionary."""
    return {"commands": [command.to_dict() for command in commands]}


def commands_from_dict(data: dict[str, Any]) -> list[Command]:
    """Deserialize a document dictionary into a command sequence."""
    return [command_from_dict(item) for item in data["commands"]]
