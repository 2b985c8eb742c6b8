"""Tests for building layers from parser commands."""

import math

import pytest

from gerberview.config import GeometryConfig
from gerberview.core.builder import LayerBuilder, build_layer
from gerberview.domain import (
    ArcDirection,
    ArcDraw,
    ArcPrimitive,
    CircleAperture,
    CirclePrimitive,
    Draw,
    Exposure,
    Flash,
    ImageTransform,
    LinePrimitive,
    ObroundAperture,
    Point,
    PolygonAperture,
    PolygonPrimitive,
    RectangleAperture,
    RectanglePrimitive,
    Region,
    SetImageTransform,
    commands_from_dict,
)
from gerberview.exceptions import ParseFailure


class TestFlash:
    """Tests for flashed apertures."""

    def test_circle(self) -> None:
        layer = build_layer([Flash(Point(1, 2), CircleAperture(0.5))])
        assert layer.primitives == (CirclePrimitive(Point(1, 2), 0.5),)

    def test_rectangle_is_centred_on_position(self) -> None:
        layer = build_layer([Flash(Point(10, 10), RectangleAperture(4.0, 2.0))])
        (rect,) = layer.primitives
        assert isinstance(rect, RectanglePrimitive)
        assert rect.origin == Point(8, 9)
        assert rect.center() == Point(10, 10)

    def test_wide_obround_is_horizontal_capsule(self) -> None:
        layer = build_layer([Flash(Point(10, 10), ObroundAperture(4.0, 2.0))])
        assert layer.primitives == (LinePrimitive(Point(9, 10), Point(11, 10), 2.0),)

    def test_tall_obround_is_vertical_capsule(self) -> None:
        layer = build_layer([Flash(Point(0, 0), ObroundAperture(1.0, 3.0))])
        assert layer.primitives == (LinePrimitive(Point(0, -1), Point(0, 1), 1.0),)

    def test_square_obround_is_circle(self) -> None:
        layer = build_layer([Flash(Point(0, 0), ObroundAperture(2.0, 2.0))])
        assert layer.primitives == (CirclePrimitive(Point(0, 0), 2.0),)

    def test_obround_bounding_box_matches_aperture(self) -> None:
        layer = build_layer([Flash(Point(0, 0), ObroundAperture(4.0, 2.0))])
        bbox = layer.bounding_box()
        assert bbox.width() == pytest.approx(4.0)
        assert bbox.height() == pytest.approx(2.0)

    def test_polygon_aperture(self) -> None:
        layer = build_layer([Flash(Point(5, 5), PolygonAperture(2.0, 6))])
        (polygon,) = layer.primitives

        assert isinstance(polygon, PolygonPrimitive)
        assert polygon.center == Point(5, 5)
        assert polygon.geometry.is_convex
        assert len(polygon.geometry.relative_vertices) == 6
        assert polygon.geometry.relative_vertices[0] == Point(1, 0)

    def test_rotated_polygon_aperture(self) -> None:
        layer = build_layer([Flash(Point(0, 0), PolygonAperture(2.0, 4, 90.0))])
        first = layer.primitives[0].geometry.relative_vertices[0]
        assert first.x == pytest.approx(0.0, abs=1e-12)
        assert first.y == pytest.approx(1.0)

    def test_polygon_aperture_needs_three_vertices(self) -> None:
        with pytest.raises(ParseFailure, match="at least 3 vertices"):
            build_layer([Flash(Point(0, 0), PolygonAperture(2.0, 2))])

    def test_exposure_propagates(self) -> None:
        layer = build_layer([Flash(Point(0, 0), CircleAperture(1.0), Exposure.SUBTRACT)])
        assert layer.primitives[0].exposure is Exposure.SUBTRACT


class TestStrokes:
    """Tests for linear and circular draws."""

    def test_draw_becomes_line(self) -> None:
        layer = build_layer([Draw(Point(0, 0), Point(10, 0), CircleAperture(0.2))])
        assert layer.primitives == (LinePrimitive(Point(0, 0), Point(10, 0), 0.2),)

    def test_draw_with_rectangular_aperture_fails(self) -> None:
        with pytest.raises(ParseFailure, match="circular aperture"):
            build_layer([Draw(Point(0, 0), Point(1, 0), RectangleAperture(1.0, 1.0))])

    def test_quarter_arc(self) -> None:
        layer = build_layer(
            [
                ArcDraw(
                    Point(1, 0),
                    Point(0, 1),
                    Point(0, 0),
                    ArcDirection.COUNTER_CLOCKWISE,
                    CircleAperture(0.1),
                )
            ]
        )
        (arc,) = layer.primitives

        assert isinstance(arc, ArcPrimitive)
        assert arc.radius == pytest.approx(1.0)
        assert arc.end_angle == pytest.approx(math.pi / 2)
        assert not arc.is_full_circle()
        assert arc.width == pytest.approx(0.1)

    def test_coincident_endpoints_make_full_circle(self) -> None:
        layer = build_layer(
            [
                ArcDraw(
                    Point(5, 0),
                    Point(5, 0),
                    Point(0, 0),
                    ArcDirection.CLOCKWISE,
                    CircleAperture(1.0),
                )
            ]
        )
        (arc,) = layer.primitives
        assert arc.is_full_circle()
        assert arc.radius == pytest.approx(5.0)
        assert len(arc.points) == 64

    def test_arc_resolution_from_config(self) -> None:
        command = ArcDraw(
            Point(5, 0), Point(5, 0), Point(0, 0), ArcDirection.COUNTER_CLOCKWISE, CircleAperture(1.0)
        )
        layer = build_layer([command], geometry_config=GeometryConfig(arc_segments_per_turn=16))
        assert len(layer.primitives[0].points) == 16

    def test_arc_with_obround_aperture_fails(self) -> None:
        command = ArcDraw(
            Point(1, 0), Point(0, 1), Point(0, 0), ArcDirection.CLOCKWISE, ObroundAperture(1.0, 2.0)
        )
        with pytest.raises(ParseFailure):
            build_layer([command])


class TestRegion:
    """Tests for filled regions."""

    def test_region_centre_is_vertex_mean(self) -> None:
        layer = build_layer(
            [Region((Point(0, 0), Point(4, 0), Point(4, 2), Point(0, 2), Point(0, 0)))]
        )
        (polygon,) = layer.primitives
        assert isinstance(polygon, PolygonPrimitive)
        assert polygon.center == Point(2, 1)
        assert polygon.geometry.is_convex

    def test_non_convex_region_is_tessellated(self) -> None:
        layer = build_layer(
            [
                Region(
                    (
                        Point(0, 0),
                        Point(2, 0),
                        Point(2, 1),
                        Point(1, 1),
                        Point(1, 2),
                        Point(0, 2),
                    )
                )
            ]
        )
        geometry = layer.primitives[0].geometry
        assert not geometry.is_convex
        assert geometry.tessellation is not None
        assert geometry.tessellation.triangle_count() == 4


class TestLayerBuilder:
    """Tests for whole-document behaviour."""

    def test_order_preserved(self) -> None:
        layer = build_layer(
            [
                Flash(Point(0, 0), RectangleAperture(1.0, 1.0)),
                Flash(Point(0, 0), CircleAperture(1.0)),
                Draw(Point(0, 0), Point(1, 1), CircleAperture(0.1)),
            ]
        )
        assert [type(p) for p in layer.primitives] == [
            RectanglePrimitive,
            CirclePrimitive,
            LinePrimitive,
        ]

    def test_last_image_transform_wins(self) -> None:
        layer = build_layer(
            [
                SetImageTransform(ImageTransform(rotation_degrees=90)),
                Flash(Point(0, 0), CircleAperture(1.0)),
                SetImageTransform(ImageTransform(mirror_a=True)),
            ]
        )
        assert layer.image_transform == ImageTransform(mirror_a=True)
        assert len(layer.primitives) == 1

    def test_default_image_transform_is_identity(self) -> None:
        layer = build_layer([Flash(Point(0, 0), CircleAperture(1.0))])
        assert layer.image_transform.is_identity()

    def test_name_carried_to_layer(self) -> None:
        layer = LayerBuilder("top_copper").build([])
        assert layer.name == "top_copper"
        assert layer.is_empty()

    def test_negative_size_reports_command_index(self) -> None:
        commands = [
            Flash(Point(0, 0), CircleAperture(1.0)),
            Flash(Point(0, 0), RectangleAperture(-1.0, 1.0)),
        ]
        with pytest.raises(ParseFailure) as exc_info:
            build_layer(commands, name="bad")

        assert exc_info.value.document == "bad"
        assert "command 1" in exc_info.value.reason

    def test_unknown_command_fails(self) -> None:
        with pytest.raises(ParseFailure, match="unsupported command"):
            build_layer([object()])  # type: ignore[list-item]

    def test_from_document_dictionary(self) -> None:
        commands = commands_from_dict(
            {
                "commands": [
                    {
                        "type": "flash",
                        "position": {"x": 1.0, "y": 1.0},
                        "aperture": {"shape": "circle", "diameter": 0.8},
                    },
                    {
                        "type": "draw",
                        "start": {"x": 0.0, "y": 0.0},
                        "end": {"x": 5.0, "y": 0.0},
                        "aperture": {"shape": "circle", "diameter": 0.2},
                    },
                ]
            }
        )
        layer = build_layer(commands)
        assert layer.primitive_counts()["circle"] == 1
        assert layer.primitive_counts()["line"] == 1
