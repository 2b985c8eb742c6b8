"""Tests for domain models to verify they work correctly."""

import math
import pickle

import pytest

from gerberview.domain import (
    ORIGIN,
    ArcDirection,
    ArcDraw,
    BoundingBox,
    CircleAperture,
    CirclePrimitive,
    Draw,
    Exposure,
    Flash,
    ImageTransform,
    Layer,
    LinePrimitive,
    Matrix3,
    ObroundAperture,
    Point,
    PolygonAperture,
    RectangleAperture,
    RectanglePrimitive,
    Region,
    SetImageTransform,
    command_from_dict,
    commands_from_dict,
    commands_to_dict,
    to_screen_frame,
)


class TestPoint:
    """Tests for Point class."""

    def test_point_creation(self) -> None:
        """Test basic point creation."""
        p = Point(100.0, 200.0)
        assert p.x == 100.0
        assert p.y == 200.0

    def test_point_arithmetic(self) -> None:
        """Test vector arithmetic."""
        a = Point(1.0, 2.0)
        b = Point(3.0, 5.0)
        assert a + b == Point(4.0, 7.0)
        assert b - a == Point(2.0, 3.0)
        assert a * 2 == Point(2.0, 4.0)
        assert 2 * a == Point(2.0, 4.0)
        assert b / 2 == Point(1.5, 2.5)
        assert -a == Point(-1.0, -2.0)

    def test_flip_y(self) -> None:
        """Test that flip_y negates only Y and is its own inverse."""
        p = Point(3.0, 4.0)
        assert p.flip_y() == Point(3.0, -4.0)
        assert p.flip_y().flip_y() == p

    def test_length_and_distance(self) -> None:
        assert Point(3.0, 4.0).length() == 5.0
        assert Point(1.0, 1.0).distance_to(Point(4.0, 5.0)) == 5.0

    def test_point_to_tuple(self) -> None:
        """Test point to tuple conversion."""
        assert Point(100.0, 200.0).to_tuple() == (100.0, 200.0)

    def test_point_serialization(self) -> None:
        """Test point serialization and deserialization."""
        p1 = Point(100.0, 200.0)
        p2 = Point.from_dict(p1.to_dict())
        assert p2 == p1

    def test_point_immutable(self) -> None:
        """Test that point is immutable."""
        p = Point(100.0, 200.0)
        with pytest.raises(AttributeError):
            p.x = 300.0  # type: ignore


class TestMatrix3:
    """Tests for Matrix3 class."""

    def test_identity_leaves_points(self) -> None:
        p = Point(3.5, -2.0)
        assert Matrix3.identity().transform_point(p) == p

    def test_translation(self) -> None:
        m = Matrix3.translation(Point(10.0, -5.0))
        assert m.transform_point(Point(1.0, 1.0)) == Point(11.0, -4.0)
        # Vectors ignore translation
        assert m.transform_vector(Point(1.0, 1.0)) == Point(1.0, 1.0)

    def test_rotation_counter_clockwise(self) -> None:
        """Test that a positive angle rotates counter-clockwise in Y-up space."""
        p = Matrix3.rotation(math.pi / 2).transform_point(Point(1.0, 0.0))
        assert p.x == pytest.approx(0.0, abs=1e-12)
        assert p.y == pytest.approx(1.0)

    def test_composition_order(self) -> None:
        """Test that (a @ b) applies b first."""
        scale = Matrix3.scaling(2.0)
        move = Matrix3.translation(Point(1.0, 0.0))
        assert (move @ scale).transform_point(Point(1.0, 0.0)) == Point(3.0, 0.0)
        assert (scale @ move).transform_point(Point(1.0, 0.0)) == Point(4.0, 0.0)

    def test_getitem(self) -> None:
        m = Matrix3.translation(Point(7.0, 8.0))
        assert m[0, 2] == 7.0
        assert m[1, 2] == 8.0
        assert m[2, 2] == 1.0

    def test_inverse(self) -> None:
        m = (
            Matrix3.translation(Point(3.0, -1.0))
            @ Matrix3.rotation(0.7)
            @ Matrix3.scaling(2.0, 0.5)
        )
        inverse = m.inverse()
        assert inverse is not None
        assert (m @ inverse).is_close(Matrix3.identity())

    def test_singular_matrix_has_no_inverse(self) -> None:
        assert Matrix3.scaling(0.0).inverse() is None

    def test_determinant(self) -> None:
        assert Matrix3.scaling(2.0, 3.0).determinant() == pytest.approx(6.0)
        assert Matrix3.scaling(1.0, -1.0).determinant() == pytest.approx(-1.0)

    def test_screen_frame_is_change_of_basis(self) -> None:
        """Test that flipping then applying the screen-frame matrix equals apply then flip."""
        m = Matrix3.translation(Point(4.0, 2.0)) @ Matrix3.rotation(0.3)
        p = Point(1.5, -2.5)
        expected = m.transform_point(p).flip_y()
        actual = to_screen_frame(m).transform_point(p.flip_y())
        assert actual.x == pytest.approx(expected.x)
        assert actual.y == pytest.approx(expected.y)


class TestBoundingBox:
    """Tests for BoundingBox class."""

    def test_from_points(self) -> None:
        bbox = BoundingBox.from_points([Point(1, 5), Point(-2, 3), Point(4, -1)])
        assert bbox.min == Point(-2, -1)
        assert bbox.max == Point(4, 5)
        assert bbox.width() == 6
        assert bbox.height() == 6
        assert bbox.center() == Point(1, 2)

    def test_empty_box(self) -> None:
        """Test that an empty input yields the empty box, not an error."""
        bbox = BoundingBox.from_points([])
        assert bbox.is_empty()
        assert bbox.width() == 0.0
        assert bbox.height() == 0.0
        assert bbox.center() == ORIGIN
        assert bbox.vertices() == []

    def test_union_with_empty(self) -> None:
        box = BoundingBox(Point(0, 0), Point(1, 1))
        assert BoundingBox.empty().union(box) == box
        assert box.union(BoundingBox.empty()) == box

    def test_vertices_order(self) -> None:
        """Test corners are counter-clockwise from the bottom-left."""
        bbox = BoundingBox(Point(0, 0), Point(2, 1))
        assert bbox.vertices() == [Point(0, 0), Point(2, 0), Point(2, 1), Point(0, 1)]

    def test_single_point_box(self) -> None:
        bbox = BoundingBox.from_points([Point(3, 3)])
        assert not bbox.is_empty()
        assert bbox.width() == 0.0
        assert bbox.vertices() == [Point(3, 3)] * 4

    def test_apply_transform_uses_all_corners(self) -> None:
        """Test that a 45 degree rotated unit square re-bounds to its diagonal."""
        square = BoundingBox(Point(-0.5, -0.5), Point(0.5, 0.5))
        rotated = square.apply_transform_matrix(Matrix3.rotation(math.pi / 4))

        half_diagonal = math.sqrt(2) / 2
        assert rotated.width() / 2 == pytest.approx(half_diagonal)
        assert rotated.height() / 2 == pytest.approx(half_diagonal)
        assert rotated.center().x == pytest.approx(0.0, abs=1e-12)

    def test_flip_y(self) -> None:
        bbox = BoundingBox(Point(0, 1), Point(2, 3))
        assert bbox.flip_y() == BoundingBox(Point(0, -3), Point(2, -1))

    def test_expand(self) -> None:
        bbox = BoundingBox(Point(0, 0), Point(1, 1)).expand(0.5)
        assert bbox == BoundingBox(Point(-0.5, -0.5), Point(1.5, 1.5))
        assert BoundingBox.empty().expand(1.0).is_empty()

    def test_to_dict(self) -> None:
        assert BoundingBox.empty().to_dict() == {"min": None, "max": None}
        assert BoundingBox(Point(0, 0), Point(1, 2)).to_dict() == {
            "min": {"x": 0, "y": 0},
            "max": {"x": 1, "y": 2},
        }


class TestPrimitives:
    """Tests for primitive shapes."""

    def test_circle_bounding_box(self) -> None:
        circle = CirclePrimitive(Point(1, 1), 4.0)
        assert circle.bounding_box() == BoundingBox(Point(-1, -1), Point(3, 3))
        assert circle.exposure is Exposure.ADD

    def test_negative_sizes_rejected(self) -> None:
        with pytest.raises(ValueError):
            CirclePrimitive(ORIGIN, -1.0)
        with pytest.raises(ValueError):
            RectanglePrimitive(ORIGIN, -1.0, 1.0)
        with pytest.raises(ValueError):
            LinePrimitive(ORIGIN, Point(1, 0), -0.1)

    def test_degenerate_detection(self) -> None:
        assert CirclePrimitive(ORIGIN, 0.0).is_degenerate()
        assert RectanglePrimitive(ORIGIN, 0.0, 1.0).is_degenerate()
        assert LinePrimitive(ORIGIN, Point(1, 0), 0.0).is_degenerate()
        # A zero-length line with a width is a dot, not degenerate
        assert not LinePrimitive(ORIGIN, ORIGIN, 1.0).is_degenerate()

    def test_rectangle_center(self) -> None:
        rect = RectanglePrimitive(Point(1, 2), 4.0, 2.0)
        assert rect.center() == Point(3, 3)

    def test_line_bounding_box_includes_caps(self) -> None:
        line = LinePrimitive(Point(0, 0), Point(10, 0), 2.0)
        assert line.bounding_box() == BoundingBox(Point(-1, -1), Point(11, 1))

    def test_primitives_picklable(self) -> None:
        """Test primitives survive pickling for worker processes."""
        circle = CirclePrimitive(Point(1, 2), 3.0, Exposure.SUBTRACT)
        assert pickle.loads(pickle.dumps(circle)) == circle


class TestImageTransform:
    """Tests for ImageTransform class."""

    def test_default_is_identity(self) -> None:
        assert ImageTransform().is_identity()

    def test_invalid_rotation_rejected(self) -> None:
        with pytest.raises(ValueError):
            ImageTransform(rotation_degrees=45)

    def test_quarter_turn_is_exact(self) -> None:
        """Test that quarter turns produce exact zeros."""
        a, b, c, d = ImageTransform(rotation_degrees=90).to_shape_matrix().linear_part()
        assert (a, b, c, d) == (0.0, -1.0, 1.0, 0.0)

    def test_scale_then_offset(self) -> None:
        transform = ImageTransform(offset=Point(10, 0), scale_a=2.0, scale_b=3.0)
        assert transform.to_shape_matrix().transform_point(Point(1, 1)) == Point(12, 3)

    def test_serialization(self) -> None:
        transform = ImageTransform(90, True, False, Point(1, 2), 2.0, 0.5)
        assert ImageTransform.from_dict(transform.to_dict()) == transform


class TestLayer:
    """Tests for Layer class."""

    def test_bounding_box_skips_degenerate(self) -> None:
        layer = Layer(
            (
                CirclePrimitive(Point(0, 0), 2.0),
                CirclePrimitive(Point(100, 100), 0.0),
                RectanglePrimitive(Point(5, 5), 1.0, 1.0),
            )
        )
        assert layer.bounding_box() == BoundingBox(Point(-1, -1), Point(6, 6))
        assert layer.degenerate_count() == 1

    def test_empty_layer(self) -> None:
        layer = Layer(())
        assert layer.is_empty()
        assert layer.bounding_box().is_empty()
        assert layer.extent() == 0.0

    def test_primitive_counts(self) -> None:
        layer = Layer(
            (
                CirclePrimitive(ORIGIN, 1.0),
                CirclePrimitive(ORIGIN, 2.0),
                LinePrimitive(ORIGIN, Point(1, 0), 0.1),
            )
        )
        assert layer.primitive_counts() == {"circle": 2, "line": 1}

    def test_layer_immutable(self) -> None:
        layer = Layer((CirclePrimitive(ORIGIN, 1.0),))
        with pytest.raises(AttributeError):
            layer.name = "other"  # type: ignore

    def test_layer_picklable(self) -> None:
        layer = Layer((CirclePrimitive(ORIGIN, 1.0),), ImageTransform(rotation_degrees=180), "top")
        restored = pickle.loads(pickle.dumps(layer))
        assert restored == layer
        assert restored.bounding_box() == layer.bounding_box()


class TestCommands:
    """Tests for parser commands and their serialization."""

    def test_round_trip_all_command_kinds(self) -> None:
        commands = [
            Flash(Point(1, 2), CircleAperture(0.5)),
            Flash(Point(3, 4), RectangleAperture(1.0, 2.0), Exposure.SUBTRACT),
            Flash(Point(5, 6), ObroundAperture(2.0, 1.0)),
            Flash(Point(7, 8), PolygonAperture(3.0, 6, 15.0)),
            Draw(Point(0, 0), Point(10, 0), CircleAperture(0.2)),
            ArcDraw(Point(1, 0), Point(0, 1), ORIGIN, ArcDirection.COUNTER_CLOCKWISE, CircleAperture(0.1)),
            Region((Point(0, 0), Point(1, 0), Point(0, 1))),
            SetImageTransform(ImageTransform(rotation_degrees=270)),
        ]
        assert commands_from_dict(commands_to_dict(commands)) == commands

    def test_unknown_command_type(self) -> None:
        with pytest.raises(ValueError, match="Unknown command type"):
            command_from_dict({"type": "teleport"})

    def test_missing_field(self) -> None:
        with pytest.raises(KeyError):
            command_from_dict({"type": "flash", "aperture": {"shape": "circle", "diameter": 1}})

    def test_exposure_defaults_to_add(self) -> None:
        command = command_from_dict(
            {
                "type": "flash",
                "position": {"x": 0, "y": 0},
                "aperture": {"shape": "circle", "diameter": 1},
            }
        )
        assert command.exposure is Exposure.ADD
