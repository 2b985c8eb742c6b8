"""Arc point generation.

Arcs are discretized once, when the primitive is built. The number of
segments scales with the swept angle so a short arc and a near-full circle
look equally smooth; a minimum segment count keeps tiny arcs visible.

All functions are pure and stateless.
"""

import math

from gerberview.domain import ArcDirection, ArcPrimitive, Exposure, Point

TAU = 2.0 * math.pi

# Angles closer than this (radians) are treated as coincident.
ANGLE_EPSILON = 1e-9

DEFAULT_SEGMENTS_PER_TURN = 64
DEFAULT_MIN_SEGMENTS = 4


def sweep_angle(start_angle: float, end_angle: float, direction: ArcDirection) -> float:
    """Signed angle swept from start to end in the given direction.

    Counter-clockwise sweeps are positive, clockwise sweeps negative. Start
    and end angles that coincide (modulo a full turn), or a raw difference
    that covers a full turn, describe a full circle of +/-2*pi.

    Examples:
        >>> sweep_angle(0.0, math.pi / 2, ArcDirection.COUNTER_CLOCKWISE)  # doctest: +ELLIPSIS
        1.5707...
        >>> sweep_angle(0.0, math.pi / 2, ArcDirection.CLOCKWISE)  # doctest: +ELLIPSIS
        -4.7123...
    """
    covers_turn = abs(end_angle - start_angle) >= TAU - ANGLE_EPSILON

    if direction is ArcDirection.COUNTER_CLOCKWISE:
        sweep = (end_angle - start_angle) % TAU
    else:
        sweep = (start_angle - end_angle) % TAU

    if covers_turn or sweep < ANGLE_EPSILON or TAU - sweep < ANGLE_EPSILON:
        sweep = TAU

    return sweep if direction is ArcDirection.COUNTER_CLOCKWISE else -sweep


def is_full_circle(start_angle: float, end_angle: float, direction: ArcDirection) -> bool:
    """Check whether an arc closes on itself."""
    return abs(sweep_angle(start_angle, end_angle, direction)) >= TAU - ANGLE_EPSILON


def segment_count(
    sweep: float,
    segments_per_turn: int = DEFAULT_SEGMENTS_PER_TURN,
    min_segments: int = DEFAULT_MIN_SEGMENTS,
) -> int:
    """Number of segments for a sweep, proportional to its share of a turn."""
    proportional = math.ceil(abs(sweep) / TAU * segments_per_turn - ANGLE_EPSILON)
    return max(min_segments, proportional)


def generate_arc_points(
    center: Point,
    radius: float,
    start_angle: float,
    end_angle: float,
    direction: ArcDirection,
    segments_per_turn: int = DEFAULT_SEGMENTS_PER_TURN,
    min_segments: int = DEFAULT_MIN_SEGMENTS,
) -> list[Point]:
    """Discretize an arc into shape-space points.

    Open arcs return ``segments + 1`` points, first at the start angle and
    last at the end angle. Full circles return ``segments`` points without
    repeating the first one; the renderer strokes them as a closed path.

    Args:
        center: Arc centre
        radius: Arc radius
        start_angle: Start angle in radians
        end_angle: End angle in radians
        direction: Winding direction (sign of the angular step)
        segments_per_turn: Segments for a full turn
        min_segments: Lower bound on the segment count

    Returns:
        List of points along the arc
    """
    sweep = sweep_angle(start_angle, end_angle, direction)
    segments = segment_count(sweep, segments_per_turn, min_segments)
    step = sweep / segments
    full = abs(sweep) >= TAU - ANGLE_EPSILON

    count = segments if full else segments + 1
    points = []
    for i in range(count):
        angle = start_angle + step * i
        points.append(
            Point(center.x + radius * math.cos(angle), center.y + radius * math.sin(angle))
        )
    return points


def make_arc(
    center: Point,
    radius: float,
    start_angle: float,
    end_angle: float,
    direction: ArcDirection,
    width: float,
    exposure: Exposure = Exposure.ADD,
    segments_per_turn: int = DEFAULT_SEGMENTS_PER_TURN,
    min_segments: int = DEFAULT_MIN_SEGMENTS,
) -> ArcPrimitive:
    """Build an arc primitive with its outline generated once."""
    points = generate_arc_points(
        center, radius, start_angle, end_angle, direction, segments_per_turn, min_segments
    )
    return ArcPrimitive(
        center=center,
        radius=radius,
        start_angle=start_angle,
        end_angle=end_angle,
        direction=direction,
        width=width,
        points=tuple(points),
        full_circle=is_full_circle(start_angle, end_angle, direction),
        exposure=exposure,
    )
