"""Board geometry: angle to segment, distance to ring, spider wire tie-breaks."""

import math

from dartcore.types import (
    InvalidDomainValue,
    InvalidSegment,
    RingType,
    is_integer,
    require_finite,
)
from dartcore import board

_TWO_PI = 2 * math.pi
_HALF_SEGMENT = board.SEGMENT_ANGLE / 2


def _normalize(angle: float) -> float:
    """Map any angle onto [0, 2pi)."""
    a = math.fmod(angle, _TWO_PI)
    if a < 0:
        a += _TWO_PI
    # fmod of a tiny negative value can round up to exactly 2pi
    if a >= _TWO_PI:
        a = 0.0
    return a


def board_angle(x: float, y: float) -> float:
    """Board-relative angle of a point: 0 straight up, clockwise positive."""
    return math.atan2(x, -y)


def get_segment_number(angle: float) -> int:
    """Return the segment (1-20) containing a board-relative angle.

    Segment 20 is centered on angle 0, so its edges sit at -pi/20 and
    +pi/20. Each segment is the half-open interval [start, start + pi/10);
    an angle exactly on an edge belongs to the clockwise-next segment.
    """
    require_finite("angle", angle)
    a = _normalize(angle)
    index = int(math.floor((a + _HALF_SEGMENT) / board.SEGMENT_ANGLE)) % board.SEGMENT_COUNT
    return board.SEGMENTS[index]


def get_segment_angle(number: int) -> float:
    """Center angle of a segment, in [0, 2pi)."""
    if not is_integer(number) or not board.MIN_SEGMENT_NUMBER <= number <= board.MAX_SEGMENT_NUMBER:
        raise InvalidSegment(f"Segment number must be an integer between 1 and 20, got {number!r}")
    return board.SEGMENTS.index(int(number)) * board.SEGMENT_ANGLE


def get_ring(distance: float) -> RingType:
    """Classify a distance from the bull into a ring.

    A point exactly on a ring edge belongs to the inner ring. The band
    between the double ring and the board edge scores as outer single.
    """
    require_finite("distance", distance)
    if distance < 0:
        raise InvalidDomainValue(f"distance must be non-negative, got {distance!r}")

    if distance <= board.INNER_BULL_RADIUS:
        return RingType.INNER_BULL
    if distance <= board.OUTER_BULL_RADIUS:
        return RingType.OUTER_BULL
    if distance <= board.TRIPLE_INNER_RADIUS:
        return RingType.INNER_SINGLE
    if distance <= board.TRIPLE_OUTER_RADIUS:
        return RingType.TRIPLE
    if distance <= board.DOUBLE_INNER_RADIUS:
        return RingType.OUTER_SINGLE
    if distance <= board.DOUBLE_OUTER_RADIUS:
        return RingType.DOUBLE
    if distance <= board.BOARD_EDGE_RADIUS:
        return RingType.OUTER_SINGLE
    return RingType.OUT


def adjust_for_spider(
    distance: float,
    angle: float,
    tolerance: float = board.SPIDER_TOLERANCE,
    radial_nudge: float = board.SPIDER_RADIAL_NUDGE_MM,
    angular_nudge: float = board.SPIDER_ANGULAR_NUDGE_RAD,
) -> tuple[float, float]:
    """Move a (distance, angle) pair off any spider wire it sits on.

    Within `tolerance` of a ring edge the distance is pulled `radial_nudge`
    toward the bull. Within `tolerance` of a segment edge the angle is
    pushed `angular_nudge` further to the side it already leans toward.
    Points clear of every wire come back unchanged.

    Returns (distance, angle).
    """
    require_finite("distance", distance)
    require_finite("angle", angle)

    adjusted_distance = distance
    for boundary in board.RING_RADII:
        if abs(distance - boundary) < tolerance:
            adjusted_distance = boundary - radial_nudge
            break

    adjusted_angle = angle
    offset = math.fmod(_normalize(angle) + _HALF_SEGMENT, board.SEGMENT_ANGLE)
    if offset < tolerance or offset > board.SEGMENT_ANGLE - tolerance:
        shift = angular_nudge if offset < board.SEGMENT_ANGLE / 2 else -angular_nudge
        adjusted_angle = angle + shift

    return adjusted_distance, adjusted_angle
