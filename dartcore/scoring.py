"""Score calculation: ring + segment to points and labels, board coordinate to score."""

import math
from typing import Optional

from dartcore.types import (
    InvalidSegment,
    RingType,
    ScoreDetail,
    is_integer,
    require_finite,
)
from dartcore.geometry import board_angle, get_ring, get_segment_number
from dartcore import board

_MULTIPLIERS = {
    RingType.TRIPLE: 3,
    RingType.DOUBLE: 2,
    RingType.INNER_SINGLE: 1,
    RingType.OUTER_SINGLE: 1,
}

_LABEL_PREFIXES = {
    RingType.TRIPLE: "T",
    RingType.DOUBLE: "D",
    RingType.INNER_SINGLE: "",
    RingType.OUTER_SINGLE: "",
}


def _check_segment(segment_number: Optional[int]) -> int:
    if segment_number is None:
        raise InvalidSegment("Segment number is required for segmented rings")
    if (
        not is_integer(segment_number)
        or not board.MIN_SEGMENT_NUMBER <= segment_number <= board.MAX_SEGMENT_NUMBER
    ):
        raise InvalidSegment(f"Segment number must be between 1 and 20, got {segment_number!r}")
    return int(segment_number)


def calculate_score(ring, segment_number: Optional[int] = None) -> int:
    """Points for a dart in `ring`. Bulls and OUT ignore the segment."""
    ring = RingType.parse(ring)
    if ring is RingType.INNER_BULL:
        return 50
    if ring is RingType.OUTER_BULL:
        return 25
    if ring is RingType.OUT:
        return 0
    return _check_segment(segment_number) * _MULTIPLIERS[ring]


def get_score_label(ring, segment_number: Optional[int] = None) -> str:
    """Display label: "BULL", "25", "T20", "D16", "5" or "OUT"."""
    ring = RingType.parse(ring)
    if ring is RingType.INNER_BULL:
        return "BULL"
    if ring is RingType.OUTER_BULL:
        return "25"
    if ring is RingType.OUT:
        return "OUT"
    return f"{_LABEL_PREFIXES[ring]}{_check_segment(segment_number)}"


def coordinate_to_score_detail(x: float, y: float) -> ScoreDetail:
    """Score, ring and (for segmented rings) segment of a board coordinate."""
    require_finite("x", x)
    require_finite("y", y)

    ring = get_ring(math.hypot(x, y))
    if not ring.is_segmented:
        return ScoreDetail(score=calculate_score(ring), ring=ring)

    segment = get_segment_number(board_angle(x, y))
    return ScoreDetail(
        score=calculate_score(ring, segment),
        ring=ring,
        segment_number=segment,
    )


def coordinate_to_score(x: float, y: float) -> int:
    return coordinate_to_score_detail(x, y).score
