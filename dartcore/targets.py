"""Target catalogs and their representative aim coordinates.

Every catalog is rebuilt on each call; callers get fresh lists they are
free to reorder or filter.
"""

import math
from typing import Optional

from dartcore.types import (
    ExpandedTarget,
    InvalidDomainValue,
    InvalidSegment,
    Point,
    RingType,
    Target,
    TargetType,
)
from dartcore.geometry import get_segment_angle
from dartcore.scoring import calculate_score
from dartcore import board

# A plain SINGLE aim goes for the middle of the inner single bed
_TARGET_TYPE_RADII = {
    TargetType.SINGLE: board.TARGET_RADII["INNER_SINGLE"],
    TargetType.DOUBLE: board.TARGET_RADII["DOUBLE"],
    TargetType.TRIPLE: board.TARGET_RADII["TRIPLE"],
}

_EXPANDED_LABEL_PREFIXES = {
    RingType.INNER_SINGLE: "IS",
    RingType.OUTER_SINGLE: "OS",
    RingType.DOUBLE: "D",
    RingType.TRIPLE: "T",
}

_LABEL_TYPES = {"S": TargetType.SINGLE, "D": TargetType.DOUBLE, "T": TargetType.TRIPLE}


def _polar_to_board(radius: float, angle: float) -> Point:
    return Point(radius * math.sin(angle), -radius * math.cos(angle))


def get_target_coordinates(target_type, number: Optional[int]) -> Point:
    """Representative physical aim point for a logical target."""
    target_type = TargetType.parse(target_type)

    if target_type is TargetType.BULL:
        if number is not None:
            raise InvalidDomainValue("BULL target must have number=None")
        return Point(0.0, 0.0)

    if number is None:
        raise InvalidSegment(f"{target_type.value} target requires a segment number (1-20)")

    angle = get_segment_angle(number)
    return _polar_to_board(_TARGET_TYPE_RADII[target_type], angle)


def parse_target_label(text: str) -> Target:
    """Parse "T20", "D16", "S5", "5" or "BULL" into a Target."""
    label = str(text).strip().upper()
    if label in ("BULL", "50"):
        return Target(TargetType.BULL, None, "BULL")

    prefix = label[:1]
    kind = _LABEL_TYPES.get(prefix, TargetType.SINGLE)
    digits = label[1:] if prefix in _LABEL_TYPES else label
    if not digits.isdigit():
        raise InvalidDomainValue(f"Cannot parse target label: {text!r}")
    number = int(digits)
    letter = prefix if prefix in _LABEL_TYPES else "S"
    return Target(kind, number, f"{letter}{number}")


def get_all_targets() -> list[Target]:
    """The 61 logical targets: S/D/T for every segment, then BULL."""
    targets = []
    for number in range(1, 21):
        targets.append(Target(TargetType.SINGLE, number, f"S{number}"))
        targets.append(Target(TargetType.DOUBLE, number, f"D{number}"))
        targets.append(Target(TargetType.TRIPLE, number, f"T{number}"))
    targets.append(Target(TargetType.BULL, None, "BULL"))
    return targets


def _segment_targets(ring_type: RingType) -> list[ExpandedTarget]:
    radius = board.TARGET_RADII[ring_type.value]
    prefix = _EXPANDED_LABEL_PREFIXES[ring_type]
    targets = []
    for number in range(1, 21):
        p = _polar_to_board(radius, get_segment_angle(number))
        targets.append(ExpandedTarget(
            ring_type=ring_type,
            number=number,
            x=p.x,
            y=p.y,
            label=f"{prefix}{number}",
            score=calculate_score(ring_type, number),
        ))
    return targets


def _bull_targets() -> list[ExpandedTarget]:
    # Outer bull sits at 12 o'clock, halfway between the two bull edges
    return [
        ExpandedTarget(
            ring_type=RingType.INNER_BULL, number=0, x=0.0, y=0.0,
            label="BULL", score=calculate_score(RingType.INNER_BULL),
        ),
        ExpandedTarget(
            ring_type=RingType.OUTER_BULL, number=0,
            x=0.0, y=-board.TARGET_RADII["OUTER_BULL"],
            label="25", score=calculate_score(RingType.OUTER_BULL),
        ),
    ]


def get_all_targets_expanded() -> list[ExpandedTarget]:
    """The 82 physical targets: both single beds, doubles, trebles and both bulls."""
    targets = []
    for ring_type in (RingType.INNER_SINGLE, RingType.OUTER_SINGLE, RingType.DOUBLE, RingType.TRIPLE):
        targets.extend(_segment_targets(ring_type))
    targets.extend(_bull_targets())
    return targets


def get_basic_practice_targets() -> list[ExpandedTarget]:
    """The 62 beginner targets: everything except the inner single bed."""
    return [t for t in get_all_targets_expanded() if t.ring_type is not RingType.INNER_SINGLE]
