"""Core data types for the dart practice engine."""

import math
from dataclasses import dataclass, field
from enum import Enum
from numbers import Integral, Real
from typing import Optional


class DartCoreError(ValueError):
    """Base class for every error raised by the engine."""


class InvalidNumericInput(DartCoreError):
    """NaN, infinity, a non-number, or a non-integer where one is required."""


class InvalidDomainValue(DartCoreError):
    """A well-formed value outside its allowed domain."""


class InvalidSegment(InvalidDomainValue):
    """Segment number missing or outside 1-20."""


def is_number(value) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def is_finite_number(value) -> bool:
    return is_number(value) and math.isfinite(value)


def is_integer(value) -> bool:
    """True for ints and for finite floats with no fractional part."""
    if isinstance(value, bool):
        return False
    if isinstance(value, Integral):
        return True
    return is_finite_number(value) and float(value).is_integer()


def require_finite(name: str, value) -> float:
    if not is_finite_number(value):
        raise InvalidNumericInput(f"{name} must be a finite number, got {value!r}")
    return value


class RingType(str, Enum):
    """Radial band of the board a point falls in."""
    INNER_BULL = "INNER_BULL"
    OUTER_BULL = "OUTER_BULL"
    TRIPLE = "TRIPLE"
    DOUBLE = "DOUBLE"
    INNER_SINGLE = "INNER_SINGLE"
    OUTER_SINGLE = "OUTER_SINGLE"
    OUT = "OUT"

    @property
    def is_segmented(self) -> bool:
        return self in _SEGMENTED_RINGS

    @classmethod
    def parse(cls, value) -> "RingType":
        try:
            return cls(value)
        except ValueError:
            raise InvalidDomainValue(f"Unknown ring type: {value!r}") from None


_SEGMENTED_RINGS = frozenset({
    RingType.TRIPLE,
    RingType.DOUBLE,
    RingType.INNER_SINGLE,
    RingType.OUTER_SINGLE,
})


class TargetType(str, Enum):
    """What a player aims at, independent of where on the board it is."""
    SINGLE = "SINGLE"
    DOUBLE = "DOUBLE"
    TRIPLE = "TRIPLE"
    BULL = "BULL"

    @classmethod
    def parse(cls, value) -> "TargetType":
        try:
            return cls(value)
        except ValueError:
            raise InvalidDomainValue(f"Unknown target type: {value!r}") from None


class AreaType(str, Enum):
    """Board area used by the hit probability estimator."""
    INNER_BULL = "INNER_BULL"
    OUTER_BULL = "OUTER_BULL"
    TRIPLE = "TRIPLE"
    DOUBLE = "DOUBLE"
    SINGLE = "SINGLE"

    @property
    def requires_segment(self) -> bool:
        return self not in (AreaType.INNER_BULL, AreaType.OUTER_BULL)


class BustReason(str, Enum):
    OVER = "over"
    FINISH_IMPOSSIBLE = "finish_impossible"
    DOUBLE_OUT_REQUIRED = "double_out_required"


@dataclass(frozen=True)
class Point:
    """Physical board coordinate in mm."""
    x: float
    y: float

    def distance(self) -> float:
        return math.hypot(self.x, self.y)


@dataclass(frozen=True)
class Target:
    """A logical aim: ring type plus segment number (None for BULL)."""
    type: TargetType
    number: Optional[int] = None
    label: Optional[str] = field(default=None, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "type", TargetType.parse(self.type))
        if self.type is TargetType.BULL:
            if self.number is not None:
                raise InvalidDomainValue("BULL target must have number=None")
        else:
            if self.number is None:
                raise InvalidSegment(f"{self.type.value} target requires a segment number (1-20)")
            if not is_integer(self.number) or not 1 <= self.number <= 20:
                raise InvalidSegment(f"Segment number must be an integer between 1 and 20, got {self.number!r}")
            object.__setattr__(self, "number", int(self.number))


@dataclass(frozen=True)
class ExpandedTarget:
    """A fully resolved, drawable target. number=0 for the bull variants."""
    ring_type: RingType
    number: int
    x: float
    y: float
    label: str
    score: int


@dataclass(frozen=True)
class ScoreDetail:
    score: int
    ring: RingType
    segment_number: Optional[int] = None  # only for segmented rings


@dataclass(frozen=True)
class ThrowResult:
    """One simulated dart."""
    target: Target
    landing_point: Point
    score: int
    ring: RingType
    segment_number: Optional[int] = None


@dataclass(frozen=True)
class BustInfo:
    is_bust: bool
    reason: Optional[BustReason] = None


@dataclass(frozen=True)
class HitArea:
    """Area for hit probability estimation.

    Bull areas take no segment; TRIPLE, DOUBLE and SINGLE require one.
    Both rules are checked on construction.
    """
    kind: AreaType
    segment: Optional[int] = None

    def __post_init__(self):
        try:
            kind = AreaType(self.kind)
        except ValueError:
            raise InvalidDomainValue(
                f"Invalid area type: {self.kind!r}. "
                f"Must be one of: {', '.join(a.value for a in AreaType)}."
            ) from None
        object.__setattr__(self, "kind", kind)

        if not kind.requires_segment:
            if self.segment is not None:
                raise InvalidSegment(f"Area type {kind.value} does not accept a segment number")
            return
        if self.segment is None:
            raise InvalidSegment(f"Area type {kind.value} requires a segment number")
        if not is_integer(self.segment) or not 1 <= self.segment <= 20:
            raise InvalidSegment(
                f"Invalid segment number: {self.segment!r}. Must be an integer between 1 and 20."
            )
        object.__setattr__(self, "segment", int(self.segment))
