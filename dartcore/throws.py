"""Throw simulation: Gaussian landing scatter around an aim point, hit probability estimates.

Skill is a single number: the per-axis standard deviation of the landing
point in mm. Typical values:
  - Beginner:     ~50 mm
  - Intermediate: ~30 mm
  - Advanced:     ~15 mm
  - Expert:        ~8 mm (the treble bed is 8 mm deep)

Every random draw goes through an injectable `rng` returning uniform
samples in [0, 1); it defaults to `random.random`.
"""

import logging
import math
import random
from typing import Callable, Optional

from dartcore.types import (
    AreaType,
    HitArea,
    InvalidDomainValue,
    Point,
    RingType,
    Target,
    ThrowResult,
    require_finite,
)
from dartcore.scoring import coordinate_to_score_detail
from dartcore.targets import get_target_coordinates
from dartcore import board

logger = logging.getLogger(__name__)

RandomSource = Callable[[], float]

MONTE_CARLO_SAMPLES = 10_000

DIFFICULTY_PRESETS = {
    "beginner": {"label": "Beginner", "std_dev_mm": 50.0},
    "intermediate": {"label": "Intermediate", "std_dev_mm": 30.0},
    "advanced": {"label": "Advanced", "std_dev_mm": 15.0},
    "expert": {"label": "Expert", "std_dev_mm": 8.0},
}

# Rings that count as a hit for each area
_AREA_RINGS = {
    AreaType.INNER_BULL: (RingType.INNER_BULL,),
    AreaType.OUTER_BULL: (RingType.OUTER_BULL,),
    AreaType.TRIPLE: (RingType.TRIPLE,),
    AreaType.DOUBLE: (RingType.DOUBLE,),
    AreaType.SINGLE: (RingType.INNER_SINGLE, RingType.OUTER_SINGLE),
}


def get_preset_std_dev(name: str) -> float:
    """Standard deviation (mm) of a difficulty preset."""
    try:
        return DIFFICULTY_PRESETS[name]["std_dev_mm"]
    except KeyError:
        raise InvalidDomainValue(
            f"Unknown difficulty preset: {name!r}. Available: {', '.join(DIFFICULTY_PRESETS)}"
        ) from None


def _check_std_dev(name: str, value: float) -> float:
    require_finite(name, value)
    if value < 0:
        raise InvalidDomainValue(f"{name} must be non-negative, got {value!r}")
    return value


def generate_normal_distribution(
    mean: float,
    std_dev: float,
    rng: Optional[RandomSource] = None,
) -> Point:
    """One Box-Muller sample pair, both axes centered on `mean`.

    std_dev == 0 returns (mean, mean) without drawing.
    """
    require_finite("mean", mean)
    _check_std_dev("std_dev", std_dev)

    if std_dev == 0:
        return Point(mean, mean)

    rng = rng or random.random
    # rng() is in [0, 1); flip it so log() never sees 0
    u1 = 1.0 - rng()
    u2 = rng()

    r = math.sqrt(-2.0 * math.log(u1))
    theta = 2.0 * math.pi * u2
    return Point(
        mean + r * math.cos(theta) * std_dev,
        mean + r * math.sin(theta) * std_dev,
    )


def simulate_throw(
    target_x: float,
    target_y: float,
    std_dev_mm: float,
    rng: Optional[RandomSource] = None,
) -> Point:
    """Landing point of a dart aimed at (target_x, target_y).

    The result is unbounded: points past the board edge are misses.
    """
    require_finite("target_x", target_x)
    require_finite("target_y", target_y)
    _check_std_dev("std_dev_mm", std_dev_mm)

    if std_dev_mm == 0:
        return Point(target_x, target_y)

    offset = generate_normal_distribution(0.0, std_dev_mm, rng)
    return Point(target_x + offset.x, target_y + offset.y)


def execute_throw(
    target: Target,
    std_dev_mm: float,
    rng: Optional[RandomSource] = None,
) -> ThrowResult:
    """Throw one simulated dart at a logical target and score where it lands."""
    aim = get_target_coordinates(target.type, target.number)
    landing = simulate_throw(aim.x, aim.y, std_dev_mm, rng)
    detail = coordinate_to_score_detail(landing.x, landing.y)

    return ThrowResult(
        target=target,
        landing_point=landing,
        score=detail.score,
        ring=detail.ring,
        segment_number=detail.segment_number,
    )


def is_in_area(x: float, y: float, area: HitArea) -> bool:
    """Whether a board coordinate lands inside `area`.

    SINGLE covers the two single beds only. The band outside the double
    ring scores as a single but is not a target anyone aims for.
    """
    detail = coordinate_to_score_detail(x, y)
    if detail.ring not in _AREA_RINGS[area.kind]:
        return False
    if area.kind is AreaType.SINGLE and math.hypot(x, y) > board.DOUBLE_INNER_RADIUS:
        return False
    if area.kind.requires_segment:
        return detail.segment_number == area.segment
    return True


def calculate_hit_probability(
    target_x: float,
    target_y: float,
    std_dev_mm: float,
    area_type,
    segment_number: Optional[int] = None,
    samples: int = MONTE_CARLO_SAMPLES,
    rng: Optional[RandomSource] = None,
) -> float:
    """Monte Carlo estimate of the chance a dart aimed at (target_x, target_y) lands in an area.

    Args:
        target_x, target_y: Aim point in mm.
        std_dev_mm: Player scatter, must be > 0.
        area_type: INNER_BULL, OUTER_BULL, TRIPLE, DOUBLE or SINGLE.
        segment_number: Required for TRIPLE/DOUBLE/SINGLE, forbidden for bulls
            and when area_type is already a HitArea.
        samples: Number of simulated darts.
        rng: Uniform [0, 1) source.

    Returns:
        Fraction of simulated darts that landed in the area, in [0, 1].
    """
    require_finite("target_x", target_x)
    require_finite("target_y", target_y)
    require_finite("std_dev_mm", std_dev_mm)
    if std_dev_mm <= 0:
        raise InvalidDomainValue(f"std_dev_mm must be greater than 0, got {std_dev_mm!r}")
    if isinstance(samples, bool) or not isinstance(samples, int) or samples <= 0:
        raise InvalidDomainValue(f"samples must be a positive integer, got {samples!r}")

    if isinstance(area_type, HitArea):
        if segment_number is not None:
            raise InvalidDomainValue("segment_number must be None when area_type is a HitArea")
        area = area_type
    else:
        area = HitArea(area_type, segment_number)

    hits = 0
    for _ in range(samples):
        offset = generate_normal_distribution(0.0, std_dev_mm, rng)
        if is_in_area(target_x + offset.x, target_y + offset.y, area):
            hits += 1

    probability = hits / samples
    logger.debug(
        "hit probability %s%s aim=(%.1f, %.1f) sd=%.1fmm: %d/%d = %.4f",
        area.kind.value, area.segment or "", target_x, target_y, std_dev_mm,
        hits, samples, probability,
    )
    return probability
