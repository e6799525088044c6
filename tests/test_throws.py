"""Tests for throw simulation and hit probability estimation."""

import math
import random
import statistics
import pytest

from dartcore.types import (
    HitArea,
    InvalidDomainValue,
    InvalidNumericInput,
    InvalidSegment,
    Point,
    RingType,
    Target,
    TargetType,
)
from dartcore.throws import (
    DIFFICULTY_PRESETS,
    calculate_hit_probability,
    execute_throw,
    generate_normal_distribution,
    get_preset_std_dev,
    is_in_area,
    simulate_throw,
)
from dartcore.targets import get_target_coordinates


def _sequence(*values):
    """rng that replays fixed uniform draws."""
    it = iter(values)
    return lambda: next(it)


def test_zero_std_dev_returns_mean():
    """No scatter means no draw and an exact result."""
    assert generate_normal_distribution(5.0, 0) == Point(5.0, 5.0)


def test_injected_rng_box_muller():
    """Fixed draws give the textbook Box-Muller transform."""
    # u1 = e^-0.5 gives radius 1; u2 = 0 gives angle 0
    p = generate_normal_distribution(10.0, 2.0, rng=_sequence(1 - math.exp(-0.5), 0.0))
    assert p.x == pytest.approx(12.0)
    assert p.y == pytest.approx(10.0)

    p = generate_normal_distribution(0.0, 3.0, rng=_sequence(1 - math.exp(-0.5), 0.25))
    assert p.x == pytest.approx(0.0, abs=1e-9)
    assert p.y == pytest.approx(3.0)


def test_rng_returning_zero_is_safe():
    """A draw of exactly 0 must not hit log(0)."""
    p = generate_normal_distribution(1.0, 5.0, rng=lambda: 0.0)
    assert p == Point(1.0, 1.0)


def test_normal_distribution_statistics():
    """10k draws have the requested mean and standard deviation."""
    random.seed(42)
    xs, ys = [], []
    for _ in range(10_000):
        p = generate_normal_distribution(10.0, 5.0)
        xs.append(p.x)
        ys.append(p.y)

    for axis in (xs, ys):
        assert statistics.fmean(axis) == pytest.approx(10.0, abs=0.25)
        assert statistics.pstdev(axis) == pytest.approx(5.0, rel=0.05)


def test_normal_distribution_validation():
    with pytest.raises(InvalidNumericInput):
        generate_normal_distribution(float("nan"), 1.0)
    with pytest.raises(InvalidNumericInput):
        generate_normal_distribution(0.0, float("inf"))
    with pytest.raises(InvalidDomainValue):
        generate_normal_distribution(0.0, -1.0)


def test_simulate_throw_zero_scatter():
    assert simulate_throw(12.5, -103.0, 0) == Point(12.5, -103.0)


def test_simulate_throw_offsets_aim():
    """The scatter is added to the aim point."""
    p = simulate_throw(0.0, -103.0, 4.0, rng=_sequence(1 - math.exp(-0.5), 0.0))
    assert p.x == pytest.approx(4.0)
    assert p.y == pytest.approx(-103.0)


def test_simulate_throw_is_unbounded():
    """Wild throws can land off the board; nothing clamps them."""
    random.seed(3)
    distances = [simulate_throw(0, 0, 200).distance() for _ in range(200)]
    assert max(distances) > 225


def test_simulate_throw_validation():
    with pytest.raises(InvalidNumericInput):
        simulate_throw(float("nan"), 0, 10)
    with pytest.raises(InvalidNumericInput):
        simulate_throw(0, 0, float("nan"))
    with pytest.raises(InvalidDomainValue):
        simulate_throw(0, 0, -5)


@pytest.mark.parametrize("target, score, ring, segment", [
    (Target(TargetType.TRIPLE, 20, "T20"), 60, RingType.TRIPLE, 20),
    (Target(TargetType.DOUBLE, 20, "D20"), 40, RingType.DOUBLE, 20),
    (Target(TargetType.SINGLE, 7, "S7"), 7, RingType.INNER_SINGLE, 7),
    (Target(TargetType.BULL, None, "BULL"), 50, RingType.INNER_BULL, None),
])
def test_execute_throw_perfect_aim(target, score, ring, segment):
    """A zero-scatter dart lands on its aim point."""
    t = execute_throw(target, 0)
    assert t.target == target
    assert t.score == score
    assert t.ring is ring
    assert t.segment_number == segment


def test_execute_throw_records_landing_point():
    random.seed(11)
    target = Target(TargetType.TRIPLE, 19, "T19")
    t = execute_throw(target, 15)
    assert t.landing_point != get_target_coordinates(TargetType.TRIPLE, 19)


def test_is_in_area():
    assert is_in_area(0, -103, HitArea("TRIPLE", 20))
    assert not is_in_area(0, -103, HitArea("TRIPLE", 1))
    assert is_in_area(0, 0, HitArea("INNER_BULL"))
    assert is_in_area(0, -130, HitArea("SINGLE", 20))
    assert not is_in_area(0, -300, HitArea("SINGLE", 20))


def test_single_area_stops_at_double_ring():
    """The band between the double wire and the board edge is not part of SINGLE."""
    assert not is_in_area(0, -200, HitArea("SINGLE", 20))
    assert not is_in_area(0, -171, HitArea("SINGLE", 20))
    assert is_in_area(0, -162, HitArea("SINGLE", 20))

    random.seed(42)
    p = calculate_hit_probability(0, -200, 5.0, "SINGLE", 20, samples=2000)
    assert p == 0.0


def test_hit_probability_tight_grouping():
    """A 1mm scatter at the middle of T20 almost never misses it."""
    random.seed(42)
    p = calculate_hit_probability(0, -103, 1.0, "TRIPLE", 20)
    assert p > 0.99


def test_hit_probability_bounds():
    random.seed(42)
    assert calculate_hit_probability(0, 0, 0.5, "INNER_BULL", samples=2000) == 1.0
    assert calculate_hit_probability(0, -400, 1.0, "INNER_BULL", samples=2000) == 0.0


def test_hit_probability_drops_with_scatter():
    """A wider scatter hits T20 less often."""
    random.seed(42)
    aim = get_target_coordinates(TargetType.TRIPLE, 20)
    tight = calculate_hit_probability(aim.x, aim.y, 5.0, "TRIPLE", 20, samples=4000)
    loose = calculate_hit_probability(aim.x, aim.y, 30.0, "TRIPLE", 20, samples=4000)
    assert tight > loose
    assert 0.0 <= loose <= tight <= 1.0


def test_hit_probability_single_area():
    """Aiming at the inner single bed of 20 with a steady hand hits single 20."""
    random.seed(5)
    p = calculate_hit_probability(0, -57.5, 3.0, "SINGLE", 20, samples=2000)
    assert p > 0.99


def test_hit_probability_injected_rng():
    """An rng that never scatters gives a certain hit."""
    p = calculate_hit_probability(0, -103, 10.0, HitArea("TRIPLE", 20), samples=100, rng=lambda: 0.0)
    assert p == 1.0


@pytest.mark.parametrize("area, segment, error", [
    ("QUAD", 20, InvalidDomainValue),
    ("TRIPLE", None, InvalidSegment),
    ("INNER_BULL", 20, InvalidSegment),
    ("DOUBLE", 0, InvalidSegment),
    ("DOUBLE", 21, InvalidSegment),
    ("SINGLE", 1.5, InvalidSegment),
])
def test_hit_probability_area_validation(area, segment, error):
    with pytest.raises(error):
        calculate_hit_probability(0, 0, 10.0, area, segment, samples=10)


def test_hit_probability_area_and_segment_conflict():
    """A HitArea already carries its segment; a second one is rejected."""
    with pytest.raises(InvalidDomainValue):
        calculate_hit_probability(0, -103, 10.0, HitArea("TRIPLE", 20), 20, samples=10)


def test_hit_probability_numeric_validation():
    with pytest.raises(InvalidDomainValue):
        calculate_hit_probability(0, 0, 0, "INNER_BULL", samples=10)
    with pytest.raises(InvalidDomainValue):
        calculate_hit_probability(0, 0, -1, "INNER_BULL", samples=10)
    with pytest.raises(InvalidNumericInput):
        calculate_hit_probability(float("nan"), 0, 10, "INNER_BULL", samples=10)
    with pytest.raises(InvalidNumericInput):
        calculate_hit_probability(0, 0, float("inf"), "INNER_BULL", samples=10)
    with pytest.raises(InvalidDomainValue):
        calculate_hit_probability(0, 0, 10, "INNER_BULL", samples=0)


def test_difficulty_presets():
    """Presets get tighter from beginner to expert."""
    sds = [get_preset_std_dev(name) for name in ("beginner", "intermediate", "advanced", "expert")]
    assert sds == sorted(sds, reverse=True)
    assert set(DIFFICULTY_PRESETS) == {"beginner", "intermediate", "advanced", "expert"}
    with pytest.raises(InvalidDomainValue):
        get_preset_std_dev("legend")
