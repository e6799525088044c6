"""Game simulation: 01 rounds and legs for a single player.

Implements double-out rules:
- Up to three darts per round
- A bust ends the round immediately and the score reverts
- Finishing on a double or the inner bull ends the leg
- Each dart aims at a caller-supplied target or at the checkout table
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence

from dartcore.types import (
    BustInfo,
    InvalidDomainValue,
    Target,
    ThrowResult,
)
from dartcore.rules import (
    DARTS_PER_ROUND,
    MIN_FINISHABLE_SCORE,
    check_bust,
    is_double_ring,
    is_game_finished,
)
from dartcore.throws import RandomSource, execute_throw
from dartcore.checkout import get_optimal_target

logger = logging.getLogger(__name__)


@dataclass
class RoundResult:
    """One visit to the board: up to three darts."""
    throws: list            # list[ThrowResult]
    start_remaining: int
    end_remaining: int
    bust: Optional[BustInfo] = None
    finished: bool = False

    @property
    def round_score(self) -> int:
        return self.start_remaining - self.end_remaining


@dataclass
class LegResult:
    """A full leg from the start score."""
    rounds: list            # list[RoundResult]
    start_score: int
    std_dev_mm: float
    finished: bool
    stats: dict = field(default_factory=dict)


def next_target(remaining: int, darts_left: int) -> Target:
    """Aim for the next dart.

    Follows the checkout table. When the last dart cannot finish, it still
    sets up a finish for the next round instead of being wasted.
    """
    if remaining < MIN_FINISHABLE_SCORE:
        raise InvalidDomainValue(f"No target can finish from {remaining}")
    target = get_optimal_target(remaining, darts_left)
    if target is None:
        target = get_optimal_target(remaining, DARTS_PER_ROUND)
    return target


def simulate_round(
    remaining: int,
    std_dev_mm: float,
    targets: Optional[Sequence[Target]] = None,
    rng: Optional[RandomSource] = None,
) -> RoundResult:
    """Simulate one three-dart visit starting from `remaining`.

    Args:
        remaining: Score left before the round, at least 2.
        std_dev_mm: Player scatter.
        targets: Aim per dart; missing entries fall back to next_target().
        rng: Uniform [0, 1) source.

    Returns:
        RoundResult; on a bust end_remaining equals start_remaining.
    """
    if is_game_finished(remaining):
        raise InvalidDomainValue("Cannot throw a round: the leg is already finished")
    if remaining < MIN_FINISHABLE_SCORE:
        raise InvalidDomainValue(f"remaining must be at least {MIN_FINISHABLE_SCORE}, got {remaining}")

    throws: list[ThrowResult] = []
    current = remaining

    for dart in range(DARTS_PER_ROUND):
        if targets is not None and dart < len(targets):
            target = targets[dart]
        else:
            target = next_target(current, DARTS_PER_ROUND - dart)

        t = execute_throw(target, std_dev_mm, rng)
        throws.append(t)

        verdict = check_bust(current, t.score, is_double_ring(t.ring))
        if verdict.is_bust:
            logger.debug("round from %d bust on dart %d (%s)", remaining, dart + 1, verdict.reason.value)
            return RoundResult(
                throws=throws,
                start_remaining=remaining,
                end_remaining=remaining,
                bust=verdict,
            )

        current -= t.score
        if current == 0:
            logger.debug("checkout from %d with %s", remaining, [x.score for x in throws])
            return RoundResult(
                throws=throws,
                start_remaining=remaining,
                end_remaining=0,
                finished=True,
            )

    return RoundResult(throws=throws, start_remaining=remaining, end_remaining=current)


def simulate_leg(
    std_dev_mm: float,
    start_score: int = 501,
    max_rounds: int = 200,
    rng: Optional[RandomSource] = None,
) -> LegResult:
    """Play rounds from `start_score` until checkout or `max_rounds`."""
    rounds: list[RoundResult] = []
    remaining = start_score

    while len(rounds) < max_rounds:
        r = simulate_round(remaining, std_dev_mm, rng=rng)
        rounds.append(r)
        remaining = r.end_remaining
        if r.finished:
            break

    finished = bool(rounds) and rounds[-1].finished
    stats = _compute_leg_stats(rounds, start_score, finished)
    logger.debug("leg sd=%.1fmm: %s", std_dev_mm, stats)

    return LegResult(
        rounds=rounds,
        start_score=start_score,
        std_dev_mm=std_dev_mm,
        finished=finished,
        stats=stats,
    )


def _compute_leg_stats(rounds: list[RoundResult], start_score: int, finished: bool) -> dict:
    """Compute leg statistics."""
    darts = sum(len(r.throws) for r in rounds)
    scored = sum(r.round_score for r in rounds)
    busts = sum(1 for r in rounds if r.bust is not None)
    doubles_hit = sum(1 for r in rounds for t in r.throws if is_double_ring(t.ring))
    misses = sum(1 for r in rounds for t in r.throws if t.score == 0)

    bust_reasons = {}
    for r in rounds:
        if r.bust is not None:
            key = r.bust.reason.value
            bust_reasons[key] = bust_reasons.get(key, 0) + 1

    return {
        "rounds": len(rounds),
        "darts_thrown": darts,
        "points_scored": scored,
        "remaining": start_score - scored,
        "three_dart_average": round(scored / darts * 3, 2) if darts else 0.0,
        "busts": busts,
        "bust_reasons": bust_reasons,
        "doubles_hit": doubles_hit,
        "misses": misses,
        "finished": finished,
    }
