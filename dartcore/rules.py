"""01 game rules: double-out checkout, bust detection, achievable scores.

Double-out rules:
- Count down from the start score to exactly 0
- The finishing dart must land in a double or the inner bull
- Overshooting 0, or leaving 1 (no double is worth 1), is a bust
- A bust round scores nothing; the remaining score reverts

Predicates named is_valid_* answer "is this a legal game state" and
return False for bad input. The other functions guard against malformed
calls and raise.
"""

import logging
from typing import Iterable, Optional

from dartcore.types import (
    BustInfo,
    BustReason,
    InvalidDomainValue,
    InvalidNumericInput,
    RingType,
    ThrowResult,
    is_integer,
)

logger = logging.getLogger(__name__)

MIN_FINISHABLE_SCORE = 2  # D1
MAX_DOUBLE_FINISH = 40    # D20
BULL_FINISH = 50
IMPOSSIBLE_FINISH_SCORE = 1
MAX_SINGLE_THROW_SCORE = 60  # T20
DARTS_PER_ROUND = 3


def _generate_valid_scores() -> frozenset:
    scores = {0, 25, 50}
    for n in range(1, 21):
        scores.update((n, n * 2, n * 3))
    return frozenset(scores)


def _generate_valid_round_scores(singles: frozenset) -> frozenset:
    # Exhaustive: the set of three-dart totals has no simple closed form
    totals = set()
    for a in singles:
        for b in singles:
            for c in singles:
                totals.add(a + b + c)
    return frozenset(totals)


# Built once at import, never mutated
VALID_SCORES = _generate_valid_scores()
VALID_ROUND_SCORES = _generate_valid_round_scores(VALID_SCORES)


def _require_integer(name: str, value) -> int:
    if not is_integer(value):
        raise InvalidNumericInput(f"{name} must be an integer, got {value!r}")
    return int(value)


def is_game_finished(remaining_score: int) -> bool:
    """True once the remaining score has reached exactly 0."""
    remaining_score = _require_integer("remaining_score", remaining_score)
    if remaining_score < 0:
        raise InvalidDomainValue(f"remaining_score must be non-negative, got {remaining_score}")
    return remaining_score == 0


def can_finish_with_double(remaining_score: int) -> bool:
    """Whether one dart can check out `remaining_score` (D1-D20 or the bull).

    Zero and negative scores are simply not finishable; only non-integers raise.
    """
    remaining_score = _require_integer("remaining_score", remaining_score)

    if remaining_score <= 0:
        return False
    if remaining_score % 2 != 0:
        return False
    if remaining_score == BULL_FINISH:
        return True
    return MIN_FINISHABLE_SCORE <= remaining_score <= MAX_DOUBLE_FINISH


def is_valid_remaining_score(remaining, current) -> bool:
    """Whether scoring `current` from `remaining` leaves a legal state.

    False for overshoot, for leaving exactly 1, and for any malformed or
    negative input. Reaching 0 is legal.
    """
    if not is_integer(remaining) or not is_integer(current):
        return False
    if remaining < 0 or current < 0:
        return False

    new_remaining = remaining - current
    if new_remaining < 0:
        return False
    if new_remaining == IMPOSSIBLE_FINISH_SCORE:
        return False
    return True


def is_valid_single_throw_score(score) -> bool:
    """Whether one dart can score exactly `score`."""
    return is_integer(score) and int(score) in VALID_SCORES


def is_valid_round_score(score) -> bool:
    """Whether three darts can total exactly `score`."""
    return is_integer(score) and int(score) in VALID_ROUND_SCORES


def get_valid_single_scores() -> set:
    """A fresh, caller-owned copy of every one-dart score."""
    return set(VALID_SCORES)


def is_double_ring(ring: Optional[RingType]) -> bool:
    """Rings that legally finish a double-out leg."""
    return ring in (RingType.DOUBLE, RingType.INNER_BULL)


def check_bust(remaining_score: int, throw_score: int, is_double: bool) -> BustInfo:
    """Classify one dart against the remaining score.

    Priority: overshoot, then leaving 1, then reaching 0 off a non-double.
    """
    remaining_score = _require_integer("remaining_score", remaining_score)
    if remaining_score <= 0:
        raise InvalidDomainValue(f"remaining_score must be a positive integer, got {remaining_score}")
    throw_score = _require_integer("throw_score", throw_score)
    if not 0 <= throw_score <= MAX_SINGLE_THROW_SCORE:
        raise InvalidDomainValue(f"throw_score must be between 0 and 60, got {throw_score}")

    new_score = remaining_score - throw_score

    if new_score < 0:
        return BustInfo(is_bust=True, reason=BustReason.OVER)
    if new_score == IMPOSSIBLE_FINISH_SCORE:
        return BustInfo(is_bust=True, reason=BustReason.FINISH_IMPOSSIBLE)
    if new_score == 0 and not is_double:
        return BustInfo(is_bust=True, reason=BustReason.DOUBLE_OUT_REQUIRED)
    return BustInfo(is_bust=False)


def check_bust_from_throws(
    throws: Iterable[ThrowResult],
    initial_remaining_score: int,
) -> Optional[BustInfo]:
    """First bust in a sequence of darts, or None if every dart was legal.

    Darts after a checkout are ignored.
    """
    remaining = initial_remaining_score
    for t in throws:
        if remaining == 0:
            break
        result = check_bust(remaining, t.score, is_double_ring(t.ring))
        if result.is_bust:
            logger.debug("bust on %d with %d (%s)", remaining, t.score, result.reason.value)
            return result
        remaining -= t.score
    return None
