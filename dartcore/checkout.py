"""Checkout strategy: which target to throw at for a given remaining score.

A fixed lookup table following the standard PDC checkout chart for 2-170:
- Even scores up to 40 go straight for the matching double
- Other scores up to 60 take a single that leaves a good double (D16, D8, D4, D20)
- 61-120 take the treble that leaves a double or a two-dart finish
- 121-170 and anything higher start on treble 20
With one dart left only a direct finish is worth throwing for.
"""

from typing import Optional

from dartcore.types import InvalidNumericInput, Target, TargetType, is_integer
from dartcore.targets import parse_target_label
from dartcore.rules import BULL_FINISH, MAX_DOUBLE_FINISH, MIN_FINISHABLE_SCORE

CHECKOUT_MAX = 170
DEFAULT_TARGET = Target(TargetType.TRIPLE, 20, "T20")

# Setup single for every score below 61 that is not a direct finish, keyed by remaining score
_SETUP_SINGLES = {
    3: "S1", 5: "S1", 7: "S3", 9: "S1", 11: "S3", 13: "S5", 15: "S7", 17: "S9",
    19: "S3", 21: "S5", 23: "S7", 25: "S9", 27: "S11", 29: "S13", 31: "S15",
    33: "S1", 35: "S3", 37: "S5", 39: "S7", 41: "S9", 43: "S11", 45: "S13",
    47: "S15", 49: "S17",
    42: "S10", 44: "S12", 46: "S6", 48: "S16",
    51: "S11", 52: "S12", 53: "S13", 54: "S14", 55: "S15", 56: "S16",
    57: "S17", 58: "S18", 59: "S19",
    60: "S20",
}

# Treble segment for 61-120
_SETUP_TREBLES = {
    61: 11, 62: 10, 63: 13, 64: 14, 65: 11, 66: 10, 67: 13, 68: 18, 69: 19, 70: 18,
    71: 13, 72: 16, 73: 19, 74: 14, 75: 17, 76: 20, 77: 19, 78: 18, 79: 13, 80: 20,
    81: 19, 82: 14, 83: 17, 84: 20, 85: 15, 86: 18, 87: 17, 88: 20, 89: 19, 90: 18,
    91: 17, 92: 20, 93: 19, 94: 18, 95: 19, 96: 20, 97: 19, 98: 20, 99: 19, 100: 20,
    101: 17, 102: 20, 103: 17, 104: 18, 105: 19, 106: 20, 107: 19, 108: 20, 109: 19, 110: 20,
    111: 19, 112: 20, 113: 19, 114: 20, 115: 19, 116: 20, 117: 19, 118: 20, 119: 19, 120: 20,
}


def _build_checkout_table() -> dict:
    table = {}
    for score in range(MIN_FINISHABLE_SCORE, MAX_DOUBLE_FINISH + 1, 2):
        table[score] = Target(TargetType.DOUBLE, score // 2, f"D{score // 2}")
    table[BULL_FINISH] = Target(TargetType.BULL, None, "BULL")
    for score, label in _SETUP_SINGLES.items():
        table[score] = parse_target_label(label)
    for score, number in _SETUP_TREBLES.items():
        table[score] = Target(TargetType.TRIPLE, number, f"T{number}")
    for score in range(121, CHECKOUT_MAX + 1):
        table[score] = DEFAULT_TARGET
    return table


CHECKOUT_TABLE = _build_checkout_table()

ONE_DART_FINISHABLE = frozenset(
    list(range(MIN_FINISHABLE_SCORE, MAX_DOUBLE_FINISH + 1, 2)) + [BULL_FINISH]
)


def get_optimal_target(remaining_score: int, throws_remaining: int) -> Optional[Target]:
    """Best target for the next dart, or None when throwing cannot help.

    None for a finished or unfinishable score (0, 1, negative), for no darts
    left, and for a last dart that cannot check out.
    """
    if not is_integer(remaining_score):
        raise InvalidNumericInput(f"remaining_score must be an integer, got {remaining_score!r}")
    if not is_integer(throws_remaining):
        raise InvalidNumericInput(f"throws_remaining must be an integer, got {throws_remaining!r}")
    remaining_score = int(remaining_score)

    if throws_remaining <= 0:
        return None
    if remaining_score < MIN_FINISHABLE_SCORE:
        return None

    if throws_remaining == 1:
        if remaining_score in ONE_DART_FINISHABLE:
            return CHECKOUT_TABLE[remaining_score]
        return None

    return CHECKOUT_TABLE.get(remaining_score, DEFAULT_TARGET)
