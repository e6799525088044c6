"""Score-calling quiz: simulated darts plus the question a trainee answers.

Three knobs shape a question:
- question_type: ask for the score, the remaining score, or both
- throw_unit: one dart or a full three-dart visit
- judgment_timing: judge each dart on its own, or the running total so far

Every question is built from execute_throw(), so what the trainee sees is
exactly what the scoring engine would call.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from dartcore.types import (
    BustInfo,
    InvalidDomainValue,
    InvalidNumericInput,
    Target,
    ThrowResult,
    is_integer,
    require_finite,
)
from dartcore.rules import MIN_FINISHABLE_SCORE, check_bust_from_throws
from dartcore.throws import RandomSource, execute_throw
from dartcore.checkout import DEFAULT_TARGET, get_optimal_target

logger = logging.getLogger(__name__)

THROW_UNITS = (1, 3)


class QuestionType(str, Enum):
    SCORE = "score"
    REMAINING = "remaining"
    BOTH = "both"

    @property
    def needs_remaining(self) -> bool:
        return self is not QuestionType.SCORE


class JudgmentTiming(str, Enum):
    INDEPENDENT = "independent"
    CUMULATIVE = "cumulative"


@dataclass(frozen=True)
class QuizConfig:
    """How questions are generated. Enum fields also accept their string values."""
    question_type: QuestionType = QuestionType.SCORE
    throw_unit: int = 1
    judgment_timing: JudgmentTiming = JudgmentTiming.INDEPENDENT
    std_dev_mm: float = 30.0
    starting_score: Optional[int] = None
    target: Optional[Target] = None

    def __post_init__(self):
        try:
            object.__setattr__(self, "question_type", QuestionType(self.question_type))
        except ValueError:
            raise InvalidDomainValue(f"Unknown question type: {self.question_type!r}") from None
        try:
            object.__setattr__(self, "judgment_timing", JudgmentTiming(self.judgment_timing))
        except ValueError:
            raise InvalidDomainValue(f"Unknown judgment timing: {self.judgment_timing!r}") from None

        if self.throw_unit not in THROW_UNITS or isinstance(self.throw_unit, bool):
            raise InvalidDomainValue(f"throw_unit must be 1 or 3, got {self.throw_unit!r}")
        require_finite("std_dev_mm", self.std_dev_mm)
        if self.std_dev_mm < 0:
            raise InvalidDomainValue(f"std_dev_mm must be non-negative, got {self.std_dev_mm!r}")
        if self.question_type.needs_remaining and self.starting_score is None:
            raise InvalidDomainValue(f"starting_score is required for {self.question_type.value} questions")

    @property
    def is_cumulative(self) -> bool:
        return self.judgment_timing is JudgmentTiming.CUMULATIVE


@dataclass
class Question:
    """One quiz question and its answer."""
    mode: QuestionType
    throws: list            # list[ThrowResult]
    correct_answer: int
    question_text: str
    starting_score: Optional[int] = None
    bust: Optional[BustInfo] = None


QUIZ_PRESETS = {
    "basic": {"label": "Basic", "throw_unit": 1, "question_type": "score",
              "judgment_timing": "independent", "starting_score": None},
    "player": {"label": "Player", "throw_unit": 3, "question_type": "remaining",
               "judgment_timing": "cumulative", "starting_score": 501},
    "caller_basic": {"label": "Caller basics", "throw_unit": 3, "question_type": "score",
                     "judgment_timing": "independent", "starting_score": None},
    "caller_cumulative": {"label": "Caller running total", "throw_unit": 3, "question_type": "score",
                          "judgment_timing": "cumulative", "starting_score": None},
    "comprehensive": {"label": "Comprehensive", "throw_unit": 3, "question_type": "both",
                      "judgment_timing": "cumulative", "starting_score": 501},
}


def get_quiz_preset(name: str, std_dev_mm: float = 30.0) -> QuizConfig:
    """QuizConfig for a named preset, aiming at treble 20."""
    if name not in QUIZ_PRESETS:
        raise InvalidDomainValue(f"Unknown quiz preset: {name!r}. Available: {', '.join(QUIZ_PRESETS)}")
    preset = {k: v for k, v in QUIZ_PRESETS[name].items() if k != "label"}
    return QuizConfig(std_dev_mm=std_dev_mm, target=DEFAULT_TARGET, **preset)


def _check_throw_index(throw_index: int, limit: int) -> int:
    if not is_integer(throw_index):
        raise InvalidNumericInput(f"throw_index must be an integer, got {throw_index!r}")
    if throw_index < 0:
        raise InvalidDomainValue(f"throw_index must be non-negative, got {throw_index}")
    if throw_index >= limit:
        raise InvalidDomainValue(f"throw_index must be less than {limit}, got {throw_index}")
    return int(throw_index)


def generate_question_text(config: QuizConfig, throw_index: int, is_cumulative: bool) -> str:
    """Question wording for the dart at `throw_index` (0-based)."""
    throw_index = _check_throw_index(throw_index, config.throw_unit)
    kind = config.question_type

    if config.throw_unit == 1:
        if kind is QuestionType.SCORE:
            return "What did this dart score?"
        if kind is QuestionType.REMAINING:
            return "What is left after this dart?"
        return "What did this dart score, and what is left?"

    n = throw_index + 1
    if kind is QuestionType.SCORE:
        return f"Total score after dart {n}?" if is_cumulative else f"What did dart {n} score?"
    if kind is QuestionType.REMAINING:
        return f"What is left after dart {n}?"
    if is_cumulative:
        return f"Total score after dart {n}, and what is left?"
    return f"What did dart {n} score, and what is left?"


def calculate_correct_answer(
    throws: Sequence[ThrowResult],
    config: QuizConfig,
    throw_index: int,
    previous_remaining: Optional[int] = None,
) -> int:
    """Expected answer for the dart at `throw_index`.

    SCORE and BOTH answer with the score (of that dart, or the running total
    when cumulative). REMAINING answers with previous_remaining minus that
    score; the subtraction is plain arithmetic, busts are reported separately.
    """
    if not throws:
        raise InvalidDomainValue("throws must be a non-empty sequence")
    throw_index = _check_throw_index(throw_index, len(throws))
    if config.question_type.needs_remaining:
        if previous_remaining is None:
            raise InvalidDomainValue(
                f"previous_remaining is required for {config.question_type.value} questions"
            )
        if not is_integer(previous_remaining):
            raise InvalidNumericInput(f"previous_remaining must be an integer, got {previous_remaining!r}")

    if config.is_cumulative:
        scored = sum(t.score for t in throws[:throw_index + 1])
    else:
        scored = throws[throw_index].score

    if config.question_type is QuestionType.REMAINING:
        return int(previous_remaining) - scored
    return scored


def generate_question(
    config: QuizConfig,
    remaining_score: Optional[int] = None,
    rng: Optional[RandomSource] = None,
) -> Question:
    """Throw `config.throw_unit` simulated darts and ask about the first one.

    Without a configured target the darts aim where the checkout table says
    for `remaining_score`, or at treble 20.
    """
    if config.question_type.needs_remaining:
        if remaining_score is None:
            raise InvalidDomainValue(
                f"remaining_score is required for {config.question_type.value} questions"
            )
        if not is_integer(remaining_score) or remaining_score < 0:
            raise InvalidNumericInput(f"remaining_score must be a non-negative integer, got {remaining_score!r}")

    target = config.target
    if target is None and remaining_score is not None:
        target = get_optimal_target(remaining_score, config.throw_unit)
    if target is None:
        target = DEFAULT_TARGET

    throws = [execute_throw(target, config.std_dev_mm, rng) for _ in range(config.throw_unit)]

    first = 0
    question = Question(
        mode=config.question_type,
        throws=throws,
        correct_answer=calculate_correct_answer(throws, config, first, remaining_score),
        question_text=generate_question_text(config, first, config.is_cumulative),
    )
    if config.question_type.needs_remaining:
        question.starting_score = config.starting_score
        if remaining_score >= MIN_FINISHABLE_SCORE:
            question.bust = check_bust_from_throws(throws, remaining_score)

    logger.debug("quiz %s at %s: %s -> %d",
                 config.question_type.value, target.label, [t.score for t in throws],
                 question.correct_answer)
    return question
