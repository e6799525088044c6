"""Tests for the score-calling quiz."""

import random
import pytest

from dartcore.types import (
    BustReason,
    InvalidDomainValue,
    InvalidNumericInput,
    Point,
    RingType,
    Target,
    TargetType,
    ThrowResult,
)
from dartcore.rules import VALID_SCORES
from dartcore.quiz import (
    QUIZ_PRESETS,
    JudgmentTiming,
    Question,
    QuestionType,
    QuizConfig,
    calculate_correct_answer,
    generate_question,
    generate_question_text,
    get_quiz_preset,
)

T20 = Target(TargetType.TRIPLE, 20, "T20")
D20 = Target(TargetType.DOUBLE, 20, "D20")


def _throw(score, ring=RingType.INNER_SINGLE):
    return ThrowResult(Target(TargetType.SINGLE, 1), Point(0.0, 0.0), score, ring, 1)


VISIT = [_throw(60, RingType.TRIPLE), _throw(20), _throw(5)]


def test_basic_preset_single_dart():
    """A zero-scatter dart at T20 scores 60."""
    q = generate_question(get_quiz_preset("basic", std_dev_mm=0))
    assert isinstance(q, Question)
    assert q.mode is QuestionType.SCORE
    assert len(q.throws) == 1
    assert q.correct_answer == 60
    assert q.question_text == "What did this dart score?"
    assert q.starting_score is None
    assert q.bust is None


def test_player_preset_asks_remaining():
    q = generate_question(get_quiz_preset("player", std_dev_mm=0), remaining_score=501)
    assert [t.score for t in q.throws] == [60, 60, 60]
    assert q.correct_answer == 441
    assert q.question_text == "What is left after dart 1?"
    assert q.starting_score == 501
    assert q.bust is None


def test_comprehensive_preset_answers_with_score():
    """BOTH questions carry the score as the answer and keep the starting score."""
    q = generate_question(get_quiz_preset("comprehensive", std_dev_mm=0), remaining_score=301)
    assert q.mode is QuestionType.BOTH
    assert q.correct_answer == 60
    assert q.starting_score == 501
    assert q.question_text == "Total score after dart 1, and what is left?"


def test_remaining_question_reports_bust():
    """The answer is plain subtraction; the bust is reported alongside."""
    config = QuizConfig("remaining", 1, "independent", 0, starting_score=501, target=T20)
    q = generate_question(config, remaining_score=40)
    assert q.correct_answer == -20
    assert q.bust.is_bust
    assert q.bust.reason is BustReason.OVER


def test_darts_after_checkout_do_not_bust():
    config = QuizConfig("remaining", 3, "cumulative", 0, starting_score=501, target=D20)
    q = generate_question(config, remaining_score=40)
    assert q.correct_answer == 0
    assert q.bust is None


def test_no_target_follows_checkout_table():
    """Without a target the darts aim where the checkout table says."""
    config = QuizConfig("remaining", 3, "cumulative", 0, starting_score=501)
    q = generate_question(config, remaining_score=61)
    assert all(t.target.label == "T11" for t in q.throws)
    assert q.correct_answer == 28


def test_no_target_defaults_to_treble_twenty():
    q = generate_question(QuizConfig(std_dev_mm=0))
    assert q.throws[0].target == T20
    assert q.correct_answer == 60


def test_seeded_questions_score_legally():
    """Random visits only produce real dart scores and a consistent answer."""
    random.seed(42)
    config = get_quiz_preset("caller_cumulative")
    for _ in range(50):
        q = generate_question(config)
        assert len(q.throws) == 3
        assert all(t.score in VALID_SCORES for t in q.throws)
        assert q.correct_answer == q.throws[0].score


@pytest.mark.parametrize("kind, timing, index, previous, expected", [
    ("score", "independent", 0, None, 60),
    ("score", "independent", 2, None, 5),
    ("score", "cumulative", 1, None, 80),
    ("score", "cumulative", 2, None, 85),
    ("remaining", "independent", 1, 100, 80),
    ("remaining", "cumulative", 2, 100, 15),
    ("both", "cumulative", 2, 100, 85),
])
def test_correct_answer(kind, timing, index, previous, expected):
    config = QuizConfig(kind, 3, timing, 0, starting_score=501)
    assert calculate_correct_answer(VISIT, config, index, previous) == expected


def test_correct_answer_validation():
    score = QuizConfig("score", 3, "independent", 0)
    remaining = QuizConfig("remaining", 3, "independent", 0, starting_score=501)
    with pytest.raises(InvalidDomainValue):
        calculate_correct_answer([], score, 0)
    with pytest.raises(InvalidDomainValue):
        calculate_correct_answer(VISIT, score, 3)
    with pytest.raises(InvalidDomainValue):
        calculate_correct_answer(VISIT, score, -1)
    with pytest.raises(InvalidNumericInput):
        calculate_correct_answer(VISIT, score, 0.5)
    with pytest.raises(InvalidDomainValue):
        calculate_correct_answer(VISIT, remaining, 0)
    with pytest.raises(InvalidNumericInput):
        calculate_correct_answer(VISIT, remaining, 0, 100.5)


@pytest.mark.parametrize("kind, unit, index, cumulative, text", [
    ("score", 1, 0, False, "What did this dart score?"),
    ("remaining", 1, 0, True, "What is left after this dart?"),
    ("both", 1, 0, False, "What did this dart score, and what is left?"),
    ("score", 3, 1, False, "What did dart 2 score?"),
    ("score", 3, 2, True, "Total score after dart 3?"),
    ("remaining", 3, 0, True, "What is left after dart 1?"),
    ("both", 3, 1, False, "What did dart 2 score, and what is left?"),
    ("both", 3, 2, True, "Total score after dart 3, and what is left?"),
])
def test_question_text(kind, unit, index, cumulative, text):
    config = QuizConfig(kind, unit, "independent", 0, starting_score=501)
    assert generate_question_text(config, index, cumulative) == text


def test_question_text_index_range():
    config = QuizConfig("score", 1, "independent", 0)
    with pytest.raises(InvalidDomainValue):
        generate_question_text(config, 1, False)
    with pytest.raises(InvalidNumericInput):
        generate_question_text(config, "0", False)


@pytest.mark.parametrize("kwargs", [
    {"throw_unit": 2},
    {"throw_unit": True},
    {"question_type": "total"},
    {"judgment_timing": "later"},
    {"question_type": "remaining"},
])
def test_config_rejects_bad_domain_values(kwargs):
    with pytest.raises(InvalidDomainValue):
        QuizConfig(**kwargs)


def test_config_rejects_bad_std_dev():
    with pytest.raises(InvalidDomainValue):
        QuizConfig(std_dev_mm=-1)
    with pytest.raises(InvalidNumericInput):
        QuizConfig(std_dev_mm=float("nan"))


def test_config_parses_strings():
    config = QuizConfig("both", 3, "cumulative", starting_score=501)
    assert config.question_type is QuestionType.BOTH
    assert config.judgment_timing is JudgmentTiming.CUMULATIVE
    assert config.is_cumulative


def test_generate_question_needs_remaining_score():
    config = get_quiz_preset("player")
    with pytest.raises(InvalidDomainValue):
        generate_question(config)
    with pytest.raises(InvalidNumericInput):
        generate_question(config, remaining_score=-5)


def test_presets():
    for name in QUIZ_PRESETS:
        config = get_quiz_preset(name)
        assert config.target == T20
        assert config.std_dev_mm == 30.0
    with pytest.raises(InvalidDomainValue):
        get_quiz_preset("expert")
