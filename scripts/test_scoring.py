#!/usr/bin/env python3
"""
Scoring Tests

1. Aptitude tally (exact match, bounds)
2. Typing WPM and accuracy (rounding, zero cases, clamping)

Run: pytest scripts/test_scoring.py
"""
import math
import random

import pytest

from hr360.schemas.flow_schemas import AptitudeQuestion
from hr360.services.scoring_service import (
    score_aptitude, format_aptitude_score, compute_typing_metrics,
    compute_wpm, compute_accuracy, round_half_up
)


def _questions(answers):
    return [
        AptitudeQuestion(
            question_text=f"Question {i}",
            options=["A", "B", "C", "D"],
            correct_answer=answer,
            explanation="Because."
        )
        for i, answer in enumerate(answers)
    ]


# ============================================================
# APTITUDE
# ============================================================

def test_three_of_five_correct():
    questions = _questions(["A", "B", "C", "D", "A"])
    assert score_aptitude(["A", "B", "C", "A", "B"], questions) == 3


def test_match_is_exact_and_case_sensitive():
    questions = _questions(["Paris", "42"])
    assert score_aptitude(["paris", " 42"], questions) == 0
    assert score_aptitude(["Paris", "42"], questions) == 2


def test_unanswered_questions_count_as_wrong():
    questions = _questions(["A", "B", "C"])
    assert score_aptitude(["A", "", ""], questions) == 1
    assert score_aptitude(["A"], questions) == 1
    assert score_aptitude([], questions) == 0


def test_empty_answer_never_matches_empty_key():
    questions = [{"correct_answer": ""}]
    assert score_aptitude([""], questions) == 0


def test_accepts_stored_question_dicts():
    questions = [{"correct_answer": "B"}, {"correct_answer": "C"}]
    assert score_aptitude(["B", "C"], questions) == 2


def test_extra_answers_are_ignored():
    questions = _questions(["A"])
    assert score_aptitude(["A", "A", "A"], questions) == 1


def test_score_always_within_bounds():
    rng = random.Random(7)
    options = ["A", "B", "C", "D", ""]
    for _ in range(200):
        n = rng.randint(0, 20)
        questions = [{"correct_answer": rng.choice(options[:4])} for _ in range(n)]
        answers = [rng.choice(options) for _ in range(rng.randint(0, 25))]
        assert 0 <= score_aptitude(answers, questions) <= n


def test_format_aptitude_score():
    assert format_aptitude_score(3, 5) == "3 / 5"
    assert format_aptitude_score(0, 0) == "0 / 0"


# ============================================================
# TYPING
# ============================================================

def test_accuracy_examples():
    assert compute_accuracy("cat", "cat") == 100
    assert compute_accuracy("cat", "cab") == 67


def test_full_reference_typed_is_100_percent():
    reference = "The quick brown fox jumps over the lazy dog."
    metrics = compute_typing_metrics(reference, reference, 30)
    assert metrics.accuracy == 100
    assert metrics.correct_chars == len(reference)


def test_empty_input_gives_zero_accuracy():
    metrics = compute_typing_metrics("cat", "", 10)
    assert metrics.accuracy == 0
    assert metrics.wpm == 0
    assert metrics.typed_chars == 0


def test_zero_elapsed_gives_zero_wpm():
    metrics = compute_typing_metrics("cat", "cat", 0)
    assert metrics.wpm == 0
    assert not math.isnan(metrics.wpm) and not math.isinf(metrics.wpm)


def test_negative_elapsed_is_clamped_to_zero():
    metrics = compute_typing_metrics("cat", "cat", -5)
    assert metrics.elapsed_seconds == 0
    assert metrics.wpm == 0


def test_elapsed_is_capped_at_duration():
    text = "a" * 300
    metrics = compute_typing_metrics(text, text, 600, duration_seconds=60)
    assert metrics.elapsed_seconds == 60
    # 300 chars = 60 words in 1 minute
    assert metrics.wpm == 60


def test_wpm_uses_five_characters_per_word():
    # 250 characters in 30 seconds = 50 words / 0.5 min
    assert compute_wpm("x" * 250, 30) == 100


def test_wpm_ignores_surrounding_whitespace():
    assert compute_wpm("  hello  ", 60) == compute_wpm("hello", 60) == 1


def test_overflow_beyond_reference_never_matches():
    metrics = compute_typing_metrics("cat", "catcat", 10)
    assert metrics.correct_chars == 3
    assert metrics.accuracy == 50


def test_rounding_is_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(0.5) == 1
    assert round_half_up(66.66) == 67
    assert round_half_up(66.4) == 66


@pytest.mark.parametrize("typed, expected", [
    ("c", 100),
    ("x", 0),
    ("cxt", 67),
    ("ca", 100),
])
def test_accuracy_over_typed_length(typed, expected):
    assert compute_accuracy("cat", typed) == expected


def test_metrics_to_dict():
    metrics = compute_typing_metrics("cat", "cab", 60)
    assert metrics.to_dict() == {
        "wpm": 1,
        "accuracy": 67,
        "correct_chars": 2,
        "typed_chars": 3,
        "elapsed_seconds": 60.0,
    }
