"""
Scoring Service - aptitude test tallying and typing test metrics.

Both are plain, stateless arithmetic:
- Aptitude: exact, case-sensitive match of each answer against the
  question's correct answer. No partial credit, no negative marking.
- Typing: gross WPM (5 characters = 1 word) and position-by-position
  accuracy against the reference text.

Rounding is half-up (2.5 -> 3), the way the dashboard has always
displayed these numbers.
"""

import math
from dataclasses import dataclass, asdict
from typing import Sequence, Union, Mapping, Any

from hr360.schemas.flow_schemas import AptitudeQuestion

DEFAULT_TYPING_DURATION_SECONDS = 60
CHARS_PER_WORD = 5

# Used when a typing test is taken without a generated, role-specific text
SAMPLE_TYPING_TEXT = (
    "The quick brown fox jumps over the lazy dog. This sentence contains all the "
    "letters of the alphabet, making it a perfect tool for practicing typing. Speed "
    "and accuracy are both important metrics for any professional who relies on a "
    "keyboard for their daily work. Consistent practice is the key to improvement. "
    "Remember to maintain good posture and take breaks to avoid strain."
)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


# ============================================================
# APTITUDE
# ============================================================

QuestionLike = Union[AptitudeQuestion, Mapping[str, Any]]


def _correct_answer(question: QuestionLike) -> str:
    if isinstance(question, Mapping):
        return question["correct_answer"]
    return question.correct_answer


def score_aptitude(answers: Sequence[str], questions: Sequence[QuestionLike]) -> int:
    """
    Count answers that exactly equal the question's correct answer.

    Args:
        answers: candidate answers, ordered like the questions. May be
            shorter than the question list; missing answers count as wrong.
        questions: generated questions (models or dicts with 'correct_answer')

    Returns:
        Number of correct answers, 0 <= n <= len(questions)
    """
    correct = 0
    for index, question in enumerate(questions):
        if index >= len(answers):
            break
        answer = answers[index]
        # Unanswered questions never match, even against an empty key
        if answer and answer == _correct_answer(question):
            correct += 1
    return correct


def format_aptitude_score(correct: int, total: int) -> str:
    """Stored form on the applicant record, e.g. '3 / 5'."""
    return f"{correct} / {total}"


# ============================================================
# TYPING
# ============================================================

@dataclass
class TypingMetrics:
    wpm: int
    accuracy: int
    correct_chars: int
    typed_chars: int
    elapsed_seconds: float

    def to_dict(self) -> dict:
        return asdict(self)


def compute_wpm(typed: str, elapsed_seconds: float) -> int:
    """Gross WPM; 0 when no time has elapsed."""
    elapsed_minutes = elapsed_seconds / 60
    if elapsed_minutes <= 0:
        return 0
    words_typed = len(typed.strip()) / CHARS_PER_WORD
    return round_half_up(words_typed / elapsed_minutes)


def count_correct_chars(reference: str, typed: str) -> int:
    """Positions where the typed character equals the reference character."""
    return sum(1 for ref_char, typed_char in zip(reference, typed) if ref_char == typed_char)


def compute_accuracy(reference: str, typed: str) -> int:
    """Percentage of typed characters that match; 0 when nothing was typed."""
    if not typed:
        return 0
    return round_half_up(count_correct_chars(reference, typed) / len(typed) * 100)


def compute_typing_metrics(
    reference: str,
    typed: str,
    elapsed_seconds: float,
    duration_seconds: int = DEFAULT_TYPING_DURATION_SECONDS
) -> TypingMetrics:
    """
    Compute WPM and accuracy for one typing test.

    elapsed_seconds is clamped to [0, duration_seconds]; typed characters
    beyond the end of the reference text never count as correct.
    """
    elapsed = min(max(float(elapsed_seconds), 0.0), float(duration_seconds))
    return TypingMetrics(
        wpm=compute_wpm(typed, elapsed),
        accuracy=compute_accuracy(reference, typed),
        correct_chars=count_correct_chars(reference, typed),
        typed_chars=len(typed),
        elapsed_seconds=elapsed,
    )
