"""Scoring helpers shared by the quiz session and the result screen."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from quizbank.constants.quiz_constants import LOW_TIME_THRESHOLD_SECONDS, PERFORMANCE_MESSAGES
from quizbank.core.models import Question, QuestionReview


def score_answers(questions: Sequence[Question], answers: Mapping[str, int]) -> int:
    """Count the questions whose chosen option equals the correct one.

    Unanswered questions never match.
    """
    return sum(1 for question in questions if answers.get(question.id) == question.correct_answer)


def percent(part: int, whole: int) -> int:
    """Return ``round(part / whole * 100)`` with halves rounded up."""
    if whole <= 0:
        raise ValueError("Cannot compute a percentage of zero.")
    return (part * 200 + whole) // (2 * whole)


def score_percentage(score: int, total_questions: int) -> int:
    if total_questions <= 0:
        raise ValueError("Cannot compute a percentage for an empty question bank.")
    return percent(score, total_questions)


def time_spent(time_limit_seconds: int, time_remaining_seconds: int) -> int:
    return max(0, time_limit_seconds - time_remaining_seconds)


def performance_message(percentage: int) -> str:
    for threshold, message in PERFORMANCE_MESSAGES:
        if percentage >= threshold:
            return message
    return PERFORMANCE_MESSAGES[-1][1]


def build_review(questions: Sequence[Question], answers: Mapping[str, int]) -> tuple[QuestionReview, ...]:
    return tuple(
        QuestionReview(
            question_id=question.id,
            text=question.text,
            options=question.options,
            user_answer=answers.get(question.id),
            correct_answer=question.correct_answer,
            is_correct=answers.get(question.id) == question.correct_answer,
            explanation=question.explanation,
        )
        for question in questions
    )


def format_clock(seconds: int) -> str:
    """Format a second count as ``MM:SS``."""
    seconds = max(0, seconds)
    minutes, remainder = divmod(seconds, 60)
    return f"{minutes:02d}:{remainder:02d}"


def is_low_time(seconds: int) -> bool:
    return seconds <= LOW_TIME_THRESHOLD_SECONDS
