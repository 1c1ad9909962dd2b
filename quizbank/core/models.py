"""Domain models for the quiz platform."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


@dataclass(frozen=True, slots=True)
class Subject:
    """A school subject shown on the home page."""

    id: str
    name: str
    display_name: str
    icon: str
    color: str
    description: str


@dataclass(frozen=True, slots=True)
class QuestionBank:
    """Timed set of questions for one subject and class level."""

    id: str
    subject_id: str
    class_level: str
    title: str
    description: str
    difficulty: str
    time_limit_minutes: int
    total_questions: int
    avg_score: int = 0

    @property
    def time_limit_seconds(self) -> int:
        return self.time_limit_minutes * 60


@dataclass(frozen=True, slots=True)
class Question:
    """Multiple-choice question; ``correct_answer`` indexes into ``options``."""

    id: str
    question_bank_id: str
    text: str
    options: tuple[str, ...]
    correct_answer: int
    explanation: str | None = None


@dataclass(frozen=True, slots=True)
class QuizAttempt:
    """A finished, scored run through a question bank as stored by the recorder."""

    id: str
    question_bank_id: str
    score: int
    total_questions: int
    time_spent_seconds: int
    answers: dict[str, int]
    completed_at: datetime
    user_id: str | None = None


class SessionState(str, Enum):
    IDLE = "idle"
    ACTIVE = "active"
    SUBMITTING = "submitting"
    COMPLETED = "completed"


@dataclass(frozen=True, slots=True)
class QuestionReview:
    """Per-question outcome shown on the result screen."""

    question_id: str
    text: str
    options: tuple[str, ...]
    user_answer: int | None
    correct_answer: int
    is_correct: bool
    explanation: str | None


@dataclass(frozen=True, slots=True)
class QuizResult:
    """Outcome of a submitted session."""

    attempt: QuizAttempt
    score: int
    total_questions: int
    percentage: int
    time_spent_seconds: int
    performance_message: str
    review: tuple[QuestionReview, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class SessionSnapshot:
    """Read-only view of a quiz session for the presentation layer."""

    state: SessionState
    question_bank_id: str
    current_question_index: int
    current_question: Question | None
    total_questions: int
    answers: dict[str, int]
    time_limit_seconds: int
    time_remaining_seconds: int
    clock: str
    is_low_time: bool
    answered_count: int
    progress_percent: int
    last_error: str | None = None
    result: QuizResult | None = None

    @property
    def is_completed(self) -> bool:
        return self.state is SessionState.COMPLETED
