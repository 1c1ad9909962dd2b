from __future__ import annotations

import pytest

from quizbank.core.models import Question, QuestionBank, Subject
from quizbank.core.services.attempt_recorder import AttemptRecorder
from quizbank.core.services.catalog_store import CatalogStore
from quizbank.core.services.quiz_session import QuizSession
from quizbank.core.ticker import VirtualTicker


def make_question(question_id: str, bank_id: str = "math-class-5-basic", correct: int = 0) -> Question:
    return Question(
        id=question_id,
        question_bank_id=bank_id,
        text=f"Question {question_id}?",
        options=("A", "B", "C", "D"),
        correct_answer=correct,
        explanation=f"Because of {question_id}.",
    )


@pytest.fixture
def subject() -> Subject:
    return Subject("math", "Mathematics", "Mathematics", "fas fa-calculator", "from-green-500", "Numbers")


@pytest.fixture
def bank() -> QuestionBank:
    return QuestionBank(
        id="math-class-5-basic",
        subject_id="math",
        class_level="class-5",
        title="Basic Concepts",
        description="Fundamentals",
        difficulty="Beginner",
        time_limit_minutes=20,
        total_questions=3,
        avg_score=45,
    )


@pytest.fixture
def empty_bank() -> QuestionBank:
    return QuestionBank(
        id="math-class-5-empty",
        subject_id="math",
        class_level="class-5",
        title="Empty",
        description="Nothing here yet",
        difficulty="Beginner",
        time_limit_minutes=10,
        total_questions=0,
    )


@pytest.fixture
def questions() -> list[Question]:
    return [make_question("q1", correct=1), make_question("q2", correct=0), make_question("q3", correct=3)]


@pytest.fixture
def catalog(subject, bank, empty_bank, questions) -> CatalogStore:
    return CatalogStore([subject], [bank, empty_bank], questions)


@pytest.fixture
def recorder(catalog) -> AttemptRecorder:
    return AttemptRecorder(catalog)


@pytest.fixture
def ticker() -> VirtualTicker:
    return VirtualTicker()


@pytest.fixture
def session(bank, questions, recorder, ticker) -> QuizSession:
    return QuizSession(bank, questions, recorder, ticker)


class FlakyRecorder:
    """Recorder that fails a fixed number of times before delegating."""

    def __init__(self, delegate: AttemptRecorder, failures: int = 1) -> None:
        self.delegate = delegate
        self.failures = failures
        self.calls = 0

    def create_attempt(self, payload):
        self.calls += 1
        if self.calls <= self.failures:
            raise ConnectionError("recorder unavailable")
        return self.delegate.create_attempt(payload)
