"""Response schemas for the JSON API. Field names are camelCase on the wire."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from quizbank.core.markdown_math_renderer import renderer
from quizbank.core.models import Question, QuestionBank, QuizAttempt, Subject


class _ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SubjectOut(_ApiModel):
    id: str
    name: str
    display_name: str
    icon: str
    color: str
    description: str

    @classmethod
    def from_domain(cls, subject: Subject) -> "SubjectOut":
        return cls(
            id=subject.id,
            name=subject.name,
            display_name=subject.display_name,
            icon=subject.icon,
            color=subject.color,
            description=subject.description,
        )


class QuestionBankOut(_ApiModel):
    id: str
    subject_id: str
    class_level: str
    title: str
    description: str
    difficulty: str
    time_limit_minutes: int
    total_questions: int
    avg_score: int

    @classmethod
    def from_domain(cls, bank: QuestionBank) -> "QuestionBankOut":
        return cls(
            id=bank.id,
            subject_id=bank.subject_id,
            class_level=bank.class_level,
            title=bank.title,
            description=bank.description,
            difficulty=bank.difficulty,
            time_limit_minutes=bank.time_limit_minutes,
            total_questions=bank.total_questions,
            avg_score=bank.avg_score,
        )


class QuestionOut(_ApiModel):
    id: str
    question_bank_id: str
    text: str
    text_html: str
    options: list[str]
    correct_answer: int
    explanation: str | None = None
    explanation_html: str | None = None

    @classmethod
    def from_domain(cls, question: Question) -> "QuestionOut":
        return cls(
            id=question.id,
            question_bank_id=question.question_bank_id,
            text=question.text,
            text_html=renderer.render_fragment(question.text),
            options=list(question.options),
            correct_answer=question.correct_answer,
            explanation=question.explanation,
            explanation_html=renderer.render_optional(question.explanation),
        )


class QuizAttemptOut(_ApiModel):
    id: str
    user_id: str | None = None
    question_bank_id: str
    score: int
    total_questions: int
    time_spent_seconds: int
    answers: dict[str, int]
    completed_at: datetime

    @classmethod
    def from_domain(cls, attempt: QuizAttempt) -> "QuizAttemptOut":
        return cls(
            id=attempt.id,
            user_id=attempt.user_id,
            question_bank_id=attempt.question_bank_id,
            score=attempt.score,
            total_questions=attempt.total_questions,
            time_spent_seconds=attempt.time_spent_seconds,
            answers=dict(attempt.answers),
            completed_at=attempt.completed_at,
        )
