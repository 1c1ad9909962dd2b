"""Service recording finished quiz attempts."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import replace
from datetime import datetime, timezone
import logging
from threading import Lock
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from pydantic.alias_generators import to_camel

from quizbank.core.models import Question, QuizAttempt
from quizbank.core.services.catalog_store import CatalogStore

logger = logging.getLogger(__name__)


class AttemptValidationError(ValueError):
    """Raised when an attempt payload is missing fields or malformed."""

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class QuizAttemptCreate(BaseModel):
    """Payload accepted by :meth:`AttemptRecorder.create_attempt`."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        strict=True,
    )

    question_bank_id: str = Field(..., min_length=1)
    score: int = Field(..., ge=0)
    total_questions: int = Field(..., ge=1)
    time_spent_seconds: int = Field(..., ge=0)
    answers: dict[str, int]
    user_id: str | None = None

    @model_validator(mode="after")
    def _check_consistency(self) -> "QuizAttemptCreate":
        if self.score > self.total_questions:
            raise ValueError("score cannot exceed totalQuestions")
        if any(index < 0 for index in self.answers.values()):
            raise ValueError("answer option indexes must be non-negative")
        return self


class AttemptRecorder:
    """Create-only store of quiz attempts."""

    def __init__(self, catalog: CatalogStore | None = None) -> None:
        self._catalog = catalog
        self._attempts: dict[str, QuizAttempt] = {}
        self._lock = Lock()

    def create_attempt(self, payload: QuizAttemptCreate | Mapping[str, Any]) -> QuizAttempt:
        """Validate and store an attempt, assigning its id and completion time."""
        data = self._validate(payload)
        attempt = QuizAttempt(
            id=uuid4().hex,
            question_bank_id=data.question_bank_id,
            score=data.score,
            total_questions=data.total_questions,
            time_spent_seconds=data.time_spent_seconds,
            answers=dict(data.answers),
            completed_at=datetime.now(timezone.utc),
            user_id=data.user_id,
        )
        with self._lock:
            self._attempts[attempt.id] = attempt
        logger.info(
            "Recorded attempt %s for bank %s: %d/%d in %ds",
            attempt.id,
            attempt.question_bank_id,
            attempt.score,
            attempt.total_questions,
            attempt.time_spent_seconds,
        )
        return _copy(attempt)

    def get_attempt(self, attempt_id: str) -> QuizAttempt | None:
        with self._lock:
            attempt = self._attempts.get(attempt_id)
        return _copy(attempt) if attempt is not None else None

    def list_attempts_by_user(self, user_id: str) -> list[QuizAttempt]:
        with self._lock:
            return [_copy(a) for a in self._attempts.values() if a.user_id == user_id]

    def list_attempts_for_bank(self, question_bank_id: str) -> list[QuizAttempt]:
        with self._lock:
            return [_copy(a) for a in self._attempts.values() if a.question_bank_id == question_bank_id]

    def count(self) -> int:
        with self._lock:
            return len(self._attempts)

    def _validate(self, payload: QuizAttemptCreate | Mapping[str, Any]) -> QuizAttemptCreate:
        if isinstance(payload, QuizAttemptCreate):
            data = payload
        else:
            if not isinstance(payload, Mapping):
                raise AttemptValidationError("Attempt payload must be a mapping.")
            try:
                data = QuizAttemptCreate.model_validate(dict(payload))
            except ValidationError as exc:
                raise AttemptValidationError("Invalid quiz attempt data", _summarize(exc)) from exc

        if self._catalog is not None:
            if not self._catalog.has_question_bank(data.question_bank_id):
                raise AttemptValidationError(f"Unknown question bank '{data.question_bank_id}'.")
            errors = _check_against_bank(data, self._catalog.list_questions(data.question_bank_id))
            if errors:
                raise AttemptValidationError("Invalid quiz attempt data", errors)
        return data


def _check_against_bank(data: QuizAttemptCreate, questions: Sequence[Question]) -> list[dict[str, Any]]:
    """Return errors for answers and totals that do not fit the bank's questions."""
    errors: list[dict[str, Any]] = []
    if data.total_questions != len(questions):
        errors.append(
            {
                "loc": ["totalQuestions"],
                "msg": f"Question bank has {len(questions)} questions, got {data.total_questions}",
                "type": "total_mismatch",
            }
        )
    options_by_id = {question.id: len(question.options) for question in questions}
    for question_id, index in data.answers.items():
        option_count = options_by_id.get(question_id)
        if option_count is None:
            errors.append(
                {
                    "loc": ["answers", question_id],
                    "msg": "Question is not part of this question bank",
                    "type": "unknown_question",
                }
            )
        elif index >= option_count:
            errors.append(
                {
                    "loc": ["answers", question_id],
                    "msg": f"Option index must be less than {option_count}",
                    "type": "option_out_of_range",
                }
            )
    return errors


def _summarize(exc: ValidationError) -> list[dict[str, Any]]:
    return [
        {"loc": [str(part) for part in error["loc"]], "msg": error["msg"], "type": error["type"]}
        for error in exc.errors()
    ]


def _copy(attempt: QuizAttempt) -> QuizAttempt:
    # Frozen dataclass, but the answers dict is still mutable.
    return replace(attempt, answers=dict(attempt.answers))
