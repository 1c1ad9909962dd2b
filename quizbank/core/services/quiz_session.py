"""Service driving one user's timed run through a question bank."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
import logging
from threading import RLock
from typing import Any, Protocol

from quizbank.constants.quiz_constants import (
    NO_QUESTIONS_MESSAGE,
    SUBMIT_FAILED_MESSAGE,
    TICK_INTERVAL_SECONDS,
)
from quizbank.core import scoring
from quizbank.core.models import (
    Question,
    QuestionBank,
    QuizAttempt,
    QuizResult,
    SessionSnapshot,
    SessionState,
)
from quizbank.core.ticker import TickHandle, Ticker

logger = logging.getLogger(__name__)


class EmptyBankError(RuntimeError):
    """Raised when a session is started for a bank without questions."""


class AttemptSink(Protocol):
    def create_attempt(self, payload: Mapping[str, Any]) -> QuizAttempt: ...


class QuizSession:
    """State machine for a single quiz attempt.

    ``IDLE -> ACTIVE -> SUBMITTING -> COMPLETED``. Only one transition out of
    ``ACTIVE`` into ``SUBMITTING`` can succeed, so the countdown expiring and
    the user pressing submit never record two attempts. Calls made in the
    wrong state are no-ops.
    """

    def __init__(
        self,
        question_bank: QuestionBank,
        questions: Sequence[Question],
        recorder: AttemptSink,
        ticker: Ticker,
        user_id: str | None = None,
        tick_interval_seconds: float = TICK_INTERVAL_SECONDS,
    ) -> None:
        self._bank = question_bank
        self._questions: tuple[Question, ...] = tuple(questions)
        self._questions_by_id: dict[str, Question] = {q.id: q for q in self._questions}
        self._recorder = recorder
        self._ticker = ticker
        self._user_id = user_id
        self._tick_interval = tick_interval_seconds

        self._lock = RLock()
        self._state = SessionState.IDLE
        self._current_index: int = 0
        self._answers: dict[str, int] = {}
        self._time_limit_seconds: int = question_bank.time_limit_seconds
        self._time_remaining_seconds: int = self._time_limit_seconds
        self._tick_handle: TickHandle | None = None
        self._tick_generation: int = 0
        self._last_error: str | None = None
        self._result: QuizResult | None = None

    # --- Lifecycle ---

    def start(self, time_limit_seconds: int | None = None) -> bool:
        """Begin the countdown. Returns False if the session was not idle."""
        with self._lock:
            if self._state is not SessionState.IDLE:
                return False
            if not self._questions:
                logger.info("Question bank %s has no questions.", self._bank.id)
                raise EmptyBankError(NO_QUESTIONS_MESSAGE)
            limit = self._bank.time_limit_seconds if time_limit_seconds is None else time_limit_seconds
            if limit < 0:
                raise ValueError("Time limit must not be negative.")
            self._time_limit_seconds = limit
            self._reset_progress()
            self._state = SessionState.ACTIVE
            self._schedule_ticks()
            logger.info("Started session for bank %s (%ds, %d questions)", self._bank.id, limit, len(self._questions))
            return True

    def tick(self) -> None:
        """Consume one second of the budget; submits when the budget runs out."""
        with self._lock:
            if self._state is not SessionState.ACTIVE:
                return
            if self._time_remaining_seconds > 0:
                self._time_remaining_seconds -= 1
            if self._time_remaining_seconds == 0:
                logger.info("Time is up for bank %s; submitting.", self._bank.id)
                self.submit()

    def submit(self) -> QuizResult | None:
        """Score and record the attempt once. Later calls return None."""
        with self._lock:
            if self._state is not SessionState.ACTIVE:
                return None
            self._state = SessionState.SUBMITTING
            self._cancel_ticks()

            score = scoring.score_answers(self._questions, self._answers)
            total = len(self._questions)
            spent = scoring.time_spent(self._time_limit_seconds, self._time_remaining_seconds)
            payload = {
                "question_bank_id": self._bank.id,
                "score": score,
                "total_questions": total,
                "time_spent_seconds": spent,
                "answers": dict(self._answers),
                "user_id": self._user_id,
            }
            try:
                attempt = self._recorder.create_attempt(payload)
            except Exception:
                logger.exception("Recording attempt for bank %s failed.", self._bank.id)
                self._last_error = SUBMIT_FAILED_MESSAGE
                self._state = SessionState.ACTIVE
                if self._time_remaining_seconds > 0:
                    self._schedule_ticks()
                return None

            percentage = scoring.score_percentage(score, total)
            self._result = QuizResult(
                attempt=attempt,
                score=score,
                total_questions=total,
                percentage=percentage,
                time_spent_seconds=spent,
                performance_message=scoring.performance_message(percentage),
                review=scoring.build_review(self._questions, self._answers),
            )
            self._last_error = None
            self._state = SessionState.COMPLETED
            return self._result

    def retake(self) -> bool:
        """Start over with a full time budget. Recorded attempts are untouched."""
        with self._lock:
            if self._state not in (SessionState.ACTIVE, SessionState.COMPLETED):
                return False
            self._cancel_ticks()
            self._reset_progress()
            self._state = SessionState.ACTIVE
            self._schedule_ticks()
            return True

    def abandon(self) -> None:
        """Discard the in-progress attempt without recording anything."""
        with self._lock:
            self._cancel_ticks()
            self._reset_progress()
            self._state = SessionState.IDLE

    # --- Answers and navigation ---

    def select_answer(self, question_id: str, option_index: int) -> bool:
        question = self._questions_by_id.get(question_id)
        if question is None:
            raise ValueError(f"Question '{question_id}' is not part of this session.")
        if isinstance(option_index, bool) or not 0 <= option_index < len(question.options):
            raise ValueError(f"Option index {option_index} is out of range for question '{question_id}'.")
        with self._lock:
            if self._state is not SessionState.ACTIVE:
                return False
            self._answers[question_id] = option_index
            return True

    def go_to_next(self) -> int:
        return self.go_to(self._current_index + 1)

    def go_to_previous(self) -> int:
        return self.go_to(self._current_index - 1)

    def go_to(self, index: int) -> int:
        with self._lock:
            if self._state is SessionState.ACTIVE and self._questions:
                self._current_index = min(max(index, 0), len(self._questions) - 1)
            return self._current_index

    # --- Views ---

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def question_bank(self) -> QuestionBank:
        return self._bank

    @property
    def questions(self) -> tuple[Question, ...]:
        return self._questions

    @property
    def has_questions(self) -> bool:
        return bool(self._questions)

    @property
    def current_question_index(self) -> int:
        return self._current_index

    @property
    def time_remaining_seconds(self) -> int:
        return self._time_remaining_seconds

    @property
    def time_limit_seconds(self) -> int:
        return self._time_limit_seconds

    @property
    def answers(self) -> dict[str, int]:
        with self._lock:
            return dict(self._answers)

    @property
    def result(self) -> QuizResult | None:
        return self._result

    @property
    def last_error(self) -> str | None:
        return self._last_error

    def snapshot(self) -> SessionSnapshot:
        with self._lock:
            total = len(self._questions)
            current = self._questions[self._current_index] if self._questions else None
            progress = scoring.percent(self._current_index + 1, total) if total else 0
            return SessionSnapshot(
                state=self._state,
                question_bank_id=self._bank.id,
                current_question_index=self._current_index,
                current_question=current,
                total_questions=total,
                answers=dict(self._answers),
                time_limit_seconds=self._time_limit_seconds,
                time_remaining_seconds=self._time_remaining_seconds,
                clock=scoring.format_clock(self._time_remaining_seconds),
                is_low_time=scoring.is_low_time(self._time_remaining_seconds),
                answered_count=len(self._answers),
                progress_percent=progress,
                last_error=self._last_error,
                result=self._result,
            )

    # --- Internals ---

    def _reset_progress(self) -> None:
        self._current_index = 0
        self._answers = {}
        self._time_remaining_seconds = self._time_limit_seconds
        self._last_error = None
        self._result = None

    def _schedule_ticks(self) -> None:
        self._tick_generation += 1
        generation = self._tick_generation
        self._tick_handle = self._ticker.schedule(self._tick_interval, lambda: self._on_tick(generation))

    def _cancel_ticks(self) -> None:
        if self._tick_handle is not None:
            self._tick_handle.cancel()
            self._tick_handle = None
        self._tick_generation += 1

    def _on_tick(self, generation: int) -> None:
        with self._lock:
            # A tick from a cancelled schedule may already be waiting on the lock.
            if generation != self._tick_generation:
                return
            self.tick()
