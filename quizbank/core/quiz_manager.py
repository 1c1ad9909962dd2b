"""Business logic shared between the API server and in-process presentation layers."""

from __future__ import annotations

from collections.abc import Mapping
import logging
from threading import Lock
from typing import Any

from quizbank.constants.quiz_constants import NO_QUESTIONS_MESSAGE
from quizbank.core.models import Question, QuestionBank, QuizAttempt, Subject
from quizbank.core.services.attempt_recorder import AttemptRecorder, QuizAttemptCreate
from quizbank.core.services.catalog_store import CatalogStore
from quizbank.core.services.quiz_session import EmptyBankError, QuizSession
from quizbank.core.ticker import ThreadTicker, Ticker

logger = logging.getLogger(__name__)


class QuizManager:
    """Facade for quiz services: Catalog, Attempt Recorder and Quiz Session."""

    def __init__(
        self,
        catalog: CatalogStore,
        recorder: AttemptRecorder | None = None,
        ticker: Ticker | None = None,
    ) -> None:
        self._lock = Lock()

        # Services
        self._catalog = catalog
        self._recorder = recorder if recorder is not None else AttemptRecorder(catalog)
        self._ticker = ticker if ticker is not None else ThreadTicker()
        self._session: QuizSession | None = None

    # --- Catalog Delegation ---

    def list_subjects(self) -> tuple[Subject, ...]:
        return self._catalog.list_subjects()

    def get_subject(self, subject_id: str) -> Subject | None:
        return self._catalog.get_subject(subject_id)

    def list_class_levels(self, subject_id: str) -> tuple[str, ...]:
        return self._catalog.list_class_levels(subject_id)

    def list_question_banks(self, subject_id: str, class_level: str) -> tuple[QuestionBank, ...]:
        return self._catalog.list_question_banks(subject_id, class_level)

    def get_question_bank(self, question_bank_id: str) -> QuestionBank | None:
        return self._catalog.get_question_bank(question_bank_id)

    def list_questions(self, question_bank_id: str) -> tuple[Question, ...]:
        return self._catalog.list_questions(question_bank_id)

    # --- Attempt Recorder Delegation ---

    def create_attempt(self, payload: QuizAttemptCreate | Mapping[str, Any]) -> QuizAttempt:
        return self._recorder.create_attempt(payload)

    def get_attempt(self, attempt_id: str) -> QuizAttempt | None:
        return self._recorder.get_attempt(attempt_id)

    def list_attempts_by_user(self, user_id: str) -> list[QuizAttempt]:
        return self._recorder.list_attempts_by_user(user_id)

    # --- Quiz Session ---

    def open_session(self, question_bank_id: str, user_id: str | None = None) -> QuizSession | None:
        """Create an idle session for a bank, discarding any previous one.

        Returns None when the bank does not exist.
        """
        bank = self._catalog.get_question_bank(question_bank_id)
        if bank is None:
            return None
        session = QuizSession(
            question_bank=bank,
            questions=self._catalog.list_questions(question_bank_id),
            recorder=self._recorder,
            ticker=self._ticker,
            user_id=user_id,
        )
        with self._lock:
            previous, self._session = self._session, session
        if previous is not None:
            logger.info("Abandoning session for bank %s", previous.question_bank.id)
            previous.abandon()
        return session

    def start_quiz(self, question_bank_id: str, user_id: str | None = None) -> QuizSession | None:
        """Open a session and start its countdown.

        Raises EmptyBankError for a bank without questions; the current
        session is left in place.
        """
        if self._catalog.has_question_bank(question_bank_id) and not self._catalog.list_questions(question_bank_id):
            logger.info("Question bank %s has no questions.", question_bank_id)
            raise EmptyBankError(NO_QUESTIONS_MESSAGE)
        session = self.open_session(question_bank_id, user_id=user_id)
        if session is not None:
            session.start()
        return session

    def get_current_session(self) -> QuizSession | None:
        with self._lock:
            return self._session

    def close_session(self) -> None:
        with self._lock:
            session, self._session = self._session, None
        if session is not None:
            session.abandon()
