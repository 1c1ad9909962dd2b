"""Service holding the read-only quiz catalog: subjects, banks and questions."""

from __future__ import annotations

from collections.abc import Iterable

from quizbank.constants.quiz_constants import MIN_OPTIONS_PER_QUESTION
from quizbank.core.models import Question, QuestionBank, Subject


class CatalogError(ValueError):
    """Raised when reference data handed to the store is inconsistent."""


class CatalogStore:
    """Indexed, read-only lookups over the reference data.

    Indexes are built once here; nothing mutates them afterwards.
    """

    def __init__(
        self,
        subjects: Iterable[Subject],
        question_banks: Iterable[QuestionBank],
        questions: Iterable[Question],
    ) -> None:
        self._subjects: dict[str, Subject] = {}
        self._banks: dict[str, QuestionBank] = {}
        self._banks_by_subject_class: dict[tuple[str, str], list[QuestionBank]] = {}
        self._class_levels: dict[str, list[str]] = {}
        self._questions_by_bank: dict[str, list[Question]] = {}
        self._question_ids: set[str] = set()

        for subject in subjects:
            self._add_subject(subject)
        for bank in question_banks:
            self._add_bank(bank)
        for question in questions:
            self._add_question(question)

    # --- Queries ---

    def list_subjects(self) -> tuple[Subject, ...]:
        return tuple(self._subjects.values())

    def get_subject(self, subject_id: str) -> Subject | None:
        return self._subjects.get(subject_id)

    def list_class_levels(self, subject_id: str) -> tuple[str, ...]:
        return tuple(self._class_levels.get(subject_id, ()))

    def list_question_banks(self, subject_id: str, class_level: str) -> tuple[QuestionBank, ...]:
        return tuple(self._banks_by_subject_class.get((subject_id, class_level), ()))

    def get_question_bank(self, question_bank_id: str) -> QuestionBank | None:
        return self._banks.get(question_bank_id)

    def list_questions(self, question_bank_id: str) -> tuple[Question, ...]:
        return tuple(self._questions_by_bank.get(question_bank_id, ()))

    def has_question_bank(self, question_bank_id: str) -> bool:
        return question_bank_id in self._banks

    # --- Index construction ---

    def _add_subject(self, subject: Subject) -> None:
        if subject.id in self._subjects:
            raise CatalogError(f"Duplicate subject id '{subject.id}'.")
        self._subjects[subject.id] = subject

    def _add_bank(self, bank: QuestionBank) -> None:
        if bank.id in self._banks:
            raise CatalogError(f"Duplicate question bank id '{bank.id}'.")
        if bank.subject_id not in self._subjects:
            raise CatalogError(f"Question bank '{bank.id}' references unknown subject '{bank.subject_id}'.")
        if bank.time_limit_minutes <= 0:
            raise CatalogError(f"Question bank '{bank.id}' must have a positive time limit.")
        self._banks[bank.id] = bank
        self._banks_by_subject_class.setdefault((bank.subject_id, bank.class_level), []).append(bank)
        levels = self._class_levels.setdefault(bank.subject_id, [])
        if bank.class_level not in levels:
            levels.append(bank.class_level)

    def _add_question(self, question: Question) -> None:
        if question.id in self._question_ids:
            raise CatalogError(f"Duplicate question id '{question.id}'.")
        if question.question_bank_id not in self._banks:
            raise CatalogError(
                f"Question '{question.id}' references unknown question bank '{question.question_bank_id}'."
            )
        self._validate_question(question)
        self._question_ids.add(question.id)
        self._questions_by_bank.setdefault(question.question_bank_id, []).append(question)

    @staticmethod
    def _validate_question(question: Question) -> None:
        if not question.text.strip():
            raise CatalogError(f"Question '{question.id}' has no text.")
        if len(question.options) < MIN_OPTIONS_PER_QUESTION:
            raise CatalogError(f"Question '{question.id}' needs at least {MIN_OPTIONS_PER_QUESTION} options.")
        if any(not option.strip() for option in question.options):
            raise CatalogError(f"Question '{question.id}' has an empty option.")
        if not 0 <= question.correct_answer < len(question.options):
            raise CatalogError(f"Question '{question.id}' has an out-of-range correct answer.")
