"""FastAPI server exposing the catalog queries and the attempt command."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import Body, Depends, FastAPI, HTTPException, Query
import uvicorn

from quizbank.constants.about import APP_ABOUT_TEXT, APP_NAME, APP_VERSION
from quizbank.constants.network_constants import API_LOG_LEVEL, DEFAULT_HOST, DEFAULT_PORT
from quizbank.core.quiz_manager import QuizManager
from quizbank.core.services.attempt_recorder import AttemptValidationError
from quizbank.server.schemas import QuestionBankOut, QuestionOut, QuizAttemptOut, SubjectOut

logger = logging.getLogger(__name__)


def _get_quiz_manager_dependency(quiz_manager: QuizManager):
    def dependency() -> QuizManager:
        return quiz_manager

    return dependency


def create_api_app(quiz_manager: QuizManager) -> FastAPI:
    """Create a FastAPI application wired to the provided quiz manager."""
    app = FastAPI(title=f"{APP_NAME} API", version=APP_VERSION, description=APP_ABOUT_TEXT)
    quiz_manager_dep = _get_quiz_manager_dependency(quiz_manager)

    @app.get("/healthz", include_in_schema=False)
    def health() -> dict[str, bool]:
        return {"ok": True}

    @app.get("/api/subjects", response_model=list[SubjectOut])
    def list_subjects(manager: QuizManager = Depends(quiz_manager_dep)) -> list[SubjectOut]:
        return [SubjectOut.from_domain(subject) for subject in manager.list_subjects()]

    @app.get("/api/subjects/{subject_id}", response_model=SubjectOut)
    def get_subject(subject_id: str, manager: QuizManager = Depends(quiz_manager_dep)) -> SubjectOut:
        subject = manager.get_subject(subject_id)
        if subject is None:
            raise HTTPException(status_code=404, detail="Subject not found")
        return SubjectOut.from_domain(subject)

    @app.get("/api/subjects/{subject_id}/class-levels", response_model=list[str])
    def list_class_levels(subject_id: str, manager: QuizManager = Depends(quiz_manager_dep)) -> list[str]:
        return list(manager.list_class_levels(subject_id))

    @app.get("/api/question-banks", response_model=list[QuestionBankOut])
    def list_question_banks(
        subject_id: str | None = Query(default=None, alias="subjectId"),
        class_level: str | None = Query(default=None, alias="classLevel"),
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> list[QuestionBankOut]:
        if not subject_id or not class_level:
            raise HTTPException(status_code=400, detail="subjectId and classLevel are required")
        return [QuestionBankOut.from_domain(bank) for bank in manager.list_question_banks(subject_id, class_level)]

    @app.get("/api/question-banks/{question_bank_id}", response_model=QuestionBankOut)
    def get_question_bank(question_bank_id: str, manager: QuizManager = Depends(quiz_manager_dep)) -> QuestionBankOut:
        bank = manager.get_question_bank(question_bank_id)
        if bank is None:
            raise HTTPException(status_code=404, detail="Question bank not found")
        return QuestionBankOut.from_domain(bank)

    @app.get("/api/questions/{question_bank_id}", response_model=list[QuestionOut])
    def list_questions(question_bank_id: str, manager: QuizManager = Depends(quiz_manager_dep)) -> list[QuestionOut]:
        return [QuestionOut.from_domain(question) for question in manager.list_questions(question_bank_id)]

    @app.post("/api/quiz-attempts", response_model=QuizAttemptOut, status_code=201)
    def create_quiz_attempt(
        payload: dict[str, Any] = Body(...),
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> QuizAttemptOut:
        try:
            attempt = manager.create_attempt(payload)
        except AttemptValidationError as exc:
            logger.info("Rejected quiz attempt: %s", exc)
            raise HTTPException(
                status_code=422,
                detail={"message": str(exc), "errors": exc.errors},
            ) from exc
        return QuizAttemptOut.from_domain(attempt)

    @app.get("/api/quiz-attempts", response_model=list[QuizAttemptOut])
    def list_quiz_attempts(
        user_id: str | None = Query(default=None, alias="userId"),
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> list[QuizAttemptOut]:
        if not user_id:
            raise HTTPException(status_code=400, detail="userId is required")
        return [QuizAttemptOut.from_domain(attempt) for attempt in manager.list_attempts_by_user(user_id)]

    @app.get("/api/quiz-attempts/{attempt_id}", response_model=QuizAttemptOut)
    def get_quiz_attempt(attempt_id: str, manager: QuizManager = Depends(quiz_manager_dep)) -> QuizAttemptOut:
        attempt = manager.get_attempt(attempt_id)
        if attempt is None:
            raise HTTPException(status_code=404, detail="Quiz attempt not found")
        return QuizAttemptOut.from_domain(attempt)

    return app


def run_api_server(
    quiz_manager: QuizManager,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
) -> None:
    """Serve the API until interrupted."""
    app = create_api_app(quiz_manager)
    config = uvicorn.Config(app=app, host=host, port=port, log_level=API_LOG_LEVEL)
    server = uvicorn.Server(config)
    server.run()
