from __future__ import annotations

from datetime import timezone

import pytest

from quizbank.core.services.attempt_recorder import (
    AttemptRecorder,
    AttemptValidationError,
    QuizAttemptCreate,
)


def _payload(**overrides):
    payload = {
        "questionBankId": "math-class-5-basic",
        "score": 2,
        "totalQuestions": 3,
        "timeSpentSeconds": 500,
        "answers": {"q1": 1, "q2": 0},
        "userId": None,
    }
    payload.update(overrides)
    return payload


def test_create_assigns_id_and_completion_time(recorder):
    attempt = recorder.create_attempt(_payload())

    assert attempt.id
    assert attempt.completed_at.tzinfo is timezone.utc
    assert attempt.score == 2
    assert attempt.time_spent_seconds == 500
    assert attempt.answers == {"q1": 1, "q2": 0}
    assert recorder.get_attempt(attempt.id) == attempt


def test_accepts_snake_case_and_model_payloads(recorder):
    snake = recorder.create_attempt(
        {
            "question_bank_id": "math-class-5-basic",
            "score": 0,
            "total_questions": 3,
            "time_spent_seconds": 0,
            "answers": {},
        }
    )
    model = recorder.create_attempt(
        QuizAttemptCreate(
            question_bank_id="math-class-5-basic",
            score=1,
            total_questions=3,
            time_spent_seconds=10,
            answers={"q3": 3},
            user_id="u1",
        )
    )
    assert snake.user_id is None
    assert model.user_id == "u1"
    assert recorder.count() == 2


def test_ids_are_unique(recorder):
    ids = {recorder.create_attempt(_payload()).id for _ in range(5)}
    assert len(ids) == 5


@pytest.mark.parametrize(
    "overrides",
    [
        {"score": -1},
        {"score": 4},
        {"totalQuestions": 0},
        {"timeSpentSeconds": -3},
        {"answers": {"q1": -1}},
        {"answers": {"q1": "1"}},
        {"answers": ["q1"]},
        {"score": "2"},
        {"score": True},
        {"questionBankId": ""},
        {"unexpected": 1},
    ],
)
def test_malformed_payloads_are_rejected(recorder, overrides):
    with pytest.raises(AttemptValidationError) as excinfo:
        recorder.create_attempt(_payload(**overrides))
    assert excinfo.value.errors
    assert recorder.count() == 0


@pytest.mark.parametrize("field", ["questionBankId", "score", "totalQuestions", "timeSpentSeconds", "answers"])
def test_missing_required_fields_are_rejected(recorder, field):
    payload = _payload()
    del payload[field]
    with pytest.raises(AttemptValidationError):
        recorder.create_attempt(payload)


def test_non_mapping_payload_is_rejected(recorder):
    with pytest.raises(AttemptValidationError):
        recorder.create_attempt(["not", "a", "mapping"])


def test_unknown_bank_is_rejected_when_catalog_is_known(recorder):
    with pytest.raises(AttemptValidationError):
        recorder.create_attempt(_payload(questionBankId="history-class-1-basic"))


def test_recorder_without_catalog_skips_bank_check():
    recorder = AttemptRecorder()
    attempt = recorder.create_attempt(_payload(questionBankId="anything"))
    assert attempt.question_bank_id == "anything"


def test_stored_attempt_cannot_be_mutated_through_returned_copies(recorder):
    attempt = recorder.create_attempt(_payload())
    attempt.answers["q3"] = 2

    assert recorder.get_attempt(attempt.id).answers == {"q1": 1, "q2": 0}


def test_listing_by_user_and_bank(recorder):
    mine = recorder.create_attempt(_payload(userId="alice"))
    recorder.create_attempt(_payload(userId="bob"))

    assert recorder.list_attempts_by_user("alice") == [mine]
    assert recorder.list_attempts_by_user("carol") == []
    assert len(recorder.list_attempts_for_bank("math-class-5-basic")) == 2


@pytest.mark.parametrize(
    ("overrides", "location"),
    [
        ({"answers": {"not-a-question": 1}}, ["answers", "not-a-question"]),
        ({"answers": {"q1": 4}}, ["answers", "q1"]),
        ({"answers": {"q2": 42}}, ["answers", "q2"]),
        ({"totalQuestions": 2, "score": 1}, ["totalQuestions"]),
    ],
)
def test_answers_must_fit_the_bank(recorder, overrides, location):
    with pytest.raises(AttemptValidationError) as excinfo:
        recorder.create_attempt(_payload(**overrides))

    assert [error["loc"] for error in excinfo.value.errors] == [location]
    assert recorder.count() == 0


def test_answers_for_another_bank_are_rejected(recorder):
    foreign = {"math-class-5-empty-q1": 0, "q1": 1}
    with pytest.raises(AttemptValidationError) as excinfo:
        recorder.create_attempt(_payload(answers=foreign))

    assert excinfo.value.errors[0]["type"] == "unknown_question"


def test_last_option_index_is_accepted(recorder):
    attempt = recorder.create_attempt(_payload(answers={"q3": 3}))
    assert attempt.answers == {"q3": 3}


def test_recorder_without_catalog_skips_answer_checks():
    recorder = AttemptRecorder()
    attempt = recorder.create_attempt(_payload(answers={"elsewhere": 9}, totalQuestions=10))
    assert attempt.answers == {"elsewhere": 9}
