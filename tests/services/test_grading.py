from __future__ import annotations

import asyncio
import datetime

import pytest

from course_service.models.assignment import Answer, Question
from course_service.models.course import Course
from course_service.repos.store import ContentStore, in_memory_store
from course_service.services import grading
from course_service.services.errors import NotFoundError, ValidationError

_Q = (
    Question(question="a", options=("x", "y"), correct_answer=0),
    Question(question="b", options=("x", "y"), correct_answer=1),
    Question(question="c", options=("x", "y", "z"), correct_answer=2),
    Question(question="d", options=("x",), correct_answer=0),
)

_DUE = datetime.datetime(2026, 12, 1, tzinfo=datetime.UTC)


def _answers(*picks: int) -> list[Answer]:
    return [Answer(selected_option=p, question_index=i) for i, p in enumerate(picks)]


# ---- score_answers ----


def test_score_all_correct() -> None:
    assert grading.score_answers(_Q, _answers(0, 1, 2, 0)) == 100.0


def test_score_three_of_four() -> None:
    assert grading.score_answers(_Q, _answers(0, 1, 2, 5)) == 75.0


def test_score_none_correct() -> None:
    assert grading.score_answers(_Q, _answers(1, 0, 0, 1)) == 0.0


def test_score_no_questions_is_zero() -> None:
    assert grading.score_answers((), _answers(0, 1)) == 0.0


def test_score_short_answers_graded_over_prefix() -> None:
    assert grading.score_answers(_Q, _answers(0)) == 25.0


def test_score_ignores_question_index() -> None:
    # Pairing is positional; the stated index does not reorder answers.
    answers = [
        Answer(selected_option=0, question_index=3),
        Answer(selected_option=1, question_index=2),
    ]
    assert grading.score_answers(_Q, answers) == 50.0


def test_score_within_bounds_for_extra_answers() -> None:
    score = grading.score_answers(_Q, _answers(0, 1, 2, 0, 0, 0, 0))
    assert 0.0 <= score <= 100.0


# ---- validate_questions ----


@pytest.mark.parametrize(
    "question",
    [
        Question(question=" ", options=("x",), correct_answer=0),
        Question(question="q", options=(), correct_answer=0),
        Question(question="q", options=("x", "y"), correct_answer=2),
        Question(question="q", options=("x", "y"), correct_answer=-1),
        Question(question="q", options=("x", "y"), correct_answer=True),
    ],
)
def test_validate_questions_rejects(question: Question) -> None:
    with pytest.raises(ValidationError):
        grading.validate_questions([question])


# ---- service flow ----


def _store_with_assignment() -> tuple[ContentStore, str]:
    store = in_memory_store()

    async def _seed() -> str:
        await store.courses.add(Course.new(id="c1", title="Course"))
        assignment = await grading.create_assignment(
            store,
            course_id="c1",
            title="Quiz",
            description="",
            questions=_Q,
            due_date=datetime.datetime(2026, 12, 1),
        )
        return assignment.id

    return store, asyncio.run(_seed())


def test_create_assignment_normalizes_naive_due_date() -> None:
    store, assignment_id = _store_with_assignment()
    assignment = asyncio.run(store.assignments.get(assignment_id))
    assert assignment is not None
    assert assignment.due_date == _DUE


def test_create_assignment_unknown_course() -> None:
    with pytest.raises(NotFoundError):
        asyncio.run(
            grading.create_assignment(
                in_memory_store(),
                course_id="nope",
                title="Quiz",
                description="",
                questions=_Q,
                due_date=_DUE,
            )
        )


def test_submit_records_score_and_answers() -> None:
    store, assignment_id = _store_with_assignment()
    submission = asyncio.run(
        grading.submit_assignment(store, assignment_id, "u1", _answers(0, 1, 0, 0))
    )
    assert submission.score == 75.0
    assert submission.user_id == "u1"
    assert len(submission.answers) == 4

    rows = asyncio.run(grading.list_submissions_for_user(store, "u1"))
    assert [r.submission.id for r in rows] == [submission.id]
    assert rows[0].assignment is not None


def test_submit_unknown_assignment() -> None:
    with pytest.raises(NotFoundError, match="Assignment not found"):
        asyncio.run(grading.submit_assignment(in_memory_store(), "x", "u1", []))


def test_count_mismatch_logs_warning(caplog: pytest.LogCaptureFixture) -> None:
    store, assignment_id = _store_with_assignment()
    with caplog.at_level("WARNING", logger="course_service.services.grading"):
        asyncio.run(grading.submit_assignment(store, assignment_id, "u1", _answers(0)))
    assert "Answer count mismatch" in caplog.text


def test_resubmission_creates_new_record() -> None:
    store, assignment_id = _store_with_assignment()
    asyncio.run(grading.submit_assignment(store, assignment_id, "u1", _answers(0)))
    asyncio.run(grading.submit_assignment(store, assignment_id, "u1", _answers(0)))
    rows = asyncio.run(grading.list_submissions_for_user(store, "u1"))
    assert len(rows) == 2
    assert rows[0].submission.id != rows[1].submission.id
