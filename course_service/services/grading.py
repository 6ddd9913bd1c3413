"""Assignment creation and multiple-choice grading.

Grading pairs answers with questions by position: answers[i] is compared
against questions[i].correct_answer.  The submitted questionIndex is stored
as given but plays no part in scoring.

Two behaviors are deliberate and worth knowing about:

- Short answer lists are graded over the overlapping prefix only, while the
  denominator stays the full question count, so missing answers count as
  wrong.  Answers beyond the last question are ignored.
- Every submission creates a new record; resubmitting never replaces an
  earlier attempt.
"""

from __future__ import annotations

import datetime
import logging
from collections.abc import Sequence
from dataclasses import dataclass

from course_service.core.metrics import SUBMISSION_SCORES
from course_service.models.assignment import (
    Answer,
    Assignment,
    AssignmentSubmission,
    Question,
)
from course_service.repos.store import ContentStore
from course_service.services.catalog import as_utc
from course_service.services.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SubmissionWithAssignment:
    submission: AssignmentSubmission
    assignment: Assignment | None  # None once the assignment is gone


def score_answers(questions: Sequence[Question], answers: Sequence[Answer]) -> float:
    """Percentage of questions answered correctly, in [0, 100].

    An assignment with no questions scores 0.0.
    """
    if not questions:
        return 0.0
    # zip stops at the shorter sequence, bounding the loop by len(questions)
    correct = sum(
        1
        for question, answer in zip(questions, answers)
        if answer.selected_option == question.correct_answer
    )
    return correct / len(questions) * 100


def validate_questions(questions: Sequence[Question]) -> None:
    for i, q in enumerate(questions):
        if not q.question.strip():
            raise ValidationError(f"question {i} text must be non-empty")
        if not q.options:
            raise ValidationError(f"question {i} must have at least one option")
        if isinstance(q.correct_answer, bool) or not (
            0 <= q.correct_answer < len(q.options)
        ):
            raise ValidationError(
                f"question {i} correctAnswer must index one of its "
                f"{len(q.options)} options"
            )


async def create_assignment(
    store: ContentStore,
    *,
    course_id: str,
    title: str,
    description: str,
    questions: Sequence[Question],
    due_date: datetime.datetime,
) -> Assignment:
    if await store.courses.get(course_id) is None:
        raise NotFoundError("Course not found")
    validate_questions(questions)

    assignment = Assignment.new(
        course_id=course_id,
        title=title,
        description=description,
        questions=tuple(questions),
        due_date=as_utc(due_date),
    )
    await store.assignments.add(assignment)
    logger.info(
        "Created assignment id=%s course=%s questions=%d",
        assignment.id,
        course_id,
        len(assignment.questions),
    )
    return assignment


async def list_assignments(store: ContentStore, course_id: str) -> list[Assignment]:
    return await store.assignments.list_by_course(course_id)


async def submit_assignment(
    store: ContentStore,
    assignment_id: str,
    user_id: str,
    answers: Sequence[Answer],
) -> AssignmentSubmission:
    assignment = await store.assignments.get(assignment_id)
    if assignment is None:
        raise NotFoundError("Assignment not found")

    if len(answers) != len(assignment.questions):
        logger.warning(
            "Answer count mismatch assignment=%s user=%s answers=%d questions=%d",
            assignment_id,
            user_id,
            len(answers),
            len(assignment.questions),
        )

    score = score_answers(assignment.questions, answers)
    submission = AssignmentSubmission.new(
        assignment_id=assignment_id,
        user_id=user_id,
        answers=tuple(answers),
        score=score,
    )
    await store.submissions.add(submission)
    SUBMISSION_SCORES.observe(score)

    logger.info(
        "Graded submission id=%s assignment=%s user=%s score=%.1f",
        submission.id,
        assignment_id,
        user_id,
        score,
    )
    return submission


async def list_submissions_for_user(
    store: ContentStore, user_id: str
) -> list[SubmissionWithAssignment]:
    submissions = await store.submissions.list_by_user(user_id)
    assignments = await store.assignments.get_many(
        {s.assignment_id for s in submissions}
    )
    return [
        SubmissionWithAssignment(
            submission=s, assignment=assignments.get(s.assignment_id)
        )
        for s in submissions
    ]
