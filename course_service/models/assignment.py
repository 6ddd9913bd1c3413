from __future__ import annotations

import datetime
from dataclasses import dataclass, field
from uuid import uuid4

from course_service.core.clock import now_epoch


@dataclass(frozen=True, slots=True)
class Question:
    question: str
    options: tuple[str, ...]
    correct_answer: int  # index into options


@dataclass(frozen=True, slots=True)
class Assignment:
    """A multiple-choice quiz scoped to a course. Immutable once created."""

    id: str
    course_id: str
    title: str
    description: str
    questions: tuple[Question, ...]
    due_date: datetime.datetime
    created_at: int = field(default_factory=now_epoch)

    @staticmethod
    def new(
        *,
        course_id: str,
        title: str,
        description: str,
        questions: tuple[Question, ...],
        due_date: datetime.datetime,
    ) -> Assignment:
        return Assignment(
            id=str(uuid4()),
            course_id=course_id,
            title=title,
            description=description,
            questions=questions,
            due_date=due_date,
        )


@dataclass(frozen=True, slots=True)
class Answer:
    selected_option: int
    question_index: int | None = None


@dataclass(frozen=True, slots=True)
class AssignmentSubmission:
    """One learner's graded attempt. Score is derived, never caller-supplied."""

    id: str
    assignment_id: str
    user_id: str
    answers: tuple[Answer, ...]
    score: float
    submitted_at: int

    @staticmethod
    def new(
        *,
        assignment_id: str,
        user_id: str,
        answers: tuple[Answer, ...],
        score: float,
        submitted_at: int | None = None,
    ) -> AssignmentSubmission:
        return AssignmentSubmission(
            id=str(uuid4()),
            assignment_id=assignment_id,
            user_id=user_id,
            answers=answers,
            score=score,
            submitted_at=submitted_at if submitted_at is not None else now_epoch(),
        )
