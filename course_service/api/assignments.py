"""Assignment authoring, submission and grading endpoints.

  POST /api/assignments                       create (teacher)
  GET  /api/assignments/course/{courseId}     list for a course
  POST /api/assignments/{assignmentId}/submit grade and record an attempt
  GET  /api/assignments/submissions           caller's attempts, assignment joined
"""

from __future__ import annotations

import datetime

from fastapi import APIRouter, status
from pydantic import Field

from course_service.api.dependencies import CurrentUser, Store, Teacher
from course_service.api.schemas import AssignmentOut, CamelModel, assignment_out
from course_service.models.assignment import Answer, AssignmentSubmission, Question
from course_service.services import grading

router = APIRouter(prefix="/api/assignments", tags=["assignments"])


class QuestionIn(CamelModel):
    question: str = Field(min_length=1)
    options: list[str] = Field(min_length=1)
    correct_answer: int


class AssignmentIn(CamelModel):
    course_id: str
    title: str = Field(min_length=1, max_length=500)
    description: str
    questions: list[QuestionIn]
    due_date: datetime.datetime


class AnswerIn(CamelModel):
    question_index: int | None = None
    selected_option: int


class SubmitIn(CamelModel):
    answers: list[AnswerIn]


class AnswerOut(CamelModel):
    question_index: int | None
    selected_option: int


class SubmissionOut(CamelModel):
    id: str
    assignment_id: str
    user_id: str
    answers: list[AnswerOut]
    score: float
    submitted_at: int


class SubmitOut(CamelModel):
    score: float
    submission: SubmissionOut


class SubmissionWithAssignmentOut(SubmissionOut):
    assignment: AssignmentOut | None


def _submission_fields(s: AssignmentSubmission) -> dict:
    return {
        "id": s.id,
        "assignment_id": s.assignment_id,
        "user_id": s.user_id,
        "answers": [
            AnswerOut(
                question_index=a.question_index, selected_option=a.selected_option
            )
            for a in s.answers
        ],
        "score": s.score,
        "submitted_at": s.submitted_at,
    }


@router.post("", response_model=AssignmentOut, status_code=status.HTTP_201_CREATED)
async def create_assignment(
    body: AssignmentIn, store: Store, _teacher: Teacher
) -> AssignmentOut:
    assignment = await grading.create_assignment(
        store,
        course_id=body.course_id,
        title=body.title,
        description=body.description,
        questions=[
            Question(
                question=q.question,
                options=tuple(q.options),
                correct_answer=q.correct_answer,
            )
            for q in body.questions
        ],
        due_date=body.due_date,
    )
    return assignment_out(assignment)


@router.get("/course/{course_id}", response_model=list[AssignmentOut])
async def list_assignments(
    course_id: str, store: Store, _principal: CurrentUser
) -> list[AssignmentOut]:
    return [assignment_out(a) for a in await grading.list_assignments(store, course_id)]


# Declared before "/{assignment_id}/..." routes so the literal path wins.
@router.get("/submissions", response_model=list[SubmissionWithAssignmentOut])
async def list_my_submissions(
    store: Store, principal: CurrentUser
) -> list[SubmissionWithAssignmentOut]:
    rows = await grading.list_submissions_for_user(store, principal.user_id)
    return [
        SubmissionWithAssignmentOut(
            **_submission_fields(r.submission),
            assignment=assignment_out(r.assignment) if r.assignment else None,
        )
        for r in rows
    ]


@router.post(
    "/{assignment_id}/submit",
    response_model=SubmitOut,
    status_code=status.HTTP_201_CREATED,
)
async def submit_assignment(
    assignment_id: str, body: SubmitIn, store: Store, principal: CurrentUser
) -> SubmitOut:
    submission = await grading.submit_assignment(
        store,
        assignment_id,
        principal.user_id,
        [
            Answer(selected_option=a.selected_option, question_index=a.question_index)
            for a in body.answers
        ],
    )
    return SubmitOut(
        score=submission.score,
        submission=SubmissionOut(**_submission_fields(submission)),
    )
