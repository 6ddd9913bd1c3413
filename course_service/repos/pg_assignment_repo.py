"""PostgreSQL implementations of AssignmentRepo and SubmissionRepo."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from course_service.db.tables import AssignmentRow, AssignmentSubmissionRow
from course_service.models.assignment import (
    Answer,
    Assignment,
    AssignmentSubmission,
    Question,
)


class PgAssignmentRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, assignment_id: str) -> Assignment | None:
        row = await self._session.get(AssignmentRow, assignment_id)
        if row is None:
            return None
        return _row_to_assignment(row)

    async def get_many(self, assignment_ids: set[str]) -> dict[str, Assignment]:
        if not assignment_ids:
            return {}
        stmt = select(AssignmentRow).where(AssignmentRow.id.in_(assignment_ids))
        rows = (await self._session.execute(stmt)).scalars().all()
        return {r.id: _row_to_assignment(r) for r in rows}

    async def add(self, assignment: Assignment) -> None:
        self._session.add(
            AssignmentRow(
                id=assignment.id,
                course_id=assignment.course_id,
                title=assignment.title,
                description=assignment.description,
                questions=[
                    {
                        "question": q.question,
                        "options": list(q.options),
                        "correctAnswer": q.correct_answer,
                    }
                    for q in assignment.questions
                ],
                due_date=assignment.due_date,
                created_at=assignment.created_at,
            )
        )
        await self._session.flush()

    async def list_by_course(self, course_id: str) -> list[Assignment]:
        stmt = (
            select(AssignmentRow)
            .where(AssignmentRow.course_id == course_id)
            .order_by(AssignmentRow.created_at)
        )
        rows = (await self._session.execute(stmt)).scalars().all()
        return [_row_to_assignment(r) for r in rows]


class PgSubmissionRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(self, submission: AssignmentSubmission) -> None:
        self._session.add(
            AssignmentSubmissionRow(
                id=submission.id,
                assignment_id=submission.assignment_id,
                user_id=submission.user_id,
                answers=[
                    {
                        "questionIndex": a.question_index,
                        "selectedOption": a.selected_option,
                    }
                    for a in submission.answers
                ],
                score=submission.score,
                submitted_at=submission.submitted_at,
            )
        )
        await self._session.flush()

    async def list_by_user(self, user_id: str) -> list[AssignmentSubmission]:
        stmt = (
            select(AssignmentSubmissionRow)
            .where(AssignmentSubmissionRow.user_id == user_id)
            .order_by(AssignmentSubmissionRow.submitted_at)
        )
        rows = (await self._session.execute(stmt)).scalars().all()
        return [
            AssignmentSubmission(
                id=r.id,
                assignment_id=r.assignment_id,
                user_id=r.user_id,
                answers=tuple(
                    Answer(
                        selected_option=a["selectedOption"],
                        question_index=a.get("questionIndex"),
                    )
                    for a in r.answers
                ),
                score=r.score,
                submitted_at=r.submitted_at,
            )
            for r in rows
        ]


def _row_to_assignment(row: AssignmentRow) -> Assignment:
    return Assignment(
        id=row.id,
        course_id=row.course_id,
        title=row.title,
        description=row.description,
        questions=tuple(
            Question(
                question=q["question"],
                options=tuple(q["options"]),
                correct_answer=q["correctAnswer"],
            )
            for q in row.questions
        ),
        due_date=row.due_date,
        created_at=row.created_at,
    )
