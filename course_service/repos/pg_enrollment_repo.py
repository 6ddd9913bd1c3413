"""PostgreSQL implementation of EnrollmentRepo."""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from course_service.db.tables import EnrollmentRow
from course_service.models.enrollment import Enrollment
from course_service.services.errors import ConflictError


class PgEnrollmentRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, user_id: str, course_id: str) -> Enrollment | None:
        row = await self._session.get(EnrollmentRow, (user_id, course_id))
        if row is None:
            return None
        return _row_to_enrollment(row)

    async def add(self, enrollment: Enrollment) -> None:
        row = EnrollmentRow(
            user_id=enrollment.user_id,
            course_id=enrollment.course_id,
            status=enrollment.status,
            enrolled_at=enrollment.enrolled_at,
        )
        try:
            async with self._session.begin_nested():
                self._session.add(row)
        except IntegrityError:
            raise ConflictError("already enrolled") from None

    async def list_by_user(self, user_id: str) -> list[Enrollment]:
        stmt = select(EnrollmentRow).where(EnrollmentRow.user_id == user_id)
        rows = (await self._session.execute(stmt)).scalars().all()
        return [_row_to_enrollment(r) for r in rows]

    async def count_by_course(self, course_id: str, *, status: str) -> int:
        stmt = (
            select(func.count())
            .select_from(EnrollmentRow)
            .where(
                EnrollmentRow.course_id == course_id,
                EnrollmentRow.status == status,
            )
        )
        return (await self._session.execute(stmt)).scalar_one()


def _row_to_enrollment(row: EnrollmentRow) -> Enrollment:
    return Enrollment(
        user_id=row.user_id,
        course_id=row.course_id,
        status=row.status,
        enrolled_at=row.enrolled_at,
    )
