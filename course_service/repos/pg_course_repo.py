"""PostgreSQL implementations of the course content repos."""

from __future__ import annotations

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from course_service.db.tables import (
    SECTION_ORDER_CONSTRAINT,
    VIDEO_ORDER_CONSTRAINT,
    CourseRow,
    DeadlineRow,
    SectionRow,
    VideoRow,
)
from course_service.models.course import (
    Course,
    Deadline,
    Resolution,
    Section,
    Video,
)
from course_service.services.errors import ConflictError, DuplicateOrderError


class PgCourseRepo:
    """Satisfies the CourseRepo Protocol using PostgreSQL via SQLAlchemy."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, course_id: str) -> Course | None:
        row = await self._session.get(CourseRow, course_id)
        if row is None:
            return None
        return _row_to_course(row)

    async def add(self, course: Course) -> None:
        row = CourseRow(
            id=course.id,
            title=course.title,
            description=course.description,
            instructor=course.instructor,
            price=course.price,
            topics=list(course.topics),
            duration=course.duration,
            rating=course.rating,
            image=course.image,
            created_at=course.created_at,
        )
        try:
            async with self._session.begin_nested():
                self._session.add(row)
        except IntegrityError:
            raise ConflictError("course id already exists") from None

    async def list_all(self) -> list[Course]:
        rows = (await self._session.execute(select(CourseRow))).scalars().all()
        return [_row_to_course(r) for r in rows]

    async def delete(self, course_id: str) -> bool:
        stmt = delete(CourseRow).where(CourseRow.id == course_id)
        result = await self._session.execute(stmt)
        return result.rowcount > 0


class PgSectionRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, section_id: str) -> Section | None:
        row = await self._session.get(SectionRow, section_id)
        if row is None:
            return None
        return _row_to_section(row)

    async def add(self, section: Section) -> None:
        row = SectionRow(
            id=section.id,
            course_id=section.course_id,
            title=section.title,
            order=section.order,
        )
        # SAVEPOINT so a losing writer can retry inside the same transaction.
        try:
            async with self._session.begin_nested():
                self._session.add(row)
        except IntegrityError as e:
            if SECTION_ORDER_CONSTRAINT in str(e.orig):
                raise DuplicateOrderError(
                    f"section order {section.order} already taken"
                ) from e
            raise ConflictError("section id already exists") from e

    async def list_by_course(self, course_id: str) -> list[Section]:
        stmt = (
            select(SectionRow)
            .where(SectionRow.course_id == course_id)
            .order_by(SectionRow.order)
        )
        rows = (await self._session.execute(stmt)).scalars().all()
        return [_row_to_section(r) for r in rows]

    async def count_by_course(self, course_id: str) -> int:
        stmt = (
            select(func.count())
            .select_from(SectionRow)
            .where(SectionRow.course_id == course_id)
        )
        return (await self._session.execute(stmt)).scalar_one()

    async def delete_by_course(self, course_id: str) -> int:
        stmt = delete(SectionRow).where(SectionRow.course_id == course_id)
        return (await self._session.execute(stmt)).rowcount


class PgVideoRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, video_id: str) -> Video | None:
        row = await self._session.get(VideoRow, video_id)
        if row is None:
            return None
        return _row_to_video(row)

    async def add(self, video: Video) -> None:
        row = VideoRow(
            id=video.id,
            course_id=video.course_id,
            section_id=video.section_id,
            title=video.title,
            description=video.description,
            url=video.url,
            duration=video.duration,
            resolution=video.resolution.value,
            order=video.order,
            created_at=video.created_at,
        )
        try:
            async with self._session.begin_nested():
                self._session.add(row)
        except IntegrityError as e:
            if VIDEO_ORDER_CONSTRAINT in str(e.orig):
                raise DuplicateOrderError(
                    f"video order {video.order} already taken"
                ) from e
            raise

    async def list_by_course(
        self, course_id: str, *, sort_by_order: bool = False
    ) -> list[Video]:
        stmt = select(VideoRow).where(VideoRow.course_id == course_id)
        if sort_by_order:
            stmt = stmt.order_by(VideoRow.order)
        else:
            stmt = stmt.order_by(VideoRow.created_at)
        rows = (await self._session.execute(stmt)).scalars().all()
        return [_row_to_video(r) for r in rows]

    async def count_by_course(self, course_id: str) -> int:
        stmt = (
            select(func.count())
            .select_from(VideoRow)
            .where(VideoRow.course_id == course_id)
        )
        return (await self._session.execute(stmt)).scalar_one()

    async def delete_by_course(self, course_id: str) -> int:
        stmt = delete(VideoRow).where(VideoRow.course_id == course_id)
        return (await self._session.execute(stmt)).rowcount


class PgDeadlineRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(self, deadline: Deadline) -> None:
        self._session.add(
            DeadlineRow(
                id=deadline.id,
                course_id=deadline.course_id,
                title=deadline.title,
                description=deadline.description,
                due_date=deadline.due_date,
            )
        )
        await self._session.flush()

    async def list_by_course(self, course_id: str) -> list[Deadline]:
        stmt = (
            select(DeadlineRow)
            .where(DeadlineRow.course_id == course_id)
            .order_by(DeadlineRow.due_date)
        )
        rows = (await self._session.execute(stmt)).scalars().all()
        return [
            Deadline(
                id=r.id,
                course_id=r.course_id,
                title=r.title,
                description=r.description,
                due_date=r.due_date,
            )
            for r in rows
        ]

    async def delete_by_course(self, course_id: str) -> int:
        stmt = delete(DeadlineRow).where(DeadlineRow.course_id == course_id)
        return (await self._session.execute(stmt)).rowcount


def _row_to_course(row: CourseRow) -> Course:
    return Course(
        id=row.id,
        title=row.title,
        description=row.description or "",
        instructor=row.instructor,
        price=row.price,
        topics=tuple(row.topics) if row.topics else (),
        duration=row.duration,
        rating=row.rating,
        image=row.image,
        created_at=row.created_at,
    )


def _row_to_section(row: SectionRow) -> Section:
    return Section(
        id=row.id, course_id=row.course_id, title=row.title, order=row.order
    )


def _row_to_video(row: VideoRow) -> Video:
    return Video(
        id=row.id,
        course_id=row.course_id,
        title=row.title,
        url=row.url,
        duration=row.duration,
        order=row.order,
        resolution=Resolution(row.resolution),
        description=row.description or "",
        section_id=row.section_id,
        created_at=row.created_at,
    )
