"""PostgreSQL implementation of ProgressRepo."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from course_service.db.tables import VideoProgressRow
from course_service.models.progress import VideoProgress


class PgProgressRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, user_id: str, video_id: str) -> VideoProgress | None:
        row = await self._session.get(VideoProgressRow, (user_id, video_id))
        if row is None:
            return None
        return _row_to_progress(row)

    async def save(self, progress: VideoProgress) -> VideoProgress:
        # Single-statement upsert keeps (user_id, video_id) unique even when
        # two first-time updates for the same pair race each other.
        values = {
            "user_id": progress.user_id,
            "video_id": progress.video_id,
            "watched_seconds": progress.watched_seconds,
            "completed": progress.completed,
            "last_watched": progress.last_watched,
        }
        stmt = insert(VideoProgressRow).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[VideoProgressRow.user_id, VideoProgressRow.video_id],
            set_={
                "watched_seconds": stmt.excluded.watched_seconds,
                "completed": stmt.excluded.completed,
                "last_watched": stmt.excluded.last_watched,
            },
        )
        await self._session.execute(stmt)
        return progress

    async def list_by_user(self, user_id: str) -> list[VideoProgress]:
        stmt = select(VideoProgressRow).where(VideoProgressRow.user_id == user_id)
        rows = (await self._session.execute(stmt)).scalars().all()
        return [_row_to_progress(r) for r in rows]

    async def list_for_videos(
        self, user_id: str, video_ids: list[str]
    ) -> list[VideoProgress]:
        if not video_ids:
            return []
        stmt = select(VideoProgressRow).where(
            VideoProgressRow.user_id == user_id,
            VideoProgressRow.video_id.in_(video_ids),
        )
        rows = (await self._session.execute(stmt)).scalars().all()
        return [_row_to_progress(r) for r in rows]


def _row_to_progress(row: VideoProgressRow) -> VideoProgress:
    return VideoProgress(
        user_id=row.user_id,
        video_id=row.video_id,
        watched_seconds=row.watched_seconds,
        completed=row.completed,
        last_watched=row.last_watched,
    )
