from __future__ import annotations

from typing import Protocol

from course_service.models.progress import VideoProgress


class ProgressRepo(Protocol):
    async def get(self, user_id: str, video_id: str) -> VideoProgress | None: ...
    async def save(self, progress: VideoProgress) -> VideoProgress: ...
    async def list_by_user(self, user_id: str) -> list[VideoProgress]: ...
    async def list_for_videos(
        self, user_id: str, video_ids: list[str]
    ) -> list[VideoProgress]: ...


class InMemoryProgressRepo:
    def __init__(self) -> None:
        self._store: dict[tuple[str, str], VideoProgress] = {}

    async def get(self, user_id: str, video_id: str) -> VideoProgress | None:
        return self._store.get((user_id, video_id))

    async def save(self, progress: VideoProgress) -> VideoProgress:
        self._store[(progress.user_id, progress.video_id)] = progress
        return progress

    async def list_by_user(self, user_id: str) -> list[VideoProgress]:
        return [p for p in self._store.values() if p.user_id == user_id]

    async def list_for_videos(
        self, user_id: str, video_ids: list[str]
    ) -> list[VideoProgress]:
        wanted = set(video_ids)
        return [
            p
            for p in self._store.values()
            if p.user_id == user_id and p.video_id in wanted
        ]
