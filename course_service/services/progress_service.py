"""Per-learner video watch state."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from course_service.core.clock import now_epoch
from course_service.core.metrics import PROGRESS_UPDATES
from course_service.models.course import Video
from course_service.models.progress import VideoProgress
from course_service.repos.store import ContentStore
from course_service.services.errors import ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class VideoWithProgress:
    video: Video
    progress: VideoProgress | None  # None when the learner never watched it


async def upsert_progress(
    store: ContentStore,
    user_id: str,
    video_id: str,
    watched_seconds: int,
    completed: bool,
) -> VideoProgress:
    """Overwrite the stored watch state for (user, video), creating it if absent.

    The new values replace the old ones outright.  A smaller watched_seconds
    than last time moves the stored position backwards.
    """
    if watched_seconds < 0:
        raise ValidationError("watchedSeconds must be non-negative")

    existing = await store.progress.get(user_id, video_id)
    if existing is not None:
        progress = replace(
            existing,
            watched_seconds=watched_seconds,
            completed=completed,
            last_watched=now_epoch(),
        )
        result = "updated"
    else:
        progress = VideoProgress(
            user_id=user_id,
            video_id=video_id,
            watched_seconds=watched_seconds,
            completed=completed,
            last_watched=now_epoch(),
        )
        result = "created"

    saved = await store.progress.save(progress)
    PROGRESS_UPDATES.labels(result=result).inc()
    logger.debug(
        "Progress %s user=%s video=%s watched=%ds completed=%s",
        result,
        user_id,
        video_id,
        watched_seconds,
        completed,
    )
    return saved


async def get_progress(
    store: ContentStore, user_id: str, video_id: str
) -> VideoProgress:
    """Stored watch state, or a zero-value record if the video was never watched."""
    progress = await store.progress.get(user_id, video_id)
    if progress is None:
        return VideoProgress(user_id=user_id, video_id=video_id)
    return progress


async def get_total_watched_seconds(store: ContentStore, user_id: str) -> int:
    records = await store.progress.list_by_user(user_id)
    return sum(p.watched_seconds for p in records)


async def get_videos_with_progress(
    store: ContentStore, course_id: str, user_id: str
) -> list[VideoWithProgress]:
    videos = await store.videos.list_by_course(course_id, sort_by_order=True)
    records = await store.progress.list_for_videos(user_id, [v.id for v in videos])
    by_video = {p.video_id: p for p in records}
    return [VideoWithProgress(video=v, progress=by_video.get(v.id)) for v in videos]
