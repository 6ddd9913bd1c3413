"""Learner-side video endpoints: watch progress and per-course listing.

  POST /api/videos/{videoId}/progress   overwrite watch state
  GET  /api/videos/{videoId}/progress   watch state, zero default if unwatched
  GET  /api/videos/total-time           sum of watched seconds
  GET  /api/videos/course/{courseId}    videos by order, progress joined
"""

from __future__ import annotations

from fastapi import APIRouter
from pydantic import Field

from course_service.api.dependencies import CurrentUser, Store
from course_service.api.schemas import (
    CamelModel,
    ProgressOut,
    VideoOut,
    progress_out,
    video_fields,
)
from course_service.services import progress_service

router = APIRouter(prefix="/api/videos", tags=["videos"])


class ProgressIn(CamelModel):
    watched_seconds: int = Field(ge=0)
    completed: bool = False


class ProgressRecordOut(ProgressOut):
    user_id: str
    video_id: str


class TotalTimeOut(CamelModel):
    total_seconds: int


class VideoWithProgressOut(VideoOut):
    progress: ProgressOut | None


@router.get("/total-time", response_model=TotalTimeOut)
async def get_total_time(store: Store, principal: CurrentUser) -> TotalTimeOut:
    total = await progress_service.get_total_watched_seconds(store, principal.user_id)
    return TotalTimeOut(total_seconds=total)


@router.get("/course/{course_id}", response_model=list[VideoWithProgressOut])
async def list_course_videos(
    course_id: str, store: Store, principal: CurrentUser
) -> list[VideoWithProgressOut]:
    rows = await progress_service.get_videos_with_progress(
        store, course_id, principal.user_id
    )
    return [
        VideoWithProgressOut(
            **video_fields(r.video),
            progress=progress_out(r.progress) if r.progress else None,
        )
        for r in rows
    ]


@router.post("/{video_id}/progress", response_model=ProgressRecordOut)
async def update_progress(
    video_id: str, body: ProgressIn, store: Store, principal: CurrentUser
) -> ProgressRecordOut:
    p = await progress_service.upsert_progress(
        store, principal.user_id, video_id, body.watched_seconds, body.completed
    )
    return ProgressRecordOut(
        user_id=p.user_id,
        video_id=p.video_id,
        watched_seconds=p.watched_seconds,
        completed=p.completed,
        last_watched=p.last_watched,
    )


@router.get("/{video_id}/progress", response_model=ProgressRecordOut)
async def get_progress(
    video_id: str, store: Store, principal: CurrentUser
) -> ProgressRecordOut:
    p = await progress_service.get_progress(store, principal.user_id, video_id)
    return ProgressRecordOut(
        user_id=p.user_id,
        video_id=p.video_id,
        watched_seconds=p.watched_seconds,
        completed=p.completed,
        last_watched=p.last_watched,
    )
