"""Instructor endpoints. Every route requires the `teacher` role.

Sections and videos get their `order` from the ordering service at
append time; the caller never supplies it.
"""

from __future__ import annotations

import datetime
import logging

from fastapi import APIRouter, status
from pydantic import Field

from course_service.api.courses import CourseIn
from course_service.api.dependencies import Store, Teacher
from course_service.api.schemas import (
    CamelModel,
    CourseOut,
    DeadlineOut,
    MessageOut,
    SectionOut,
    VideoOut,
    course_out,
    deadline_out,
    section_out,
    video_out,
)
from course_service.models.course import MAX_VIDEO_SECONDS, Resolution
from course_service.services import catalog

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/teacher", tags=["teacher"])


class SectionIn(CamelModel):
    id: str | None = Field(default=None, min_length=1, max_length=64)
    title: str = Field(min_length=1, max_length=500)


class VideoIn(CamelModel):
    title: str = Field(min_length=1, max_length=200)
    description: str = Field(default="", max_length=1000)
    url: str = Field(min_length=1)
    duration: int = Field(ge=1, le=MAX_VIDEO_SECONDS)
    resolution: Resolution = Resolution.P1080
    section_id: str | None = None


class DeadlineIn(CamelModel):
    title: str = Field(min_length=1, max_length=500)
    description: str = ""
    due_date: datetime.datetime


# ---------------------------------------------------------------------------
# Courses
# ---------------------------------------------------------------------------


@router.get("/courses", response_model=list[CourseOut])
async def list_courses(store: Store, _teacher: Teacher) -> list[CourseOut]:
    return [course_out(c) for c in await catalog.list_courses(store)]


@router.post(
    "/courses", response_model=CourseOut, status_code=status.HTTP_201_CREATED
)
async def create_course(body: CourseIn, store: Store, teacher: Teacher) -> CourseOut:
    course = await catalog.create_course(
        store, body.to_course(instructor=teacher.user_id)
    )
    return course_out(course)


@router.delete("/courses/{course_id}", response_model=MessageOut)
async def delete_course(course_id: str, store: Store, teacher: Teacher) -> MessageOut:
    await catalog.delete_course(store, course_id)
    logger.info("Course %s deleted by user=%s", course_id, teacher.user_id)
    return MessageOut(message="Course deleted successfully")


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------


@router.post(
    "/courses/{course_id}/sections",
    response_model=SectionOut,
    status_code=status.HTTP_201_CREATED,
)
async def add_section(
    course_id: str, body: SectionIn, store: Store, _teacher: Teacher
) -> SectionOut:
    section = await catalog.add_section(
        store, course_id, body.title, section_id=body.id
    )
    return section_out(section)


@router.get("/courses/{course_id}/sections", response_model=list[SectionOut])
async def list_sections(
    course_id: str, store: Store, _teacher: Teacher
) -> list[SectionOut]:
    return [section_out(s) for s in await catalog.list_sections(store, course_id)]


# ---------------------------------------------------------------------------
# Videos
# ---------------------------------------------------------------------------


@router.post(
    "/courses/{course_id}/videos",
    response_model=VideoOut,
    status_code=status.HTTP_201_CREATED,
)
async def add_video(
    course_id: str, body: VideoIn, store: Store, _teacher: Teacher
) -> VideoOut:
    video = await catalog.add_video(
        store,
        course_id,
        title=body.title,
        url=body.url,
        duration=body.duration,
        resolution=body.resolution,
        description=body.description,
        section_id=body.section_id,
    )
    return video_out(video)


@router.get("/courses/{course_id}/videos", response_model=list[VideoOut])
async def list_videos(
    course_id: str, store: Store, _teacher: Teacher
) -> list[VideoOut]:
    return [video_out(v) for v in await catalog.list_videos(store, course_id)]


# ---------------------------------------------------------------------------
# Deadlines
# ---------------------------------------------------------------------------


@router.post(
    "/courses/{course_id}/deadlines",
    response_model=DeadlineOut,
    status_code=status.HTTP_201_CREATED,
)
async def add_deadline(
    course_id: str, body: DeadlineIn, store: Store, _teacher: Teacher
) -> DeadlineOut:
    deadline = await catalog.add_deadline(
        store,
        course_id,
        title=body.title,
        due_date=body.due_date,
        description=body.description,
    )
    return deadline_out(deadline)


@router.get("/courses/{course_id}/deadlines", response_model=list[DeadlineOut])
async def list_deadlines(
    course_id: str, store: Store, _teacher: Teacher
) -> list[DeadlineOut]:
    return [deadline_out(d) for d in await catalog.list_deadlines(store, course_id)]
