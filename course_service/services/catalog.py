"""Courses and their owned content: sections, videos, deadlines.

Holds the course aggregator (one composite read of a course with its
sections and videos) and the instructor-side writes that append content
or remove a whole course.
"""

from __future__ import annotations

import datetime
import logging
from dataclasses import dataclass

from course_service.models.course import (
    MAX_VIDEO_SECONDS,
    MIN_VIDEO_SECONDS,
    Course,
    Deadline,
    Resolution,
    Section,
    Video,
)
from course_service.repos.store import ContentStore
from course_service.services.errors import NotFoundError, ValidationError
from course_service.services.ordering import append_ordered

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CourseDetail:
    course: Course
    sections: list[Section]
    videos: list[Video]


def as_utc(value: datetime.datetime) -> datetime.datetime:
    """Treat naive timestamps as UTC so due dates always compare cleanly."""
    if value.tzinfo is None:
        return value.replace(tzinfo=datetime.UTC)
    return value


async def _require_course(store: ContentStore, course_id: str) -> Course:
    course = await store.courses.get(course_id)
    if course is None:
        raise NotFoundError("Course not found")
    return course


# ---------------------------------------------------------------------------
# Courses
# ---------------------------------------------------------------------------


async def list_courses(store: ContentStore) -> list[Course]:
    return await store.courses.list_all()


async def create_course(store: ContentStore, course: Course) -> Course:
    if not course.title.strip():
        raise ValidationError("title must be non-empty")
    await store.courses.add(course)
    logger.info("Created course id=%s instructor=%s", course.id, course.instructor)
    return course


async def get_course_detail(store: ContentStore, course_id: str) -> CourseDetail:
    """Course plus its sections (by order) and videos (listing order)."""
    course = await _require_course(store, course_id)
    sections = await store.sections.list_by_course(course_id)
    videos = await store.videos.list_by_course(course_id)
    return CourseDetail(course=course, sections=sections, videos=videos)


async def delete_course(store: ContentStore, course_id: str) -> None:
    """Remove a course and everything it owns.

    Children go first so a failure part-way never leaves content pointing
    at a missing course.  On Postgres all four deletes share the request
    transaction; the in-memory store has no rollback, so a failure between
    steps leaves the remaining children in place.
    """
    await _require_course(store, course_id)

    videos = await store.videos.delete_by_course(course_id)
    deadlines = await store.deadlines.delete_by_course(course_id)
    sections = await store.sections.delete_by_course(course_id)
    await store.courses.delete(course_id)

    logger.info(
        "Deleted course id=%s videos=%d deadlines=%d sections=%d",
        course_id,
        videos,
        deadlines,
        sections,
    )


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------


async def add_section(
    store: ContentStore,
    course_id: str,
    title: str,
    *,
    section_id: str | None = None,
) -> Section:
    await _require_course(store, course_id)
    if not title.strip():
        raise ValidationError("title must be non-empty")

    section = await append_ordered(
        store,
        course_id,
        "section",
        lambda order: Section.new(
            course_id=course_id, title=title, order=order, id=section_id
        ),
        store.sections.add,
    )
    logger.info(
        "Added section id=%s course=%s order=%d", section.id, course_id, section.order
    )
    return section


async def list_sections(store: ContentStore, course_id: str) -> list[Section]:
    return await store.sections.list_by_course(course_id)


# ---------------------------------------------------------------------------
# Videos
# ---------------------------------------------------------------------------


def validate_video(duration: int, resolution: str) -> Resolution:
    """Check the bounded duration and closed resolution set; return the enum."""
    if isinstance(duration, bool) or not isinstance(duration, int):
        raise ValidationError("duration must be a whole number of seconds")
    if not MIN_VIDEO_SECONDS <= duration <= MAX_VIDEO_SECONDS:
        raise ValidationError(
            "Duration must be between 1 second and 1 hour (3600 seconds)"
        )
    try:
        return Resolution(resolution)
    except ValueError:
        allowed = ", ".join(r.value for r in Resolution)
        raise ValidationError(f"resolution must be one of {allowed}") from None


async def add_video(
    store: ContentStore,
    course_id: str,
    *,
    title: str,
    url: str,
    duration: int,
    resolution: str = Resolution.P1080,
    description: str = "",
    section_id: str | None = None,
) -> Video:
    await _require_course(store, course_id)
    checked_resolution = validate_video(duration, resolution)

    if section_id:
        section = await store.sections.get(section_id)
        if section is None or section.course_id != course_id:
            raise NotFoundError("Section not found")

    video = await append_ordered(
        store,
        course_id,
        "video",
        lambda order: Video.new(
            course_id=course_id,
            title=title,
            url=url,
            duration=duration,
            order=order,
            resolution=checked_resolution,
            description=description,
            section_id=section_id or None,
        ),
        store.videos.add,
    )
    logger.info(
        "Added video id=%s course=%s order=%d duration=%ds",
        video.id,
        course_id,
        video.order,
        video.duration,
    )
    return video


async def list_videos(store: ContentStore, course_id: str) -> list[Video]:
    return await store.videos.list_by_course(course_id, sort_by_order=True)


# ---------------------------------------------------------------------------
# Deadlines
# ---------------------------------------------------------------------------


async def add_deadline(
    store: ContentStore,
    course_id: str,
    *,
    title: str,
    due_date: datetime.datetime,
    description: str = "",
) -> Deadline:
    await _require_course(store, course_id)
    deadline = Deadline.new(
        course_id=course_id,
        title=title,
        due_date=as_utc(due_date),
        description=description,
    )
    await store.deadlines.add(deadline)
    logger.info("Added deadline id=%s course=%s", deadline.id, course_id)
    return deadline


async def list_deadlines(store: ContentStore, course_id: str) -> list[Deadline]:
    return await store.deadlines.list_by_course(course_id)
