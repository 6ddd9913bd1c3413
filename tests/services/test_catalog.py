from __future__ import annotations

import asyncio
import datetime

import pytest

from course_service.models.course import Course, Deadline, Resolution, Video
from course_service.repos.store import ContentStore, in_memory_store
from course_service.services import catalog
from course_service.services.errors import NotFoundError, ValidationError


def _store() -> ContentStore:
    store = in_memory_store()
    asyncio.run(store.courses.add(Course.new(id="c1", title="Course")))
    return store


# ---- format_duration ----


@pytest.mark.parametrize(
    ("seconds", "expected"),
    [
        (1, "00:01"),
        (59, "00:59"),
        (60, "01:00"),
        (754, "12:34"),
        (3599, "59:59"),
        (3600, "01:00:00"),
        (3661, "01:01:01"),
    ],
)
def test_format_duration(seconds: int, expected: str) -> None:
    video = Video.new(course_id="c", title="t", url="u", duration=seconds, order=1)
    assert video.format_duration() == expected


# ---- validate_video ----


def test_validate_video_accepts_every_resolution() -> None:
    for r in Resolution:
        assert catalog.validate_video(60, r.value) is r


@pytest.mark.parametrize("duration", [0, -1, 3601])
def test_validate_video_rejects_duration(duration: int) -> None:
    with pytest.raises(ValidationError, match="between 1 second and 1 hour"):
        catalog.validate_video(duration, "720p")


def test_validate_video_rejects_resolution() -> None:
    with pytest.raises(ValidationError, match="resolution must be one of"):
        catalog.validate_video(60, "4k")


# ---- aggregator ----


def test_course_detail_unknown_course() -> None:
    with pytest.raises(NotFoundError, match="Course not found"):
        asyncio.run(catalog.get_course_detail(in_memory_store(), "nope"))


def test_course_detail_collects_children() -> None:
    store = _store()

    async def _run():
        await catalog.add_section(store, "c1", "Intro")
        await catalog.add_video(store, "c1", title="v", url="u", duration=10)
        return await catalog.get_course_detail(store, "c1")

    detail = asyncio.run(_run())
    assert detail.course.id == "c1"
    assert [s.title for s in detail.sections] == ["Intro"]
    assert [v.title for v in detail.videos] == ["v"]


def test_add_video_to_unknown_section() -> None:
    store = _store()
    with pytest.raises(NotFoundError, match="Section not found"):
        asyncio.run(
            catalog.add_video(
                store, "c1", title="v", url="u", duration=10, section_id="nope"
            )
        )


def test_add_section_with_explicit_id() -> None:
    store = _store()
    section = asyncio.run(catalog.add_section(store, "c1", "Intro", section_id="s-1"))
    assert section.id == "s-1"
    assert section.order == 1


# ---- deadlines ----


def test_deadline_naive_due_date_treated_as_utc() -> None:
    store = _store()
    deadline: Deadline = asyncio.run(
        catalog.add_deadline(
            store, "c1", title="Essay", due_date=datetime.datetime(2026, 11, 5, 9)
        )
    )
    assert deadline.due_date.tzinfo is datetime.UTC


# ---- cascade delete ----


def test_delete_course_cascades() -> None:
    store = _store()

    async def _run() -> None:
        await catalog.add_section(store, "c1", "Intro")
        await catalog.add_video(store, "c1", title="v", url="u", duration=10)
        await catalog.add_deadline(
            store,
            "c1",
            title="d",
            due_date=datetime.datetime(2026, 11, 5, tzinfo=datetime.UTC),
        )
        await catalog.delete_course(store, "c1")

    asyncio.run(_run())
    assert asyncio.run(store.courses.get("c1")) is None
    assert asyncio.run(store.sections.count_by_course("c1")) == 0
    assert asyncio.run(store.videos.count_by_course("c1")) == 0
    assert asyncio.run(store.deadlines.list_by_course("c1")) == []


def test_delete_unknown_course() -> None:
    with pytest.raises(NotFoundError):
        asyncio.run(catalog.delete_course(in_memory_store(), "nope"))
