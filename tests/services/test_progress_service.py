from __future__ import annotations

import asyncio

import pytest

from course_service.models.course import Course
from course_service.repos.store import in_memory_store
from course_service.services import catalog, progress_service
from course_service.services.errors import ValidationError


def test_get_progress_zero_default() -> None:
    p = asyncio.run(progress_service.get_progress(in_memory_store(), "u1", "v1"))
    assert (p.user_id, p.video_id) == ("u1", "v1")
    assert p.watched_seconds == 0
    assert p.completed is False
    assert p.last_watched is None


def test_upsert_then_get_returns_same_values() -> None:
    store = in_memory_store()
    saved = asyncio.run(progress_service.upsert_progress(store, "u1", "v1", 42, True))
    loaded = asyncio.run(progress_service.get_progress(store, "u1", "v1"))
    assert loaded == saved
    assert loaded.watched_seconds == 42
    assert loaded.completed is True


def test_upsert_overwrites_including_regression() -> None:
    store = in_memory_store()
    asyncio.run(progress_service.upsert_progress(store, "u1", "v1", 300, True))
    asyncio.run(progress_service.upsert_progress(store, "u1", "v1", 10, False))
    loaded = asyncio.run(progress_service.get_progress(store, "u1", "v1"))
    assert loaded.watched_seconds == 10
    assert loaded.completed is False


def test_upsert_keeps_one_record_per_pair() -> None:
    store = in_memory_store()
    for seconds in (1, 2, 3):
        asyncio.run(progress_service.upsert_progress(store, "u1", "v1", seconds, False))
    assert len(asyncio.run(store.progress.list_by_user("u1"))) == 1


def test_upsert_rejects_negative() -> None:
    with pytest.raises(ValidationError):
        asyncio.run(
            progress_service.upsert_progress(in_memory_store(), "u1", "v1", -1, False)
        )


def test_total_watched_seconds() -> None:
    store = in_memory_store()
    asyncio.run(progress_service.upsert_progress(store, "u1", "v1", 60, False))
    asyncio.run(progress_service.upsert_progress(store, "u1", "v2", 15, True))
    asyncio.run(progress_service.upsert_progress(store, "u2", "v1", 999, True))
    assert asyncio.run(progress_service.get_total_watched_seconds(store, "u1")) == 75
    assert asyncio.run(progress_service.get_total_watched_seconds(store, "u3")) == 0


def test_videos_with_progress_ordered_and_joined() -> None:
    store = in_memory_store()

    async def _run():
        await store.courses.add(Course.new(id="c1", title="Course"))
        first = await catalog.add_video(store, "c1", title="1", url="u", duration=60)
        second = await catalog.add_video(store, "c1", title="2", url="u", duration=60)
        await progress_service.upsert_progress(store, "u1", second.id, 30, False)
        return first, second, await progress_service.get_videos_with_progress(
            store, "c1", "u1"
        )

    first, second, rows = asyncio.run(_run())
    assert [r.video.id for r in rows] == [first.id, second.id]
    assert rows[0].progress is None
    assert rows[1].progress is not None
    assert rows[1].progress.watched_seconds == 30
