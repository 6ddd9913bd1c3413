from __future__ import annotations

from typing import Protocol

from course_service.models.course import Course, Deadline, Section, Video
from course_service.services.errors import ConflictError, DuplicateOrderError


class CourseRepo(Protocol):
    async def get(self, course_id: str) -> Course | None: ...
    async def add(self, course: Course) -> None: ...
    async def list_all(self) -> list[Course]: ...
    async def delete(self, course_id: str) -> bool: ...


class SectionRepo(Protocol):
    async def get(self, section_id: str) -> Section | None: ...
    async def add(self, section: Section) -> None: ...
    async def list_by_course(self, course_id: str) -> list[Section]: ...
    async def count_by_course(self, course_id: str) -> int: ...
    async def delete_by_course(self, course_id: str) -> int: ...


class VideoRepo(Protocol):
    async def get(self, video_id: str) -> Video | None: ...
    async def add(self, video: Video) -> None: ...
    async def list_by_course(
        self, course_id: str, *, sort_by_order: bool = False
    ) -> list[Video]: ...
    async def count_by_course(self, course_id: str) -> int: ...
    async def delete_by_course(self, course_id: str) -> int: ...


class DeadlineRepo(Protocol):
    async def add(self, deadline: Deadline) -> None: ...
    async def list_by_course(self, course_id: str) -> list[Deadline]: ...
    async def delete_by_course(self, course_id: str) -> int: ...


class InMemoryCourseRepo:
    def __init__(self) -> None:
        self._by_id: dict[str, Course] = {}

    async def get(self, course_id: str) -> Course | None:
        return self._by_id.get(course_id)

    async def add(self, course: Course) -> None:
        if course.id in self._by_id:
            raise ConflictError("course id already exists")
        self._by_id[course.id] = course

    async def list_all(self) -> list[Course]:
        return list(self._by_id.values())

    async def delete(self, course_id: str) -> bool:
        return self._by_id.pop(course_id, None) is not None


class InMemorySectionRepo:
    def __init__(self) -> None:
        self._by_id: dict[str, Section] = {}

    async def get(self, section_id: str) -> Section | None:
        return self._by_id.get(section_id)

    async def add(self, section: Section) -> None:
        if section.id in self._by_id:
            raise ConflictError("section id already exists")
        # Mirrors the unique (course_id, order) index on the Postgres table.
        for existing in self._by_id.values():
            if (
                existing.course_id == section.course_id
                and existing.order == section.order
            ):
                raise DuplicateOrderError(
                    f"section order {section.order} already taken"
                )
        self._by_id[section.id] = section

    async def list_by_course(self, course_id: str) -> list[Section]:
        sections = [s for s in self._by_id.values() if s.course_id == course_id]
        return sorted(sections, key=lambda s: s.order)

    async def count_by_course(self, course_id: str) -> int:
        return sum(1 for s in self._by_id.values() if s.course_id == course_id)

    async def delete_by_course(self, course_id: str) -> int:
        doomed = [k for k, s in self._by_id.items() if s.course_id == course_id]
        for key in doomed:
            del self._by_id[key]
        return len(doomed)


class InMemoryVideoRepo:
    def __init__(self) -> None:
        # dict preserves insertion order, which is the unsorted listing order
        self._by_id: dict[str, Video] = {}

    async def get(self, video_id: str) -> Video | None:
        return self._by_id.get(video_id)

    async def add(self, video: Video) -> None:
        for existing in self._by_id.values():
            if existing.course_id == video.course_id and existing.order == video.order:
                raise DuplicateOrderError(f"video order {video.order} already taken")
        self._by_id[video.id] = video

    async def list_by_course(
        self, course_id: str, *, sort_by_order: bool = False
    ) -> list[Video]:
        videos = [v for v in self._by_id.values() if v.course_id == course_id]
        if sort_by_order:
            videos.sort(key=lambda v: v.order)
        return videos

    async def count_by_course(self, course_id: str) -> int:
        return sum(1 for v in self._by_id.values() if v.course_id == course_id)

    async def delete_by_course(self, course_id: str) -> int:
        doomed = [k for k, v in self._by_id.items() if v.course_id == course_id]
        for key in doomed:
            del self._by_id[key]
        return len(doomed)


class InMemoryDeadlineRepo:
    def __init__(self) -> None:
        self._store: list[Deadline] = []

    async def add(self, deadline: Deadline) -> None:
        self._store.append(deadline)

    async def list_by_course(self, course_id: str) -> list[Deadline]:
        deadlines = [d for d in self._store if d.course_id == course_id]
        return sorted(deadlines, key=lambda d: d.due_date)

    async def delete_by_course(self, course_id: str) -> int:
        before = len(self._store)
        self._store[:] = [d for d in self._store if d.course_id != course_id]
        return before - len(self._store)
