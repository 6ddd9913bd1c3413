from __future__ import annotations

from typing import Protocol

from course_service.models.enrollment import Enrollment
from course_service.services.errors import ConflictError


class EnrollmentRepo(Protocol):
    async def get(self, user_id: str, course_id: str) -> Enrollment | None: ...
    async def add(self, enrollment: Enrollment) -> None: ...
    async def list_by_user(self, user_id: str) -> list[Enrollment]: ...
    async def count_by_course(self, course_id: str, *, status: str) -> int: ...


class InMemoryEnrollmentRepo:
    def __init__(self) -> None:
        self._store: dict[tuple[str, str], Enrollment] = {}

    async def get(self, user_id: str, course_id: str) -> Enrollment | None:
        return self._store.get((user_id, course_id))

    async def add(self, enrollment: Enrollment) -> None:
        key = (enrollment.user_id, enrollment.course_id)
        if key in self._store:
            raise ConflictError("already enrolled")
        self._store[key] = enrollment

    async def list_by_user(self, user_id: str) -> list[Enrollment]:
        return [e for e in self._store.values() if e.user_id == user_id]

    async def count_by_course(self, course_id: str, *, status: str) -> int:
        return sum(
            1
            for e in self._store.values()
            if e.course_id == course_id and e.status == status
        )
