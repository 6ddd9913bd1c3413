from __future__ import annotations

from typing import Protocol

from course_service.models.assignment import Assignment, AssignmentSubmission


class AssignmentRepo(Protocol):
    async def get(self, assignment_id: str) -> Assignment | None: ...
    async def get_many(self, assignment_ids: set[str]) -> dict[str, Assignment]: ...
    async def add(self, assignment: Assignment) -> None: ...
    async def list_by_course(self, course_id: str) -> list[Assignment]: ...


class SubmissionRepo(Protocol):
    async def add(self, submission: AssignmentSubmission) -> None: ...
    async def list_by_user(self, user_id: str) -> list[AssignmentSubmission]: ...


class InMemoryAssignmentRepo:
    def __init__(self) -> None:
        self._by_id: dict[str, Assignment] = {}

    async def get(self, assignment_id: str) -> Assignment | None:
        return self._by_id.get(assignment_id)

    async def get_many(self, assignment_ids: set[str]) -> dict[str, Assignment]:
        return {i: self._by_id[i] for i in assignment_ids if i in self._by_id}

    async def add(self, assignment: Assignment) -> None:
        self._by_id[assignment.id] = assignment

    async def list_by_course(self, course_id: str) -> list[Assignment]:
        return [a for a in self._by_id.values() if a.course_id == course_id]


class InMemorySubmissionRepo:
    def __init__(self) -> None:
        self._store: list[AssignmentSubmission] = []

    async def add(self, submission: AssignmentSubmission) -> None:
        self._store.append(submission)

    async def list_by_user(self, user_id: str) -> list[AssignmentSubmission]:
        return [s for s in self._store if s.user_id == user_id]
