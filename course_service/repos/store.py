"""The content store: one bundle of repos handed to every service call.

Two backings share the same repo Protocols:
- in_memory_store(): dict-backed repos, used when DATABASE_URL is unset
  and in tests
- pg_store(session): PostgreSQL repos bound to one request-scoped session
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from course_service.repos.assignment_repo import (
    AssignmentRepo,
    InMemoryAssignmentRepo,
    InMemorySubmissionRepo,
    SubmissionRepo,
)
from course_service.repos.course_repo import (
    CourseRepo,
    DeadlineRepo,
    InMemoryCourseRepo,
    InMemoryDeadlineRepo,
    InMemorySectionRepo,
    InMemoryVideoRepo,
    SectionRepo,
    VideoRepo,
)
from course_service.repos.enrollment_repo import EnrollmentRepo, InMemoryEnrollmentRepo
from course_service.repos.pg_assignment_repo import PgAssignmentRepo, PgSubmissionRepo
from course_service.repos.pg_course_repo import (
    PgCourseRepo,
    PgDeadlineRepo,
    PgSectionRepo,
    PgVideoRepo,
)
from course_service.repos.pg_enrollment_repo import PgEnrollmentRepo
from course_service.repos.pg_progress_repo import PgProgressRepo
from course_service.repos.progress_repo import InMemoryProgressRepo, ProgressRepo


@dataclass(frozen=True, slots=True)
class ContentStore:
    courses: CourseRepo
    sections: SectionRepo
    videos: VideoRepo
    deadlines: DeadlineRepo
    assignments: AssignmentRepo
    submissions: SubmissionRepo
    progress: ProgressRepo
    enrollments: EnrollmentRepo


def in_memory_store() -> ContentStore:
    return ContentStore(
        courses=InMemoryCourseRepo(),
        sections=InMemorySectionRepo(),
        videos=InMemoryVideoRepo(),
        deadlines=InMemoryDeadlineRepo(),
        assignments=InMemoryAssignmentRepo(),
        submissions=InMemorySubmissionRepo(),
        progress=InMemoryProgressRepo(),
        enrollments=InMemoryEnrollmentRepo(),
    )


def pg_store(session: AsyncSession) -> ContentStore:
    return ContentStore(
        courses=PgCourseRepo(session),
        sections=PgSectionRepo(session),
        videos=PgVideoRepo(session),
        deadlines=PgDeadlineRepo(session),
        assignments=PgAssignmentRepo(session),
        submissions=PgSubmissionRepo(session),
        progress=PgProgressRepo(session),
        enrollments=PgEnrollmentRepo(session),
    )
