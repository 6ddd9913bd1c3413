from __future__ import annotations

import logging

from course_service.core.clock import now_epoch
from course_service.models.enrollment import Enrollment
from course_service.repos.store import ContentStore
from course_service.services.errors import ConflictError, NotFoundError

logger = logging.getLogger(__name__)

ACTIVE = "active"


async def enroll(store: ContentStore, user_id: str, course_id: str) -> Enrollment:
    if await store.courses.get(course_id) is None:
        raise NotFoundError("Course not found")

    if await store.enrollments.get(user_id, course_id) is not None:
        logger.warning(
            "Rejected duplicate enrollment user=%s course=%s", user_id, course_id
        )
        raise ConflictError("already enrolled")

    enrollment = Enrollment(
        user_id=user_id,
        course_id=course_id,
        status=ACTIVE,
        enrolled_at=now_epoch(),
    )
    await store.enrollments.add(enrollment)
    logger.info("Enrolled user=%s course=%s", user_id, course_id)
    return enrollment


async def list_enrollments(store: ContentStore, user_id: str) -> list[Enrollment]:
    return await store.enrollments.list_by_user(user_id)


async def count_active_enrollments(store: ContentStore, course_id: str) -> int:
    return await store.enrollments.count_by_course(course_id, status=ACTIVE)
