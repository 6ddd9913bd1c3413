"""Enrollment endpoints for the calling learner."""

from __future__ import annotations

from fastapi import APIRouter, status

from course_service.api.dependencies import CurrentUser, Store
from course_service.api.schemas import CamelModel
from course_service.models.enrollment import Enrollment
from course_service.services import enrollment_service

router = APIRouter(prefix="/api/enrollments", tags=["enrollments"])


class EnrollmentOut(CamelModel):
    user_id: str
    course_id: str
    status: str
    enrolled_at: int


def _enrollment_out(e: Enrollment) -> EnrollmentOut:
    return EnrollmentOut(
        user_id=e.user_id,
        course_id=e.course_id,
        status=e.status,
        enrolled_at=e.enrolled_at,
    )


@router.get("", response_model=list[EnrollmentOut])
async def list_my_enrollments(
    store: Store, principal: CurrentUser
) -> list[EnrollmentOut]:
    enrollments = await enrollment_service.list_enrollments(store, principal.user_id)
    return [_enrollment_out(e) for e in enrollments]


@router.post(
    "/{course_id}",
    response_model=EnrollmentOut,
    status_code=status.HTTP_201_CREATED,
)
async def enroll_in_course(
    course_id: str, store: Store, principal: CurrentUser
) -> EnrollmentOut:
    enrollment = await enrollment_service.enroll(store, principal.user_id, course_id)
    return _enrollment_out(enrollment)
