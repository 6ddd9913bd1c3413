from __future__ import annotations

from fastapi import APIRouter

from course_service.api.dependencies import CurrentUser, Store
from course_service.api.schemas import DeadlineOut, deadline_out
from course_service.services import catalog

router = APIRouter(prefix="/api/deadlines", tags=["deadlines"])


@router.get("/course/{course_id}", response_model=list[DeadlineOut])
async def list_course_deadlines(
    course_id: str, store: Store, _principal: CurrentUser
) -> list[DeadlineOut]:
    """Upcoming work for a course, earliest due date first."""
    return [deadline_out(d) for d in await catalog.list_deadlines(store, course_id)]
