"""Public course catalog endpoints.

  GET  /api/courses                              all courses
  GET  /api/courses/{id}                         course + sections + videos
  POST /api/courses                              create (teacher, explicit id)
  GET  /api/courses/{courseId}/enrollments/count active enrollments
"""

from __future__ import annotations

from fastapi import APIRouter, status
from pydantic import Field

from course_service.api.dependencies import Store, Teacher
from course_service.api.schemas import (
    CamelModel,
    CourseOut,
    SectionOut,
    VideoOut,
    course_out,
    section_out,
    video_out,
)
from course_service.models.course import Course
from course_service.services import catalog, enrollment_service

router = APIRouter(prefix="/api/courses", tags=["courses"])


class CourseIn(CamelModel):
    id: str | None = Field(default=None, min_length=1, max_length=64)
    title: str = Field(min_length=1, max_length=500)
    description: str = ""
    instructor: str | None = None
    price: float | None = Field(default=None, ge=0)
    topics: list[str] = []
    duration: str | None = None
    rating: float | None = Field(default=None, ge=0, le=5)
    image: str | None = None

    def to_course(self, *, instructor: str | None = None) -> Course:
        return Course.new(
            id=self.id,
            title=self.title,
            description=self.description,
            instructor=instructor if instructor is not None else self.instructor,
            price=self.price,
            topics=tuple(self.topics),
            duration=self.duration,
            rating=self.rating,
            image=self.image,
        )


class CourseDetailOut(CamelModel):
    course: CourseOut
    sections: list[SectionOut]
    videos: list[VideoOut]


class CountOut(CamelModel):
    count: int


@router.get("", response_model=list[CourseOut])
async def list_courses(store: Store) -> list[CourseOut]:
    return [course_out(c) for c in await catalog.list_courses(store)]


@router.post("", response_model=CourseOut, status_code=status.HTTP_201_CREATED)
async def create_course(body: CourseIn, store: Store, _teacher: Teacher) -> CourseOut:
    course = await catalog.create_course(store, body.to_course())
    return course_out(course)


@router.get("/{course_id}", response_model=CourseDetailOut)
async def get_course(course_id: str, store: Store) -> CourseDetailOut:
    detail = await catalog.get_course_detail(store, course_id)
    return CourseDetailOut(
        course=course_out(detail.course),
        sections=[section_out(s) for s in detail.sections],
        videos=[video_out(v) for v in detail.videos],
    )


@router.get("/{course_id}/enrollments/count", response_model=CountOut)
async def count_enrollments(course_id: str, store: Store) -> CountOut:
    count = await enrollment_service.count_active_enrollments(store, course_id)
    return CountOut(count=count)
