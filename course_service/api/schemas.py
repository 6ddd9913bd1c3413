"""Request/response bodies shared by several routers.

Field names are snake_case in Python and camelCase on the wire.
Routers build these explicitly from the domain dataclasses.
"""

from __future__ import annotations

import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from course_service.models.assignment import Assignment
from course_service.models.course import Course, Deadline, Resolution, Section, Video
from course_service.models.progress import VideoProgress


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MessageOut(CamelModel):
    message: str


class CourseOut(CamelModel):
    id: str
    title: str
    description: str
    instructor: str | None
    price: float | None
    topics: list[str]
    duration: str | None
    rating: float | None
    image: str | None
    created_at: int


class SectionOut(CamelModel):
    id: str
    course_id: str
    title: str
    order: int


class VideoOut(CamelModel):
    id: str
    course_id: str
    section_id: str | None
    title: str
    description: str
    url: str
    duration: int
    formatted_duration: str
    resolution: Resolution
    order: int
    created_at: int


class DeadlineOut(CamelModel):
    id: str
    course_id: str
    title: str
    description: str
    due_date: datetime.datetime


class QuestionOut(CamelModel):
    question: str
    options: list[str]
    correct_answer: int


class AssignmentOut(CamelModel):
    id: str
    course_id: str
    title: str
    description: str
    questions: list[QuestionOut]
    due_date: datetime.datetime
    created_at: int


class ProgressOut(CamelModel):
    watched_seconds: int
    completed: bool
    last_watched: int | None = None


def course_out(c: Course) -> CourseOut:
    return CourseOut(
        id=c.id,
        title=c.title,
        description=c.description,
        instructor=c.instructor,
        price=c.price,
        topics=list(c.topics),
        duration=c.duration,
        rating=c.rating,
        image=c.image,
        created_at=c.created_at,
    )


def section_out(s: Section) -> SectionOut:
    return SectionOut(id=s.id, course_id=s.course_id, title=s.title, order=s.order)


def video_fields(v: Video) -> dict:
    return {
        "id": v.id,
        "course_id": v.course_id,
        "section_id": v.section_id,
        "title": v.title,
        "description": v.description,
        "url": v.url,
        "duration": v.duration,
        "formatted_duration": v.format_duration(),
        "resolution": v.resolution,
        "order": v.order,
        "created_at": v.created_at,
    }


def video_out(v: Video) -> VideoOut:
    return VideoOut(**video_fields(v))


def deadline_out(d: Deadline) -> DeadlineOut:
    return DeadlineOut(
        id=d.id,
        course_id=d.course_id,
        title=d.title,
        description=d.description,
        due_date=d.due_date,
    )


def assignment_out(a: Assignment) -> AssignmentOut:
    return AssignmentOut(
        id=a.id,
        course_id=a.course_id,
        title=a.title,
        description=a.description,
        questions=[
            QuestionOut(
                question=q.question,
                options=list(q.options),
                correct_answer=q.correct_answer,
            )
            for q in a.questions
        ],
        due_date=a.due_date,
        created_at=a.created_at,
    )


def progress_out(p: VideoProgress) -> ProgressOut:
    return ProgressOut(
        watched_seconds=p.watched_seconds,
        completed=p.completed,
        last_watched=p.last_watched,
    )
