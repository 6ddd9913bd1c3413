from __future__ import annotations

import datetime
from dataclasses import dataclass, field
from enum import StrEnum
from uuid import uuid4

from course_service.core.clock import now_epoch

MIN_VIDEO_SECONDS = 1
MAX_VIDEO_SECONDS = 3600  # one hour


class Resolution(StrEnum):
    P720 = "720p"
    P1080 = "1080p"
    P1440 = "1440p"
    P2160 = "2160p"


@dataclass(frozen=True, slots=True)
class Course:
    id: str
    title: str
    description: str = ""
    instructor: str | None = None
    price: float | None = None
    topics: tuple[str, ...] = ()
    duration: str | None = None
    rating: float | None = None
    image: str | None = None
    created_at: int = field(default_factory=now_epoch)

    @staticmethod
    def new(
        *,
        title: str,
        id: str | None = None,
        description: str = "",
        instructor: str | None = None,
        price: float | None = None,
        topics: tuple[str, ...] = (),
        duration: str | None = None,
        rating: float | None = None,
        image: str | None = None,
    ) -> Course:
        return Course(
            id=id or str(uuid4()),
            title=title,
            description=description,
            instructor=instructor,
            price=price,
            topics=topics,
            duration=duration,
            rating=rating,
            image=image,
        )


@dataclass(frozen=True, slots=True)
class Section:
    id: str
    course_id: str
    title: str
    order: int

    @staticmethod
    def new(
        *, course_id: str, title: str, order: int, id: str | None = None
    ) -> Section:
        return Section(
            id=id or str(uuid4()), course_id=course_id, title=title, order=order
        )


@dataclass(frozen=True, slots=True)
class Video:
    id: str
    course_id: str
    title: str
    url: str
    duration: int  # seconds
    order: int
    resolution: Resolution = Resolution.P1080
    description: str = ""
    section_id: str | None = None
    created_at: int = field(default_factory=now_epoch)

    @staticmethod
    def new(
        *,
        course_id: str,
        title: str,
        url: str,
        duration: int,
        order: int,
        resolution: Resolution = Resolution.P1080,
        description: str = "",
        section_id: str | None = None,
    ) -> Video:
        return Video(
            id=str(uuid4()),
            course_id=course_id,
            title=title,
            url=url,
            duration=duration,
            order=order,
            resolution=resolution,
            description=description,
            section_id=section_id,
        )

    def format_duration(self) -> str:
        """Render the duration as MM:SS, or HH:MM:SS when an hour or longer."""
        hours, rest = divmod(self.duration, 3600)
        minutes, seconds = divmod(rest, 60)
        if hours > 0:
            return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
        return f"{minutes:02d}:{seconds:02d}"


@dataclass(frozen=True, slots=True)
class Deadline:
    id: str
    course_id: str
    title: str
    due_date: datetime.datetime
    description: str = ""

    @staticmethod
    def new(
        *,
        course_id: str,
        title: str,
        due_date: datetime.datetime,
        description: str = "",
    ) -> Deadline:
        return Deadline(
            id=str(uuid4()),
            course_id=course_id,
            title=title,
            due_date=due_date,
            description=description,
        )
