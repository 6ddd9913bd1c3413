"""SQLAlchemy table definitions.

These map to the frozen dataclass domain models in course_service/models/.
The domain models stay as-is; these tables are the persistence layer.
Repos convert between SQLAlchemy rows and domain dataclasses.
"""

from __future__ import annotations

import datetime

from sqlalchemy import (
    Boolean,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import ARRAY, JSONB
from sqlalchemy.orm import Mapped, mapped_column

from course_service.db.engine import Base

# Named so repos can tell an order collision apart from other integrity errors.
SECTION_ORDER_CONSTRAINT = "uq_sections_course_order"
VIDEO_ORDER_CONSTRAINT = "uq_videos_course_order"


# --- Course content (owned by a course, cascade-deleted with it) ---


class CourseRow(Base):
    __tablename__ = "courses"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    instructor: Mapped[str | None] = mapped_column(String(320), nullable=True)
    price: Mapped[float | None] = mapped_column(Float, nullable=True)
    topics: Mapped[list[str]] = mapped_column(
        ARRAY(String), nullable=False, default=[]
    )
    duration: Mapped[str | None] = mapped_column(String(64), nullable=True)
    rating: Mapped[float | None] = mapped_column(Float, nullable=True)
    image: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[int] = mapped_column(Integer, nullable=False)


class SectionRow(Base):
    __tablename__ = "sections"
    __table_args__ = (
        UniqueConstraint("course_id", "order", name=SECTION_ORDER_CONSTRAINT),
    )

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    course_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("courses.id"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    order: Mapped[int] = mapped_column(Integer, nullable=False)


class VideoRow(Base):
    __tablename__ = "videos"
    __table_args__ = (
        UniqueConstraint("course_id", "order", name=VIDEO_ORDER_CONSTRAINT),
    )

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    course_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("courses.id"), nullable=False, index=True
    )
    section_id: Mapped[str | None] = mapped_column(
        String(64), ForeignKey("sections.id"), nullable=True
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(String(1000), nullable=False, default="")
    url: Mapped[str] = mapped_column(Text, nullable=False)
    duration: Mapped[int] = mapped_column(Integer, nullable=False)  # seconds
    resolution: Mapped[str] = mapped_column(
        String(8), nullable=False, default="1080p"
    )  # 720p|1080p|1440p|2160p
    order: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[int] = mapped_column(Integer, nullable=False)


class DeadlineRow(Base):
    __tablename__ = "deadlines"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    course_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("courses.id"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    due_date: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )


# --- Assignments and grading ---


class AssignmentRow(Base):
    __tablename__ = "assignments"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    course_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    # [{"question": str, "options": [str], "correctAnswer": int}, ...]
    questions: Mapped[list[dict]] = mapped_column(JSONB, nullable=False)
    due_date: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    created_at: Mapped[int] = mapped_column(Integer, nullable=False)


class AssignmentSubmissionRow(Base):
    __tablename__ = "assignment_submissions"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    # No FK: submissions outlive a deleted assignment.
    assignment_id: Mapped[str] = mapped_column(String(64), nullable=False)
    user_id: Mapped[str] = mapped_column(String(320), nullable=False, index=True)
    # [{"questionIndex": int | null, "selectedOption": int}, ...]
    answers: Mapped[list[dict]] = mapped_column(JSONB, nullable=False)
    score: Mapped[float] = mapped_column(Float, nullable=False)
    submitted_at: Mapped[int] = mapped_column(Integer, nullable=False)


# --- Learner state ---


class VideoProgressRow(Base):
    __tablename__ = "video_progress"

    user_id: Mapped[str] = mapped_column(String(320), primary_key=True)
    video_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    watched_seconds: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    last_watched: Mapped[int | None] = mapped_column(Integer, nullable=True)


class EnrollmentRow(Base):
    __tablename__ = "enrollments"

    user_id: Mapped[str] = mapped_column(String(320), primary_key=True)
    course_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    status: Mapped[str] = mapped_column(
        String(32), nullable=False, default="active"
    )  # active|dropped
    enrolled_at: Mapped[int] = mapped_column(Integer, nullable=False)
