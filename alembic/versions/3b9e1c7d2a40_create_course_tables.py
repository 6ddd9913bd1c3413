"""create course tables

Revision ID: 3b9e1c7d2a40
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3b9e1c7d2a40"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "courses",
        sa.Column("id", sa.String(length=64), primary_key=True),
        sa.Column("title", sa.String(length=500), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("instructor", sa.String(length=320), nullable=True),
        sa.Column("price", sa.Float(), nullable=True),
        sa.Column(
            "topics",
            postgresql.ARRAY(sa.String()),
            nullable=False,
            server_default="{}",
        ),
        sa.Column("duration", sa.String(length=64), nullable=True),
        sa.Column("rating", sa.Float(), nullable=True),
        sa.Column("image", sa.Text(), nullable=True),
        sa.Column("created_at", sa.Integer(), nullable=False),
    )

    op.create_table(
        "sections",
        sa.Column("id", sa.String(length=64), primary_key=True),
        sa.Column(
            "course_id",
            sa.String(length=64),
            sa.ForeignKey("courses.id"),
            nullable=False,
        ),
        sa.Column("title", sa.String(length=500), nullable=False),
        sa.Column("order", sa.Integer(), nullable=False),
        sa.UniqueConstraint("course_id", "order", name="uq_sections_course_order"),
    )
    op.create_index("ix_sections_course_id", "sections", ["course_id"])

    op.create_table(
        "videos",
        sa.Column("id", sa.String(length=64), primary_key=True),
        sa.Column(
            "course_id",
            sa.String(length=64),
            sa.ForeignKey("courses.id"),
            nullable=False,
        ),
        sa.Column(
            "section_id",
            sa.String(length=64),
            sa.ForeignKey("sections.id"),
            nullable=True,
        ),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column(
            "description", sa.String(length=1000), nullable=False, server_default=""
        ),
        sa.Column("url", sa.Text(), nullable=False),
        sa.Column("duration", sa.Integer(), nullable=False),
        sa.Column(
            "resolution", sa.String(length=8), nullable=False, server_default="1080p"
        ),
        sa.Column("order", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.Integer(), nullable=False),
        sa.UniqueConstraint("course_id", "order", name="uq_videos_course_order"),
    )
    op.create_index("ix_videos_course_id", "videos", ["course_id"])

    op.create_table(
        "deadlines",
        sa.Column("id", sa.String(length=64), primary_key=True),
        sa.Column(
            "course_id",
            sa.String(length=64),
            sa.ForeignKey("courses.id"),
            nullable=False,
        ),
        sa.Column("title", sa.String(length=500), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("due_date", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_deadlines_course_id", "deadlines", ["course_id"])

    op.create_table(
        "assignments",
        sa.Column("id", sa.String(length=64), primary_key=True),
        sa.Column("course_id", sa.String(length=64), nullable=False),
        sa.Column("title", sa.String(length=500), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("questions", postgresql.JSONB(), nullable=False),
        sa.Column("due_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_at", sa.Integer(), nullable=False),
    )
    op.create_index("ix_assignments_course_id", "assignments", ["course_id"])

    op.create_table(
        "assignment_submissions",
        sa.Column("id", sa.String(length=64), primary_key=True),
        sa.Column("assignment_id", sa.String(length=64), nullable=False),
        sa.Column("user_id", sa.String(length=320), nullable=False),
        sa.Column("answers", postgresql.JSONB(), nullable=False),
        sa.Column("score", sa.Float(), nullable=False),
        sa.Column("submitted_at", sa.Integer(), nullable=False),
    )
    op.create_index(
        "ix_assignment_submissions_user_id", "assignment_submissions", ["user_id"]
    )

    op.create_table(
        "video_progress",
        sa.Column("user_id", sa.String(length=320), primary_key=True),
        sa.Column("video_id", sa.String(length=64), primary_key=True),
        sa.Column("watched_seconds", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "completed", sa.Boolean(), nullable=False, server_default=sa.false()
        ),
        sa.Column("last_watched", sa.Integer(), nullable=True),
    )

    op.create_table(
        "enrollments",
        sa.Column("user_id", sa.String(length=320), primary_key=True),
        sa.Column("course_id", sa.String(length=64), primary_key=True),
        sa.Column(
            "status", sa.String(length=32), nullable=False, server_default="active"
        ),
        sa.Column("enrolled_at", sa.Integer(), nullable=False),
    )


def downgrade() -> None:
    op.drop_table("enrollments")
    op.drop_table("video_progress")
    op.drop_index(
        "ix_assignment_submissions_user_id", table_name="assignment_submissions"
    )
    op.drop_table("assignment_submissions")
    op.drop_index("ix_assignments_course_id", table_name="assignments")
    op.drop_table("assignments")
    op.drop_index("ix_deadlines_course_id", table_name="deadlines")
    op.drop_table("deadlines")
    op.drop_index("ix_videos_course_id", table_name="videos")
    op.drop_table("videos")
    op.drop_index("ix_sections_course_id", table_name="sections")
    op.drop_table("sections")
    op.drop_table("courses")
