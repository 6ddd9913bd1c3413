from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Enrollment:
    user_id: str
    course_id: str
    enrolled_at: int
    status: str = "active"  # active|dropped
