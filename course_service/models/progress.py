from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class VideoProgress:
    """Watch state for one (user, video) pair.

    The single mutable source of truth for a learner's position in a video.
    Updates replace the record wholesale; values are never merged or maxed.
    """

    user_id: str
    video_id: str
    watched_seconds: int = 0
    completed: bool = False
    last_watched: int | None = None
