"""Next-position assignment for sections and videos appended to a course.

The position is count(existing records in the course) + 1.  Counting and
inserting are two separate store calls, so two concurrent appends can both
compute the same position.  The store rejects the second insert through a
unique (course_id, order) key, and append_ordered() retries the loser with
a fresh count, up to SETTINGS.order_retry_limit attempts.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Literal, TypeVar

from course_service.core.config import SETTINGS
from course_service.core.metrics import ORDER_COLLISIONS
from course_service.repos.store import ContentStore
from course_service.services.errors import ConflictError, DuplicateOrderError

logger = logging.getLogger(__name__)

OrderedKind = Literal["section", "video"]

T = TypeVar("T")


async def next_order(store: ContentStore, course_id: str, kind: OrderedKind) -> int:
    if kind == "section":
        count = await store.sections.count_by_course(course_id)
    else:
        count = await store.videos.count_by_course(course_id)
    return count + 1


async def append_ordered(
    store: ContentStore,
    course_id: str,
    kind: OrderedKind,
    build: Callable[[int], T],
    insert: Callable[[T], Awaitable[None]],
    *,
    max_attempts: int | None = None,
) -> T:
    """Build a record at the next free position and insert it.

    `build` receives the computed order and returns the record; `insert`
    persists it and raises DuplicateOrderError if the position was taken
    in the meantime.
    """
    attempts = max_attempts if max_attempts is not None else SETTINGS.order_retry_limit
    for attempt in range(1, attempts + 1):
        order = await next_order(store, course_id, kind)
        record = build(order)
        try:
            await insert(record)
        except DuplicateOrderError:
            ORDER_COLLISIONS.labels(kind=kind).inc()
            logger.warning(
                "Order collision course=%s kind=%s order=%d attempt=%d/%d",
                course_id,
                kind,
                order,
                attempt,
                attempts,
            )
            continue
        return record

    raise ConflictError(
        f"could not assign a {kind} position after {attempts} attempts"
    )
