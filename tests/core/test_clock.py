from __future__ import annotations

import datetime

from course_service.core.clock import now_epoch
from course_service.models.course import Course


def test_now_epoch_is_whole_utc_seconds() -> None:
    before = int(datetime.datetime.now(datetime.UTC).timestamp())
    value = now_epoch()
    after = int(datetime.datetime.now(datetime.UTC).timestamp())
    assert isinstance(value, int)
    assert before <= value <= after


def test_records_default_created_at_from_clock() -> None:
    before = now_epoch()
    course = Course.new(title="Clocked")
    assert before <= course.created_at <= now_epoch()
