from __future__ import annotations

import datetime


def now_epoch() -> int:
    """Current UTC time as whole epoch seconds, the format every record stores."""
    return int(datetime.datetime.now(datetime.UTC).timestamp())
