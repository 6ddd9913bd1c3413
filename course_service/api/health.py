"""Health, readiness and metrics endpoints.

  /health (liveness): "is this process alive?"  Always 200 while the
    process can answer; the body reports per-dependency status.
  /ready (readiness): "can this instance take traffic right now?"
    503 when a configured database is unreachable, so the load balancer
    stops routing here without restarting the container.
  /metrics: Prometheus text exposition format, scraped by the monitor.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from sqlalchemy.exc import SQLAlchemyError

from course_service.db import engine as db

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


async def _database_status() -> str:
    if db.engine is None:
        return "not_configured"
    try:
        await db.ping()
    except (SQLAlchemyError, OSError) as e:
        logger.warning("Database health check failed: %s", e)
        return "degraded"
    return "ok"


@router.get("/health")
async def health() -> dict:
    checks = {"database": await _database_status()}
    overall = "degraded" if "degraded" in checks.values() else "ok"
    return {"status": overall, "checks": checks}


@router.get("/ready")
async def ready() -> Response:
    if await _database_status() == "degraded":
        return Response(status_code=503)
    return Response(status_code=200)


@router.get("/metrics", include_in_schema=False)
async def metrics() -> Response:
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
