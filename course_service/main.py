from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from course_service.api.assignments import router as assignments_router
from course_service.api.courses import router as courses_router
from course_service.api.deadlines import router as deadlines_router
from course_service.api.enrollments import router as enrollments_router
from course_service.api.errors import register_exception_handlers
from course_service.api.health import router as health_router
from course_service.api.teacher import router as teacher_router
from course_service.api.videos import router as videos_router
from course_service.core.config import SETTINGS
from course_service.core.logging import setup_logging
from course_service.db.engine import lifespan_db
from course_service.middleware.metrics import MetricsMiddleware
from course_service.middleware.request_context import RequestContextMiddleware

# Configure logging before anything else runs.
setup_logging(SETTINGS.log_level, json_format=SETTINGS.log_json)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    async with lifespan_db():
        yield


app = FastAPI(
    title="course-service",
    lifespan=lifespan,
    docs_url="/docs" if SETTINGS.is_dev else None,
    redoc_url="/redoc" if SETTINGS.is_dev else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Last-added runs first: RequestContext → Metrics → CORS → route handler.
app.add_middleware(MetricsMiddleware)
app.add_middleware(RequestContextMiddleware)

register_exception_handlers(app)

app.include_router(health_router)
app.include_router(courses_router)
app.include_router(teacher_router)
app.include_router(assignments_router)
app.include_router(videos_router)
app.include_router(enrollments_router)
app.include_router(deadlines_router)

logger.info(
    "course-service started  env=%s log_level=%s port=%d storage=%s",
    SETTINGS.app_env,
    SETTINGS.log_level,
    SETTINGS.port,
    "postgres" if SETTINGS.database_url else "memory",
)
