from __future__ import annotations

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from course_service.api.dependencies import get_store
from course_service.main import app
from course_service.repos.store import ContentStore, in_memory_store
from course_service.services import token_service

# Ensure repo root is on sys.path so `import course_service` works under pytest.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture
def store() -> ContentStore:
    return in_memory_store()


@pytest.fixture(autouse=True)
def fresh_store(store: ContentStore):
    """Route every request to a store private to this test."""

    async def _override():
        yield store

    app.dependency_overrides[get_store] = _override
    yield
    app.dependency_overrides.pop(get_store, None)


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def mint_token(
    username: str = "test-user",
    roles: list[str] | None = None,
) -> str:
    """Create a valid ES256 JWT for testing."""
    return token_service.create_access_token(sub=username, roles=roles)


def auth(token: str | None) -> dict[str, str]:
    if token is None:
        return {}
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def token() -> str:
    """Learner token (no roles)."""
    return mint_token()


@pytest.fixture
def teacher_token() -> str:
    return mint_token(username="test-teacher", roles=["teacher"])


# ---------------------------------------------------------------------------
# Seeding helpers (go through the API so ordering and validation apply)
# ---------------------------------------------------------------------------


def create_course(client: TestClient, teacher_token: str, **fields) -> dict:
    body = {"title": "Intro to Python", **fields}
    resp = client.post("/api/teacher/courses", json=body, headers=auth(teacher_token))
    assert resp.status_code == 201, resp.text
    return resp.json()


def add_video(
    client: TestClient, teacher_token: str, course_id: str, **fields
) -> dict:
    body = {"title": "Lesson", "url": "https://cdn.example.com/v.mp4", "duration": 90}
    body.update(fields)
    resp = client.post(
        f"/api/teacher/courses/{course_id}/videos",
        json=body,
        headers=auth(teacher_token),
    )
    assert resp.status_code == 201, resp.text
    return resp.json()
