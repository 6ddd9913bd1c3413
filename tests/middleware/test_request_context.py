from __future__ import annotations

import logging
import uuid

import pytest
from fastapi.testclient import TestClient

from course_service.main import app
from course_service.services import progress_service
from tests.conftest import auth, mint_token


def test_request_id_generated_when_not_provided(client: TestClient) -> None:
    resp = client.get("/health")
    uuid.UUID(resp.headers["x-request-id"])


def test_request_id_echoed_when_provided(client: TestClient) -> None:
    resp = client.get("/api/courses", headers={"X-Request-ID": "trace-abc"})
    assert resp.headers.get("x-request-id") == "trace-abc"


def test_request_id_present_on_error_responses(client: TestClient) -> None:
    resp = client.get("/api/courses/missing")
    assert resp.status_code == 404
    assert resp.headers.get("x-request-id") is not None


def test_access_line_logged_with_request_id(
    client: TestClient, caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level(logging.INFO):
        client.get("/api/courses", headers={"X-Request-ID": "trace-log"})
    access = [
        r
        for r in caplog.records
        if r.name == "course_service.middleware.request_context"
    ]
    assert access
    assert access[-1].request_id == "trace-log"  # type: ignore[attr-defined]
    assert "GET /api/courses" in access[-1].getMessage()


def test_unhandled_error_keeps_request_id(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    async def _explode(_store, _user_id):
        raise RuntimeError("disk on fire")

    monkeypatch.setattr(progress_service, "get_total_watched_seconds", _explode)
    client = TestClient(app, raise_server_exceptions=False)

    with caplog.at_level(logging.INFO):
        resp = client.get(
            "/api/videos/total-time",
            headers={"X-Request-ID": "trace-500", **auth(mint_token())},
        )

    assert resp.status_code == 500
    assert resp.json() == {"message": "Internal server error"}
    assert resp.headers.get("x-request-id") == "trace-500"

    errors = [r for r in caplog.records if r.levelno == logging.ERROR]
    assert errors
    assert errors[-1].exc_info is not None
    assert errors[-1].request_id == "trace-500"  # type: ignore[attr-defined]

    access = [
        r
        for r in caplog.records
        if r.name == "course_service.middleware.request_context"
        and r.levelno == logging.INFO
    ]
    assert access[-1].status_code == 500  # type: ignore[attr-defined]
