"""Tests for assignment authoring, submission and grading."""

from __future__ import annotations

from fastapi.testclient import TestClient

from course_service.repos.store import ContentStore
from tests.conftest import auth, create_course, mint_token

_QUESTIONS = [
    {"question": "2 + 2?", "options": ["3", "4"], "correctAnswer": 1},
    {"question": "Capital?", "options": ["Paris", "Rome"], "correctAnswer": 0},
    {"question": "Python is?", "options": ["snake", "language"], "correctAnswer": 1},
    {"question": "True or false?", "options": ["true", "false"], "correctAnswer": 0},
]


def _create_assignment(
    client: TestClient, teacher_token: str, questions: list[dict] | None = None
) -> dict:
    course = create_course(client, teacher_token)
    resp = client.post(
        "/api/assignments",
        json={
            "courseId": course["id"],
            "title": "Quiz 1",
            "description": "Warm-up",
            "questions": _QUESTIONS if questions is None else questions,
            "dueDate": "2026-12-01T12:00:00Z",
        },
        headers=auth(teacher_token),
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


def _submit(client: TestClient, token: str, assignment_id: str, picks: list[int]):
    return client.post(
        f"/api/assignments/{assignment_id}/submit",
        json={
            "answers": [
                {"questionIndex": i, "selectedOption": pick}
                for i, pick in enumerate(picks)
            ]
        },
        headers=auth(token),
    )


# ---- authoring ----


def test_create_assignment_requires_teacher(client: TestClient, token: str) -> None:
    resp = client.post(
        "/api/assignments",
        json={
            "courseId": "any",
            "title": "Quiz",
            "description": "",
            "questions": [],
            "dueDate": "2026-12-01T12:00:00Z",
        },
        headers=auth(token),
    )
    assert resp.status_code == 403
    assert resp.json() == {"message": "Access denied. Teachers only."}


def test_create_assignment_unknown_course(
    client: TestClient, teacher_token: str
) -> None:
    resp = client.post(
        "/api/assignments",
        json={
            "courseId": "ghost",
            "title": "Quiz",
            "description": "",
            "questions": _QUESTIONS,
            "dueDate": "2026-12-01T12:00:00Z",
        },
        headers=auth(teacher_token),
    )
    assert resp.status_code == 404


def test_create_assignment_rejects_out_of_range_correct_answer(
    client: TestClient, teacher_token: str
) -> None:
    course = create_course(client, teacher_token)
    resp = client.post(
        "/api/assignments",
        json={
            "courseId": course["id"],
            "title": "Quiz",
            "description": "",
            "questions": [{"question": "q", "options": ["a"], "correctAnswer": 3}],
            "dueDate": "2026-12-01T12:00:00Z",
        },
        headers=auth(teacher_token),
    )
    assert resp.status_code == 400


def test_list_assignments_for_course(
    client: TestClient, teacher_token: str, token: str
) -> None:
    assignment = _create_assignment(client, teacher_token)
    resp = client.get(
        f"/api/assignments/course/{assignment['courseId']}", headers=auth(token)
    )
    assert resp.status_code == 200
    body = resp.json()
    assert [a["id"] for a in body] == [assignment["id"]]
    assert body[0]["questions"][0]["correctAnswer"] == 1


# ---- grading ----


def test_submit_three_of_four_correct_scores_75(
    client: TestClient, teacher_token: str, token: str
) -> None:
    assignment = _create_assignment(client, teacher_token)
    resp = _submit(client, token, assignment["id"], [1, 0, 1, 1])
    assert resp.status_code == 201
    body = resp.json()
    assert body["score"] == 75.0
    assert body["submission"]["score"] == 75.0
    assert body["submission"]["userId"] == "test-user"
    assert len(body["submission"]["answers"]) == 4


def test_submit_all_correct_scores_100(
    client: TestClient, teacher_token: str, token: str
) -> None:
    assignment = _create_assignment(client, teacher_token)
    resp = _submit(client, token, assignment["id"], [1, 0, 1, 0])
    assert resp.json()["score"] == 100.0


def test_submit_short_answer_list_counts_missing_as_wrong(
    client: TestClient, teacher_token: str, token: str
) -> None:
    assignment = _create_assignment(client, teacher_token)
    resp = _submit(client, token, assignment["id"], [1, 0])
    assert resp.status_code == 201
    assert resp.json()["score"] == 50.0


def test_submit_extra_answers_are_ignored(
    client: TestClient, teacher_token: str, token: str
) -> None:
    assignment = _create_assignment(client, teacher_token)
    resp = _submit(client, token, assignment["id"], [1, 0, 1, 0, 1, 1])
    assert resp.json()["score"] == 100.0


def test_submit_to_zero_question_assignment_scores_zero(
    client: TestClient, teacher_token: str, token: str
) -> None:
    assignment = _create_assignment(client, teacher_token, questions=[])
    resp = _submit(client, token, assignment["id"], [])
    assert resp.status_code == 201
    assert resp.json()["score"] == 0.0


def test_submit_unknown_assignment(client: TestClient, token: str) -> None:
    resp = _submit(client, token, "ghost", [0])
    assert resp.status_code == 404
    assert resp.json() == {"message": "Assignment not found"}


def test_submit_requires_token(client: TestClient) -> None:
    resp = client.post("/api/assignments/x/submit", json={"answers": []})
    assert resp.status_code == 401


# ---- submissions listing ----


def test_resubmission_keeps_every_attempt(
    client: TestClient, teacher_token: str, token: str
) -> None:
    assignment = _create_assignment(client, teacher_token)
    _submit(client, token, assignment["id"], [0, 0, 0, 0])
    _submit(client, token, assignment["id"], [1, 0, 1, 0])

    resp = client.get("/api/assignments/submissions", headers=auth(token))
    assert resp.status_code == 200
    scores = sorted(s["score"] for s in resp.json())
    assert scores == [50.0, 100.0]
    assert all(s["assignment"]["id"] == assignment["id"] for s in resp.json())


def test_submissions_are_scoped_to_the_caller(
    client: TestClient, teacher_token: str, token: str
) -> None:
    assignment = _create_assignment(client, teacher_token)
    _submit(client, mint_token("someone-else"), assignment["id"], [1, 0, 1, 0])

    resp = client.get("/api/assignments/submissions", headers=auth(token))
    assert resp.json() == []


def test_submission_survives_deleted_assignment(
    client: TestClient, teacher_token: str, token: str, store: ContentStore
) -> None:
    assignment = _create_assignment(client, teacher_token)
    _submit(client, token, assignment["id"], [1, 1, 1, 1])
    store.assignments._by_id.pop(assignment["id"])  # type: ignore[attr-defined]

    resp = client.get("/api/assignments/submissions", headers=auth(token))
    assert resp.status_code == 200
    [row] = resp.json()
    assert row["assignmentId"] == assignment["id"]
    assert row["assignment"] is None
