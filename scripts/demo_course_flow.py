"""Demo: a teacher builds a course, a learner watches and takes the quiz.

Uses the in-memory store, so no database is needed.

Run with:
    python scripts/demo_course_flow.py
"""

from __future__ import annotations

from fastapi.testclient import TestClient

from course_service.main import app
from course_service.services import token_service


def _bearer(sub: str, roles: list[str] | None = None) -> dict[str, str]:
    token = token_service.create_access_token(sub=sub, roles=roles)
    return {"Authorization": f"Bearer {token}"}


def main() -> None:
    client = TestClient(app)
    teacher = _bearer("demo-teacher", ["teacher"])
    learner = _bearer("demo-learner")

    # Step 1: teacher creates a course with two sections
    r = client.post(
        "/api/teacher/courses",
        json={"title": "Python in a Week", "topics": ["python"]},
        headers=teacher,
    )
    course_id = r.json()["id"]
    print(f"1. POST course              → {r.status_code}  id={course_id}")

    for title in ("Basics", "Testing"):
        r = client.post(
            f"/api/teacher/courses/{course_id}/sections",
            json={"title": title},
            headers=teacher,
        )
        order = r.json()["order"]
        print(f"2. POST section {title:<11}→ {r.status_code}  order={order}")

    # Step 3: two videos, positions assigned by the server
    video_ids = []
    for title, seconds in (("Hello", 95), ("Fixtures", 3600)):
        r = client.post(
            f"/api/teacher/courses/{course_id}/videos",
            json={"title": title, "url": f"https://cdn/{title}", "duration": seconds},
            headers=teacher,
        )
        body = r.json()
        video_ids.append(body["id"])
        print(
            f"3. POST video {title:<13}→ {r.status_code}  "
            f"order={body['order']} length={body['formattedDuration']}"
        )

    # Step 4: learner enrolls and watches
    r = client.post(f"/api/enrollments/{course_id}", headers=learner)
    print(f"4. POST enrollment          → {r.status_code}")
    client.post(
        f"/api/videos/{video_ids[0]}/progress",
        json={"watchedSeconds": 95, "completed": True},
        headers=learner,
    )
    r = client.get("/api/videos/total-time", headers=learner)
    print(f"5. GET  total-time          → {r.json()['totalSeconds']}s")

    # Step 6: quiz
    r = client.post(
        "/api/assignments",
        json={
            "courseId": course_id,
            "title": "Basics quiz",
            "description": "",
            "questions": [
                {"question": "len('ab')?", "options": ["1", "2"], "correctAnswer": 1},
                {"question": "Falsy?", "options": ["[]", "[0]"], "correctAnswer": 0},
            ],
            "dueDate": "2026-12-01T00:00:00Z",
        },
        headers=teacher,
    )
    assignment_id = r.json()["id"]
    r = client.post(
        f"/api/assignments/{assignment_id}/submit",
        json={"answers": [{"selectedOption": 1}, {"selectedOption": 1}]},
        headers=learner,
    )
    print(f"6. POST submit              → {r.status_code}  score={r.json()['score']}")

    # Step 7: full course view
    r = client.get(f"/api/courses/{course_id}")
    body = r.json()
    print(
        f"7. GET  course              → {r.status_code}  "
        f"sections={len(body['sections'])} videos={len(body['videos'])}"
    )


if __name__ == "__main__":
    main()
