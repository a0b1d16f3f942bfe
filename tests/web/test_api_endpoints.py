from __future__ import annotations

from datetime import timedelta

import pytest

from class_attendance.container import build_container
from class_attendance.main import create_app

CLASS_ID = "61d3f3cc-748e-49d2-8212-6a3fc97136c8"


@pytest.fixture
def container(seeded_store, fixed_now):
    return build_container(store=seeded_store, clock=lambda: fixed_now)


@pytest.fixture
def client(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(container)
    app.config["TESTING"] = True
    return app.test_client()


@pytest.fixture
def signed_in(client):
    resp = client.post("/api/auth/login", json={"username": "teacher", "password": "teacher123"})
    assert resp.status_code == 200
    return client


def _submission(**overrides):
    body = {
        "class_id": CLASS_ID,
        "subject_name": "Physics",
        "date": "2025-03-12",
        "marks": [
            {"student_id": "stu-1", "status": "Present"},
            {"student_id": "stu-2", "status": "Absent"},
            {"student_id": "stu-10", "status": "Present"},
        ],
    }
    body.update(overrides)
    return body


def test_health_is_public(client):
    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.get_json() == {"status": "ok"}


@pytest.mark.parametrize(
    "method,path",
    [
        ("get", "/api/classes"),
        ("get", "/api/auth/me"),
        ("post", "/api/attendance"),
        ("get", f"/api/analytics/{CLASS_ID}"),
        ("get", "/api/dashboard"),
        ("get", "/api/reports"),
    ],
)
def test_endpoints_require_sign_in(client, method, path):
    resp = getattr(client, method)(path)

    assert resp.status_code == 401
    assert resp.get_json()["success"] is False


def test_login_failure_and_session_lifecycle(client):
    bad = client.post("/api/auth/login", json={"username": "teacher", "password": "nope"})
    assert bad.status_code == 401
    assert bad.get_json()["message"] == "Invalid username or password"

    ok = client.post("/api/auth/login", json={"username": "teacher", "password": "teacher123"})
    assert ok.get_json()["user"] == {"id": "user-teacher", "name": "Teacher Demo", "role": "teacher"}
    assert client.get("/api/auth/me").get_json()["user"]["id"] == "user-teacher"

    client.post("/api/auth/logout")
    assert client.get("/api/auth/me").status_code == 401


def test_class_subject_and_student_lists(signed_in):
    classes = signed_in.get("/api/classes").get_json()["classes"]
    subjects = signed_in.get(f"/api/classes/{CLASS_ID}/subjects").get_json()["subjects"]
    students = signed_in.get(f"/api/classes/{CLASS_ID}/students").get_json()["students"]

    assert [c["name"] for c in classes] == ["SE MME", "TE MME"]
    assert [s["subject_name"] for s in subjects] == ["Engineering Mathematics III", "Physics"]
    assert [s["roll_no"] for s in students] == ["1", "2", "10"]


def test_submit_then_cooldown_then_force(signed_in, seeded_store):
    first = signed_in.post("/api/attendance", json=_submission())
    assert first.status_code == 200
    assert first.get_json()["outcome"] == "COMMITTED"
    assert first.get_json()["recorded_count"] == 3
    assert {r["recorded_by"] for r in seeded_store.tables["attendance"]} == {"user-teacher"}

    cooldown = signed_in.get(f"/api/attendance/{CLASS_ID}/cooldown?subject=Physics").get_json()
    assert cooldown["can_submit"] is False
    assert cooldown["last_submitted_at"] is not None

    blocked = signed_in.post("/api/attendance", json=_submission())
    assert blocked.status_code == 409
    assert blocked.get_json()["outcome"] == "COOLDOWN_ACTIVE"
    assert blocked.get_json()["can_force"] is True
    assert len(seeded_store.tables["attendance"]) == 3

    forced = signed_in.post("/api/attendance", json=_submission(force=True))
    assert forced.status_code == 200
    assert len(seeded_store.tables["attendance"]) == 6
    assert seeded_store.insert_calls == 2


def test_submission_input_errors(signed_in, seeded_store):
    empty = signed_in.post("/api/attendance", json=_submission(marks=[]))
    assert empty.status_code == 400

    bad_status = signed_in.post("/api/attendance", json=_submission(marks=[{"student_id": "stu-1", "status": "Late"}]))
    assert bad_status.status_code == 400

    bad_date = signed_in.post("/api/attendance", json=_submission(date="12/03/2025"))
    assert bad_date.status_code == 400

    no_subject = signed_in.get(f"/api/attendance/{CLASS_ID}/cooldown")
    assert no_subject.status_code == 400

    assert seeded_store.insert_calls == 0


def test_store_outage_on_submit_is_503(signed_in, seeded_store):
    seeded_store.fail_writes = True

    resp = signed_in.post("/api/attendance", json=_submission())

    assert resp.status_code == 503
    assert resp.get_json()["success"] is False
    assert seeded_store.tables["attendance"] == []


def test_attendance_sheet_by_date(signed_in):
    signed_in.post("/api/attendance", json=_submission())

    resp = signed_in.get(f"/api/attendance/{CLASS_ID}/2025-03-12")

    assert resp.status_code == 200
    assert [r["name"] for r in resp.get_json()["records"]] == ["Aarav Patil", "Diya Kulkarni", "Rohan Deshmukh"]
    assert signed_in.get(f"/api/attendance/{CLASS_ID}/yesterday").status_code == 400


def test_analytics_bundle_and_periods(signed_in, seeded_store, attendance_row, fixed_now):
    today = fixed_now.date()
    seeded_store.tables["attendance"] = [attendance_row(f"stu-{i}", "Present", today) for i in range(7)] + [
        attendance_row(f"stu-a{i}", "Absent", today) for i in range(3)
    ]

    bundle = signed_in.get(f"/api/analytics/{CLASS_ID}?subject=Physics").get_json()["analytics"]
    assert bundle["today"]["present_percentage"] == 70

    week = signed_in.get(f"/api/analytics/{CLASS_ID}/week?subject=Physics").get_json()
    assert [b["label"] for b in week["buckets"]][0] == "Sunday"
    assert {b["label"]: b["total"] for b in week["buckets"]}["Wednesday"] == 10

    runs = signed_in.get(f"/api/analytics/{CLASS_ID}/consecutive_absences?subject=Physics").get_json()
    assert [b["label"] for b in runs["buckets"]] == ["1 Day", "2 Days", "3 Days", "4+ Days"]

    custom = signed_in.get(f"/api/analytics/{CLASS_ID}/week?subject=Physics&start=2025-01-01&end=2025-01-31").get_json()
    assert sum(b["total"] for b in custom["buckets"]) == 0

    assert signed_in.get(f"/api/analytics/{CLASS_ID}/decade").status_code == 400
    assert signed_in.get(f"/api/analytics/{CLASS_ID}/week?start=2025-01-01").status_code == 400


def test_analytics_survive_store_outage(signed_in, seeded_store):
    seeded_store.fail_reads = True

    resp = signed_in.get(f"/api/analytics/{CLASS_ID}/time_of_day?subject=Physics")

    assert resp.status_code == 200
    assert [b["total"] for b in resp.get_json()["buckets"]] == [0, 0, 0]


def test_dashboard_counts(signed_in):
    data = signed_in.get("/api/dashboard").get_json()

    assert data["total_students"] == 4
    assert data["total_teachers"] == 1


def test_report_json_pagination_and_csv(signed_in, seeded_store, attendance_row, fixed_now):
    today = fixed_now.date()
    seeded_store.tables["attendance"] = [attendance_row("stu-1", "Present", today) for _ in range(12)]

    page = signed_in.get(f"/api/reports?class_id={CLASS_ID}&period=today&compact=1").get_json()
    assert page["total"] == 12
    assert len(page["rows"]) == 10
    assert page["caption"] == "Showing 1 to 10 of 12 entries"
    assert page["total_days"] == 1
    assert page["summary"][0]["present"] == 12

    page2 = signed_in.get(f"/api/reports?class_id={CLASS_ID}&period=today&compact=1&page=2").get_json()
    assert len(page2["rows"]) == 2

    full = signed_in.get(f"/api/reports?class_id={CLASS_ID}&period=weekly").get_json()
    assert full["per_page"] == 35
    assert (full["start"], full["end"]) == ("2025-03-10", "2025-03-16")

    csv_resp = signed_in.get(f"/api/reports.csv?class_id={CLASS_ID}&period=today")
    assert csv_resp.status_code == 200
    assert csv_resp.mimetype == "text/csv"
    assert "attendance_report_20250312_20250312.csv" in csv_resp.headers["Content-Disposition"]
    text = csv_resp.data.decode("utf-8-sig").splitlines()
    assert text[0] == "roll_no,name,class_section,date,subject,status,created_at"
    assert len(text) == 13


def test_report_argument_errors(signed_in):
    assert signed_in.get("/api/reports?period=today").status_code == 400
    assert signed_in.get(f"/api/reports?class_id={CLASS_ID}&period=fortnight").status_code == 400
    assert signed_in.get(f"/api/reports?class_id={CLASS_ID}&period=custom&start=2025-03-01").status_code == 400
    assert signed_in.get(f"/api/reports?class_id={CLASS_ID}&page=0").status_code == 400


def test_deactivated_account_loses_its_session(signed_in, seeded_store):
    seeded_store.tables["users"][1]["is_active"] = False

    resp = signed_in.get("/api/auth/me")

    assert resp.status_code == 401
    assert signed_in.get("/api/classes").status_code == 401


@pytest.mark.parametrize(
    "path",
    [
        "/api/analytics/no-such-class",
        f"/api/analytics/{CLASS_ID}?subject=Chemistry",
        f"/api/analytics/{CLASS_ID}?subject=Heat%20Treatment",
    ],
)
def test_analytics_for_unknown_selection_is_404_and_not_watched(signed_in, container, path):
    resp = signed_in.get(path)

    assert resp.status_code == 404
    assert container.live_analytics.watched() == []


def test_analytics_bundle_follows_the_clock_into_the_next_day(monkeypatch, seeded_store, attendance_row, fixed_now):
    now = {"value": fixed_now}
    container = build_container(store=seeded_store, clock=lambda: now["value"])
    monkeypatch.setenv("APP_ENV", "testing")
    client = create_app(container).test_client()
    client.post("/api/auth/login", json={"username": "teacher", "password": "teacher123"})

    first = client.get(f"/api/analytics/{CLASS_ID}?subject=Physics").get_json()["analytics"]
    assert first["today"]["label"] == "2025-03-12"

    now["value"] = fixed_now + timedelta(days=1)
    seeded_store.tables["attendance"].append(attendance_row("stu-1", "Present", now["value"].date()))

    second = client.get(f"/api/analytics/{CLASS_ID}?subject=Physics").get_json()["analytics"]
    assert second["today"]["label"] == "2025-03-13"
    assert second["today"]["present"] == 1
