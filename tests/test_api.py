from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime

import pytest

from src.intern_attendance.intern_attendance.attendance.model import AttendanceRecord
from src.intern_attendance.intern_attendance.common.clock import FixedClock
from src.intern_attendance.intern_attendance.container import build_engine, build_services
from src.intern_attendance.intern_attendance.core.enums import Role
from src.intern_attendance.intern_attendance.core.exceptions import DuplicateRecordError
from src.intern_attendance.intern_attendance.main import create_app
from src.intern_attendance.intern_attendance.users.model import SubjectProfile


class InMemoryAttendance:
    def __init__(self):
        self.records: dict[tuple[int, date], AttendanceRecord] = {}
        self._id = 0

    def get_for_user_and_date(self, user_id, work_date):
        return self.records.get((user_id, work_date))

    def get_recent_for_user(self, user_id, limit):
        items = [r for r in self.records.values() if r.user_id == user_id]
        items.sort(key=lambda r: r.work_date, reverse=True)
        return items[:limit]

    def list_between(self, *, start_date, end_date, completed_only=False):
        return [
            r
            for r in self.records.values()
            if start_date <= r.work_date <= end_date and (not completed_only or r.check_out_time)
        ]

    def create_checkin(self, *, user_id, work_date, check_in_time):
        if (user_id, work_date) in self.records:
            raise DuplicateRecordError("You have already checked in today")
        self._id += 1
        rec = AttendanceRecord(self._id, user_id, work_date, check_in_time)
        self.records[(user_id, work_date)] = rec
        return rec

    def update_checkout(self, *, record_id, check_out_time):
        for key, rec in self.records.items():
            if rec.record_id == record_id and rec.check_out_time is None:
                self.records[key] = replace(rec, check_out_time=check_out_time)
                return self.records[key]
        return None


class BrokenAttendance(InMemoryAttendance):
    def get_for_user_and_date(self, user_id, work_date):
        raise ConnectionError("store unreachable")


class FakeProfiles:
    def __init__(self):
        self._profiles = {
            1: SubjectProfile(1, "Alice", "alice@example.com", "MIT", datetime(2026, 3, 1)),
            9: SubjectProfile(9, "Admin", "admin@example.com", None, datetime(2026, 1, 1)),
        }

    def get_by_id(self, user_id):
        return self._profiles.get(user_id)

    def get_profiles(self, user_ids):
        return {uid: self._profiles[uid] for uid in user_ids if uid in self._profiles}

    def list_all(self):
        return list(self._profiles.values())

    def list_recent(self, limit):
        return sorted(self._profiles.values(), key=lambda p: p.created_at, reverse=True)[:limit]


class FakeRoles:
    def get_role(self, user_id):
        return Role.ADMIN if user_id == 9 else Role.USER

    def count_with_role(self, role):
        return 1


class Settings:
    CHECK_IN_WINDOW = "07:00-10:00"
    CHECK_OUT_WINDOW = "15:00-18:00"


@pytest.fixture
def clock():
    return FixedClock(datetime(2026, 3, 2, 8, 30))


def _make_client(monkeypatch, clock, attendance_repo):
    monkeypatch.setenv("APP_ENV", "testing")
    container = build_services(
        attendance_repo=attendance_repo,
        profiles_repo=FakeProfiles(),
        roles_repo=FakeRoles(),
        engine=build_engine(Settings),
        clock=clock,
    )
    return create_app(container).test_client()


@pytest.fixture
def client(monkeypatch, clock):
    return _make_client(monkeypatch, clock, InMemoryAttendance())


def _login(client, user_id):
    with client.session_transaction() as sess:
        sess["user_id"] = user_id


def test_requires_session(client):
    resp = client.get("/api/attendance/today")
    assert resp.status_code == 401
    assert resp.get_json()["success"] is False


def test_me_reports_role_tag(client):
    _login(client, 9)
    assert client.get("/api/me").get_json()["role"] == "admin"


def test_check_in_then_duplicate(client):
    _login(client, 1)

    first = client.post("/api/attendance/check-in")
    assert first.status_code == 201
    body = first.get_json()
    assert body["record"]["date"] == "2026-03-02"
    assert body["record"]["check_out"] is None

    second = client.post("/api/attendance/check-in")
    assert second.status_code == 409


def test_check_in_outside_window(client, clock):
    _login(client, 1)
    clock.current = datetime(2026, 3, 2, 11, 0)

    resp = client.post("/api/attendance/check-in")

    assert resp.status_code == 422
    assert "07:00-10:00" in resp.get_json()["message"]


def test_check_out_flow(client, clock):
    _login(client, 1)

    assert client.post("/api/attendance/check-out").status_code == 404

    client.post("/api/attendance/check-in")
    clock.current = datetime(2026, 3, 2, 16, 45)
    resp = client.post("/api/attendance/check-out")
    assert resp.status_code == 200
    assert resp.get_json()["record"]["check_out"] == "2026-03-02T16:45:00"

    today = client.get("/api/attendance/today").get_json()
    assert today["state"] == "CHECKED_OUT"
    assert today["can_check_in"] is False

    history = client.get("/api/attendance/history?limit=5").get_json()["records"]
    assert history[0]["duration"] == "8h 15m"


def test_history_rejects_bad_limit(client):
    _login(client, 1)
    assert client.get("/api/attendance/history?limit=abc").status_code == 400
    assert client.get("/api/attendance/history?limit=0").status_code == 400


def test_admin_routes_refuse_interns(client):
    _login(client, 1)
    assert client.get("/api/admin/overview").status_code == 403


def test_admin_total_hours(client, clock):
    _login(client, 1)
    client.post("/api/attendance/check-in")
    clock.current = datetime(2026, 3, 2, 17, 0)
    client.post("/api/attendance/check-out")

    _login(client, 9)
    resp = client.get("/api/admin/total-hours?start=2026-03-01&end=2026-03-31")

    assert resp.status_code == 200
    assert resp.get_json()["interns"] == [
        {"user_id": 1, "full_name": "Alice", "email": "alice@example.com", "school": "MIT", "total_hours": "8h 30m"}
    ]


def test_admin_total_hours_bad_dates(client):
    _login(client, 9)
    assert client.get("/api/admin/total-hours?start=03/01/2026").status_code == 400
    assert client.get("/api/admin/total-hours?start=2026-03-10&end=2026-03-01").status_code == 400


def test_admin_weekly_and_overview(client):
    _login(client, 1)
    client.post("/api/attendance/check-in")

    _login(client, 9)
    weekly = client.get("/api/admin/weekly").get_json()["days"]
    assert len(weekly) == 7
    assert weekly[-1] == {"date": "2026-03-02", "label": "Mon", "check_ins": 1, "check_outs": 0}

    overview = client.get("/api/admin/overview").get_json()
    assert overview["checked_in"] == 1
    assert overview["active"] == 1


def test_admin_schools_and_signups(client):
    _login(client, 9)
    assert client.get("/api/admin/schools").get_json()["schools"] == [{"name": "MIT", "count": 1}]
    signups = client.get("/api/admin/signups?limit=1").get_json()["profiles"]
    assert [p["full_name"] for p in signups] == ["Alice"]


def test_store_failure_is_reported_not_raised(monkeypatch, clock):
    client = _make_client(monkeypatch, clock, BrokenAttendance())
    _login(client, 1)

    resp = client.post("/api/attendance/check-in")

    assert resp.status_code == 500
    assert resp.get_json()["message"] == "System error while checking in"


def test_second_check_out_is_a_bad_request(client, clock):
    _login(client, 1)
    client.post("/api/attendance/check-in")
    clock.current = datetime(2026, 3, 2, 16, 0)
    assert client.post("/api/attendance/check-out").status_code == 200

    clock.advance(minutes=5)
    again = client.post("/api/attendance/check-out")

    assert again.status_code == 400
    assert again.get_json()["message"] == "You have already checked out today"


def test_admin_weekly_caps_days(client):
    _login(client, 9)
    assert client.get("/api/admin/weekly?days=999999999").status_code == 400
    assert client.get("/api/admin/weekly?days=367").status_code == 400
    assert len(client.get("/api/admin/weekly?days=366").get_json()["days"]) == 366
