from __future__ import annotations

from datetime import date, datetime

import pytest
from flask import Flask

from src.attendance_engine.attendance_engine.attendance.controller import register
from src.attendance_engine.attendance_engine.attendance.model import AttendanceRecord, NewAttendanceRecord
from src.attendance_engine.attendance_engine.attendance.service import AttendanceEventProcessor
from src.attendance_engine.attendance_engine.attendance.validation import AttendanceValidationService
from src.attendance_engine.attendance_engine.clock.source import FixedClockSource
from src.attendance_engine.attendance_engine.container import Container
from src.attendance_engine.attendance_engine.hours.model import HoursResult
from src.attendance_engine.attendance_engine.hours.service import HoursCreditService
from src.attendance_engine.attendance_engine.summary.service import AttendanceSummaryService


class InMemoryAttendanceStore:
    def __init__(self):
        self.records: list[AttendanceRecord] = []

    def _day(self, employee_id: int, work_date: date) -> list[AttendanceRecord]:
        return sorted(
            (r for r in self.records if r.employee_id == employee_id and r.work_date == work_date),
            key=lambda r: r.clock_time,
        )

    def get_last_event_for_day(self, employee_id: int, work_date: date) -> AttendanceRecord | None:
        items = self._day(employee_id, work_date)
        return items[-1] if items else None

    def get_pending_clock_in(self, employee_id: int, work_date: date) -> AttendanceRecord | None:
        last = self.get_last_event_for_day(employee_id, work_date)
        return last if last is not None and last.kind.is_in else None

    def find_clock_in(self, employee_id, work_date, kind):
        items = [r for r in self._day(employee_id, work_date) if r.kind is kind]
        return items[-1] if items else None

    def has_completed_sessions_today(self, employee_id: int, work_date: date) -> bool:
        return any(r.kind.is_out for r in self._day(employee_id, work_date))

    def has_pending_clock_ins_today(self, employee_id: int, work_date: date) -> bool:
        return self.get_pending_clock_in(employee_id, work_date) is not None

    def append(self, record: NewAttendanceRecord) -> int:
        record_id = len(self.records) + 1
        self.records.append(
            AttendanceRecord(
                record_id=record_id,
                employee_id=record.event.employee_id,
                kind=record.event.kind,
                clock_time=record.event.timestamp,
                work_date=record.event.work_date,
                regular_hours=record.hours.regular_hours,
                overtime_hours=record.hours.overtime_hours,
                is_late=record.is_late,
                anomalous=record.anomalous,
            )
        )
        return record_id

    def list_events_for_day(self, employee_id: int, work_date: date):
        return self._day(employee_id, work_date)

    def list_records(self, *, start_date: date, end_date: date, employee_id: int | None = None):
        return [
            r
            for r in self.records
            if start_date <= r.work_date <= end_date and (employee_id is None or r.employee_id == employee_id)
        ]

    def update_hours(self, *, record_id: int, hours: HoursResult) -> bool:
        return True


@pytest.fixture()
def client():
    store = InMemoryAttendanceStore()
    clock = FixedClockSource(datetime(2025, 3, 3, 8, 2))
    hours = HoursCreditService()
    container = Container(
        conn=None,
        clock=clock,
        attendance_store=store,
        hours_service=hours,
        attendance_processor=AttendanceEventProcessor(store, clock=clock, hours=hours),
        validation_service=AttendanceValidationService(store, hours=hours),
        summary_service=AttendanceSummaryService(store),
    )
    app = Flask(__name__)
    register(app, container)
    return app.test_client()


def test_scan_records_event(client):
    res = client.post("/api/scan", json={"employee_id": 7})

    assert res.status_code == 200
    body = res.get_json()
    assert body["success"] is True
    assert body["data"]["kind"] == "morning_in"
    assert body["data"]["is_late"] is False


def test_scan_requires_employee_id(client):
    res = client.post("/api/scan", json={})

    assert res.status_code == 400
    assert res.get_json()["success"] is False


def test_scan_rejects_bad_employee_id(client):
    res = client.post("/api/scan", json={"employee_id": "abc"})

    assert res.status_code == 400
    assert res.get_json()["message"] == "Mã nhân viên không hợp lệ: 'abc'"


def test_daily_attendance(client):
    client.post("/api/scan", json={"employee_id": 7})

    res = client.get("/api/attendance/7/2025-03-03")

    assert res.status_code == 200
    assert [e["kind"] for e in res.get_json()["data"]] == ["morning_in"]


def test_daily_attendance_bad_date(client):
    res = client.get("/api/attendance/7/yesterday")

    assert res.status_code == 400
    assert res.get_json()["message"].startswith("Ngày không hợp lệ")


def test_summary(client):
    client.post("/api/scan", json={"employee_id": 7})

    res = client.get("/api/summary?start=2025-03-01&end=2025-03-31")

    assert res.status_code == 200
    body = res.get_json()
    assert body["rows"][0]["employee_id"] == 7
    assert body["summary"][0]["days_worked"] == 1


def test_summary_requires_start(client):
    res = client.get("/api/summary")

    assert res.status_code == 400
    assert res.get_json()["message"] == "Vui lòng nhập ngày bắt đầu"


def test_validate(client):
    res = client.post("/api/validate", json={"start": "2025-03-03", "auto_correct": False})

    assert res.status_code == 200
    assert res.get_json()["data"]["summary"]["total_records"] == 0
