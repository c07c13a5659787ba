from __future__ import annotations

from datetime import date, datetime

import pytest

from src.attendance_engine.attendance_engine.attendance.model import AttendanceRecord
from src.attendance_engine.attendance_engine.core.enums import ClockEventKind
from src.attendance_engine.attendance_engine.core.exceptions import ValidationError
from src.attendance_engine.attendance_engine.summary.service import AttendanceSummaryService


class InMemoryRecords:
    def __init__(self, records: list[AttendanceRecord]):
        self.records = records

    def list_records(self, *, start_date: date, end_date: date, employee_id: int | None = None):
        return [
            r
            for r in self.records
            if start_date <= r.work_date <= end_date and (employee_id is None or r.employee_id == employee_id)
        ]


def rec(record_id, employee_id, kind, day, h, m=0, regular=0.0, overtime=0.0, is_late=False):
    return AttendanceRecord(
        record_id=record_id,
        employee_id=employee_id,
        kind=kind,
        clock_time=datetime(2025, 3, day, h, m),
        work_date=date(2025, 3, day),
        regular_hours=regular,
        overtime_hours=overtime,
        is_late=is_late,
    )


RECORDS = [
    rec(1, 1, ClockEventKind.MORNING_IN, 3, 8),
    rec(2, 1, ClockEventKind.MORNING_OUT, 3, 12, regular=4.0),
    rec(3, 1, ClockEventKind.AFTERNOON_IN, 3, 13),
    rec(4, 1, ClockEventKind.AFTERNOON_OUT, 3, 18, regular=4.0, overtime=1.0),
    rec(5, 1, ClockEventKind.EVENING_IN, 3, 18, 30),
    rec(6, 1, ClockEventKind.EVENING_OUT, 3, 20, overtime=1.5),
    rec(7, 1, ClockEventKind.MORNING_IN, 4, 8, 20, is_late=True),
    rec(8, 1, ClockEventKind.MORNING_OUT, 4, 12, regular=3.5),
    rec(9, 2, ClockEventKind.OVERTIME_IN, 3, 22),
    rec(10, 2, ClockEventKind.OVERTIME_OUT, 3, 23, 50, overtime=1.58),
]


def test_summary_per_employee():
    data = AttendanceSummaryService(InMemoryRecords(RECORDS)).build_summary(start=date(2025, 3, 3), end=date(2025, 3, 4))

    by_emp = {s["employee_id"]: s for s in data.summary}
    assert by_emp[1]["regular_hours"] == 11.5
    assert by_emp[1]["overtime_hours"] == 2.5
    assert by_emp[1]["total_hours"] == 14.0
    assert by_emp[1]["sessions"] == 4
    assert by_emp[1]["evening_overtime_sessions"] == 1
    assert by_emp[1]["days_worked"] == 2
    assert by_emp[1]["late_days"] == 1
    assert by_emp[2]["overtime_hours"] == 1.58
    assert data.summary[0]["employee_id"] == 1


def test_daily_rows():
    data = AttendanceSummaryService(InMemoryRecords(RECORDS)).build_summary(
        start=date(2025, 3, 3), end=date(2025, 3, 3), employee_id=1
    )

    assert len(data.rows) == 1
    row = data.rows[0]
    assert row["first_clock_in"] == "08:00"
    assert row["last_clock_out"] == "20:00"
    assert row["total_hours"] == 10.5
    assert row["late"] is False


def test_empty_range():
    data = AttendanceSummaryService(InMemoryRecords(RECORDS)).build_summary(start=date(2025, 4, 1), end=date(2025, 4, 2))

    assert data.rows == []
    assert data.summary == []


def test_end_before_start_rejected():
    with pytest.raises(ValidationError):
        AttendanceSummaryService(InMemoryRecords([])).build_summary(start=date(2025, 3, 4), end=date(2025, 3, 3))
