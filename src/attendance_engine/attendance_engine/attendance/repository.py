from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from ..core.enums import ClockEventKind
from ..hours.model import HoursResult
from .model import AttendanceRecord, NewAttendanceRecord


class AttendanceStore(Protocol):
    def get_last_event_for_day(self, employee_id: int, work_date: date) -> AttendanceRecord | None:
        raise NotImplementedError

    def get_pending_clock_in(self, employee_id: int, work_date: date) -> AttendanceRecord | None:
        """The day's last event when it is an _in with no _out after it."""

        raise NotImplementedError

    def find_clock_in(self, employee_id: int, work_date: date, kind: ClockEventKind) -> AttendanceRecord | None:
        """Most recent event of ``kind`` attributed to ``work_date``."""

        raise NotImplementedError

    def has_completed_sessions_today(self, employee_id: int, work_date: date) -> bool:
        raise NotImplementedError

    def has_pending_clock_ins_today(self, employee_id: int, work_date: date) -> bool:
        raise NotImplementedError

    def append(self, record: NewAttendanceRecord) -> int:
        raise NotImplementedError

    def list_events_for_day(self, employee_id: int, work_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_records(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_id: int | None = None,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def update_hours(self, *, record_id: int, hours: HoursResult) -> bool:
        """Overwrite credited hours after a reprocessing pass."""

        raise NotImplementedError
