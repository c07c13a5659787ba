from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Sequence

from ..core.enums import ClockEventKind
from ..hours.model import HoursResult, SessionStatistics


@dataclass(frozen=True)
class ClockEvent:
    """Thực thể miền (domain): Một lần quẹt thẻ đã được phân loại.

    ``work_date`` is the day the event is attributed to; an overnight _out
    keeps the date of its _in.
    """

    employee_id: int
    kind: ClockEventKind
    timestamp: datetime
    work_date: date


@dataclass(frozen=True)
class AttendanceRecord:
    """Bản ghi chấm công đã lưu (sự kiện + giờ công đã tính)."""

    record_id: int
    employee_id: int
    kind: ClockEventKind
    clock_time: datetime
    work_date: date
    regular_hours: float = 0.0
    overtime_hours: float = 0.0
    is_late: bool = False
    anomalous: bool = False

    @property
    def event(self) -> ClockEvent:
        return ClockEvent(
            employee_id=self.employee_id,
            kind=self.kind,
            timestamp=self.clock_time,
            work_date=self.work_date,
        )

    @property
    def hours(self) -> HoursResult:
        return HoursResult(self.regular_hours, self.overtime_hours)


@dataclass(frozen=True)
class NewAttendanceRecord:
    """Dữ liệu cần ghi khi chấp nhận một lần quẹt thẻ."""

    event: ClockEvent
    hours: HoursResult
    is_late: bool = False
    anomalous: bool = False
    statistics: SessionStatistics | None = None


@dataclass(frozen=True)
class ScanResult:
    record_id: int
    event: ClockEvent
    hours: HoursResult
    is_late: bool
    anomalous: bool = False
    overnight_continuation: bool = False
    statistics: SessionStatistics | None = None

    @property
    def kind(self) -> ClockEventKind:
        return self.event.kind

    def as_dict(self) -> dict:
        return {
            "record_id": self.record_id,
            "employee_id": self.event.employee_id,
            "kind": self.event.kind.value,
            "session_type": self.event.kind.family.value,
            "clock_time": self.event.timestamp.isoformat(),
            "date": self.event.work_date.isoformat(),
            "regular_hours": self.hours.regular_hours,
            "overtime_hours": self.hours.overtime_hours,
            "is_late": self.is_late,
            "anomalous": self.anomalous,
            "overnight_continuation": self.overnight_continuation,
            "statistics": self.statistics.as_dict() if self.statistics else None,
        }


@dataclass(frozen=True)
class DailyState:
    """Read-model: các sự kiện trong ngày của một nhân viên, theo thứ tự thời gian."""

    employee_id: int
    work_date: date
    events: Sequence[ClockEvent] = field(default_factory=tuple)

    @property
    def last_event(self) -> ClockEvent | None:
        return self.events[-1] if self.events else None

    @property
    def pending_clock_in(self) -> ClockEvent | None:
        last = self.last_event
        if last is not None and last.kind.is_in:
            return last
        return None

    @property
    def has_completed_sessions(self) -> bool:
        return any(e.kind.is_out for e in self.events)

    def is_well_formed(self) -> bool:
        """No two consecutive _in (or _out) events."""
        for prev, cur in zip(self.events, self.events[1:]):
            if prev.kind.is_in == cur.kind.is_in:
                return False
            if prev.kind.is_in and cur.kind is not prev.kind.paired():
                return False
        return True
