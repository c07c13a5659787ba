from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from ..core.enums import SegmentWindow, SessionFamily


def round_hours(value: float) -> float:
    return round(max(float(value), 0.0), 2)


@dataclass(frozen=True)
class HoursResult:
    """Giờ công của một cặp vào/ra: giờ chính thức và giờ tăng ca."""

    regular_hours: float = 0.0
    overtime_hours: float = 0.0

    @classmethod
    def zero(cls) -> "HoursResult":
        return cls(0.0, 0.0)

    @classmethod
    def of(cls, regular_hours: float, overtime_hours: float) -> "HoursResult":
        """Clamp to non-negative and round to 2 decimals."""
        return cls(round_hours(regular_hours), round_hours(overtime_hours))

    @property
    def total_hours(self) -> float:
        return round(self.regular_hours + self.overtime_hours, 2)

    def as_dict(self) -> dict:
        return {"regular_hours": self.regular_hours, "overtime_hours": self.overtime_hours}


@dataclass(frozen=True)
class SegmentOverlap:
    """Phần giao giữa khoảng làm việc và một khung giờ cố định."""

    window: SegmentWindow
    start_minutes: int
    end_minutes: int

    @property
    def minutes(self) -> int:
        return max(self.end_minutes - self.start_minutes, 0)


@dataclass
class SessionStatistics:
    """Chi tiết tính giờ cho một lần chấm ra (phục vụ thống kê/đối soát)."""

    session_type: SessionFamily | None = None
    clock_in_time: datetime | None = None
    clock_out_time: datetime | None = None
    total_minutes_worked: int = 0
    regular_hours: float = 0.0
    overtime_hours: float = 0.0
    early_arrival_minutes: int = 0
    early_arrival_overtime_hours: float = 0.0
    early_morning_overtime_hours: float = 0.0
    morning_session_hours: float = 0.0
    afternoon_session_hours: float = 0.0
    evening_session_hours: float = 0.0
    regular_overtime_hours: float = 0.0
    night_shift_hours: float = 0.0
    early_morning_rule_applied: bool = False
    overnight_shift: bool = False
    grace_period_applied: bool = False
    lunch_break_excluded: bool = False
    effective_clock_in_minutes: int | None = None
    effective_clock_out_minutes: int | None = None
    lateness_minutes: int = 0
    grace_period_minutes: int = 0
    calculation_method: str = "unknown"
    notes: list[str] = field(default_factory=list)

    def note(self, message: str) -> None:
        self.notes.append(message)

    def as_dict(self) -> dict:
        return {
            "session_type": self.session_type.value if self.session_type else None,
            "clock_in_time": self.clock_in_time.isoformat() if self.clock_in_time else None,
            "clock_out_time": self.clock_out_time.isoformat() if self.clock_out_time else None,
            "total_minutes_worked": self.total_minutes_worked,
            "regular_hours": self.regular_hours,
            "overtime_hours": self.overtime_hours,
            "early_arrival_minutes": self.early_arrival_minutes,
            "early_arrival_overtime_hours": self.early_arrival_overtime_hours,
            "early_morning_overtime_hours": self.early_morning_overtime_hours,
            "morning_session_hours": self.morning_session_hours,
            "afternoon_session_hours": self.afternoon_session_hours,
            "evening_session_hours": self.evening_session_hours,
            "regular_overtime_hours": self.regular_overtime_hours,
            "night_shift_hours": self.night_shift_hours,
            "early_morning_rule_applied": self.early_morning_rule_applied,
            "overnight_shift": self.overnight_shift,
            "grace_period_applied": self.grace_period_applied,
            "lunch_break_excluded": self.lunch_break_excluded,
            "effective_clock_in_minutes": self.effective_clock_in_minutes,
            "effective_clock_out_minutes": self.effective_clock_out_minutes,
            "lateness_minutes": self.lateness_minutes,
            "grace_period_minutes": self.grace_period_minutes,
            "calculation_method": self.calculation_method,
            "notes": "; ".join(self.notes),
        }
