from __future__ import annotations

from enum import Enum


class SessionFamily(str, Enum):
    """Nhóm phiên làm việc: ghép cặp một loại _in với một loại _out."""

    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"
    OVERTIME = "overtime"

    @property
    def is_regular(self) -> bool:
        return self in (SessionFamily.MORNING, SessionFamily.AFTERNOON)

    @property
    def clock_in(self) -> "ClockEventKind":
        return ClockEventKind(f"{self.value}_in")

    @property
    def clock_out(self) -> "ClockEventKind":
        return ClockEventKind(f"{self.value}_out")


class ClockEventKind(str, Enum):
    """Loại sự kiện chấm công lưu trong CSDL."""

    MORNING_IN = "morning_in"
    MORNING_OUT = "morning_out"
    AFTERNOON_IN = "afternoon_in"
    AFTERNOON_OUT = "afternoon_out"
    EVENING_IN = "evening_in"
    EVENING_OUT = "evening_out"
    OVERTIME_IN = "overtime_in"
    OVERTIME_OUT = "overtime_out"

    @property
    def family(self) -> SessionFamily:
        return SessionFamily(self.value.rsplit("_", 1)[0])

    @property
    def is_in(self) -> bool:
        return self.value.endswith("_in")

    @property
    def is_out(self) -> bool:
        return self.value.endswith("_out")

    def paired(self) -> "ClockEventKind":
        family = self.family
        return family.clock_out if self.is_in else family.clock_in


class SegmentWindow(str, Enum):
    """Khung giờ cố định mà một khoảng làm việc có thể phủ lên."""

    EARLY_MORNING = "early_morning"
    MORNING = "morning"
    EARLY_AFTERNOON = "early_afternoon"
    AFTERNOON = "afternoon"
    REGULAR_OVERTIME = "regular_overtime"
    NIGHT_SHIFT = "night_shift"
    EVENING_SESSION = "evening_session"
    OVERTIME_SESSION = "overtime_session"


class RoundingRule(str, Enum):
    """Các luật làm tròn giờ công (cố ý khác nhau theo loại phiên)."""

    PER_HOUR_LATENESS = "per_hour_lateness"
    SIMPLE_HALF_HOUR = "simple_half_hour"
    EVENING_SESSION = "evening_session"
    OVERTIME_FLAT_GRACE = "overtime_flat_grace"
    EARLY_MORNING_BONUS = "early_morning_bonus"
