"""Rounding laws that turn worked minutes into credited hours.

The laws differ per session type on purpose:

- regular morning/afternoon hours are scored hour by hour against lateness,
- overtime attached to a regular session rounds to the half hour at 30 minutes,
- evening sessions credit a graced first hour and round the tail at 25/56 minutes,
- pure overtime sessions subtract a flat grace and are not bucketed at all.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import (
    EARLY_MORNING_GRACE_MINUTES,
    EARLY_MORNING_START,
    EVENING_FIRST_HOUR_END,
    EVENING_GRACE_MINUTES,
    EVENING_START,
    LATE_HALF_CREDIT_LIMIT_MINUTES,
    MIN_WORKED_MINUTES_PER_HOUR,
    MORNING_START,
    OVERTIME_SESSION_GRACE_MINUTES,
    REGULAR_GRACE_MINUTES,
)
from ..core.enums import RoundingRule
from ..core.exceptions import ConfigurationError


@dataclass(frozen=True)
class RoundingPolicy:
    regular_grace_minutes: int = REGULAR_GRACE_MINUTES
    late_half_credit_limit_minutes: int = LATE_HALF_CREDIT_LIMIT_MINUTES
    min_worked_minutes_per_hour: int = MIN_WORKED_MINUTES_PER_HOUR
    early_morning_grace_minutes: int = EARLY_MORNING_GRACE_MINUTES
    evening_grace_minutes: int = EVENING_GRACE_MINUTES
    evening_half_hour_threshold: int = 25
    evening_full_hour_threshold: int = 56
    overtime_session_grace_minutes: int = OVERTIME_SESSION_GRACE_MINUTES

    def rounded_hours(self, worked_minutes: int, rule: RoundingRule) -> float:
        """Round a plain minute count with one of the minute-only rules."""
        if rule is RoundingRule.SIMPLE_HALF_HOUR:
            return self.simple_half_hour(worked_minutes)
        if rule is RoundingRule.EVENING_SESSION:
            return self.evening_tail(worked_minutes)
        if rule is RoundingRule.OVERTIME_FLAT_GRACE:
            return self.overtime_flat_grace(worked_minutes)
        raise ConfigurationError(f"Rounding rule {rule.value} needs clock-in context")

    def hour_credit(self, *, lateness_minutes: int, worked_minutes: int) -> float:
        if worked_minutes < self.min_worked_minutes_per_hour:
            return 0.0
        if lateness_minutes <= self.regular_grace_minutes:
            return 1.0
        if lateness_minutes <= self.late_half_credit_limit_minutes:
            return 0.5
        return 0.0

    def per_hour_lateness(
        self,
        *,
        lateness_reference: int,
        work_start: int,
        work_end: int,
        window_start: int,
        window_end: int,
    ) -> float:
        """Score each wall-clock hour of a window.

        ``lateness_reference`` is the minute lateness is measured from; it is
        reused for every hour of the window.
        """
        start = max(work_start, window_start)
        end = min(work_end, window_end)
        if end <= start:
            return 0.0

        total = 0.0
        for hour_start in range(window_start, window_end, 60):
            hour_end = min(hour_start + 60, window_end)
            worked = min(end, hour_end) - max(start, hour_start)
            if worked <= 0:
                continue
            lateness = max(0, lateness_reference - hour_start)
            total += self.hour_credit(lateness_minutes=lateness, worked_minutes=worked)
        return total

    def simple_half_hour(self, minutes: int) -> float:
        if minutes <= 0:
            return 0.0
        whole, remainder = divmod(int(minutes), 60)
        return whole + (0.5 if remainder >= 30 else 0.0)

    def evening_tail(self, minutes: int) -> float:
        if minutes <= 0:
            return 0.0
        whole, remainder = divmod(int(minutes), 60)
        if remainder >= self.evening_full_hour_threshold:
            return whole + 1.0
        if remainder >= self.evening_half_hour_threshold:
            return whole + 0.5
        return float(whole)

    def evening_first_hour(self, clock_in_minutes: int) -> float:
        if clock_in_minutes <= EVENING_START + self.evening_grace_minutes:
            return 1.0
        if clock_in_minutes < EVENING_FIRST_HOUR_END:
            return 0.5
        return 0.0

    def evening_session(self, clock_in_minutes: int, clock_out_minutes: int) -> tuple[float, float]:
        """Return (first_hour_credit, tail_hours) for an evening session."""
        if clock_out_minutes <= clock_in_minutes:
            return 0.0, 0.0
        first = self.evening_first_hour(clock_in_minutes)
        tail_start = max(clock_in_minutes, EVENING_FIRST_HOUR_END)
        return first, self.evening_tail(clock_out_minutes - tail_start)

    def overtime_flat_grace(self, total_minutes: int) -> float:
        return max(0, int(total_minutes) - self.overtime_session_grace_minutes) / 60

    def early_morning_bonus(self, clock_in_minutes: int, clock_out_minutes: int) -> float:
        if clock_in_minutes <= EARLY_MORNING_START + self.early_morning_grace_minutes:
            return 2.0
        return self.per_hour_lateness(
            lateness_reference=clock_in_minutes,
            work_start=clock_in_minutes,
            work_end=clock_out_minutes,
            window_start=EARLY_MORNING_START,
            window_end=MORNING_START,
        )
