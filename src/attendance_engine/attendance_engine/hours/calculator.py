from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime

from ..common.datetime_utils import format_minutes
from ..core.constants import (
    AFTERNOON_END,
    AFTERNOON_START,
    EVENING_CLASSIFICATION_START,
    EVENING_START,
    MORNING_END,
    MORNING_START,
)
from ..core.enums import ClockEventKind, SegmentWindow, SessionFamily
from ..core.exceptions import ConfigurationError
from .model import HoursResult, SessionStatistics
from .rounding import RoundingPolicy
from .segmenter import SegmentPlan, SessionSegmenter

logger = logging.getLogger(__name__)

_REGULAR_WINDOWS = {
    SegmentWindow.MORNING: (MORNING_START, MORNING_END),
    SegmentWindow.AFTERNOON: (AFTERNOON_START, AFTERNOON_END),
}


@dataclass(frozen=True)
class SessionCalculation:
    hours: HoursResult
    statistics: SessionStatistics = field(default_factory=SessionStatistics)
    missing_clock_in: bool = False


def as_kind(kind) -> ClockEventKind:
    if isinstance(kind, ClockEventKind):
        return kind
    try:
        return ClockEventKind(kind)
    except ValueError:
        raise ConfigurationError(f"Unknown clock event kind: {kind!r}") from None


class SessionHoursCalculator:
    """Turn one in/out pair into (regular, overtime) hours.

    Morning and afternoon sessions are split into wall-clock windows: the
    8-12 and 13-17 windows earn regular hours hour by hour, everything around
    them is overtime rounded to the half hour. Evening and overtime sessions
    are one overtime block each with their own rounding.
    """

    def __init__(self, *, policy: RoundingPolicy | None = None, segmenter: SessionSegmenter | None = None):
        self._policy = policy or RoundingPolicy()
        self._segmenter = segmenter or SessionSegmenter()

    def compute(self, clock_in: datetime, clock_out: datetime, family: SessionFamily) -> HoursResult:
        return self._compute(clock_in, clock_out, family, SessionStatistics(session_type=family))

    def calculate(self, kind, clock_out: datetime, clock_in: datetime | None = None) -> SessionCalculation:
        """Hours realized by an event of ``kind`` scanned at ``clock_out``."""
        kind = as_kind(kind)
        stats = SessionStatistics(session_type=kind.family, clock_in_time=clock_in, clock_out_time=clock_out)

        if kind.is_in:
            stats.calculation_method = "clock_in_only"
            return SessionCalculation(hours=HoursResult.zero(), statistics=stats)

        if clock_in is None:
            logger.warning("%s without a matching clock-in at %s", kind.value, clock_out.isoformat())
            stats.note(f"{kind.value} without clock-in")
            return SessionCalculation(hours=HoursResult.zero(), statistics=stats, missing_clock_in=True)

        hours = self._compute(clock_in, clock_out, kind.family, stats)
        return SessionCalculation(hours=hours, statistics=stats)

    def _compute(self, clock_in: datetime, clock_out: datetime, family: SessionFamily, stats: SessionStatistics) -> HoursResult:
        plan = self._segmenter.segment(clock_in, clock_out, family)
        stats.total_minutes_worked = plan.total_minutes
        stats.effective_clock_in_minutes = plan.clock_in_minutes
        stats.effective_clock_out_minutes = plan.clock_out_minutes
        stats.overnight_shift = plan.overnight
        stats.lunch_break_excluded = plan.lunch_break_excluded

        logger.debug(
            "%s session %s -> %s (%d min)",
            family.value,
            format_minutes(plan.clock_in_minutes),
            format_minutes(plan.clock_out_minutes),
            plan.total_minutes,
        )

        if family.is_regular:
            regular, overtime = self._regular_session(plan, stats)
        elif family is SessionFamily.EVENING:
            regular, overtime = 0.0, self._evening_session(plan, stats)
        else:
            regular, overtime = 0.0, self._overtime_session(plan, stats)

        result = HoursResult.of(regular, overtime)
        stats.regular_hours = result.regular_hours
        stats.overtime_hours = result.overtime_hours
        return result

    def _regular_session(self, plan: SegmentPlan, stats: SessionStatistics) -> tuple[float, float]:
        policy = self._policy
        regular = 0.0
        overtime = 0.0
        stats.calculation_method = "regular_hours"
        stats.grace_period_minutes = policy.regular_grace_minutes

        for overlap in plan.overlaps:
            window = overlap.window
            if window in _REGULAR_WINDOWS:
                window_start, window_end = _REGULAR_WINDOWS[window]
                credit = policy.per_hour_lateness(
                    lateness_reference=overlap.start_minutes,
                    work_start=overlap.start_minutes,
                    work_end=overlap.end_minutes,
                    window_start=window_start,
                    window_end=window_end,
                )
                regular += credit
                if window is SegmentWindow.MORNING:
                    stats.morning_session_hours = credit
                else:
                    stats.afternoon_session_hours = credit
            elif window is SegmentWindow.EARLY_MORNING:
                credit = policy.early_morning_bonus(overlap.start_minutes, overlap.end_minutes)
                overtime += credit
                stats.early_morning_rule_applied = True
                stats.early_morning_overtime_hours = credit
            elif window is SegmentWindow.EARLY_AFTERNOON:
                credit = policy.simple_half_hour(overlap.minutes)
                overtime += credit
                stats.early_arrival_minutes = overlap.minutes
                stats.early_arrival_overtime_hours = credit
            elif window is SegmentWindow.REGULAR_OVERTIME:
                credit = policy.simple_half_hour(overlap.minutes)
                overtime += credit
                stats.regular_overtime_hours = credit
            elif window is SegmentWindow.NIGHT_SHIFT:
                credit = policy.simple_half_hour(overlap.minutes)
                overtime += credit
                stats.night_shift_hours = credit
            else:
                raise ConfigurationError(f"Window {window.value} is not valid for a {plan.family.value} session")

            logger.debug(
                "  %s %s-%s: %.2f",
                window.value,
                format_minutes(overlap.start_minutes),
                format_minutes(overlap.end_minutes),
                credit,
            )

        official_start = MORNING_START if plan.family is SessionFamily.MORNING else AFTERNOON_START
        first_regular = plan.get(SegmentWindow.MORNING) or plan.get(SegmentWindow.AFTERNOON)
        if first_regular is not None:
            stats.lateness_minutes = max(0, first_regular.start_minutes - official_start)
            stats.grace_period_applied = 0 < stats.lateness_minutes <= policy.regular_grace_minutes

        return regular, overtime

    def _evening_session(self, plan: SegmentPlan, stats: SessionStatistics) -> float:
        start = plan.clock_in_minutes
        first, tail = self._policy.evening_session(start, plan.clock_out_minutes)
        stats.calculation_method = "evening_session"
        stats.grace_period_minutes = self._policy.evening_grace_minutes
        stats.grace_period_applied = EVENING_START < start <= EVENING_CLASSIFICATION_START
        stats.lateness_minutes = max(0, start - EVENING_CLASSIFICATION_START)
        stats.evening_session_hours = first + tail
        stats.note(f"first hour {first}, additional {tail}")
        logger.debug("  evening first hour %.1f + tail %.1f", first, tail)
        return first + tail

    def _overtime_session(self, plan: SegmentPlan, stats: SessionStatistics) -> float:
        grace = self._policy.overtime_session_grace_minutes
        hours = self._policy.overtime_flat_grace(plan.total_minutes)
        stats.calculation_method = "overtime_session"
        stats.grace_period_minutes = grace
        stats.grace_period_applied = grace > 0
        stats.regular_overtime_hours = hours
        stats.note(f"overtime session with {grace} min grace")
        logger.debug("  overtime %d min - %d grace = %.2f h", plan.total_minutes, grace, hours)
        return hours
