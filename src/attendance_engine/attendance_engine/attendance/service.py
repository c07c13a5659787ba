from __future__ import annotations

import logging
from datetime import date, datetime, timedelta

from ..clock.source import ClockSource, MonotonicClockSource
from ..common.datetime_utils import minute_of_day
from ..core.constants import AFTERNOON_END, EVENING_CLASSIFICATION_START, MORNING_START
from ..core.exceptions import ValidationError
from ..hours.calculator import SessionCalculation
from ..hours.model import HoursResult
from ..hours.service import HoursCreditService
from .lateness import LatenessClassifier
from .model import AttendanceRecord, ClockEvent, DailyState, NewAttendanceRecord, ScanResult
from .repository import AttendanceStore
from .resolver import UNKNOWN_HISTORY, ClockTypeResolver, HistoryFlags, carries_over_midnight

logger = logging.getLogger(__name__)


class AttendanceEventProcessor:
    """Accept one scan: classify it, credit hours on _out, flag lateness, store it.

    Callers must serialize scans of the same employee; two concurrent scans
    could both see "no pending clock-in" and both record an _in.
    """

    def __init__(
        self,
        store: AttendanceStore,
        *,
        clock: ClockSource | None = None,
        resolver: ClockTypeResolver | None = None,
        hours: HoursCreditService | None = None,
        lateness: LatenessClassifier | None = None,
    ):
        self._store = store
        self._clock = clock or MonotonicClockSource()
        self._resolver = resolver or ClockTypeResolver()
        self._hours = hours or HoursCreditService()
        self._lateness = lateness or LatenessClassifier()

    def process_scan(self, employee_id: int, *, now: datetime | None = None) -> ScanResult:
        employee_id = self.require_employee_id(employee_id)
        now = now or self._clock.current_datetime()
        today = now.date()

        last = self._last_event(employee_id, now)
        history = self._history(employee_id, now)
        resolution = self._resolver.resolve_event(last.event if last else None, now, history)
        kind = resolution.kind

        if last is not None and last.kind.is_in and kind is not last.kind.paired():
            raise ValidationError("Sai thứ tự chấm công. Vui lòng hoàn tất lần chấm công vào đang chờ trước")

        anomalous = False
        statistics = None
        hours = HoursResult.zero()
        if kind.is_out:
            clock_in = last if last is not None and last.kind is kind.paired() else None
            if clock_in is None:
                clock_in = self._store.find_clock_in(employee_id, resolution.work_date, kind.paired())
            calc = self._credit(kind, now, clock_in)
            hours = calc.hours
            statistics = calc.statistics
            anomalous = calc.missing_clock_in

        decision = self._lateness.decide(kind, now)
        if decision.is_late:
            logger.info("Employee %s late for %s by %d min", employee_id, kind.value, decision.lateness_minutes)

        record = NewAttendanceRecord(
            event=ClockEvent(employee_id=employee_id, kind=kind, timestamp=now, work_date=resolution.work_date),
            hours=hours,
            is_late=decision.is_late,
            anomalous=anomalous,
            statistics=statistics,
        )
        record_id = self._store.append(record)

        logger.info(
            "Employee %s %s at %s (date %s): regular=%.2f overtime=%.2f",
            employee_id,
            kind.value,
            now.isoformat(),
            resolution.work_date.isoformat(),
            hours.regular_hours,
            hours.overtime_hours,
        )
        if resolution.work_date != today:
            logger.info("Scan on %s attributed to %s", today.isoformat(), resolution.work_date.isoformat())

        return ScanResult(
            record_id=record_id,
            event=record.event,
            hours=hours,
            is_late=decision.is_late,
            anomalous=anomalous,
            overnight_continuation=resolution.overnight_continuation,
            statistics=statistics,
        )

    def get_daily_state(self, employee_id: int, work_date: date) -> DailyState:
        records = self._store.list_events_for_day(self.require_employee_id(employee_id), work_date)
        events = tuple(r.event for r in sorted(records, key=lambda r: r.clock_time))
        return DailyState(employee_id=employee_id, work_date=work_date, events=events)

    def _last_event(self, employee_id: int, now: datetime) -> AttendanceRecord | None:
        last = self._store.get_last_event_for_day(employee_id, now.date())
        if last is None and minute_of_day(now) < MORNING_START:
            # Only a session opened last evening, or a night shift still running, crosses midnight.
            previous = self._store.get_last_event_for_day(employee_id, now.date() - timedelta(days=1))
            if previous is not None and carries_over_midnight(previous.event, now):
                last = previous
        return last

    def _history(self, employee_id: int, now: datetime) -> HistoryFlags:
        # Only the 17:00-17:15 band depends on the day's history.
        if AFTERNOON_END <= minute_of_day(now) < EVENING_CLASSIFICATION_START:
            return HistoryFlags.lookup(self._store, employee_id, now.date())
        return UNKNOWN_HISTORY

    def _credit(self, kind, now: datetime, clock_in: AttendanceRecord | None) -> SessionCalculation:
        calc = self._hours.credit(kind, now, clock_in.clock_time if clock_in else None)
        if calc.missing_clock_in:
            logger.warning("No %s found for %s at %s; record flagged", kind.paired().value, kind.value, now.isoformat())
        return calc

    @staticmethod
    def require_employee_id(employee_id) -> int:
        try:
            value = int(employee_id)
        except (TypeError, ValueError):
            raise ValidationError(f"Mã nhân viên không hợp lệ: {employee_id!r}") from None
        if value <= 0:
            raise ValidationError(f"Mã nhân viên không hợp lệ: {employee_id!r}")
        return value
