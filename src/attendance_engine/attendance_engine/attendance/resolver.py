from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Callable

from ..common.datetime_utils import minute_of_day
from ..core.constants import (
    AFTERNOON_END,
    EARLY_MORNING_START,
    EVENING_CLASSIFICATION_START,
    EVENING_START,
    MORNING_START,
    NIGHT_SHIFT_START,
)
from ..core.enums import ClockEventKind
from ..core.exceptions import StoreUnavailableError
from .model import ClockEvent
from .repository import AttendanceStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HistoryFlags:
    """What the store knows about today's sessions; ``None`` means unknown."""

    has_completed_sessions: bool | None = None
    has_pending_clock_ins: bool | None = None

    @property
    def known(self) -> bool:
        return self.has_completed_sessions is not None and self.has_pending_clock_ins is not None

    @property
    def is_first_session_of_day(self) -> bool:
        return self.known and not self.has_completed_sessions and not self.has_pending_clock_ins

    @classmethod
    def lookup(cls, store: AttendanceStore, employee_id: int, work_date: date) -> "HistoryFlags":
        try:
            return cls(
                has_completed_sessions=bool(store.has_completed_sessions_today(employee_id, work_date)),
                has_pending_clock_ins=bool(store.has_pending_clock_ins_today(employee_id, work_date)),
            )
        except StoreUnavailableError as e:
            logger.warning("History lookup failed for employee %s on %s: %s", employee_id, work_date, e)
            return cls()


UNKNOWN_HISTORY = HistoryFlags()


@dataclass(frozen=True)
class Resolution:
    kind: ClockEventKind
    work_date: date
    overnight_continuation: bool = False


def classify_by_time(now: datetime) -> ClockEventKind:
    """Kind of a scan with nothing before it to pair with."""
    minutes = minute_of_day(now)
    if minutes >= NIGHT_SHIFT_START:
        return ClockEventKind.OVERTIME_IN
    if minutes >= EVENING_CLASSIFICATION_START:
        return ClockEventKind.EVENING_IN
    return ClockEventKind.MORNING_IN if now.hour < 12 else ClockEventKind.AFTERNOON_IN


def is_overnight_continuation(last: ClockEvent, now: datetime) -> bool:
    return (
        last.kind.is_in
        and minute_of_day(now) < MORNING_START
        and minute_of_day(last.timestamp) >= AFTERNOON_END
        and last.timestamp.date() != now.date()
    )


def is_night_shift_resumption(last: ClockEvent, now: datetime) -> bool:
    """Quét trước 06:00 khi ca tối/tăng ca kết thúc từ 17:00 hôm trước."""
    if last.kind not in (ClockEventKind.EVENING_OUT, ClockEventKind.OVERTIME_OUT):
        return False
    since = datetime.combine(now.date() - timedelta(days=1), time.min, tzinfo=now.tzinfo)
    since += timedelta(minutes=EVENING_START)
    return minute_of_day(now) < EARLY_MORNING_START and since <= last.timestamp <= now


def carries_over_midnight(last: ClockEvent, now: datetime) -> bool:
    """Whether an event from the previous work date still decides ``now``."""
    return is_overnight_continuation(last, now) or is_night_shift_resumption(last, now)


def _after_clock_in(last: ClockEvent, now: datetime) -> Resolution:
    if is_overnight_continuation(last, now):
        logger.info(
            "Overnight continuation of %s from %s, attributed to %s",
            last.kind.value,
            last.timestamp.isoformat(),
            last.work_date.isoformat(),
        )
        return Resolution(kind=last.kind.paired(), work_date=last.work_date, overnight_continuation=True)
    return Resolution(kind=last.kind.paired(), work_date=now.date())


def _after_morning_out(last: ClockEvent, now: datetime) -> Resolution:
    # No explicit lunch event: the next scan opens the afternoon.
    return Resolution(kind=ClockEventKind.AFTERNOON_IN, work_date=now.date())


def _after_afternoon_out(last: ClockEvent, now: datetime) -> Resolution:
    if last.timestamp.date() == now.date():
        return Resolution(kind=ClockEventKind.EVENING_IN, work_date=now.date())
    return Resolution(kind=classify_by_time(now), work_date=now.date())


def _after_overtime_out(last: ClockEvent, now: datetime) -> Resolution:
    # Inside the evening/night windows this opens a new overtime segment,
    # before them a new regular day starts.
    if is_night_shift_resumption(last, now):
        return Resolution(kind=ClockEventKind.OVERTIME_IN, work_date=now.date())
    return Resolution(kind=classify_by_time(now), work_date=now.date())


_HANDLERS: dict[ClockEventKind, Callable[[ClockEvent, datetime], Resolution]] = {
    ClockEventKind.MORNING_IN: _after_clock_in,
    ClockEventKind.AFTERNOON_IN: _after_clock_in,
    ClockEventKind.EVENING_IN: _after_clock_in,
    ClockEventKind.OVERTIME_IN: _after_clock_in,
    ClockEventKind.MORNING_OUT: _after_morning_out,
    ClockEventKind.AFTERNOON_OUT: _after_afternoon_out,
    ClockEventKind.EVENING_OUT: _after_overtime_out,
    ClockEventKind.OVERTIME_OUT: _after_overtime_out,
}


class ClockTypeResolver:
    """Decide the kind of a new scan from the last event and the time.

    A pure function of ``(last_event, now, history)``: the history flags are
    looked up by the caller so that no query happens inside the decision.
    """

    def resolve_event(
        self,
        last_event: ClockEvent | None,
        now: datetime,
        history: HistoryFlags = UNKNOWN_HISTORY,
    ) -> Resolution:
        if (last_event is None or last_event.kind.is_out) and self._explicit_evening_arrival(now, history):
            logger.info("17:00 arrival with no sessions today at %s: evening_in", now.isoformat())
            return Resolution(kind=ClockEventKind.EVENING_IN, work_date=now.date())

        if last_event is None:
            return Resolution(kind=classify_by_time(now), work_date=now.date())

        return _HANDLERS[last_event.kind](last_event, now)

    def resolve(
        self,
        last_event: ClockEvent | None,
        now: datetime,
        history: HistoryFlags = UNKNOWN_HISTORY,
    ) -> ClockEventKind:
        return self.resolve_event(last_event, now, history).kind

    @staticmethod
    def _explicit_evening_arrival(now: datetime, history: HistoryFlags) -> bool:
        minutes = minute_of_day(now)
        return AFTERNOON_END <= minutes < EVENING_CLASSIFICATION_START and history.is_first_session_of_day
