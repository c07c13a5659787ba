from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable, Protocol

from ..common.datetime_utils import now_local

logger = logging.getLogger(__name__)


class ClockSource(Protocol):
    def current_date(self) -> date:
        raise NotImplementedError

    def current_datetime(self) -> datetime:
        raise NotImplementedError


class MonotonicClockSource(ClockSource):
    """Current date/time that never moves to an earlier calendar day.

    If the system clock is set back, the last date seen is kept and combined
    with the current wall-clock time of day.
    """

    def __init__(self, now: Callable[[], datetime] | None = None):
        self._now = now or now_local
        self._last_valid_date: date | None = None

    @property
    def last_valid_date(self) -> date | None:
        return self._last_valid_date

    def _guard(self, system_date: date) -> date:
        if self._last_valid_date is None or system_date >= self._last_valid_date:
            self._last_valid_date = system_date
            return system_date

        logger.warning(
            "System date went backward from %s to %s. Using last valid date.",
            self._last_valid_date.isoformat(),
            system_date.isoformat(),
        )
        return self._last_valid_date

    def current_date(self) -> date:
        return self._guard(self._now().date())

    def current_datetime(self) -> datetime:
        now = self._now()
        guarded = self._guard(now.date())
        if guarded != now.date():
            return datetime.combine(guarded, now.time())
        return now

    def is_date_change_valid(self, new_date: date) -> bool:
        if self._last_valid_date is None:
            return True
        if new_date < self._last_valid_date:
            logger.warning("Date moved backward by %d days", (self._last_valid_date - new_date).days)
            return False
        return True

    def force_update_date(self, new_date: date) -> None:
        logger.info("Manually updating date to %s", new_date.isoformat())
        self._last_valid_date = new_date

    def reset(self) -> None:
        self._last_valid_date = None


class FixedClockSource(ClockSource):
    """Clock pinned to one instant; used for reprocessing and tests."""

    def __init__(self, at: datetime):
        self._at = at

    def current_date(self) -> date:
        return self._at.date()

    def current_datetime(self) -> datetime:
        return self._at
