from __future__ import annotations

from datetime import datetime

from ...common.datetime_utils import minute_of_day
from ...core.constants import REGULAR_GRACE_MINUTES
from .base import LatenessDecision, LatenessStrategy


class SessionStartStrategy(LatenessStrategy):
    """Late once the scan is past the session start plus the grace period."""

    def __init__(self, session_start: int, grace_minutes: int = REGULAR_GRACE_MINUTES):
        self._session_start = int(session_start)
        self._grace_minutes = int(grace_minutes)

    @property
    def threshold(self) -> int:
        return self._session_start + self._grace_minutes

    def decide(self, *, timestamp: datetime) -> LatenessDecision:
        minutes = minute_of_day(timestamp)
        if minutes > self.threshold:
            return LatenessDecision(is_late=True, lateness_minutes=minutes - self._session_start)
        return LatenessDecision(is_late=False)
