from __future__ import annotations

from datetime import datetime

from ...common.datetime_utils import minute_of_day
from ...core.constants import EARLY_MORNING_GRACE_MINUTES, EARLY_MORNING_START, MORNING_START, REGULAR_GRACE_MINUTES
from .base import LatenessDecision
from .session_start_strategy import SessionStartStrategy


class MorningStrategy(SessionStartStrategy):
    """Morning clock-in: 08:05 threshold, but 06:00-06:05 early-shift arrivals are on time."""

    def __init__(self, grace_minutes: int = REGULAR_GRACE_MINUTES):
        super().__init__(MORNING_START, grace_minutes)

    def decide(self, *, timestamp: datetime) -> LatenessDecision:
        minutes = minute_of_day(timestamp)
        if EARLY_MORNING_START <= minutes <= EARLY_MORNING_START + EARLY_MORNING_GRACE_MINUTES:
            return LatenessDecision(is_late=False, note="early morning shift")
        return super().decide(timestamp=timestamp)
