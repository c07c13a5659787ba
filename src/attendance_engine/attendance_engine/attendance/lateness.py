from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..core.constants import AFTERNOON_START, REGULAR_GRACE_MINUTES
from ..core.enums import ClockEventKind
from .strategies.base import LatenessDecision, LatenessStrategy
from .strategies.morning_strategy import MorningStrategy
from .strategies.never_late_strategy import NeverLateStrategy
from .strategies.session_start_strategy import SessionStartStrategy


@dataclass
class LatenessClassifier:
    """Factory Pattern: choose the lateness strategy for a clock event kind."""

    grace_minutes: int = REGULAR_GRACE_MINUTES

    def for_kind(self, kind: ClockEventKind) -> LatenessStrategy:
        if kind is ClockEventKind.MORNING_IN:
            return MorningStrategy(self.grace_minutes)
        if kind is ClockEventKind.AFTERNOON_IN:
            return SessionStartStrategy(AFTERNOON_START, self.grace_minutes)
        return NeverLateStrategy()

    def decide(self, kind: ClockEventKind, timestamp: datetime) -> LatenessDecision:
        return self.for_kind(kind).decide(timestamp=timestamp)

    def is_late(self, kind: ClockEventKind, timestamp: datetime) -> bool:
        return self.decide(kind, timestamp).is_late
