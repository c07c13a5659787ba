from __future__ import annotations

from datetime import datetime

from .base import LatenessDecision, LatenessStrategy


class NeverLateStrategy(LatenessStrategy):
    """Clock-outs and evening/overtime arrivals have no lateness concept."""

    def decide(self, *, timestamp: datetime) -> LatenessDecision:
        return LatenessDecision(is_late=False)
