from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class LatenessDecision:
    is_late: bool
    lateness_minutes: int = 0
    note: str | None = None


class LatenessStrategy(ABC):
    """Strategy Pattern: encapsulate how we decide whether a clock-in is late."""

    @abstractmethod
    def decide(self, *, timestamp: datetime) -> LatenessDecision:
        raise NotImplementedError
