from __future__ import annotations

import logging

from ..core.constants import REQUIRED_REGULAR_HOURS
from ..core.enums import SessionFamily
from .model import HoursResult

logger = logging.getLogger(__name__)


class RegularHoursReallocator:
    """8-hour completion rule: overtime tops up missing regular hours.

    Only morning/afternoon sessions take part; evening and overtime sessions
    always stay pure overtime.
    """

    def __init__(self, required_regular_hours: float = REQUIRED_REGULAR_HOURS):
        self._required = float(required_regular_hours)

    @property
    def required_regular_hours(self) -> float:
        return self._required

    def reallocate(self, regular_hours: float, overtime_hours: float, family: SessionFamily) -> HoursResult:
        if not family.is_regular or regular_hours >= self._required or overtime_hours <= 0:
            return HoursResult.of(regular_hours, overtime_hours)

        converted = min(self._required - regular_hours, overtime_hours)
        logger.debug(
            "Converting %.2f overtime hours to regular (regular %.2f, required %.2f)",
            converted,
            regular_hours,
            self._required,
        )
        return HoursResult.of(regular_hours + converted, overtime_hours - converted)
