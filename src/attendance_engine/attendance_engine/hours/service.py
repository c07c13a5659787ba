from __future__ import annotations

from datetime import datetime

from .calculator import SessionCalculation, SessionHoursCalculator, as_kind
from .reallocator import RegularHoursReallocator


class HoursCreditService:
    """Calculator + 8-hour rule, the way every recorded _out is credited."""

    def __init__(
        self,
        *,
        calculator: SessionHoursCalculator | None = None,
        reallocator: RegularHoursReallocator | None = None,
    ):
        self._calculator = calculator or SessionHoursCalculator()
        self._reallocator = reallocator or RegularHoursReallocator()

    def credit(self, kind, clock_out: datetime, clock_in: datetime | None = None) -> SessionCalculation:
        kind = as_kind(kind)
        calc = self._calculator.calculate(kind, clock_out, clock_in)
        if kind.is_in or calc.missing_clock_in:
            return calc

        stats = calc.statistics
        if kind.family.is_regular:
            hours = self._reallocator.reallocate(calc.hours.regular_hours, calc.hours.overtime_hours, kind.family)
            stats.note("8-hour regular rule applied")
        else:
            hours = calc.hours
            stats.note("8-hour rule skipped - pure overtime session")

        stats.regular_hours = hours.regular_hours
        stats.overtime_hours = hours.overtime_hours
        return SessionCalculation(hours=hours, statistics=stats)
