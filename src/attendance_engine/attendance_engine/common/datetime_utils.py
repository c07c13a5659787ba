from __future__ import annotations

from datetime import date, datetime

from ..core.constants import MINUTES_PER_DAY
from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"Ngày không hợp lệ (YYYY-MM-DD): {value!r}") from None


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def minute_of_day(value: datetime) -> int:
    return value.hour * 60 + value.minute


def normalized_span(clock_in: datetime, clock_out: datetime) -> tuple[int, int, bool]:
    """Return (in_minutes, out_minutes, overnight) on the clock-in day's axis.

    A clock-out earlier in the day than the clock-in crosses midnight, so a
    full day is added to it.
    """
    start = minute_of_day(clock_in)
    end = minute_of_day(clock_out)
    overnight = end < start
    if overnight:
        end += MINUTES_PER_DAY
    return start, end, overnight


def format_minutes(minutes: int) -> str:
    """Render minutes as HH:MM, marking values past midnight."""
    hours, mins = divmod(int(minutes), 60)
    if hours >= 24:
        return f"{hours - 24:02d}:{mins:02d} (+1 day)"
    return f"{hours:02d}:{mins:02d}"
