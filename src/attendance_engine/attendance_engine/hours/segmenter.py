from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..common.datetime_utils import normalized_span
from ..core.constants import (
    AFTERNOON_END,
    AFTERNOON_START,
    EARLY_MORNING_GRACE_MINUTES,
    EARLY_MORNING_START,
    LUNCH_END,
    LUNCH_START,
    MORNING_END,
    MORNING_START,
    NIGHT_SHIFT_END,
    NIGHT_SHIFT_START,
    OVERTIME_END,
)
from ..core.enums import SegmentWindow, SessionFamily
from ..core.exceptions import ConfigurationError
from .model import SegmentOverlap


@dataclass(frozen=True)
class SegmentPlan:
    """Khoảng làm việc đã chuẩn hoá cùng các khung giờ nó phủ lên."""

    family: SessionFamily
    clock_in_minutes: int
    clock_out_minutes: int
    overnight: bool
    overlaps: tuple[SegmentOverlap, ...]
    lunch_break_excluded: bool = False

    @property
    def total_minutes(self) -> int:
        return max(self.clock_out_minutes - self.clock_in_minutes, 0)

    def get(self, window: SegmentWindow) -> SegmentOverlap | None:
        for overlap in self.overlaps:
            if overlap.window is window:
                return overlap
        return None


def _overlap(window: SegmentWindow, start: int, end: int, window_start: int, window_end: int) -> SegmentOverlap | None:
    lo = max(start, window_start)
    hi = min(end, window_end)
    if hi <= lo:
        return None
    return SegmentOverlap(window=window, start_minutes=lo, end_minutes=hi)


class SessionSegmenter:
    """Split a clock-in/clock-out interval into the fixed windows it overlaps."""

    def segment(self, clock_in: datetime, clock_out: datetime, family: SessionFamily) -> SegmentPlan:
        start, end, overnight = normalized_span(clock_in, clock_out)

        if family is SessionFamily.MORNING:
            overlaps, lunch_excluded = self._morning(start, end)
        elif family is SessionFamily.AFTERNOON:
            overlaps, lunch_excluded = self._afternoon(start, end), False
        elif family is SessionFamily.EVENING:
            overlaps, lunch_excluded = [SegmentOverlap(SegmentWindow.EVENING_SESSION, start, end)], False
        elif family is SessionFamily.OVERTIME:
            overlaps, lunch_excluded = [SegmentOverlap(SegmentWindow.OVERTIME_SESSION, start, end)], False
        else:
            raise ConfigurationError(f"Unknown session family: {family!r}")

        return SegmentPlan(
            family=family,
            clock_in_minutes=start,
            clock_out_minutes=end,
            overnight=overnight,
            overlaps=tuple(o for o in overlaps if o is not None),
            lunch_break_excluded=lunch_excluded,
        )

    def _morning(self, start: int, end: int) -> tuple[list, bool]:
        overlaps = []
        # Early-morning bonus only for arrivals from 05:55 up to 08:00.
        if EARLY_MORNING_START - EARLY_MORNING_GRACE_MINUTES <= start < MORNING_START:
            overlaps.append(
                _overlap(SegmentWindow.EARLY_MORNING, max(start, EARLY_MORNING_START), end, EARLY_MORNING_START, MORNING_START)
            )
        overlaps.append(_overlap(SegmentWindow.MORNING, start, end, MORNING_START, MORNING_END))
        if end > AFTERNOON_START:
            overlaps.append(_overlap(SegmentWindow.AFTERNOON, start, end, AFTERNOON_START, AFTERNOON_END))
        overlaps.extend(self._overtime_tail(start, end))
        return overlaps, start < LUNCH_START and end > LUNCH_END

    def _afternoon(self, start: int, end: int) -> list:
        overlaps = []
        effective_start = start
        if LUNCH_START <= start < LUNCH_END:
            effective_start = AFTERNOON_START
        elif start < LUNCH_START:
            overlaps.append(_overlap(SegmentWindow.EARLY_AFTERNOON, start, end, MORNING_START, AFTERNOON_START))
        overlaps.append(_overlap(SegmentWindow.AFTERNOON, effective_start, end, AFTERNOON_START, AFTERNOON_END))
        overlaps.extend(self._overtime_tail(effective_start, end))
        return overlaps

    def _overtime_tail(self, start: int, end: int) -> list:
        return [
            _overlap(SegmentWindow.REGULAR_OVERTIME, start, end, AFTERNOON_END, OVERTIME_END),
            _overlap(SegmentWindow.NIGHT_SHIFT, start, end, NIGHT_SHIFT_START, NIGHT_SHIFT_END),
        ]
