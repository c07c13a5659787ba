from datetime import datetime

import pytest

from src.attendance_engine.attendance_engine.core.enums import SegmentWindow, SessionFamily
from src.attendance_engine.attendance_engine.core.exceptions import ConfigurationError
from src.attendance_engine.attendance_engine.hours.segmenter import SessionSegmenter


def at(h: int, m: int = 0, day: int = 3) -> datetime:
    return datetime(2025, 3, day, h, m)


def windows(plan):
    return {o.window: (o.start_minutes, o.end_minutes) for o in plan.overlaps}


def test_full_morning_session_covers_both_regular_windows():
    plan = SessionSegmenter().segment(at(8), at(17), SessionFamily.MORNING)

    assert windows(plan) == {
        SegmentWindow.MORNING: (480, 720),
        SegmentWindow.AFTERNOON: (780, 1020),
    }
    assert plan.lunch_break_excluded is True
    assert plan.overnight is False
    assert plan.total_minutes == 540


def test_early_morning_window_for_arrival_within_grace_before_six():
    plan = SessionSegmenter().segment(at(5, 58), at(9), SessionFamily.MORNING)

    assert windows(plan)[SegmentWindow.EARLY_MORNING] == (360, 480)
    assert windows(plan)[SegmentWindow.MORNING] == (480, 540)


def test_no_early_morning_window_for_very_early_arrival():
    plan = SessionSegmenter().segment(at(5, 50), at(9), SessionFamily.MORNING)

    assert SegmentWindow.EARLY_MORNING not in windows(plan)


def test_morning_session_runs_into_overtime_and_night():
    plan = SessionSegmenter().segment(at(8), at(23), SessionFamily.MORNING)

    assert windows(plan)[SegmentWindow.REGULAR_OVERTIME] == (1020, 1320)
    assert windows(plan)[SegmentWindow.NIGHT_SHIFT] == (1320, 1380)


def test_afternoon_clock_in_during_lunch_starts_at_one():
    plan = SessionSegmenter().segment(at(12, 30), at(17), SessionFamily.AFTERNOON)

    assert windows(plan) == {SegmentWindow.AFTERNOON: (780, 1020)}
    assert plan.clock_in_minutes == 750


def test_afternoon_clock_in_before_noon_is_early_arrival():
    plan = SessionSegmenter().segment(at(11), at(17, 30), SessionFamily.AFTERNOON)

    assert windows(plan) == {
        SegmentWindow.EARLY_AFTERNOON: (660, 780),
        SegmentWindow.AFTERNOON: (780, 1020),
        SegmentWindow.REGULAR_OVERTIME: (1020, 1050),
    }


def test_evening_session_crossing_midnight_is_one_segment():
    plan = SessionSegmenter().segment(at(23), at(1, 30, day=4), SessionFamily.EVENING)

    assert windows(plan) == {SegmentWindow.EVENING_SESSION: (1380, 1530)}
    assert plan.overnight is True
    assert plan.total_minutes == 150


def test_overtime_session_is_one_segment():
    plan = SessionSegmenter().segment(at(22), at(23, 50), SessionFamily.OVERTIME)

    assert windows(plan) == {SegmentWindow.OVERTIME_SESSION: (1320, 1430)}


def test_unknown_family_is_rejected():
    with pytest.raises(ConfigurationError):
        SessionSegmenter().segment(at(8), at(12), "lunch")
