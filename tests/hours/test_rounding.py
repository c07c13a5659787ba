import pytest

from src.attendance_engine.attendance_engine.core.enums import RoundingRule
from src.attendance_engine.attendance_engine.core.exceptions import ConfigurationError
from src.attendance_engine.attendance_engine.hours.rounding import RoundingPolicy


@pytest.mark.parametrize(
    "lateness, worked, expected",
    [
        (0, 60, 1.0),
        (5, 60, 1.0),
        (6, 60, 0.5),
        (30, 60, 0.5),
        (31, 60, 0.0),
        (0, 30, 1.0),
        (0, 29, 0.0),
        (10, 29, 0.0),
    ],
)
def test_hour_credit_is_a_step_function_of_lateness(lateness, worked, expected):
    assert RoundingPolicy().hour_credit(lateness_minutes=lateness, worked_minutes=worked) == expected


def test_per_hour_lateness_only_penalizes_the_first_hour():
    policy = RoundingPolicy()

    # 08:10 -> 12:00: first hour half credit, the rest full.
    credit = policy.per_hour_lateness(
        lateness_reference=490, work_start=490, work_end=720, window_start=480, window_end=720
    )

    assert credit == 3.5


def test_per_hour_lateness_partial_last_hour():
    policy = RoundingPolicy()

    # 08:00 -> 10:20: two full hours, 20 minutes is not enough for the third.
    assert policy.per_hour_lateness(
        lateness_reference=480, work_start=480, work_end=620, window_start=480, window_end=720
    ) == 2.0


def test_per_hour_lateness_outside_window_is_zero():
    assert RoundingPolicy().per_hour_lateness(
        lateness_reference=1100, work_start=1100, work_end=1200, window_start=480, window_end=720
    ) == 0.0


@pytest.mark.parametrize("minutes, expected", [(0, 0.0), (-5, 0.0), (29, 0.0), (30, 0.5), (89, 1.0), (90, 1.5)])
def test_simple_half_hour(minutes, expected):
    assert RoundingPolicy().simple_half_hour(minutes) == expected


@pytest.mark.parametrize("minutes, expected", [(24, 0.0), (25, 0.5), (55, 0.5), (56, 1.0), (85, 1.5), (116, 2.0)])
def test_evening_tail_thresholds(minutes, expected):
    assert RoundingPolicy().evening_tail(minutes) == expected


@pytest.mark.parametrize("clock_in, expected", [(1020, 1.0), (1035, 1.0), (1036, 0.5), (1079, 0.5), (1080, 0.0)])
def test_evening_first_hour_depends_on_arrival(clock_in, expected):
    assert RoundingPolicy().evening_first_hour(clock_in) == expected


def test_evening_session_splits_first_hour_and_tail():
    # 17:05 -> 19:30
    assert RoundingPolicy().evening_session(1025, 1170) == (1.0, 1.5)


def test_evening_session_starting_after_first_hour():
    # 18:20 -> 20:00: no first-hour credit, 100 minutes of tail.
    assert RoundingPolicy().evening_session(1100, 1200) == (0.0, 1.5)


def test_overtime_flat_grace_is_not_bucketed():
    policy = RoundingPolicy()

    assert policy.overtime_flat_grace(110) == pytest.approx(95 / 60)
    assert policy.overtime_flat_grace(10) == 0.0


def test_early_morning_bonus_flat_for_punctual_arrival():
    policy = RoundingPolicy()

    assert policy.early_morning_bonus(360, 480) == 2.0
    assert policy.early_morning_bonus(365, 480) == 2.0


def test_early_morning_bonus_per_hour_when_late():
    policy = RoundingPolicy()

    # 06:06: first hour half credit, second hour full.
    assert policy.early_morning_bonus(366, 480) == 1.5
    # 06:40: only 20 minutes of the first hour worked.
    assert policy.early_morning_bonus(400, 480) == 1.0


def test_rounded_hours_dispatches_minute_only_rules():
    policy = RoundingPolicy()

    assert policy.rounded_hours(90, RoundingRule.SIMPLE_HALF_HOUR) == 1.5
    assert policy.rounded_hours(56, RoundingRule.EVENING_SESSION) == 1.0
    assert policy.rounded_hours(75, RoundingRule.OVERTIME_FLAT_GRACE) == 1.0


def test_rounded_hours_rejects_rules_needing_clock_in():
    with pytest.raises(ConfigurationError):
        RoundingPolicy().rounded_hours(60, RoundingRule.PER_HOUR_LATENESS)
