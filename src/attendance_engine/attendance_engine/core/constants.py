"""Constants and defaults.

All boundaries are minutes from midnight of the session's day. Values past
1440 belong to the next calendar day.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MINUTES_PER_DAY = 24 * 60

EARLY_MORNING_START = 6 * 60
MORNING_START = 8 * 60
MORNING_END = 12 * 60
LUNCH_START = 12 * 60
LUNCH_END = 13 * 60
AFTERNOON_START = 13 * 60
AFTERNOON_END = 17 * 60
EVENING_START = 17 * 60
EVENING_FIRST_HOUR_END = 18 * 60
OVERTIME_END = 22 * 60
NIGHT_SHIFT_START = 22 * 60
NIGHT_SHIFT_END = 6 * 60 + MINUTES_PER_DAY

REGULAR_GRACE_MINUTES = 5
EARLY_MORNING_GRACE_MINUTES = 5
LATE_HALF_CREDIT_LIMIT_MINUTES = 30
MIN_WORKED_MINUTES_PER_HOUR = 30
EVENING_GRACE_MINUTES = 15
OVERTIME_SESSION_GRACE_MINUTES = 15

# Scans from 17:15 on are classified as evening_in without history.
EVENING_CLASSIFICATION_START = EVENING_START + EVENING_GRACE_MINUTES

REQUIRED_REGULAR_HOURS = 8.0
HOURS_TOLERANCE = 0.01
