"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# Global attendance lock row (seeded by schema.sql).
ATTENDANCE_LOCK_KEY = "attendance"
EXAM_LOCK_PREFIX = "exam:"
MAX_LOCK_KEY_LENGTH = 100

# Login streak windows, in hours.
STREAK_CONTINUE_HOURS = 24
STREAK_RESET_HOURS = 48
STREAK_DAYS_PER_LEVEL = 7

DEFAULT_POOL_SIZE = 5
DEFAULT_CONNECTION_TIMEOUT = 10
