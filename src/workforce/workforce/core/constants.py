"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_STANDARD_SHIFT_HOURS = 9
DEFAULT_ORG_UTC_OFFSET_MINUTES = 5 * 60 + 45

HALF_DAY_THRESHOLD_HOURS = 4
FULL_DAY_HOURS = 9
LATE_AFTER_HOUR = 10
