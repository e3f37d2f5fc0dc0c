"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_CHECK_IN_WINDOW = "07:00-10:00"
DEFAULT_CHECK_OUT_WINDOW = "15:00-18:00"

DEFAULT_HISTORY_LIMIT = 30
DEFAULT_REPORT_DAYS = 7
MAX_REPORT_DAYS = 366
DEFAULT_SIGNUP_LIMIT = 5

UNKNOWN_FULL_NAME = "Unknown User"
UNKNOWN_SCHOOL = "Not specified"
