"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

PRESENT_THRESHOLD_MINUTES = 420
PARTIAL_FLOOR_MINUTES = 0

# 0 = Monday ... 6 = Sunday (datetime.weekday() numbering)
DEFAULT_WEEK_START = 0

LIVE_TICK_SECONDS = 1.0
FUTURE_SKEW_TOLERANCE_SECONDS = 120

DEFAULT_API_BASE_URL = "http://localhost:5000/api/time-tracking"
DEFAULT_HTTP_TIMEOUT = 5.0
