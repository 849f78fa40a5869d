import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "time_tracking_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"
API_BASE_URL = "http://testserver/api/time-tracking"

PRESENT_THRESHOLD_MINUTES = 420
PARTIAL_FLOOR_MINUTES = 0
WEEK_START = 0
LIVE_TICK_SECONDS = 0.01
FUTURE_SKEW_TOLERANCE_SECONDS = 120

AUTO_INIT_DB = False
