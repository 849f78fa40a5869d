import os

from .config import Config, DB_CONFIG  # noqa: F401

SECRET_KEY = Config.SECRET_KEY
DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
API_BASE_URL = Config.API_BASE_URL

PRESENT_THRESHOLD_MINUTES = Config.PRESENT_THRESHOLD_MINUTES
PARTIAL_FLOOR_MINUTES = Config.PARTIAL_FLOOR_MINUTES
WEEK_START = Config.WEEK_START
LIVE_TICK_SECONDS = Config.LIVE_TICK_SECONDS
FUTURE_SKEW_TOLERANCE_SECONDS = Config.FUTURE_SKEW_TOLERANCE_SECONDS

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
