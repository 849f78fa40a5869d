import os

from .config import Config, DB_CONFIG  # noqa: F401

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")
DEBUG = False
LOG_LEVEL = Config.LOG_LEVEL
API_BASE_URL = Config.API_BASE_URL

PRESENT_THRESHOLD_MINUTES = Config.PRESENT_THRESHOLD_MINUTES
PARTIAL_FLOOR_MINUTES = Config.PARTIAL_FLOOR_MINUTES
WEEK_START = Config.WEEK_START
LIVE_TICK_SECONDS = Config.LIVE_TICK_SECONDS
FUTURE_SKEW_TOLERANCE_SECONDS = Config.FUTURE_SKEW_TOLERANCE_SECONDS

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
