import os


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or "dev-secret-key"

    DB_USER = os.environ.get("DB_USER", "root")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = int(os.environ.get("DB_PORT", "3306"))
    DB_NAME = os.environ.get("DB_NAME", "time_tracking")

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
    API_BASE_URL = os.environ.get("API_BASE_URL", "http://localhost:5000/api/time-tracking")

    # Attendance policy and time windows
    PRESENT_THRESHOLD_MINUTES = int(os.environ.get("PRESENT_THRESHOLD_MINUTES", "420"))
    PARTIAL_FLOOR_MINUTES = int(os.environ.get("PARTIAL_FLOOR_MINUTES", "0"))
    WEEK_START = int(os.environ.get("WEEK_START", "0"))
    LIVE_TICK_SECONDS = float(os.environ.get("LIVE_TICK_SECONDS", "1"))
    FUTURE_SKEW_TOLERANCE_SECONDS = int(os.environ.get("FUTURE_SKEW_TOLERANCE_SECONDS", "120"))


DB_CONFIG = {
    "host": Config.DB_HOST,
    "port": Config.DB_PORT,
    "user": Config.DB_USER,
    "password": Config.DB_PASSWORD,
    "database": Config.DB_NAME,
}
