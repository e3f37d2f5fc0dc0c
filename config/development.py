import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "intern_attendance"),
}

# Attendance windows, local wall-clock time, inclusive
CHECK_IN_WINDOW = os.getenv("CHECK_IN_WINDOW", "07:00-10:00")
CHECK_OUT_WINDOW = os.getenv("CHECK_OUT_WINDOW", "15:00-18:00")

# IANA zone name; empty means the server's local time
APP_TIMEZONE = os.getenv("APP_TIMEZONE", "")

REPORT_DAYS = int(os.getenv("REPORT_DAYS", "7"))
HISTORY_LIMIT = int(os.getenv("HISTORY_LIMIT", "30"))

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
