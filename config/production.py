import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "intern_attendance"),
}

CHECK_IN_WINDOW = os.getenv("CHECK_IN_WINDOW", "07:00-10:00")
CHECK_OUT_WINDOW = os.getenv("CHECK_OUT_WINDOW", "15:00-18:00")
APP_TIMEZONE = os.getenv("APP_TIMEZONE", "")

REPORT_DAYS = int(os.getenv("REPORT_DAYS", "7"))
HISTORY_LIMIT = int(os.getenv("HISTORY_LIMIT", "30"))

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
