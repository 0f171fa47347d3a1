import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "workforce_db"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Shift length beyond which worked minutes count as overtime.
STANDARD_SHIFT_HOURS = float(os.getenv("STANDARD_SHIFT_HOURS", "9"))
# Organization day boundary as a fixed UTC offset (345 = UTC+05:45).
ORG_UTC_OFFSET_MINUTES = int(os.getenv("ORG_UTC_OFFSET_MINUTES", "345"))

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: seed the default role permissions when the table is empty
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "1")))
