import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "ops_tracker_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

API_BASE_URL = "http://testserver"
REQUEST_TIMEOUT_SECONDS = 5.0
STATUS_POLL_SECONDS = 30
SESSION_FILE = os.getenv("SESSION_FILE", "/tmp/ops_tracker_test_session.json")
