import os
import tempfile

SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

DATA_DIR = os.getenv("DATA_DIR", os.path.join(tempfile.gettempdir(), "staff-directory-test"))

DB_BACKEND = "sqlite"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "staff_directory_test"),
}

AUTO_INIT_DB = True

DOWNLOADS_DIR = os.getenv("DOWNLOADS_DIR", os.path.join(DATA_DIR, "Downloads"))

ORGANIZATION = "Divisional Forest Office"
LOCATION = "Vavuniya, Sri Lanka"
