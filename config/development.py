import os

import platformdirs

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Local desktop store lives in the per-user data directory
DATA_DIR = os.getenv("DATA_DIR", platformdirs.user_data_dir("staff-directory"))

# "sqlite" (default) or "mysql"
DB_BACKEND = os.getenv("DB_BACKEND", "sqlite")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "staff_directory"),
}

# Apply the schema on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

# Empty means: discover the user's Downloads folder
DOWNLOADS_DIR = os.getenv("DOWNLOADS_DIR", "")

ORGANIZATION = os.getenv("ORGANIZATION", "Divisional Forest Office")
LOCATION = os.getenv("LOCATION", "Vavuniya, Sri Lanka")
