import os

import platformdirs

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

DATA_DIR = os.getenv("DATA_DIR", platformdirs.user_data_dir("staff-directory"))

DB_BACKEND = os.getenv("DB_BACKEND", "sqlite")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "staff_directory"),
}

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

DOWNLOADS_DIR = os.getenv("DOWNLOADS_DIR", "")

ORGANIZATION = os.getenv("ORGANIZATION", "Divisional Forest Office")
LOCATION = os.getenv("LOCATION", "Vavuniya, Sri Lanka")
