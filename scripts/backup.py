"""Backup the staff database.

SQLite: copies the database file. MySQL: uses `mysqldump` (must be installed).
"""

from __future__ import annotations

import shutil
import subprocess
import sys
from datetime import datetime
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import load_settings

from src.staff_directory.staff_directory.container import build_db_config
from src.staff_directory.staff_directory.database.connection import SQLiteConfig


def main() -> None:
    load_dotenv(override=False)
    settings = load_settings()
    db = build_db_config(
        db_backend=getattr(settings, "DB_BACKEND", "sqlite"),
        data_dir=settings.DATA_DIR,
        db_config=getattr(settings, "DB_CONFIG", None),
    )

    out_dir = REPO_ROOT / "backups"
    out_dir.mkdir(parents=True, exist_ok=True)
    ts = datetime.now().strftime("%Y%m%d_%H%M%S")

    if isinstance(db, SQLiteConfig):
        if not db.path.exists():
            raise SystemExit(f"Database file not found: {db.path}")
        out_file = out_dir / f"staff_database_{ts}.db"
        shutil.copy2(db.path, out_file)
        print(f"OK: Backup created: {out_file}")
        return

    out_file = out_dir / f"{db.database}_{ts}.sql"
    cmd = [
        "mysqldump",
        f"-h{db.host}",
        f"-P{db.port}",
        f"-u{db.user}",
        f"-p{db.password}",
        db.database,
    ]
    try:
        with out_file.open("wb") as f:
            subprocess.run(cmd, stdout=f, stderr=subprocess.PIPE, check=True)
        print(f"OK: Backup created: {out_file}")
    except FileNotFoundError:
        raise SystemExit("`mysqldump` not found. Install the MySQL client tools or back up with MySQL Workbench.")


if __name__ == "__main__":
    main()
