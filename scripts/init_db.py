from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import load_settings

from src.staff_directory.staff_directory.container import build_container_from_settings
from src.staff_directory.staff_directory.database.bootstrap import apply_schema, list_tables


def main() -> None:
    load_dotenv(override=False)
    container = build_container_from_settings(load_settings())

    apply_schema(container.conn)
    tables = list_tables(container.conn)
    print(f"OK: Applied schema -> {container.conn.describe()} (tables={len(tables)})")


if __name__ == "__main__":
    main()
