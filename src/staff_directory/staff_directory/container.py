from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from .core.constants import DATABASE_FILENAME, LOCATION, ORGANIZATION
from .core.exceptions import ConfigurationError
from .database.connection import MYSQL, SQLITE, DBConfig, DatabaseConnection, SQLiteConfig
from .documents.service import DocumentService
from .staff.service import StaffService
from .staff.sql_staff_repository import SQLStaffRepository


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    staff_repo: SQLStaffRepository

    staff_service: StaffService
    document_service: DocumentService


def build_db_config(
    *, db_backend: str, data_dir: Union[str, Path], db_config: Optional[dict] = None
) -> Union[DBConfig, SQLiteConfig]:
    backend = (db_backend or SQLITE).lower()
    if backend == SQLITE:
        return SQLiteConfig(path=Path(data_dir).expanduser() / DATABASE_FILENAME)
    if backend == MYSQL:
        if not db_config:
            raise ConfigurationError("DB_CONFIG is required for the mysql backend")
        return DBConfig(
            host=str(db_config["host"]),
            port=int(db_config.get("port", 3306)),
            user=str(db_config["user"]),
            password=str(db_config["password"]),
            database=str(db_config["database"]),
        )
    raise ConfigurationError(f"Unknown DB_BACKEND: {db_backend}")


def build_container(
    *,
    db_backend: str = SQLITE,
    data_dir: Union[str, Path],
    db_config: Optional[dict] = None,
    downloads_dir: Optional[Union[str, Path]] = None,
    organization: str = ORGANIZATION,
    location: str = LOCATION,
) -> Container:
    config = build_db_config(db_backend=db_backend, data_dir=data_dir, db_config=db_config)
    conn = DatabaseConnection.get_instance(config)

    staff_repo = SQLStaffRepository(conn)

    staff_service = StaffService(staff_repo)
    document_service = DocumentService(
        staff_service,
        downloads_dir=downloads_dir or None,
        organization=organization,
        location=location,
    )

    return Container(
        conn=conn,
        staff_repo=staff_repo,
        staff_service=staff_service,
        document_service=document_service,
    )


def build_container_from_settings(settings) -> Container:
    return build_container(
        db_backend=getattr(settings, "DB_BACKEND", SQLITE),
        data_dir=getattr(settings, "DATA_DIR"),
        db_config=getattr(settings, "DB_CONFIG", None),
        downloads_dir=getattr(settings, "DOWNLOADS_DIR", None),
        organization=getattr(settings, "ORGANIZATION", ORGANIZATION),
        location=getattr(settings, "LOCATION", LOCATION),
    )
