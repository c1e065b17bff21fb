from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import mysql.connector

logger = logging.getLogger(__name__)

SQLITE = "sqlite"
MYSQL = "mysql"


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str


@dataclass(frozen=True)
class SQLiteConfig:
    path: Path


class DatabaseConnection:
    """Singleton-like DB connection factory.

    Note: We create short-lived connections per operation (safe for a single-user desktop backend).
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: Union[DBConfig, SQLiteConfig]):
        self._config = config

    @classmethod
    def get_instance(cls, config: Union[DBConfig, SQLiteConfig]) -> "DatabaseConnection":
        if cls._instance is None or cls._instance._config != config:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    @property
    def backend(self) -> str:
        return SQLITE if isinstance(self._config, SQLiteConfig) else MYSQL

    @property
    def config(self) -> Union[DBConfig, SQLiteConfig]:
        return self._config

    @property
    def placeholder(self) -> str:
        return "?" if self.backend == SQLITE else "%s"

    def connect(self):
        if isinstance(self._config, SQLiteConfig):
            self._config.path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(str(self._config.path))
            conn.row_factory = sqlite3.Row
            return conn

        return mysql.connector.connect(
            host=self._config.host,
            port=int(self._config.port),
            user=self._config.user,
            password=self._config.password,
            database=self._config.database,
        )

    def cursor(self, conn):
        if self.backend == SQLITE:
            return conn.cursor()
        return conn.cursor(dictionary=True)

    def describe(self) -> str:
        if isinstance(self._config, SQLiteConfig):
            return f"sqlite:{self._config.path}"
        return f"mysql:{self._config.user}@{self._config.host}:{self._config.port}/{self._config.database}"
