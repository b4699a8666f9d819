from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

import mysql.connector


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "DBConfig":
        """Build from a settings ``DB_CONFIG`` dict, filling local defaults."""
        return cls(
            host=str(values.get("host") or "localhost"),
            port=int(values.get("port") or 3306),
            user=str(values.get("user") or "root"),
            password=str(values.get("password") or ""),
            database=str(values.get("database") or "hrmstech_db"),
        )


class DatabaseConnection:
    """Opens a short-lived MySQL connection per unit of work."""

    def __init__(self, config: DBConfig):
        self.config = config

    def connect(self, *, select_database: bool = True):
        options = {
            "host": self.config.host,
            "port": self.config.port,
            "user": self.config.user,
            "password": self.config.password,
        }
        if select_database:
            options["database"] = self.config.database
        return mysql.connector.connect(**options)
