from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Optional

import mysql.connector
from mysql.connector import pooling

from ..core.constants import DEFAULT_CONNECTION_TIMEOUT, DEFAULT_POOL_SIZE
from ..core.exceptions import StorageError


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    pool_size: int = DEFAULT_POOL_SIZE
    connection_timeout: int = DEFAULT_CONNECTION_TIMEOUT

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        return cls(
            host=str(db_config["host"]),
            port=int(db_config.get("port", 3306)),
            user=str(db_config["user"]),
            password=str(db_config["password"]),
            database=str(db_config["database"]),
            pool_size=int(db_config.get("pool_size", DEFAULT_POOL_SIZE)),
            connection_timeout=int(db_config.get("connection_timeout", DEFAULT_CONNECTION_TIMEOUT)),
        )


class DatabaseConnection:
    """Connection pool handle passed explicitly into every repository.

    Each operation borrows a connection with ``connect()`` and returns it to the
    pool by closing it. The pool itself is created lazily on first use.
    """

    def __init__(self, config: DBConfig, *, pool_name: str = "classroom_ledger"):
        self._config = config
        self._pool_name = pool_name
        self._pool: Optional[pooling.MySQLConnectionPool] = None
        self._pool_guard = threading.Lock()

    @property
    def config(self) -> DBConfig:
        return self._config

    def _get_pool(self) -> pooling.MySQLConnectionPool:
        with self._pool_guard:
            if self._pool is None:
                self._pool = pooling.MySQLConnectionPool(
                    pool_name=self._pool_name,
                    pool_size=int(self._config.pool_size),
                    host=self._config.host,
                    port=int(self._config.port),
                    user=self._config.user,
                    password=self._config.password,
                    database=self._config.database,
                    connection_timeout=int(self._config.connection_timeout),
                    autocommit=False,
                )
            return self._pool

    def connect(self):
        try:
            return self._get_pool().get_connection()
        except mysql.connector.Error as exc:
            raise StorageError(f"Could not acquire database connection: {exc}") from exc
