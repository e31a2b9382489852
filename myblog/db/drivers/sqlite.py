"""Embedded file backend (SQLite)."""

import logging
import os
import sqlite3
from datetime import timedelta

from sqlalchemy import event
from sqlalchemy.engine import URL, Engine

from myblog.core.errors import DriverError

from .base import Driver, DriverConfig
from .registry import register_driver

logger = logging.getLogger(__name__)

DSN_PARAMS = (
    "_journal=WAL",
    "_timeout=5000",
    "_sync=NORMAL",
    "_cache=shared",
    "_mutex=no",
)

# Applied to every new connection. WAL allows concurrent readers with a
# single writer.
PRAGMAS = (
    "PRAGMA foreign_keys = ON",
    "PRAGMA journal_mode = WAL",
    "PRAGMA synchronous = NORMAL",
    "PRAGMA cache_size = -10000",
    "PRAGMA busy_timeout = 5000",
    "PRAGMA secure_delete = FAST",
    "PRAGMA temp_store = MEMORY",
    "PRAGMA mmap_size = 268435456",
    "PRAGMA page_size = 4096",
)


class SQLiteDriver(Driver):
    name = "sqlite"
    default_max_open = 15
    default_max_idle = 5
    default_max_lifetime = timedelta(minutes=30)
    default_max_idle_time = timedelta(minutes=10)

    def dsn(self, config: DriverConfig) -> str:
        return f"file:{config.file_path}?{'&'.join(DSN_PARAMS)}"

    def url(self, config: DriverConfig) -> URL:
        return URL.create("sqlite", database=config.file_path)

    def connect_args(self, config: DriverConfig) -> dict:
        # Pooled connections are handed across request threads.
        return {"check_same_thread": False, "timeout": 5}

    def prepare(self, config: DriverConfig) -> None:
        db_dir = os.path.dirname(config.file_path)
        if not db_dir:
            return
        try:
            os.makedirs(db_dir, mode=0o755, exist_ok=True)
        except OSError as e:
            raise DriverError(
                self.name, f"failed to create database directory {db_dir}", str(e)
            ) from e

    def configure(self, engine: Engine, config: DriverConfig) -> None:
        event.listen(engine, "connect", apply_pragmas)

        # Open one connection now so pragma failures surface from connect().
        with engine.connect():
            pass


def apply_pragmas(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    try:
        for pragma in PRAGMAS:
            try:
                cursor.execute(pragma)
            except sqlite3.Error as e:
                raise DriverError(
                    "sqlite", f"failed to execute pragma {pragma!r}", str(e)
                ) from e
    finally:
        cursor.close()


register_driver("sqlite", SQLiteDriver())
register_driver("sqlite3", SQLiteDriver())
