"""
SQL driver registry.

Importing this package registers the built-in backends:

- sqlite, sqlite3: embedded file database
- mysql, mariadb: MySQL-family server (requires PyMySQL)
- postgres, pgsql: PostgreSQL server (requires psycopg)
"""

from .base import Driver, DriverConfig, PoolOptions
from .registry import (
    DriverRegistry,
    DriverResolver,
    available_drivers,
    get_driver,
    register_driver,
    registry,
)
from . import mariadb, pgsql, sqlite  # noqa: F401  (registration side effect)

__all__ = [
    "Driver",
    "DriverConfig",
    "DriverRegistry",
    "DriverResolver",
    "PoolOptions",
    "available_drivers",
    "get_driver",
    "register_driver",
    "registry",
]
