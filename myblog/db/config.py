"""
Database configuration.

Options come from the environment (``DB_*`` variables, through
:class:`myblog.core.settings.Settings`) and may be overridden by command line
flags. Each flag ``--db-<name>`` corresponds to the variable ``DB_<NAME>``.
"""

import argparse
import os
from dataclasses import dataclass, field
from datetime import timedelta
from pathlib import Path
from typing import Optional

from myblog.core.settings import Settings

from .drivers import DriverConfig, available_drivers

SQLITE_DRIVERS = {"sqlite", "sqlite3"}
MYSQL_DRIVERS = {"mysql", "mariadb"}
POSTGRES_DRIVERS = {"postgres", "pgsql"}

# flag dest -> DriverConfig attribute
_FLAG_FIELDS = {
    "db_driver": "driver",
    "db_host": "host",
    "db_port": "port",
    "db_user": "user",
    "db_password": "password",
    "db_name": "database",
    "db_sslmode": "sslmode",
    "db_file": "file_path",
    "db_max_conns": "max_open_conns",
    "db_max_idle": "max_idle_conns",
}


@dataclass
class DBConfig:
    driver: DriverConfig = field(default_factory=DriverConfig)
    auto_migrate: bool = False
    log_level: str = "info"

    @classmethod
    def from_settings(cls, settings: Settings) -> "DBConfig":
        driver = DriverConfig(
            driver=settings.db_driver,
            host=settings.db_host,
            port=settings.db_port,
            user=settings.db_user,
            password=settings.db_password,
            database=settings.db_name,
            sslmode=settings.db_sslmode,
            file_path=settings.db_file,
            max_open_conns=settings.db_max_conns,
            max_idle_conns=settings.db_max_idle,
            conn_max_lifetime=timedelta(minutes=settings.db_conn_max_lifetime),
            conn_max_idle_time=timedelta(minutes=settings.db_conn_max_idle_time),
        )
        return cls(
            driver=driver,
            auto_migrate=settings.db_auto_migrate,
            log_level=settings.db_log_level,
        )

    @classmethod
    def from_args(
        cls, args: argparse.Namespace, settings: Optional[Settings] = None
    ) -> "DBConfig":
        """
        Build the configuration from the environment, then overlay every flag
        that was given on the command line.
        """
        config = cls.from_settings(settings or Settings())
        for dest, attr in _FLAG_FIELDS.items():
            value = getattr(args, dest, None)
            if value is not None:
                setattr(config.driver, attr, value)
        if getattr(args, "db_migrate", None):
            config.auto_migrate = True
        if getattr(args, "db_log_level", None) is not None:
            config.log_level = args.db_log_level
        return config.with_driver_defaults()

    def with_driver_defaults(self, base_dir: Optional[Path] = None) -> "DBConfig":
        """
        Apply per-backend defaults.

        SQLite: relative file paths are resolved against ``base_dir`` (default:
        current working directory) and the parent directory is created.
        MySQL/MariaDB: port 3306. PostgreSQL: port 5432.
        """
        d = self.driver
        if d.driver in SQLITE_DRIVERS:
            path = Path(d.file_path or os.path.join("data", "app.db"))
            if not path.is_absolute():
                path = (base_dir or Path.cwd()) / path
            path.parent.mkdir(mode=0o755, parents=True, exist_ok=True)
            d.file_path = str(path)
        elif d.driver in MYSQL_DRIVERS:
            if not d.port:
                d.port = 3306
        elif d.driver in POSTGRES_DRIVERS:
            if not d.port:
                d.port = 5432
        return self


def add_db_arguments(parser: argparse.ArgumentParser) -> None:
    """
    Register the ``--db-*`` flags on ``parser``.

    All flags default to None so that unset flags leave environment values
    untouched.
    """
    group = parser.add_argument_group("database")
    group.add_argument(
        "--db-driver",
        help=f"Database driver ({', '.join(available_drivers())})",
    )
    group.add_argument("--db-host", help="Database host")
    group.add_argument("--db-port", type=int, help="Database port")
    group.add_argument("--db-user", help="Database user")
    group.add_argument("--db-password", help="Database password")
    group.add_argument("--db-name", help="Database name")
    group.add_argument("--db-sslmode", help="SSL mode")
    group.add_argument("--db-file", help="SQLite file path")
    group.add_argument("--db-max-conns", type=int, help="Maximum connections")
    group.add_argument("--db-max-idle", type=int, help="Maximum idle connections")
    group.add_argument(
        "--db-migrate",
        action="store_true",
        default=None,
        help="Auto migrate database",
    )
    group.add_argument("--db-log-level", help="Database log level")
