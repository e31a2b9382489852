"""
Tests for database configuration loading.

Tests cover:
- Environment variables through Settings
- Command line flag overlay
- Per-driver defaults (ports, SQLite path resolution)
"""

import argparse
from datetime import timedelta

import pytest

from myblog.core.settings import Settings
from myblog.db.config import DBConfig, add_db_arguments
from myblog.db.drivers import DriverConfig


@pytest.fixture
def parser():
    parser = argparse.ArgumentParser()
    add_db_arguments(parser)
    return parser


@pytest.fixture
def clean_env(monkeypatch):
    for name in (
        "DB_DRIVER",
        "DB_HOST",
        "DB_PORT",
        "DB_USER",
        "DB_PASSWORD",
        "DB_NAME",
        "DB_FILE",
        "DB_MAX_CONNS",
        "DB_AUTO_MIGRATE",
        "DB_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestFromSettings:
    """Tests for DBConfig.from_settings."""

    def test_defaults(self, clean_env):
        """Should default to an embedded database at data/app.db."""
        config = DBConfig.from_settings(Settings(_env_file=None))

        assert config.driver.driver == "sqlite"
        assert config.driver.file_path == "data/app.db"
        assert config.driver.conn_max_lifetime == timedelta(minutes=30)
        assert config.driver.conn_max_idle_time == timedelta(minutes=10)
        assert config.auto_migrate is False
        assert config.log_level == "info"

    def test_environment(self, clean_env):
        """Should read DB_* environment variables."""
        clean_env.setenv("DB_DRIVER", "postgres")
        clean_env.setenv("DB_HOST", "db.internal")
        clean_env.setenv("DB_PORT", "6543")
        clean_env.setenv("DB_USER", "blog")
        clean_env.setenv("DB_MAX_CONNS", "40")
        clean_env.setenv("DB_AUTO_MIGRATE", "true")

        config = DBConfig.from_settings(Settings(_env_file=None))

        assert config.driver.driver == "postgres"
        assert config.driver.host == "db.internal"
        assert config.driver.port == 6543
        assert config.driver.user == "blog"
        assert config.driver.max_open_conns == 40
        assert config.auto_migrate is True


class TestFromArgs:
    """Tests for DBConfig.from_args."""

    def test_flags_override_environment(self, clean_env, parser):
        """Should let command line flags win over the environment."""
        clean_env.setenv("DB_DRIVER", "postgres")
        clean_env.setenv("DB_HOST", "env-host")
        args = parser.parse_args(["--db-driver", "mysql", "--db-name", "blog"])

        config = DBConfig.from_args(args, Settings(_env_file=None))

        assert config.driver.driver == "mysql"
        assert config.driver.host == "env-host"
        assert config.driver.database == "blog"
        assert config.driver.port == 3306

    def test_unset_flags_leave_settings(self, clean_env, parser):
        clean_env.setenv("DB_DRIVER", "pgsql")
        config = DBConfig.from_args(parser.parse_args([]), Settings(_env_file=None))

        assert config.driver.driver == "pgsql"
        assert config.driver.port == 5432
        assert config.auto_migrate is False

    def test_migrate_and_log_level(self, clean_env, parser):
        args = parser.parse_args(
            ["--db-driver", "postgres", "--db-migrate", "--db-log-level", "debug"]
        )
        config = DBConfig.from_args(args, Settings(_env_file=None))

        assert config.auto_migrate is True
        assert config.log_level == "debug"

    def test_integer_flags(self, clean_env, parser):
        args = parser.parse_args(
            ["--db-driver", "mariadb", "--db-port", "3307", "--db-max-conns", "5", "--db-max-idle", "2"]
        )
        config = DBConfig.from_args(args, Settings(_env_file=None))

        assert config.driver.port == 3307
        assert config.driver.max_open_conns == 5
        assert config.driver.max_idle_conns == 2


class TestWithDriverDefaults:
    """Tests for DBConfig.with_driver_defaults."""

    def test_sqlite_relative_path(self, tmp_path):
        """Should resolve a relative SQLite path and create its directory."""
        config = DBConfig(driver=DriverConfig(driver="sqlite", file_path="data/blog.db"))
        config.with_driver_defaults(base_dir=tmp_path)

        assert config.driver.file_path == str(tmp_path / "data" / "blog.db")
        assert (tmp_path / "data").is_dir()

    def test_sqlite_absolute_path(self, tmp_path):
        path = tmp_path / "abs" / "x.db"
        config = DBConfig(driver=DriverConfig(driver="sqlite3", file_path=str(path)))
        config.with_driver_defaults(base_dir=tmp_path / "ignored")

        assert config.driver.file_path == str(path)
        assert path.parent.is_dir()

    def test_sqlite_empty_path(self, tmp_path):
        """Should default an empty path to data/app.db."""
        config = DBConfig(driver=DriverConfig(driver="sqlite", file_path=""))
        config.with_driver_defaults(base_dir=tmp_path)

        assert config.driver.file_path == str(tmp_path / "data" / "app.db")

    @pytest.mark.parametrize(
        "driver, port",
        [("mysql", 3306), ("mariadb", 3306), ("postgres", 5432), ("pgsql", 5432)],
    )
    def test_default_ports(self, driver, port):
        config = DBConfig(driver=DriverConfig(driver=driver)).with_driver_defaults()
        assert config.driver.port == port

    def test_explicit_port_kept(self):
        config = DBConfig(driver=DriverConfig(driver="mysql", port=3310))
        assert config.with_driver_defaults().driver.port == 3310
