"""
Shared fixtures for the MyBlog backend tests.

Database fixtures use a throwaway SQLite file under ``tmp_path`` opened
through the real driver registry, so pragmas and pooling are exercised too.
"""

import pytest
from fastapi.testclient import TestClient
from starlette.requests import Request

from myblog.auth.tokens import TokenService
from myblog.core.settings import Settings
from myblog.db.bootstrap import SchemaBootstrap
from myblog.db.config import DBConfig
from myblog.db.drivers import DriverConfig
from myblog.db.engine import make_session_factory, open_database
from myblog.main import create_app

TEST_SECRET = "test-secret-key-for-session-tokens-0123456789"


@pytest.fixture
def sqlite_config(tmp_path):
    """DBConfig pointing at a fresh SQLite file."""
    return DBConfig(
        driver=DriverConfig(driver="sqlite", file_path=str(tmp_path / "data" / "app.db"))
    ).with_driver_defaults()


@pytest.fixture
def engine(sqlite_config):
    engine = open_database(sqlite_config)
    yield engine
    engine.dispose()


@pytest.fixture
def markdown_dir(tmp_path):
    path = tmp_path / "markdown"
    path.mkdir()
    return path


@pytest.fixture
def bootstrapped_engine(engine, markdown_dir):
    SchemaBootstrap(engine, markdown_dir=markdown_dir).run()
    return engine


@pytest.fixture
def db_session(bootstrapped_engine):
    session_factory = make_session_factory(bootstrapped_engine)
    with session_factory() as session:
        yield session


@pytest.fixture
def token_service():
    return TokenService(secret=TEST_SECRET)


@pytest.fixture
def make_request():
    """Build a bare Starlette request carrying the given headers."""

    def _make(headers=None):
        raw_headers = [
            (name.lower().encode("latin-1"), value.encode("latin-1"))
            for name, value in (headers or {}).items()
        ]
        scope = {
            "type": "http",
            "method": "GET",
            "path": "/",
            "query_string": b"",
            "headers": raw_headers,
        }
        return Request(scope)

    return _make


@pytest.fixture
def app_settings(tmp_path):
    static_dir = tmp_path / "static"
    static_dir.mkdir()
    return Settings(
        _env_file=None,
        db_driver="sqlite",
        db_file=str(tmp_path / "app.db"),
        markdown_dir=str(tmp_path / "markdown"),
        static_dir=str(static_dir),
        jwt_secret=TEST_SECRET,
        jwt_expire_hours=24,
    )


@pytest.fixture
def client(app_settings):
    """TestClient for a fully started application (bootstrap included)."""
    app = create_app(app_settings)
    with TestClient(app) as test_client:
        yield test_client
