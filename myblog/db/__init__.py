"""
Database Package

This package provides driver selection, connection and session management,
schema bootstrap and repositories, using SQLAlchemy.

Modules:
- drivers: Driver registry and per-backend implementations
- config: Database options merged from environment and flags
- engine: open_database() and the session factory
- deps: Database session dependency for FastAPI
- bootstrap: Idempotent schema creation and seeding
- repositories: Per-entity data access

Environment Variables:
    DB_DRIVER: sqlite, sqlite3, mysql, mariadb, postgres or pgsql
    DB_FILE: SQLite database file (default: data/app.db)
"""
