"""
CLI management commands for MyBlog.

Usage:
    python -m myblog.cli.commands migrate [--db-driver sqlite --db-file data/app.db ...]
    python -m myblog.cli.commands hash-password [PASSWORD]
    python -m myblog.cli.commands drivers
"""
from __future__ import annotations

import argparse
import getpass
import logging
import sys
from typing import Optional, Sequence

from myblog.auth.passwords import hash_password
from myblog.core.errors import AppError
from myblog.core.settings import Settings
from myblog.db.bootstrap import bootstrap_database
from myblog.db.config import DBConfig, add_db_arguments
from myblog.db.drivers import available_drivers
from myblog.db.engine import open_database
from myblog.utils.logging_setup import setup_logging

logger = logging.getLogger(__name__)


def cmd_migrate(args: argparse.Namespace) -> int:
    """Create or upgrade the schema and seed baseline content."""
    settings = Settings()
    config = DBConfig.from_args(args, settings)
    logger.info(f"Starting database bootstrap ({config.driver.driver})...")

    try:
        engine = open_database(config)
    except AppError as e:
        logger.error(f"Cannot open database: {e}")
        return 1

    try:
        report = bootstrap_database(
            engine, markdown_dir=args.markdown_dir or settings.markdown_dir
        )
    except AppError as e:
        logger.error(f"Bootstrap failed: {e}")
        return 1
    finally:
        engine.dispose()

    logger.info("Bootstrap completed successfully!")
    logger.info(
        f"Summary: tables={len(report.tables)} "
        f"columns_added={len(report.columns_added)} "
        f"indexes_created={len(report.indexes_created)} "
        f"settings_inserted={report.settings_inserted} "
        f"about_cards_seeded={report.about_cards_seeded} "
        f"passages_imported={report.passages_imported} "
        f"admin_created={report.admin_created}"
    )
    for warning in report.warnings:
        logger.warning(warning)
    return 0


def cmd_hash_password(args: argparse.Namespace) -> int:
    """Print the Argon2id hash of a password."""
    password = args.password or getpass.getpass("Password: ")
    if not password:
        logger.error("Password must not be empty")
        return 1
    print(hash_password(password))
    return 0


def cmd_drivers(args: argparse.Namespace) -> int:
    """List registered database drivers."""
    for name in available_drivers():
        print(name)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="MyBlog management commands",
        prog="python -m myblog.cli.commands",
    )
    parser.add_argument("--log-level", default=None, help="Log level (debug, info, warn, error)")
    parser.add_argument("--log-file", default=None, help="Also write logs to this file")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # migrate command
    migrate = subparsers.add_parser(
        "migrate",
        help="Create tables, indexes and baseline content",
    )
    add_db_arguments(migrate)
    migrate.add_argument("--markdown-dir", default=None, help="Markdown source directory")
    migrate.set_defaults(func=cmd_migrate)

    # hash-password command
    hash_cmd = subparsers.add_parser(
        "hash-password",
        help="Hash a password with Argon2id",
    )
    hash_cmd.add_argument("password", nargs="?", help="Password (prompted when omitted)")
    hash_cmd.set_defaults(func=cmd_hash_password)

    # drivers command
    drivers = subparsers.add_parser("drivers", help="List available database drivers")
    drivers.set_defaults(func=cmd_drivers)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not getattr(args, "func", None):
        parser.print_help()
        sys.exit(1)

    setup_logging(
        "myblog",
        level=args.log_level or Settings().log_level,
        log_file=args.log_file,
    )
    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
