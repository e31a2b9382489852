"""
Schema bootstrap and seeding.

Brings an empty or partial database up to the current schema and inserts
baseline content. Every phase is idempotent, so the bootstrap runs on each
start:

1. create tables (fatal on failure)
2. back-fill columns added after the first release
3. create indexes
4. insert missing default settings
5. seed the about page cards when there are none
6. import markdown files when there are no passages
7. create the default admin when there are no users (fatal on failure)

Phases 2 to 6 log failures as warnings and carry on.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable, Union

from sqlalchemy import Table, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.schema import CreateColumn, CreateIndex, CreateTable
from sqlalchemy.sql import text

from myblog.auth.passwords import hash_password
from myblog.core.errors import BootstrapError
from myblog.models import (
    AboutMainCard,
    AboutSubCard,
    Base,
    Passage,
    Setting,
    User,
)
from myblog.services.markdown_service import MarkdownImporter

from .repositories import (
    AboutMainCardRepository,
    PassageRepository,
    SettingRepository,
    UserRepository,
)
from .seeds import (
    ABOUT_CARDS,
    DEFAULT_ADMIN_EMAIL,
    DEFAULT_ADMIN_PASSWORD,
    DEFAULT_ADMIN_USERNAME,
    DEFAULT_SETTINGS,
)

logger = logging.getLogger(__name__)

# Columns that older databases may lack, per table.
BACKFILL_COLUMNS = {
    "passages": (
        "original_content",
        "file_path",
        "category",
        "visibility",
        "is_scheduled",
        "published_at",
        "show_title",
    ),
    "attachments": ("visibility", "show_in_passage"),
    "music_tracks": ("cover_image",),
}

# Lower-cased fragments of "already there" errors across sqlite, mysql and
# postgres.
_DUPLICATE_COLUMN_MARKERS = ("duplicate column name", "already exists")
_DUPLICATE_INDEX_MARKERS = ("already exists", "duplicate key name")


@dataclass
class BootstrapReport:
    tables: list[str] = field(default_factory=list)
    columns_added: list[str] = field(default_factory=list)
    indexes_created: list[str] = field(default_factory=list)
    settings_inserted: int = 0
    about_cards_seeded: bool = False
    passages_imported: int = 0
    admin_created: bool = False
    warnings: list[str] = field(default_factory=list)


def _is_duplicate(error: Exception, markers: tuple[str, ...]) -> bool:
    message = str(error).lower()
    return any(marker in message for marker in markers)


class SchemaBootstrap:
    """
    Runs the bootstrap phases against one engine.

    Args:
        engine: Target database
        markdown_dir: Root of the ``<year>/<month>/<day>/<title>.md`` tree
        password_hasher: Used for the default admin password
        clock: Source of "now" for imported passages
    """

    def __init__(
        self,
        engine: Engine,
        markdown_dir: Union[str, Path] = "markdown",
        password_hasher: Callable[[str], str] = hash_password,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.engine = engine
        self.markdown_dir = Path(markdown_dir)
        self.password_hasher = password_hasher
        self.clock = clock
        self.session_factory = sessionmaker(bind=engine, autoflush=False)
        self.metadata = Base.metadata

    def run(self) -> BootstrapReport:
        report = BootstrapReport()
        self.create_tables(report)
        self.backfill_columns(report)
        self.create_indexes(report)

        with self.session_factory() as db:
            self._guarded(report, "seed default settings", self.seed_settings, db)
            self._guarded(report, "seed about cards", self.seed_about_cards, db)
            self._guarded(report, "import markdown files", self.import_markdown, db)
            self.seed_admin(db, report)

        logger.info(
            f"Database bootstrap complete: {len(report.tables)} tables, "
            f"{len(report.columns_added)} columns added, "
            f"{len(report.indexes_created)} indexes created, "
            f"{report.settings_inserted} settings inserted, "
            f"{report.passages_imported} passages imported"
        )
        return report

    def _guarded(self, report: BootstrapReport, phase: str, func, db: Session) -> None:
        try:
            func(db, report)
        except SQLAlchemyError as e:
            db.rollback()
            message = f"failed to {phase}: {e}"
            logger.warning(message)
            report.warnings.append(message)

    # Phase 1

    def create_tables(self, report: BootstrapReport) -> None:
        """
        Raises:
            BootstrapError: if any table cannot be created
        """
        for table in self.metadata.sorted_tables:
            try:
                with self.engine.begin() as conn:
                    conn.execute(CreateTable(table, if_not_exists=True))
            except SQLAlchemyError as e:
                raise BootstrapError(
                    f"failed to create {table.name} table", str(e)
                ) from e
            report.tables.append(table.name)

    # Phase 2

    def backfill_columns(self, report: BootstrapReport) -> None:
        preparer = self.engine.dialect.identifier_preparer
        for table_name, column_names in BACKFILL_COLUMNS.items():
            table: Table = self.metadata.tables[table_name]
            for column_name in column_names:
                column_ddl = CreateColumn(table.c[column_name]).compile(
                    dialect=self.engine.dialect
                )
                statement = (
                    f"ALTER TABLE {preparer.format_table(table)} "
                    f"ADD COLUMN {column_ddl}"
                )
                try:
                    with self.engine.begin() as conn:
                        conn.execute(text(statement))
                except SQLAlchemyError as e:
                    if _is_duplicate(e, _DUPLICATE_COLUMN_MARKERS):
                        logger.debug(f"Column {table_name}.{column_name} already exists")
                        continue
                    message = f"failed to add column {table_name}.{column_name}: {e}"
                    logger.warning(message)
                    report.warnings.append(message)
                    continue
                logger.info(f"Added column {table_name}.{column_name}")
                report.columns_added.append(f"{table_name}.{column_name}")

    # Phase 3

    def create_indexes(self, report: BootstrapReport) -> None:
        inspector = inspect(self.engine)
        for table in self.metadata.sorted_tables:
            existing = {ix["name"] for ix in inspector.get_indexes(table.name)}
            for index in sorted(table.indexes, key=lambda ix: ix.name):
                if index.name in existing:
                    continue
                try:
                    with self.engine.begin() as conn:
                        conn.execute(CreateIndex(index, if_not_exists=True))
                except SQLAlchemyError as e:
                    if _is_duplicate(e, _DUPLICATE_INDEX_MARKERS):
                        continue
                    message = f"failed to create index {index.name}: {e}"
                    logger.warning(message)
                    report.warnings.append(message)
                    continue
                report.indexes_created.append(index.name)

    # Phase 4

    def seed_settings(self, db: Session, report: BootstrapReport) -> None:
        existing = SettingRepository(db).existing_keys()
        missing = [seed for seed in DEFAULT_SETTINGS if seed.key not in existing]
        for seed in missing:
            db.add(
                Setting(
                    key=seed.key,
                    value=seed.value,
                    type=seed.type,
                    description=seed.description,
                    category=seed.category,
                )
            )
        db.commit()
        report.settings_inserted = len(missing)
        if missing:
            logger.info(f"Inserted {len(missing)} default settings")

    # Phase 5

    def seed_about_cards(self, db: Session, report: BootstrapReport) -> None:
        if AboutMainCardRepository(db).count() > 0:
            logger.info("About cards already exist, skipping default cards")
            return

        for card in ABOUT_CARDS:
            fields = {k: v for k, v in card.items() if k != "sub_cards"}
            main_card = AboutMainCard(is_enabled=True, **fields)
            main_card.sub_cards = [
                AboutSubCard(is_enabled=True, **sub) for sub in card["sub_cards"]
            ]
            db.add(main_card)
        db.commit()
        report.about_cards_seeded = True
        logger.info("About cards inserted successfully")

    # Phase 6

    def import_markdown(self, db: Session, report: BootstrapReport) -> None:
        passages = PassageRepository(db)
        if passages.count() > 0:
            logger.info("Passages already exist, skipping markdown import")
            return

        importer = MarkdownImporter(self.markdown_dir, clock=self.clock)
        for document in importer.load_all():
            passage = Passage(
                title=document.title,
                content=document.content,
                original_content=document.original_content,
                summary=document.summary,
                author="管理员",
                tags="[]",
                status="published",
                file_path=document.file_path,
                visibility="public",
                is_scheduled=False,
                created_at=document.created_at,
                updated_at=self.clock(),
            )
            try:
                db.add(passage)
                db.commit()
            except SQLAlchemyError as e:
                db.rollback()
                message = f"failed to import {document.source}: {e}"
                logger.warning(message)
                report.warnings.append(message)
                continue
            report.passages_imported += 1
            logger.info(
                f"Imported: {document.file_path} "
                f"(date: {document.created_at:%Y-%m-%d})"
            )

    # Phase 7

    def seed_admin(self, db: Session, report: BootstrapReport) -> None:
        """
        Raises:
            BootstrapError: if the users table cannot be read or the admin
                cannot be inserted
        """
        users = UserRepository(db)
        try:
            if users.count() > 0:
                return
            db.add(
                User(
                    username=DEFAULT_ADMIN_USERNAME,
                    password=self.password_hasher(DEFAULT_ADMIN_PASSWORD),
                    email=DEFAULT_ADMIN_EMAIL,
                    role="admin",
                    status="active",
                )
            )
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            raise BootstrapError("failed to insert default admin", str(e)) from e
        report.admin_created = True
        logger.info("Default admin user inserted")


def bootstrap_database(
    engine: Engine, markdown_dir: Union[str, Path] = "markdown"
) -> BootstrapReport:
    """Run every bootstrap phase against ``engine``."""
    return SchemaBootstrap(engine, markdown_dir=markdown_dir).run()
