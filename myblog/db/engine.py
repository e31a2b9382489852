"""
Database engine and session factory.

Usage:
    from myblog.db.config import DBConfig
    from myblog.db.engine import open_database, make_session_factory

    engine = open_database(DBConfig.from_settings(settings))
    SessionLocal = make_session_factory(engine)

    with SessionLocal() as session:
        # perform database operations
        pass
"""

import logging

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from myblog.utils.logging_setup import parse_level

from .config import DBConfig
from .drivers import DriverResolver, get_driver

logger = logging.getLogger(__name__)


def open_database(config: DBConfig, resolver: DriverResolver = get_driver) -> Engine:
    """
    Resolve the configured driver and open a pooled engine.

    Args:
        config: Merged database configuration
        resolver: Name -> driver lookup; the process-wide registry by default

    Raises:
        DriverNotFoundError: if no driver is registered under the name
        DriverError: if the backend fails to connect
    """
    driver = resolver(config.driver.driver)
    if parse_level(config.log_level) <= logging.DEBUG:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)
    logger.info(f"Connecting to {config.driver.driver} database")
    return driver.connect(config.driver)


def make_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autoflush=False)
