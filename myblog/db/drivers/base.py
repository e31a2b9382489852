"""Driver contract shared by every SQL backend."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import URL, Engine
from sqlalchemy.exc import ArgumentError, SQLAlchemyError

from myblog.core.errors import DriverError

logger = logging.getLogger(__name__)


@dataclass
class DriverConfig:
    """Connection options understood by every driver.

    ``file_path`` is only used by the embedded file backend. Zero values for
    the pool fields mean "use the driver default".
    """

    driver: str = "sqlite"
    host: str = "localhost"
    port: int = 0
    user: str = ""
    password: str = ""
    database: str = ""
    sslmode: str = ""
    file_path: str = ""
    max_open_conns: int = 0
    max_idle_conns: int = 0
    conn_max_lifetime: Optional[timedelta] = None
    conn_max_idle_time: Optional[timedelta] = None


@dataclass(frozen=True)
class PoolOptions:
    max_open: int
    max_idle: int
    max_lifetime: timedelta
    max_idle_time: timedelta

    def engine_kwargs(self) -> dict[str, Any]:
        """
        Translate the pool limits into ``create_engine`` keyword arguments.

        The idle connections become the persistent ``pool_size``; the rest of
        the open-connection budget is overflow. SQLAlchemy cannot evict a
        connection for sitting idle, so the idle time bounds ``pool_recycle``
        together with the lifetime, and ``pool_pre_ping`` catches stale
        connections in between.
        """
        if self.max_open <= 0 or self.max_idle <= 0:
            raise ValueError(
                f"pool limits must be positive (max_open={self.max_open}, "
                f"max_idle={self.max_idle})"
            )
        if self.max_lifetime.total_seconds() <= 0:
            raise ValueError("connection max lifetime must be positive")
        recycle = self.max_lifetime
        if self.max_idle_time.total_seconds() > 0:
            recycle = min(recycle, self.max_idle_time)
        idle = min(self.max_idle, self.max_open)
        return {
            "pool_size": idle,
            "max_overflow": self.max_open - idle,
            "pool_recycle": int(recycle.total_seconds()),
            "pool_pre_ping": True,
        }


class Driver(ABC):
    """A named SQL backend able to build its DSN and open a pooled engine."""

    name: str = ""
    default_port: int = 0
    default_max_open: int = 25
    default_max_idle: int = 10
    default_max_lifetime = timedelta(minutes=30)
    default_max_idle_time = timedelta(minutes=10)

    @abstractmethod
    def dsn(self, config: DriverConfig) -> str:
        """Native connection string for this backend."""

    @abstractmethod
    def url(self, config: DriverConfig) -> URL:
        """SQLAlchemy URL used to create the engine."""

    def connect_args(self, config: DriverConfig) -> dict[str, Any]:
        return {}

    def port(self, config: DriverConfig) -> int:
        return config.port or self.default_port

    def pool_options(self, config: DriverConfig) -> PoolOptions:
        return PoolOptions(
            max_open=config.max_open_conns or self.default_max_open,
            max_idle=config.max_idle_conns or self.default_max_idle,
            max_lifetime=config.conn_max_lifetime or self.default_max_lifetime,
            max_idle_time=config.conn_max_idle_time or self.default_max_idle_time,
        )

    def prepare(self, config: DriverConfig) -> None:
        """Hook run before the engine is created."""

    def configure(self, engine: Engine, config: DriverConfig) -> None:
        """Hook run after the engine is created (session setup)."""

    def connect(self, config: DriverConfig) -> Engine:
        """
        Open a pooled engine for ``config``.

        Raises:
            DriverError: on connect failure, pool configuration failure or a
                backend-specific session setup failure. The message is
                prefixed with the backend name.
        """
        self.prepare(config)

        try:
            pool_kwargs = self.pool_options(config).engine_kwargs()
        except ValueError as e:
            raise DriverError(self.name, "invalid pool configuration", str(e)) from e

        try:
            engine = create_engine(
                self.url(config),
                connect_args=self.connect_args(config),
                **pool_kwargs,
            )
        except (ArgumentError, TypeError) as e:
            raise DriverError(self.name, "invalid pool configuration", str(e)) from e
        except (SQLAlchemyError, ImportError) as e:
            raise DriverError(self.name, "failed to connect", str(e)) from e

        try:
            self.configure(engine, config)
        except DriverError:
            engine.dispose()
            raise
        except SQLAlchemyError as e:
            engine.dispose()
            raise DriverError(self.name, "failed to connect", str(e)) from e

        logger.info(f"Opened {self.name} database engine")
        return engine
