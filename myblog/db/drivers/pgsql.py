"""PostgreSQL-family backend via psycopg."""

from sqlalchemy.engine import URL

from .base import Driver, DriverConfig
from .registry import register_driver

DEFAULT_SSLMODE = "disable"


class PostgreSQLDriver(Driver):
    name = "postgres"
    default_port = 5432

    def sslmode(self, config: DriverConfig) -> str:
        return config.sslmode or DEFAULT_SSLMODE

    def dsn(self, config: DriverConfig) -> str:
        return (
            f"host={config.host} port={self.port(config)} user={config.user} "
            f"password={config.password} dbname={config.database} "
            f"sslmode={self.sslmode(config)} connect_timeout=5&statement_timeout=30000"
        )

    def url(self, config: DriverConfig) -> URL:
        return URL.create(
            "postgresql+psycopg",
            username=config.user or None,
            password=config.password or None,
            host=config.host,
            port=self.port(config),
            database=config.database or None,
            query={"sslmode": self.sslmode(config)},
        )

    def connect_args(self, config: DriverConfig) -> dict:
        return {"connect_timeout": 5, "options": "-c statement_timeout=30000"}


register_driver("postgres", PostgreSQLDriver())
register_driver("pgsql", PostgreSQLDriver())
