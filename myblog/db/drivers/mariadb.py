"""MySQL-family backend (MySQL, MariaDB) via PyMySQL."""

from sqlalchemy.engine import URL

from .base import Driver, DriverConfig
from .registry import register_driver


class MariaDBDriver(Driver):
    name = "mariadb"
    default_port = 3306

    def dsn(self, config: DriverConfig) -> str:
        return (
            f"{config.user}:{config.password}@tcp({config.host}:{self.port(config)})/"
            f"{config.database}"
            "?parseTime=true&loc=Local&timeout=5s&readTimeout=30s&writeTimeout=30s"
        )

    def url(self, config: DriverConfig) -> URL:
        return URL.create(
            "mysql+pymysql",
            username=config.user or None,
            password=config.password or None,
            host=config.host,
            port=self.port(config),
            database=config.database or None,
            query={"charset": "utf8mb4"},
        )

    def connect_args(self, config: DriverConfig) -> dict:
        return {"connect_timeout": 5, "read_timeout": 30, "write_timeout": 30}


register_driver("mariadb", MariaDBDriver())
register_driver("mysql", MariaDBDriver())
