from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.

    Database options use the ``DB_*`` environment prefix and correspond 1:1 to
    the ``--db-*`` command line flags (see ``myblog.db.config``).

    Optional:
      - JWT_SECRET: signing key for session tokens. When unset the key is
        read from JWT_SECRET_FILE, or generated and saved there (mode 0600)
        on first start.
      - MARKDOWN_DIR: root of the ``<yyyy>/<mm>/<dd>/<title>.md`` tree imported
        on first start.
    """

    model_config = SettingsConfigDict(
        env_file=".env", extra="ignore", populate_by_name=True
    )

    # Database
    db_driver: str = Field(default="sqlite", validation_alias="DB_DRIVER")
    db_host: str = Field(default="localhost", validation_alias="DB_HOST")
    db_port: int = Field(default=0, validation_alias="DB_PORT")
    db_user: str = Field(default="", validation_alias="DB_USER")
    db_password: str = Field(default="", validation_alias="DB_PASSWORD")
    db_name: str = Field(default="app.db", validation_alias="DB_NAME")
    db_sslmode: str = Field(default="disable", validation_alias="DB_SSLMODE")
    db_file: str = Field(default="data/app.db", validation_alias="DB_FILE")
    db_max_conns: int = Field(
        default=0,
        validation_alias="DB_MAX_CONNS",
        description="Maximum open connections (0 = driver default)",
    )
    db_max_idle: int = Field(
        default=0,
        validation_alias="DB_MAX_IDLE",
        description="Maximum idle connections (0 = driver default)",
    )
    db_conn_max_lifetime: int = Field(
        default=30,
        validation_alias="DB_CONN_MAX_LIFETIME",
        description="Connection max lifetime in minutes",
    )
    db_conn_max_idle_time: int = Field(
        default=10,
        validation_alias="DB_CONN_MAX_IDLE_TIME",
        description="Connection max idle time in minutes",
    )
    db_auto_migrate: bool = Field(default=False, validation_alias="DB_AUTO_MIGRATE")
    db_log_level: str = Field(default="info", validation_alias="DB_LOG_LEVEL")

    # Server
    log_level: str = Field(default="info", validation_alias="LOG_LEVEL")
    log_file: Optional[str] = Field(default=None, validation_alias="LOG_FILE")
    tls_cert: str = Field(default="", validation_alias="TLS_CERT")
    tls_key: str = Field(default="", validation_alias="TLS_KEY")
    enable_tls: bool = Field(default=False, validation_alias="ENABLE_TLS")
    kafka_brokers: str = Field(
        default="",
        validation_alias="KAFKA_BROKERS",
        description="Comma-separated message bus brokers (empty = disabled)",
    )
    kafka_group_id: str = Field(
        default="myblog-consumer-group", validation_alias="KAFKA_GROUP_ID"
    )

    # Session tokens
    jwt_secret: Optional[str] = Field(
        default=None,
        validation_alias="JWT_SECRET",
        description="Secret key for token signing. MUST be set in production.",
    )
    jwt_secret_file: str = Field(
        default="data/jwt-secret",
        validation_alias="JWT_SECRET_FILE",
        description="Where the signing key is persisted when JWT_SECRET is unset",
    )
    jwt_expire_hours: int = Field(
        default=24,
        validation_alias="JWT_EXPIRE_HOURS",
        description="Token lifetime in hours",
    )

    # Content
    markdown_dir: str = Field(default="markdown", validation_alias="MARKDOWN_DIR")
    static_dir: str = Field(default="static", validation_alias="STATIC_DIR")


settings = Settings()
