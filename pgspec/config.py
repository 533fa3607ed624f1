"""Connection settings loaded from ``POSTGRES_*`` environment variables.

Values may also come from a ``.env`` file in the working directory.
"""

from functools import lru_cache
from typing import Any

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from pgspec.exceptions import ImproperConfigurationError

__all__ = ("PostgresSettings", "get_settings", "load_settings")


class PostgresSettings(BaseSettings):
    """PostgreSQL connection and pool settings.

    Timeouts are in milliseconds.
    """

    host: str = "localhost"
    port: int = Field(default=5432, ge=1, le=65535)
    user: str = "postgres"
    password: str = ""
    database: str = "postgres"
    ssl: bool = False
    pool_max: int = Field(default=10, ge=1)
    pool_idle_timeout: int = Field(default=30000, ge=0)
    pool_connection_timeout: int = Field(default=2000, ge=0)

    model_config = SettingsConfigDict(
        env_prefix="POSTGRES_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    def to_pool_config(self) -> "dict[str, Any]":
        """Translate to :func:`asyncpg.create_pool` keyword arguments."""
        return {
            "host": self.host,
            "port": self.port,
            "user": self.user,
            "password": self.password,
            "database": self.database,
            "ssl": self.ssl,
            "min_size": 0,
            "max_size": self.pool_max,
            "max_inactive_connection_lifetime": self.pool_idle_timeout / 1000,
            "timeout": self.pool_connection_timeout / 1000,
        }


def load_settings(**overrides: Any) -> PostgresSettings:
    """Load settings, raising :class:`ImproperConfigurationError` when invalid."""
    try:
        return PostgresSettings(**overrides)
    except ValidationError as e:
        msg = f"Invalid PostgreSQL configuration: {e}"
        raise ImproperConfigurationError(msg) from e


@lru_cache
def get_settings() -> PostgresSettings:
    """Settings read once per process."""
    return load_settings()
