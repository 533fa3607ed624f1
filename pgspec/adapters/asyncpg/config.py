"""asyncpg pool configuration."""

import asyncio
from contextlib import asynccontextmanager, contextmanager
from typing import TYPE_CHECKING, Any, Optional, TypedDict, Union

import asyncpg
from asyncpg import Record
from asyncpg import create_pool as asyncpg_create_pool
from asyncpg.pool import Pool
from typing_extensions import NotRequired

from pgspec.adapters.asyncpg.driver import AsyncpgConnection, AsyncpgDriver
from pgspec.exceptions import DatabaseError
from pgspec.utils.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Awaitable, Callable, Iterator, Mapping

    from pgspec.config import PostgresSettings


__all__ = ("AsyncpgConfig", "AsyncpgConnectionConfig", "AsyncpgPoolConfig")

logger = get_logger("adapters.asyncpg")

CONNECTION_ERRORS = (OSError, asyncio.TimeoutError, asyncpg.PostgresError, asyncpg.InterfaceError)


@contextmanager
def _connection_errors(config: "Mapping[str, Any]") -> "Iterator[None]":
    try:
        yield
    except CONNECTION_ERRORS as e:
        msg = f"Could not connect to PostgreSQL at {config.get('host')}:{config.get('port')}: {e}"
        raise DatabaseError(msg) from e


class AsyncpgConnectionConfig(TypedDict, total=False):
    """Connection parameters accepted by :func:`asyncpg.connect`."""

    dsn: NotRequired[str]
    host: NotRequired[str]
    port: NotRequired[int]
    user: NotRequired[str]
    password: NotRequired[str]
    database: NotRequired[str]
    ssl: NotRequired[Any]
    timeout: NotRequired[float]
    command_timeout: NotRequired[float]
    statement_cache_size: NotRequired[int]
    server_settings: NotRequired[dict[str, str]]


class AsyncpgPoolConfig(AsyncpgConnectionConfig, total=False):
    """Pool parameters accepted by :func:`asyncpg.create_pool`."""

    min_size: NotRequired[int]
    max_size: NotRequired[int]
    max_queries: NotRequired[int]
    max_inactive_connection_lifetime: NotRequired[float]
    setup: NotRequired["Callable[[AsyncpgConnection], Awaitable[None]]"]
    init: NotRequired["Callable[[AsyncpgConnection], Awaitable[None]]"]
    extra: NotRequired[dict[str, Any]]


class AsyncpgConfig:
    """Owns an asyncpg pool, created on first use."""

    def __init__(
        self,
        *,
        pool_config: "Optional[Union[AsyncpgPoolConfig, dict[str, Any]]]" = None,
        pool_instance: "Optional[Pool[Record]]" = None,
    ) -> None:
        """Initialize the configuration.

        Args:
            pool_config: Pool configuration parameters (TypedDict or dict)
            pool_instance: Existing pool instance to use
        """
        self.pool_config: dict[str, Any] = dict(pool_config) if pool_config else {}
        self.pool_instance = pool_instance

    @classmethod
    def from_settings(cls, settings: "PostgresSettings") -> "AsyncpgConfig":
        """Build a configuration from ``POSTGRES_*`` settings."""
        return cls(pool_config=settings.to_pool_config())

    def _get_pool_config_dict(self) -> "dict[str, Any]":
        """Pool parameters with ``extra`` merged in and ``None`` values dropped."""
        config: dict[str, Any] = dict(self.pool_config)
        extras = config.pop("extra", {})
        config.update(extras)
        return {k: v for k, v in config.items() if v is not None}

    async def create_pool(self) -> "Pool[Record]":
        config = self._get_pool_config_dict()
        logger.debug("Creating asyncpg pool for %s:%s", config.get("host"), config.get("port"))
        with _connection_errors(config):
            return await asyncpg_create_pool(**config)

    async def provide_pool(self) -> "Pool[Record]":
        if self.pool_instance is None:
            self.pool_instance = await self.create_pool()
        return self.pool_instance

    async def close_pool(self) -> None:
        if self.pool_instance is not None:
            await self.pool_instance.close()
            self.pool_instance = None

    @asynccontextmanager
    async def provide_connection(self) -> "AsyncGenerator[AsyncpgConnection, None]":
        """Acquire a pooled connection and release it on exit."""
        pool = await self.provide_pool()
        connection = None
        try:
            with _connection_errors(self.pool_config):
                connection = await pool.acquire()
            yield connection
        finally:
            if connection is not None:
                await pool.release(connection)

    @asynccontextmanager
    async def provide_driver(self) -> "AsyncGenerator[AsyncpgDriver, None]":
        async with self.provide_connection() as connection:
            yield AsyncpgDriver(connection)
