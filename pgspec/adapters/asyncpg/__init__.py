"""asyncpg adapter for pgspec."""

from pgspec.adapters.asyncpg.config import AsyncpgConfig, AsyncpgConnectionConfig, AsyncpgPoolConfig
from pgspec.adapters.asyncpg.driver import AsyncpgConnection, AsyncpgDriver, parse_status_rowcount
from pgspec.adapters.asyncpg.query import ExecResult, QueryBuilder

__all__ = (
    "AsyncpgConfig",
    "AsyncpgConnection",
    "AsyncpgConnectionConfig",
    "AsyncpgDriver",
    "AsyncpgPoolConfig",
    "ExecResult",
    "QueryBuilder",
    "parse_status_rowcount",
)
