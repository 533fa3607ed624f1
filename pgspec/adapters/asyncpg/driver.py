"""asyncpg implementation of the pgspec driver protocols."""

import re
from collections.abc import AsyncIterator, Iterator, Mapping, Sequence
from contextlib import asynccontextmanager, contextmanager
from typing import TYPE_CHECKING, Any, Final, Optional, Union

import asyncpg
from asyncpg import Connection
from asyncpg.pool import PoolConnectionProxy

from pgspec.exceptions import DatabaseError
from pgspec.utils.logging import get_logger

if TYPE_CHECKING:
    from asyncpg.transaction import Transaction

__all__ = ("AsyncpgConnection", "AsyncpgDriver", "parse_status_rowcount")

logger = get_logger("adapters.asyncpg")

AsyncpgConnection = Union[Connection, PoolConnectionProxy]

ASYNCPG_STATUS_REGEX: Final[re.Pattern[str]] = re.compile(r"^([A-Z]+)(?:\s+(\d+))?\s+(\d+)$", re.IGNORECASE)


def parse_status_rowcount(status: Optional[str]) -> int:
    """Read the affected row count from a command status.

    Args:
        status: Status string like ``"INSERT 0 1"``, ``"UPDATE 3"`` or ``"DELETE 2"``.

    Returns:
        Number of affected rows, or 0 if the status carries none.
    """
    if not status:
        return 0
    match = ASYNCPG_STATUS_REGEX.match(status.strip())
    if match is None:
        return 0
    return int(match.group(3))


class AsyncpgDriver:
    """Runs statements on one asyncpg connection.

    Rows are returned as plain dictionaries; driver failures are re-raised as
    :class:`~pgspec.exceptions.DatabaseError`.
    """

    __slots__ = ("connection",)

    dialect = "postgres"

    def __init__(self, connection: "AsyncpgConnection") -> None:
        self.connection = connection

    @contextmanager
    def _handle_database_exceptions(self, sql: str) -> Iterator[None]:
        logger.debug("Executing: %s", sql)
        try:
            yield
        except asyncpg.PostgresError as e:
            msg = f"asyncpg database error: {e}"
            raise DatabaseError(msg) from e

    async def select(self, sql: str, *parameters: Any) -> list[Mapping[str, Any]]:
        with self._handle_database_exceptions(sql):
            records = await self.connection.fetch(sql, *parameters)
        return [dict(record) for record in records]

    async def select_one(self, sql: str, *parameters: Any) -> Optional[Mapping[str, Any]]:
        with self._handle_database_exceptions(sql):
            record = await self.connection.fetchrow(sql, *parameters)
        return dict(record) if record is not None else None

    async def select_value(self, sql: str, *parameters: Any) -> Any:
        with self._handle_database_exceptions(sql):
            return await self.connection.fetchval(sql, *parameters)

    async def execute(self, sql: str, *parameters: Any) -> str:
        """Run a statement and return its command status, e.g. ``"UPDATE 2"``."""
        with self._handle_database_exceptions(sql):
            return await self.connection.execute(sql, *parameters)

    async def execute_many(self, sql: str, parameters: Sequence[Sequence[Any]]) -> int:
        with self._handle_database_exceptions(sql):
            await self.connection.executemany(sql, parameters)
        return len(parameters)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator["Transaction"]:
        """Run the enclosed statements in one transaction.

        Commits on exit and rolls back when the block raises.
        """
        transaction = self.connection.transaction()
        await transaction.start()
        try:
            yield transaction
        except BaseException:
            await transaction.rollback()
            raise
        else:
            await transaction.commit()
