"""Builder that executes its own statements."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional

from pgspec.adapters.asyncpg.driver import parse_status_rowcount
from pgspec.builder import QueryKind, SQLGenerator

if TYPE_CHECKING:
    from pgspec.protocols import ExecuteDriver

__all__ = ("ExecResult", "QueryBuilder")


@dataclass(frozen=True)
class ExecResult:
    """Outcome of :meth:`QueryBuilder.exec`.

    ``rowcount`` is the number of selected rows for SELECT and the number of
    affected rows otherwise.
    """

    rowcount: int
    rows: list[Mapping[str, Any]] = field(default_factory=list)
    status: Optional[str] = None


class QueryBuilder(SQLGenerator):
    """A :class:`~pgspec.builder.SQLGenerator` bound to a driver.

    ``exec``, ``exec_one`` and ``exec_many`` clear the builder after running,
    keeping only the table. ``exec_count`` leaves the builder untouched.

    Example:
        >>> users = QueryBuilder("users", driver)
        >>> await users.select().where({"status": "active"}).exec_many()
    """

    __slots__ = ("driver",)

    def __init__(self, table: str, driver: "ExecuteDriver") -> None:
        super().__init__(table)
        self.driver = driver

    async def exec(self) -> ExecResult:
        result = self.get_sql_with_params()
        try:
            if self.state.kind is QueryKind.SELECT:
                rows = await self.driver.select(result.sql, *result.params)
                return ExecResult(rowcount=len(rows), rows=list(rows))
            status = await self.driver.execute(result.sql, *result.params)
            return ExecResult(rowcount=parse_status_rowcount(status), status=status)
        finally:
            self.clear()

    async def exec_one(self) -> Optional[Mapping[str, Any]]:
        result = self.get_sql_with_params()
        try:
            return await self.driver.select_one(result.sql, *result.params)
        finally:
            self.clear()

    async def exec_many(self) -> list[Mapping[str, Any]]:
        result = self.get_sql_with_params()
        try:
            return list(await self.driver.select(result.sql, *result.params))
        finally:
            self.clear()

    async def exec_count(self) -> int:
        """Count the rows matching the current joins and conditions."""
        result = self.count()
        value = await self.driver.select_value(result.sql, *result.params)
        return int(value or 0)
