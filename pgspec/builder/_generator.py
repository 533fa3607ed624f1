"""Chaining SQL generator built on the immutable query state."""

from collections.abc import Mapping, Sequence
from typing import Any, Optional, Union

from typing_extensions import Self

from pgspec.builder import _state
from pgspec.builder._base import JoinType, OnConflict, SortDirection, SQLResult
from pgspec.builder._conditions import Condition
from pgspec.builder._render import render_count_state, render_state
from pgspec.builder._state import QueryState

__all__ = ("SQLGenerator",)


class SQLGenerator:
    """Fluent builder for parameterized PostgreSQL statements on one table.

    Each call replaces the held :class:`QueryState` and returns the generator,
    so calls chain. Instances are not safe to share between concurrent tasks.

    Example:
        >>> sql = SQLGenerator("users").select("id", "name").where({"status": "active"}).limit(10)
        >>> sql.get_sql_with_params()
        SQLResult(sql='SELECT "id", "name" FROM "users" WHERE "status" = $1 LIMIT 10', params=('active',))
    """

    __slots__ = ("_state",)

    def __init__(self, table: str) -> None:
        self._state = QueryState(table=table)

    @property
    def state(self) -> QueryState:
        """The current immutable query state."""
        return self._state

    @property
    def table(self) -> str:
        return self._state.table

    def select(self, *columns: str) -> Self:
        """Select columns. No columns selects ``*``."""
        self._state = _state.add_select(self._state, columns)
        return self

    def from_(self, table: str) -> Self:
        self._state = _state.set_table(self._state, table)
        return self

    def join(self, table: str, condition: str, join_type: Union[str, JoinType] = JoinType.INNER) -> Self:
        """Add a JOIN clause. ``condition`` is inserted verbatim."""
        self._state = _state.add_join(self._state, table, condition, join_type)
        return self

    def where(self, condition: Condition) -> Self:
        """Add WHERE conditions.

        Example:
            >>> SQLGenerator("users").where({"age": {"$gte": 18}}).where("deleted_at IS NULL").get_sql()
            'SELECT * FROM "users" WHERE "age" >= $1 AND deleted_at IS NULL'
        """
        self._state = _state.add_where(self._state, condition)
        return self

    def group_by(self, *columns: str) -> Self:
        self._state = _state.add_group_by(self._state, columns)
        return self

    def order_by(self, column: str, direction: Union[str, SortDirection] = SortDirection.ASC) -> Self:
        self._state = _state.add_order_by(self._state, column, direction)
        return self

    def limit(self, limit: int) -> Self:
        self._state = _state.set_limit(self._state, limit)
        return self

    def offset(self, offset: int) -> Self:
        self._state = _state.set_offset(self._state, offset)
        return self

    def insert(
        self,
        data: Optional[Mapping[str, Any]],
        on_conflict: Union[OnConflict, Mapping[str, Any], None] = None,
    ) -> Self:
        """Insert one row, optionally as an upsert."""
        self._state = _state.set_insert(self._state, data, on_conflict)
        return self

    def insert_many(
        self,
        rows: Optional[Sequence[Mapping[str, Any]]],
        on_conflict: Union[OnConflict, Mapping[str, Any], None] = None,
    ) -> Self:
        """Insert several rows sharing the first row's columns."""
        self._state = _state.set_insert(self._state, rows, on_conflict)
        return self

    def update(self, data: Optional[Mapping[str, Any]]) -> Self:
        self._state = _state.set_update(self._state, data)
        return self

    def delete(self) -> Self:
        self._state = _state.set_delete(self._state)
        return self

    def get_sql(self) -> str:
        """Render the statement text without its parameters."""
        return render_state(self._state).sql

    def get_sql_with_params(self) -> SQLResult:
        return render_state(self._state)

    def count(self) -> SQLResult:
        """Render a row count over the current joins and conditions."""
        return render_count_state(self._state)

    def clear(self) -> Self:
        """Reset every clause and payload, keeping the table."""
        self._state = _state.reset(self._state)
        return self

    def __repr__(self) -> str:
        return f"{type(self).__name__}(table={self._state.table!r}, kind={self._state.kind.value})"
