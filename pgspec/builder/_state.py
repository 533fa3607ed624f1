"""Immutable query state and the pure transformations applied to it.

Every function here returns a new :class:`QueryState`; nothing is mutated in
place. :class:`~pgspec.builder.SQLGenerator` wraps these functions to offer a
chaining interface.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace
from typing import Any, Optional, Union

from pgspec.builder._base import Fragment, JoinType, OnConflict, QueryKind, SortDirection, freeze_columns
from pgspec.builder._conditions import Condition, build_conditions
from pgspec.exceptions import SQLBuilderError

__all__ = (
    "Join",
    "OrderBy",
    "QueryState",
    "add_group_by",
    "add_join",
    "add_order_by",
    "add_select",
    "add_where",
    "reset",
    "set_delete",
    "set_insert",
    "set_limit",
    "set_offset",
    "set_table",
    "set_update",
)


@dataclass(frozen=True)
class Join:
    table: str
    condition: str
    join_type: JoinType = JoinType.INNER


@dataclass(frozen=True)
class OrderBy:
    column: str
    direction: SortDirection = SortDirection.ASC


@dataclass(frozen=True)
class QueryState:
    """Everything a statement needs to render.

    ``insert_rows`` and ``update_data`` hold copies of the caller's payload.
    """

    table: str
    kind: QueryKind = QueryKind.SELECT
    select: tuple[str, ...] = ()
    joins: tuple[Join, ...] = ()
    where: tuple[Fragment, ...] = ()
    group_by: tuple[str, ...] = ()
    order_by: tuple[OrderBy, ...] = ()
    limit: int = 0
    offset: int = 0
    insert_rows: Optional[tuple[Mapping[str, Any], ...]] = None
    update_data: Optional[Mapping[str, Any]] = None
    on_conflict: Optional[OnConflict] = None


def set_table(state: QueryState, table: str) -> QueryState:
    return replace(state, table=table)


def add_select(state: QueryState, columns: Sequence[str]) -> QueryState:
    """Append selected columns; no columns selects ``*``."""
    selected = freeze_columns(columns) if columns else ("*",)
    return replace(state, kind=QueryKind.SELECT, select=state.select + selected)


def add_join(
    state: QueryState, table: str, condition: str, join_type: Union[str, JoinType] = JoinType.INNER
) -> QueryState:
    join = Join(table=table, condition=condition, join_type=JoinType.coerce(join_type))
    return replace(state, joins=(*state.joins, join))


def add_where(state: QueryState, condition: Condition) -> QueryState:
    return replace(state, where=state.where + build_conditions(condition))


def add_group_by(state: QueryState, columns: Sequence[str]) -> QueryState:
    return replace(state, group_by=state.group_by + freeze_columns(columns))


def add_order_by(
    state: QueryState, column: str, direction: Union[str, SortDirection] = SortDirection.ASC
) -> QueryState:
    order = OrderBy(column=column, direction=SortDirection.coerce(direction))
    return replace(state, order_by=(*state.order_by, order))


def _check_count(name: str, value: int) -> int:
    if value < 0:
        msg = f"{name} must not be negative, got {value}"
        raise SQLBuilderError(msg)
    return int(value)


def set_limit(state: QueryState, limit: int) -> QueryState:
    return replace(state, limit=_check_count("LIMIT", limit))


def set_offset(state: QueryState, offset: int) -> QueryState:
    return replace(state, offset=_check_count("OFFSET", offset))


def set_insert(
    state: QueryState,
    rows: Union[Mapping[str, Any], Sequence[Mapping[str, Any]], None],
    on_conflict: Union[OnConflict, Mapping[str, Any], None] = None,
) -> QueryState:
    """Switch to INSERT with one row or a batch of rows.

    An empty or missing payload is accepted here and rejected when the
    statement is rendered.
    """
    if rows is None:
        frozen_rows = None
    elif isinstance(rows, Mapping):
        frozen_rows = (dict(rows),)
    else:
        frozen_rows = tuple(dict(row) for row in rows)
    return replace(
        state,
        kind=QueryKind.INSERT,
        insert_rows=frozen_rows,
        on_conflict=OnConflict.coerce(on_conflict),
    )


def set_update(state: QueryState, data: Optional[Mapping[str, Any]]) -> QueryState:
    return replace(state, kind=QueryKind.UPDATE, update_data=dict(data) if data is not None else None)


def set_delete(state: QueryState) -> QueryState:
    return replace(state, kind=QueryKind.DELETE)


def reset(state: QueryState) -> QueryState:
    """Drop every clause and payload; only the table survives."""
    return QueryState(table=state.table)
