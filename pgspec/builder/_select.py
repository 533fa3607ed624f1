"""SELECT rendering."""

from pgspec.builder._base import ParameterBinder
from pgspec.builder._state import QueryState
from pgspec.core.codec import escape_identifier

__all__ = ("format_column", "render_count", "render_select", "render_where")


def format_column(column: str) -> str:
    """Quote a column name; ``*`` is left alone."""
    if column == "*":
        return column
    return escape_identifier(column)


def render_joins(state: QueryState) -> str:
    return " ".join(
        f"{join.join_type.value} JOIN {escape_identifier(join.table)} ON {join.condition}" for join in state.joins
    )


def render_where(state: QueryState, binder: ParameterBinder) -> str:
    if not state.where:
        return ""
    return f" WHERE {binder.render_all(state.where)}"


def render_select(state: QueryState, binder: ParameterBinder) -> str:
    columns = ", ".join(format_column(column) for column in state.select) if state.select else "*"
    sql = f"SELECT {columns} FROM {escape_identifier(state.table)}"

    if state.joins:
        sql += f" {render_joins(state)}"

    sql += render_where(state, binder)

    if state.group_by:
        sql += " GROUP BY " + ", ".join(format_column(column) for column in state.group_by)

    if state.order_by:
        sql += " ORDER BY " + ", ".join(
            f"{format_column(order.column)} {order.direction.value}" for order in state.order_by
        )

    if state.limit > 0:
        sql += f" LIMIT {state.limit}"

    if state.offset > 0:
        sql += f" OFFSET {state.offset}"

    return sql


def render_count(state: QueryState, binder: ParameterBinder) -> str:
    """Count the rows the current joins and conditions match."""
    sql = f'SELECT COUNT(*) AS "count" FROM {escape_identifier(state.table)}'
    if state.joins:
        sql += f" {render_joins(state)}"
    return sql + render_where(state, binder)
