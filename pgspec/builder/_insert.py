"""INSERT and upsert rendering."""

from pgspec.builder._base import ParameterBinder
from pgspec.builder._state import QueryState
from pgspec.core.codec import escape_identifier
from pgspec.exceptions import MissingDataError

__all__ = ("render_insert",)


def render_insert(state: QueryState, binder: ParameterBinder) -> str:
    """Render a single or multi-row INSERT.

    The column list comes from the first row. Upsert updates bind the first
    row's values only.

    Raises:
        MissingDataError: If there is no row to insert or the first row is empty.
    """
    if state.insert_rows is None:
        msg = "No insert data provided"
        raise MissingDataError(msg)
    if not state.insert_rows:
        msg = "No data to insert"
        raise MissingDataError(msg)

    first_row = state.insert_rows[0]
    columns = list(first_row.keys())
    if not columns:
        msg = "Insert row has no columns"
        raise MissingDataError(msg)

    values = ", ".join(
        "(" + ", ".join(binder.bind(row.get(column)) for column in columns) + ")" for row in state.insert_rows
    )
    quoted_columns = ", ".join(escape_identifier(column) for column in columns)
    sql = f"INSERT INTO {escape_identifier(state.table)} ({quoted_columns}) VALUES {values}"

    conflict = state.on_conflict
    if conflict is not None:
        if conflict.columns:
            sql += " ON CONFLICT (" + ", ".join(escape_identifier(column) for column in conflict.columns) + ")"
        else:
            sql += " ON CONFLICT"
        if conflict.update:
            updates = ", ".join(
                f"{escape_identifier(column)} = {binder.bind(first_row.get(column))}" for column in conflict.update
            )
            sql += f" DO UPDATE SET {updates}"
        else:
            sql += " DO NOTHING"

    return sql
