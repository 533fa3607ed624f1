"""UPDATE rendering."""

from pgspec.builder._base import ParameterBinder
from pgspec.builder._select import render_where
from pgspec.builder._state import QueryState
from pgspec.core.codec import escape_identifier
from pgspec.exceptions import MissingDataError

__all__ = ("render_update",)


def render_update(state: QueryState, binder: ParameterBinder) -> str:
    """Render ``UPDATE ... SET ... [WHERE ...]``.

    SET values are numbered before the WHERE parameters because they come
    first in the statement text.

    Raises:
        MissingDataError: If no update payload was given.
    """
    if not state.update_data:
        msg = "No update data provided"
        raise MissingDataError(msg)

    updates = ", ".join(f"{escape_identifier(column)} = {binder.bind(value)}" for column, value in state.update_data.items())
    sql = f"UPDATE {escape_identifier(state.table)} SET {updates}"
    return sql + render_where(state, binder)
