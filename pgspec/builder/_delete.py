"""DELETE rendering."""

from pgspec.builder._base import ParameterBinder
from pgspec.builder._select import render_where
from pgspec.builder._state import QueryState
from pgspec.core.codec import escape_identifier

__all__ = ("render_delete",)


def render_delete(state: QueryState, binder: ParameterBinder) -> str:
    return f"DELETE FROM {escape_identifier(state.table)}" + render_where(state, binder)
