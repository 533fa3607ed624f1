"""Dispatch a query state to the renderer for its kind."""

from collections.abc import Callable

from pgspec.builder._base import ParameterBinder, QueryKind, SQLResult
from pgspec.builder._delete import render_delete
from pgspec.builder._insert import render_insert
from pgspec.builder._select import render_count, render_select
from pgspec.builder._state import QueryState
from pgspec.builder._update import render_update
from pgspec.exceptions import UnsupportedOperationError
from pgspec.utils.logging import get_logger

__all__ = ("RENDERERS", "render_count_state", "render_state")

logger = get_logger("builder")

RENDERERS: "dict[QueryKind, Callable[[QueryState, ParameterBinder], str]]" = {
    QueryKind.SELECT: render_select,
    QueryKind.INSERT: render_insert,
    QueryKind.UPDATE: render_update,
    QueryKind.DELETE: render_delete,
}


def render_state(state: QueryState) -> SQLResult:
    """Render a state into SQL text and its parameters.

    Rendering never changes ``state``; the same state always renders the same
    result.

    Raises:
        UnsupportedOperationError: If the state's kind has no renderer.
    """
    renderer = RENDERERS.get(state.kind)
    if renderer is None:
        msg = f"Unsupported query type: {state.kind!r}"
        raise UnsupportedOperationError(msg)
    binder = ParameterBinder()
    sql = renderer(state, binder)
    logger.debug("Rendered %s statement: %s (%d parameters)", state.kind, sql, len(binder.params))
    return SQLResult(sql=sql, params=tuple(binder.params))


def render_count_state(state: QueryState) -> SQLResult:
    binder = ParameterBinder()
    sql = render_count(state, binder)
    return SQLResult(sql=sql, params=tuple(binder.params))
