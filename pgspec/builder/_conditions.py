"""Translate declarative filters into WHERE fragments.

A filter is either raw SQL text, passed through verbatim, or a mapping from
column name to a scalar (equality), ``None`` (``IS NULL``) or an operator
mapping such as ``{"$gte": 18, "$lt": 65}``. Operator names may be written
with or without the leading ``$``. Every column fragment is combined with
``AND``.
"""

from collections.abc import Mapping, Sequence
from typing import Any, Union

from pgspec.builder._base import Fragment, Parameter
from pgspec.core.codec import escape_identifier
from pgspec.exceptions import UnsupportedOperatorError

__all__ = ("COMPARISON_OPERATORS", "OPERATORS", "Condition", "build_conditions")

Condition = Union[str, Mapping[str, Any]]

COMPARISON_OPERATORS: dict[str, str] = {
    "eq": "=",
    "neq": "!=",
    "gt": ">",
    "gte": ">=",
    "lt": "<",
    "lte": "<=",
    "like": "LIKE",
}
OPERATORS: tuple[str, ...] = (*COMPARISON_OPERATORS, "in", "nin", "isNull")


def _normalize_operators(column: str, spec: Mapping[str, Any]) -> dict[str, Any]:
    normalized: dict[str, Any] = {}
    for key, value in spec.items():
        name = key[1:] if isinstance(key, str) and key.startswith("$") else key
        if name not in OPERATORS:
            raise UnsupportedOperatorError(str(key), column)
        normalized[name] = value
    return normalized


def _membership(quoted: str, values: Any, negate: bool) -> Fragment:
    items = list(values) if isinstance(values, (Sequence, set, frozenset)) and not isinstance(values, str) else [values]
    if not items:
        return ("TRUE",) if negate else ("FALSE",)
    keyword = "NOT IN" if negate else "IN"
    parts: list[Union[str, Parameter]] = [f"{quoted} {keyword} ("]
    for index, item in enumerate(items):
        if index:
            parts.append(", ")
        parts.append(Parameter(item))
    parts.append(")")
    return tuple(parts)


def _operator_fragment(column: str, spec: Mapping[str, Any]) -> Fragment:
    quoted = escape_identifier(column)
    operators = _normalize_operators(column, spec)
    pieces: list[Fragment] = []
    for name in OPERATORS:
        if name not in operators:
            continue
        value = operators[name]
        if name in COMPARISON_OPERATORS:
            pieces.append((f"{quoted} {COMPARISON_OPERATORS[name]} ", Parameter(value)))
        elif name == "in":
            pieces.append(_membership(quoted, value, negate=False))
        elif name == "nin":
            pieces.append(_membership(quoted, value, negate=True))
        else:
            pieces.append((f"{quoted} IS {'NULL' if value else 'NOT NULL'}",))

    joined: list[Union[str, Parameter]] = []
    for index, piece in enumerate(pieces):
        if index:
            joined.append(" AND ")
        joined.extend(piece)
    return tuple(joined)


def build_conditions(condition: Condition) -> tuple[Fragment, ...]:
    """Build WHERE fragments for one filter.

    Args:
        condition: Raw SQL text or a column mapping.

    Raises:
        UnsupportedOperatorError: If an operator mapping holds an unknown key.

    Returns:
        One fragment per column (or a single fragment for raw text).
    """
    if isinstance(condition, str):
        return ((condition,),) if condition.strip() else ()

    fragments: list[Fragment] = []
    for column, value in condition.items():
        if value is None:
            fragments.append((f"{escape_identifier(column)} IS NULL",))
        elif isinstance(value, Mapping):
            fragment = _operator_fragment(column, value)
            if fragment:
                fragments.append(fragment)
        else:
            fragments.append((f"{escape_identifier(column)} = ", Parameter(value)))
    return tuple(fragments)
