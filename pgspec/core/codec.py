"""Identifier and value escaping plus the PostgreSQL array text codec.

Array literals use the ``{a,b,c}`` text form. Elements are split on commas
that are not inside a double-quoted span. Quoted elements always decode to
strings, with doubled quotes collapsed. Backslash escapes inside quotes are
not supported.
"""

import datetime
import re
import uuid
from collections.abc import Sequence
from typing import Any, Optional

from pgspec.exceptions import FormatError
from pgspec.utils.text import is_valid_identifier

__all__ = (
    "build_in_condition",
    "build_like_condition",
    "escape_identifier",
    "escape_string",
    "format_array",
    "format_timestamp",
    "generate_placeholders",
    "generate_uuid",
    "is_valid_identifier",
    "parse_array",
    "parse_timestamp",
)

_NUMERIC_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")
_INTEGER_RE = re.compile(r"^[+-]?\d+$")
_NEEDS_QUOTING = frozenset(',{}"\\')
_KEYWORDS = frozenset({"null", "true", "false"})


def escape_identifier(name: str) -> str:
    """Quote a table or column name.

    Examples:
        >>> escape_identifier("user table")
        '"user table"'
        >>> escape_identifier('a"b')
        '"a""b"'
    """
    escaped = name.replace('"', '""')
    return f'"{escaped}"'


def escape_string(value: str) -> str:
    """Double single quotes for use inside a single-quoted SQL literal.

    Examples:
        >>> escape_string("O'Reilly")
        "O''Reilly"
    """
    return value.replace("'", "''")


def _format_element(item: Any) -> str:
    if item is None:
        return "NULL"
    if isinstance(item, bool):
        return "true" if item else "false"
    if isinstance(item, str):
        return _format_string_element(item)
    if isinstance(item, (list, tuple)):
        return _format_items(item)
    return str(item)


def _format_string_element(item: str) -> str:
    if (
        not item
        or item.lower() in _KEYWORDS
        or _NUMERIC_RE.match(item.strip())
        or any(char in _NEEDS_QUOTING or char.isspace() for char in item)
    ):
        escaped = item.replace('"', '""')
        return f'"{escaped}"'
    return item


def _format_items(items: Sequence[Any]) -> str:
    return "{" + ",".join(_format_element(item) for item in items) + "}"


def format_array(items: Sequence[Any], *, literal: bool = False) -> str:
    """Render a sequence as a PostgreSQL array literal.

    Strings that would otherwise be ambiguous (empty, containing separators or
    whitespace, or spelled like NULL, a boolean or a number) are double-quoted.

    Args:
        items: Values to render. Nested lists or tuples become nested arrays.
        literal: Also escape single quotes so the result can be embedded in a
            single-quoted SQL literal.

    Returns:
        The array text.

    Examples:
        >>> format_array([1, 2, 3])
        '{1,2,3}'
        >>> format_array(["a", "b c", None])
        '{a,"b c",NULL}'
    """
    rendered = _format_items(items)
    if literal:
        return escape_string(rendered)
    return rendered


def _decode_element(value: str) -> Any:
    if value == "NULL":
        return None
    if value == "true":
        return True
    if value == "false":
        return False
    if _NUMERIC_RE.match(value):
        if _INTEGER_RE.match(value):
            return int(value)
        return float(value)
    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        return value[1:-1].replace('""', '"')
    if len(value) >= 2 and value.startswith("{") and value.endswith("}"):
        return parse_array(value)
    return value


def _split_elements(content: str) -> list[str]:
    elements: list[str] = []
    current: list[str] = []
    in_quotes = False
    depth = 0
    for char in content:
        if char == '"':
            in_quotes = not in_quotes
            current.append(char)
        elif not in_quotes and char == "{":
            depth += 1
            current.append(char)
        elif not in_quotes and char == "}":
            depth -= 1
            current.append(char)
        elif char == "," and not in_quotes and depth == 0:
            elements.append("".join(current).strip())
            current = []
        else:
            current.append(char)
    tail = "".join(current).strip()
    if tail or elements:
        elements.append(tail)
    return elements


def parse_array(text: str) -> list[Any]:
    """Decode a PostgreSQL array literal.

    Args:
        text: Array text such as ``{1,2,3}``.

    Raises:
        FormatError: If the text is not brace-delimited.

    Returns:
        The decoded elements.

    Examples:
        >>> parse_array("{1,2,3}")
        [1, 2, 3]
        >>> parse_array('{NULL,true,"a,b"}')
        [None, True, 'a,b']
    """
    if len(text) < 2 or not text.startswith("{") or not text.endswith("}"):
        msg = f"Invalid PostgreSQL array format: {text!r}"
        raise FormatError(msg)
    content = text[1:-1]
    if not content.strip():
        return []
    return [_decode_element(element) for element in _split_elements(content)]


def generate_placeholders(count: int, start_index: int = 1) -> str:
    """Produce ``count`` comma separated positional placeholders.

    Examples:
        >>> generate_placeholders(3)
        '$1, $2, $3'
        >>> generate_placeholders(2, 5)
        '$5, $6'
    """
    return ", ".join(f"${index}" for index in range(start_index, start_index + count))


def build_like_condition(column: str, pattern: str, case_sensitive: bool = False) -> str:
    """Build a literal substring match.

    Examples:
        >>> build_like_condition("name", "john")
        '"name" ILIKE \\'%john%\\''
    """
    operator = "LIKE" if case_sensitive else "ILIKE"
    return f"{escape_identifier(column)} {operator} '%{escape_string(pattern)}%'"


def build_in_condition(column: str, values: Sequence[Any]) -> str:
    """Build a literal IN list.

    Strings are quoted and escaped; other values use their text form.
    """
    rendered = []
    for value in values:
        if isinstance(value, str):
            rendered.append(f"'{escape_string(value)}'")
        elif value is None:
            rendered.append("NULL")
        elif isinstance(value, bool):
            rendered.append("TRUE" if value else "FALSE")
        else:
            rendered.append(str(value))
    return f"{escape_identifier(column)} IN ({', '.join(rendered)})"


def generate_uuid() -> str:
    return str(uuid.uuid4())


def format_timestamp(value: datetime.datetime) -> str:
    """Render a timestamp in ISO-8601 form."""
    return value.isoformat()


def parse_timestamp(value: str, tz: Optional[datetime.tzinfo] = None) -> datetime.datetime:
    """Parse an ISO-8601 timestamp.

    A trailing ``Z`` is accepted. Naive results get ``tz`` when it is given.
    """
    if value.endswith("Z"):
        value = f"{value[:-1]}+00:00"
    parsed = datetime.datetime.fromisoformat(value)
    if tz is not None and parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=tz)
    return parsed
