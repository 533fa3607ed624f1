"""Render TypeScript interfaces from column descriptors."""

from collections.abc import Sequence
from typing import TYPE_CHECKING, Optional

from pgspec.introspection.type_mapper import map_column_type
from pgspec.utils.text import is_valid_identifier, pascalize

if TYPE_CHECKING:
    from pgspec.introspection._types import ColumnDescriptor

__all__ = (
    "column_doc_lines",
    "generate_interface",
    "property_name",
    "render_property",
    "table_name_to_interface_name",
)

INDENT = "    "


def table_name_to_interface_name(table_name: str) -> str:
    """Turn a table name into an interface name.

    Examples:
        >>> table_name_to_interface_name("kv_store_copy")
        'KvStoreCopy'
    """
    return pascalize(table_name)


def column_doc_lines(column: "ColumnDescriptor", primary_keys: Sequence[str] = ()) -> list[str]:
    """Documentation lines for one column: comment, default, nullability, primary key."""
    lines: list[str] = []
    if column.comment:
        lines.extend(line.rstrip() for line in column.comment.splitlines() if line.strip())
    if column.has_default:
        lines.append(f"has default: {column.default}")
    if column.is_nullable:
        lines.append("nullable")
    if column.name in primary_keys:
        lines.append("primary key")
    return lines


def _render_doc(lines: Sequence[str], indent: str = "", block: bool = False) -> str:
    if not lines:
        return ""
    if len(lines) == 1 and not block:
        return f"{indent}/** {lines[0]} */\n"
    body = "".join(f"{indent} * {line}\n" for line in lines)
    return f"{indent}/**\n{body}{indent} */\n"


def property_name(name: str) -> str:
    """Return ``name`` as a property key, single-quoted unless it is a plain identifier.

    Examples:
        >>> property_name("order_id")
        'order_id'
        >>> property_name("order-id")
        "'order-id'"
    """
    if is_valid_identifier(name):
        return name
    escaped = name.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def render_property(column: "ColumnDescriptor") -> str:
    type_text = map_column_type(column)
    key = property_name(column.name)
    if column.is_nullable:
        return f"{INDENT}{key}?: {type_text} | null;\n"
    return f"{INDENT}{key}: {type_text};\n"


def generate_interface(
    table_name: str,
    table_comment: Optional[str],
    columns: Sequence["ColumnDescriptor"],
    primary_keys: Sequence[str] = (),
    include_comments: bool = True,
) -> str:
    """Render one ``export interface`` block.

    Args:
        table_name: Table the interface describes.
        table_comment: Stored table comment, rendered above the interface.
        columns: Columns in catalog order.
        primary_keys: Primary key column names.
        include_comments: Emit the table comment and per-column documentation.

    Returns:
        The interface text, ending with a newline.
    """
    parts: list[str] = []
    if include_comments and table_comment:
        parts.append(_render_doc(table_comment.splitlines(), block=True))
    parts.append(f"export interface {table_name_to_interface_name(table_name)} {{\n")
    for column in columns:
        if include_comments:
            parts.append(_render_doc(column_doc_lines(column, primary_keys), INDENT))
        parts.append(render_property(column))
    parts.append("}\n")
    return "".join(parts)
