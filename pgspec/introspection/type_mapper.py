"""Map PostgreSQL column types to TypeScript types.

Raw catalog type names are classified into a :class:`TypeFamily`; every
family has exactly one target type and unknown names fall back to
:attr:`TypeFamily.UNKNOWN`. Both information_schema spellings
(``character varying``) and internal udt names (``varchar``) are recognised.
"""

import re
from enum import Enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from pgspec.introspection._types import ColumnDescriptor

__all__ = ("ARRAY_SUFFIX", "TypeFamily", "classify", "map_column_type", "map_type_name", "normalize_type_name")

ARRAY_SUFFIX = "[]"

_MODIFIER_RE = re.compile(r"\s*\([^)]*\)")
_WHITESPACE_RE = re.compile(r"\s+")


class TypeFamily(Enum):
    """Known families of database types, each with one target type."""

    INTEGER = "integer"
    NUMERIC = "numeric"
    TEXT = "text"
    BOOLEAN = "boolean"
    TEMPORAL = "temporal"
    DOCUMENT = "document"
    UUID = "uuid"
    BINARY = "binary"
    UNKNOWN = "unknown"

    @property
    def target_type(self) -> str:
        return _TARGET_TYPES[self]


_TARGET_TYPES: dict[TypeFamily, str] = {
    TypeFamily.INTEGER: "number",
    TypeFamily.NUMERIC: "number",
    TypeFamily.TEXT: "string",
    TypeFamily.BOOLEAN: "boolean",
    TypeFamily.TEMPORAL: "string",
    TypeFamily.DOCUMENT: "Record<string, any>",
    TypeFamily.UUID: "string",
    TypeFamily.BINARY: "Buffer",
    TypeFamily.UNKNOWN: "any",
}


_FAMILIES: dict[str, TypeFamily] = {
    # integers
    "smallint": TypeFamily.INTEGER,
    "integer": TypeFamily.INTEGER,
    "int": TypeFamily.INTEGER,
    "bigint": TypeFamily.INTEGER,
    "int2": TypeFamily.INTEGER,
    "int4": TypeFamily.INTEGER,
    "int8": TypeFamily.INTEGER,
    "smallserial": TypeFamily.INTEGER,
    "serial": TypeFamily.INTEGER,
    "bigserial": TypeFamily.INTEGER,
    "serial2": TypeFamily.INTEGER,
    "serial4": TypeFamily.INTEGER,
    "serial8": TypeFamily.INTEGER,
    "oid": TypeFamily.INTEGER,
    # numerics
    "numeric": TypeFamily.NUMERIC,
    "decimal": TypeFamily.NUMERIC,
    "real": TypeFamily.NUMERIC,
    "double precision": TypeFamily.NUMERIC,
    "float4": TypeFamily.NUMERIC,
    "float8": TypeFamily.NUMERIC,
    # character types
    "text": TypeFamily.TEXT,
    "character varying": TypeFamily.TEXT,
    "character": TypeFamily.TEXT,
    "varchar": TypeFamily.TEXT,
    "char": TypeFamily.TEXT,
    "bpchar": TypeFamily.TEXT,
    "name": TypeFamily.TEXT,
    "citext": TypeFamily.TEXT,
    # booleans
    "boolean": TypeFamily.BOOLEAN,
    "bool": TypeFamily.BOOLEAN,
    # date and time
    "timestamp": TypeFamily.TEMPORAL,
    "timestamp without time zone": TypeFamily.TEMPORAL,
    "timestamp with time zone": TypeFamily.TEMPORAL,
    "timestamptz": TypeFamily.TEMPORAL,
    "date": TypeFamily.TEMPORAL,
    "time": TypeFamily.TEMPORAL,
    "time without time zone": TypeFamily.TEMPORAL,
    "time with time zone": TypeFamily.TEMPORAL,
    "timetz": TypeFamily.TEMPORAL,
    "interval": TypeFamily.TEMPORAL,
    # documents
    "json": TypeFamily.DOCUMENT,
    "jsonb": TypeFamily.DOCUMENT,
    # identifiers
    "uuid": TypeFamily.UUID,
    # binary
    "bytea": TypeFamily.BINARY,
}


def normalize_type_name(raw_type: str) -> str:
    """Lower-case a type name, drop ``(n)`` modifiers and collapse whitespace.

    Examples:
        >>> normalize_type_name("Character Varying(255)")
        'character varying'
        >>> normalize_type_name("numeric(10, 2)")
        'numeric'
    """
    name = _MODIFIER_RE.sub("", raw_type.strip().lower())
    return _WHITESPACE_RE.sub(" ", name).strip()


def classify(raw_type: Optional[str]) -> TypeFamily:
    """Find the family of a raw type name, or :attr:`TypeFamily.UNKNOWN`."""
    if not raw_type:
        return TypeFamily.UNKNOWN
    return _FAMILIES.get(normalize_type_name(raw_type), TypeFamily.UNKNOWN)


def _element_type_name(raw_type: str) -> Optional[str]:
    name = raw_type.strip()
    if name.endswith(ARRAY_SUFFIX):
        return name[: -len(ARRAY_SUFFIX)]
    if name.startswith("_"):
        return name[1:]
    return None


def map_type_name(raw_type: Optional[str]) -> str:
    """Map a type name, following array markers (``_int4``, ``text[]``) recursively.

    Examples:
        >>> map_type_name("int4")
        'number'
        >>> map_type_name("text[][]")
        'string[][]'
    """
    if not raw_type:
        return TypeFamily.UNKNOWN.target_type
    element = _element_type_name(raw_type)
    if element is not None and (raw_type.strip().endswith(ARRAY_SUFFIX) or classify(raw_type) is TypeFamily.UNKNOWN):
        return f"{map_type_name(element)}{ARRAY_SUFFIX}"
    return classify(raw_type).target_type


def is_array_column(column: "ColumnDescriptor") -> bool:
    return "array" in column.data_type.lower() or bool(column.udt_name and column.udt_name.endswith(ARRAY_SUFFIX))


def map_column_type(column: "ColumnDescriptor") -> str:
    """Map a column to its target type, without nullability.

    Array columns map their element type (taken from ``udt_name``) and add
    ``[]``; an array with no usable element name becomes ``any[]``.
    """
    if is_array_column(column):
        udt_name = column.udt_name or ""
        element = _element_type_name(udt_name)
        if element is None:
            return f"{TypeFamily.UNKNOWN.target_type}{ARRAY_SUFFIX}"
        return f"{map_type_name(element)}{ARRAY_SUFFIX}"

    family = classify(column.data_type)
    if family is TypeFamily.UNKNOWN and column.udt_name:
        family = classify(column.udt_name)
    return family.target_type
