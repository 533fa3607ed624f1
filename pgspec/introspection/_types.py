"""Catalog descriptors returned by the introspector."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

__all__ = (
    "ColumnDescriptor",
    "ForeignKeyDescriptor",
    "GeneratedInterface",
    "IndexDescriptor",
    "TableDescriptor",
    "TableInfo",
)


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().upper() in {"YES", "Y", "TRUE", "T", "1"}
    return bool(value)


def _optional_int(value: Any) -> Optional[int]:
    return None if value is None else int(value)


@dataclass(frozen=True)
class TableInfo:
    name: str
    comment: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "TableInfo":
        return cls(name=row["table_name"], comment=row.get("table_comment"))


@dataclass(frozen=True)
class ColumnDescriptor:
    """One column as reported by the catalog.

    ``data_type`` is the information_schema type (``ARRAY`` for arrays) and
    ``udt_name`` the underlying type name (``_int4`` for ``integer[]``).
    """

    name: str
    data_type: str
    is_nullable: bool = True
    default: Optional[str] = None
    udt_name: Optional[str] = None
    character_maximum_length: Optional[int] = None
    numeric_precision: Optional[int] = None
    numeric_scale: Optional[int] = None
    comment: Optional[str] = None

    @property
    def has_default(self) -> bool:
        return self.default is not None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "ColumnDescriptor":
        """Build a descriptor from a ``columns`` catalog row.

        ``is_nullable`` may be the information_schema ``YES``/``NO`` text or a boolean.
        """
        return cls(
            name=row["column_name"],
            data_type=row["data_type"],
            is_nullable=_as_bool(row.get("is_nullable", True)),
            default=row.get("column_default"),
            udt_name=row.get("udt_name"),
            character_maximum_length=_optional_int(row.get("character_maximum_length")),
            numeric_precision=_optional_int(row.get("numeric_precision")),
            numeric_scale=_optional_int(row.get("numeric_scale")),
            comment=row.get("column_comment"),
        )


@dataclass(frozen=True)
class ForeignKeyDescriptor:
    column: str
    referenced_table: str
    referenced_column: str
    update_rule: str = "NO ACTION"
    delete_rule: str = "NO ACTION"

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "ForeignKeyDescriptor":
        return cls(
            column=row["column_name"],
            referenced_table=row["foreign_table_name"],
            referenced_column=row["foreign_column_name"],
            update_rule=row.get("update_rule") or "NO ACTION",
            delete_rule=row.get("delete_rule") or "NO ACTION",
        )


@dataclass(frozen=True)
class IndexDescriptor:
    name: str
    column: str
    is_unique: bool = False
    is_primary: bool = False

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "IndexDescriptor":
        return cls(
            name=row["index_name"],
            column=row["column_name"],
            is_unique=_as_bool(row.get("is_unique", False)),
            is_primary=_as_bool(row.get("is_primary", False)),
        )


@dataclass(frozen=True)
class TableDescriptor:
    """A table with its columns, keys and indexes."""

    name: str
    comment: Optional[str] = None
    columns: tuple[ColumnDescriptor, ...] = ()
    primary_keys: tuple[str, ...] = ()
    foreign_keys: tuple[ForeignKeyDescriptor, ...] = ()
    indexes: tuple[IndexDescriptor, ...] = ()

    def column(self, name: str) -> Optional[ColumnDescriptor]:
        return next((column for column in self.columns if column.name == name), None)


@dataclass(frozen=True)
class GeneratedInterface:
    """Rendered interface for one table."""

    table_name: str
    interface_name: str
    content: str
    columns: tuple[ColumnDescriptor, ...] = field(default_factory=tuple)
    primary_keys: tuple[str, ...] = field(default_factory=tuple)
    comment: Optional[str] = None
