"""Read table, column and key metadata from the PostgreSQL catalog."""

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from pgspec.exceptions import TableNotFoundError
from pgspec.introspection import _queries
from pgspec.introspection._types import (
    ColumnDescriptor,
    ForeignKeyDescriptor,
    GeneratedInterface,
    IndexDescriptor,
    TableDescriptor,
    TableInfo,
)
from pgspec.introspection.generator import generate_interface, table_name_to_interface_name
from pgspec.utils.logging import get_logger

if TYPE_CHECKING:
    from pgspec.protocols import QueryDriver

__all__ = ("DEFAULT_SCHEMA", "Introspector")

logger = get_logger("introspection")

DEFAULT_SCHEMA = "public"


class Introspector:
    """Catalog reader bound to one query driver.

    Every call goes to the database; nothing is cached. Round trips are made
    one at a time, in order.
    """

    __slots__ = ("driver",)

    def __init__(self, driver: "QueryDriver") -> None:
        self.driver = driver

    async def _fetch(self, query_name: str, sql: str, *parameters: Any) -> "Sequence[Mapping[str, Any]]":
        logger.debug("Running catalog query %s with %r", query_name, parameters)
        rows = await self.driver.select(sql, *parameters)
        logger.debug("Catalog query %s returned %d rows", query_name, len(rows))
        return rows

    async def list_tables(self, schema: str = DEFAULT_SCHEMA) -> list[TableInfo]:
        """List the tables of a schema, ordered by name."""
        rows = await self._fetch("tables", _queries.TABLES_BY_SCHEMA, schema)
        return [TableInfo.from_row(row) for row in rows]

    async def columns_of(self, table: str, schema: str = DEFAULT_SCHEMA) -> list[ColumnDescriptor]:
        """Columns of a table in ordinal position order."""
        rows = await self._fetch("columns", _queries.COLUMNS_BY_TABLE, table, schema)
        return [ColumnDescriptor.from_row(row) for row in rows]

    async def primary_keys_of(self, table: str, schema: str = DEFAULT_SCHEMA) -> list[str]:
        rows = await self._fetch("primary_keys", _queries.PRIMARY_KEYS_BY_TABLE, table, schema)
        return [row["column_name"] for row in rows]

    async def foreign_keys_of(self, table: str, schema: str = DEFAULT_SCHEMA) -> list[ForeignKeyDescriptor]:
        rows = await self._fetch("foreign_keys", _queries.FOREIGN_KEYS_BY_TABLE, table, schema)
        return [ForeignKeyDescriptor.from_row(row) for row in rows]

    async def indexes_of(self, table: str, schema: str = DEFAULT_SCHEMA) -> list[IndexDescriptor]:
        rows = await self._fetch("indexes", _queries.INDEXES_BY_TABLE, table, schema)
        return [IndexDescriptor.from_row(row) for row in rows]

    async def _find_table(self, table: str, schema: str) -> TableInfo:
        for info in await self.list_tables(schema):
            if info.name == table:
                return info
        raise TableNotFoundError(table, schema)

    async def describe_table(self, table: str, schema: str = DEFAULT_SCHEMA) -> TableDescriptor:
        """Collect everything known about one table.

        Raises:
            TableNotFoundError: If the table is not listed in ``schema``.
        """
        info = await self._find_table(table, schema)
        columns = await self.columns_of(table, schema)
        primary_keys = await self.primary_keys_of(table, schema)
        foreign_keys = await self.foreign_keys_of(table, schema)
        indexes = await self.indexes_of(table, schema)
        return TableDescriptor(
            name=info.name,
            comment=info.comment,
            columns=tuple(columns),
            primary_keys=tuple(primary_keys),
            foreign_keys=tuple(foreign_keys),
            indexes=tuple(indexes),
        )

    async def generate_table_interface(
        self, table: str, schema: str = DEFAULT_SCHEMA, include_comments: bool = True
    ) -> str:
        """Render the interface for one table.

        Raises:
            TableNotFoundError: If the table is not listed in ``schema``.
        """
        info = await self._find_table(table, schema)
        columns = await self.columns_of(table, schema)
        primary_keys = await self.primary_keys_of(table, schema)
        return generate_interface(info.name, info.comment, columns, primary_keys, include_comments)

    async def generate_all_interfaces(
        self, schema: str = DEFAULT_SCHEMA, include_comments: bool = True
    ) -> list[GeneratedInterface]:
        """Render one interface per table, in listing order.

        A failing round trip stops the iteration and the error propagates.
        """
        results: list[GeneratedInterface] = []
        for info in await self.list_tables(schema):
            columns = await self.columns_of(info.name, schema)
            primary_keys = await self.primary_keys_of(info.name, schema)
            results.append(
                GeneratedInterface(
                    table_name=info.name,
                    interface_name=table_name_to_interface_name(info.name),
                    content=generate_interface(info.name, info.comment, columns, primary_keys, include_comments),
                    columns=tuple(columns),
                    primary_keys=tuple(primary_keys),
                    comment=info.comment,
                )
            )
        logger.debug("Generated %d interfaces for schema %s", len(results), schema)
        return results
