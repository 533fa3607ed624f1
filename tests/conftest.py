from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import Any

import pytest

from pgspec.introspection import _queries

pytestmark = pytest.mark.anyio
here = Path(__file__).parent
root_path = here.parent


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture(autouse=True)
def reset_pgspec_logger() -> Iterator[None]:
    yield
    root_logger = logging.getLogger("pgspec")
    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)
    root_logger.propagate = True


class CatalogDriver:
    """In-memory stand-in for the catalog queries.

    ``tables`` is a list of ``(name, comment)`` pairs; the other mappings are
    keyed by table name and hold catalog rows.
    """

    def __init__(
        self,
        tables: list[tuple[str, str | None]],
        columns: Mapping[str, list[dict[str, Any]]] | None = None,
        primary_keys: Mapping[str, list[str]] | None = None,
        foreign_keys: Mapping[str, list[dict[str, Any]]] | None = None,
        indexes: Mapping[str, list[dict[str, Any]]] | None = None,
        fail_on: str | None = None,
    ) -> None:
        self.tables = tables
        self.columns = columns or {}
        self.primary_keys = primary_keys or {}
        self.foreign_keys = foreign_keys or {}
        self.indexes = indexes or {}
        self.fail_on = fail_on
        self.calls: list[tuple[str, tuple[Any, ...]]] = []

    async def select(self, sql: str, *parameters: Any) -> list[Mapping[str, Any]]:
        self.calls.append((sql, parameters))
        if sql is _queries.TABLES_BY_SCHEMA:
            return [{"table_name": name, "table_comment": comment} for name, comment in self.tables]
        table = parameters[0]
        if self.fail_on == table:
            msg = f"connection lost while reading {table}"
            raise RuntimeError(msg)
        if sql is _queries.COLUMNS_BY_TABLE:
            return list(self.columns.get(table, []))
        if sql is _queries.PRIMARY_KEYS_BY_TABLE:
            return [{"column_name": name} for name in self.primary_keys.get(table, [])]
        if sql is _queries.FOREIGN_KEYS_BY_TABLE:
            return list(self.foreign_keys.get(table, []))
        if sql is _queries.INDEXES_BY_TABLE:
            return list(self.indexes.get(table, []))
        msg = f"unexpected query: {sql}"
        raise AssertionError(msg)


def column_row(
    name: str,
    data_type: str,
    *,
    nullable: bool = False,
    default: str | None = None,
    udt_name: str | None = None,
    comment: str | None = None,
) -> dict[str, Any]:
    return {
        "column_name": name,
        "data_type": data_type,
        "is_nullable": "YES" if nullable else "NO",
        "column_default": default,
        "udt_name": udt_name or data_type,
        "character_maximum_length": None,
        "numeric_precision": None,
        "numeric_scale": None,
        "column_comment": comment,
    }


@pytest.fixture
def kv_store_driver() -> CatalogDriver:
    """A schema with ``kv_store_copy`` and ``users``."""
    return CatalogDriver(
        tables=[("kv_store_copy", "Key value pairs"), ("users", None)],
        columns={
            "kv_store_copy": [
                column_row("id", "integer", default="nextval('kv_store_copy_id_seq'::regclass)", udt_name="int4"),
                column_row("name", "character varying", udt_name="varchar", comment="Lookup key"),
                column_row("value", "text", nullable=True),
                column_row("tags", "ARRAY", nullable=True, udt_name="_text"),
            ],
            "users": [
                column_row("id", "uuid"),
                column_row("profile", "jsonb", nullable=True),
                column_row("created_at", "timestamp with time zone", udt_name="timestamptz", default="now()"),
            ],
        },
        primary_keys={"kv_store_copy": ["id"], "users": ["id"]},
        foreign_keys={
            "users": [
                {
                    "column_name": "profile",
                    "foreign_table_name": "profiles",
                    "foreign_column_name": "id",
                    "update_rule": "NO ACTION",
                    "delete_rule": "CASCADE",
                }
            ]
        },
        indexes={
            "users": [
                {"index_name": "users_pkey", "column_name": "id", "is_unique": True, "is_primary": True},
            ]
        },
    )


@pytest.fixture
def catalog_driver_factory() -> type[CatalogDriver]:
    return CatalogDriver
