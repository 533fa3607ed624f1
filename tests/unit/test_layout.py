"""Tests for output document layout."""

import logging
from datetime import datetime, timezone

import pytest

from pgspec.introspection import GeneratedInterface, build_table_map, render_multi_file, render_single_file

GENERATED_AT = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def make_interface(table_name: str, interface_name: str, comment: "str | None" = None) -> GeneratedInterface:
    return GeneratedInterface(
        table_name=table_name,
        interface_name=interface_name,
        content=f"export interface {interface_name} {{\n}}\n",
        comment=comment,
    )


def test_build_table_map() -> None:
    assert build_table_map(["users", "orders"], ["Users", "Orders"]) == {"users": "Users", "orders": "Orders"}


def test_build_table_map_suffixes_repeated_keys() -> None:
    table_map = build_table_map(["users", "users", "users"], ["Users", "Users", "Users"])
    assert list(table_map) == ["users", "users_2", "users_3"]


def test_build_table_map_avoids_existing_suffixed_key() -> None:
    table_map = build_table_map(["users_2", "users", "users"], ["A", "B", "C"])
    assert table_map == {"users_2": "A", "users": "B", "users_3": "C"}


def test_single_file_layout() -> None:
    interfaces = [make_interface("kv_store", "KvStore"), make_interface("users", "Users")]
    output = render_single_file(interfaces, "public", custom_imports=["import type { Json } from './json'"], generated_at=GENERATED_AT)

    assert len(output.documents) == 1
    document = output.documents[0]
    assert document.path == "database-types.ts"
    assert output.tables == ("kv_store", "users")
    assert output.table_map == {"kv_store": "KvStore", "users": "Users"}
    assert document.content == (
        "/**\n"
        " * Database type definitions\n"
        " * Generated at 2024-05-01T12:00:00+00:00\n"
        " * Schema: public\n"
        " * Table count: 2\n"
        " */\n\n"
        "// Base type imports\n"
        "export type { }\n"
        "\n"
        "import type { Json } from './json'\n\n"
        "export interface KvStore {\n}\n\n\n"
        "export interface Users {\n}\n\n\n"
        "/**\n"
        " * Export index of all table interfaces\n"
        " */\n"
        "export const DatabaseTables = {\n"
        "  kv_store: 'KvStore',\n"
        "  users: 'Users',\n"
        "} as const\n\n"
        "export type DatabaseTableNames = typeof DatabaseTables[keyof typeof DatabaseTables]\n"
    )


def test_single_file_without_imports() -> None:
    output = render_single_file([make_interface("t", "T")], "app", file_name="types.ts", include_imports=False)
    document = output.documents[0]
    assert document.path == "types.ts"
    assert "// Base type imports" not in document.content
    assert " * Schema: app\n" in document.content


def test_multi_file_layout() -> None:
    interfaces = [make_interface("kv_store", "KvStore", "Key value pairs"), make_interface("users", "Users")]
    output = render_multi_file(interfaces, "public", include_imports=False, generated_at=GENERATED_AT)

    assert [document.path for document in output.documents] == ["KvStore.ts", "Users.ts", "index.ts"]
    kv_store, users, index = output.documents
    assert kv_store.content == (
        "/**\n"
        " * Key value pairs type definitions\n"
        " * Generated at 2024-05-01T12:00:00+00:00\n"
        " * Schema: public\n"
        " */\n\n"
        "export interface KvStore {\n}\n"
    )
    assert users.content.startswith("/**\n * users type definitions\n")
    assert "export * from './KvStore'\nexport * from './Users'\n" in index.content
    assert "  kv_store: 'KvStore',\n  users: 'Users',\n" in index.content


def test_multi_file_imports_block() -> None:
    output = render_multi_file([make_interface("t", "T")], "public")
    assert "// Base type imports\nexport type { }\n\nexport interface T {" in output.documents[0].content


def test_multi_file_suffixes_colliding_documents(caplog: pytest.LogCaptureFixture) -> None:
    interfaces = [make_interface("user_log", "UserLog"), make_interface("User_log", "UserLog")]
    with caplog.at_level(logging.WARNING, logger="pgspec"):
        output = render_multi_file(interfaces, "public")

    assert [document.path for document in output.documents] == ["UserLog.ts", "UserLog_2.ts", "index.ts"]
    assert "export * from './UserLog_2'" in output.documents[-1].content
    assert any("UserLog_2" in record.getMessage() for record in caplog.records)
