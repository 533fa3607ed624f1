"""Tests for the end to end introspection service."""

import logging
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from pgspec.introspection import FileSystemWriter, IntrospectionService, IntrospectOptions, Introspector
from pgspec.protocols import DocumentWriter
from pgspec.utils.logging import correlation_context, get_correlation_id

pytestmark = pytest.mark.anyio


def test_file_system_writer_is_document_writer() -> None:
    assert isinstance(FileSystemWriter(), DocumentWriter)


async def test_multi_file_introspection(kv_store_driver, tmp_path: Path) -> None:
    service = IntrospectionService(Introspector(kv_store_driver))
    output_dir = tmp_path / "types"

    result = await service.introspect(str(output_dir))

    assert result.success
    assert result.tables == ["kv_store_copy", "users"]
    assert result.files == [
        str(output_dir / "KvStoreCopy.ts"),
        str(output_dir / "Users.ts"),
        str(output_dir / "index.ts"),
    ]
    assert "export interface KvStoreCopy {" in (output_dir / "KvStoreCopy.ts").read_text(encoding="utf-8")
    index = (output_dir / "index.ts").read_text(encoding="utf-8")
    assert "export * from './Users'" in index
    assert "  kv_store_copy: 'KvStoreCopy',\n" in index


async def test_single_file_introspection(kv_store_driver, tmp_path: Path) -> None:
    service = IntrospectionService(Introspector(kv_store_driver))
    options = IntrospectOptions(single_file=True, file_name="db.ts", include_comments=False, include_imports=False)

    result = await service.introspect(str(tmp_path), "public", options)

    assert result.success
    assert result.files == [str(tmp_path / "db.ts")]
    content = (tmp_path / "db.ts").read_text(encoding="utf-8")
    assert " * Table count: 2\n" in content
    assert "/** nullable */" not in content
    assert "export const DatabaseTables = {\n  kv_store_copy: 'KvStoreCopy',\n  users: 'Users',\n} as const" in content


async def test_empty_schema_is_a_failure(catalog_driver_factory, tmp_path: Path) -> None:
    writer = MagicMock()
    service = IntrospectionService(Introspector(catalog_driver_factory(tables=[])), writer)

    result = await service.introspect(str(tmp_path), "empty")

    assert not result.success
    assert "empty" in result.message
    assert result.files == []
    assert result.tables == []
    writer.write.assert_not_called()


async def test_driver_failure_becomes_result(
    catalog_driver_factory, tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    driver = catalog_driver_factory(tables=[("a", None)], fail_on="a")
    service = IntrospectionService(Introspector(driver))

    with caplog.at_level(logging.ERROR, logger="pgspec"):
        result = await service.introspect(str(tmp_path))

    assert not result.success
    assert "connection lost" in result.message
    assert result.files == []
    assert result.tables == []
    assert any(record.exc_info for record in caplog.records)


async def test_writer_failure_becomes_result(kv_store_driver, tmp_path: Path) -> None:
    writer = MagicMock()
    writer.write.side_effect = PermissionError("read-only file system")
    service = IntrospectionService(Introspector(kv_store_driver), writer)

    result = await service.introspect(str(tmp_path))

    assert not result.success
    assert "read-only file system" in result.message


async def test_custom_writer_receives_documents(kv_store_driver) -> None:
    writer = MagicMock()
    writer.write.return_value = ["out/db.ts"]
    service = IntrospectionService(Introspector(kv_store_driver), writer)

    result = await service.introspect("out", options=IntrospectOptions(single_file=True, file_name="db.ts"))

    assert result.files == ["out/db.ts"]
    directory, documents = writer.write.call_args.args
    assert directory == "out"
    assert [document.path for document in documents] == ["db.ts"]


async def test_writer_reporting_no_paths_still_succeeds(kv_store_driver) -> None:
    writer = MagicMock()
    writer.write.return_value = []
    service = IntrospectionService(Introspector(kv_store_driver), writer)

    result = await service.introspect("out", options=IntrospectOptions(single_file=True))

    assert result.success
    assert result.files == []
    assert result.message == "Generated type definitions for 2 tables in out"


async def test_run_is_tagged_with_correlation_id(kv_store_driver) -> None:
    seen: list = []
    writer = MagicMock()
    writer.write.side_effect = lambda directory, documents: seen.append(get_correlation_id()) or []
    service = IntrospectionService(Introspector(kv_store_driver), writer)

    await service.introspect("out")
    await service.introspect("out")

    assert all(seen)
    assert seen[0] != seen[1]
    assert get_correlation_id() is None


async def test_run_reuses_enclosing_correlation_id(kv_store_driver) -> None:
    seen: list = []
    writer = MagicMock()
    writer.write.side_effect = lambda directory, documents: seen.append(get_correlation_id()) or []
    service = IntrospectionService(Introspector(kv_store_driver), writer)

    with correlation_context("cli-run"):
        await service.introspect("out")

    assert seen == ["cli-run"]
