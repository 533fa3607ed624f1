"""Arrange generated interfaces into output documents.

Nothing here touches the file system: the functions return
:class:`GeneratedDocument` values that a :class:`~pgspec.protocols.DocumentWriter`
persists.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional

from pgspec.utils.logging import get_logger

if TYPE_CHECKING:
    from pgspec.introspection._types import GeneratedInterface

__all__ = (
    "DEFAULT_FILE_NAME",
    "INDEX_FILE_NAME",
    "GeneratedDocument",
    "GeneratedOutput",
    "build_table_map",
    "render_multi_file",
    "render_single_file",
)

logger = get_logger("introspection.layout")

DEFAULT_FILE_NAME = "database-types.ts"
INDEX_FILE_NAME = "index.ts"


@dataclass(frozen=True)
class GeneratedDocument:
    """A document to write, relative to the output directory."""

    path: str
    content: str


@dataclass(frozen=True)
class GeneratedOutput:
    documents: tuple[GeneratedDocument, ...]
    table_map: dict[str, str] = field(default_factory=dict)
    tables: tuple[str, ...] = ()


def _dedupe(names: Iterable[str]) -> list[str]:
    """Suffix repeated names with ``_2``, ``_3``, ... in encounter order."""
    counts: dict[str, int] = {}
    used: set[str] = set()
    unique: list[str] = []
    for name in names:
        count = counts.get(name, 0) + 1
        candidate = name if count == 1 else f"{name}_{count}"
        while candidate in used:
            count += 1
            candidate = f"{name}_{count}"
        counts[name] = count
        used.add(candidate)
        unique.append(candidate)
    return unique


def build_table_map(tables: Sequence[str], interface_names: Sequence[str]) -> dict[str, str]:
    """Map table keys to interface names; repeated keys get ``_2``, ``_3``, ...

    Examples:
        >>> build_table_map(["users", "users"], ["Users", "Users"])
        {'users': 'Users', 'users_2': 'Users'}
    """
    return dict(zip(_dedupe(tables), interface_names))


def _timestamp(generated_at: Optional[datetime]) -> str:
    moment = generated_at or datetime.now(timezone.utc)
    return moment.isoformat()


def _imports_block(custom_imports: Sequence[str]) -> str:
    return "\n".join(["// Base type imports", "export type { }", "", *custom_imports])


def _table_map_block(table_map: "dict[str, str]") -> str:
    entries = "".join(f"  {key}: '{name}',\n" for key, name in table_map.items())
    return (
        "/**\n * Export index of all table interfaces\n */\n"
        f"export const DatabaseTables = {{\n{entries}}} as const\n\n"
        "export type DatabaseTableNames = typeof DatabaseTables[keyof typeof DatabaseTables]\n"
    )


def render_single_file(
    interfaces: "Sequence[GeneratedInterface]",
    schema: str,
    file_name: str = DEFAULT_FILE_NAME,
    include_imports: bool = True,
    custom_imports: Sequence[str] = (),
    generated_at: Optional[datetime] = None,
) -> GeneratedOutput:
    """Put every interface into one document followed by the table map."""
    tables = [interface.table_name for interface in interfaces]
    table_map = build_table_map(tables, [interface.interface_name for interface in interfaces])

    parts = [
        "/**\n"
        " * Database type definitions\n"
        f" * Generated at {_timestamp(generated_at)}\n"
        f" * Schema: {schema}\n"
        f" * Table count: {len(interfaces)}\n"
        " */\n\n"
    ]
    if include_imports:
        parts.append(_imports_block(custom_imports) + "\n\n")
    parts.extend(interface.content + "\n\n" for interface in interfaces)
    parts.append(_table_map_block(table_map))

    document = GeneratedDocument(path=file_name, content="".join(parts))
    return GeneratedOutput(documents=(document,), table_map=table_map, tables=tuple(tables))


def render_multi_file(
    interfaces: "Sequence[GeneratedInterface]",
    schema: str,
    include_imports: bool = True,
    custom_imports: Sequence[str] = (),
    generated_at: Optional[datetime] = None,
) -> GeneratedOutput:
    """One document per interface plus an ``index.ts`` re-exporting them all."""
    timestamp = _timestamp(generated_at)
    tables = [interface.table_name for interface in interfaces]
    table_map = build_table_map(tables, [interface.interface_name for interface in interfaces])
    module_names = _dedupe(interface.interface_name for interface in interfaces)

    documents: list[GeneratedDocument] = []
    for interface, module_name in zip(interfaces, module_names):
        if module_name != interface.interface_name:
            logger.warning(
                "Interface name %s is already used, writing table %s to %s.ts",
                interface.interface_name,
                interface.table_name,
                module_name,
            )
        header = (
            "/**\n"
            f" * {interface.comment or interface.table_name} type definitions\n"
            f" * Generated at {timestamp}\n"
            f" * Schema: {schema}\n"
            " */\n\n"
        )
        imports = _imports_block(custom_imports) + "\n" if include_imports else ""
        documents.append(GeneratedDocument(path=f"{module_name}.ts", content=header + imports + interface.content))

    exports = "".join(f"export * from './{module_name}'\n" for module_name in module_names)
    index = (
        "/**\n"
        " * Database type definitions index\n"
        f" * Generated at {timestamp}\n"
        f" * Schema: {schema}\n"
        " */\n\n"
        f"{exports}\n"
        f"{_table_map_block(table_map)}"
    )
    documents.append(GeneratedDocument(path=INDEX_FILE_NAME, content=index))
    return GeneratedOutput(documents=tuple(documents), table_map=table_map, tables=tuple(tables))
