"""Schema introspection and interface generation."""

from pgspec.introspection._types import (
    ColumnDescriptor,
    ForeignKeyDescriptor,
    GeneratedInterface,
    IndexDescriptor,
    TableDescriptor,
    TableInfo,
)
from pgspec.introspection.generator import (
    column_doc_lines,
    generate_interface,
    property_name,
    table_name_to_interface_name,
)
from pgspec.introspection.introspector import DEFAULT_SCHEMA, Introspector
from pgspec.introspection.layout import (
    GeneratedDocument,
    GeneratedOutput,
    build_table_map,
    render_multi_file,
    render_single_file,
)
from pgspec.introspection.service import IntrospectionResult, IntrospectionService, IntrospectOptions
from pgspec.introspection.type_mapper import TypeFamily, classify, map_column_type
from pgspec.introspection.writer import FileSystemWriter

__all__ = (
    "DEFAULT_SCHEMA",
    "ColumnDescriptor",
    "FileSystemWriter",
    "ForeignKeyDescriptor",
    "GeneratedDocument",
    "GeneratedInterface",
    "GeneratedOutput",
    "IndexDescriptor",
    "IntrospectOptions",
    "IntrospectionResult",
    "IntrospectionService",
    "Introspector",
    "TableDescriptor",
    "TableInfo",
    "TypeFamily",
    "build_table_map",
    "classify",
    "column_doc_lines",
    "generate_interface",
    "map_column_type",
    "property_name",
    "render_multi_file",
    "render_single_file",
    "table_name_to_interface_name",
)
