"""pgspec: parameterized PostgreSQL statements and schema-to-TypeScript introspection."""

from pgspec import builder, core, exceptions, introspection, protocols, utils
from pgspec.__metadata__ import __version__
from pgspec.builder import OnConflict, QueryKind, SQLGenerator, SQLResult, validate_sql
from pgspec.core.codec import (
    escape_identifier,
    escape_string,
    format_array,
    generate_placeholders,
    parse_array,
)
from pgspec.exceptions import (
    FormatError,
    MissingDataError,
    PgSpecError,
    SQLBuilderError,
    TableNotFoundError,
    UnsupportedOperationError,
    UnsupportedOperatorError,
)
from pgspec.introspection import (
    IntrospectionResult,
    IntrospectionService,
    IntrospectOptions,
    Introspector,
    generate_interface,
    table_name_to_interface_name,
)

__all__ = (
    "FormatError",
    "IntrospectOptions",
    "IntrospectionResult",
    "IntrospectionService",
    "Introspector",
    "MissingDataError",
    "OnConflict",
    "PgSpecError",
    "QueryKind",
    "SQLBuilderError",
    "SQLGenerator",
    "SQLResult",
    "TableNotFoundError",
    "UnsupportedOperationError",
    "UnsupportedOperatorError",
    "__version__",
    "builder",
    "core",
    "escape_identifier",
    "escape_string",
    "exceptions",
    "format_array",
    "generate_interface",
    "generate_placeholders",
    "introspection",
    "parse_array",
    "protocols",
    "table_name_to_interface_name",
    "utils",
    "validate_sql",
)
