from pgspec.core.codec import (
    build_in_condition,
    build_like_condition,
    escape_identifier,
    escape_string,
    format_array,
    format_timestamp,
    generate_placeholders,
    generate_uuid,
    is_valid_identifier,
    parse_array,
    parse_timestamp,
)

__all__ = (
    "build_in_condition",
    "build_like_condition",
    "escape_identifier",
    "escape_string",
    "format_array",
    "format_timestamp",
    "generate_placeholders",
    "generate_uuid",
    "is_valid_identifier",
    "parse_array",
    "parse_timestamp",
)
