"""Catalog queries used by the introspector.

Every query binds the table name as ``$1`` (where it needs one) and the
schema as the last parameter.
"""

__all__ = (
    "COLUMNS_BY_TABLE",
    "FOREIGN_KEYS_BY_TABLE",
    "INDEXES_BY_TABLE",
    "PRIMARY_KEYS_BY_TABLE",
    "TABLES_BY_SCHEMA",
)

TABLES_BY_SCHEMA = """
SELECT
    t.table_name,
    obj_description(c.oid, 'pg_class') AS table_comment
FROM information_schema.tables t
LEFT JOIN pg_catalog.pg_namespace n ON n.nspname = t.table_schema
LEFT JOIN pg_catalog.pg_class c ON c.relname = t.table_name AND c.relnamespace = n.oid
WHERE t.table_schema = $1
    AND t.table_type IN ('BASE TABLE', 'VIEW')
ORDER BY t.table_name
"""

COLUMNS_BY_TABLE = """
SELECT
    c.column_name,
    c.data_type,
    c.is_nullable,
    c.column_default,
    c.udt_name,
    c.character_maximum_length,
    c.numeric_precision,
    c.numeric_scale,
    col_description(cls.oid, c.ordinal_position::int) AS column_comment
FROM information_schema.columns c
LEFT JOIN pg_catalog.pg_namespace n ON n.nspname = c.table_schema
LEFT JOIN pg_catalog.pg_class cls ON cls.relname = c.table_name AND cls.relnamespace = n.oid
WHERE c.table_name = $1
    AND c.table_schema = $2
ORDER BY c.ordinal_position
"""

PRIMARY_KEYS_BY_TABLE = """
SELECT
    kcu.column_name
FROM information_schema.table_constraints tc
JOIN information_schema.key_column_usage kcu
    ON tc.constraint_name = kcu.constraint_name
    AND tc.table_schema = kcu.table_schema
WHERE tc.constraint_type = 'PRIMARY KEY'
    AND tc.table_name = $1
    AND tc.table_schema = $2
ORDER BY kcu.ordinal_position
"""

FOREIGN_KEYS_BY_TABLE = """
SELECT
    kcu.column_name,
    ccu.table_name AS foreign_table_name,
    ccu.column_name AS foreign_column_name,
    rc.update_rule,
    rc.delete_rule
FROM information_schema.table_constraints AS tc
JOIN information_schema.key_column_usage AS kcu
    ON tc.constraint_name = kcu.constraint_name
    AND tc.table_schema = kcu.table_schema
JOIN information_schema.constraint_column_usage AS ccu
    ON ccu.constraint_name = tc.constraint_name
    AND ccu.table_schema = tc.table_schema
JOIN information_schema.referential_constraints AS rc
    ON tc.constraint_name = rc.constraint_name
    AND tc.table_schema = rc.constraint_schema
WHERE tc.constraint_type = 'FOREIGN KEY'
    AND tc.table_name = $1
    AND tc.table_schema = $2
ORDER BY kcu.ordinal_position
"""

INDEXES_BY_TABLE = """
SELECT
    i.relname AS index_name,
    a.attname AS column_name,
    ix.indisunique AS is_unique,
    ix.indisprimary AS is_primary
FROM pg_catalog.pg_class t
JOIN pg_catalog.pg_index ix ON t.oid = ix.indrelid
JOIN pg_catalog.pg_class i ON ix.indexrelid = i.oid
JOIN pg_catalog.pg_attribute a ON a.attrelid = t.oid AND a.attnum = ANY(ix.indkey)
JOIN pg_catalog.pg_namespace n ON n.oid = t.relnamespace
WHERE t.relname = $1
    AND n.nspname = $2
ORDER BY i.relname, a.attnum
"""
