"""Database driver adapters.

Adapters are imported explicitly (``pgspec.adapters.asyncpg``) so the core
does not require any driver to be installed.
"""
