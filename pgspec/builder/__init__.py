"""Parameterized statement assembly for PostgreSQL."""

from pgspec.builder._base import JoinType, OnConflict, Parameter, ParameterBinder, QueryKind, SortDirection, SQLResult
from pgspec.builder._conditions import OPERATORS, Condition, build_conditions
from pgspec.builder._generator import SQLGenerator
from pgspec.builder._render import render_state
from pgspec.builder._state import QueryState
from pgspec.builder._validation import ValidationResult, validate_sql

__all__ = (
    "OPERATORS",
    "Condition",
    "JoinType",
    "OnConflict",
    "Parameter",
    "ParameterBinder",
    "QueryKind",
    "QueryState",
    "SQLGenerator",
    "SQLResult",
    "SortDirection",
    "ValidationResult",
    "build_conditions",
    "render_state",
    "validate_sql",
)
