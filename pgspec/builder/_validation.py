"""sqlglot based safety checks for rendered statements.

Raw condition and join text is passed through verbatim, so a rendered
statement can still carry stacked queries or unbounded DML. These checks
parse the final text with the PostgreSQL dialect and report what they find.
"""

from typing import Optional

import sqlglot
from sqlglot import exp
from sqlglot.errors import ParseError

from pgspec.exceptions import RiskLevel
from pgspec.utils.logging import get_logger

__all__ = ("ValidationResult", "validate_sql")

logger = get_logger("builder.validation")

_DANGEROUS_FUNCTIONS = frozenset({"pg_sleep", "pg_read_file", "pg_read_binary_file", "pg_ls_dir", "lo_import", "lo_export", "dblink"})


class ValidationResult:
    """Result of SQL validation with detailed information."""

    __slots__ = ("is_safe", "issues", "risk_level", "warnings")

    def __init__(
        self,
        is_safe: bool,
        risk_level: RiskLevel,
        issues: Optional[list[str]] = None,
        warnings: Optional[list[str]] = None,
    ) -> None:
        self.is_safe = is_safe
        self.risk_level = risk_level
        self.issues = issues if issues is not None else []
        self.warnings = warnings if warnings is not None else []

    def __bool__(self) -> bool:
        return self.is_safe

    def __repr__(self) -> str:
        return f"ValidationResult(is_safe={self.is_safe}, risk_level={self.risk_level}, issues={self.issues!r})"


def _check_risky_dml(expression: exp.Expression) -> list[str]:
    if isinstance(expression, (exp.Delete, exp.Update)) and not expression.args.get("where"):
        return [f"{type(expression).__name__} statement without a WHERE clause affects every row."]
    return []


def _check_dangerous_functions(expression: exp.Expression) -> list[str]:
    issues = []
    for func in expression.find_all(exp.Anonymous):
        name = str(func.name).lower()
        if name in _DANGEROUS_FUNCTIONS:
            issues.append(f"Dangerous function detected: {name}")
    return issues


def validate_sql(sql: str) -> ValidationResult:
    """Validate rendered SQL text.

    Args:
        sql: The statement to check.

    Returns:
        ValidationResult: ``is_safe`` is False when the text does not parse,
        holds more than one statement, or calls a dangerous function.
    """
    try:
        statements = [statement for statement in sqlglot.parse(sql, read="postgres") if statement is not None]
    except ParseError as exc:
        logger.debug("Statement failed to parse: %s", exc)
        return ValidationResult(False, RiskLevel.HIGH, issues=[f"Statement could not be parsed: {exc}"])

    if not statements:
        return ValidationResult(False, RiskLevel.HIGH, issues=["No statement found."])
    if len(statements) > 1:
        return ValidationResult(
            False, RiskLevel.CRITICAL, issues=[f"Expected a single statement, found {len(statements)}."]
        )

    statement = statements[0]
    issues = _check_dangerous_functions(statement)
    warnings = _check_risky_dml(statement)
    if issues:
        return ValidationResult(False, RiskLevel.CRITICAL, issues=issues, warnings=warnings)
    if warnings:
        return ValidationResult(True, RiskLevel.MEDIUM, warnings=warnings)
    return ValidationResult(True, RiskLevel.SAFE)
