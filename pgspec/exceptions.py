from enum import Enum, auto
from typing import Any, Optional

__all__ = (
    "DatabaseError",
    "FormatError",
    "ImproperConfigurationError",
    "IntrospectionError",
    "MissingDataError",
    "MissingDependencyError",
    "PgSpecError",
    "RiskLevel",
    "SQLBuilderError",
    "TableNotFoundError",
    "UnsupportedOperationError",
    "UnsupportedOperatorError",
)


class PgSpecError(Exception):
    """Base exception class from which all pgspec exceptions inherit."""

    detail: str

    def __init__(self, *args: Any, detail: str = "") -> None:
        """Initialize ``PgSpecError``.

        Args:
            *args: args are converted to :class:`str` before passing to :class:`Exception`
            detail: detail of the exception.
        """
        str_args = [str(arg) for arg in args if arg]
        if not detail:
            if str_args:
                detail, *str_args = str_args
            elif hasattr(self, "detail"):
                detail = self.detail
        self.detail = detail
        super().__init__(*str_args)

    def __repr__(self) -> str:
        if self.detail:
            return f"{self.__class__.__name__} - {self.detail}"
        return self.__class__.__name__

    def __str__(self) -> str:
        return " ".join((*self.args, self.detail)).strip()


class MissingDependencyError(PgSpecError, ImportError):
    """Missing optional dependency.

    This exception is raised only when a module depends on a dependency that has not been installed.
    """

    def __init__(self, package: str, install_package: Optional[str] = None) -> None:
        super().__init__(
            f"Package {package!r} is not installed but required. You can install it by running "
            f"'pip install pgspec[{install_package or package}]' to install pgspec with the required extra "
            f"or 'pip install {install_package or package}' to install the package separately",
        )


class ImproperConfigurationError(PgSpecError):
    """Raised when connection settings are missing or invalid."""


class DatabaseError(PgSpecError):
    """A statement failed in the database driver."""


class FormatError(PgSpecError, ValueError):
    """A PostgreSQL array literal could not be decoded."""

    def __init__(self, message: Optional[str] = None) -> None:
        if message is None:
            message = "Invalid PostgreSQL array format."
        super().__init__(message)


class SQLBuilderError(PgSpecError):
    """Issues Building or Generating SQL statements."""

    def __init__(self, message: Optional[str] = None) -> None:
        if message is None:
            message = "Issues building SQL statement."
        super().__init__(message)


class MissingDataError(SQLBuilderError):
    """An INSERT or UPDATE was rendered without a payload."""


class UnsupportedOperationError(SQLBuilderError):
    """The statement kind selected on the builder cannot be rendered."""


class UnsupportedOperatorError(SQLBuilderError):
    """A condition mapping used an operator outside the supported set."""

    operator: str

    def __init__(self, operator: str, column: Optional[str] = None) -> None:
        message = f"Unsupported condition operator: {operator!r}"
        if column:
            message = f"{message} (column {column!r})"
        super().__init__(message)
        self.operator = operator


class IntrospectionError(PgSpecError):
    """Base class for schema introspection errors."""


class TableNotFoundError(IntrospectionError):
    """The requested table is absent from the catalog listing."""

    table: str
    schema: str

    def __init__(self, table: str, schema: str = "public") -> None:
        super().__init__(f"Table {table!r} not found in schema {schema!r}")
        self.table = table
        self.schema = schema


class RiskLevel(Enum):
    """SQL risk assessment levels."""

    SAFE = auto()
    LOW = auto()
    MEDIUM = auto()
    HIGH = auto()
    CRITICAL = auto()

    def __str__(self) -> str:
        """String representation.

        Returns:
            Lowercase name of the level.
        """
        return self.name.lower()
