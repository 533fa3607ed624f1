"""Building blocks shared by the statement renderers.

Fragments are tuples of literal SQL text and :class:`Parameter` markers.
Placeholder numbers are only assigned when a statement is rendered, by a
:class:`ParameterBinder` walking the fragments in text order, so ``$N``
always addresses the Nth rendered parameter.
"""

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union

from pgspec.builder._validation import ValidationResult, validate_sql
from pgspec.exceptions import SQLBuilderError

__all__ = (
    "Fragment",
    "JoinType",
    "OnConflict",
    "Parameter",
    "ParameterBinder",
    "QueryKind",
    "SQLResult",
    "SortDirection",
)


class Parameter:
    """A value bound to a positional placeholder."""

    __slots__ = ("value",)

    def __init__(self, value: Any) -> None:
        self.value = value

    def __repr__(self) -> str:
        return f"Parameter({self.value!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Parameter):
            return NotImplemented
        return bool(self.value == other.value)

    __hash__ = None  # type: ignore[assignment]


Fragment = tuple[Union[str, Parameter], ...]


class QueryKind(str, Enum):
    SELECT = "SELECT"
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


class JoinType(str, Enum):
    INNER = "INNER"
    LEFT = "LEFT"
    RIGHT = "RIGHT"
    FULL = "FULL"

    @classmethod
    def coerce(cls, value: Union[str, "JoinType"]) -> "JoinType":
        try:
            return cls(value.upper() if isinstance(value, str) else value)
        except ValueError:
            msg = f"Unsupported join type: {value!r}. Expected one of INNER, LEFT, RIGHT, FULL."
            raise SQLBuilderError(msg) from None


class SortDirection(str, Enum):
    ASC = "ASC"
    DESC = "DESC"

    @classmethod
    def coerce(cls, value: Union[str, "SortDirection"]) -> "SortDirection":
        try:
            return cls(value.upper() if isinstance(value, str) else value)
        except ValueError:
            msg = f"Unsupported sort direction: {value!r}. Expected ASC or DESC."
            raise SQLBuilderError(msg) from None


@dataclass(frozen=True)
class OnConflict:
    """Upsert target and the columns to overwrite on conflict.

    Without ``update`` the insert renders ``DO NOTHING``.
    """

    columns: tuple[str, ...] = ()
    update: Optional[tuple[str, ...]] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "columns", tuple(self.columns))
        if self.update is not None:
            object.__setattr__(self, "update", tuple(self.update))
        if self.update and not self.columns:
            msg = "ON CONFLICT DO UPDATE requires at least one conflict column."
            raise SQLBuilderError(msg)

    @classmethod
    def coerce(cls, value: Union["OnConflict", Mapping[str, Any], None]) -> Optional["OnConflict"]:
        """Accept an :class:`OnConflict` or a mapping with ``columns``/``update`` keys."""
        if value is None or isinstance(value, OnConflict):
            return value
        update = value.get("update")
        return cls(columns=tuple(value.get("columns") or ()), update=tuple(update) if update is not None else None)


class ParameterBinder:
    """Collects parameter values and hands out their placeholders."""

    __slots__ = ("params",)

    def __init__(self) -> None:
        self.params: list[Any] = []

    def bind(self, value: Any) -> str:
        self.params.append(value)
        return f"${len(self.params)}"

    def render(self, fragment: Fragment) -> str:
        return "".join(self.bind(part.value) if isinstance(part, Parameter) else part for part in fragment)

    def render_all(self, fragments: Iterable[Fragment], separator: str = " AND ") -> str:
        return separator.join(self.render(fragment) for fragment in fragments)


@dataclass(frozen=True)
class SQLResult:
    """Rendered SQL text with its positional parameters."""

    sql: str
    params: tuple[Any, ...] = field(default_factory=tuple)

    def validate(self) -> ValidationResult:
        """Parse the statement and report anything unsafe.

        Returns:
            ValidationResult: The result of the validation.
        """
        return validate_sql(self.sql)

    def as_list(self) -> list[Any]:
        return list(self.params)


def freeze_columns(columns: Sequence[Any]) -> tuple[str, ...]:
    return tuple(str(column) for column in columns)
