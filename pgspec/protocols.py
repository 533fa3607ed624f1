"""Runtime-checkable protocols for the collaborators pgspec talks to.

The core never opens connections or writes files. It reaches the database
and the file system only through these protocols.
"""

from collections.abc import Mapping, Sequence
from typing import Any, Protocol, runtime_checkable

__all__ = ("DocumentWriter", "ExecuteDriver", "QueryDriver")


@runtime_checkable
class QueryDriver(Protocol):
    """Runs a parameterized query and returns its rows."""

    async def select(self, sql: str, *parameters: Any) -> "list[Mapping[str, Any]]":
        """Execute ``sql`` with positional ``parameters`` and return every row."""
        ...


@runtime_checkable
class ExecuteDriver(QueryDriver, Protocol):
    """A query driver that can also run statements without a result set."""

    async def execute(self, sql: str, *parameters: Any) -> str:
        """Execute ``sql`` and return the server status text (e.g. ``"INSERT 0 1"``)."""
        ...

    async def select_one(self, sql: str, *parameters: Any) -> "Mapping[str, Any] | None":
        ...

    async def select_value(self, sql: str, *parameters: Any) -> Any:
        ...


@runtime_checkable
class DocumentWriter(Protocol):
    """Persists generated documents."""

    def write(self, directory: str, documents: "Sequence[Any]") -> "list[str]":
        """Write ``documents`` below ``directory`` and return the written paths."""
        ...
