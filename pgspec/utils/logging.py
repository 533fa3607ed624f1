"""Logging helpers for pgspec.

Every pgspec logger hangs off the ``pgspec`` namespace so a single call to
:func:`configure_logging` controls the whole package. Introspection runs are
tagged with a run id (see :func:`correlation_context`) that the structured
formatter copies into each JSON entry.
"""

from __future__ import annotations

import logging
import sys
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import TYPE_CHECKING, Any

from pgspec._serialization import encode_json

if TYPE_CHECKING:
    from collections.abc import Iterator
    from logging import LogRecord

__all__ = (
    "ROOT_LOGGER_NAME",
    "StructuredFormatter",
    "configure_logging",
    "correlation_context",
    "get_correlation_id",
    "get_logger",
    "log_with_context",
)

ROOT_LOGGER_NAME = "pgspec"
SIMPLE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

_correlation_id: ContextVar[str | None] = ContextVar("pgspec_correlation_id", default=None)


def get_correlation_id() -> str | None:
    """Return the run id of the current context, if any."""
    return _correlation_id.get()


@contextmanager
def correlation_context(correlation_id: str | None = None) -> Iterator[str]:
    """Tag every record logged inside the block with a run id.

    An explicit ``correlation_id`` always wins. Without one, an id already set
    by an enclosing block is reused, otherwise a fresh one is generated.

    Yields:
        The active run id.
    """
    active = correlation_id or get_correlation_id() or uuid.uuid4().hex
    token = _correlation_id.set(active)
    try:
        yield active
    finally:
        _correlation_id.reset(token)


class StructuredFormatter(logging.Formatter):
    """Render records as one JSON object per line."""

    def format(self, record: LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        correlation_id = get_correlation_id()
        if correlation_id:
            entry["correlation_id"] = correlation_id
        entry.update(getattr(record, "extra_fields", {}))
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return str(encode_json(entry))


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``pgspec.<name>``, or the package logger when no name is given.

    Names already under ``pgspec`` are used as is.
    """
    if not name or name == ROOT_LOGGER_NAME:
        return logging.getLogger(ROOT_LOGGER_NAME)
    if not name.startswith(f"{ROOT_LOGGER_NAME}."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logging(
    level: str = "INFO",
    format_style: str = "structured",
    log_to_file: str | None = None,
    extra_handlers: list[logging.Handler] | None = None,
) -> None:
    """Install handlers on the ``pgspec`` logger, replacing any earlier ones.

    Args:
        level: Level name such as ``"DEBUG"`` or ``"warning"``.
        format_style: ``"structured"`` for JSON lines, anything else for plain text.
        log_to_file: Also append JSON lines to this path.
        extra_handlers: Handlers added as given, formatter untouched.
    """
    package_logger = logging.getLogger(ROOT_LOGGER_NAME)
    package_logger.setLevel(level.upper())
    package_logger.handlers.clear()
    package_logger.propagate = False

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(StructuredFormatter() if format_style == "structured" else logging.Formatter(SIMPLE_FORMAT))
    package_logger.addHandler(console)

    if log_to_file:
        file_handler = logging.FileHandler(log_to_file, encoding="utf-8")
        file_handler.setFormatter(StructuredFormatter())
        package_logger.addHandler(file_handler)

    for handler in extra_handlers or ():
        package_logger.addHandler(handler)

    log_with_context(
        package_logger,
        logging.DEBUG,
        "Logging configured",
        level=level.upper(),
        format_style=format_style,
        handlers=len(package_logger.handlers),
    )


def log_with_context(logger: logging.Logger, level: int, message: str, /, **extra_fields: Any) -> None:
    """Log ``message`` with ``extra_fields`` merged into structured output.

    Plain text handlers only show ``message``.
    """
    if logger.isEnabledFor(level):
        logger.log(level, message, extra={"extra_fields": extra_fields}, stacklevel=2)
