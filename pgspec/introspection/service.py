"""Introspect a schema and write the generated type definitions."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from pgspec.introspection.introspector import DEFAULT_SCHEMA
from pgspec.introspection.layout import DEFAULT_FILE_NAME, render_multi_file, render_single_file
from pgspec.introspection.writer import FileSystemWriter
from pgspec.utils.logging import correlation_context, get_logger, log_with_context

if TYPE_CHECKING:
    from pgspec.introspection.introspector import Introspector
    from pgspec.protocols import DocumentWriter

__all__ = ("IntrospectOptions", "IntrospectionResult", "IntrospectionService")

logger = get_logger("introspection.service")


@dataclass(frozen=True)
class IntrospectOptions:
    """How generated interfaces are laid out.

    Attributes:
        single_file: Write every interface into ``file_name`` instead of one file per table.
        file_name: Document name used in single-file mode.
        include_comments: Render table and column documentation.
        include_imports: Start documents with the imports block.
        custom_imports: Extra lines appended to the imports block.
    """

    single_file: bool = False
    file_name: str = DEFAULT_FILE_NAME
    include_comments: bool = True
    include_imports: bool = True
    custom_imports: Sequence[str] = ()


@dataclass
class IntrospectionResult:
    success: bool
    message: str
    files: list[str] = field(default_factory=list)
    tables: list[str] = field(default_factory=list)


class IntrospectionService:
    """Runs introspection end to end and reports a structured result.

    Failures never escape :meth:`introspect`; they are logged and returned as
    an unsuccessful :class:`IntrospectionResult`.
    """

    __slots__ = ("introspector", "writer")

    def __init__(self, introspector: "Introspector", writer: "Optional[DocumentWriter]" = None) -> None:
        self.introspector = introspector
        self.writer = writer if writer is not None else FileSystemWriter()

    async def introspect(
        self,
        output_dir: str,
        schema: str = DEFAULT_SCHEMA,
        options: Optional[IntrospectOptions] = None,
    ) -> IntrospectionResult:
        options = options or IntrospectOptions()
        with correlation_context():
            try:
                interfaces = await self.introspector.generate_all_interfaces(schema, options.include_comments)
                if not interfaces:
                    msg = f"No tables found in schema '{schema}'"
                    logger.warning(msg)
                    return IntrospectionResult(success=False, message=msg)

                if options.single_file:
                    output = render_single_file(
                        interfaces,
                        schema,
                        file_name=options.file_name,
                        include_imports=options.include_imports,
                        custom_imports=options.custom_imports,
                    )
                else:
                    output = render_multi_file(
                        interfaces,
                        schema,
                        include_imports=options.include_imports,
                        custom_imports=options.custom_imports,
                    )
                files = self.writer.write(output_dir, output.documents)
            except Exception as exc:
                logger.error("Introspection of schema %s failed", schema, exc_info=True)
                return IntrospectionResult(success=False, message=f"Introspection failed: {exc}")

            # a writer may report no paths
            location = files[0] if options.single_file and files else output_dir
            message = f"Generated type definitions for {len(output.tables)} tables in {location}"
            log_with_context(logger, logging.INFO, message, schema=schema, tables=len(output.tables), files=files)
            return IntrospectionResult(success=True, message=message, files=list(files), tables=list(output.tables))
