from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from click import Group


__all__ = ("add_introspect_command", "get_pgspec_group", "main")


def get_pgspec_group() -> "Group":
    """Get the pgspec CLI group.

    Raises:
        MissingDependencyError: If the `click` package is not installed.

    Returns:
        The pgspec CLI group.
    """
    from pgspec.exceptions import MissingDependencyError

    try:
        import rich_click as click
    except ImportError:
        try:
            import click  # type: ignore[no-redef]
        except ImportError as e:
            raise MissingDependencyError(package="click", install_package="cli") from e

    @click.group(name="pgspec")
    @click.option("--log-level", help="Logging level.", type=str, default="WARNING", show_default=True)
    @click.option("--json-logs", help="Emit structured JSON logs.", is_flag=True, default=False)
    def pgspec_group(log_level: str, json_logs: bool) -> None:
        """pgspec CLI commands."""
        from pgspec.utils.logging import configure_logging

        configure_logging(level=log_level.upper(), format_style="structured" if json_logs else "simple")

    return pgspec_group


def add_introspect_command(group: Optional["Group"] = None) -> "Group":
    """Add the ``introspect`` command to the group.

    Raises:
        MissingDependencyError: If the `click` package is not installed.

    Returns:
        The group with the command added.
    """
    from pgspec.exceptions import MissingDependencyError

    try:
        import rich_click as click
    except ImportError:
        try:
            import click  # type: ignore[no-redef]
        except ImportError as e:
            raise MissingDependencyError(package="click", install_package="cli") from e
    from rich import get_console
    from rich.markup import escape

    console = get_console()

    if group is None:
        group = get_pgspec_group()

    @group.command(name="introspect", help="Generate TypeScript interfaces for every table of a schema.")
    @click.argument("output_dir", type=click.Path(file_okay=False, path_type=Path))
    @click.option("--schema", help="Schema to introspect.", type=str, default="public", show_default=True)
    @click.option("--single-file", help="Write all interfaces into one file.", is_flag=True, default=False)
    @click.option("--file-name", help="File name used with --single-file.", type=str, default="database-types.ts")
    @click.option("--no-comments", help="Omit table and column documentation.", is_flag=True, default=False)
    @click.option("--no-imports", help="Omit the imports block.", is_flag=True, default=False)
    @click.option(
        "--import",
        "custom_imports",
        help="Extra import line. May be given more than once.",
        type=str,
        multiple=True,
    )
    def introspect(  # pyright: ignore[reportUnusedFunction]
        output_dir: Path,
        schema: str,
        single_file: bool,
        file_name: str,
        no_comments: bool,
        no_imports: bool,
        custom_imports: tuple[str, ...],
    ) -> None:
        """Introspect the configured database."""
        from anyio import run

        from pgspec.adapters.asyncpg import AsyncpgConfig
        from pgspec.config import load_settings
        from pgspec.exceptions import DatabaseError, ImproperConfigurationError
        from pgspec.introspection import IntrospectionResult, IntrospectionService, IntrospectOptions, Introspector
        from pgspec.utils.logging import correlation_context

        ctx = click.get_current_context()
        console.rule(f"[yellow]Introspecting schema {schema}[/]", align="left")
        try:
            settings = load_settings()
        except ImproperConfigurationError as e:
            console.print(f"[red]{escape(str(e))}[/]")
            ctx.exit(1)

        options = IntrospectOptions(
            single_file=single_file,
            file_name=file_name,
            include_comments=not no_comments,
            include_imports=not no_imports,
            custom_imports=custom_imports,
        )

        async def _introspect() -> "IntrospectionResult":
            config = AsyncpgConfig.from_settings(settings)
            try:
                async with config.provide_driver() as driver:
                    service = IntrospectionService(Introspector(driver))
                    return await service.introspect(str(output_dir), schema, options)
            except DatabaseError as e:
                return IntrospectionResult(success=False, message=str(e))
            finally:
                await config.close_pool()

        with correlation_context():
            result = run(_introspect)
        if not result.success:
            console.print(f"[red]{escape(result.message)}[/]")
            ctx.exit(1)
        console.print(f"[green]{escape(result.message)}[/]")
        for file in result.files:
            console.print(f"  {file}")

    return group


def main() -> None:
    add_introspect_command()()
