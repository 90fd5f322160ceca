from pathlib import Path
from typing import TYPE_CHECKING, Optional

import click
from rich import get_console
from rich.markup import escape
from rich.table import Table

from eventbind.config import BindConfig, ParameterStyle
from eventbind.exceptions import ImproperConfigurationError
from eventbind.utils import module_loader

if TYPE_CHECKING:
    from eventbind.template import EventTemplate

__all__ = ("get_eventbind_group", "main")


def _load_registry_modules(registry_paths: "tuple[str, ...]") -> None:
    """Import modules that register custom extractors as a side effect."""
    for path in registry_paths:
        module_loader.import_string(path)


def _render_template(template: "EventTemplate") -> Table:
    table = Table(title="Placeholders", show_lines=False)
    table.add_column("Position", justify="right")
    table.add_column("Item")
    table.add_column("Type")
    table.add_column("Config")
    table.add_column("Extractor")
    for placeholder, extractor in zip(template.placeholders, template.extractors):
        table.add_row(
            str(placeholder.position),
            placeholder.item,
            placeholder.type_name,
            placeholder.config or "",
            type(extractor).__name__,
        )
    return table


def get_eventbind_group() -> "click.Group":
    """Get the eventbind CLI group.

    Returns:
        The eventbind CLI group.
    """

    @click.group(name="eventbind")
    @click.option("--verbose", help="Enable debug logging.", is_flag=True, default=False)
    @click.pass_context
    def eventbind_group(ctx: "click.Context", verbose: bool) -> None:
        """Compile and inspect event-to-SQL binding templates."""
        ctx.ensure_object(dict)
        if verbose:
            from eventbind.utils.logging import configure_logging

            configure_logging(level="DEBUG", format_style="simple")

    @eventbind_group.command(name="inspect")
    @click.argument("sql", required=False)
    @click.option(
        "--file",
        "sql_file",
        help="Read the template from a file instead of the SQL argument.",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        default=None,
    )
    @click.option("--dialect", help="sqlglot dialect used for validation.", type=str, default=None)
    @click.option(
        "--style",
        help="Placeholder style of the rendered SQL.",
        type=click.Choice([style.value for style in ParameterStyle]),
        default=ParameterStyle.QMARK.value,
        show_default=True,
    )
    @click.option("--no-validate", help="Skip SQL validation.", is_flag=True, default=False)
    @click.option(
        "--registry",
        "registry_paths",
        help="Dotted path of a module registering custom extractors. May be repeated.",
        multiple=True,
        type=str,
    )
    @click.pass_context
    def inspect_template(
        ctx: "click.Context",
        sql: Optional[str],
        sql_file: Optional[Path],
        dialect: Optional[str],
        style: str,
        no_validate: bool,
        registry_paths: "tuple[str, ...]",
    ) -> None:
        """Compile a template and show its placeholders and rendered SQL."""
        from eventbind.template import EventTemplate

        console = get_console()
        if sql_file is not None:
            sql = sql_file.read_text(encoding="utf-8")
        if not sql:
            console.print("[red]Provide a SQL template or --file.[/]")
            ctx.exit(1)

        try:
            _load_registry_modules(registry_paths)
        except ImportError as e:
            console.print(f"[red]Error loading registry module: {escape(str(e))}[/]")
            ctx.exit(1)

        config = BindConfig(parameter_style=style, dialect=dialect, enable_validation=not no_validate)
        try:
            template = EventTemplate.from_sql(sql, config)  # type: ignore[arg-type]
        except ImproperConfigurationError as e:
            console.print(f"[red]Invalid template: {escape(str(e))}[/]")
            ctx.exit(1)

        console.print(_render_template(template))
        console.print(f"[bold]SQL:[/] {escape(template.sql)}", highlight=False)

    return eventbind_group


def main() -> None:
    get_eventbind_group()()
