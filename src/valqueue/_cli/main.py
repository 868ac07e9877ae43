import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from valqueue._form import FormResult
from valqueue._io import export_result_to_toml, load_form_from_toml, load_values_from_toml
from valqueue._payload import Payload, Severity, effective_severity
from valqueue._schema import SchemaError

from .config import ConfigError, get_config

app = typer.Typer()

logger = logging.getLogger(__name__)
# Console for stderr (info/errors)
err_console = Console(stderr=True)

_SEVERITY_STYLES = {
    Severity.SUCCESS: "green",
    Severity.INFO: "cyan",
    Severity.WARNING: "yellow",
    Severity.FAILURE: "red",
}


@app.callback()
def callback(
    *,
    verbose: bool = typer.Option(default=False, help="Enable verbose output"),
) -> None:
    """Valqueue CLI."""
    log_level = logging.DEBUG if verbose else logging.INFO

    # Configure rich logging handler to output to stderr
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=err_console,
                show_time=False,
                show_path=verbose,
                rich_tracebacks=True,
            ),
        ],
    )


def _describe(payload: Payload | None) -> tuple[str, str]:
    """Return (severity, message) cells for a payload."""
    severity = effective_severity(payload)
    if payload is None or severity is None:
        return "[dim]-[/dim]", ""
    style = _SEVERITY_STYLES[severity]
    messages = [escape(leaf.message) for leaf in payload.iter_leaves() if getattr(leaf, "message", None)]
    return f"[{style}]{severity.value.upper()}[/{style}]", "\n".join(messages)


def _render_result(result: FormResult) -> None:
    table = Table(show_header=True, header_style="bold cyan", box=None)
    table.add_column("Field", style="bold")
    table.add_column("Severity")
    table.add_column("Message")

    for name, payload in result.payloads.items():
        severity_cell, message_cell = _describe(payload)
        table.add_row(escape(name), severity_cell, message_cell)

    err_console.print(Panel(table, title="[bold]Validation Results[/bold]", border_style="cyan"))
    err_console.print()


@app.command()
def check(
    form: Annotated[
        Path | None,
        typer.Argument(help="Path to the form description TOML file"),
    ] = None,
    *,
    input: Annotated[  # noqa: A002
        Path | None,
        typer.Option("-i", "--input", help="Path to the TOML file holding field values"),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("-o", "--output", help="Path to output TOML file"),
    ] = None,
) -> None:
    """Validate field values against a form description."""
    err_console.print()

    try:
        config = get_config()
    except ConfigError as e:
        err_console.print(f"[red]Configuration error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    effective_form = form if form is not None else config.form
    effective_input = input if input is not None else config.input
    effective_output = output if output is not None else config.output

    if effective_form is None:
        err_console.print("[red]Error: Form file required. Pass FORM or configure \\[tool.valqueue].form[/red]")
        raise typer.Exit(code=1)
    if effective_input is None:
        err_console.print("[red]Error: Input file required. Use -i/--input or configure \\[tool.valqueue].input[/red]")
        raise typer.Exit(code=1)

    # Verify input files exist
    if not effective_form.exists():
        err_console.print(f"[red]Error: Form file not found: {escape(str(effective_form))}[/red]")
        raise typer.Exit(code=1)
    if not effective_input.exists():
        err_console.print(f"[red]Error: Input file not found: {escape(str(effective_input))}[/red]")
        raise typer.Exit(code=1)

    try:
        err_console.print(f"[cyan]Loading form from:[/cyan] {effective_form}")
        validation_form = load_form_from_toml(effective_form)
        err_console.print(f"[cyan]Loading input from:[/cyan] {effective_input}")
        values = load_values_from_toml(effective_input)
    except SchemaError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e
    err_console.print()

    result = validation_form.validate(values)
    logger.debug(f"Recorded {len(result.history)} state(s) during validation")
    _render_result(result)

    if effective_output is not None:
        err_console.print(f"[cyan]Exporting results to:[/cyan] {effective_output}")
        export_result_to_toml(result, effective_output)
        err_console.print()

    if not result.success:
        failed = ", ".join(result.failed_fields())
        err_console.print(f"[red]✗ Validation failed: {escape(failed)}[/red]")
        err_console.print()
        raise typer.Exit(code=1)

    err_console.print("[green]✓ All fields valid[/green]")
    err_console.print()


def main() -> None:
    app()
