"""Human and JSON formatting for ServiceResult.

Script text and interpreter output are printed verbatim so they can be
piped; everything else goes through a Rich console.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from rich.table import Table
from rich.text import Text

from rplotctl.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from rplotctl.services.result import ServiceResult


@dataclass(frozen=True)
class OutputSettings:
    """Output mode flags taken from the CLI."""

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display."""
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if not result.ok:
        message = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {message}"
    if result.op == "script":
        return result.data["script"]
    if settings.quiet:
        return str(result.data.get("output", "")).rstrip("\n") or f"OK: {result.op}"

    console = create_console()
    renderer = _OP_RENDERERS.get(result.op, _render_generic)
    renderer(result, console, verbose=settings.verbose)
    return get_output(console).rstrip("\n")


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="rplot.ok"), Text(f"  {result.op}", style="rplot.op"))


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        console.print(Text(f"  {key}: ", style="rplot.key"), Text(str(value)))


def _render_render(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    console.print(Text("  image: ", style="rplot.key"), Text(result.data["path"], style="rplot.path"))
    if verbose:
        console.print(
            Text("  script: ", style="rplot.key"),
            Text(result.data["script_path"], style="rplot.path"),
        )
    output = result.data.get("output", "").rstrip("\n")
    if output:
        console.print(output, markup=False)


def _render_formats(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    table = Table(title="Accepted values", show_header=True, header_style="rplot.op")
    table.add_column("option", style="rplot.name")
    table.add_column("values")
    for option, values in result.data.items():
        table.add_row(option, ", ".join(str(v) for v in values))
    console.print(table)


_OP_RENDERERS = {
    "render": _render_render,
    "formats": _render_formats,
}
