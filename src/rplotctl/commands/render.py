"""Command: render a chart description through the R interpreter."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from rplotctl.commands._base import RPlotCommand

if TYPE_CHECKING:
    from rplotctl.commands._context import AppContext


@click.command(
    cls=RPlotCommand,
    examples="""\
  rplotctl render chart.json
  rplotctl render chart.toml --interpreter /usr/local/bin/R
  rplotctl render chart.json --script-path build/plot.R
  rplotctl -v render chart.json""",
)
@click.argument("chart_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--script-path",
    default=None,
    help="Where to write the generated script. Ignored if the chart sets script_path.",
)
@click.option(
    "--interpreter",
    "interpreter_path",
    default=None,
    help="R executable to run. Ignored if the chart sets interpreter_path.",
)
@click.pass_obj
def render(
    app: AppContext,
    chart_file: str,
    script_path: str | None,
    interpreter_path: str | None,
) -> None:
    """Render CHART_FILE to an image and print the interpreter output.

    Paths resolve in this order: script_path and interpreter_path in the
    chart options, then --script-path and --interpreter, then RPLOTCTL_RENDER__*
    environment variables and the [render] table of rplotctl.toml.
    A nonzero interpreter exit status is reported as a warning.
    """
    from rplotctl.services.chart import ChartService

    description = app.load_chart(chart_file)
    config = app.render_config(script_path=script_path, interpreter_path=interpreter_path)
    app.emit(ChartService(config).render(description))
