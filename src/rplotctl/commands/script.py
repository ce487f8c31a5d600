"""Command: print the generated R script for a chart description."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from rplotctl.commands._base import RPlotCommand

if TYPE_CHECKING:
    from rplotctl.commands._context import AppContext


@click.command(
    cls=RPlotCommand,
    examples="""\
  rplotctl script chart.json
  rplotctl script chart.toml > plot.R
  rplotctl --json script chart.json""",
)
@click.argument("chart_file", type=click.Path(exists=True, dir_okay=False))
@click.pass_obj
def script(app: AppContext, chart_file: str) -> None:
    """Print the R script for CHART_FILE without running it."""
    from rplotctl.services.chart import ChartService

    description = app.load_chart(chart_file)
    app.emit(ChartService(app.render_config()).script(description))
