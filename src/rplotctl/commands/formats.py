"""Command: list accepted output formats and symbolic option values."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from rplotctl.commands._base import RPlotCommand

if TYPE_CHECKING:
    from rplotctl.commands._context import AppContext


@click.command(
    cls=RPlotCommand,
    examples="""\
  rplotctl formats
  rplotctl --json formats""",
)
@click.pass_obj
def formats(app: AppContext) -> None:
    """List output formats and the names accepted by symbolic options."""
    from rplotctl.services.chart import ChartService

    app.emit(ChartService(app.render_config()).formats())
