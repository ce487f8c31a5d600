"""AppContext — shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``. Owns logging setup, per-invocation render
config, chart file loading, and result emission (stdout/stderr routing
+ exit codes).
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, NoReturn

import click

from rplotctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from rplotctl.config.models import RenderConfig
    from rplotctl.config.settings import RPlotSettings
    from rplotctl.domain.description import ChartDescription
    from rplotctl.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: RPlotSettings) -> None:
        self.settings = settings

        from rplotctl.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    def render_config(
        self,
        *,
        script_path: str | None = None,
        interpreter_path: str | None = None,
    ) -> RenderConfig:
        """Settings' render defaults with per-invocation overrides applied."""
        overrides = {
            key: value
            for key, value in (
                ("script_path", script_path),
                ("interpreter_path", interpreter_path),
            )
            if value is not None
        }
        return self.settings.render.model_copy(update=overrides)

    def load_chart(self, chart_file: str) -> ChartDescription:
        """Load a chart description or exit with a formatted error."""
        from rplotctl.config.logging import bind_chart
        from rplotctl.domain.errors import ValidationError
        from rplotctl.services.chart import load_description
        from rplotctl.services.result import ErrorCode, ServiceError, ServiceResult

        bind_chart(chart_file)
        try:
            return load_description(Path(chart_file))
        except ValidationError as exc:
            self.fail(
                ServiceResult(
                    ok=False,
                    op="load_chart",
                    error=ServiceError(code=ErrorCode.VALIDATION_ERROR, message=str(exc)),
                )
            )

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: writes to stdout, warnings to stderr.
        * Failure: writes to stderr, exits with code 1.
        """
        if not result.ok:
            self.fail(result)
        settings = self._output_settings()
        output = format_result(result, settings=settings)
        click.echo(output)
        if not settings.json_output:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)

    def fail(self, result: ServiceResult) -> NoReturn:
        """Write a failed result to stderr and exit with code 1."""
        click.echo(format_result(result, settings=self._output_settings()), err=True)
        raise SystemExit(1)

    def _output_settings(self) -> OutputSettings:
        return OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
