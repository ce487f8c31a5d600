"""rplotctl entry point: global output flags plus the chart subcommands."""

from __future__ import annotations

import click

from rplotctl import __version__
from rplotctl.commands import register_commands
from rplotctl.commands._context import AppContext
from rplotctl.config.settings import RPlotSettings

EPILOG = """\
CHART_FILE is a .json or .toml chart description. Defaults for
script_path and interpreter_path come from rplotctl.toml (found by walking
up from the working directory) or RPLOTCTL_CONFIG.
Run 'rplotctl formats' to list accepted option names."""


@click.group(
    invoke_without_command=True,
    epilog=EPILOG,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.version_option(version=__version__, prog_name="rplotctl")
@click.option("--json", "json_output", is_flag=True, help="Print results as JSON.")
@click.option("-q", "--quiet", is_flag=True, help="Print only the script or interpreter output.")
@click.option("-v", "--verbose", is_flag=True, help="Show chart metadata and debug logs.")
@click.option("--log-json", is_flag=True, help="Write logs to stderr as JSON lines.")
@click.option("-c", "--config", "config_path", default=None, help="Use this rplotctl.toml.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """Compile chart descriptions to R plotting scripts and run them."""
    settings = RPlotSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
