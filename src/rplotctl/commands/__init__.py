"""Subcommand modules for rplotctl.

Provides register_commands() which uses deferred imports to keep
``rplotctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from rplotctl.commands.formats import formats
    from rplotctl.commands.render import render
    from rplotctl.commands.script import script

    cli.add_command(script)
    cli.add_command(render)
    cli.add_command(formats)
