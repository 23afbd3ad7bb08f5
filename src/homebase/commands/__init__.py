"""Subcommand modules for homebase."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the command groups and standalone commands on the root group."""
    from homebase.commands.folder import folder
    from homebase.commands.init_cmd import init_cmd
    from homebase.commands.note import note
    from homebase.commands.project import project

    cli.add_command(init_cmd)
    cli.add_command(note)
    cli.add_command(folder)
    cli.add_command(project)
