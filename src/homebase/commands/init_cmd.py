"""Command: vault initialization (named init_cmd to avoid shadowing builtins)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from homebase.commands._base import HomebaseCommand
from homebase.services.init import InitService

if TYPE_CHECKING:
    from homebase.commands._context import AppContext


@click.command(
    "init",
    cls=HomebaseCommand,
    examples="""\
  homebase init
  homebase --json init""",
)
@click.pass_obj
def init_cmd(app: AppContext) -> None:
    """Create the vault skeleton if it is missing (safe to repeat)."""
    app.emit(InitService(app.vault).init())
