"""Command group: folders under notes/folders."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from homebase.commands._base import HomebaseGroup
from homebase.services.folders import FolderService

if TYPE_CHECKING:
    from homebase.commands._context import AppContext

_FOLDER_EXAMPLES = """\
  homebase folder list
  homebase folder create notes/folders/work/clients
  homebase folder rename notes/folders/work/clients customers
  homebase folder delete notes/folders/work/customers"""


@click.group(cls=HomebaseGroup, examples=_FOLDER_EXAMPLES)
def folder() -> None:
    """List, create, rename, and delete folders."""


@folder.command("list")
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """List every folder, sorted."""
    app.emit(FolderService(app.vault).list_folders())


@folder.command()
@click.argument("path")
@click.pass_obj
def create(app: AppContext, path: str) -> None:
    """Create a folder (parents included)."""
    app.emit(FolderService(app.vault).create_folder(path))


@folder.command()
@click.argument("path")
@click.argument("new_name")
@click.pass_obj
def rename(app: AppContext, path: str, new_name: str) -> None:
    """Rename a folder within its parent."""
    app.emit(FolderService(app.vault).rename_folder(path, new_name))


@folder.command()
@click.argument("path")
@click.pass_obj
def delete(app: AppContext, path: str) -> None:
    """Delete an empty folder."""
    app.emit(FolderService(app.vault).delete_folder(path))
