"""Command group: projects (directory + .project.json sidecar)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from homebase.commands._base import HomebaseGroup
from homebase.services.projects import ProjectService

if TYPE_CHECKING:
    from homebase.commands._context import AppContext

_PROJECT_EXAMPLES = """\
  homebase project list
  homebase project create "My Plan"
  homebase project update 3f2a9c1e-0000-4000-8000-000000000000 --status paused
  homebase project update 3f2a9c1e-0000-4000-8000-000000000000 --name "Better Plan\""""


@click.group(cls=HomebaseGroup, examples=_PROJECT_EXAMPLES)
def project() -> None:
    """List, create, and update projects."""


@project.command("list")
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """List projects by name."""
    app.emit(ProjectService(app.vault).list_projects())


@project.command()
@click.argument("name")
@click.pass_obj
def create(app: AppContext, name: str) -> None:
    """Create a project named NAME."""
    app.emit(ProjectService(app.vault).create_project(name))


@project.command()
@click.argument("project_id")
@click.option("--name", default=None, help="New project name.")
@click.option("--status", default=None, help="New project status.")
@click.pass_obj
def update(app: AppContext, project_id: str, name: str | None, status: str | None) -> None:
    """Update a project's name and/or status by id."""
    app.emit(ProjectService(app.vault).update_project(project_id, name=name, status=status))
