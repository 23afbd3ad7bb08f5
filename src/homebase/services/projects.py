"""ProjectService — project directories with ``.project.json`` sidecars.

Project identity is the ``id`` stored in the sidecar, never the directory
name. There is no index: list and update scan ``notes/projects`` on every
call.
"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

from homebase.domain.errors import InvalidArgument, NotFound, VaultError, VaultIOError
from homebase.domain.ids import PROJECT_SUFFIX_LEN, generate_id, short_hex
from homebase.domain.layout import PROJECTS_DIR
from homebase.domain.models import ProjectInfo, ProjectRecord, dump_all
from homebase.domain.slugs import PROJECT_SLUG_DEFAULT, slugify
from homebase.infrastructure.paths import relative_from_root, resolve
from homebase.infrastructure.sidecar import scan_projects, write_sidecar
from homebase.services._helpers import now_iso
from homebase.services.base import BaseService
from homebase.services.result import ServiceResult
from homebase.services.telemetry import traced

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


def _free_project_dir(projects_root: Path, slug: str, *, own: Path | None = None) -> Path:
    """Directory for *slug*, suffixed with random hex when another project holds it.

    *own* (the project's current directory) never counts as a collision.
    """
    candidate = projects_root / slug
    while candidate.exists() and candidate != own:
        candidate = projects_root / f"{slug}-{short_hex(PROJECT_SUFFIX_LEN)}"
    return candidate


def _required(value: str, field: str) -> str:
    if not value.strip():
        msg = f"Project {field} cannot be empty"
        raise InvalidArgument(msg, field=field)
    return value


class ProjectService(BaseService):
    """Project lifecycle operations."""

    @traced
    def list_projects(self) -> ServiceResult:
        """All projects, sorted case-insensitively by name.

        A malformed sidecar fails the whole call unless
        ``projects.skip_malformed`` is enabled, in which case the entry is
        skipped and reported as a warning.
        """
        op = "list_projects"
        try:
            root = self._vault.bootstrap()
            found, warnings = scan_projects(
                resolve(root, PROJECTS_DIR),
                skip_malformed=self._vault.settings.projects.skip_malformed,
            )
            projects = [
                ProjectInfo.from_record(record, relative_from_root(root, folder))
                for folder, record in found
            ]
        except VaultError as exc:
            return self._fail(op, exc)

        projects.sort(key=lambda p: p.name.lower())
        return ServiceResult(
            ok=True,
            op=op,
            data={"items": dump_all(projects), "count": len(projects)},
            warnings=warnings,
        )

    @traced
    def create_project(self, name: str) -> ServiceResult:
        """Create a project directory named after *name* and write its sidecar."""
        op = "create_project"
        try:
            root = self._vault.bootstrap()
            _required(name, "name")
            projects_root = resolve(root, PROJECTS_DIR)
            folder = _free_project_dir(projects_root, slugify(name, default=PROJECT_SLUG_DEFAULT))
            try:
                folder.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise VaultIOError.wrap("create project", folder, exc) from exc

            now = now_iso()
            record = ProjectRecord(
                id=generate_id(),
                name=name,
                status=self._vault.settings.projects.default_status,
                created=now,
                modified=now,
            )
            write_sidecar(folder, record)
            info = ProjectInfo.from_record(record, relative_from_root(root, folder))
        except VaultError as exc:
            return self._fail(op, exc)

        logger.debug("Created project %s at %s", info.id, info.folder_relative_path)
        return ServiceResult(ok=True, op=op, data=info.model_dump())

    @traced
    def update_project(
        self,
        project_id: str,
        *,
        name: str | None = None,
        status: str | None = None,
    ) -> ServiceResult:
        """Change a project's name and/or status, found by id.

        ``modified`` is always refreshed. A name change re-slugs the
        directory; it is renamed only when the new slug differs from the
        current directory name, disambiguated against other projects.
        """
        op = "update_project"
        try:
            root = self._vault.bootstrap()
            projects_root = resolve(root, PROJECTS_DIR)
            found, _ = scan_projects(projects_root)
            match = next(((f, r) for f, r in found if r.id == project_id), None)
            if match is None:
                msg = "Project not found"
                raise NotFound(msg, id=project_id)
            folder, record = match

            changes: dict[str, str] = {"modified": now_iso()}
            if name is not None:
                changes["name"] = _required(name, "name")
            if status is not None:
                changes["status"] = _required(status, "status")
            updated = record.model_copy(update=changes)

            final_folder = folder
            if updated.name != record.name:
                desired = slugify(updated.name, default=PROJECT_SLUG_DEFAULT)
                if desired != folder.name:
                    final_folder = _free_project_dir(projects_root, desired, own=folder)
                if final_folder != folder:
                    try:
                        os.rename(folder, final_folder)
                    except OSError as exc:
                        raise VaultIOError.wrap("rename project folder", folder, exc) from exc
                    logger.debug("Renamed project folder %s -> %s", folder.name, final_folder.name)

            write_sidecar(final_folder, updated)
            info = ProjectInfo.from_record(updated, relative_from_root(root, final_folder))
        except VaultError as exc:
            return self._fail(op, exc)

        return ServiceResult(ok=True, op=op, data=info.model_dump())
