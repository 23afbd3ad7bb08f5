"""Project sidecar I/O.

A project is a directory under ``notes/projects`` holding a
``.project.json`` sidecar. Directories without a sidecar are not projects
and are ignored by scans.
"""

from __future__ import annotations

import logging
from pathlib import Path

from homebase.domain.errors import SidecarError, VaultIOError
from homebase.domain.layout import PROJECT_SIDECAR
from homebase.domain.models import ProjectRecord
from homebase.infrastructure.filesystem import read_text, write_atomic

logger = logging.getLogger(__name__)


def sidecar_path(project_dir: Path) -> Path:
    return project_dir / PROJECT_SIDECAR


def read_sidecar(path: Path) -> ProjectRecord:
    """Load and validate one sidecar.

    Raises:
        SidecarError: If the file is not a well-formed project record.
    """
    return ProjectRecord.from_json(read_text(path), source=str(path))


def write_sidecar(project_dir: Path, record: ProjectRecord) -> None:
    """Atomically (re)write the sidecar inside *project_dir*."""
    write_atomic(sidecar_path(project_dir), record.to_json())


def scan_projects(
    projects_root: Path,
    *,
    skip_malformed: bool = False,
) -> tuple[list[tuple[Path, ProjectRecord]], list[str]]:
    """Read every project directly under *projects_root*.

    By default a malformed sidecar aborts the scan with
    :class:`SidecarError`. With *skip_malformed* the entry is dropped and a
    warning naming it is returned instead.

    Returns:
        ``(projects, warnings)`` where ``projects`` is a list of
        ``(directory, record)`` pairs in directory-name order.
    """
    try:
        children = sorted(projects_root.iterdir())
    except OSError as exc:
        raise VaultIOError.wrap("read", projects_root, exc) from exc

    found: list[tuple[Path, ProjectRecord]] = []
    warnings: list[str] = []
    for child in children:
        if not child.is_dir():
            continue
        meta = sidecar_path(child)
        if not meta.exists():
            continue
        try:
            record = read_sidecar(meta)
        except SidecarError as exc:
            if not skip_malformed:
                raise
            logger.warning("Skipping malformed project sidecar: %s", meta)
            warnings.append(exc.message)
            continue
        found.append((child, record))
    return found, warnings
