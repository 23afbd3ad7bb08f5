"""FolderService — directories under ``notes/folders``.

Folders carry no metadata: existence on disk is their only state.
"""

from __future__ import annotations

import logging
import os

from homebase.domain.errors import (
    AlreadyExists,
    InvalidArgument,
    NotEmpty,
    NotFound,
    VaultError,
    VaultIOError,
)
from homebase.domain.layout import FOLDERS_DIR, is_strictly_within
from homebase.infrastructure.filesystem import has_entries, iter_dirs
from homebase.infrastructure.paths import relative_from_root, resolve, validate_relative_path
from homebase.services.base import BaseService
from homebase.services.result import ServiceResult
from homebase.services.telemetry import traced

logger = logging.getLogger(__name__)


def _folder_path(relative_path: str) -> str:
    rel = validate_relative_path(relative_path)
    if not is_strictly_within(rel, FOLDERS_DIR):
        msg = "Folder path must start with notes/folders/"
        raise InvalidArgument(msg, relative_path=rel)
    return rel


def _check_new_name(to_name: str) -> str:
    name = to_name.strip()
    if not name:
        msg = "New name cannot be empty"
        raise InvalidArgument(msg)
    if "/" in name or "\\" in name:
        msg = "New name must not contain path separators"
        raise InvalidArgument(msg, name=name)
    if name in (".", ".."):
        msg = "Invalid folder name"
        raise InvalidArgument(msg, name=name)
    return name


class FolderService(BaseService):
    """Folder lifecycle operations."""

    @traced
    def list_folders(self) -> ServiceResult:
        """All directories below ``notes/folders`` at any depth, sorted."""
        op = "list_folders"
        try:
            root = self._vault.bootstrap()
            folders = sorted(
                relative_from_root(root, d) for d in iter_dirs(resolve(root, FOLDERS_DIR))
            )
        except VaultError as exc:
            return self._fail(op, exc)
        return ServiceResult(ok=True, op=op, data={"items": folders, "count": len(folders)})

    @traced
    def create_folder(self, relative_path: str) -> ServiceResult:
        """Create a folder (and any missing parents) below ``notes/folders``."""
        op = "create_folder"
        try:
            root = self._vault.bootstrap()
            rel = _folder_path(relative_path)
            full = resolve(root, rel)
            try:
                full.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise VaultIOError.wrap("create folder", full, exc) from exc
        except VaultError as exc:
            return self._fail(op, exc)
        return ServiceResult(ok=True, op=op, data={"relative_path": rel})

    @traced
    def rename_folder(self, from_relative_path: str, to_name: str) -> ServiceResult:
        """Rename a folder in place; it keeps its parent directory."""
        op = "rename_folder"
        try:
            root = self._vault.bootstrap()
            rel = _folder_path(from_relative_path)
            name = _check_new_name(to_name)

            source = resolve(root, rel)
            if not source.is_dir():
                msg = "Folder does not exist"
                raise NotFound(msg, relative_path=rel)

            dest = source.parent / name
            new_rel = relative_from_root(root, dest)
            if dest != source:
                if dest.exists():
                    msg = f"A folder named {name} already exists"
                    raise AlreadyExists(msg, relative_path=new_rel)
                try:
                    os.rename(source, dest)
                except OSError as exc:
                    raise VaultIOError.wrap("rename folder", source, exc) from exc
        except VaultError as exc:
            return self._fail(op, exc)

        logger.debug("Renamed folder %s -> %s", rel, new_rel)
        return ServiceResult(ok=True, op=op, data={"from": rel, "relative_path": new_rel})

    @traced
    def delete_folder(self, relative_path: str) -> ServiceResult:
        """Delete a folder that has no entries at any depth."""
        op = "delete_folder"
        try:
            root = self._vault.bootstrap()
            rel = _folder_path(relative_path)
            full = resolve(root, rel)
            if not full.is_dir():
                msg = "Folder does not exist"
                raise NotFound(msg, relative_path=rel)
            if has_entries(full):
                msg = "Folder is not empty"
                raise NotEmpty(msg, relative_path=rel)
            try:
                full.rmdir()
            except OSError as exc:
                raise VaultIOError.wrap("delete folder", full, exc) from exc
        except VaultError as exc:
            return self._fail(op, exc)

        logger.debug("Deleted folder %s", rel)
        return ServiceResult(ok=True, op=op, data={"relative_path": rel})
