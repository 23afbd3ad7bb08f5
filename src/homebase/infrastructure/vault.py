"""Vault — the repository every service is constructed with.

The Vault knows where the vault root is and how to bootstrap its fixed
skeleton. It deliberately holds no state derived from disk: the root is
recomputed on every access (from an explicit setting or the user's home
directory), and every operation re-reads what it needs.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING

from homebase.config.models import VaultManifest
from homebase.domain.errors import VaultIOError
from homebase.domain.layout import SETTINGS_FILE, SKELETON_DIRS
from homebase.infrastructure.filesystem import write_atomic
from homebase.infrastructure.paths import home_vault_root

if TYPE_CHECKING:
    from homebase.config.settings import HomebaseSettings

logger = logging.getLogger(__name__)


def ensure_structure(root: Path) -> None:
    """Idempotently create the vault skeleton under *root*.

    Creates the seven fixed directories and, only when absent, writes the
    default ``config/settings.json``. An existing settings file is never
    touched.

    Raises:
        VaultIOError: If a directory or the settings file cannot be created.
    """
    for rel in SKELETON_DIRS:
        directory = root.joinpath(*rel.split("/"))
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise VaultIOError.wrap("create", directory, exc) from exc

    settings_path = root.joinpath(*SETTINGS_FILE.split("/"))
    if not settings_path.exists():
        manifest = VaultManifest(
            vault_path=str(root),
            created_at=datetime.now(UTC).isoformat(),
        )
        write_atomic(settings_path, manifest.to_json())
        logger.debug("Wrote default vault settings: %s", settings_path)


class Vault:
    """Repository for one user's vault.

    Constructed once per CLI invocation from :class:`HomebaseSettings` and
    handed to each service's constructor.
    """

    def __init__(self, settings: HomebaseSettings) -> None:
        self._settings = settings

    @property
    def settings(self) -> HomebaseSettings:
        """The resolved settings for this vault."""
        return self._settings

    @property
    def root(self) -> Path:
        """The vault root directory, recomputed on every access.

        Raises:
            HomeDirUnavailable: If no explicit root is configured and the
                OS cannot report a home directory.
        """
        if self._settings.vault_root is not None:
            return self._settings.vault_root
        return home_vault_root(self._settings.vault.dir_name)

    def bootstrap(self) -> Path:
        """Resolve the root and ensure its skeleton exists. Returns the root."""
        root = self.root
        ensure_structure(root)
        return root
