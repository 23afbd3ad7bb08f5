"""BaseService — shared foundation for the vault lifecycle services.

Every service receives a :class:`Vault` at construction time. Each public
method resolves the root and bootstraps the skeleton first, so a failure
there halts the call before any domain work happens.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from homebase.services.result import ServiceResult

if TYPE_CHECKING:
    from homebase.domain.errors import VaultError
    from homebase.infrastructure.vault import Vault

logger = logging.getLogger(__name__)


class BaseService:
    """Base for service-layer classes.

    Usage::

        class FolderService(BaseService):
            def create(self, relative_path: str) -> ServiceResult:
                try:
                    root = self._vault.bootstrap()
                    ...
                except VaultError as exc:
                    return self._fail("create_folder", exc)
    """

    def __init__(self, vault: Vault) -> None:
        self._vault = vault

    def _fail(self, op: str, exc: VaultError) -> ServiceResult:
        logger.debug("%s failed: [%s] %s", op, exc.code, exc.message)
        return ServiceResult.failure(op, exc)
