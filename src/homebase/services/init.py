"""InitService — vault bootstrap exposed as an operation."""

from __future__ import annotations

from homebase.domain.errors import VaultError
from homebase.domain.layout import VAULT_VERSION
from homebase.domain.models import VaultInfo
from homebase.services.base import BaseService
from homebase.services.result import ServiceResult
from homebase.services.telemetry import traced


class InitService(BaseService):
    """Creates the vault skeleton (idempotent) and reports where it lives."""

    @traced
    def init(self) -> ServiceResult:
        try:
            root = self._vault.bootstrap()
        except VaultError as exc:
            return self._fail("init", exc)
        info = VaultInfo(vault_path=str(root), version=VAULT_VERSION)
        return ServiceResult(ok=True, op="init", data=info.model_dump())
