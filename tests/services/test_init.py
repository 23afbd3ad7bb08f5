"""Tests for InitService."""

from __future__ import annotations

from pathlib import Path

import pytest

from homebase.config.settings import HomebaseSettings
from homebase.infrastructure.vault import Vault
from homebase.services.init import InitService
from homebase.services.notes import NoteService
from tests.conftest import no_home


class TestInit:
    def test_reports_location(self, vault: Vault, vault_root: Path) -> None:
        result = InitService(vault).init()
        assert result.ok
        assert result.op == "init"
        assert result.data == {"vault_path": str(vault_root), "version": 1}
        assert (vault_root / "config" / "settings.json").is_file()

    def test_repeatable(self, vault: Vault) -> None:
        assert InitService(vault).init().ok
        assert InitService(vault).init().ok

    def test_home_unavailable(self, monkeypatch: pytest.MonkeyPatch) -> None:
        vault = Vault(HomebaseSettings.from_cli())
        monkeypatch.setattr(Path, "home", classmethod(no_home))
        result = InitService(vault).init()
        assert not result.ok
        assert result.error.code == "HOME_DIR_UNAVAILABLE"

    def test_every_operation_bootstraps(self, home_vault_root: Path) -> None:
        vault = Vault(HomebaseSettings.from_cli())
        assert NoteService(vault).list_notes().ok
        assert (home_vault_root / "notes" / "projects").is_dir()
