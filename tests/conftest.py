"""Shared pytest fixtures and test helpers for homebase tests."""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from homebase.config.settings import HomebaseSettings
from homebase.infrastructure.vault import Vault
from homebase.services.telemetry import disable_telemetry


@pytest.fixture(autouse=True)
def _isolated_home(
    tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch
) -> Path:
    """Point HOME at a temp directory and clear HOMEBASE_* overrides.

    Every test (CLI tests included) therefore gets its own ``~/Homebase``.
    """
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("HOME", str(home))
    for key in list(os.environ):
        if key.startswith("HOMEBASE_"):
            monkeypatch.delenv(key)
    return home


@pytest.fixture(autouse=True)
def _reset_telemetry() -> Iterator[None]:
    """``--verbose`` turns span collection on for the whole thread; undo it."""
    yield
    disable_telemetry()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def vault_root(tmp_path: Path) -> Path:
    """Explicit vault directory (not yet created; bootstrap creates it)."""
    return tmp_path / "vault"


@pytest.fixture
def vault(vault_root: Path) -> Vault:
    """Vault pinned to ``vault_root``."""
    return Vault(HomebaseSettings.from_cli(vault_root=vault_root))


@pytest.fixture
def home_vault_root(_isolated_home: Path) -> Path:
    """Where the CLI's default vault lives during tests."""
    return _isolated_home / "Homebase"


def no_home(cls: type[Path]) -> Path:
    """Stand-in for ``Path.home`` on a system without a home directory."""
    raise RuntimeError("Could not determine home directory.")


# ---------------------------------------------------------------------------
# Shared test helpers (used across service test modules)
# ---------------------------------------------------------------------------


def put_file(root: Path, relative_path: str, contents: str = "# note\n") -> Path:
    """Write a file directly under *root*, creating parents."""
    path = root.joinpath(*relative_path.split("/"))
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(contents, encoding="utf-8")
    return path


def set_mtime(path: Path, seconds: float) -> None:
    os.utime(path, (seconds, seconds))


def create_note(vault: Vault, target_dir: str | None = None) -> dict[str, Any]:
    """Create a note via NoteService, asserting success."""
    from homebase.services.notes import NoteService

    result = NoteService(vault).create_note(target_dir)
    assert result.ok, result.error
    return result.data


def create_project(vault: Vault, name: str) -> dict[str, Any]:
    """Create a project via ProjectService, asserting success."""
    from homebase.services.projects import ProjectService

    result = ProjectService(vault).create_project(name)
    assert result.ok, result.error
    return result.data
