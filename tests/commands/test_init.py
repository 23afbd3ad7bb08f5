"""Tests for the init CLI command."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from homebase.cli import cli


class TestInitCommand:
    def test_json(self, cli_runner: CliRunner, home_vault_root: Path) -> None:
        result = cli_runner.invoke(cli, ["--json", "init"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["ok"] is True
        assert data["data"] == {"vault_path": str(home_vault_root), "version": 1}
        assert (home_vault_root / ".homebase").is_dir()

    def test_human(self, cli_runner: CliRunner, home_vault_root: Path) -> None:
        result = cli_runner.invoke(cli, ["init"])
        assert result.exit_code == 0
        assert "OK: init" in result.output
        assert str(home_vault_root) in result.output

    def test_quiet_prints_nothing(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "init"])
        assert result.exit_code == 0
        assert result.output.strip() == ""

    def test_verbose_shows_timing(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-v", "init"])
        assert result.exit_code == 0
        assert "InitService.init:" in result.output

    def test_config_dir_name(
        self, cli_runner: CliRunner, tmp_path: Path, _isolated_home: Path
    ) -> None:
        config = tmp_path / "homebase.toml"
        config.write_text('[vault]\ndir_name = "Vault2"\n', encoding="utf-8")
        result = cli_runner.invoke(cli, ["--json", "-c", str(config), "init"])
        assert result.exit_code == 0
        assert json.loads(result.output)["data"]["vault_path"] == str(_isolated_home / "Vault2")

    def test_vault_root_env(
        self, cli_runner: CliRunner, tmp_path: Path, monkeypatch
    ) -> None:
        target = tmp_path / "elsewhere"
        monkeypatch.setenv("HOMEBASE_VAULT_ROOT", str(target))
        result = cli_runner.invoke(cli, ["--json", "init"])
        assert result.exit_code == 0
        assert json.loads(result.output)["data"]["vault_path"] == str(target)
        assert (target / "notes" / "inbox").is_dir()
