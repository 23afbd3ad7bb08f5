"""Tests for the folder CLI command group."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from homebase.cli import cli
from tests.conftest import put_file


class TestFolderCommands:
    def test_create_and_list(self, cli_runner: CliRunner, home_vault_root: Path) -> None:
        result = cli_runner.invoke(cli, ["folder", "create", "notes/folders/work/q1"])
        assert result.exit_code == 0
        assert (home_vault_root / "notes/folders/work/q1").is_dir()

        result = cli_runner.invoke(cli, ["--json", "folder", "list"])
        assert json.loads(result.output)["data"]["items"] == [
            "notes/folders/work",
            "notes/folders/work/q1",
        ]

    def test_list_human(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["folder", "create", "notes/folders/a"])
        result = cli_runner.invoke(cli, ["folder", "list"])
        assert "OK: list_folders" in result.output
        assert "notes/folders/a" in result.output

    def test_rename(self, cli_runner: CliRunner, home_vault_root: Path) -> None:
        cli_runner.invoke(cli, ["folder", "create", "notes/folders/old"])
        result = cli_runner.invoke(cli, ["--json", "folder", "rename", "notes/folders/old", "new"])
        assert result.exit_code == 0
        assert json.loads(result.output)["data"]["relative_path"] == "notes/folders/new"
        assert (home_vault_root / "notes/folders/new").is_dir()

    def test_delete_non_empty_fails(self, cli_runner: CliRunner, home_vault_root: Path) -> None:
        put_file(home_vault_root, "notes/folders/a/n.md")
        result = cli_runner.invoke(cli, ["folder", "delete", "notes/folders/a"])
        assert result.exit_code == 1
        assert "not empty" in result.output

    def test_delete(self, cli_runner: CliRunner, home_vault_root: Path) -> None:
        cli_runner.invoke(cli, ["folder", "create", "notes/folders/a"])
        result = cli_runner.invoke(cli, ["folder", "delete", "notes/folders/a"])
        assert result.exit_code == 0
        assert not (home_vault_root / "notes/folders/a").exists()

    def test_outside_folders_root(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-v", "folder", "create", "notes/inbox/x"])
        assert result.exit_code == 1
        assert "INVALID_ARGUMENT" in result.output
