"""Tests for atomic writes, reads, and symlink-safe discovery."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from homebase.domain.errors import NotFound, VaultIOError
from homebase.infrastructure import filesystem
from homebase.infrastructure.filesystem import (
    has_entries,
    iter_dirs,
    iter_files,
    mtime_ms,
    read_text,
    temp_sibling,
    write_atomic,
)


def _temp_files(directory: Path) -> list[Path]:
    return [p for p in directory.iterdir() if ".tmp-" in p.name]


class TestWriteAtomic:
    def test_creates_file_and_parents(self, tmp_path: Path) -> None:
        target = tmp_path / "a" / "b" / "note.md"
        write_atomic(target, "hello")
        assert target.read_text(encoding="utf-8") == "hello"
        assert _temp_files(target.parent) == []

    def test_replaces_existing(self, tmp_path: Path) -> None:
        target = tmp_path / "note.md"
        target.write_text("old", encoding="utf-8")
        write_atomic(target, "new")
        assert target.read_text(encoding="utf-8") == "new"
        assert _temp_files(tmp_path) == []

    def test_preserves_line_endings(self, tmp_path: Path) -> None:
        target = tmp_path / "note.md"
        write_atomic(target, "a\r\nb\n")
        assert target.read_bytes() == b"a\r\nb\n"

    def test_falls_back_when_replace_fails(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        target = tmp_path / "note.md"
        target.write_text("old", encoding="utf-8")

        def refuse(src: object, dst: object) -> None:
            raise PermissionError(13, "Permission denied")

        monkeypatch.setattr(filesystem.os, "replace", refuse)
        write_atomic(target, "new")
        assert target.read_text(encoding="utf-8") == "new"
        assert _temp_files(tmp_path) == []

    def test_crash_between_remove_and_rename_keeps_temp(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        target = tmp_path / "note.md"
        target.write_text("old", encoding="utf-8")

        def refuse(src: object, dst: object) -> None:
            raise PermissionError(13, "Permission denied")

        monkeypatch.setattr(filesystem.os, "replace", refuse)
        monkeypatch.setattr(filesystem.os, "rename", refuse)

        with pytest.raises(VaultIOError) as exc_info:
            write_atomic(target, "new")

        # Destination is missing, never truncated; the temp file holds the new content.
        assert not target.exists()
        temps = _temp_files(tmp_path)
        assert len(temps) == 1
        assert temps[0].read_text(encoding="utf-8") == "new"
        assert exc_info.value.detail["temp_path"] == str(temps[0])
        assert exc_info.value.code == "IO_ERROR"

    def test_temp_removed_when_write_fails(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        target = tmp_path / "note.md"
        target.write_text("old", encoding="utf-8")

        def broken_fsync(fd: int) -> None:
            raise OSError(5, "Input/output error")

        monkeypatch.setattr(filesystem.os, "fsync", broken_fsync)
        with pytest.raises(VaultIOError, match="Input/output error"):
            write_atomic(target, "new")

        assert target.read_text(encoding="utf-8") == "old"
        assert _temp_files(tmp_path) == []

    def test_parent_is_a_file(self, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        with pytest.raises(VaultIOError) as exc_info:
            write_atomic(blocker / "note.md", "x")
        assert str(blocker) in exc_info.value.message


def test_temp_sibling_is_hidden_neighbour(tmp_path: Path) -> None:
    tmp = temp_sibling(tmp_path / "note.md")
    assert tmp.parent == tmp_path
    assert tmp.name.startswith(".note.md.tmp-")
    assert temp_sibling(tmp_path / "note.md") != tmp


class TestReadText:
    def test_reads(self, tmp_path: Path) -> None:
        path = tmp_path / "a.md"
        path.write_text("héllo", encoding="utf-8")
        assert read_text(path) == "héllo"

    def test_line_endings_kept(self, tmp_path: Path) -> None:
        path = tmp_path / "crlf.md"
        path.write_bytes(b"a\r\nb\rc\n")
        assert read_text(path) == "a\r\nb\rc\n"

    def test_missing(self, tmp_path: Path) -> None:
        with pytest.raises(NotFound):
            read_text(tmp_path / "missing.md")

    def test_directory(self, tmp_path: Path) -> None:
        with pytest.raises(VaultIOError):
            read_text(tmp_path)

    def test_invalid_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.md"
        path.write_bytes(b"\xff\xfe\xfa")
        with pytest.raises(VaultIOError, match="UTF-8"):
            read_text(path)


def test_mtime_ms(tmp_path: Path) -> None:
    path = tmp_path / "a.md"
    path.write_text("", encoding="utf-8")
    os.utime(path, (1_700_000_000.5, 1_700_000_000.5))
    assert mtime_ms(path.stat()) == 1_700_000_000_500


def test_has_entries(tmp_path: Path) -> None:
    assert not has_entries(tmp_path)
    (tmp_path / ".hidden").write_text("", encoding="utf-8")
    assert has_entries(tmp_path)


class TestDiscovery:
    @pytest.fixture
    def tree(self, tmp_path: Path) -> Path:
        root = tmp_path / "root"
        (root / "a" / "b").mkdir(parents=True)
        (root / "skip").mkdir()
        (root / "one.md").write_text("", encoding="utf-8")
        (root / "a" / "b" / "two.md").write_text("", encoding="utf-8")
        (root / "a" / "notes.txt").write_text("", encoding="utf-8")
        (root / "skip" / "three.md").write_text("", encoding="utf-8")

        outside = tmp_path / "outside"
        outside.mkdir()
        (outside / "secret.md").write_text("", encoding="utf-8")
        (root / "linkdir").symlink_to(outside, target_is_directory=True)
        (root / "link.md").symlink_to(outside / "secret.md")
        return root

    def test_iter_files(self, tree: Path) -> None:
        found = {p.relative_to(tree).as_posix() for p in iter_files(tree, suffix=".md")}
        assert found == {"one.md", "a/b/two.md", "skip/three.md"}

    def test_iter_files_skip(self, tree: Path) -> None:
        found = {
            p.relative_to(tree).as_posix()
            for p in iter_files(tree, suffix=".md", skip=tree / "skip")
        }
        assert found == {"one.md", "a/b/two.md"}

    def test_iter_dirs(self, tree: Path) -> None:
        found = {p.relative_to(tree).as_posix() for p in iter_dirs(tree)}
        assert found == {"a", "a/b", "skip"}

    def test_missing_root_yields_nothing(self, tmp_path: Path) -> None:
        assert list(iter_files(tmp_path / "missing", suffix=".md")) == []
        assert list(iter_dirs(tmp_path / "missing")) == []
