"""Tests for human, quiet, and JSON result formatting."""

from __future__ import annotations

import json

from homebase.domain.errors import NotFound
from homebase.output.formatters import OutputSettings, format_result
from homebase.output.renderers import render_quiet, render_result
from homebase.services.result import ServiceResult

NOTES = ServiceResult(
    ok=True,
    op="list_notes",
    data={
        "items": [
            {
                "relative_path": "notes/inbox/a.md",
                "kind": "inbox",
                "mtime_ms": 1_700_000_000_000,
                "size": 12,
            }
        ],
        "count": 1,
    },
)
FAILED = ServiceResult.failure("read_note", NotFound("Note does not exist", path="x"))


class TestRenderResult:
    def test_notes_table(self) -> None:
        out = render_result(NOTES)
        assert "Notes (1)" in out
        assert "notes/inbox/a.md" in out
        assert "2023-11-14" in out

    def test_read_note_is_raw(self) -> None:
        result = ServiceResult(ok=True, op="read_note", data={"contents": "# x\n"})
        assert render_result(result) == "# x\n"

    def test_generic(self) -> None:
        result = ServiceResult(ok=True, op="write_note", data={"relative_path": "notes/a.md"})
        out = render_result(result)
        assert out.splitlines()[0] == "OK: write_note"
        assert "relative_path: notes/a.md" in out

    def test_error(self) -> None:
        out = render_result(FAILED)
        assert out == "ERROR: read_note — Note does not exist"

    def test_error_verbose_detail(self) -> None:
        out = render_result(FAILED, verbose=True)
        assert "code: NOT_FOUND" in out
        assert "path: x" in out

    def test_folders(self) -> None:
        result = ServiceResult(ok=True, op="list_folders", data={"items": ["notes/folders/a"]})
        assert "notes/folders/a" in render_result(result)

    def test_inspect_untitled(self) -> None:
        result = ServiceResult(
            ok=True,
            op="inspect_note",
            data={"relative_path": "notes/a.md", "kind": "other", "title": "", "frontmatter": {}},
        )
        assert render_result(result).startswith("(untitled)")


    def test_note_path_with_brackets_is_literal(self) -> None:
        result = ServiceResult(
            ok=True,
            op="list_notes",
            data={
                "items": [
                    {
                        "relative_path": "notes/inbox/[bold]x.md",
                        "kind": "inbox",
                        "mtime_ms": 1_700_000_000_000,
                        "size": 3,
                    }
                ],
                "count": 1,
            },
        )
        assert "notes/inbox/[bold]x.md" in render_result(result)

    def test_project_name_with_brackets(self) -> None:
        result = ServiceResult(
            ok=True,
            op="list_projects",
            data={
                "items": [
                    {
                        "id": "p1",
                        "name": "Plan [/] v2",
                        "status": "active",
                        "folder_relative_path": "notes/projects/Plan v2",
                    }
                ],
                "count": 1,
            },
        )
        out = render_result(result)
        assert "Plan [/] v2" in out


class TestRenderQuiet:
    def test_listing(self) -> None:
        assert render_quiet(NOTES) == "notes/inbox/a.md"

    def test_project_mutation(self) -> None:
        result = ServiceResult(
            ok=True, op="create_project", data={"folder_relative_path": "notes/projects/p"}
        )
        assert render_quiet(result) == "notes/projects/p"

    def test_error(self) -> None:
        assert render_quiet(FAILED).startswith("ERROR: read_note")


def test_json_mode() -> None:
    out = format_result(NOTES, settings=OutputSettings(json_output=True))
    data = json.loads(out)
    assert data["ok"] is True
    assert data["data"]["count"] == 1
