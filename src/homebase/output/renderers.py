"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from homebase.output.console import create_console, get_output, style_for_kind

if TYPE_CHECKING:
    from collections.abc import Callable

    from rich.console import Console

    from homebase.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a string (plain text when not on a terminal)."""
    if result.ok and result.op == "read_note":
        return str(result.data.get("contents", ""))

    console = create_console()
    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console)
    else:
        _render_error(result, console, verbose=verbose)
    if verbose:
        _render_meta(result, console)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Minimal output: paths for listings and mutations, nothing else."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"
    if result.op == "read_note":
        return str(result.data.get("contents", ""))

    items = result.data.get("items")
    if isinstance(items, list):
        return "\n".join(_item_path(item) for item in items)
    return str(result.data.get("relative_path") or result.data.get("folder_relative_path") or "")


# ── Helpers ───────────────────────────────────────────────────────────


def _item_path(item: Any) -> str:
    if isinstance(item, dict):
        return str(item.get("relative_path") or item.get("folder_relative_path") or "")
    return str(item)


def _status_line(console: Console, result: ServiceResult) -> None:
    line = Text()
    line.append("OK", style="hb.ok")
    line.append(": ")
    line.append(result.op, style="hb.op")
    console.print(line)


def _field(console: Console, key: str, value: Any) -> None:
    if isinstance(value, (dict, list)):
        value = json.dumps(value, separators=(",", ":"))
    line = Text("  ")
    line.append(f"{key}: ", style="hb.key")
    line.append(str(value))
    console.print(line)


def _format_mtime(mtime_ms: int) -> str:
    return datetime.fromtimestamp(mtime_ms / 1000, tz=UTC).strftime("%Y-%m-%d %H:%M")


def _render_meta(result: ServiceResult, console: Console) -> None:
    telemetry = (result.meta or {}).get("telemetry")
    if telemetry:
        console.print(Text(f"  {telemetry['name']}: {telemetry['duration_ms']}ms", style="hb.key"))


# ── Renderers ─────────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    error = result.error
    line = Text()
    line.append("ERROR", style="hb.error")
    line.append(f": {result.op} — ")
    line.append(error.message if error else "Unknown error")
    console.print(line)
    if verbose and error is not None:
        _field(console, "code", error.code)
        for key, value in error.detail.items():
            _field(console, key, value)


def _render_generic(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


def _render_notes(result: ServiceResult, console: Console) -> None:
    items: list[dict[str, Any]] = result.data.get("items", [])
    table = Table(title=f"Notes ({len(items)})", show_lines=False)
    table.add_column("Path", style="hb.path")
    table.add_column("Kind")
    table.add_column("Modified")
    table.add_column("Size", justify="right")
    for item in items:
        kind = str(item["kind"])
        table.add_row(
            Text(item["relative_path"]),
            Text(kind, style=style_for_kind(kind)),
            _format_mtime(item["mtime_ms"]),
            str(item["size"]),
        )
    console.print(table)


def _render_folders(result: ServiceResult, console: Console) -> None:
    items: list[str] = result.data.get("items", [])
    _status_line(console, result)
    for folder in items:
        console.print(Text(f"  {folder}", style="hb.path"))


def _render_projects(result: ServiceResult, console: Console) -> None:
    items: list[dict[str, Any]] = result.data.get("items", [])
    table = Table(title=f"Projects ({len(items)})")
    table.add_column("Name", style="bold")
    table.add_column("Status")
    table.add_column("Folder", style="hb.path")
    table.add_column("ID", style="hb.key")
    for item in items:
        # Names and paths are user data, never markup.
        table.add_row(
            Text(item["name"]),
            Text(item["status"]),
            Text(item["folder_relative_path"]),
            Text(item["id"]),
        )
    console.print(table)


def _render_inspect(result: ServiceResult, console: Console) -> None:
    data = result.data
    console.print(Text(data.get("title") or "(untitled)", style="bold"))
    _field(console, "path", data["relative_path"])
    _field(console, "kind", data["kind"])
    for key, value in data.get("frontmatter", {}).items():
        _field(console, key, value)


_OP_RENDERERS: dict[str, Callable[[ServiceResult, Console], None]] = {
    "list_notes": _render_notes,
    "list_folders": _render_folders,
    "list_projects": _render_projects,
    "inspect_note": _render_inspect,
}
