"""Rich Console factory and theme for homebase output.

Consoles render into a StringIO buffer so renderers keep a plain
``-> str`` contract. In non-TTY environments (tests, pipes) Rich drops
color codes on its own.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

HOMEBASE_THEME = Theme(
    {
        "hb.ok": "bold green",
        "hb.error": "bold red",
        "hb.op": "bold cyan",
        "hb.key": "dim",
        "hb.path": "bold blue",
        "hb.kind.inbox": "cyan",
        "hb.kind.archive": "dim",
        "hb.kind.project": "magenta",
        "hb.kind.folder": "green",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=HOMEBASE_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_kind(kind: str) -> str:
    """Rich style name for a note kind (``""`` for ``other``)."""
    return f"hb.kind.{kind}" if kind in ("inbox", "archive", "project", "folder") else ""
