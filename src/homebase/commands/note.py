"""Command group: note lifecycle (list, read, write, meta, create, import, archive, move)."""

from __future__ import annotations

from typing import IO, TYPE_CHECKING

import click

from homebase.commands._base import HomebaseGroup
from homebase.services.notes import NoteService

if TYPE_CHECKING:
    from homebase.commands._context import AppContext

_NOTE_EXAMPLES = """\
  homebase note list --archived
  homebase note create --target notes/folders/work
  homebase note write notes/inbox/2026-01-02-untitled-1a2b3c4d.md --file draft.md
  homebase note meta notes/inbox/2026-01-02-untitled-1a2b3c4d.md -p my-plan -t reading
  homebase note archive notes/inbox/2026-01-02-untitled-1a2b3c4d.md
  homebase note move notes/inbox/2026-01-02-untitled-1a2b3c4d.md notes/projects/my-plan"""


def _read_markdown(source: IO[bytes]) -> str:
    """Decode UTF-8 input byte for byte, keeping its line endings."""
    try:
        return source.read().decode("utf-8")
    except UnicodeDecodeError as exc:
        msg = f"Input is not valid UTF-8: {exc.reason}"
        raise click.ClickException(msg) from exc


@click.group(cls=HomebaseGroup, examples=_NOTE_EXAMPLES)
def note() -> None:
    """Create, read, write, tag, archive, and move notes."""


@note.command("list")
@click.option("--archived", "include_archived", is_flag=True, help="Include archived notes.")
@click.pass_obj
def list_cmd(app: AppContext, include_archived: bool) -> None:
    """List notes, most recently modified first."""
    app.emit(NoteService(app.vault).list_notes(include_archived=include_archived))


@note.command()
@click.argument("path")
@click.pass_obj
def read(app: AppContext, path: str) -> None:
    """Print the raw contents of a note."""
    app.emit(NoteService(app.vault).read_note(path))


@note.command()
@click.argument("path")
@click.pass_obj
def show(app: AppContext, path: str) -> None:
    """Show a note's title, kind, and frontmatter."""
    app.emit(NoteService(app.vault).inspect_note(path))


@note.command(
    examples="""\
  homebase note write notes/inbox/a.md --file a.md
  echo "# Hello" | homebase note write notes/inbox/a.md"""
)
@click.argument("path")
@click.option(
    "--file",
    "source",
    type=click.File("rb"),
    default="-",
    help="Read new contents from FILE (default: stdin).",
)
@click.pass_obj
def write(app: AppContext, path: str, source: IO[bytes]) -> None:
    """Replace a note's contents atomically."""
    app.emit(NoteService(app.vault).write_note(path, _read_markdown(source)))


@note.command(
    examples="""\
  homebase note meta notes/inbox/a.md -p my-plan -p side-quest
  homebase note meta notes/inbox/a.md --topic reading --placed
  homebase note meta notes/folders/w/a.md --clear-projects"""
)
@click.argument("path")
@click.option("--project", "-p", "projects", multiple=True, help="Set projects (repeatable).")
@click.option("--topic", "-t", "topics", multiple=True, help="Set topics (repeatable).")
@click.option("--clear-projects", is_flag=True, help="Remove every project.")
@click.option("--clear-topics", is_flag=True, help="Remove every topic.")
@click.option(
    "--placed/--unplaced",
    "user_placed",
    default=None,
    help="Mark the note as deliberately filed (or not).",
)
@click.pass_obj
def meta(
    app: AppContext,
    path: str,
    projects: tuple[str, ...],
    topics: tuple[str, ...],
    clear_projects: bool,
    clear_topics: bool,
    user_placed: bool | None,
) -> None:
    """Update a note's projects, topics, and placement flag.

    Options left out keep their current values; the modified timestamp is
    always refreshed.
    """
    if clear_projects and projects:
        raise click.UsageError("--project and --clear-projects are mutually exclusive")
    if clear_topics and topics:
        raise click.UsageError("--topic and --clear-topics are mutually exclusive")
    result = NoteService(app.vault).update_note_meta(
        path,
        projects=[] if clear_projects else (list(projects) or None),
        topics=[] if clear_topics else (list(topics) or None),
        user_placed=user_placed,
    )
    app.emit(result)


@note.command()
@click.option("--target", "target_dir", default=None, help="Target directory (default: inbox).")
@click.pass_obj
def create(app: AppContext, target_dir: str | None) -> None:
    """Create an untitled note with fresh frontmatter."""
    app.emit(NoteService(app.vault).create_note(target_dir))


@note.command()
@click.pass_obj
def capture(app: AppContext) -> None:
    """Create an untitled note in the inbox."""
    app.emit(NoteService(app.vault).create_note_in_inbox())


@note.command(
    "import",
    examples="""\
  homebase note import 3f2a9c1e-0000-4000-8000-000000000000 --title "Reading list" --file list.md""",
)
@click.argument("note_id")
@click.option("--target", "target_dir", default=None, help="Target directory (default: inbox).")
@click.option("--title", "title_hint", default=None, help="Title used to build the filename slug.")
@click.option(
    "--file",
    "source",
    type=click.File("rb"),
    default="-",
    help="Read Markdown from FILE (default: stdin).",
)
@click.pass_obj
def import_cmd(
    app: AppContext,
    note_id: str,
    target_dir: str | None,
    title_hint: str | None,
    source: IO[bytes],
) -> None:
    """Import externally authored Markdown as a new note."""
    result = NoteService(app.vault).create_note_from_markdown(
        note_id,
        _read_markdown(source),
        target_dir=target_dir,
        title_hint=title_hint,
    )
    app.emit(result)


@note.command()
@click.argument("path")
@click.pass_obj
def archive(app: AppContext, path: str) -> None:
    """Move a note under notes/archive, mirroring its position."""
    app.emit(NoteService(app.vault).archive_note(path))


@note.command()
@click.argument("path")
@click.argument("target_dir")
@click.pass_obj
def move(app: AppContext, path: str, target_dir: str) -> None:
    """Move a note into TARGET_DIR, keeping its filename."""
    app.emit(NoteService(app.vault).move_note(path, target_dir))
