"""NoteService — create, read, write, tag, list, archive, and move notes.

A note is any ``.md`` file under ``notes/``; its identity is its
vault-relative path. New notes land in ``notes/inbox`` unless the caller
names another target under ``notes/inbox``, ``notes/folders``, or
``notes/projects``.
"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, Any

from homebase.domain.content import parse_frontmatter, render_frontmatter, title_from_body
from homebase.domain.errors import (
    AlreadyExists,
    InvalidArgument,
    NotFound,
    VaultError,
    VaultIOError,
)
from homebase.domain.frontmatter import NoteFrontmatter
from homebase.domain.ids import generate_id, note_filename, short_from_id
from homebase.domain.layout import (
    ARCHIVE_DIR,
    INBOX_DIR,
    NOTE_SUFFIX,
    NOTES_DIR,
    archived_location,
    is_note_target,
    is_strictly_within,
    note_kind,
)
from homebase.domain.models import CreatedNote, NoteEntry, dump_all
from homebase.domain.slugs import NOTE_SLUG_DEFAULT, slugify
from homebase.infrastructure.filesystem import iter_files, mtime_ms, read_text, write_atomic
from homebase.infrastructure.paths import relative_from_root, resolve, validate_relative_path
from homebase.services._helpers import now_iso, today_local
from homebase.services.base import BaseService
from homebase.services.result import ServiceResult
from homebase.services.telemetry import traced

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

UNTITLED_SLUG = "untitled"


def _note_target(target_dir: str | None) -> str:
    """Normalize *target_dir* (default: the inbox) and check it may hold notes."""
    target = validate_relative_path(target_dir if target_dir is not None else INBOX_DIR)
    if not is_note_target(target):
        msg = "Target directory must be under notes/inbox, notes/folders, or notes/projects"
        raise InvalidArgument(msg, target_dir=target)
    return target


def _rename(source: Path, dest: Path, action: str) -> None:
    try:
        dest.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise VaultIOError.wrap("create", dest.parent, exc) from exc
    try:
        os.rename(source, dest)
    except OSError as exc:
        raise VaultIOError.wrap(action, source, exc) from exc


def _clean_names(field: str, names: list[str] | None) -> list[str] | None:
    if names is None:
        return None
    cleaned = [name.strip() for name in names]
    if not all(cleaned):
        msg = f"{field} entries must not be blank"
        raise InvalidArgument(msg, field=field)
    return cleaned


def _rewrite_meta(
    path: Path,
    rel: str,
    *,
    projects: list[str] | None = None,
    topics: list[str] | None = None,
    user_placed: bool | None = None,
) -> dict[str, Any]:
    """Rewrite the frontmatter of the note at *path*; returns the new mapping."""
    current, body = parse_frontmatter(read_text(path))
    frontmatter = dict(current)
    frontmatter["modified"] = now_iso()
    frontmatter["projects"] = projects if projects is not None else current.get("projects", [])
    frontmatter["topics"] = topics if topics is not None else current.get("topics", [])
    if user_placed is None:
        user_placed = current.get("user_placed", not is_strictly_within(rel, INBOX_DIR))
    frontmatter["user_placed"] = user_placed
    write_atomic(path, render_frontmatter(frontmatter, "\n" + body))
    return frontmatter


def _sync_placement(path: Path, rel: str) -> None:
    placed = not is_strictly_within(rel, INBOX_DIR)
    current, _body = parse_frontmatter(read_text(path))
    if current and current.get("user_placed") != placed:
        _rewrite_meta(path, rel, user_placed=placed)


class NoteService(BaseService):
    """Note lifecycle operations."""

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @traced
    def list_notes(self, *, include_archived: bool = False) -> ServiceResult:
        """List every note, most recently modified first.

        Archived notes are excluded unless *include_archived* is set.
        Symbolic links are never followed.
        """
        op = "list_notes"
        try:
            root = self._vault.bootstrap()
            archive_root = resolve(root, ARCHIVE_DIR)
            skip = None if include_archived else archive_root

            entries: list[NoteEntry] = []
            for path in iter_files(resolve(root, NOTES_DIR), suffix=NOTE_SUFFIX, skip=skip):
                rel = relative_from_root(root, path)
                try:
                    stat = path.stat()
                except OSError as exc:
                    raise VaultIOError.wrap("stat", path, exc) from exc
                entries.append(
                    NoteEntry(
                        relative_path=rel,
                        kind=note_kind(rel),
                        mtime_ms=mtime_ms(stat),
                        size=stat.st_size,
                    )
                )
        except VaultError as exc:
            return self._fail(op, exc)

        entries.sort(key=lambda e: (-e.mtime_ms, e.relative_path))
        return ServiceResult(
            ok=True,
            op=op,
            data={"items": dump_all(entries), "count": len(entries)},
        )

    @traced
    def read_note(self, relative_path: str) -> ServiceResult:
        """Return the full contents of a note."""
        op = "read_note"
        try:
            root = self._vault.bootstrap()
            rel = validate_relative_path(relative_path)
            contents = read_text(resolve(root, rel))
        except VaultError as exc:
            return self._fail(op, exc)
        return ServiceResult(ok=True, op=op, data={"relative_path": rel, "contents": contents})

    @traced
    def inspect_note(self, relative_path: str) -> ServiceResult:
        """Read a note and split it into frontmatter, derived title, and body."""
        op = "inspect_note"
        try:
            root = self._vault.bootstrap()
            rel = validate_relative_path(relative_path)
            contents = read_text(resolve(root, rel))
        except VaultError as exc:
            return self._fail(op, exc)

        frontmatter, body = parse_frontmatter(contents)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "relative_path": rel,
                "kind": note_kind(rel).value,
                "title": title_from_body(body),
                "frontmatter": frontmatter,
                "body": body,
            },
        )

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    @traced
    def write_note(self, relative_path: str, contents: str) -> ServiceResult:
        """Atomically replace a note's full contents."""
        op = "write_note"
        try:
            root = self._vault.bootstrap()
            rel = validate_relative_path(relative_path)
            write_atomic(resolve(root, rel), contents)
        except VaultError as exc:
            return self._fail(op, exc)
        return ServiceResult(ok=True, op=op, data={"relative_path": rel})

    @traced
    def update_note_meta(
        self,
        relative_path: str,
        *,
        projects: list[str] | None = None,
        topics: list[str] | None = None,
        user_placed: bool | None = None,
    ) -> ServiceResult:
        """Patch a note's ``projects``, ``topics``, and ``user_placed`` frontmatter.

        Arguments left as ``None`` keep their current value. Other keys and
        the body are kept as they are; ``modified`` is always refreshed.
        """
        op = "update_note_meta"
        try:
            root = self._vault.bootstrap()
            rel = validate_relative_path(relative_path)
            frontmatter = _rewrite_meta(
                resolve(root, rel),
                rel,
                projects=_clean_names("projects", projects),
                topics=_clean_names("topics", topics),
                user_placed=user_placed,
            )
        except VaultError as exc:
            return self._fail(op, exc)

        logger.debug("Updated frontmatter of %s", rel)
        return ServiceResult(
            ok=True,
            op=op,
            data={"relative_path": rel, "frontmatter": frontmatter},
        )

    @traced
    def create_note(self, target_dir: str | None = None) -> ServiceResult:
        """Create an untitled note seeded with frontmatter.

        ``user_placed`` is true iff the note lands outside the inbox.
        """
        return self._create_note("create_note", target_dir)

    @traced
    def create_note_in_inbox(self) -> ServiceResult:
        """Shorthand for :meth:`create_note` with the default target."""
        return self._create_note("create_note_in_inbox", None)

    @traced
    def create_note_from_markdown(
        self,
        note_id: str,
        contents: str,
        *,
        target_dir: str | None = None,
        title_hint: str | None = None,
    ) -> ServiceResult:
        """Import externally authored Markdown under a caller-supplied id.

        The file is named ``<date>-<slug>-<short>.md`` where the slug comes
        from *title_hint* and the short suffix from *note_id*. Contents are
        written verbatim.
        """
        op = "create_note_from_markdown"
        try:
            root = self._vault.bootstrap()
            clean_id = note_id.strip()
            if not clean_id:
                msg = "id is required"
                raise InvalidArgument(msg)

            slug = NOTE_SLUG_DEFAULT
            if title_hint:
                slug = slugify(title_hint, default=NOTE_SLUG_DEFAULT)
            file_name = note_filename(today_local(), slug, short_from_id(clean_id))
            rel = f"{_note_target(target_dir)}/{file_name}"

            full = resolve(root, rel)
            if full.exists():
                msg = "Note file already exists"
                raise AlreadyExists(msg, relative_path=rel)
            write_atomic(full, contents)
        except VaultError as exc:
            return self._fail(op, exc)

        logger.debug("Imported note %s as %s", clean_id, rel)
        return ServiceResult(ok=True, op=op, data={"id": clean_id, "relative_path": rel})

    @traced
    def archive_note(self, relative_path: str) -> ServiceResult:
        """Move a note to the mirrored position under ``notes/archive``.

        Already-archived notes are returned unchanged.
        """
        op = "archive_note"
        try:
            root = self._vault.bootstrap()
            rel = validate_relative_path(relative_path)
            source = resolve(root, rel)
            if not source.exists():
                msg = "Note does not exist"
                raise NotFound(msg, relative_path=rel)

            if is_strictly_within(rel, ARCHIVE_DIR):
                return ServiceResult(
                    ok=True,
                    op=op,
                    data={"relative_path": rel, "archived": False},
                )
            if not is_strictly_within(rel, NOTES_DIR):
                msg = "Can only archive notes under notes/"
                raise InvalidArgument(msg, relative_path=rel)

            target_rel = archived_location(rel)
            target = resolve(root, target_rel)
            if target.exists():
                msg = f"Archive destination already exists: {target_rel}"
                raise AlreadyExists(msg, relative_path=target_rel)
            _rename(source, target, "archive note")
        except VaultError as exc:
            return self._fail(op, exc)

        logger.debug("Archived %s -> %s", rel, target_rel)
        return ServiceResult(
            ok=True,
            op=op,
            data={"relative_path": target_rel, "archived": True},
        )

    @traced
    def move_note(self, relative_path: str, target_dir: str) -> ServiceResult:
        """Move a note into *target_dir*, keeping its filename.

        Notes carrying frontmatter get ``user_placed`` re-synced to the new
        location: false inside the inbox, true anywhere else.
        """
        op = "move_note"
        try:
            root = self._vault.bootstrap()
            rel = validate_relative_path(relative_path)
            source = resolve(root, rel)
            if not source.exists():
                msg = "Note does not exist"
                raise NotFound(msg, relative_path=rel)

            target = _note_target(target_dir)
            dest = resolve(root, target) / source.name
            new_rel = relative_from_root(root, dest)
            if new_rel != rel:
                if dest.exists():
                    msg = f"A note named {source.name} already exists in {target}"
                    raise AlreadyExists(msg, relative_path=new_rel)
                _rename(source, dest, "move note")
                _sync_placement(dest, new_rel)
        except VaultError as exc:
            return self._fail(op, exc)

        logger.debug("Moved %s -> %s", rel, new_rel)
        return ServiceResult(ok=True, op=op, data={"from": rel, "relative_path": new_rel})

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _create_note(self, op: str, target_dir: str | None) -> ServiceResult:
        try:
            root = self._vault.bootstrap()
            target = _note_target(target_dir)

            note_id = generate_id()
            file_name = note_filename(today_local(), UNTITLED_SLUG, short_from_id(note_id))
            rel = f"{target}/{file_name}"
            frontmatter = NoteFrontmatter.seed(
                note_id,
                now_iso(),
                user_placed=not is_strictly_within(rel, INBOX_DIR),
            )
            contents = render_frontmatter(frontmatter.as_mapping(), "\n")

            full = resolve(root, rel)
            if full.exists():
                msg = "Note file already exists"
                raise AlreadyExists(msg, relative_path=rel)
            write_atomic(full, contents)
        except VaultError as exc:
            return self._fail(op, exc)

        created = CreatedNote(id=note_id, relative_path=rel, contents=contents)
        return ServiceResult(ok=True, op=op, data=created.model_dump())
