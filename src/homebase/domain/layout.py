"""Fixed vault skeleton and path-prefix rules.

All paths here are vault-relative and use forward slashes, which is also
the form every operation hands back to callers.
"""

from __future__ import annotations

from enum import StrEnum

VAULT_VERSION = 1

NOTES_DIR = "notes"
INBOX_DIR = "notes/inbox"
ARCHIVE_DIR = "notes/archive"
FOLDERS_DIR = "notes/folders"
PROJECTS_DIR = "notes/projects"
ASSETS_DIR = "assets"
CONFIG_DIR = "config"
META_DIR = ".homebase"

SETTINGS_FILE = "config/settings.json"
PROJECT_SIDECAR = ".project.json"
NOTE_SUFFIX = ".md"

# Created (idempotently) on every operation.
SKELETON_DIRS: tuple[str, ...] = (
    INBOX_DIR,
    ARCHIVE_DIR,
    FOLDERS_DIR,
    PROJECTS_DIR,
    ASSETS_DIR,
    CONFIG_DIR,
    META_DIR,
)

# Subtrees that may receive new or moved notes.
NOTE_TARGET_ROOTS: tuple[str, ...] = (INBOX_DIR, FOLDERS_DIR, PROJECTS_DIR)


class NoteKind(StrEnum):
    """Classification of a note, derived only from its path prefix."""

    INBOX = "inbox"
    ARCHIVE = "archive"
    PROJECT = "project"
    FOLDER = "folder"
    OTHER = "other"


_KIND_PREFIXES: tuple[tuple[str, NoteKind], ...] = (
    (INBOX_DIR + "/", NoteKind.INBOX),
    (ARCHIVE_DIR + "/", NoteKind.ARCHIVE),
    (PROJECTS_DIR + "/", NoteKind.PROJECT),
    (FOLDERS_DIR + "/", NoteKind.FOLDER),
)


def is_within(relative_path: str, root: str) -> bool:
    """True when *relative_path* equals *root* or is nested below it."""
    return relative_path == root or relative_path.startswith(root + "/")


def is_strictly_within(relative_path: str, root: str) -> bool:
    """True when *relative_path* is nested below *root* (not *root* itself)."""
    return relative_path.startswith(root + "/")


def note_kind(relative_path: str) -> NoteKind:
    """Classify a note by the subtree it lives in."""
    for prefix, kind in _KIND_PREFIXES:
        if relative_path.startswith(prefix):
            return kind
    return NoteKind.OTHER


def is_note_target(relative_dir: str) -> bool:
    """True when notes may be created in or moved to *relative_dir*."""
    return any(is_within(relative_dir, root) for root in NOTE_TARGET_ROOTS)


def archived_location(relative_path: str) -> str:
    """Mirror a ``notes/...`` path under ``notes/archive``.

    ``notes/inbox/a.md`` becomes ``notes/archive/inbox/a.md``.
    """
    under_notes = relative_path.removeprefix(NOTES_DIR + "/")
    return f"{ARCHIVE_DIR}/{under_notes}"
