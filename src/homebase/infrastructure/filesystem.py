"""Filesystem operations for vault content.

INVARIANT: Files are truth. Every call re-reads state from disk; nothing
is cached between calls.

INVARIANT: A file written through :func:`write_atomic` is observed either
with its complete old content or its complete new content, never partial.
Directory walks never follow symbolic links.
"""

from __future__ import annotations

import logging
import os
import uuid
from pathlib import Path
from typing import TYPE_CHECKING

from homebase.domain.errors import NotFound, VaultIOError

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Atomic writes
# ---------------------------------------------------------------------------


def temp_sibling(path: Path) -> Path:
    """A uniquely named hidden temp file next to *path*."""
    return path.with_name(f".{path.name}.tmp-{uuid.uuid4().hex}")


def _swap_into_place(tmp: Path, path: Path) -> None:
    """Move *tmp* onto *path*.

    ``os.replace`` is a single rename-with-replace. If it fails while *path*
    exists, fall back to remove-then-rename; a crash between the two steps
    leaves *path* missing (never truncated).
    """
    try:
        os.replace(tmp, path)
        return
    except OSError:
        if not path.exists():
            raise
    logger.debug("os.replace failed for %s, falling back to remove-then-rename", path)
    path.unlink()
    os.rename(tmp, path)


def _discard(tmp: Path) -> None:
    try:
        tmp.unlink(missing_ok=True)
    except OSError:
        logger.warning("Failed to remove temp file: %s", tmp)


def write_atomic(path: Path, contents: str) -> None:
    """Persist *contents* to *path* via write-temp-then-rename.

    Missing parent directories are created. The temp file is removed when a
    later step fails, except when the destination is already gone (then the
    temp file holds the only copy of the new content and is left in place).

    Raises:
        VaultIOError: On any filesystem failure, naming the path and cause.
    """
    parent = path.parent
    try:
        parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise VaultIOError.wrap("create directory", parent, exc) from exc

    tmp = temp_sibling(path)
    try:
        with tmp.open("w", encoding="utf-8", newline="") as fh:
            fh.write(contents)
            fh.flush()
            os.fsync(fh.fileno())
    except OSError as exc:
        _discard(tmp)
        raise VaultIOError.wrap("write temp file", tmp, exc) from exc

    try:
        _swap_into_place(tmp, path)
    except OSError as exc:
        if path.exists():
            _discard(tmp)
        err = VaultIOError.wrap("replace", path, exc)
        err.detail["temp_path"] = str(tmp)
        raise err from exc
    logger.debug("Wrote %d chars to %s", len(contents), path)


# ---------------------------------------------------------------------------
# Reads and metadata
# ---------------------------------------------------------------------------


def read_text(path: Path) -> str:
    """Read a UTF-8 file exactly as stored (no newline translation).

    Raises:
        NotFound: If *path* does not exist.
        VaultIOError: On any other filesystem failure.
    """
    try:
        return path.read_bytes().decode("utf-8")
    except FileNotFoundError as exc:
        msg = f"File does not exist: {path}"
        raise NotFound(msg, path=str(path)) from exc
    except OSError as exc:
        raise VaultIOError.wrap("read", path, exc) from exc
    except UnicodeDecodeError as exc:
        msg = f"Failed to read {path}: not valid UTF-8"
        raise VaultIOError(msg, path=str(path)) from exc


def mtime_ms(stat: os.stat_result) -> int:
    """Modification time in whole milliseconds since the epoch."""
    return stat.st_mtime_ns // 1_000_000


def has_entries(directory: Path) -> bool:
    """True when *directory* contains at least one entry of any kind."""
    try:
        with os.scandir(directory) as it:
            return next(it, None) is not None
    except OSError as exc:
        raise VaultIOError.wrap("read directory", directory, exc) from exc


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------


def iter_files(root: Path, *, suffix: str, skip: Path | None = None) -> Iterator[Path]:
    """Yield regular files under *root* whose suffix is *suffix*.

    Symbolic links (to files or directories) are never followed or yielded.
    The subtree at *skip* is pruned. Unreadable directories are skipped.
    """
    for dirpath, dirnames, filenames in os.walk(root, followlinks=False):
        base = Path(dirpath)
        if skip is not None:
            dirnames[:] = [d for d in dirnames if base / d != skip]
        for name in filenames:
            candidate = base / name
            if candidate.suffix == suffix and not candidate.is_symlink():
                yield candidate


def iter_dirs(root: Path) -> Iterator[Path]:
    """Yield every real (non-symlink) directory strictly below *root*."""
    for dirpath, dirnames, _filenames in os.walk(root, followlinks=False):
        base = Path(dirpath)
        dirnames[:] = [d for d in dirnames if not (base / d).is_symlink()]
        for name in dirnames:
            yield base / name
