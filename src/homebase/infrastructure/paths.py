"""Path resolution and sandboxing.

INVARIANT: No resolved path ever lies outside the vault root.

Sandboxing is purely lexical: absolute paths and ``..`` components are
rejected before anything touches the disk, so resolution works even when
the vault (or the target) does not exist yet. Both ``/`` and ``\\`` count
as separators, and every path handed back to callers uses ``/``.
"""

from __future__ import annotations

from pathlib import Path, PurePosixPath, PureWindowsPath

from homebase.domain.errors import HomeDirUnavailable, InvalidPath, OutsideVault


def home_vault_root(dir_name: str) -> Path:
    """``~/<dir_name>``, derived from the OS on every call."""
    try:
        home = Path.home()
    except RuntimeError as exc:
        msg = "Failed to determine home directory"
        raise HomeDirUnavailable(msg) from exc
    return home / dir_name


def validate_relative_path(path: str) -> str:
    """Validate *path* and return it normalized with forward slashes.

    Raises:
        InvalidPath: If *path* is empty, absolute, or has a ``..`` component.
    """
    if Path(path).is_absolute() or PureWindowsPath(path).anchor or path.startswith("/"):
        msg = "Path must be relative"
        raise InvalidPath(msg, path=path)

    parts = [p for p in path.replace("\\", "/").split("/") if p not in ("", ".")]
    if ".." in parts:
        msg = "Path must not contain '..'"
        raise InvalidPath(msg, path=path)
    if not parts:
        msg = "Path must not be empty"
        raise InvalidPath(msg, path=path)
    return str(PurePosixPath(*parts))


def resolve(root: Path, path: str) -> Path:
    """Join a validated vault-relative *path* onto *root*."""
    return root.joinpath(*validate_relative_path(path).split("/"))


def relative_from_root(root: Path, absolute_path: Path) -> str:
    """Inverse of :func:`resolve`: the forward-slash path of *absolute_path* under *root*.

    Raises:
        OutsideVault: If *absolute_path* does not have *root* as a prefix.
    """
    try:
        rel = absolute_path.relative_to(root)
    except ValueError as exc:
        msg = "Path is outside vault"
        raise OutsideVault(msg, path=str(absolute_path)) from exc
    return rel.as_posix()
