"""Vault error hierarchy.

Every failure a vault operation can surface is a :class:`VaultError`
subclass with a stable ``code``. Services translate these into
:class:`~homebase.services.result.ServiceError` payloads; the message is
what the user sees.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any


class VaultError(Exception):
    """Base class for all vault failures."""

    code: str = "VAULT_ERROR"

    def __init__(self, message: str, **detail: Any) -> None:
        super().__init__(message)
        self.message = message
        self.detail: dict[str, Any] = detail


class HomeDirUnavailable(VaultError):
    """The OS could not report a home directory."""

    code = "HOME_DIR_UNAVAILABLE"


class InvalidPath(VaultError):
    """A supplied path is absolute or contains a ``..`` component."""

    code = "INVALID_PATH"


class OutsideVault(VaultError):
    """An absolute path does not live under the vault root."""

    code = "OUTSIDE_VAULT"


class InvalidArgument(VaultError):
    """A semantic precondition was violated."""

    code = "INVALID_ARGUMENT"


class NotFound(VaultError):
    """An expected file, directory, or project is absent."""

    code = "NOT_FOUND"


class AlreadyExists(VaultError):
    """The destination already exists and overwriting is not intended."""

    code = "ALREADY_EXISTS"


class NotEmpty(VaultError):
    """Deletion was attempted on a directory that still has entries."""

    code = "NOT_EMPTY"


class VaultIOError(VaultError):
    """An underlying filesystem call failed."""

    code = "IO_ERROR"

    @classmethod
    def wrap(cls, action: str, path: Path, exc: OSError) -> VaultIOError:
        """Build an error naming *action*, *path*, and the native error text."""
        reason = exc.strerror or str(exc)
        return cls(f"Failed to {action} {path}: {reason}", path=str(path), errno=exc.errno)


class SidecarError(VaultError):
    """A ``.project.json`` sidecar could not be parsed into a project record."""

    code = "INVALID_SIDECAR"
