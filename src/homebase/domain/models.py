"""Record models surfaced by vault operations.

All models are frozen pydantic models. Field names are snake_case in
Python; persisted JSON (project sidecars) keeps the same names.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ValidationError

from homebase.domain.errors import SidecarError
from homebase.domain.layout import NoteKind


class VaultInfo(BaseModel):
    """Result of ``init``."""

    model_config = {"frozen": True}

    vault_path: str
    version: int


class NoteEntry(BaseModel):
    """One note found by a listing scan."""

    model_config = {"frozen": True}

    relative_path: str
    kind: NoteKind
    mtime_ms: int
    size: int


class CreatedNote(BaseModel):
    """A freshly created note: its advisory id, location, and initial content."""

    model_config = {"frozen": True}

    id: str
    relative_path: str
    contents: str


class ProjectRecord(BaseModel):
    """Contents of a ``.project.json`` sidecar."""

    model_config = {"frozen": True}

    id: str
    name: str
    status: str
    created: str
    modified: str

    @classmethod
    def from_json(cls, raw: str, *, source: str) -> ProjectRecord:
        """Parse sidecar text, raising :class:`SidecarError` naming *source*."""
        try:
            return cls.model_validate_json(raw)
        except ValidationError as exc:
            msg = f"Invalid JSON {source}: {exc.errors(include_url=False)[0]['msg']}"
            raise SidecarError(msg, path=source) from exc

    def to_json(self) -> str:
        return self.model_dump_json(indent=2)


class ProjectInfo(BaseModel):
    """A project record plus the vault-relative path of its directory."""

    model_config = {"frozen": True}

    id: str
    name: str
    status: str
    created: str
    modified: str
    folder_relative_path: str

    @classmethod
    def from_record(cls, record: ProjectRecord, folder_relative_path: str) -> ProjectInfo:
        return cls(**record.model_dump(), folder_relative_path=folder_relative_path)


def dump_all(models: list[BaseModel]) -> list[dict[str, Any]]:
    """JSON-ready dicts for a list of models."""
    return [m.model_dump(mode="json") for m in models]
