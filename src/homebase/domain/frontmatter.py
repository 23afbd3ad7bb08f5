"""Frontmatter schema for newly created notes.

Key order matches what lands on disk: id, created, modified, projects,
topics, user_placed. The ``id`` is advisory; a note's identity is its path.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class NoteFrontmatter(BaseModel):
    """Frontmatter seeded into every note created by the vault."""

    model_config = {"frozen": True}

    id: str
    created: str
    modified: str
    projects: list[str] = Field(default_factory=list)
    topics: list[str] = Field(default_factory=list)
    user_placed: bool = False

    @classmethod
    def seed(cls, note_id: str, timestamp: str, *, user_placed: bool) -> NoteFrontmatter:
        """Fresh frontmatter with ``created == modified``."""
        return cls(id=note_id, created=timestamp, modified=timestamp, user_placed=user_placed)

    def as_mapping(self) -> dict[str, Any]:
        return self.model_dump()
