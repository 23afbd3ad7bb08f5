"""Identifier and filename generation.

Note and project ids are random UUIDv4 strings. Filenames and directory
suffixes embed short hex fragments of fresh UUIDs so collisions are
practically unreachable.
"""

from __future__ import annotations

import uuid

from homebase.domain.layout import NOTE_SUFFIX

NOTE_SHORT_LEN = 8
PROJECT_SUFFIX_LEN = 6


def generate_id() -> str:
    """A new hyphenated UUIDv4 string."""
    return str(uuid.uuid4())


def short_hex(length: int) -> str:
    """*length* random lowercase hex characters."""
    return uuid.uuid4().hex[:length]


def short_from_id(content_id: str) -> str:
    """First 8 alphanumeric characters of *content_id*, or 8 random hex chars if none.

    Dashes (and anything else that is not a letter or digit) are skipped, so
    caller-supplied ids can never inject path separators into a filename.
    """
    short = "".join(c for c in content_id if c.isascii() and c.isalnum())[:NOTE_SHORT_LEN]
    return short or short_hex(NOTE_SHORT_LEN)


def note_filename(date: str, slug: str, short: str) -> str:
    """``<date>-<slug>-<short>.md``."""
    return f"{date}-{slug}-{short}{NOTE_SUFFIX}"
