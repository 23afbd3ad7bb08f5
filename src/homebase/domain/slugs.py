"""Slug derivation shared by note filenames and project directories."""

from __future__ import annotations

NOTE_SLUG_DEFAULT = "note"
PROJECT_SLUG_DEFAULT = "project"


def slugify(text: str, *, default: str) -> str:
    """Lower-case *text* and collapse every non-alphanumeric run into ``-``.

    Only ASCII letters and digits survive. Leading and trailing dashes are
    trimmed; an empty result becomes *default*.

    Examples:
        >>> slugify("My Plan!", default="project")
        'my-plan'
        >>> slugify("  ***  ", default="note")
        'note'
    """
    out: list[str] = []
    last_was_dash = False
    for ch in text.strip():
        lower = ch.lower()
        if lower.isascii() and lower.isalnum():
            out.append(lower)
            last_was_dash = False
        elif not last_was_dash:
            out.append("-")
            last_was_dash = True
    slug = "".join(out).strip("-")
    return slug or default
