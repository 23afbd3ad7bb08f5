"""Shared service-layer helper functions."""

from __future__ import annotations

from datetime import UTC, datetime


def now_iso() -> str:
    """Current UTC time as RFC 3339 (frontmatter and sidecar timestamps)."""
    return datetime.now(UTC).isoformat()


def today_local() -> str:
    """Today's local date as YYYY-MM-DD (note filename prefix)."""
    return datetime.now().astimezone().strftime("%Y-%m-%d")
