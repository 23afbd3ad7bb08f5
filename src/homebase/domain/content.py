"""Markdown note content — frontmatter parsing/rendering and title derivation.

Frontmatter is a YAML block fenced by ``---`` lines at the very top of the
file. Parsing uses ruamel.yaml in round-trip mode; results are converted to
plain Python containers so they serialize cleanly into service results.
Timestamps load and dump as the exact text written, without quotes.
"""

from __future__ import annotations

import re
from io import StringIO
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.constructor import RoundTripConstructor
from ruamel.yaml.error import YAMLError
from ruamel.yaml.representer import RoundTripRepresenter

_FRONTMATTER_DELIMITER = "---"
_BOM = "\ufeff"

TITLE_MAX_LEN = 80

_LEADING_MARKERS = (
    re.compile(r"^#+\s+"),
    re.compile(r"^>\s+"),
    re.compile(r"^[-*+]\s+\[[ xX]\]\s*"),
    re.compile(r"^[-*+]\s+"),
    re.compile(r"^\d+\.\s+"),
)
_INLINE_MARKERS = re.compile(r"[`*_~]")


_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"

# Same shape ruamel resolves implicitly as a timestamp.
_TIMESTAMP_TEXT = re.compile(
    r"""^(?:[0-9]{4}-[0-9]{2}-[0-9]{2}
    |[0-9]{4}-[0-9]{1,2}-[0-9]{1,2}
    (?:[Tt]|[ \t]+)[0-9]{1,2}:[0-9]{2}:[0-9]{2}(?:\.[0-9]*)?
    (?:[ \t]*(?:Z|[-+][0-9]{1,2}(?::[0-9]{2})?))?)$""",
    re.X,
)


class _FrontmatterConstructor(RoundTripConstructor):
    """Loads timestamps as the exact text written in the file."""


class _FrontmatterRepresenter(RoundTripRepresenter):
    """Dumps timestamp-shaped strings as plain (unquoted) scalars."""


def _construct_timestamp_text(constructor: RoundTripConstructor, node: Any) -> str:
    return str(constructor.construct_scalar(node))


def _represent_str(representer: RoundTripRepresenter, data: str) -> Any:
    if _TIMESTAMP_TEXT.match(data):
        return representer.represent_scalar(_TIMESTAMP_TAG, data)
    return representer.represent_str(data)


_FrontmatterConstructor.add_constructor(_TIMESTAMP_TAG, _construct_timestamp_text)
_FrontmatterRepresenter.add_representer(str, _represent_str)


def _new_yaml() -> YAML:
    """Create a fresh round-trip YAML instance (ruamel's YAML object is stateful)."""
    y = YAML()
    y.Constructor = _FrontmatterConstructor
    y.Representer = _FrontmatterRepresenter
    y.preserve_quotes = True
    y.default_flow_style = False
    return y


def _plain(value: Any) -> Any:
    """Strip ruamel wrapper types down to builtin containers and scalars."""
    if isinstance(value, dict):
        return {str(k): _plain(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_plain(v) for v in value]
    if isinstance(value, bool):
        return bool(value)
    if isinstance(value, str):
        return str(value)
    if isinstance(value, int):
        return int(value)
    if isinstance(value, float):
        return float(value)
    return value


def parse_frontmatter(content: str) -> tuple[dict[str, Any], str]:
    """Split markdown *content* into ``(frontmatter, body)``.

    A leading BOM is ignored and ``\\r\\n`` line endings are accepted. When
    the file has no closed frontmatter block, or the block is not a YAML
    mapping, the frontmatter is ``{}`` and the body is the whole text.
    """
    raw = content.removeprefix(_BOM)
    lines = raw.replace("\r\n", "\n").split("\n")
    if not lines or lines[0].strip() != _FRONTMATTER_DELIMITER:
        return {}, raw

    end_idx: int | None = None
    for i, line in enumerate(lines[1:], start=1):
        if line.strip() == _FRONTMATTER_DELIMITER:
            end_idx = i
            break
    if end_idx is None:
        return {}, raw

    yaml_block = "\n".join(lines[1:end_idx])
    body = "\n".join(lines[end_idx + 1 :])
    if body.startswith("\n"):
        body = body[1:]

    try:
        loaded = _new_yaml().load(yaml_block)
    except YAMLError:
        return {}, body
    if not isinstance(loaded, dict):
        return {}, body
    return _plain(loaded), body


def render_frontmatter(frontmatter: dict[str, Any], body: str) -> str:
    """Render *frontmatter* (in insertion order) followed by *body*."""
    buf = StringIO()
    _new_yaml().dump(dict(frontmatter), buf)
    parts = [_FRONTMATTER_DELIMITER, "\n", buf.getvalue(), _FRONTMATTER_DELIMITER, "\n"]
    if body:
        parts.append(body)
    return "".join(parts)


def _strip_leading_markdown(line: str) -> str:
    out = line.lstrip()
    for pattern in _LEADING_MARKERS:
        out = pattern.sub("", out, count=1)
    out = _INLINE_MARKERS.sub("", out)
    return out.strip()


def title_from_body(body: str) -> str:
    """Derive a display title from the first meaningful line of *body*.

    Heading, quote, list, and checkbox markers are dropped along with inline
    emphasis characters. Titles longer than 80 characters are cut and end
    with an ellipsis. Returns ``""`` when the body has no text.
    """
    for raw in body.splitlines():
        cleaned = _strip_leading_markdown(raw)
        if not cleaned:
            continue
        if len(cleaned) > TITLE_MAX_LEN:
            return cleaned[:TITLE_MAX_LEN].rstrip() + "…"
        return cleaned
    return ""
