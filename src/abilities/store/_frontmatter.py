"""Parse and render the `---` header block at the top of ability docs.

Only a small YAML-like subset is understood: `key: value` scalars, inline
`[a, b]` lists, and block lists (`key:` followed by `- item` lines).
Lines that match neither shape are dropped without complaint, so a
hand-edited header never makes a document unreadable.
"""

from __future__ import annotations

import re

_FM_PATTERN = re.compile(r"^[\ufeff\s]*---\r?\n(.*?)\r?\n---\r?\n?(.*)$", re.DOTALL)
_KEY_LINE = re.compile(r"^([A-Za-z0-9_.-]+)\s*:\s*(.*)$")
_LIST_ITEM = re.compile(r"^\s*-\s+(.*)$")
_INTEGER = re.compile(r"^-?\d+$")

# Serialization order for the controlled fields
FIELD_ORDER = (
    "id",
    "type",
    "tags",
    "priority",
    "name",
    "aliases",
    "includes",
    "deprecated",
    "supersedes",
)

Value = str | int | bool | list[str]


def _scalar(raw: str) -> Value:
    if raw.startswith("[") and raw.endswith("]"):
        inner = raw[1:-1].strip()
        return [v.strip() for v in inner.split(",") if v.strip()] if inner else []
    if raw in ("true", "false"):
        return raw == "true"
    if _INTEGER.match(raw):
        return int(raw)
    return raw


def parse_header(text: str) -> dict[str, Value]:
    """Turn header lines into a field map.

    State is the key of the block list currently open, if any. A key line
    always closes it; an empty value opens a new one.
    """
    fields: dict[str, Value] = {}
    list_key = ""
    for line in text.splitlines():
        if not line.strip():
            continue
        m = _KEY_LINE.match(line)
        if m:
            key, rest = m.group(1), m.group(2).strip()
            list_key = ""
            if not rest:
                fields[key] = []
                list_key = key
            else:
                fields[key] = _scalar(rest)
            continue
        m = _LIST_ITEM.match(line)
        if m and list_key:
            current = fields.get(list_key)
            if not isinstance(current, list):
                current = []
                fields[list_key] = current
            current.append(m.group(1).strip())
        # anything else is ignored
    return fields


def parse_frontmatter(text: str) -> tuple[dict[str, Value], str]:
    """Split a document into (fields, body). No header means ({}, whole text trimmed)."""
    raw = str(text or "")
    m = _FM_PATTERN.match(raw)
    if not m:
        return {}, raw.strip()
    return parse_header(m.group(1)), m.group(2).strip()


def render_frontmatter(fields: dict[str, object], body: str) -> str:
    """Serialize the controlled fields in FIELD_ORDER, then the body.

    Empty strings, empty lists, None and False are omitted. Keys outside
    FIELD_ORDER are not written.
    """
    lines = ["---"]
    for key in FIELD_ORDER:
        value = fields.get(key)
        if value is None or value is False:
            continue
        if isinstance(value, (list, tuple)):
            if not value:
                continue
            lines.append(f"{key}:")
            lines.extend(f"  - {item}" for item in value)
        elif value is True:
            lines.append(f"{key}: true")
        elif isinstance(value, int):
            lines.append(f"{key}: {value}")
        else:
            text = str(value).strip()
            if text:
                lines.append(f"{key}: {text}")
    lines.append("---")
    lines.append(str(body or "").strip())
    return "\n".join(lines).strip() + "\n"
