"""Validate and persist a new ability document into its type folder."""

from __future__ import annotations

import math
from pathlib import Path

from abilities.errors import ConfigError
from abilities.fs import atomic_write_file, sanitize_rel_path, slugify

from ._frontmatter import render_frontmatter
from ._helpers import DOC_EXTENSION, folder_for_type, normalize_list
from .loader import ensure_store, load_document
from .models import AbilityDocument


def _priority(value: object) -> int:
    if isinstance(value, bool) or value is None:
        raise ConfigError("priority must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"priority must be a number, got {value!r}") from None
    if not math.isfinite(number):
        raise ConfigError(f"priority must be finite, got {value!r}")
    return int(number)


def _check_single_line(fields: dict[str, object]) -> None:
    """Header values are one line each; a line break would write extra header keys."""
    for key, value in fields.items():
        items = value if isinstance(value, list) else [value]
        for item in items:
            if isinstance(item, str) and ("\n" in item or "\r" in item):
                raise ConfigError(f"{key} must not contain line breaks: {item!r}")


def write_document(
    root: str | Path,
    type: str,
    id: str,
    priority: object,
    body: str,
    tags: list[str] | str | None = None,
    name: str = "",
    aliases: list[str] | str | None = None,
    includes: list[str] | str | None = None,
    deprecated: bool = False,
    supersedes: str = "",
    relative_dir: str = "",
    file_name: str = "",
    overwrite: bool = False,
    seed_dir: str | Path | None = None,
) -> AbilityDocument:
    """Write a document under <root>/<type folder>/<relative_dir>/<slug>.md.

    The slug comes from file_name, else from the id minus its first
    dotted segment (`rule.backend.base` → `backend.base`). The file is
    re-read after writing so the caller gets the loaded form.
    """
    doc_type = str(type or "").strip().lower()
    folder = folder_for_type(doc_type)
    doc_id = str(id or "").strip()
    if not doc_id:
        raise ConfigError("id is required")
    prio = _priority(priority)
    text = str(body or "").strip()
    if not text:
        raise ConfigError("body is required")

    fields = {
        "id": doc_id,
        "type": doc_type,
        "tags": [t.lower() for t in normalize_list(tags)],
        "priority": prio,
        "name": str(name or "").strip(),
        "aliases": normalize_list(aliases),
        "includes": normalize_list(includes),
        "deprecated": deprecated is True,
        "supersedes": str(supersedes or "").strip(),
    }
    _check_single_line(fields)

    root = ensure_store(root, seed_dir)
    rel_dir = sanitize_rel_path(relative_dir)
    target_dir = root / folder
    if rel_dir:
        target_dir = target_dir / rel_dir

    stem = file_name or (doc_id.split(".", 1)[1] if "." in doc_id else doc_id)
    target = target_dir / f"{slugify(stem)}{DOC_EXTENSION}"
    if target.exists() and not overwrite:
        raise ConfigError(f"Ability file already exists: {target.relative_to(root).as_posix()}")

    atomic_write_file(str(target), render_frontmatter(fields, text))
    return load_document(root, target)
