"""Walk the type folders of an ability store and load every document."""

from __future__ import annotations

import logging
import os
import shutil
from datetime import datetime, timezone
from pathlib import Path

from ._frontmatter import parse_frontmatter
from ._helpers import (
    DOC_EXTENSION,
    FOLDER_TO_TYPE,
    TYPE_TO_FOLDER,
    coerce_priority,
    folder_for_type,
    normalize_list,
    text,
    unique,
)
from .models import AbilityDocument

log = logging.getLogger(__name__)

STORE_FOLDERS: tuple[str, ...] = tuple(sorted(set(TYPE_TO_FOLDER.values())))


def _list_doc_files(folder: Path) -> list[Path]:
    """Every *.md file under folder, recursively. Missing folder → []."""
    if not folder.is_dir():
        return []
    out: list[Path] = []
    for dirpath, _dirs, files in os.walk(folder):
        for fname in files:
            if fname.lower().endswith(DOC_EXTENSION):
                out.append(Path(dirpath) / fname)
    return out


def ensure_store(root: str | Path, seed_dir: str | Path | None = None) -> Path:
    """Create the type folders under root; seed from seed_dir if the store is empty.

    Seeding copies each type folder from seed_dir without overwriting
    anything already present. It only happens while no folder holds a doc.
    """
    root = Path(root)
    for rel in STORE_FOLDERS:
        (root / rel).mkdir(parents=True, exist_ok=True)

    if seed_dir is None:
        return root
    seed = Path(seed_dir)
    if not seed.is_dir():
        return root
    if any(_list_doc_files(root / rel) for rel in STORE_FOLDERS):
        return root

    log.info("seeding empty ability store %s from %s", root, seed)
    for rel in STORE_FOLDERS:
        src = seed / rel
        if not src.is_dir():
            continue
        for path in _list_doc_files(src):
            target = root / rel / path.relative_to(src)
            if target.exists():
                continue
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(path, target)
    return root


def _infer_type(relative_path: str) -> str:
    top = relative_path.split("/", 1)[0]
    return FOLDER_TO_TYPE.get(top, "rule")


def load_document(root: str | Path, path: str | Path) -> AbilityDocument:
    """Parse one file into an AbilityDocument with defaults applied.

    Raises OSError/UnicodeDecodeError if the file cannot be read.
    """
    root = Path(root)
    path = Path(path)
    fields, body = parse_frontmatter(path.read_text(encoding="utf-8"))
    relative = path.relative_to(root).as_posix()
    inferred = _infer_type(relative)

    doc_id = text(fields.get("id")).strip() or f"{inferred}.{path.stem}"
    doc_type = (text(fields.get("type")) or inferred).strip().lower()
    mtime = datetime.fromtimestamp(path.stat().st_mtime, tz=timezone.utc)

    return AbilityDocument(
        id=doc_id,
        type=doc_type,
        tags=unique([t.lower() for t in normalize_list(fields.get("tags"))]),
        includes=normalize_list(fields.get("includes")),
        aliases=normalize_list(fields.get("aliases")),
        name=text(fields.get("name")).strip(),
        priority=coerce_priority(fields.get("priority")),
        deprecated=fields.get("deprecated") is True,
        supersedes=text(fields.get("supersedes")).strip(),
        body=body,
        path=relative,
        updated_at=mtime.isoformat().replace("+00:00", "Z"),
    )


def load_documents(
    root: str | Path,
    type_filter: str | None = None,
    seed_dir: str | Path | None = None,
) -> list[AbilityDocument]:
    """Load every document under root (or just type_filter's folder), sorted by path.

    Unreadable files are logged and skipped. Raises ConfigError for an
    unrecognized type_filter.
    """
    wanted = str(type_filter or "").strip().lower()
    folders = [folder_for_type(wanted)] if wanted else list(STORE_FOLDERS)
    root = ensure_store(root, seed_dir)

    docs: list[AbilityDocument] = []
    for rel in folders:
        for path in _list_doc_files(root / rel):
            try:
                docs.append(load_document(root, path))
            except (OSError, UnicodeDecodeError) as exc:
                log.warning("load_documents: cannot read %s: %s", path, exc)
    docs.sort(key=lambda d: d.path)
    log.debug("loaded %d ability documents from %s", len(docs), root)
    return docs
