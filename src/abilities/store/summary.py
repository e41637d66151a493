"""Counts and freshness for an ability store."""

from __future__ import annotations

from pathlib import Path

from .loader import load_documents

_COUNT_KEYS = {
    "persona": "personas",
    "rule": "rules",
    "policy": "policies",
    "style": "styles",
    "repo": "repos",
}


def store_summary(root: str | Path, seed_dir: str | Path | None = None) -> dict[str, object]:
    """Return {root, total, counts, latest_updated_at} for the store at root."""
    docs = load_documents(root, seed_dir=seed_dir)
    counts = {key: 0 for key in ("personas", "rules", "policies", "repos", "styles")}
    for doc in docs:
        key = _COUNT_KEYS.get(doc.type)
        if key:
            counts[key] += 1
    stamps = sorted(d.updated_at for d in docs if d.updated_at)
    return {
        "root": str(root),
        "total": len(docs),
        "counts": counts,
        "latest_updated_at": stamps[-1] if stamps else None,
    }
