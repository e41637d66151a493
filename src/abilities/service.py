"""Programmatic surface of the ability engine.

Each call reads the store fresh, then hands the loaded catalog to the
pure resolver. There is no cache and no locking between calls.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from abilities.defaults import resolve_abilities_root, resolve_seed_dir
from abilities.resolve import ResolutionRequest, ResolutionResult, build_result, resolve_selection
from abilities.store import AbilityDocument, load_documents
from abilities.store import store_summary as _store_summary
from abilities.store import write_document as _write_document


def list_documents(type: str | None = None, root: str | Path | None = None) -> list[AbilityDocument]:
    """All documents in the store, or only those under one type's folder."""
    return load_documents(resolve_abilities_root(root), type, seed_dir=resolve_seed_dir())


def resolve(
    persona: str,
    tags: list[str] | str | None = None,
    repo_id: str | None = None,
    trace: bool = False,
    root: str | Path | None = None,
) -> ResolutionResult:
    """Resolve a persona (+ tags, + optional repo) into prompt, manifest, and trace."""
    return resolve_request(ResolutionRequest.build(persona, tags, repo_id, trace), root)


def resolve_request(request: ResolutionRequest, root: str | Path | None = None) -> ResolutionResult:
    docs = load_documents(resolve_abilities_root(root), seed_dir=resolve_seed_dir())
    return build_result(resolve_selection(docs, request), trace=request.trace)


def write_document(root: str | Path | None = None, **fields: Any) -> AbilityDocument:
    """Persist a new document. `directory` is accepted as an alias for relative_dir."""
    if "directory" in fields:
        directory = fields.pop("directory")
        fields.setdefault("relative_dir", directory)
    return _write_document(resolve_abilities_root(root), seed_dir=resolve_seed_dir(), **fields)


def store_summary(root: str | Path | None = None) -> dict[str, object]:
    return _store_summary(resolve_abilities_root(root), seed_dir=resolve_seed_dir())
