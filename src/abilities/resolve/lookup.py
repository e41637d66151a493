"""Find the persona and repo documents a request names."""

from __future__ import annotations

from typing import Iterable, Optional

from abilities.fs import lookup_key
from abilities.store.models import AbilityDocument


def _strip_prefix(doc_id: str, prefix: str) -> str:
    return doc_id[len(prefix):] if doc_id.startswith(prefix) else doc_id


def find_persona(docs: Iterable[AbilityDocument], persona: str) -> Optional[AbilityDocument]:
    """Match on literal id, `persona.`-prefixed id, the slugged id without prefix, then aliases.

    Case-insensitive. First match in catalog order wins.
    """
    needle = str(persona or "").strip().lower()
    if not needle:
        return None
    personas = [d for d in docs if d.type == "persona"]
    candidates = {
        needle,
        needle if needle.startswith("persona.") else f"persona.{needle}",
        f"persona.{lookup_key(needle)}",
    }
    for doc in personas:
        if doc.id.lower() in candidates:
            return doc
    key = lookup_key(needle)
    for doc in personas:
        if lookup_key(_strip_prefix(doc.id.lower(), "persona.")) == key:
            return doc
    # aliases only after every id form has missed
    for doc in personas:
        if key in {lookup_key(a) for a in doc.aliases}:
            return doc
    return None


def find_repo(docs: Iterable[AbilityDocument], repo_id: str) -> Optional[AbilityDocument]:
    """Match a repo doc by id, id without `repo.`, name, or any alias, all slugged."""
    needle = lookup_key(repo_id)
    if not needle:
        return None
    for doc in docs:
        if doc.type != "repo":
            continue
        keys = [doc.id, _strip_prefix(doc.id.lower(), "repo."), doc.name, *doc.aliases]
        if needle in {lookup_key(k) for k in keys if k}:
            return doc
    return None
