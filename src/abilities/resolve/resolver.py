"""Select, override, and order ability documents for one request.

The catalog is a directed graph: each document points at the ids in its
`includes`. Cycles are legal. A document may be reached by several paths
(persona, repo, tag match, any number of includes) but is selected once,
keyed by id; when two candidates share an id the higher priority wins,
then the lexicographically smaller id.

Nothing here touches the filesystem. Given the same catalog and request,
the selection, its order, and its trace are identical on every call.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from abilities.errors import NotFoundError
from abilities.store._helpers import POLICY_TYPES, RULE_TYPES, type_rank
from abilities.store.models import AbilityDocument

from .lookup import find_persona, find_repo
from .request import ResolutionRequest
from .result import Selection, TraceEntry

log = logging.getLogger(__name__)


@dataclass
class SelectionEntry:
    document: AbilityDocument
    reason: str


def _wins(candidate: AbilityDocument, incumbent: AbilityDocument) -> bool:
    if candidate.priority != incumbent.priority:
        return candidate.priority > incumbent.priority
    return candidate.id < incumbent.id


def _order_key(doc: AbilityDocument) -> tuple[int, int, str]:
    return (-doc.priority, type_rank(doc.type), doc.id)


class _Resolution:
    """Working state for one resolve call."""

    def __init__(self, docs: Sequence[AbilityDocument], trace: bool) -> None:
        self.by_id: dict[str, AbilityDocument] = {d.id: d for d in docs}
        self.selected: dict[str, SelectionEntry] = {}
        self.trace_enabled = trace
        self.trace: list[TraceEntry] = []
        self._visiting: set[str] = set()

    def add(self, doc: AbilityDocument, reason: str, detail: Optional[dict[str, Any]] = None) -> None:
        current = self.selected.get(doc.id)
        if current is None or _wins(doc, current.document):
            self.selected[doc.id] = SelectionEntry(doc, reason)
        else:
            current.reason = reason
        if self.trace_enabled:
            self.trace.append(TraceEntry(doc.id, doc.type, doc.priority, reason, detail))

    def expand_includes(self, doc: AbilityDocument) -> None:
        # The visiting set only covers the current include chain, so a
        # document reached again through a sibling path is re-added, while a
        # document including one of its own ancestors stops the walk.
        if not doc.includes or doc.id in self._visiting:
            return
        self._visiting.add(doc.id)
        try:
            for include_id in doc.includes:
                target = self.by_id.get(include_id)
                if target is None:
                    log.debug("%s includes unknown id %s; skipped", doc.id, include_id)
                    continue
                self.add(target, f"include:{doc.id}", {"include_of": doc.id})
                self.expand_includes(target)
        finally:
            self._visiting.discard(doc.id)

    def add_with_includes(self, doc: AbilityDocument, reason: str, detail: Optional[dict[str, Any]] = None) -> None:
        self.add(doc, reason, detail)
        self.expand_includes(doc)


def catalog(docs: Sequence[AbilityDocument]) -> list[AbilityDocument]:
    """Drop all but the last document for each id, keeping path order."""
    last = {d.id: d for d in docs}
    return [d for d in docs if last[d.id] is d]


def effective_tags(request_tags: Sequence[str], repo: Optional[AbilityDocument]) -> list[str]:
    """Union of request tags and the repo's tags, lower-cased, first-seen order."""
    out: list[str] = []
    for tag in [*request_tags, *(repo.tags if repo else [])]:
        t = str(tag or "").strip().lower()
        if t and t not in out:
            out.append(t)
    return out


def resolve_selection(docs: Sequence[AbilityDocument], request: ResolutionRequest) -> Selection:
    """Run the selection algorithm over a loaded catalog.

    Raises NotFoundError when no persona matches. An unmatched repo_id
    just means no repo context.
    """
    docs = catalog(docs)
    persona = find_persona(docs, request.persona)
    if persona is None:
        raise NotFoundError(f"Unknown persona: {request.persona}")
    repo = find_repo(docs, request.repo_id) if request.repo_id else None

    state = _Resolution(docs, request.trace)
    state.add_with_includes(persona, "persona")
    if repo is not None:
        state.add_with_includes(repo, f"repo:{repo.id}")

    tags = effective_tags(request.tags, repo)
    tag_set = set(tags)
    for doc in docs:
        if doc.type not in RULE_TYPES:
            continue
        hit = next((t for t in doc.tags if t.lower() in tag_set), None)
        if hit is None:
            continue
        state.add_with_includes(doc, "tag-match", {"hit": hit, "effective_tags": list(tags)})

    ordered = sorted((e.document for e in state.selected.values()), key=_order_key)
    skip = {persona.id, repo.id if repo else None}
    others = [d for d in ordered if d.id not in skip]
    return Selection(
        persona=persona,
        repo=repo,
        rules=[d for d in others if d.type == "rule"],
        policies=[d for d in others if d.type in POLICY_TYPES],
        order=ordered,
        trace=state.trace,
        reasons={d.id: state.selected[d.id].reason for d in ordered},
    )
