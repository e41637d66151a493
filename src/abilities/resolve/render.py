"""Render a selection into prompt text and an audit manifest."""

from __future__ import annotations

import hashlib
from typing import Optional, Sequence

from abilities.store.models import AbilityDocument

from .result import Manifest, ResolutionResult, Selection

HASH_LENGTH = 32

SECTION_PERSONA = "Persona"
SECTION_REPO = "Repo Constraints"
SECTION_RULES = "Rules"
SECTION_POLICIES = "Policies & Style"


def render_section(title: str, docs: Sequence[AbilityDocument]) -> str:
    """`# title`, then per doc an id/priority comment and the body. "" when docs is empty."""
    if not docs:
        return ""
    rows = [f"# {title}"]
    for doc in docs:
        rows.append(f"<!-- {doc.id} (priority {doc.priority}) -->\n{doc.body}".strip())
    return "\n\n".join(rows).strip()


def prompt_hash(prompt: str, rule_ids: Sequence[str]) -> str:
    digest = hashlib.sha256(f"{prompt}\n{','.join(rule_ids)}".encode("utf-8"))
    return digest.hexdigest()[:HASH_LENGTH]


def render(
    persona: AbilityDocument,
    repo: Optional[AbilityDocument],
    rules: Sequence[AbilityDocument],
    policies: Sequence[AbilityDocument],
    order: Sequence[AbilityDocument] = (),
) -> tuple[str, Manifest]:
    """Build the prompt and manifest. `order` defaults to persona, repo, rules, policies."""
    sections = [
        render_section(SECTION_PERSONA, [persona]),
        render_section(SECTION_REPO, [repo] if repo else []),
        render_section(SECTION_RULES, rules),
        render_section(SECTION_POLICIES, policies),
    ]
    prompt = "\n\n".join(s for s in sections if s).strip()

    rule_ids = [d.id for d in rules]
    if not order:
        order = [persona, *([repo] if repo else []), *rules, *policies]
    manifest = Manifest(
        persona=persona.id,
        repo=repo.id if repo else "",
        rules=rule_ids,
        policies=[d.id for d in policies],
        order=[d.id for d in order],
        hash=prompt_hash(prompt, rule_ids),
    )
    return prompt, manifest


def build_result(selection: Selection, trace: bool = False) -> ResolutionResult:
    """Render a selection into the full result handed back to callers."""
    prompt, manifest = render(
        selection.persona,
        selection.repo,
        selection.rules,
        selection.policies,
        selection.order,
    )
    return ResolutionResult(
        prompt=prompt,
        manifest=manifest,
        persona=selection.persona.body,
        repo=selection.repo.body if selection.repo else "",
        rules=[d.body for d in selection.rules],
        policies=[d.body for d in selection.policies],
        trace=list(selection.trace) if trace else None,
        reasons=dict(selection.reasons) if trace else None,
    )
