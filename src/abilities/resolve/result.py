"""Result records produced by a resolution."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Optional

from abilities.store.models import AbilityDocument


@dataclass(frozen=True)
class TraceEntry:
    id: str
    type: str
    priority: int
    reason: str
    detail: Optional[dict[str, Any]] = None

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if d["detail"] is None:
            d.pop("detail")
        return d


@dataclass(frozen=True)
class Manifest:
    persona: str
    repo: str
    rules: list[str]
    policies: list[str]
    order: list[str]
    hash: str

    @property
    def applied(self) -> dict[str, Any]:
        return {
            "persona": self.persona,
            "repo": self.repo,
            "rules": list(self.rules),
            "policies": list(self.policies),
        }

    def to_dict(self) -> dict[str, Any]:
        return {"applied": self.applied, "order": list(self.order), "hash": self.hash}


@dataclass
class Selection:
    """Ordered output of the resolver, before rendering."""

    persona: AbilityDocument
    repo: Optional[AbilityDocument]
    rules: list[AbilityDocument]
    policies: list[AbilityDocument]
    order: list[AbilityDocument]
    trace: list[TraceEntry] = field(default_factory=list)
    # id -> reason from the last add attempt for that id
    reasons: dict[str, str] = field(default_factory=dict)


@dataclass
class ResolutionResult:
    prompt: str
    manifest: Manifest
    persona: str
    repo: str
    rules: list[str]
    policies: list[str]
    trace: Optional[list[TraceEntry]] = None
    reasons: Optional[dict[str, str]] = None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "persona": self.persona,
            "repo": self.repo,
            "rules": list(self.rules),
            "policies": list(self.policies),
            "manifest": self.manifest.to_dict(),
            "prompt": self.prompt,
        }
        if self.trace is not None:
            d["trace"] = [t.to_dict() for t in self.trace]
        if self.reasons is not None:
            d["reasons"] = dict(self.reasons)
        return d
