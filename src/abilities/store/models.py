"""In-memory model for a single ability document."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field


@dataclass(frozen=True)
class AbilityDocument:
    id: str
    type: str
    tags: list[str] = field(default_factory=list)
    includes: list[str] = field(default_factory=list)
    aliases: list[str] = field(default_factory=list)
    name: str = ""
    priority: int = 100
    deprecated: bool = False
    supersedes: str = ""
    body: str = ""
    path: str = ""
    updated_at: str = ""

    def to_dict(self, with_body: bool = True) -> dict[str, object]:
        d = asdict(self)
        if not with_body:
            d.pop("body")
        return d
