"""Resolution requests, built from arguments or loaded from a YAML file."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from abilities.errors import ConfigError
from abilities.store._helpers import normalize_list


@dataclass(frozen=True)
class ResolutionRequest:
    persona: str
    tags: list[str] = field(default_factory=list)
    repo_id: str = ""
    trace: bool = False

    @classmethod
    def build(
        cls,
        persona: str,
        tags: list[str] | str | None = None,
        repo_id: str | None = None,
        trace: bool = False,
    ) -> "ResolutionRequest":
        return cls(
            persona=str(persona or "").strip(),
            tags=[t.lower() for t in normalize_list(tags)],
            repo_id=str(repo_id or "").strip(),
            trace=bool(trace),
        )


def load_request(path: str | Path) -> ResolutionRequest:
    """Load a request from YAML: a mapping with persona, and optional tags/repo_id/trace."""
    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Request file not found: {path}")
    with open(path, encoding="utf-8") as f:
        try:
            raw = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Request file {path} is not valid YAML: {exc}") from exc
    if not isinstance(raw, dict):
        raise ConfigError(f"Request file {path} must contain a mapping")
    if not raw.get("persona"):
        raise ConfigError(f"Request file {path} missing required key: persona")
    return ResolutionRequest.build(
        persona=str(raw["persona"]),
        tags=raw.get("tags"),
        repo_id=raw.get("repo_id") or raw.get("repo"),
        trace=raw.get("trace") is True,
    )
